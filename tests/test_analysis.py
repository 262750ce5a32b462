import matplotlib.pyplot as plt
import pytest

from sweeplogic import (
    LEVELS,
    format_solver_knowledge,
    run_solver_expert_level_analysis,
    run_solver_many_tests,
    run_solver_single_test,
)


def test_single_run_metrics():
    result = run_solver_single_test(9, 9, 10)

    assert result["status"] in ("won", "stalled")
    assert 0 < result["revealed_cells_count"] <= 71
    assert 0.0 < result["clear_ratio"] <= 1.0
    assert result["passes_count"] >= 1
    if result["status"] == "won":
        assert result["clear_ratio"] == 1.0


def test_many_runs_average():
    result = run_solver_many_tests(9, 9, 10, runs=5)

    assert 0.0 <= result["win_rate"] <= 1.0
    assert 0.0 < result["avg_clear_ratio"] <= 1.0
    assert "avg_reveal_moves_count" in result


def test_many_runs_requires_positive_runs():
    with pytest.raises(ValueError):
        run_solver_many_tests(9, 9, 10, runs=0)


def test_knowledge_without_coordinates(top_mine_board):
    top_mine_board.reveal(0, 2)
    lines = format_solver_knowledge(top_mine_board, show_coords=False).splitlines()
    assert lines == [" .  .  .", " 1  1  1", "        "]


def test_level_analysis_returns_every_level():
    results = run_solver_expert_level_analysis(1, show=False)
    plt.close("all")

    assert set(results) == set(LEVELS)
    for stats in results.values():
        assert 0.0 <= stats["win_rate"] <= 1.0

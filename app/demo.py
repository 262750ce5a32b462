"""
sweeplogic - Interactive Demo

Run with: streamlit run app/demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Optional, Tuple

from sweeplogic import LEVELS, Board, CellState, GameSession, GameState


def render_board_html(
    board: Board,
    highlight_cell: Optional[Tuple[int, int]] = None,
) -> str:
    """Render the board as HTML with styling."""
    # Scale cell size based on board width
    if board.width >= 30:
        cell_size = 14
        font_size = "10px"
    elif board.width >= 25:
        cell_size = 16
        font_size = "11px"
    elif board.width >= 16:
        cell_size = 20
        font_size = "13px"
    else:
        cell_size = 26
        font_size = "15px"

    colors = {
        "1": "#0000ff",
        "2": "#008000",
        "3": "#ff0000",
        "4": "#000080",
        "5": "#800000",
        "6": "#008080",
        "7": "#000000",
        "8": "#808080",
    }

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for y in range(board.height):
        html += "<tr>"
        for x in range(board.width):
            cell = board.cells[y * board.width + x]

            if cell.state is CellState.FLAGGED:
                text, bg, text_color = "F", "#ffa500", "#ffffff"
            elif cell.state is CellState.DETONATED:
                text, bg, text_color = "M", "#ff0000", "#ffffff"
            elif cell.state is CellState.REVEALED and cell.is_mine:
                text, bg, text_color = "M", "#ffcccc", "#ff0000"
            elif cell.state is CellState.REVEALED:
                text = str(cell.adjacent_mines) if cell.adjacent_mines else " "
                bg = "#f0f0f0" if text == " " else "#ffffff"
                text_color = colors.get(text, "#000000")
            else:
                text, bg, text_color = ".", "#c0c0c0", "#666666"

            border = "2px solid #ff0000" if (x, y) == highlight_cell else "1px solid #999"

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{text}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def main():
    st.set_page_config(
        page_title="sweeplogic",
        page_icon="💣",
        layout="wide",
    )

    st.title("Deduction-only Minesweeper Solver")
    st.markdown("""
    Reveals only cells that are provably safe and flags only provable mines.
    When nothing can be proven, it stops instead of guessing.
    """)

    st.sidebar.header("Game Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Beginner (9x9, 10)", "Intermediate (16x16, 40)", "Expert (30x16, 99)", "Custom"],
    )

    if preset == "Custom":
        width = st.sidebar.slider("Width", 5, 30, 16)
        height = st.sidebar.slider("Height", 5, 30, 16)
        max_mines = width * height - 9
        mines = st.sidebar.slider("Mines", 1, max_mines, min(40, max_mines))
    else:
        width, height, mines = LEVELS[preset.split()[0].lower()]

    current_settings = (width, height, mines)
    if st.session_state.get("settings") != current_settings:
        st.session_state.session = GameSession(width, height, mines)
        st.session_state.settings = current_settings
        st.session_state.last_move = None
        st.session_state.message = None

    session: GameSession = st.session_state.session

    col1, col2 = st.columns([3, 1])

    with col1:
        st.subheader("Game Board")

        b1, b2, b3, b4 = st.columns(4)
        with b1:
            if st.button("New Board", type="primary"):
                session.reset()
                st.session_state.last_move = None
                st.session_state.message = None
                st.rerun()
        with b2:
            if st.button("Reveal One"):
                coord = session.reveal_one()
                st.session_state.last_move = tuple(coord) if coord else None
                st.session_state.message = (
                    "No safe cell can be proven." if coord is None
                    else f"Revealed ({coord.x}, {coord.y})."
                )
                st.rerun()
        with b3:
            if st.button("Solve"):
                count = session.reveal_revealable()
                st.session_state.last_move = None
                st.session_state.message = f"Revealed {count} cells."
                st.rerun()
        with b4:
            if st.button("Flag Mines"):
                count = session.flag_bombs()
                st.session_state.message = f"Placed {count} flags."
                st.rerun()

        if st.session_state.message:
            st.info(st.session_state.message)

        st.markdown(
            render_board_html(session.board, st.session_state.last_move),
            unsafe_allow_html=True,
        )

        if session.game_state is GameState.WON:
            st.success("Solved! All safe cells revealed.")
        elif session.game_state is GameState.LOST:
            st.error("Game Over! Hit a mine.")

    with col2:
        st.subheader("Board Statistics")
        board = session.board
        st.metric("State", board.game_state.value.capitalize())
        st.metric("Cells Revealed", f"{board.revealed_count} / {board.safe_cells_count}")
        st.metric("Mines Left", board.remaining_mines)
        st.metric("Solver Passes", session.solver.passes_count)


if __name__ == "__main__":
    main()

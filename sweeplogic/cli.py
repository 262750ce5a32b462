"""Terminal front end: board rendering and an interactive prompt."""

import logging

from .engine import Board, CellState, Coordinate, GameState
from .session import GameSession

_ANSI_RESET = "\033[0m"
_ANSI_COORD = "\033[96m"
_ANSI_MINE = "\033[91m"


def _c(s: str, color: bool) -> str:
    """Wrap string in coordinate color."""
    return f"{_ANSI_COORD}{s}{_ANSI_RESET}" if color else s


def _m(s: str, color: bool) -> str:
    """Wrap string in mine color (red)."""
    return f"{_ANSI_MINE}{s}{_ANSI_RESET}" if color else s


def cell_char(board: Board, cell_id: int, reveal_all: bool = False) -> str:
    """
    Single-character view of a cell.

    ``.`` hidden, ``F`` flagged, ``X`` detonated, ``*`` mine, digits for
    numbers and a blank for zero.
    """
    cell = board.cells[cell_id]
    if cell.state is CellState.DETONATED:
        return "X"
    if cell.state is CellState.FLAGGED and not reveal_all:
        return "F"
    if cell.state is CellState.REVEALED or reveal_all:
        if cell.is_mine:
            return "*"
        return str(cell.adjacent_mines) if cell.adjacent_mines else " "
    return "."


def format_board(board: Board, reveal_all: bool = False, color: bool = False) -> str:
    """
    Render the board as a multi-line string for terminal display.

    Args:
        board: Board to render.
        reveal_all: If True, show mines and all underlying values.
        color: If True, wrap labels and mines in ANSI colors.

    Returns:
        A formatted multi-line string with coordinate labels and the board grid.
    """
    w, h = board.width, board.height

    header_cells = " ".join(f"{x:2d}" for x in range(w))
    out = [_c("   " + header_cells, color)]
    out.append(_c("   " + "-" * (3 * w - 1), color))

    for y in range(h):
        chars = []
        for x in range(w):
            ch = cell_char(board, y * w + x, reveal_all)
            chars.append(f" {_m(ch, color) if ch in ('*', 'X') else ch}")
        out.append(_c(f"{y:2d} |", color) + " ".join(chars))

    return "\n".join(out)


def format_status(board: Board) -> str:
    return (
        f"State: {board.game_state.value}  "
        f"Mines left: {board.remaining_mines}  "
        f"Time: {board.elapsed_seconds}s"
    )


HELP = """Commands (coordinates are 0-based):
  r x y   reveal (or chord) a cell
  f x y   toggle a flag
  step    reveal one cell proven safe
  solve   reveal every cell that can be proven safe
  flags   flag every cell proven to be a mine
  new     start a new game
  q       quit"""


def play_cli(session: GameSession) -> None:
    """
    Run a simple terminal UI for playing with solver assistance.

    Args:
        session: The game session to play.
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print(HELP + "\n")
    print(format_board(session.board, color=True))

    while True:
        s = input("\n> ").strip()
        parts = s.replace(",", " ").split()
        if not parts:
            continue
        cmd = parts[0].lower()

        if cmd in {"q", "quit", "exit"}:
            print("Quit.")
            return

        if cmd in {"r", "f"}:
            if len(parts) != 3:
                print("Invalid input. Example: r 3 5")
                continue
            try:
                x, y = int(parts[1]), int(parts[2])
            except ValueError:
                print("Invalid input. Coordinates must be integers.")
                continue
            if not session.board.in_bounds(Coordinate(x, y)):
                print("Coordinates are outside the board.")
                continue
            if cmd == "f":
                session.flag(x, y)
            else:
                try:
                    session.reveal(x, y)
                except ValueError as e:
                    print(f"Cannot reveal there: {e}")
                    continue
        elif cmd in {"step", "solve"}:
            # The opening move places mines, which fails on overcrowded boards.
            try:
                if cmd == "step":
                    coord = session.reveal_one()
                    print("No safe cell known." if coord is None else f"Revealed ({coord.x}, {coord.y}).")
                else:
                    print(f"Revealed {session.reveal_revealable()} cells.")
            except ValueError as e:
                print(f"Cannot open the board: {e}")
                continue
        elif cmd == "flags":
            print(f"Placed {session.flag_bombs()} flags.")
        elif cmd == "new":
            session.reset()
        else:
            print(HELP)
            continue

        print()
        board = session.board
        print(format_board(board, reveal_all=board.game_state is GameState.LOST, color=True))
        print(format_status(board))

        if board.game_state is GameState.LOST:
            print("\nYou hit a mine. You lost. Type 'new' to play again.")
        elif board.game_state is GameState.WON:
            print("\nYou revealed all safe cells. You won! Type 'new' to play again.")

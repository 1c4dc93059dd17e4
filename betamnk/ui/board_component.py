"""Plain-text board rendering for the console."""

from __future__ import annotations

from betamnk.game.board import MNKGameState
from betamnk.game.types import Point

BLANK_MARK = "-"


def render_board_text(game_state: MNKGameState) -> str:
    """Render the grid with column numbers on top and row numbers on the left.

    Example (4x4, X at 0 0, O at 1 1):

          0 1 2 3
        0 X - - -
        1 - O - -
        2 - - - -
        3 - - - -
    """
    config = game_state.config
    board = game_state.board
    lines = ["  " + " ".join(str(x) for x in range(config.columns))]
    for y in range(config.rows):
        cells = []
        for x in range(config.columns):
            player = board.get(Point(y, x))
            cells.append(BLANK_MARK if player is None else str(player))
        lines.append(f"{y} " + " ".join(cells))
    return "\n".join(lines)


def result_message(game_state: MNKGameState) -> str:
    if not game_state.is_over:
        return ""
    if game_state.winner is None:
        return "It's a draw."
    return f"Player {game_state.winner} wins!"

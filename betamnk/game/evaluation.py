"""Static evaluation: win-potential heuristic with a turn-aware adjustment.

Scores are from an absolute viewpoint: positive favours X (the maximizer),
negative favours O. Decided games score MAX_EVALUATION / MIN_EVALUATION / 0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import Player, Point

if TYPE_CHECKING:
    from .board import Board, MNKGameState

MAX_EVALUATION = 2**31 - 2
MIN_EVALUATION = -(2**31) + 1

# Each friendly mark further along a line multiplies that line's weight
WIN_POTENTIAL_MULTIPLIER = 10

# Forward vectors of the four line axes; the backward scan uses the negation
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]


# ---------------------------------------------------------------------------
# Terminal utility
# ---------------------------------------------------------------------------

def utility(game_state: MNKGameState) -> int:
    """Exact score of a finished game."""
    if not game_state.is_over or game_state.winner is None:
        return 0
    if game_state.winner is Player.X:
        return MAX_EVALUATION
    return MIN_EVALUATION


# ---------------------------------------------------------------------------
# Win potential
# ---------------------------------------------------------------------------

def win_potential(
    board: Board,
    point: Point,
    player: Player,
    direction: tuple[int, int],
) -> int:
    """Signed potential of the line through `point` along `direction`.

    A run is credited once, from its first mark: if another mark of `player`
    lies behind `point` (before an opponent mark or the edge) the line scores
    0. Every friendly mark ahead multiplies the weight by 10. The line only
    scores when the unobstructed span through `point` can still hold a win.
    """
    assert player is not None, "Can't check win potential for a blank cell"
    assert board.get(point) is player, f"{point} does not hold {player}"

    dr, dc = direction
    opponent = player.other
    span = 1

    # Backward
    p = Point(point.row - dr, point.col - dc)
    while board.is_on_grid(p) and board.get(p) is not opponent:
        if board.get(p) is player:
            return 0
        span += 1
        p = Point(p.row - dr, p.col - dc)

    # Forward
    potential = 1
    p = Point(point.row + dr, point.col + dc)
    while board.is_on_grid(p) and board.get(p) is not opponent:
        if board.get(p) is player:
            potential *= WIN_POTENTIAL_MULTIPLIER
        span += 1
        p = Point(p.row + dr, p.col + dc)

    if span < board.config.win_length:
        return 0
    return potential if player is Player.X else -potential


def superficial_evaluation(game_state: MNKGameState) -> int:
    """Sum of win potentials over every occupied cell and line axis."""
    board = game_state.board
    score = 0
    for index in game_state.played_moves:
        point = game_state.config.point_of(index)
        player = board.get(point)
        for direction in DIRECTIONS:
            score += win_potential(board, point, player, direction)
    return score


# ---------------------------------------------------------------------------
# Turn adjustment
# ---------------------------------------------------------------------------

def adjust_for_turn(evaluation: int, to_move: Player) -> int:
    """Shift a raw score by its leading power of 10 depending on who moves.

    A score favouring the side to move is lifted into the next power-of-10
    band; a score favouring the side that just moved drops one leading unit
    but stays in its band.
    """
    magnitude = 0
    while WIN_POTENTIAL_MULTIPLIER ** (magnitude + 1) <= abs(evaluation):
        magnitude += 1

    power = WIN_POTENTIAL_MULTIPLIER ** magnitude
    higher_power = power * WIN_POTENTIAL_MULTIPLIER

    if evaluation > 0:
        if to_move is Player.X:
            return evaluation - power + higher_power
        return evaluation - power
    if evaluation < 0:
        if to_move is Player.O:
            return evaluation + power - higher_power
        return evaluation + power
    return evaluation


def evaluate(game_state: MNKGameState) -> int:
    """Static evaluation of the position.

    Finished games return MAX_EVALUATION / MIN_EVALUATION / 0, an empty board
    returns 0, anything else the turn-adjusted win-potential heuristic.
    """
    if game_state.is_over:
        return utility(game_state)
    if not game_state.played_moves:
        return 0
    return adjust_for_turn(superficial_evaluation(game_state), game_state.current_player)

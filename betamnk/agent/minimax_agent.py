"""Minimax agents: pick a move by alpha-beta search over the state's children."""

from __future__ import annotations

import logging
from typing import Optional

from betamnk.agent.base import Agent
from betamnk.agent.search import AlphaBetaSearch
from betamnk.game.board import MNKGameState

logger = logging.getLogger(__name__)


class MinimaxAgent(Agent):
    """Fixed-depth alpha-beta agent.

    depth=None searches to the end of the game (one ply per cell).
    """

    def __init__(self, depth: Optional[int] = None) -> None:
        self.depth = depth
        self.engine = AlphaBetaSearch()

    @property
    def name(self) -> str:
        return f"{self.__class__.__name__}(d={self.depth if self.depth is not None else 'max'})"

    def select_move(self, game_state: MNKGameState, depth: Optional[int] = None) -> int:
        assert not game_state.is_over, "Game is already over"
        depth = self._depth_budget(game_state, depth)
        best = self.engine.search(game_state, depth)
        return self._action_for(game_state, best, depth)

    def select_move_iterative(
        self, game_state: MNKGameState, max_depth: Optional[int] = None
    ) -> int:
        assert not game_state.is_over, "Game is already over"
        max_depth = self._depth_budget(game_state, max_depth)
        best = self.engine.iterative_deepening(game_state, max_depth)
        return self._action_for(game_state, best, max_depth)

    def _depth_budget(self, game_state: MNKGameState, depth: Optional[int]) -> int:
        if depth is None:
            depth = self.depth
        cell_count = game_state.config.cell_count
        if depth is None:
            return cell_count
        return min(depth, cell_count)

    def _action_for(self, game_state: MNKGameState, best: MNKGameState, depth: int) -> int:
        """Map the chosen child state back to the index that produces it."""
        index = game_state.children_with_actions()[best]
        stats = self.engine.last_stats
        logger.debug(
            "%s plays %d (depth=%d reached=%d value=%s nodes=%d)",
            self.name, index, depth, stats.depth, stats.best_value, stats.nodes,
        )
        return index


class IterativeDeepeningAgent(MinimaxAgent):
    """Alpha-beta agent searching depths 1..depth with early exit on a proven result."""

    def select_move(self, game_state: MNKGameState, depth: Optional[int] = None) -> int:
        return self.select_move_iterative(game_state, depth)

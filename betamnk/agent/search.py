"""Minimax with alpha-beta pruning, per-search memo table and iterative deepening.

Scores use the absolute viewpoint of betamnk.game.evaluation: X maximizes,
O minimizes. Every top-level call owns a fresh memo table, dropped when the
call returns.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from betamnk.game.board import MNKGameState
from betamnk.game.evaluation import MAX_EVALUATION, MIN_EVALUATION

logger = logging.getLogger(__name__)

INF = math.inf

# Memo entry flags
EXACT = 0
LOWER_BOUND = 1
UPPER_BOUND = -1


# ---------------------------------------------------------------------------
# Search node
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class SearchNode:
    """A state under search with its alpha-beta window and running value."""

    state: MNKGameState
    alpha: float
    beta: float
    is_root: bool = False
    is_maximizing: bool = field(init=False)
    value: float = field(init=False)

    def __post_init__(self) -> None:
        self.is_maximizing = self.state.current_player.is_maximizer
        self.value = -INF if self.is_maximizing else INF

    @property
    def is_guaranteed_win(self) -> bool:
        """The side to move wins no matter what the opponent does."""
        if self.is_maximizing:
            return self.value == MAX_EVALUATION
        return self.value == MIN_EVALUATION

    @property
    def is_guaranteed_loss(self) -> bool:
        """The side to move loses no matter what it does."""
        if self.is_maximizing:
            return self.value == MIN_EVALUATION
        return self.value == MAX_EVALUATION


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    memo_hits: int = 0
    cutoffs: int = 0
    depth: int = 0
    best_value: Optional[float] = None


def _bound_flag(value: float, alpha: float, beta: float) -> int:
    if value <= alpha:
        return UPPER_BOUND
    if value >= beta:
        return LOWER_BOUND
    return EXACT


# ---------------------------------------------------------------------------
# AlphaBetaSearch
# ---------------------------------------------------------------------------

class AlphaBetaSearch:
    """Depth-bounded minimax with alpha-beta pruning.

    The memo table is keyed by (state, remaining depth) so a transposition
    searched shallower is never reused where a deeper result is expected.
    Each entry also records whether its value is exact or only a bound for
    the window it was searched with; bounds are reused only when they
    already decide the caller's window.
    """

    def __init__(self) -> None:
        self._memo: dict[tuple[MNKGameState, int], tuple[SearchNode, int]] = {}
        self.last_stats = SearchStats()

    def search(self, root: MNKGameState, max_depth: int) -> MNKGameState:
        """Return the child of `root` judged best at a fixed depth."""
        if max_depth < 1:
            raise ValueError(f"Invalid search depth: {max_depth}")
        assert not root.is_over, "Cannot search from a finished game"

        self.last_stats = SearchStats()
        _, best = self._search_root(root, max_depth)
        return self._resolve(root, best)

    def iterative_deepening(self, root: MNKGameState, max_depth: int) -> MNKGameState:
        """Search depths 1..max_depth, stopping early once the outcome is proven.

        A proven win is accepted immediately. A proven loss is discarded in
        favour of the previous depth's move, if there is one.
        `last_stats` describes the final depth searched.
        """
        if max_depth < 1:
            raise ValueError(f"Invalid search depth: {max_depth}")
        assert not root.is_over, "Cannot search from a finished game"

        best: Optional[SearchNode] = None
        for depth in range(1, max_depth + 1):
            previous_best = best
            self.last_stats = SearchStats()
            root_node, best = self._search_root(root, depth)
            logger.debug(
                "depth %d: value=%s nodes=%d memo_hits=%d cutoffs=%d",
                depth, root_node.value, self.last_stats.nodes,
                self.last_stats.memo_hits, self.last_stats.cutoffs,
            )

            if root_node.is_guaranteed_win:
                logger.debug("Forced win found at depth %d", depth)
                break
            if root_node.is_guaranteed_loss:
                logger.debug("Forced loss found at depth %d", depth)
                if previous_best is not None:
                    best = previous_best
                break

        return self._resolve(root, best)

    def _search_root(
        self, root: MNKGameState, depth: int
    ) -> tuple[SearchNode, Optional[SearchNode]]:
        root_node = SearchNode(root, MIN_EVALUATION, MAX_EVALUATION, is_root=True)
        self._memo = {}
        try:
            if root_node.is_maximizing:
                best = self._maximize(root_node, depth)
            else:
                best = self._minimize(root_node, depth)
        finally:
            self._memo = {}
        self.last_stats.depth = depth
        self.last_stats.best_value = root_node.value
        return root_node, best

    def _resolve(self, root: MNKGameState, best: Optional[SearchNode]) -> MNKGameState:
        if best is None:
            # No child improved on the sentinel; any legal continuation will do
            return root.children()[0]
        return best.state

    def _maximize(self, node: SearchNode, depth: int) -> Optional[SearchNode]:
        assert node.is_maximizing, "Node is not a maximizing node"
        if node.state.is_over or depth <= 0:
            node.value = node.state.evaluation()
            self.last_stats.leaves += 1
            return node

        self.last_stats.nodes += 1
        children = node.state.children()
        if node.is_root:
            children.sort(key=lambda c: c.evaluation(), reverse=True)

        best: Optional[SearchNode] = None
        for child in children:
            child_node = self._evaluate_child(child, node, depth)
            if child_node.value > node.value:
                node.value = child_node.value
                best = child_node
            node.alpha = max(node.alpha, node.value)
            if node.alpha >= node.beta:
                self.last_stats.cutoffs += 1
                break
        return best

    def _minimize(self, node: SearchNode, depth: int) -> Optional[SearchNode]:
        assert not node.is_maximizing, "Node is not a minimizing node"
        if node.state.is_over or depth <= 0:
            node.value = node.state.evaluation()
            self.last_stats.leaves += 1
            return node

        self.last_stats.nodes += 1
        children = node.state.children()
        if node.is_root:
            children.sort(key=lambda c: c.evaluation())

        best: Optional[SearchNode] = None
        for child in children:
            child_node = self._evaluate_child(child, node, depth)
            if child_node.value < node.value:
                node.value = child_node.value
                best = child_node
            node.beta = min(node.beta, node.value)
            if node.beta <= node.alpha:
                self.last_stats.cutoffs += 1
                break
        return best

    def _evaluate_child(self, child: MNKGameState, parent: SearchNode, depth: int) -> SearchNode:
        """Fully search `child` one ply deeper, reusing a memo entry when valid."""
        key = (child, depth - 1)
        entry = self._memo.get(key)
        if entry is not None:
            cached, flag = entry
            if (
                flag == EXACT
                or (flag == LOWER_BOUND and cached.value >= parent.beta)
                or (flag == UPPER_BOUND and cached.value <= parent.alpha)
            ):
                self.last_stats.memo_hits += 1
                return cached

        child_node = SearchNode(child, parent.alpha, parent.beta)
        if child_node.is_maximizing:
            self._maximize(child_node, depth - 1)
        else:
            self._minimize(child_node, depth - 1)
        self._memo[key] = (child_node, _bound_flag(child_node.value, parent.alpha, parent.beta))
        return child_node

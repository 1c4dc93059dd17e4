"""
Runtime configuration for a game session.
"""

from typing import Optional

from betamnk.agent.minimax_agent import IterativeDeepeningAgent, MinimaxAgent
from betamnk.game.board import COLUMNS, ROWS, WIN_LENGTH, BoardConfig
from betamnk.game.types import Player


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

class Config:
    """Session configuration with sensible defaults.

    depth=None lets the agent search to the end of the game.
    human=None means the agent plays both sides.
    """

    def __init__(
        self,
        rows: int = ROWS,
        columns: int = COLUMNS,
        win_length: int = WIN_LENGTH,
        depth: Optional[int] = None,
        iterative: bool = False,
        human: Optional[Player] = Player.X,
    ):
        if depth is not None and depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        self.rows = rows
        self.columns = columns
        self.win_length = win_length
        self.depth = depth
        self.iterative = iterative
        self.human = human

        # Derive dependent values
        self.board_config = BoardConfig(rows, columns, win_length)

    @property
    def self_play(self) -> bool:
        return self.human is None

    def create_agent(self) -> MinimaxAgent:
        if self.iterative:
            return IterativeDeepeningAgent(depth=self.depth)
        return MinimaxAgent(depth=self.depth)


# Default configuration
DEFAULT_CONFIG = Config()

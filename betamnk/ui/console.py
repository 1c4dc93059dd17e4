"""Console play: human vs AI (or AI vs itself) in the terminal."""

from __future__ import annotations

import logging
import time as _time
from dataclasses import dataclass, field
from typing import Callable, Optional

from betamnk.agent.base import Agent
from betamnk.agent.minimax_agent import MinimaxAgent
from betamnk.game.board import DEFAULT_BOARD, BoardConfig, MNKGameState, format_point, parse_coordinate
from betamnk.game.types import Player
from betamnk.ui.board_component import render_board_text, result_message

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One game between a human (or nobody) and an agent."""

    config: BoardConfig = DEFAULT_BOARD
    agent: Agent = field(default_factory=MinimaxAgent)
    human_player: Optional[Player] = Player.X
    game: MNKGameState = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = MNKGameState(self.config)
        if human_player is not None:
            self.human_player = human_player

    @property
    def is_human_turn(self) -> bool:
        return not self.game.is_over and self.game.current_player is self.human_player

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            return result_message(g)
        if self.is_human_turn:
            return f"{g.current_player}'s turn."
        return f"AI is thinking... ({g.current_player})"

    def apply_human_move(self, text: str) -> Optional[str]:
        """Apply a human 'x y' move. Returns an error message if it was rejected."""
        config = self.config
        point = parse_coordinate(text, config)
        if point is None:
            return (
                "Invalid move. Enter the column and row as 'x y', with "
                f"0 <= x < {config.columns} and 0 <= y < {config.rows}."
            )
        if not self.game.is_blank(config.index_of(point)):
            return "Invalid move. The selected cell must be blank."
        self.game.play(point)
        return None

    def apply_ai_move(self) -> int:
        t0 = _time.time()
        index = self.agent.select_move(self.game)
        self.game.apply_move(index)
        logger.info(
            "%s played %s in %.2fs",
            self.agent.name, format_point(self.config.point_of(index)), _time.time() - t0,
        )
        return index


def run_console(
    session: GameSession,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> Optional[Player]:
    """Play the session to the end. Returns the winner, or None for a draw."""
    while not session.game.is_over:
        if session.is_human_turn:
            write("\n" + render_board_text(session.game) + "\n")
            write(session.status_text)
            error = session.apply_human_move(read("Coordinates of move (x y): "))
            if error is not None:
                write("\n" + error)
        else:
            session.apply_ai_move()

    write("\n" + render_board_text(session.game) + "\n")
    write(session.status_text)
    return session.game.winner

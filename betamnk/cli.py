"""
Command-line interface: play an m,n,k game in the terminal.
"""

import argparse
import logging

from betamnk.config import Config
from betamnk.game.board import COLUMNS, ROWS, WIN_LENGTH
from betamnk.game.types import Player
from betamnk.ui.console import GameSession, run_console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play an m,n,k-in-a-row game against a minimax AI"
    )
    parser.add_argument(
        "--rows", "-r",
        type=int,
        default=ROWS,
        help=f"Board rows (default: {ROWS})",
    )
    parser.add_argument(
        "--columns", "-c",
        type=int,
        default=COLUMNS,
        help=f"Board columns (default: {COLUMNS})",
    )
    parser.add_argument(
        "--win-length", "-k",
        type=int,
        default=WIN_LENGTH,
        help=f"Marks in a row needed to win (default: {WIN_LENGTH})",
    )
    parser.add_argument(
        "--depth", "-d",
        type=int,
        default=None,
        help="Search depth limit (default: search to the end of the game)",
    )
    parser.add_argument(
        "--iterative", "-i",
        action="store_true",
        help="Use iterative deepening with early exit on a proven result",
    )
    parser.add_argument(
        "--human",
        choices=[p.name for p in Player],
        default=Player.X.name,
        help="Side played by the human (default: X, who moves first)",
    )
    parser.add_argument(
        "--self-play",
        action="store_true",
        help="AI plays both sides. Overrides --human.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    try:
        config = Config(
            rows=ns.rows,
            columns=ns.columns,
            win_length=ns.win_length,
            depth=ns.depth,
            iterative=ns.iterative,
            human=None if ns.self_play else Player[ns.human],
        )
    except ValueError as e:
        logging.error("%s", e)
        return 2

    session = GameSession(
        config=config.board_config,
        agent=config.create_agent(),
        human_player=config.human,
    )
    logging.info(
        "%dx%d board, %d in a row, agent %s",
        config.rows, config.columns, config.win_length, session.agent.name,
    )
    run_console(session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Tests for the minimax agents."""

import pytest

from betamnk.agent.minimax_agent import IterativeDeepeningAgent, MinimaxAgent
from betamnk.game.board import BoardConfig, MNKGameState

TIC_TAC_TOE = BoardConfig(3, 3, 3)


def make_state(*indices: int, config: BoardConfig = BoardConfig()) -> MNKGameState:
    gs = MNKGameState(config)
    for index in indices:
        assert gs.apply_move(index)
    return gs


def x_to_move_with_row_open() -> MNKGameState:
    # X holds 0, 1, 2; index 3 completes the row
    return make_state(0, 4, 1, 5, 2, 8)


class TestMinimaxAgent:
    def test_name(self):
        assert MinimaxAgent(depth=3).name == "MinimaxAgent(d=3)"
        assert MinimaxAgent().name == "MinimaxAgent(d=max)"
        assert IterativeDeepeningAgent(depth=2).name == "IterativeDeepeningAgent(d=2)"

    def test_depth_one_selects_winning_index(self):
        assert MinimaxAgent().select_move(x_to_move_with_row_open(), depth=1) == 3

    def test_iterative_selects_winning_index(self):
        assert MinimaxAgent().select_move_iterative(x_to_move_with_row_open(), 6) == 3

    def test_returned_index_is_available(self):
        gs = make_state(5, 10)
        index = MinimaxAgent(depth=2).select_move(gs)
        assert index in gs.available_moves
        assert gs.apply_move(index)

    def test_blocks_opponent_row(self):
        gs = make_state(0, 5, 1, 6, 2)
        assert MinimaxAgent(depth=2).select_move(gs) == 3

    def test_depth_budget_defaults_and_caps(self):
        gs = MNKGameState(TIC_TAC_TOE)
        assert MinimaxAgent()._depth_budget(gs, None) == 9
        assert MinimaxAgent(depth=4)._depth_budget(gs, None) == 4
        assert MinimaxAgent(depth=4)._depth_budget(gs, 2) == 2
        assert MinimaxAgent()._depth_budget(gs, 50) == 9

    def test_invalid_depth_raises(self):
        with pytest.raises(ValueError):
            MinimaxAgent().select_move(MNKGameState(), depth=0)

    def test_finished_game_asserts(self):
        gs = make_state(0, 12, 1, 13, 2, 14, 3)
        with pytest.raises(AssertionError):
            MinimaxAgent().select_move(gs)

    def test_agent_does_not_mutate_state(self):
        gs = make_state(0, 5)
        snapshot = gs.clone()
        MinimaxAgent(depth=2).select_move(gs)
        assert gs == snapshot
        assert gs.moves == snapshot.moves

    def test_opening_move_resolves_through_symmetry_dedup(self):
        # The search only sees three opening classes; the agent must still
        # map the chosen state back to a real index
        gs = MNKGameState()
        index = MinimaxAgent(depth=1).select_move(gs)
        assert 0 <= index < 16


class TestIterativeDeepeningAgent:
    def test_select_move_uses_iterative_deepening(self):
        agent = IterativeDeepeningAgent(depth=6)
        assert agent.select_move(x_to_move_with_row_open()) == 3
        assert agent.engine.last_stats.depth == 1

    def test_self_play_tic_tac_toe_is_a_draw(self):
        gs = MNKGameState(TIC_TAC_TOE)
        agent = IterativeDeepeningAgent()
        while not gs.is_over:
            gs.apply_move(agent.select_move(gs))
        assert gs.is_draw

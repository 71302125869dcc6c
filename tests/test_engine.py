import numpy as np
import pytest

from minesweeper_probe.analysis import random_snapshot
from minesweeper_probe.board import Board
from minesweeper_probe.engine import PropagationEngine, propagate
from minesweeper_probe.facts import extract_facts


def derive(text, **kwargs):
    board = Board.from_text(text)
    return board, propagate(extract_facts(board), **kwargs)


class TestRules:
    def test_zero_clue_saturates_in_first_round(self):
        board, derivation = derive("_ _ _\n_ 0 _\n_ _ ?")

        expected = frozenset(board.neighbors((1, 1)))
        assert derivation.history[0].index == 1
        assert derivation.history[0].forced_safe == expected
        assert derivation.forced_safe == expected
        assert derivation.forced_mine == frozenset()
        assert derivation.rounds == 2

    def test_full_exhaustion(self):
        # Clue 2 with one revealed mine and exactly one covered neighbor left.
        _, derivation = derive("2 *\ns ?")

        assert derivation.forced_mine == frozenset({(1, 1)})
        assert derivation.exhaustion_count == 1
        assert derivation.saturation_count == 0

    def test_cascade_within_one_run(self, cascade_board_text):
        _, derivation = derive(cascade_board_text)

        first, second = derivation.history[0], derivation.history[1]
        assert (3, 4) in first.forced_mine
        assert (3, 5) not in first.forced_safe
        assert (3, 5) in second.forced_safe
        assert (3, 5) in derivation.forced_safe

    def test_clue_without_covered_neighbors_is_inert(self):
        board = Board.from_text("1 * _ ?")
        engine = PropagationEngine(extract_facts(board))

        assert engine.apply_rules((0, 0)) == (frozenset(), frozenset())
        derivation = engine.run()
        assert derivation.forced_mine == frozenset()
        assert derivation.forced_safe == frozenset()
        assert derivation.rounds == 1

    def test_effective_counts_include_forced_mines(self):
        board = Board.from_text("1 _ ?\n* 2 _")
        engine = PropagationEngine(extract_facts(board), forced_mine=[(0, 1)])

        known_mines, unresolved = engine.effective_counts((1, 1))
        assert known_mines == 2
        assert unresolved == frozenset({(0, 2), (1, 2)})

    def test_contradiction_does_not_stop_the_run(self, contradiction_board_text):
        _, derivation = derive(contradiction_board_text)

        assert derivation.conflicts == frozenset({(0, 2)})
        assert (0, 2) in derivation.forced_mine
        assert (0, 2) in derivation.forced_safe


class TestFixpointProperties:
    def test_determinism(self, example_board_text):
        _, first = derive(example_board_text)
        _, second = derive(example_board_text)

        assert first == second

    def test_history_only_grows(self, example_board_text):
        _, derivation = derive(example_board_text)

        seen_mine, seen_safe = set(), set()
        for delta in derivation.history:
            assert not delta.forced_mine & seen_mine
            assert not delta.forced_safe & seen_safe
            assert delta.forced_mine or delta.forced_safe
            seen_mine |= delta.forced_mine
            seen_safe |= delta.forced_safe

        assert frozenset(seen_mine) == derivation.forced_mine
        assert frozenset(seen_safe) == derivation.forced_safe
        assert derivation.rounds == len(derivation.history) + 1

    def test_reseeding_the_fixpoint_adds_nothing(self, example_board_text):
        board, derivation = derive(example_board_text)

        again = propagate(
            extract_facts(board),
            forced_mine=derivation.forced_mine,
            forced_safe=derivation.forced_safe,
        )
        assert again.history == ()
        assert again.rounds == 1
        assert again.forced_mine == derivation.forced_mine
        assert again.forced_safe == derivation.forced_safe

    def test_record_rounds_disabled(self, example_board_text):
        _, recorded = derive(example_board_text)
        _, quiet = derive(example_board_text, record_rounds=False)

        assert quiet.history == ()
        assert quiet.forced_mine == recorded.forced_mine
        assert quiet.forced_safe == recorded.forced_safe
        assert quiet.rounds == recorded.rounds
        assert quiet.saturation_count == len(recorded.forced_safe)
        assert quiet.exhaustion_count == len(recorded.forced_mine)

    @pytest.mark.parametrize("seed", range(20))
    def test_random_boards_agree_with_true_layout(self, seed):
        rng = np.random.default_rng(seed)
        board, mines = random_snapshot(6, 6, 7, reveal_fraction=0.7, rng=rng)
        facts = extract_facts(board)

        first = propagate(facts)
        second = propagate(facts)

        assert first == second
        assert not first.forced_safe & mines
        assert first.forced_mine <= mines
        assert first.conflicts == frozenset()

import pytest

from minesweeper_probe import Board, MalformedBoard, ProbeSolver, Verdict, check_probe


class TestFixtureBoards:
    def test_example_board_is_safe(self, example_board_text):
        assert check_probe(example_board_text) is Verdict.SAFE

    def test_exhausted_probe_is_mine(self, exhausted_probe_board_text):
        assert check_probe(exhausted_probe_board_text) is Verdict.MINE

    def test_cascade_board_is_safe(self, cascade_board_text):
        assert check_probe(cascade_board_text) is Verdict.SAFE

    def test_contradiction_is_inconsistent(self, contradiction_board_text):
        assert check_probe(contradiction_board_text) is Verdict.INCONSISTENT

    def test_remote_contradiction_is_inconsistent(self, remote_contradiction_board_text):
        board = Board.from_text(remote_contradiction_board_text)
        solver = ProbeSolver(board)
        resolution = solver.solve()

        assert resolution.verdict is Verdict.INCONSISTENT
        assert resolution.conflicts == frozenset({(0, 2)})
        assert solver.derivation is not None
        assert board.probe in solver.derivation.forced_safe

    def test_over_mined_board_rejected(self, over_mined_board_text):
        with pytest.raises(MalformedBoard):
            check_probe(over_mined_board_text)


class TestScenarios:
    def test_unpinned_clue_is_undetermined(self):
        assert check_probe("1 _\n? _") is Verdict.UNDETERMINED

    def test_probe_away_from_clues_is_undetermined(self):
        assert check_probe("1 * _ ?") is Verdict.UNDETERMINED

    def test_two_probes_rejected_before_inference(self):
        with pytest.raises(MalformedBoard):
            check_probe("1 ? ?")

    def test_board_instance_accepted(self):
        assert check_probe(Board.from_text("0 ?")) is Verdict.SAFE


class TestProbeSolver:
    def test_summary(self, example_board_text):
        solver = ProbeSolver(Board.from_text(example_board_text))
        solver.solve()
        summary = solver.summary()

        assert summary["verdict"] == "safe"
        assert summary["probe"] == (3, 1)
        assert summary["rounds"] >= 2
        assert summary["forced_safe_count"] > 0
        assert summary["conflicts"] == []

    def test_summary_requires_solve(self, example_board_text):
        solver = ProbeSolver(Board.from_text(example_board_text))
        with pytest.raises(ValueError):
            solver.summary()

    def test_each_solve_starts_fresh(self, cascade_board_text):
        solver = ProbeSolver(Board.from_text(cascade_board_text))
        first = solver.solve()
        first_derivation = solver.derivation
        second = solver.solve()

        assert first == second
        assert solver.derivation == first_derivation

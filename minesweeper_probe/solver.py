"""Probe solver: board -> seed facts -> propagation -> verdict."""

import logging
from typing import Any, Dict, Optional, Union

from .board import Board
from .engine import Derivation, propagate
from .facts import SeedFacts, extract_facts
from .verdict import Resolution, Verdict, resolve_verdict

logger = logging.getLogger(__name__)

EXAMPLE_BOARD = """
_ _ 2 _ 3 _
2 _ _ * * 3
1 1 2 4 _ 3
1 ? 3 4 _ 2
2 * * * _ 3
_ 3 3 3 * *
""".strip()


class ProbeSolver:
    """
    Answer the single safe / mine / undetermined query for one board snapshot.

    The solver owns no state beyond one run: each instance extracts fresh seed
    facts, runs its own propagation engine and keeps the results for
    inspection.
    """

    def __init__(self, board: Board, record_rounds: bool = True) -> None:
        """
        Initialize a solver bound to a validated board.

        Args:
            board: The board snapshot to query.
            record_rounds: If True, keep per-round deltas for replay.
        """
        self.board = board
        self.record_rounds = record_rounds
        self.facts: Optional[SeedFacts] = None
        self.derivation: Optional[Derivation] = None
        self.resolution: Optional[Resolution] = None

    def solve(self) -> Resolution:
        """Run the full pipeline once and return the probe's resolution."""
        self.facts = extract_facts(self.board)
        logger.debug(
            "Extracted %d clues for %r", len(self.facts.clues), self.board
        )
        self.derivation = propagate(self.facts, record_rounds=self.record_rounds)
        self.resolution = resolve_verdict(self.derivation, self.board.probe)
        return self.resolution

    def summary(self) -> Dict[str, Any]:
        """Metrics payload of the last run."""
        if self.derivation is None or self.resolution is None:
            raise ValueError("solve() has not been called yet.")
        return {
            "verdict": self.resolution.verdict.value,
            "probe": self.board.probe,
            "rounds": self.derivation.rounds,
            "forced_mine_count": len(self.derivation.forced_mine),
            "forced_safe_count": len(self.derivation.forced_safe),
            "saturation_count": self.derivation.saturation_count,
            "exhaustion_count": self.derivation.exhaustion_count,
            "conflicts": sorted(self.resolution.conflicts),
        }


def check_probe(board: Union[Board, str]) -> Verdict:
    """
    Decide the probe of a board given as a Board or as raw text.

    Raises:
        MalformedBoard: If `board` is text that does not describe a valid board.
    """
    if isinstance(board, str):
        board = Board.from_text(board)
    return ProbeSolver(board, record_rounds=False).solve().verdict

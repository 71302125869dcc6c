"""Constraint propagation engine: least-fixpoint derivation of forced mines and safe cells."""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

from .facts import SeedFacts
from .utils import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundDelta:
    """Facts added by one productive propagation round."""

    index: int
    forced_mine: FrozenSet[Coordinate]
    forced_safe: FrozenSet[Coordinate]
    examined_clues: int


@dataclass(frozen=True)
class Derivation:
    """
    Final fact sets of one propagation run.

    Attributes:
        forced_mine: Cells proven to hold a mine.
        forced_safe: Cells proven to be mine-free.
        rounds: Number of rounds executed, including the final quiet round.
        history: Per-round deltas (empty when round recording is disabled).
        saturation_count: Facts asserted by the saturation rule.
        exhaustion_count: Facts asserted by the exhaustion rule.
    """

    forced_mine: FrozenSet[Coordinate]
    forced_safe: FrozenSet[Coordinate]
    rounds: int
    history: Tuple[RoundDelta, ...] = ()
    saturation_count: int = 0
    exhaustion_count: int = 0

    @property
    def conflicts(self) -> FrozenSet[Coordinate]:
        """Cells forced both ways; non-empty only for inconsistent boards."""
        return self.forced_mine & self.forced_safe


class PropagationEngine:
    """
    Per-run engine applying the saturation and exhaustion rules to a fixpoint.

    Every round reads the fact relation as it stood when the round started,
    collects a delta, and unions it in. Only clues adjacent to a cell forced in
    the previous round are re-examined. Facts are never retracted, so the final
    sets do not depend on the order clues are visited in.
    """

    def __init__(
        self,
        facts: SeedFacts,
        forced_mine: Iterable[Coordinate] = (),
        forced_safe: Iterable[Coordinate] = (),
        record_rounds: bool = True,
    ) -> None:
        """
        Initialize an engine over one board's seed facts.

        Args:
            facts: Seed facts extracted from a validated board.
            forced_mine: Previously derived ForcedMine facts to start from.
            forced_safe: Previously derived ForcedSafe facts to start from.
            record_rounds: If True, keep per-round deltas for replay.
                Set to False for batch runs.
        """
        self.facts = facts
        self.record_rounds = record_rounds

        # Covered cell -> clue cells that list it as a CoveredNeighbor.
        self._clues_around: Dict[
            Coordinate, FrozenSet[Coordinate]
        ] = facts.clues_around()

        self.forced_mine: Set[Coordinate] = set(forced_mine)
        self.forced_safe: Set[Coordinate] = set(forced_safe)

        self.rounds: int = 0
        self.history: List[RoundDelta] = []
        self.saturation_count: int = 0
        self.exhaustion_count: int = 0

    # -------------------------------------------------------------------------
    # Rule evaluation
    # -------------------------------------------------------------------------

    def effective_counts(self, clue: Coordinate) -> Tuple[int, FrozenSet[Coordinate]]:
        """
        Return (known mines, unresolved covered neighbors) for a clue cell.

        Known mines are revealed mines plus covered neighbors already forced
        mine; unresolved neighbors are covered ones in neither forced set.
        """
        covered = self.facts.covered_neighbors[clue]
        known_mines = len(self.facts.known_mine_neighbors[clue]) + len(
            covered & self.forced_mine
        )
        unresolved = frozenset(
            c for c in covered
            if c not in self.forced_mine and c not in self.forced_safe
        )
        return known_mines, unresolved

    def apply_rules(
        self, clue: Coordinate
    ) -> Tuple[FrozenSet[Coordinate], FrozenSet[Coordinate]]:
        """
        Apply both rules to one clue against the current relation.

        Returns:
            (new ForcedMine cells, new ForcedSafe cells); both empty when the
            clue forces nothing.
        """
        count = self.facts.clues[clue]
        known_mines, unresolved = self.effective_counts(clue)

        if not unresolved:
            return frozenset(), frozenset()

        if known_mines == count:
            return frozenset(), unresolved
        if len(unresolved) == count - known_mines:
            return unresolved, frozenset()
        return frozenset(), frozenset()

    # -------------------------------------------------------------------------
    # Fixpoint loop
    # -------------------------------------------------------------------------

    def run(self) -> Derivation:
        """Propagate until a round adds no fact and return the derived sets."""
        pending: Set[Coordinate] = set(self.facts.clues)

        while True:
            self.rounds += 1
            delta_mine: Set[Coordinate] = set()
            delta_safe: Set[Coordinate] = set()

            for clue in sorted(pending):
                new_mine, new_safe = self.apply_rules(clue)
                if new_mine:
                    logger.debug("Clue %s exhausted: %s are mines", clue, sorted(new_mine))
                if new_safe:
                    logger.debug("Clue %s saturated: %s are safe", clue, sorted(new_safe))
                delta_mine |= new_mine
                delta_safe |= new_safe

            if not delta_mine and not delta_safe:
                logger.debug(
                    "Fixpoint after %d rounds: %d mines, %d safe",
                    self.rounds,
                    len(self.forced_mine),
                    len(self.forced_safe),
                )
                break

            self.exhaustion_count += len(delta_mine)
            self.saturation_count += len(delta_safe)

            if self.record_rounds:
                self.history.append(
                    RoundDelta(
                        index=self.rounds,
                        forced_mine=frozenset(delta_mine),
                        forced_safe=frozenset(delta_safe),
                        examined_clues=len(pending),
                    )
                )

            self.forced_mine |= delta_mine
            self.forced_safe |= delta_safe

            pending = set()
            for cell in delta_mine | delta_safe:
                pending |= self._clues_around.get(cell, frozenset())

        return Derivation(
            forced_mine=frozenset(self.forced_mine),
            forced_safe=frozenset(self.forced_safe),
            rounds=self.rounds,
            history=tuple(self.history),
            saturation_count=self.saturation_count,
            exhaustion_count=self.exhaustion_count,
        )


def propagate(
    facts: SeedFacts,
    forced_mine: Iterable[Coordinate] = (),
    forced_safe: Iterable[Coordinate] = (),
    *,
    record_rounds: bool = True,
) -> Derivation:
    """Run a fresh PropagationEngine over `facts` and return its derivation."""
    engine = PropagationEngine(
        facts,
        forced_mine=forced_mine,
        forced_safe=forced_safe,
        record_rounds=record_rounds,
    )
    return engine.run()

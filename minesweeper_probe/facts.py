"""Fact extraction: turn a validated board into the propagation engine's seed facts."""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterator, Set, Tuple

from .board import Board
from .utils import Coordinate


@dataclass(frozen=True)
class SeedFacts:
    """
    Relational seed facts for one board.

    Attributes:
        clues: Clue(cell, n) as a mapping clue cell -> n.
        covered_neighbors: CoveredNeighbor(clue, nbr) grouped by clue cell.
        known_mine_neighbors: KnownMineNeighbor(clue, nbr) grouped by clue cell.
        probe: The cell being queried.
    """

    clues: Dict[Coordinate, int]
    covered_neighbors: Dict[Coordinate, FrozenSet[Coordinate]]
    known_mine_neighbors: Dict[Coordinate, FrozenSet[Coordinate]]
    probe: Coordinate

    def covered_neighbor_pairs(self) -> Iterator[Tuple[Coordinate, Coordinate]]:
        for clue, nbrs in self.covered_neighbors.items():
            for nbr in sorted(nbrs):
                yield clue, nbr

    def known_mine_neighbor_pairs(self) -> Iterator[Tuple[Coordinate, Coordinate]]:
        for clue, nbrs in self.known_mine_neighbors.items():
            for nbr in sorted(nbrs):
                yield clue, nbr

    def clues_around(self) -> Dict[Coordinate, FrozenSet[Coordinate]]:
        """Invert CoveredNeighbor: covered cell -> clue cells that constrain it."""
        inverse: Dict[Coordinate, Set[Coordinate]] = {}
        for clue, nbr in self.covered_neighbor_pairs():
            inverse.setdefault(nbr, set()).add(clue)
        return {cell: frozenset(clues) for cell, clues in inverse.items()}


def extract_facts(board: Board) -> SeedFacts:
    """
    Extract Clue, CoveredNeighbor and KnownMineNeighbor facts from a board.

    Covered cells and the probe count as covered; revealed mines count as
    known mines; other clues and revealed safe cells contribute nothing.
    """
    clues = board.clue_cells()
    covered: Dict[Coordinate, FrozenSet[Coordinate]] = {}
    mines: Dict[Coordinate, FrozenSet[Coordinate]] = {}

    for cell in clues:
        nbrs = board.neighbors(cell)
        covered[cell] = frozenset(n for n in nbrs if board.label(n).is_covered)
        mines[cell] = frozenset(n for n in nbrs if board.label(n).is_mine)

    return SeedFacts(
        clues=clues,
        covered_neighbors=covered,
        known_mine_neighbors=mines,
        probe=board.probe,
    )

"""Board model: parsed cell labels, validation and neighbor lookup."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .utils import Coordinate, get_neighborhoods

logger = logging.getLogger(__name__)


class MalformedBoard(ValueError):
    """
    Raised when a board snapshot is structurally invalid.

    Covers ragged rows, an empty grid, a probe count other than one, an
    unparsable token, and clues that contradict their own neighborhood
    (more adjacent mines than the clue, or too few covered cells left to
    hold the rest).
    """

    def __init__(
        self,
        message: str,
        cell: Optional[Coordinate] = None,
        token: Optional[str] = None,
    ) -> None:
        if cell is not None:
            message = f"{message} at row {cell[0]}, column {cell[1]}"
        super().__init__(message)
        self.cell = cell
        self.token = token


class LabelKind(Enum):
    COVERED = "_"
    PROBE = "?"
    MINE = "*"
    SAFE = "s"
    CLUE = "n"


@dataclass(frozen=True)
class Label:
    """A parsed cell label. `count` is set only for clues."""

    kind: LabelKind
    count: Optional[int] = None

    @property
    def is_covered(self) -> bool:
        """Covered cells and the probe are the only cells subject to deduction."""
        return self.kind in (LabelKind.COVERED, LabelKind.PROBE)

    @property
    def is_mine(self) -> bool:
        return self.kind is LabelKind.MINE

    @property
    def is_clue(self) -> bool:
        return self.kind is LabelKind.CLUE

    def token(self) -> str:
        if self.kind is LabelKind.CLUE:
            return str(self.count)
        return self.kind.value


COVERED = Label(LabelKind.COVERED)
PROBE = Label(LabelKind.PROBE)
MINE = Label(LabelKind.MINE)
SAFE = Label(LabelKind.SAFE)

_SYMBOLS: Dict[str, Label] = {
    "_": COVERED,
    "?": PROBE,
    "*": MINE,
    "s": SAFE,
}


def parse_label(token: str, cell: Optional[Coordinate] = None) -> Label:
    """
    Parse one whitespace-free token into a Label.

    Args:
        token: One of "_", "?", "*", "s" or a decimal digit 0..8.
        cell: Optional (row, col) used to locate the error message.

    Returns:
        The matching Label.

    Raises:
        MalformedBoard: If the token is not a recognised label.
    """
    label = _SYMBOLS.get(token)
    if label is not None:
        return label

    if token.isdigit() and token.isascii():
        count = int(token)
        if count > 8:
            raise MalformedBoard(f"Invalid number of mines {token!r}", cell, token)
        return Label(LabelKind.CLUE, count)

    raise MalformedBoard(f"Invalid square label {token!r}", cell, token)


class Board:
    """Immutable rectangular board snapshot with exactly one probe cell."""

    def __init__(self, grid: Sequence[Sequence[Label]]) -> None:
        """
        Validate a grid of labels and build the board.

        Args:
            grid: Rows of parsed labels, indexed grid[row][col].

        Raises:
            MalformedBoard: If the grid is empty or ragged, the probe count is
                not exactly one, or a clue is locally inconsistent.
        """
        if not grid or not grid[0]:
            raise MalformedBoard("Board must have at least one row and one column")

        width = len(grid[0])
        for row, cells in enumerate(grid):
            if len(cells) != width:
                raise MalformedBoard(
                    f"Row {row} has {len(cells)} cells, expected {width}"
                )

        self.height: int = len(grid)
        self.width: int = width
        self._grid: Tuple[Tuple[Label, ...], ...] = tuple(
            tuple(cells) for cells in grid
        )
        self._neighborhoods: Dict[
            Coordinate, Tuple[Coordinate, ...]
        ] = get_neighborhoods(self.height, self.width)

        probes = [cell for cell, label in self.cells() if label.kind is LabelKind.PROBE]
        if len(probes) != 1:
            raise MalformedBoard(f"Expected exactly one probe, found {len(probes)}")
        self.probe: Coordinate = probes[0]

        self._check_clues()
        logger.debug(
            "Built %dx%d board with probe at %s", self.height, self.width, self.probe
        )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "Board":
        """Build a board from rows of raw tokens."""
        grid: List[List[Label]] = [
            [parse_label(token, (r, c)) for c, token in enumerate(tokens)]
            for r, tokens in enumerate(rows)
        ]
        return cls(grid)

    @classmethod
    def from_text(cls, text: str) -> "Board":
        """
        Parse a textual grid: one row per line, whitespace-separated tokens.

        Blank lines and surrounding whitespace are ignored.
        """
        rows = [line.split() for line in text.splitlines() if line.strip()]
        return cls.from_rows(rows)

    def _check_clues(self) -> None:
        for cell, count in self.clue_cells().items():
            mines = 0
            covered = 0
            for nbr in self.neighbors(cell):
                label = self.label(nbr)
                if label.is_mine:
                    mines += 1
                elif label.is_covered:
                    covered += 1

            if mines > count:
                raise MalformedBoard(
                    f"Clue {count} has {mines} adjacent mines", cell, str(count)
                )
            if count - mines > covered:
                raise MalformedBoard(
                    f"Clue {count} needs {count - mines} more mines "
                    f"but only {covered} covered neighbors remain",
                    cell,
                    str(count),
                )

    def label(self, cell: Coordinate) -> Label:
        row, col = cell
        return self._grid[row][col]

    def neighbors(self, cell: Coordinate) -> Tuple[Coordinate, ...]:
        """Return precomputed in-bounds 8-neighbors of a cell."""
        return self._neighborhoods[cell]

    def cells(self) -> Iterator[Tuple[Coordinate, Label]]:
        for row, cells in enumerate(self._grid):
            for col, label in enumerate(cells):
                yield (row, col), label

    def clue_cells(self) -> Dict[Coordinate, int]:
        """Map every clue cell to its declared mine count."""
        return {
            cell: label.count
            for cell, label in self.cells()
            if label.is_clue and label.count is not None
        }

    def covered_cells(self) -> List[Coordinate]:
        return [cell for cell, label in self.cells() if label.is_covered]

    def render(self) -> str:
        """Render the board back to its canonical token grid."""
        return "\n".join(
            " ".join(label.token() for label in cells) for cells in self._grid
        )

    def __repr__(self) -> str:
        return f"Board({self.height}x{self.width}, probe={self.probe})"

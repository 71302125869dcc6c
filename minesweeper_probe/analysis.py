"""Analysis and benchmarking tools for the probe checker."""

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple, cast

import matplotlib.pyplot as plt
import numpy as np

from .board import Board
from .engine import Derivation
from .facts import extract_facts
from .solver import ProbeSolver
from .utils import Coordinate
from .verdict import Verdict

logger = logging.getLogger(__name__)


def format_derivation(
    board: Board, derivation: Derivation, *, show_coords: bool = True
) -> str:
    """
    Format a board with the derived facts overlaid as a human-readable string.

    Args:
        board: The board the derivation was computed for.
        derivation: Result of a propagation run over `board`.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where forced-safe cells are shown as 'S', forced mines as
        'M', cells forced both ways as '!', and everything else as its token.
    """
    w, h = board.width, board.height

    def cell_char(row: int, col: int) -> str:
        cell = (row, col)
        mine = cell in derivation.forced_mine
        safe = cell in derivation.forced_safe
        if mine and safe:
            return "!"
        if mine:
            return "M"
        if safe:
            return "S"
        return board.label(cell).token()

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{c:2d}" for c in range(w))
        lines.append("   " + header)
        lines.append("   " + "-" * (3 * w - 1))

    for r in range(h):
        row = " ".join(f" {cell_char(r, c)}" for c in range(w))
        lines.append(f"{r:2d} |" + row if show_coords else row)

    return "\n".join(lines)


# -------------------------------------------------------------------------
# Exhaustive cross-check
# -------------------------------------------------------------------------


def enumerate_placements(
    board: Board, max_frontier: int = 20
) -> Iterator[FrozenSet[Coordinate]]:
    """
    Enumerate every mine placement on the frontier that satisfies all clues.

    The frontier is the set of covered cells adjacent to at least one clue;
    covered cells away from every clue are unconstrained and left out.

    Args:
        board: A validated board.
        max_frontier: Refuse frontiers larger than this many cells.

    Yields:
        Frozensets of frontier cells holding a mine.

    Raises:
        ValueError: If the frontier is larger than `max_frontier`.
    """
    facts = extract_facts(board)
    clues_around = facts.clues_around()
    frontier = sorted(clues_around)
    if len(frontier) > max_frontier:
        raise ValueError(
            f"Frontier has {len(frontier)} cells; max_frontier is {max_frontier}."
        )

    # Mines still owed by each clue and covered neighbors not yet assigned.
    need: Dict[Coordinate, int] = {
        clue: n - len(facts.known_mine_neighbors[clue])
        for clue, n in facts.clues.items()
    }
    remaining: Dict[Coordinate, int] = {
        clue: len(facts.covered_neighbors[clue]) for clue in facts.clues
    }
    mines: List[Coordinate] = []

    def dfs(i: int) -> Iterator[FrozenSet[Coordinate]]:
        if i == len(frontier):
            yield frozenset(mines)
            return

        cell = frontier[i]
        around = clues_around[cell]
        for m in (0, 1):
            if not all(0 <= need[c] - m <= remaining[c] - 1 for c in around):
                continue
            for c in around:
                need[c] -= m
                remaining[c] -= 1
            if m:
                mines.append(cell)

            yield from dfs(i + 1)

            if m:
                mines.pop()
            for c in around:
                need[c] += m
                remaining[c] += 1

    yield from dfs(0)


def exhaustive_verdict(board: Board, max_frontier: int = 20) -> Verdict:
    """
    Decide the probe by enumerating all clue-consistent placements.

    Returns INCONSISTENT when no placement satisfies every clue, SAFE or MINE
    when all placements agree on the probe, and UNDETERMINED otherwise.
    """
    probe = board.probe
    seen_mine = False
    seen_safe = False
    any_placement = False

    for placement in enumerate_placements(board, max_frontier=max_frontier):
        any_placement = True
        if probe in placement:
            seen_mine = True
        else:
            seen_safe = True
        if seen_mine and seen_safe:
            return Verdict.UNDETERMINED

    if not any_placement:
        return Verdict.INCONSISTENT
    # A probe away from every clue is unconstrained.
    if all(probe not in nbrs for nbrs in extract_facts(board).covered_neighbors.values()):
        return Verdict.UNDETERMINED
    if seen_mine:
        return Verdict.MINE
    return Verdict.SAFE


# -------------------------------------------------------------------------
# Random snapshots
# -------------------------------------------------------------------------


def random_snapshot(
    height: int,
    width: int,
    mines_count: int,
    reveal_fraction: float = 0.6,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[Board, FrozenSet[Coordinate]]:
    """
    Generate a consistent board snapshot from a real random mine layout.

    Each cell is revealed independently with probability `reveal_fraction`:
    revealed mines show as '*', revealed safe cells show their clue. One
    covered cell becomes the probe (a random cell is covered if none is).

    Args:
        height: Board height (rows), must be > 0.
        width: Board width (columns), must be > 0.
        mines_count: Number of mines in the layout, 0 <= mines_count <= cells.
        reveal_fraction: Probability that a cell is revealed, in [0, 1].
        rng: numpy random generator; a fresh unseeded one if None.

    Returns:
        Tuple of (board, true mine cells).

    Raises:
        ValueError: If the arguments are out of range.
    """
    if height <= 0 or width <= 0:
        raise ValueError("Height and width must be positive.")
    if not 0 <= mines_count <= height * width:
        raise ValueError("mines_count must be between 0 and the number of cells.")
    if not 0.0 <= reveal_fraction <= 1.0:
        raise ValueError("reveal_fraction must be within [0, 1].")

    rng = rng if rng is not None else np.random.default_rng()

    mine_grid = np.zeros((height, width), dtype=bool)
    flat = rng.choice(height * width, size=mines_count, replace=False)
    mine_grid.flat[flat] = True

    padded = np.pad(mine_grid.astype(np.int8), 1)
    counts = sum(
        padded[1 + dr : 1 + dr + height, 1 + dc : 1 + dc + width]
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if dr or dc
    )

    revealed = rng.random((height, width)) < reveal_fraction
    covered = np.argwhere(~revealed)
    if len(covered) == 0:
        pick = rng.integers(height * width)
        revealed.flat[pick] = False
        covered = np.argwhere(~revealed)
    probe_row, probe_col = covered[rng.integers(len(covered))]

    rows: List[List[str]] = []
    for r in range(height):
        tokens: List[str] = []
        for c in range(width):
            if r == probe_row and c == probe_col:
                tokens.append("?")
            elif not revealed[r, c]:
                tokens.append("_")
            elif mine_grid[r, c]:
                tokens.append("*")
            else:
                tokens.append(str(int(counts[r, c])))
        rows.append(tokens)

    mines = frozenset((int(r), int(c)) for r, c in np.argwhere(mine_grid))
    return Board.from_rows(rows), mines


# -------------------------------------------------------------------------
# Batch statistics
# -------------------------------------------------------------------------


def run_verdict_many_tests(
    height: int,
    width: int,
    mines_count: int,
    runs: int,
    *,
    reveal_fraction: float = 0.6,
    seed: Optional[int] = None,
    max_frontier: int = 20,
) -> Dict[str, float]:
    """
    Check many random snapshots and return verdict rates plus engine metrics.

    Every run is also cross-checked against the exhaustive enumeration
    (skipped when its frontier exceeds `max_frontier`) and against the true
    mine layout.

    Returns:
        Dict with:
        - "<verdict>_rate" for every verdict
        - avg_rounds, avg_forced_mine_count, avg_forced_safe_count
        - exhaustive_checked: runs that were cross-checked
        - exhaustive_agreement: fraction of checked runs with equal verdicts
        - soundness_violations: forced facts contradicting the true layout or
          a decided verdict contradicting the exhaustive one (always 0 for a
          sound engine)
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    rng = np.random.default_rng(seed)
    verdict_counts: Dict[Verdict, int] = defaultdict(int)
    sums: Dict[str, float] = defaultdict(float)
    checked = 0
    agreed = 0
    violations = 0

    for _ in range(runs):
        board, mines = random_snapshot(
            height, width, mines_count, reveal_fraction=reveal_fraction, rng=rng
        )
        solver = ProbeSolver(board, record_rounds=False)
        verdict = solver.solve().verdict
        summary = solver.summary()

        verdict_counts[verdict] += 1
        sums["avg_rounds"] += summary["rounds"]
        sums["avg_forced_mine_count"] += summary["forced_mine_count"]
        sums["avg_forced_safe_count"] += summary["forced_safe_count"]

        derivation = cast(Derivation, solver.derivation)
        violations += len(derivation.forced_safe & mines)
        violations += len(derivation.forced_mine - mines)

        try:
            exact = exhaustive_verdict(board, max_frontier=max_frontier)
        except ValueError:
            logger.debug("Skipping exhaustive check for %r: frontier too large", board)
            continue

        checked += 1
        if exact == verdict:
            agreed += 1
        elif verdict is not Verdict.UNDETERMINED:
            violations += 1

    out: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    for verdict in Verdict:
        out[f"{verdict.value}_rate"] = verdict_counts[verdict] / runs
    out["exhaustive_checked"] = float(checked)
    out["exhaustive_agreement"] = agreed / checked if checked else 0.0
    out["soundness_violations"] = float(violations)
    return out


def run_verdict_density_analysis(
    runs: int,
    *,
    height: int = 9,
    width: int = 9,
    densities: Sequence[float] = (0.1, 0.15, 0.2, 0.25),
    reveal_fraction: float = 0.6,
    seed: Optional[int] = None,
) -> Dict[float, Dict[str, float]]:
    """
    Run batch statistics over several mine densities and plot summaries.

    Args:
        runs: Number of random snapshots per density.
        height: Board height.
        width: Board width.
        densities: Fractions of cells holding a mine.
        reveal_fraction: Probability that a cell is revealed.
        seed: Seed for the shared random generator.

    Returns:
        Mapping from density to the statistics dict of run_verdict_many_tests().
    """
    results: Dict[float, Dict[str, float]] = {}
    for i, density in enumerate(densities):
        mines_count = int(round(density * height * width))
        results[density] = run_verdict_many_tests(
            height,
            width,
            mines_count,
            runs,
            reveal_fraction=reveal_fraction,
            seed=None if seed is None else seed + i,
        )

    labels = [f"{d:.2f}" for d in densities]
    x = np.arange(len(labels))

    # 1) Verdict mix by density
    bar_w = 0.2
    plt.figure()  # type: ignore[misc]
    for j, verdict in enumerate(Verdict):
        rates = [results[d][f"{verdict.value}_rate"] for d in densities]
        plt.bar(x + (j - 1.5) * bar_w, rates, width=bar_w, label=verdict.value)  # type: ignore[misc]
    plt.xticks(x, labels)  # type: ignore[misc]
    plt.xlabel("Mine density")  # type: ignore[misc]
    plt.ylabel("Fraction of snapshots")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Probe verdicts by mine density")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Propagation rounds by density
    rounds = [results[d]["avg_rounds"] for d in densities]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, rounds)  # type: ignore[misc]
    plt.xticks(x, labels)  # type: ignore[misc]
    plt.xlabel("Mine density")  # type: ignore[misc]
    plt.ylabel("Average rounds to fixpoint")  # type: ignore[misc]
    plt.title("Propagation rounds by mine density")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results

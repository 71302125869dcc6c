"""Utility functions for the Minesweeper probe checker."""

from typing import Dict, List, Tuple

Coordinate = Tuple[int, int]

# Module-level cache: (height, width) -> {(row, col): ((nr, nc), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[
    Tuple[int, int],
    Dict[Coordinate, Tuple[Coordinate, ...]]
] = {}


def get_neighborhoods(
    height: int, width: int
) -> Dict[Coordinate, Tuple[Coordinate, ...]]:
    """
    Precompute and cache 8-connected neighbor coordinates for every cell in a grid.

    Args:
        height: Grid height (number of rows). Must be positive.
        width: Grid width (number of columns). Must be positive.

    Returns:
        Mapping from each cell (row, col) to a tuple of valid neighboring
        coordinates (nr, nc) under 8-connectivity. Edge and corner cells get
        fewer neighbors; there is no wraparound.

    Raises:
        ValueError: If height or width is non-positive.
    """
    if height <= 0 or width <= 0:
        raise ValueError("height and width must be positive.")

    key = (height, width)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Coordinate, Tuple[Coordinate, ...]] = {}
    for row in range(height):
        for col in range(width):
            nbrs: List[Coordinate] = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = row + dr, col + dc
                    if 0 <= nr < height and 0 <= nc < width:
                        nbrs.append((nr, nc))
            neighborhoods[(row, col)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods

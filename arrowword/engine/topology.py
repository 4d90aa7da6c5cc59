"""Row-major cell addressing and arrow connectivity helpers."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Set, Tuple

from ..core.constants import Direction
from ..core.models import Grid


def _check_index(grid: Grid, index: int) -> None:
    if not 0 <= index < grid.size:
        raise IndexError(f"Cell index {index} outside {grid.rows}x{grid.cols} grid")


def row_col(grid: Grid, index: int) -> Tuple[int, int]:
    _check_index(grid, index)
    return divmod(index, grid.cols)


def index_of(grid: Grid, row: int, col: int) -> int:
    if not grid.bounds.contains(row, col):
        raise IndexError(f"Cell ({row},{col}) outside {grid.rows}x{grid.cols} grid")
    return row * grid.cols + col


def neighbors_of(grid: Grid, index: int) -> Dict[str, int]:
    """Return the right and down neighbours of ``index`` that exist."""

    row, col = row_col(grid, index)
    neighbors: Dict[str, int] = {}
    if col < grid.cols - 1:
        neighbors[Direction.RIGHT.value] = index + 1
    if row < grid.rows - 1:
        neighbors[Direction.DOWN.value] = index + grid.cols
    return neighbors


def arrow_endpoints(grid: Grid) -> Set[int]:
    endpoints: Set[int] = set()
    for arrow in grid.arrows:
        endpoints.add(arrow.source)
        endpoints.add(arrow.target)
    return endpoints


def is_used(grid: Grid, solutions: Mapping[int, str], index: int) -> bool:
    """A cell takes part in the puzzle if fixed, solved, or arrow-linked."""

    _check_index(grid, index)
    if grid.cells[index].is_fixed or index in solutions:
        return True
    return any(index in (arrow.source, arrow.target) for arrow in grid.arrows)


def used_indices(grid: Grid, solutions: Mapping[int, str]) -> Set[int]:
    used = {i for i, cell in enumerate(grid.cells) if cell.is_fixed}
    used.update(i for i in solutions if 0 <= i < grid.size)
    used.update(i for i in arrow_endpoints(grid) if 0 <= i < grid.size)
    return used


def first_empty_cell(grid: Grid) -> Optional[int]:
    """First non-fixed cell in row-major order, used as the initial focus."""

    for index, cell in enumerate(grid.cells):
        if not cell.is_fixed:
            return index
    return None

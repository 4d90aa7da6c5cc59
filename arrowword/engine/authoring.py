"""Puzzle editor keeping grid topology consistent while a puzzle is authored.

Arrows are never stored in the draft. Each cell carries ``right`` and
``down`` flags and the arrow list is derived from them on export, so the
two representations cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from ..core.constants import MAX_GRID_SIZE, MIN_GRID_SIZE, Direction
from ..core.exceptions import AuthoringError
from ..core.models import Arrow, Cell, Grid, Puzzle
from ..utils.logger import get_logger
from . import topology
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


def clamp_size(value: int) -> int:
    return max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(value)))


@dataclass
class EditorCell:
    """Mutable authoring view of a tile."""

    fixed: Optional[str] = None
    hint: Optional[str] = None
    solution: Optional[str] = None
    right: bool = False
    down: bool = False


def derive_arrows(rows: int, cols: int, cells: List[EditorCell]) -> List[Arrow]:
    """Arrows implied by the per-cell flags, dropping those that leave the grid."""

    arrows: List[Arrow] = []
    for index, cell in enumerate(cells):
        row, col = divmod(index, cols)
        if cell.right and col < cols - 1:
            arrows.append(Arrow(source=index, target=index + 1, direction=Direction.RIGHT))
        if cell.down and row < rows - 1:
            arrows.append(Arrow(source=index, target=index + cols, direction=Direction.DOWN))
    return arrows


class PuzzleEditor:
    """Editable puzzle draft with resize / insert / trim / export."""

    def __init__(
        self,
        rows: int = 5,
        cols: int = 5,
        date: str = "",
        title: Optional[str] = None,
        author: Optional[str] = None,
        validator: Optional[PuzzleValidator] = None,
    ) -> None:
        self.rows = clamp_size(rows)
        self.cols = clamp_size(cols)
        self.date = date
        self.title = title
        self.author = author
        self.cells: List[EditorCell] = [EditorCell() for _ in range(self.rows * self.cols)]
        self.validator = validator or PuzzleValidator()

    @classmethod
    def from_puzzle(cls, puzzle: Puzzle) -> "PuzzleEditor":
        grid = puzzle.grid
        editor = cls(
            rows=grid.rows,
            cols=grid.cols,
            date=puzzle.date,
            title=puzzle.title,
            author=puzzle.author,
        )
        editor.rows, editor.cols = grid.rows, grid.cols
        editor.cells = [
            EditorCell(fixed=cell.fixed, hint=cell.hint, solution=puzzle.solution_for(index))
            for index, cell in enumerate(grid.cells)
        ]
        for arrow in grid.arrows:
            if 0 <= arrow.source < len(editor.cells):
                if arrow.direction == Direction.RIGHT:
                    editor.cells[arrow.source].right = True
                else:
                    editor.cells[arrow.source].down = True
        return editor

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> EditorCell:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row},{col}) outside {self.rows}x{self.cols} draft")
        return self.cells[row * self.cols + col]

    def set_fixed(self, row: int, col: int, word: Optional[str]) -> None:
        cell = self.cell(row, col)
        cell.fixed = word or None
        if cell.fixed:
            cell.solution = None

    def set_solution(self, row: int, col: int, word: Optional[str]) -> None:
        cell = self.cell(row, col)
        cell.solution = word or None
        if cell.solution:
            cell.fixed = None

    def link(self, row: int, col: int, direction: Direction, enabled: bool = True) -> None:
        cell = self.cell(row, col)
        if direction == Direction.RIGHT:
            cell.right = enabled
        else:
            cell.down = enabled

    # ------------------------------------------------------------------
    # Shape edits
    # ------------------------------------------------------------------
    def _rebuild(self, rows: int, cols: int, row_offset: int = 0, col_offset: int = 0) -> None:
        """Lay the current cells into a ``rows x cols`` draft.

        Old cell ``(r, c)`` lands on ``(r + row_offset, c + col_offset)``;
        anything falling outside the new bounds is dropped.
        """

        cells = [EditorCell() for _ in range(rows * cols)]
        for index, cell in enumerate(self.cells):
            r, c = divmod(index, self.cols)
            nr, nc = r + row_offset, c + col_offset
            if 0 <= nr < rows and 0 <= nc < cols:
                cells[nr * cols + nc] = replace(cell)
        self.rows, self.cols, self.cells = rows, cols, cells

    def resize(self, rows: int, cols: int) -> None:
        rows, cols = clamp_size(rows), clamp_size(cols)
        LOGGER.debug("Resizing draft %sx%s -> %sx%s", self.rows, self.cols, rows, cols)
        self._rebuild(rows, cols)

    def insert_row(self, at_top: bool = True) -> bool:
        if self.rows >= MAX_GRID_SIZE:
            return False
        self._rebuild(self.rows + 1, self.cols, row_offset=1 if at_top else 0)
        return True

    def insert_column(self, at_left: bool = True) -> bool:
        if self.cols >= MAX_GRID_SIZE:
            return False
        self._rebuild(self.rows, self.cols + 1, col_offset=1 if at_left else 0)
        return True

    def trim(self) -> bool:
        """Crop blank border rows and columns around the used cells."""

        grid = self.to_grid()
        used = topology.used_indices(grid, self.solutions())
        if not used:
            return False
        coords = [divmod(index, self.cols) for index in used]
        top = min(r for r, _ in coords)
        bottom = max(r for r, _ in coords)
        left = min(c for _, c in coords)
        right = max(c for _, c in coords)
        rows, cols = bottom - top + 1, right - left + 1
        if (rows, cols) == (self.rows, self.cols):
            return False
        LOGGER.info("Trimming draft %sx%s -> %sx%s", self.rows, self.cols, rows, cols)
        self._rebuild(rows, cols, row_offset=-top, col_offset=-left)
        return True

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def solutions(self) -> Dict[int, str]:
        return {
            index: cell.solution
            for index, cell in enumerate(self.cells)
            if cell.solution and not cell.fixed
        }

    def to_grid(self) -> Grid:
        return Grid(
            rows=self.rows,
            cols=self.cols,
            cells=tuple(Cell(fixed=c.fixed or None, hint=c.hint or None) for c in self.cells),
            arrows=tuple(derive_arrows(self.rows, self.cols, self.cells)),
        )

    def build(self) -> Puzzle:
        """Assemble the draft without validating it."""

        return Puzzle(
            id=self.date,
            date=self.date,
            grid=self.to_grid(),
            solutions=self.solutions(),
            title=self.title or None,
            author=self.author or None,
        )

    def export(self) -> Puzzle:
        puzzle = self.build()
        result = self.validator.validate(puzzle)
        if not result.ok:
            raise AuthoringError(
                f"Refusing to export {puzzle.id or '<undated>'}: {len(result.messages)} problem(s)",
                result.messages,
            )
        LOGGER.info("Exported puzzle %s with %d arrows", puzzle.id, len(puzzle.grid.arrows))
        return puzzle

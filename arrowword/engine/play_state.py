"""Per-cell entry / reveal / lock / incorrect lifecycle.

A :class:`PlayState` belongs to exactly one loaded puzzle. Only three
operations mutate it during play (``set_entry``, ``reveal_letter`` and
submission) plus focus movement; ``reset`` returns it to the state of a
freshly loaded puzzle.

The revealed prefix of a cell is never editable by the player: an input
widget displays ``reveal + entry`` and any edit shorter than the reveal is
rejected. Revealing a further letter discards whatever the player had
typed past the old boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from ..core.constants import CellStatus, NavAction
from ..core.models import Grid, Puzzle
from ..utils.logger import get_logger
from . import topology


LOGGER = get_logger(__name__)


@dataclass
class PlayState:
    entries: Dict[int, str] = field(default_factory=dict)
    reveals: Dict[int, str] = field(default_factory=dict)
    locked_cells: Set[int] = field(default_factory=set)
    incorrect_cells: Set[int] = field(default_factory=set)
    focused_cell: Optional[int] = None
    attempts: int = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def entry(self, index: int) -> str:
        return self.entries.get(index, "")

    def reveal(self, index: int) -> str:
        return self.reveals.get(index, "")

    def display_value(self, index: int) -> str:
        return self.reveal(index) + self.entry(index)

    def is_locked(self, index: int) -> bool:
        return index in self.locked_cells

    def cell_status(self, index: int) -> CellStatus:
        if index in self.locked_cells:
            return CellStatus.LOCKED
        if index in self.incorrect_cells:
            return CellStatus.INCORRECT
        if self.display_value(index):
            return CellStatus.TYPING
        return CellStatus.EMPTY

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def set_entry(self, index: int, raw_value: str) -> bool:
        """Store the player's text for ``index``; return False when ignored."""

        if index in self.locked_cells:
            return False
        value = (raw_value or "").lower()
        revealed = self.reveal(index)
        if len(value) < len(revealed):
            LOGGER.debug("Rejected edit of cell %s below revealed prefix %r", index, revealed)
            return False
        self.entries[index] = value[len(revealed):]
        self.incorrect_cells.discard(index)
        return True

    def reveal_letter(self, puzzle: Optional[Puzzle]) -> bool:
        """Reveal one more letter of the focused cell's solution."""

        index = self.focused_cell
        if puzzle is None or index is None:
            return False
        if puzzle.grid.cell(index).is_fixed or index in self.locked_cells:
            return False
        solution = puzzle.solution_for(index)
        if not solution:
            return False
        current = self.reveal(index)
        length = min(len(current) + 1, len(solution))
        if length == len(current):
            return False
        self.reveals[index] = solution[:length].lower()
        self.entries[index] = ""
        self.incorrect_cells.discard(index)
        LOGGER.debug("Revealed %d/%d letters of cell %s", length, len(solution), index)
        return True

    def reset(self) -> None:
        self.entries = {}
        self.reveals = {}
        self.locked_cells = set()
        self.incorrect_cells = set()
        self.focused_cell = None
        self.attempts = 0

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------
    def focus(self, grid: Grid, index: Optional[int]) -> None:
        if index is not None:
            topology.row_col(grid, index)
        self.focused_cell = index

    def is_editable(self, puzzle: Puzzle, index: int) -> bool:
        return index in puzzle.solutions and index not in self.locked_cells

    def first_editable_cell(self, puzzle: Puzzle) -> Optional[int]:
        for index in range(puzzle.grid.size):
            if self.is_editable(puzzle, index):
                return index
        return None

    def move_focus(self, puzzle: Puzzle, action: NavAction) -> Optional[int]:
        """Move the cursor one step; grid moves stop at the edges."""

        grid = puzzle.grid
        current = self.focused_cell
        if current is None:
            self.focused_cell = self.first_editable_cell(puzzle)
            return self.focused_cell

        if action in (NavAction.NEXT, NavAction.PREV):
            step = 1 if action == NavAction.NEXT else -1
            for offset in range(1, grid.size + 1):
                candidate = (current + step * offset) % grid.size
                if self.is_editable(puzzle, candidate):
                    self.focused_cell = candidate
                    break
            return self.focused_cell

        row, col = topology.row_col(grid, current)
        dr, dc = {
            NavAction.LEFT: (0, -1),
            NavAction.RIGHT: (0, 1),
            NavAction.UP: (-1, 0),
            NavAction.DOWN: (1, 0),
        }[action]
        if grid.bounds.contains(row + dr, col + dc):
            self.focused_cell = topology.index_of(grid, row + dr, col + dc)
        return self.focused_cell

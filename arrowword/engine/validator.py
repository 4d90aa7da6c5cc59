"""Deterministic integrity checks for authored puzzles."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List

from ..core.constants import MAX_GRID_SIZE, MIN_GRID_SIZE, Direction
from ..core.exceptions import ValidationError
from ..core.models import Puzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs every check and collects the failures.

    Checks are independent so one report lists all problems at once. The
    play engine never calls this; it is the gate in front of export.
    """

    def validate(self, puzzle: Puzzle) -> ValidationResult:
        checks: List[Callable[[Puzzle], None]] = [
            self._check_dimensions,
            self._check_date,
            self._check_arrows,
            self._check_solutions,
            self._check_reachability,
        ]
        messages: List[str] = []
        for check in checks:
            try:
                check(puzzle)
            except ValidationError as exc:
                messages.append(str(exc))
        if messages:
            LOGGER.error("Validation of %s failed: %s", puzzle.id, "; ".join(messages))
        return ValidationResult(ok=not messages, messages=messages)

    def _check_dimensions(self, puzzle: Puzzle) -> None:
        grid = puzzle.grid
        for name, value in (("rows", grid.rows), ("cols", grid.cols)):
            if not MIN_GRID_SIZE <= value <= MAX_GRID_SIZE:
                raise ValidationError(
                    f"Grid {name}={value} outside [{MIN_GRID_SIZE},{MAX_GRID_SIZE}]"
                )
        if len(grid.cells) != grid.size:
            raise ValidationError(
                f"Grid has {len(grid.cells)} cells, expected {grid.rows}x{grid.cols}"
            )

    def _check_date(self, puzzle: Puzzle) -> None:
        if not DATE_RE.match(puzzle.date or ""):
            raise ValidationError(f"Date {puzzle.date!r} is not YYYY-MM-DD")

    def _check_arrows(self, puzzle: Puzzle) -> None:
        grid = puzzle.grid
        for arrow in grid.arrows:
            size = len(grid.cells)
            if not (0 <= arrow.source < size and 0 <= arrow.target < size):
                raise ValidationError(f"Arrow {arrow.source}->{arrow.target} outside grid")
            row, col = divmod(arrow.source, grid.cols)
            if arrow.direction == Direction.RIGHT:
                consistent = col < grid.cols - 1 and arrow.target == arrow.source + 1
            else:
                consistent = row < grid.rows - 1 and arrow.target == arrow.source + grid.cols
            if not consistent:
                raise ValidationError(
                    f"Arrow {arrow.source}->{arrow.target} does not point {arrow.direction.value}"
                )
            if grid.cells[arrow.target].is_fixed:
                raise ValidationError(
                    f"Arrow {arrow.source}->{arrow.target} points into fixed cell"
                )
            for endpoint in (arrow.source, arrow.target):
                if not grid.cells[endpoint].is_fixed and endpoint not in puzzle.solutions:
                    raise ValidationError(
                        f"Arrow {arrow.source}->{arrow.target} links cell {endpoint} without a solution"
                    )

    def _check_solutions(self, puzzle: Puzzle) -> None:
        grid = puzzle.grid
        for index, word in sorted(puzzle.solutions.items()):
            if not 0 <= index < len(grid.cells):
                raise ValidationError(f"Solution key {index} outside grid")
            if grid.cells[index].is_fixed:
                raise ValidationError(f"Solution key {index} references a fixed cell")
            if not word.strip():
                raise ValidationError(f"Solution for cell {index} is empty")

    def _check_reachability(self, puzzle: Puzzle) -> None:
        linked = set()
        for arrow in puzzle.grid.arrows:
            linked.add(arrow.source)
            linked.add(arrow.target)
        orphans = sorted(index for index in puzzle.solutions if index not in linked)
        if orphans:
            raise ValidationError(f"Solution cells without arrows: {orphans}")

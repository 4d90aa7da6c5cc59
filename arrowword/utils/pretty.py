"""Pretty-print helpers for arrow-word boards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, List, Optional

from ..core.constants import CellStatus, Direction

if TYPE_CHECKING:
    from ..core.models import Puzzle
    from ..engine.play_state import PlayState
    from ..engine.session import ScoreSummary


UNUSED = "."
ARROW_MARKS = {Direction.RIGHT: ">", Direction.DOWN: "v"}


def _arrow_marks(puzzle: Puzzle) -> Dict[int, str]:
    marks: Dict[int, str] = {}
    for arrow in puzzle.grid.arrows:
        marks[arrow.source] = marks.get(arrow.source, "") + ARROW_MARKS[arrow.direction]
    return marks


def cell_symbol(
    puzzle: Puzzle,
    index: int,
    state: Optional[PlayState] = None,
    show_solutions: bool = False,
) -> str:
    cell = puzzle.grid.cells[index]
    if cell.is_fixed:
        return (cell.fixed or "").upper()
    solution = puzzle.solution_for(index)
    if solution is None:
        return UNUSED
    if show_solutions:
        return solution
    if state is None:
        return "_" * len(solution)
    value = state.display_value(index)
    status = state.cell_status(index)
    if status == CellStatus.LOCKED:
        return value
    if status == CellStatus.INCORRECT:
        return "!" + "_" * len(solution)
    return value + "_" * max(0, len(solution) - len(value))


def format_board(
    puzzle: Puzzle,
    state: Optional[PlayState] = None,
    show_solutions: bool = False,
) -> str:
    grid = puzzle.grid
    marks = _arrow_marks(puzzle)
    symbols = [
        cell_symbol(puzzle, index, state, show_solutions) + marks.get(index, "")
        for index in range(grid.size)
    ]
    width = max([len(symbol) for symbol in symbols] + [2])
    header_cells = [f"{c:>{width}}" for c in range(grid.cols)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * ((width + 1) * grid.cols - 1))
    for r in range(grid.rows):
        row_render = " ".join(
            f"{symbols[r * grid.cols + c]:>{width}}" for c in range(grid.cols)
        )
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_board(
    puzzle: Puzzle,
    state: Optional[PlayState] = None,
    *,
    show_solutions: bool = False,
    label: str | None = None,
    stream=None,
) -> None:
    """Print the board in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_board(puzzle, state, show_solutions), file=stream)


def format_score(summary: ScoreSummary) -> str:
    lines: List[str] = []
    for submit_round in summary.rounds:
        lines.append(
            f"  Submit {submit_round.submits:>2} @ {submit_round.time:6.1f}s: "
            + ", ".join(submit_round.words)
        )
    lines.append(f"  Score: {summary.total:g}")
    if summary.one_submit_clear:
        lines.append("  One-submit clear!")
    return "\n".join(lines)

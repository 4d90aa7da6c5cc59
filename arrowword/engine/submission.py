"""Batch answer checking against a puzzle's answer key."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.models import Puzzle
from ..utils.logger import get_logger
from .play_state import PlayState


LOGGER = get_logger(__name__)


@dataclass
class SubmitResult:
    all_correct: bool
    newly_locked: List[int] = field(default_factory=list)
    newly_incorrect: List[int] = field(default_factory=list)


def is_solved(puzzle: Optional[Puzzle], state: PlayState) -> bool:
    """True once every solution cell is locked. Never mutates ``state``."""

    if puzzle is None:
        return False
    return state.locked_cells.issuperset(puzzle.solutions)


def submit(puzzle: Optional[Puzzle], state: PlayState) -> SubmitResult:
    """Check every unlocked solution cell and lock the correct ones.

    Wrong cells with player input are cleared and flagged incorrect; cells
    the player never touched are left alone. The attempt counter goes up on
    every call, including calls on an already solved puzzle.
    """

    if puzzle is None:
        return SubmitResult(all_correct=False)

    state.attempts += 1
    result = SubmitResult(all_correct=False)
    for index, word in sorted(puzzle.solutions.items()):
        if index in state.locked_cells:
            continue
        if state.display_value(index) == word:
            state.locked_cells.add(index)
            state.incorrect_cells.discard(index)
            result.newly_locked.append(index)
        elif state.entry(index):
            state.entries[index] = ""
            state.incorrect_cells.add(index)
            result.newly_incorrect.append(index)

    result.all_correct = is_solved(puzzle, state)
    if result.all_correct:
        state.focused_cell = None
    elif state.focused_cell is None or not state.is_editable(puzzle, state.focused_cell):
        state.focused_cell = state.first_editable_cell(puzzle)

    LOGGER.info(
        "Submit #%d: %d locked, %d incorrect, solved=%s",
        state.attempts,
        len(result.newly_locked),
        len(result.newly_incorrect),
        result.all_correct,
    )
    return result

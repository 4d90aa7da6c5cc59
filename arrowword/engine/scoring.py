"""Score derivation from per-tile completion records."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, MutableMapping

from ..core.models import Puzzle, TileCompletion
from . import topology


@dataclass
class SubmitRound:
    """Cells that locked on the same submit."""

    submits: int
    time: float
    words: List[str] = field(default_factory=list)


def record_completions(
    completions: MutableMapping[int, TileCompletion],
    newly_locked: Iterable[int],
    elapsed_seconds: float,
    attempts: int,
) -> None:
    """Attribute the current time and submit count to freshly locked cells.

    The first record for a cell wins and is never overwritten.
    """

    for index in newly_locked:
        if index not in completions:
            completions[index] = TileCompletion(time=elapsed_seconds, submits=attempts)


def scored_cells(puzzle: Puzzle) -> List[int]:
    grid = puzzle.grid
    return sorted(
        index
        for index in topology.used_indices(grid, puzzle.solutions)
        if not grid.cells[index].is_fixed
    )


def cell_score(completion: TileCompletion) -> float:
    return completion.time * completion.submits


def total_score(puzzle: Puzzle, completions: Dict[int, TileCompletion]) -> float:
    return sum(
        cell_score(completions[index])
        for index in scored_cells(puzzle)
        if index in completions
    )


def is_one_submit_clear(puzzle: Puzzle, completions: Dict[int, TileCompletion]) -> bool:
    cells = scored_cells(puzzle)
    if not cells:
        return False
    return all(index in completions and completions[index].submits == 1 for index in cells)


def score_breakdown(puzzle: Puzzle, completions: Dict[int, TileCompletion]) -> List[SubmitRound]:
    rounds: Dict[int, SubmitRound] = {}
    words: Dict[int, List[str]] = defaultdict(list)
    for index in scored_cells(puzzle):
        completion = completions.get(index)
        if completion is None:
            continue
        current = rounds.get(completion.submits)
        if current is None:
            rounds[completion.submits] = SubmitRound(submits=completion.submits, time=completion.time)
        else:
            current.time = max(current.time, completion.time)
        words[completion.submits].append(puzzle.solution_for(index) or "")

    for submits, submit_round in rounds.items():
        submit_round.words = sorted(words[submits])
    return sorted(rounds.values(), key=lambda item: (item.time, item.submits))

"""Data models describing one arrow-word puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .constants import Bounds, Direction


@dataclass(frozen=True)
class Cell:
    """A grid tile, optionally pre-filled with a clue word."""

    fixed: Optional[str] = None
    hint: Optional[str] = None

    @property
    def is_fixed(self) -> bool:
        return bool(self.fixed)


@dataclass(frozen=True)
class Arrow:
    """Reading-order link between two orthogonally adjacent cells."""

    source: int
    target: int
    direction: Direction


@dataclass(frozen=True)
class Grid:
    """Row-major rectangle of cells plus the arrows linking them."""

    rows: int
    cols: int
    cells: Tuple[Cell, ...]
    arrows: Tuple[Arrow, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(self.cells))
        object.__setattr__(self, "arrows", tuple(self.arrows))

    @property
    def bounds(self) -> Bounds:
        return Bounds(rows=self.rows, cols=self.cols)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def cell(self, index: int) -> Cell:
        if not 0 <= index < len(self.cells):
            raise IndexError(f"Cell index {index} outside grid of {len(self.cells)} cells")
        return self.cells[index]


@dataclass(frozen=True)
class Puzzle:
    """Immutable definition of one daily puzzle.

    ``solutions`` maps a non-fixed cell index to its hidden word. Words are
    stored lowercase so that every comparison against player input is
    case-insensitive by construction.
    """

    id: str
    date: str
    grid: Grid
    solutions: Dict[int, str] = field(default_factory=dict)
    title: Optional[str] = None
    author: Optional[str] = None

    def __post_init__(self) -> None:
        normalized = {int(index): word.lower() for index, word in self.solutions.items()}
        object.__setattr__(self, "solutions", normalized)

    def solution_for(self, index: int) -> Optional[str]:
        return self.solutions.get(index)

    def summary(self) -> "PuzzleSummary":
        return PuzzleSummary(id=self.id, date=self.date, title=self.title, author=self.author)


@dataclass(frozen=True)
class PuzzleSummary:
    """One entry of the puzzle index."""

    id: str
    date: str
    title: Optional[str] = None
    author: Optional[str] = None


@dataclass(frozen=True)
class TileCompletion:
    """When (seconds into the session) and on which submit a cell locked."""

    time: float
    submits: int

    @property
    def score(self) -> float:
        return self.time * self.submits

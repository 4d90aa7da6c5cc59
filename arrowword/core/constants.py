"""Shared constants and enumerations for the arrow-word engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 12

DEFAULT_NAMESPACE = "arrowword"


class Direction(str, Enum):
    """Reading directions an arrow can point in."""

    RIGHT = "right"
    DOWN = "down"


class CellStatus(str, Enum):
    """Lifecycle of a solution cell during play."""

    EMPTY = "EMPTY"
    TYPING = "TYPING"
    LOCKED = "LOCKED"
    INCORRECT = "INCORRECT"


class NavAction(str, Enum):
    """Focus movements a player can request."""

    NEXT = "NEXT"
    PREV = "PREV"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    UP = "UP"
    DOWN = "DOWN"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    @property
    def size(self) -> int:
        return self.rows * self.cols

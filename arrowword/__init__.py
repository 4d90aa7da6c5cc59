"""Daily arrow-word puzzle engine.

This package exposes the public API surface via:

- ``arrowword.engine.session.GameSession``: plays one puzzle (entries,
  reveals, submissions, scoring, persistence records).
- ``arrowword.engine.authoring.PuzzleEditor``: builds and exports puzzles.
- ``arrowword.io.puzzle_client.PuzzleClient``: fetches puzzles and the index.
"""

from .core.models import Arrow, Cell, Grid, Puzzle, PuzzleSummary
from .engine.authoring import PuzzleEditor
from .engine.session import GameSession

__all__ = [
    "Arrow",
    "Cell",
    "Grid",
    "Puzzle",
    "PuzzleSummary",
    "GameSession",
    "PuzzleEditor",
]

__version__ = "0.1.0"

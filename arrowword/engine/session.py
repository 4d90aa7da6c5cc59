"""One play session: the loaded puzzle, its play state, clock and scores."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..core.constants import NavAction
from ..core.models import Puzzle, TileCompletion
from ..utils.logger import get_logger
from . import scoring, topology
from .play_state import PlayState
from .submission import SubmitResult, is_solved, submit


LOGGER = get_logger(__name__)


class Stopwatch:
    """Wall-clock timer started by the player's first interaction."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None
        self._offset = 0.0

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self.running:
            self._stopped_at = self._clock()

    def elapsed(self) -> float:
        if self._started_at is None:
            return self._offset
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return self._offset + (end - self._started_at)

    def resume_from(self, seconds: float) -> None:
        """Continue counting from a previously persisted elapsed time."""

        self._offset = seconds
        self._started_at = None
        self._stopped_at = None


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass
class ScoreSummary:
    total: float
    one_submit_clear: bool
    rounds: List[scoring.SubmitRound]


class GameSession:
    """Owns the current puzzle and everything derived from playing it."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.puzzle: Optional[Puzzle] = None
        self.state = PlayState()
        self.stopwatch = Stopwatch(clock)
        self.tile_completions: Dict[int, TileCompletion] = {}
        self.completion_time: Optional[float] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, puzzle: Puzzle) -> None:
        """Swap in ``puzzle`` and discard all state of the previous one."""

        self.puzzle = puzzle
        self._fresh_state()
        LOGGER.info("Loaded puzzle %s (%sx%s)", puzzle.id, puzzle.grid.rows, puzzle.grid.cols)

    def reset(self) -> None:
        if self.puzzle is None:
            return
        self._fresh_state()
        LOGGER.info("Reset puzzle %s", self.puzzle.id)

    def _fresh_state(self) -> None:
        self.state = PlayState()
        if self.puzzle is not None:
            first = topology.first_empty_cell(self.puzzle.grid)
            self.state.focused_cell = first if first is not None else 0
        self.stopwatch = Stopwatch(self._clock)
        self.tile_completions = {}
        self.completion_time = None

    # ------------------------------------------------------------------
    # Player input
    # ------------------------------------------------------------------
    def set_entry(self, index: int, raw_value: str) -> bool:
        if self.puzzle is None:
            return False
        topology.row_col(self.puzzle.grid, index)
        if index not in self.puzzle.solutions:
            return False
        self.stopwatch.start()
        return self.state.set_entry(index, raw_value)

    def reveal_letter(self) -> bool:
        if self.puzzle is None:
            return False
        self.stopwatch.start()
        return self.state.reveal_letter(self.puzzle)

    def focus(self, index: Optional[int]) -> None:
        if self.puzzle is not None:
            self.state.focus(self.puzzle.grid, index)

    def move_focus(self, action: NavAction) -> Optional[int]:
        if self.puzzle is None:
            return None
        return self.state.move_focus(self.puzzle, action)

    def submit(self) -> SubmitResult:
        if self.puzzle is None:
            return SubmitResult(all_correct=False)
        self.stopwatch.start()
        result = submit(self.puzzle, self.state)
        scoring.record_completions(
            self.tile_completions,
            result.newly_locked,
            self.stopwatch.elapsed(),
            self.state.attempts,
        )
        if result.all_correct and self.completion_time is None:
            self.stopwatch.stop()
            self.completion_time = self.stopwatch.elapsed()
            LOGGER.info("Puzzle %s solved in %.1fs", self.puzzle.id, self.completion_time)
        return result

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def is_solved(self) -> bool:
        return is_solved(self.puzzle, self.state)

    def display_value(self, index: int) -> str:
        return self.state.display_value(index)

    def score(self) -> ScoreSummary:
        if self.puzzle is None:
            return ScoreSummary(total=0.0, one_submit_clear=False, rounds=[])
        return ScoreSummary(
            total=scoring.total_score(self.puzzle, self.tile_completions),
            one_submit_clear=scoring.is_one_submit_clear(self.puzzle, self.tile_completions),
            rounds=scoring.score_breakdown(self.puzzle, self.tile_completions),
        )

    # ------------------------------------------------------------------
    # Persistence records
    # ------------------------------------------------------------------
    def to_record(self) -> Dict[str, Any]:
        if self.puzzle is None:
            raise ValueError("No puzzle loaded")
        state = self.state
        record: Dict[str, Any] = {
            "puzzleId": self.puzzle.id,
            "entries": {str(k): v for k, v in state.entries.items()},
            "reveals": {str(k): v for k, v in state.reveals.items()},
            "focusedCell": state.focused_cell,
            "lockedCells": sorted(state.locked_cells),
            "incorrectCells": sorted(state.incorrect_cells),
            "solved": self.is_solved(),
            "submitCount": state.attempts,
            "elapsed": self.stopwatch.elapsed(),
            "tileCompletions": {
                str(k): {"time": c.time, "submits": c.submits}
                for k, c in sorted(self.tile_completions.items())
            },
        }
        if self.completion_time is not None:
            record["completionTime"] = self.completion_time
        return record

    def restore(self, record: Optional[Dict[str, Any]]) -> bool:
        """Apply a persisted record; stale or corrupt records are ignored."""

        if self.puzzle is None or not isinstance(record, dict):
            return False
        if record.get("puzzleId") != self.puzzle.id:
            LOGGER.warning(
                "Ignoring session record for %r while %r is loaded",
                record.get("puzzleId"),
                self.puzzle.id,
            )
            return False
        try:
            state = PlayState(
                entries={int(k): str(v) for k, v in (record.get("entries") or {}).items()},
                reveals={int(k): str(v) for k, v in (record.get("reveals") or {}).items()},
                locked_cells={int(i) for i in record.get("lockedCells") or []},
                incorrect_cells={int(i) for i in record.get("incorrectCells") or []},
                focused_cell=_optional_int(record.get("focusedCell")),
                attempts=int(record.get("submitCount") or 0),
            )
            completions = {
                int(k): TileCompletion(time=float(v["time"]), submits=int(v["submits"]))
                for k, v in (record.get("tileCompletions") or {}).items()
            }
            completion_time = record.get("completionTime")
            elapsed = float(record.get("elapsed") or completion_time or 0.0)
        except (TypeError, ValueError, KeyError, AttributeError) as exc:
            LOGGER.warning("Ignoring corrupt session record for %s: %s", self.puzzle.id, exc)
            return False

        if state.focused_cell is not None and not 0 <= state.focused_cell < self.puzzle.grid.size:
            state.focused_cell = None
        solution_cells = set(self.puzzle.solutions)
        state.entries = {k: v for k, v in state.entries.items() if k in solution_cells}
        state.reveals = {k: v for k, v in state.reveals.items() if k in solution_cells}
        state.locked_cells &= solution_cells
        state.incorrect_cells &= solution_cells
        completions = {k: v for k, v in completions.items() if k in solution_cells}
        self.state = state
        self.tile_completions = completions
        self.completion_time = float(completion_time) if completion_time is not None else None
        self.stopwatch = Stopwatch(self._clock)
        self.stopwatch.resume_from(elapsed)
        LOGGER.info("Restored session for %s (%d submits)", self.puzzle.id, state.attempts)
        return True

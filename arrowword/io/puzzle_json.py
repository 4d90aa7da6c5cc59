"""Puzzle JSON documents <-> model objects."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..core.constants import Direction
from ..core.exceptions import PuzzleFormatError
from ..core.models import Arrow, Cell, Grid, Puzzle, PuzzleSummary


def puzzle_from_dict(data: Dict[str, Any]) -> Puzzle:
    """Decode a puzzle document; raises :class:`PuzzleFormatError`."""

    if not isinstance(data, dict):
        raise PuzzleFormatError("Puzzle document must be a JSON object")
    try:
        grid_data = data["grid"]
        rows = int(grid_data["rows"])
        cols = int(grid_data["cols"])
        cells = [
            Cell(fixed=cell.get("fixed") or None, hint=cell.get("hint") or None)
            for cell in grid_data.get("cells") or []
        ]
        arrows = [
            Arrow(
                source=int(arrow["from"]),
                target=int(arrow["to"]),
                direction=Direction(arrow["dir"]),
            )
            for arrow in grid_data.get("arrows") or []
        ]
        solutions = {int(k): str(v) for k, v in (data.get("solutions") or {}).items()}
        puzzle = Puzzle(
            id=str(data["id"]),
            date=str(data["date"]),
            title=data.get("title"),
            author=data.get("author"),
            grid=Grid(rows=rows, cols=cols, cells=tuple(cells), arrows=tuple(arrows)),
            solutions=solutions,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise PuzzleFormatError(f"Malformed puzzle document: {exc}") from exc

    if rows <= 0 or cols <= 0:
        raise PuzzleFormatError(f"Grid dimensions must be positive, got {rows}x{cols}")
    if len(cells) != rows * cols:
        raise PuzzleFormatError(
            f"Grid declares {rows}x{cols} but lists {len(cells)} cells"
        )
    return puzzle


def puzzle_to_dict(puzzle: Puzzle) -> Dict[str, Any]:
    grid = puzzle.grid
    cells: List[Dict[str, str]] = []
    for cell in grid.cells:
        payload: Dict[str, str] = {}
        if cell.fixed:
            payload["fixed"] = cell.fixed
        if cell.hint:
            payload["hint"] = cell.hint
        cells.append(payload)

    doc: Dict[str, Any] = {"id": puzzle.id, "date": puzzle.date}
    if puzzle.title:
        doc["title"] = puzzle.title
    if puzzle.author:
        doc["author"] = puzzle.author
    doc["grid"] = {
        "rows": grid.rows,
        "cols": grid.cols,
        "cells": cells,
        "arrows": [
            {"from": arrow.source, "to": arrow.target, "dir": arrow.direction.value}
            for arrow in grid.arrows
        ],
    }
    doc["solutions"] = {str(k): v for k, v in sorted(puzzle.solutions.items())}
    return doc


def loads_puzzle(text: str) -> Puzzle:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PuzzleFormatError(f"Puzzle is not valid JSON: {exc}") from exc
    return puzzle_from_dict(data)


def dumps_puzzle(puzzle: Puzzle) -> str:
    return json.dumps(puzzle_to_dict(puzzle), ensure_ascii=False, indent=2)


def summary_from_dict(data: Dict[str, Any], fallback_id: str = "") -> PuzzleSummary:
    if not isinstance(data, dict):
        raise PuzzleFormatError("Puzzle summary must be a JSON object")
    puzzle_id = str(data.get("id") or fallback_id)
    date = str(data.get("date") or fallback_id)
    if not puzzle_id:
        raise PuzzleFormatError("Puzzle summary has no id")
    return PuzzleSummary(
        id=puzzle_id,
        date=date,
        title=data.get("title"),
        author=data.get("author"),
    )


def summary_to_dict(summary: PuzzleSummary) -> Dict[str, Any]:
    doc: Dict[str, Any] = {"id": summary.id, "date": summary.date}
    if summary.title:
        doc["title"] = summary.title
    if summary.author:
        doc["author"] = summary.author
    return doc


def sort_index(summaries: List[PuzzleSummary]) -> List[PuzzleSummary]:
    """Newest first."""

    return sorted(summaries, key=lambda item: item.date, reverse=True)

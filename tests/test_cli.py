import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import main
from arrowword.core.exceptions import PuzzleError
from arrowword.engine.session import GameSession
from arrowword.io.puzzle_json import puzzle_from_dict
from arrowword.io.session_store import SessionStore
from arrowword.utils.pretty import format_board


SAMPLE = {
    "id": "draft",
    "date": "2024-05-01",
    "grid": {
        "rows": 3,
        "cols": 4,
        "cells": [{}, {}, {}, {}, {"fixed": "Arc"}, {}, {}, {}, {}, {}, {}, {}],
        "arrows": [
            {"from": 4, "to": 5, "dir": "right"},
            {"from": 5, "to": 6, "dir": "right"},
        ],
    },
    "solutions": {"5": "bow", "6": "storm"},
}


class FormatBoardTests(unittest.TestCase):
    def test_board_marks_clues_and_arrows(self) -> None:
        puzzle = puzzle_from_dict(SAMPLE)
        board = format_board(puzzle)
        self.assertIn("ARC>", board)
        self.assertIn("___>", board)
        self.assertIn("_____", board)
        self.assertIn("bow>", format_board(puzzle, show_solutions=True))


class CliTests(unittest.TestCase):
    def run_main(self, argv):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main.main(argv)
        return code, buffer.getvalue()

    def test_validate_reports_ok(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "draft.json"
            path.write_text(json.dumps(SAMPLE), encoding="utf-8")
            code, output = self.run_main(["--log-level", "ERROR", "validate", str(path)])
        self.assertEqual(code, 0)
        self.assertIn("OK", output)

    def test_trim_exports_cropped_puzzle(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "draft.json"
            out = Path(tmp) / "trimmed.json"
            path.write_text(json.dumps(SAMPLE), encoding="utf-8")
            code, _ = self.run_main(["--log-level", "ERROR", "trim", str(path), "--output", str(out)])
            doc = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(code, 0)
        self.assertEqual(doc["id"], "2024-05-01")
        self.assertEqual((doc["grid"]["rows"], doc["grid"]["cols"]), (1, 3))
        self.assertEqual(doc["solutions"], {"1": "bow", "2": "storm"})

    def test_play_loop_solves_and_saves(self) -> None:
        session = GameSession()
        session.load(puzzle_from_dict(SAMPLE))
        backend = {}
        store = SessionStore(backend, namespace="test")
        lines = ["set 5 bow", "set 6 strom", "submit", "set 6 storm", "submit"]
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            main.run_play(session, store, lines)
        self.assertTrue(session.is_solved())
        self.assertIn("Solved!", buffer.getvalue())
        record = store.load("draft")
        self.assertTrue(record["solved"])
        self.assertEqual(record["submitCount"], 2)

    def test_play_loop_rejects_clue_cell_edits(self) -> None:
        session = GameSession()
        session.load(puzzle_from_dict(SAMPLE))
        store = SessionStore({}, namespace="test")
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            main.run_play(session, store, ["set 4 hello", "quit"])
        self.assertIn("not editable", buffer.getvalue())
        self.assertEqual(session.state.entries, {})
        self.assertEqual(store.load("draft")["entries"], {})

    def test_play_without_puzzle_raises(self) -> None:
        store = SessionStore({}, namespace="test")
        with self.assertRaises(PuzzleError):
            main.run_play(GameSession(), store, ["quit"])

    def test_log_level_names_accepted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "draft.json"
            path.write_text(json.dumps(SAMPLE), encoding="utf-8")
            code, output = self.run_main(["--log-level", "error", "validate", str(path)])
        self.assertEqual(code, 0)
        self.assertIn("OK", output)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

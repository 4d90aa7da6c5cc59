import unittest
from unittest.mock import MagicMock

import requests

from arrowword.core.exceptions import PuzzleFetchError
from arrowword.io.puzzle_client import ClientConfig, PuzzleClient


PUZZLE = {
    "id": "2024-05-01",
    "date": "2024-05-01",
    "grid": {
        "rows": 1,
        "cols": 2,
        "cells": [{"fixed": "Arc"}, {}],
        "arrows": [{"from": 0, "to": 1, "dir": "right"}],
    },
    "solutions": {"1": "bow"},
}


def fake_response(payload=None, status_error=None, json_error=None) -> MagicMock:
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def routed_session(routes) -> MagicMock:
    session = MagicMock()

    def get(url, timeout=None):
        for suffix, response in routes.items():
            if url.endswith(suffix):
                return response
        return fake_response(status_error=requests.HTTPError("404 Not Found"))

    session.get.side_effect = get
    return session


class PuzzleClientTests(unittest.TestCase):
    def make_client(self, routes) -> PuzzleClient:
        config = ClientConfig(base_url="https://puzzles.example/daily/")
        return PuzzleClient(config, session=routed_session(routes))

    def test_fetch_puzzle(self) -> None:
        client = self.make_client({"puzzles/2024-05-01.json": fake_response(PUZZLE)})
        puzzle = client.fetch_puzzle("2024-05-01")
        self.assertEqual(puzzle.solutions, {1: "bow"})
        url = client.session.get.call_args[0][0]
        self.assertEqual(url, "https://puzzles.example/daily/puzzles/2024-05-01.json")

    def test_http_error_becomes_fetch_error(self) -> None:
        client = self.make_client({})
        with self.assertRaises(PuzzleFetchError):
            client.fetch_puzzle("missing")

    def test_connection_error_becomes_fetch_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("boom")
        client = PuzzleClient(ClientConfig(base_url="https://x"), session=session)
        with self.assertRaises(PuzzleFetchError):
            client.fetch_index()

    def test_malformed_json_becomes_fetch_error(self) -> None:
        client = self.make_client(
            {
                "puzzles/bad.json": fake_response(json_error=ValueError("no json")),
                "puzzles/broken.json": fake_response({"id": "broken"}),
            }
        )
        with self.assertRaises(PuzzleFetchError):
            client.fetch_puzzle("bad")
        with self.assertRaises(PuzzleFetchError):
            client.fetch_puzzle("broken")

    def test_index_sorted_newest_first(self) -> None:
        index = [
            {"id": "a", "date": "2024-01-01"},
            {"id": "b", "date": "2024-02-01", "title": "Snow"},
            "garbage",
        ]
        client = self.make_client({"puzzles/index.json": fake_response(index)})
        summaries = client.fetch_index()
        self.assertEqual([s.id for s in summaries], ["b", "a"])
        self.assertEqual(summaries[0].title, "Snow")

    def test_index_from_manifest_skips_failures(self) -> None:
        client = self.make_client(
            {
                "puzzles/list.json": fake_response(["2024-05-01.json", "2024-06-01.json", "gone.json"]),
                "puzzles/2024-05-01.json": fake_response(PUZZLE),
                "puzzles/2024-06-01.json": fake_response({"title": "June"}),
            }
        )
        summaries = client.fetch_index_from_manifest()
        self.assertEqual([s.id for s in summaries], ["2024-06-01", "2024-05-01"])
        self.assertEqual(summaries[0].title, "June")

    def test_missing_manifest_gives_empty_index(self) -> None:
        client = self.make_client({})
        self.assertEqual(client.fetch_index_from_manifest(), [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

"""HTTP client fetching puzzle documents and the puzzle index."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from ..core.exceptions import PuzzleFetchError, PuzzleFormatError
from ..core.models import Puzzle, PuzzleSummary
from ..utils.logger import get_logger
from .puzzle_json import puzzle_from_dict, sort_index, summary_from_dict

LOGGER = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/"


def _default_base_url() -> str:
    return os.environ.get("ARROWWORD_BASE_URL", DEFAULT_BASE_URL)


@dataclass
class ClientConfig:
    base_url: str = field(default_factory=_default_base_url)
    timeout_seconds: float = 10.0
    index_path: str = "puzzles/index.json"
    manifest_path: str = "puzzles/list.json"


class PuzzleClient:
    """Fetches ``puzzles/<id>.json`` documents from a static host.

    Any network, HTTP or decoding failure surfaces as
    :class:`PuzzleFetchError`; callers keep their current puzzle.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + "/" + path.lstrip("/")

    def _get_json(self, path: str) -> Any:
        url = self._url(path)
        try:
            response = self.session.get(url, timeout=self.config.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PuzzleFetchError(f"Request for {url} failed: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise PuzzleFetchError(f"Response from {url} is not JSON: {exc}") from exc

    def fetch_puzzle(self, puzzle_id: str) -> Puzzle:
        data = self._get_json(f"puzzles/{puzzle_id}.json")
        try:
            puzzle = puzzle_from_dict(data)
        except PuzzleFormatError as exc:
            raise PuzzleFetchError(f"Puzzle {puzzle_id} is malformed: {exc}") from exc
        LOGGER.info("Fetched puzzle %s", puzzle.id)
        return puzzle

    def fetch_index(self) -> List[PuzzleSummary]:
        """Return the puzzle list, newest first."""

        data = self._get_json(self.config.index_path)
        if not isinstance(data, list):
            raise PuzzleFetchError("Puzzle index must be a JSON array")
        summaries: List[PuzzleSummary] = []
        for entry in data:
            try:
                summaries.append(summary_from_dict(entry))
            except PuzzleFormatError as exc:
                LOGGER.warning("Skipping index entry %r: %s", entry, exc)
        return sort_index(summaries)

    def fetch_index_from_manifest(self) -> List[PuzzleSummary]:
        """Build the index by reading every file named in the manifest.

        Unreadable puzzle files are skipped; a missing manifest yields an
        empty index.
        """

        try:
            filenames = self._get_json(self.config.manifest_path)
        except PuzzleFetchError as exc:
            LOGGER.warning("No puzzle manifest, using empty index: %s", exc)
            return []
        if not isinstance(filenames, list):
            LOGGER.warning("Puzzle manifest is not a list, using empty index")
            return []

        summaries: List[PuzzleSummary] = []
        for filename in filenames:
            stem = str(filename)
            if stem.endswith(".json"):
                stem = stem[: -len(".json")]
            try:
                data = self._get_json(f"puzzles/{filename}")
                summaries.append(summary_from_dict(data, fallback_id=stem))
            except (PuzzleFetchError, PuzzleFormatError) as exc:
                LOGGER.warning("Failed to load puzzle %s: %s", filename, exc)
        return sort_index(summaries)

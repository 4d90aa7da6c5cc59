"""Custom exception hierarchy for the arrow-word package."""

from typing import List, Optional


class PuzzleError(Exception):
    """Base exception for puzzle failures."""


class PuzzleFormatError(PuzzleError):
    """Raised when a puzzle document cannot be decoded."""


class PuzzleFetchError(PuzzleError):
    """Raised when a puzzle or the puzzle index cannot be fetched."""


class ValidationError(PuzzleError):
    """Raised when a puzzle integrity check fails."""


class AuthoringError(PuzzleError):
    """Raised when the editor refuses to export a malformed grid."""

    def __init__(self, message: str, messages: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.messages = list(messages or [])

"""Custom exception classes for the tree search package."""

from __future__ import annotations


class TreeSearchError(Exception):
    """Base exception for all tree search errors."""


class IllegalActionError(TreeSearchError, ValueError):
    """Raised by a game state when an action cannot be executed."""


class NoLegalActionsError(TreeSearchError):
    """Raised when a search needed a legal action and none existed."""

    def __init__(self, message: str = "Expected at least one legal action") -> None:
        super().__init__(message)


class UnvisitedChildError(TreeSearchError):
    """Raised when best-child selection meets a child that was never visited."""

    def __init__(self, action) -> None:
        self.action = action
        super().__init__(f"Child for action {action} has no visits")


__all__ = [
    "IllegalActionError",
    "NoLegalActionsError",
    "TreeSearchError",
    "UnvisitedChildError",
]

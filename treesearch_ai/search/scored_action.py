"""
Running result of an alpha-beta search level.
"""
from typing import Generic, Optional, TypeVar

from treesearch_ai.core.exceptions import NoLegalActionsError


ActionT = TypeVar('ActionT')


class ScoredAction(Generic[ActionT]):
    """
    Keeps track of an evaluator score and the action that produced it.

    A fallback action can be attached when a search level runs out of time
    before it scored anything, so the caller always has an answer.
    """

    __slots__ = ('score', 'best_action', 'fallback_action')

    def __init__(self, score: float, action: Optional[ActionT] = None):
        self.score = score
        self.best_action = action
        self.fallback_action: Optional[ActionT] = None

    def action(self) -> ActionT:
        """
        Get the leading action, or the fallback action if none was scored.

        Raises:
            NoLegalActionsError: If neither is available
        """
        if self.best_action is not None:
            return self.best_action
        if self.fallback_action is not None:
            return self.fallback_action
        raise NoLegalActionsError("Expected action")

    def has_action(self) -> bool:
        return self.best_action is not None or self.fallback_action is not None

    def insert_max(self, action: ActionT, score: float) -> None:
        """Record this action & score if the score is strictly greater."""
        if score > self.score:
            self.score = score
            self.best_action = action

    def insert_min(self, action: ActionT, score: float) -> None:
        """Record this action & score if the score is strictly lower."""
        if score < self.score:
            self.score = score
            self.best_action = action

    def with_fallback_action(self, action: ActionT) -> 'ScoredAction[ActionT]':
        # Only the first fallback is kept
        if self.fallback_action is None:
            self.fallback_action = action
        return self

    def __repr__(self) -> str:
        return (f"ScoredAction(score={self.score}, action={self.best_action}, "
                f"fallback={self.fallback_action})")

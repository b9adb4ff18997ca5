"""
Selection algorithm interface and deadline helpers.

A selection algorithm receives a deadline, a root state, an evaluator and
the player to move, and returns one action for that player. Deadlines are
absolute timestamps in seconds, as returned by :func:`time.time`.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict
import time

from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.node import ActionT, GameStateNode, PlayerT


def deadline_after(seconds: float) -> float:
    """
    Get a deadline `seconds` from now.

    Args:
        seconds: Time budget in seconds

    Returns:
        Absolute deadline timestamp
    """
    return time.time() + seconds


def deadline_passed(deadline: float) -> bool:
    """Whether the given deadline is in the past."""
    return deadline < time.time()


def time_remaining(deadline: float) -> float:
    """Seconds left before `deadline`, never negative."""
    return max(0.0, deadline - time.time())


class SelectionAlgorithm(ABC):
    """
    Abstract base class for algorithms that pick an action from a state.

    Each call performs one self-contained search; no search state is kept
    between calls except the statistics of the most recent search.
    """

    name: str = "algorithm"

    def __init__(self) -> None:
        self.last_stats: Dict[str, Any] = {}

    @abstractmethod
    def pick_action(
        self,
        deadline: float,
        state: GameStateNode[PlayerT, ActionT],
        evaluator: StateEvaluator[PlayerT],
        player: PlayerT,
    ) -> ActionT:
        """
        Select an action for `player`.

        The input state is never modified.

        Args:
            deadline: Absolute time by which an answer is expected
            state: Current game state
            evaluator: Heuristic used when the search cannot reach the end
            player: Player to select an action for

        Returns:
            Selected action

        Raises:
            NoLegalActionsError: If `player` has no legal action
        """
        pass

    def get_last_statistics(self) -> Dict[str, Any]:
        """Statistics from the most recent search."""
        return self.last_stats

    def __str__(self) -> str:
        return self.name

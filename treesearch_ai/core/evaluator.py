"""
Heuristic evaluation of game states.

An evaluator scores a state from one player's point of view. Search
algorithms call it whenever they cannot (or choose not to) play a branch out
to the end of the game.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Generic

from treesearch_ai.core.node import GameStateNode, PlayerT


class StateEvaluator(ABC, Generic[PlayerT]):
    """
    Abstract base class for state evaluators.

    Implementations must be pure functions of `(state, player)` and must
    return finite values within a fixed range, since alpha-beta uses
    infinities as its initial bounds.
    """

    @abstractmethod
    def evaluate(self, state: GameStateNode, player: PlayerT) -> float:
        """
        Score a state from `player`'s perspective.

        Args:
            state: Game state to evaluate
            player: Player whose perspective is used

        Returns:
            Score, higher is better for `player`
        """
        pass

    def __call__(self, state: GameStateNode, player: PlayerT) -> float:
        return self.evaluate(state, player)


class FunctionEvaluator(StateEvaluator[PlayerT]):
    """Wraps a plain scoring function as a StateEvaluator."""

    def __init__(self, function: Callable[[GameStateNode, PlayerT], float], name: str = "function"):
        self.function = function
        self.name = name

    def evaluate(self, state: GameStateNode, player: PlayerT) -> float:
        return self.function(state, player)

    def __str__(self) -> str:
        return f"FunctionEvaluator({self.name})"

"""
Agents that play games using a selection algorithm.

An agent bundles a name, a selection algorithm and a state evaluator into a
ready-to-use player. Agents can be handed to the tournament driver or used
as callbacks by any code that needs a `(state, player) -> action` function.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
import random
import time

from treesearch_ai.core import legal_actions
from treesearch_ai.core.algorithm import SelectionAlgorithm, deadline_after
from treesearch_ai.core.constants import DEFAULT_MOVE_TIME
from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.exceptions import NoLegalActionsError
from treesearch_ai.core.node import GameStateNode


class Agent:
    """
    A player driven by a selection algorithm and an evaluator.

    The agent computes a deadline from its per-move time budget, runs the
    algorithm, and keeps statistics about its decisions.
    """

    def __init__(
        self,
        name: str,
        algorithm: SelectionAlgorithm,
        evaluator: StateEvaluator,
        move_time: float = DEFAULT_MOVE_TIME,
        verbose: bool = False
    ):
        """
        Initialize an agent.

        Args:
            name: Name of the agent
            algorithm: Selection algorithm used to pick actions
            evaluator: Evaluator passed to the algorithm
            move_time: Seconds allowed per decision
            verbose: Whether to print information about each decision
        """
        if move_time <= 0:
            raise ValueError("move_time must be positive")

        self.name = name
        self.algorithm = algorithm
        self.evaluator = evaluator
        self.move_time = move_time
        self.verbose = verbose

        # Statistics from the most recent decision
        self.last_stats: Dict[str, Any] = {}

        # History of all actions and their statistics
        self.action_history: List[Tuple[Any, Dict[str, Any]]] = []

    def select_action(self, state: GameStateNode, player: Any, deadline: Optional[float] = None) -> Any:
        """
        Select an action for `player`.

        Args:
            state: Current game state (not modified)
            player: Player making the decision
            deadline: Absolute deadline; defaults to `move_time` from now

        Returns:
            Selected action
        """
        if deadline is None:
            deadline = deadline_after(self.move_time)

        start_time = time.time()
        action = self.algorithm.pick_action(deadline, state, self.evaluator, player)

        stats = dict(self.algorithm.get_last_statistics())
        stats["total_time"] = time.time() - start_time
        self.last_stats = stats
        self.action_history.append((action, stats))

        if self.verbose:
            print(f"{self.name} selected: {action} ({stats['total_time']:.3f}s)")

        return action

    def get_action_callback(self) -> Callable[[GameStateNode, Any], Any]:
        """
        Get a callback function for selecting actions.

        Returns:
            Callback function that takes a game state and player and returns an action
        """
        return lambda state, player: self.select_action(state, player)

    def get_last_statistics(self) -> Dict[str, Any]:
        return self.last_stats

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.action_history = []

    def __str__(self) -> str:
        return f"{self.name} ({self.algorithm})"


class RandomAgent(Agent):
    """Agent which selects a uniformly random legal action."""

    def __init__(self, name: str = "RANDOM", seed: Optional[int] = None, verbose: bool = False):
        super().__init__(name, algorithm=None, evaluator=None, verbose=verbose)
        self.rng = random.Random(seed)

    def select_action(self, state: GameStateNode, player: Any, deadline: Optional[float] = None) -> Any:
        action = legal_actions.random_action(state, player, self.rng)
        if action is None:
            raise NoLegalActionsError(f"No legal actions for player {player}")

        self.last_stats = {"choices": 1}
        self.action_history.append((action, self.last_stats))
        if self.verbose:
            print(f"{self.name} selected: {action}")
        return action

    def __str__(self) -> str:
        return f"{self.name} (random)"

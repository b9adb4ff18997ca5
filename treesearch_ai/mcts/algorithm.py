"""
Monte Carlo selection algorithm.

This module provides the MonteCarloAlgorithm class, which plugs the UCT
search into the common selection algorithm interface so that it can drive
an Agent or be compared against minimax search in a tournament. The
algorithm keeps the tree of its most recent search for inspection.
"""
from typing import Any, Dict, List, Optional, Tuple

from treesearch_ai.core.algorithm import SelectionAlgorithm
from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.node import ActionT, GameStateNode, PlayerT
from treesearch_ai.mcts.config import MCTSConfig
from treesearch_ai.mcts.node import SearchTree
from treesearch_ai.mcts.search import (
    build_search_tree, get_action_statistics, get_principal_variation, select_final_action
)


class MonteCarloAlgorithm(SelectionAlgorithm):
    """
    Selection algorithm running UCT1 Monte Carlo Tree Search.

    By default the simulation count bounds the search and the deadline is
    ignored; set `MCTSConfig.use_deadline` to stop at the deadline instead.
    """

    name = "uct1"

    def __init__(self, config: Optional[MCTSConfig] = None, verbose: bool = False):
        """
        Initialize the algorithm.

        Args:
            config: MCTS configuration parameters
            verbose: Whether to print detailed information after each search
        """
        super().__init__()
        self.config = config or MCTSConfig()
        self.verbose = verbose

        # Tree of the last search
        self.last_tree: Optional[SearchTree] = None

    @classmethod
    def fast(cls, verbose: bool = False) -> 'MonteCarloAlgorithm':
        return cls(MCTSConfig.fast(), verbose=verbose)

    @classmethod
    def standard(cls, verbose: bool = False) -> 'MonteCarloAlgorithm':
        return cls(MCTSConfig.default(), verbose=verbose)

    @classmethod
    def strong(cls, verbose: bool = False) -> 'MonteCarloAlgorithm':
        return cls(MCTSConfig.deep(), verbose=verbose)

    def pick_action(
        self,
        deadline: float,
        state: GameStateNode[PlayerT, ActionT],
        evaluator: StateEvaluator[PlayerT],
        player: PlayerT,
    ) -> ActionT:
        tree, stats = build_search_tree(state, player, evaluator, self.config, deadline)
        self.last_tree = tree

        action = select_final_action(tree, state, player)
        stats["action_statistics"] = get_action_statistics(tree)
        self.last_stats = stats

        if self.verbose:
            self._print_search_info(action, stats)

        return action

    def _print_search_info(self, action: Any, stats: Dict[str, Any]) -> None:
        """
        Print information about the search.

        Args:
            action: Selected action
            stats: Search statistics
        """
        print(f"\n{self} selected: {action}")
        print(f"Simulations: {stats['simulations']}"
              f"{' (stopped at deadline)' if stats['stopped_early'] else ''}")
        print(f"Time: {stats['time_elapsed']:.3f}s ({stats['simulations_per_second']:.1f} sim/s)")
        print(f"Nodes: {stats['node_count']}")
        print(f"Max depth: {stats['max_tree_depth']}")

        # Print top actions by visit count
        actions_by_visits = sorted(
            stats['action_statistics'].items(),
            key=lambda x: x[1]['visits'],
            reverse=True
        )
        if actions_by_visits:
            print("\nTop actions:")
        for i, (action_str, action_stats) in enumerate(actions_by_visits[:5]):
            print(f"{i+1}. {action_str} - {action_stats['visits']} visits, "
                  f"{action_stats['value']:.3f} value")

    def get_principal_variation(self) -> List[Tuple[Any, float]]:
        """
        Get the principal variation (most visited path) from the last search.

        Returns:
            List of (action, value) pairs representing the principal variation
        """
        if self.last_tree is None:
            return []

        return get_principal_variation(self.last_tree)

    def get_action_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Get statistics for all actions from the last search.

        Returns:
            Dictionary mapping action strings to statistics
        """
        if self.last_tree is None:
            return {}

        return get_action_statistics(self.last_tree)

    def __str__(self) -> str:
        return f"uct1({self.config.simulations} simulations)"

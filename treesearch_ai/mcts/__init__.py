"""
Monte Carlo Tree Search (MCTS) with UCT1.

This package provides a search that needs no heuristic beyond telling wins
from losses. Each simulation works by:

1. Tree policy: Starting from the root node, expand the first untried action, or
   descend to the child with the best UCT1 score when every action has been tried.
2. Default policy: From the reached state, play random moves until the game ends.
3. Backpropagation: Update the statistics of all nodes in the path with the result.

The search can be configured with different parameters to control the
simulation budget, exploration constant and playout length.
"""

from treesearch_ai.mcts.node import SearchEdge, SearchNode, SearchTree
from treesearch_ai.mcts.algorithm import MonteCarloAlgorithm
from treesearch_ai.mcts.search import (
    uct_search,
    tree_policy,
    expand,
    best_child,
    default_policy,
    backpropagate
)
from treesearch_ai.mcts.config import MCTSConfig
from treesearch_ai.core.constants import EXPLORATION_CONSTANT

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    simulations=1000,              # Number of simulations per move
    exploration_constant=EXPLORATION_CONSTANT,  # UCT1 Cp (1/sqrt(2))
    max_playout_depth=60,          # Maximum plies in a random playout
    win_reward=10.0,               # Reward for a won playout
    use_deadline=False             # Whether to stop at the move deadline
)

__all__ = [
    'MonteCarloAlgorithm',
    'SearchEdge',
    'SearchNode',
    'SearchTree',
    'MCTSConfig',
    'uct_search',
    'tree_policy',
    'expand',
    'best_child',
    'default_policy',
    'backpropagate',
    'DEFAULT_CONFIG'
]

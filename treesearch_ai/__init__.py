"""
Tree Search AI - adversarial tree search for two-player, perfect-information games.

This package provides depth-limited alpha-beta search and UCT1 Monte Carlo
Tree Search over a generic game state interface, along with a Nim reference
game and drivers for playing agents against each other.
"""

__version__ = "0.1.0"
__author__ = "Tree Search AI Team"

# Make key components available at package level
from treesearch_ai.core.node import GameStateNode
from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.agent import Agent
from treesearch_ai.search.minimax import AlphaBetaAlgorithm
from treesearch_ai.mcts.algorithm import MonteCarloAlgorithm

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))

# Default configuration
DEFAULT_CONFIG = {
    "search_depth": 4,
    "simulations": 1000,
    "move_time": 5.0
}

"""
Minimax-family tree search.

This package provides depth-limited alpha-beta search and a depth 1 greedy
search, both generic over :class:`treesearch_ai.core.GameStateNode`.
"""

from treesearch_ai.search.config import AlphaBetaConfig
from treesearch_ai.search.scored_action import ScoredAction
from treesearch_ai.search.minimax import AlphaBetaAlgorithm, alpha_beta, deadline_exceeded
from treesearch_ai.search.single_level import SingleLevelAlgorithm

# Default configuration
DEFAULT_CONFIG = AlphaBetaConfig()

__all__ = [
    'AlphaBetaAlgorithm',
    'AlphaBetaConfig',
    'ScoredAction',
    'SingleLevelAlgorithm',
    'alpha_beta',
    'deadline_exceeded',
    'DEFAULT_CONFIG'
]

"""
Reference games for exercising the search algorithms.
"""

from treesearch_ai.games.nim import (
    NimPlayer, NimAction, NimState, NimWinLossEvaluator, NimPerfectEvaluator,
    nim_sum, optimal_actions, create_agent
)

__all__ = [
    'NimPlayer',
    'NimAction',
    'NimState',
    'NimWinLossEvaluator',
    'NimPerfectEvaluator',
    'nim_sum',
    'optimal_actions',
    'create_agent',
]

"""
Tree Search AI Core Package

This package contains the game-independent building blocks, including:
- The game state interface searched by every algorithm
- State evaluators
- The selection algorithm interface and deadline helpers
- Legal action enumeration
- Agents and the error taxonomy

All core components can be imported directly from this package.
"""

# Game state interface
from treesearch_ai.core.node import GameStateNode

# Evaluators
from treesearch_ai.core.evaluator import StateEvaluator, FunctionEvaluator

# Algorithms
from treesearch_ai.core.algorithm import (
    SelectionAlgorithm, deadline_after, deadline_passed, time_remaining
)

# Legal actions
from treesearch_ai.core import legal_actions

# Agents
from treesearch_ai.core.agent import Agent, RandomAgent

# Errors
from treesearch_ai.core.exceptions import (
    TreeSearchError, IllegalActionError, NoLegalActionsError, UnvisitedChildError
)

__all__ = [
    # Game state
    'GameStateNode',

    # Evaluators
    'StateEvaluator', 'FunctionEvaluator',

    # Algorithms
    'SelectionAlgorithm', 'deadline_after', 'deadline_passed', 'time_remaining',
    'legal_actions',

    # Agents
    'Agent', 'RandomAgent',

    # Errors
    'TreeSearchError', 'IllegalActionError', 'NoLegalActionsError', 'UnvisitedChildError',
]

"""
Constants shared by the tree search algorithms.

This module defines the default search parameters used throughout the
package, including search depths, simulation budgets, rollout limits and
reward magnitudes.
"""
import math
from typing import Final


# Alpha-beta settings
DEFAULT_SEARCH_DEPTH: Final[int] = 4
"""Default number of plies searched by alpha-beta"""

NEGATIVE_INFINITY: Final[float] = float('-inf')
POSITIVE_INFINITY: Final[float] = float('inf')

# Monte Carlo settings
DEFAULT_SIMULATIONS: Final[int] = 1000
"""Number of MCTS simulations per decision"""

EXPLORATION_CONSTANT: Final[float] = 1 / math.sqrt(2)  # Cp suggested by Kocsis and Szepesvari
MAX_PLAYOUT_DEPTH: Final[int] = 60  # Hard cap on plies in a random playout
WIN_REWARD: Final[float] = 10.0  # Terminal reward magnitude for a won playout

# The root starts with one visit so ln(N) is defined before any child is visited
ROOT_VISIT_COUNT: Final[int] = 1

# Agent settings
DEFAULT_MOVE_TIME: Final[float] = 5.0  # Seconds allowed per decision

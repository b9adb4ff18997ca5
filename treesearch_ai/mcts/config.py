"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the UCT search,
including the simulation budget, exploration constant and playout limits.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from treesearch_ai.core.constants import (
    DEFAULT_SIMULATIONS, EXPLORATION_CONSTANT, MAX_PLAYOUT_DEPTH, WIN_REWARD
)


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the MCTS algorithm,
    with validation and sensible defaults.
    """
    # Search parameters
    simulations: int = DEFAULT_SIMULATIONS
    """Number of simulations to perform per decision"""

    exploration_constant: float = EXPLORATION_CONSTANT
    """Cp in the UCT1 formula used while descending the tree"""

    # Playout parameters
    max_playout_depth: int = MAX_PLAYOUT_DEPTH
    """Maximum number of plies in a random playout before falling back to the evaluator"""

    win_reward: float = WIN_REWARD
    """Reward for a playout won by the searching player (negated for a loss)"""

    # Budget parameters
    use_deadline: bool = False
    """Whether to stop simulating once the deadline passes"""

    seed: Optional[int] = None
    """Seed for playout randomness (None = nondeterministic)"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.simulations <= 0:
            raise ValueError("simulations must be positive")

        if self.exploration_constant < 0:
            raise ValueError("exploration_constant must be non-negative")

        if self.max_playout_depth <= 0:
            raise ValueError("max_playout_depth must be positive")

        if self.win_reward <= 0:
            raise ValueError("win_reward must be positive")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer simulations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(simulations=100)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration for a long, deadline-bounded search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(simulations=20000, use_deadline=True)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"

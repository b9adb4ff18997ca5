"""
Configuration for alpha-beta tree search.

This module defines the configuration parameters for depth-limited minimax
search with alpha-beta pruning.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict

from treesearch_ai.core.constants import DEFAULT_SEARCH_DEPTH


@dataclass
class AlphaBetaConfig:
    """
    Configuration parameters for alpha-beta search.

    The search depth is a fixed number of plies chosen by the caller; it is
    never derived from the length of the game.
    """
    search_depth: int = DEFAULT_SEARCH_DEPTH
    """Number of plies to search below the root"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.search_depth <= 0:
            raise ValueError("search_depth must be positive")

    @classmethod
    def default(cls) -> 'AlphaBetaConfig':
        return cls()

    @classmethod
    def fast(cls) -> 'AlphaBetaConfig':
        """Shallow search for quick decisions."""
        return cls(search_depth=2)

    @classmethod
    def deep(cls) -> 'AlphaBetaConfig':
        """Deep search, suitable for small games that can be solved outright."""
        return cls(search_depth=25)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'AlphaBetaConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            AlphaBetaConfig object
        """
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

"""
Match and tournament drivers for pitting agents against each other.
"""

from treesearch_ai.tournament.matchup import (
    MatchOutcome, OutcomePlayer, Verbosity, run_matchup
)
from treesearch_ai.tournament.run_tournament import (
    TournamentResult, run_tournament, set_seed
)

__all__ = [
    'MatchOutcome',
    'OutcomePlayer',
    'Verbosity',
    'run_matchup',
    'TournamentResult',
    'run_tournament',
    'set_seed',
]

"""
Play a single match between agents.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from treesearch_ai.core.agent import Agent
from treesearch_ai.core.node import GameStateNode


DEFAULT_MAX_TURNS = 1000


class Verbosity(Enum):
    """How much a match prints while it runs."""
    NONE = "none"
    MATCH_OUTCOMES = "match-outcomes"
    ACTIONS = "actions"


@dataclass
class OutcomePlayer:
    """One participant of a finished match."""
    agent: str
    side: Any
    score: Optional[float] = None


@dataclass
class MatchOutcome:
    """
    Result of a match.

    For a draw, `winner` and `loser` are still both set (in seat order) and
    `draw` is True.
    """
    winner: OutcomePlayer
    loser: OutcomePlayer
    turn_count: int
    draw: bool = False

    def __str__(self) -> str:
        if self.draw:
            return f"{self.winner.agent} and {self.loser.agent} draw after {self.turn_count} turns"

        score = ""
        if self.winner.score is not None and self.loser.score is not None:
            score = f" {self.winner.score:g}-{self.loser.score:g}"
        return (f"{self.winner.agent} as {self.winner.side} defeats "
                f"{self.loser.agent}{score} in {self.turn_count} turns")


def run_matchup(
    initial_state: GameStateNode,
    agents: Dict[Any, Agent],
    verbosity: Verbosity = Verbosity.NONE,
    max_turns: int = DEFAULT_MAX_TURNS,
    labels: Optional[Dict[Any, str]] = None,
    score_function: Optional[Callable[[GameStateNode, Any], float]] = None,
) -> MatchOutcome:
    """
    Run a match between two agents until the game ends.

    Each turn, the agent assigned to the player returned by `current_turn()`
    picks an action which is applied to the match state. Every action counts
    as one turn.

    Args:
        initial_state: Starting state (not modified)
        agents: Mapping from each of the two players to the agent controlling it
        verbosity: What to print while playing
        max_turns: Number of turns after which the match is declared a draw
        labels: Optional display name per player, defaulting to the agent names
        score_function: Optional `(state, player) -> score` reported in the outcome

    Returns:
        MatchOutcome
    """
    if len(agents) != 2:
        raise ValueError("A match requires exactly two players")

    state = initial_state.make_copy()
    labels = labels or {}
    turn_count = 0

    while state.current_turn() is not None and turn_count < max_turns:
        player = state.current_turn()
        if player not in agents:
            raise KeyError(f"No agent for player {player}")

        action = agents[player].select_action(state, player)
        if verbosity == Verbosity.ACTIONS:
            print(f"{player} action: {action}")

        state.execute_action(player, action)
        turn_count += 1

    def outcome_player(side: Any) -> OutcomePlayer:
        return OutcomePlayer(
            agent=labels.get(side, agents[side].name),
            side=side,
            score=score_function(state, side) if score_function is not None else None
        )

    winner = state.winner() if state.current_turn() is None else None
    if winner is None:
        first, second = list(agents)
        outcome = MatchOutcome(outcome_player(first), outcome_player(second), turn_count, draw=True)
    else:
        loser = next(side for side in agents if side != winner)
        outcome = MatchOutcome(outcome_player(winner), outcome_player(loser), turn_count)

    if verbosity in (Verbosity.MATCH_OUTCOMES, Verbosity.ACTIONS):
        print(f">>> {outcome}")

    return outcome

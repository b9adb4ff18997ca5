"""
Legal action enumeration shared by every search algorithm.

All algorithms and rollout policies go through these helpers rather than
calling ``GameStateNode.legal_actions`` directly, so that a finished game or a
player who cannot act always produces an empty sequence and enumeration
order is identical everywhere.
"""
from __future__ import annotations
from typing import Iterator, List, Optional
import random

from treesearch_ai.core.node import ActionT, GameStateNode, PlayerT


def evaluate(state: GameStateNode[PlayerT, ActionT], player: PlayerT) -> Iterator[ActionT]:
    """
    Lazily iterate over the legal actions of `player` in `state`.

    Args:
        state: Game state
        player: Player to enumerate actions for

    Returns:
        Iterator over legal actions, in the state's stable order
    """
    if state.current_turn() is None:
        return
    yield from state.legal_actions(player)


def collect(state: GameStateNode[PlayerT, ActionT], player: PlayerT) -> List[ActionT]:
    """
    Materialise the legal actions of `player` into a list.

    Args:
        state: Game state
        player: Player to enumerate actions for

    Returns:
        List of legal actions in enumeration order
    """
    return list(evaluate(state, player))


def for_current_player(state: GameStateNode[PlayerT, ActionT]) -> List[ActionT]:
    """Legal actions of whoever has the turn; empty if the game has ended."""
    player = state.current_turn()
    if player is None:
        return []
    return collect(state, player)


def random_action(
    state: GameStateNode[PlayerT, ActionT],
    player: PlayerT,
    rng: Optional[random.Random] = None
) -> Optional[ActionT]:
    """
    Pick a uniformly random legal action for `player`.

    Args:
        state: Game state
        player: Player to pick an action for
        rng: Random number generator (defaults to the global one)

    Returns:
        A random legal action, or None if there is none
    """
    actions = collect(state, player)
    if not actions:
        return None
    return (rng or random).choice(actions)

"""
Generic game state interface used by the search algorithms.

Search algorithms never look inside a concrete game. They only need to know
whose turn it is, which actions are legal, how to apply an action, and how to
make an independent copy of a state to explore speculatively. Keeping the
algorithms generic over this interface makes it possible to check them
against a small game with a known optimal strategy (see
:mod:`treesearch_ai.games.nim`).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Generic, Hashable, Iterator, Optional, TypeVar


PlayerT = TypeVar('PlayerT', bound=Hashable)
ActionT = TypeVar('ActionT', bound=Hashable)


class GameStateNode(ABC, Generic[PlayerT, ActionT]):
    """
    Abstract base class for any game state a search algorithm can explore.

    Players must be equality-comparable and hashable. Actions must be
    hashable values; the search code only compares them for identity.
    """

    @abstractmethod
    def current_turn(self) -> Optional[PlayerT]:
        """
        Get the player whose turn it currently is.

        Returns:
            The player to act, or None if the game has ended
        """
        pass

    @abstractmethod
    def legal_actions(self, player: PlayerT) -> Iterator[ActionT]:
        """
        Iterate over the actions `player` can legally take in this state.

        The sequence must be finite and its order must be stable for an
        unmodified state. It is empty when the game has ended or when the
        player cannot act.

        Args:
            player: Player to enumerate actions for

        Returns:
            Iterator over legal actions
        """
        pass

    @abstractmethod
    def execute_action(self, player: PlayerT, action: ActionT) -> None:
        """
        Apply an action to this state, mutating it in place.

        Args:
            player: Player performing the action
            action: Action to apply

        Raises:
            IllegalActionError: If the action is not legal for `player`
        """
        pass

    def make_copy(self) -> GameStateNode[PlayerT, ActionT]:
        """
        Create an independent copy of this state for speculative search.

        Subclasses may override this with a cheaper copy, as long as no
        mutation of the copy is ever visible in the original.

        Returns:
            Deep copy of the state
        """
        return deepcopy(self)

    def winner(self) -> Optional[PlayerT]:
        """
        Get the winner of a finished game.

        Consulted by match drivers and for the reward of a finished MCTS
        playout. Alpha-beta never asks for it.

        Returns:
            The winning player, or None for a draw or an unfinished game
        """
        return None

    def is_terminal(self) -> bool:
        """Whether the game has ended."""
        return self.current_turn() is None

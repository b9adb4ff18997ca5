"""
The game of Nim.

Nim is a two player game where players take turns removing objects from
piles. On each turn a player removes one or more objects from a single pile,
and the player who removes the last object wins ("normal play").

Nim is small enough to search exhaustively and has a closed-form optimal
strategy: a position is lost for the player to move exactly when the XOR of
all pile sizes (the "nim-sum") is zero. That makes it a good reference game
for checking that the search algorithms actually find optimal moves.

See https://en.wikipedia.org/wiki/Nim
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from operator import xor
from typing import Iterator, List, Optional, Set
import string

from treesearch_ai.core.agent import Agent, RandomAgent
from treesearch_ai.core.constants import DEFAULT_MOVE_TIME
from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.exceptions import IllegalActionError
from treesearch_ai.core.node import GameStateNode
from treesearch_ai.mcts.algorithm import MonteCarloAlgorithm
from treesearch_ai.mcts.config import MCTSConfig
from treesearch_ai.search.minimax import AlphaBetaAlgorithm
from treesearch_ai.search.config import AlphaBetaConfig
from treesearch_ai.search.single_level import SingleLevelAlgorithm


PILE_NAMES = string.ascii_lowercase


class NimPlayer(Enum):
    """The two Nim players."""
    ONE = 1
    TWO = 2

    def opponent(self) -> 'NimPlayer':
        return NimPlayer.TWO if self is NimPlayer.ONE else NimPlayer.ONE

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class NimAction:
    """Remove `amount` objects from the pile at index `pile`."""
    pile: int
    amount: int

    @classmethod
    def parse(cls, text: str) -> 'NimAction':
        """
        Parse an action written as a pile letter followed by an amount.

        Args:
            text: Action text such as "a2" or "c10"

        Returns:
            NimAction

        Raises:
            ValueError: If the text is not a pile letter followed by a positive number
        """
        text = text.strip().lower()
        if len(text) < 2 or text[0] not in PILE_NAMES or not text[1:].isdigit():
            raise ValueError(f"Expected a pile letter followed by an amount, e.g. 'a2', got '{text}'")

        amount = int(text[1:])
        if amount <= 0:
            raise ValueError("Amount must be positive")
        return cls(pile=PILE_NAMES.index(text[0]), amount=amount)

    def __str__(self) -> str:
        return f"{PILE_NAMES[self.pile]}{self.amount}"


class NimState(GameStateNode[NimPlayer, NimAction]):
    """
    State of a Nim game: the pile sizes and the player to move.

    `turn` keeps pointing at the player who would move next even after the
    game has ended, so the winner is always `turn.opponent()` at that point.
    """

    def __init__(self, piles: List[int], turn: NimPlayer = NimPlayer.ONE):
        if not piles:
            raise ValueError("Nim requires at least one pile")
        if len(piles) > len(PILE_NAMES):
            raise ValueError(f"Nim supports at most {len(PILE_NAMES)} piles")
        if any(size < 0 for size in piles):
            raise ValueError("Pile sizes must be non-negative")

        self.piles = list(piles)
        self.turn = turn

    @classmethod
    def new(cls, size: int) -> 'NimState':
        """Create a game with three piles of `size` objects each."""
        return cls([size, size, size])

    @classmethod
    def new_with_piles(cls, *sizes: int) -> 'NimState':
        """Create a game with the given pile sizes."""
        return cls(list(sizes))

    def current_turn(self) -> Optional[NimPlayer]:
        if all(size == 0 for size in self.piles):
            return None
        return self.turn

    def legal_actions(self, player: NimPlayer) -> Iterator[NimAction]:
        if self.current_turn() != player:
            return
        for pile, size in enumerate(self.piles):
            for amount in range(1, size + 1):
                yield NimAction(pile, amount)

    def execute_action(self, player: NimPlayer, action: NimAction) -> None:
        current = self.current_turn()
        if current is None:
            raise IllegalActionError("Game is over")
        if current != player:
            raise IllegalActionError(f"Not {player}'s turn")
        if not 0 <= action.pile < len(self.piles):
            raise IllegalActionError(f"Unknown pile {action.pile}")
        if not 0 < action.amount <= self.piles[action.pile]:
            raise IllegalActionError(
                f"Cannot take {action.amount} from pile {PILE_NAMES[action.pile]} "
                f"of size {self.piles[action.pile]}"
            )

        self.piles[action.pile] -= action.amount
        self.turn = player.opponent()

    def make_copy(self) -> 'NimState':
        return NimState(list(self.piles), self.turn)

    def winner(self) -> Optional[NimPlayer]:
        if self.current_turn() is not None:
            return None
        return self.turn.opponent()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NimState):
            return NotImplemented
        return self.piles == other.piles and self.turn == other.turn

    def __repr__(self) -> str:
        return f"NimState(piles={self.piles}, turn={self.turn})"

    def __str__(self) -> str:
        rows = [f"  {PILE_NAMES[i]}: {'●' * size} ({size})" for i, size in enumerate(self.piles)]
        return "\n".join(rows)


def nim_sum(state: NimState) -> int:
    """XOR of all pile sizes; zero means the player to move loses with perfect play."""
    return reduce(xor, state.piles, 0)


def optimal_actions(state: NimState) -> Set[NimAction]:
    """
    Get every move that leaves the opponent in a lost position.

    A move is optimal when it brings the nim-sum to zero: for a pile of size
    `n`, that means reducing it to `n ^ nim_sum` whenever that is smaller.

    Args:
        state: Nim state

    Returns:
        Set of optimal actions; empty if the position is lost or the game is over
    """
    total = nim_sum(state)
    if total == 0 or state.current_turn() is None:
        return set()

    result = set()
    for pile, size in enumerate(state.piles):
        target = size ^ total
        if target < size:
            result.add(NimAction(pile, size - target))
    return result


class NimWinLossEvaluator(StateEvaluator[NimPlayer]):
    """Scores finished games as 1 for a win and -1 for a loss; 0 otherwise."""

    def evaluate(self, state: NimState, player: NimPlayer) -> float:
        winner = state.winner()
        if winner is None:
            return 0
        return 1 if winner == player else -1


class NimPerfectEvaluator(StateEvaluator[NimPlayer]):
    """
    Exact evaluator for any Nim state.

    The player to move wins with perfect play exactly when the nim-sum is
    non-zero, so every state can be scored as a win (1) or loss (-1).
    """

    def evaluate(self, state: NimState, player: NimPlayer) -> float:
        current = state.current_turn()
        if current is None:
            return 1 if state.winner() == player else -1

        to_move_wins = nim_sum(state) != 0
        return 1 if to_move_wins == (current == player) else -1


def perfect_agent(move_time: float = DEFAULT_MOVE_TIME, verbose: bool = False) -> Agent:
    """Agent which always makes optimal moves."""
    return Agent("PERFECT", SingleLevelAlgorithm(), NimPerfectEvaluator(), move_time, verbose)


def alpha_beta_agent(
    search_depth: int = 25,
    move_time: float = DEFAULT_MOVE_TIME,
    verbose: bool = False
) -> Agent:
    """Agent running alpha-beta search deep enough to reach the end of small games."""
    algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=search_depth), verbose=verbose)
    return Agent("ALPHA_BETA", algorithm, NimWinLossEvaluator(), move_time, verbose)


def uct1_agent(
    config: Optional[MCTSConfig] = None,
    move_time: float = DEFAULT_MOVE_TIME,
    verbose: bool = False
) -> Agent:
    """Agent running Monte Carlo Tree Search."""
    algorithm = MonteCarloAlgorithm(config, verbose=verbose)
    return Agent("UCT1", algorithm, NimWinLossEvaluator(), move_time, verbose)


def random_agent(seed: Optional[int] = None, verbose: bool = False) -> Agent:
    """Agent which picks a random legal move."""
    return RandomAgent("RANDOM", seed=seed, verbose=verbose)


AGENT_NAMES = ["perfect", "alpha-beta", "uct1", "random"]


def create_agent(
    name: str,
    move_time: float = DEFAULT_MOVE_TIME,
    seed: Optional[int] = None,
    verbose: bool = False
) -> Agent:
    """
    Create a Nim agent by name.

    Args:
        name: One of AGENT_NAMES
        move_time: Seconds allowed per decision
        seed: Seed for agents that make random choices
        verbose: Whether the agent prints its decisions

    Returns:
        Agent
    """
    if name == "perfect":
        return perfect_agent(move_time, verbose)
    elif name == "alpha-beta":
        return alpha_beta_agent(move_time=move_time, verbose=verbose)
    elif name == "uct1":
        return uct1_agent(MCTSConfig(seed=seed), move_time, verbose)
    elif name == "random":
        return random_agent(seed, verbose)
    raise ValueError(f"Unknown agent '{name}', expected one of {AGENT_NAMES}")

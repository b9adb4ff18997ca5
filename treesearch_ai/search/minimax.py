"""
Minimax tree search with alpha-beta pruning.

This is a 'fail soft' implementation: a search level may return a score
outside of its `[alpha, beta]` window rather than clamping it. The search
runs to a fixed depth and checks the deadline at every branch point above
the leaf layer. When time runs out it returns the best result found so far,
falling back to the action it was about to explore so that an answer is
always available.

Ties between equally scored actions are broken by enumeration order: the
leading action only changes on a strict improvement, so the first action to
reach the best score wins.

See https://en.wikipedia.org/wiki/Alpha-beta_pruning
"""
from __future__ import annotations
from collections import defaultdict
from typing import Any, Dict, Optional
import time

from treesearch_ai.core import legal_actions
from treesearch_ai.core.algorithm import SelectionAlgorithm
from treesearch_ai.core.constants import NEGATIVE_INFINITY, POSITIVE_INFINITY
from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.node import ActionT, GameStateNode, PlayerT
from treesearch_ai.search.config import AlphaBetaConfig
from treesearch_ai.search.scored_action import ScoredAction


class AlphaBetaAlgorithm(SelectionAlgorithm):
    """
    Selection algorithm running depth-limited alpha-beta search.
    """

    name = "alpha-beta"

    def __init__(self, config: Optional[AlphaBetaConfig] = None, verbose: bool = False):
        """
        Initialize the algorithm.

        Args:
            config: Search configuration
            verbose: Whether to print a summary after each search
        """
        super().__init__()
        self.config = config or AlphaBetaConfig()
        self.verbose = verbose

    @property
    def search_depth(self) -> int:
        return self.config.search_depth

    def pick_action(
        self,
        deadline: float,
        state: GameStateNode[PlayerT, ActionT],
        evaluator: StateEvaluator[PlayerT],
        player: PlayerT,
    ) -> ActionT:
        stats: Dict[str, Any] = defaultdict(int)
        start_time = time.time()

        result = alpha_beta(
            deadline, state, evaluator, self.config.search_depth, player,
            NEGATIVE_INFINITY, POSITIVE_INFINITY, stats
        )

        stats["score"] = result.score
        stats["time_elapsed"] = time.time() - start_time
        stats["used_fallback"] = result.best_action is None and result.fallback_action is not None
        self.last_stats = dict(stats)

        action = result.action()
        if self.verbose:
            print(f"alpha-beta depth {self.config.search_depth}: {action} "
                  f"(score {result.score}, {stats['nodes_visited']} nodes, "
                  f"{stats['cutoffs']} cutoffs, {stats['time_elapsed']:.3f}s)")
        return action

    def __str__(self) -> str:
        return f"alpha-beta(depth={self.config.search_depth})"


def alpha_beta(
    deadline: float,
    state: GameStateNode[PlayerT, ActionT],
    evaluator: StateEvaluator[PlayerT],
    depth: int,
    player: PlayerT,
    alpha: float = NEGATIVE_INFINITY,
    beta: float = POSITIVE_INFINITY,
    stats: Optional[Dict[str, Any]] = None,
) -> ScoredAction[ActionT]:
    """
    Search `state` to `depth` plies and score it for `player`.

    `player` is the maximising side at every level; all other players
    minimise. Errors raised while enumerating or executing actions abort the
    whole search.

    Args:
        deadline: Absolute time after which the search returns early
        state: State to search (not modified)
        evaluator: Evaluator for leaf and terminal states
        depth: Remaining search depth in plies
        player: Maximising player
        alpha: Best score guaranteed to the maximiser so far
        beta: Best score guaranteed to the minimiser so far
        stats: Optional counters updated in place

    Returns:
        Score of this state, with the leading action when one was searched
    """
    if stats is not None:
        stats["nodes_visited"] += 1

    current = state.current_turn()
    if depth == 0 or current is None:
        return ScoredAction(evaluator.evaluate(state, player))

    if current == player:
        result = ScoredAction(NEGATIVE_INFINITY)
        for action in legal_actions.evaluate(state, current):
            if deadline_exceeded(deadline, depth):
                _note_deadline(stats)
                return result.with_fallback_action(action)
            child = state.make_copy()
            child.execute_action(current, action)
            score = alpha_beta(deadline, child, evaluator, depth - 1, player, alpha, beta, stats).score
            result.insert_max(action, score)
            alpha = max(alpha, result.score)
            if result.score >= beta:
                _note_cutoff(stats)
                break  # Beta cutoff
        return result
    else:
        result = ScoredAction(POSITIVE_INFINITY)
        for action in legal_actions.evaluate(state, current):
            if deadline_exceeded(deadline, depth):
                _note_deadline(stats)
                return result.with_fallback_action(action)
            child = state.make_copy()
            child.execute_action(current, action)
            score = alpha_beta(deadline, child, evaluator, depth - 1, player, alpha, beta, stats).score
            result.insert_min(action, score)
            beta = min(beta, result.score)
            if result.score <= alpha:
                _note_cutoff(stats)
                break  # Alpha cutoff
        return result


def deadline_exceeded(deadline: float, depth: int) -> bool:
    """
    Check whether `deadline` has passed.

    Only checks for the higher parts of the tree to avoid reading the clock
    at every leaf.
    """
    return depth > 1 and deadline < time.time()


def _note_cutoff(stats: Optional[Dict[str, Any]]) -> None:
    if stats is not None:
        stats["cutoffs"] += 1


def _note_deadline(stats: Optional[Dict[str, Any]]) -> None:
    if stats is not None:
        stats["deadline_exceeded"] = True

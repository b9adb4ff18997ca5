"""
Single level search: try every legal action once and keep the best.
"""
from typing import Optional
import time

from treesearch_ai.core import legal_actions
from treesearch_ai.core.algorithm import SelectionAlgorithm
from treesearch_ai.core.constants import NEGATIVE_INFINITY
from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.exceptions import NoLegalActionsError
from treesearch_ai.core.node import ActionT, GameStateNode, PlayerT


class SingleLevelAlgorithm(SelectionAlgorithm):
    """
    Depth 1 search of legal actions, returning the one that produces the best
    evaluated state. The deadline is ignored.

    Paired with an exact evaluator this plays perfectly, which makes it a
    useful reference opponent.
    """

    name = "single-level"

    def pick_action(
        self,
        deadline: float,
        state: GameStateNode[PlayerT, ActionT],
        evaluator: StateEvaluator[PlayerT],
        player: PlayerT,
    ) -> ActionT:
        start_time = time.time()
        best_score = NEGATIVE_INFINITY
        best_action: Optional[ActionT] = None
        evaluated = 0

        for action in legal_actions.evaluate(state, player):
            child = state.make_copy()
            child.execute_action(player, action)
            score = evaluator.evaluate(child, player)
            evaluated += 1
            if best_action is None or score > best_score:
                best_score = score
                best_action = action

        self.last_stats = {
            "actions_evaluated": evaluated,
            "score": best_score,
            "time_elapsed": time.time() - start_time,
        }

        if best_action is None:
            raise NoLegalActionsError("No legal actions found")
        return best_action

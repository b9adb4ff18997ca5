#!/usr/bin/env python
"""
Tests for alpha-beta and single level search.

This script checks:
1. Optimal play on small Nim positions with a known closed-form strategy
2. Pruning never changes the returned score
3. Tie-breaking by enumeration order
4. Deadline handling and the fallback action
5. Errors raised by the game state abort the search
6. ScoredAction bookkeeping
"""
import time
import types
import unittest

from treesearch_ai.core import FunctionEvaluator, deadline_after
from treesearch_ai.core.constants import NEGATIVE_INFINITY, POSITIVE_INFINITY
from treesearch_ai.core.exceptions import NoLegalActionsError
from treesearch_ai.games.nim import (
    NimAction, NimPerfectEvaluator, NimPlayer, NimState, NimWinLossEvaluator,
    create_agent, nim_sum, optimal_actions, perfect_agent
)
from treesearch_ai.search import (
    AlphaBetaAlgorithm, AlphaBetaConfig, ScoredAction, SingleLevelAlgorithm,
    alpha_beta, deadline_exceeded
)


def minimax(state, evaluator, depth, player):
    """Full minimax without pruning."""
    current = state.current_turn()
    if depth == 0 or current is None:
        return evaluator.evaluate(state, player)

    scores = []
    for action in state.legal_actions(current):
        child = state.make_copy()
        child.execute_action(current, action)
        scores.append(minimax(child, evaluator, depth - 1, player))
    return max(scores) if current == player else min(scores)


def heuristic(state, player):
    """Arbitrary but deterministic score, so that sibling values differ."""
    winner = state.winner()
    if winner is not None:
        return 100 if winner == player else -100
    weights = [3, -2, 5, -1]
    value = sum(w * size for w, size in zip(weights, state.piles)) % 11 - 5
    return value if state.current_turn() == player else -value


class FaultyNimState(NimState):
    """Nim state whose rules engine fails on one action or when listing TWO's actions."""

    def __init__(self, piles, turn=NimPlayer.ONE, bad_action=None, fail_listing=False):
        super().__init__(piles, turn)
        self.bad_action = bad_action
        self.fail_listing = fail_listing

    def make_copy(self):
        return FaultyNimState(list(self.piles), self.turn, self.bad_action, self.fail_listing)

    def legal_actions(self, player):
        if self.fail_listing and self.turn == NimPlayer.TWO:
            raise RuntimeError("cannot list actions")
        return super().legal_actions(player)

    def execute_action(self, player, action):
        if action == self.bad_action:
            raise RuntimeError(f"cannot apply {action}")
        super().execute_action(player, action)


class TestAlphaBetaOptimality(unittest.TestCase):
    """Test case for alpha-beta on Nim."""

    def assert_perfect(self, state, agent):
        """Play `agent` against perfect play; every winning position must get an optimal move."""
        opponent = perfect_agent()
        state = state.make_copy()
        agent_side = state.current_turn()

        while state.current_turn() is not None:
            player = state.current_turn()
            if player == agent_side:
                action = agent.select_action(state, player)
                if nim_sum(state) != 0:
                    self.assertIn(action, optimal_actions(state), f"Non-optimal move in {state!r}")
            else:
                action = opponent.select_action(state, player)
            state.execute_action(player, action)

    def test_three_four_end_to_end(self):
        state = NimState.new_with_piles(3, 4)
        algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=7))

        action = algorithm.pick_action(deadline_after(60), state, NimWinLossEvaluator(), NimPlayer.ONE)

        self.assertEqual(action, NimAction(1, 1))
        self.assertEqual(algorithm.last_stats["score"], 1)

    def test_perfect_on_small_positions(self):
        agent = create_agent("alpha-beta", move_time=60)
        positions = [
            NimState.new(1),
            NimState.new_with_piles(1, 2, 3),
            NimState.new(2),
            NimState.new_with_piles(2, 2, 3),
            NimState.new_with_piles(1, 1, 3),
        ]
        for state in positions:
            with self.subTest(piles=state.piles):
                self.assert_perfect(state, agent)

    def test_agrees_with_nim_theory_for_second_player(self):
        state = NimState.new_with_piles(2, 3)
        state.execute_action(NimPlayer.ONE, NimAction(0, 2))
        action = AlphaBetaAlgorithm(AlphaBetaConfig.deep()).pick_action(
            deadline_after(60), state, NimWinLossEvaluator(), NimPlayer.TWO
        )
        self.assertEqual(action, NimAction(1, 3))

    def test_input_state_not_modified(self):
        state = NimState.new_with_piles(2, 3)
        AlphaBetaAlgorithm().pick_action(deadline_after(60), state, NimWinLossEvaluator(), NimPlayer.ONE)
        self.assertEqual(state, NimState.new_with_piles(2, 3))


class TestAlphaBetaPruning(unittest.TestCase):
    """Test case for pruning soundness and statistics."""

    def test_pruning_matches_full_minimax(self):
        evaluator = FunctionEvaluator(heuristic, name="heuristic")
        positions = [
            NimState.new_with_piles(3, 4, 2),
            NimState.new_with_piles(2, 1, 3, 1),
            NimState.new_with_piles(4, 4),
        ]
        for state in positions:
            for depth in range(1, 5):
                with self.subTest(piles=state.piles, depth=depth):
                    expected = minimax(state, evaluator, depth, NimPlayer.ONE)
                    result = alpha_beta(deadline_after(60), state, evaluator, depth, NimPlayer.ONE)
                    self.assertEqual(result.score, expected)

    def test_pruning_visits_fewer_nodes(self):
        state = NimState.new_with_piles(3, 4, 2)
        algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=4))
        algorithm.pick_action(deadline_after(60), state, FunctionEvaluator(heuristic), NimPlayer.ONE)

        stats = algorithm.get_last_statistics()
        self.assertGreater(stats["cutoffs"], 0)

        # Count every node a full search would visit
        def count(node, depth):
            if depth == 0 or node.current_turn() is None:
                return 1
            total = 1
            for action in node.legal_actions(node.current_turn()):
                child = node.make_copy()
                child.execute_action(node.current_turn(), action)
                total += count(child, depth - 1)
            return total

        self.assertLess(stats["nodes_visited"], count(state, 4))

    def test_search_module_is_not_shadowed(self):
        import treesearch_ai.search.minimax as minimax_module

        self.assertIsInstance(minimax_module, types.ModuleType)
        self.assertIs(minimax_module.alpha_beta, alpha_beta)

    def test_terminal_state_scores_without_action(self):
        state = NimState.new_with_piles(1)
        state.execute_action(NimPlayer.ONE, NimAction(0, 1))

        result = alpha_beta(deadline_after(60), state, NimWinLossEvaluator(), 3, NimPlayer.ONE)

        self.assertEqual(result.score, 1)
        self.assertFalse(result.has_action())
        with self.assertRaises(NoLegalActionsError):
            AlphaBetaAlgorithm().pick_action(deadline_after(60), state, NimWinLossEvaluator(), NimPlayer.ONE)


class TestAlphaBetaTieBreaking(unittest.TestCase):
    """Test case for deterministic tie-breaking."""

    def test_equal_scores_keep_first_action(self):
        state = NimState.new_with_piles(3, 4)
        evaluator = FunctionEvaluator(lambda s, p: 0)
        for depth in (1, 2, 3):
            with self.subTest(depth=depth):
                action = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=depth)).pick_action(
                    deadline_after(60), state, evaluator, NimPlayer.ONE
                )
                self.assertEqual(action, NimAction(0, 1))

    def test_repeated_calls_return_same_action(self):
        state = NimState.new_with_piles(3, 4, 2)
        evaluator = FunctionEvaluator(heuristic)
        algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=4))

        actions = [
            algorithm.pick_action(deadline_after(60), state, evaluator, NimPlayer.ONE)
            for _ in range(5)
        ]
        fresh = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=4)).pick_action(
            deadline_after(60), state, evaluator, NimPlayer.ONE
        )

        self.assertEqual(len(set(actions)), 1)
        self.assertEqual(actions[0], fresh)
        self.assertEqual(state, NimState.new_with_piles(3, 4, 2))

    def test_lost_position_returns_first_action(self):
        state = NimState.new_with_piles(1, 2, 3)
        action = AlphaBetaAlgorithm(AlphaBetaConfig.deep()).pick_action(
            deadline_after(60), state, NimWinLossEvaluator(), NimPlayer.ONE
        )
        self.assertEqual(action, NimAction(0, 1))


class TestAlphaBetaErrors(unittest.TestCase):
    """Test case for errors raised by the game state."""

    def test_execute_action_error_aborts_search(self):
        state = FaultyNimState([3, 4], bad_action=NimAction(1, 2))
        algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=3))
        with self.assertRaisesRegex(RuntimeError, "cannot apply b2"):
            algorithm.pick_action(deadline_after(60), state, NimWinLossEvaluator(), NimPlayer.ONE)

    def test_legal_actions_error_aborts_search(self):
        state = FaultyNimState([3, 4], fail_listing=True)
        algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=3))
        with self.assertRaisesRegex(RuntimeError, "cannot list actions"):
            algorithm.pick_action(deadline_after(60), state, NimWinLossEvaluator(), NimPlayer.ONE)


class TestAlphaBetaDeadline(unittest.TestCase):
    """Test case for deadline handling."""

    def test_expired_deadline_returns_fallback(self):
        state = NimState.new_with_piles(3, 4)
        algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=5))

        action = algorithm.pick_action(time.time() - 1, state, NimWinLossEvaluator(), NimPlayer.ONE)

        self.assertEqual(action, NimAction(0, 1))
        self.assertTrue(algorithm.last_stats["used_fallback"])
        self.assertTrue(algorithm.last_stats.get("deadline_exceeded"))

    def test_depth_one_ignores_deadline(self):
        state = NimState.new_with_piles(3, 4)
        algorithm = AlphaBetaAlgorithm(AlphaBetaConfig(search_depth=1))

        action = algorithm.pick_action(time.time() - 1, state, NimPerfectEvaluator(), NimPlayer.ONE)

        self.assertEqual(action, NimAction(1, 1))
        self.assertFalse(algorithm.last_stats["used_fallback"])

    def test_deadline_exceeded_only_above_leaf_layer(self):
        past = time.time() - 1
        future = time.time() + 60
        self.assertTrue(deadline_exceeded(past, 2))
        self.assertFalse(deadline_exceeded(past, 1))
        self.assertFalse(deadline_exceeded(future, 5))

    def test_expired_deadline_on_terminal_state_has_no_action(self):
        state = NimState.new_with_piles(0, 0)
        result = alpha_beta(time.time() - 1, state, NimWinLossEvaluator(), 4, NimPlayer.ONE)
        self.assertFalse(result.has_action())


class TestScoredAction(unittest.TestCase):
    """Test case for ScoredAction."""

    def test_insert_max_is_strict(self):
        result = ScoredAction(NEGATIVE_INFINITY)
        result.insert_max("a", 1)
        result.insert_max("b", 1)
        result.insert_max("c", 0)
        self.assertEqual(result.action(), "a")
        self.assertEqual(result.score, 1)

    def test_insert_min_is_strict(self):
        result = ScoredAction(POSITIVE_INFINITY)
        result.insert_min("a", -2)
        result.insert_min("b", -2)
        result.insert_min("c", -3)
        self.assertEqual(result.action(), "c")

    def test_fallback_only_used_without_best(self):
        result = ScoredAction(NEGATIVE_INFINITY).with_fallback_action("x").with_fallback_action("y")
        self.assertEqual(result.action(), "x")

        result.insert_max("a", 5)
        self.assertEqual(result.action(), "a")

    def test_empty_raises(self):
        with self.assertRaises(NoLegalActionsError):
            ScoredAction(0).action()


class TestSingleLevel(unittest.TestCase):
    """Test case for single level search."""

    def test_picks_best_child(self):
        state = NimState.new_with_piles(3, 4)
        algorithm = SingleLevelAlgorithm()
        action = algorithm.pick_action(time.time() - 1, state, NimPerfectEvaluator(), NimPlayer.ONE)
        self.assertEqual(action, NimAction(1, 1))
        self.assertEqual(algorithm.last_stats["actions_evaluated"], 7)

    def test_no_actions_raises(self):
        with self.assertRaises(NoLegalActionsError):
            SingleLevelAlgorithm().pick_action(
                deadline_after(1), NimState.new_with_piles(0), NimPerfectEvaluator(), NimPlayer.ONE
            )


class TestConfig(unittest.TestCase):
    """Test case for AlphaBetaConfig."""

    def test_presets_and_validation(self):
        self.assertEqual(AlphaBetaConfig.default().search_depth, 4)
        self.assertEqual(AlphaBetaConfig.fast().search_depth, 2)
        self.assertEqual(AlphaBetaConfig.deep().search_depth, 25)
        with self.assertRaises(ValueError):
            AlphaBetaConfig(search_depth=0)

    def test_dict_round_trip_ignores_unknown_keys(self):
        config = AlphaBetaConfig.from_dict({"search_depth": 6, "unused": True})
        self.assertEqual(config.to_dict(), {"search_depth": 6})


if __name__ == "__main__":
    unittest.main()

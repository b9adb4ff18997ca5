#!/usr/bin/env python
"""
Tests for agents, the match and tournament drivers and the Nim CLI.

These are integration tests: real agents play complete games of Nim.
"""
import io
import os
import random
import tempfile
import unittest

import numpy as np
import pandas as pd
from rich.console import Console
from rich.table import Table

from treesearch_ai.core import Agent, RandomAgent, legal_actions
from treesearch_ai.core.exceptions import NoLegalActionsError
from treesearch_ai.games.nim import (
    NimAction, NimPlayer, NimState, NimWinLossEvaluator, create_agent
)
from treesearch_ai.play import HumanAgent, optimal_play_hint, run_game_loop
from treesearch_ai.search import AlphaBetaAlgorithm
from treesearch_ai.tournament import (
    MatchOutcome, OutcomePlayer, run_matchup, run_tournament, set_seed
)
from treesearch_ai.tournament.run_tournament import main as tournament_main


class TestAgents(unittest.TestCase):
    """Test case for agents."""

    def test_agent_records_history(self):
        agent = Agent("AB", AlphaBetaAlgorithm(), NimWinLossEvaluator(), move_time=10)
        state = NimState.new_with_piles(1, 2)

        action = agent.select_action(state, NimPlayer.ONE)

        self.assertEqual(action, NimAction(1, 1))
        self.assertEqual(len(agent.action_history), 1)
        self.assertIn("total_time", agent.get_last_statistics())
        self.assertIn("nodes_visited", agent.get_last_statistics())

        agent.reset_statistics()
        self.assertEqual(agent.action_history, [])

    def test_agent_callback(self):
        agent = create_agent("perfect")
        callback = agent.get_action_callback()
        self.assertEqual(callback(NimState.new_with_piles(3, 4), NimPlayer.ONE), NimAction(1, 1))

    def test_invalid_move_time(self):
        with self.assertRaises(ValueError):
            Agent("AB", AlphaBetaAlgorithm(), NimWinLossEvaluator(), move_time=0)

    def test_random_agent(self):
        state = NimState.new_with_piles(2, 3)
        legal = set(state.legal_actions(NimPlayer.ONE))
        first = RandomAgent(seed=4)
        second = RandomAgent(seed=4)
        for _ in range(10):
            action = first.select_action(state, NimPlayer.ONE)
            self.assertIn(action, legal)
            self.assertEqual(action, second.select_action(state, NimPlayer.ONE))

    def test_random_agent_without_actions(self):
        with self.assertRaises(NoLegalActionsError):
            RandomAgent().select_action(NimState.new_with_piles(0), NimPlayer.ONE)

    def test_legal_actions_helpers(self):
        state = NimState.new_with_piles(1, 1)
        self.assertEqual(legal_actions.for_current_player(state), [NimAction(0, 1), NimAction(1, 1)])
        self.assertEqual(legal_actions.collect(state, NimPlayer.TWO), [])
        self.assertIsNone(legal_actions.random_action(NimState.new_with_piles(0), NimPlayer.ONE))
        self.assertIn(legal_actions.random_action(state, NimPlayer.ONE, random.Random(1)),
                      [NimAction(0, 1), NimAction(1, 1)])


class TestMatchup(unittest.TestCase):
    """Test case for a single match."""

    def test_perfect_beats_random_from_winning_position(self):
        agents = {NimPlayer.ONE: create_agent("perfect"), NimPlayer.TWO: create_agent("random", seed=0)}
        state = NimState.new_with_piles(3, 4)

        outcome = run_matchup(state, agents)

        self.assertFalse(outcome.draw)
        self.assertEqual(outcome.winner.agent, "PERFECT")
        self.assertEqual(outcome.winner.side, NimPlayer.ONE)
        self.assertEqual(outcome.loser.agent, "RANDOM")
        self.assertGreaterEqual(outcome.turn_count, 2)
        self.assertTrue(str(outcome).startswith("PERFECT as ONE defeats RANDOM in"))

        # The starting state is left alone
        self.assertEqual(state, NimState.new_with_piles(3, 4))

    def test_max_turns_is_draw(self):
        agents = {NimPlayer.ONE: create_agent("perfect"), NimPlayer.TWO: create_agent("perfect")}
        outcome = run_matchup(NimState.new(3), agents, max_turns=1)
        self.assertTrue(outcome.draw)
        self.assertEqual(outcome.turn_count, 1)
        self.assertIn("draw", str(outcome))

    def test_requires_two_agents(self):
        with self.assertRaises(ValueError):
            run_matchup(NimState.new(1), {NimPlayer.ONE: create_agent("perfect")})

    def test_outcome_with_scores(self):
        outcome = MatchOutcome(
            winner=OutcomePlayer("UCT1", NimPlayer.TWO, 7),
            loser=OutcomePlayer("ALPHA_BETA", NimPlayer.ONE, 3),
            turn_count=12
        )
        self.assertEqual(str(outcome), "UCT1 as TWO defeats ALPHA_BETA 7-3 in 12 turns")


class TestTournament(unittest.TestCase):
    """Test case for tournaments."""

    def setUp(self):
        """Set up test fixtures."""
        set_seed(42)

    def test_sides_are_swapped(self):
        result = run_tournament(
            lambda: NimState.new_with_piles(3, 4),
            (NimPlayer.ONE, NimPlayer.TWO),
            create_agent("perfect"),
            create_agent("random", seed=1),
            matches=3,
            show_progress=False,
        )

        self.assertEqual(result.games, 6)
        sides = [o.winner.side for _, o in result.outcomes if o.winner.agent == "PERFECT"]
        self.assertIn(NimPlayer.ONE, sides)

        # PERFECT never loses when it moves first from a winning position
        self.assertGreaterEqual(result.wins("PERFECT"), 3)
        self.assertEqual(result.wins("PERFECT") + result.wins("RANDOM") + result.draws, 6)

        summary = result.summary()
        self.assertEqual(summary["games"], 6)
        self.assertAlmostEqual(sum(summary["win_rate"].values()), 1.0)
        self.assertGreater(summary["mean_turns"], 0)

    def test_dataframe_and_csv(self):
        result = run_tournament(
            lambda: NimState.new_with_piles(2, 3),
            (NimPlayer.ONE, NimPlayer.TWO),
            create_agent("alpha-beta"),
            create_agent("perfect"),
            show_progress=False,
        )

        df = result.to_dataframe()
        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(len(df), 2)
        self.assertEqual(list(df["match"]), [0, 0])
        self.assertTrue((df["winner_side"] == "ONE").all())

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "results.csv")
            result.to_csv(path)
            self.assertEqual(len(pd.read_csv(path)), 2)

        self.assertIsInstance(result.summary_table(), Table)

    def test_same_names_are_labelled(self):
        result = run_tournament(
            lambda: NimState.new_with_piles(1, 2),
            (NimPlayer.ONE, NimPlayer.TWO),
            create_agent("random", seed=1),
            create_agent("random", seed=2),
            show_progress=False,
        )
        self.assertEqual((result.agent_one, result.agent_two), ("RANDOM-1", "RANDOM-2"))
        self.assertEqual(result.wins("RANDOM-1") + result.wins("RANDOM-2"), 2)

    def test_invalid_match_count(self):
        with self.assertRaises(ValueError):
            run_tournament(NimState.new_with_piles, (NimPlayer.ONE, NimPlayer.TWO),
                           create_agent("perfect"), create_agent("perfect"), matches=0)

    def test_set_seed(self):
        set_seed(7)
        first = (random.random(), np.random.rand())
        set_seed(7)
        self.assertEqual(first, (random.random(), np.random.rand()))

    def test_command_line(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "results.csv")
            tournament_main([
                "perfect", "random", "--piles", "3", "4", "--matches", "1",
                "--verbosity", "none", "--seed", "3", "--csv", path
            ])
            df = pd.read_csv(path)
        self.assertEqual(len(df), 2)


class TestPlay(unittest.TestCase):
    """Test case for the interactive game loop."""

    def setUp(self):
        """Set up test fixtures."""
        self.output = io.StringIO()
        self.console = Console(file=self.output, width=100)

    def test_human_input_is_validated(self):
        inputs = iter(["zz", "a2", "a1"])
        human = HumanAgent(console=self.console, input_fn=lambda prompt: next(inputs))

        winner = run_game_loop(NimState.new_with_piles(1), human, create_agent("perfect"), self.console)

        self.assertEqual(winner, NimPlayer.ONE)
        text = self.output.getvalue()
        self.assertIn("Cannot take 2 from pile a", text)
        self.assertIn("Game Over. HUMAN wins!", text)

    def test_human_agent_display(self):
        self.assertEqual(str(HumanAgent(console=self.console)), "HUMAN (human)")
        self.assertEqual(str(HumanAgent("ALICE", console=self.console)), "ALICE (human)")

    def test_ai_game_loop(self):
        winner = run_game_loop(
            NimState.new_with_piles(3, 4), create_agent("perfect"), create_agent("alpha-beta"), self.console
        )
        self.assertEqual(winner, NimPlayer.ONE)

    def test_optimal_play_hint(self):
        self.assertIn("a take 3", optimal_play_hint(NimState.new_with_piles(3, 0), "P1"))
        self.assertIn("unwinnable", optimal_play_hint(NimState.new_with_piles(2, 2), "P1"))


if __name__ == "__main__":
    unittest.main()

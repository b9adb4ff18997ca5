#!/usr/bin/env python
"""
Run a series of matches between two agents.

Every match is played twice with the agents swapping sides, so neither agent
benefits from always moving first. Results are collected per game and can be
summarised in a table or exported as a pandas DataFrame.

Example usage:
    # Alpha-beta against UCT1 on three piles of three, five matches
    treesearch-tournament alpha-beta uct1 --matches 5

    # Random against perfect play on custom piles, printing every action
    treesearch-tournament random perfect --piles 3 4 5 --verbosity actions
"""
from __future__ import annotations
import argparse
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from treesearch_ai.core.agent import Agent
from treesearch_ai.core.node import GameStateNode
from treesearch_ai.games.nim import AGENT_NAMES, NimPlayer, NimState, create_agent
from treesearch_ai.tournament.matchup import (
    DEFAULT_MAX_TURNS, MatchOutcome, Verbosity, run_matchup
)


def set_seed(seed: int) -> None:
    """
    Set random seed for reproducibility.

    Args:
        seed: Random seed
    """
    random.seed(seed)
    np.random.seed(seed)


@dataclass
class TournamentResult:
    """Outcomes of every game played in a tournament."""
    agent_one: str
    agent_two: str
    outcomes: List[Tuple[int, MatchOutcome]] = field(default_factory=list)
    time_elapsed: float = 0.0

    def add(self, match: int, outcome: MatchOutcome) -> None:
        self.outcomes.append((match, outcome))

    def wins(self, agent: str) -> int:
        return sum(1 for _, o in self.outcomes if not o.draw and o.winner.agent == agent)

    @property
    def draws(self) -> int:
        return sum(1 for _, o in self.outcomes if o.draw)

    @property
    def games(self) -> int:
        return len(self.outcomes)

    def summary(self) -> Dict[str, Any]:
        """
        Aggregate the outcomes.

        Returns:
            Dictionary with win counts, win rates, draws and turn statistics
        """
        turns = np.array([o.turn_count for _, o in self.outcomes], dtype=float)
        games = max(1, self.games)
        return {
            "games": self.games,
            "wins": {
                self.agent_one: self.wins(self.agent_one),
                self.agent_two: self.wins(self.agent_two),
            },
            "win_rate": {
                self.agent_one: self.wins(self.agent_one) / games,
                self.agent_two: self.wins(self.agent_two) / games,
            },
            "draws": self.draws,
            "mean_turns": float(np.mean(turns)) if turns.size else 0.0,
            "std_turns": float(np.std(turns)) if turns.size else 0.0,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """
        Get one row per game.

        Returns:
            DataFrame with columns match, winner, winner_side, loser, loser_side,
            turn_count and draw
        """
        rows = [
            {
                "match": match,
                "winner": None if o.draw else o.winner.agent,
                "winner_side": None if o.draw else str(o.winner.side),
                "loser": None if o.draw else o.loser.agent,
                "loser_side": None if o.draw else str(o.loser.side),
                "turn_count": o.turn_count,
                "draw": o.draw,
            }
            for match, o in self.outcomes
        ]
        columns = ["match", "winner", "winner_side", "loser", "loser_side", "turn_count", "draw"]
        return pd.DataFrame(rows, columns=columns)

    def to_csv(self, path: str) -> None:
        self.to_dataframe().to_csv(path, index=False)

    def summary_table(self) -> Table:
        """Render the summary as a rich table."""
        summary = self.summary()
        table = Table(title=f"{self.agent_one} vs {self.agent_two}")
        table.add_column("AGENT", style="cyan", no_wrap=True)
        table.add_column("WINS", justify="right")
        table.add_column("WIN RATE", justify="right")
        for agent in (self.agent_one, self.agent_two):
            table.add_row(agent, str(summary["wins"][agent]), f"{100.0 * summary['win_rate'][agent]:.1f}%")
        table.add_row("draws", str(summary["draws"]), "", style="dim")
        table.caption = (f"{summary['games']} games, {summary['mean_turns']:.1f} turns on average, "
                         f"{self.time_elapsed:.1f}s")
        return table


def run_tournament(
    state_factory: Callable[[], GameStateNode],
    players: Sequence[Any],
    agent_one: Agent,
    agent_two: Agent,
    matches: int = 1,
    verbosity: Verbosity = Verbosity.NONE,
    max_turns: int = DEFAULT_MAX_TURNS,
    show_progress: bool = True,
) -> TournamentResult:
    """
    Play `matches` pairs of games between two agents.

    In the first game of each pair `agent_one` controls `players[0]`; in the
    second game the agents swap sides.

    Args:
        state_factory: Creates a fresh starting state for every game
        players: The two players of the game, in seat order
        agent_one: First agent
        agent_two: Second agent
        matches: Number of game pairs to play
        verbosity: What to print while playing
        max_turns: Number of turns after which a game is declared a draw
        show_progress: Whether to show a progress bar

    Returns:
        TournamentResult
    """
    if matches <= 0:
        raise ValueError("matches must be positive")
    if len(players) != 2:
        raise ValueError("A tournament requires exactly two players")

    label_one, label_two = agent_one.name, agent_two.name
    if label_one == label_two:
        label_one, label_two = f"{label_one}-1", f"{label_two}-2"

    result = TournamentResult(agent_one=label_one, agent_two=label_two)
    first, second = players
    seatings = [
        ({first: agent_one, second: agent_two}, {first: label_one, second: label_two}),
        ({first: agent_two, second: agent_one}, {first: label_two, second: label_one}),
    ]

    start_time = time.time()
    pbar = tqdm(total=2 * matches, desc="Playing", disable=not show_progress)
    for match in range(matches):
        for agents, labels in seatings:
            outcome = run_matchup(state_factory(), agents, verbosity, max_turns, labels)
            result.add(match, outcome)

            pbar.update(1)
            pbar.set_postfix({
                label_one: result.wins(label_one),
                label_two: result.wins(label_two),
            })
    pbar.close()

    result.time_elapsed = time.time() - start_time
    return result


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the tournament."""
    parser = argparse.ArgumentParser(description="Run a Nim tournament between two agents")

    parser.add_argument("agent_one", choices=AGENT_NAMES, help="First agent")
    parser.add_argument("agent_two", choices=AGENT_NAMES, help="Second agent")
    parser.add_argument("--piles", type=int, nargs="+", default=[3, 3, 3],
                        help="Starting pile sizes")
    parser.add_argument("--matches", type=int, default=1,
                        help="Number of matches (each is played twice with sides swapped)")
    parser.add_argument("--move-time", type=float, default=5.0,
                        help="Seconds per move for each agent")
    parser.add_argument("--verbosity", type=str, default="match-outcomes",
                        choices=[v.value for v in Verbosity],
                        help="What to print while playing")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible matches")
    parser.add_argument("--csv", type=str, default=None,
                        help="Write per-game results to this CSV file")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the `treesearch-tournament` command."""
    args = parse_args(argv)
    console = Console()

    if args.seed is not None:
        set_seed(args.seed)

    agent_one = create_agent(args.agent_one, move_time=args.move_time, seed=args.seed)
    agent_two = create_agent(args.agent_two, move_time=args.move_time, seed=args.seed)

    console.print(
        f"[green]Running tournament[/green] {agent_one.name} vs {agent_two.name} "
        f"(piles={args.piles}, matches={args.matches})"
    )

    result = run_tournament(
        lambda: NimState.new_with_piles(*args.piles),
        (NimPlayer.ONE, NimPlayer.TWO),
        agent_one,
        agent_two,
        matches=args.matches,
        verbosity=Verbosity(args.verbosity),
    )

    console.print(result.summary_table())

    if args.csv:
        result.to_csv(args.csv)
        console.print(f"Results written to [bold]{args.csv}[/bold]")


if __name__ == "__main__":
    main()

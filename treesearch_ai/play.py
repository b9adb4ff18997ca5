#!/usr/bin/env python
"""
Play Nim in the terminal.

Each seat can be taken by a human or by one of the AI agents. Before every
move the optimal play for the player to move is shown, which makes it easy
to check the agents' decisions by eye.

Example usage:
    # Play against perfect play
    treesearch-nim human perfect

    # Watch alpha-beta play UCT1 on custom piles
    treesearch-nim alpha-beta uct1 --piles 3 4 5
"""
import argparse
from typing import Callable, List, Optional

from rich.console import Console

from treesearch_ai.core.agent import Agent
from treesearch_ai.games.nim import (
    AGENT_NAMES, NimAction, NimPlayer, NimState, PILE_NAMES, create_agent, nim_sum, perfect_agent
)


class HumanAgent(Agent):
    """Agent which asks a human for moves such as 'a2' (take 2 from pile a)."""

    def __init__(self, name: str = "HUMAN", console: Optional[Console] = None,
                 input_fn: Optional[Callable[[str], str]] = None):
        super().__init__(name, algorithm=None, evaluator=None)
        self.console = console or Console()
        self.input_fn = input_fn or self.console.input

    def select_action(self, state: NimState, player: NimPlayer, deadline: Optional[float] = None) -> NimAction:
        legal = set(state.legal_actions(player))
        while True:
            text = self.input_fn("\n>>> Input your action, e.g. 'a2' or 'b3': ")
            try:
                action = NimAction.parse(text)
            except ValueError as e:
                self.console.print(f"[red]{e}[/red]")
                continue

            if action in legal:
                self.action_history.append((action, {}))
                return action
            self.console.print(f"[red]Cannot take {action.amount} from pile {PILE_NAMES[action.pile]}[/red]")

    def __str__(self) -> str:
        return f"{self.name} (human)"


def optimal_play_hint(state: NimState, player_name: str) -> str:
    """Describe the optimal move for the player to move."""
    if nim_sum(state) == 0:
        return f"  (Game is unwinnable for {player_name} with optimal play)"

    player = state.current_turn()
    action = perfect_agent().select_action(state, player)
    return f"  (Optimal play for {player_name} is {PILE_NAMES[action.pile]} take {action.amount})"


def run_game_loop(state: NimState, player_one: Agent, player_two: Agent,
                  console: Optional[Console] = None) -> NimPlayer:
    """
    Play a game of Nim between two agents, printing the board every turn.

    Args:
        state: Starting state, mutated as the game is played
        player_one: Agent for NimPlayer.ONE
        player_two: Agent for NimPlayer.TWO
        console: Console to print to

    Returns:
        The winning player
    """
    console = console or Console()
    agents = {NimPlayer.ONE: player_one, NimPlayer.TWO: player_two}

    while state.current_turn() is not None:
        player = state.current_turn()
        agent = agents[player]

        console.print(optimal_play_hint(state, agent.name), style="dim")
        console.print(str(state))

        action = agent.select_action(state, player)
        console.print(f"<<[bold]{agent.name}[/bold]>> takes {action.amount} from {PILE_NAMES[action.pile]}")
        state.execute_action(player, action)

    winner = state.winner()
    console.print(f"[green]Game Over. {agents[winner].name} wins![/green]")
    return winner


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for game configuration."""
    parser = argparse.ArgumentParser(description="Play the game of Nim")

    choices = ["human"] + AGENT_NAMES
    parser.add_argument("player_one", choices=choices, help="Who plays first")
    parser.add_argument("player_two", choices=choices, help="Who plays second")
    parser.add_argument("--piles", type=int, nargs="+", default=[4, 4, 4],
                        help="Starting pile sizes")
    parser.add_argument("--move-time", type=float, default=5.0,
                        help="Seconds per move for AI agents")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for agents that make random choices")
    parser.add_argument("--verbose", action="store_true",
                        help="Show search information for AI agents")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the `treesearch-nim` command."""
    args = parse_args(argv)
    console = Console()

    def get_agent(name: str) -> Agent:
        if name == "human":
            return HumanAgent(console=console)
        return create_agent(name, move_time=args.move_time, seed=args.seed, verbose=args.verbose)

    console.print("[bold]Welcome to the Game of Nim[/bold]")
    state = NimState.new_with_piles(*args.piles)
    run_game_loop(state, get_agent(args.player_one), get_agent(args.player_two), console)


if __name__ == "__main__":
    main()

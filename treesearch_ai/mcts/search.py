"""
Monte Carlo Tree Search (MCTS) with UCT1 child selection.

This module implements the UCT search described in "A Survey of Monte Carlo
Tree Search Methods" (Browne et al., IEEE Transactions on Computational
Intelligence and AI in Games, 2012). Every simulation runs three phases:

1. Tree policy: descend from the root, expanding the first untried action
   found or moving to the best child once a node is fully expanded.
2. Default policy: play random moves from the reached state until the game
   ends (or a ply cap is hit) to obtain a reward.
3. Backpropagation: walk back up to the root, adding the reward to every
   node from the perspective of the player who acted to create it.

After the simulation budget is spent, the root child with the best average
reward is chosen.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Tuple
import math
import random
import time

from treesearch_ai.core import legal_actions
from treesearch_ai.core.algorithm import deadline_passed
from treesearch_ai.core.constants import EXPLORATION_CONSTANT
from treesearch_ai.core.evaluator import StateEvaluator
from treesearch_ai.core.exceptions import NoLegalActionsError, UnvisitedChildError
from treesearch_ai.core.node import ActionT, GameStateNode, PlayerT
from treesearch_ai.mcts.config import MCTSConfig
from treesearch_ai.mcts.node import NodeHandle, SearchTree


def uct_search(
    state: GameStateNode[PlayerT, ActionT],
    player: PlayerT,
    evaluator: StateEvaluator[PlayerT],
    config: Optional[MCTSConfig] = None,
    deadline: Optional[float] = None,
) -> Tuple[ActionT, Dict[str, Any]]:
    """
    Run Monte Carlo Tree Search to find the best action.

    Pseudocode:
        function UCTSEARCH(s0)
          create root node v0 with state s0
          while within computational budget do
            v1 <- TREEPOLICY(v0)
            reward <- DEFAULTPOLICY(s(v1))
            BACKUP(v1, reward)
          return a(BESTCHILD(v0, 0))

    Args:
        state: Current game state (not modified)
        player: Player making the decision
        evaluator: Heuristic for playouts that hit the ply cap, also used to
            tell wins from losses in terminal states
        config: MCTS configuration parameters
        deadline: Absolute deadline, only honoured if `config.use_deadline`

    Returns:
        Tuple of (best action, search statistics)
    """
    if config is None:
        config = MCTSConfig()

    tree, stats = build_search_tree(state, player, evaluator, config, deadline)
    action = select_final_action(tree, state, player)

    stats["action_statistics"] = get_action_statistics(tree)
    return action, stats


def build_search_tree(
    state: GameStateNode[PlayerT, ActionT],
    player: PlayerT,
    evaluator: StateEvaluator[PlayerT],
    config: MCTSConfig,
    deadline: Optional[float] = None,
) -> Tuple[SearchTree, Dict[str, Any]]:
    """
    Grow a search tree for `player` by running the configured simulations.

    Args:
        state: Root game state (not modified)
        player: Player the search is run for
        evaluator: State evaluator
        config: MCTS configuration parameters
        deadline: Optional absolute deadline

    Returns:
        Tuple of (search tree, search statistics)
    """
    rng = random.Random(config.seed)
    tree = SearchTree(player)

    stats: Dict[str, Any] = {
        "simulations": 0,
        "stopped_early": False,
    }
    start_time = time.time()

    for i in range(config.simulations):
        # Always run at least one simulation so the root has a child
        if config.use_deadline and deadline is not None and i > 0 and deadline_passed(deadline):
            stats["stopped_early"] = True
            break

        run_simulation(tree, state, player, evaluator, config, rng)
        stats["simulations"] += 1

    stats["time_elapsed"] = time.time() - start_time
    stats["simulations_per_second"] = stats["simulations"] / max(0.001, stats["time_elapsed"])
    stats["node_count"] = len(tree)
    stats["max_tree_depth"] = tree.max_depth()
    return tree, stats


def run_simulation(
    tree: SearchTree,
    state: GameStateNode[PlayerT, ActionT],
    player: PlayerT,
    evaluator: StateEvaluator[PlayerT],
    config: MCTSConfig,
    rng: random.Random,
) -> float:
    """
    Run one tree policy / default policy / backpropagation cycle.

    Returns:
        Reward of the playout, from `player`'s perspective
    """
    game = state.make_copy()
    node = tree_policy(tree, game, tree.root, config.exploration_constant)
    reward = default_policy(game, player, evaluator, config, rng)
    backpropagate(tree, node, reward, player)
    return reward


def tree_policy(
    tree: SearchTree,
    game: GameStateNode[PlayerT, ActionT],
    node: NodeHandle,
    exploration_constant: float = EXPLORATION_CONSTANT,
) -> NodeHandle:
    """
    Find the next node to examine below `node`.

    If an action available from the current node has not been explored yet,
    it is applied and returned as a new child. Otherwise the best child is
    selected with UCT1 and the process repeats, until an unexplored action is
    found or a terminal state is reached.

    Mutates `game` to represent the state at the returned node.

    Pseudocode:
        function TREEPOLICY(v)
          while v is nonterminal do
            if v not fully expanded then
              return EXPAND(v)
            else
              v <- BESTCHILD(v, Cp)
          return v

    Args:
        tree: Search tree
        game: Working copy of the root state, mutated in place
        node: Handle to start from
        exploration_constant: Cp used for best child selection

    Returns:
        Handle of the expanded node, or of the terminal node reached
    """
    while True:
        current = game.current_turn()
        if current is None:
            return node

        actions = legal_actions.collect(game, current)
        explored = tree.explored_actions(node)
        for action in actions:
            if action not in explored:
                # An action exists which has not yet been tried
                return expand(tree, game, node, current, action)

        # All actions have been tried, descend into the best candidate
        action, node = best_child(tree, node, actions, exploration_constant)
        game.execute_action(current, action)


def expand(
    tree: SearchTree,
    game: GameStateNode[PlayerT, ActionT],
    source: NodeHandle,
    player: PlayerT,
    action: ActionT,
) -> NodeHandle:
    """
    Apply an untried action and add the resulting node to the tree.

    Pseudocode:
        function EXPAND(v)
          choose a in untried actions from A(s(v))
          add a new child v' to v with s(v') = f(s(v), a) and a(v') = a
          return v'

    Args:
        tree: Search tree
        game: Working state at `source`, mutated in place
        source: Handle of the node being expanded
        player: Player taking the action
        action: Untried action to apply

    Returns:
        Handle of the new child
    """
    game.execute_action(player, action)
    return tree.add_child(source, action, player)


def uct_score(
    total_reward: float,
    visit_count: int,
    parent_visits: int,
    exploration_constant: float
) -> float:
    """
    UCT1 score of a child node.

    Q(v') / N(v') + c * sqrt(2 * ln(N(v)) / N(v'))
    """
    exploitation = total_reward / visit_count
    if exploration_constant == 0:
        return exploitation
    exploration = math.sqrt((2.0 * math.log(parent_visits)) / visit_count)
    return exploitation + exploration_constant * exploration


def best_child(
    tree: SearchTree,
    node: NodeHandle,
    legal: Iterable[ActionT],
    exploration_constant: float,
) -> Tuple[ActionT, NodeHandle]:
    """
    Pick the most promising child of `node` using UCT1.

    Only children whose action is in `legal` are considered, since the set
    of legal actions can change between visits. Ties keep the child that was
    expanded first.

    Args:
        tree: Search tree
        node: Parent node handle
        legal: Actions currently legal at `node`
        exploration_constant: Weight of the exploration term (0 = pure exploitation)

    Returns:
        Tuple of (action, child handle)

    Raises:
        NoLegalActionsError: If no child matches a legal action
        UnvisitedChildError: If a candidate child has never been visited
    """
    legal_set = set(legal)
    parent_visits = tree[node].visit_count

    best: Optional[Tuple[ActionT, NodeHandle]] = None
    best_score = 0.0
    for edge in tree.edges(node):
        if edge.action not in legal_set:
            continue
        child = tree[edge.child]
        if child.visit_count == 0:
            raise UnvisitedChildError(edge.action)
        score = uct_score(child.total_reward, child.visit_count, parent_visits, exploration_constant)
        if best is None or score > best_score:
            best = (edge.action, edge.child)
            best_score = score

    if best is None:
        raise NoLegalActionsError("No children found")
    return best


def default_policy(
    game: GameStateNode[PlayerT, ActionT],
    player: PlayerT,
    evaluator: StateEvaluator[PlayerT],
    config: MCTSConfig,
    rng: random.Random,
) -> float:
    """
    Play random moves until the game ends and return the reward.

    Playouts are capped at `config.max_playout_depth` plies; a playout that
    hits the cap is scored with the evaluator instead of the win/loss reward.

    Pseudocode:
        function DEFAULTPOLICY(s)
          while s is non-terminal do
            choose a in A(s) uniformly at random
            s <- f(s, a)
          return reward for state s

    Args:
        game: State to play out, mutated in place
        player: Player whose perspective the reward uses
        evaluator: State evaluator
        config: MCTS configuration parameters
        rng: Random number generator

    Returns:
        Reward for `player`
    """
    for _ in range(config.max_playout_depth):
        current = game.current_turn()
        if current is None:
            return terminal_reward(game, player, evaluator, config.win_reward)

        action = legal_actions.random_action(game, current, rng)
        if action is None:
            raise NoLegalActionsError(f"No actions found for player {current}")
        game.execute_action(current, action)

    if game.current_turn() is None:
        return terminal_reward(game, player, evaluator, config.win_reward)
    return float(evaluator.evaluate(game, player))


def terminal_reward(
    game: GameStateNode[PlayerT, ActionT],
    player: PlayerT,
    evaluator: StateEvaluator[PlayerT],
    win_reward: float
) -> float:
    """
    Win/loss reward for a finished game.

    Uses the state's own winner when it reports one. Otherwise the result is
    judged by the sign of the evaluation, with zero counting as a draw.
    """
    winner = game.winner()
    if winner is not None:
        return win_reward if winner == player else -win_reward

    value = evaluator.evaluate(game, player)
    if value > 0:
        return win_reward
    elif value < 0:
        return -win_reward
    return 0.0


def backpropagate(tree: SearchTree, node: NodeHandle, reward: float, player: PlayerT) -> None:
    """
    Add a playout reward to `node` and every ancestor up to the root.

    Each node accumulates reward from the perspective of the player who
    acted to create it, so the reward is negated for nodes created by any
    player other than `player`.

    Pseudocode:
        function BACKUP(v, reward)
          while v is not null do
            N(v) <- N(v) + 1
            Q(v) <- Q(v) + reward(v, p)
            v <- parent of v

    Args:
        tree: Search tree
        node: Handle the playout started from
        reward: Reward from `player`'s perspective
        player: Player the search is run for
    """
    for handle in tree.ancestors(node):
        search_node = tree[handle]
        search_node.visit_count += 1
        search_node.total_reward += reward if search_node.side == player else -reward


def select_final_action(
    tree: SearchTree,
    state: GameStateNode[PlayerT, ActionT],
    player: PlayerT
) -> ActionT:
    """
    Choose the root action with the best average reward.

    Candidates are restricted to the actions that are legal for `player` in
    the original root state.
    """
    legal = legal_actions.collect(state, player)
    action, _ = best_child(tree, tree.root, legal, 0.0)
    return action


def get_action_statistics(tree: SearchTree) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all actions from the root.

    Args:
        tree: Search tree

    Returns:
        Dictionary mapping action strings to statistics
    """
    root = tree[tree.root]
    result = {}

    for edge in root.edges:
        child = tree[edge.child]
        result[str(edge.action)] = {
            "visits": child.visit_count,
            "reward": child.total_reward,
            "value": child.average_reward,
            "uct": (uct_score(child.total_reward, child.visit_count, root.visit_count, EXPLORATION_CONSTANT)
                    if child.visit_count > 0 else float('inf'))
        }

    return result


def get_principal_variation(tree: SearchTree, max_depth: int = 10) -> List[Tuple[Any, float]]:
    """
    Get the principal variation (most visited path) from the root.

    Args:
        tree: Search tree
        max_depth: Maximum depth to explore

    Returns:
        List of (action, value) pairs representing the principal variation
    """
    result = []
    current = tree.root

    while tree.edges(current) and len(result) < max_depth:
        edge = max(tree.edges(current), key=lambda e: tree[e.child].visit_count)
        result.append((edge.action, tree[edge.child].average_reward))
        current = edge.child

    return result

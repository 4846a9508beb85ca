"""Longest continuous road and the bonus that goes with it.

A player's roads form a multigraph over physical vertices. The longest road is
the longest path that never reuses a road. A vertex holding another player's
building can begin or end such a path but cannot be passed through, so a
settlement dropped in the middle of a line splits it while a closed loop keeps
its full length (the path starts and ends on the blocked corner).
"""

from __future__ import annotations

from typing import List, Optional, Set

import networkx as nx

from ..logging_config import get_logger
from .coords import edge_vertices
from .game_state import GameState

logger = get_logger(__name__)


def build_road_graph(state: GameState, player_index: int) -> nx.MultiGraph:
    graph = nx.MultiGraph()
    for edge_key, road in state.roads():
        if road.owner != player_index:
            continue
        a, b = edge_vertices(edge_key)
        if graph.has_edge(a.key, b.key, key=edge_key):
            continue
        graph.add_edge(a.key, b.key, key=edge_key)
    return graph


def _blocked_vertices(state: GameState, player_index: int) -> Set[str]:
    return {key for key, building in state.buildings() if building.owner != player_index}


def _longest_from(
    graph: nx.MultiGraph,
    node: str,
    used: Set[str],
    blocked: Set[str],
    is_start: bool,
) -> int:
    if not is_start and node in blocked:
        return 0
    best = 0
    for _, neighbor, edge_key in graph.edges(node, keys=True):
        if edge_key in used:
            continue
        used.add(edge_key)
        best = max(best, 1 + _longest_from(graph, neighbor, used, blocked, False))
        used.remove(edge_key)
    return best


def longest_road_length(state: GameState, player_index: int) -> int:
    graph = build_road_graph(state, player_index)
    if graph.number_of_edges() == 0:
        return 0
    blocked = _blocked_vertices(state, player_index)
    best = 0
    for component in nx.connected_components(graph):
        subgraph = graph.subgraph(component)
        if subgraph.number_of_edges() <= best:
            continue
        for node in subgraph.nodes:
            best = max(best, _longest_from(subgraph, node, set(), blocked, True))
            if best == subgraph.number_of_edges():
                break
    return best


def _award(state: GameState, lengths: List[int]) -> Optional[int]:
    minimum = state.config.longest_road_min_length
    holder = state.longest_road_player
    if holder is not None and lengths[holder] < minimum:
        holder = None

    new_max = max(lengths, default=0)
    if new_max < minimum:
        return None
    if holder is not None and lengths[holder] == new_max:
        return holder

    leaders = [idx for idx, length in enumerate(lengths) if length == new_max]
    if len(leaders) == 1:
        return leaders[0]
    return None


def update_longest_road(state: GameState) -> Optional[int]:
    """Recompute every road length and move the bonus if it changes hands."""
    lengths = [longest_road_length(state, idx) for idx in range(len(state.players))]
    for player, length in zip(state.players, lengths):
        player.road_length = length

    previous = state.longest_road_player
    holder = _award(state, lengths)
    bonus = state.config.longest_road_bonus

    if holder != previous:
        if previous is not None:
            state.players[previous].victory_points -= bonus
            state.players[previous].has_longest_road = False
        if holder is not None:
            state.players[holder].victory_points += bonus
            state.players[holder].has_longest_road = True
        logger.info("longest_road_changed", previous=previous, holder=holder, lengths=lengths)

    state.longest_road_player = holder
    state.longest_road_length = lengths[holder] if holder is not None else 0
    return holder

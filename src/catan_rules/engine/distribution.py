from __future__ import annotations

from typing import Dict, Set, Tuple

from .coords import canonical_vertex, hex_vertices
from .game_state import GameState
from .types import RESOURCE_TYPES, BuildingType, ResourceBank, empty_resources

BUILDING_YIELD = {
    BuildingType.SETTLEMENT: 1,
    BuildingType.CITY: 2,
}


def compute_payouts(state: GameState, roll: int) -> Dict[int, ResourceBank]:
    """Resources each player earns from ``roll``, before the bank is consulted."""
    award_by_player: Dict[int, ResourceBank] = {
        idx: empty_resources() for idx in range(len(state.players))
    }
    credited: Set[Tuple[str, str]] = set()

    for key, tile in state.board.hexes.items():
        if tile.number != roll or key == state.robber:
            continue
        resource = tile.resource
        if resource is None:
            continue
        for corner in hex_vertices(tile.q, tile.r):
            building = state.building_at(corner)
            if building is None:
                continue
            pair = (key, canonical_vertex(corner).key)
            if pair in credited:
                continue
            credited.add(pair)
            award_by_player[building.owner][resource] += BUILDING_YIELD[building.kind]
    return award_by_player


def distribute_resources(state: GameState, roll: int) -> Dict[int, ResourceBank]:
    """Pay out ``roll`` from the bank and return what each player received."""
    award_by_player = compute_payouts(state, roll)

    # A resource the bank cannot cover for everyone is paid to no one.
    for resource in RESOURCE_TYPES:
        total_needed = sum(award[resource] for award in award_by_player.values())
        if state.bank[resource] < total_needed:
            for award in award_by_player.values():
                award[resource] = 0

    for idx, award in award_by_player.items():
        player = state.players[idx]
        for resource, amount in award.items():
            if amount <= 0:
                continue
            state.bank[resource] -= amount
            player.resources[resource] += amount
    return award_by_player

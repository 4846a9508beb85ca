from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..logging_config import get_logger
from . import phases
from .coords import (
    EdgeLike,
    VertexLike,
    adjacent_vertices,
    as_edge,
    as_vertex,
    canonical_edge,
    edge_vertices,
    parse_hex_key,
    vertex_edges,
)
from .distribution import distribute_resources
from .game_state import Building, GameState, PlayerState, Road
from .longest_road import update_longest_road
from .types import (
    RESOURCE_TYPES,
    Action,
    ActionResult,
    ActionType,
    BuildingType,
    DevCardType,
    GamePhase,
    ResourceBank,
    ResourceType,
    RuleViolation,
    TurnPhase,
)

logger = get_logger(__name__)

COSTS: Dict[ActionType, Dict[ResourceType, int]] = {
    ActionType.PLACE_ROAD: {
        ResourceType.BRICK: 1,
        ResourceType.LUMBER: 1,
    },
    ActionType.PLACE_SETTLEMENT: {
        ResourceType.BRICK: 1,
        ResourceType.LUMBER: 1,
        ResourceType.GRAIN: 1,
        ResourceType.WOOL: 1,
    },
    ActionType.UPGRADE_CITY: {
        ResourceType.ORE: 3,
        ResourceType.GRAIN: 2,
    },
    ActionType.BUY_DEV_CARD: {
        ResourceType.ORE: 1,
        ResourceType.GRAIN: 1,
        ResourceType.WOOL: 1,
    },
}

TRADE_RATE = 4
ROAD_BUILDING_ROADS = 2
YEAR_OF_PLENTY_PICKS = 2

ResourceLike = Union[str, ResourceType]


def _can_afford(resources: ResourceBank, cost: Mapping[ResourceType, int]) -> bool:
    return all(resources[key] >= amount for key, amount in cost.items())


def _apply_cost(resources: ResourceBank, bank: ResourceBank, cost: Mapping[ResourceType, int]) -> None:
    for key, amount in cost.items():
        if amount <= 0:
            continue
        resources[key] -= amount
        bank[key] += amount


def _award_resources(resources: ResourceBank, bank: ResourceBank, award: Mapping[ResourceType, int]) -> None:
    for key, amount in award.items():
        if amount <= 0:
            continue
        if bank[key] < amount:
            continue
        bank[key] -= amount
        resources[key] += amount


def _parse_resource(value: ResourceLike) -> Optional[ResourceType]:
    try:
        return ResourceType(value)
    except ValueError:
        return None


def _parse_bundle(bundle: Mapping[ResourceLike, int]) -> Optional[Dict[ResourceType, int]]:
    if not isinstance(bundle, Mapping):
        return None
    parsed: Dict[ResourceType, int] = {}
    for key, value in bundle.items():
        resource = _parse_resource(key)
        if resource is None or isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        parsed[resource] = parsed.get(resource, 0) + value
    return parsed


def _reject(action: ActionType, player_id: str, violation: RuleViolation) -> ActionResult:
    logger.info("action_rejected", action=action.value, player=player_id, reason=violation.reason, detail=violation.detail)
    return ActionResult.fail(violation)


def _accept(state: GameState, action: ActionType, player_id: str, **details: object) -> ActionResult:
    logger.debug("action_applied", action=action.value, player=player_id, **details)
    _check_winner(state)
    return ActionResult.ok()


def _resolve_actor(
    state: GameState, player_id: str, action: ActionType
) -> Tuple[int, Optional[RuleViolation]]:
    idx = state.player_index(player_id)
    if idx is None:
        return -1, RuleViolation("unknown_player", str(player_id))
    violation = phases.check_action_allowed(state, action)
    if violation is not None:
        return idx, violation
    if action != ActionType.DISCARD and idx != state.acting_player_index:
        return idx, RuleViolation("not_your_turn")
    return idx, None


# Settlements ---------------------------------------------------------------


def can_place_settlement(
    state: GameState, player_id: str, vertex_key: VertexLike, is_setup: bool = False
) -> Optional[RuleViolation]:
    vertex = as_vertex(vertex_key)
    idx, violation = _resolve_actor(state, player_id, ActionType.PLACE_SETTLEMENT)
    if violation is not None:
        return violation

    setup = state.phase == GamePhase.SETUP
    if is_setup != setup:
        return RuleViolation("wrong_phase", "setup placement only during setup")
    if setup and state.setup_pending_vertex is not None:
        return RuleViolation("must_place_road")
    if not state.board.vertex_on_board(vertex):
        return RuleViolation("vertex_off_board", vertex.key)
    if state.building_at(vertex) is not None:
        return RuleViolation("vertex_occupied", vertex.key)
    for neighbor in adjacent_vertices(vertex):
        if state.building_at(neighbor) is not None:
            return RuleViolation("distance_rule", f"{neighbor.key} is occupied")

    player = state.players[idx]
    if player.settlements_left <= 0:
        return RuleViolation("no_pieces_left", "settlement")
    if setup:
        return None
    if not any(_owns_road(state, idx, edge) for edge in vertex_edges(vertex)):
        return RuleViolation("settlement_not_connected")
    if not _can_afford(player.resources, COSTS[ActionType.PLACE_SETTLEMENT]):
        return RuleViolation("insufficient_resources")
    return None


def _owns_road(state: GameState, idx: int, edge: EdgeLike) -> bool:
    road = state.road_at(edge)
    return road is not None and road.owner == idx


def _collect_setup_resources(state: GameState, player: PlayerState, vertex: VertexLike) -> None:
    award: Dict[ResourceType, int] = {}
    for tile in state.board.hexes_touching_vertex(vertex):
        if tile.resource is None:
            continue
        award[tile.resource] = award.get(tile.resource, 0) + 1
    _award_resources(player.resources, state.bank, award)


def place_settlement(
    state: GameState, player_id: str, vertex_key: VertexLike, is_setup: bool = False
) -> ActionResult:
    violation = can_place_settlement(state, player_id, vertex_key, is_setup)
    if violation is not None:
        return _reject(ActionType.PLACE_SETTLEMENT, player_id, violation)

    idx = state.player_index(player_id)
    player = state.players[idx]
    key = state.set_building(vertex_key, Building(owner=idx, kind=BuildingType.SETTLEMENT))
    player.settlements_left -= 1
    player.victory_points += 1

    if is_setup:
        state.setup_pending_vertex = key
        if state.setup_round == 1:
            _collect_setup_resources(state, player, key)
    else:
        _apply_cost(player.resources, state.bank, COSTS[ActionType.PLACE_SETTLEMENT])

    # A new settlement can cut an opponent's road.
    update_longest_road(state)
    return _accept(state, ActionType.PLACE_SETTLEMENT, player_id, vertex=key)


# Roads ---------------------------------------------------------------------


def _road_connected(state: GameState, idx: int, edge: EdgeLike) -> bool:
    target = canonical_edge(edge)
    for vertex in edge_vertices(target):
        building = state.building_at(vertex)
        if building is not None:
            if building.owner == idx:
                return True
            # Another player's building: no extending through this corner.
            continue
        for other in vertex_edges(vertex):
            if other != target and _owns_road(state, idx, other):
                return True
    return False


def can_place_road(
    state: GameState,
    player_id: str,
    edge_key: EdgeLike,
    free: bool = False,
    context_card_id: Optional[str] = None,
) -> Optional[RuleViolation]:
    edge = as_edge(edge_key)
    idx, violation = _resolve_actor(state, player_id, ActionType.PLACE_ROAD)
    if violation is not None:
        return violation

    if not state.board.edge_on_board(edge):
        return RuleViolation("edge_off_board", edge.key)
    if state.road_at(edge) is not None:
        return RuleViolation("edge_occupied", edge.key)
    player = state.players[idx]
    if player.roads_left <= 0:
        return RuleViolation("no_pieces_left", "road")

    if state.phase == GamePhase.SETUP:
        if state.setup_pending_vertex is None:
            return RuleViolation("must_place_settlement_first")
        if state.setup_pending_vertex not in {v.key for v in edge_vertices(edge)}:
            return RuleViolation("road_not_adjacent_to_setup")
        return None

    if free:
        if state.free_roads <= 0:
            return RuleViolation("no_free_roads")
        if context_card_id is not None and context_card_id != DevCardType.ROAD_BUILDING.value:
            return RuleViolation("invalid_context_card", str(context_card_id))
    elif state.turn_phase == TurnPhase.ROLL:
        return RuleViolation("wrong_phase", "roll the dice before building")

    if not _road_connected(state, idx, edge):
        return RuleViolation("road_not_connected")
    if not free and not _can_afford(player.resources, COSTS[ActionType.PLACE_ROAD]):
        return RuleViolation("insufficient_resources")
    return None


def place_road(
    state: GameState,
    player_id: str,
    edge_key: EdgeLike,
    free: bool = False,
    context_card_id: Optional[str] = None,
) -> ActionResult:
    violation = can_place_road(state, player_id, edge_key, free, context_card_id)
    if violation is not None:
        return _reject(ActionType.PLACE_ROAD, player_id, violation)

    idx = state.player_index(player_id)
    player = state.players[idx]
    key = state.set_road(edge_key, Road(owner=idx))
    player.roads_left -= 1

    if state.phase == GamePhase.SETUP:
        state.setup_pending_vertex = None
        phases.advance_setup(state)
    elif free:
        state.free_roads -= 1
    else:
        _apply_cost(player.resources, state.bank, COSTS[ActionType.PLACE_ROAD])

    update_longest_road(state)
    return _accept(state, ActionType.PLACE_ROAD, player_id, edge=key)


# Cities --------------------------------------------------------------------


def upgrade_to_city(state: GameState, player_id: str, vertex_key: VertexLike) -> ActionResult:
    vertex = as_vertex(vertex_key)
    idx, violation = _resolve_actor(state, player_id, ActionType.UPGRADE_CITY)
    if violation is None:
        player = state.players[idx]
        building = state.building_at(vertex)
        if building is None or building.owner != idx or building.kind != BuildingType.SETTLEMENT:
            violation = RuleViolation("city_requires_settlement", vertex.key)
        elif player.cities_left <= 0:
            violation = RuleViolation("no_pieces_left", "city")
        elif not _can_afford(player.resources, COSTS[ActionType.UPGRADE_CITY]):
            violation = RuleViolation("insufficient_resources")
    if violation is not None:
        return _reject(ActionType.UPGRADE_CITY, player_id, violation)

    key = state.set_building(vertex, Building(owner=idx, kind=BuildingType.CITY))
    player.cities_left -= 1
    player.settlements_left += 1
    player.victory_points += 1
    _apply_cost(player.resources, state.bank, COSTS[ActionType.UPGRADE_CITY])
    return _accept(state, ActionType.UPGRADE_CITY, player_id, vertex=key)


# Development cards ---------------------------------------------------------


def buy_dev_card(state: GameState, player_id: str) -> ActionResult:
    idx, violation = _resolve_actor(state, player_id, ActionType.BUY_DEV_CARD)
    if violation is None:
        player = state.players[idx]
        if not state.dev_deck:
            violation = RuleViolation("dev_deck_empty")
        elif not _can_afford(player.resources, COSTS[ActionType.BUY_DEV_CARD]):
            violation = RuleViolation("insufficient_resources")
    if violation is not None:
        return _reject(ActionType.BUY_DEV_CARD, player_id, violation)

    _apply_cost(player.resources, state.bank, COSTS[ActionType.BUY_DEV_CARD])
    card = state.dev_deck.pop()
    if card == DevCardType.VICTORY_POINT:
        player.hidden_victory_points += 1
    else:
        player.new_dev_cards.append(card)
    return _accept(state, ActionType.BUY_DEV_CARD, player_id)


def _update_largest_army(state: GameState, idx: int) -> None:
    player = state.players[idx]
    if player.knights_played < state.config.largest_army_min_knights:
        return
    holder = state.largest_army_player
    if holder == idx:
        return
    bonus = state.config.largest_army_bonus
    if holder is not None:
        if state.players[holder].knights_played >= player.knights_played:
            return
        state.players[holder].victory_points -= bonus
        state.players[holder].has_largest_army = False
    player.victory_points += bonus
    player.has_largest_army = True
    state.largest_army_player = idx


def _check_card_payload(
    state: GameState, player: PlayerState, card: DevCardType, payload: Mapping[str, object]
) -> Optional[RuleViolation]:
    if card == DevCardType.YEAR_OF_PLENTY:
        picks = payload.get("resources")
        if not isinstance(picks, (list, tuple)) or len(picks) != YEAR_OF_PLENTY_PICKS:
            return RuleViolation("invalid_payload", "year_of_plenty needs two resources")
        wanted: Dict[ResourceType, int] = {}
        for pick in picks:
            resource = _parse_resource(pick)
            if resource is None:
                return RuleViolation("invalid_resource", str(pick))
            wanted[resource] = wanted.get(resource, 0) + 1
        if not _can_afford(state.bank, wanted):
            return RuleViolation("bank_empty")
    elif card == DevCardType.MONOPOLY:
        if _parse_resource(payload.get("resource")) is None:
            return RuleViolation("invalid_resource", str(payload.get("resource")))
    elif card == DevCardType.ROAD_BUILDING:
        if player.roads_left <= 0:
            return RuleViolation("no_pieces_left", "road")
    return None


def play_dev_card(
    state: GameState,
    player_id: str,
    card: Union[str, DevCardType],
    payload: Optional[Mapping[str, object]] = None,
) -> ActionResult:
    payload = payload or {}
    try:
        card = DevCardType(card)
    except ValueError:
        return _reject(ActionType.PLAY_DEV_CARD, player_id, RuleViolation("unknown_card", str(card)))

    idx, violation = _resolve_actor(state, player_id, ActionType.PLAY_DEV_CARD)
    if violation is not None:
        return _reject(ActionType.PLAY_DEV_CARD, player_id, violation)
    player = state.players[idx]

    if card == DevCardType.VICTORY_POINT:
        # Point cards are never limited per turn; playing one reveals it.
        if player.hidden_victory_points <= 0:
            return _reject(ActionType.PLAY_DEV_CARD, player_id, RuleViolation("card_not_in_hand", card.value))
        player.hidden_victory_points -= 1
        player.victory_points += 1
        return _accept(state, ActionType.PLAY_DEV_CARD, player_id, card=card.value)

    if card not in player.development_cards:
        reason = "card_bought_this_turn" if card in player.new_dev_cards else "card_not_in_hand"
        violation = RuleViolation(reason, card.value)
    elif state.dev_card_played_this_turn:
        violation = RuleViolation("dev_card_already_played")
    else:
        violation = _check_card_payload(state, player, card, payload)
    if violation is not None:
        return _reject(ActionType.PLAY_DEV_CARD, player_id, violation)

    player.development_cards.remove(card)
    state.dev_card_played_this_turn = True

    if card == DevCardType.KNIGHT:
        player.knights_played += 1
        _update_largest_army(state, idx)
        phases.transition(state, TurnPhase.ROBBER)
    elif card == DevCardType.ROAD_BUILDING:
        state.free_roads = min(ROAD_BUILDING_ROADS, player.roads_left)
    elif card == DevCardType.YEAR_OF_PLENTY:
        for pick in payload["resources"]:
            _award_resources(player.resources, state.bank, {ResourceType(pick): 1})
    elif card == DevCardType.MONOPOLY:
        resource = ResourceType(payload["resource"])
        for other_idx, other in enumerate(state.players):
            if other_idx == idx:
                continue
            player.resources[resource] += other.resources[resource]
            other.resources[resource] = 0

    return _accept(state, ActionType.PLAY_DEV_CARD, player_id, card=card.value)


# Robber, dice and discards -------------------------------------------------


def _players_on_hex(state: GameState, hex_key: str) -> List[int]:
    tile = state.board.hexes[hex_key]
    owners: List[int] = []
    for direction in range(6):
        building = state.building_at(f"v_{tile.q}_{tile.r}_{direction}")
        if building is not None and building.owner not in owners:
            owners.append(building.owner)
    return owners


def _steal_one(state: GameState, thief: PlayerState, victim: PlayerState) -> Optional[ResourceType]:
    pool = [resource for resource in RESOURCE_TYPES for _ in range(victim.resources[resource])]
    if not pool:
        return None
    resource = state.rng.choice(pool)
    victim.resources[resource] -= 1
    thief.resources[resource] += 1
    return resource


def move_robber(
    state: GameState,
    player_id: str,
    hex_key: str,
    steal_from_player_id: Optional[str] = None,
) -> ActionResult:
    parse_hex_key(hex_key)
    idx, violation = _resolve_actor(state, player_id, ActionType.MOVE_ROBBER)
    victim_idx: Optional[int] = None
    if violation is None:
        if hex_key not in state.board.hexes:
            violation = RuleViolation("hex_not_found", hex_key)
        elif hex_key == state.robber:
            violation = RuleViolation("robber_must_move")
        elif steal_from_player_id is not None:
            victim_idx = state.player_index(steal_from_player_id)
            if victim_idx is None:
                violation = RuleViolation("unknown_player", str(steal_from_player_id))
            elif victim_idx == idx:
                violation = RuleViolation("cannot_steal_from_self")
            elif victim_idx not in _players_on_hex(state, hex_key):
                violation = RuleViolation("steal_target_not_adjacent")
    if violation is not None:
        return _reject(ActionType.MOVE_ROBBER, player_id, violation)

    state.robber = hex_key
    stolen = None
    if victim_idx is not None:
        stolen = _steal_one(state, state.players[idx], state.players[victim_idx])
    phases.resume_after_interrupt(state)
    return _accept(
        state,
        ActionType.MOVE_ROBBER,
        player_id,
        hex=hex_key,
        stolen=stolen.value if stolen is not None else None,
    )


def roll_dice(state: GameState, player_id: str) -> ActionResult:
    _, violation = _resolve_actor(state, player_id, ActionType.ROLL_DICE)
    if violation is not None:
        return _reject(ActionType.ROLL_DICE, player_id, violation)

    dice = (state.rng.roll_die(), state.rng.roll_die())
    total = dice[0] + dice[1]
    state.last_roll = dice
    state.has_rolled_this_turn = True

    if total == 7:
        limit = state.config.max_hand_size
        state.pending_discards = {
            pidx: player.resource_count // 2
            for pidx, player in enumerate(state.players)
            if player.resource_count > limit
        }
        if state.pending_discards:
            phases.transition(state, TurnPhase.DISCARD)
        else:
            phases.transition(state, TurnPhase.ROBBER)
    else:
        distribute_resources(state, total)
        phases.transition(state, TurnPhase.MAIN)
    return _accept(state, ActionType.ROLL_DICE, player_id, roll=total)


def discard_resources(
    state: GameState, player_id: str, resources: Mapping[ResourceLike, int]
) -> ActionResult:
    idx, violation = _resolve_actor(state, player_id, ActionType.DISCARD)
    bundle: Optional[Dict[ResourceType, int]] = None
    if violation is None:
        required = state.pending_discards.get(idx, 0)
        bundle = _parse_bundle(resources)
        if required <= 0:
            violation = RuleViolation("no_discard_required")
        elif bundle is None:
            violation = RuleViolation("invalid_discard_payload")
        elif sum(bundle.values()) != required:
            violation = RuleViolation("discard_count_mismatch", f"expected {required}")
        elif not _can_afford(state.players[idx].resources, bundle):
            violation = RuleViolation("insufficient_resources")
    if violation is not None:
        return _reject(ActionType.DISCARD, player_id, violation)

    _apply_cost(state.players[idx].resources, state.bank, bundle)
    del state.pending_discards[idx]
    if not state.pending_discards:
        phases.transition(state, TurnPhase.ROBBER)
    return _accept(state, ActionType.DISCARD, player_id)


# Trading -------------------------------------------------------------------


def trade_rate(state: GameState, player_index: int, resource: ResourceType) -> int:
    best = TRADE_RATE
    for key, building in state.buildings():
        if building.owner != player_index:
            continue
        for port in state.board.ports_at(key):
            if port.resource is None or port.resource == resource:
                best = min(best, port.ratio)
    return best


def trade_with_bank(
    state: GameState, player_id: str, give: ResourceLike, receive: ResourceLike
) -> ActionResult:
    idx, violation = _resolve_actor(state, player_id, ActionType.TRADE_BANK)
    give_res = _parse_resource(give)
    receive_res = _parse_resource(receive)
    if violation is None:
        if give_res is None or receive_res is None:
            violation = RuleViolation("invalid_trade_resource")
        elif give_res == receive_res:
            violation = RuleViolation("invalid_trade_pair")
        elif state.players[idx].resources[give_res] < trade_rate(state, idx, give_res):
            violation = RuleViolation("insufficient_resources")
        elif state.bank[receive_res] <= 0:
            violation = RuleViolation("bank_empty")
    if violation is not None:
        return _reject(ActionType.TRADE_BANK, player_id, violation)

    rate = trade_rate(state, idx, give_res)
    player = state.players[idx]
    _apply_cost(player.resources, state.bank, {give_res: rate})
    _award_resources(player.resources, state.bank, {receive_res: 1})
    return _accept(state, ActionType.TRADE_BANK, player_id, give=give_res.value, receive=receive_res.value, rate=rate)


def trade_with_player(
    state: GameState,
    player_id: str,
    other_player_id: str,
    give: Mapping[ResourceLike, int],
    receive: Mapping[ResourceLike, int],
) -> ActionResult:
    idx, violation = _resolve_actor(state, player_id, ActionType.TRADE_PLAYER)
    other_idx = state.player_index(other_player_id)
    give_bundle = _parse_bundle(give)
    receive_bundle = _parse_bundle(receive)
    if violation is None:
        if other_idx is None or other_idx == idx:
            violation = RuleViolation("invalid_trade_target", str(other_player_id))
        elif give_bundle is None or receive_bundle is None:
            violation = RuleViolation("invalid_trade_resource")
        elif not any(give_bundle.values()) or not any(receive_bundle.values()):
            violation = RuleViolation("invalid_trade_pair", "both sides must offer resources")
        elif not _can_afford(state.players[idx].resources, give_bundle):
            violation = RuleViolation("insufficient_resources")
        elif not _can_afford(state.players[other_idx].resources, receive_bundle):
            violation = RuleViolation("counterparty_insufficient_resources")
    if violation is not None:
        return _reject(ActionType.TRADE_PLAYER, player_id, violation)

    player = state.players[idx]
    other = state.players[other_idx]
    for res, amt in give_bundle.items():
        player.resources[res] -= amt
        other.resources[res] += amt
    for res, amt in receive_bundle.items():
        other.resources[res] -= amt
        player.resources[res] += amt
    return _accept(state, ActionType.TRADE_PLAYER, player_id, to_player=other_player_id)


# Turn end ------------------------------------------------------------------


def _finish_turn(state: GameState) -> None:
    for player in state.players:
        player.development_cards.extend(player.new_dev_cards)
        player.new_dev_cards = []
    phases.advance_turn(state)


def end_turn(state: GameState, player_id: str) -> ActionResult:
    _, violation = _resolve_actor(state, player_id, ActionType.END_TURN)
    if violation is not None:
        return _reject(ActionType.END_TURN, player_id, violation)

    num_players = len(state.players)
    if state.turn_phase == TurnPhase.MAIN:
        if state.config.special_build_phase and num_players > 1:
            phases.transition(state, TurnPhase.SPECIAL_BUILD)
            state.special_build_index = (state.current_player_index + 1) % num_players
            state.free_roads = 0
        else:
            _finish_turn(state)
    else:
        following = (state.special_build_index + 1) % num_players
        if following == state.current_player_index:
            _finish_turn(state)
        else:
            state.special_build_index = following
    return _accept(state, ActionType.END_TURN, player_id)


# Winner and dispatch -------------------------------------------------------


def _check_winner(state: GameState) -> None:
    if state.phase != GamePhase.PLAYING:
        return
    first = state.acting_player_index
    order = [first] + [idx for idx in range(len(state.players)) if idx != first]
    for idx in order:
        if state.players[idx].total_victory_points >= state.config.victory_points_to_win:
            state.winner = idx
            state.phase = GamePhase.FINISHED
            logger.info("game_finished", winner=state.players[idx].player_id)
            return


def _payload(action: Action, *names: str) -> Optional[List[object]]:
    if any(name not in action.payload for name in names):
        return None
    return [action.payload[name] for name in names]


def apply_action(state: GameState, player_id: str, action: Action) -> ActionResult:
    """Route an :class:`Action` to the matching action function."""
    payload = action.payload
    kind = action.action_type
    if kind == ActionType.ROLL_DICE:
        return roll_dice(state, player_id)
    if kind == ActionType.END_TURN:
        return end_turn(state, player_id)
    if kind == ActionType.BUY_DEV_CARD:
        return buy_dev_card(state, player_id)

    required: Dict[ActionType, Tuple[str, ...]] = {
        ActionType.PLACE_SETTLEMENT: ("vertex",),
        ActionType.PLACE_ROAD: ("edge",),
        ActionType.UPGRADE_CITY: ("vertex",),
        ActionType.PLAY_DEV_CARD: ("card",),
        ActionType.MOVE_ROBBER: ("hex",),
        ActionType.DISCARD: ("resources",),
        ActionType.TRADE_BANK: ("give", "receive"),
        ActionType.TRADE_PLAYER: ("to_player", "give", "receive"),
    }
    args = _payload(action, *required[kind])
    if args is None:
        return _reject(kind, player_id, RuleViolation("invalid_payload", ", ".join(required[kind])))

    if kind == ActionType.PLACE_SETTLEMENT:
        is_setup = bool(payload.get("is_setup", state.phase == GamePhase.SETUP))
        return place_settlement(state, player_id, args[0], is_setup)
    if kind == ActionType.PLACE_ROAD:
        return place_road(
            state, player_id, args[0], bool(payload.get("free", False)), payload.get("context_card_id")
        )
    if kind == ActionType.UPGRADE_CITY:
        return upgrade_to_city(state, player_id, args[0])
    if kind == ActionType.PLAY_DEV_CARD:
        extra = {key: value for key, value in payload.items() if key != "card"}
        return play_dev_card(state, player_id, args[0], extra)
    if kind == ActionType.MOVE_ROBBER:
        return move_robber(state, player_id, args[0], payload.get("steal_from"))
    if kind == ActionType.DISCARD:
        return discard_resources(state, player_id, args[0])
    if kind == ActionType.TRADE_BANK:
        return trade_with_bank(state, player_id, args[0], args[1])
    return trade_with_player(state, player_id, args[0], args[1], args[2])


def legal_action_types(state: GameState, player_id: str) -> Iterable[ActionType]:
    """Action kinds the phase table lets ``player_id`` attempt right now."""
    idx = state.player_index(player_id)
    if idx is None:
        return frozenset()
    allowed = phases.allowed_actions(state)
    if state.phase == GamePhase.PLAYING and state.turn_phase == TurnPhase.DISCARD:
        return allowed if idx in state.pending_discards else frozenset()
    if idx != state.acting_player_index:
        return frozenset()
    return allowed

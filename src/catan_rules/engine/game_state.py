from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..config import DEFAULT_CONFIG, GameConfig
from ..utils.repro import RandomSource
from .board import Board
from .coords import (
    EdgeLike,
    VertexLike,
    canonical_edge,
    canonical_vertex,
    equivalent_edges,
    equivalent_vertices,
)
from .types import (
    RESOURCE_TYPES,
    BuildingType,
    DevCardType,
    GamePhase,
    ResourceBank,
    TurnPhase,
    empty_resources,
)

STANDARD_DEV_DECK: Dict[DevCardType, int] = {
    DevCardType.KNIGHT: 14,
    DevCardType.VICTORY_POINT: 5,
    DevCardType.ROAD_BUILDING: 2,
    DevCardType.YEAR_OF_PLENTY: 2,
    DevCardType.MONOPOLY: 2,
}


@dataclass
class Building:
    owner: int
    kind: BuildingType


@dataclass
class Road:
    owner: int


@dataclass
class PlayerState:
    player_id: str
    name: str
    resources: ResourceBank = field(default_factory=empty_resources)
    settlements_left: int = 5
    cities_left: int = 4
    roads_left: int = 15
    victory_points: int = 0
    hidden_victory_points: int = 0
    has_longest_road: bool = False
    road_length: int = 0
    development_cards: List[DevCardType] = field(default_factory=list)
    new_dev_cards: List[DevCardType] = field(default_factory=list)
    knights_played: int = 0
    has_largest_army: bool = False

    @property
    def total_victory_points(self) -> int:
        return self.victory_points + self.hidden_victory_points

    @property
    def resource_count(self) -> int:
        return sum(self.resources.values())


@dataclass
class GameState:
    game_id: str
    board: Board
    players: List[PlayerState]
    config: GameConfig
    rng: RandomSource = field(repr=False, compare=False)
    bank: ResourceBank
    dev_deck: List[DevCardType]
    robber: Optional[str]
    vertices: Dict[str, Building] = field(default_factory=dict)
    edges: Dict[str, Road] = field(default_factory=dict)
    current_player_index: int = 0
    phase: GamePhase = GamePhase.SETUP
    turn_phase: TurnPhase = TurnPhase.ROLL
    has_rolled_this_turn: bool = False
    dev_card_played_this_turn: bool = False
    longest_road_player: Optional[int] = None
    longest_road_length: int = 0
    largest_army_player: Optional[int] = None
    setup_round: int = 0
    setup_pending_vertex: Optional[str] = None
    pending_discards: Dict[int, int] = field(default_factory=dict)
    free_roads: int = 0
    special_build_index: Optional[int] = None
    last_roll: Optional[Tuple[int, int]] = None
    turn_number: int = 0
    winner: Optional[int] = None
    # Seat of the player a projected view was made for.
    viewer_index: Optional[int] = None

    def player_index(self, player_id: str) -> Optional[int]:
        for idx, player in enumerate(self.players):
            if player.player_id == player_id:
                return idx
        return None

    @property
    def acting_player_index(self) -> int:
        """Whoever may build right now: the special builder during that window."""
        if self.turn_phase == TurnPhase.SPECIAL_BUILD and self.special_build_index is not None:
            return self.special_build_index
        return self.current_player_index

    def building_at(self, vertex: VertexLike) -> Optional[Building]:
        for candidate in equivalent_vertices(vertex):
            building = self.vertices.get(candidate.key)
            if building is not None:
                return building
        return None

    def road_at(self, edge: EdgeLike) -> Optional[Road]:
        for candidate in equivalent_edges(edge):
            road = self.edges.get(candidate.key)
            if road is not None:
                return road
        return None

    def set_building(self, vertex: VertexLike, building: Building) -> str:
        key = canonical_vertex(vertex).key
        for candidate in equivalent_vertices(vertex):
            self.vertices.pop(candidate.key, None)
        self.vertices[key] = building
        return key

    def set_road(self, edge: EdgeLike, road: Road) -> str:
        key = canonical_edge(edge).key
        for candidate in equivalent_edges(edge):
            self.edges.pop(candidate.key, None)
        self.edges[key] = road
        return key

    def buildings(self) -> Iterable[Tuple[str, Building]]:
        """Occupied vertices under their canonical keys."""
        for key, building in self.vertices.items():
            yield canonical_vertex(key).key, building

    def roads(self) -> Iterable[Tuple[str, Road]]:
        """Built roads under their canonical keys."""
        for key, road in self.edges.items():
            yield canonical_edge(key).key, road


def _full_bank(count: int) -> ResourceBank:
    return {resource: count for resource in RESOURCE_TYPES}


def _new_dev_deck(rng: RandomSource) -> List[DevCardType]:
    deck: List[DevCardType] = []
    for card, count in STANDARD_DEV_DECK.items():
        deck.extend([card] * count)
    rng.shuffle(deck)
    return deck


PlayerEntry = Union[str, Tuple[str, str]]


def initial_game_state(
    board: Board,
    players: Sequence[PlayerEntry],
    config: Optional[GameConfig] = None,
    rng: Optional[RandomSource] = None,
    game_id: Optional[str] = None,
) -> GameState:
    """Create a game in the setup phase.

    ``players`` is the seating order; each entry is a player id or an
    ``(id, name)`` pair.
    """
    if config is None:
        config = DEFAULT_CONFIG
    if rng is None:
        rng = RandomSource()
    if not config.min_players <= len(players) <= config.max_players:
        raise ValueError(
            f"expected {config.min_players}-{config.max_players} players, got {len(players)}"
        )

    player_states: List[PlayerState] = []
    for entry in players:
        player_id, name = (entry, entry) if isinstance(entry, str) else entry
        if any(p.player_id == player_id for p in player_states):
            raise ValueError(f"duplicate player id {player_id!r}")
        player_states.append(
            PlayerState(
                player_id=player_id,
                name=name,
                settlements_left=config.settlements_per_player,
                cities_left=config.cities_per_player,
                roads_left=config.roads_per_player,
            )
        )

    # No desert means the robber stays off the board until first moved.
    robber = board.desert_key()

    return GameState(
        game_id=game_id or uuid.uuid4().hex,
        board=board,
        players=player_states,
        config=config,
        rng=rng,
        bank=_full_bank(config.bank_resource_count),
        dev_deck=_new_dev_deck(rng),
        robber=robber,
    )

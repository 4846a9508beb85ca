from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..utils.repro import RandomSource
from .coords import (
    EdgeCoord,
    EdgeLike,
    HexCoord,
    VertexCoord,
    VertexLike,
    canonical_edge,
    canonical_vertex,
    edge_hexes,
    edge_vertices,
    hex_edges,
    hex_key,
    hex_neighbors,
    hex_vertices,
    parse_hex_key,
    vertex_edges,
    vertex_hexes,
)
from .types import TERRAIN_RESOURCES, ResourceType, Terrain

AXIAL_RADIUS = 2

STANDARD_TERRAINS = [
    Terrain.HILLS,
    Terrain.HILLS,
    Terrain.HILLS,
    Terrain.FOREST,
    Terrain.FOREST,
    Terrain.FOREST,
    Terrain.FOREST,
    Terrain.MOUNTAINS,
    Terrain.MOUNTAINS,
    Terrain.MOUNTAINS,
    Terrain.FIELDS,
    Terrain.FIELDS,
    Terrain.FIELDS,
    Terrain.FIELDS,
    Terrain.PASTURE,
    Terrain.PASTURE,
    Terrain.PASTURE,
    Terrain.PASTURE,
    Terrain.DESERT,
]

STANDARD_NUMBER_TOKENS = [
    2,
    3,
    3,
    4,
    4,
    5,
    5,
    6,
    6,
    8,
    8,
    9,
    9,
    10,
    10,
    11,
    11,
    12,
]

# Four generic 3:1 harbours and one 2:1 harbour per resource.
STANDARD_PORTS: List[Optional[ResourceType]] = [
    None,
    None,
    None,
    None,
    ResourceType.BRICK,
    ResourceType.LUMBER,
    ResourceType.ORE,
    ResourceType.GRAIN,
    ResourceType.WOOL,
]

# Positions along the 30 coastal edges of a radius-2 board.
PORT_SLOTS = [0, 3, 7, 10, 13, 17, 20, 23, 27]

GENERIC_PORT_RATIO = 3
SPECIFIC_PORT_RATIO = 2


@dataclass(frozen=True)
class NumberShuffleConstraints:
    no_adjacent_six_eight: bool = True
    no_adjacent_same_number: bool = False
    no_adjacent_two_twelve: bool = False
    max_attempts: int = 5000


@dataclass(frozen=True)
class HexTile:
    q: int
    r: int
    terrain: Terrain
    number: Optional[int] = None

    @property
    def key(self) -> str:
        return hex_key(self.q, self.r)

    @property
    def resource(self) -> Optional[ResourceType]:
        return TERRAIN_RESOURCES[self.terrain]


@dataclass(frozen=True)
class Port:
    port_id: int
    vertices: Tuple[str, str]
    resource: Optional[ResourceType]
    ratio: int


@dataclass
class Board:
    hexes: Dict[str, HexTile]
    ports: List[Port] = field(default_factory=list)

    def has_hex(self, coord: HexCoord) -> bool:
        return hex_key(*coord) in self.hexes

    def hex_at(self, key: str) -> Optional[HexTile]:
        parse_hex_key(key)
        return self.hexes.get(key)

    def desert_key(self) -> Optional[str]:
        for key, tile in self.hexes.items():
            if tile.terrain == Terrain.DESERT:
                return key
        return None

    def vertex_on_board(self, vertex: VertexLike) -> bool:
        return any(self.has_hex(coord) for coord in vertex_hexes(vertex))

    def edge_on_board(self, edge: EdgeLike) -> bool:
        return any(self.has_hex(coord) for coord in edge_hexes(edge))

    def hexes_touching_vertex(self, vertex: VertexLike) -> List[HexTile]:
        return [
            self.hexes[hex_key(*coord)] for coord in vertex_hexes(vertex) if self.has_hex(coord)
        ]

    def vertices(self) -> Set[VertexCoord]:
        result: Set[VertexCoord] = set()
        for tile in self.hexes.values():
            result.update(canonical_vertex(v) for v in hex_vertices(tile.q, tile.r))
        return result

    def edges(self) -> Set[EdgeCoord]:
        result: Set[EdgeCoord] = set()
        for tile in self.hexes.values():
            result.update(canonical_edge(e) for e in hex_edges(tile.q, tile.r))
        return result

    def tile_neighbors(self, key: str) -> List[str]:
        q, r = parse_hex_key(key)
        return [hex_key(*coord) for coord in hex_neighbors(q, r) if self.has_hex(coord)]

    def coastal_edges(self) -> List[EdgeCoord]:
        """Edges with land on one side only, in walking order around the coast."""
        coastal = {
            edge
            for edge in self.edges()
            if sum(1 for coord in edge_hexes(edge) if self.has_hex(coord)) == 1
        }
        if not coastal:
            return []
        ordered = [min(coastal)]
        remaining = set(coastal) - {ordered[0]}
        while remaining:
            current = ordered[-1]
            following = None
            for vertex in edge_vertices(current):
                for candidate in vertex_edges(vertex):
                    if candidate in remaining:
                        following = candidate
                        break
                if following is not None:
                    break
            if following is None:
                # Coast made of several rings; restart from the next free edge.
                following = min(remaining)
            ordered.append(following)
            remaining.discard(following)
        return ordered

    def ports_at(self, vertex: VertexLike) -> List[Port]:
        key = canonical_vertex(vertex).key
        return [port for port in self.ports if key in port.vertices]


def axial_coords(radius: int = AXIAL_RADIUS) -> List[HexCoord]:
    coords: List[HexCoord] = []
    for q in range(-radius, radius + 1):
        for r in range(-radius, radius + 1):
            if -radius <= q + r <= radius:
                coords.append((q, r))
    return coords


def _numbers_valid(
    numbers_by_tile: Dict[HexCoord, int],
    constraints: NumberShuffleConstraints,
) -> bool:
    for (q, r), value in numbers_by_tile.items():
        for neighbor in hex_neighbors(q, r):
            if neighbor not in numbers_by_tile:
                continue
            other = numbers_by_tile[neighbor]
            if constraints.no_adjacent_six_eight and value in (6, 8) and other in (6, 8):
                return False
            if constraints.no_adjacent_same_number and value == other:
                return False
            if constraints.no_adjacent_two_twelve and value in (2, 12) and other in (2, 12):
                return False
    return True


def _assign_numbers(
    coords: List[HexCoord],
    numbers: List[int],
    rng: RandomSource,
    constraints: NumberShuffleConstraints,
) -> Dict[HexCoord, int]:
    for _ in range(constraints.max_attempts):
        rng.shuffle(numbers)
        numbers_by_tile = {coord: numbers[idx] for idx, coord in enumerate(coords)}
        if _numbers_valid(numbers_by_tile, constraints):
            return numbers_by_tile
    raise RuntimeError("Failed to assign numbers within constraints")


def _place_ports(board: Board, port_types: Sequence[Optional[ResourceType]]) -> List[Port]:
    coast = board.coastal_edges()
    if len(coast) < len(PORT_SLOTS):
        return []
    step = len(coast) / 30
    ports: List[Port] = []
    for port_id, (slot, resource) in enumerate(zip(PORT_SLOTS, port_types)):
        edge = coast[int(slot * step)]
        a, b = edge_vertices(edge)
        ratio = GENERIC_PORT_RATIO if resource is None else SPECIFIC_PORT_RATIO
        ports.append(Port(port_id=port_id, vertices=(a.key, b.key), resource=resource, ratio=ratio))
    return ports


def build_board(
    layout: Iterable[Tuple[int, int, Terrain, Optional[int]]],
    ports: Optional[List[Port]] = None,
) -> Board:
    """Build a board from explicit ``(q, r, terrain, number)`` entries."""
    hexes: Dict[str, HexTile] = {}
    for q, r, terrain, number in layout:
        tile = HexTile(q=q, r=r, terrain=Terrain(terrain), number=number)
        hexes[tile.key] = tile
    return Board(hexes=hexes, ports=list(ports or []))


def standard_board(
    seed: Optional[int] = None,
    constraints: Optional[NumberShuffleConstraints] = None,
    rng: Optional[RandomSource] = None,
) -> Board:
    if rng is None:
        rng = RandomSource(seed)
    if constraints is None:
        constraints = NumberShuffleConstraints()

    coords = axial_coords()
    terrains = list(STANDARD_TERRAINS)
    numbers = list(STANDARD_NUMBER_TOKENS)
    rng.shuffle(terrains)

    producing = [coord for coord, terrain in zip(coords, terrains) if terrain != Terrain.DESERT]
    numbers_by_tile = _assign_numbers(producing, numbers, rng, constraints)

    board = build_board(
        (q, r, terrain, numbers_by_tile.get((q, r)))
        for (q, r), terrain in zip(coords, terrains)
    )
    port_types = list(STANDARD_PORTS)
    rng.shuffle(port_types)
    board.ports = _place_ports(board, port_types)
    return board

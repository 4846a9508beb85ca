"""Hex, vertex and edge addressing on an axial pointy-top grid.

Every hex corner is shared by three hexes and every hex side by two, so a
single physical vertex or edge has several coordinate triples. This module
knows which triples are the same feature and maps each one to a canonical
triple (the smallest equivalent one). Vertex 0 is the top corner and
directions run clockwise; edge ``d`` joins vertex ``d`` to vertex ``d + 1``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .types import MalformedCoordinate

HexCoord = Tuple[int, int]

# Neighbouring hex across each edge direction. The shared edge has direction
# (d + 3) % 6 as seen from that neighbour.
EDGE_NEIGHBORS: Dict[int, HexCoord] = {
    0: (1, -1),
    1: (1, 0),
    2: (0, 1),
    3: (-1, 1),
    4: (-1, 0),
    5: (0, -1),
}

# The two other (dq, dr, direction) triples naming the same corner.
VERTEX_NEIGHBORS: Dict[int, Tuple[Tuple[int, int, int], Tuple[int, int, int]]] = {
    0: ((0, -1, 2), (1, -1, 4)),
    1: ((1, -1, 3), (1, 0, 5)),
    2: ((1, 0, 4), (0, 1, 0)),
    3: ((0, 1, 5), (-1, 1, 1)),
    4: ((-1, 1, 0), (-1, 0, 2)),
    5: ((-1, 0, 1), (0, -1, 3)),
}

_HEX_KEY = re.compile(r"^(-?\d+),(-?\d+)$")
_VERTEX_KEY = re.compile(r"^v_(-?\d+)_(-?\d+)_(\d+)$")
_EDGE_KEY = re.compile(r"^e_(-?\d+)_(-?\d+)_(\d+)$")


@dataclass(frozen=True, order=True)
class VertexCoord:
    q: int
    r: int
    direction: int

    @property
    def key(self) -> str:
        return f"v_{self.q}_{self.r}_{self.direction}"

    @property
    def hex(self) -> HexCoord:
        return (self.q, self.r)


@dataclass(frozen=True, order=True)
class EdgeCoord:
    q: int
    r: int
    direction: int

    @property
    def key(self) -> str:
        return f"e_{self.q}_{self.r}_{self.direction}"

    @property
    def hex(self) -> HexCoord:
        return (self.q, self.r)


VertexLike = Union[str, VertexCoord]
EdgeLike = Union[str, EdgeCoord]


def hex_key(q: int, r: int) -> str:
    return f"{q},{r}"


def parse_hex_key(key: str) -> HexCoord:
    match = _HEX_KEY.match(key) if isinstance(key, str) else None
    if match is None:
        raise MalformedCoordinate(f"invalid hex key {key!r}")
    return int(match.group(1)), int(match.group(2))


def _parse_triple(pattern: re.Pattern, key: object, kind: str) -> Tuple[int, int, int]:
    match = pattern.match(key) if isinstance(key, str) else None
    if match is None:
        raise MalformedCoordinate(f"invalid {kind} key {key!r}")
    direction = int(match.group(3))
    if direction > 5:
        raise MalformedCoordinate(f"{kind} direction out of range in {key!r}")
    return int(match.group(1)), int(match.group(2)), direction


def parse_vertex_key(key: str) -> VertexCoord:
    return VertexCoord(*_parse_triple(_VERTEX_KEY, key, "vertex"))


def parse_edge_key(key: str) -> EdgeCoord:
    return EdgeCoord(*_parse_triple(_EDGE_KEY, key, "edge"))


def as_vertex(value: VertexLike) -> VertexCoord:
    if isinstance(value, VertexCoord):
        if not 0 <= value.direction <= 5:
            raise MalformedCoordinate(f"vertex direction out of range in {value!r}")
        return value
    return parse_vertex_key(value)


def as_edge(value: EdgeLike) -> EdgeCoord:
    if isinstance(value, EdgeCoord):
        if not 0 <= value.direction <= 5:
            raise MalformedCoordinate(f"edge direction out of range in {value!r}")
        return value
    return parse_edge_key(value)


def equivalent_vertices(vertex: VertexLike) -> List[VertexCoord]:
    """All three triples naming this corner, the given one first."""
    v = as_vertex(vertex)
    result = [v]
    for dq, dr, direction in VERTEX_NEIGHBORS[v.direction]:
        result.append(VertexCoord(v.q + dq, v.r + dr, direction))
    return result


def equivalent_edges(edge: EdgeLike) -> List[EdgeCoord]:
    """Both triples naming this side, the given one first."""
    e = as_edge(edge)
    dq, dr = EDGE_NEIGHBORS[e.direction]
    return [e, EdgeCoord(e.q + dq, e.r + dr, (e.direction + 3) % 6)]


def canonical_vertex(vertex: VertexLike) -> VertexCoord:
    return min(equivalent_vertices(vertex))


def canonical_edge(edge: EdgeLike) -> EdgeCoord:
    return min(equivalent_edges(edge))


def are_vertices_equal(a: VertexLike, b: VertexLike) -> bool:
    return as_vertex(b) in equivalent_vertices(a)


def are_edges_equal(a: EdgeLike, b: EdgeLike) -> bool:
    return as_edge(b) in equivalent_edges(a)


def edge_vertices(edge: EdgeLike) -> Tuple[VertexCoord, VertexCoord]:
    e = as_edge(edge)
    return (
        canonical_vertex(VertexCoord(e.q, e.r, e.direction)),
        canonical_vertex(VertexCoord(e.q, e.r, (e.direction + 1) % 6)),
    )


def vertex_edges(vertex: VertexLike) -> List[EdgeCoord]:
    """The three physical edges meeting at a corner, as canonical triples."""
    edges: List[EdgeCoord] = []
    for v in equivalent_vertices(vertex):
        for direction in (v.direction, (v.direction - 1) % 6):
            edge = canonical_edge(EdgeCoord(v.q, v.r, direction))
            if edge not in edges:
                edges.append(edge)
    return edges


def adjacent_vertices(vertex: VertexLike) -> List[VertexCoord]:
    origin = canonical_vertex(vertex)
    neighbors: List[VertexCoord] = []
    for edge in vertex_edges(origin):
        a, b = edge_vertices(edge)
        neighbors.append(b if a == origin else a)
    return neighbors


def vertex_hexes(vertex: VertexLike) -> List[HexCoord]:
    return [v.hex for v in equivalent_vertices(vertex)]


def edge_hexes(edge: EdgeLike) -> List[HexCoord]:
    return [e.hex for e in equivalent_edges(edge)]


def hex_vertices(q: int, r: int) -> List[VertexCoord]:
    return [VertexCoord(q, r, direction) for direction in range(6)]


def hex_edges(q: int, r: int) -> List[EdgeCoord]:
    return [EdgeCoord(q, r, direction) for direction in range(6)]


def hex_neighbors(q: int, r: int) -> List[HexCoord]:
    return [(q + dq, r + dr) for dq, dr in EDGE_NEIGHBORS.values()]

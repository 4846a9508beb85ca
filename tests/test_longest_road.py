import pytest

from catan_rules.engine.board import standard_board
from catan_rules.engine.game_state import Building, Road
from catan_rules.engine.longest_road import (
    build_road_graph,
    longest_road_length,
    update_longest_road,
)
from catan_rules.engine.types import BuildingType


@pytest.fixture
def game(make_game):
    return make_game(players=("p1", "p2", "p3"), board=standard_board(seed=1))


def lay_roads(state, owner, keys):
    for key in keys:
        state.edges[key] = Road(owner=owner)


def ring(q, r, directions=range(6)):
    return [f"e_{q}_{r}_{d}" for d in directions]


def test_no_roads_means_zero(game):
    assert longest_road_length(game, 0) == 0
    assert update_longest_road(game) is None
    assert all(player.road_length == 0 for player in game.players)


def test_linear_road(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    assert longest_road_length(game, 0) == 5


def test_full_hex_cycle_counts_six(game):
    lay_roads(game, 0, ring(0, 0))
    assert longest_road_length(game, 0) == 6


def test_cycle_is_not_cut_by_a_settlement_on_its_rim(game):
    lay_roads(game, 0, ring(0, 0))
    game.vertices["v_0_0_3"] = Building(owner=1, kind=BuildingType.SETTLEMENT)
    assert longest_road_length(game, 0) == 6


def test_linear_road_cut_at_interior_vertex(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    game.vertices["v_0_0_2"] = Building(owner=1, kind=BuildingType.SETTLEMENT)
    # Segments of 2 and 3 roads remain.
    assert longest_road_length(game, 0) == 3


def test_own_settlement_never_cuts(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    game.vertices["v_0_0_2"] = Building(owner=0, kind=BuildingType.CITY)
    assert longest_road_length(game, 0) == 5


def test_branch_point_occupied_by_opponent_blocks_every_pass_through(game):
    # Five roads around (0,0) plus a two-road spur leaving v_0_0_2.
    lay_roads(game, 0, ring(0, 0, range(5)) + ["e_1_0_3", "e_1_0_2"])
    assert longest_road_length(game, 0) == 5

    game.vertices["v_0_0_2"] = Building(owner=1, kind=BuildingType.SETTLEMENT)
    # Arms of 2, 3 and 2 roads meet at the blocked corner; none can be joined.
    assert longest_road_length(game, 0) == 3


def test_branch_without_block_uses_the_best_two_arms(game):
    lay_roads(game, 0, ring(0, 0, range(3)) + ["e_1_0_3", "e_1_0_2", "e_1_0_1"])
    # v_0_0_2 is a branch: arms of 2 (edges 0,1), 1 (edge 2) and 3 (spur).
    assert longest_road_length(game, 0) == 5


def test_roads_under_equivalent_keys_are_counted_once(game):
    lay_roads(game, 0, ["e_1_-1_3", "e_1_0_4", "e_0_1_5", "e_0_0_3", "e_0_0_4"])
    assert longest_road_length(game, 0) == 5
    # Writing the same edge under its other name does not add a road.
    game.edges["e_0_0_0"] = Road(owner=0)
    graph = build_road_graph(game, 0)
    assert graph.number_of_edges() == 5
    assert longest_road_length(game, 0) == 5


def test_only_own_roads_are_counted(game):
    lay_roads(game, 0, ring(0, 0, range(4)))
    lay_roads(game, 1, ring(0, 0, [4, 5]))
    assert longest_road_length(game, 0) == 4
    assert longest_road_length(game, 1) == 2


def test_award_requires_five(game):
    lay_roads(game, 0, ring(0, 0, range(4)))
    assert update_longest_road(game) is None
    assert game.players[0].road_length == 4
    assert not game.players[0].has_longest_road

    lay_roads(game, 0, ["e_0_0_4"])
    assert update_longest_road(game) == 0
    assert game.players[0].has_longest_road
    assert game.players[0].victory_points == 2
    assert game.longest_road_length == 5


def test_holder_keeps_bonus_on_tie(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    update_longest_road(game)
    lay_roads(game, 1, ring(2, -2, range(5)))
    assert update_longest_road(game) == 0
    assert game.players[0].victory_points == 2
    assert game.players[1].victory_points == 0


def test_strictly_longer_road_takes_the_bonus(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    update_longest_road(game)
    lay_roads(game, 1, ring(2, -2))
    assert update_longest_road(game) == 1
    assert game.players[0].victory_points == 0
    assert not game.players[0].has_longest_road
    assert game.players[1].victory_points == 2
    assert game.longest_road_length == 6


def test_three_way_tie_without_holder_awards_nobody(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    lay_roads(game, 1, ring(2, -2, range(5)))
    lay_roads(game, 2, ring(-2, 2, range(5)))
    assert update_longest_road(game) is None
    assert game.longest_road_player is None
    assert all(player.road_length == 5 for player in game.players)
    assert all(player.victory_points == 0 for player in game.players)


def test_holder_cut_below_minimum_loses_bonus(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    update_longest_road(game)
    assert game.longest_road_player == 0

    game.vertices["v_0_0_2"] = Building(owner=1, kind=BuildingType.SETTLEMENT)
    assert update_longest_road(game) is None
    assert game.players[0].road_length < 5
    assert game.players[0].victory_points == 0
    assert game.longest_road_length == 0


def test_cut_holder_loses_to_unique_leader(game):
    lay_roads(game, 0, ring(0, 0, range(5)))
    lay_roads(game, 1, ring(2, -2, range(4)))
    update_longest_road(game)
    lay_roads(game, 1, ["e_2_-2_4"])
    game.vertices["v_0_0_3"] = Building(owner=2, kind=BuildingType.SETTLEMENT)
    assert update_longest_road(game) == 1


def test_zero_length_never_holds_the_bonus(game):
    lay_roads(game, 0, ring(0, 0))
    lay_roads(game, 1, ring(2, -2, range(2)))
    update_longest_road(game)
    for player in game.players:
        if player.road_length == 0:
            assert not player.has_longest_road

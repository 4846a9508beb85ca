import pytest

from catan_rules.engine.board import build_board
from catan_rules.engine.game_state import initial_game_state
from catan_rules.engine.types import GamePhase, Terrain, TurnPhase

# Centre hex plus its six neighbours. (0,0) and (1,0) are both fields on 8
# and share the corner v_0_0_1.
SMALL_LAYOUT = [
    (0, 0, Terrain.FIELDS, 8),
    (1, -1, Terrain.FOREST, 3),
    (1, 0, Terrain.FIELDS, 8),
    (0, 1, Terrain.HILLS, 5),
    (-1, 1, Terrain.MOUNTAINS, 10),
    (-1, 0, Terrain.PASTURE, 4),
    (0, -1, Terrain.DESERT, None),
]


class ScriptedRandom:
    """Deterministic stand-in for RandomSource: fixed dice, no shuffling."""

    def __init__(self, rolls=()):
        self.rolls = list(rolls)

    def roll_die(self):
        return self.rolls.pop(0)

    def shuffle(self, items):
        pass

    def choice(self, items):
        return items[0]


@pytest.fixture
def small_board():
    return build_board(SMALL_LAYOUT)


@pytest.fixture
def make_game(small_board):
    def _make(players=("p1", "p2"), rolls=(), board=None, config=None, playing=True):
        state = initial_game_state(
            board or small_board,
            list(players),
            config=config,
            rng=ScriptedRandom(rolls),
            game_id="test",
        )
        if playing:
            state.phase = GamePhase.PLAYING
            state.turn_phase = TurnPhase.MAIN
            state.has_rolled_this_turn = True
        return state

    return _make

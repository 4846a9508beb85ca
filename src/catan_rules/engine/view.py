from __future__ import annotations

import copy

from .game_state import GameState
from .types import GamePhase


def get_player_view(state: GameState, viewer_id: str) -> GameState:
    """Copy of ``state`` with other players' hidden points masked.

    Hidden victory points belong to their owner until the game is over. An
    id that is not seated sees nobody's and gets no ``viewer_index``. The
    source state is never touched.
    """
    view = copy.deepcopy(state, memo={id(state.rng): state.rng})
    view.viewer_index = state.player_index(viewer_id)
    if state.phase == GamePhase.FINISHED:
        return view
    for player in view.players:
        if player.player_id != viewer_id:
            player.hidden_victory_points = 0
    return view

"""Which actions are legal when, and how turn phases move.

Both tables are static so every phase/action pair can be enumerated in tests.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

from .game_state import GameState
from .types import ActionType, GamePhase, IllegalTransition, RuleViolation, TurnPhase

BUILD_ACTIONS = frozenset(
    {
        ActionType.PLACE_SETTLEMENT,
        ActionType.PLACE_ROAD,
        ActionType.UPGRADE_CITY,
        ActionType.BUY_DEV_CARD,
    }
)

SETUP_ACTIONS: FrozenSet[ActionType] = frozenset({ActionType.PLACE_SETTLEMENT, ActionType.PLACE_ROAD})

ALLOWED_ACTIONS: Dict[TurnPhase, FrozenSet[ActionType]] = {
    # Roads are only placeable before the roll when paid for by Road Building.
    TurnPhase.ROLL: frozenset({ActionType.ROLL_DICE, ActionType.PLAY_DEV_CARD, ActionType.PLACE_ROAD}),
    TurnPhase.ROBBER: frozenset({ActionType.MOVE_ROBBER}),
    TurnPhase.DISCARD: frozenset({ActionType.DISCARD}),
    TurnPhase.MAIN: BUILD_ACTIONS
    | frozenset(
        {
            ActionType.PLAY_DEV_CARD,
            ActionType.TRADE_BANK,
            ActionType.TRADE_PLAYER,
            ActionType.END_TURN,
        }
    ),
    TurnPhase.SPECIAL_BUILD: BUILD_ACTIONS | frozenset({ActionType.END_TURN}),
}

TRANSITIONS: FrozenSet[Tuple[TurnPhase, TurnPhase]] = frozenset(
    {
        (TurnPhase.ROLL, TurnPhase.MAIN),
        (TurnPhase.ROLL, TurnPhase.ROBBER),
        (TurnPhase.ROLL, TurnPhase.DISCARD),
        (TurnPhase.DISCARD, TurnPhase.ROBBER),
        (TurnPhase.ROBBER, TurnPhase.ROLL),
        (TurnPhase.ROBBER, TurnPhase.MAIN),
        (TurnPhase.MAIN, TurnPhase.ROBBER),
        (TurnPhase.MAIN, TurnPhase.SPECIAL_BUILD),
        (TurnPhase.MAIN, TurnPhase.ROLL),
        (TurnPhase.SPECIAL_BUILD, TurnPhase.ROLL),
    }
)


def allowed_actions(state: GameState) -> FrozenSet[ActionType]:
    if state.phase == GamePhase.FINISHED:
        return frozenset()
    if state.phase == GamePhase.SETUP:
        return SETUP_ACTIONS
    return ALLOWED_ACTIONS[state.turn_phase]


def check_action_allowed(state: GameState, action_type: ActionType) -> Optional[RuleViolation]:
    if state.phase == GamePhase.FINISHED:
        return RuleViolation("game_over")
    if action_type not in allowed_actions(state):
        where = state.phase.value if state.phase == GamePhase.SETUP else state.turn_phase.value
        return RuleViolation("wrong_phase", f"{action_type.value} not allowed during {where}")
    return None


def transition(state: GameState, target: TurnPhase) -> None:
    if state.turn_phase == target:
        return
    if (state.turn_phase, target) not in TRANSITIONS:
        raise IllegalTransition(f"{state.turn_phase.value} -> {target.value}")
    state.turn_phase = target


def resume_after_interrupt(state: GameState) -> None:
    """Leave a robber/discard interrupt for the phase it cut into."""
    transition(state, TurnPhase.MAIN if state.has_rolled_this_turn else TurnPhase.ROLL)


def advance_turn(state: GameState) -> None:
    transition(state, TurnPhase.ROLL)
    state.current_player_index = (state.current_player_index + 1) % len(state.players)
    state.turn_number += 1
    state.has_rolled_this_turn = False
    state.dev_card_played_this_turn = False
    state.special_build_index = None
    state.free_roads = 0
    state.last_roll = None


def advance_setup(state: GameState) -> None:
    """Snake order: seats forward on round one, backward on round two."""
    num_players = len(state.players)
    if state.setup_round == 0:
        if state.current_player_index + 1 < num_players:
            state.current_player_index += 1
        else:
            state.setup_round = 1
        return
    if state.current_player_index > 0:
        state.current_player_index -= 1
        return
    state.phase = GamePhase.PLAYING
    state.turn_phase = TurnPhase.ROLL
    state.current_player_index = 0
    state.turn_number = 0
    state.has_rolled_this_turn = False
    state.dev_card_played_this_turn = False

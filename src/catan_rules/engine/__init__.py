"""Rules engine for hex-grid settlement games."""

from .board import Board, build_board, standard_board
from .game_state import GameState, PlayerState, initial_game_state
from .longest_road import longest_road_length, update_longest_road
from .rules import apply_action
from .types import (
    Action,
    ActionResult,
    ActionType,
    BuildingType,
    DevCardType,
    GamePhase,
    ResourceType,
    RuleViolation,
    TurnPhase,
)
from .view import get_player_view

__all__ = [
    "Board",
    "GameState",
    "PlayerState",
    "TurnPhase",
    "GamePhase",
    "Action",
    "ActionResult",
    "ActionType",
    "BuildingType",
    "DevCardType",
    "ResourceType",
    "RuleViolation",
    "apply_action",
    "build_board",
    "standard_board",
    "initial_game_state",
    "get_player_view",
    "longest_road_length",
    "update_longest_road",
]

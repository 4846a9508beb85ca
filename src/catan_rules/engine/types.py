from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class ResourceType(str, Enum):
    BRICK = "brick"
    LUMBER = "lumber"
    ORE = "ore"
    GRAIN = "grain"
    WOOL = "wool"


RESOURCE_TYPES = (
    ResourceType.BRICK,
    ResourceType.LUMBER,
    ResourceType.ORE,
    ResourceType.GRAIN,
    ResourceType.WOOL,
)


class Terrain(str, Enum):
    HILLS = "hills"
    FOREST = "forest"
    MOUNTAINS = "mountains"
    FIELDS = "fields"
    PASTURE = "pasture"
    DESERT = "desert"


TERRAIN_RESOURCES: Dict[Terrain, Optional[ResourceType]] = {
    Terrain.HILLS: ResourceType.BRICK,
    Terrain.FOREST: ResourceType.LUMBER,
    Terrain.MOUNTAINS: ResourceType.ORE,
    Terrain.FIELDS: ResourceType.GRAIN,
    Terrain.PASTURE: ResourceType.WOOL,
    Terrain.DESERT: None,
}


class DevCardType(str, Enum):
    KNIGHT = "knight"
    MONOPOLY = "monopoly"
    YEAR_OF_PLENTY = "year_of_plenty"
    ROAD_BUILDING = "road_building"
    VICTORY_POINT = "victory_point"


class ActionType(str, Enum):
    PLACE_SETTLEMENT = "place_settlement"
    PLACE_ROAD = "place_road"
    UPGRADE_CITY = "upgrade_city"
    BUY_DEV_CARD = "buy_dev_card"
    PLAY_DEV_CARD = "play_dev_card"
    MOVE_ROBBER = "move_robber"
    ROLL_DICE = "roll_dice"
    DISCARD = "discard"
    TRADE_BANK = "trade_bank"
    TRADE_PLAYER = "trade_player"
    END_TURN = "end_turn"


class BuildingType(str, Enum):
    SETTLEMENT = "settlement"
    CITY = "city"


class GamePhase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class TurnPhase(str, Enum):
    ROLL = "roll"
    ROBBER = "robber"
    DISCARD = "discard"
    MAIN = "main"
    SPECIAL_BUILD = "special_build"


ResourceBank = Dict[ResourceType, int]


@dataclass(frozen=True)
class Action:
    action_type: ActionType
    payload: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class RuleViolation:
    """A failed precondition. Returned to the caller, never raised."""

    reason: str
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.reason}: {self.detail}"
        return self.reason


@dataclass(frozen=True)
class ActionResult:
    success: bool
    error: Optional[RuleViolation] = None

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(success=True)

    @classmethod
    def fail(cls, violation: RuleViolation) -> "ActionResult":
        return cls(success=False, error=violation)

    def __bool__(self) -> bool:
        return self.success


class MalformedCoordinate(ValueError):
    """Raised for a hex, vertex or edge key that cannot be parsed."""


class IllegalTransition(RuntimeError):
    """Raised when the engine itself attempts a turn-phase change the table forbids."""


def empty_resources() -> ResourceBank:
    return {resource: 0 for resource in RESOURCE_TYPES}

"""Game configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union


class ConfigError(ValueError):
    """Raised when a configuration payload is invalid."""


@dataclass(frozen=True)
class GameConfig:
    victory_points_to_win: int = 10
    min_players: int = 2
    max_players: int = 6
    max_hand_size: int = 7
    longest_road_min_length: int = 5
    longest_road_bonus: int = 2
    largest_army_min_knights: int = 3
    largest_army_bonus: int = 2
    settlements_per_player: int = 5
    cities_per_player: int = 4
    roads_per_player: int = 15
    bank_resource_count: int = 19
    special_build_phase: bool = False

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name == "special_build_phase":
                if not isinstance(value, bool):
                    raise ConfigError("special_build_phase must be a boolean")
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{item.name} must be an integer")
            if value < 0:
                raise ConfigError(f"{item.name} must be >= 0")
        if self.victory_points_to_win < 1:
            raise ConfigError("victory_points_to_win must be >= 1")
        if self.min_players < 1 or self.min_players > self.max_players:
            raise ConfigError("min_players must be between 1 and max_players")

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "GameConfig":
        if not isinstance(payload, dict):
            raise ConfigError("configuration must be a JSON object")
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
        return cls(**payload)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = GameConfig()


def load_config(path: Union[str, Path]) -> GameConfig:
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{config_path}: {exc}") from exc
    return GameConfig.from_dict(payload)

from .config import DEFAULT_CONFIG, ConfigError, GameConfig, load_config
from .logging_config import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "GameConfig",
    "load_config",
    "configure_logging",
    "get_logger",
]

"""Configuration management."""

from __future__ import annotations
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RulesConfig(BaseModel):
    """Rule constants carried by every game state."""

    model_config = ConfigDict(frozen=True)

    min_players: int = 2
    max_players: int = 6

    # Economy
    starting_contributions: int = 12
    ante: int = 1

    # Hands
    starting_hand_size: int = 5
    base_hand_limit: int = 5

    # Board
    kingdom_size: int = 3
    stag_points_to_win: int = 18

    # Card effects
    hunt_burn_count: int = 3
    hunt_base_swing: int = 2
    tithe_cycle_size: int = 2
    tithe_max_contributions: int = 2
    magi_effect_points: int = 6
    magi_healing_bonus: int = 6
    no_territory_draws: int = 3

    # Views
    log_tail: int = Field(50, ge=0)


class LoggingConfig(BaseModel):
    """Logging configuration for the stagcourt package logger."""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%H:%M:%S"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


class ServiceConfig(BaseModel):
    """In-process game service configuration."""

    stall_timeout_seconds: float = Field(300.0, gt=0)


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    logging: LoggingConfig = LoggingConfig()
    service: ServiceConfig = ServiceConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()

"""Game configuration: grid size, fleet composition and search budgets."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_BOARD_SIZE = 10
DEFAULT_FLEET: tuple[int, ...] = (5, 4, 3, 3, 2)
PLACEMENT_MAX_ATTEMPTS = 1000
RANDOM_MOVE_MAX_ATTEMPTS = 10_000
CPU_DELAY_SECONDS = 0.5


class GameConfig(BaseModel):
    """Settings shared by placement validation, auto-placement and the CPU search."""

    model_config = ConfigDict(frozen=True)

    board_size: int = Field(default=DEFAULT_BOARD_SIZE, gt=0)
    fleet: tuple[int, ...] = DEFAULT_FLEET
    placement_max_attempts: int = Field(default=PLACEMENT_MAX_ATTEMPTS, gt=0)
    random_move_max_attempts: int = Field(default=RANDOM_MOVE_MAX_ATTEMPTS, gt=0)
    # Pacing for presentation layers only; the engine never sleeps.
    cpu_delay_seconds: float = Field(default=CPU_DELAY_SECONDS, ge=0)

    @field_validator("fleet")
    @classmethod
    def _positive_lengths(cls, fleet: tuple[int, ...]) -> tuple[int, ...]:
        if not fleet:
            raise ValueError("fleet must contain at least one ship")
        if any(length <= 0 for length in fleet):
            raise ValueError("ship lengths must be positive")
        return fleet

    @model_validator(mode="after")
    def _fleet_fits(self) -> GameConfig:
        if max(self.fleet) > self.board_size:
            raise ValueError("longest ship does not fit on the board")
        if sum(self.fleet) > self.board_size * self.board_size:
            raise ValueError("fleet occupies more cells than the board has")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> GameConfig:
        """Construct config from ``SEABATTLE_*`` environment variables."""

        data: dict[str, Any] = {}
        env_fields = {
            "board_size": "SEABATTLE_BOARD_SIZE",
            "placement_max_attempts": "SEABATTLE_PLACEMENT_MAX_ATTEMPTS",
            "random_move_max_attempts": "SEABATTLE_RANDOM_MOVE_MAX_ATTEMPTS",
            "cpu_delay_seconds": "SEABATTLE_CPU_DELAY",
        }
        for field, env_name in env_fields.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                data[field] = value.strip()

        fleet = os.getenv("SEABATTLE_FLEET")
        if fleet:
            data["fleet"] = tuple(int(part) for part in fleet.split(",") if part.strip())

        data.update(overrides)
        return cls(**data)


@lru_cache(maxsize=1)
def load_game_config() -> GameConfig:
    """Load and cache the game config from the environment."""

    return GameConfig.from_env()

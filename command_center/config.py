"""Runtime configuration loaded from environment variables."""

from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """Tunable constants of the reasoning engine.

    Reinforcement/decay magnitudes and scoring weights are design choices,
    so every one of them can be overridden with an ``AGENT_ENGINE_*``
    environment variable.
    """

    # Memory dynamics
    reinforcement_increment: float = Field(default=0.15)
    decay_decrement: float = Field(default=0.05)
    insert_strength: float = Field(default=0.5)
    strength_bonus: float = Field(default=0.1)

    # Confidence scoring
    memory_weight: float = Field(default=0.5)
    specificity_weight: float = Field(default=0.5)
    confidence_floor: float = Field(default=0.05)
    confidence_ceiling: float = Field(default=0.95)

    # Output shape
    analysis_top_n: int = Field(default=3)
    max_plan_steps: int = Field(default=5)
    max_actions: int = Field(default=3)
    max_reflections: int = Field(default=3)

    model_config = SettingsConfigDict(env_prefix="AGENT_ENGINE_", frozen=True)

    @field_validator(
        "reinforcement_increment",
        "decay_decrement",
        "insert_strength",
        "strength_bonus",
        "memory_weight",
        "specificity_weight",
        "confidence_floor",
        "confidence_ceiling",
    )
    @classmethod
    def _unit_interval(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("must lie within [0.0, 1.0]")
        return value

    @field_validator("analysis_top_n", "max_actions", "max_reflections")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("max_plan_steps")
    @classmethod
    def _room_for_verification(cls, value: int) -> int:
        # Single-clause directives always get a second, verification step
        if value < 2:
            raise ValueError("must be at least 2")
        return value

    @model_validator(mode="after")
    def _confidence_bounds(self) -> "EngineConfig":
        if self.confidence_floor >= self.confidence_ceiling:
            raise ValueError("confidence_floor must be below confidence_ceiling")
        return self


class ServerSettings(BaseSettings):
    """HTTP boundary settings."""

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    service_name: str = Field(default="command-center")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_prefix="AGENT_")

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return value

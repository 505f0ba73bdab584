# cohort_tree/config/schema.py
"""
Pydantic schema for cohort_tree configuration.

Rules:
- Strict validation
- No unknown keys
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Package log level")

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v!r}")
        return level


class ValidationConfig(BaseModel):
    strict: bool = Field(
        default=False,
        description="Raise on depth invariant violations instead of logging them",
    )

    model_config = ConfigDict(extra="forbid")


class EntropyThresholds(BaseModel):
    """Lower bounds (exclusive) of the drift entropy bands."""

    loose: float = Field(default=0.5, ge=0)
    wild: float = Field(default=1.0, ge=0)
    random: float = Field(default=2.0, ge=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_ordering(self) -> "EntropyThresholds":
        if not (self.loose <= self.wild <= self.random):
            raise ValueError("thresholds must satisfy loose <= wild <= random")
        return self


class DriftConfig(BaseModel):
    root_name: str = Field(default="drift", description="Name of the drift tree root")
    band_meaning: str = Field(default="entropy band", description="Meaning of the band ring")
    percentile: float = Field(
        default=0, ge=0, le=100, description="Entropy percentile cut-off (0-100)"
    )
    thresholds: EntropyThresholds = Field(default_factory=EntropyThresholds)

    model_config = ConfigDict(extra="forbid")


class CohortTreeConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    drift: DriftConfig = Field(default_factory=DriftConfig)

    model_config = ConfigDict(extra="forbid")

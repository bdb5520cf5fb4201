"""Pydantic configuration schema for YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoringWeights(BaseModel):
    mbti: float = Field(default=25.0, ge=0)
    learning_style: float = Field(default=25.0, ge=0)
    saju: float = Field(default=20.0, ge=0)
    name: float = Field(default=15.0, ge=0)

    model_config = ConfigDict(extra="forbid")


class DimensionDefaults(BaseModel):
    """Similarity used when either side lacks the profile for a dimension."""

    mbti: float = Field(default=0.5, ge=0, le=1)
    learning_style: float = Field(default=0.5, ge=0, le=1)
    saju: float = Field(default=0.0, ge=0, le=1)
    name: float = Field(default=0.0, ge=0, le=1)

    model_config = ConfigDict(extra="forbid")


class ScoringConfig(BaseModel):
    weights: ScoringWeights | None = None
    defaults: DimensionDefaults | None = None
    load_tiers: list[tuple[int, float]] | None = None
    overflow_score: float | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_total(self) -> "ScoringConfig":
        weights = self.weights or ScoringWeights()
        tiers = self.load_tiers or [(10, 15.0)]
        max_load_score = max(
            [score for _, score in tiers] + [self.overflow_score or 0.0]
        )
        ceiling = sum(weights.model_dump().values()) + max_load_score
        if ceiling > 100:
            raise ValueError(f"Maximum attainable score {ceiling} exceeds 100")
        return self


class AssignmentSettings(BaseModel):
    capacity_ceiling: int | None = Field(default=None, ge=1)
    capacity_headroom: float | None = Field(default=None, gt=0)
    min_compatibility: float | None = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(extra="forbid")


class FairnessSettings(BaseModel):
    disparity_threshold: float | None = Field(default=None, ge=0, le=1)
    abroca_threshold: float | None = Field(default=None, ge=0, le=1)
    balance_threshold: float | None = Field(default=None, ge=0, le=1)
    histogram_bins: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    assignment: AssignmentSettings = Field(default_factory=AssignmentSettings)
    fairness: FairnessSettings = Field(default_factory=FairnessSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("scoring", "assignment", "fairness"):
            dumped = getattr(self, section).model_dump(exclude_none=True)
            if dumped:
                settings[section] = dumped
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    return AppConfig.model_validate(raw)

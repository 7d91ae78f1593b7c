from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, field_validator

NEUTRAL_PREFERENCE = 0.5
MIN_SUGGESTIONS = 1
MAX_SUGGESTIONS = 6


class SuggestionPreferences(BaseModel):
    fitness_level: float = Field(
        default=NEUTRAL_PREFERENCE,
        description="0 = prefers flat routes, 1 = tolerates climbing",
    )
    scenic_preference: float = Field(
        default=NEUTRAL_PREFERENCE,
        description="0 = indifferent, 1 = strongly favours scenic road classes",
    )
    avoid_main_roads: float = Field(
        default=NEUTRAL_PREFERENCE,
        description="0 = indifferent, 1 = strongly avoids major roads",
    )
    time_priority: float = Field(
        default=NEUTRAL_PREFERENCE,
        description="0 = optimise distance, 1 = optimise duration",
    )

    @field_validator(
        "fitness_level",
        "scenic_preference",
        "avoid_main_roads",
        "time_priority",
        mode="before",
    )
    @classmethod
    def _collapse_to_neutral(cls, value: Any) -> float:
        """Out-of-range or non-numeric dials fall back to the midpoint."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return NEUTRAL_PREFERENCE
        value = float(value)
        if not math.isfinite(value) or value < 0.0 or value > 1.0:
            return NEUTRAL_PREFERENCE
        return value


class SuggestionMetrics(BaseModel):
    distance_m: float
    duration_s: float
    ascend_m: float
    scenic_ratio: float
    major_road_ratio: float


class RouteSuggestion(BaseModel):
    id: str
    score: float
    explanation: str
    metrics: SuggestionMetrics
    route: dict[str, Any] = Field(default_factory=dict)


class SuggestionRequest(BaseModel):
    start: str = Field(..., min_length=1, description="Start point as 'lat,lon'")
    end: str = Field(..., min_length=1, description="End point as 'lat,lon'")
    max_suggestions: int = Field(default=3)
    preferences: SuggestionPreferences = Field(default_factory=SuggestionPreferences)

    def clamped_limit(self) -> int:
        return max(MIN_SUGGESTIONS, min(MAX_SUGGESTIONS, self.max_suggestions))


class SuggestionMeta(BaseModel):
    source_paths: int
    returned_suggestions: int


class SuggestionResponse(BaseModel):
    suggestions: list[RouteSuggestion]
    meta: SuggestionMeta
    preferences: SuggestionPreferences

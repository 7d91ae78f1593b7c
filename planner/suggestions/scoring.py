from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .candidates import DerivedMetrics
from .models import SuggestionMetrics, SuggestionPreferences

NEUTRAL_SCORE = 0.5

TRAVEL_WEIGHT = 0.45
SCENIC_BASE, SCENIC_BONUS = 0.2, 0.3
AVOID_MAIN_BASE, AVOID_MAIN_BONUS = 0.2, 0.3
CLIMB_BASE, CLIMB_BONUS = 0.15, 0.25


@dataclass(frozen=True)
class SubScores:
    """Inverted normalized metrics: higher is better."""

    distance: float
    duration: float
    climb: float


def min_max(values: Sequence[float]) -> tuple[float, float]:
    if len(values) == 0:
        return 0.0, 0.0
    return float(min(values)), float(max(values))


def normalize(value: float, lo: float, hi: float) -> float:
    """Min-max scale *value* into [0, 1]; a collapsed range maps to 0.5."""
    if abs(hi - lo) < sys.float_info.epsilon:
        return NEUTRAL_SCORE
    return min(max((value - lo) / (hi - lo), 0.0), 1.0)


def normalize_column(values: Sequence[float]) -> np.ndarray:
    """Normalize one metric across the whole candidate set."""
    column = np.asarray(values, dtype=float)
    lo, hi = min_max(values)
    if abs(hi - lo) < sys.float_info.epsilon:
        return np.full(len(column), NEUTRAL_SCORE)
    return np.clip((column - lo) / (hi - lo), 0.0, 1.0)


def composite_score(
    metrics: DerivedMetrics,
    sub_scores: SubScores,
    preferences: SuggestionPreferences,
) -> float:
    travel_efficiency = (
        (1.0 - preferences.time_priority) * sub_scores.distance
        + preferences.time_priority * sub_scores.duration
    )
    climb_weight = 1.0 - preferences.fitness_level

    return (
        (travel_efficiency * TRAVEL_WEIGHT)
        + (metrics.scenic_ratio * (SCENIC_BASE + SCENIC_BONUS * preferences.scenic_preference))
        + (
            (1.0 - metrics.major_road_ratio)
            * (AVOID_MAIN_BASE + AVOID_MAIN_BONUS * preferences.avoid_main_roads)
        )
        + (sub_scores.climb * (CLIMB_BASE + CLIMB_BONUS * climb_weight))
    )


def round_metrics(metrics: DerivedMetrics) -> SuggestionMetrics:
    return SuggestionMetrics(
        distance_m=round(metrics.distance_m, 2),
        duration_s=round(metrics.duration_s, 2),
        ascend_m=round(metrics.ascend_m, 2),
        scenic_ratio=round(metrics.scenic_ratio, 3),
        major_road_ratio=round(metrics.major_road_ratio, 3),
    )

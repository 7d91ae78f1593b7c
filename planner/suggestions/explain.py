from __future__ import annotations

from .candidates import DerivedMetrics
from .models import SuggestionPreferences
from .scoring import SubScores

FALLBACK_EXPLANATION = "Balanced option based on your current preference mix."
MAX_REASONS = 2

PREFERENCE_THRESHOLD = 0.6
LOW_FITNESS_THRESHOLD = 0.5
SUB_SCORE_THRESHOLD = 0.5
SCENIC_RATIO_THRESHOLD = 0.45
MAJOR_ROAD_RATIO_THRESHOLD = 0.35


def _reasons(
    metrics: DerivedMetrics,
    preferences: SuggestionPreferences,
    sub_scores: SubScores,
) -> list[str]:
    reasons: list[str] = []

    if preferences.time_priority >= PREFERENCE_THRESHOLD:
        if sub_scores.duration >= SUB_SCORE_THRESHOLD:
            reasons.append("keeps travel time lower")
    elif sub_scores.distance >= SUB_SCORE_THRESHOLD:
        reasons.append("keeps total distance shorter")

    if (
        preferences.scenic_preference >= PREFERENCE_THRESHOLD
        and metrics.scenic_ratio >= SCENIC_RATIO_THRESHOLD
    ):
        reasons.append("uses more scenic road segments")

    if (
        preferences.avoid_main_roads >= PREFERENCE_THRESHOLD
        and metrics.major_road_ratio <= MAJOR_ROAD_RATIO_THRESHOLD
    ):
        reasons.append("stays away from main roads")

    if (
        preferences.fitness_level < LOW_FITNESS_THRESHOLD
        and sub_scores.climb >= SUB_SCORE_THRESHOLD
    ):
        reasons.append("reduces climbing effort")

    return reasons


def explain(
    metrics: DerivedMetrics,
    preferences: SuggestionPreferences,
    sub_scores: SubScores,
) -> str:
    """Build a one-sentence justification from at most two reasons."""
    reasons = _reasons(metrics, preferences, sub_scores)[:MAX_REASONS]
    if not reasons:
        return FALLBACK_EXPLANATION
    return f"Selected because it {' and '.join(reasons)}."

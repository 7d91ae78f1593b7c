from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from functools import cmp_to_key
from typing import Any, Sequence

import pandas as pd

from .candidates import DerivedMetrics, decode_candidates, extract_metrics
from .explain import explain
from .models import RouteSuggestion, SuggestionPreferences
from .scoring import SubScores, composite_score, normalize_column, round_metrics

logger = logging.getLogger(__name__)

SCORE_DIGITS = 3


@dataclass(frozen=True)
class ScoredCandidate:
    id: str
    total_score: float
    explanation: str
    metrics: DerivedMetrics
    route: dict[str, Any]


def _presented(score: float) -> float:
    return round(score, SCORE_DIGITS)


def _by_score_desc(a: ScoredCandidate, b: ScoredCandidate) -> int:
    # Compared at presented precision so scores that print equal keep input
    # order. NaN compares false both ways and is kept in place as an equal.
    left, right = _presented(a.total_score), _presented(b.total_score)
    if left > right:
        return -1
    if left < right:
        return 1
    return 0


def rank(scored: Sequence[ScoredCandidate], limit: int) -> list[ScoredCandidate]:
    """Order candidates by score, keep the top *limit*, renumber them."""
    working = [
        replace(candidate, id=f"candidate-{index}")
        for index, candidate in enumerate(scored, start=1)
    ]
    ordered = sorted(working, key=cmp_to_key(_by_score_desc))[: max(limit, 0)]
    return [
        replace(candidate, id=f"suggestion-{index}")
        for index, candidate in enumerate(ordered, start=1)
    ]


def _score_row(row: pd.Series, preferences: SuggestionPreferences) -> pd.Series:
    metrics = DerivedMetrics(
        distance_m=float(row["distance_m"]),
        duration_s=float(row["duration_s"]),
        ascend_m=float(row["ascend_m"]),
        scenic_ratio=float(row["scenic_ratio"]),
        major_road_ratio=float(row["major_road_ratio"]),
    )
    sub_scores = SubScores(
        distance=float(row["_distance_score"]),
        duration=float(row["_duration_score"]),
        climb=float(row["_climb_score"]),
    )
    return pd.Series({
        "_score": composite_score(metrics, sub_scores, preferences),
        "_explanation": explain(metrics, preferences, sub_scores),
    })


def build_suggestions(
    paths: Sequence[Any],
    preferences: SuggestionPreferences,
    limit: int,
) -> list[RouteSuggestion]:
    """Score, explain and rank candidate routes against *preferences*.

    *paths* may hold raw route dicts from the routing engine or decoded
    ``CandidatePath`` values. Malformed fields fall back to neutral
    defaults; nothing here raises for bad input.
    """
    candidates = decode_candidates(paths)
    if not candidates:
        return []

    metrics = [extract_metrics(candidate) for candidate in candidates]

    frame = pd.DataFrame([asdict(m) for m in metrics])

    # --- Set-wide normalization ---
    frame["_distance_score"] = 1.0 - normalize_column(frame["distance_m"].tolist())
    frame["_duration_score"] = 1.0 - normalize_column(frame["duration_s"].tolist())
    frame["_climb_score"] = 1.0 - normalize_column(frame["ascend_m"].tolist())

    # --- Per-candidate scoring ---
    results = frame.apply(_score_row, axis=1, preferences=preferences)

    scored = [
        ScoredCandidate(
            id="",
            total_score=float(score),
            explanation=str(explanation),
            metrics=metric,
            route=candidate.raw,
        )
        for score, explanation, metric, candidate in zip(
            results["_score"], results["_explanation"], metrics, candidates,
        )
    ]

    ranked = rank(scored, limit)
    logger.debug("Ranked %d of %d candidate routes", len(ranked), len(scored))

    return [
        RouteSuggestion(
            id=candidate.id,
            score=_presented(candidate.total_score),
            explanation=candidate.explanation,
            metrics=round_metrics(candidate.metrics),
            route=candidate.route,
        )
        for candidate in ranked
    ]

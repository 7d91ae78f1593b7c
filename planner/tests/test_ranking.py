import math

import pytest

from planner.suggestions.candidates import DerivedMetrics, decode_candidate
from planner.suggestions.models import SuggestionPreferences
from planner.suggestions.ranking import ScoredCandidate, build_suggestions, rank

SCENARIO_PATHS = [
    {
        "distance": 1000.0,
        "time": 300000.0,
        "ascend": 10.0,
        "details": {"road_class": [[0, 6, "cycleway"], [6, 10, "residential"]]},
    },
    {
        "distance": 900.0,
        "time": 260000.0,
        "ascend": 45.0,
        "details": {"road_class": [[0, 4, "primary"], [4, 10, "secondary"]]},
    },
    {
        "distance": 1100.0,
        "time": 330000.0,
        "ascend": 12.0,
        "details": {"road_class": [[0, 3, "path"], [3, 10, "unclassified"]]},
    },
]

SCENARIO_PREFERENCES = SuggestionPreferences(
    fitness_level=0.2,
    scenic_preference=0.9,
    avoid_main_roads=0.9,
    time_priority=0.4,
)

_METRICS = DerivedMetrics(0.0, 0.0, 0.0, 0.5, 0.5)


def _scored(*scores: float) -> list[ScoredCandidate]:
    return [
        ScoredCandidate(
            id=f"input-{i}",
            total_score=score,
            explanation="",
            metrics=_METRICS,
            route={"index": i},
        )
        for i, score in enumerate(scores)
    ]


# ── Ranker ───────────────────────────────────────────────────────────────


def test_rank_sorts_descending_and_renumbers():
    ranked = rank(_scored(0.2, 0.9, 0.5), 3)
    assert [c.route["index"] for c in ranked] == [1, 2, 0]
    assert [c.id for c in ranked] == ["suggestion-1", "suggestion-2", "suggestion-3"]


def test_rank_keeps_input_order_for_equal_scores():
    ranked = rank(_scored(0.5, 0.7, 0.5, 0.5), 4)
    assert [c.route["index"] for c in ranked] == [1, 0, 2, 3]


def test_rank_truncates_to_limit():
    ranked = rank(_scored(0.1, 0.2, 0.3), 2)
    assert [c.route["index"] for c in ranked] == [2, 1]


def test_rank_with_zero_or_negative_limit_is_empty():
    assert rank(_scored(0.1, 0.2), 0) == []
    assert rank(_scored(0.1, 0.2), -1) == []


def test_rank_tolerates_non_finite_scores():
    ranked = rank(_scored(math.nan, math.nan, math.nan), 3)
    assert [c.route["index"] for c in ranked] == [0, 1, 2]


def test_rank_keeps_nan_scores_in_place_among_neighbours():
    ranked = rank(_scored(0.8, math.nan, 0.3), 3)
    assert [c.route["index"] for c in ranked] == [0, 1, 2]
    assert [c.id for c in ranked] == ["suggestion-1", "suggestion-2", "suggestion-3"]


def test_rank_treats_scores_equal_at_presented_precision_as_ties():
    ranked = rank(_scored(0.8250001, 0.8250004, 0.6), 3)
    assert [c.route["index"] for c in ranked] == [0, 1, 2]
    assert ranked[0].total_score == 0.8250001


# ── Full pipeline ────────────────────────────────────────────────────────


def test_scenario_ranks_scenic_route_above_fast_main_road_route():
    ranked = build_suggestions(SCENARIO_PATHS, SCENARIO_PREFERENCES, 2)

    assert len(ranked) == 2
    assert [s.id for s in ranked] == ["suggestion-1", "suggestion-2"]
    assert ranked[0].score >= ranked[1].score
    assert ranked[0].route == SCENARIO_PATHS[0]
    assert ranked[1].route == SCENARIO_PATHS[2]
    assert all(s.route["distance"] != 900.0 for s in ranked)


def test_scenario_scores_metrics_and_explanations():
    ranked = build_suggestions(SCENARIO_PATHS, SCENARIO_PREFERENCES, 3)

    assert [s.route["distance"] for s in ranked] == [1000.0, 1100.0, 900.0]
    assert ranked[0].score == pytest.approx(1.502, abs=1e-3)
    assert ranked[1].score == pytest.approx(0.941, abs=1e-3)
    assert ranked[2].score == pytest.approx(0.45, abs=1e-3)

    top = ranked[0]
    assert top.metrics.distance_m == 1000.0
    assert top.metrics.duration_s == 300.0
    assert top.metrics.ascend_m == 10.0
    assert top.metrics.scenic_ratio == 1.0
    assert top.metrics.major_road_ratio == 0.0
    assert top.explanation == (
        "Selected because it keeps total distance shorter and uses more scenic road segments."
    )
    assert ranked[1].explanation == (
        "Selected because it stays away from main roads and reduces climbing effort."
    )


def test_empty_candidates_give_empty_result():
    assert build_suggestions([], SuggestionPreferences(), 3) == []


@pytest.mark.parametrize("count", [0, 1, 3, 5])
@pytest.mark.parametrize("limit", [0, 1, 2, 6])
def test_result_length_is_capped(count, limit):
    paths = [{"distance": 1000 + i * 50, "time": 300000 - i * 1000} for i in range(count)]
    ranked = build_suggestions(paths, SuggestionPreferences(), limit)
    assert len(ranked) == min(limit, count)


def test_scores_are_non_increasing():
    paths = [
        {"distance": 1000 + (i * 37) % 200, "time": 250000 + (i * 7919) % 90000, "ascend": i * 3}
        for i in range(6)
    ]
    ranked = build_suggestions(paths, SCENARIO_PREFERENCES, 6)
    scores = [s.score for s in ranked]
    assert scores == sorted(scores, reverse=True)


def test_output_is_deterministic():
    first = build_suggestions(SCENARIO_PATHS, SCENARIO_PREFERENCES, 3)
    second = build_suggestions(SCENARIO_PATHS, SCENARIO_PREFERENCES, 3)
    assert [s.model_dump() for s in first] == [s.model_dump() for s in second]


def test_identical_candidates_score_neutrally():
    paths = [{"distance": 1000, "time": 300000, "ascend": 10, "id": i} for i in range(3)]
    ranked = build_suggestions(paths, SuggestionPreferences(), 3)

    # 0.45*0.5 + 0.5*0.35 + 0.5*0.35 + 0.5*0.275
    assert all(s.score == pytest.approx(0.7125, abs=1e-3) for s in ranked)
    assert [s.route["id"] for s in ranked] == [0, 1, 2]
    assert all(
        s.explanation == "Selected because it keeps total distance shorter." for s in ranked
    )


def test_reidentifies_regardless_of_input_ids():
    paths = [dict(p, id=f"gh-{n}") for n, p in zip(("x", "y", "z"), SCENARIO_PATHS)]
    ranked = build_suggestions(paths, SCENARIO_PREFERENCES, 3)
    assert [s.id for s in ranked] == ["suggestion-1", "suggestion-2", "suggestion-3"]
    assert ranked[0].route["id"] == "gh-x"


def test_accepts_decoded_candidates():
    decoded = [decode_candidate(p) for p in SCENARIO_PATHS]
    from_raw = build_suggestions(SCENARIO_PATHS, SCENARIO_PREFERENCES, 3)
    from_decoded = build_suggestions(decoded, SCENARIO_PREFERENCES, 3)
    assert [s.model_dump() for s in from_raw] == [s.model_dump() for s in from_decoded]


def test_malformed_paths_degrade_to_defaults():
    paths = ["junk", {"distance": "far", "details": {"road_class": [["a", "b", "c"]]}}]
    ranked = build_suggestions(paths, SuggestionPreferences(), 2)
    assert len(ranked) == 2
    for suggestion in ranked:
        assert suggestion.metrics.distance_m == 0.0
        assert suggestion.metrics.scenic_ratio == 0.5
        assert suggestion.metrics.major_road_ratio == 0.5
    assert ranked[0].route == {}


def test_near_tied_routes_keep_input_order():
    paths = [{"distance": 1000.0}, {"distance": 999.999}, {"distance": 5000.0}]
    ranked = build_suggestions(paths, SuggestionPreferences(), 3)

    assert [s.route["distance"] for s in ranked] == [1000.0, 999.999, 5000.0]
    assert [s.score for s in ranked] == [0.825, 0.825, 0.6]


def test_non_list_paths_give_empty_result():
    assert build_suggestions({"paths": []}, SuggestionPreferences(), 3) == []
    assert build_suggestions("paths", SuggestionPreferences(), 3) == []

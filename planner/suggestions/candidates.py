from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

SCENIC_CLASSES = frozenset(
    {"cycleway", "path", "track", "living_street", "residential", "service"}
)
MAJOR_CLASSES = frozenset({"motorway", "trunk", "primary", "secondary", "tertiary"})

NEUTRAL_RATIO = 0.5


@dataclass(frozen=True)
class RoadClassSegment:
    start: int
    end: int
    label: str

    @property
    def length(self) -> int:
        return max(0, self.end - self.start)


@dataclass(frozen=True)
class CandidatePath:
    """One alternative route as returned by the routing engine."""

    distance: float = 0.0
    time: float = 0.0
    ascend: float = 0.0
    road_class: tuple[RoadClassSegment, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DerivedMetrics:
    distance_m: float
    duration_s: float
    ascend_m: float
    scenic_ratio: float
    major_road_ratio: float


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    value = float(value)
    return value if math.isfinite(value) else 0.0


def _as_offset(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def _decode_segment(entry: Any) -> RoadClassSegment | None:
    if not isinstance(entry, (list, tuple)) or len(entry) < 3:
        return None
    start = _as_offset(entry[0])
    end = _as_offset(entry[1])
    label = entry[2]
    if start is None or end is None or not isinstance(label, str):
        return None
    segment = RoadClassSegment(start=start, end=end, label=label)
    if segment.length <= 0:
        return None
    return segment


def _road_class_entries(raw: dict[str, Any]) -> list[Any]:
    details = raw.get("details")
    if not isinstance(details, dict):
        return []
    entries = details.get("road_class")
    return entries if isinstance(entries, list) else []


def decode_candidate(raw: Any) -> CandidatePath:
    """Parse one raw engine path, substituting defaults for anything malformed."""
    if not isinstance(raw, dict):
        return CandidatePath()

    segments = []
    for entry in _road_class_entries(raw):
        segment = _decode_segment(entry)
        if segment is not None:
            segments.append(segment)

    return CandidatePath(
        distance=_as_number(raw.get("distance")),
        time=_as_number(raw.get("time")),
        ascend=_as_number(raw.get("ascend")),
        road_class=tuple(segments),
        raw=raw,
    )


def decode_candidates(raws: Any) -> list[CandidatePath]:
    """Decode a sequence of raw paths; already-decoded candidates pass through."""
    if not isinstance(raws, (list, tuple)):
        return []
    return [
        raw if isinstance(raw, CandidatePath) else decode_candidate(raw)
        for raw in raws
    ]


def road_class_ratios(segments: Iterable[RoadClassSegment]) -> tuple[float, float]:
    """Return ``(scenic_ratio, major_road_ratio)`` weighted by segment length.

    Labels outside both buckets still count toward the denominator, so the
    two ratios need not sum to one. Without any usable segment both ratios
    are neutral.
    """
    scenic_total = 0.0
    major_total = 0.0
    total = 0.0

    for segment in segments:
        length = float(segment.length)
        if length <= 0.0:
            continue
        total += length
        if segment.label in SCENIC_CLASSES:
            scenic_total += length
        elif segment.label in MAJOR_CLASSES:
            major_total += length

    if total <= 0.0:
        return NEUTRAL_RATIO, NEUTRAL_RATIO

    return scenic_total / total, major_total / total


def extract_metrics(candidate: CandidatePath) -> DerivedMetrics:
    scenic_ratio, major_road_ratio = road_class_ratios(candidate.road_class)
    return DerivedMetrics(
        distance_m=candidate.distance,
        duration_s=candidate.time / 1000.0,
        ascend_m=candidate.ascend,
        scenic_ratio=scenic_ratio,
        major_road_ratio=major_road_ratio,
    )

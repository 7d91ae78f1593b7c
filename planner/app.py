from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .geo import parse_latlon
from .graphhopper.client import GraphHopperError, fetch_roundtrip_paths, fetch_route
from .suggestions.models import (
    SuggestionMeta,
    SuggestionRequest,
    SuggestionResponse,
)
from .suggestions.ranking import build_suggestions

logger = logging.getLogger(__name__)

app = FastAPI(title="Bike Route Planner API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _require_point(value: str, name: str) -> tuple[float, float]:
    point = parse_latlon(value)
    if point is None:
        raise HTTPException(status_code=400, detail=f"{name} must be 'lat,lon'")
    return point


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.get("/route")
def route(start: str = Query(...), end: str = Query(...)) -> Response:
    start_point = _require_point(start, "start")
    end_point = _require_point(end, "end")

    try:
        text = fetch_route(start_point, end_point)
    except GraphHopperError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return Response(content=text, media_type="application/json")


@app.post("/suggestions", response_model=SuggestionResponse)
def suggestions(body: SuggestionRequest) -> SuggestionResponse:
    start_point = _require_point(body.start, "start")
    # Round trips start and end at ``start``; ``end`` is still validated.
    _require_point(body.end, "end")

    limit = body.clamped_limit()
    preferences = body.preferences

    try:
        paths = fetch_roundtrip_paths(start_point, limit)
    except GraphHopperError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    ranked = build_suggestions(paths, preferences, limit)
    logger.info("Returning %d suggestions from %d paths", len(ranked), len(paths))

    return SuggestionResponse(
        suggestions=ranked,
        meta=SuggestionMeta(source_paths=len(paths), returned_suggestions=len(ranked)),
        preferences=preferences,
    )

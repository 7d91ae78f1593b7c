from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import DEFAULT_GRAPHHOPPER_CONFIG, GraphHopperConfig

logger = logging.getLogger(__name__)

LatLon = tuple[float, float]


class GraphHopperError(RuntimeError):
    """The routing engine could not be reached or returned an unusable reply."""


def build_route_params(
    start: LatLon,
    end: LatLon,
    config: GraphHopperConfig = DEFAULT_GRAPHHOPPER_CONFIG,
) -> list[tuple[str, str]]:
    return [
        ("profile", config.profile),
        ("point", f"{start[0]},{start[1]}"),
        ("point", f"{end[0]},{end[1]}"),
        ("calc_points", "true"),
        ("points_encoded", "false"),
        ("instructions", "true"),
    ]


def build_roundtrip_body(
    start: LatLon,
    max_paths: int,
    config: GraphHopperConfig = DEFAULT_GRAPHHOPPER_CONFIG,
) -> dict[str, Any]:
    """Build the POST /route body for a round trip starting at *start*.

    GraphHopper expects points as ``[lon, lat]`` in JSON bodies.
    """
    lat, lon = start
    return {
        "profile": config.profile,
        "points": [[lon, lat]],
        "algorithm": "round_trip",
        "round_trip.distance": config.round_trip_distance_m,
        "round_trip.seed": config.round_trip_seed,
        "alternative_route.max_paths": max_paths,
        "ch.disable": True,
        "calc_points": True,
        "points_encoded": False,
        "instructions": True,
        "details": ["road_class"],
    }


def _check_response(resp: httpx.Response) -> str:
    if not resp.is_success:
        raise GraphHopperError(f"GraphHopper error ({resp.status_code}): {resp.text}")
    return resp.text


def fetch_route(
    start: LatLon,
    end: LatLon,
    config: GraphHopperConfig = DEFAULT_GRAPHHOPPER_CONFIG,
) -> str:
    """Fetch a single point-to-point route and return the raw JSON text."""
    url = f"{config.base_url.rstrip('/')}/route"
    params = build_route_params(start, end, config)
    logger.info("Calling GraphHopper: GET %s", url)

    try:
        with httpx.Client(timeout=config.timeout) as client:
            resp = client.get(url, params=params)
    except httpx.HTTPError as exc:
        logger.warning("GraphHopper request failed", exc_info=True)
        raise GraphHopperError(f"GraphHopper request failed: {exc}") from exc

    return _check_response(resp)


def fetch_roundtrip_paths(
    start: LatLon,
    max_paths: int,
    config: GraphHopperConfig = DEFAULT_GRAPHHOPPER_CONFIG,
) -> list[Any]:
    """
    Request round-trip alternatives and return the engine's ``paths`` array.

    Raises ``GraphHopperError`` when the call fails, the status is not 2xx,
    the body is not JSON, or the ``paths`` array is missing.
    """
    url = f"{config.base_url.rstrip('/')}/route"
    body = build_roundtrip_body(start, max_paths, config)
    logger.info("Calling GraphHopper: POST %s", url)

    try:
        with httpx.Client(timeout=config.timeout) as client:
            resp = client.post(url, json=body)
    except httpx.HTTPError as exc:
        logger.warning("GraphHopper request failed", exc_info=True)
        raise GraphHopperError(f"GraphHopper request failed: {exc}") from exc

    _check_response(resp)

    try:
        payload = resp.json()
    except ValueError as exc:
        raise GraphHopperError(f"GraphHopper response was not valid JSON: {exc}") from exc

    paths = payload.get("paths") if isinstance(payload, dict) else None
    if not isinstance(paths, list):
        raise GraphHopperError("GraphHopper response missing paths array")

    return paths

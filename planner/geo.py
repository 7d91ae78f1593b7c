from __future__ import annotations

import math


def parse_latlon(text: str) -> tuple[float, float] | None:
    """Parse ``"lat,lon"`` into floats, or return ``None`` if malformed."""
    parts = text.split(",")
    if len(parts) != 2:
        return None
    try:
        lat = float(parts[0].strip())
        lon = float(parts[1].strip())
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    return lat, lon

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class GraphHopperConfig:
    base_url: str = os.getenv("GH_BASE_URL", "http://localhost:8989")
    profile: str = "bike"
    timeout: float = 30.0
    round_trip_distance_m: int = 10000
    round_trip_seed: int = 0


DEFAULT_GRAPHHOPPER_CONFIG = GraphHopperConfig()

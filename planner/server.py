from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class ServerConfig:
    host: str = os.getenv("PLANNER_HOST", "0.0.0.0")
    port: int = int(os.getenv("PLANNER_PORT", "8080"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


DEFAULT_SERVER_CONFIG = ServerConfig()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(config: ServerConfig = DEFAULT_SERVER_CONFIG) -> None:
    configure_logging(config.log_level)
    logging.getLogger(__name__).info("Planner starting on %s:%d", config.host, config.port)
    uvicorn.run("planner.app:app", host=config.host, port=config.port)

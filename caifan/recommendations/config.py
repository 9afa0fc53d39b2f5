from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

logger = logging.getLogger(__name__)


def _env_seed() -> int | None:
    raw = os.getenv("CAIFAN_RANDOM_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer CAIFAN_RANDOM_SEED=%r", raw)
        return None


@dataclass(frozen=True)
class EngineConfig:
    trials: int = 50
    top_k: int = 10
    similar_candidate_factor: int = 2
    random_seed: int | None = _env_seed()


DEFAULT_ENGINE_CONFIG = EngineConfig()

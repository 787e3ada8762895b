from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _env_seed() -> int | None:
    raw = os.getenv("EVENTREC_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class RecommendationConfig:
    store_backend: str = os.getenv("EVENTREC_STORE", "csv")
    data_dir: Path = Path(os.getenv("EVENTREC_DATA_DIR", str(_DEFAULT_DATA_DIR)))
    candidate_pool_size: int = 100
    default_limit: int = 10
    soon_window_days: int = 7
    jitter_scale: float = 10.0
    seed: int | None = field(default_factory=_env_seed)


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()

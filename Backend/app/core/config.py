import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List

DEFAULT_POLICY_PATH = Path(__file__).resolve().parents[1] / "data" / "HR_Sports_Benefits_policy.json"

MATCH_THRESHOLD = 0.7
SUGGEST_THRESHOLD = 0.6


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        val = float(raw)
    except Exception:
        return default
    if math.isnan(val):
        return default
    return min(max(val, 0.0), 1.0)


def _split_csv(raw: str) -> List[str]:
    return [x.strip() for x in (raw or "").split(",") if x.strip()]


@dataclass(frozen=True)
class Settings:
    policy_path: Path = DEFAULT_POLICY_PATH
    match_threshold: float = MATCH_THRESHOLD
    suggest_threshold: float = SUGGEST_THRESHOLD
    cors_origins: tuple = ("http://localhost:3000", "http://localhost:5173")
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from CLAIMCHECK_* environment variables."""
    origins = _split_csv(os.getenv("CLAIMCHECK_CORS_ORIGINS", ""))
    return Settings(
        policy_path=Path(os.getenv("CLAIMCHECK_POLICY_PATH") or DEFAULT_POLICY_PATH),
        match_threshold=_env_float("CLAIMCHECK_MATCH_THRESHOLD", MATCH_THRESHOLD),
        suggest_threshold=_env_float("CLAIMCHECK_SUGGEST_THRESHOLD", SUGGEST_THRESHOLD),
        cors_origins=tuple(origins) if origins else Settings.cors_origins,
        log_level=(os.getenv("CLAIMCHECK_LOG_LEVEL") or "INFO").strip().upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()

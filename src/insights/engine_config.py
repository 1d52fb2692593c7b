"""
Insight Engine Configuration
============================

Tunable constants of the extraction and aggregation engine, read from
environment variables. A `.env` file at the project root is loaded if present.

Environment Variables:
    INSIGHTS_QUALIFICATION_THRESHOLD: Minimum summed indicator weight (default: 0.7)
    INSIGHTS_SCORE_CAP: Maximum reported fragment score (default: 1.0)

    INSIGHTS_TOP_CATEGORIES: Categories kept in a top_categories view (default: 5)
    INSIGHTS_SUMMARY_CATEGORIES: Categories listed in a summary (default: 3)
    INSIGHTS_SUMMARY_TERMS: Terms listed in a summary (default: 10)
    INSIGHTS_TOP_TERMS: Terms kept in the terminology top view (default: 20)
    INSIGHTS_REPRESENTATIVE_ITEMS: Example fragments per category (default: 3)
    INSIGHTS_MOST_ENGAGED: Posts/videos in the most-engaged view (default: 5)
    INSIGHTS_TOP_ASPECTS: Review aspects in a top view (default: 10)

    INSIGHTS_MAX_WORKERS: Worker threads for per-document analysis (default: 4)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Get environment variable with optional default and required validation.

    Raises:
        ValueError: If required=True and variable is not set
    """
    value = os.getenv(key, default)
    if required and value is None:
        raise ValueError(f"Required environment variable '{key}' is not set")
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got: {value}")


def get_env_float(key: str, default: float) -> float:
    """Get environment variable as float."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be a float, got: {value}")


@dataclass(frozen=True)
class EngineConfig:
    """
    Engine-wide tunables.

    The qualification threshold and score cap are empirical constants: a
    sentence becomes a finding only when its summed indicator weight is
    strictly above the threshold, and its reported score never exceeds the cap.
    """

    qualification_threshold: float = field(
        default_factory=lambda: get_env_float("INSIGHTS_QUALIFICATION_THRESHOLD", 0.7)
    )
    score_cap: float = field(default_factory=lambda: get_env_float("INSIGHTS_SCORE_CAP", 1.0))

    # Ranked views
    top_categories_limit: int = field(default_factory=lambda: get_env_int("INSIGHTS_TOP_CATEGORIES", 5))
    summary_categories_limit: int = field(default_factory=lambda: get_env_int("INSIGHTS_SUMMARY_CATEGORIES", 3))
    summary_terms_limit: int = field(default_factory=lambda: get_env_int("INSIGHTS_SUMMARY_TERMS", 10))
    top_terms_limit: int = field(default_factory=lambda: get_env_int("INSIGHTS_TOP_TERMS", 20))
    representative_items: int = field(default_factory=lambda: get_env_int("INSIGHTS_REPRESENTATIVE_ITEMS", 3))
    most_engaged_limit: int = field(default_factory=lambda: get_env_int("INSIGHTS_MOST_ENGAGED", 5))
    top_aspects_limit: int = field(default_factory=lambda: get_env_int("INSIGHTS_TOP_ASPECTS", 10))

    # Parallel fan-out of per-document analysis
    max_workers: int = field(default_factory=lambda: get_env_int("INSIGHTS_MAX_WORKERS", 4))

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not 0.0 <= self.qualification_threshold < 1.0:
            raise ValueError("qualification_threshold must be in [0, 1)")
        if not 0.0 < self.score_cap <= 1.0:
            raise ValueError("score_cap must be in (0, 1]")
        for name in (
            "top_categories_limit",
            "summary_categories_limit",
            "summary_terms_limit",
            "top_terms_limit",
            "representative_items",
            "most_engaged_limit",
            "top_aspects_limit",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


DEFAULT_CONFIG = EngineConfig()

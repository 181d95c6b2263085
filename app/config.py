"""
app/config.py

Application-level configuration helpers.

Every value is read from the process environment, optionally seeded from
``.env`` / ``.env.local`` files in the project root. Existing environment
variables always win over file values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def load_env_files(project_root: Path = PROJECT_ROOT) -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class PipelineSettings:
    """
    Batch pipeline inputs and output locations.
    """

    seed: int = 123
    plot_path: Path = Path("plots/sales_trend.png")
    report_path: Path = Path("reports/statistical_report.txt")
    log_level: str = "INFO"


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Which analysis capabilities are registered, and their parameters.
    """

    forecast_enabled: bool = True
    clustering_enabled: bool = True
    regression_enabled: bool = True
    correlation_enabled: bool = True
    hypothesis_tests_enabled: bool = True

    forecast_horizon_days: int = 30
    seasonal_period: int = 7
    confidence_level: float = 0.95

    cluster_k: int = 3
    cluster_method: str = "kmeans"

    regression_method: str = "random-forest"
    train_fraction: float = 0.8

    normality_sample_cap: int = 5000


@lru_cache(maxsize=1)
def get_pipeline_settings() -> PipelineSettings:
    """
    Return cached pipeline settings from environment variables.
    """

    return PipelineSettings(
        seed=_get_int_env("SALES_SEED", 123),
        plot_path=Path(_get_str_env("SALES_PLOT_PATH", "plots/sales_trend.png")),
        report_path=Path(
            _get_str_env("SALES_REPORT_PATH", "reports/statistical_report.txt")
        ),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached analysis settings from environment variables.
    """

    confidence = _get_float_env("FORECAST_CONFIDENCE_LEVEL", 0.95)
    if not 0.0 < confidence < 1.0:
        confidence = 0.95

    return AnalysisSettings(
        forecast_enabled=_get_bool_env("ANALYSIS_FORECAST_ENABLED", True),
        clustering_enabled=_get_bool_env("ANALYSIS_CLUSTERING_ENABLED", True),
        regression_enabled=_get_bool_env("ANALYSIS_REGRESSION_ENABLED", True),
        correlation_enabled=_get_bool_env("ANALYSIS_CORRELATION_ENABLED", True),
        hypothesis_tests_enabled=_get_bool_env("ANALYSIS_HYPOTHESIS_TESTS_ENABLED", True),
        forecast_horizon_days=_get_int_env("FORECAST_HORIZON_DAYS", 30),
        seasonal_period=max(2, _get_int_env("FORECAST_SEASONAL_PERIOD", 7)),
        confidence_level=confidence,
        cluster_k=_get_int_env("CLUSTER_K", 3),
        cluster_method=_get_str_env("CLUSTER_METHOD", "kmeans").lower(),
        regression_method=_get_str_env("REGRESSION_METHOD", "random-forest").lower(),
        train_fraction=_get_float_env("REGRESSION_TRAIN_FRACTION", 0.8),
        normality_sample_cap=max(3, _get_int_env("NORMALITY_SAMPLE_CAP", 5000)),
    )

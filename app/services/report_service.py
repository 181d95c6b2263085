"""
app/services/report_service.py

Plain-text statistical report.

Sections are written in a fixed order, each introduced by a banner line:

    header -> descriptive statistics -> correlation -> statistical tests
    -> forecast -> clustering -> predictive model

A section whose analysis result is absent is left out entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

import pandas as pd

from app.domain.analysis import (
    AnalysisResult,
    ClusterAssignment,
    CorrelationMatrix,
    ForecastResult,
    HypothesisOutcome,
    HypothesisTestSuite,
    RegressionReport,
)
from app.domain.sales import DescriptiveSummary, ProductSummary, RegionSummary
from app.logging_utils import log_event
from app.services.aggregation_service import describe_dataset

logger = logging.getLogger(__name__)

TITLE = "STATISTICAL ANALYSIS REPORT"
_RULE = "=" * 40


def _section(handle: TextIO, title: str) -> None:
    handle.write(f"\n--- {title} ---\n")


def _table(handle: TextIO, frame: pd.DataFrame) -> None:
    handle.write(frame.to_string(index=False))
    handle.write("\n")


def _write_header(handle: TextIO, generated_at: datetime) -> None:
    handle.write(f"{_RULE}\n{TITLE}\nGenerated: {generated_at.isoformat(timespec='seconds')}\n{_RULE}\n")


def _write_descriptive(
    handle: TextIO,
    summary: DescriptiveSummary,
    regions: Sequence[RegionSummary],
    products: Sequence[ProductSummary],
) -> None:
    _section(handle, "DESCRIPTIVE STATISTICS")
    handle.write(
        f"Records: {summary.record_count} "
        f"({summary.start_date.isoformat()} to {summary.end_date.isoformat()})\n\n"
    )
    _table(
        handle,
        pd.DataFrame(
            [
                {
                    "field": item.field,
                    "min": item.minimum,
                    "1st Qu.": item.first_quartile,
                    "median": item.median,
                    "mean": round(item.mean, 2),
                    "3rd Qu.": item.third_quartile,
                    "max": item.maximum,
                }
                for item in summary.numeric
            ]
        ),
    )
    for field, counts in summary.level_counts.items():
        rendered = ", ".join(f"{level}: {count}" for level, count in counts.items())
        handle.write(f"{field}: {rendered}\n")

    if regions:
        handle.write("\nBy region:\n")
        _table(
            handle,
            pd.DataFrame(
                [
                    {
                        "region": item.region,
                        "total_sales": round(item.total_sales, 2),
                        "avg_customers": round(item.avg_customers, 2),
                        "records": item.record_count,
                    }
                    for item in regions
                ]
            ),
        )
    if products:
        handle.write("\nBy product:\n")
        _table(
            handle,
            pd.DataFrame(
                [
                    {
                        "product": item.product,
                        "total_sales": round(item.total_sales, 2),
                        "avg_customers": round(item.avg_customers, 2),
                        "records": item.record_count,
                    }
                    for item in products
                ]
            ),
        )


def _write_correlation(handle: TextIO, result: CorrelationMatrix) -> None:
    _section(handle, "CORRELATION ANALYSIS")
    matrix = pd.DataFrame(result.values, index=result.field_names, columns=result.field_names)
    handle.write(matrix.round(4).to_string())
    handle.write("\n")


def _outcome_line(outcome: HypothesisOutcome) -> str:
    line = f"{outcome.name}: statistic={outcome.statistic:.4f}, p-value={outcome.p_value:.4g}"
    if outcome.df is not None:
        line += ", df=" + "/".join(f"{value:g}" for value in outcome.df)
    if outcome.detail:
        line += f" ({outcome.detail})"
    return line + "\n"


def _write_tests(handle: TextIO, suite: HypothesisTestSuite) -> None:
    _section(handle, "STATISTICAL TESTS")
    for outcome in suite.normality.values():
        handle.write(_outcome_line(outcome))
    for outcome in (suite.anova_region, suite.anova_product, suite.two_sample):
        if outcome is not None:
            handle.write(_outcome_line(outcome))


def _write_forecast(handle: TextIO, result: ForecastResult) -> None:
    _section(handle, "TIME SERIES FORECAST")
    handle.write(
        f"Model: {result.model}, horizon: {result.horizon_days} days, "
        f"interval: {result.confidence_level:.0%}\n"
        f"Seasonal amplitude: {result.seasonal_amplitude:.2f}, "
        f"trend change over sample: {result.trend_change:.2f}\n\n"
    )
    _table(
        handle,
        pd.DataFrame(
            {
                "date": [value.isoformat() for value in result.dates],
                "forecast": [round(value, 2) for value in result.point],
                "lower": [round(value, 2) for value in result.lower],
                "upper": [round(value, 2) for value in result.upper],
            }
        ),
    )


def _write_clustering(handle: TextIO, result: ClusterAssignment) -> None:
    _section(handle, "CLUSTERING")
    handle.write(f"Method: {result.method}, k={result.k}")
    if result.inertia is not None:
        handle.write(f", inertia={result.inertia:.4f}")
    handle.write("\n\n")
    _table(
        handle,
        pd.DataFrame(
            [
                {
                    "cluster": profile.cluster_id,
                    "size": profile.size,
                    "avg_sales": round(profile.avg_sales, 2),
                    "avg_customers": round(profile.avg_customers, 2),
                }
                for profile in result.profiles
            ]
        ),
    )


def _write_regression(handle: TextIO, result: RegressionReport) -> None:
    _section(handle, "PREDICTIVE MODEL")
    handle.write(
        f"Method: {result.method} (train={result.n_train}, test={result.n_test})\n"
        f"RMSE: {result.rmse:.4f}\nMAE: {result.mae:.4f}\nR-squared: {result.r_squared:.4f}\n"
    )
    if result.feature_importance:
        handle.write("\nTop features:\n")
        for name, value in list(result.feature_importance.items())[:10]:
            handle.write(f"  {name}: {value:.4f}\n")


def render_report(
    frame: pd.DataFrame,
    summaries: Sequence[RegionSummary],
    results: Iterable[AnalysisResult],
    path: Path,
    products: Sequence[ProductSummary] = (),
    generated_at: datetime | None = None,
) -> Path:
    """
    Write the report for *frame* to *path* and return the path.

    The parent directory is created if missing. The file handle is closed
    on every exit path, including a failure half-way through rendering.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    path = Path(path)
    by_kind = {result.kind: result for result in results}
    generated_at = generated_at or datetime.now(timezone.utc)
    summary = describe_dataset(frame)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        _write_header(handle, generated_at)
        _write_descriptive(handle, summary, summaries, products)
        if "correlation" in by_kind:
            _write_correlation(handle, by_kind["correlation"])
        if "hypothesis_tests" in by_kind:
            _write_tests(handle, by_kind["hypothesis_tests"])
        if "forecast" in by_kind:
            _write_forecast(handle, by_kind["forecast"])
        if "cluster" in by_kind:
            _write_clustering(handle, by_kind["cluster"])
        if "regression" in by_kind:
            _write_regression(handle, by_kind["regression"])

    log_event(
        logger,
        logging.INFO,
        "report_written",
        path=str(path),
        sections=sorted(by_kind),
    )
    return path

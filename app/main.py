"""
Batch entry point: generate the dataset, run the registered analyses and
write the trend plot and statistical report.

Run with ``python -m app.main`` or the ``sales-analytics`` console script.
"""

from __future__ import annotations

import logging
import sys

import pandas as pd

from app.config import (
    AnalysisSettings,
    PipelineSettings,
    get_analysis_settings,
    get_pipeline_settings,
)
from app.errors import AnalyticsError
from app.logging_utils import configure_logging, log_event
from app.registry import AnalysisRegistry, build_default_registry
from app.services.aggregation_service import describe_dataset
from app.services.pipeline_orchestrator import PipelineOrchestrator, PipelineResult

logger = logging.getLogger(__name__)


def initialize(
    pipeline_settings: PipelineSettings,
    analysis_settings: AnalysisSettings,
) -> AnalysisRegistry:
    """
    One-time process setup: configure logging and build the capability
    registry. Logs which capabilities are available.
    """

    configure_logging(pipeline_settings.log_level)
    registry = build_default_registry(analysis_settings, seed=pipeline_settings.seed)
    log_event(
        logger,
        logging.INFO,
        "pipeline_initialized",
        seed=pipeline_settings.seed,
        capabilities=registry.names(),
    )
    return registry


def _print_summary(result: PipelineResult) -> None:
    summary = describe_dataset(result.dataset.frame)
    print("Data Summary:")
    print(
        f"  {summary.record_count} records, "
        f"{summary.start_date.isoformat()} to {summary.end_date.isoformat()}"
    )
    for item in summary.numeric:
        print(
            f"  {item.field}: min={item.minimum:.2f} median={item.median:.2f} "
            f"mean={item.mean:.2f} max={item.maximum:.2f}"
        )

    print("\nRegional Analysis:")
    regional = pd.DataFrame(
        [
            {
                "region": item.region,
                "total_sales": round(item.total_sales, 2),
                "avg_customers": round(item.avg_customers, 2),
            }
            for item in result.regions
        ]
    )
    print(regional.to_string(index=False))

    print(f"\nPlot written to {result.plot_path}")
    if result.report_path is not None:
        print(f"Report written to {result.report_path}")
    for name, reason in result.failures.items():
        print(f"Skipped {name}: {reason}")


def main() -> int:
    pipeline_settings = get_pipeline_settings()
    analysis_settings = get_analysis_settings()

    try:
        registry = initialize(pipeline_settings, analysis_settings)
        result = PipelineOrchestrator(pipeline_settings, registry).run()
    except (AnalyticsError, OSError) as exc:
        logger.exception("Batch run failed")
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _print_summary(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
app/services/pipeline_orchestrator.py

Coordinates the batch pipeline:

    generate -> aggregate -> run registered analyses -> plot -> report

Contains no statistics or modelling logic. Each step runs to completion
before the next begins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from app.config import PipelineSettings
from app.domain.analysis import AnalysisResult
from app.domain.sales import ProductSummary, RegionSummary, SalesDataset
from app.errors import RECOVERABLE_ERRORS
from app.logging_utils import log_event
from app.registry import AnalysisRegistry
from app.services.aggregation_service import aggregate_by_product, aggregate_by_region
from app.services.data_generator import generate
from app.services.plot_service import render_sales_trend
from app.services.report_service import render_report

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything one batch run produced."""

    dataset: SalesDataset
    regions: list[RegionSummary]
    products: list[ProductSummary]
    results: dict[str, AnalysisResult] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)
    plot_path: Path | None = None
    report_path: Path | None = None


class PipelineOrchestrator:
    """
    Thin coordinator for one batch run.

    Parameters
    ----------
    settings:
        Seed and artifact locations.
    registry:
        Analysis capabilities to run. An empty registry is valid: the run
        still produces the plot, and skips the report.
    """

    def __init__(self, settings: PipelineSettings, registry: AnalysisRegistry) -> None:
        self._settings = settings
        self._registry = registry

    def run_analyses(self, dataset: SalesDataset) -> tuple[dict[str, AnalysisResult], dict[str, str]]:
        """
        Invoke every registered capability in order.

        A capability failing with a caller-input error is logged and
        omitted; the remaining capabilities still run. Any other error
        propagates.
        """
        results: dict[str, AnalysisResult] = {}
        failures: dict[str, str] = {}
        for name, capability in self._registry:
            try:
                results[name] = capability(dataset.frame)
            except RECOVERABLE_ERRORS as exc:
                failures[name] = str(exc)
                log_event(
                    logger,
                    logging.WARNING,
                    "adapter_failed",
                    capability=name,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                continue
            log_event(logger, logging.INFO, "adapter_completed", capability=name)
        return results, failures

    def run(self) -> PipelineResult:
        """
        Execute the full batch pipeline.

        Raises:
            OSError: When the plot or report cannot be written.
            GenerationError: When the dataset breaks its invariants.
        """
        dataset = generate(self._settings.seed)
        frame = dataset.frame
        regions = aggregate_by_region(frame)
        products = aggregate_by_product(frame)

        results, failures = self.run_analyses(dataset)

        plot_path = render_sales_trend(frame, self._settings.plot_path)

        report_path = None
        if len(self._registry) > 0:
            report_path = render_report(
                frame,
                regions,
                results.values(),
                self._settings.report_path,
                products=products,
            )
        else:
            logger.info("No analysis capabilities registered; report skipped")

        return PipelineResult(
            dataset=dataset,
            regions=regions,
            products=products,
            results=results,
            failures=failures,
            plot_path=plot_path,
            report_path=report_path,
        )

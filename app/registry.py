"""
Optional analysis capability registry.

Maps a capability name to a callable taking the dataset frame and
returning one result record. The batch pipeline iterates the registry in
registration order; a capability that was never registered is simply not
run.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

import pandas as pd

from app.config import AnalysisSettings
from app.domain.analysis import AnalysisResult

Capability = Callable[[pd.DataFrame], AnalysisResult]

FORECAST = "forecast"
CLUSTERING = "clustering"
REGRESSION = "regression"
CORRELATION = "correlation"
HYPOTHESIS_TESTS = "hypothesis_tests"


class AnalysisRegistry:
    """
    Registry of analysis capabilities keyed by name.
    """

    def __init__(self, registrations: Mapping[str, Capability] | None = None) -> None:
        self._registrations: dict[str, Capability] = {}
        for name, capability in (registrations or {}).items():
            self.register(name, capability)

    def register(self, name: str, capability: Capability) -> None:
        if not callable(capability):
            raise TypeError(f"Capability '{name}' must be callable.")
        self._registrations[name.strip().lower()] = capability

    def unregister(self, name: str) -> None:
        self._registrations.pop(name.strip().lower(), None)

    def get(self, name: str) -> Capability | None:
        return self._registrations.get(name.strip().lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._registrations

    def __iter__(self) -> Iterator[tuple[str, Capability]]:
        return iter(list(self._registrations.items()))

    def __len__(self) -> int:
        return len(self._registrations)

    def names(self) -> list[str]:
        return list(self._registrations)


def build_default_registry(settings: AnalysisSettings, seed: int = 123) -> AnalysisRegistry:
    """
    Register every capability enabled in *settings*, bound to its
    configured parameters.

    Adapter modules are imported lazily so that a disabled capability
    never pulls in its modelling stack.
    """

    registry = AnalysisRegistry()

    if settings.forecast_enabled:
        from forecast.seasonal import forecast_sales  # noqa: PLC0415

        registry.register(
            FORECAST,
            lambda frame: forecast_sales(
                frame,
                horizon_days=settings.forecast_horizon_days,
                seasonal_period=settings.seasonal_period,
                confidence_level=settings.confidence_level,
            ),
        )

    if settings.clustering_enabled:
        from segmentation.orchestrator import cluster_records  # noqa: PLC0415

        registry.register(
            CLUSTERING,
            lambda frame: cluster_records(
                frame,
                k=settings.cluster_k,
                method=settings.cluster_method,
            ),
        )

    if settings.regression_enabled:
        from modeling.trainer import train_regressor  # noqa: PLC0415

        registry.register(
            REGRESSION,
            lambda frame: train_regressor(
                frame,
                method=settings.regression_method,
                train_fraction=settings.train_fraction,
                random_state=seed,
            ).report,
        )

    if settings.correlation_enabled:
        from analysis.correlation import correlate  # noqa: PLC0415

        registry.register(CORRELATION, correlate)

    if settings.hypothesis_tests_enabled:
        from analysis.hypothesis import run_hypothesis_tests  # noqa: PLC0415

        registry.register(
            HYPOTHESIS_TESTS,
            lambda frame: run_hypothesis_tests(
                frame,
                sample_cap=settings.normality_sample_cap,
                random_state=seed,
            ),
        )

    return registry

"""
tests/test_pipeline_orchestrator.py

Batch run over a hand-built registry.
"""

from __future__ import annotations

import struct
from pathlib import Path

import pandas as pd
import pytest

from analysis.correlation import correlate
from app.config import PipelineSettings
from app.errors import InsufficientDataError
from app.registry import AnalysisRegistry
from app.services.pipeline_orchestrator import PipelineOrchestrator


def _settings(tmp_path: Path) -> PipelineSettings:
    return PipelineSettings(
        seed=123,
        plot_path=tmp_path / "plots" / "sales_trend.png",
        report_path=tmp_path / "reports" / "statistical_report.txt",
    )


def _png_size(path: Path) -> tuple[int, int]:
    header = path.read_bytes()[:24]
    assert header[:8] == b"\x89PNG\r\n\x1a\n"
    return struct.unpack(">II", header[16:24])


def _failing(frame: pd.DataFrame):
    raise InsufficientDataError("not enough rows")


def test_failed_capability_is_skipped(tmp_path: Path) -> None:
    registry = AnalysisRegistry({"broken": _failing, "correlation": correlate})
    result = PipelineOrchestrator(_settings(tmp_path), registry).run()

    assert list(result.results) == ["correlation"]
    assert result.failures == {"broken": "not enough rows"}
    assert result.report_path is not None
    text = result.report_path.read_text(encoding="utf-8")
    assert "CORRELATION ANALYSIS" in text


def test_unexpected_error_propagates(tmp_path: Path) -> None:
    def explode(frame: pd.DataFrame):
        raise RuntimeError("bug")

    registry = AnalysisRegistry({"explode": explode})
    with pytest.raises(RuntimeError):
        PipelineOrchestrator(_settings(tmp_path), registry).run()


def test_empty_registry_skips_report(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    result = PipelineOrchestrator(settings, AnalysisRegistry()).run()

    assert result.report_path is None
    assert not settings.report_path.exists()
    assert result.plot_path == settings.plot_path
    assert len(result.dataset) == 365
    assert [item.region for item in result.regions] == ["East", "North", "South", "West"]


def test_plot_is_12_by_8_inches_at_300_dpi(tmp_path: Path) -> None:
    result = PipelineOrchestrator(_settings(tmp_path), AnalysisRegistry()).run()
    assert _png_size(result.plot_path) == (3600, 2400)

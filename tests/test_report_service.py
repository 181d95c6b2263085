"""
tests/test_report_service.py

Plain-text report layout.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import pytest

from analysis.correlation import correlate
from analysis.hypothesis import run_hypothesis_tests
from app.services import report_service
from app.services.aggregation_service import aggregate_by_product, aggregate_by_region
from app.services.data_generator import generate
from app.services.report_service import TITLE, render_report
from segmentation.orchestrator import cluster_records

GENERATED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture(scope="module")
def frame() -> pd.DataFrame:
    return generate(123).frame


def _render(frame: pd.DataFrame, results: list, path: Path) -> str:
    render_report(
        frame,
        aggregate_by_region(frame),
        results,
        path,
        products=aggregate_by_product(frame),
        generated_at=GENERATED_AT,
    )
    return path.read_text(encoding="utf-8")


def test_no_results_writes_header_and_descriptive_only(frame: pd.DataFrame, tmp_path: Path) -> None:
    text = _render(frame, [], tmp_path / "report.txt")
    assert text.startswith("=" * 40 + "\n" + TITLE + "\n")
    assert "Generated: 2024-01-02T03:04:05+00:00" in text
    assert "--- DESCRIPTIVE STATISTICS ---" in text
    assert "By region:" in text
    assert "By product:" in text
    for absent in ("CORRELATION ANALYSIS", "STATISTICAL TESTS", "TIME SERIES FORECAST", "CLUSTERING"):
        assert absent not in text


def test_sections_in_fixed_order(frame: pd.DataFrame, tmp_path: Path) -> None:
    results = [
        cluster_records(frame, k=3),
        run_hypothesis_tests(frame),
        correlate(frame),
    ]
    text = _render(frame, results, tmp_path / "report.txt")
    positions = [
        text.index(f"--- {title} ---")
        for title in ("DESCRIPTIVE STATISTICS", "CORRELATION ANALYSIS", "STATISTICAL TESTS", "CLUSTERING")
    ]
    assert positions == sorted(positions)
    assert "PREDICTIVE MODEL" not in text


def test_every_region_listed(frame: pd.DataFrame, tmp_path: Path) -> None:
    text = _render(frame, [], tmp_path / "report.txt")
    for summary in aggregate_by_region(frame):
        assert summary.region in text


def test_creates_missing_directories(frame: pd.DataFrame, tmp_path: Path) -> None:
    target = tmp_path / "nested" / "deeper" / "report.txt"
    returned = render_report(frame, aggregate_by_region(frame), [], target)
    assert returned == target
    assert target.exists()


def test_unwritable_location_raises_os_error(frame: pd.DataFrame, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(OSError):
        render_report(frame, aggregate_by_region(frame), [], blocker / "report.txt")


def test_partial_report_flushed_when_section_fails(
    frame: pd.DataFrame,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken(handle, result):
        raise RuntimeError("render failed")

    monkeypatch.setattr(report_service, "_write_correlation", broken)
    target = tmp_path / "report.txt"

    with pytest.raises(RuntimeError):
        render_report(frame, aggregate_by_region(frame), [correlate(frame)], target)

    text = target.read_text(encoding="utf-8")
    assert "--- DESCRIPTIVE STATISTICS ---" in text
    assert "CORRELATION ANALYSIS" not in text

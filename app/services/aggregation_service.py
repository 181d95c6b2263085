"""
app/services/aggregation_service.py

Grouped and dataset-wide summaries of the sales dataset.

Formulas
--------
total_sales    = exact sum (``math.fsum``) of ``sales`` within the group
avg_customers  = sum(customers) / count   (count > 0 by construction)

Groups are emitted sorted by key so output never depends on the order of
the input rows. A key with no rows is absent rather than reported as zero.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import pandas as pd

from app.domain.sales import (
    CATEGORICAL_FIELDS,
    NUMERIC_FIELDS,
    DescriptiveSummary,
    NumericFieldSummary,
    ProductSummary,
    RegionSummary,
)

logger = logging.getLogger(__name__)


def _reduce_by(frame: pd.DataFrame, key: str) -> list[tuple[str, float, float, int]]:
    """
    Return ``(key_value, total_sales, avg_customers, count)`` per group,
    sorted lexicographically by key value.
    """
    reduced: list[tuple[str, float, float, int]] = []
    for value in sorted(frame[key].unique().tolist()):
        group = frame.loc[frame[key] == value]
        count = len(group)
        total_sales = math.fsum(group["sales"].tolist())
        avg_customers = math.fsum(group["customers"].tolist()) / count
        reduced.append((str(value), total_sales, avg_customers, count))
    return reduced


def aggregate_by_region(frame: pd.DataFrame) -> list[RegionSummary]:
    """Summarise sales and customers per region."""
    summaries = [
        RegionSummary(
            region=value,
            total_sales=total,
            avg_customers=avg,
            record_count=count,
        )
        for value, total, avg, count in _reduce_by(frame, "region")
    ]
    logger.debug("Aggregated %d records into %d regions", len(frame), len(summaries))
    return summaries


def aggregate_by_product(frame: pd.DataFrame) -> list[ProductSummary]:
    """Summarise sales and customers per product."""
    return [
        ProductSummary(
            product=value,
            total_sales=total,
            avg_customers=avg,
            record_count=count,
        )
        for value, total, avg, count in _reduce_by(frame, "product")
    ]


def describe_dataset(frame: pd.DataFrame) -> DescriptiveSummary:
    """
    Six-number summaries for numeric fields, level counts for categorical
    fields, plus the covered date range.
    """
    numeric = []
    for name in NUMERIC_FIELDS:
        column = frame[name].astype(float)
        q1, median, q3 = column.quantile([0.25, 0.5, 0.75]).tolist()
        numeric.append(
            NumericFieldSummary(
                field=name,
                minimum=float(column.min()),
                first_quartile=float(q1),
                median=float(median),
                mean=math.fsum(column.tolist()) / len(column),
                third_quartile=float(q3),
                maximum=float(column.max()),
            )
        )

    level_counts = {
        name: {
            str(level): int(count)
            for level, count in sorted(frame[name].value_counts().items())
        }
        for name in CATEGORICAL_FIELDS
    }

    dates = pd.to_datetime(frame["date"])
    return DescriptiveSummary(
        record_count=len(frame),
        start_date=dates.min().date(),
        end_date=dates.max().date(),
        numeric=tuple(numeric),
        level_counts=level_counts,
    )


def headline_metrics(frame: pd.DataFrame) -> dict[str, Any]:
    """Totals shown as dashboard value boxes."""
    return {
        "total_sales": math.fsum(frame["sales"].tolist()),
        "avg_customers": math.fsum(frame["customers"].tolist()) / len(frame),
        "total_records": len(frame),
    }

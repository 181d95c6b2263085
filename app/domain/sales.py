"""
Domain types for the synthetic sales dataset and its grouped summaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator

import pandas as pd

REGIONS: tuple[str, ...] = ("North", "South", "East", "West")
PRODUCTS: tuple[str, ...] = ("Product A", "Product B", "Product C")

DATASET_COLUMNS: tuple[str, ...] = ("date", "sales", "customers", "region", "product")
NUMERIC_FIELDS: tuple[str, ...] = ("sales", "customers")
CATEGORICAL_FIELDS: tuple[str, ...] = ("region", "product")


@dataclass(frozen=True)
class SalesRecord:
    """One simulated day of sales."""

    date: date
    sales: float
    customers: int
    region: str
    product: str


@dataclass(frozen=True)
class SalesDataset:
    """
    Immutable, ordered collection of daily sales records.

    The underlying DataFrame is never handed out directly; :attr:`frame`
    returns a copy so that no consumer can mutate the cached data another
    consumer is reading.
    """

    seed: int
    _frame: pd.DataFrame = field(repr=False)

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame.copy()

    def __len__(self) -> int:
        return len(self._frame)

    def records(self) -> Iterator[SalesRecord]:
        for row in self._frame.itertuples(index=False):
            yield SalesRecord(
                date=row.date.date(),
                sales=float(row.sales),
                customers=int(row.customers),
                region=str(row.region),
                product=str(row.product),
            )

    @property
    def start_date(self) -> date:
        return self._frame["date"].iloc[0].date()

    @property
    def end_date(self) -> date:
        return self._frame["date"].iloc[-1].date()


@dataclass(frozen=True)
class RegionSummary:
    """Aggregated sales and customer figures for one region."""

    region: str
    total_sales: float
    avg_customers: float
    record_count: int


@dataclass(frozen=True)
class ProductSummary:
    """Aggregated sales and customer figures for one product."""

    product: str
    total_sales: float
    avg_customers: float
    record_count: int


@dataclass(frozen=True)
class NumericFieldSummary:
    """Six-number summary of one numeric field."""

    field: str
    minimum: float
    first_quartile: float
    median: float
    mean: float
    third_quartile: float
    maximum: float


@dataclass(frozen=True)
class DescriptiveSummary:
    """
    Dataset-wide descriptive statistics.

    ``level_counts`` maps each categorical field to ``{level: count}``,
    levels sorted by name.
    """

    record_count: int
    start_date: date
    end_date: date
    numeric: tuple[NumericFieldSummary, ...]
    level_counts: dict[str, dict[str, int]]

"""
app/services/data_generator.py

Deterministic synthetic sales data.

One record per calendar day of 2023. Values are drawn from a seeded
``numpy.random.Generator`` in a fixed order (sales, customers, region,
product), so the same seed always yields the same dataset.
"""

from __future__ import annotations

import logging
from datetime import date

import numpy as np
import pandas as pd

from app.domain.sales import DATASET_COLUMNS, PRODUCTS, REGIONS, SalesDataset
from app.errors import GenerationError

logger = logging.getLogger(__name__)

START_DATE = date(2023, 1, 1)
END_DATE = date(2023, 12, 31)

SALES_MEAN = 1000.0
SALES_STD = 200.0
CUSTOMERS_MEAN = 50.0
CUSTOMERS_STD = 10.0


def generate(seed: int = 123) -> SalesDataset:
    """
    Build the one-year synthetic dataset for *seed*.

    Raises:
        GenerationError: If the produced frame breaks the dataset
            invariants (row count, contiguous strictly increasing dates).
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range(START_DATE, END_DATE, freq="D")
    n = len(dates)

    sales = np.round(rng.normal(loc=SALES_MEAN, scale=SALES_STD, size=n), 2)
    customers = np.rint(
        rng.normal(loc=CUSTOMERS_MEAN, scale=CUSTOMERS_STD, size=n)
    ).astype(np.int64)
    region = rng.choice(np.array(REGIONS), size=n, replace=True)
    product = rng.choice(np.array(PRODUCTS), size=n, replace=True)

    frame = pd.DataFrame(
        {
            "date": dates,
            "sales": sales,
            "customers": customers,
            "region": region.astype(object),
            "product": product.astype(object),
        },
        columns=list(DATASET_COLUMNS),
    )
    _check_invariants(frame)

    logger.debug("Generated %d records with seed=%d", n, seed)
    return SalesDataset(seed=seed, _frame=frame)


def _check_invariants(frame: pd.DataFrame) -> None:
    expected_days = (END_DATE - START_DATE).days + 1
    if len(frame) != expected_days:
        raise GenerationError(
            f"Expected {expected_days} records, generated {len(frame)}."
        )

    steps = frame["date"].diff().dropna()
    if not (steps == pd.Timedelta(days=1)).all():
        raise GenerationError("Generated dates are not contiguous and strictly increasing.")

"""
tests/test_data_generator.py

Determinism and shape invariants of the synthetic dataset.
"""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest

from app.domain.sales import PRODUCTS, REGIONS, SalesDataset, SalesRecord
from app.errors import GenerationError
from app.services import data_generator
from app.services.data_generator import generate


@pytest.fixture(scope="module")
def dataset() -> SalesDataset:
    return generate(123)


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------


class TestDeterminism:
    @pytest.mark.parametrize("seed", [0, 1, 123, 2023])
    def test_same_seed_same_dataset(self, seed: int) -> None:
        pd.testing.assert_frame_equal(generate(seed).frame, generate(seed).frame)

    def test_different_seeds_differ(self) -> None:
        assert not generate(1).frame["sales"].equals(generate(2).frame["sales"])

    def test_seed_is_recorded(self, dataset: SalesDataset) -> None:
        assert dataset.seed == 123


# ---------------------------------------------------------------------------
# Shape and value invariants
# ---------------------------------------------------------------------------


class TestInvariants:
    def test_exactly_365_records(self, dataset: SalesDataset) -> None:
        assert len(dataset) == 365
        assert len(dataset.frame) == 365

    def test_dates_contiguous_from_new_year(self, dataset: SalesDataset) -> None:
        dates = [record.date for record in dataset.records()]
        assert dates[0] == date(2023, 1, 1)
        assert dates[-1] == date(2023, 12, 31)
        for earlier, later in zip(dates, dates[1:]):
            assert later - earlier == timedelta(days=1)
        assert len(set(dates)) == len(dates)

    def test_start_and_end_properties(self, dataset: SalesDataset) -> None:
        assert dataset.start_date == date(2023, 1, 1)
        assert dataset.end_date == date(2023, 12, 31)

    def test_categorical_values_from_fixed_sets(self, dataset: SalesDataset) -> None:
        frame = dataset.frame
        assert set(frame["region"]).issubset(REGIONS)
        assert set(frame["product"]).issubset(PRODUCTS)

    def test_sales_rounded_to_cents(self, dataset: SalesDataset) -> None:
        sales = dataset.frame["sales"]
        assert ((sales * 100).round() - sales * 100).abs().max() < 1e-6

    def test_customers_are_integers(self, dataset: SalesDataset) -> None:
        assert pd.api.types.is_integer_dtype(dataset.frame["customers"])

    def test_distribution_parameters_roughly_preserved(self, dataset: SalesDataset) -> None:
        frame = dataset.frame
        assert 950 < frame["sales"].mean() < 1050
        assert 150 < frame["sales"].std() < 250
        assert 47 < frame["customers"].mean() < 53

    def test_first_record_end_to_end(self, dataset: SalesDataset) -> None:
        first = next(dataset.records())
        assert isinstance(first, SalesRecord)
        assert first.date == date(2023, 1, 1)
        assert first.region in REGIONS
        assert first.product in PRODUCTS


# ---------------------------------------------------------------------------
# Read-only access
# ---------------------------------------------------------------------------


class TestReadOnly:
    def test_frame_is_a_copy(self, dataset: SalesDataset) -> None:
        frame = dataset.frame
        frame.loc[0, "sales"] = -1.0
        assert dataset.frame.loc[0, "sales"] != -1.0

    def test_dataset_is_frozen(self, dataset: SalesDataset) -> None:
        with pytest.raises((AttributeError, TypeError)):
            dataset.seed = 7  # type: ignore[misc]


def test_duplicate_date_raises_generation_error() -> None:
    frame = generate(123).frame
    frame.loc[100, "date"] = frame.loc[99, "date"]
    with pytest.raises(GenerationError):
        data_generator._check_invariants(frame)


def test_wrong_record_count_raises_generation_error() -> None:
    frame = generate(123).frame.head(364)
    with pytest.raises(GenerationError):
        data_generator._check_invariants(frame)

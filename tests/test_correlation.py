"""
tests/test_correlation.py
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from analysis.correlation import correlate
from app.errors import InsufficientDataError
from app.services.data_generator import generate


def test_dataset_correlation_shape() -> None:
    result = correlate(generate(123).frame)
    assert result.kind == "correlation"
    assert result.field_names == ["sales", "customers"]
    assert result.get("sales", "sales") == 1.0
    assert result.get("customers", "customers") == 1.0
    assert result.get("sales", "customers") == result.get("customers", "sales")
    assert -1.0 <= result.get("sales", "customers") <= 1.0


def test_matrix_exactly_symmetric() -> None:
    rng = np.random.default_rng(0)
    frame = pd.DataFrame(rng.normal(size=(50, 4)), columns=list("abcd"))
    values = np.array(correlate(frame).values)
    assert (values == values.T).all()
    assert (np.diag(values) == 1.0).all()


def test_missing_values_excluded_pairwise() -> None:
    frame = pd.DataFrame(
        {
            "a": [1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
            "b": [2.0, 1.0, 4.0, 3.0, 6.0, 5.0],
            "c": [1.0, np.nan, 2.0, 5.0, 4.0, 8.0],
        }
    )
    result = correlate(frame)

    expected_ab = np.corrcoef(frame["a"], frame["b"])[0, 1]
    assert result.get("a", "b") == pytest.approx(expected_ab)

    complete = frame.dropna()
    expected_ac = np.corrcoef(complete["a"], complete["c"])[0, 1]
    assert result.get("a", "c") == pytest.approx(expected_ac)


def test_non_numeric_columns_ignored() -> None:
    frame = pd.DataFrame({"x": [1.0, 2.0, 3.0], "y": [3.0, 2.0, 1.0], "label": ["p", "q", "r"]})
    result = correlate(frame)
    assert result.field_names == ["x", "y"]
    assert result.get("x", "y") == pytest.approx(-1.0)


def test_no_numeric_columns() -> None:
    with pytest.raises(InsufficientDataError):
        correlate(pd.DataFrame({"label": ["p", "q"]}))

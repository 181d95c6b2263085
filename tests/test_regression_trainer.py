"""
tests/test_regression_trainer.py

Stratified split, held-out metrics and feature importance.
"""

from __future__ import annotations

import math

import pandas as pd
import pytest

from app.errors import InsufficientDataError, InvalidParameterError, UnsupportedMethodError
from app.services.data_generator import generate
from modeling.features import CATEGORICAL, NUMERIC, build_model_frame
from modeling.trainer import TrainedRegressor, feature_importance, train_regressor


@pytest.fixture(scope="module")
def frame() -> pd.DataFrame:
    return generate(123).frame


@pytest.fixture(scope="module")
def forest(frame: pd.DataFrame) -> TrainedRegressor:
    return train_regressor(frame)


class TestRandomForest:
    def test_split_sizes(self, forest: TrainedRegressor) -> None:
        assert forest.report.n_train == 292
        assert forest.report.n_test == 73
        assert len(forest.report.predictions) == len(forest.report.actuals) == 73

    def test_metrics_finite_and_non_negative(self, forest: TrainedRegressor) -> None:
        report = forest.report
        assert math.isfinite(report.rmse) and report.rmse >= 0.0
        assert math.isfinite(report.mae) and report.mae >= 0.0
        assert 0.0 <= report.r_squared <= 1.0
        assert report.mae <= report.rmse + 1e-9

    def test_feature_importance_ranked(self, forest: TrainedRegressor) -> None:
        importance = forest.report.feature_importance
        assert importance is not None
        values = list(importance.values())
        assert values == sorted(values, reverse=True)
        assert sum(values) == pytest.approx(1.0, abs=1e-3)
        assert "customers" in importance

    def test_report_importance_matches_accessor(self, forest: TrainedRegressor) -> None:
        assert forest.report.feature_importance == feature_importance(forest)

    def test_deterministic(self, frame: pd.DataFrame, forest: TrainedRegressor) -> None:
        assert train_regressor(frame).report == forest.report


@pytest.mark.parametrize("method", ["support-vector-regression", "linear-regression"])
def test_other_methods_have_no_importance(frame: pd.DataFrame, method: str) -> None:
    trained = train_regressor(frame, method=method)
    assert trained.report.method == method
    assert trained.report.feature_importance is None
    assert feature_importance(trained) is None


def test_unsupported_method(frame: pd.DataFrame) -> None:
    with pytest.raises(UnsupportedMethodError) as exc_info:
        train_regressor(frame, method="xgboost")
    assert exc_info.value.method == "xgboost"
    assert "random-forest" in exc_info.value.supported


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.5])
def test_train_fraction_out_of_range(frame: pd.DataFrame, fraction: float) -> None:
    with pytest.raises(InvalidParameterError):
        train_regressor(frame, train_fraction=fraction)


def test_partition_too_small(frame: pd.DataFrame) -> None:
    with pytest.raises(InsufficientDataError):
        train_regressor(frame.head(5), train_fraction=0.8)


def test_model_frame_columns(frame: pd.DataFrame) -> None:
    model_frame = build_model_frame(frame)
    assert list(model_frame.columns) == ["sales"] + NUMERIC + CATEGORICAL
    assert model_frame["day_of_year"].min() == 1
    assert model_frame["day_of_year"].max() == 365
    assert set(model_frame["month"]) == {f"{month:02d}" for month in range(1, 13)}

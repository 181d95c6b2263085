"""
tests/test_forecast.py

Seasonal forecaster over the generated daily series.
"""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest

from app.domain.analysis import ForecastResult
from app.errors import InsufficientDataError, InvalidParameterError
from app.services.data_generator import generate
from forecast.seasonal import SeasonalForecastModel, forecast_sales


@pytest.fixture(scope="module")
def frame() -> pd.DataFrame:
    return generate(123).frame


@pytest.fixture(scope="module")
def result(frame: pd.DataFrame) -> ForecastResult:
    return forecast_sales(frame, horizon_days=30)


class TestForecastShape:
    def test_horizon_length(self, result: ForecastResult) -> None:
        assert result.horizon_days == 30
        assert len(result.dates) == len(result.point) == 30
        assert len(result.lower) == len(result.upper) == 30

    def test_dates_continue_after_last_observation(self, result: ForecastResult) -> None:
        assert result.dates[0] == date(2024, 1, 1)
        for earlier, later in zip(result.dates, result.dates[1:]):
            assert later - earlier == timedelta(days=1)

    def test_interval_brackets_point(self, result: ForecastResult) -> None:
        for lower, point, upper in zip(result.lower, result.point, result.upper):
            assert lower <= point <= upper

    def test_model_metadata(self, result: ForecastResult) -> None:
        assert result.kind == "forecast"
        assert result.seasonal_period == 7
        assert result.confidence_level == pytest.approx(0.95)
        assert result.seasonal_amplitude >= 0.0

    def test_wider_interval_for_higher_confidence(self, frame: pd.DataFrame, result: ForecastResult) -> None:
        narrow = forecast_sales(frame, horizon_days=30, confidence_level=0.5)
        assert narrow.upper[0] - narrow.lower[0] < result.upper[0] - result.lower[0]


class TestForecastErrors:
    def test_too_few_observations(self, frame: pd.DataFrame) -> None:
        with pytest.raises(InsufficientDataError):
            forecast_sales(frame.head(10), horizon_days=5)

    @pytest.mark.parametrize("horizon", [0, -3])
    def test_non_positive_horizon(self, frame: pd.DataFrame, horizon: int) -> None:
        with pytest.raises(InvalidParameterError):
            forecast_sales(frame, horizon_days=horizon)

    @pytest.mark.parametrize("kwargs", [{"seasonal_period": 1}, {"confidence_level": 1.0}, {"confidence_level": 0.0}])
    def test_invalid_model_parameters(self, kwargs: dict) -> None:
        with pytest.raises(InvalidParameterError):
            SeasonalForecastModel(**kwargs)

    def test_missing_day_is_insufficient_data(self, frame: pd.DataFrame) -> None:
        with pytest.raises(InsufficientDataError, match="missing days"):
            forecast_sales(frame.drop(index=[100]), horizon_days=5)

    def test_errors_are_value_errors(self, frame: pd.DataFrame) -> None:
        with pytest.raises(ValueError):
            forecast_sales(frame.head(3))

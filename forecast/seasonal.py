"""
forecast/seasonal.py

Seasonal decomposition plus seasonal ARIMA extrapolation of daily sales.

The series is first split into trend / seasonal / residual components
with a classical additive decomposition; the component sizes are reported
alongside the forecast. The forecast itself comes from a SARIMAX model
whose seasonal term uses the same period:

    SARIMA(1, 1, 1) x (1, 0, 1, period)
"""

from __future__ import annotations

import logging
import warnings

import numpy as np
import pandas as pd
from statsmodels.tools.sm_exceptions import ConvergenceWarning
from statsmodels.tsa.seasonal import seasonal_decompose
from statsmodels.tsa.statespace.sarimax import SARIMAX

from app.domain.analysis import ForecastResult
from app.errors import InsufficientDataError, InvalidParameterError
from forecast.base import BaseForecastModel

logger = logging.getLogger(__name__)

_ORDER = (1, 1, 1)


class SeasonalForecastModel(BaseForecastModel):
    """
    Decompose-then-extrapolate forecaster for a daily series.

    Parameters
    ----------
    seasonal_period:
        Length of one seasonal cycle in days (7 = weekly). At least two
        full cycles must be observed before fitting.
    confidence_level:
        Coverage of the reported prediction interval, e.g. ``0.95``.
    """

    MIN_CYCLES: int = 2

    def __init__(self, seasonal_period: int = 7, confidence_level: float = 0.95) -> None:
        if seasonal_period < 2:
            raise InvalidParameterError(
                f"seasonal_period must be at least 2, got {seasonal_period}."
            )
        if not 0.0 < confidence_level < 1.0:
            raise InvalidParameterError(
                f"confidence_level must lie in (0, 1), got {confidence_level}."
            )
        self._period = seasonal_period
        self._confidence = confidence_level

    def forecast(self, series: pd.Series, horizon_days: int) -> ForecastResult:
        if horizon_days < 1:
            raise InvalidParameterError(
                f"horizon_days must be a positive integer, got {horizon_days}."
            )
        required = self.MIN_CYCLES * self._period
        if len(series) < required:
            raise InsufficientDataError(
                f"Insufficient data: need at least {required} observations "
                f"({self.MIN_CYCLES} seasonal cycles of {self._period}), got {len(series)}."
            )

        series = series.asfreq("D")
        if series.isna().any():
            raise InsufficientDataError(
                f"Series has {int(series.isna().sum())} missing days; a contiguous daily series is required."
            )

        decomposition = seasonal_decompose(series, model="additive", period=self._period)
        seasonal = decomposition.seasonal.iloc[: self._period]
        trend = decomposition.trend.dropna()

        model = SARIMAX(
            series,
            order=_ORDER,
            seasonal_order=(1, 0, 1, self._period),
            enforce_stationarity=False,
            enforce_invertibility=False,
        )
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ConvergenceWarning)
            fitted = model.fit(disp=False)

        prediction = fitted.get_forecast(steps=horizon_days)
        interval = prediction.conf_int(alpha=1.0 - self._confidence)
        point = np.asarray(prediction.predicted_mean, dtype=float)

        start = series.index[-1] + pd.Timedelta(days=1)
        future = pd.date_range(start, periods=horizon_days, freq="D")

        logger.debug(
            "Forecast fitted on %d points, horizon=%d, aic=%.2f",
            len(series),
            horizon_days,
            fitted.aic,
        )

        return ForecastResult(
            model=f"SARIMA{_ORDER}x(1, 0, 1, {self._period})",
            horizon_days=horizon_days,
            seasonal_period=self._period,
            confidence_level=self._confidence,
            dates=[ts.date() for ts in future],
            point=point.round(4).tolist(),
            lower=interval.iloc[:, 0].to_numpy(dtype=float).round(4).tolist(),
            upper=interval.iloc[:, 1].to_numpy(dtype=float).round(4).tolist(),
            seasonal_amplitude=round(float(seasonal.max() - seasonal.min()), 4),
            trend_change=round(float(trend.iloc[-1] - trend.iloc[0]), 4) if len(trend) else 0.0,
        )


def forecast_sales(
    frame: pd.DataFrame,
    horizon_days: int = 30,
    seasonal_period: int = 7,
    confidence_level: float = 0.95,
) -> ForecastResult:
    """
    Forecast daily ``sales`` *horizon_days* past the last date in *frame*.
    """
    series = pd.Series(
        frame["sales"].to_numpy(dtype=float),
        index=pd.DatetimeIndex(pd.to_datetime(frame["date"])),
        name="sales",
    ).sort_index()
    model = SeasonalForecastModel(
        seasonal_period=seasonal_period,
        confidence_level=confidence_level,
    )
    return model.forecast(series, horizon_days)

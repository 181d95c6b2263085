"""
forecast/base.py

Abstract base class for all forecast model implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import pandas as pd

from app.domain.analysis import ForecastResult


class BaseForecastModel(ABC):
    """
    Contract for forecast model implementations.

    Subclasses receive a daily series indexed by date and return a
    :class:`ForecastResult` covering ``horizon_days`` steps past the last
    observation.

    No I/O and no side effects beyond logging are permitted inside
    :meth:`forecast`.
    """

    @abstractmethod
    def forecast(self, series: pd.Series, horizon_days: int) -> ForecastResult:
        """
        Fit on *series* and extrapolate *horizon_days* steps ahead.

        Parameters
        ----------
        series:
            Observations in chronological order, indexed by a daily
            ``DatetimeIndex``.
        horizon_days:
            Number of future days to predict. Must be at least 1.

        Raises
        ------
        InsufficientDataError
            When *series* is too short for the concrete model.
        InvalidParameterError
            When *horizon_days* is out of range.
        """

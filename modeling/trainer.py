"""
modeling/trainer.py

Train a sales regressor on a stratified split and score it on the
held-out partition.

Metrics
-------
RMSE       = sqrt(mean((prediction - actual) ** 2))
MAE        = mean(|prediction - actual|)
R-squared  = pearson(prediction, actual) ** 2
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

import numpy as np
import pandas as pd
from sklearn.compose import TransformedTargetRegressor
from sklearn.ensemble import RandomForestRegressor
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_absolute_error, mean_squared_error
from sklearn.model_selection import train_test_split
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.svm import SVR

from app.domain.analysis import RegressionReport
from app.errors import InsufficientDataError, InvalidParameterError, UnsupportedMethodError
from app.logging_utils import log_event
from modeling.features import CATEGORICAL, NUMERIC, TARGET, build_model_frame, build_preprocessor

logger = logging.getLogger(__name__)

_STRATA = 5


def _random_forest(random_state: int):
    return RandomForestRegressor(n_estimators=100, random_state=random_state)


def _support_vector(_random_state: int):
    return TransformedTargetRegressor(regressor=SVR(kernel="rbf"), transformer=StandardScaler())


def _linear(_random_state: int):
    return LinearRegression()


# Factories receive the split seed; deterministic estimators ignore it.
REGRESSION_METHODS: dict[str, Callable[[int], object]] = {
    "random-forest": _random_forest,
    "support-vector-regression": _support_vector,
    "linear-regression": _linear,
}


@dataclass(frozen=True)
class TrainedRegressor:
    """Fitted preprocessing + estimator pipeline with its held-out report."""

    method: str
    pipeline: Pipeline
    report: RegressionReport


def _split_sizes(n_records: int, train_fraction: float) -> tuple[int, int]:
    n_train = math.floor(train_fraction * n_records)
    return n_train, n_records - n_train


def _strata(target: pd.Series, groups: int) -> pd.Series | None:
    """Quantile bins of the target used to stratify the split."""
    if groups < 2:
        return None
    return pd.qcut(target, q=groups, labels=False, duplicates="drop")


def _squared_correlation(predictions: np.ndarray, actuals: np.ndarray) -> float:
    if np.std(predictions) == 0.0 or np.std(actuals) == 0.0:
        return 0.0
    return float(np.corrcoef(predictions, actuals)[0, 1] ** 2)


def train_regressor(
    frame: pd.DataFrame,
    method: str = "random-forest",
    train_fraction: float = 0.8,
    random_state: int = 123,
) -> TrainedRegressor:
    """
    Fit *method* on ``train_fraction`` of the records and score the rest.

    Raises:
        UnsupportedMethodError: *method* is not in ``REGRESSION_METHODS``.
        InvalidParameterError: *train_fraction* is outside (0, 1).
        InsufficientDataError: Either partition would be too small to fit
            or score.
    """
    factory = REGRESSION_METHODS.get(method)
    if factory is None:
        raise UnsupportedMethodError(method, list(REGRESSION_METHODS))
    if not 0.0 < train_fraction < 1.0:
        raise InvalidParameterError(
            f"train_fraction must lie strictly between 0 and 1, got {train_fraction}."
        )

    n_train, n_test = _split_sizes(len(frame), train_fraction)
    if n_train < 2 or n_test < 2:
        raise InsufficientDataError(
            f"Cannot split {len(frame)} records at train_fraction={train_fraction}: "
            f"train={n_train}, test={n_test}."
        )

    model_frame = build_model_frame(frame)
    features = model_frame[NUMERIC + CATEGORICAL]
    target = model_frame[TARGET]

    X_train, X_test, y_train, y_test = train_test_split(
        features,
        target,
        train_size=n_train,
        test_size=n_test,
        stratify=_strata(target, min(_STRATA, n_test, n_train // 2)),
        random_state=random_state,
    )

    pipeline = Pipeline([("pre", build_preprocessor()), ("model", factory(random_state))])
    pipeline.fit(X_train, y_train)

    predictions = np.asarray(pipeline.predict(X_test), dtype=float)
    actuals = y_test.to_numpy(dtype=float)

    rmse = math.sqrt(mean_squared_error(actuals, predictions))
    mae = float(mean_absolute_error(actuals, predictions))

    importance = None
    if isinstance(pipeline.named_steps["model"], RandomForestRegressor):
        importance = _ranked_importances(pipeline)

    report = RegressionReport(
        method=method,
        train_fraction=train_fraction,
        n_train=len(X_train),
        n_test=len(X_test),
        rmse=round(rmse, 6),
        mae=round(mae, 6),
        r_squared=round(_squared_correlation(predictions, actuals), 6),
        predictions=predictions.round(4).tolist(),
        actuals=actuals.tolist(),
        feature_importance=importance,
    )
    trained = TrainedRegressor(method=method, pipeline=pipeline, report=report)

    log_event(
        logger,
        logging.INFO,
        "regressor_trained",
        method=method,
        n_train=report.n_train,
        n_test=report.n_test,
        rmse=report.rmse,
    )
    return trained


def feature_importance(trained: TrainedRegressor) -> dict[str, float] | None:
    """
    Impurity-based importances, highest first.

    Only random forests expose them; other methods log a warning and
    return ``None``.
    """
    estimator = trained.pipeline.named_steps["model"]
    if not isinstance(estimator, RandomForestRegressor):
        logger.warning(
            "Feature importance is only available for random-forest models, not %s.",
            trained.method,
        )
        return None
    return _ranked_importances(trained.pipeline)


def _ranked_importances(pipeline: Pipeline) -> dict[str, float]:
    estimator = pipeline.named_steps["model"]
    names = pipeline.named_steps["pre"].get_feature_names_out()
    ranked = sorted(
        zip(names, estimator.feature_importances_),
        key=lambda item: item[1],
        reverse=True,
    )
    return {str(name): round(float(value), 6) for name, value in ranked}

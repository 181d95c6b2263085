"""
analysis/hypothesis.py

Normality, one-way ANOVA and two-sample tests on the sales dataset.

    normality    Shapiro-Wilk per numeric field (sample capped)
    ANOVA        sales ~ region, sales ~ product
    two-sample   Welch t-test, sales of the first two regions seen
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from scipy import stats

from app.domain.analysis import HypothesisOutcome, HypothesisTestSuite
from app.domain.sales import NUMERIC_FIELDS
from app.errors import InsufficientDataError, InvalidParameterError
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

# Shapiro-Wilk is defined for 3 <= n; scipy warns above 5000.
_SHAPIRO_MIN = 3


def _normality(values: np.ndarray, field: str, cap: int, rng: np.random.Generator) -> HypothesisOutcome:
    sample = values if len(values) <= cap else rng.choice(values, size=cap, replace=False)
    result = stats.shapiro(sample)
    return HypothesisOutcome(
        name=f"Shapiro-Wilk normality ({field})",
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        detail=f"n={len(sample)}",
    )


def _one_way_anova(frame: pd.DataFrame, factor: str) -> HypothesisOutcome | None:
    groups = [
        group["sales"].to_numpy(dtype=float)
        for _, group in frame.groupby(factor, sort=True)
    ]
    if len(groups) < 2:
        log_event(
            logger,
            logging.WARNING,
            "anova_skipped",
            factor=factor,
            reason="fewer than two distinct levels",
        )
        return None
    result = stats.f_oneway(*groups)
    df_between = len(groups) - 1
    df_within = len(frame) - len(groups)
    return HypothesisOutcome(
        name=f"One-way ANOVA (sales ~ {factor})",
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        df=(float(df_between), float(df_within)),
    )


def _two_sample(frame: pd.DataFrame) -> HypothesisOutcome | None:
    regions = pd.unique(frame["region"])
    if len(regions) < 2:
        log_event(
            logger,
            logging.WARNING,
            "two_sample_test_skipped",
            reason="fewer than two distinct regions",
            regions=[str(region) for region in regions],
        )
        return None

    first, second = str(regions[0]), str(regions[1])
    a = frame.loc[frame["region"] == first, "sales"].to_numpy(dtype=float)
    b = frame.loc[frame["region"] == second, "sales"].to_numpy(dtype=float)
    result = stats.ttest_ind(a, b, equal_var=False)
    return HypothesisOutcome(
        name=f"Welch two-sample t-test (sales: {first} vs {second})",
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        detail=f"mean {first}={a.mean():.2f}, mean {second}={b.mean():.2f}",
    )


def run_hypothesis_tests(
    frame: pd.DataFrame,
    sample_cap: int = 5000,
    random_state: int = 123,
) -> HypothesisTestSuite:
    """
    Run the full battery of tests on *frame*.

    Raises:
        InvalidParameterError: If *sample_cap* is below 3.
        InsufficientDataError: If *frame* has fewer than 3 records.

    A test whose grouping has fewer than two levels is omitted from the
    suite and a warning is logged.
    """
    if sample_cap < _SHAPIRO_MIN:
        raise InvalidParameterError(
            f"sample_cap must be at least {_SHAPIRO_MIN}, got {sample_cap}."
        )
    if len(frame) < _SHAPIRO_MIN:
        raise InsufficientDataError(
            f"Normality tests need at least {_SHAPIRO_MIN} records, got {len(frame)}."
        )

    rng = np.random.default_rng(random_state)
    normality = {
        field: _normality(frame[field].to_numpy(dtype=float), field, sample_cap, rng)
        for field in NUMERIC_FIELDS
    }

    return HypothesisTestSuite(
        normality=normality,
        anova_region=_one_way_anova(frame, "region"),
        anova_product=_one_way_anova(frame, "product"),
        two_sample=_two_sample(frame),
    )

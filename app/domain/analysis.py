"""Result contracts produced by the analysis adapters."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _FrozenResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ForecastResult(_FrozenResult):
    """Point and interval predictions for a future horizon."""

    kind: Literal["forecast"] = "forecast"
    model: str
    horizon_days: int = Field(ge=1)
    seasonal_period: int = Field(ge=2)
    confidence_level: float = Field(gt=0.0, lt=1.0)
    dates: list[date]
    point: list[float]
    lower: list[float]
    upper: list[float]
    seasonal_amplitude: float
    trend_change: float


class ClusterProfile(_FrozenResult):
    cluster_id: int = Field(ge=0)
    size: int = Field(ge=0)
    avg_sales: float
    avg_customers: float


class ClusterAssignment(_FrozenResult):
    """One cluster id per record, in dataset order."""

    kind: Literal["cluster"] = "cluster"
    method: str
    k: int = Field(ge=1)
    labels: list[int]
    profiles: list[ClusterProfile]
    inertia: Optional[float] = None


class RegressionReport(_FrozenResult):
    """Held-out metrics and predictions for a fitted regressor."""

    kind: Literal["regression"] = "regression"
    method: str
    train_fraction: float = Field(gt=0.0, lt=1.0)
    n_train: int = Field(ge=1)
    n_test: int = Field(ge=1)
    rmse: float = Field(ge=0.0)
    mae: float = Field(ge=0.0)
    r_squared: float
    predictions: list[float]
    actuals: list[float]
    feature_importance: Optional[dict[str, float]] = None


class CorrelationMatrix(_FrozenResult):
    """Symmetric Pearson correlation matrix over the numeric fields."""

    kind: Literal["correlation"] = "correlation"
    field_names: list[str]
    values: list[list[float]]

    def get(self, row: str, column: str) -> float:
        return self.values[self.field_names.index(row)][self.field_names.index(column)]


class HypothesisOutcome(_FrozenResult):
    """Statistic and p-value of a single hypothesis test."""

    name: str
    statistic: float
    p_value: float
    df: Optional[tuple[float, ...]] = None
    detail: Optional[str] = None


class HypothesisTestSuite(_FrozenResult):
    kind: Literal["hypothesis_tests"] = "hypothesis_tests"
    normality: dict[str, HypothesisOutcome]
    anova_region: Optional[HypothesisOutcome] = None
    anova_product: Optional[HypothesisOutcome] = None
    two_sample: Optional[HypothesisOutcome] = None


AnalysisResult = (
    ForecastResult
    | ClusterAssignment
    | RegressionReport
    | CorrelationMatrix
    | HypothesisTestSuite
)

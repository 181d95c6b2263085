"""
modeling/features.py

Model-ready feature frame for sales regression.

Calendar fields are derived from ``date``; ``date`` itself is dropped.

    day_of_week  - weekday name          (categorical)
    month        - zero-padded "01".."12" (categorical)
    day_of_year  - 1..366                (numeric)
"""

from __future__ import annotations

import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler

TARGET = "sales"
NUMERIC = ["customers", "day_of_year"]
CATEGORICAL = ["region", "product", "day_of_week", "month"]


def build_model_frame(frame: pd.DataFrame) -> pd.DataFrame:
    """Return the target plus every feature column, one row per record."""
    dates = pd.to_datetime(frame["date"])
    model_frame = pd.DataFrame(
        {
            "sales": frame["sales"].astype(float).to_numpy(),
            "customers": frame["customers"].astype(float).to_numpy(),
            "day_of_year": dates.dt.dayofyear.astype(int).to_numpy(),
            "region": frame["region"].astype(str).to_numpy(),
            "product": frame["product"].astype(str).to_numpy(),
            "day_of_week": dates.dt.day_name().to_numpy(),
            "month": dates.dt.strftime("%m").to_numpy(),
        }
    )
    return model_frame[[TARGET] + NUMERIC + CATEGORICAL]


def build_preprocessor() -> ColumnTransformer:
    num = Pipeline(steps=[("scaler", StandardScaler())])
    cat = Pipeline(
        steps=[("onehot", OneHotEncoder(handle_unknown="ignore", sparse_output=False))]
    )
    return ColumnTransformer(
        [("num", num, NUMERIC), ("cat", cat, CATEGORICAL)],
        verbose_feature_names_out=False,
    )

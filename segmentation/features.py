"""
Feature engineering module for segmentation.

Transforms the sales dataset into a standardized feature matrix
suitable for downstream clustering.
"""

from typing import List, Tuple

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler


FEATURE_KEYS = [
    "sales",
    "customers",
]


class FeatureEngineer:
    """
    Extracts and standardizes the numeric clustering features.

    Does not perform clustering or profiling.
    Transformation is deterministic given the same input.
    """

    def __init__(self) -> None:
        self._scaler = StandardScaler()

    def build_feature_matrix(
        self, frame: pd.DataFrame
    ) -> Tuple[np.ndarray, List[str]]:
        """
        Build a standardized feature matrix from the dataset frame.

        Args:
            frame: Dataset frame containing every column in ``FEATURE_KEYS``.

        Returns:
            A tuple of:
                - feature_matrix: np.ndarray of shape (n_records, n_features),
                  standard-scaled (zero mean, unit variance).
                - feature_names: list of feature column names in matrix order.
        """
        raw = frame[FEATURE_KEYS].to_numpy(dtype=np.float64)
        return self._scale(raw), list(FEATURE_KEYS)

    def _scale(self, matrix: np.ndarray) -> np.ndarray:
        """
        Apply standard scaling column-wise.

        A constant column scales to zeros, which is safe.
        """
        if matrix.shape[0] == 0:
            return matrix

        return self._scaler.fit_transform(matrix)

"""
analysis/correlation.py

Pairwise Pearson correlation over the numeric dataset fields.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from app.domain.analysis import CorrelationMatrix
from app.errors import InsufficientDataError


def correlate(frame: pd.DataFrame) -> CorrelationMatrix:
    """
    Correlate every numeric column of *frame* with every other.

    Incomplete observations are excluded pair by pair, not dataset-wide.
    The diagonal is pinned to exactly 1.0 and the matrix is symmetrized
    so that ``values[i][j] == values[j][i]`` holds bit for bit.

    Raises:
        InsufficientDataError: If *frame* has no numeric columns.
    """
    numeric = frame.select_dtypes(include="number")
    if numeric.shape[1] == 0:
        raise InsufficientDataError("No numeric fields to correlate.")

    matrix = numeric.corr(method="pearson").to_numpy(dtype=float)
    matrix = (matrix + matrix.T) / 2.0
    np.fill_diagonal(matrix, 1.0)

    return CorrelationMatrix(
        field_names=[str(column) for column in numeric.columns],
        values=matrix.tolist(),
    )

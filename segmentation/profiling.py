"""
Cluster profiling module for segmentation.

Computes per-cluster aggregate statistics from the dataset frame
and its assigned cluster labels. No ML or feature engineering here.
"""

from typing import List

import numpy as np
import pandas as pd

from app.domain.analysis import ClusterProfile


class ClusterProfiler:
    """
    Summarises clusters by the mean of the raw (unscaled) features.

    Responsibilities:
        - Group records by cluster label.
        - Compute per-cluster size, mean sales and mean customers.

    Not responsible for:
        - Feature engineering or scaling.
        - Cluster assignment (labels come from the clustering step).
    """

    def profile_clusters(
        self,
        frame: pd.DataFrame,
        labels: np.ndarray,
        n_clusters: int,
    ) -> List[ClusterProfile]:
        """
        Build one profile per cluster id in ``0..n_clusters-1``.

        Clusters that received no records are reported with ``size=0``
        and zero means.

        Raises:
            ValueError: If ``frame`` and ``labels`` differ in length.
        """
        if len(frame) != len(labels):
            raise ValueError(
                f"frame and labels must have the same length; "
                f"got {len(frame)} records and {len(labels)} labels."
            )

        profiles = []
        for cluster_id in range(n_clusters):
            members = frame.loc[labels == cluster_id]
            size = len(members)
            profiles.append(
                ClusterProfile(
                    cluster_id=cluster_id,
                    size=size,
                    avg_sales=float(members["sales"].mean()) if size else 0.0,
                    avg_customers=float(members["customers"].mean()) if size else 0.0,
                )
            )
        return profiles

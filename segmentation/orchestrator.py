"""
Segmentation orchestrator.

Wires together feature engineering, clustering and profiling
into a single deterministic pipeline call.
"""

import logging

import pandas as pd

from app.domain.analysis import ClusterAssignment
from app.errors import InvalidParameterError, UnsupportedMethodError
from segmentation.clustering import HierarchicalSegmentation, KMeansSegmentation
from segmentation.features import FeatureEngineer
from segmentation.profiling import ClusterProfiler

logger = logging.getLogger(__name__)

CLUSTER_METHODS = {
    "kmeans": KMeansSegmentation,
    "hierarchical": HierarchicalSegmentation,
}


class SegmentationOrchestrator:
    """
    Coordinates the end-to-end segmentation pipeline.

    Each pipeline step is delegated entirely to its dedicated module:
        1. FeatureEngineer: standardizes sales and customers.
        2. Clustering engine: assigns cluster labels.
        3. ClusterProfiler: computes per-cluster aggregate metrics.

    Args:
        method: Clustering algorithm name, one of ``CLUSTER_METHODS``.

    Raises:
        UnsupportedMethodError: For an unknown ``method``.
    """

    def __init__(self, method: str = "kmeans") -> None:
        engine_cls = CLUSTER_METHODS.get(method)
        if engine_cls is None:
            raise UnsupportedMethodError(method, sorted(CLUSTER_METHODS))
        self._method = method
        self._feature_engineer = FeatureEngineer()
        self._clusterer = engine_cls()
        self._profiler = ClusterProfiler()

    def run_segmentation(self, frame: pd.DataFrame, n_clusters: int) -> ClusterAssignment:
        """
        Execute the segmentation pipeline over every record in *frame*.

        Raises:
            InvalidParameterError: If ``n_clusters < 1`` or exceeds the
                number of records.
        """
        if len(frame) == 0:
            raise InvalidParameterError("Cannot cluster an empty dataset.")

        # Step 1: Feature engineering
        feature_matrix, _feature_names = self._feature_engineer.build_feature_matrix(frame)

        # Step 2: Clustering
        labels, _centroids = self._clusterer.cluster(
            features=feature_matrix,
            n_clusters=n_clusters,
        )

        # Step 3: Cluster profiling
        profiles = self._profiler.profile_clusters(
            frame=frame.reset_index(drop=True),
            labels=labels,
            n_clusters=n_clusters,
        )

        logger.debug(
            "Clustered %d records into %d clusters using %s",
            len(frame),
            n_clusters,
            self._method,
        )

        return ClusterAssignment(
            method=self._method,
            k=int(n_clusters),
            labels=[int(label) for label in labels],
            profiles=profiles,
            inertia=self._clusterer.inertia,
        )


def cluster_records(
    frame: pd.DataFrame,
    k: int = 3,
    method: str = "kmeans",
) -> ClusterAssignment:
    """Assign one cluster id in ``0..k-1`` to every record."""
    return SegmentationOrchestrator(method=method).run_segmentation(frame, n_clusters=k)

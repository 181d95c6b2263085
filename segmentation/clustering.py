"""
Clustering engines for segmentation.

Accept a pre-built feature matrix and return cluster assignments
and centroids. No feature engineering or business logic here.
"""

from typing import Tuple

import numpy as np
from sklearn.cluster import AgglomerativeClustering, KMeans

from app.errors import InvalidParameterError


_RANDOM_STATE = 42
_N_INIT = 25


def _validate(features: np.ndarray, n_clusters: int) -> None:
    """
    Sanity-check inputs before fitting.

    Raises:
        InvalidParameterError: On any invalid condition.
    """
    if features.ndim != 2:
        raise InvalidParameterError(
            f"features must be a 2-D array, got shape {features.shape}."
        )

    n_samples = features.shape[0]

    if n_samples == 0:
        raise InvalidParameterError("features array is empty (0 samples).")

    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)) or n_clusters < 1:
        raise InvalidParameterError(
            f"n_clusters must be a positive integer, got {n_clusters!r}."
        )

    if n_clusters > n_samples:
        raise InvalidParameterError(
            f"n_clusters ({n_clusters}) cannot exceed "
            f"number of samples ({n_samples})."
        )


def _centroids(features: np.ndarray, labels: np.ndarray, n_clusters: int) -> np.ndarray:
    return np.vstack(
        [features[labels == cluster_id].mean(axis=0) for cluster_id in range(n_clusters)]
    )


class KMeansSegmentation:
    """
    Thin, deterministic wrapper around sklearn KMeans.

    Responsibilities:
        - Fit KMeans on a provided feature matrix.
        - Return per-record cluster labels and cluster centroids.

    Not responsible for:
        - Feature engineering or scaling.
        - Choosing optimal k.
        - Profiling clusters.
    """

    def __init__(self) -> None:
        self._model: KMeans | None = None

    @property
    def inertia(self) -> float | None:
        return None if self._model is None else float(self._model.inertia_)

    def cluster(
        self,
        features: np.ndarray,
        n_clusters: int,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Fit KMeans and return labels and centroids.

        Args:
            features:   2-D float array of shape (n_samples, n_features).
                        Must be pre-scaled; no transformation is applied here.
            n_clusters: Number of clusters (k). Must satisfy
                        1 <= n_clusters <= n_samples.

        Returns:
            A tuple of:
                - labels:     1-D int array of shape (n_samples,) with the
                              cluster index assigned to each record.
                - centroids:  2-D float array of shape (n_clusters, n_features).

        Raises:
            InvalidParameterError: If the feature array is empty or
                n_clusters is invalid.
        """
        _validate(features, n_clusters)

        self._model = KMeans(
            n_clusters=n_clusters,
            random_state=_RANDOM_STATE,
            n_init=_N_INIT,
        )
        self._model.fit(features)

        labels: np.ndarray = self._model.labels_.astype(np.int32)
        centroids: np.ndarray = self._model.cluster_centers_.astype(np.float64)

        return labels, centroids


class HierarchicalSegmentation:
    """
    Ward-linkage agglomerative clustering cut at ``n_clusters`` groups.

    Deterministic: no random initialisation involved.
    """

    inertia = None

    def cluster(
        self,
        features: np.ndarray,
        n_clusters: int,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Same contract as :meth:`KMeansSegmentation.cluster`."""
        _validate(features, n_clusters)

        if n_clusters == 1:
            labels = np.zeros(features.shape[0], dtype=np.int32)
        else:
            model = AgglomerativeClustering(n_clusters=n_clusters, linkage="ward")
            labels = model.fit_predict(features).astype(np.int32)

        return labels, _centroids(features, labels, n_clusters)

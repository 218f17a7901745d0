"""
K-means partitioning with k-means++ seeding.

Distances are haversine metres; centroids are plain coordinate means, which
is an acceptable approximation at city-block scale. The random source is
injectable so results can be reproduced exactly.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from .distance import coordinate_arrays, haversine_many
from .models import Cluster, Coordinate, Point, centroid
from .validation import require_finite_points, require_int_at_least


logger = logging.getLogger(__name__)

DEFAULT_K = 10
DEFAULT_MAX_ITERATIONS = 100

# Absolute, not scaled to the data.
CONVERGENCE_TOLERANCE_DEG = 0.0001

RandomSource = Optional[Union[int, np.random.Generator]]


def _distance_rows(centroids: Sequence[Coordinate], lats: np.ndarray, lngs: np.ndarray) -> np.ndarray:
    """(len(centroids), n) matrix of distances from each centroid to each point."""
    return np.vstack([haversine_many(c, lats, lngs) for c in centroids])


def _assign(centroids: Sequence[Coordinate], lats: np.ndarray, lngs: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid per point; the lowest index wins ties."""
    return np.argmin(_distance_rows(centroids, lats, lngs), axis=0)


def seed_centroids(
    points: Sequence[Point],
    k: int,
    rng: np.random.Generator,
) -> List[Coordinate]:
    """
    Choose ``k`` initial centroids with k-means++.

    The first centroid is drawn uniformly. Each later one is drawn with
    probability proportional to the squared distance to its nearest chosen
    centroid, using cumulative-sum sampling. If every remaining weight is
    zero (all points sit on chosen centroids) the draw falls back to uniform.
    """
    lats, lngs = coordinate_arrays(points)
    n = len(points)

    first = points[int(rng.integers(n))]
    chosen = [Coordinate(first.latitude, first.longitude)]

    while len(chosen) < k:
        nearest = _distance_rows(chosen, lats, lngs).min(axis=0)
        cumulative = np.cumsum(nearest ** 2)
        total = float(cumulative[-1])

        if total > 0:
            draw = rng.random() * total
            idx = min(int(np.searchsorted(cumulative, draw, side="right")), n - 1)
        else:
            idx = int(rng.integers(n))

        pick = points[idx]
        chosen.append(Coordinate(pick.latitude, pick.longitude))

    return chosen


def kmeans(
    points: Sequence[Point],
    k: int = DEFAULT_K,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    rng: RandomSource = None,
) -> List[Cluster]:
    """
    Partition ``points`` into at most ``k`` clusters.

    Args:
        points: Points to cluster
        k: Requested number of clusters; clamped to ``len(points)``
        max_iterations: Upper bound on assign/update rounds
        rng: Seed or ``numpy.random.Generator`` for k-means++ seeding.
            ``None`` draws fresh OS entropy.

    Returns:
        Non-empty clusters with ids 0..n-1. Every input point belongs to
        exactly one cluster, and each centre is the mean of its members
        after the final assignment pass.

    Raises:
        ValueError: If ``k`` < 1, ``max_iterations`` < 0, or any coordinate
            is non-finite.
    """
    require_int_at_least("k", k, 1)
    require_int_at_least("max_iterations", max_iterations, 0)
    require_finite_points(points)

    if not points:
        return []

    if k > len(points):
        logger.debug("kmeans: clamping k=%d to %d points", k, len(points))
        k = len(points)

    generator = np.random.default_rng(rng)
    lats, lngs = coordinate_arrays(points)
    centroids = seed_centroids(points, k, generator)

    iterations = 0
    converged = False
    while not converged and iterations < max_iterations:
        labels = _assign(centroids, lats, lngs)

        converged = True
        for cidx in range(k):
            mask = labels == cidx
            if not mask.any():
                # Empty clusters keep their centroid and are never reseeded.
                continue

            new_lat = float(lats[mask].mean())
            new_lng = float(lngs[mask].mean())
            old = centroids[cidx]
            if (abs(new_lat - old.latitude) > CONVERGENCE_TOLERANCE_DEG
                    or abs(new_lng - old.longitude) > CONVERGENCE_TOLERANCE_DEG):
                converged = False
            centroids[cidx] = Coordinate(new_lat, new_lng)

        iterations += 1

    labels = _assign(centroids, lats, lngs)
    clusters: List[Cluster] = []
    for cidx in range(k):
        members = [points[i] for i in np.flatnonzero(labels == cidx)]
        if not members:
            continue
        clusters.append(
            Cluster(id=len(clusters), center=centroid(members), members=tuple(members))
        )

    logger.debug(
        "kmeans: %d points, k=%d -> %d clusters after %d iterations (converged=%s)",
        len(points), k, len(clusters), iterations, converged,
    )
    return clusters

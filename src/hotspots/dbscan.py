"""
DBSCAN density clustering over haversine distances.

Classical density-reachability:
1. A point whose epsilon-neighbourhood (inclusive, the point itself counts)
   holds at least ``min_points`` points is a core point and seeds a cluster.
2. The cluster grows breadth-first: every core point reached adds its own
   neighbourhood to the expansion queue.
3. Non-core points reached during expansion join as border points. A border
   point within reach of two clusters joins whichever expansion gets to it
   first, so assignment depends on input order.
4. Points never reached are noise and are left out of the result.

Neighbourhood queries are brute force (one vectorised distance row per
query), i.e. O(n^2) overall. That is fine for the hundreds to low thousands
of incidents a hotspot map deals with.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Set

import numpy as np

from .distance import coordinate_arrays, haversine_many
from .models import Cluster, Point, centroid
from .validation import require_finite_points, require_int_at_least, require_non_negative


logger = logging.getLogger(__name__)

DEFAULT_EPSILON_M = 500.0
DEFAULT_MIN_POINTS = 3


class _NeighbourIndex:
    """Brute-force epsilon-neighbourhood lookup over a fixed point list."""

    def __init__(self, points: Sequence[Point], epsilon_m: float):
        self.points = points
        self.epsilon_m = epsilon_m
        self.lats, self.lngs = coordinate_arrays(points)

    def query(self, idx: int) -> List[int]:
        """Indices (ascending) of all points within epsilon of ``points[idx]``."""
        dists = haversine_many(self.points[idx], self.lats, self.lngs)
        return np.flatnonzero(dists <= self.epsilon_m).tolist()


def dbscan(
    points: Sequence[Point],
    epsilon_m: float = DEFAULT_EPSILON_M,
    min_points: int = DEFAULT_MIN_POINTS,
) -> List[Cluster]:
    """
    Cluster ``points`` by density.

    Args:
        points: Points to cluster
        epsilon_m: Neighbourhood radius in metres (inclusive)
        min_points: Neighbourhood size (including the point itself) that
            makes a point a core point

    Returns:
        Clusters in discovery order with ids 0..n-1. Each centre is the mean
        of its members' coordinates. Noise points are omitted.

    Raises:
        ValueError: If ``epsilon_m`` is negative, ``min_points`` < 1, or any
            coordinate is non-finite.
    """
    require_non_negative("epsilon_m", epsilon_m)
    require_int_at_least("min_points", min_points, 1)
    require_finite_points(points)

    if not points:
        return []

    index = _NeighbourIndex(points, epsilon_m)
    visited: Set[int] = set()
    clustered: Set[int] = set()
    clusters: List[Cluster] = []

    for idx in range(len(points)):
        if idx in visited:
            continue
        visited.add(idx)

        neighbours = index.query(idx)
        if len(neighbours) < min_points:
            # Provisional noise; may still be absorbed as a border point.
            continue

        members = _expand(idx, neighbours, index, min_points, visited, clustered)
        clusters.append(
            Cluster(id=len(clusters), center=centroid(members), members=tuple(members))
        )

    logger.debug(
        "dbscan: %d points, epsilon_m=%s, min_points=%d -> %d clusters, %d noise",
        len(points), epsilon_m, min_points, len(clusters), len(points) - len(clustered),
    )
    return clusters


def _expand(
    seed: int,
    neighbours: List[int],
    index: _NeighbourIndex,
    min_points: int,
    visited: Set[int],
    clustered: Set[int],
) -> List[Point]:
    """Grow one cluster from core point ``seed``; returns its members."""
    points = index.points
    members = [points[seed]]
    clustered.add(seed)

    queue = list(neighbours)
    queued = set(queue)

    pos = 0
    while pos < len(queue):
        nidx = queue[pos]

        if nidx not in visited:
            visited.add(nidx)
            reachable = index.query(nidx)
            if len(reachable) >= min_points:
                for ridx in reachable:
                    if ridx not in queued:
                        queued.add(ridx)
                        queue.append(ridx)

        if nidx not in clustered:
            members.append(points[nidx])
            clustered.add(nidx)

        pos += 1

    return members

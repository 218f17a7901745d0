"""
Multi-resolution density clustering (a simplified HDBSCAN stand-in).

DBSCAN runs at a descending ladder of radii and the results are pooled.
Larger clusters are preferred: candidates are walked from biggest to
smallest and a candidate is kept unless its centroid, rounded to four
decimals (~11 m), lands on a key already claimed by an accepted cluster,
either as that cluster's own centroid or as one of its member coordinates.

This is deliberately approximate. Two accepted clusters may still share raw
points, and an overlapping candidate is dropped whole rather than trimmed.
Good enough for hotspot counts on a heatmap.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set

from .dbscan import dbscan
from .models import Cluster, Point
from .validation import require_epsilon_ladder, require_finite_points, require_int_at_least


logger = logging.getLogger(__name__)

EPSILON_LADDER_M = (1000.0, 750.0, 500.0, 250.0)
DEFAULT_MIN_CLUSTER_SIZE = 5


def _rounded_key(latitude: float, longitude: float) -> str:
    return f"{latitude:.4f},{longitude:.4f}"


def multi_resolution_cluster(
    points: Sequence[Point],
    min_cluster_size: int = DEFAULT_MIN_CLUSTER_SIZE,
    epsilons: Optional[Iterable[float]] = None,
) -> List[Cluster]:
    """
    Pool DBSCAN runs over several radii and keep the non-duplicate clusters.

    Args:
        points: Points to cluster
        min_cluster_size: ``min_points`` passed to every DBSCAN run
        epsilons: Radii in metres; defaults to ``EPSILON_LADDER_M``

    Returns:
        Accepted clusters, largest first, re-numbered 0..n-1.
    """
    require_int_at_least("min_cluster_size", min_cluster_size, 1)
    ladder = require_epsilon_ladder(EPSILON_LADDER_M if epsilons is None else epsilons)
    require_finite_points(points)

    candidates: List[Cluster] = []
    for eps in ladder:
        candidates.extend(dbscan(points, epsilon_m=eps, min_points=min_cluster_size))

    # sorted() is stable, so equal counts keep ladder order.
    candidates = sorted(candidates, key=lambda c: c.count, reverse=True)

    claimed: Set[str] = set()
    accepted: List[Cluster] = []
    for candidate in candidates:
        key = _rounded_key(candidate.center.latitude, candidate.center.longitude)
        if key in claimed:
            continue

        accepted.append(
            Cluster(id=len(accepted), center=candidate.center, members=candidate.members)
        )
        claimed.add(key)
        claimed.update(_rounded_key(p.latitude, p.longitude) for p in candidate.members)

    logger.debug(
        "multi_resolution_cluster: %d candidates over %d radii -> %d accepted",
        len(candidates), len(ladder), len(accepted),
    )
    return accepted

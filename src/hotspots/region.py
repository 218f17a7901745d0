"""Aggregation by an externally supplied region key (choropleth maps)."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Hashable, List, Sequence

from .models import Cluster, Point, build_clusters
from .validation import require_finite_points


logger = logging.getLogger(__name__)

RegionClassifier = Callable[[Point], Hashable]


def region_aggregate(
    points: Sequence[Point],
    region_of: RegionClassifier,
) -> List[Cluster]:
    """
    Group points by the key ``region_of`` returns for each of them.

    The classifier is typically a polygon-containment lookup (administrative
    boundary id); it is called exactly once per point, and anything it raises
    propagates to the caller. Every point lands in exactly one cluster, and
    clusters come out in the order their keys were first seen. Centres are
    the mean of member coordinates.
    """
    require_finite_points(points)

    regions: Dict[Hashable, List[Point]] = {}
    for point in points:
        regions.setdefault(region_of(point), []).append(point)

    logger.debug("region_aggregate: %d points -> %d regions", len(points), len(regions))
    return build_clusters(regions.values())

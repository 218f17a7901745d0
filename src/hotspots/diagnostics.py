"""
Per-run clustering diagnostics.

Summarises a clustering result (sizes, noise) and attaches actionable
suggestions, so callers can tell a sparse data set from a poorly tuned one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

from .models import Cluster, Point


HIGH_NOISE_RATIO = 0.5


@dataclass
class ClusteringDiagnostics:
    """Summary of one clustering call."""

    method: str
    """Name of the algorithm that produced the clusters."""

    num_points: int
    """Total number of input points."""

    num_clusters: int
    """Number of clusters returned."""

    num_clustered: int
    """Distinct input points that ended up in at least one cluster."""

    num_noise: int
    """Input points that belong to no cluster."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Member count of each cluster, in output order."""

    largest_cluster: Optional[int] = None
    """Id of the cluster with the most members (first one on ties)."""

    suggestions: List[str] = field(default_factory=list)
    """Actionable hints for tuning the parameters."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def summarize_clusters(
    points: Sequence[Point],
    clusters: Sequence[Cluster],
    method: str,
) -> ClusteringDiagnostics:
    """
    Build diagnostics for ``clusters`` computed from ``points``.

    Membership is tracked by object identity, so two distinct incidents at
    the same coordinates are counted separately.
    """
    member_ids = {id(p) for c in clusters for p in c.members}
    num_clustered = sum(1 for p in points if id(p) in member_ids)
    num_noise = len(points) - num_clustered
    sizes = [c.count for c in clusters]

    largest = None
    if clusters:
        largest = max(clusters, key=lambda c: c.count).id

    suggestions: List[str] = []
    if points and not clusters:
        suggestions.append(
            f"No clusters found among {len(points)} points. Consider a larger "
            "radius or a smaller minimum cluster size."
        )
    elif points and num_noise > len(points) * HIGH_NOISE_RATIO:
        suggestions.append(
            f"High noise ratio ({num_noise}/{len(points)} = {num_noise / len(points):.1%}). "
            "Consider reducing min_points / min_cluster_size."
        )

    if clusters and all(size == 1 for size in sizes) and len(points) > 1:
        suggestions.append(
            "Every cluster is a singleton. Consider a coarser cell size or a smaller k."
        )

    return ClusteringDiagnostics(
        method=method,
        num_points=len(points),
        num_clusters=len(clusters),
        num_clustered=num_clustered,
        num_noise=num_noise,
        cluster_sizes=sizes,
        largest_cluster=largest,
        suggestions=suggestions,
    )

"""Cluster helpers built on top of :mod:`src.hotspots`."""

from __future__ import annotations

from typing import List, Optional

from src.hotspots import ClusteringConfig, Point, cluster_points

from ..schemas.models import (
    ClusterDiagnosticsModel,
    ClusterRequest,
    ClusterResponse,
    ClusterSummary,
    IncidentPoint,
    LatLng,
)


UNASSIGNED_REGION = "unassigned"


def points_from_request(points: List[IncidentPoint]) -> List[Point]:
    """Wrap request points so the request model travels as the payload."""
    return [Point(latitude=p.lat, longitude=p.lng, payload=p) for p in points]


def region_of_incident(point: Point) -> str:
    return point.payload.region or UNASSIGNED_REGION


def build_config(request: ClusterRequest, base: Optional[ClusteringConfig] = None) -> ClusteringConfig:
    """Apply the request's non-null parameter overrides to ``base``."""
    base = base or ClusteringConfig()
    overrides = request.params.model_dump(exclude_none=True)
    return base.with_overrides(overrides)


def run_clustering(request: ClusterRequest, config: ClusteringConfig) -> ClusterResponse:
    """Cluster the request's points and shape the response model."""
    points = points_from_request(request.points)
    clusters, diagnostics = cluster_points(
        points,
        request.method,
        config,
        region_of=region_of_incident,
    )

    summaries = [
        ClusterSummary(
            cluster_id=c.id,
            center=LatLng(lat=c.center.latitude, lng=c.center.longitude),
            count=c.count,
            members=[p.payload for p in c.members] if request.include_members else [],
        )
        for c in clusters
    ]
    return ClusterResponse(
        clusters=summaries,
        diagnostics=ClusterDiagnosticsModel(**diagnostics.to_dict()),
    )

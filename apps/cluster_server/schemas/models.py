"""Pydantic models for the incident cluster server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """Simple latitude/longitude container."""

    lat: float = Field(..., description="Latitude in decimal degrees")
    lng: float = Field(..., description="Longitude in decimal degrees")


class IncidentPoint(BaseModel):
    """A single incident location as supplied by the data source."""

    lat: float
    lng: float
    region: Optional[str] = Field(default=None, description="Region key for choropleth aggregation")
    payload: Optional[Dict[str, Any]] = None


class ClusterParams(BaseModel):
    """Per-request overrides on top of the selected profile."""

    epsilon_m: Optional[float] = Field(default=None, alias="epsilonM")
    min_points: Optional[int] = Field(default=None, alias="minPoints")
    k: Optional[int] = None
    max_iterations: Optional[int] = Field(default=None, alias="maxIterations")
    cell_size_deg: Optional[float] = Field(default=None, alias="cellSizeDeg")
    hex_resolution: Optional[int] = Field(default=None, alias="hexResolution")
    min_cluster_size: Optional[int] = Field(default=None, alias="minClusterSize")
    epsilon_ladder_m: Optional[List[float]] = Field(default=None, alias="epsilonLadderM")
    seed: Optional[int] = None

    model_config = {"populate_by_name": True}


class ClusterRequest(BaseModel):
    points: List[IncidentPoint]
    method: Optional[str] = Field(
        default=None, description="dbscan, kmeans, grid, hexbin, region or multi_resolution"
    )
    profile: Optional[str] = Field(default=None, description="Clustering profile name")
    params: ClusterParams = Field(default_factory=ClusterParams)
    include_members: bool = Field(True, alias="includeMembers")

    model_config = {"populate_by_name": True}


class ClusterSummary(BaseModel):
    cluster_id: int = Field(..., alias="id")
    center: LatLng
    count: int
    members: List[IncidentPoint] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class ClusterDiagnosticsModel(BaseModel):
    method: str
    num_points: int = Field(..., alias="numPoints")
    num_clusters: int = Field(..., alias="numClusters")
    num_clustered: int = Field(..., alias="numClustered")
    num_noise: int = Field(..., alias="numNoise")
    cluster_sizes: List[int] = Field(default_factory=list, alias="clusterSizes")
    largest_cluster: Optional[int] = Field(default=None, alias="largestCluster")
    suggestions: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class ClusterResponse(BaseModel):
    clusters: List[ClusterSummary]
    diagnostics: ClusterDiagnosticsModel

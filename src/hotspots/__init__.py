"""
src/hotspots: Clustering of geographic incident points for hotspot maps.

This module provides density (DBSCAN, multi-resolution), centroid (k-means),
grid/hexagon binning and region aggregation strategies over haversine
distances, plus a config-driven dispatcher.
"""

from .models import Cluster, Coordinate, Point
from .distance import EARTH_RADIUS_M, haversine_distance, haversine_many
from .grid import grid_bin, hex_bin
from .region import region_aggregate
from .dbscan import dbscan
from .kmeans import kmeans, seed_centroids
from .multires import EPSILON_LADDER_M, multi_resolution_cluster
from .diagnostics import ClusteringDiagnostics, summarize_clusters
from .engine import (
    ClusteringConfig,
    ClusteringMethod,
    HeatmapStyle,
    cluster_points,
    recommended_method,
)
from .frames import assignments_to_dataframe, clusters_to_dataframe, points_from_dataframe

__all__ = [
    # Data models
    "Cluster",
    "Coordinate",
    "Point",

    # Distance
    "EARTH_RADIUS_M",
    "haversine_distance",
    "haversine_many",

    # Algorithms
    "grid_bin",
    "hex_bin",
    "region_aggregate",
    "dbscan",
    "kmeans",
    "seed_centroids",
    "EPSILON_LADDER_M",
    "multi_resolution_cluster",

    # Engine
    "ClusteringConfig",
    "ClusteringMethod",
    "HeatmapStyle",
    "cluster_points",
    "recommended_method",
    "ClusteringDiagnostics",
    "summarize_clusters",

    # pandas adapters
    "points_from_dataframe",
    "clusters_to_dataframe",
    "assignments_to_dataframe",
]

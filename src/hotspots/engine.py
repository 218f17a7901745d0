"""
Single entry point over all clustering strategies.

Bundles every tunable into ``ClusteringConfig`` (loadable from a YAML
profile), dispatches to one algorithm by name, and returns the clusters
together with run diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from ..tools.config_loader import ConfigLoader
from .dbscan import DEFAULT_EPSILON_M, DEFAULT_MIN_POINTS, dbscan
from .diagnostics import ClusteringDiagnostics, summarize_clusters
from .grid import DEFAULT_CELL_SIZE_DEG, DEFAULT_HEX_RESOLUTION, grid_bin, hex_bin
from .kmeans import DEFAULT_K, DEFAULT_MAX_ITERATIONS, RandomSource, kmeans
from .models import Cluster, Point
from .multires import DEFAULT_MIN_CLUSTER_SIZE, EPSILON_LADDER_M, multi_resolution_cluster
from .region import RegionClassifier, region_aggregate


logger = logging.getLogger(__name__)


class ClusteringMethod(Enum):
    """Available clustering strategies."""
    DBSCAN = "dbscan"
    KMEANS = "kmeans"
    GRID = "grid"
    HEXBIN = "hexbin"
    REGION = "region"
    MULTI_RESOLUTION = "multi_resolution"


class HeatmapStyle(Enum):
    """Map overlay styles a renderer may ask clusters for."""
    KERNEL_DENSITY = "kernel_density"
    BUBBLE = "bubble"
    GRID = "grid"
    HEXBIN = "hexbin"
    CHOROPLETH = "choropleth"


_STYLE_METHODS = {
    HeatmapStyle.KERNEL_DENSITY: ClusteringMethod.MULTI_RESOLUTION,
    HeatmapStyle.BUBBLE: ClusteringMethod.KMEANS,
    HeatmapStyle.GRID: ClusteringMethod.GRID,
    HeatmapStyle.HEXBIN: ClusteringMethod.HEXBIN,
    HeatmapStyle.CHOROPLETH: ClusteringMethod.REGION,
}


def recommended_method(style: Union[HeatmapStyle, str]) -> ClusteringMethod:
    """Return the clustering strategy best suited to a heatmap style."""
    return _STYLE_METHODS[HeatmapStyle(style)]


@dataclass
class ClusteringConfig:
    """
    Parameters for every clustering strategy.

    Only the fields relevant to the chosen method are used on a given call.
    """

    default_method: str = ClusteringMethod.DBSCAN.value
    epsilon_m: float = DEFAULT_EPSILON_M
    min_points: int = DEFAULT_MIN_POINTS
    k: int = DEFAULT_K
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    cell_size_deg: float = DEFAULT_CELL_SIZE_DEG
    hex_resolution: int = DEFAULT_HEX_RESOLUTION
    min_cluster_size: int = DEFAULT_MIN_CLUSTER_SIZE
    epsilon_ladder_m: Tuple[float, ...] = EPSILON_LADDER_M
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "ClusteringConfig":
        """
        Build a config from a mapping, e.g. a profile's ``clustering`` section.

        Raises:
            ValueError: If the mapping holds keys that are not config fields
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(
                f"Unknown clustering settings: {', '.join(unknown)}. "
                f"Valid settings: {', '.join(sorted(known))}"
            )

        data = dict(values)
        if "epsilon_ladder_m" in data:
            data["epsilon_ladder_m"] = tuple(data["epsilon_ladder_m"])
        return cls(**data)

    @classmethod
    def from_profile(cls, profile_name: Optional[str] = None) -> "ClusteringConfig":
        """Load the ``clustering`` section of a YAML profile (env/default if None)."""
        if profile_name:
            profile = ConfigLoader.load_profile(profile_name)
        else:
            profile = ConfigLoader.load_default_or_env_profile()
        return cls.from_dict(profile.get("clustering", {}))

    def with_overrides(self, overrides: Optional[Mapping[str, Any]] = None) -> "ClusteringConfig":
        """Return a copy with ``overrides`` applied on top of this config."""
        merged = {f.name: getattr(self, f.name) for f in fields(self)}
        merged.update(overrides or {})
        return ClusteringConfig.from_dict(merged)


def cluster_points(
    points: Iterable[Point],
    method: Union[ClusteringMethod, str, None] = None,
    config: Optional[ClusteringConfig] = None,
    *,
    region_of: Optional[RegionClassifier] = None,
    rng: RandomSource = None,
) -> Tuple[List[Cluster], ClusteringDiagnostics]:
    """
    Run one clustering strategy over ``points``.

    Args:
        points: Points to cluster
        method: Strategy to run; defaults to ``config.default_method``
        config: Parameters (defaults to ``ClusteringConfig()``)
        region_of: Region classifier, required for the region method
        rng: Seed or generator for k-means; falls back to ``config.seed``

    Returns:
        (clusters, diagnostics)

    Raises:
        ValueError: Unknown method, missing classifier, or invalid parameters
    """
    if config is None:
        config = ClusteringConfig()
    chosen = ClusteringMethod(method or config.default_method)
    point_list = list(points)

    if chosen is ClusteringMethod.DBSCAN:
        clusters = dbscan(point_list, config.epsilon_m, config.min_points)
    elif chosen is ClusteringMethod.KMEANS:
        seed = rng if rng is not None else config.seed
        clusters = kmeans(point_list, config.k, config.max_iterations, rng=seed)
    elif chosen is ClusteringMethod.GRID:
        clusters = grid_bin(point_list, config.cell_size_deg)
    elif chosen is ClusteringMethod.HEXBIN:
        clusters = hex_bin(point_list, config.hex_resolution)
    elif chosen is ClusteringMethod.REGION:
        if region_of is None:
            raise ValueError("The region method requires a region_of classifier")
        clusters = region_aggregate(point_list, region_of)
    else:
        clusters = multi_resolution_cluster(
            point_list, config.min_cluster_size, epsilons=config.epsilon_ladder_m
        )

    diagnostics = summarize_clusters(point_list, clusters, chosen.value)
    logger.info(
        "Clustered %d points with %s: %d clusters, %d noise",
        diagnostics.num_points, chosen.value, diagnostics.num_clusters, diagnostics.num_noise,
    )
    return clusters, diagnostics

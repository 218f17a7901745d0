"""
Fixed-cell spatial binning.

Two flavours of the same idea: a square degree grid, and H3 hexagons for
hexbin heatmaps. Both are O(n), deterministic, keep singleton cells, and
centre each cluster on its cell rather than on the member points.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence, Tuple

import h3

from .models import Cluster, Coordinate, Point
from .validation import require_finite_points, require_int_at_least, require_positive


logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE_DEG = 0.005  # ~500m at the equator
DEFAULT_HEX_RESOLUTION = 9
MAX_HEX_RESOLUTION = 15


def grid_bin(
    points: Sequence[Point],
    cell_size_deg: float = DEFAULT_CELL_SIZE_DEG,
) -> List[Cluster]:
    """
    Bin points into square cells of ``cell_size_deg`` degrees.

    The grid is degree-based, not metric: cells shrink east-west away from
    the equator, and callers at high latitudes must pick the size accordingly.

    Args:
        points: Points to bin
        cell_size_deg: Cell edge length in degrees (must be > 0)

    Returns:
        One cluster per occupied cell, in first-seen order. The centre is
        the cell's lower-left corner plus half a cell.
    """
    require_positive("cell_size_deg", cell_size_deg)
    require_finite_points(points)

    cells: Dict[Tuple[int, int], List[Point]] = {}
    for point in points:
        key = (
            math.floor(point.latitude / cell_size_deg),
            math.floor(point.longitude / cell_size_deg),
        )
        cells.setdefault(key, []).append(point)

    half = cell_size_deg / 2
    clusters = [
        Cluster(
            id=idx,
            center=Coordinate(
                latitude=row * cell_size_deg + half,
                longitude=col * cell_size_deg + half,
            ),
            members=tuple(members),
        )
        for idx, ((row, col), members) in enumerate(cells.items())
    ]

    logger.debug(
        "grid_bin: %d points -> %d cells (cell_size_deg=%s)",
        len(points), len(clusters), cell_size_deg,
    )
    return clusters


def hex_bin(
    points: Sequence[Point],
    resolution: int = DEFAULT_HEX_RESOLUTION,
) -> List[Cluster]:
    """Bin points into H3 cells at ``resolution``; centres are the cell centres."""
    require_int_at_least("resolution", resolution, 0)
    if resolution > MAX_HEX_RESOLUTION:
        raise ValueError(
            f"resolution must be <= {MAX_HEX_RESOLUTION}, got {resolution!r}"
        )
    require_finite_points(points)

    cells: Dict[str, List[Point]] = {}
    for point in points:
        cell = h3.latlng_to_cell(point.latitude, point.longitude, resolution)
        cells.setdefault(cell, []).append(point)

    clusters = []
    for idx, (cell, members) in enumerate(cells.items()):
        lat, lng = h3.cell_to_latlng(cell)
        clusters.append(
            Cluster(id=idx, center=Coordinate(lat, lng), members=tuple(members))
        )

    logger.debug(
        "hex_bin: %d points -> %d cells (resolution=%d)",
        len(points), len(clusters), resolution,
    )
    return clusters

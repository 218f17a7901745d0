"""pandas adapters between incident tables and clustering types."""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from .models import Cluster, Point


CLUSTER_COLUMNS = ["cluster_id", "lat", "lng", "count"]
ASSIGNMENT_COLUMNS = ["cluster_id", "lat", "lng", "payload"]


def points_from_dataframe(
    df: pd.DataFrame,
    *,
    lat_col: str = "lat",
    lng_col: str = "lng",
) -> List[Point]:
    """
    Convert each row of ``df`` into a :class:`Point`.

    The full row (as a dict) becomes the point's payload, so incident ids and
    categories survive clustering and can be read back from cluster members.

    Raises:
        ValueError: If ``lat_col`` or ``lng_col`` is missing
    """
    missing = [col for col in (lat_col, lng_col) if col not in df.columns]
    if missing:
        raise ValueError(f"Missing coordinate columns: {', '.join(missing)}")

    return [
        Point(latitude=float(row[lat_col]), longitude=float(row[lng_col]), payload=row)
        for row in df.to_dict(orient="records")
    ]


def clusters_to_dataframe(clusters: Iterable[Cluster]) -> pd.DataFrame:
    """One row per cluster: id, centre and member count."""
    records = [
        {
            "cluster_id": c.id,
            "lat": c.center.latitude,
            "lng": c.center.longitude,
            "count": c.count,
        }
        for c in clusters
    ]
    return pd.DataFrame(records, columns=CLUSTER_COLUMNS)


def assignments_to_dataframe(clusters: Iterable[Cluster]) -> pd.DataFrame:
    """One row per (cluster, member) pair, in cluster then discovery order."""
    records = [
        {
            "cluster_id": c.id,
            "lat": p.latitude,
            "lng": p.longitude,
            "payload": p.payload,
        }
        for c in clusters
        for p in c.members
    ]
    return pd.DataFrame(records, columns=ASSIGNMENT_COLUMNS)

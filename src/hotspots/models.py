"""Value types shared by every clustering strategy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Point:
    """
    A geographic incident record.

    ``payload`` is opaque to the clustering code and is carried through to
    ``Cluster.members`` by reference. It does not take part in equality or
    hashing so that unhashable payloads (dicts, models) are allowed.
    """

    latitude: float
    longitude: float
    payload: Any = field(default=None, compare=False)


@dataclass(frozen=True)
class Cluster:
    """
    A group of points produced by one clustering call.

    Attributes:
        id: Identifier, unique and 0-based within one call's output
        center: Cluster centre (data centroid or cell centre, depending on algorithm)
        members: Points in discovery order
    """

    id: int
    center: Coordinate
    members: Tuple[Point, ...] = ()

    @property
    def count(self) -> int:
        """Number of member points."""
        return len(self.members)


def centroid(points: Sequence[Point]) -> Coordinate:
    """Arithmetic mean of the coordinates of ``points`` (must be non-empty)."""
    lat = sum(p.latitude for p in points) / len(points)
    lng = sum(p.longitude for p in points) / len(points)
    return Coordinate(latitude=lat, longitude=lng)


def build_clusters(groups: Iterable[Sequence[Point]]) -> List[Cluster]:
    """Turn ordered member groups into clusters centred on their centroids."""
    return [
        Cluster(id=idx, center=centroid(members), members=tuple(members))
        for idx, members in enumerate(groups)
    ]

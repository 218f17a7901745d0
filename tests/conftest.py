"""
Pytest configuration and shared fixtures for incident-hotspots tests.

This file provides:
- Small hand-built point layouts with known cluster structure
- Seeded random scatters for property-style checks
"""

from typing import List

import numpy as np
import pytest

from src.hotspots import Point


# ==============================================================================
# Helpers
# ==============================================================================

def make_points(coords, prefix: str = "p") -> List[Point]:
    """Build points whose payload carries a readable id."""
    return [
        Point(latitude=lat, longitude=lng, payload={"id": f"{prefix}{i}"})
        for i, (lat, lng) in enumerate(coords)
    ]


BLOB_OFFSETS = [
    (0.0, 0.0),
    (0.001, 0.0),
    (0.0, 0.001),
    (0.001, 0.001),
    (0.0005, 0.0005),
]


# ==============================================================================
# Layout Fixtures
# ==============================================================================

@pytest.fixture
def blob_a() -> List[Point]:
    """Five points within ~160m of (0, 0)."""
    return make_points(BLOB_OFFSETS, prefix="a")


@pytest.fixture
def blob_b() -> List[Point]:
    """Five points within ~160m of (1, 1), ~157km from blob A."""
    return make_points([(1.0 + dlat, 1.0 + dlng) for dlat, dlng in BLOB_OFFSETS], prefix="b")


@pytest.fixture
def two_blobs(blob_a, blob_b) -> List[Point]:
    return blob_a + blob_b


@pytest.fixture
def outlier() -> Point:
    """A lone incident far from both blobs."""
    return Point(latitude=10.0, longitude=10.0, payload={"id": "outlier"})


@pytest.fixture
def san_francisco() -> Point:
    return Point(latitude=37.7749, longitude=-122.4194, payload={"city": "San Francisco"})


@pytest.fixture
def los_angeles() -> Point:
    return Point(latitude=34.0522, longitude=-118.2437, payload={"city": "Los Angeles"})


@pytest.fixture
def scattered_points() -> List[Point]:
    """60 seeded random incidents across a ~5km square in Tuguegarao."""
    rng = np.random.default_rng(42)
    lats = 17.60 + rng.random(60) * 0.05
    lngs = 121.70 + rng.random(60) * 0.05
    return make_points(zip(lats.tolist(), lngs.tolist()), prefix="s")

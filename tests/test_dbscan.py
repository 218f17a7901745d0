"""
Unit Tests for DBSCAN (src/hotspots/dbscan.py)

Covers density-reachability, noise handling, parameter validation and the
monotonicity of captured points in epsilon.
"""

import pytest

from src.hotspots import Point, dbscan

from .conftest import make_points


def captured(clusters) -> int:
    return sum(c.count for c in clusters)


# ==============================================================================
# Core Behaviour
# ==============================================================================

class TestDbscan:
    """Test density clustering."""

    def test_two_blobs(self, two_blobs):
        """Test two well-separated blobs yield two clusters of five."""
        clusters = dbscan(two_blobs, epsilon_m=50_000, min_points=2)

        assert len(clusters) == 2
        assert [c.count for c in clusters] == [5, 5]
        assert captured(clusters) == len(two_blobs)

    def test_outlier_dropped_as_noise(self, two_blobs, outlier):
        clusters = dbscan(two_blobs + [outlier], epsilon_m=50_000, min_points=2)

        assert len(clusters) == 2
        assert all(outlier is not p for c in clusters for p in c.members)

    def test_center_is_mean_of_members(self, two_blobs):
        for cluster in dbscan(two_blobs, epsilon_m=50_000, min_points=2):
            lat = sum(p.latitude for p in cluster.members) / cluster.count
            lng = sum(p.longitude for p in cluster.members) / cluster.count
            assert cluster.center.latitude == pytest.approx(lat)
            assert cluster.center.longitude == pytest.approx(lng)

    def test_ids_follow_discovery_order(self, blob_a, blob_b):
        """Test the cluster seeded first gets id 0."""
        clusters = dbscan(blob_b + blob_a, epsilon_m=50_000, min_points=2)

        assert [c.id for c in clusters] == [0, 1]
        assert clusters[0].center.latitude > 0.5
        assert clusters[1].center.latitude < 0.5

    def test_seed_point_is_first_member(self, blob_a):
        clusters = dbscan(blob_a, epsilon_m=500, min_points=3)

        assert len(clusters) == 1
        assert clusters[0].members[0] is blob_a[0]

    def test_min_points_one_keeps_everything(self, scattered_points, outlier):
        """Test every point is its own neighbour, so nothing is noise."""
        points = scattered_points + [outlier]

        clusters = dbscan(points, epsilon_m=10, min_points=1)

        assert captured(clusters) == len(points)

    def test_sparse_points_all_noise(self, two_blobs):
        """Test a neighbourhood smaller than min_points never seeds a cluster."""
        assert dbscan(two_blobs, epsilon_m=50_000, min_points=6) == []

    def test_zero_epsilon_groups_duplicates(self):
        """Test the neighbourhood is inclusive: distance 0 <= epsilon 0."""
        points = make_points([(17.61, 121.72), (17.61, 121.72), (17.62, 121.73)])

        clusters = dbscan(points, epsilon_m=0, min_points=2)

        assert len(clusters) == 1
        assert clusters[0].count == 2

    def test_chain_expansion(self):
        """Test density-reachability links points beyond a single epsilon."""
        # ~111m steps along the equator, 2km end to end.
        points = make_points([(0.0, i * 0.001) for i in range(19)])

        clusters = dbscan(points, epsilon_m=120, min_points=3)

        assert len(clusters) == 1
        assert clusters[0].count == 19

    def test_border_point_joins_without_expanding(self):
        """Test a border point is absorbed but its neighbours are not pulled in."""
        # Only (0, 0.0002) is core; the next point is ~111m out and the last ~111m further.
        points = make_points([
            (0.0, 0.0), (0.0, 0.0001), (0.0, 0.0002),
            (0.0, 0.0012),
            (0.0, 0.0022),
        ])

        clusters = dbscan(points, epsilon_m=115, min_points=4)

        assert len(clusters) == 1
        members = list(clusters[0].members)
        assert points[3] in members
        assert points[4] not in members

    def test_empty_input(self):
        assert dbscan([]) == []


# ==============================================================================
# Monotonicity
# ==============================================================================

class TestDbscanMonotonicity:
    """Test growing epsilon never loses captured points."""

    def test_captured_non_decreasing(self, scattered_points):
        totals = [
            captured(dbscan(scattered_points, epsilon_m=eps, min_points=3))
            for eps in (50, 150, 300, 600, 1200, 5000)
        ]

        assert totals == sorted(totals)
        assert totals[-1] == len(scattered_points)


# ==============================================================================
# Validation
# ==============================================================================

class TestDbscanValidation:
    """Test precondition checks."""

    @pytest.mark.parametrize("epsilon", [-1.0, float("nan"), float("inf")])
    def test_invalid_epsilon(self, blob_a, epsilon):
        with pytest.raises(ValueError, match="epsilon_m"):
            dbscan(blob_a, epsilon_m=epsilon)

    @pytest.mark.parametrize("min_points", [0, -3, 2.5, True])
    def test_invalid_min_points(self, blob_a, min_points):
        with pytest.raises(ValueError, match="min_points"):
            dbscan(blob_a, min_points=min_points)

    def test_non_finite_coordinates(self, blob_a):
        with pytest.raises(ValueError, match="Point 5"):
            dbscan(blob_a + [Point(float("inf"), 0.0)])

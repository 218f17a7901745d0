"""Test package for incident-hotspots.

This package contains:
- Unit tests per clustering strategy (test_distance.py, test_binning.py,
  test_region.py, test_dbscan.py, test_kmeans.py, test_multires.py)
- Engine, config and adapter tests (test_engine.py, test_frames.py)
- HTTP action tests (test_actions.py)
- Integration scenarios (test_integration.py)
- Test configuration (conftest.py)
"""

"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any import that loads settings.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("CLASSIFIER_PROVIDER", "keyword")
os.environ.setdefault("APP_SEED_DEMO_DREAMS", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from app.core import services  # noqa: E402
from app.schemas.region import RegionBoundary  # noqa: E402
from factories import polygon_boundary, rectangle_ring  # noqa: E402


@pytest.fixture
def square_boundary() -> RegionBoundary:
    """Polygon covering lng 0..10, lat 0..10."""
    return polygon_boundary("Squareland", rectangle_ring(0, 0, 10, 10))


@pytest.fixture(autouse=True)
def _fresh_services():
    """Give every test its own in-memory store and service instances."""
    services.reset_services()
    yield
    services.reset_services()

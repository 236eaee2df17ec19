"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample grids and plots
- Sample boundary points
- A fresh in-memory store and service
- FastAPI test client
"""
import math
import pytest
from fastapi.testclient import TestClient

from farm_planner.main import app, limiter
from farm_planner.api.dependencies import get_farm_service
from farm_planner.domain.models import BoundaryPoint, Grid, PlotRectangle
from farm_planner.infrastructure.farm_store import FarmStore
from farm_planner.services.application.farm_service import FarmLayoutService
from farm_planner.services.domain.boundary_surveyor import BoundarySurveyor
from farm_planner.services.domain.plot_layout_engine import LayoutConfig, PlotLayoutEngine


# ============================================================
# Layout Fixtures
# ============================================================

@pytest.fixture
def grid_30() -> Grid:
    """Standard 30x30 grid with a one-cell margin."""
    return Grid(width=30, height=30, boundary_margin=1)


@pytest.fixture
def engine() -> PlotLayoutEngine:
    """Layout engine with default spacing and free-form dragging."""
    return PlotLayoutEngine(LayoutConfig(spacing=1, drag_epsilon=0.1, allow_overlap_on_drag=True))


@pytest.fixture
def strict_engine() -> PlotLayoutEngine:
    """Layout engine that refuses drags onto other plots."""
    return PlotLayoutEngine(LayoutConfig(spacing=1, drag_epsilon=0.1, allow_overlap_on_drag=False))


@pytest.fixture
def sample_plot() -> PlotRectangle:
    return PlotRectangle(id="p1", x=5, y=5, width=5, height=3)


# ============================================================
# Survey Fixtures
# ============================================================

def square_boundary(side_meters: float, latitude: float, longitude: float = 0.0) -> list[BoundaryPoint]:
    """Four corners of a square of the given side length at a latitude."""
    dlat = side_meters / 111320
    dlon = side_meters / (111320 * math.cos(math.radians(latitude)))
    corners = [
        (latitude, longitude),
        (latitude, longitude + dlon),
        (latitude + dlat, longitude + dlon),
        (latitude + dlat, longitude),
    ]
    return [
        BoundaryPoint(latitude=lat, longitude=lon, order=i)
        for i, (lat, lon) in enumerate(corners)
    ]


@pytest.fixture
def equator_square() -> list[BoundaryPoint]:
    """0.001 degree square at the equator."""
    corners = [(0, 0), (0, 0.001), (0.001, 0.001), (0.001, 0)]
    return [
        BoundaryPoint(latitude=lat, longitude=lon, order=i)
        for i, (lat, lon) in enumerate(corners)
    ]


@pytest.fixture
def hundred_meter_square() -> list[BoundaryPoint]:
    """Roughly 100m x 100m square at 45 degrees north."""
    return square_boundary(100.0, latitude=45.0, longitude=-93.0)


@pytest.fixture
def surveyor() -> BoundarySurveyor:
    return BoundarySurveyor(acre_square_meters=4046.8564224)


# ============================================================
# Service Fixtures
# ============================================================

@pytest.fixture
def store() -> FarmStore:
    return FarmStore()


@pytest.fixture
def service(store, engine, surveyor) -> FarmLayoutService:
    return FarmLayoutService(store=store, engine=engine, surveyor=surveyor)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(service) -> TestClient:
    """Create a test client backed by a fresh store."""
    app.dependency_overrides[get_farm_service] = lambda: service
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_square():
    """Factory for square boundaries of a given side length."""
    return square_boundary

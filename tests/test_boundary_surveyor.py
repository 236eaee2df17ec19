"""
Unit tests for boundary survey geometry.

Tests cover:
- Haversine distance
- Local planar projection and shoelace area
- Area and perimeter of walked boundaries
- Degenerate input
- Measurement snapshots and export reports
- Survey session workflow
"""
import math
import pytest
from pydantic import ValidationError

from farm_planner.domain.models import BoundaryPoint
from farm_planner.services.domain.boundary_surveyor import (
    BoundarySurveyor,
    InsufficientPointsError,
    SurveySession,
    SurveySessionClosedError,
    SurveyStatus,
)
from farm_planner.utils.geo_projection import (
    closed_path_length,
    geodesic_area_perimeter,
    haversine_distance,
    is_simple_polygon,
    project_to_local_meters,
    shoelace_area,
)


EARTH_RADIUS = 6371000.0


# ============================================================
# Geometry Utility Tests
# ============================================================

class TestHaversine:
    """Tests for great-circle distance."""

    def test_one_degree_of_latitude(self):
        expected = EARTH_RADIUS * math.pi / 180
        assert haversine_distance((0, 0), (1, 0)) == pytest.approx(expected, rel=1e-9)

    def test_one_degree_of_longitude_at_equator(self):
        expected = EARTH_RADIUS * math.pi / 180
        assert haversine_distance((0, 0), (0, 1)) == pytest.approx(expected, rel=1e-9)

    def test_zero_distance(self):
        assert haversine_distance((45.0, -93.0), (45.0, -93.0)) == 0.0

    def test_symmetric(self):
        a, b = (-32.328, 18.826), (-32.329, 18.827)
        assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))

    def test_closed_path_matches_edge_sum(self):
        coords = [(10.0, 20.0), (10.001, 20.0), (10.001, 20.002)]
        expected = (
            haversine_distance(coords[0], coords[1]) +
            haversine_distance(coords[1], coords[2]) +
            haversine_distance(coords[2], coords[0])
        )
        assert closed_path_length(coords) == pytest.approx(expected, rel=1e-9)


class TestPlanarProjection:
    """Tests for the local projection and shoelace area."""

    def test_projection_centred_on_mean(self):
        projected = project_to_local_meters([(0, 0), (0.002, 0.002)])
        assert projected[0][0] == pytest.approx(-projected[1][0])
        assert projected[0][1] == pytest.approx(-111.32)

    def test_projection_rejects_empty(self):
        with pytest.raises(ValueError):
            project_to_local_meters([])

    def test_shoelace_unit_square(self):
        assert shoelace_area([(0, 0), (1, 0), (1, 1), (0, 1)]) == pytest.approx(1.0)

    def test_shoelace_ignores_winding(self):
        clockwise = [(0, 0), (0, 2), (3, 2), (3, 0)]
        assert shoelace_area(clockwise) == pytest.approx(6.0)
        assert shoelace_area(list(reversed(clockwise))) == pytest.approx(6.0)

    def test_simple_polygon_check(self):
        assert is_simple_polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        assert not is_simple_polygon([(0, 0), (1, 1), (0, 1), (1, 0)])

    def test_geodesic_area_of_degenerate_input(self):
        assert geodesic_area_perimeter([(0, 0), (0, 1)]) == (0.0, 0.0)


# ============================================================
# Surveyor Tests
# ============================================================

class TestBoundarySurveyor:
    """Tests for area and perimeter of walked boundaries."""

    def test_equator_square_area(self, surveyor, equator_square):
        """A 0.001 degree square at the equator is about 111.32m on a side."""
        area = surveyor.polygon_area(equator_square)
        assert area == pytest.approx((111320 * 0.001) ** 2, rel=1e-6)

    def test_equator_square_acres(self, surveyor, equator_square):
        measurement = surveyor.measure(equator_square)
        assert measurement.area_acres == pytest.approx(measurement.area_square_meters / 4046.8564224)
        assert measurement.area_acres == pytest.approx(measurement.area_square_meters / 4047, rel=1e-3)

    def test_hundred_meter_square(self, surveyor, hundred_meter_square):
        measurement = surveyor.measure(hundred_meter_square)

        assert measurement.area_square_meters == pytest.approx(10000, rel=0.02)
        assert measurement.perimeter_meters == pytest.approx(400, rel=0.02)
        assert measurement.geodesic_area_square_meters == pytest.approx(10000, rel=0.02)
        assert measurement.is_simple

    @pytest.mark.parametrize("latitude", [-60.0, -10.0, 0.0, 35.0, 70.0])
    def test_area_scale_across_latitudes(self, surveyor, make_square, latitude):
        points = make_square(100.0, latitude=latitude, longitude=18.8)
        assert surveyor.polygon_area(points) == pytest.approx(10000, rel=0.02)
        assert surveyor.polygon_perimeter(points) == pytest.approx(400, rel=0.02)

    def test_area_ignores_accuracy(self, surveyor, equator_square):
        noisy = [p.model_copy(update={"accuracy": 25.0 * (i + 1)}) for i, p in enumerate(equator_square)]
        assert surveyor.polygon_area(noisy) == surveyor.polygon_area(equator_square)

    def test_degenerate_area(self, surveyor, equator_square):
        p1, p2 = equator_square[:2]
        assert surveyor.polygon_area([]) == 0
        assert surveyor.polygon_area([p1]) == 0
        assert surveyor.polygon_area([p1, p2]) == 0

    def test_degenerate_perimeter(self, surveyor, equator_square):
        p1, p2 = equator_square[:2]
        assert surveyor.polygon_perimeter([]) == 0
        assert surveyor.polygon_perimeter([p1]) == 0
        # Two points: out and back
        distance = haversine_distance((p1.latitude, p1.longitude), (p2.latitude, p2.longitude))
        assert surveyor.polygon_perimeter([p1, p2]) == pytest.approx(2 * distance)

    def test_measure_requires_three_points(self, surveyor, equator_square):
        with pytest.raises(InsufficientPointsError):
            surveyor.measure(equator_square[:2])

    def test_self_intersecting_boundary_flagged(self, surveyor):
        corners = [(0, 0), (0.001, 0.001), (0, 0.001), (0.001, 0)]
        points = [BoundaryPoint(latitude=lat, longitude=lon) for lat, lon in corners]

        measurement = surveyor.measure(points)

        assert not measurement.is_simple

    def test_measurement_is_frozen(self, surveyor, equator_square):
        measurement = surveyor.measure(equator_square, label="North field")
        assert measurement.label == "North field"
        with pytest.raises(Exception):
            measurement.area_square_meters = 0.0

    def test_measurement_points_are_immutable(self, surveyor, equator_square):
        measurement = surveyor.measure(equator_square)

        assert isinstance(measurement.points, tuple)
        with pytest.raises(AttributeError):
            measurement.points.append(equator_square[0])
        with pytest.raises(ValidationError):
            measurement.points[0].latitude = 1.0

    def test_measurement_detached_from_input_list(self, surveyor, equator_square):
        points = list(equator_square)
        measurement = surveyor.measure(points)
        points.clear()
        assert len(measurement.points) == 4

    def test_custom_acre_constant(self, equator_square):
        surveyor = BoundarySurveyor(acre_square_meters=4047)
        measurement = surveyor.measure(equator_square)
        assert measurement.area_acres == pytest.approx(measurement.area_square_meters / 4047)


class TestSurveyReport:
    """Tests for the JSON export report."""

    def test_report_rounding(self, surveyor):
        points = [
            BoundaryPoint(latitude=0.123456789123, longitude=0.0),
            BoundaryPoint(latitude=0.123456789123, longitude=0.001),
            BoundaryPoint(latitude=0.124456789123, longitude=0.001),
        ]
        measurement = surveyor.measure(points)

        report = surveyor.build_report("farm-1", [measurement])

        assert report["farm_id"] == "farm-1"
        assert "timestamp" in report
        exported = report["field_measurements"][0]
        assert exported["area_square_meters"] == round(measurement.area_square_meters, 2)
        assert exported["area_acres"] == round(measurement.area_acres, 4)
        assert exported["perimeter_meters"] == round(measurement.perimeter_meters, 2)
        assert exported["points"][0]["latitude"] == 0.12345679

    def test_empty_report(self, surveyor):
        report = surveyor.build_report("farm-1", [])
        assert report["field_measurements"] == []


# ============================================================
# Survey Session Tests
# ============================================================

class TestSurveySession:
    """Tests for the boundary walking workflow."""

    def test_points_are_labelled_in_order(self):
        session = SurveySession(farm_id="farm-1")
        session.add_point(0, 0, accuracy=4.0)
        session.add_point(0, 0.001)

        assert [p.order for p in session.points] == [0, 1]
        assert [p.label for p in session.points] == ["Corner 1", "Corner 2"]
        assert session.points[0].accuracy == 4.0

    def test_complete_needs_three_points(self, surveyor):
        session = SurveySession(farm_id="farm-1")
        session.add_point(0, 0)
        session.add_point(0, 0.001)

        with pytest.raises(InsufficientPointsError):
            session.complete(surveyor)

        # The walk can continue
        assert session.status is SurveyStatus.ACTIVE
        session.add_point(0.001, 0.001)
        measurement = session.complete(surveyor, label="Field Survey 1")

        assert session.status is SurveyStatus.COMPLETED
        assert measurement.label == "Field Survey 1"
        assert len(measurement.points) == 3

    def test_completed_session_is_closed(self, surveyor, equator_square):
        session = SurveySession(farm_id="farm-1")
        for p in equator_square:
            session.add_point(p.latitude, p.longitude)
        session.complete(surveyor)

        with pytest.raises(SurveySessionClosedError):
            session.add_point(0.002, 0.002)
        with pytest.raises(SurveySessionClosedError):
            session.complete(surveyor)

    def test_cancel_discards_points(self):
        session = SurveySession(farm_id="farm-1")
        session.add_point(0, 0)
        session.cancel()

        assert session.status is SurveyStatus.CANCELLED
        assert session.points == ()
        with pytest.raises(SurveySessionClosedError):
            session.cancel()

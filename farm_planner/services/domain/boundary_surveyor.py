"""
Domain service: Field boundary measurement from walked GPS fixes.

Area is computed on a local planar projection with the shoelace formula;
perimeter is the closed-loop sum of haversine distances. A WGS84
geodesic area is carried alongside for comparison.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Sequence
import logging
import uuid

from farm_planner.domain.models import BoundaryPoint, FieldMeasurement
from farm_planner.utils.geo_projection import (
    closed_path_length,
    geodesic_area_perimeter,
    is_simple_polygon,
    project_to_local_meters,
    shoelace_area,
)
from farm_planner.config import settings

logger = logging.getLogger(__name__)


class InsufficientPointsError(ValueError):
    """Raised when a boundary has too few points to enclose an area."""
    pass


class SurveySessionClosedError(ValueError):
    """Raised when a completed or cancelled survey is modified."""
    pass


def _as_coordinates(points: Sequence[BoundaryPoint]) -> list[tuple[float, float]]:
    return [(p.latitude, p.longitude) for p in points]


class BoundarySurveyor:
    """
    Domain service for measuring walked field boundaries.

    Degenerate input is not an error for the raw geometry: fewer than three
    points has zero area and fewer than two has zero perimeter. Accuracy
    metadata on points never affects the result.
    """

    def __init__(self, acre_square_meters: Optional[float] = None):
        """
        Initialize the surveyor.

        Args:
            acre_square_meters: Square meters per acre (defaults to settings)
        """
        self.acre_square_meters = acre_square_meters or settings.acre_square_meters

    def polygon_area(self, points: Sequence[BoundaryPoint]) -> float:
        """Area enclosed by the boundary in square meters."""
        if len(points) < 3:
            return 0.0
        projected = project_to_local_meters(_as_coordinates(points))
        return shoelace_area(projected)

    def polygon_perimeter(self, points: Sequence[BoundaryPoint]) -> float:
        """Length of the closed boundary in meters."""
        if len(points) < 2:
            return 0.0
        return closed_path_length(_as_coordinates(points))

    def to_acres(self, square_meters: float) -> float:
        return square_meters / self.acre_square_meters

    def measure(
        self,
        points: Sequence[BoundaryPoint],
        label: Optional[str] = None,
    ) -> FieldMeasurement:
        """
        Measure a closed boundary.

        Args:
            points: Boundary points in walking order
            label: Optional display label

        Returns:
            Immutable FieldMeasurement snapshot

        Raises:
            InsufficientPointsError: If fewer than 3 points were given
        """
        if len(points) < 3:
            raise InsufficientPointsError(
                f"At least 3 points are needed to define a boundary area, got {len(points)}"
            )

        coordinates = _as_coordinates(points)
        projected = project_to_local_meters(coordinates)

        area = shoelace_area(projected)
        perimeter = closed_path_length(coordinates)
        geodesic_area, _ = geodesic_area_perimeter(coordinates)
        simple = is_simple_polygon(projected)

        if not simple:
            logger.warning(f"Boundary of {len(points)} points crosses itself; "
                           f"area {area:.1f}m² is unreliable")

        measurement = FieldMeasurement(
            id=f"field-{uuid.uuid4().hex[:12]}",
            label=label or "Field Survey",
            points=tuple(points),
            area_square_meters=area,
            area_acres=self.to_acres(area),
            perimeter_meters=perimeter,
            geodesic_area_square_meters=geodesic_area,
            is_simple=simple,
        )

        logger.info(f"Measured boundary of {len(points)} points: area={area:.1f}m² "
                    f"({measurement.area_acres:.4f} acres), perimeter={perimeter:.1f}m")
        return measurement

    def build_report(
        self,
        farm_id: str,
        measurements: Sequence[FieldMeasurement],
    ) -> dict[str, Any]:
        """
        Build a JSON-ready export of a farm's field measurements.

        Areas are rounded to 2 decimals (acres to 4), perimeters to 2 and
        coordinates to 8.

        Args:
            farm_id: Farm the measurements belong to
            measurements: Finalized measurements

        Returns:
            Report dictionary
        """
        field_measurements = []
        for m in measurements:
            data = m.model_dump(mode="json")
            data["area_square_meters"] = round(m.area_square_meters, 2)
            data["area_acres"] = round(m.area_acres, 4)
            data["perimeter_meters"] = round(m.perimeter_meters, 2)
            if m.geodesic_area_square_meters is not None:
                data["geodesic_area_square_meters"] = round(m.geodesic_area_square_meters, 2)
            for point in data["points"]:
                point["latitude"] = round(point["latitude"], 8)
                point["longitude"] = round(point["longitude"], 8)
            field_measurements.append(data)

        return {
            "farm_id": farm_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "field_measurements": field_measurements,
        }


class SurveyStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SurveySession:
    """
    One boundary walk in progress.

    Points are append-only while the session is active. Completing the
    session freezes them into a FieldMeasurement.
    """

    def __init__(self, farm_id: str, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex[:12]
        self.farm_id = farm_id
        self.status = SurveyStatus.ACTIVE
        self._points: list[BoundaryPoint] = []

    @property
    def points(self) -> tuple[BoundaryPoint, ...]:
        return tuple(self._points)

    def _ensure_active(self):
        if self.status is not SurveyStatus.ACTIVE:
            raise SurveySessionClosedError(f"Survey {self.id} is {self.status.value}")

    def add_point(
        self,
        latitude: float,
        longitude: float,
        accuracy: Optional[float] = None,
    ) -> BoundaryPoint:
        """
        Record the next corner of the boundary.

        Raises:
            SurveySessionClosedError: If the session is no longer active
        """
        self._ensure_active()
        point = BoundaryPoint(
            latitude=latitude,
            longitude=longitude,
            accuracy=accuracy,
            order=len(self._points),
            label=f"Corner {len(self._points) + 1}",
        )
        self._points.append(point)
        logger.debug(f"Survey {self.id}: recorded {point.label} at "
                     f"({latitude:.6f}, {longitude:.6f})")
        return point

    def complete(
        self,
        surveyor: BoundarySurveyor,
        label: Optional[str] = None,
    ) -> FieldMeasurement:
        """
        Finalize the walk into a measurement.

        The session stays active if there are too few points, so the walk
        can continue.

        Raises:
            SurveySessionClosedError: If the session is no longer active
            InsufficientPointsError: If fewer than 3 points were recorded
        """
        self._ensure_active()
        measurement = surveyor.measure(self._points, label=label)
        self.status = SurveyStatus.COMPLETED
        return measurement

    def cancel(self):
        """Discard the walk."""
        self._ensure_active()
        self._points.clear()
        self.status = SurveyStatus.CANCELLED

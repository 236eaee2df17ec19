"""
Geospatial utilities for GPS boundary measurement.
"""
import math
from typing import List, Optional, Tuple
import numpy as np
from pyproj import Geod
from shapely.geometry import Polygon

from farm_planner.config import settings

# WGS84 ellipsoid, shared by every geodesic calculation
_geod = Geod(ellps="WGS84")


def haversine_distance(
    point_a: Tuple[float, float],
    point_b: Tuple[float, float],
    radius: Optional[float] = None,
) -> float:
    """
    Great-circle distance between two GPS coordinates.

    Args:
        point_a: (latitude, longitude) in degrees
        point_b: (latitude, longitude) in degrees
        radius: Sphere radius in meters (defaults to the configured Earth radius)

    Returns:
        Distance in meters
    """
    radius = radius or settings.earth_radius_meters
    lat1, lon1 = point_a
    lat2, lon2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (math.sin(delta_phi / 2) * math.sin(delta_phi / 2) +
         math.cos(phi1) * math.cos(phi2) *
         math.sin(delta_lambda / 2) * math.sin(delta_lambda / 2))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return radius * c


def closed_path_length(
    coordinates: List[Tuple[float, float]],
    radius: Optional[float] = None,
) -> float:
    """
    Haversine length of a closed loop (last point connects to the first).

    Args:
        coordinates: List of (latitude, longitude) tuples in degrees
        radius: Sphere radius in meters

    Returns:
        Total length in meters
    """
    if len(coordinates) < 2:
        return 0.0

    radius = radius or settings.earth_radius_meters
    points = np.radians(np.array(coordinates, dtype=float))
    lat1, lon1 = points[:, 0], points[:, 1]
    # Pair every point with its successor, wrapping to the first
    lat2, lon2 = np.roll(lat1, -1), np.roll(lon1, -1)

    a = (np.sin((lat2 - lat1) / 2) ** 2 +
         np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return float(np.sum(radius * c))


def project_to_local_meters(
    coordinates: List[Tuple[float, float]],
    meters_per_degree: Optional[float] = None,
) -> List[Tuple[float, float]]:
    """
    Project lat/lon coordinates onto a local plane centred on their mean.

    Longitude offsets are scaled by the cosine of the mean latitude, which is
    accurate for field-sized areas.

    Args:
        coordinates: List of (latitude, longitude) tuples in degrees
        meters_per_degree: Meters per degree of latitude

    Returns:
        List of (x, y) coordinates in meters (x east, y north)
    """
    if not coordinates:
        raise ValueError("Coordinates list cannot be empty")

    meters_per_degree = meters_per_degree or settings.meters_per_degree_latitude
    points = np.array(coordinates, dtype=float)
    mean_lat = float(np.mean(points[:, 0]))
    mean_lon = float(np.mean(points[:, 1]))

    meters_per_degree_lon = meters_per_degree * math.cos(math.radians(mean_lat))

    xs = (points[:, 1] - mean_lon) * meters_per_degree_lon
    ys = (points[:, 0] - mean_lat) * meters_per_degree

    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def shoelace_area(coordinates: List[Tuple[float, float]]) -> float:
    """
    Area of a planar polygon using the shoelace formula.

    Args:
        coordinates: List of (x, y) vertices, implicitly closed

    Returns:
        Unsigned area in square units of the input
    """
    if len(coordinates) < 3:
        return 0.0

    points = np.array(coordinates, dtype=float)
    x, y = points[:, 0], points[:, 1]
    x_next, y_next = np.roll(x, -1), np.roll(y, -1)

    return float(abs(np.sum(x * y_next - x_next * y)) / 2)


def is_simple_polygon(coordinates: List[Tuple[float, float]]) -> bool:
    """
    Check that a planar ring encloses area without crossing itself.

    Args:
        coordinates: List of (x, y) vertices, implicitly closed

    Returns:
        True if the polygon is valid, False otherwise
    """
    if len(coordinates) < 3:
        return False
    return Polygon(coordinates).is_valid


def geodesic_area_perimeter(
    coordinates: List[Tuple[float, float]]
) -> Tuple[float, float]:
    """
    Area and perimeter of a polygon on the WGS84 ellipsoid.

    Args:
        coordinates: List of (latitude, longitude) tuples in degrees

    Returns:
        Tuple of (area in square meters, perimeter in meters)
    """
    if len(coordinates) < 3:
        return 0.0, 0.0

    lats = [lat for lat, _ in coordinates]
    lons = [lon for _, lon in coordinates]
    area, perimeter = _geod.polygon_area_perimeter(lons, lats)

    # Sign depends on winding order
    return abs(area), perimeter

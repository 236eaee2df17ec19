"""
Domain models for farm layout and boundary survey data.

These models represent the core domain entities and should be independent
of any infrastructure concerns (stores, HTTP, etc.).
"""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PlotColor(str, Enum):
    """Colors a plot can be drawn with."""
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"
    RED = "red"


class PathColor(str, Enum):
    """Surface colors for walking paths."""
    BROWN = "brown"
    GRAY = "gray"
    YELLOW = "yellow"


class GridSizePreset(str, Enum):
    """Grid sizes offered when a farm is laid out."""
    SMALL = "20x20"
    MEDIUM = "30x30"
    LARGE = "40x40"

    @property
    def width(self) -> int:
        return int(self.value.split("x")[0])

    @property
    def height(self) -> int:
        return int(self.value.split("x")[1])

    @property
    def cell_size(self) -> int:
        """Rendered size of one cell in pixels."""
        return {"20x20": 30, "30x30": 20, "40x40": 15}[self.value]


class GridPosition(BaseModel):
    """Integer cell coordinates of a plot's top-left corner."""
    x: int
    y: int


class Grid(BaseModel):
    """Bounded placement area for a farm."""
    width: int = Field(gt=0, description="Grid width in cells")
    height: int = Field(gt=0, description="Grid height in cells")
    boundary_margin: int = Field(
        default=1, ge=0,
        description="Cells kept free along every edge"
    )

    @classmethod
    def from_preset(cls, preset: GridSizePreset, boundary_margin: int = 1) -> "Grid":
        return cls(
            width=preset.width,
            height=preset.height,
            boundary_margin=boundary_margin,
        )


class PlotRectangle(BaseModel):
    """Axis-aligned rectangle occupying whole grid cells."""
    id: str
    x: int
    y: int
    width: int = Field(ge=1)
    height: int = Field(ge=1)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def position(self) -> GridPosition:
        return GridPosition(x=self.x, y=self.y)


class Plot(PlotRectangle):
    """A named, colored plot stored on a farm."""
    farm_id: str
    name: str
    color: PlotColor = PlotColor.GREEN


class Farm(BaseModel):
    """Farm project owning a grid of plots and paths."""
    id: str
    name: str
    location: str = ""
    description: Optional[str] = None
    grid_size: GridSizePreset = GridSizePreset.MEDIUM


class WalkingPath(BaseModel):
    """Polyline of grid cells drawn between plots."""
    id: str
    farm_id: str
    name: str
    points: List[GridPosition] = Field(min_length=2)
    color: PathColor = PathColor.BROWN
    width: int = Field(default=2, ge=1)


class BoundaryPoint(BaseModel):
    """Single GPS fix recorded while walking a field boundary."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    order: int = 0
    accuracy: Optional[float] = Field(
        default=None,
        description="Reported GPS accuracy in meters (metadata only)"
    )
    label: Optional[str] = None
    recorded_at: datetime = Field(default_factory=utc_now)

    class Config:
        frozen = True


class FieldMeasurement(BaseModel):
    """Immutable area/perimeter snapshot of a closed field boundary."""
    id: str
    label: str
    points: Tuple[BoundaryPoint, ...]
    area_square_meters: float
    area_acres: float
    perimeter_meters: float
    geodesic_area_square_meters: Optional[float] = Field(
        default=None,
        description="WGS-84 ellipsoidal area, for comparison with the planar estimate"
    )
    is_simple: bool = Field(
        default=True,
        description="False when the walked boundary crosses itself"
    )
    completed_at: datetime = Field(default_factory=utc_now)

    class Config:
        frozen = True


class SeasonalData(BaseModel):
    """Baseline record of one past growing season on a farm."""
    id: str
    farm_id: str
    season_name: str = Field(min_length=1, description="Season label, e.g. 'Long rains'")
    year: int = Field(ge=1900, le=2100)
    crop_grown: str = Field(min_length=1)
    land_area_acres: float = Field(ge=0)
    land_area_square_meters: float = Field(
        default=0.0, ge=0,
        description="Derived from land_area_acres with the configured acre constant"
    )
    seed_variety: Optional[str] = None
    basal_fertilizer_type: Optional[str] = None
    basal_fertilizer_amount_bags: Optional[float] = Field(default=None, ge=0)
    basal_fertilizer_amount_kgs: Optional[float] = Field(default=None, ge=0)
    top_dressing_fertilizer_type: Optional[str] = None
    top_dressing_fertilizer_amount_bags: Optional[float] = Field(default=None, ge=0)
    top_dressing_fertilizer_amount_kgs: Optional[float] = Field(default=None, ge=0)
    yield_bags: Optional[float] = Field(default=None, ge=0)
    yield_kgs: Optional[float] = Field(default=None, ge=0)
    productivity_kgs_per_acre: Optional[float] = None
    productivity_kgs_per_square_meter: Optional[float] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

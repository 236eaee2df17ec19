"""
API request models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from farm_planner.domain.models import (
    Grid,
    GridPosition,
    GridSizePreset,
    PathColor,
    PlotColor,
    PlotRectangle,
)


class PlacementRequest(BaseModel):
    """Request to place a new plot among existing ones."""
    existing_plots: List[PlotRectangle] = Field(default_factory=list)
    width: int = Field(ge=1, description="Width of the new plot in cells")
    height: int = Field(ge=1, description="Height of the new plot in cells")
    grid: Grid

    class Config:
        json_schema_extra = {
            "example": {
                "existing_plots": [{"id": "a1", "x": 1, "y": 1, "width": 5, "height": 3}],
                "width": 5,
                "height": 3,
                "grid": {"width": 30, "height": 30, "boundary_margin": 1},
            }
        }


class DragRequest(BaseModel):
    """One pointer movement for a plot being dragged."""
    plot: PlotRectangle
    raw_x: float = Field(description="Proposed left edge in fractional cells")
    raw_y: float = Field(description="Proposed top edge in fractional cells")
    grid: Grid
    other_plots: List[PlotRectangle] = Field(default_factory=list)


class ValidateLayoutRequest(BaseModel):
    """Layout to check for boundary and overlap problems."""
    plots: List[PlotRectangle]
    grid: Grid


class BoundaryPointInput(BaseModel):
    """A GPS fix submitted by a client."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: Optional[float] = Field(default=None, ge=0)


class MeasureRequest(BaseModel):
    """Ordered boundary points to measure."""
    points: List[BoundaryPointInput]
    label: Optional[str] = None


class CreateFarmRequest(BaseModel):
    """New farm project."""
    name: str = Field(min_length=1)
    location: str = ""
    description: Optional[str] = None
    grid_size: Optional[GridSizePreset] = None


class CreatePlotRequest(BaseModel):
    """New plot; its position is chosen automatically."""
    name: str = Field(min_length=1)
    width: int = Field(default=5, ge=1)
    height: int = Field(default=3, ge=1)
    color: PlotColor = PlotColor.GREEN


class MovePlotRequest(BaseModel):
    """Proposed position for a plot being dragged."""
    raw_x: float
    raw_y: float


class CreatePathRequest(BaseModel):
    """New walking path drawn on the grid."""
    name: str = "Walking Path"
    points: List[GridPosition]
    color: PathColor = PathColor.BROWN
    width: int = Field(default=2, ge=1)


class UpdateFarmRequest(BaseModel):
    """Farm fields to change; omitted fields keep their value."""
    name: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = None
    description: Optional[str] = None
    grid_size: Optional[GridSizePreset] = None


class UpdatePlotRequest(BaseModel):
    """Plot fields to change. Use the position endpoint to move a plot."""
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[PlotColor] = None
    width: Optional[int] = Field(default=None, ge=1)
    height: Optional[int] = Field(default=None, ge=1)


class UpdatePathRequest(BaseModel):
    """Walking path fields to change."""
    name: Optional[str] = None
    points: Optional[List[GridPosition]] = None
    color: Optional[PathColor] = None
    width: Optional[int] = Field(default=None, ge=1)


class SeasonalDataRequest(BaseModel):
    """Baseline data for one past season. Square meters and productivity are derived."""
    season_name: str = Field(min_length=1)
    year: int = Field(ge=1900, le=2100)
    crop_grown: str = Field(min_length=1)
    land_area_acres: float = Field(ge=0)
    seed_variety: Optional[str] = None
    basal_fertilizer_type: Optional[str] = None
    basal_fertilizer_amount_bags: Optional[float] = Field(default=None, ge=0)
    basal_fertilizer_amount_kgs: Optional[float] = Field(default=None, ge=0)
    top_dressing_fertilizer_type: Optional[str] = None
    top_dressing_fertilizer_amount_bags: Optional[float] = Field(default=None, ge=0)
    top_dressing_fertilizer_amount_kgs: Optional[float] = Field(default=None, ge=0)
    yield_bags: Optional[float] = Field(default=None, ge=0)
    yield_kgs: Optional[float] = Field(default=None, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "season_name": "Long rains",
                "year": 2024,
                "crop_grown": "Maize",
                "land_area_acres": 2.5,
                "seed_variety": "H614",
                "basal_fertilizer_type": "DAP",
                "basal_fertilizer_amount_kgs": 125,
                "yield_bags": 40,
                "yield_kgs": 3600,
            }
        }


class UpdateSeasonalDataRequest(BaseModel):
    """Seasonal fields to change; derived fields are recomputed."""
    season_name: Optional[str] = Field(default=None, min_length=1)
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    crop_grown: Optional[str] = Field(default=None, min_length=1)
    land_area_acres: Optional[float] = Field(default=None, ge=0)
    seed_variety: Optional[str] = None
    basal_fertilizer_type: Optional[str] = None
    basal_fertilizer_amount_bags: Optional[float] = Field(default=None, ge=0)
    basal_fertilizer_amount_kgs: Optional[float] = Field(default=None, ge=0)
    top_dressing_fertilizer_type: Optional[str] = None
    top_dressing_fertilizer_amount_bags: Optional[float] = Field(default=None, ge=0)
    top_dressing_fertilizer_amount_kgs: Optional[float] = Field(default=None, ge=0)
    yield_bags: Optional[float] = Field(default=None, ge=0)
    yield_kgs: Optional[float] = Field(default=None, ge=0)

"""
API response models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from farm_planner.domain.models import BoundaryPoint, GridPosition, Plot


class DragResponse(BaseModel):
    """Result of one drag movement."""
    moved: bool = Field(description="Whether a new position was emitted")
    position: Optional[GridPosition] = Field(
        default=None,
        description="Snapped position, present only when moved"
    )


class MovePlotResponse(BaseModel):
    """Stored plot after a drag movement."""
    moved: bool
    plot: Plot


class LayoutIssueResponse(BaseModel):
    """Single layout problem."""
    kind: str = Field(description="out_of_bounds or overlap")
    plot_ids: List[str]
    message: str


class LayoutIssuesResponse(BaseModel):
    """All problems found in a layout."""
    issues: List[LayoutIssueResponse]

    class Config:
        json_schema_extra = {
            "example": {
                "issues": [
                    {"kind": "overlap", "plot_ids": ["a1", "b2"], "message": "Plots a1 and b2 overlap"},
                ]
            }
        }


class SurveySessionResponse(BaseModel):
    """State of a boundary walk."""
    id: str
    farm_id: str
    status: str
    points: List[BoundaryPoint]


class ClearGridResponse(BaseModel):
    removed: int


# Error responses shared by every route
ERROR_RESPONSES = {
    400: {"description": "Invalid request (bad dimensions, too few points, closed survey)"},
    429: {"description": "Rate limit exceeded"},
    500: {"description": "Internal server error"},
}

NOT_FOUND_RESPONSES = {
    404: {"description": "Farm, plot, path or survey not found"},
    **ERROR_RESPONSES,
}

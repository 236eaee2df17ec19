"""
API router for stateless layout endpoints.
"""
from fastapi import APIRouter

from farm_planner.api.dependencies import LayoutEngineDep
from farm_planner.api.v1.models.requests import (
    DragRequest,
    PlacementRequest,
    ValidateLayoutRequest,
)
from farm_planner.api.v1.models.responses import (
    ERROR_RESPONSES,
    DragResponse,
    LayoutIssueResponse,
    LayoutIssuesResponse,
)
from farm_planner.domain.models import GridPosition


router = APIRouter(
    prefix="/layout",
    tags=["layout"],
)


@router.post(
    "/placement",
    response_model=GridPosition,
    summary="Find a free position for a new plot",
    description="""
    Choose a position for a new plot among existing ones.

    Placement tries three strategies in order:
    1. Evenly spaced origins, keeping one free cell around every plot
    2. Every cell of the margin-bounded grid, allowing plots to touch
    3. Below all existing plots (may fall outside the grid when it is full)
    """,
    responses=ERROR_RESPONSES,
)
async def find_placement(
    request: PlacementRequest,
    engine: LayoutEngineDep,
) -> GridPosition:
    """
    Find a placement for a plot.

    Args:
        request: Existing plots, new plot size and grid
        engine: Plot layout engine (injected dependency)

    Returns:
        Position for the new plot
    """
    return engine.find_placement(
        request.existing_plots, request.width, request.height, request.grid
    )


@router.post(
    "/drag",
    response_model=DragResponse,
    summary="Constrain a drag movement",
    description="""
    Clamp a fractional drag position into the grid margins and snap it to
    the nearest cell. `moved` is false when the snapped cell is the plot's
    current cell, or when the move would overlap another plot and overlaps
    are disallowed.
    """,
    responses=ERROR_RESPONSES,
)
async def constrain_drag(
    request: DragRequest,
    engine: LayoutEngineDep,
) -> DragResponse:
    position = engine.constrain_drag(
        request.plot, request.raw_x, request.raw_y, request.grid, request.other_plots
    )
    return DragResponse(moved=position is not None, position=position)


@router.post(
    "/validate",
    response_model=LayoutIssuesResponse,
    summary="Check a layout for boundary and overlap problems",
    responses=ERROR_RESPONSES,
)
async def validate_layout(
    request: ValidateLayoutRequest,
    engine: LayoutEngineDep,
) -> LayoutIssuesResponse:
    issues = engine.validate_layout(request.plots, request.grid)
    return LayoutIssuesResponse(issues=[
        LayoutIssueResponse(kind=i.kind, plot_ids=list(i.plot_ids), message=i.message)
        for i in issues
    ])

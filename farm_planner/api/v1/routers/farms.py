"""
API router for farm, plot and path endpoints.
"""
from fastapi import APIRouter, Path, status
from typing import Annotated, List

from farm_planner.api.dependencies import FarmServiceDep
from farm_planner.api.v1.models.requests import (
    CreateFarmRequest,
    CreatePathRequest,
    CreatePlotRequest,
    MovePlotRequest,
    UpdateFarmRequest,
    UpdatePathRequest,
    UpdatePlotRequest,
)
from farm_planner.api.v1.models.responses import (
    NOT_FOUND_RESPONSES,
    ClearGridResponse,
    LayoutIssueResponse,
    LayoutIssuesResponse,
    MovePlotResponse,
)
from farm_planner.domain.models import Farm, Plot, WalkingPath


router = APIRouter(tags=["farms"])

FarmId = Annotated[str, Path(description="Unique identifier for the farm")]


@router.post(
    "/farms",
    response_model=Farm,
    status_code=status.HTTP_201_CREATED,
    summary="Create a farm project",
    responses=NOT_FOUND_RESPONSES,
)
async def create_farm(request: CreateFarmRequest, service: FarmServiceDep) -> Farm:
    return service.create_farm(
        name=request.name,
        location=request.location,
        description=request.description,
        grid_size=request.grid_size,
    )


@router.get("/farms", response_model=List[Farm], summary="List farm projects")
async def list_farms(service: FarmServiceDep) -> List[Farm]:
    return service.list_farms()


@router.get(
    "/farms/{farm_id}",
    response_model=Farm,
    summary="Get a farm project",
    responses=NOT_FOUND_RESPONSES,
)
async def get_farm(farm_id: FarmId, service: FarmServiceDep) -> Farm:
    return service.get_farm(farm_id)


@router.put(
    "/farms/{farm_id}",
    response_model=Farm,
    summary="Update a farm project",
    description="Change the name, location, description or grid size. Plots are not moved when the grid shrinks.",
    responses=NOT_FOUND_RESPONSES,
)
async def update_farm(
    farm_id: FarmId,
    request: UpdateFarmRequest,
    service: FarmServiceDep,
) -> Farm:
    return service.update_farm(
        farm_id,
        name=request.name,
        location=request.location,
        description=request.description,
        grid_size=request.grid_size,
    )


@router.delete(
    "/farms/{farm_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a farm with its plots, paths and surveys",
    responses=NOT_FOUND_RESPONSES,
)
async def delete_farm(farm_id: FarmId, service: FarmServiceDep):
    service.delete_farm(farm_id)


@router.get(
    "/farms/{farm_id}/plots",
    response_model=List[Plot],
    summary="List plots on a farm",
    responses=NOT_FOUND_RESPONSES,
)
async def list_plots(farm_id: FarmId, service: FarmServiceDep) -> List[Plot]:
    return service.list_plots(farm_id)


@router.post(
    "/farms/{farm_id}/plots",
    response_model=Plot,
    status_code=status.HTTP_201_CREATED,
    summary="Add a plot at the next free position",
    description="""
    Create a plot and place it automatically on the farm's grid, keeping
    one free cell between plots when there is room.
    """,
    responses=NOT_FOUND_RESPONSES,
)
async def add_plot(
    farm_id: FarmId,
    request: CreatePlotRequest,
    service: FarmServiceDep,
) -> Plot:
    return service.add_plot(
        farm_id=farm_id,
        name=request.name,
        width=request.width,
        height=request.height,
        color=request.color,
    )


@router.delete(
    "/farms/{farm_id}/grid",
    response_model=ClearGridResponse,
    summary="Remove every plot and path from a farm",
    responses=NOT_FOUND_RESPONSES,
)
async def clear_grid(farm_id: FarmId, service: FarmServiceDep) -> ClearGridResponse:
    return ClearGridResponse(removed=service.clear_grid(farm_id))


@router.get(
    "/farms/{farm_id}/layout-issues",
    response_model=LayoutIssuesResponse,
    summary="Check a farm's layout for boundary and overlap problems",
    responses=NOT_FOUND_RESPONSES,
)
async def layout_issues(farm_id: FarmId, service: FarmServiceDep) -> LayoutIssuesResponse:
    return LayoutIssuesResponse(issues=[
        LayoutIssueResponse(kind=i.kind, plot_ids=list(i.plot_ids), message=i.message)
        for i in service.layout_issues(farm_id)
    ])


@router.put(
    "/plots/{plot_id}/position",
    response_model=MovePlotResponse,
    summary="Move a plot during a drag",
    responses=NOT_FOUND_RESPONSES,
)
async def move_plot(
    plot_id: Annotated[str, Path(description="Unique identifier for the plot")],
    request: MovePlotRequest,
    service: FarmServiceDep,
) -> MovePlotResponse:
    plot, moved = service.move_plot(plot_id, request.raw_x, request.raw_y)
    return MovePlotResponse(moved=moved, plot=plot)


@router.put(
    "/plots/{plot_id}",
    response_model=Plot,
    summary="Rename, recolor or resize a plot",
    responses=NOT_FOUND_RESPONSES,
)
async def update_plot(
    plot_id: Annotated[str, Path(description="Unique identifier for the plot")],
    request: UpdatePlotRequest,
    service: FarmServiceDep,
) -> Plot:
    return service.update_plot(
        plot_id,
        name=request.name,
        color=request.color,
        width=request.width,
        height=request.height,
    )


@router.delete(
    "/plots/{plot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a plot",
    responses=NOT_FOUND_RESPONSES,
)
async def delete_plot(
    plot_id: Annotated[str, Path(description="Unique identifier for the plot")],
    service: FarmServiceDep,
):
    service.delete_plot(plot_id)


@router.get(
    "/farms/{farm_id}/paths",
    response_model=List[WalkingPath],
    summary="List walking paths on a farm",
    responses=NOT_FOUND_RESPONSES,
)
async def list_paths(farm_id: FarmId, service: FarmServiceDep) -> List[WalkingPath]:
    return service.list_paths(farm_id)


@router.post(
    "/farms/{farm_id}/paths",
    response_model=WalkingPath,
    status_code=status.HTTP_201_CREATED,
    summary="Add a walking path",
    description="Points outside the grid are clamped onto its edge. At least 2 points are required.",
    responses=NOT_FOUND_RESPONSES,
)
async def add_path(
    farm_id: FarmId,
    request: CreatePathRequest,
    service: FarmServiceDep,
) -> WalkingPath:
    return service.add_path(
        farm_id=farm_id,
        name=request.name,
        points=request.points,
        color=request.color,
        width=request.width,
    )


@router.put(
    "/paths/{path_id}",
    response_model=WalkingPath,
    summary="Update a walking path",
    responses=NOT_FOUND_RESPONSES,
)
async def update_path(
    path_id: Annotated[str, Path(description="Unique identifier for the path")],
    request: UpdatePathRequest,
    service: FarmServiceDep,
) -> WalkingPath:
    return service.update_path(
        path_id,
        name=request.name,
        points=request.points,
        color=request.color,
        width=request.width,
    )


@router.delete(
    "/paths/{path_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a walking path",
    responses=NOT_FOUND_RESPONSES,
)
async def delete_path(
    path_id: Annotated[str, Path(description="Unique identifier for the path")],
    service: FarmServiceDep,
):
    service.delete_path(path_id)

"""
API router for seasonal baseline data endpoints.
"""
from fastapi import APIRouter, Path, status
from typing import Annotated, List

from farm_planner.api.dependencies import FarmServiceDep
from farm_planner.api.v1.models.requests import SeasonalDataRequest, UpdateSeasonalDataRequest
from farm_planner.api.v1.models.responses import NOT_FOUND_RESPONSES
from farm_planner.domain.models import SeasonalData


router = APIRouter(tags=["seasonal-data"])

RecordId = Annotated[str, Path(description="Unique identifier for the seasonal record")]


@router.get(
    "/farms/{farm_id}/seasonal-data",
    response_model=List[SeasonalData],
    summary="List seasonal records for a farm",
    responses=NOT_FOUND_RESPONSES,
)
async def list_seasonal_data(
    farm_id: Annotated[str, Path(description="Unique identifier for the farm")],
    service: FarmServiceDep,
) -> List[SeasonalData]:
    return service.list_seasonal_data(farm_id)


@router.post(
    "/farms/{farm_id}/seasonal-data",
    response_model=SeasonalData,
    status_code=status.HTTP_201_CREATED,
    summary="Record a past growing season",
    description="""
    Store crop, input and yield figures for one season.

    - `land_area_square_meters` is derived from `land_area_acres` with the
      same acre constant used for boundary surveys
    - `productivity_kgs_per_acre` and `productivity_kgs_per_square_meter`
      are derived when a yield and a positive land area are given
    """,
    responses=NOT_FOUND_RESPONSES,
)
async def create_seasonal_data(
    farm_id: Annotated[str, Path(description="Unique identifier for the farm")],
    request: SeasonalDataRequest,
    service: FarmServiceDep,
) -> SeasonalData:
    return service.create_seasonal_data(farm_id, request.model_dump())


@router.get(
    "/seasonal-data/{record_id}",
    response_model=SeasonalData,
    summary="Get a seasonal record",
    responses=NOT_FOUND_RESPONSES,
)
async def get_seasonal_data(record_id: RecordId, service: FarmServiceDep) -> SeasonalData:
    return service.get_seasonal_data(record_id)


@router.put(
    "/seasonal-data/{record_id}",
    response_model=SeasonalData,
    summary="Update a seasonal record",
    description="Only the fields sent are changed. Derived fields are recomputed.",
    responses=NOT_FOUND_RESPONSES,
)
async def update_seasonal_data(
    record_id: RecordId,
    request: UpdateSeasonalDataRequest,
    service: FarmServiceDep,
) -> SeasonalData:
    return service.update_seasonal_data(record_id, request.model_dump(exclude_unset=True))


@router.delete(
    "/seasonal-data/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a seasonal record",
    responses=NOT_FOUND_RESPONSES,
)
async def delete_seasonal_data(record_id: RecordId, service: FarmServiceDep):
    service.delete_seasonal_data(record_id)

"""
API router for boundary survey endpoints.
"""
from fastapi import APIRouter, Path, status
from typing import Annotated, Any, List

from farm_planner.api.dependencies import BoundarySurveyorDep, FarmServiceDep
from farm_planner.api.v1.models.requests import BoundaryPointInput, MeasureRequest
from farm_planner.api.v1.models.responses import (
    ERROR_RESPONSES,
    NOT_FOUND_RESPONSES,
    SurveySessionResponse,
)
from farm_planner.domain.models import BoundaryPoint, FieldMeasurement
from farm_planner.services.domain.boundary_surveyor import SurveySession


router = APIRouter(tags=["surveys"])

FarmId = Annotated[str, Path(description="Unique identifier for the farm")]
SurveyId = Annotated[str, Path(description="Unique identifier for the survey")]


def _session_response(session: SurveySession) -> SurveySessionResponse:
    return SurveySessionResponse(
        id=session.id,
        farm_id=session.farm_id,
        status=session.status.value,
        points=list(session.points),
    )


@router.post(
    "/surveys/measure",
    response_model=FieldMeasurement,
    summary="Measure a field boundary",
    description="""
    Compute the area and perimeter of a closed boundary from ordered GPS
    points. The last point connects back to the first.

    - Area: shoelace formula on a local planar projection centred on the
      mean point, reported in square meters and acres
    - Perimeter: sum of haversine distances along the closed boundary
    - Geodesic area: WGS84 ellipsoidal area, for comparison

    At least 3 points are required.
    """,
    responses=ERROR_RESPONSES,
)
async def measure_boundary(
    request: MeasureRequest,
    surveyor: BoundarySurveyorDep,
) -> FieldMeasurement:
    points = [
        BoundaryPoint(
            latitude=p.latitude,
            longitude=p.longitude,
            accuracy=p.accuracy,
            order=i,
        )
        for i, p in enumerate(request.points)
    ]
    return surveyor.measure(points, label=request.label)


@router.post(
    "/farms/{farm_id}/surveys",
    response_model=SurveySessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start walking a field boundary",
    responses=NOT_FOUND_RESPONSES,
)
async def start_survey(farm_id: FarmId, service: FarmServiceDep) -> SurveySessionResponse:
    return _session_response(service.start_survey(farm_id))


@router.post(
    "/surveys/{survey_id}/points",
    response_model=SurveySessionResponse,
    summary="Record the next boundary corner",
    responses=NOT_FOUND_RESPONSES,
)
async def add_survey_point(
    survey_id: SurveyId,
    point: BoundaryPointInput,
    service: FarmServiceDep,
) -> SurveySessionResponse:
    session = service.add_survey_point(
        survey_id, point.latitude, point.longitude, point.accuracy
    )
    return _session_response(session)


@router.post(
    "/surveys/{survey_id}/complete",
    response_model=FieldMeasurement,
    summary="Finish a boundary walk and store its measurement",
    responses=NOT_FOUND_RESPONSES,
)
async def complete_survey(survey_id: SurveyId, service: FarmServiceDep) -> FieldMeasurement:
    return service.complete_survey(survey_id)


@router.delete(
    "/surveys/{survey_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel a boundary walk",
    responses=NOT_FOUND_RESPONSES,
)
async def cancel_survey(survey_id: SurveyId, service: FarmServiceDep):
    service.cancel_survey(survey_id)


@router.get(
    "/farms/{farm_id}/measurements",
    response_model=List[FieldMeasurement],
    summary="List finalized field measurements",
    responses=NOT_FOUND_RESPONSES,
)
async def list_measurements(farm_id: FarmId, service: FarmServiceDep) -> List[FieldMeasurement]:
    return service.list_measurements(farm_id)


@router.get(
    "/farms/{farm_id}/surveys/export",
    summary="Export field measurements as a JSON report",
    responses=NOT_FOUND_RESPONSES,
)
async def export_surveys(farm_id: FarmId, service: FarmServiceDep) -> dict[str, Any]:
    return service.export_surveys(farm_id)

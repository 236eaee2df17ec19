"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from farm_planner.infrastructure.farm_store import FarmStore, get_farm_store
from farm_planner.services.domain.boundary_surveyor import BoundarySurveyor
from farm_planner.services.domain.plot_layout_engine import PlotLayoutEngine
from farm_planner.services.domain.productivity_calculator import ProductivityCalculator
from farm_planner.services.application.farm_service import FarmLayoutService


def get_layout_engine() -> PlotLayoutEngine:
    """
    Dependency factory for PlotLayoutEngine.

    Returns:
        PlotLayoutEngine instance
    """
    return PlotLayoutEngine()


def get_boundary_surveyor() -> BoundarySurveyor:
    """
    Dependency factory for BoundarySurveyor.

    Returns:
        BoundarySurveyor instance
    """
    return BoundarySurveyor()


def get_productivity_calculator() -> ProductivityCalculator:
    """
    Dependency factory for ProductivityCalculator.

    Returns:
        ProductivityCalculator instance
    """
    return ProductivityCalculator()


def get_farm_service(
    store: Annotated[FarmStore, Depends(get_farm_store)],
    engine: Annotated[PlotLayoutEngine, Depends(get_layout_engine)],
    surveyor: Annotated[BoundarySurveyor, Depends(get_boundary_surveyor)],
    calculator: Annotated[ProductivityCalculator, Depends(get_productivity_calculator)],
) -> FarmLayoutService:
    """
    Dependency factory for FarmLayoutService.

    Args:
        store: Farm record store (injected)
        engine: Plot layout engine (injected)
        surveyor: Boundary surveyor (injected)
        calculator: Seasonal productivity calculator (injected)

    Returns:
        FarmLayoutService instance
    """
    return FarmLayoutService(
        store=store,
        engine=engine,
        surveyor=surveyor,
        calculator=calculator,
    )


# Type aliases for cleaner route signatures
LayoutEngineDep = Annotated[PlotLayoutEngine, Depends(get_layout_engine)]
BoundarySurveyorDep = Annotated[BoundarySurveyor, Depends(get_boundary_surveyor)]
FarmServiceDep = Annotated[FarmLayoutService, Depends(get_farm_service)]

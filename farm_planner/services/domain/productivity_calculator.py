"""
Domain service: Land area conversion and yield productivity for seasonal records.
"""
from typing import Optional
import logging

from farm_planner.domain.models import SeasonalData
from farm_planner.config import settings

logger = logging.getLogger(__name__)


class ProductivityCalculator:
    """
    Derives square meters and yield per unit area from a seasonal record.

    Land area is entered in acres; square meters are always derived from
    the same acre constant the boundary surveyor reports with, so the two
    units never disagree.
    """

    def __init__(self, acre_square_meters: Optional[float] = None):
        """
        Initialize the calculator.

        Args:
            acre_square_meters: Square meters per acre (defaults to settings)
        """
        self.acre_square_meters = acre_square_meters or settings.acre_square_meters

    def to_square_meters(self, acres: float) -> float:
        return acres * self.acre_square_meters

    def apply(self, record: SeasonalData) -> SeasonalData:
        """
        Fill in the derived area and productivity fields.

        Productivity is only defined when both a yield and a positive land
        area are present; otherwise it is cleared.

        Args:
            record: Seasonal record with acres and optional yield

        Returns:
            Copy of the record with derived fields set
        """
        square_meters = self.to_square_meters(record.land_area_acres)

        per_acre = per_square_meter = None
        if record.yield_kgs is not None and record.land_area_acres > 0:
            per_acre = record.yield_kgs / record.land_area_acres
            per_square_meter = record.yield_kgs / square_meters
            logger.debug(f"Seasonal record {record.id}: {per_acre:.2f} kg/acre "
                         f"over {record.land_area_acres} acres")

        return record.model_copy(update={
            "land_area_square_meters": round(square_meters, 2),
            "productivity_kgs_per_acre": per_acre,
            "productivity_kgs_per_square_meter": per_square_meter,
        })

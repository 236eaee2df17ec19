"""
Infrastructure layer: In-memory store for farms, plots, paths and surveys.
"""
from typing import Dict, List, Optional
import logging
import uuid

from farm_planner.domain.models import Farm, FieldMeasurement, Plot, SeasonalData, WalkingPath
from farm_planner.services.domain.boundary_surveyor import SurveySession

logger = logging.getLogger(__name__)


class RecordNotFoundError(Exception):
    """Raised when a requested record does not exist."""

    def __init__(self, message: str, status_code: int = 404):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def new_id() -> str:
    return uuid.uuid4().hex[:9]


class FarmStore:
    """
    Process-local store for farm layout records.

    Records are kept in insertion order, which is the order placement scans
    see existing plots in. Writes are last-write-wins.
    """

    def __init__(self):
        """Initialize empty collections."""
        self.farms: Dict[str, Farm] = {}
        self.plots: Dict[str, Plot] = {}
        self.paths: Dict[str, WalkingPath] = {}
        self.surveys: Dict[str, SurveySession] = {}
        self.measurements: Dict[str, List[FieldMeasurement]] = {}
        self.seasonal_data: Dict[str, SeasonalData] = {}

    # Farms

    def add_farm(self, farm: Farm) -> Farm:
        self.farms[farm.id] = farm
        self.measurements.setdefault(farm.id, [])
        return farm

    def save_farm(self, farm: Farm) -> Farm:
        self.farms[farm.id] = farm
        return farm

    def get_farm(self, farm_id: str) -> Farm:
        """
        Fetch a farm by id.

        Raises:
            RecordNotFoundError: If the farm does not exist
        """
        farm = self.farms.get(farm_id)
        if farm is None:
            raise RecordNotFoundError(f"Farm '{farm_id}' not found")
        return farm

    def list_farms(self) -> List[Farm]:
        return list(self.farms.values())

    def delete_farm(self, farm_id: str):
        """Delete a farm together with everything it owns."""
        self.get_farm(farm_id)
        self.clear_grid(farm_id)
        for session_id in [s.id for s in self.surveys.values() if s.farm_id == farm_id]:
            del self.surveys[session_id]
        self.measurements.pop(farm_id, None)
        for record_id in [r.id for r in self.seasonal_data.values() if r.farm_id == farm_id]:
            del self.seasonal_data[record_id]
        del self.farms[farm_id]
        logger.info(f"Deleted farm {farm_id}")

    def clear_grid(self, farm_id: str) -> int:
        """Remove every plot and path on a farm, returning how many were removed."""
        plot_ids = [p.id for p in self.plots.values() if p.farm_id == farm_id]
        path_ids = [p.id for p in self.paths.values() if p.farm_id == farm_id]
        for plot_id in plot_ids:
            del self.plots[plot_id]
        for path_id in path_ids:
            del self.paths[path_id]
        return len(plot_ids) + len(path_ids)

    # Plots

    def save_plot(self, plot: Plot) -> Plot:
        self.plots[plot.id] = plot
        return plot

    def get_plot(self, plot_id: str) -> Plot:
        plot = self.plots.get(plot_id)
        if plot is None:
            raise RecordNotFoundError(f"Plot '{plot_id}' not found")
        return plot

    def plots_for_farm(self, farm_id: str) -> List[Plot]:
        return [p for p in self.plots.values() if p.farm_id == farm_id]

    def delete_plot(self, plot_id: str):
        self.get_plot(plot_id)
        del self.plots[plot_id]

    # Paths

    def save_path(self, path: WalkingPath) -> WalkingPath:
        self.paths[path.id] = path
        return path

    def get_path(self, path_id: str) -> WalkingPath:
        path = self.paths.get(path_id)
        if path is None:
            raise RecordNotFoundError(f"Path '{path_id}' not found")
        return path

    def paths_for_farm(self, farm_id: str) -> List[WalkingPath]:
        return [p for p in self.paths.values() if p.farm_id == farm_id]

    def delete_path(self, path_id: str):
        self.get_path(path_id)
        del self.paths[path_id]

    # Surveys

    def add_survey(self, session: SurveySession) -> SurveySession:
        self.surveys[session.id] = session
        return session

    def get_survey(self, survey_id: str) -> SurveySession:
        session = self.surveys.get(survey_id)
        if session is None:
            raise RecordNotFoundError(f"Survey '{survey_id}' not found")
        return session

    def remove_survey(self, survey_id: str):
        self.surveys.pop(survey_id, None)

    def add_measurement(self, farm_id: str, measurement: FieldMeasurement) -> FieldMeasurement:
        self.measurements.setdefault(farm_id, []).append(measurement)
        return measurement

    def measurements_for_farm(self, farm_id: str) -> List[FieldMeasurement]:
        return list(self.measurements.get(farm_id, []))

    # Seasonal data

    def save_seasonal_data(self, record: SeasonalData) -> SeasonalData:
        self.seasonal_data[record.id] = record
        return record

    def get_seasonal_data(self, record_id: str) -> SeasonalData:
        record = self.seasonal_data.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"Seasonal data '{record_id}' not found")
        return record

    def seasonal_data_for_farm(self, farm_id: str) -> List[SeasonalData]:
        return [r for r in self.seasonal_data.values() if r.farm_id == farm_id]

    def delete_seasonal_data(self, record_id: str):
        self.get_seasonal_data(record_id)
        del self.seasonal_data[record_id]


# Singleton instance
_farm_store: Optional[FarmStore] = None


def get_farm_store() -> FarmStore:
    """
    Get or create the singleton store instance.

    Returns:
        FarmStore instance
    """
    global _farm_store
    if _farm_store is None:
        _farm_store = FarmStore()
    return _farm_store

"""
Application service: Orchestration layer for farm layout operations.
"""
from typing import Any, List, Optional, Sequence, Tuple
import logging

from farm_planner.config import settings
from farm_planner.domain.models import (
    Farm,
    FieldMeasurement,
    Grid,
    GridPosition,
    GridSizePreset,
    PathColor,
    Plot,
    PlotColor,
    SeasonalData,
    WalkingPath,
    utc_now,
)
from farm_planner.infrastructure.farm_store import FarmStore, new_id
from farm_planner.services.domain.boundary_surveyor import BoundarySurveyor, SurveySession
from farm_planner.services.domain.plot_layout_engine import (
    InvalidDimensionError,
    LayoutIssue,
    PlotLayoutEngine,
)
from farm_planner.services.domain.productivity_calculator import ProductivityCalculator
from farm_planner.utils.spatial_helpers import clamp

logger = logging.getLogger(__name__)


class FarmLayoutService:
    """
    Application service for farm layout and survey operations.

    Coordinates the store with the layout engine and the boundary surveyor.
    No geometry lives here.
    """

    def __init__(
        self,
        store: FarmStore,
        engine: PlotLayoutEngine,
        surveyor: BoundarySurveyor,
        calculator: Optional[ProductivityCalculator] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            store: Farm record store
            engine: Plot layout engine
            surveyor: Boundary surveyor
            calculator: Seasonal productivity calculator (defaults to the
                surveyor's acre constant)
        """
        self.store = store
        self.engine = engine
        self.surveyor = surveyor
        self.calculator = calculator or ProductivityCalculator(surveyor.acre_square_meters)

    def grid_for(self, farm: Farm) -> Grid:
        return Grid.from_preset(farm.grid_size, boundary_margin=settings.boundary_margin)

    # Farms

    def create_farm(
        self,
        name: str,
        location: str = "",
        description: Optional[str] = None,
        grid_size: Optional[GridSizePreset] = None,
    ) -> Farm:
        farm = Farm(
            id=new_id(),
            name=name,
            location=location,
            description=description,
            grid_size=grid_size or GridSizePreset(settings.default_grid_size),
        )
        logger.info(f"Created farm {farm.id} ({farm.name}) with {farm.grid_size.value} grid")
        return self.store.add_farm(farm)

    def get_farm(self, farm_id: str) -> Farm:
        return self.store.get_farm(farm_id)

    def list_farms(self) -> List[Farm]:
        return self.store.list_farms()

    def update_farm(
        self,
        farm_id: str,
        name: Optional[str] = None,
        location: Optional[str] = None,
        description: Optional[str] = None,
        grid_size: Optional[GridSizePreset] = None,
    ) -> Farm:
        """
        Change a farm's details.

        Shrinking the grid never moves plots; plots left past the new
        margins show up in layout_issues.
        """
        farm = self.store.get_farm(farm_id)
        changes = {
            key: value for key, value in {
                "name": name,
                "location": location,
                "description": description,
                "grid_size": grid_size,
            }.items()
            if value is not None
        }
        updated = Farm.model_validate({**farm.model_dump(), **changes})
        logger.info(f"Updated farm {farm_id}: {sorted(changes)}")
        return self.store.save_farm(updated)

    def delete_farm(self, farm_id: str):
        self.store.delete_farm(farm_id)

    # Plots

    def list_plots(self, farm_id: str) -> List[Plot]:
        self.store.get_farm(farm_id)
        return self.store.plots_for_farm(farm_id)

    def add_plot(
        self,
        farm_id: str,
        name: str,
        width: int,
        height: int,
        color: PlotColor = PlotColor.GREEN,
    ) -> Plot:
        """
        Create a plot at the next free position on the farm's grid.

        Args:
            farm_id: Farm to add the plot to
            name: Plot name
            width: Plot width in cells
            height: Plot height in cells
            color: Display color

        Returns:
            The stored plot

        Raises:
            RecordNotFoundError: If the farm does not exist
            InvalidDimensionError: If width or height is not positive
        """
        farm = self.store.get_farm(farm_id)
        existing = self.store.plots_for_farm(farm_id)

        position = self.engine.find_placement(existing, width, height, self.grid_for(farm))

        plot = Plot(
            id=new_id(),
            farm_id=farm_id,
            name=name,
            x=position.x,
            y=position.y,
            width=width,
            height=height,
            color=color,
        )
        return self.store.save_plot(plot)

    def move_plot(self, plot_id: str, raw_x: float, raw_y: float) -> Tuple[Plot, bool]:
        """
        Apply one drag movement to a stored plot.

        Returns:
            Tuple of (plot after the move, whether it moved)
        """
        plot = self.store.get_plot(plot_id)
        farm = self.store.get_farm(plot.farm_id)
        others = [p for p in self.store.plots_for_farm(farm.id) if p.id != plot_id]

        position = self.engine.constrain_drag(plot, raw_x, raw_y, self.grid_for(farm), others)
        if position is None:
            return plot, False

        moved = plot.model_copy(update={"x": position.x, "y": position.y})
        logger.debug(f"Moved plot {plot_id} from ({plot.x}, {plot.y}) to ({moved.x}, {moved.y})")
        return self.store.save_plot(moved), True

    def update_plot(
        self,
        plot_id: str,
        name: Optional[str] = None,
        color: Optional[PlotColor] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Plot:
        """
        Rename, recolor or resize a plot in place.

        The position is unchanged; use move_plot to reposition. A resize
        that crosses the margins or another plot is stored and reported by
        layout_issues.

        Raises:
            RecordNotFoundError: If the plot does not exist
            InvalidDimensionError: If width or height is not positive
        """
        plot = self.store.get_plot(plot_id)
        if (width is not None and width <= 0) or (height is not None and height <= 0):
            raise InvalidDimensionError(
                f"Plot dimensions must be positive, got {width}x{height}"
            )

        changes = {
            key: value for key, value in {
                "name": name,
                "color": color,
                "width": width,
                "height": height,
            }.items()
            if value is not None
        }
        updated = Plot.model_validate({**plot.model_dump(), **changes})
        return self.store.save_plot(updated)

    def delete_plot(self, plot_id: str):
        self.store.delete_plot(plot_id)

    def clear_grid(self, farm_id: str) -> int:
        self.store.get_farm(farm_id)
        removed = self.store.clear_grid(farm_id)
        logger.info(f"Cleared {removed} plots and paths from farm {farm_id}")
        return removed

    def layout_issues(self, farm_id: str) -> List[LayoutIssue]:
        farm = self.store.get_farm(farm_id)
        return self.engine.validate_layout(self.store.plots_for_farm(farm_id), self.grid_for(farm))

    # Paths

    def add_path(
        self,
        farm_id: str,
        name: str,
        points: Sequence[GridPosition],
        color: PathColor = PathColor.BROWN,
        width: int = 2,
    ) -> WalkingPath:
        """
        Store a walking path, clamping its points onto the grid.

        Raises:
            RecordNotFoundError: If the farm does not exist
            ValueError: If fewer than 2 points are given
        """
        farm = self.store.get_farm(farm_id)
        path = WalkingPath(
            id=new_id(),
            farm_id=farm_id,
            name=name,
            points=self._clamp_path_points(points, self.grid_for(farm)),
            color=color,
            width=width,
        )
        return self.store.save_path(path)

    def update_path(
        self,
        path_id: str,
        name: Optional[str] = None,
        points: Optional[Sequence[GridPosition]] = None,
        color: Optional[PathColor] = None,
        width: Optional[int] = None,
    ) -> WalkingPath:
        """
        Change a walking path. New points are clamped like add_path.

        Raises:
            RecordNotFoundError: If the path does not exist
            ValueError: If fewer than 2 points or a non-positive width are given
        """
        path = self.store.get_path(path_id)
        if width is not None and width < 1:
            raise ValueError(f"Path width must be at least 1, got {width}")

        changes = {
            key: value for key, value in {
                "name": name,
                "color": color,
                "width": width,
            }.items()
            if value is not None
        }
        if points is not None:
            farm = self.store.get_farm(path.farm_id)
            changes["points"] = self._clamp_path_points(points, self.grid_for(farm))

        updated = path.model_copy(update=changes)
        return self.store.save_path(updated)

    @staticmethod
    def _clamp_path_points(points: Sequence[GridPosition], grid: Grid) -> List[GridPosition]:
        if len(points) < 2:
            raise ValueError("A path needs at least 2 points")
        return [
            GridPosition(
                x=int(clamp(p.x, 0, grid.width - 1)),
                y=int(clamp(p.y, 0, grid.height - 1)),
            )
            for p in points
        ]

    def list_paths(self, farm_id: str) -> List[WalkingPath]:
        self.store.get_farm(farm_id)
        return self.store.paths_for_farm(farm_id)

    def delete_path(self, path_id: str):
        self.store.delete_path(path_id)

    # Surveys

    def start_survey(self, farm_id: str) -> SurveySession:
        self.store.get_farm(farm_id)
        session = self.store.add_survey(SurveySession(farm_id=farm_id))
        logger.info(f"Started boundary survey {session.id} on farm {farm_id}")
        return session

    def add_survey_point(
        self,
        survey_id: str,
        latitude: float,
        longitude: float,
        accuracy: Optional[float] = None,
    ) -> SurveySession:
        session = self.store.get_survey(survey_id)
        session.add_point(latitude, longitude, accuracy)
        return session

    def complete_survey(self, survey_id: str) -> FieldMeasurement:
        """
        Finalize a survey and store the measurement on its farm.

        Finished surveys are dropped from the store; the measurement is what
        remains. A survey with too few points stays open.

        Raises:
            RecordNotFoundError: If the survey is unknown or already finished
            InsufficientPointsError: If fewer than 3 points were recorded
        """
        session = self.store.get_survey(survey_id)
        count = len(self.store.measurements_for_farm(session.farm_id))
        measurement = session.complete(self.surveyor, label=f"Field Survey {count + 1}")
        self.store.remove_survey(survey_id)
        return self.store.add_measurement(session.farm_id, measurement)

    def cancel_survey(self, survey_id: str):
        self.store.get_survey(survey_id).cancel()
        self.store.remove_survey(survey_id)
        logger.info(f"Cancelled boundary survey {survey_id}")

    def list_measurements(self, farm_id: str) -> List[FieldMeasurement]:
        self.store.get_farm(farm_id)
        return self.store.measurements_for_farm(farm_id)

    def export_surveys(self, farm_id: str) -> dict[str, Any]:
        return self.surveyor.build_report(farm_id, self.list_measurements(farm_id))

    # Seasonal data

    def list_seasonal_data(self, farm_id: str) -> List[SeasonalData]:
        self.store.get_farm(farm_id)
        return self.store.seasonal_data_for_farm(farm_id)

    def get_seasonal_data(self, record_id: str) -> SeasonalData:
        return self.store.get_seasonal_data(record_id)

    def create_seasonal_data(self, farm_id: str, fields: dict[str, Any]) -> SeasonalData:
        """
        Record a past season on a farm, deriving area and productivity.

        Args:
            farm_id: Farm the season belongs to
            fields: Season attributes (season name, year, crop, acres, inputs, yield)

        Returns:
            The stored record

        Raises:
            RecordNotFoundError: If the farm does not exist
        """
        self.store.get_farm(farm_id)
        record = SeasonalData.model_validate({**fields, "id": new_id(), "farm_id": farm_id})
        record = self.calculator.apply(record)
        logger.info(f"Recorded {record.season_name} {record.year} ({record.crop_grown}) "
                    f"on farm {farm_id}")
        return self.store.save_seasonal_data(record)

    def update_seasonal_data(self, record_id: str, changes: dict[str, Any]) -> SeasonalData:
        """
        Apply a partial update and recompute derived fields.

        Raises:
            RecordNotFoundError: If the record does not exist
        """
        record = self.store.get_seasonal_data(record_id)
        merged = SeasonalData.model_validate({
            **record.model_dump(),
            **changes,
            "id": record.id,
            "farm_id": record.farm_id,
            "updated_at": utc_now(),
        })
        return self.store.save_seasonal_data(self.calculator.apply(merged))

    def delete_seasonal_data(self, record_id: str):
        self.store.delete_seasonal_data(record_id)

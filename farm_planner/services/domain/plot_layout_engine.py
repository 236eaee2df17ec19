"""
Domain service: Plot placement and drag constraints on a bounded grid.

This module assigns non-overlapping positions to new plots and keeps
interactively dragged plots inside the farm boundary:
- Three-tier placement (spaced scan, dense scan, append-below fallback)
- One shared overlap predicate for every tier
- Clamp-and-snap drag handling with change detection
- Immutable drag sessions instead of ambient UI state
"""
from dataclasses import dataclass, replace
from typing import Optional, Sequence
import logging

from farm_planner.domain.models import Grid, GridPosition, PlotRectangle
from farm_planner.utils.spatial_helpers import (
    candidate_origins,
    clamp,
    placement_bounds,
    rectangles_overlap,
    round_half_up,
)
from farm_planner.config import settings

logger = logging.getLogger(__name__)


class InvalidDimensionError(ValueError):
    """Raised when a plot is requested with a non-positive width or height."""
    pass


@dataclass
class LayoutConfig:
    """Configuration for plot placement and dragging."""

    spacing: int = 1
    """Cells kept free between automatically placed plots"""

    drag_epsilon: float = 0.1
    """Minimum change in cells before a drag emits a new position"""

    allow_overlap_on_drag: bool = True
    """Whether a dragged plot may come to rest on top of another plot"""

    def __post_init__(self):
        if self.spacing < 0:
            raise ValueError(f"spacing must be non-negative, got {self.spacing}")
        if self.drag_epsilon < 0:
            raise ValueError(f"drag_epsilon must be non-negative, got {self.drag_epsilon}")


@dataclass(frozen=True)
class DragSession:
    """State of one drag gesture on a single plot."""
    plot_id: str
    original_position: GridPosition
    current_position: GridPosition


@dataclass(frozen=True)
class LayoutIssue:
    """A boundary or overlap problem found in an existing layout."""
    kind: str
    plot_ids: tuple[str, ...]
    message: str


class PlotLayoutEngine:
    """
    Domain service for placing and moving plots on a farm grid.

    Placement always returns some position: when the grid is too full for
    either scan, the plot is appended below everything else even if that
    runs past the grid edge.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Layout configuration (defaults come from settings)
        """
        self.config = config or LayoutConfig(
            spacing=settings.plot_spacing,
            drag_epsilon=settings.drag_epsilon,
            allow_overlap_on_drag=settings.allow_overlap_on_drag,
        )

    def find_placement(
        self,
        existing_plots: Sequence[PlotRectangle],
        new_width: int,
        new_height: int,
        grid: Grid,
    ) -> GridPosition:
        """
        Find a free position for a new plot.

        Args:
            existing_plots: Plots already on the grid
            new_width: Width of the new plot in cells
            new_height: Height of the new plot in cells
            grid: Grid bounds and boundary margin

        Returns:
            Top-left position for the new plot

        Raises:
            InvalidDimensionError: If width or height is not positive
        """
        if new_width <= 0 or new_height <= 0:
            raise InvalidDimensionError(
                f"Plot dimensions must be positive, got {new_width}x{new_height}"
            )

        spacing = self.config.spacing

        # Tier 1: evenly spaced origins, keeping a spacing buffer around plots
        position = self._scan(
            existing_plots, new_width, new_height, grid,
            step_x=new_width + spacing,
            step_y=new_height + spacing,
            buffer=spacing,
        )
        if position:
            logger.info(f"Placed {new_width}x{new_height} plot at ({position.x}, {position.y})")
            return position

        # Tier 2: every cell, plots may touch
        position = self._scan(
            existing_plots, new_width, new_height, grid,
            step_x=1,
            step_y=1,
            buffer=0,
        )
        if position:
            logger.info(f"Placed {new_width}x{new_height} plot at ({position.x}, {position.y}) "
                        f"using dense scan")
            return position

        # Tier 3: append below everything
        margin = grid.boundary_margin
        max_bottom = max((p.y + p.height for p in existing_plots), default=0)
        position = GridPosition(x=margin, y=max(margin, max_bottom + spacing))
        logger.warning(f"No free space for {new_width}x{new_height} plot on "
                       f"{grid.width}x{grid.height} grid, appending at ({position.x}, {position.y})")
        return position

    def _scan(
        self,
        existing_plots: Sequence[PlotRectangle],
        width: int,
        height: int,
        grid: Grid,
        step_x: int,
        step_y: int,
        buffer: int,
    ) -> Optional[GridPosition]:
        """
        Return the first row-major origin that clears every existing plot.

        Args:
            existing_plots: Plots already on the grid
            width: Width of the new plot
            height: Height of the new plot
            grid: Grid bounds
            step_x: Horizontal stride between candidates
            step_y: Vertical stride between candidates
            buffer: Spacing kept around existing plots

        Returns:
            First free position, or None if the region is full
        """
        checked = 0
        for x, y in candidate_origins(
            grid.width, grid.height, width, height,
            grid.boundary_margin, step_x, step_y,
        ):
            checked += 1
            if not any(
                rectangles_overlap(x, y, width, height, plot, buffer)
                for plot in existing_plots
            ):
                logger.debug(f"Scan (step {step_x}x{step_y}, buffer {buffer}) "
                             f"found ({x}, {y}) after {checked} candidates")
                return GridPosition(x=x, y=y)

        logger.debug(f"Scan (step {step_x}x{step_y}, buffer {buffer}) "
                     f"exhausted {checked} candidates")
        return None

    def constrain_drag(
        self,
        plot: PlotRectangle,
        raw_x: float,
        raw_y: float,
        grid: Grid,
        other_plots: Optional[Sequence[PlotRectangle]] = None,
    ) -> Optional[GridPosition]:
        """
        Snap a proposed drag position onto the grid.

        Args:
            plot: Plot being moved (its x/y is the current position)
            raw_x: Proposed left edge in fractional cells
            raw_y: Proposed top edge in fractional cells
            grid: Grid bounds and boundary margin
            other_plots: Plots to check against when overlaps are disallowed

        Returns:
            New position, or None if the plot should stay where it is
        """
        margin = grid.boundary_margin
        min_x, max_x = placement_bounds(grid.width, plot.width, margin)
        min_y, max_y = placement_bounds(grid.height, plot.height, margin)

        snapped_x = round_half_up(clamp(raw_x, min_x, max_x))
        snapped_y = round_half_up(clamp(raw_y, min_y, max_y))

        epsilon = self.config.drag_epsilon
        if abs(snapped_x - plot.x) <= epsilon and abs(snapped_y - plot.y) <= epsilon:
            return None

        if not self.config.allow_overlap_on_drag and other_plots:
            blocking = [
                other.id for other in other_plots
                if other.id != plot.id and rectangles_overlap(
                    snapped_x, snapped_y, plot.width, plot.height, other
                )
            ]
            if blocking:
                logger.warning(f"Drag of plot {plot.id} to ({snapped_x}, {snapped_y}) "
                               f"blocked by {blocking}")
                return None

        return GridPosition(x=snapped_x, y=snapped_y)

    def begin_drag(self, plot: PlotRectangle) -> DragSession:
        """Start a drag gesture at the plot's current position."""
        return DragSession(
            plot_id=plot.id,
            original_position=plot.position,
            current_position=plot.position,
        )

    def update_drag(
        self,
        session: DragSession,
        plot: PlotRectangle,
        raw_x: float,
        raw_y: float,
        grid: Grid,
        other_plots: Optional[Sequence[PlotRectangle]] = None,
    ) -> tuple[DragSession, Optional[GridPosition]]:
        """
        Feed one pointer movement into a drag session.

        The session's current position is used as the plot's location, so
        callers need not update the plot between events.

        Returns:
            Tuple of (updated session, emitted position or None)
        """
        if session.plot_id != plot.id:
            raise ValueError(f"Drag session belongs to plot {session.plot_id}, not {plot.id}")

        current = plot.model_copy(update={
            "x": session.current_position.x,
            "y": session.current_position.y,
        })
        position = self.constrain_drag(current, raw_x, raw_y, grid, other_plots)
        if position is None:
            return session, None

        return replace(session, current_position=position), position

    def end_drag(self, session: DragSession) -> GridPosition:
        """Finish a drag gesture, returning where the plot came to rest."""
        return session.current_position

    def cancel_drag(self, session: DragSession) -> GridPosition:
        """Abandon a drag gesture, returning the plot's starting position."""
        return session.original_position

    def validate_layout(
        self,
        plots: Sequence[PlotRectangle],
        grid: Grid,
    ) -> list[LayoutIssue]:
        """
        Report plots outside the margins and pairs of overlapping plots.

        Args:
            plots: Plots on the grid
            grid: Grid bounds and boundary margin

        Returns:
            List of issues, empty when the layout is clean
        """
        issues = []
        margin = grid.boundary_margin

        for plot in plots:
            min_x, max_x = placement_bounds(grid.width, plot.width, margin)
            min_y, max_y = placement_bounds(grid.height, plot.height, margin)
            if not (min_x <= plot.x <= max_x and min_y <= plot.y <= max_y):
                issues.append(LayoutIssue(
                    kind="out_of_bounds",
                    plot_ids=(plot.id,),
                    message=f"Plot {plot.id} at ({plot.x}, {plot.y}) extends past the boundary margin",
                ))

        for i, first in enumerate(plots):
            for second in plots[i + 1:]:
                if rectangles_overlap(first.x, first.y, first.width, first.height, second):
                    issues.append(LayoutIssue(
                        kind="overlap",
                        plot_ids=(first.id, second.id),
                        message=f"Plots {first.id} and {second.id} overlap",
                    ))

        if issues:
            logger.info(f"Layout validation found {len(issues)} issues across {len(plots)} plots")
        return issues

"""
Grid helper functions for plot placement.

Provides utilities for:
- Rectangle overlap testing with an optional spacing buffer
- Clamping and rounding continuous positions onto the grid
- Enumerating candidate origins inside the margin-bounded region
"""
import math
from typing import Iterator, Protocol


class Rect(Protocol):
    x: int
    y: int
    width: int
    height: int


def rectangles_overlap(
    x: float,
    y: float,
    width: float,
    height: float,
    other: Rect,
    buffer: float = 0,
) -> bool:
    """
    Check whether a rectangle overlaps another, expanded by a buffer.

    The other rectangle is grown by `buffer` cells on every side. Edges that
    touch after buffering do not count as an overlap.

    Args:
        x: Left edge of the first rectangle
        y: Top edge of the first rectangle
        width: Width of the first rectangle
        height: Height of the first rectangle
        other: Rectangle to test against
        buffer: Spacing kept around `other`

    Returns:
        True if the rectangles overlap, False otherwise
    """
    other_right = other.x + other.width
    other_bottom = other.y + other.height
    return not (
        x >= other_right + buffer or
        x + width <= other.x - buffer or
        y >= other_bottom + buffer or
        y + height <= other.y - buffer
    )


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a value into [lower, upper]; `lower` wins if the range is empty."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up."""
    return math.floor(value + 0.5)


def placement_bounds(grid_extent: int, dimension: int, margin: int) -> tuple[int, int]:
    """
    Inclusive range of origins that keep a rectangle inside the margins.

    Args:
        grid_extent: Grid width or height in cells
        dimension: Rectangle width or height in cells
        margin: Boundary margin in cells

    Returns:
        (lowest, highest) origin; highest < lowest when nothing fits
    """
    return margin, grid_extent - dimension - margin


def candidate_origins(
    grid_width: int,
    grid_height: int,
    width: int,
    height: int,
    margin: int,
    step_x: int = 1,
    step_y: int = 1,
) -> Iterator[tuple[int, int]]:
    """
    Yield candidate (x, y) origins in row-major order.

    The outer loop walks y, the inner loop walks x, both starting at the
    margin and stepping by the given strides.
    """
    min_x, max_x = placement_bounds(grid_width, width, margin)
    min_y, max_y = placement_bounds(grid_height, height, margin)
    for y in range(min_y, max_y + 1, step_y):
        for x in range(min_x, max_x + 1, step_x):
            yield x, y

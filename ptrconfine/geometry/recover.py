"""Relocate a pointer found outside its confinement region"""

from __future__ import annotations

import logging
from typing import Optional

from ptrconfine.common.settings import settings
from ptrconfine.common.types import Border, MotionDirection, Point
from ptrconfine.geometry.outline import Outline, outline_extract
from ptrconfine.geometry.region import Region

logger = logging.getLogger(__name__)


def nearestBorder_find(outline: Outline, point: Point) -> Optional[Border]:
    """
    Find the border closest to a point

    Args:
        outline: Borders to search
        point: Probe point in outline coordinates

    Returns:
        Border with the smallest point-to-segment distance, first one on ties
    """
    closest_border: Optional[Border] = None
    closest_distance_2 = float("inf")

    for border in outline:
        distance_2 = border.distanceSquared_get(point)
        if distance_2 < closest_distance_2:
            closest_border = border
            closest_distance_2 = distance_2

    return closest_border


def pointBehindBorder_get(border: Border, point: Point, step: float) -> Point:
    """
    Closest point one step inside the allowed side of a border

    The perpendicular coordinate moves to one step inside the border; the
    parallel coordinate is kept within the border shrunk by one step at each
    end so the result never sits on a corner.

    Args:
        border: Border to step behind
        point: Probe point in outline coordinates
        step: Minimal representable coordinate step

    Returns:
        Point on the inside of the border
    """
    a, b = border.line.a, border.line.b

    if border.isHorizontal_check():
        if border.blocking_directions & MotionDirection.POSITIVE_Y:
            y = a.y - step
        else:
            y = a.y + step
        x = min(max(point.x, a.x + step), b.x - step)
        return Point(x=x, y=y)

    if border.blocking_directions & MotionDirection.POSITIVE_X:
        x = a.x - step
    else:
        x = a.x + step
    y = min(max(point.y, a.y + step), b.y - step)
    return Point(x=x, y=y)


def position_recover(
    region: Region,
    origin: Point,
    point: Point,
    fixed_step: float,
    outline: Optional[Outline] = None,
) -> Point:
    """
    Find a safe position for a pointer that may lie outside the region

    Args:
        region: Confinement region, relative to origin
        origin: Absolute position of the region's coordinate space; returned
            as is when the region is empty
        point: Current absolute pointer position
        fixed_step: Minimal representable coordinate step, the distance
            kept inside the nearest border. A zero step would leave the point
            on a right or bottom border, which is outside the region, so the
            wl_fixed_t step is used instead
        outline: Precomputed outline of region; extracted when omitted

    Returns:
        point itself when it is inside the region, otherwise the closest
        position just inside the nearest border
    """
    if region.is_empty:
        return origin

    relative = point - origin
    if region.contains_point(relative.x, relative.y):
        return point

    if outline is None:
        outline = outline_extract(region)

    closest_border = nearestBorder_find(outline, relative)
    assert closest_border is not None, "non-empty region has an empty outline"

    step = fixed_step if fixed_step > 0 else settings.WL_FIXED_STEP
    recovered = pointBehindBorder_get(closest_border, relative, step) + origin
    logger.debug(f"Pointer at {point} outside region, recovered to {recovered}")
    return recovered

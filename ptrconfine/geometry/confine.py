"""Clamp pointer motion to a region outline"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ptrconfine.common.types import (
    AXIS_X,
    AXIS_Y,
    Border,
    Line,
    MotionDirection,
    Point,
    motionDirections_get,
)
from ptrconfine.geometry.outline import Outline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfinedMotion:
    """Result of confining one motion, with the borders that clamped it"""
    position: Point
    clamped_by: tuple[Border, ...] = ()

    @property
    def was_clamped(self) -> bool:
        return bool(self.clamped_by)


def closestBorder_find(
    outline: Outline,
    motion: Line,
    directions: MotionDirection,
) -> Optional[Border]:
    """
    Find the blocking border the motion hits first

    Args:
        outline: Borders to test
        motion: Motion segment in outline coordinates
        directions: Directions still free to move

    Returns:
        Border whose intersection is closest to motion.a, or None. On equal
        distance the border earliest in the outline wins.
    """
    closest_border: Optional[Border] = None
    closest_distance_2 = float("inf")

    for border in outline:
        if not border.isBlocking_check(directions):
            continue

        intersection = border.line.intersection_find(motion)
        if intersection is None:
            continue

        distance_2 = intersection.distanceSquared_get(motion.a)
        if distance_2 < closest_distance_2:
            closest_border = border
            closest_distance_2 = distance_2

    return closest_border


def border_clamp(
    border: Border,
    motion: Line,
    directions: MotionDirection,
    min_edge_distance: float,
) -> tuple[Line, MotionDirection]:
    """
    Pin the motion end point to a border

    Bottom and right borders lie outside the allowed area, so motion in a
    positive direction stops min_edge_distance short of them. The coordinate
    along the border is kept within the border so the end point cannot slide
    past its end into open space.

    Args:
        border: Border to clamp against
        motion: Current motion segment
        directions: Current direction set
        min_edge_distance: Margin kept from bottom/right borders

    Returns:
        Clamped motion and the direction set with the border's axis cleared
    """
    if border.isHorizontal_check():
        y = border.line.a.y
        if directions & MotionDirection.POSITIVE_Y:
            y -= min_edge_distance
        x = min(max(motion.b.x, border.line.a.x), border.line.b.x)
        clamped = Line(a=motion.a, b=Point(x=x, y=y))
        return clamped, directions & ~AXIS_Y

    x = border.line.a.x
    if directions & MotionDirection.POSITIVE_X:
        x -= min_edge_distance
    y = min(max(motion.b.y, border.line.a.y), border.line.b.y)
    clamped = Line(a=motion.a, b=Point(x=x, y=y))
    return clamped, directions & ~AXIS_X


def motion_trace(
    outline: Outline,
    origin: Point,
    prev: Point,
    candidate: Point,
    min_edge_distance: float = 0.0,
    fixed_step: float = 0.0,
) -> ConfinedMotion:
    """
    Confine a motion and report which borders clamped it

    Args:
        outline: Outline of the confinement region, relative to origin
        origin: Absolute position of the region's coordinate space
        prev: Previous absolute pointer position
        candidate: Requested absolute pointer position
        min_edge_distance: Margin kept from bottom/right borders
        fixed_step: Minimal representable coordinate step, added to
            increasing components before clamping (0 disables the nudge)

    Returns:
        Confined absolute position and the clamping borders
    """
    if outline.is_empty:
        return ConfinedMotion(position=origin)

    x, y = candidate.x, candidate.y
    # A positive motion that lands exactly on a bottom/right border as a
    # float can still round past it in the wire representation.
    if x > prev.x:
        x += fixed_step
    if y > prev.y:
        y += fixed_step

    requested = Point(x=x, y=y) - origin
    motion = Line(a=prev - origin, b=requested)
    directions = motionDirections_get(motion)
    clamped_by: list[Border] = []

    # Each clamp clears a whole axis, so this runs at most twice.
    while directions:
        closest_border = closestBorder_find(outline, motion, directions)
        if closest_border is None:
            break
        motion, directions = border_clamp(
            closest_border, motion, directions, min_edge_distance
        )
        clamped_by.append(closest_border)

    if not clamped_by:
        return ConfinedMotion(position=candidate)

    logger.debug(f"Motion {prev} -> {candidate} clamped by {len(clamped_by)} border(s)")

    # Axes no clamp touched keep the requested value without the nudge
    clamped = motion.b + origin
    position = Point(
        x=candidate.x if motion.b.x == requested.x else clamped.x,
        y=candidate.y if motion.b.y == requested.y else clamped.y,
    )

    return ConfinedMotion(position=position, clamped_by=tuple(clamped_by))


def motion_confine(
    outline: Outline,
    origin: Point,
    prev: Point,
    candidate: Point,
    min_edge_distance: float = 0.0,
    fixed_step: float = 0.0,
) -> Point:
    """
    Clamp a pointer motion so it cannot leave the region

    Args:
        outline: Outline of the confinement region, relative to origin
        origin: Absolute position of the region's coordinate space; returned
            as is when the region is empty
        prev: Previous absolute pointer position
        candidate: Requested absolute pointer position
        min_edge_distance: Margin kept from bottom/right borders
        fixed_step: Minimal representable coordinate step (0 disables the nudge)

    Returns:
        Confined absolute position
    """
    return motion_trace(
        outline, origin, prev, candidate, min_edge_distance, fixed_step
    ).position

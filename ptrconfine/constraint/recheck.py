"""Position recheck: warp a stray pointer back into its confinement region."""

from __future__ import annotations

import logging

from ptrconfine.common.types import Point
from ptrconfine.constraint.backend import PointerConstraint, PointerSeat

logger = logging.getLogger(__name__)


def pointer_recheck(constraint: PointerConstraint, seat: PointerSeat) -> bool:
    """
    Query the pointer and warp it back if it lies outside the region.

    Typically called after the region changed under a stationary pointer.

    Args:
        constraint: Active confinement strategy.
        seat: Pointer device to query and warp.

    Returns:
        True if the pointer was warped.
    """
    position: Point = seat.pointerPosition_get()
    safe: Point = constraint.constraint_ensure(position)
    if safe == position:
        return False

    logger.info(f"Pointer at ({position.x}, {position.y}) outside region, warping to ({safe.x}, {safe.y})")
    seat.pointer_warp(safe)
    return True

"""Confinement strategy computing clamps from the region outline in-process"""

import logging

from ptrconfine.common.settings import settings
from ptrconfine.common.types import Point
from ptrconfine.constraint.backend import PointerConstraint
from ptrconfine.geometry.confine import motion_confine
from ptrconfine.geometry.outline import Outline, outline_extract
from ptrconfine.geometry.recover import position_recover
from ptrconfine.geometry.region import Region

logger = logging.getLogger(__name__)


class NativePointerConstraint(PointerConstraint):
    """Confines pointer motion to a region by clamping against its outline"""

    def __init__(
        self,
        region: Region,
        origin: Point,
        min_edge_distance: float = settings.DEFAULT_MIN_EDGE_DISTANCE,
        fixed_step: float = settings.WL_FIXED_STEP,
    ) -> None:
        """
        Initialize native constraint

        Args:
            region: Confinement region, relative to origin
            origin: Absolute position of the region's coordinate space
            min_edge_distance: Margin kept from bottom/right borders
            fixed_step: Minimal representable coordinate step of the host's
                pointer coordinates (defaults to the wl_fixed_t step)

        Raises:
            ValueError: If min_edge_distance or fixed_step is negative
        """
        if min_edge_distance < 0:
            raise ValueError(f"min_edge_distance must be >= 0, got {min_edge_distance}")
        if fixed_step < 0:
            raise ValueError(f"fixed_step must be >= 0, got {fixed_step}")

        self._origin: Point = origin
        self._min_edge_distance: float = min_edge_distance
        self._fixed_step: float = fixed_step
        self._region: Region = region
        self._outline: Outline = outline_extract(region)

    @property
    def origin(self) -> Point:
        return self._origin

    @property
    def region(self) -> Region:
        return self._region

    @property
    def outline(self) -> Outline:
        return self._outline

    def region_update(self, region: Region) -> None:
        """
        Replace the confinement region and rebuild its outline

        Args:
            region: New region, relative to origin
        """
        outline = outline_extract(region)
        # Swap both together so in-flight readers see a consistent pair
        self._region, self._outline = region, outline
        logger.debug(f"Constraint region updated: {len(region)} boxes, {len(outline)} borders")

    def motion_confine(self, prev: Point, candidate: Point) -> Point:
        """
        Clamp a requested pointer motion to the region

        Args:
            prev: Previous absolute pointer position
            candidate: Requested absolute pointer position

        Returns:
            Confined absolute position; origin if the region is empty
        """
        return motion_confine(
            self._outline,
            self._origin,
            prev,
            candidate,
            min_edge_distance=self._min_edge_distance,
            fixed_step=self._fixed_step,
        )

    def constraint_ensure(self, position: Point) -> Point:
        """
        Recover a pointer position found outside the region

        Args:
            position: Current absolute pointer position

        Returns:
            position if allowed, otherwise the nearest safe position
        """
        region, outline = self._region, self._outline
        return position_recover(
            region,
            self._origin,
            position,
            fixed_step=self._fixed_step,
            outline=outline,
        )

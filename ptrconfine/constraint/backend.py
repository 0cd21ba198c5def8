"""Protocols for confinement strategies and the pointer seat they act on."""

from __future__ import annotations

from typing import Protocol

from ptrconfine.common.types import Point
from ptrconfine.geometry.region import Region


class PointerConstraint(Protocol):
    """Confinement strategy interface."""

    def region_update(self, region: Region) -> None:
        """
        Replace the confinement region.

        Args:
            region: New region, relative to the constraint origin.
        """

    def motion_confine(self, prev: Point, candidate: Point) -> Point:
        """
        Clamp a requested pointer motion.

        Args:
            prev: Previous absolute pointer position.
            candidate: Requested absolute pointer position.

        Returns:
            Absolute position the pointer may move to.
        """

    def constraint_ensure(self, position: Point) -> Point:
        """
        Bring a pointer position back inside the region.

        Args:
            position: Current absolute pointer position.

        Returns:
            position itself when already allowed, otherwise a safe position.
        """


class PointerSeat(Protocol):
    """Pointer device the host exposes for position queries and warps."""

    def pointerPosition_get(self) -> Point:
        """
        Get current pointer position.

        Returns:
            Absolute pointer position.
        """

    def pointer_warp(self, position: Point) -> None:
        """
        Move the pointer to an absolute position.

        Args:
            position: Target position.
        """

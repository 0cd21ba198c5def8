"""Unit tests for confinement strategies, factory and pointer recheck"""

from __future__ import annotations

import pytest
from ptrconfine.common.config import WL_FIXED_STEP, ConstraintConfig
from ptrconfine.common.types import Box, Point
from ptrconfine.constraint import (
    NativePointerConstraint,
    constraint_create,
    constraintFromConfig_create,
    pointer_recheck,
)
from ptrconfine.geometry.region import Region


class _FakeSeat:
    """Fake pointer seat recording warps."""

    def __init__(self, position: Point) -> None:
        """Initialize fake seat at a pointer position."""
        self.position: Point = position
        self.warps: list[Point] = []

    def pointerPosition_get(self) -> Point:
        """Return the current fake pointer position."""
        return self.position

    def pointer_warp(self, position: Point) -> None:
        """Record and apply a warp."""
        self.warps.append(position)
        self.position = position


class TestNativePointerConstraint:
    """Tests for the native outline-based strategy."""

    @pytest.fixture
    def constraint(self, square_region) -> NativePointerConstraint:
        """Create a constraint on the square region offset by (100, 100)."""
        return NativePointerConstraint(square_region, origin=Point(100, 100))

    def test_motion_confine(self, constraint) -> None:
        """Motion leaving the region is clamped in absolute coordinates."""
        assert constraint.motion_confine(Point(105, 105), Point(130, 105)) == Point(110, 105)

    def test_motion_confine_min_edge_distance(self, square_region) -> None:
        """Configured margin applies to bottom/right clamps."""
        constraint = NativePointerConstraint(
            square_region, origin=Point(0, 0), min_edge_distance=2.0
        )
        assert constraint.motion_confine(Point(5, 5), Point(5, 50)) == Point(5, 8)

    def test_constraint_ensure_outside(self, constraint) -> None:
        """A stray pointer is brought back one step inside."""
        assert constraint.constraint_ensure(Point(115, 105)) == Point(110 - WL_FIXED_STEP, 105)

    def test_constraint_ensure_inside(self, constraint) -> None:
        """A pointer inside is left alone."""
        assert constraint.constraint_ensure(Point(103, 104)) == Point(103, 104)

    def test_region_update_rebuilds_outline(self, constraint, l_region) -> None:
        """New region takes effect for subsequent calls."""
        constraint.region_update(l_region)
        assert constraint.region == l_region
        assert len(constraint.outline) == 6
        assert constraint.motion_confine(Point(105, 102), Point(118, 102)) == Point(118, 102)

    def test_region_update_to_empty(self, constraint) -> None:
        """Empty region snaps everything to origin."""
        constraint.region_update(Region())
        assert constraint.motion_confine(Point(105, 105), Point(106, 106)) == Point(100, 100)
        assert constraint.constraint_ensure(Point(3, 3)) == Point(100, 100)

    def test_negative_margin_rejected(self, square_region) -> None:
        """Negative min_edge_distance is a configuration error."""
        with pytest.raises(ValueError, match="min_edge_distance"):
            NativePointerConstraint(square_region, origin=Point(0, 0), min_edge_distance=-1)

    def test_negative_step_rejected(self, square_region) -> None:
        """Negative fixed_step is a configuration error."""
        with pytest.raises(ValueError, match="fixed_step"):
            NativePointerConstraint(square_region, origin=Point(0, 0), fixed_step=-0.1)

    def test_malformed_region_rejected(self) -> None:
        """Malformed box sequences never reach the strategy."""
        with pytest.raises(ValueError):
            NativePointerConstraint(
                Region.from_boxes([Box(0, 5, 10, 10), Box(0, 0, 10, 5)]),
                origin=Point(0, 0),
            )


class TestConstraintFactory:
    """Tests for strategy construction."""

    def test_native_by_name(self, square_region) -> None:
        """Backend names are case insensitive."""
        constraint = constraint_create("Native", square_region, Point(0, 0), 0.0, WL_FIXED_STEP)
        assert isinstance(constraint, NativePointerConstraint)

    def test_unknown_backend_raises(self, square_region) -> None:
        """Unknown backend names are rejected."""
        with pytest.raises(ValueError, match="Unsupported constraint backend"):
            constraint_create("barrier", square_region, Point(0, 0), 0.0, WL_FIXED_STEP)

    def test_from_config(self, square_region) -> None:
        """Config origin and margin are applied."""
        config = ConstraintConfig(min_edge_distance=1.0, origin=(10.0, 20.0))
        constraint = constraintFromConfig_create(config, square_region)
        assert constraint.motion_confine(Point(15, 25), Point(40, 25)) == Point(19, 25)


class TestPointerRecheck:
    """Tests for query-then-warp recovery."""

    def test_warps_stray_pointer(self, square_region) -> None:
        """Pointer outside the region is warped once."""
        constraint = NativePointerConstraint(square_region, origin=Point(0, 0))
        seat = _FakeSeat(Point(15, 5))

        assert pointer_recheck(constraint, seat) is True
        assert seat.warps == [Point(10 - WL_FIXED_STEP, 5)]

    def test_no_warp_when_inside(self, square_region) -> None:
        """Pointer inside the region is not warped."""
        constraint = NativePointerConstraint(square_region, origin=Point(0, 0))
        seat = _FakeSeat(Point(5, 5))

        assert pointer_recheck(constraint, seat) is False
        assert seat.warps == []

    def test_zero_step_warps_once(self, square_region) -> None:
        """Without a nudge step the recovered pointer still settles inside."""
        constraint = NativePointerConstraint(square_region, origin=Point(0, 0), fixed_step=0.0)
        seat = _FakeSeat(Point(25, 30))

        assert pointer_recheck(constraint, seat) is True
        assert pointer_recheck(constraint, seat) is False
        assert len(seat.warps) == 1

    def test_recheck_after_region_shrinks(self, frame_region) -> None:
        """Shrinking the region under a stationary pointer triggers a warp."""
        constraint = NativePointerConstraint(frame_region, origin=Point(0, 0))
        seat = _FakeSeat(Point(25, 25))
        assert pointer_recheck(constraint, seat) is False

        constraint.region_update(Region.from_rectangles([(0, 0, 10, 30)]))
        assert pointer_recheck(constraint, seat) is True
        assert seat.position == Point(10 - WL_FIXED_STEP, 25)
        assert pointer_recheck(constraint, seat) is False

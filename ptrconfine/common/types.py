"""Common geometry types for ptrconfine"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Optional


class MotionDirection(IntFlag):
    """Motion directions a border can block"""
    NONE = 0
    POSITIVE_X = 1 << 0
    POSITIVE_Y = 1 << 1
    NEGATIVE_X = 1 << 2
    NEGATIVE_Y = 1 << 3


AXIS_X = MotionDirection.POSITIVE_X | MotionDirection.NEGATIVE_X
AXIS_Y = MotionDirection.POSITIVE_Y | MotionDirection.NEGATIVE_Y


@dataclass(frozen=True)
class Point:
    """2D point in floating point coordinates"""
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(x=self.x - other.x, y=self.y - other.y)

    def scaled(self, factor: float) -> "Point":
        """Multiply both components by a constant"""
        return Point(x=self.x * factor, y=self.y * factor)

    def cross(self, other: "Point") -> float:
        """2D cross product (z component of the 3D cross product)"""
        return self.x * other.y - self.y * other.x

    def distanceSquared_get(self, other: "Point") -> float:
        """Squared euclidean distance to another point"""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle given by its corners (x2/y2 exclusive)"""
    x1: int
    y1: int
    x2: int
    y2: int

    def __post_init__(self) -> None:
        if self.x1 >= self.x2 or self.y1 >= self.y2:
            raise ValueError(
                f"Degenerate box ({self.x1}, {self.y1})-({self.x2}, {self.y2}): "
                f"requires x1 < x2 and y1 < y2"
            )

    @classmethod
    def from_rectangle(cls, x: int, y: int, width: int, height: int) -> "Box":
        """Build a box from origin and size"""
        return cls(x1=x, y1=y, x2=x + width, y2=y + height)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def contains(self, x: float, y: float) -> bool:
        """Check if point lies within the half-open box"""
        return self.x1 <= x < self.x2 and self.y1 <= y < self.y2

    def overlaps(self, other: "Box") -> bool:
        """Check if the interiors of two boxes intersect"""
        return (
            self.x1 < other.x2 and other.x1 < self.x2
            and self.y1 < other.y2 and other.y1 < self.y2
        )


@dataclass(frozen=True)
class Line:
    """Directed line segment from a to b"""
    a: Point
    b: Point

    def intersection_find(self, other: "Line") -> Optional[Point]:
        """
        Find the intersection point of two segments

        Solves p + t*r = q + u*s for this segment (p, r) and the other
        segment (q, s). Parallel and collinear segments never intersect.

        Args:
            other: Segment to intersect with

        Returns:
            Intersection point, or None if the segments do not cross
        """
        p = self.a
        r = self.b - self.a
        q = other.a
        s = other.b - other.a

        rxs = r.cross(s)
        if rxs == 0.0:
            return None

        t = (q - p).cross(s) / rxs
        u = (p - q).cross(r) / s.cross(r)

        if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
            return p + r.scaled(t)
        return None


@dataclass(frozen=True)
class Border:
    """Axis-aligned boundary segment tagged with the directions it blocks"""
    line: Line
    blocking_directions: MotionDirection

    def __post_init__(self) -> None:
        a, b = self.line.a, self.line.b
        if (a.x == b.x) == (a.y == b.y):
            raise ValueError(f"Border must be strictly horizontal or vertical: {a} -> {b}")

    @classmethod
    def from_coords(
        cls,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        blocking_directions: MotionDirection,
    ) -> "Border":
        """Build a border from raw endpoint coordinates"""
        return cls(
            line=Line(a=Point(x=x1, y=y1), b=Point(x=x2, y=y2)),
            blocking_directions=blocking_directions,
        )

    def isHorizontal_check(self) -> bool:
        """Check if border runs along the x axis"""
        return self.line.a.y == self.line.b.y

    def isBlocking_check(self, directions: MotionDirection) -> bool:
        """
        Check if this border blocks any of the given motion directions

        Only directions on the border's own axis count: a horizontal border
        never blocks purely horizontal motion.

        Args:
            directions: Motion direction set

        Returns:
            True if the border blocks at least one of the directions
        """
        axis = AXIS_Y if self.isHorizontal_check() else AXIS_X
        return bool(self.blocking_directions & directions & axis)

    def allowedDirections_get(self) -> MotionDirection:
        """Directions this border lets motion through"""
        return ~self.blocking_directions & (AXIS_X | AXIS_Y)

    def distanceSquared_get(self, point: Point) -> float:
        """
        Squared distance from point to the closest point on this border

        Args:
            point: Probe point

        Returns:
            Squared euclidean distance
        """
        a, b = self.line.a, self.line.b
        if self.isHorizontal_check():
            closest = Point(x=min(max(point.x, a.x), b.x), y=a.y)
        else:
            closest = Point(x=a.x, y=min(max(point.y, a.y), b.y))
        return closest.distanceSquared_get(point)


def motionDirections_get(motion: Line) -> MotionDirection:
    """
    Derive the direction set of a motion segment

    Args:
        motion: Motion from previous to candidate point

    Returns:
        Direction bits; a zero component contributes no bit
    """
    directions = MotionDirection.NONE

    if motion.a.x < motion.b.x:
        directions |= MotionDirection.POSITIVE_X
    elif motion.a.x > motion.b.x:
        directions |= MotionDirection.NEGATIVE_X
    if motion.a.y < motion.b.y:
        directions |= MotionDirection.POSITIVE_Y
    elif motion.a.y > motion.b.y:
        directions |= MotionDirection.NEGATIVE_Y

    return directions

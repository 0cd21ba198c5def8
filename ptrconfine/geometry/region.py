"""Rectangle-union regions in canonical banded form

A region is stored the way pixman stores one: boxes grouped into bands that
share both top and bottom y, boxes within a band ordered left to right with
gaps between them, and vertically touching bands with identical x-spans
merged into one.

             -------- ---
             |      | | |
   ----------====---- ---        band 1: two boxes
   |            |                band 2: one box
   ----==========---------       band 3: one box
       |                 |
       -------------------
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

from ptrconfine.common.types import Box

logger = logging.getLogger(__name__)

Span = tuple[int, int]


class RegionError(ValueError):
    """Raised when a box sequence violates the region input contract"""


def spans_union(spans: Iterable[Span]) -> list[Span]:
    """
    Merge overlapping or touching x-spans

    Args:
        spans: Half-open (x1, x2) spans in any order

    Returns:
        Sorted disjoint, non-touching spans covering the same x-range
    """
    merged: list[Span] = []
    for x1, x2 in sorted(spans):
        if merged and x1 <= merged[-1][1]:
            if x2 > merged[-1][1]:
                merged[-1] = (merged[-1][0], x2)
        else:
            merged.append((x1, x2))
    return merged


def bands_build(boxes: Sequence[Box]) -> list[Box]:
    """
    Canonicalize an arbitrary box collection into banded row-major form

    Every distinct y edge splits the plane into horizontal slabs; each slab
    gets the union of x-spans of the boxes covering it, and consecutive slabs
    that touch and carry identical spans are coalesced. Boxes are swept in
    top order, so each slab only looks at the boxes active across it.

    Args:
        boxes: Boxes in any order, overlap allowed

    Returns:
        Boxes of the union in canonical banded order
    """
    edges = sorted({box.y1 for box in boxes} | {box.y2 for box in boxes})

    pending = sorted(boxes, key=lambda box: box.y1)
    next_index = 0
    active: list[Box] = []

    bands: list[tuple[int, int, list[Span]]] = []
    for top, bottom in zip(edges, edges[1:]):
        while next_index < len(pending) and pending[next_index].y1 <= top:
            active.append(pending[next_index])
            next_index += 1
        # Boxes start and end on edges, so a box still active covers the slab
        active = [box for box in active if box.y2 > top]

        spans = spans_union((box.x1, box.x2) for box in active)
        if not spans:
            continue
        if bands and bands[-1][1] == top and bands[-1][2] == spans:
            bands[-1] = (bands[-1][0], bottom, spans)
        else:
            bands.append((top, bottom, spans))

    return [
        Box(x1=x1, y1=top, x2=x2, y2=bottom)
        for top, bottom, spans in bands
        for x1, x2 in spans
    ]


def rowMajorOrder_validate(boxes: Sequence[Box]) -> None:
    """
    Check that boxes are non-overlapping and delivered in row-major order

    Rows run top to bottom (non-decreasing y1); within a row of equal y1,
    boxes run left to right and do not overlap.

    Args:
        boxes: Caller supplied box sequence

    Raises:
        RegionError: Naming the first offending pair of boxes
    """
    for index in range(1, len(boxes)):
        prev, box = boxes[index - 1], boxes[index]
        if box.y1 < prev.y1:
            raise RegionError(
                f"Box {index} {box} starts above box {index - 1} {prev}: "
                f"rows must be ordered top to bottom"
            )
        if box.y1 == prev.y1 and box.x1 < prev.x2:
            raise RegionError(
                f"Box {index} {box} is not to the right of box {index - 1} {prev}: "
                f"boxes within a row must be ordered left to right and disjoint"
            )

    for i, first in enumerate(boxes):
        for j in range(i + 1, len(boxes)):
            second = boxes[j]
            if second.y1 >= first.y2:
                # Later rows start at or below second.y1
                break
            if first.overlaps(second):
                raise RegionError(f"Box {i} {first} overlaps box {j} {second}")


@dataclass(frozen=True)
class Region:
    """Immutable set of points covered by a union of boxes"""
    boxes: tuple[Box, ...] = ()

    @classmethod
    def from_boxes(cls, boxes: Iterable[Box]) -> "Region":
        """
        Build a region from a row-major, non-overlapping box sequence

        Args:
            boxes: Boxes ordered top to bottom, then left to right

        Returns:
            Region in canonical banded form

        Raises:
            RegionError: If boxes overlap or are out of order
        """
        box_list = list(boxes)
        rowMajorOrder_validate(box_list)
        region = cls(boxes=tuple(bands_build(box_list)))
        logger.debug(f"Region from {len(box_list)} boxes -> {len(region)} banded boxes")
        return region

    @classmethod
    def from_rectangles(cls, rectangles: Iterable[tuple[int, int, int, int]]) -> "Region":
        """
        Build a region as the union of (x, y, width, height) rectangles

        Rectangles may overlap and come in any order. Empty rectangles
        (zero width or height) are ignored.

        Args:
            rectangles: Rectangles as (x, y, width, height)

        Returns:
            Region in canonical banded form

        Raises:
            ValueError: If a rectangle has negative size
        """
        boxes: list[Box] = []
        for x, y, width, height in rectangles:
            if width < 0 or height < 0:
                raise ValueError(f"Rectangle ({x}, {y}, {width}, {height}) has negative size")
            if width == 0 or height == 0:
                continue
            boxes.append(Box.from_rectangle(x, y, width, height))
        return cls(boxes=tuple(bands_build(boxes)))

    @property
    def is_empty(self) -> bool:
        return not self.boxes

    @property
    def extents(self) -> Optional[Box]:
        """Smallest box containing the whole region, None when empty"""
        if not self.boxes:
            return None
        return Box(
            x1=min(box.x1 for box in self.boxes),
            y1=self.boxes[0].y1,
            x2=max(box.x2 for box in self.boxes),
            y2=self.boxes[-1].y2,
        )

    def contains_point(self, x: float, y: float) -> bool:
        """
        Check if the pixel holding (x, y) belongs to the region

        Coordinates are floored to the pixel grid, so the right and bottom
        edges of a box are outside it.

        Args:
            x: X coordinate
            y: Y coordinate

        Returns:
            True if the point is covered by a box
        """
        px = math.floor(x)
        py = math.floor(y)
        for box in self.boxes:
            if box.y1 > py:
                break
            if box.contains(px, py):
                return True
        return False

    def translate(self, dx: int, dy: int) -> "Region":
        """Return the region shifted by (dx, dy)"""
        return Region(
            boxes=tuple(
                Box(x1=box.x1 + dx, y1=box.y1 + dy, x2=box.x2 + dx, y2=box.y2 + dy)
                for box in self.boxes
            )
        )

    def __len__(self) -> int:
        return len(self.boxes)

    def __iter__(self) -> Iterator[Box]:
        return iter(self.boxes)

"""Region outline extraction

Converts a banded region into the set of oriented borders that make up its
boundary. Borders are the outer edge of the allowed area: top and left
borders lie on the first covered pixel row/column, bottom and right borders
lie one past the last one. Clamping has to account for that asymmetry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Union

from ptrconfine.common.types import Border, Box, Line, MotionDirection
from ptrconfine.geometry.region import Region

logger = logging.getLogger(__name__)

Band = Sequence[Box]
_Edge = tuple[int, int, MotionDirection]


@dataclass(frozen=True)
class Outline:
    """Immutable boundary of a region as oriented borders"""
    borders: tuple[Border, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.borders

    def __len__(self) -> int:
        return len(self.borders)

    def __iter__(self) -> Iterator[Border]:
        return iter(self.borders)


def bands_partition(boxes: Sequence[Box]) -> list[list[Box]]:
    """
    Split row-major boxes into maximal runs sharing the same top y

    Args:
        boxes: Boxes in row-major order

    Returns:
        List of bands, each a list of boxes
    """
    bands: list[list[Box]] = []
    for box in boxes:
        if bands and bands[-1][0].y1 == box.y1:
            bands[-1].append(box)
        else:
            bands.append([box])
    return bands


def horizontalEdges_get(band: Band, bottom: bool) -> list[Border]:
    """
    Emit the top or bottom edges of every box in a band

    Args:
        band: Boxes of one band
        bottom: True for bottom edges (block +Y), False for top edges (block -Y)

    Returns:
        One horizontal border per box
    """
    if bottom:
        return [
            Border.from_coords(box.x1, box.y2, box.x2, box.y2, MotionDirection.POSITIVE_Y)
            for box in band
        ]
    return [
        Border.from_coords(box.x1, box.y1, box.x2, box.y1, MotionDirection.NEGATIVE_Y)
        for box in band
    ]


def bandEdges_merge(above: Band, below: Band) -> list[Border]:
    """
    Combine the facing edges of two vertically touching bands

    The bottom edges of the band above and the top edges of the band below
    lie on the same y. Wherever they overlap the region continues across
    that line, so only the parts covered by exactly one of the two bands
    survive, each keeping the blocking direction of the band it came from.

    The edges are swept left to right (x1 ascending, wider first on ties)
    with one pending span that the next edge either extends, trims, splits
    or pushes out.

    Args:
        above: Band whose bottom y equals the top y of below
        below: Band directly underneath

    Returns:
        Surviving horizontal borders in non-decreasing x order
    """
    y = above[0].y2
    assert below[0].y1 == y, "bands must touch to be merged"

    edges: list[_Edge] = [(box.x1, box.x2, MotionDirection.POSITIVE_Y) for box in above]
    edges += [(box.x1, box.x2, MotionDirection.NEGATIVE_Y) for box in below]
    edges.sort(key=lambda edge: (edge[0], -edge[1]))

    merged: list[Border] = []

    def _emit(x1: int, x2: int, direction: MotionDirection) -> None:
        if x1 < x2:
            assert not merged or merged[-1].line.a.x <= x1, "merge output out of order"
            merged.append(Border.from_coords(x1, y, x2, y, direction))

    pending: Optional[_Edge] = None
    for x1, x2, direction in edges:
        if pending is None:
            pending = (x1, x2, direction)
            continue

        p_x1, p_x2, p_direction = pending
        assert p_x1 <= x1, "band edges must be swept left to right"

        if x1 > p_x2:
            # Disjoint: pending is final
            _emit(p_x1, p_x2, p_direction)
            pending = (x1, x2, direction)
        elif x1 == p_x2:
            # Chained: join runs that block the same way
            if direction == p_direction:
                pending = (p_x1, x2, p_direction)
            else:
                _emit(p_x1, p_x2, p_direction)
                pending = (x1, x2, direction)
        else:
            # Overlap: left remainder is final, shared part cancels, the
            # longer span's right remainder stays pending
            _emit(p_x1, x1, p_direction)
            if p_x2 > x2:
                pending = (x2, p_x2, p_direction)
            elif x2 > p_x2:
                pending = (p_x2, x2, direction)
            else:
                pending = None

    if pending is not None:
        _emit(*pending)

    return merged


def verticalRuns_coalesce(borders: Sequence[Border]) -> list[Border]:
    """
    Join vertical borders that continue each other across band boundaries

    Args:
        borders: Borders in extraction order

    Returns:
        Borders with each maximal vertical run as a single border, order kept
    """
    result: list[Border] = []
    open_runs: dict[tuple[float, float, MotionDirection], int] = {}

    for border in borders:
        if border.isHorizontal_check():
            result.append(border)
            continue

        a, b = border.line.a, border.line.b
        key = (a.x, a.y, border.blocking_directions)
        index = open_runs.pop(key, None)
        if index is None:
            index = len(result)
            result.append(border)
        else:
            run = result[index]
            result[index] = Border(
                line=Line(a=run.line.a, b=b),
                blocking_directions=run.blocking_directions,
            )
        open_runs[(b.x, b.y, border.blocking_directions)] = index

    return result


def outline_extract(region: Union[Region, Sequence[Box]]) -> Outline:
    """
    Derive the oriented border set of a region

    Bands are walked top to bottom. Left and right edges of every box are
    always part of the boundary. Top edges are emitted for the first band
    below a vertical gap (the current roof), bottom edges for the last band
    above one, and the facing edges of touching bands go through
    bandEdges_merge so shared stretches disappear.

    Args:
        region: Region, or a row-major non-overlapping box sequence

    Returns:
        Outline of the region; empty for an empty region

    Raises:
        RegionError: If a raw box sequence is malformed
    """
    if not isinstance(region, Region):
        region = Region.from_boxes(region)
    if region.is_empty:
        return Outline()

    bands = bands_partition(region.boxes)
    borders: list[Border] = []
    current_roof = bands[0][0].y1
    above: Optional[list[Box]] = None

    for band in bands:
        band_top = band[0].y1

        if above is not None:
            if band_top != above[0].y2:
                # Vertical gap: close the band above, start a new roof
                current_roof = band_top
                borders.extend(horizontalEdges_get(above, bottom=True))
            else:
                borders.extend(bandEdges_merge(above, band))

        if band_top == current_roof:
            borders.extend(horizontalEdges_get(band, bottom=False))

        for box in band:
            borders.append(
                Border.from_coords(box.x1, box.y1, box.x1, box.y2, MotionDirection.NEGATIVE_X)
            )
            borders.append(
                Border.from_coords(box.x2, box.y1, box.x2, box.y2, MotionDirection.POSITIVE_X)
            )

        above = band

    assert above is not None
    borders.extend(horizontalEdges_get(above, bottom=True))

    outline = Outline(borders=tuple(verticalRuns_coalesce(borders)))
    logger.debug(f"Outline of {len(region)} boxes in {len(bands)} bands: {len(outline)} borders")
    return outline

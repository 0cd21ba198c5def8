"""Unit tests for region validation and canonical banding"""

import pytest
from ptrconfine.common.types import Box
from ptrconfine.geometry.region import Region, RegionError, bands_build, spans_union


class TestSpansUnion:
    """Test x-span merging"""

    def test_touching_spans_merge(self):
        """Test touching spans become one"""
        assert spans_union([(10, 20), (0, 10)]) == [(0, 20)]

    def test_overlapping_and_disjoint(self):
        """Test overlap merges while gaps are kept"""
        assert spans_union([(0, 5), (3, 8), (10, 12)]) == [(0, 8), (10, 12)]

    def test_contained_span(self):
        """Test a span inside another disappears"""
        assert spans_union([(0, 20), (5, 10)]) == [(0, 20)]


class TestRegionFromBoxes:
    """Test building regions from row-major box sequences"""

    def test_empty(self):
        """Test empty input gives empty region"""
        region = Region.from_boxes([])
        assert region.is_empty
        assert len(region) == 0
        assert region.extents is None

    def test_unequal_heights_are_rebanded(self, l_region):
        """Test boxes of different height in one row are split into bands"""
        assert list(l_region) == [Box(0, 0, 20, 5), Box(0, 5, 10, 10)]

    def test_identical_bands_coalesce(self):
        """Test stacked boxes with equal spans merge vertically"""
        region = Region.from_boxes([Box(0, 0, 10, 5), Box(0, 5, 10, 10)])
        assert list(region) == [Box(0, 0, 10, 10)]

    def test_gap_between_bands_kept(self):
        """Test vertically separated boxes stay separate"""
        boxes = [Box(0, 0, 10, 5), Box(0, 10, 10, 15)]
        assert list(Region.from_boxes(boxes)) == boxes

    def test_rows_out_of_order_rejected(self):
        """Test a row above the previous one is rejected"""
        with pytest.raises(RegionError, match="top to bottom"):
            Region.from_boxes([Box(0, 5, 10, 10), Box(0, 0, 10, 5)])

    def test_row_not_left_to_right_rejected(self):
        """Test boxes within a row must run left to right"""
        with pytest.raises(RegionError, match="left to right"):
            Region.from_boxes([Box(10, 0, 20, 5), Box(0, 0, 5, 5)])

    def test_overlap_rejected(self):
        """Test overlapping boxes from different rows are rejected"""
        with pytest.raises(RegionError, match="overlaps"):
            Region.from_boxes([Box(0, 0, 10, 10), Box(5, 5, 15, 15)])

    def test_region_error_is_value_error(self):
        """Test RegionError can be caught as ValueError"""
        assert issubclass(RegionError, ValueError)


class TestRegionFromRectangles:
    """Test building regions as a union of rectangles"""

    def test_overlap_is_unioned(self):
        """Test overlapping rectangles produce the banded union"""
        region = Region.from_rectangles([(0, 0, 10, 10), (5, 5, 10, 10)])
        assert list(region) == [
            Box(0, 0, 10, 5),
            Box(0, 5, 15, 10),
            Box(5, 10, 15, 15),
        ]

    def test_empty_rectangles_ignored(self):
        """Test zero-size rectangles contribute nothing"""
        assert Region.from_rectangles([(0, 0, 0, 10), (5, 5, 10, 0)]).is_empty

    def test_negative_size_rejected(self):
        """Test negative width raises"""
        with pytest.raises(ValueError, match="negative size"):
            Region.from_rectangles([(0, 0, -1, 10)])

    def test_tall_box_spans_many_bands(self):
        """Test a box crossing several slabs contributes to each of them"""
        region = Region.from_rectangles([(0, 0, 5, 30), (10, 5, 5, 5), (10, 20, 5, 5)])
        assert list(region) == [
            Box(0, 0, 5, 5),
            Box(0, 5, 5, 10), Box(10, 5, 15, 10),
            Box(0, 10, 5, 20),
            Box(0, 20, 5, 25), Box(10, 20, 15, 25),
            Box(0, 25, 5, 30),
        ]

    def test_order_independent(self):
        """Test union does not depend on rectangle order"""
        first = Region.from_rectangles([(0, 0, 10, 10), (20, 0, 10, 10)])
        second = Region.from_rectangles([(20, 0, 10, 10), (0, 0, 10, 10)])
        assert first == second


class TestRegionQueries:
    """Test region queries"""

    def test_contains_point_half_open(self, square_region):
        """Test right/bottom edges are outside"""
        assert square_region.contains_point(0, 0)
        assert square_region.contains_point(9.9, 9.9)
        assert not square_region.contains_point(10, 5)
        assert not square_region.contains_point(5, 10)
        assert not square_region.contains_point(-0.5, 5)

    def test_contains_point_hole(self, frame_region):
        """Test the hole is not part of the region"""
        assert not frame_region.contains_point(15, 15)
        assert frame_region.contains_point(5, 15)
        assert frame_region.contains_point(25, 15)
        assert frame_region.contains_point(15, 25)

    def test_extents(self, l_region):
        """Test bounding box of the region"""
        assert l_region.extents == Box(0, 0, 20, 10)

    def test_translate(self, square_region):
        """Test translation shifts every box"""
        moved = square_region.translate(5, -5)
        assert list(moved) == [Box(5, -5, 15, 5)]

    def test_bands_build_matches_canonical_form(self, frame_region):
        """Test canonical form is stable under re-banding"""
        assert bands_build(list(frame_region)) == list(frame_region)

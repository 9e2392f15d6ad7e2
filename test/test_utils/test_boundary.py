"""Tests for the wall proximity flags and the cosmic decision table."""

import numpy as np
import pytest

from cosmictag.utils.boundary import (
    boundary_flags,
    classify_boundaries,
    cosmic_score,
    parse_margin,
)
from cosmictag.utils.enums import CosmicTagEnum
from cosmictag.utils.globals import (
    NOT_COSMIC,
    ONE_SIDED,
    OUT_OF_TIME,
    THROUGH_GOER,
    Z_CROSSER,
)

# Toy detector extents
WIDTH, HALF_HEIGHT, LENGTH = 250.0, 100.0, 1000.0
MARGIN = np.array([5.0, 5.0, 5.0])


def flags(start, end):
    """Builds a flag array from two (x, y, z) proximity triplets."""
    return np.array([start, end], dtype=bool)


class TestParseMargin:
    """Test the margin parsing."""

    def test_scalar(self):
        np.testing.assert_array_equal(parse_margin(7), [7.0, 7.0, 7.0])

    def test_vector(self):
        np.testing.assert_array_equal(parse_margin([1, 2, 3]), [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("margin", [[1, 2], [1, 2, 3, 4], [[1, 2, 3]]])
    def test_invalid(self, margin):
        with pytest.raises(ValueError):
            parse_margin(margin)


class TestBoundaryFlags:
    """Test the proximity of end points to the detector walls."""

    def test_center(self):
        """Points in the middle of the detector are close to no wall."""
        result = boundary_flags(
            np.array([125.0, 0.0, 500.0]),
            np.array([130.0, 10.0, 400.0]),
            MARGIN,
            WIDTH,
            HALF_HEIGHT,
            LENGTH,
        )
        assert result.shape == (2, 3)
        assert not result.any()

    @pytest.mark.parametrize(
        "point, expected",
        [
            ([2.0, 0.0, 500.0], [True, False, False]),
            ([248.0, 0.0, 500.0], [True, False, False]),
            ([125.0, 97.0, 500.0], [False, True, False]),
            ([125.0, -97.0, 500.0], [False, True, False]),
            ([125.0, 0.0, 1.0], [False, False, True]),
            ([125.0, 0.0, 999.0], [False, False, True]),
            ([1.0, 99.0, 999.0], [True, True, True]),
        ],
    )
    def test_walls(self, point, expected):
        """Each wall is detected for the end point which is close to it."""
        center = np.array([125.0, 0.0, 500.0])
        result = boundary_flags(
            np.array(point), center, MARGIN, WIDTH, HALF_HEIGHT, LENGTH
        )
        np.testing.assert_array_equal(result[0], expected)
        assert not result[1].any()

    def test_strict_margin(self):
        """A point exactly one margin away from a wall is not close to it."""
        result = boundary_flags(
            np.array([5.0, 95.0, 995.0]),
            np.array([245.0, -95.0, 5.0]),
            MARGIN,
            WIDTH,
            HALF_HEIGHT,
            LENGTH,
        )
        assert not result.any()

    def test_per_axis_margin(self):
        """Margins apply independently to each axis."""
        result = boundary_flags(
            np.array([8.0, 92.0, 8.0]),
            np.array([125.0, 0.0, 500.0]),
            np.array([10.0, 5.0, 5.0]),
            WIDTH,
            HALF_HEIGHT,
            LENGTH,
        )
        np.testing.assert_array_equal(result[0], [True, False, False])


class TestClassifyBoundaries:
    """Test the decision table."""

    @pytest.mark.parametrize(
        "start, end, tag",
        [
            ((1, 0, 0), (1, 0, 0), CosmicTagEnum.GEOMETRY_XX),
            ((0, 1, 0), (0, 1, 0), CosmicTagEnum.GEOMETRY_YY),
            ((1, 0, 0), (0, 1, 0), CosmicTagEnum.GEOMETRY_XY),
            ((0, 1, 0), (1, 0, 0), CosmicTagEnum.GEOMETRY_XY),
            ((1, 0, 0), (0, 0, 1), CosmicTagEnum.GEOMETRY_XZ),
            ((0, 1, 0), (0, 0, 1), CosmicTagEnum.GEOMETRY_YZ),
            ((1, 0, 1), (0, 0, 0), CosmicTagEnum.GEOMETRY_XZ),
            ((1, 1, 0), (1, 0, 0), CosmicTagEnum.GEOMETRY_XX),
        ],
    )
    def test_through_goer(self, start, end, tag):
        assert classify_boundaries(flags(start, end)) == (THROUGH_GOER, tag)

    def test_z_crosser(self):
        result = classify_boundaries(flags((0, 0, 1), (0, 0, 1)))
        assert result == (Z_CROSSER, CosmicTagEnum.GEOMETRY_ZZ)

    @pytest.mark.parametrize(
        "start, end, tag",
        [
            ((0, 0, 0), (1, 0, 0), CosmicTagEnum.GEOMETRY_X),
            ((1, 0, 0), (0, 0, 0), CosmicTagEnum.GEOMETRY_X),
            ((0, 1, 0), (0, 0, 0), CosmicTagEnum.GEOMETRY_Y),
            ((0, 0, 0), (0, 1, 1), CosmicTagEnum.GEOMETRY_Y),
            ((0, 0, 1), (0, 0, 0), CosmicTagEnum.GEOMETRY_Z),
            ((0, 0, 0), (0, 0, 1), CosmicTagEnum.GEOMETRY_Z),
        ],
    )
    def test_one_sided(self, start, end, tag):
        assert classify_boundaries(flags(start, end)) == (ONE_SIDED, tag)

    def test_end_exit_with_start_on_z(self):
        """Only the start point exiting is paired with a z wall, so an end
        point exiting through y with a start point on z is not tagged."""
        result = classify_boundaries(flags((0, 0, 1), (0, 1, 0)))
        assert result == (NOT_COSMIC, CosmicTagEnum.NOT_TAGGED)

    def test_not_tagged(self):
        result = classify_boundaries(flags((0, 0, 0), (0, 0, 0)))
        assert result == (NOT_COSMIC, CosmicTagEnum.NOT_TAGGED)

    def test_out_of_time(self):
        """Out-of-time objects are tagged when no geometric rule applies."""
        result = classify_boundaries(None, out_of_time=True)
        assert result == (OUT_OF_TIME, CosmicTagEnum.OUTSIDE_DRIFT_PARTIAL)

        result = classify_boundaries(flags((0, 0, 0), (0, 0, 0)), out_of_time=True)
        assert result == (OUT_OF_TIME, CosmicTagEnum.OUTSIDE_DRIFT_PARTIAL)

    def test_no_flags(self):
        assert classify_boundaries(None) == (NOT_COSMIC, CosmicTagEnum.NOT_TAGGED)


class TestCosmicScore:
    """Test the score associated with each tag kind."""

    @pytest.mark.parametrize(
        "tag, score",
        [
            (CosmicTagEnum.NOT_TAGGED, 0.0),
            (CosmicTagEnum.OUTSIDE_DRIFT_PARTIAL, 1.0),
            (CosmicTagEnum.GEOMETRY_XX, 1.0),
            (CosmicTagEnum.GEOMETRY_YY, 1.0),
            (CosmicTagEnum.GEOMETRY_XY, 1.0),
            (CosmicTagEnum.GEOMETRY_XZ, 1.0),
            (CosmicTagEnum.GEOMETRY_YZ, 1.0),
            (CosmicTagEnum.GEOMETRY_ZZ, 0.4),
            (CosmicTagEnum.GEOMETRY_X, 0.5),
            (CosmicTagEnum.GEOMETRY_Y, 0.5),
            (CosmicTagEnum.GEOMETRY_Z, 0.5),
        ],
    )
    def test_score(self, tag, score):
        assert cosmic_score(tag) == score

    def test_enum_values(self):
        """Tag kinds follow the numbering of the LArSoft tag identifiers."""
        assert CosmicTagEnum.NOT_TAGGED == 0
        assert CosmicTagEnum.GEOMETRY_XX == 4
        assert CosmicTagEnum.GEOMETRY_X == 23
        assert CosmicTagEnum.OUTSIDE_DRIFT_PARTIAL == 100
        assert CosmicTagEnum.GEOMETRY_ZZ.label == "Geometry_ZZ"

"""Tests for the cosmic tag data class."""

import numpy as np
import pytest

from cosmictag.data import CosmicTag
from cosmictag.utils.enums import CosmicTagEnum


class TestCosmicTag:
    """Cosmic tag tests."""

    def test_default(self):
        tag = CosmicTag()
        assert tag.id == -1
        assert tag.score == -1.0
        assert tag.tag == CosmicTagEnum.UNKNOWN
        assert tag.cosmic_level == 0
        assert np.all(~np.isfinite(tag.end_point1))
        assert not tag.is_cosmic

    def test_enum_cast(self):
        """Integer tags are cast to their enumerator."""
        tag = CosmicTag(tag=4)
        assert tag.tag is CosmicTagEnum.GEOMETRY_XX

    def test_invalid_enum(self):
        with pytest.raises(ValueError):
            CosmicTag(tag=7)

    def test_is_cosmic(self):
        assert CosmicTag(score=0.4).is_cosmic
        assert not CosmicTag(score=0.0).is_cosmic

    def test_scalar_dict(self):
        tag = CosmicTag(
            id=0,
            end_point1=[1.0, 2.0, 3.0],
            end_point2=[4.0, 5.0, 6.0],
            score=0.5,
            tag=CosmicTagEnum.GEOMETRY_Y,
            cosmic_level=4,
        )
        scalars = tag.scalar_dict()
        assert scalars["tag"] == "Geometry_Y"
        assert scalars["score"] == 0.5
        assert scalars["cosmic_level"] == 4
        assert scalars["end_point1_z"] == 3.0
        assert scalars["end_point2_x"] == 4.0

    def test_scalar_dict_subset(self):
        tag = CosmicTag(id=0, score=1.0)
        assert tag.scalar_dict(["score"]) == {"score": 1.0}
        with pytest.raises(AttributeError):
            tag.scalar_dict(["unknown"])

"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum

from .globals import *

__all__ = ["CosmicTagEnum"]


class CosmicTagEnum(IntEnum):
    """Enumerates all possible cosmic tag kinds."""

    UNKNOWN = UNKWN_TAG
    NOT_TAGGED = NOTAG_TAG
    GEOMETRY_YY = GEOYY_TAG
    GEOMETRY_YZ = GEOYZ_TAG
    GEOMETRY_ZZ = GEOZZ_TAG
    GEOMETRY_XX = GEOXX_TAG
    GEOMETRY_XY = GEOXY_TAG
    GEOMETRY_XZ = GEOXZ_TAG
    GEOMETRY_Y = GEOY_TAG
    GEOMETRY_Z = GEOZ_TAG
    GEOMETRY_X = GEOX_TAG
    OUTSIDE_DRIFT_PARTIAL = ODPAR_TAG

    @property
    def label(self):
        """Human-readable name of the tag (e.g. `Geometry_XX`)."""
        return TAG_LABELS[self.value]


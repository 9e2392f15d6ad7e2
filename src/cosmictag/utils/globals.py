"""Module which contains all global variables shared across the project."""

import numpy as np

# Cosmic tag identifiers (follows the numbering of anab::CosmicTagID_t)
UNKWN_TAG = -1
NOTAG_TAG = 0
GEOYY_TAG = 1
GEOYZ_TAG = 2
GEOZZ_TAG = 3
GEOXX_TAG = 4
GEOXY_TAG = 5
GEOXZ_TAG = 6
GEOY_TAG  = 21
GEOZ_TAG  = 22
GEOX_TAG  = 23
ODPAR_TAG = 100 # Outside drift, partial

# Cosmic tag labels
TAG_LABELS = {
    UNKWN_TAG: "Unknown",
    NOTAG_TAG: "NotTagged",
    GEOYY_TAG: "Geometry_YY",
    GEOYZ_TAG: "Geometry_YZ",
    GEOZZ_TAG: "Geometry_ZZ",
    GEOXX_TAG: "Geometry_XX",
    GEOXY_TAG: "Geometry_XY",
    GEOXZ_TAG: "Geometry_XZ",
    GEOY_TAG:  "Geometry_Y",
    GEOZ_TAG:  "Geometry_Z",
    GEOX_TAG:  "Geometry_X",
    ODPAR_TAG: "OutsideDrift_Partial",
}

# Cosmic levels assigned by the tagging decision table
NOT_COSMIC   = 0 # No evidence
OUT_OF_TIME  = 1 # Hits outside of the drift window
THROUGH_GOER = 2 # Enters and exits through the detector walls
Z_CROSSER    = 3 # Enters and exits through the upstream/downstream walls
ONE_SIDED    = 4 # Only one end point at a detector wall

# Cosmic score associated with each tag kind
TAG_SCORES = {
    NOTAG_TAG: 0.0,
    ODPAR_TAG: 1.0,
    GEOXX_TAG: 1.0,
    GEOYY_TAG: 1.0,
    GEOXY_TAG: 1.0,
    GEOXZ_TAG: 1.0,
    GEOYZ_TAG: 1.0,
    GEOZZ_TAG: 0.4,
    GEOX_TAG:  0.5,
    GEOY_TAG:  0.5,
    GEOZ_TAG:  0.5,
}

# Default distance to a detector wall (cm) under which a point is near it
DEFAULT_MARGIN = np.array([5.0, 5.0, 5.0])

# Number of standard deviations along the principal axis used to build
# end points when no space point can be used
AXIS_EXTENT_SCALE = 3.0

"""Decision table which classifies objects as cosmic rays based on the
proximity of their end points to the detector walls.

The proximity flags are stored in a (2, 3) boolean array, indexed as
`[end point][axis]`, with end point 0 the start and end point 1 the end.
"""

import numpy as np

from .enums import CosmicTagEnum
from .globals import (
    NOT_COSMIC,
    ONE_SIDED,
    OUT_OF_TIME,
    TAG_SCORES,
    THROUGH_GOER,
    Z_CROSSER,
)

__all__ = ["parse_margin", "boundary_flags", "classify_boundaries", "cosmic_score"]


def parse_margin(margin):
    """Parses a wall proximity margin into one value per axis.

    Parameters
    ----------
    margin : Union[float, List[float]]
        Margin shared between all axes, or one margin per axis

    Returns
    -------
    np.ndarray
        (3) Margin along each axis
    """
    margin = np.asarray(margin, dtype=np.float64)
    if margin.ndim == 0:
        margin = np.full(3, float(margin))
    if margin.shape != (3,):
        raise ValueError(
            f"The margin must be a scalar or a list of 3 values, got {margin}."
        )

    return margin


def boundary_flags(start, end, margin, width, half_height, length):
    """Checks which detector walls each end point of an object is close to.

    The x and z coordinates are measured from the walls at x = 0 and z = 0,
    the y coordinate from the center of the detector. An end point which is
    close to either wall along an axis is flagged for that axis.

    Parameters
    ----------
    start : np.ndarray
        (3) Start point
    end : np.ndarray
        (3) End point
    margin : np.ndarray
        (3) Distance to a wall under which a point is considered close to it
    width : float
        Extent of the detector along x
    half_height : float
        Half of the extent of the detector along y
    length : float
        Extent of the detector along z

    Returns
    -------
    np.ndarray
        (2, 3) Wall proximity flags, indexed as `[end point][axis]`
    """
    flags = np.zeros((2, 3), dtype=bool)
    for i, point in enumerate((start, end)):
        x, y, z = point
        flags[i, 0] = width - x < margin[0] or x < margin[0]
        flags[i, 1] = half_height - y < margin[1] or half_height + y < margin[1]
        flags[i, 2] = length - z < margin[2] or z < margin[2]

    return flags


def classify_boundaries(flags, out_of_time=False):
    """Classifies an object given the wall proximity flags of its end points.

    The rules are evaluated in order, the first one that matches wins:
    1. Both end points exit through an x or y wall, or the start point exits
       through an x or y wall and either end point is close to a z wall:
       through-going (XX, YY, XY, XZ or YZ);
    2. Both end points are close to a z wall: ZZ;
    3. Exactly one end point is close to a wall: X, Y or Z;
    4. Otherwise, the object is not tagged, unless it was found to be out
       of time.

    Note that the z-wall conditions of rule 1 are only checked in
    conjunction with the start point exiting.

    Parameters
    ----------
    flags : np.ndarray
        (2, 3) Wall proximity flags, as returned by :func:`boundary_flags`.
        If `None`, the geometric rules are skipped
    out_of_time : bool, default False
        Whether the object has hits outside of the drift window

    Returns
    -------
    int
        Cosmic level reached by the decision table
    CosmicTagEnum
        Tag kind
    """
    if flags is not None:
        near_x, near_y, near_z = flags[:, 0], flags[:, 1], flags[:, 2]

        # End points exiting through x or y walls
        exit_start = near_x[0] or near_y[0]
        exit_end = near_x[1] or near_y[1]
        exit_z1 = exit_start and near_z[1]
        exit_z2 = exit_start and near_z[0]

        # Through-going object
        if (exit_start and exit_end) or exit_z1 or exit_z2:
            if near_x[0] and near_x[1]:
                tag = CosmicTagEnum.GEOMETRY_XX
            elif near_y[0] and near_y[1]:
                tag = CosmicTagEnum.GEOMETRY_YY
            elif near_x.any() and near_y.any():
                tag = CosmicTagEnum.GEOMETRY_XY
            elif near_x.any() and near_z.any():
                tag = CosmicTagEnum.GEOMETRY_XZ
            else:
                tag = CosmicTagEnum.GEOMETRY_YZ

            return THROUGH_GOER, tag

        # Object entering and exiting through the z walls
        if near_z[0] and near_z[1]:
            return Z_CROSSER, CosmicTagEnum.GEOMETRY_ZZ

        # Object with a single end point close to a wall
        if flags[0].any() != flags[1].any():
            if near_x.any():
                tag = CosmicTagEnum.GEOMETRY_X
            elif near_y.any():
                tag = CosmicTagEnum.GEOMETRY_Y
            else:
                tag = CosmicTagEnum.GEOMETRY_Z

            return ONE_SIDED, tag

    if out_of_time:
        return OUT_OF_TIME, CosmicTagEnum.OUTSIDE_DRIFT_PARTIAL

    return NOT_COSMIC, CosmicTagEnum.NOT_TAGGED


def cosmic_score(tag):
    """Cosmic score associated with a tag kind.

    Parameters
    ----------
    tag : CosmicTagEnum
        Tag kind

    Returns
    -------
    float
        Cosmic score
    """
    return TAG_SCORES[CosmicTagEnum(tag).value]

"""Algorithms which estimate the extent and timing of a reconstructed object
from its principal axis, its hits and its space points.
"""

import numpy as np

from cosmictag.math import extremal_projections

from .globals import AXIS_EXTENT_SCALE
from .logger import logger

__all__ = ["select_axis", "check_timing", "project_extent", "axis_end_points"]


def select_axis(axes):
    """Picks the canonical principal axis of an object.

    When an object has two axes, the axis producer is expected to list the
    better one first. If the pair does not come in increasing order of
    identifier, it is reversed before the first axis is picked.

    Parameters
    ----------
    axes : List[PrincipalAxis]
        Axes associated with one object (at most two)

    Returns
    -------
    PrincipalAxis
        Canonical axis, `None` if the object has no axis
    """
    if len(axes) == 0:
        return None
    if len(axes) > 2:
        raise ValueError(
            f"An object can have at most two principal axes, got {len(axes)}."
        )

    if len(axes) > 1 and axes[0].id > axes[-1].id:
        axes = axes[::-1]

    return axes[0]


def check_timing(clusters, drift_window_ticks):
    """Checks whether any hit of an object falls outside of the drift window.

    A hit is out of time if its pulse starts before one full drift window
    or ends after two full drift windows. Once a hit of a cluster is found
    to be out of time, the remaining hits of that cluster are skipped but
    the following clusters are still scanned.

    Parameters
    ----------
    clusters : List[Cluster]
        Clusters associated with the object, each with its list of hits
    drift_window_ticks : float
        Number of ticks needed to drift across the full TPC

    Returns
    -------
    bool
        `True` if at least one hit is out of time
    """
    out_of_time = False
    for cluster in clusters:
        for hit in cluster.hits:
            logger.debug(
                "Hit %d, peak - RMS: %g, peak + RMS: %g, drift window: %d",
                hit.id,
                hit.peak_time_minus_rms,
                hit.peak_time_plus_rms,
                drift_window_ticks,
            )
            if (
                hit.peak_time_minus_rms < drift_window_ticks
                or hit.peak_time_plus_rms > 2.0 * drift_window_ticks
            ):
                out_of_time = True
                break

    return out_of_time


def axis_end_points(axis):
    """Estimates the end points of an object from its principal axis only.

    The end points are placed a fixed number of standard deviations away
    from the mean position, along the principal direction.

    Parameters
    ----------
    axis : PrincipalAxis
        Principal axis of the object

    Returns
    -------
    np.ndarray
        (3) Start point
    np.ndarray
        (3) End point
    """
    max_arc_length = AXIS_EXTENT_SCALE * np.sqrt(axis.eigenvalues[0])
    start = axis.mean - max_arc_length * axis.direction
    end = axis.mean + max_arc_length * axis.direction

    return start, end


def project_extent(axis, points=None):
    """Estimates the end points of an object.

    If space points are provided and the axis is not degenerate, the end
    points are the space points with the smallest and the largest arc length
    along the principal direction. Otherwise, they are derived from the axis
    itself (see :func:`axis_end_points`).

    Note that the transverse spread used to check for a degenerate axis
    combines the second eigenvalue with itself.

    Parameters
    ----------
    axis : PrincipalAxis
        Principal axis of the object
    points : np.ndarray, optional
        (N, 3) Space point coordinates

    Returns
    -------
    np.ndarray
        (3) Start point
    np.ndarray
        (3) End point
    bool
        `True` if the end points were obtained from the space points
    """
    # Initialize the end points from the axis alone
    start, end = axis_end_points(axis)
    if points is None or len(points) == 0:
        return start, end, False

    # Check that the axis spread is well defined
    eigen_val0 = np.sqrt(axis.eigenvalues[0])
    trans_rms = np.sqrt(axis.eigenvalues[1] ** 2 + axis.eigenvalues[1] ** 2)
    if not (eigen_val0 > 0.0 and trans_rms > 0.0):
        return start, end, False

    # Find the extremal points along the principal axis
    points = np.ascontiguousarray(points, dtype=np.float64).reshape(-1, 3)
    first, last = extremal_projections(
        points,
        np.ascontiguousarray(axis.mean, dtype=np.float64),
        np.ascontiguousarray(axis.direction, dtype=np.float64),
    )
    if first > -1:
        start = points[first].copy()
    if last > -1:
        end = points[last].copy()

    return start, end, True

"""Numba JIT compiled implementation of linear algebra routines."""

import numba as nb
import numpy as np

__all__ = ["arc_lengths", "extremal_projections"]


@nb.njit(cache=True)
def arc_lengths(
    points: nb.float64[:, :], origin: nb.float64[:], direction: nb.float64[:]
) -> nb.float64[:]:
    """Compute the signed arc length of a set of points along a direction.

    The arc length of a point is the projection of its displacement with
    respect to the origin onto the reference direction.

    Parameters
    ----------
    points : np.ndarray
        (N, 3) Point coordinates
    origin : np.ndarray
        (3) Reference origin
    direction : np.ndarray
        (3) Reference direction

    Returns
    -------
    np.ndarray
        (N) Signed arc length of each point

    Examples
    --------
    >>> points = np.array([[1., 0., 0.], [-2., 5., 0.]])
    >>> arc_lengths(points, np.zeros(3), np.array([1., 0., 0.]))
    array([ 1., -2.])
    """
    lengths = np.empty(len(points), dtype=np.float64)
    for i in range(len(points)):
        length = 0.0
        for j in range(points.shape[1]):
            length += (points[i, j] - origin[j]) * direction[j]
        lengths[i] = length

    return lengths


@nb.njit(cache=True)
def extremal_projections(
    points: nb.float64[:, :], origin: nb.float64[:], direction: nb.float64[:]
) -> (nb.int64, nb.int64):
    """Find the points with the smallest and largest arc lengths along a
    direction.

    Comparisons are strict, so that the first point encountered wins in case
    of a tie. Points with an undefined (NaN) arc length are never selected.

    Parameters
    ----------
    points : np.ndarray
        (N, 3) Point coordinates
    origin : np.ndarray
        (3) Reference origin
    direction : np.ndarray
        (3) Reference direction

    Returns
    -------
    int
        Index of the point with the smallest arc length (-1 if none)
    int
        Index of the point with the largest arc length (-1 if none)
    """
    lengths = arc_lengths(points, origin, direction)
    first, last = -1, -1
    min_length, max_length = np.inf, -np.inf
    for i in range(len(lengths)):
        if lengths[i] < min_length:
            min_length = lengths[i]
            first = i
        if lengths[i] > max_length:
            max_length = lengths[i]
            last = i

    return first, last

"""Module with a class object which represents a table of associations.

Associations link two collections of objects by their identifiers, without
either object holding a reference to the other.
"""

from collections import defaultdict

import numpy as np

__all__ = ["Association"]


class Association:
    """Flat table of (left, right) identifier pairs.

    The order in which the pairs are added is preserved, so that the objects
    associated with a given left identifier are returned in insertion order.

    Attributes
    ----------
    left : np.ndarray
        (N) Identifiers on the left side of the association
    right : np.ndarray
        (N) Identifiers on the right side of the association
    """

    def __init__(self, pairs=None):
        """Initialize the association table.

        Parameters
        ----------
        pairs : np.ndarray, optional
            (N, 2) Initial set of (left, right) pairs
        """
        self._left, self._right = [], []
        self._index = None
        if pairs is not None:
            pairs = np.asarray(pairs, dtype=np.int64).reshape(-1, 2)
            self._left = pairs[:, 0].tolist()
            self._right = pairs[:, 1].tolist()

    def __len__(self):
        """Number of pairs in the table."""
        return len(self._left)

    def __iter__(self):
        """Iterates over the (left, right) pairs."""
        return zip(self._left, self._right)

    def __eq__(self, other):
        if not isinstance(other, Association):
            return False

        return self._left == other._left and self._right == other._right

    @property
    def left(self):
        return np.array(self._left, dtype=np.int64)

    @property
    def right(self):
        return np.array(self._right, dtype=np.int64)

    @property
    def pairs(self):
        """All pairs as an array.

        Returns
        -------
        np.ndarray
            (N, 2) Array of (left, right) pairs
        """
        return np.column_stack((self.left, self.right)).reshape(-1, 2)

    def add(self, left, right):
        """Register an association between two identifiers.

        Parameters
        ----------
        left : int
            Left identifier
        right : int
            Right identifier
        """
        self._left.append(int(left))
        self._right.append(int(right))
        self._index = None

    def find_many(self, left):
        """Fetch all the right identifiers associated with a left identifier.

        Parameters
        ----------
        left : int
            Left identifier

        Returns
        -------
        List[int]
            Associated right identifiers, in insertion order
        """
        if self._index is None:
            self._index = defaultdict(list)
            for l, r in zip(self._left, self._right):
                self._index[l].append(r)

        return list(self._index.get(int(left), []))

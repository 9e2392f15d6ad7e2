"""Basic detector components.

This currently handles:
- :class:`Box` which corresponds to a box-shaped TPC volume.
- :class:`DriftProperties` which holds the charge drift/readout properties.
"""

from dataclasses import dataclass

import numpy as np

__all__ = ["Box", "DriftProperties"]


@dataclass(frozen=True, eq=False)
class Box:
    """Class which holds all methods associated with a box-shaped component.

    Attributes
    ----------
    boundaries : np.ndarray
        (3, 2) Box boundaries
        - 3 is the number of dimensions
        - 2 corresponds to the lower/upper boundaries along each axis
    """

    boundaries: np.ndarray

    @classmethod
    def from_bounds(cls, lower, upper):
        """Initialize the box object from its lower and upper corners.

        Parameters
        ----------
        lower : np.ndarray
            (3,) Lower bounds of the box
        upper : np.ndarray
            (3,) Upper bounds of the box
        """
        lower = np.asarray(lower, dtype=np.float64)
        upper = np.asarray(upper, dtype=np.float64)
        if lower.shape != (3,) or upper.shape != (3,):
            raise ValueError("The box bounds must be provided as 3-vectors.")
        if np.any(upper <= lower):
            raise ValueError(
                f"Box upper bounds {upper} must exceed the lower bounds {lower}."
            )

        return cls(np.vstack((lower, upper)).T)

    @property
    def lower(self) -> np.ndarray:
        """(3,) Lower bounds of the box."""
        return self.boundaries[:, 0]

    @property
    def upper(self) -> np.ndarray:
        """(3,) Upper bounds of the box."""
        return self.boundaries[:, 1]

    @property
    def center(self) -> np.ndarray:
        """(3,) Center of the box."""
        return np.mean(self.boundaries, axis=1)

    @property
    def dimensions(self) -> np.ndarray:
        """(3,) Box dimensions."""
        return self.boundaries[:, 1] - self.boundaries[:, 0]

    def contains(self, points: np.ndarray) -> np.ndarray:
        """Checks whether points are inside of the box.

        Parameters
        ----------
        points : np.ndarray
            (N, 3) Point coordinates

        Returns
        -------
        np.ndarray
            (N) Boolean containment mask
        """
        points = np.atleast_2d(points)
        return np.all((points >= self.lower) & (points <= self.upper), axis=1)


@dataclass(frozen=True)
class DriftProperties:
    """Charge drift and readout properties of a TPC.

    Attributes
    ----------
    velocity : float
        Drift velocity of the ionization electrons in cm/us
    sampling_rate : float
        Period of the readout clock in ns/tick
    """

    velocity: float
    sampling_rate: float

    def __post_init__(self):
        if self.velocity <= 0.0 or self.sampling_rate <= 0.0:
            raise ValueError(
                "The drift velocity and the sampling rate must be positive."
            )

    @property
    def distance_per_tick(self) -> float:
        """Drift distance covered in one readout tick (cm/tick)."""
        return self.velocity * self.sampling_rate / 1000.0

    def ticks(self, distance: float) -> int:
        """Number of readout ticks needed to drift over a given distance.

        The result is truncated to an integer number of ticks.

        Parameters
        ----------
        distance : float
            Drift distance in cm

        Returns
        -------
        int
            Number of ticks
        """
        return int(distance / self.distance_per_tick)

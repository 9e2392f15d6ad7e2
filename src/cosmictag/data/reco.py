"""Module with the data classes which describe the reconstructed inputs of
the cosmic taggers.

These copy the relevant parts of the structure of the LArSoft
:class:`recob::PFParticle`, :class:`recob::PCAxis`, :class:`recob::Cluster`,
:class:`recob::Hit` and :class:`recob::SpacePoint` data products.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .base import DataBase

__all__ = ["RecoObject", "PrincipalAxis", "Hit", "Cluster", "SpacePoint"]


@dataclass(eq=False)
class RecoObject(DataBase):
    """Reconstructed particle-flow object.

    The object does not own its axes, clusters or space points, those are
    linked to it through association tables keyed by its `id`.

    Attributes
    ----------
    id : int
        Identifier of the object in the event
    """

    id: int = -1


@dataclass(eq=False)
class PrincipalAxis(DataBase):
    """Principal axis summary of a 3D point cloud.

    Attributes
    ----------
    id : int
        Identifier of the axis, as assigned by the axis producer
    mean : np.ndarray
        (3) Mean position of the point cloud
    eigenvalues : np.ndarray
        (3) Eigenvalues of the covariance matrix, dominant spread first
    eigenvectors : np.ndarray
        (3, 3) Eigenvectors of the covariance matrix, one per row, the first
        row being the principal direction
    """

    id: int = -1
    mean: np.ndarray = None
    eigenvalues: np.ndarray = None
    eigenvectors: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (
        ("mean", 3),
        ("eigenvalues", 3),
        ("eigenvectors", ((3, 3), np.float64)),
    )

    # Attributes specifying coordinates
    _pos_attrs = ("mean",)

    @property
    def direction(self):
        """Principal direction of the axis.

        Returns
        -------
        np.ndarray
            (3) Eigenvector associated with the dominant eigenvalue
        """
        return self.eigenvectors[0]


@dataclass(eq=False)
class Hit(DataBase):
    """Reconstructed 2D hit on a readout wire.

    Attributes
    ----------
    id : int
        Identifier of the hit
    peak_time : float
        Time of the signal peak in ticks
    peak_time_minus_rms : float
        Peak time minus the signal RMS in ticks
    peak_time_plus_rms : float
        Peak time plus the signal RMS in ticks
    """

    id: int = -1
    peak_time: float = -np.inf
    peak_time_minus_rms: float = -np.inf
    peak_time_plus_rms: float = -np.inf


@dataclass(eq=False)
class Cluster(DataBase):
    """2D cluster of hits.

    Attributes
    ----------
    id : int
        Identifier of the cluster
    hits : List[Hit]
        Ordered list of hits which make up the cluster
    """

    id: int = -1
    hits: List[Hit] = field(default_factory=list)

    # The hit list cannot be flattened into scalars
    _skip_attrs = ("hits",)

    @property
    def size(self):
        """Number of hits in the cluster."""
        return len(self.hits)


@dataclass(eq=False)
class SpacePoint(DataBase):
    """Reconstructed 3D space point.

    Attributes
    ----------
    id : int
        Identifier of the space point
    position : np.ndarray
        (3) Position of the space point in cm
    """

    id: int = -1
    position: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("position", 3),)

    # Attributes specifying coordinates
    _pos_attrs = ("position",)

"""Module with the detector geometry class used by the cosmic taggers.

The geometry describes a single box-shaped TPC with the conventions of the
LArSoft single-TPC detectors:
- x is the drift coordinate, with x = 0 at the anode plane
- y is the vertical coordinate, centered at 0
- z is the beam coordinate, with z = 0 at the upstream wall
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .detector import Box, DriftProperties

__all__ = ["Geometry"]


@dataclass(frozen=True, eq=False)
class Geometry:
    """Handles the geometry functions needed by the cosmic taggers.

    Attributes
    ----------
    name : str
        Name of the detector
    tag : str
        Tag or label for the geometry instance
    version : str
        Version number of the geometry
    tpc : Box
        Active TPC volume
    drift : DriftProperties
        Charge drift and readout properties
    """

    name: str
    tag: Optional[str]
    version: Optional[str]
    tpc: Box
    drift: DriftProperties

    @classmethod
    def from_config(
        cls,
        name: str,
        tpc: Dict[str, Any],
        drift: Dict[str, Any],
        tag: Optional[str] = None,
        version: Optional[str] = None,
    ):
        """Build a geometry from its configuration blocks.

        Parameters
        ----------
        name : str
            Name of the detector
        tpc : Dict[str, Any]
            TPC volume definition (`lower` and `upper` corners, in cm)
        drift : Dict[str, Any]
            Drift properties (`velocity` in cm/us, `sampling_rate` in ns)
        tag : str, optional
            Tag or label for the geometry instance
        version : str, optional
            Version number of the geometry

        Returns
        -------
        Geometry
            Geometry instance
        """
        return cls(
            name=name,
            tag=tag,
            version=str(version) if version is not None else None,
            tpc=Box.from_bounds(**tpc),
            drift=DriftProperties(**drift),
        )

    @property
    def width(self) -> float:
        """Full extent of the TPC along the drift (x) axis in cm."""
        return float(self.tpc.dimensions[0])

    @property
    def half_width(self) -> float:
        """Half of the extent of the TPC along the drift (x) axis in cm."""
        return self.width / 2.0

    @property
    def half_height(self) -> float:
        """Half of the extent of the TPC along the vertical (y) axis in cm."""
        return float(self.tpc.dimensions[1] / 2.0)

    @property
    def length(self) -> float:
        """Full extent of the TPC along the beam (z) axis in cm."""
        return float(self.tpc.dimensions[2])

    @property
    def drift_window_ticks(self) -> int:
        """Number of readout ticks it takes to drift across the full TPC."""
        return self.drift.ticks(2.0 * self.half_width)

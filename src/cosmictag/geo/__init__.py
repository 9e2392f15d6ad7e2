"""Detector geometry description.

- `Geometry`: TPC volume and drift properties of a single-TPC detector
- `geo_factory`: Loads one of the detector geometries shipped with the package
"""

from .base import Geometry
from .detector import Box, DriftProperties
from .factories import geo_factory

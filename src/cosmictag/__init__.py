"""Top-level module of the cosmictag source code."""

# Import main workflow entry point
from .driver import Driver
from .version import __version__

# Import commonly used data structures
from .data import Association, CosmicTag
from .geo import Geometry, geo_factory
from .utils.enums import CosmicTagEnum

"""Data structures consumed and produced by the cosmic taggers.

**Reconstructed inputs:**
- `RecoObject`: Particle-flow object, linked to the other inputs by id
- `PrincipalAxis`: Principal axis summary of an object's point cloud
- `Cluster`, `Hit`: 2D clusters and the hits they are made of
- `SpacePoint`: 3D space points

**Outputs:**
- `CosmicTag`: Graded cosmic-ray tag of one object
- `Association`: Flat table of identifier pairs linking two collections
"""

from .assn import *
from .reco import *
from .tag import *

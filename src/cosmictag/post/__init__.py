"""Post-processing tools which tag reconstructed objects.

**Core Post-Processing Management:**
- `PostManager`: Loads the configured post-processors once and runs them
  on each entry, in decreasing order of priority

**Algorithms:**
- `CosmicPCAxisTagger` (`cosmic_pca_axis`): Tags objects whose hits are out
  of the drift window or whose principal-axis extent reaches the detector
  walls

**Example Configuration:**
```yaml
post:
  cosmic_pca_axis:
    margin: [5, 5, 5]
```
"""

from .manager import PostManager

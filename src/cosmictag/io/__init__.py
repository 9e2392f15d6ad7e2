"""I/O tools for reading reconstructed events and writing cosmic tags.

- `read`: readers which load one event at a time into a dictionary of data
  products (currently HDF5 files only)
- `write`: writers which store the tagger output (currently CSV files only)

**Example configuration:**
```yaml
io:
  reader:
    name: hdf5
    file_keys: events.h5
  writer:
    name: csv
    file_name: cosmic_tags.csv
```
"""

from .factories import *

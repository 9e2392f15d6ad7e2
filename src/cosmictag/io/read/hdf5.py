"""Contains a reader class dedicated to loading events from HDF5 files."""

import h5py
import numpy as np

from cosmictag.data import (
    Association,
    Cluster,
    Hit,
    PrincipalAxis,
    RecoObject,
    SpacePoint,
)
from cosmictag.utils.logger import logger

from .base import ReaderBase

__all__ = ["HDF5Reader"]


class HDF5Reader(ReaderBase):
    """Class which reads reconstructed events stored in HDF5 files.

    The files must be structured as follows:
      - An `events` group with one sub-group per entry, named after the
        index of the entry in the file (`events/0`, `events/1`, ...)
      - Each entry group holds flat datasets which describe the objects,
        their principal axes, clusters, hits, space points and the
        association tables which link them

    A collection which is absent from an entry group is loaded as `None`.
    """

    name = "hdf5"

    # Names of the association tables, as stored in the entry groups
    assn_keys = ("object_axis_assn", "object_cluster_assn", "object_point_assn")

    def __init__(
        self,
        file_keys,
        max_print_files=10,
        n_entry=None,
        n_skip=None,
        entry_list=None,
        skip_entry_list=None,
    ):
        """Initalize the HDF5 file reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths to the HDF5 files to be read
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        skip_entry_list : list, optional
            List of integer entry IDs to skip from the index
        """
        # Process the list of files
        self.process_file_paths(file_keys, max_print_files)

        # Loop over the input files, build a map from index to file ID
        self.num_entries = 0
        self.file_index = []
        self.file_offsets = np.empty(len(self.file_paths), dtype=np.int64)
        for i, path in enumerate(self.file_paths):
            with h5py.File(path, "r") as in_file:
                # Check that there are events in the file
                assert "events" in in_file, "File does not contain an event group"

                # Update the total number of entries
                num_entries = len(in_file["events"])
                self.file_index.append(i * np.ones(num_entries, dtype=np.int64))
                self.file_offsets[i] = self.num_entries
                self.num_entries += num_entries

        # Dump the number of entries to load
        logger.info("Total number of entries in the file(s): %d\n", self.num_entries)

        # Concatenate the file indexes into one
        self.file_index = np.concatenate(self.file_index)

        # Process the entry list
        self.process_entry_list(n_entry, n_skip, entry_list, skip_entry_list)

    def get(self, idx):
        """Returns a specific entry in the file.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        data : dict
            Dictionary of data products corresponding to one event
        """
        # Get the appropriate entry index
        assert idx < len(self.entry_index)
        file_idx = self.get_file_index(idx)
        entry_idx = self.get_file_entry_index(idx)

        # Use the events group to find the data products of this entry
        with h5py.File(self.file_paths[file_idx], "r") as in_file:
            group = in_file["events"][str(entry_idx)]
            data = self.load_event(group)

        # Store the indexes of the entry
        data["index"] = int(self.entry_index[idx])
        data["file_index"] = file_idx
        data["file_entry_index"] = entry_idx

        return data

    @classmethod
    def load_event(cls, group):
        """Builds the data products of one event from its HDF5 group.

        Parameters
        ----------
        group : h5py.Group
            Group which holds the datasets of one event

        Returns
        -------
        dict
            Dictionary of data products
        """
        data = {
            "objects": cls.load_objects(group),
            "axes": cls.load_axes(group),
            "clusters": cls.load_clusters(group),
            "points": cls.load_points(group),
        }
        for key in cls.assn_keys:
            pairs = cls.load_key(group, key)
            data[key] = Association(pairs) if pairs is not None else None

        return data

    @staticmethod
    def load_key(group, key):
        """Fetch one dataset from an event group.

        Parameters
        ----------
        group : h5py.Group
            Group which holds the datasets of one event
        key : str
            Name of the dataset

        Returns
        -------
        np.ndarray
            Content of the dataset, `None` if it is absent
        """
        if key not in group:
            return None

        return group[key][()]

    @classmethod
    def load_objects(cls, group):
        ids = cls.load_key(group, "object_id")
        if ids is None:
            return None

        return [RecoObject(id=int(i)) for i in ids]

    @classmethod
    def load_axes(cls, group):
        keys = ("axis_id", "axis_mean", "axis_eigenvalues", "axis_eigenvectors")
        values = [cls.load_key(group, k) for k in keys]
        if any(v is None for v in values):
            return None

        ids, means, eigenvalues, eigenvectors = values
        eigenvectors = eigenvectors.reshape(-1, 3, 3)

        return [
            PrincipalAxis(
                id=int(ids[i]),
                mean=means[i],
                eigenvalues=eigenvalues[i],
                eigenvectors=eigenvectors[i],
            )
            for i in range(len(ids))
        ]

    @classmethod
    def load_clusters(cls, group):
        """Builds the clusters, each with its ordered list of hits.

        Hits are assigned to clusters through the `hit_cluster` dataset,
        which holds the cluster identifier of each hit. A cluster without
        any hit dataset is loaded with an empty hit list. If the hits are
        stored but one of their required datasets is absent, the whole
        collection is considered absent.
        """
        ids = cls.load_key(group, "cluster_id")
        if ids is None:
            return None

        clusters = [Cluster(id=int(i)) for i in ids]
        hit_ids = cls.load_key(group, "hit_id")
        if hit_ids is None:
            return clusters

        keys = ("hit_cluster", "hit_peak_time_minus_rms", "hit_peak_time_plus_rms")
        values = [cls.load_key(group, k) for k in keys]
        if any(v is None for v in values):
            missing = [k for k, v in zip(keys, values) if v is None]
            logger.warning("Incomplete hit datasets, missing %s.", missing)
            return None

        cluster_index = {c.id: c for c in clusters}
        hit_cluster, minus_rms, plus_rms = values
        peak_time = cls.load_key(group, "hit_peak_time")
        for i, hit_id in enumerate(hit_ids):
            cluster_id = int(hit_cluster[i])
            if cluster_id not in cluster_index:
                logger.warning(
                    "Hit %d points to an unknown cluster %d, skip.", hit_id, cluster_id
                )
                continue

            hit = Hit(
                id=int(hit_id),
                peak_time=float(peak_time[i]) if peak_time is not None else -np.inf,
                peak_time_minus_rms=float(minus_rms[i]),
                peak_time_plus_rms=float(plus_rms[i]),
            )
            cluster_index[cluster_id].hits.append(hit)

        return clusters

    @classmethod
    def load_points(cls, group):
        ids = cls.load_key(group, "point_id")
        positions = cls.load_key(group, "point_position")
        if ids is None or positions is None:
            return None

        positions = positions.reshape(-1, 3)

        return [
            SpacePoint(id=int(ids[i]), position=positions[i]) for i in range(len(ids))
        ]

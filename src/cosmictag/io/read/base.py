"""Contains the data reader base class.

Data readers are used to extract specific entries from files and store their
data products into dictionaries to be used downstream.
"""

import glob
import os

import numpy as np

from cosmictag.utils.logger import logger

__all__ = ["ReaderBase"]


class ReaderBase:
    """Parent reader class which provides common functions between all readers.

    This class provides these basic functions:
    1. Method to parse the requested file list or file list file into a list of
       paths to existing files (throws if nothing is found)
    2. Method to produce a list of entries in the file(s) as selected by the
       provided parameters
    3. Essential `__len__` and `__getitem__` methods. Must define the
       `get` function in the inheriting class for both of them to work.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    num_entries : int
        Total number of entries in the files provided
    entry_index : np.ndarray
        List of global indexes to cycle through
    file_paths : List[str]
        List of files to read data from
    file_offsets : np.ndarray
        Offsets between the global index and each individual file start index
    file_index : np.ndarray
        Index of the file each global entry lives in
    """

    name = ""
    num_entries = None
    entry_index = None
    file_paths = None
    file_offsets = None
    file_index = None

    def __len__(self):
        """Returns the number of selected entries in the file(s).

        Returns
        -------
        int
            Number of entries in the file
        """
        return len(self.entry_index)

    def __getitem__(self, idx):
        """Returns a specific entry in the file.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        dict
            One entry-worth of data from the loaded files
        """
        return self.get(idx)

    def get(self, idx):
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def process_file_paths(self, file_keys, max_print_files=10):
        """Process list of files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths (or glob patterns) to the files to be read.
            If a single `.txt` file is provided, it is interpreted as a file
            containing the list of paths, one per line
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        """
        if file_keys is None:
            raise ValueError("No input `file_keys` provided, abort.")

        # If the file_keys points to a single text file, it must be a text
        # file containing a list of file paths. Parse it to a list.
        if isinstance(file_keys, str) and os.path.splitext(file_keys)[-1] == ".txt":
            if not os.path.isfile(file_keys):
                raise FileNotFoundError(f"File list not found: {file_keys}")
            with open(file_keys, "r", encoding="utf-8") as f:
                file_keys = [l for l in f.read().splitlines() if l.strip()]

        # Convert the file keys to a list of file paths with glob
        if isinstance(file_keys, str):
            file_keys = [file_keys]

        self.file_paths = []
        for file_key in file_keys:
            file_paths = glob.glob(file_key)
            if not file_paths:
                raise FileNotFoundError(
                    f"File key {file_key} yielded no compatible path."
                )
            self.file_paths.extend(file_paths)

        self.file_paths = sorted(self.file_paths)

        # Print out the list of loaded files
        num_files = len(self.file_paths)
        file_list = " - " + "\n - ".join(self.file_paths[:max_print_files])
        file_list += "\n ... \n" if num_files > max_print_files else "\n"
        logger.info("Will load %d file(s):\n%s", num_files, file_list)

    def process_entry_list(
        self, n_entry=None, n_skip=None, entry_list=None, skip_entry_list=None
    ):
        """Create a list of entries that can be accessed by :meth:`__getitem__`.

        Parameters
        ----------
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        skip_entry_list : list, optional
            List of integer entry IDs to skip from the index
        """
        # Make sure the parameters are sensible
        by_count = n_entry is not None or n_skip is not None
        by_list = entry_list is not None or skip_entry_list is not None
        if by_count and by_list:
            raise ValueError(
                "Cannot specify `n_entry` or `n_skip` at the same time "
                "as `entry_list` or `skip_entry_list`."
            )
        if entry_list is not None and skip_entry_list is not None:
            raise ValueError(
                "Cannot specify both `entry_list` and `skip_entry_list` at "
                "the same time."
            )

        # Create a list of entries to be loaded
        entry_index = np.arange(self.num_entries, dtype=np.int64)
        if by_count:
            n_skip = n_skip if n_skip else 0
            n_entry = n_entry if n_entry and n_entry > 0 else None
            entry_index = entry_index[n_skip:]
            if n_entry is not None:
                entry_index = entry_index[:n_entry]

        elif entry_list is not None:
            entry_list = self.parse_entry_list(entry_list)
            if np.any(entry_list >= self.num_entries):
                raise IndexError("Values in `entry_list` outside of bounds.")
            entry_index = entry_index[entry_list]

        elif skip_entry_list is not None:
            skip_entry_list = self.parse_entry_list(skip_entry_list)
            entry_mask = np.ones(self.num_entries, dtype=bool)
            entry_mask[skip_entry_list[skip_entry_list < self.num_entries]] = False
            entry_index = entry_index[entry_mask]

        if not len(entry_index):
            raise ValueError("Must at least have one entry to load.")

        logger.info("Total number of entries selected: %d\n", len(entry_index))
        self.entry_index = entry_index

    @staticmethod
    def parse_entry_list(entry_list):
        """Parses a list of entries, or a text file which contains one.

        Parameters
        ----------
        entry_list : Union[List[int], str]
            List of entries or path to a text file with one entry per line

        Returns
        -------
        np.ndarray
            Array of entry IDs
        """
        if isinstance(entry_list, str):
            if not os.path.isfile(entry_list):
                raise FileNotFoundError(f"Entry list not found: {entry_list}")
            with open(entry_list, "r", encoding="utf-8") as f:
                entry_list = [int(l) for l in f.read().split()]

        return np.asarray(entry_list, dtype=np.int64)

    def get_file_index(self, idx):
        """Index of the file which contains a given entry.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        int
            Index of the file in the file list
        """
        return int(self.file_index[self.entry_index[idx]])

    def get_file_entry_index(self, idx):
        """Index of a given entry within the file which contains it.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        int
            Index of the entry in its file
        """
        file_idx = self.get_file_index(idx)
        return int(self.entry_index[idx] - self.file_offsets[file_idx])

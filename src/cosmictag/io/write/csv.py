"""Module to write cosmic tags to CSV."""

import os

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes cosmic tags to a CSV file.

    Builds a CSV file with one row per cosmic tag produced by the taggers.
    Each row holds the entry index, the tag identifier, the identifiers of the
    object and axes associated with the tag and the scalar attributes of the
    tag itself.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: csv
            file_name: cosmic_tags.csv
    """

    name = "csv"

    def __init__(
        self,
        file_name="cosmic_tags.csv",
        overwrite=False,
        append=False,
        accept_missing=False,
        tag_key="cosmic_tags",
        object_assn_key="object_tag_assn",
        axis_assn_key="axis_tag_assn",
    ):
        """Initialize the basics of the output file.

        Parameters
        ----------
        file_name : str, default 'cosmic_tags.csv'
            Name of the output CSV file
        overwrite : bool, default False
            If True, overwrite the output file if it already exists
        append : bool, default False
            If True, add more rows to an existing CSV file
        accept_missing : bool, default False
            Tolerate missing keys
        tag_key : str, default 'cosmic_tags'
            Data product which holds the list of tags
        object_assn_key : str, default 'object_tag_assn'
            Data product which associates objects with tags
        axis_assn_key : str, default 'axis_tag_assn'
            Data product which associates axes with tags
        """
        # Check that output file does not already exist, if requested
        if not overwrite and not append and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        # Store persistent attributes
        self.file_name = file_name
        self.append_file = append
        self.accept_missing = accept_missing
        self.tag_key = tag_key
        self.object_assn_key = object_assn_key
        self.axis_assn_key = axis_assn_key
        self.result_keys = None
        if self.append_file:
            if not os.path.isfile(file_name):
                raise FileNotFoundError(
                    f"File not found at path: {file_name}. When using "
                    "`append=True` in CSVWriter, the file must exist at "
                    "the prescribed path before data is written to it."
                )

            with open(self.file_name, "r", encoding="utf-8") as out_file:
                self.result_keys = out_file.readline().strip().split(",")

    def __call__(self, data):
        """Writes the tags of one entry, one row per tag.

        Parameters
        ----------
        data : dict
            Dictionary of data products, including the tagger output
        """
        for row in self.tag_rows(data):
            self.append(row)

    def tag_rows(self, data):
        """Converts the tags of one entry into a list of CSV rows.

        Parameters
        ----------
        data : dict
            Dictionary of data products, including the tagger output

        Returns
        -------
        List[dict]
            One dictionary of scalars per tag
        """
        tags = data.get(self.tag_key, None)
        if not tags:
            return []

        # Invert the associations to find the objects and axes of each tag
        object_ids, axis_ids = {}, {}
        for obj_id, tag_id in data[self.object_assn_key]:
            object_ids[tag_id] = obj_id
        for axis_id, tag_id in data[self.axis_assn_key]:
            axis_ids.setdefault(tag_id, []).append(str(axis_id))

        rows = []
        for tag in tags:
            row = {
                "entry": data.get("index", -1),
                "tag_id": tag.id,
                "object_id": object_ids.get(tag.id, -1),
                "axis_ids": ";".join(axis_ids.get(tag.id, [])),
            }
            attrs = tag.scalar_dict()
            attrs.pop("id")
            row.update(attrs)
            rows.append(row)

        return rows

    def create(self, result_blob):
        """Initialize the header of the CSV file, record the keys to be stored.

        Parameters
        ----------
        result_blob : dict
            Dictionary of scalars to be stored in one row
        """
        # Save the list of keys to store
        self.result_keys = list(result_blob.keys())

        # Create a header and write it to file
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            header_str = ",".join(self.result_keys)
            out_file.write(header_str + "\n")

    def append(self, result_blob):
        """Append one row to the CSV file.

        Parameters
        ----------
        result_blob : dict
            Dictionary of scalars to be stored in one row
        """
        if self.result_keys is None:
            # If this function has never been called, initialize the CSV file
            self.create(result_blob)

        elif list(result_blob.keys()) != self.result_keys:
            # Check the discrepancies with the header
            missing = self.array_diff(self.result_keys, result_blob.keys())
            excess = self.array_diff(result_blob.keys(), self.result_keys)
            if len(excess):
                raise AssertionError(
                    "There are keys in this row which were not present when "
                    f"the CSV file was initialized. New keys: {sorted(excess)}"
                )

            if len(missing) and not self.accept_missing:
                raise AssertionError(
                    "There are keys missing in this row which were present "
                    f"when the CSV file was initialized. Missing keys: {sorted(missing)}"
                )

            result_blob = {k: result_blob.get(k, -1) for k in self.result_keys}

        # Append file
        with open(self.file_name, "a", encoding="utf-8") as out_file:
            result_str = ",".join([str(result_blob[k]) for k in self.result_keys])
            out_file.write(result_str + "\n")

    @staticmethod
    def array_diff(array_x, array_y):
        """Returns the elements of the first array absent from the second.

        Parameters
        ----------
        array_x : List[str]
            First array of strings
        array_y : List[str]
            Second array of strings

        Returns
        -------
        Set[str]
            Set of keys that appear in `array_x` but not in `array_y`.
        """
        return set(array_x).difference(set(array_y))

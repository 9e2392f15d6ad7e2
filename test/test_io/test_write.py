"""Test that the writer classes work as intended."""

import csv
import os

import numpy as np
import pytest

from cosmictag.io import writer_factory
from cosmictag.io.write import CSVWriter
from cosmictag.post.cosmic import CosmicPCAxisTagger


@pytest.fixture(name="csv_output")
def fixture_csv_output(tmp_path):
    """Create a dummy output path for a CSV file."""
    return os.path.join(tmp_path, "dummy.csv")


@pytest.fixture(name="tagged")
def fixture_tagged(geometry, event):
    """Data dictionary of a toy event which went through the tagger."""
    event.add_object([[2.0, 0.0, 500.0], [248.0, 0.0, 500.0]], axis_ids=[5, 3])
    event.add_object([[100.0, 0.0, 500.0], [150.0, 0.0, 500.0]], axis_ids=[7])
    data = event.data
    data["index"] = 12
    data.update(CosmicPCAxisTagger(geometry)(data))

    return data


def read_csv(path):
    """Reads a CSV file back as a list of dictionaries."""
    with open(path, "r", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestCSVWriter:
    """Test the storage of cosmic tags to CSV files."""

    def test_tag_rows(self, csv_output, tagged):
        writer = CSVWriter(csv_output)
        writer(tagged)

        rows = read_csv(csv_output)
        assert len(rows) == 2
        assert list(rows[0].keys())[:4] == ["entry", "tag_id", "object_id", "axis_ids"]

        assert rows[0]["entry"] == "12"
        assert rows[0]["tag_id"] == "0"
        assert rows[0]["object_id"] == "0"
        assert rows[0]["axis_ids"] == "5;3"
        assert rows[0]["tag"] == "Geometry_XX"
        assert float(rows[0]["score"]) == 1.0
        assert int(rows[0]["cosmic_level"]) == 2
        assert float(rows[0]["end_point1_x"]) == 2.0
        assert float(rows[0]["end_point2_x"]) == 248.0

        assert rows[1]["axis_ids"] == "7"
        assert rows[1]["tag"] == "NotTagged"
        assert float(rows[1]["score"]) == 0.0

    def test_multiple_entries(self, csv_output, tagged):
        writer = CSVWriter(csv_output)
        writer(tagged)
        writer(tagged)

        assert len(read_csv(csv_output)) == 4

    def test_no_tags(self, csv_output, event):
        """Entries without tags produce no row."""
        data = event.data
        data["cosmic_tags"] = []
        CSVWriter(csv_output)(data)

        assert not os.path.isfile(csv_output)

    def test_overwrite(self, csv_output, tagged):
        CSVWriter(csv_output)(tagged)
        with pytest.raises(FileExistsError):
            CSVWriter(csv_output)

        CSVWriter(csv_output, overwrite=True)(tagged)
        assert len(read_csv(csv_output)) == 2

    def test_append(self, csv_output, tagged):
        with pytest.raises(FileNotFoundError):
            CSVWriter(csv_output, append=True)

        CSVWriter(csv_output)(tagged)
        writer = CSVWriter(csv_output, append=True)
        assert writer.result_keys[-1] == "cosmic_level"

        writer(tagged)
        assert len(read_csv(csv_output)) == 4

    def test_key_mismatch(self, csv_output):
        writer = CSVWriter(csv_output)
        writer.append({"a": 1, "b": 2})

        with pytest.raises(AssertionError):
            writer.append({"a": 1, "b": 2, "c": 3})
        with pytest.raises(AssertionError):
            writer.append({"a": 1})

        writer = CSVWriter(csv_output, overwrite=True, accept_missing=True)
        writer.append({"a": 1, "b": 2})
        writer.append({"a": 3})

        rows = read_csv(csv_output)
        assert rows[1] == {"a": "3", "b": "-1"}

    def test_factory(self, csv_output):
        writer = writer_factory({"name": "csv", "file_name": csv_output})
        assert isinstance(writer, CSVWriter)
        assert writer.file_name == csv_output

    def test_array_diff(self):
        assert CSVWriter.array_diff(["a", "b"], ["b"]) == {"a"}
        assert CSVWriter.array_diff(np.array(["a"]), ["a"]) == set()

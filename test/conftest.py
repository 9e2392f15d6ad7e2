"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import h5py
import numpy as np
import pytest

from cosmictag.data import (
    Association,
    Cluster,
    Hit,
    PrincipalAxis,
    RecoObject,
    SpacePoint,
)
from cosmictag.geo import Geometry

# Toy TPC: x in [0, 250], y in [-100, 100], z in [0, 1000]. With a drift
# velocity of 0.25 cm/us and a 500 ns tick, the drift window is 2000 ticks.
TOY_GEOMETRY = {
    "name": "toy",
    "tag": "toy",
    "version": "1.0",
    "tpc": {"lower": [0.0, -100.0, 0.0], "upper": [250.0, 100.0, 1000.0]},
    "drift": {"velocity": 0.25, "sampling_rate": 500.0},
}

# Hit times which sit comfortably within the drift window
IN_TIME = (2500.0, 2600.0)


def orthonormal_basis(direction):
    """Builds a (3, 3) orthonormal basis whose first row is `direction`."""
    d = np.asarray(direction, dtype=np.float64)
    d = d / np.linalg.norm(d)
    a = np.array([1.0, 0.0, 0.0]) if abs(d[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
    e1 = np.cross(d, a)
    e1 /= np.linalg.norm(e1)
    e2 = np.cross(d, e1)

    return np.vstack((d, e1, e2))


class EventBuilder:
    """Helper which assembles the data products of one toy event."""

    def __init__(self):
        self.objects, self.axes, self.clusters, self.points = [], [], [], []
        self.object_axis_assn = Association()
        self.object_cluster_assn = Association()
        self.object_point_assn = Association()

    def add_object(
        self,
        points=None,
        direction=(1.0, 0.0, 0.0),
        mean=None,
        eigenvalues=(100.0, 1.0, 1.0),
        hit_times=(IN_TIME,),
        axis_ids=None,
    ):
        """Adds one object with its axes, one cluster of hits and its points.

        Parameters
        ----------
        points : np.ndarray, optional
            (N, 3) Space point coordinates
        direction : np.ndarray, default [1, 0, 0]
            Principal direction of the axes
        mean : np.ndarray, optional
            Mean position of the axes (defaults to the point barycenter)
        eigenvalues : np.ndarray, default [100, 1, 1]
            Eigenvalues of the axes
        hit_times : List[Tuple[float, float]]
            (peak - RMS, peak + RMS) of each hit of the object cluster
        axis_ids : List[int], optional
            Identifiers of the axes of the object, one axis if not specified

        Returns
        -------
        int
            Identifier of the object
        """
        obj_id = len(self.objects)
        self.objects.append(RecoObject(id=obj_id))

        points = np.empty((0, 3)) if points is None else np.asarray(points, float)
        if mean is None:
            mean = points.mean(axis=0) if len(points) else np.zeros(3)

        if axis_ids is None:
            axis_ids = [len(self.axes)]
        for axis_id in axis_ids:
            self.axes.append(
                PrincipalAxis(
                    id=axis_id,
                    mean=mean,
                    eigenvalues=eigenvalues,
                    eigenvectors=orthonormal_basis(direction),
                )
            )
            self.object_axis_assn.add(obj_id, axis_id)

        cluster = Cluster(id=len(self.clusters))
        hit_offset = sum(c.size for c in self.clusters)
        for i, (minus, plus) in enumerate(hit_times):
            cluster.hits.append(
                Hit(
                    id=hit_offset + i,
                    peak_time=(minus + plus) / 2.0,
                    peak_time_minus_rms=minus,
                    peak_time_plus_rms=plus,
                )
            )
        self.clusters.append(cluster)
        self.object_cluster_assn.add(obj_id, cluster.id)

        for point in points:
            point_id = len(self.points)
            self.points.append(SpacePoint(id=point_id, position=point))
            self.object_point_assn.add(obj_id, point_id)

        return obj_id

    @property
    def data(self):
        """Data dictionary of the event, as consumed by the taggers."""
        return {
            "objects": self.objects,
            "axes": self.axes,
            "clusters": self.clusters,
            "points": self.points,
            "object_axis_assn": self.object_axis_assn,
            "object_cluster_assn": self.object_cluster_assn,
            "object_point_assn": self.object_point_assn,
        }


def write_event(group, data):
    """Stores the data products of one event into an HDF5 group.

    Collections set to `None` in the data dictionary are not stored.

    Parameters
    ----------
    group : h5py.Group
        Group in which to store the event datasets
    data : dict
        Data dictionary of the event (as built by :class:`EventBuilder`)
    """
    if data.get("objects") is not None:
        group.create_dataset("object_id", data=[o.id for o in data["objects"]])

    if data.get("axes") is not None:
        axes = data["axes"]
        group.create_dataset("axis_id", data=np.array([a.id for a in axes], int))
        group.create_dataset("axis_mean", data=np.array([a.mean for a in axes]))
        group.create_dataset(
            "axis_eigenvalues", data=np.array([a.eigenvalues for a in axes])
        )
        group.create_dataset(
            "axis_eigenvectors", data=np.array([a.eigenvectors for a in axes])
        )

    if data.get("clusters") is not None:
        clusters = data["clusters"]
        hits = [(c.id, h) for c in clusters for h in c.hits]
        group.create_dataset("cluster_id", data=np.array([c.id for c in clusters], int))
        group.create_dataset("hit_id", data=np.array([h.id for _, h in hits], int))
        group.create_dataset("hit_cluster", data=np.array([c for c, _ in hits], int))
        group.create_dataset(
            "hit_peak_time", data=np.array([h.peak_time for _, h in hits])
        )
        group.create_dataset(
            "hit_peak_time_minus_rms",
            data=np.array([h.peak_time_minus_rms for _, h in hits]),
        )
        group.create_dataset(
            "hit_peak_time_plus_rms",
            data=np.array([h.peak_time_plus_rms for _, h in hits]),
        )

    if data.get("points") is not None:
        points = data["points"]
        group.create_dataset("point_id", data=np.array([p.id for p in points], int))
        group.create_dataset(
            "point_position", data=np.array([p.position for p in points]).reshape(-1, 3)
        )

    for key in ("object_axis_assn", "object_cluster_assn", "object_point_assn"):
        if data.get(key) is not None:
            group.create_dataset(key, data=data[key].pairs)


@pytest.fixture(name="geometry")
def fixture_geometry():
    """Toy detector geometry."""
    return Geometry.from_config(**TOY_GEOMETRY)


@pytest.fixture(name="event")
def fixture_event():
    """Empty event builder."""
    return EventBuilder()


@pytest.fixture(name="hdf5_events")
def fixture_hdf5_events(tmp_path):
    """Returns a function which writes a list of events to an HDF5 file."""

    def write(events, file_name="events.h5"):
        path = str(tmp_path / file_name)
        with h5py.File(path, "w") as out_file:
            group = out_file.create_group("events")
            for i, data in enumerate(events):
                write_event(group.create_group(str(i)), data)

        return path

    return write


@pytest.fixture(name="event_builder")
def fixture_event_builder():
    """Event builder class, to assemble several events in one test."""
    return EventBuilder

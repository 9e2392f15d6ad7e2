"""Cosmic-ray tagging based on the principal axis of reconstructed objects."""

from dataclasses import dataclass

import numpy as np

from cosmictag.data import Association, CosmicTag
from cosmictag.post.base import PostBase
from cosmictag.utils.boundary import (
    boundary_flags,
    classify_boundaries,
    cosmic_score,
    parse_margin,
)
from cosmictag.utils.globals import DEFAULT_MARGIN
from cosmictag.utils.logger import logger
from cosmictag.utils.tagging import (
    axis_end_points,
    check_timing,
    project_extent,
    select_axis,
)

__all__ = ["CosmicPCAxisTagger", "TaggerConfig"]


@dataclass(frozen=True, eq=False)
class TaggerConfig:
    """Detector and timing constants used to tag cosmic rays.

    Attributes
    ----------
    margin : np.ndarray
        (3) Distance to a wall under which an end point is close to it
    width : float
        Extent of the detector along the drift axis (x)
    half_height : float
        Half of the extent of the detector along the vertical axis (y)
    length : float
        Extent of the detector along the beam axis (z)
    drift_window_ticks : float
        Number of readout ticks needed to drift across the detector
    """

    margin: np.ndarray
    width: float
    half_height: float
    length: float
    drift_window_ticks: float

    @classmethod
    def from_geometry(cls, geometry, margin=DEFAULT_MARGIN, drift_window_ticks=None):
        """Builds the tagger constants from a detector geometry.

        Parameters
        ----------
        geometry : Geometry
            Detector geometry
        margin : Union[float, List[float]], default [5, 5, 5]
            Wall proximity margin(s)
        drift_window_ticks : float, optional
            If specified, overrides the drift window derived from the geometry

        Returns
        -------
        TaggerConfig
            Tagger constants
        """
        if drift_window_ticks is None:
            drift_window_ticks = geometry.drift_window_ticks

        return cls(
            margin=parse_margin(margin),
            width=geometry.width,
            half_height=geometry.half_height,
            length=geometry.length,
            drift_window_ticks=drift_window_ticks,
        )


class CosmicPCAxisTagger(PostBase):
    """Tags reconstructed objects which look like cosmic rays.

    For each object with at least one principal axis, the tagger:
    - Picks a canonical axis;
    - Checks whether any of its hits is out of the drift window;
    - If not, estimates its end points from the space points which lie
      furthest along the principal axis;
    - Classifies the object based on the proximity of its end points to the
      detector walls.

    One :class:`CosmicTag` is produced per object with an axis. The tag is
    associated with the object and with every axis of the object.
    """

    # Name of the post-processor (as specified in the configuration)
    name = "cosmic_pca_axis"

    # Alternative allowed names of the post-processor
    aliases = ("cosmic_pcaxis_tagger", "pca_axis_tagger")

    # Set of data keys needed for this post-processor to operate
    _keys = (
        ("objects", True),
        ("axes", False),
        ("clusters", False),
        ("points", False),
        ("object_axis_assn", False),
        ("object_cluster_assn", False),
        ("object_point_assn", False),
    )

    # Whether the post-processor is provided the detector geometry
    need_geometry = True

    def __init__(
        self,
        geometry=None,
        margin=DEFAULT_MARGIN,
        drift_window_ticks=None,
        width=None,
        half_height=None,
        length=None,
    ):
        """Initialize the tagger constants.

        The detector extents are taken from the geometry, unless all of them
        are provided explicitly, in which case the drift window must also
        be provided.

        Parameters
        ----------
        geometry : Geometry, optional
            Detector geometry
        margin : Union[float, List[float]], default [5, 5, 5]
            Distance to a wall under which an end point is close to it:
            - If float: distance is shared between all walls
            - If [x,y,z]: distance is shared between pairs of walls facing
              each other and perpendicular to a shared axis
        drift_window_ticks : float, optional
            Number of readout ticks needed to drift across the detector. If
            not specified, it is derived from the geometry
        width : float, optional
            Extent of the detector along x
        half_height : float, optional
            Half of the extent of the detector along y
        length : float, optional
            Extent of the detector along z
        """
        extents = (width, half_height, length)
        if all(v is not None for v in extents):
            if drift_window_ticks is None:
                raise ValueError(
                    "When providing the detector extents explicitly, must "
                    "also provide `drift_window_ticks`."
                )
            self.cfg = TaggerConfig(
                margin=parse_margin(margin),
                width=float(width),
                half_height=float(half_height),
                length=float(length),
                drift_window_ticks=drift_window_ticks,
            )

        elif geometry is not None:
            self.cfg = TaggerConfig.from_geometry(geometry, margin, drift_window_ticks)

        else:
            raise ValueError(
                "Must provide either a detector geometry or all of `width`, "
                "`half_height`, `length` and `drift_window_ticks`."
            )

        logger.debug("Cosmic tagger configuration: %s", self.cfg)

    def process(self, data):
        """Tags all the objects of one entry.

        If any of the input collections is missing, no tag is produced.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Cosmic tags and their associations with objects and axes
        """
        tags, object_tag_assn, axis_tag_assn = [], Association(), Association()
        result = {
            "cosmic_tags": tags,
            "object_tag_assn": object_tag_assn,
            "axis_tag_assn": axis_tag_assn,
        }

        # If any of the input collections is missing, nothing to do
        missing = [k for k in self.keys if data.get(k, None) is None]
        if len(missing):
            logger.debug("Missing input collection(s) %s, no tag produced.", missing)
            return result

        # Index the input collections by identifier
        axes = {axis.id: axis for axis in data["axes"]}
        clusters = {cluster.id: cluster for cluster in data["clusters"]}
        points = {point.id: point for point in data["points"]}

        # If an association points to an unknown product, nothing to do
        for key, index in (
            ("object_axis_assn", axes),
            ("object_cluster_assn", clusters),
            ("object_point_assn", points),
        ):
            unknown = set(data[key].right.tolist()) - set(index)
            if len(unknown):
                logger.debug(
                    "Association `%s` points to unknown identifier(s) %s, "
                    "no tag produced.",
                    key,
                    sorted(unknown),
                )
                return result

        # Loop over the reconstructed objects
        for obj in data["objects"]:
            # Fetch the axes, skip objects which have none
            obj_axes = [axes[i] for i in data["object_axis_assn"].find_many(obj.id)]
            axis = select_axis(obj_axes)
            if axis is None:
                continue

            # Check for out-of-time hits
            obj_clusters = [
                clusters[i] for i in data["object_cluster_assn"].find_many(obj.id)
            ]
            out_of_time = check_timing(obj_clusters, self.cfg.drift_window_ticks)

            # Estimate the end points, check their proximity to the walls
            point_ids = data["object_point_assn"].find_many(obj.id)
            flags, projected = None, False
            if not out_of_time and len(point_ids):
                obj_points = np.vstack([points[i].position for i in point_ids])
                start, end, projected = project_extent(axis, obj_points)
            else:
                start, end = axis_end_points(axis)

            if projected:
                flags = boundary_flags(
                    start,
                    end,
                    self.cfg.margin,
                    self.cfg.width,
                    self.cfg.half_height,
                    self.cfg.length,
                )

            # Classify the object, store the result
            level, tag = classify_boundaries(flags, out_of_time)
            self.emit(result, obj, obj_axes, start, end, level, tag)

        logger.debug(
            "Tagged %d object(s), %d with a non-zero cosmic score.",
            len(tags),
            sum(t.is_cosmic for t in tags),
        )

        return result

    @staticmethod
    def emit(result, obj, axes, start, end, level, tag):
        """Store the tag of one object and register its associations.

        Parameters
        ----------
        result : dict
            Output dictionary of the tagger, updated in place
        obj : RecoObject
            Tagged object
        axes : List[PrincipalAxis]
            All the axes of the object (not only the canonical one)
        start : np.ndarray
            (3) Start point of the object
        end : np.ndarray
            (3) End point of the object
        level : int
            Cosmic level reached by the decision table
        tag : CosmicTagEnum
            Tag kind
        """
        tag_id = len(result["cosmic_tags"])
        result["cosmic_tags"].append(
            CosmicTag(
                id=tag_id,
                end_point1=start,
                end_point2=end,
                score=cosmic_score(tag),
                tag=tag,
                cosmic_level=level,
            )
        )

        result["object_tag_assn"].add(obj.id, tag_id)
        for axis in axes:
            result["axis_tag_assn"].add(axis.id, tag_id)

"""Module with a data class object which represents a cosmic tag.

This copies the internal structure of :class:`anab::CosmicTag`.
"""

from dataclasses import dataclass

import numpy as np

from cosmictag.utils.enums import CosmicTagEnum

from .base import DataBase

__all__ = ["CosmicTag"]


@dataclass(eq=False)
class CosmicTag(DataBase):
    """Cosmic-ray tag of a reconstructed object.

    Attributes
    ----------
    id : int
        Index of the tag in the list of tags of the event
    end_point1 : np.ndarray
        (3) First end point of the tagged trajectory
    end_point2 : np.ndarray
        (3) Second end point of the tagged trajectory
    score : float
        Cosmic score (0: not a cosmic, 1: cosmic)
    tag : CosmicTagEnum
        Kind of evidence which supports the score
    cosmic_level : int
        Decision level reached by the tagging algorithm
    """

    id: int = -1
    end_point1: np.ndarray = None
    end_point2: np.ndarray = None
    score: float = -1.0
    tag: CosmicTagEnum = CosmicTagEnum.UNKNOWN
    cosmic_level: int = 0

    # Fixed-length attributes
    _fixed_length_attrs = (("end_point1", 3), ("end_point2", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("end_point1", "end_point2")

    # Enumerated attributes
    _enum_attrs = (("tag", CosmicTagEnum),)

    @property
    def is_cosmic(self):
        """Whether the object was tagged with any cosmic evidence."""
        return self.score > 0.0

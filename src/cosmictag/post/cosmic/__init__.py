"""Cosmic-ray tagging post-processors."""

from .pca_axis import *

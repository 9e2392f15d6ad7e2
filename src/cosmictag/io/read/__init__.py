"""Readers which load reconstructed events from files."""

from .hdf5 import *

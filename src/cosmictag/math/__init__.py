"""Numba-accelerated math routines."""

from .linalg import *

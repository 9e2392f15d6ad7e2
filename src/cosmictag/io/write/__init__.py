"""Writers which store the tagger output to files."""

from .csv import *

"""Construct a geometry object from a detector name."""

from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from .base import Geometry

# Get config directory relative to this module
GEO_CONFIG_DIR = Path(__file__).parent / "config"

__all__ = ["geo_dict", "geo_factory"]


def geo_dict() -> Dict[Path, Dict[str, str]]:
    """Builds a dictionary of available geometry configurations.

    Returns
    -------
    Dict[Path, Dict[str, str]]
        Maps each geometry file onto its name, tag and version
    """
    options = {}
    for path in sorted(GEO_CONFIG_DIR.glob("*/*_geometry.yaml")):
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)

        options[path] = {k: cfg.get(k, None) for k in ("name", "tag", "version")}
        options[path]["version"] = str(float(options[path]["version"]))

    return options


def geo_factory(
    detector: str,
    tag: Optional[str] = None,
    version: Optional[Union[str, int, float]] = None,
) -> Geometry:
    """Instantiates a geometry from the name of a detector.

    If neither a tag nor a version is provided, the most recent version of
    the detector geometry is loaded.

    Parameters
    ----------
    detector : str
        Name of the detector (e.g. "microboone")
    tag : str, optional
        Geometry tag (e.g. "uboone")
    version : Union[str, int, float], optional
        Geometry version (e.g. "1", "2.0"). If only the major revision is
        provided, the first geometry with a matching major revision is used

    Returns
    -------
    Geometry
         Initialized geometry object
    """
    # Find the geometry configurations that match the detector name
    matches = {
        path: cfg
        for path, cfg in geo_dict().items()
        if cfg["name"].lower() == detector.lower()
    }
    if len(matches) == 0:
        raise ValueError(f"No geometry found for detector '{detector}'.")

    # If a tag is specified, must find the exact tag or throw
    if tag is not None:
        paths = [p for p, cfg in matches.items() if cfg["tag"] == tag]
        if not paths:
            tags = {cfg["tag"] for cfg in matches.values()}
            raise ValueError(
                f"No geometry found for detector '{detector}' with tag "
                f"'{tag}'. Available tags are: {tags}"
            )

    # If a version is specified, match as many revision levels as provided
    elif version is not None:
        version_parts = str(version).split(".")
        paths = [
            p
            for p, cfg in matches.items()
            if cfg["version"].split(".")[: len(version_parts)] == version_parts
        ]
        if not paths:
            versions = {cfg["version"] for cfg in matches.values()}
            raise ValueError(
                f"No geometry found for detector '{detector}' with version "
                f"'{version}'. Available versions are: {versions}"
            )

    # If no tag or version is specified, return the most recent version
    else:
        paths = [max(matches, key=lambda p: float(matches[p]["version"]))]

    # Parse configuration file as a dictionary
    with open(paths[0], "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    return Geometry.from_config(**cfg)

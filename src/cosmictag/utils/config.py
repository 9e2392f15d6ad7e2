"""Module in charge of loading cosmictag configuration files."""

import os
from typing import Any, Dict, List

import yaml

__all__ = [
    "ConfigError",
    "ConfigIncludeError",
    "ConfigPathError",
    "ConfigLoader",
    "load_config",
    "parse_value",
    "set_nested_value",
    "apply_overrides",
]


class ConfigError(Exception):
    """Base exception for all configuration errors."""


class ConfigIncludeError(ConfigError):
    """Raised when an included file cannot be found or loaded."""


class ConfigPathError(ConfigError):
    """Raised when a configuration path cannot be resolved."""


class ConfigLoader(yaml.SafeLoader):
    """Configuration loader class.

    Extends the standard safe loader to support the inclusion of YAML files
    into another YAML configuration file with the `!include` tag. Included
    paths are resolved relative to the including file.
    """

    def __init__(self, stream):
        """Initialize the loader.

        Parameters
        ----------
        stream : _io.TextIOWrapper
            Output of python's `open` function on a yaml file
        """
        # Fetch the parent directory where the configuration file lives
        self._root = os.path.split(getattr(stream, "name", ""))[0]

        # Initialize the base loader
        super().__init__(stream)

    def include(self, node):
        """Load and include a YAML file that is requested in the base config.

        Parameters
        ----------
        node : yaml.Node
            YAML node which contains the name of the file to include
        """
        # Look for the file in the same directory as the main config file
        filename = os.path.join(self._root, self.construct_scalar(node))
        if not os.path.isfile(filename):
            raise ConfigIncludeError(f"Included file not found: {filename}")

        # Load the file within the base configuration
        with open(filename, "r", encoding="utf-8") as f:
            return yaml.load(f, Loader=ConfigLoader)


# Add the include constructor
ConfigLoader.add_constructor("!include", ConfigLoader.include)


def load_config(cfg_path: str) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    if not os.path.isfile(cfg_path):
        raise ConfigPathError(f"Configuration file not found: {cfg_path}")

    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.load(f, Loader=ConfigLoader)

    return cfg if cfg is not None else {}


def parse_value(value_str: Any) -> Any:
    """Parse a string value into appropriate Python type.

    Parameters
    ----------
    value_str : Any
        Value to parse (if string, attempts YAML parsing)

    Returns
    -------
    Any
        Parsed value
    """
    if not isinstance(value_str, str) or value_str.strip() == "":
        return value_str

    try:
        return yaml.safe_load(value_str)
    except yaml.YAMLError:
        return value_str


def set_nested_value(
    config: Dict[str, Any], key_path: str, value: Any
) -> Dict[str, Any]:
    """Set a nested value in a dictionary using dot notation.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary to modify in place
    key_path : str
        Dot-separated path to the key (e.g., "io.reader.file_keys")
    value : Any
        Value to set

    Returns
    -------
    Dict[str, Any]
        Modified configuration dictionary
    """
    keys = key_path.split(".")
    current = config

    # Navigate to the parent of the target key
    for key in keys[:-1]:
        if key not in current or current[key] is None:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ConfigPathError(
                f"Cannot set '{key_path}': '{key}' is not a dictionary"
            )
        current = current[key]

    # Set the final value
    current[keys[-1]] = value

    return config


def apply_overrides(config: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    """Apply a list of `key.path=value` overrides to a configuration.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary to modify in place
    overrides : List[str]
        List of overrides in the form "key.path=value"

    Returns
    -------
    Dict[str, Any]
        Modified configuration dictionary
    """
    for override in overrides:
        if "=" not in override:
            raise ValueError(
                f"Invalid --set format: '{override}'. "
                "Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        set_nested_value(config, key_path.strip(), parse_value(value_str.strip()))

    return config

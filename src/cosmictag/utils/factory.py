"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a YAML block into an instatiated class
with all the appropriate checks that the class exists and is provided
with appropriate arguments.
"""

from copy import deepcopy

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module):
    """Converts a module into a dictionary which maps names onto classes.

    Each class is registered under its class name, under its `name` attribute
    (as used in configuration files) and under each of its `aliases`.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    options = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name[0] == "_":
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not isinstance(cls, type) or module.__name__ not in cls.__module__:
            continue

        options[cls_name] = cls
        if getattr(cls, "name", None):
            options[cls.name] = cls
        for alias in getattr(cls, "aliases", ()):
            options[alias] = cls

    return options


def instantiate(module_dict, cfg, alt_name=None, **kwargs):
    """Instantiates a class based on a configuration dictionary and a list of
    possible classes to chose from.

    This function supports YAML configuration blocks of the form:

    .. code-block:: yaml

        function:
          name: function_name
          kwarg_1: value_1
          kwarg_2: value_2
          ...

    The `name` field can have a different name, as long as it is specified.

    Parameters
    ----------
    module_dict : dict
        Dictionary which maps a class name onto an object class.
    cfg : Union[str, dict]
        Configuration dictionary, or simply the name of the class
    alt_name : str, optional
        Key under which the class name can be specfied, beside 'name' itself
    **kwargs : dict, optional
        Additional parameters to pass to the function

    Returns
    -------
    object
        Instantiated object
    """
    # If the configuration is a string, assume it is a class name with no
    # parameters to be passed to it
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    name = "name"
    if alt_name is not None and alt_name in config:
        name = alt_name
    if name not in config:
        raise KeyError("Could not find the name of the class under `name`.")

    class_name = config.pop(name)
    if class_name not in module_dict:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps names "
            f"to classes. Available names: {list(module_dict.keys())}"
        )

    # Top-level keys are passed as keyword arguments
    for key in config:
        if key in kwargs:
            raise ValueError(
                f"The keyword argument {key} is provided twice. Ambiguous."
            )
    kwargs.update(config)

    # Intialize
    cls = module_dict[class_name]
    try:
        return cls(**kwargs)

    except Exception as err:
        logger.error(
            "Failed to instantiate %s with these arguments:\n  - kwargs: %s",
            cls.__name__,
            kwargs,
        )

        raise err

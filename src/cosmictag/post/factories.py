"""Construct a post-processor module class from its name."""

from cosmictag.utils.factory import instantiate, module_dict

from . import cosmic

# Build a dictionary of available post-processor modules
POST_DICT = {}
for module in [cosmic]:
    POST_DICT.update(**module_dict(module))


def post_processor_factory(name, cfg, **kwargs):
    """Instantiates a post-processor module from a configuration dictionary.

    Parameters
    ----------
    name : str
        Name of the post-processor module
    cfg : dict
        Post-processor module configuration
    **kwargs : dict, optional
        Additional parameters to pass to the post-processor

    Returns
    -------
    object
         Initialized post-processor object
    """
    # Provide the name to the configuration
    cfg = dict(cfg or {})
    cfg["name"] = name

    # Instantiate the post-processor module
    return instantiate(POST_DICT, cfg, **kwargs)

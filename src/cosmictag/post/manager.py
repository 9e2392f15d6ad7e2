"""Manages the operation of post-processors."""

from collections import OrderedDict
from copy import deepcopy

import numpy as np

from cosmictag.utils.stopwatch import StopwatchManager

from .factories import POST_DICT, post_processor_factory

__all__ = ["PostManager"]


class PostManager:
    """Manager in charge of handling post-processing scripts.

    It loads all the post-processor objects once and feeds them data.
    """

    def __init__(self, cfg, geometry=None):
        """Initialize the post-processing manager.

        Parameters
        ----------
        cfg : dict
            Post-processor configurations
        geometry : Geometry, optional
            Detector geometry, provided to the post-processors which need it
        """
        # Loop over the post-processor modules and get their priorities
        cfg = deepcopy(cfg)
        keys = np.array(list(cfg.keys()))
        priorities = -np.ones(len(keys), dtype=np.int32)
        for i, key in enumerate(keys):
            if cfg[key] is not None and "priority" in cfg[key]:
                priorities[i] = cfg[key].pop("priority")

        # Add the modules to a processor list in decreasing order of priority
        self.watch = StopwatchManager()
        self.modules = OrderedDict()
        keys = [str(k) for k in keys[np.argsort(-priorities, kind="stable")]]
        for key in keys:
            # Profile the module
            self.watch.initialize(key)

            # Provide the geometry to the modules which need it
            kwargs = {}
            if geometry is not None and key in POST_DICT:
                if POST_DICT[key].need_geometry:
                    kwargs["geometry"] = geometry

            # Append
            self.modules[key] = post_processor_factory(key, cfg[key], **kwargs)

            # Check dependencies
            for post in self.modules[key]._upstream:
                assert post in self.modules, (
                    f"Post-processor `{key}` is missing an essential "
                    f"upstream post-processor: `{post}`."
                )

    def __call__(self, data):
        """Pass one entry of data through the post-processors.

        The input dictionary is updated in place with the output of each
        post-processor.

        Parameters
        ----------
        data : dict
            Dictionary of data products
        """
        for key, module in self.modules.items():
            self.watch.start(key)
            result = module(data)
            self.watch.stop(key)

            # Update the input dictionary
            if result is not None:
                data.update(result)

"""cosmictag driver class.

Takes care of everything in one centralized place:
- Geometry loading
- Data loading
- Post-processing (cosmic tagging)
- Writing output to file
"""

from datetime import datetime

import yaml

from .geo import Geometry, geo_factory
from .io import reader_factory, writer_factory
from .post import PostManager
from .utils.logger import logger
from .utils.stopwatch import StopwatchManager
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central cosmictag driver.

    Processes global configuration and runs the appropriate modules:
      1. Load data
      2. Run post-processing
      3. Write to file

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          <Base driver configuration>
        geo:
          <Detector geometry>
        io:
          <Input/output configuration>
        post:
          <Post-processors>
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary
        """
        # Initialize the timers and the configuration dictionary
        self.watch = StopwatchManager()
        self.watch.initialize("iteration")

        # Process the full configuration dictionary and store it
        base, io, geo, post = self.process_config(**cfg)

        # Initialize the detector geometry
        self.geo = self.initialize_geo(geo)

        # Initialize the input/output
        self.initialize_io(**io)

        # Initialize the base driver configuration parameters
        self.initialize_base(**base)

        # Initialize the post-processors
        self.post = None
        if post is not None:
            self.watch.initialize("post")
            self.post = PostManager(post, geometry=self.geo)

    def process_config(self, io, base=None, geo=None, post=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        io : dict
            I/O configuration dictionary
        base : dict, optional
            Base driver configuration dictionary
        geo : dict, optional
            Geometry configuration dictionary
        post : dict, optional
            Post-processor configutation dictionary

        Returns
        -------
        dict
            Processed configuration
        """
        # If there is no base configuration, make it empty (will use defaults)
        if base is None:
            base = {}

        # Set the verbosity of the logger
        verbosity = base.get("verbosity", "info")
        logger.setLevel(verbosity.upper())

        # Rebuild global configuration dictionary
        self.cfg = {"base": base, "io": io}
        if geo is not None:
            self.cfg["geo"] = geo
        if post is not None:
            self.cfg["post"] = post

        # Log environment information
        logger.info("Release version: %s\n", __version__)

        # Log configuration
        logger.info(yaml.dump(self.cfg, default_flow_style=None, sort_keys=False))

        # Return updated configuration
        return base, io, geo, post

    @staticmethod
    def initialize_geo(geo=None):
        """Initialize the detector geometry.

        The geometry is either loaded from the named detector configurations
        (`detector`, with an optional `tag` or `version`), or built from an
        inline definition (`name`, `tpc` and `drift` blocks).

        Parameters
        ----------
        geo : dict, optional
            Geometry configuration dictionary

        Returns
        -------
        Geometry
            Detector geometry, `None` if not configured
        """
        if geo is None:
            return None

        if "detector" in geo:
            geometry = geo_factory(**geo)
        else:
            geometry = Geometry.from_config(**geo)

        logger.info(
            "Loaded geometry of %s (tag: %s, version: %s), drift window: %d ticks\n",
            geometry.name,
            geometry.tag,
            geometry.version,
            geometry.drift_window_ticks,
        )

        return geometry

    def initialize_base(self, verbosity="info", iterations=-1, log_step=1):
        """Initialize the basic driver parameters.

        Parameters
        ----------
        verbosity : str, default 'info'
            Verbosity level to pass to the `logging` module
        iterations : int, default -1
            Number of entries to process (-1 means all of them)
        log_step : int, default 1
            Number of entries between each summary log
        """
        # Set the number of iterations
        if iterations is None or iterations < 0:
            iterations = len(self)
        elif iterations > len(self):
            raise ValueError(
                f"Requested {iterations} iterations, but only {len(self)} "
                "entries are available."
            )

        self.iterations = iterations
        self.log_step = log_step

    def initialize_io(self, reader=None, writer=None):
        """Initializes the input/output scripts.

        Parameters
        ----------
        reader : dict
            Reader configuration dictionary
        writer : dict, optional
            Writer configuration dictionary
        """
        if reader is None:
            raise KeyError("Must provide a `reader` in the `io` block.")

        self.watch.initialize("load")
        self.reader = reader_factory(reader)

        self.writer = None
        if writer is not None:
            self.watch.initialize("write")
            self.writer = writer_factory(writer)

    def __len__(self):
        """Returns the number of events in the underlying reader object.

        Returns
        -------
        int
            Number of elements in the underlying reader
        """
        return len(self.reader)

    def __iter__(self):
        """Resets the counter and returns itself.

        Returns
        -------
        object
            The Driver itself
        """
        self.counter = 0

        return self

    def __next__(self):
        """Defines how to process the next entry in the iterator.

        Returns
        -------
        dict
            Dictionary of data products of one entry
        """
        if self.counter < len(self):
            data = self.process(self.counter)
            self.counter += 1

            return data

        raise StopIteration

    def run(self):
        """Loop over the requested number of iterations, process them."""
        logger.info("Will process %d entries\n", self.iterations)
        for iteration in range(self.iterations):
            tstamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            data = self.process(iteration)
            self.log(data, tstamp, iteration)

        # Dump the cumulative time spent in each stage
        times = ", ".join(
            f"{key}: {time.wall:0.3f} s" for key, time in self.watch.times_sum().items()
        )
        logger.info("Processed %d entries (%s)", self.iterations, times)

    def process(self, entry):
        """Process one entry.

        Loads the entry, runs the post-processors on it and appends the
        results to the output file, if requested.

        Parameters
        ----------
        entry : int
            Entry number to load

        Returns
        -------
        dict
            Dictionary of data products of the entry
        """
        self.watch.start("iteration")

        # 1. Load data
        self.watch.start("load")
        data = self.reader[entry]
        self.watch.stop("load")

        # 2. Run post-processing, if requested
        if self.post is not None:
            self.watch.start("post")
            self.post(data)
            self.watch.stop("post")

        # 3. Write output to file, if requested
        if self.writer is not None:
            self.watch.start("write")
            self.writer(data)
            self.watch.stop("write")

        # Stop the iteration timer
        self.watch.stop("iteration")

        return data

    def log(self, data, tstamp, iteration):
        """Log a summary of the processed entry to stdout.

        Parameters
        ----------
        data : dict
            Dictionary of data products
        tstamp : str
            Time when this iteration was run
        iteration : int
            Iteration counter
        """
        if (iteration + 1) % self.log_step != 0:
            return

        tags = data.get("cosmic_tags", None) or []
        num_objects = len(data["objects"]) if data.get("objects") is not None else 0
        num_cosmics = sum(tag.is_cosmic for tag in tags)
        t_iter = self.watch.time("iteration").wall
        logger.info(
            "Iter. %d (entry %d) @ %s | %d object(s), %d tag(s), %d cosmic(s) | %0.3f s",
            iteration,
            data.get("index", iteration),
            tstamp,
            num_objects,
            len(tags),
            num_cosmics,
            t_iter,
        )

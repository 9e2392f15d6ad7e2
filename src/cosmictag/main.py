"""Main function that calls the Driver class.

This is the first module called when launching the `cosmictag` binary. It
builds the `Driver` object used to tag the requested entries and runs it.
"""

from .driver import Driver

__all__ = ["run"]


def run(cfg):
    """Tag all the requested entries.

    Parameters
    ----------
    cfg : dict
        Full driver configuration
    """
    driver = Driver(cfg)
    driver.run()

#!/usr/bin/env python3
"""CLI entry point which tags the cosmic rays of a set of files."""

import argparse
from typing import List

from cosmictag.utils.config import apply_overrides, load_config


def main(
    config: str,
    source: List[str],
    source_list: str,
    output: str,
    n: int,
    nskip: int,
    entry_list: str,
    skip_entry_list: str,
    config_overrides: List[str],
):
    """Main driver for cosmic tagging.

    Performs these basic functions:
    - Update the configuration with the command-line arguments
    - Run the tagging process

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : List[str]
        List of paths to the input files
    source_list : str
        Path to a text file containing a list of data file paths
    output : str
        Path to the output file
    n : int
        Number of entries to process
    nskip : int
        Number of entries to skip
    entry_list : str
        Path to a text file containing a list of entries to process
    skip_entry_list : str
        Path to a text file containing a list of entries to skip
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"
    """
    # Load the configuration file
    cfg = load_config(config)

    # If there is no base block, build one
    if "base" not in cfg or cfg["base"] is None:
        cfg["base"] = {}

    # The configuration must minimally contain an IO block with a reader
    if "io" not in cfg or cfg["io"].get("reader", None) is None:
        raise KeyError("Configuration file must contain an `io.reader` block.")

    # Override the input command-line information into the configuration
    io_mapping = {
        "file_keys": source if source is not None else source_list,
        "n_entry": n,
        "n_skip": nskip,
        "entry_list": entry_list,
        "skip_entry_list": skip_entry_list,
    }
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            cfg["io"]["reader"][io_key] = io_value

    # Override the output path if provided
    if output is not None:
        if cfg["io"].get("writer", None) is None:
            cfg["io"]["writer"] = {"name": "csv"}
        cfg["io"]["writer"]["file_name"] = output

    # Apply any generic config overrides from --set arguments
    if config_overrides:
        apply_overrides(cfg, config_overrides)

    # Import the run function only once the configuration is validated
    from cosmictag.main import run

    run(cfg)


def cli():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="cosmictag - Tag cosmic rays from their principal axis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cosmictag -c config.yaml                                Run with config file
  cosmictag -c config.yaml -s events.h5 -o tags.csv       Override input/output
  cosmictag -c config.yaml --set post.cosmic_pca_axis.margin=10
""",
    )

    # Add a version command
    parser.add_argument(
        "--version", "-v", action="version", version=f"cosmictag {get_version()}"
    )

    # Add config file argument
    parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    # Add mutually exclusive group for source input
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-s", "--source", nargs="+", type=str, help="List of paths to the input files"
    )
    group.add_argument(
        "-S",
        "--source-list",
        help="Path to a text file containing a list of data file paths",
    )

    # Add output argument
    parser.add_argument("-o", "--output", help="Path to the output file")

    # Add entry and skip arguments
    parser.add_argument("-n", "--iterations", type=int, help="Number of entries to run")

    parser.add_argument("--nskip", type=int, help="Number of entries to skip")

    parser.add_argument(
        "--entry-list",
        help="Path to a text file containing a list of entries to process",
    )

    parser.add_argument(
        "--skip-entry-list",
        help="Path to a text file containing a list of entries to skip",
    )

    # Add option to dynamically override any config parameter using dot notation
    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set base.verbosity=debug). "
        "Can be used multiple times for multiple overrides.",
    )

    # Parse the arguments
    args = parser.parse_args()

    main(
        config=args.config,
        source=args.source,
        source_list=args.source_list,
        output=args.output,
        n=args.iterations,
        nskip=args.nskip,
        entry_list=args.entry_list,
        skip_entry_list=args.skip_entry_list,
        config_overrides=args.config_overrides,
    )


def get_version():
    """Get the package version."""
    from cosmictag.version import __version__

    return __version__


if __name__ == "__main__":
    cli()

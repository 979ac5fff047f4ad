#!/usr/bin/env python3
"""
localfile: Resolve the data files of a local file location, newest first

Common usage:
  localfile /var/log/presto --pattern 'http-request\\.log.*'
  localfile /var/log/presto/http-request.log
  localfile --table http_request_log
  localfile --table http_request_log --json

Tables are read from `.localfile.toml`, `localfile.toml`, or
`pyproject.toml [tool.localfile]`, searched upward from the current directory.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from localfile.config import find_config_file, load_config
from localfile.data_location import DataLocation
from localfile.errors import LocalFileError, StaleLocationError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


@dataclass
class Options:
    """Command-line options for the localfile tool."""

    location: str | None
    pattern: str | None
    table: str | None
    config: str | None
    json: bool
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> Options:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "location",
        nargs="?",
        type=str,
        default=None,
        help="A data file, or a directory of data files",
    )
    parser.add_argument(
        "--pattern",
        type=str,
        default=None,
        metavar="REGEX",
        help="Regular expression matched against full file names (directories only; "
        "a missing directory is created)",
    )
    parser.add_argument(
        "--table",
        type=str,
        default=None,
        metavar="NAME",
        help="List the files of a table from the config file instead of a location",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Config file to read tables from (default: search upward from the current directory)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the resolved location as JSON instead of listing files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    return Options(
        location=opts.location,
        pattern=opts.pattern,
        table=opts.table,
        config=opts.config,
        json=opts.json,
        verbose=opts.verbose,
        version=opts.version,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _table_location(options: Options) -> DataLocation:
    """Look up `--table` in the explicit or discovered config file."""
    assert options.table is not None
    config_path = Path(options.config) if options.config else find_config_file(Path.cwd())
    if config_path is None:
        raise ValueError(f"No config file found for table `{options.table}`")

    config = load_config(config_path)
    if options.table not in config.tables:
        known = ", ".join(sorted(config.tables)) or "none"
        raise ValueError(
            f"Unknown table `{options.table}` in {config_path} (configured tables: {known})"
        )
    table = config.tables[options.table]
    return DataLocation(table.location, table.pattern)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the localfile CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for configuration errors, 2 for listing errors)
    """
    options = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("localfile")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _configure_logging(options.verbose)

    if options.location is None and options.table is None:
        print(
            "Error: No input specified. Provide a location or --table NAME."
            " Use --help for more options.",
            file=sys.stderr,
        )
        return 1
    if options.location is not None and options.table is not None:
        print("Error: Provide either a location or --table, not both.", file=sys.stderr)
        return 1
    if options.table is not None and options.pattern is not None:
        print("Error: --pattern only applies to an explicit location.", file=sys.stderr)
        return 1

    try:
        if options.table is not None:
            data_location = _table_location(options)
        else:
            data_location = DataLocation(options.location, options.pattern)
    except (ValueError, OSError) as e:
        # Bad arguments or config: unreadable file, invalid TOML, failed validation.
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if options.json:
        print(data_location.to_json())
        return 0

    try:
        files = data_location.files()
    except (LocalFileError, StaleLocationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for f in files:
        print(f)
    return 0


if __name__ == "__main__":
    sys.exit(main())

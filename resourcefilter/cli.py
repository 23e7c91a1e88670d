#!/usr/bin/env python3
"""Command-line interface for ResourceFilter.

This module provides the CLI for listing and counting resources:
- Argument parsing and validation
- Configuration file loading and command-line overrides
- Filter construction from options
- Page rendering

Example:
    >>> from resourcefilter.cli import parse_arguments
    >>> args = parse_arguments(["--origin", "classpath=/opt/jars", "--name", "foo"])
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from resourcefilter.core.constants import (
    RESOURCEFILTER_VERSION,
    Column,
    ConfigKey,
    ErrorCode,
    OriginKind,
)
from resourcefilter.core.validators import ValidationError
from resourcefilter.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from resourcefilter.infrastructure.logger import Logger
from resourcefilter.query import QueryEngine
from resourcefilter.render import PageRenderer, RenderError
from resourcefilter.resources.base import origin_class
from resourcefilter.rules.filters import UnsupportedFilterColumnError
from resourcefilter.status import RepositoryUnavailableError, StatusOption

DESCRIPTION = "ResourceFilter - Filtered, paged listings of layered resources"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If validation fails
    """
    parser = argparse.ArgumentParser(
        prog="resourcefilter",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List everything visible, editable origin first
  resourcefilter --origin filesystem=./webapp --origin classpath=./jars --module moduleA

  # Second page of CSS files
  resourcefilter --config resourcefilter.yaml --type css --offset 20 --limit 20

  # Count overridden resources
  resourcefilter --config resourcefilter.yaml --overridden --count
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {RESOURCEFILTER_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    # Tree options
    tree_group = parser.add_argument_group("tree options")

    tree_group.add_argument(
        "-o",
        "--origin",
        metavar="KIND=DIR",
        action="append",
        dest="origins",
        help="Origin directory, highest priority first (can be specified multiple times)",
    )

    tree_group.add_argument(
        "-m",
        "--module",
        metavar="NAME",
        action="append",
        dest="modules",
        help="Known module name (can be specified multiple times)",
    )

    # Filter options
    filter_group = parser.add_argument_group("filter options")

    filter_group.add_argument("--name", metavar="TEXT", help="Name contains TEXT")
    filter_group.add_argument("--type", metavar="TEXT", help="Content type contains TEXT")
    filter_group.add_argument(
        "--origin-kind",
        metavar="KIND",
        choices=[k.value for k in OriginKind],
        help="Some layer comes from an origin of KIND",
    )
    filter_group.add_argument(
        "--overridden",
        action="store_true",
        help="Only resources with more than one layer",
    )
    filter_group.add_argument(
        "--status",
        metavar="CODE",
        type=int,
        help="Activation status code (0 not activated, 1 modified, 2 activated)",
    )

    # Paging options
    page_group = parser.add_argument_group("paging options")

    page_group.add_argument("--offset", type=int, default=0, help="Matches to skip (default: 0)")
    page_group.add_argument("--limit", type=int, help="Page size (default: from configuration)")
    page_group.add_argument(
        "--count",
        action="store_true",
        help="Print the number of matches instead of a page",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument("--debug", action="store_true", help="Enable debug logging")
    log_group.add_argument("--log-file", metavar="FILE", type=str, help="Log file path")

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Raises:
        CLIError: If validation fails
    """
    if not args.config and not args.origins:
        raise CLIError(
            "Either --config or --origin must be specified\n" "Use --help for usage information"
        )

    if args.config:
        if not os.path.exists(args.config):
            raise CLIError(f"Configuration file does not exist: {args.config}")
        if not os.path.isfile(args.config):
            raise CLIError(f"Configuration path is not a file: {args.config}")

    for spec in args.origins or []:
        parse_origin_spec(spec)

    if args.offset < 0:
        raise CLIError(f"Offset must be non-negative: {args.offset}")

    if args.limit is not None and args.limit < 0:
        raise CLIError(f"Limit must be non-negative: {args.limit}")


def parse_origin_spec(spec: str) -> Dict[str, str]:
    """
    Parse a ``KIND=DIR`` origin argument into an origin configuration entry.

    Raises:
        CLIError: If the argument is malformed or the directory doesn't exist
    """
    kind, sep, directory = spec.partition("=")
    if not sep or not kind or not directory:
        raise CLIError(f"Origin must be given as KIND=DIR: {spec}")

    try:
        origin_class(kind)
    except ValidationError as e:
        raise CLIError(str(e))

    if not os.path.isdir(directory):
        raise CLIError(f"Origin directory does not exist: {directory}")

    return {
        ConfigKey.ORIGIN_KIND: kind,
        ConfigKey.ORIGIN_NAME: os.path.basename(os.path.abspath(directory)),
        ConfigKey.ORIGIN_PATH: os.path.abspath(directory),
    }


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build configuration overrides from command-line arguments.

    Origins and modules given on the command line replace configured ones.

    Returns:
        Configuration dictionary for the CLI_ARGS source
    """
    config: Dict[str, Any] = {}

    if args.origins:
        config[ConfigKey.ORIGINS] = [parse_origin_spec(spec) for spec in args.origins]

    if args.modules:
        config[ConfigKey.MODULES] = list(args.modules)

    if args.debug:
        config[ConfigKey.LOGGING] = {"level": "DEBUG"}

    if args.log_file:
        config.setdefault(ConfigKey.LOGGING, {})["file"] = args.log_file

    return config


def build_filter(args: argparse.Namespace) -> Dict[Column, Any]:
    """
    Build a column filter from the filter options.

    Returns:
        Column to value mapping; options not given are left out
    """
    flt: Dict[Column, Any] = {}

    if args.name:
        flt[Column.NAME] = args.name
    if args.type:
        flt[Column.TYPE] = args.type
    if args.origin_kind:
        flt[Column.ORIGIN] = origin_class(args.origin_kind)
    if args.overridden:
        flt[Column.OVERRIDDEN] = True
    if args.status is not None:
        flt[Column.STATUS] = StatusOption(value=str(args.status))

    return flt


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on configuration.

    Returns:
        Configured logger instance
    """
    logger = Logger("resourcefilter", level=config.get("resourcefilter.logging.level", "INFO"))

    log_file = config.get("resourcefilter.logging.file")
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))

    return logger


def run(args: argparse.Namespace, config: ConfigManager, logger: Logger) -> int:
    """
    Execute the query described by the arguments and print the result.

    Returns:
        Exit code
    """
    engine = QueryEngine.from_config(config, logger=logger.child("query"))
    flt = build_filter(args)

    if args.count:
        print(engine.count(flt))
        return ErrorCode.SUCCESS

    limit = args.limit
    if limit is None:
        limit = config.get("resourcefilter.query.default_limit")

    page = engine.fetch(flt, offset=args.offset, limit=limit)
    total = engine.count(flt)
    output = PageRenderer().render(
        page, total=total, offset=args.offset, type_detector=engine.evaluator.type_detector
    )
    sys.stdout.write(output)
    return ErrorCode.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Handles argument parsing, configuration loading and error reporting.
    """
    try:
        args = parse_arguments(argv)

        config = ConfigManager(args.config)
        config.load_dict(build_config_from_args(args), source=ConfigSource.CLI_ARGS)

        logger = setup_logging(config)
        logger.debug("Configuration loaded", config_file=args.config)

        return run(args, config, logger)

    except (
        CLIError,
        ConfigError,
        ValidationError,
        RenderError,
        UnsupportedFilterColumnError,
        RepositoryUnavailableError,
        ValueError,
    ) as e:
        print(f"Error: {e}", file=sys.stderr)
        return ErrorCode.INVALID_INPUT

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())

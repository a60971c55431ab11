"""Convert command wiring for gtfs-rdf CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from core.config import ConversionConfig, load_profile
from core.constants import SUPPORTED_OUTPUT_FORMATS
from core.errors import GtfsRdfError
from core.logging_config import get_logger
from ingest.pipeline import convert_feed

_LOGGER = get_logger(__name__)


def add_convert_command(subparsers: Any) -> None:
    """Register convert subcommand."""
    parser = subparsers.add_parser("convert", help="Convert a GTFS directory to RDF")
    parser.add_argument(
        "input_dir",
        nargs="?",
        help="Directory holding the GTFS .txt tables (default: current directory)",
    )
    parser.add_argument(
        "--base",
        help="Base URI for instance URIs, without trailing slash, e.g. http://myrdf.us/mta/mnr",
    )
    parser.add_argument("--license", help="License URI for the dataset description")
    parser.add_argument("--source", help="Source URI for the dataset description")
    parser.add_argument(
        "--split-size",
        type=int,
        help="Start a new output batch after this many source rows",
    )
    parser.add_argument(
        "--output",
        choices=SUPPORTED_OUTPUT_FORMATS,
        help="Output encoding",
    )
    parser.add_argument("--profile", help="YAML profile with conversion settings")
    parser.add_argument("--output-file", help="Write output to this file instead of stdout")


def run_convert_command(args: argparse.Namespace) -> int:
    """Execute conversion and report failures on stderr."""
    try:
        config = build_config(args)
        if args.output_file:
            with Path(args.output_file).open("w", encoding="utf-8") as stream:
                convert_feed(config, stream)
        else:
            convert_feed(config, sys.stdout)
    except GtfsRdfError as error:
        _LOGGER.error("conversion_failed", error=str(error), error_type=type(error).__name__)
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


def build_config(args: argparse.Namespace) -> ConversionConfig:
    """Merge environment, profile and flag values into a validated config.

    Flags override profile values, which override environment values.
    """
    config = ConversionConfig.from_env()
    if args.profile:
        config = config.with_overrides(load_profile(args.profile))
    config = config.with_overrides(
        {
            "base_uri": args.base,
            "input_dir": args.input_dir,
            "license_uri": args.license,
            "source_uri": args.source,
            "split_size": args.split_size,
            "output_format": args.output,
        }
    )
    return config.validate()

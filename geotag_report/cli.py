"""Command-line entry point: scan a directory and write the GPS reports."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_ROOT, ScanConfig, build_config, load_config_file
from .errors import ConfigurationError, TraversalError
from .reports import write_reports
from .scanner import aggregate

logger = logging.getLogger("geotag_report")

EXIT_OK = 0
EXIT_TRAVERSAL = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geotag-report",
        description="Extract GPS coordinates from image EXIF data into CSV/HTML reports",
    )
    parser.add_argument("--path", default="", help=f"root directory path for images (default: {DEFAULT_ROOT})")
    parser.add_argument("--html", action="store_true", help="generate only the html report")
    parser.add_argument("--csv", action="store_true", help="generate only the csv report")
    parser.add_argument("--output-dir", help="directory to write reports into (default: current directory)")
    parser.add_argument("--ext", action="append", dest="extensions", metavar="EXT",
                        help="file extension to include, repeatable; replaces the default set")
    parser.add_argument("--config", type=Path, help="JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=logging.getLevelName(level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run(config: ScanConfig) -> int:
    try:
        records = aggregate(config.root_path, config.extensions)
    except TraversalError as e:
        logger.error("%s", e)
        return EXIT_TRAVERSAL
    write_reports(records, config)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        file_values = load_config_file(args.config) if args.config else None
        config = build_config(
            path=args.path,
            extensions=args.extensions,
            output_dir=args.output_dir,
            html=args.html,
            csv=args.csv,
            log_level="DEBUG" if args.verbose else None,
            file_values=file_values,
        )
    except ConfigurationError as e:
        setup_logging("INFO")
        logger.error("%s", e)
        return EXIT_CONFIG

    setup_logging(config.log_level)
    logger.debug("Running with %s", config)
    return run(config)

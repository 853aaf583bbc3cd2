"""
Command-line interface for modslicer.

Usage:
    modslicer INPUT_DIR MAPPING [--log-level LEVEL]

INPUT_DIR holds the mod's original archive files. MAPPING is the TOML file
describing what to copy and which atlases to slice; output is written under
src/main/resources/ next to it.
"""

import argparse
import logging
import sys

from modslicer.errors import ModSlicerError
from modslicer.processing.converter import convert

logger = logging.getLogger("modslicer.cli")


def build_parser():
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="modslicer",
        description="Extract mod assets from archives and slice texture atlases",
    )

    parser.add_argument(
        "input_dir",
        help="Path to folder with original mod files",
    )

    parser.add_argument(
        "toml",
        help="Path to toml file, using headers as atlas names, keys as positions, "
        "and values as result names",
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="info",
        help="Logging level",
    )

    return parser


def main(argv=None):
    """
    Main entry point for modslicer with command-line argument parsing.

    Returns:
        Process exit code (0 on success, 1 on failure)
    """
    args = build_parser().parse_args(argv)

    # Configure logging
    numeric_level = getattr(logging, args.log_level.upper(), None)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        result = convert(args.input_dir, args.toml)
    except ModSlicerError as e:
        logger.error(str(e))
        return 1

    logger.info(
        f"Wrote {result['copied']} copied files and {result['sliced']} atlas slices "
        f"to {result['output_dir']}"
    )
    print("done")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
modslicer - mod asset extractor and atlas slicer.

This is the main entry point when running from a source checkout:

    python main.py <input_dir> <mapping.toml>
"""

import sys

from modslicer.cli import main as cli_main


def main():
    """Main entry point for the application."""
    try:
        exit_code = cli_main()
    except KeyboardInterrupt:
        print("\nExiting modslicer...")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

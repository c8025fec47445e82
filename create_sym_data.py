#!/usr/bin/env python3
"""
Script to extract weapon statistics from a saved Symthic stat page.

Reads the weapon classes out of Sym.html and writes every weapon's stats to
sym-data.json (compact) and sym-data-pretty.json (one stat per line).
"""

import argparse
import logging
from typing import List, Optional

from sym_data import SymDataInputException, create_sym_data, persist, to_compact_json, to_pretty_json

DEFAULT_INPUT_FILE = "Sym.html"
DEFAULT_OUTPUT_FILE = "sym-data.json"
DEFAULT_PRETTY_OUTPUT_FILE = "sym-data-pretty.json"

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Extract weapon statistics from a saved Symthic stat page into JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read ./Sym.html, write ./sym-data.json and ./sym-data-pretty.json
  python create_sym_data.py

  # Use a different saved page
  python create_sym_data.py --input pages/bf4.html
        """,
    )

    parser.add_argument("--input", type=str, default=DEFAULT_INPUT_FILE, help=f"Saved stat page (default: {DEFAULT_INPUT_FILE})")

    parser.add_argument("--output", type=str, default=DEFAULT_OUTPUT_FILE, help=f"Compact JSON output (default: {DEFAULT_OUTPUT_FILE})")

    parser.add_argument(
        "--pretty-output",
        type=str,
        default=DEFAULT_PRETTY_OUTPUT_FILE,
        help=f"Pretty JSON output (default: {DEFAULT_PRETTY_OUTPUT_FILE})",
    )

    parser.add_argument("--verbose", action="store_true", help="Log per-field details")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        sym_data = create_sym_data(args.input)
    except SymDataInputException as e:
        logger.error(f"Aborting, no output written: {e}")
        return 1

    # Both files are attempted even if one of them fails
    results = [
        persist(args.output, to_compact_json(sym_data)),
        persist(args.pretty_output, to_pretty_json(sym_data)),
    ]
    return 0 if all(results) else 1


if __name__ == "__main__":
    exit(main())

#!/usr/bin/env python3
"""
Generate the GitHub stat cards (card.svg and toolbox.svg) by querying the
GitHub REST and Search APIs for the configured user.

Usage:
  python scripts/generate_cards.py            # both cards
  python scripts/generate_cards.py stats      # card.svg only
  python scripts/generate_cards.py toolbox    # toolbox.svg only

Environment variables:
  GITHUB_TOKEN: Personal access token (required)
  GITHUB_USERNAME: GitHub username (default: its-me-mayday)
  GITHUB_DISPLAY_NAME: Name shown in the stats card title (default: Luca Maggio)
  OUTPUT_DIR: Directory receiving the SVG files (default: current directory)
  TOOLBOX_LAYOUT: "list" or "bars" (default: list)
  TOOLBOX_MAX_LANGUAGES, TOOLBOX_MAX_ITEMS, TOOLBOX_WORKERS: toolbox tuning
  GITHUB_REQUEST_TIMEOUT: Per-request timeout in seconds (default: none)
"""

import argparse
import os
import sys

from stat_cards.config import ALL_CARDS, ConfigurationError, load_config
from stat_cards.controller import run_generation


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render GitHub stat cards as SVG.")
    parser.add_argument(
        "cards",
        nargs="*",
        help=f"cards to generate, any of: {', '.join(ALL_CARDS)} (default: all)",
    )
    args = parser.parse_args(argv)
    unknown = [card for card in args.cards if card not in ALL_CARDS]
    if unknown:
        parser.error(f"unknown card(s): {', '.join(unknown)}")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(os.environ)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    result = run_generation(config, args.cards or ALL_CARDS)
    return result.exit_code


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()

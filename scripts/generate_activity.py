#!/usr/bin/env python3
"""Command-line entry point for generating a GitHub activity summary."""

import argparse
import json
import logging
import sys
from pathlib import Path

from aggregator import summarize
from fetcher import UpstreamFetchError, get_token
from renderer import render_markdown
from settings import DEFAULT_CONFIG, DEFAULT_TEMPLATE, load_config, setup_logging

log = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a GitHub activity summary")
    parser.add_argument("--user", help="GitHub handle (default: github_user from config)")
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG),
        help="Config file path",
    )
    parser.add_argument(
        "--template",
        default=str(DEFAULT_TEMPLATE),
        help="Template file path",
    )
    parser.add_argument(
        "--format",
        choices=["markdown", "json"],
        default="markdown",
        help="Output format (default: markdown)",
    )
    parser.add_argument("--output", "-o", help="Write to this file instead of stdout")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Setup logging
    setup_logging(args.verbose)

    # Load config
    try:
        config = load_config(Path(args.config))
    except (FileNotFoundError, ValueError) as e:
        log.error(f"Config error: {e}")
        sys.exit(1)

    handle = args.user or config["github_user"]
    log.info(f"Fetching activity for {handle}...")

    try:
        summary = summarize(handle, get_token(), config)
    except UpstreamFetchError as e:
        log.error(f"Failed to fetch activity data: {e}")
        sys.exit(1)

    if args.format == "json":
        output = json.dumps(summary.to_dict(), indent=2, ensure_ascii=False)
    else:
        output = render_markdown(summary, Path(args.template))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output)
        log.info(f"Output written to: {output_path}")
    else:
        print(output)


if __name__ == "__main__":
    main()

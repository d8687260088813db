#!/usr/bin/env python3
"""
Full-page screenshots of local HTML files, directories of them, or URLs.

Usage:
    pagecapture --input page.html --output out.png
    pagecapture -i site/ -o shots/ --hide-selectors ".ad,.banner"
    pagecapture -i https://example.com --follow-iframe true --iframe-selector ".frame"

Options not given on the command line are read from the config file
(screenshot.config.toml by default; .json, .toml, .yaml and .env accepted).
"""

import argparse
import sys

from .capture import run_capture
from .config import build_options


# argparse dest -> CaptureOptions field
CLI_FIELDS = {
    'input': 'input',
    'output': 'output',
    'width': 'viewport_width',
    'height': 'viewport_height',
    'wait': 'wait_after_load',
    'timeout': 'navigation_timeout',
    'follow_iframe': 'follow_iframe',
    'iframe_selector': 'iframe_selector',
    'iframe_index': 'iframe_index',
    'hide_selectors': 'hide_selectors',
    'remove_selectors': 'remove_selectors',
    'no_sandbox': 'no_sandbox',
    'scale': 'device_scale_factor',
    'headless': 'headless',
    'keep_going': 'keep_going',
    'progress': 'progress',
}


def build_parser() -> argparse.ArgumentParser:
    # -h is --height, so help is registered by hand
    parser = argparse.ArgumentParser(
        prog="pagecapture",
        description="Capture full-page screenshots of HTML files or URLs",
        add_help=False,
        argument_default=argparse.SUPPRESS,
    )

    def option(*flags, **kwargs):
        # A flag followed by another flag (or nothing) reads as boolean true
        parser.add_argument(*flags, nargs="?", const=True, **kwargs)

    option("--input", "-i", help="HTML file, directory of HTML files, or http(s) URL (default: .)")
    option("--output", "-o", help="Output file or directory (default: ./screenshots)")
    parser.add_argument("--config", help="Config file (.json/.toml/.yaml/.env, default: screenshot.config.toml)")
    option("--width", "-w", help="Viewport width in CSS pixels (default: 1440)")
    option("--height", "-h", help="Viewport height in CSS pixels (default: 900)")
    option("--wait", "-t", help="Extra wait in ms after load/network idle (default: 1500)")
    option("--timeout", help="Navigation timeout in ms (default: 60000)")
    option("--follow-iframe", help="Follow iframe content: true, false or auto (default: auto)")
    option("--iframe-selector", help="CSS selector for the iframe to follow (default: iframe)")
    option("--iframe-index", help="0-based match to follow when forced (default: 0)")
    option("--hide-selectors", help="Comma-separated CSS selectors to hide before capture")
    option("--remove-selectors", help="Comma-separated CSS selectors to remove before capture")
    option("--no-sandbox", help="Launch Chromium without the sandbox")
    option("--scale", help="Device scale factor (default: 2)")
    parser.add_argument("--headed", dest="headless", action="store_const", const=False,
                        help="Show the browser window")
    option("--keep-going", help="Continue the batch when a page fails")
    option("--progress", help="Show a progress bar for batches")
    parser.add_argument("--help", action="store_true", help="Show this message")
    return parser


def cli_layer(args: argparse.Namespace) -> dict:
    """Options actually given on the command line, keyed by CaptureOptions field."""
    given = vars(args)
    return {field: given[dest] for dest, field in CLI_FIELDS.items() if dest in given}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "help", False):
        parser.print_help()
        return 0

    try:
        options = build_options(cli_layer(args), config_path=getattr(args, "config", None))
        batch = run_capture(
            options,
            report=print,
            report_error=lambda msg: print(msg, file=sys.stderr),
        )
    except Exception as exc:
        print(f"Failed to capture screenshot: {exc}", file=sys.stderr)
        return 1

    if batch.failed:
        print(f"{len(batch.failed)} of {len(batch.results)} pages failed", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

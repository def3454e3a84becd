"""Command-line entry point for jurl."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from playwright.async_api import Error as PlaywrightError

from .config import FetchConfig, OutputFormat, __version__
from .driver import fetch
from .errors import FetchError

logger = logging.getLogger("jurl.cli")

DESCRIPTION = """\
jurl - JavaScript-enabled curl replacement

jurl is a command-line HTTP client similar to curl, but it renders pages in
headless Chromium first. This lets it fetch content from JavaScript-heavy
sites and single-page apps that plain curl only sees as an empty shell.

key features:
  * full JavaScript execution and rendering
  * curl-compatible command-line flags
  * support for dynamic content via --wait-for-selector
  * screenshot capture
  * html, text and json output formats
"""

EPILOG = """\
examples:
  jurl https://example.com
  jurl -o output.html https://example.com
  jurl --format text https://example.com
  jurl --screenshot page.png https://example.com
  jurl --wait-for-selector "div.content" https://example.com
  jurl -v -A "MyBot 1.0" https://example.com
  jurl -i https://example.com
  jurl -X POST -d "key=value" https://example.com/api

differences from curl:
  * executes JavaScript and prints the rendered DOM
  * slower, since every request starts a browser
  * -i prints a fixed "HTTP/1.1 200 OK" block, not the real response headers
  * -d is logged with -v but never sent; -H and -L are accepted and ignored

The Chromium build is managed by Playwright; run `playwright install chromium`
once before first use.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jurl",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "url",
        help="The URL to fetch. Must include protocol (http:// or https://).",
    )
    parser.add_argument(
        "-X",
        "--request",
        dest="method",
        default="GET",
        help="Request method to use (GET or POST). Default is GET.",
    )
    parser.add_argument(
        "-i",
        "--include",
        dest="include_headers",
        action="store_true",
        help="Print a status and header block before the body, similar to curl -i.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show connection details and progress on stderr.",
    )
    parser.add_argument(
        "-L",
        "--location",
        dest="follow_redirects",
        action="store_true",
        help="Accepted for curl compatibility; the browser always follows redirects.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write output to file instead of stdout. Creates the file if it doesn't exist.",
    )
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        default=[],
        help="Custom header in 'Header: value' form. Can be repeated. Currently not sent.",
    )
    parser.add_argument(
        "-d",
        "--data",
        help="Data for a POST request. Currently only shown with --verbose.",
    )
    parser.add_argument(
        "--wait-for-selector",
        help="Wait for a CSS selector to appear before capturing content.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Maximum time in seconds to wait for page load or selector. Default is 30.",
    )
    parser.add_argument(
        "--screenshot",
        help="Save a full-page PNG screenshot to this file instead of printing content.",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.HTML.value,
        help="Output format: html (rendered DOM), text (visible text), json (parse text as JSON).",
    )
    parser.add_argument(
        "-s",
        "--silent",
        action="store_true",
        help="Silent mode: print nothing to stdout (headers, body and confirmations).",
    )
    parser.add_argument(
        "-A",
        "--user-agent",
        help="User-Agent string for the browser session.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.timeout <= 0:
        parser.error("--timeout must be a positive number of seconds")
    return args


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)
    config = FetchConfig.from_args(args)

    try:
        asyncio.run(fetch(config))
    except FetchError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except PlaywrightError as exc:
        logger.error("Browser error: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()

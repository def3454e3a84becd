"""Configuration objects and constants for a single fetch."""

from __future__ import annotations

import argparse
import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

__version__ = "1.0.0"

WINDOW_SIZE = (1920, 1080)
SETTLE_DELAY_SECONDS = 2.0
SUPPORTED_METHODS = ("GET", "POST")

# Fabricated header block for -i; no real response is observed.
SYNTHETIC_STATUS_LINE = "HTTP/1.1 200 OK"
SYNTHETIC_CONTENT_TYPE = "text/html; charset=utf-8"


class OutputFormat(str, enum.Enum):
    """How the rendered page is turned into output."""

    HTML = "html"
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class FetchConfig:
    """Settings for one fetch, built once from the command line."""

    url: str
    method: str = "GET"
    include_headers: bool = False
    verbose: bool = False
    follow_redirects: bool = False
    output: Optional[Path] = None
    headers: Tuple[str, ...] = ()
    data: Optional[str] = None
    wait_for_selector: Optional[str] = None
    timeout: int = 30
    screenshot: Optional[Path] = None
    output_format: OutputFormat = OutputFormat.HTML
    silent: bool = False
    user_agent: Optional[str] = None

    @property
    def normalized_method(self) -> str:
        return self.method.upper()

    @property
    def timeout_ms(self) -> float:
        return self.timeout * 1000

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "FetchConfig":
        return cls(
            url=args.url,
            method=args.method,
            include_headers=args.include_headers,
            verbose=args.verbose,
            follow_redirects=args.follow_redirects,
            output=Path(args.output) if args.output else None,
            headers=tuple(args.headers or ()),
            data=args.data,
            wait_for_selector=args.wait_for_selector,
            timeout=args.timeout,
            screenshot=Path(args.screenshot) if args.screenshot else None,
            output_format=OutputFormat(args.format),
            silent=args.silent,
            user_agent=args.user_agent,
        )

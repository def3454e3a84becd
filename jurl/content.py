"""Formatting helpers for extracted page content."""

from __future__ import annotations

import json
from typing import Any, List

from .config import SYNTHETIC_CONTENT_TYPE, SYNTHETIC_STATUS_LINE


def coerce_text(value: Any) -> str:
    """Return ``value`` when it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def format_json(text: str) -> str:
    """Pretty-print ``text`` when it parses as JSON, else return it unchanged.

    NaN, Infinity and numbers too large for a float are not JSON and fall
    back to the raw text.
    """
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
        return json.dumps(parsed, indent=2, ensure_ascii=False, allow_nan=False)
    except ValueError:
        return text


def content_length(content: str) -> int:
    return len(content.encode("utf-8"))


def synthetic_header_lines(content: str) -> List[str]:
    """Build the fake curl ``-i`` block that precedes the body.

    None of these values come from the network; the browser consumed the
    real response long before the page content is read.
    """
    return [
        SYNTHETIC_STATUS_LINE,
        f"Content-Length: {content_length(content)}",
        f"Content-Type: {SYNTHETIC_CONTENT_TYPE}",
        "",
    ]

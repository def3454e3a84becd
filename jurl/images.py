"""Screenshot validation and persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from filetype import guess

from .errors import FetchError

logger = logging.getLogger("jurl.images")


def save_screenshot(data: bytes, path: Path) -> Path:
    """Write captured screenshot bytes to ``path``.

    The bytes must carry a PNG signature; anything else means the capture
    went wrong and nothing is written.
    """
    kind = guess(data)
    if kind is None or kind.extension != "png":
        found = kind.extension if kind else "unrecognised"
        raise FetchError(f"Screenshot capture returned {found} data, expected png")
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FetchError(f"Failed to write screenshot to {path}: {exc}") from exc
    logger.info("Wrote %d screenshot bytes to %s", len(data), path)
    return path

"""The fetch sequence: validate, render, extract, then write the result."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .browser import (
    capture_screenshot,
    extract_content,
    navigate,
    open_session,
    wait_for_page,
)
from .config import SUPPORTED_METHODS, FetchConfig
from .content import synthetic_header_lines
from .errors import FetchError, UnsupportedMethodError
from .images import save_screenshot

logger = logging.getLogger("jurl.driver")


def check_method(config: FetchConfig) -> str:
    method = config.normalized_method
    if method not in SUPPORTED_METHODS:
        raise UnsupportedMethodError(config.method)
    return method


def emit_output(config: FetchConfig, content: str, stdout: TextIO) -> None:
    """Write ``content`` to the output file or ``stdout``.

    The file is written before anything reaches ``stdout`` so a failed write
    leaves no partial output behind.
    """
    if config.output is not None:
        logger.info("Writing output to: %s", config.output)
        try:
            config.output.write_bytes(content.encode("utf-8"))
        except OSError as exc:
            raise FetchError(f"Failed to write output to {config.output}: {exc}") from exc

    if config.silent:
        return

    if config.include_headers:
        for line in synthetic_header_lines(content):
            print(line, file=stdout)

    if config.output is not None:
        print(f"Output saved to: {config.output}", file=stdout)
    else:
        print(content, file=stdout)


async def fetch(config: FetchConfig, stdout: Optional[TextIO] = None) -> None:
    """Render ``config.url`` once and print or save the result."""
    stdout = stdout or sys.stdout
    check_method(config)

    logger.info("Connecting to %s...", config.url)
    if config.headers:
        logger.info("Custom headers are not sent: %s", ", ".join(config.headers))

    async with open_session(config) as page:
        await navigate(page, config)
        await wait_for_page(page, config)

        if config.screenshot is not None:
            logger.info("Taking screenshot to: %s", config.screenshot)
            data = await capture_screenshot(page)
            save_screenshot(data, config.screenshot)
            if not config.silent:
                print(f"Screenshot saved to: {config.screenshot}", file=stdout)
            return

        content = await extract_content(page, config.output_format)

    emit_output(config, content, stdout)
    logger.info("Connection closed")

"""Playwright session handling: launch, navigate, wait, capture and extract."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import SETTLE_DELAY_SECONDS, WINDOW_SIZE, FetchConfig, OutputFormat
from .content import coerce_text, format_json
from .errors import FetchError

logger = logging.getLogger("jurl.browser")

BODY_TEXT_SCRIPT = "document.body.innerText"


@asynccontextmanager
async def open_session(config: FetchConfig) -> AsyncIterator[Page]:
    """Launch headless Chromium and yield a page configured for ``config``.

    The browser is closed when the block exits, whether or not it raised.
    """
    width, height = WINDOW_SIZE
    async with async_playwright() as playwright:
        try:
            browser = await playwright.chromium.launch(
                headless=True,
                args=[f"--window-size={width},{height}"],
            )
        except PlaywrightError as exc:
            raise FetchError(f"Failed to launch browser: {exc}") from exc
        try:
            try:
                context = await browser.new_context(
                    viewport={"width": width, "height": height},
                    user_agent=config.user_agent,
                )
                page = await context.new_page()
            except PlaywrightError as exc:
                raise FetchError(f"Failed to open browser session: {exc}") from exc
            page.set_default_timeout(config.timeout_ms)
            page.set_default_navigation_timeout(config.timeout_ms)
            yield page
        finally:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.debug("Ignoring error while closing browser: %s", exc)


async def navigate(page: Page, config: FetchConfig) -> None:
    """Point ``page`` at the configured URL.

    GET and POST behave the same; POST data is only logged.
    """
    logger.info("Navigating to %s...", config.url)
    try:
        # Only wait for the response to commit; load handling is up to wait_for_page.
        await page.goto(config.url, wait_until="commit")
    except PlaywrightError as exc:
        raise FetchError(f"Failed to navigate to {config.url}: {exc}") from exc

    if config.normalized_method == "POST" and config.data is not None:
        logger.info("Sending POST data: %s", config.data)


async def wait_for_page(page: Page, config: FetchConfig) -> None:
    """Block until the selector appears, or until load plus the settle delay."""
    selector = config.wait_for_selector
    if selector:
        logger.info("Waiting for selector: %s", selector)
        try:
            await page.wait_for_selector(
                selector, state="attached", timeout=config.timeout_ms
            )
        except PlaywrightTimeoutError as exc:
            raise FetchError(
                f"Timed out after {config.timeout}s waiting for selector {selector!r}"
            ) from exc
        except PlaywrightError as exc:
            raise FetchError(f"Failed waiting for selector {selector!r}: {exc}") from exc
        return

    try:
        await page.wait_for_load_state("load")
    except PlaywrightError as exc:
        raise FetchError(f"Page did not finish loading: {exc}") from exc
    await page.wait_for_timeout(SETTLE_DELAY_SECONDS * 1000)


async def capture_screenshot(page: Page) -> bytes:
    """Return a full-page PNG of ``page``."""
    try:
        return await page.screenshot(full_page=True, type="png")
    except PlaywrightError as exc:
        raise FetchError(f"Failed to capture screenshot: {exc}") from exc


async def read_body_text(page: Page) -> str:
    try:
        value = await page.evaluate(BODY_TEXT_SCRIPT)
    except PlaywrightError as exc:
        raise FetchError(f"Failed to read page text: {exc}") from exc
    return coerce_text(value)


async def extract_content(page: Page, output_format: OutputFormat) -> str:
    """Read the rendered page in the requested format."""
    if output_format is OutputFormat.HTML:
        try:
            return await page.content()
        except PlaywrightError as exc:
            raise FetchError(f"Failed to read page markup: {exc}") from exc

    text = await read_body_text(page)
    if output_format is OutputFormat.JSON:
        return format_json(text)
    return text

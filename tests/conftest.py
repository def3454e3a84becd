"""Shared test fixtures and configuration."""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Dict, Iterator, List, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest

from jurl.config import FetchConfig

# Minimal PNG: signature followed by an IHDR chunk.
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n"
    b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"
    b"\x1f\x15\xc4\x89"
    b"\x00\x00\x00\x00IEND\xaeB`\x82"
)

PAGES: Dict[str, Tuple[str, str]] = {
    "/": ("text/html", "<html><head><title>Home</title></head><body><p>Hello World</p></body></html>"),
    "/json": ("text/html", '<html><body>{"a":1}</body></html>'),
    "/notjson": ("text/html", "<html><body>not json</body></html>"),
    "/late": (
        "text/html",
        "<html><body><script>"
        "setTimeout(() => { const d = document.createElement('div');"
        " d.id = 'late'; d.textContent = 'arrived'; document.body.appendChild(d); }, 300);"
        "</script></body></html>",
    ),
}


# ============================================================
# Config fixtures
# ============================================================


@pytest.fixture
def make_config() -> Callable[..., FetchConfig]:
    """Build a FetchConfig with overridable fields."""

    def factory(**overrides) -> FetchConfig:
        values = {"url": "https://example.com/"}
        values.update(overrides)
        return FetchConfig(**values)

    return factory


# ============================================================
# Playwright doubles
# ============================================================


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def mock_page() -> AsyncMock:
    """An async Playwright Page stand-in."""
    page = AsyncMock()
    page.content.return_value = "<html><body>Hello</body></html>"
    page.evaluate.return_value = "Hello"
    page.screenshot.return_value = PNG_BYTES
    page.set_default_timeout = MagicMock()
    page.set_default_navigation_timeout = MagicMock()
    return page


@pytest.fixture
def fake_session(mock_page: AsyncMock) -> MagicMock:
    """Replacement for ``open_session`` that yields ``mock_page``."""
    calls = MagicMock()

    @asynccontextmanager
    async def session(config):
        calls(config)
        yield mock_page

    calls.session = session
    return calls


# ============================================================
# Local page server
# ============================================================


class PageServer:
    def __init__(self, server: ThreadingHTTPServer, requests: List[str]) -> None:
        self._server = server
        self.requests = requests

    def url(self, path: str = "/") -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}{path}"


@pytest.fixture
def page_server() -> Iterator[PageServer]:
    """Serve ``PAGES`` on localhost and record every request path."""
    requests: List[str] = []

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            requests.append(self.path)
            content_type, body = PAGES.get(self.path, ("text/html", "<html><body>missing</body></html>"))
            payload = body.encode("utf-8")
            self.send_response(200 if self.path in PAGES else 404)
            self.send_header("Content-Type", f"{content_type}; charset=utf-8")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format, *args) -> None:  # noqa: A002
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield PageServer(server, requests)
    finally:
        server.shutdown()
        server.server_close()


# ============================================================
# Pytest hooks
# ============================================================


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register --run-functional for tests that launch a real browser."""
    parser.addoption(
        "--run-functional",
        action="store_true",
        default=False,
        help="Run tests marked functional, which need a Playwright Chromium install",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "functional: drives a real headless Chromium against a local server",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip functional tests unless --run-functional is passed."""
    if config.getoption("--run-functional"):
        return

    skip_marker = pytest.mark.skip(reason="needs --run-functional to launch a real browser")
    for item in items:
        if "functional" in item.keywords:
            item.add_marker(skip_marker)

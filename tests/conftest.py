"""Pytest configuration and fixtures."""

import tempfile
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable, Generator

import pytest

from feedpush.core.models import Artifact

_ENV_VARS = (
    "FEEDPUSH_SOURCE",
    "FEEDPUSH_SYMBOL_SOURCE",
    "FEEDPUSH_API_KEY",
    "FEEDPUSH_TIMEOUT",
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of configuration and proxying."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_package(directory: Path, name: str, content: bytes | None = None) -> Path:
    """Write a fake package file and return its path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content if content is not None else f"package:{name}".encode())
    return path


@pytest.fixture
def package_dir(temp_dir: Path) -> Path:
    """Directory with two packages, one of which has a symbol package."""
    write_package(temp_dir, "Contoso.Lib.1.0.0.nupkg")
    write_package(temp_dir, "Contoso.Lib.1.0.0.snupkg")
    write_package(temp_dir, "Contoso.Tools.2.1.0.nupkg")
    write_package(temp_dir, "README.md", b"# not a package")
    return temp_dir


@pytest.fixture
def make_artifact(temp_dir: Path) -> Callable[..., Artifact]:
    """Factory writing a package file and returning its Artifact."""

    def _make(name: str, explicit: bool = True) -> Artifact:
        return Artifact.from_path(write_package(temp_dir, name), explicit=explicit)

    return _make


class MockFeed:
    """
    Minimal feed server accepting PUT uploads.

    ``responder`` receives the 1-based request count and the request path
    and returns the status code to answer with. A non-zero ``drip`` sends
    the response one byte at a time, pausing ``drip`` seconds per byte.
    """

    def __init__(self) -> None:
        self.uploads: list[tuple[str, dict[str, str], bytes]] = []
        self.responder: Callable[[int, str], int] = lambda count, path: 201
        self.delay = 0.0
        self.drip = 0.0
        self._lock = threading.Lock()
        self._server = ThreadingHTTPServer(("127.0.0.1", 0), self._handler_class())
        self._server.daemon_threads = True
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    @property
    def push_url(self) -> str:
        return f"{self.url}/push"

    @property
    def symbol_url(self) -> str:
        return f"{self.url}/symbols"

    def paths(self) -> list[str]:
        return [path for path, _, _ in self.uploads]

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()

    def _handler_class(self) -> type[BaseHTTPRequestHandler]:
        feed = self

        class Handler(BaseHTTPRequestHandler):
            def do_PUT(self) -> None:
                length = int(self.headers.get("Content-Length", 0))
                body = self.rfile.read(length)
                if feed.delay:
                    time.sleep(feed.delay)
                with feed._lock:
                    headers = {k.lower(): v for k, v in self.headers.items()}
                    feed.uploads.append((self.path, headers, body))
                    status = feed.responder(len(feed.uploads), self.path)
                if feed.drip:
                    self._drip(status)
                    return
                self.send_response(status)
                self.send_header("Content-Length", "0")
                self.end_headers()

            def _drip(self, status: int) -> None:
                self.close_connection = True
                raw = f"HTTP/1.1 {status} Status\r\nContent-Length: 0\r\n\r\n".encode()
                for i in range(len(raw)):
                    self.wfile.write(raw[i : i + 1])
                    self.wfile.flush()
                    time.sleep(feed.drip)

            def log_message(self, format: str, *args) -> None:
                pass

        return Handler


@pytest.fixture
def mock_feed() -> Generator[MockFeed, None, None]:
    """Provide a running mock feed server."""
    feed = MockFeed()
    feed.start()
    try:
        yield feed
    finally:
        feed.stop()


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Provide the package-writing helper to tests."""
    return write_package

"""
Shared pytest fixtures for Logo Server test suite.
"""
import logging
import os

import httpx
import pytest

from logo_server.config.settings import Settings
from logo_server.utils.logging import configure_default_logging
from logo_server.server import StaticImageServer

# ── Constants ──────────────────────────────────────────────────────────────
IMAGE_FILE_NAME = "logo.png"
# PNG signature plus two bytes: a 10-byte stand-in image
IMAGE_BYTES = b"\x89PNG\r\n\x1a\n\x00\x01"


# ── Environment isolation ───────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop server variables inherited from the shell so defaults are predictable."""
    for key in list(os.environ):
        if key.upper() == "PORT" or key.upper().startswith("LOGO_SERVER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def isolated_logging():
    """Restore root logger handlers and the stderr structlog default after setup_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    configure_default_logging()


# ── Image on disk ───────────────────────────────────────────────────────────

@pytest.fixture
def image_bytes():
    return IMAGE_BYTES


@pytest.fixture
def image_dir(tmp_path):
    """Temporary directory holding a 10-byte logo.png."""
    d = tmp_path / "images"
    d.mkdir()
    (d / IMAGE_FILE_NAME).write_bytes(IMAGE_BYTES)
    return d


@pytest.fixture
def image_path(image_dir):
    return image_dir / IMAGE_FILE_NAME


# ── Server ──────────────────────────────────────────────────────────────────

@pytest.fixture
def make_settings(image_dir):
    """Factory for loopback settings on an ephemeral port."""
    def _make(**overrides):
        values = {
            "host": "127.0.0.1",
            "port": 0,
            "image_directory": image_dir,
            "image_file_name": IMAGE_FILE_NAME,
        }
        values.update(overrides)
        return Settings(**values)
    return _make


@pytest.fixture
def server(make_settings):
    """Running server; stopped on teardown."""
    srv = StaticImageServer(make_settings())
    srv.start()
    yield srv
    srv.stop()


@pytest.fixture
def client(server):
    """HTTP client bound to the running server (ignores proxy env vars)."""
    with httpx.Client(base_url=server.url, trust_env=False, timeout=5.0) as c:
        yield c

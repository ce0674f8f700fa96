"""
Shared pytest fixtures for the example server test suite.
"""
import socket
import threading
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from example_server.config import settings as settings_module
from example_server.config.settings import Settings
from example_server.content import ResponseCache
from example_server.server import ExampleHTTPServer, create_server

# ── Constants ──────────────────────────────────────────────────────────────
SRC_PATH = Path(__file__).parent.parent / "src"
SERVER_ENV_VARS = [
    "BOOT_DELAY_SEC",
    "S3_TEST_FILE",
    "EFS_TEST_FILE",
    "SERVER_TEXT",
    "LOG_LEVEL",
    "LOG_JSON",
    "LOG_DIR",
]


# ── Environment isolation ───────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove server variables from the environment and reset the settings singleton."""
    for name in SERVER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)


@pytest.fixture
def make_settings():
    """Factory building Settings without reading a .env file."""
    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)
    return _make


# ── Ports ───────────────────────────────────────────────────────────────────

def is_port_available(port: int, host: str = "127.0.0.1") -> bool:
    """Check if a port is free to listen on (connections in TIME_WAIT don't count)."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
            return True
        except OSError:
            return False


@pytest.fixture
def port_available():
    return is_port_available


@pytest.fixture(scope="session")
def src_path():
    """Source directory, for PYTHONPATH of server subprocesses."""
    return SRC_PATH


@pytest.fixture
def free_port():
    """A port that was free a moment ago."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


# ── Live server ─────────────────────────────────────────────────────────────

@dataclass
class RunningServer:
    """Server bound on 127.0.0.1 and serving from a background thread."""
    httpd: ExampleHTTPServer
    thread: threading.Thread
    errors: list = field(default_factory=list)

    @property
    def url(self) -> str:
        return self.httpd.url


@pytest.fixture
def run_server(make_settings):
    """
    Start an ExampleHTTPServer on an ephemeral port in a thread.

    Exceptions escaping serve_forever() are collected in `errors`;
    the listening socket is closed when the loop ends, like serve().
    """
    started = []

    def _run(cache: ResponseCache | None = None, **overrides) -> RunningServer:
        httpd = create_server(make_settings(**overrides), host="127.0.0.1", port=0, cache=cache)
        running = RunningServer(httpd=httpd, thread=None)

        def target():
            try:
                httpd.serve_forever()
            except Exception as e:
                running.errors.append(e)
            finally:
                httpd.server_close()

        running.thread = threading.Thread(target=target, daemon=True)
        running.thread.start()
        started.append(running)
        return running

    yield _run

    for running in started:
        if running.thread.is_alive():
            running.httpd.shutdown()
            running.thread.join(timeout=5)

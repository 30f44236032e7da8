import socket

import pytest

from intercept_server.config import ServerConfig


@pytest.fixture
def site(tmp_path):
    """A served root with the fallback resource and one script."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "intercept").write_bytes(b"hi")
    (root / "app.js").write_bytes(b"console.log(1)\n")
    return root.resolve()


@pytest.fixture
def config(site):
    return ServerConfig(host="127.0.0.1", start_port=0, root=site)


@pytest.fixture
def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]

import threading
from contextlib import contextmanager

import pytest

from intercept_server.config import ServerConfig
from intercept_server.server import Server

APP_HTML = b"""<!doctype html>
<html><head><script src="/app.js"></script></head>
<body><div id="app">intercepted</div></body></html>
"""


@contextmanager
def running(root):
    server = Server(ServerConfig(host="127.0.0.1", start_port=18080, root=root))
    thread = threading.Thread(target=server.serve_forever, kwargs={"poll_interval": 0.05})
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        thread.join(timeout=5)
        server.server_close()


@pytest.fixture(scope="module")
def site_root(tmp_path_factory):
    root = tmp_path_factory.mktemp("site")
    (root / "intercept").write_bytes(APP_HTML)
    (root / "app.js").write_bytes(b"console.log(1)\n")
    (root / "styles").mkdir()
    (root / "styles" / "main.css").write_bytes(b"body { margin: 0; }\n")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n" + bytes(range(256)))
    return root.resolve()


@pytest.fixture(scope="module")
def live_server(site_root):
    with running(site_root) as server:
        yield f"http://{server.address_string}"


@pytest.fixture(scope="module")
def bare_server(tmp_path_factory):
    """A server whose root has no fallback resource."""
    root = tmp_path_factory.mktemp("bare")
    (root / "index.html").write_bytes(b"<p>bare</p>")
    with running(root.resolve()) as server:
        yield f"http://{server.address_string}"


@pytest.fixture
def api(playwright):
    context = playwright.request.new_context()
    yield context
    context.dispose()


@pytest.fixture
def app_html():
    return APP_HTML

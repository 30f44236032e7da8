"""Single-process static file server with automatic port selection."""

from .config import ServerConfig, load_config
from .errors import InvalidRootError, NoFreePortError, ServerStartupError
from .handler import Response, build_response, handle_connection
from .paths import resolve_path
from .ports import find_free_port, format_address
from .server import Server

__version__ = "0.1.0"

__all__ = [
    "InvalidRootError",
    "NoFreePortError",
    "Response",
    "Server",
    "ServerConfig",
    "ServerStartupError",
    "build_response",
    "find_free_port",
    "format_address",
    "handle_connection",
    "load_config",
    "resolve_path",
]

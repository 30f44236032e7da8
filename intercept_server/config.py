"""
Process configuration.

Defaults come from the environment (a ``.env`` file is honoured) and are
overridden by the positional command-line arguments::

    python -m intercept_server [host] [start_port] [root]
"""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_MAX_TRIES = 100
FALLBACK_NAME = "intercept"
RECV_SIZE = 1024


@dataclass(frozen=True)
class ServerConfig:
    host: str = DEFAULT_HOST
    start_port: int = DEFAULT_PORT
    root: Path = Path(".")
    max_tries: int = DEFAULT_MAX_TRIES
    # Seconds per connection; None blocks forever.
    timeout: Optional[float] = None
    fallback_name: str = FALLBACK_NAME
    recv_size: int = RECV_SIZE

    @property
    def fallback_route(self) -> str:
        return "/" + self.fallback_name


def port_number(value):
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def _optional_float(value):
    if value in (None, ""):
        return None
    try:
        return float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="intercept-server",
        description="Serve a directory over HTTP on the first free port.",
    )
    parser.add_argument("host", nargs="?", default=None,
                        help=f"address to bind (default: {DEFAULT_HOST})")
    parser.add_argument("start_port", nargs="?", default=None, type=port_number,
                        help=f"first port to try (default: {DEFAULT_PORT})")
    parser.add_argument("root", nargs="?", default=None,
                        help="directory to serve (default: current directory)")
    return parser


def load_config(argv=None, environ=None) -> ServerConfig:
    """Build a ServerConfig from ``argv`` and the environment."""
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        env_port = port_number(environ.get("INTERCEPT_PORT", DEFAULT_PORT))
        max_tries = int(environ.get("INTERCEPT_MAX_TRIES", DEFAULT_MAX_TRIES))
        timeout = _optional_float(environ.get("INTERCEPT_TIMEOUT"))
    except (argparse.ArgumentTypeError, ValueError) as e:
        parser.error(str(e))

    host = args.host or environ.get("INTERCEPT_HOST", DEFAULT_HOST)
    start_port = args.start_port if args.start_port is not None else env_port
    root = args.root or environ.get("INTERCEPT_ROOT") or os.getcwd()

    return ServerConfig(
        host=host,
        start_port=start_port,
        root=Path(root).resolve(),
        max_tries=max_tries,
        timeout=timeout,
    )

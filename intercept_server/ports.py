import logging
import os
import socket

from .config import DEFAULT_MAX_TRIES
from .errors import NoFreePortError

logger = logging.getLogger(__name__)

BACKLOG = 128


def candidate_ports(start_port, max_tries):
    """Consecutive ports from ``start_port``, wrapping past 65535."""
    for i in range(max_tries):
        yield (start_port + i) % 65536


def _bind(host, port):
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        if os.name != "nt":
            # Ports in TIME_WAIT count as free.
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock


def find_free_port(host, start_port, max_tries=DEFAULT_MAX_TRIES):
    """
    Bind and listen on the first free port in the candidate range.

    The socket that wins is returned still listening, so there is no window
    between probing a port and serving on it.
    """
    if max_tries < 1:
        raise ValueError("max_tries must be at least 1")

    for port in candidate_ports(start_port, max_tries):
        if port == 0:
            # 0 asks the OS for an ephemeral port, which is not a candidate.
            continue
        try:
            sock = _bind(host, port)
        except OSError as e:
            logger.debug("Port %s:%d unavailable: %s", host, port, e)
            continue
        logger.debug("Bound %s:%d", host, port)
        return sock

    raise NoFreePortError(host, start_port, max_tries)


def format_address(address):
    return f"{address[0]}:{address[1]}"

import logging
import socketserver

from .errors import InvalidRootError
from .handler import handle_connection
from .ports import find_free_port, format_address

logger = logging.getLogger(__name__)


class ConnectionHandler(socketserver.BaseRequestHandler):
    def handle(self):
        handle_connection(self.request, self.server.config,
                          peer=format_address(self.client_address))


class Server(socketserver.TCPServer):
    """
    Sequential server on the socket bound by ``find_free_port``.

    Connections are handled one at a time, so a slow client holds up the
    ones behind it. ``config.timeout`` bounds how long that can last.
    """

    def __init__(self, config):
        if not config.root.is_dir():
            raise InvalidRootError(config.root)
        self.config = config
        sock = find_free_port(config.host, config.start_port, config.max_tries)
        port = sock.getsockname()[1]
        super().__init__((config.host, port), ConnectionHandler, bind_and_activate=False)
        # Serve on the socket find_free_port already bound.
        self.socket.close()
        self.socket = sock
        self.address = (config.host, port)

    @property
    def address_string(self):
        return format_address(self.address)

    def handle_error(self, request, client_address):
        logger.exception("Unhandled error serving %s", format_address(client_address))

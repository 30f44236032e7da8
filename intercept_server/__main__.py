import logging
import os
import sys

from .config import load_config
from .errors import ServerStartupError
from .server import Server

logger = logging.getLogger("intercept_server")


def configure_logging():
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(os.environ.get("INTERCEPT_LOG_LEVEL", "INFO").upper())


def main(argv=None):
    config = load_config(argv)
    configure_logging()

    try:
        server = Server(config)
    except ServerStartupError as e:
        logger.error("%s", e)
        return 1

    with server:
        # The only line written to stdout; callers read it to find the port.
        print(server.address_string, flush=True)
        logger.info("Serving %s at http://%s", config.root, server.address_string)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())

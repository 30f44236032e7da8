class ServerStartupError(Exception):
    """Fatal error raised before the serve loop starts."""


class NoFreePortError(ServerStartupError):
    def __init__(self, host, start_port, max_tries):
        self.host = host
        self.start_port = start_port
        self.max_tries = max_tries
        super().__init__(
            f"no free port found on {host} "
            f"(tried {max_tries} ports starting at {start_port})"
        )


class InvalidRootError(ServerStartupError):
    def __init__(self, root):
        self.root = root
        super().__init__(f"root directory not found: {root}")

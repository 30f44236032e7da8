from pathlib import PurePath

DEFAULT_TYPE = "application/octet-stream"

TYPES = {
    ".html": "text/html",
    ".js": "application/javascript",
    ".css": "text/css",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".wasm": "application/wasm",
}


def guess_type(path) -> str:
    """Content-Type for ``path`` based on its last suffix (case-sensitive)."""
    return TYPES.get(PurePath(path).suffix, DEFAULT_TYPE)

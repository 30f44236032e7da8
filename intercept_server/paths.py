import logging
from pathlib import Path

from .config import FALLBACK_NAME

logger = logging.getLogger(__name__)


def fallback_path(root, fallback_name=FALLBACK_NAME):
    return Path(root) / fallback_name


def strip_target(target):
    """Drop the query string and any leading slashes from a request target."""
    return target.partition("?")[0].lstrip("/")


def is_within(path, root):
    return path == root or root in path.parents


def resolve_path(root, target, fallback_name=FALLBACK_NAME):
    """
    Map a request target onto a filesystem path under ``root``.

    Anything that does not exist (including symlink loops), or that canonicalises to somewhere outside
    ``root`` (``..`` segments, symlinks), resolves to the fallback resource
    instead. The fallback is returned whether or not it exists itself.
    """
    root = Path(root).resolve()
    fallback = fallback_path(root, fallback_name)

    try:
        candidate = (root / strip_target(target)).resolve()
        exists = candidate.exists()
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug("Unresolvable target %r: %s", target, e)
        return fallback

    if not exists:
        return fallback
    if not is_within(candidate, root):
        logger.warning("Rejected path outside root: %r", target)
        return fallback
    return candidate

"""Plain-text export of posts."""

from pathlib import Path
from typing import Iterable

from blognest.errors import ExportError, InvalidInputError
from blognest.models import Post
from blognest.observability.logging import get_logger

DEFAULT_DIVIDER_WIDTH = 60

logger = get_logger(__name__)


def render_export(posts: Iterable[Post], divider_width: int = DEFAULT_DIVIDER_WIDTH) -> str:
    """Render the detail view of every post, each followed by a divider line."""
    divider = "-" * divider_width
    return "".join(f"{post.details()}\n{divider}\n" for post in posts)


def export_posts(
    posts: Iterable[Post], filename: str, divider_width: int = DEFAULT_DIVIDER_WIDTH
) -> Path:
    """Write a plain-text dump of posts to a file.

    Args:
        posts: Posts to export, in the order they should appear
        filename: Destination path as typed by the user
        divider_width: Width of the divider written after each post

    Returns:
        Path of the written file

    Raises:
        InvalidInputError: If filename is blank (no file is touched)
        ExportError: If the file cannot be written
    """
    filename = filename.strip()
    if not filename:
        raise InvalidInputError("filename", "Invalid filename.")

    path = Path(filename)
    text = render_export(posts, divider_width)
    try:
        path.write_text(text, encoding="utf-8")
    except (OSError, ValueError) as e:
        logger.error("export_failed", path=str(path), error=str(e))
        raise ExportError(path, str(e)) from e

    logger.info("posts_exported", path=str(path))
    return path

"""File persistence for the post store.

The whole collection is written to a single JSON document on every save and
read back in one piece at startup. The document carries a format version so a
file written by an incompatible release is rejected instead of being misread.
"""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from blognest.errors import PersistenceError
from blognest.models import Post
from blognest.observability.logging import get_logger

FORMAT_VERSION = 1

logger = get_logger(__name__)


class PostArchive(BaseModel):
    """Serialized form of the whole store.

    Attributes:
        format_version: Version of the file layout
        posts: Posts in insertion order
    """

    format_version: int = Field(default=FORMAT_VERSION, ge=1)
    posts: list[Post] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "PostArchive":
        """Reject archives in which two posts share an id.

        Raises:
            ValueError: If an id appears more than once
        """
        seen: set[str] = set()
        for post in self.posts:
            if post.id in seen:
                raise ValueError(f"Duplicate post id: {post.id}")
            seen.add(post.id)
        return self


class PostFileGateway:
    """Loads and saves the full post collection from one JSON file.

    Example:
        >>> gateway = PostFileGateway("blognest.json")
        >>> store = PostStore(gateway.load())
        >>> store.add(Post.create("Hello", "Ana", "First post"))
        >>> gateway.save(store)
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """Initialize the gateway.

        Args:
            path: Location of the backing file
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the backing file."""
        return self._path

    @property
    def exists(self) -> bool:
        """Whether the backing file is present."""
        return self._path.exists()

    def load(self) -> list[Post]:
        """Read every post from the backing file.

        A missing file is the normal first-run state and yields an empty list.

        Returns:
            Posts in their saved order

        Raises:
            PersistenceError: If the file exists but cannot be read or parsed
        """
        if not self._path.exists():
            logger.debug("data_file_missing", path=str(self._path))
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("posts_load_failed", path=str(self._path), error=str(e))
            raise PersistenceError(self._path, "load", str(e)) from e

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.error("posts_load_failed", path=str(self._path), error=str(e))
            raise PersistenceError(
                self._path, "load", f"{self._path} is not valid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise PersistenceError(
                self._path, "load", f"{self._path} does not contain a post archive"
            )

        version = data.get("format_version")
        if version != FORMAT_VERSION:
            logger.error(
                "posts_load_failed",
                path=str(self._path),
                format_version=version,
                supported=FORMAT_VERSION,
            )
            raise PersistenceError(
                self._path,
                "load",
                f"Unsupported data format version {version!r} "
                f"(expected {FORMAT_VERSION})",
            )

        try:
            archive = PostArchive.model_validate(data)
        except ValidationError as e:
            logger.error("posts_load_failed", path=str(self._path), error=str(e))
            raise PersistenceError(
                self._path,
                "load",
                f"{self._path} contains invalid post data "
                f"({e.error_count()} validation error(s))",
            ) from e

        logger.info("posts_loaded", path=str(self._path), count=len(archive.posts))
        return archive.posts

    def save(self, posts: Iterable[Post]) -> None:
        """Overwrite the backing file with the given posts.

        The document is written to a temporary file in the same directory and
        then moved over the old file, so a failed save leaves the previous
        file intact. An existing file keeps its permission bits.

        Args:
            posts: Posts to persist, in insertion order

        Raises:
            PersistenceError: If the posts cannot be encoded or the file cannot be
                written
        """
        archive = PostArchive(posts=list(posts))

        try:
            payload = archive.model_dump_json(indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                if self._path.exists():
                    shutil.copymode(self._path, tmp_name)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, ValueError) as e:
            logger.error("posts_save_failed", path=str(self._path), error=str(e))
            raise PersistenceError(self._path, "save", str(e)) from e

        logger.info("posts_saved", path=str(self._path), count=len(archive.posts))

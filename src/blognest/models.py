"""Post domain model.

Provides the Post record using Pydantic for validation and serialization.
A Post owns its identity and timestamps; only title, author and content are
mutable, and every mutation goes through ``apply_changes`` so that
``updated_at`` is refreshed exactly once per edit.
"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
SHORT_ID_LENGTH = 8


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in local time for display."""
    return value.astimezone().strftime(TIMESTAMP_FORMAT)


class Post(BaseModel):
    """A single blog post.

    Attributes:
        id: Unique identifier (UUID4 string), assigned at creation and frozen
        title: Post title
        author: Post author
        content: Free-form, possibly multi-line body
        created_at: Creation timestamp (UTC), frozen
        updated_at: Last modification timestamp (UTC), never before created_at
    """

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1, frozen=True)
    title: str
    author: str
    content: str = ""
    created_at: datetime = Field(default_factory=utc_now, frozen=True)
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def default_updated_at(cls, data: Any) -> Any:
        """Start updated_at equal to created_at when it is not supplied."""
        if isinstance(data, dict):
            data = dict(data)
            if data.get("created_at") is None:
                data["created_at"] = utc_now()
            if data.get("updated_at") is None:
                data["updated_at"] = data["created_at"]
        return data

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_timezone(cls, value: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def validate_timestamps(self) -> "Post":
        """Reject records whose updated_at precedes created_at.

        Raises:
            ValueError: If updated_at is earlier than created_at
        """
        if self.updated_at < self.created_at:
            raise ValueError(
                f"updated_at ({self.updated_at.isoformat()}) precedes "
                f"created_at ({self.created_at.isoformat()})"
            )
        return self

    @classmethod
    def create(cls, title: str, author: str, content: str = "") -> "Post":
        """Create a new post with a fresh id and timestamps.

        Args:
            title: Post title
            author: Post author
            content: Post body

        Returns:
            New Post whose updated_at equals its created_at
        """
        return cls(title=title, author=author, content=content)

    @property
    def short_id(self) -> str:
        """First characters of the id, as shown in listings."""
        return self.id[:SHORT_ID_LENGTH]

    def touch(self, now: Optional[datetime] = None) -> None:
        """Refresh updated_at.

        Args:
            now: Timestamp to use instead of the current time
        """
        now = now or utc_now()
        self.updated_at = max(now, self.created_at)

    def apply_changes(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        content: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        """Apply an edit and touch updated_at once if anything was specified.

        Blank or omitted title and author are kept as they are. Content is
        replaced whenever it is given, so an empty string clears it.

        Args:
            title: New title, or None/blank to keep
            author: New author, or None/blank to keep
            content: New content, or None to keep
            now: Timestamp for the touch (defaults to the current time)

        Returns:
            True if the post was modified and touched, False otherwise
        """
        changed = False
        if title is not None and title.strip():
            self.title = title.strip()
            changed = True
        if author is not None and author.strip():
            self.author = author.strip()
            changed = True
        if content is not None:
            self.content = content
            changed = True

        if changed:
            self.touch(now)
        return changed

    def matches(self, keyword: str) -> bool:
        """Case-insensitive substring match on title, author and content."""
        needle = keyword.casefold()
        return any(
            needle in field.casefold() for field in (self.title, self.author, self.content)
        )

    def summary(self) -> str:
        """One-line listing entry."""
        return (
            f"[{self.short_id}] {self.title} by {self.author} "
            f"({format_timestamp(self.created_at)})"
        )

    def details(self) -> str:
        """Full multi-line view of the post."""
        return "\n".join(
            [
                f"ID: {self.id}",
                f"Title: {self.title}",
                f"Author: {self.author}",
                f"Created: {format_timestamp(self.created_at)}",
                f"Updated: {format_timestamp(self.updated_at)}",
                "Content:",
                self.content,
            ]
        )

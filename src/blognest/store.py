"""In-memory post store.

The store owns every Post for the lifetime of one run. It keeps insertion
order, which is the order used for prefix resolution, search results and
exports; listings walk it backwards so the newest post comes first.
"""

from typing import Iterable, Iterator, Optional

from blognest.models import Post


class PostStore:
    """Ordered, mutable collection of posts.

    None of the operations raise when a post is missing; absence is reported
    as ``None`` or ``False``.

    Attributes:
        _posts: Posts in insertion order
    """

    def __init__(self, posts: Optional[Iterable[Post]] = None) -> None:
        """Initialize the store.

        Args:
            posts: Optional initial posts, kept in the given order
        """
        self._posts: list[Post] = list(posts or [])

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(list(self._posts))

    def add(self, post: Post) -> Post:
        """Append a post to the end of the collection.

        Args:
            post: Post to add

        Returns:
            The added post
        """
        self._posts.append(post)
        return post

    def get(self, post_id: str) -> Optional[Post]:
        """Retrieve a post by its exact id."""
        for post in self._posts:
            if post.id == post_id:
                return post
        return None

    def find_by_id_prefix(self, query: str) -> Optional[Post]:
        """Resolve a full id or an id prefix to a post.

        The first pass returns the first post, in insertion order, whose id
        starts with ``query``. Only if nothing matches does a second pass look
        for an exact id match. A query that is a prefix of one post and the
        exact id of another therefore resolves to the prefix match. There is
        no minimum length, so a one-character query is accepted.

        Args:
            query: Full id or leading part of an id

        Returns:
            Matching post, or None if neither pass matches
        """
        for post in self._posts:
            if post.id.startswith(query):
                return post
        for post in self._posts:
            if post.id == query:
                return post
        return None

    def update(
        self,
        post_id: str,
        title: Optional[str] = None,
        author: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Post]:
        """Edit a post in place.

        Blank or omitted title/author are left unchanged; content is replaced
        whenever it is not None. updated_at is touched once if any field was
        specified.

        Args:
            post_id: Exact id of the post to edit
            title: New title
            author: New author
            content: New content

        Returns:
            The edited post, or None if no post has that id
        """
        post = self.get(post_id)
        if post is None:
            return None
        post.apply_changes(title=title, author=author, content=content)
        return post

    def remove(self, post: Post) -> bool:
        """Remove this exact post object from the collection.

        Matching is by identity rather than field equality.

        Args:
            post: Post previously returned by a lookup

        Returns:
            True if the post was removed, False if it was not present
        """
        for index, candidate in enumerate(self._posts):
            if candidate is post:
                del self._posts[index]
                return True
        return False

    def search(self, keyword: str) -> list[Post]:
        """Find posts whose title, author or content contains the keyword.

        Matching is case-insensitive and an empty keyword matches every post.

        Args:
            keyword: Substring to look for

        Returns:
            Matching posts in insertion order
        """
        return [post for post in self._posts if post.matches(keyword)]

    def list_posts(self) -> Iterator[Post]:
        """Iterate over posts, most recently added first.

        Each call returns a fresh iterator.
        """
        for index in range(len(self._posts) - 1, -1, -1):
            yield self._posts[index]

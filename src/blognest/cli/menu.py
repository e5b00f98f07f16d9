"""Interactive numbered menu for managing posts.

The session reads one console line at a time and drives a PostStore. Every
successful create, update and delete is followed by a save, and choosing
``0`` saves once more before leaving.
"""

import sys
from typing import Callable, Optional

import click
from rich.console import Console

from blognest.errors import ExportError, InvalidInputError, PersistenceError
from blognest.export import DEFAULT_DIVIDER_WIDTH, export_posts
from blognest.models import Post
from blognest.observability.logging import get_logger
from blognest.persistence import PostFileGateway
from blognest.store import PostStore

END_MARKER = "END"
SKIP_MARKER = "SKIP"
DELETE_TOKEN = "DELETE"

MENU_LINES = (
    "=== BlogNest CLI ===",
    "1. List posts",
    "2. Create post",
    "3. View post",
    "4. Update post",
    "5. Delete post",
    "6. Search by title/author",
    "7. Export posts to text file",
    "0. Exit",
)

LineReader = Callable[[str], str]

logger = get_logger(__name__)


def read_console_line(prompt: str = "") -> str:
    """Read one line from stdin after echoing a prompt.

    Raises:
        click.Abort: If stdin is exhausted
    """
    if prompt:
        click.echo(prompt, nl=False)
    line = sys.stdin.readline()
    if not line:
        raise click.Abort()
    return line.rstrip("\r\n")


def load_store(gateway: PostFileGateway, console: Console) -> PostStore:
    """Build the store from the backing file.

    A load failure is reported on the console and leaves the store empty.
    """
    try:
        return PostStore(gateway.load())
    except PersistenceError as e:
        console.print(
            f"Could not load data: {e.message}", markup=False, highlight=False, soft_wrap=True
        )
        return PostStore()


class MenuSession:
    """One interactive run of the numbered menu.

    Attributes:
        store: Posts being edited
        gateway: Where the store is saved
    """

    def __init__(
        self,
        store: PostStore,
        gateway: PostFileGateway,
        console: Optional[Console] = None,
        reader: Optional[LineReader] = None,
        divider_width: int = DEFAULT_DIVIDER_WIDTH,
    ) -> None:
        """Initialize the session.

        Args:
            store: Store loaded at startup
            gateway: Gateway used for every save
            console: Console for output (defaults to stdout)
            reader: Function that prints a prompt and returns one input line
            divider_width: Divider width for text exports
        """
        self.store = store
        self.gateway = gateway
        self._console = console or Console()
        self._read = reader or read_console_line
        self._divider_width = divider_width
        self._actions: dict[str, Callable[[], None]] = {
            "1": self.list_posts,
            "2": self.create_post,
            "3": self.view_post,
            "4": self.update_post,
            "5": self.delete_post,
            "6": self.search_posts,
            "7": self.export_posts,
        }

    def _say(self, text: str = "") -> None:
        self._console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def run(self) -> None:
        """Show the menu until the user chooses to exit."""
        logger.info("menu_started", posts=len(self.store))
        while True:
            self._say()
            for line in MENU_LINES:
                self._say(line)
            choice = self._read("Choose an option: ").strip()

            if choice == "0":
                self.save()
                self._say("Goodbye.")
                logger.info("menu_exited", posts=len(self.store))
                return

            action = self._actions.get(choice)
            if action is None:
                self._say("Invalid option.")
                continue
            action()

    def save(self) -> bool:
        """Save the store, reporting but not raising on failure."""
        try:
            self.gateway.save(self.store)
        except PersistenceError as e:
            self._say(f"Could not save data: {e.message}")
            return False
        return True

    def _read_until_end(self) -> list[str]:
        lines = []
        while True:
            line = self._read("")
            if line == END_MARKER:
                return lines
            lines.append(line)

    def _resolve(self, prompt: str) -> Optional[Post]:
        query = self._read(prompt).strip()
        post = self.store.find_by_id_prefix(query)
        if post is None:
            self._say("Post not found.")
        return post

    def list_posts(self) -> None:
        if not self.store:
            self._say("No posts found.")
            return
        for post in self.store.list_posts():
            self._say(post.summary())

    def create_post(self) -> None:
        title = self._read("Title: ").strip()
        author = self._read("Author: ").strip()
        self._say(f"Enter content (end with a single line with only '{END_MARKER}'):")
        content = "\n".join(self._read_until_end()).strip()

        post = self.store.add(Post.create(title=title, author=author, content=content))
        logger.info("post_created", post_id=post.id)
        self.save()
        self._say(f"Post created with ID: {post.id}")

    def view_post(self) -> None:
        post = self._resolve("Enter post ID (or first 8 chars): ")
        if post is None:
            return
        self._say()
        self._say(post.details())

    def update_post(self) -> None:
        """Edit title, author and content of one post.

        Blank title/author keep the current value. For content, a first line
        of ``SKIP`` keeps it, ``END`` clears it, and anything else starts the
        replacement text.
        """
        post = self._resolve("Enter post ID (or first 8 chars) to update: ")
        if post is None:
            return

        title = self._read("New title (leave blank to keep): ")
        author = self._read("New author (leave blank to keep): ")
        self._say(
            f"New content (type '{SKIP_MARKER}' to keep, "
            f"or enter new content ending with '{END_MARKER}'):"
        )
        first = self._read("")
        content: Optional[str]
        if first == SKIP_MARKER:
            content = None
        elif first == END_MARKER:
            content = ""
        else:
            lines = [first] if first.strip() else []
            lines.extend(self._read_until_end())
            content = "\n".join(lines).strip()

        self.store.update(post.id, title=title, author=author, content=content)
        logger.info("post_updated", post_id=post.id)
        self.save()
        self._say("Post updated.")

    def delete_post(self) -> None:
        post = self._resolve("Enter post ID (or first 8 chars) to delete: ")
        if post is None:
            return

        confirm = self._read(f"Type {DELETE_TOKEN} to confirm: ").strip()
        if confirm != DELETE_TOKEN:
            self._say("Deletion cancelled.")
            return

        self.store.remove(post)
        logger.info("post_deleted", post_id=post.id)
        self.save()
        self._say("Post deleted.")

    def search_posts(self) -> None:
        keyword = self._read("Enter search keyword: ").strip()
        results = self.store.search(keyword)
        if not results:
            self._say("No matching posts.")
            return
        for post in results:
            self._say(post.summary())

    def export_posts(self) -> None:
        filename = self._read("Export filename (e.g. export.txt): ")
        try:
            path = export_posts(self.store, filename, self._divider_width)
        except InvalidInputError as e:
            self._say(e.message)
            return
        except ExportError as e:
            self._say(f"Export failed: {e.message}")
            return
        self._say(f"Exported to {path}")

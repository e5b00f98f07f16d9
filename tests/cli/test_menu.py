"""Tests for the interactive menu session."""

import io
import json
from pathlib import Path
from typing import Callable, Iterable

import click
import pytest
from rich.console import Console

from blognest.cli.menu import MenuSession, load_store
from blognest.models import Post
from blognest.persistence import PostFileGateway
from blognest.store import PostStore


def make_reader(lines: Iterable[str]) -> Callable[[str], str]:
    """Reader that replays scripted input and aborts when it runs out."""
    iterator = iter(lines)

    def read(prompt: str) -> str:
        try:
            return next(iterator)
        except StopIteration:
            raise click.Abort() from None

    return read


class MenuHarness:
    """Runs a MenuSession against scripted input and captured output."""

    def __init__(self, store: PostStore, gateway: PostFileGateway) -> None:
        self.store = store
        self.gateway = gateway
        self.buffer = io.StringIO()

    def run(self, *lines: str) -> str:
        console = Console(file=self.buffer, width=200)
        session = MenuSession(
            self.store, self.gateway, console=console, reader=make_reader(lines)
        )
        session.run()
        return self.buffer.getvalue()


@pytest.fixture
def harness(store: PostStore, gateway: PostFileGateway) -> MenuHarness:
    """Menu harness over the three sample posts."""
    return MenuHarness(store, gateway)


@pytest.fixture
def empty_harness(gateway: PostFileGateway) -> MenuHarness:
    """Menu harness over an empty store."""
    return MenuHarness(PostStore(), gateway)


class TestMenuNavigation:
    """Tests for the menu loop itself."""

    def test_exit_saves_and_says_goodbye(
        self, harness: MenuHarness, data_file: Path
    ) -> None:
        """Choosing 0 should save the store and stop."""
        output = harness.run("0")

        assert "=== BlogNest CLI ===" in output
        assert "Goodbye." in output
        assert data_file.exists()
        assert len(json.loads(data_file.read_text(encoding="utf-8"))["posts"]) == 3

    def test_invalid_option(self, harness: MenuHarness) -> None:
        """An unknown choice should print a message and show the menu again."""
        output = harness.run("9", " 0 ")

        assert "Invalid option." in output
        assert output.count("=== BlogNest CLI ===") == 2

    def test_end_of_input_aborts(self, harness: MenuHarness) -> None:
        """Running out of console input should abort the session."""
        with pytest.raises(click.Abort):
            harness.run("1")


class TestListAndView:
    """Tests for listing and viewing posts."""

    def test_list_empty_store(self, empty_harness: MenuHarness) -> None:
        """Listing nothing should say so."""
        assert "No posts found." in empty_harness.run("1", "0")

    def test_list_newest_first(self, harness: MenuHarness) -> None:
        """Summaries should appear newest first."""
        output = harness.run("1", "0")

        assert output.index("[f0f0f0f0] Third by Cleo") < output.index("[abcxyz99] Second")
        assert output.index("[abcxyz99] Second") < output.index("[abc12345] First post")

    def test_view_by_prefix(self, harness: MenuHarness) -> None:
        """Viewing by prefix should print the detail view."""
        output = harness.run("3", "f0f0", "0")

        assert "ID: f0f0f0f0-0000-4000-8000-000000000003" in output
        assert "Content:\nline one\nline two" in output

    def test_view_unknown_id(self, harness: MenuHarness) -> None:
        """An unknown id should print Post not found."""
        assert "Post not found." in harness.run("3", "zzz", "0")


class TestCreate:
    """Tests for creating posts from the menu."""

    def test_create_post(self, empty_harness: MenuHarness, data_file: Path) -> None:
        """A created post should be stored, saved and announced."""
        output = empty_harness.run(
            "2", "  Hello  ", " Ana ", "", "line 1", "line 2", "", "END", "0"
        )

        posts = list(empty_harness.store)
        assert len(posts) == 1
        post = posts[0]
        assert post.title == "Hello"
        assert post.author == "Ana"
        assert post.content == "line 1\nline 2"
        assert f"Post created with ID: {post.id}" in output

        saved = json.loads(data_file.read_text(encoding="utf-8"))
        assert saved["posts"][0]["id"] == post.id

    def test_create_with_empty_content(self, empty_harness: MenuHarness) -> None:
        """END straight away should create a post with empty content."""
        empty_harness.run("2", "Title", "Author", "END", "0")
        assert list(empty_harness.store)[0].content == ""


class TestUpdate:
    """Tests for updating posts from the menu."""

    def test_update_title_and_skip_content(self, harness: MenuHarness) -> None:
        """SKIP should keep the content while the title changes."""
        output = harness.run("4", "abc1", "Renamed", "", "SKIP", "0")

        post = harness.store.find_by_id_prefix("abc1")
        assert post.title == "Renamed"
        assert post.author == "Ana"
        assert post.content == "hello world"
        assert post.updated_at > post.created_at
        assert "Post updated." in output

    def test_update_end_clears_content(self, harness: MenuHarness) -> None:
        """END as the first content line should clear the content."""
        harness.run("4", "abc1", "", "", "END", "0")
        assert harness.store.find_by_id_prefix("abc1").content == ""

    def test_update_replaces_content(self, harness: MenuHarness) -> None:
        """Other lines up to END should replace the content."""
        harness.run("4", "abc1", "", "", "", "new body", "more", "END", "0")
        assert harness.store.find_by_id_prefix("abc1").content == "new body\nmore"

    def test_update_with_nothing_changed(self, harness: MenuHarness) -> None:
        """Blank fields and SKIP should leave the post untouched."""
        before = harness.store.find_by_id_prefix("abc1").model_dump()

        harness.run("4", "abc1", "", "   ", "SKIP", "0")

        assert harness.store.find_by_id_prefix("abc1").model_dump() == before

    def test_update_unknown_id(self, harness: MenuHarness) -> None:
        """An unknown id should abort the update."""
        assert "Post not found." in harness.run("4", "zzz", "0")


class TestDelete:
    """Tests for deleting posts from the menu."""

    def test_delete_requires_token(self, harness: MenuHarness) -> None:
        """Anything but DELETE should cancel."""
        output = harness.run("5", "abcx", "delete", "0")

        assert "Deletion cancelled." in output
        assert len(harness.store) == 3

    def test_delete_with_token(self, harness: MenuHarness, data_file: Path) -> None:
        """DELETE should remove exactly the target post and save."""
        output = harness.run("5", "abcx", " DELETE ", "0")

        assert "Post deleted." in output
        assert [post.title for post in harness.store] == ["First post", "Third"]
        saved = json.loads(data_file.read_text(encoding="utf-8"))
        assert len(saved["posts"]) == 2


class TestSearchAndExport:
    """Tests for search and export from the menu."""

    def test_search_case_insensitive(self, harness: MenuHarness) -> None:
        """Search should match content regardless of case."""
        output = harness.run("6", "DRAFT", "0")

        assert "[abcxyz99] Second by Ben" in output
        assert "First post" not in output

    def test_search_no_match(self, harness: MenuHarness) -> None:
        """A keyword matching nothing should say so."""
        assert "No matching posts." in harness.run("6", "nothing-here", "0")

    def test_export_blank_filename(self, harness: MenuHarness, tmp_path: Path) -> None:
        """A blank filename should be rejected."""
        output = harness.run("7", "   ", "0")
        assert "Invalid filename." in output

    def test_export_success(self, harness: MenuHarness, tmp_path: Path) -> None:
        """Export should write the file and report its name."""
        target = tmp_path / "out.txt"
        output = harness.run("7", str(target), "0")

        assert f"Exported to {target}" in output
        assert "Title: Third" in target.read_text(encoding="utf-8")

    def test_export_failure(self, harness: MenuHarness, tmp_path: Path) -> None:
        """An unwritable path should be reported without stopping the menu."""
        output = harness.run("7", str(tmp_path / "missing" / "out.txt"), "0")

        assert "Export failed:" in output
        assert "Goodbye." in output


class TestPersistenceFailures:
    """Tests for reporting load and save failures."""

    def test_save_failure_is_reported(self, store: PostStore, tmp_path: Path) -> None:
        """A failed save should be reported and keep the in-memory change."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        harness = MenuHarness(store, PostFileGateway(blocker / "posts.json"))

        output = harness.run("2", "New", "Ana", "END", "0")

        assert "Could not save data:" in output
        assert len(store) == 4

    def test_load_failure_leaves_store_empty(self, data_file: Path) -> None:
        """A corrupt backing file should be reported and yield an empty store."""
        data_file.write_text("{broken", encoding="utf-8")
        buffer = io.StringIO()

        store = load_store(PostFileGateway(data_file), Console(file=buffer, width=200))

        assert len(store) == 0
        assert "Could not load data:" in buffer.getvalue()

    def test_unencodable_post_reported_on_exit(
        self, store: PostStore, gateway: PostFileGateway
    ) -> None:
        """Text that cannot be saved as UTF-8 should be reported, not crash the menu."""
        store.add(Post.create("caf\udce9", "Ana"))
        harness = MenuHarness(store, gateway)

        output = harness.run("0")

        assert "Could not save data:" in output
        assert "Goodbye." in output

    def test_unencodable_post_reported_on_export(
        self, store: PostStore, gateway: PostFileGateway, tmp_path: Path
    ) -> None:
        """An export that cannot be encoded should be reported and return to the menu."""
        store.add(Post.create("Title", "Ana", "caf\udce9"))
        harness = MenuHarness(store, gateway)

        output = harness.run("7", str(tmp_path / "out.txt"), "0")

        assert "Export failed:" in output
        assert "Exported to" not in output

    def test_deeply_nested_file_reported_on_load(self, data_file: Path) -> None:
        """A file nested too deeply to parse should be reported like any corrupt file."""
        data_file.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
        buffer = io.StringIO()

        store = load_store(PostFileGateway(data_file), Console(file=buffer, width=200))

        assert len(store) == 0
        assert "Could not load data:" in buffer.getvalue()

    def test_load_missing_file_is_silent(self, data_file: Path) -> None:
        """A missing backing file should produce an empty store without messages."""
        buffer = io.StringIO()

        store = load_store(PostFileGateway(data_file), Console(file=buffer, width=200))

        assert len(store) == 0
        assert buffer.getvalue() == ""

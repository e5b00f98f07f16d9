"""Main CLI entry point for BlogNest.

Running ``blognest`` with no subcommand opens the interactive menu. The
subcommands cover the same operations for scripting.
"""

import json
from typing import Iterable, Optional
from uuid import uuid4

import click
from rich.console import Console
from rich.table import Table

from blognest import __version__
from blognest.cli.menu import DELETE_TOKEN, MenuSession, load_store
from blognest.config import BlogNestConfig
from blognest.errors import ExportError, InvalidInputError, PersistenceError
from blognest.export import export_posts
from blognest.models import Post, format_timestamp
from blognest.observability.logging import (
    clear_session_id,
    get_logger,
    set_session_id,
    setup_logging,
)
from blognest.persistence import PostFileGateway
from blognest.store import PostStore

console = Console()
logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _open_store(config: BlogNestConfig) -> tuple[PostStore, PostFileGateway]:
    """Load the store for a non-interactive command.

    Raises:
        click.ClickException: If the backing file cannot be loaded
    """
    gateway = PostFileGateway(config.data_file)
    try:
        return PostStore(gateway.load()), gateway
    except PersistenceError as e:
        raise click.ClickException(f"Could not load data: {e.message}") from e


def _save_store(store: PostStore, gateway: PostFileGateway) -> None:
    try:
        gateway.save(store)
    except PersistenceError as e:
        raise click.ClickException(f"Could not save data: {e.message}") from e


def _print_posts(
    posts: Iterable[Post], output_format: str, title: str, empty_message: str
) -> None:
    posts = list(posts)
    if output_format == "json":
        click.echo(json.dumps([post.model_dump(mode="json") for post in posts], indent=2))
        return

    if not posts:
        console.print(f"[yellow]{empty_message}[/yellow]")
        return

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Author", style="blue")
    table.add_column("Created", style="dim", no_wrap=True)

    for post in posts:
        table.add_row(post.short_id, post.title, post.author, format_timestamp(post.created_at))

    console.print(table)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="blognest")
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Backing file for posts (defaults to BLOGNEST_DATA_FILE or blognest.json)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (defaults to BLOGNEST_LOG_LEVEL or WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, data_file: Optional[str], log_level: Optional[str]) -> None:
    """BlogNest - manage your blog posts from the terminal.

    Run without a command to open the interactive menu.
    """
    try:
        config = BlogNestConfig.from_env()
        overrides = {}
        if data_file is not None:
            overrides["data_file"] = data_file
        if log_level is not None:
            overrides["log_level"] = log_level
        if overrides:
            config = BlogNestConfig(**{**config.model_dump(), **overrides})
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    setup_logging(log_level=config.log_level, json_logs=config.json_logs)
    set_session_id(uuid4().hex[:12])
    ctx.call_on_close(clear_session_id)
    logger.debug("config_loaded", data_file=str(config.data_file))
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        gateway = PostFileGateway(config.data_file)
        store = load_store(gateway, console)
        MenuSession(store, gateway, console=console, divider_width=config.divider_width).run()


@cli.command(name="list")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format (table or json)",
)
@click.pass_obj
def list_posts(config: BlogNestConfig, output_format: str) -> None:
    """List all posts, newest first.

    Examples:
        blognest list
        blognest list --format json
    """
    store, _ = _open_store(config)
    _print_posts(store.list_posts(), output_format.lower(), "Posts", "No posts found.")


@cli.command(name="create")
@click.option("--title", required=True, help="Post title")
@click.option("--author", required=True, help="Post author")
@click.option("--content", default="", help="Post content")
@click.pass_obj
def create_post(config: BlogNestConfig, title: str, author: str, content: str) -> None:
    """Create a post.

    Examples:
        blognest create --title "Hello" --author "Ana" --content "First post"
    """
    store, gateway = _open_store(config)
    post = store.add(
        Post.create(title=title.strip(), author=author.strip(), content=content.strip())
    )
    _save_store(store, gateway)
    click.echo(f"Post created with ID: {post.id}")


@cli.command(name="show")
@click.argument("post_id", type=str)
@click.pass_obj
def show_post(config: BlogNestConfig, post_id: str) -> None:
    """Show one post by full id or id prefix.

    Examples:
        blognest show 3f2a9c1e
    """
    store, _ = _open_store(config)
    post = store.find_by_id_prefix(post_id.strip())
    if post is None:
        raise click.ClickException("Post not found.")
    click.echo(post.details())


@cli.command(name="search")
@click.argument("keyword", type=str)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format (table or json)",
)
@click.pass_obj
def search_posts(config: BlogNestConfig, keyword: str, output_format: str) -> None:
    """Search title, author and content (case-insensitive).

    Examples:
        blognest search draft
    """
    store, _ = _open_store(config)
    results = store.search(keyword.strip())
    _print_posts(
        results, output_format.lower(), f"Posts matching '{keyword}'", "No matching posts."
    )


@cli.command(name="export")
@click.argument("filename", type=str)
@click.pass_obj
def export_command(config: BlogNestConfig, filename: str) -> None:
    """Export every post to a plain-text file.

    Examples:
        blognest export posts.txt
    """
    store, _ = _open_store(config)
    try:
        path = export_posts(store, filename, config.divider_width)
    except InvalidInputError as e:
        raise click.ClickException(e.message) from e
    except ExportError as e:
        raise click.ClickException(f"Export failed: {e.message}") from e
    click.echo(f"Exported to {path}")


@cli.command(name="delete")
@click.argument("post_id", type=str)
@click.option("--yes", is_flag=True, help=f"Skip the {DELETE_TOKEN} confirmation")
@click.pass_obj
def delete_post(config: BlogNestConfig, post_id: str, yes: bool) -> None:
    """Delete one post by full id or id prefix.

    Examples:
        blognest delete 3f2a9c1e
        blognest delete 3f2a9c1e --yes
    """
    store, gateway = _open_store(config)
    post = store.find_by_id_prefix(post_id.strip())
    if post is None:
        raise click.ClickException("Post not found.")

    if not yes:
        confirm = click.prompt(
            f"Type {DELETE_TOKEN} to confirm", default="", show_default=False
        )
        if confirm.strip() != DELETE_TOKEN:
            click.echo("Deletion cancelled.")
            return

    store.remove(post)
    _save_store(store, gateway)
    logger.info("post_deleted", post_id=post.id)
    click.echo("Post deleted.")


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()

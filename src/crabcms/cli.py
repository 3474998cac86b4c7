"""CLI interface for Crab CMS."""

import asyncio
import logging
from collections.abc import Awaitable
from pathlib import Path
from typing import Annotated, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from crabcms.config import CMSConfig, load_config
from crabcms.content.models import Post, PostStatus, PostType
from crabcms.content.theme import render_root_css
from crabcms.services import ContentService, InvalidContentError
from crabcms.storage import RemoteJSONAdapter, StorageError, create_adapter

T = TypeVar("T")

app = typer.Typer(
    name="crabcms",
    help="Manage Crab CMS content through the configured storage adapter.",
    no_args_is_help=True,
)
homepage_app = typer.Typer(help="Choose which item is the site homepage.")
app.add_typer(homepage_app, name="homepage")

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from crabcms import __version__

        console.print(f"crabcms {__version__}")
        raise typer.Exit()


def _notify_export(path: Path, source: str) -> None:
    console.print(f"[yellow]Exported site data to {path}[/yellow]")
    console.print(f"Commit it as [bold]{source}[/bold] to publish the change.")


def _service(ctx: typer.Context) -> ContentService:
    return ctx.obj["service"]


def _run(awaitable: Awaitable[T]) -> T:
    try:
        return asyncio.run(awaitable)  # type: ignore[arg-type]
    except StorageError as exc:
        console.print(f"[red]Storage error:[/red] {exc}")
        console.print("Check the data source and try again.")
        raise typer.Exit(1)


def _content_table(items: list[Post], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Slug")
    table.add_column("Title")
    for item in items:
        status = "[green]published[/green]" if item.is_published else "[yellow]draft[/yellow]"
        table.add_row(item.id, item.post_type.value, status, f"/{item.slug}", item.title)
    return table


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .crabcms.toml file."),
    ] = None,
    backend: Annotated[
        Optional[str],
        typer.Option("--backend", "-b", help="Storage backend: local or remote."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Crab CMS - content, settings and theme storage."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    config: CMSConfig = load_config(config_path)
    if backend is not None:
        if backend not in ("local", "remote"):
            console.print(f"[red]Error:[/red] Unknown backend: {backend}")
            raise typer.Exit(1)
        config.storage.backend = backend  # type: ignore[assignment]
    adapter = create_adapter(config, notify=_notify_export)
    ctx.obj = {"config": config, "service": ContentService(adapter)}


@app.command()
def init(ctx: typer.Context) -> None:
    """Connect to storage, seeding it if it is empty or outdated."""
    service = _service(ctx)

    async def _init() -> list[Post]:
        await service.connect()
        return await service.list_content()

    items = _run(_init())
    console.print(f"[green]Ready:[/green] {len(items)} item(s) via {service.adapter.name} storage")


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    post_type: Annotated[
        Optional[PostType],
        typer.Option("--type", "-t", help="Only posts or only pages."),
    ] = None,
    status: Annotated[
        Optional[PostStatus],
        typer.Option("--status", "-s", help="Only drafts or only published items."),
    ] = None,
) -> None:
    """List posts and pages."""
    items = _run(_service(ctx).list_content(post_type, status))
    if not items:
        console.print("[yellow]No content found.[/yellow]")
        raise typer.Exit(0)
    console.print(_content_table(items, f"{len(items)} item(s)"))


@app.command()
def show(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post or page.")],
) -> None:
    """Show one item by slug."""
    post = _run(_service(ctx).adapter.get_post_by_slug(slug))
    if post is None:
        console.print(f"[yellow]Nothing found at /{slug}[/yellow]")
        raise typer.Exit(1)
    console.print(f"[bold]{post.title}[/bold]")
    meta = f"{post.post_type.value} · {post.status.value} · {post.read_time_minutes} min read"
    if post.tags:
        meta += " · " + ", ".join(post.tags)
    console.print(meta, style="dim")
    console.print()
    console.print(post.content, markup=False)


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Title of the new item.")],
    content: Annotated[str, typer.Option("--content", help="Markdown body.")] = "",
    content_file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Read the markdown body from a file.", exists=True),
    ] = None,
    slug: Annotated[str, typer.Option("--slug", help="Explicit slug.")] = "",
    page: Annotated[bool, typer.Option("--page", help="Create a page instead of a post.")] = False,
    publish: Annotated[bool, typer.Option("--publish", help="Publish immediately.")] = False,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", help="Tag to attach (repeatable)."),
    ] = None,
) -> None:
    """Create a post or page."""
    if content_file is not None:
        content = content_file.read_text(encoding="utf-8")
    try:
        post = _run(
            _service(ctx).save_content(
                title,
                content,
                slug=slug,
                post_type=PostType.PAGE if page else PostType.POST,
                status=PostStatus.PUBLISHED if publish else PostStatus.DRAFT,
                tags=tags,
            )
        )
    except InvalidContentError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
    console.print(f"[green]Saved[/green] {post.post_type.value} {post.id} at /{post.slug}")


@app.command()
def publish(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="ID of the item to publish.")],
) -> None:
    """Mark an item as published."""
    post = _run(_service(ctx).publish(post_id))
    if post is None:
        console.print(f"[yellow]No item with id {post_id}[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Published[/green] /{post.slug}")


@app.command()
def delete(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="ID of the item to delete.")],
) -> None:
    """Delete an item. Unknown ids are ignored."""
    _run(_service(ctx).delete(post_id))
    console.print(f"Deleted {post_id}")


@homepage_app.command("set")
def homepage_set(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="ID of the item to use as homepage.")],
) -> None:
    """Use an item as the site homepage."""
    settings = _run(_service(ctx).set_homepage(post_id))
    console.print(f"Homepage set to {settings.homepage_id}")


@homepage_app.command("unset")
def homepage_unset(ctx: typer.Context) -> None:
    """Go back to the default homepage."""
    _run(_service(ctx).unset_homepage())
    console.print("Homepage cleared")


@app.command()
def settings(ctx: typer.Context) -> None:
    """Show the site settings."""
    current = _run(_service(ctx).adapter.get_settings())
    table = Table(title="Site settings", show_header=False)
    for key, value in current.model_dump().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@app.command()
def theme(
    ctx: typer.Context,
    css: Annotated[bool, typer.Option("--css", help="Print as CSS variables.")] = False,
) -> None:
    """Show the theme configuration."""
    current = _run(_service(ctx).adapter.get_theme())
    if css:
        console.print(render_root_css(current), markup=False, highlight=False)
        return
    console.print(f"[bold]{current.name}[/bold] ({current.id})")
    for key, value in current.colors.model_dump().items():
        console.print(f"  {key}: {value}")
    console.print(f"  fonts: {current.fonts.heading} / {current.fonts.body}")


@app.command("theme-color")
def theme_color(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="background, text, primary or secondary.")],
    value: Annotated[str, typer.Argument(help="Any CSS color.")],
) -> None:
    """Change one theme color."""
    try:
        updated = _run(_service(ctx).set_theme_color(key, value))
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
    console.print(f"{key} is now {getattr(updated.colors, key)}")


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show dashboard counts."""
    result = _run(_service(ctx).dashboard_stats())
    console.print(f"Posts: {result.posts}  Pages: {result.pages}")
    console.print(f"Published: {result.published}  Drafts: {result.drafts}")
    if result.recent:
        console.print(_content_table(result.recent, "Recent posts"))


@app.command()
def export(ctx: typer.Context) -> None:
    """Export the full site document (remote backend only)."""
    adapter = _service(ctx).adapter
    if not isinstance(adapter, RemoteJSONAdapter):
        console.print("[red]Error:[/red] export needs the remote backend (--backend remote)")
        raise typer.Exit(1)
    _run(adapter.export())

"""
poststore CLI - Command-line interface.

Commands:
- poststore check → Validate every post's front matter
- poststore list → List posts, newest first
- poststore show PATH → Show one post's metadata and body
- poststore new "Title" → Author a new, empty post
"""

import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from poststore.core.config import settings, setup_logging
from poststore.core.errors import MalformedFrontMatter
from poststore.core.types import Post
from poststore.storage.markdown import PostStore

app = typer.Typer(
    name="poststore",
    help="Markdown blog posts with YAML front matter",
    no_args_is_help=True,
)
console = Console()

DirOption = typer.Option(None, "--dir", "-d", help="Posts directory (defaults to POSTSTORE_POSTS_DIR)")


def get_store(posts_dir: Path | None) -> PostStore:
    return PostStore(posts_dir or settings.posts_dir)


@app.command()
def check(
    posts_dir: Optional[Path] = DirOption,
):
    """Validate the front matter of every post."""
    setup_logging()

    store = get_store(posts_dir)
    paths = store.list_all()
    failures = store.validate()

    for path, error in failures:
        console.print(f"[red]✗ {escape(path.name)}[/red]: {escape(error.reason)}")

    if failures:
        console.print(f"\n[red]{len(failures)} of {len(paths)} post(s) are malformed[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ {len(paths)} post(s) OK[/green]")


@app.command("list")
def list_posts(
    posts_dir: Optional[Path] = DirOption,
):
    """List posts, newest first."""
    setup_logging()

    store = get_store(posts_dir)
    try:
        entries = store.load_with_paths()
    except MalformedFrontMatter as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if not entries:
        console.print("[dim]No posts found[/dim]")
        return

    table = Table(title=f"Posts in {store.posts_dir}")
    table.add_column("Date", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Layout", style="green")
    table.add_column("File", style="dim", no_wrap=True)

    for path, post in entries:
        table.add_row(
            post.date.isoformat(),
            escape(post.title),
            escape(post.layout),
            escape(path.name),
        )

    console.print(table)


@app.command()
def show(
    path: Path = typer.Argument(..., help="Post file to show"),
):
    """Show a post's front matter and body."""
    setup_logging()

    store = get_store(path.parent)
    try:
        post = store.read(path)
    except FileNotFoundError:
        console.print(f"[red]Error: {escape(str(path))} does not exist[/red]")
        raise typer.Exit(code=1)
    except MalformedFrontMatter as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    meta = [
        f"[bold]Date:[/bold] {post.date.isoformat()}",
        f"[bold]Layout:[/bold] {escape(post.layout)}",
    ]
    if post.tags:
        meta.append(f"[bold]Tags:[/bold] {escape(', '.join(post.tags))}")
    if post.categories:
        meta.append(f"[bold]Categories:[/bold] {escape(', '.join(post.categories))}")
    for key, value in post.extra.items():
        meta.append(f"[bold]{escape(str(key))}:[/bold] {escape(str(value))}")

    console.print(Panel("\n".join(meta), title=escape(post.title)))
    if post.body:
        console.print(Markdown(post.body))


@app.command()
def new(
    title: str = typer.Argument(..., help="Post title"),
    date: Optional[str] = typer.Option(None, help="Publication date, YYYY-MM-DD (defaults to today)"),
    layout: Optional[str] = typer.Option(None, help="Layout name (defaults to POSTSTORE_DEFAULT_LAYOUT)"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag, may be repeated"),
    posts_dir: Optional[Path] = DirOption,
):
    """Author a new, empty post."""
    setup_logging()

    try:
        post_date = datetime.date.fromisoformat(date) if date else datetime.date.today()
    except ValueError:
        raise typer.BadParameter(f"{date!r} is not a YYYY-MM-DD date", param_hint="--date")

    if not title.strip():
        raise typer.BadParameter("title must not be empty", param_hint="TITLE")

    store = get_store(posts_dir)
    post = Post(
        title=title,
        date=post_date,
        layout=(layout or "").strip() or store.default_layout,
        tags=tag or [],
    )

    try:
        path = store.write(post)
    except FileExistsError:
        console.print(f"[red]Error: {escape(str(store.posts_dir / post.filename))} already exists[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Created[/green] {escape(str(path))}")


if __name__ == "__main__":
    app()

"""Command line interface for blogscrape."""

import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from blogscrape import __version__
from blogscrape.core.errors import InvalidUrlError
from blogscrape.core.models import ScrapeConfig, ScrapeProgress, ScrapeResult, ScrapeState
from blogscrape.engine.scraper import BlogScraper
from blogscrape.feed.identifier import build_feed_url, extract_blog_id
from blogscrape.storage.filesystem import FilesystemSink

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]blogscrape[/bold] version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)


def _derive_output_from_url(url: str) -> Path:
    """Derive output directory from a blog URL.

    Examples:
        https://myblog.blogspot.com -> ./myblog/
        https://my-blog.blogspot.com/2020/01/post.html -> ./my-blog/
    """
    return Path(f"./{extract_blog_id(url)}/")


def _print_summary(result: ScrapeResult, config: ScrapeConfig) -> None:
    """Print the final panel and the per-year table."""
    console.print()
    console.print(
        Panel(
            f"[bold green]Files:[/bold green] {result.file_count}\n"
            f"[bold cyan]Posts:[/bold cyan] {result.total_posts}\n"
            f"[bold yellow]Output:[/bold yellow] {config.output_dir}",
            title="[bold green]Scrape Complete![/bold green]",
            border_style="green",
        )
    )

    table = Table(
        title="[bold]Posts per year[/bold]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Year", style="cyan")
    table.add_column("Posts", style="green", justify="right")

    for summary in result.years:
        table.add_row(str(summary.year), str(summary.count))

    console.print()
    console.print(table)

    if result.warning:
        console.print()
        console.print(f"[yellow]Warning: {result.warning}[/yellow]")


async def _run_scraper(config: ScrapeConfig) -> ScrapeResult:
    """Run the scraper asynchronously, rendering progress as it goes."""
    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        disable=config.quiet,
        transient=True,
    )
    task_id = progress.add_task("Starting scrape...", total=100)

    def on_progress(update: ScrapeProgress) -> None:
        progress.update(task_id, completed=update.percentage, description=update.message)

    sink = FilesystemSink(config.output_dir)
    scraper = BlogScraper(sink, config=config, on_progress=on_progress)

    console.print()
    console.print(
        Panel(
            f"[bold green]Blog:[/bold green] {config.blog_url}\n"
            f"[bold cyan]Feed:[/bold cyan] {scraper.feed_url}\n"
            f"[bold yellow]Output:[/bold yellow] {config.output_dir}",
            title="[bold]blogscrape[/bold]",
            border_style="blue",
        )
    )
    console.print()

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, scraper.cancel)
    except (NotImplementedError, RuntimeError, ValueError):
        # Windows event loops have no signal handlers
        pass

    try:
        with progress:
            return await scraper.run()
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError, ValueError):
            pass


def _scrape(
    url: str,
    output: Optional[Path],
    timeout: float,
    delay: float,
    verbose: bool,
    quiet: bool,
) -> None:
    """Execute the scrape operation."""
    _configure_logging(verbose)

    try:
        default_output = _derive_output_from_url(url)
    except InvalidUrlError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    config = ScrapeConfig(
        output_dir=output or default_output,
        blog_url=url,
        timeout=timeout,
        request_delay=delay,
        quiet=quiet,
    )

    result = asyncio.run(_run_scraper(config))

    if result.state == ScrapeState.CANCELLED:
        console.print(f"\n[yellow]{result.message}[/yellow]")
        raise typer.Exit(1)

    if result.state != ScrapeState.DONE:
        console.print(f"\n[red]{result.message}[/red]")
        raise typer.Exit(1)

    _print_summary(result, config)


app = typer.Typer(
    name="blogscrape",
    help="Export every post of a Blogger blog to one XML file per year.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "-V",
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = None,
) -> None:
    """Export every post of a Blogger blog to one XML file per year."""


@app.command()
def scrape(
    url: Annotated[
        str,
        typer.Argument(help="Blogger URL to export (e.g., https://yourblog.blogspot.com)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "-o",
            "--output",
            help="Output directory [default: ./<blog id>/]",
        ),
    ] = None,
    timeout: Annotated[
        float,
        typer.Option(
            "-t",
            "--timeout",
            help="Timeout for each feed request in seconds",
        ),
    ] = 30.0,
    delay: Annotated[
        float,
        typer.Option(
            "-d",
            "--delay",
            help="Delay between feed page requests in seconds",
        ),
    ] = 0.0,
    verbose: Annotated[
        bool,
        typer.Option(
            "-v",
            "--verbose",
            help="Verbose output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "-q",
            "--quiet",
            help="Suppress progress bar (for scripting/CI)",
        ),
    ] = False,
) -> None:
    """Export a Blogger blog to one XML file per year.

    \b
    Examples:
        blogscrape scrape https://myblog.blogspot.com
        blogscrape scrape myblog.blogspot.com -o ./archive
    """
    _scrape(url, output, timeout, delay, verbose, quiet)


@app.command("feed-url")
def feed_url(
    url: Annotated[
        str,
        typer.Argument(help="Blogger URL (e.g., https://yourblog.blogspot.com)"),
    ],
) -> None:
    """Print the feed URL blogscrape would read for a blog."""
    try:
        blog_id = extract_blog_id(url)
    except InvalidUrlError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(build_feed_url(blog_id), highlight=False, soft_wrap=True)


def main() -> None:
    """Main entry point with smart argument handling.

    Allows both:
        blogscrape https://myblog.blogspot.com
        blogscrape scrape https://myblog.blogspot.com
    """
    if len(sys.argv) > 1:
        first_arg = sys.argv[1]
        if first_arg.startswith(("http://", "https://")) or (
            "." in first_arg and not first_arg.startswith("-")
        ):
            sys.argv.insert(1, "scrape")

    app()


if __name__ == "__main__":
    main()

"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from rich.markup import escape

from ... import __version__
from ...core.exceptions import GobbleError, UsageError, TransportError
from ...core.logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from ...domain.fetch import FetchService, ProgressReporter
from ..config.loader import ConfigLoader, parse_size
from .diagnostics import print_info

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()

app = typer.Typer(
    name="gobble",
    add_completion=False,
    help="Retrieve a file via http or https, a la wget",
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gobble {__version__}")
        raise typer.Exit()


@app.command()
def main(
    ctx: typer.Context,
    url: str = typer.Option(
        "", "-u", "--url", help="URL to download"
    ),
    output: Optional[str] = typer.Option(
        None, "-o", "--output", help="Name of output file (default: derived from URL)"
    ),
    to_stdout: bool = typer.Option(
        False, "-s", "--stdout", help="Output to stdout"
    ),
    exclusive: bool = typer.Option(
        False, "-x", "--exclusive", help="Create the output file atomically, failing if it appears"
    ),
    chunk: Optional[str] = typer.Option(
        None, "-c", "--chunk", help="Chunk size (e.g., 40960, 40K, 1M)"
    ),
    timeout: Optional[float] = typer.Option(
        None, "-t", "--timeout", help="HTTP timeout in seconds (default: wait forever)"
    ),
    quiet: bool = typer.Option(
        False, "-q", "--quiet", help="No banner, diagnostics or progress"
    ),
    log_level: Optional[str] = typer.Option(
        None, "-l", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Log file path"
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    gobble - retrieve a single resource over HTTP

    Examples:
        gobble -u example.com/file.zip
        gobble -u https://example.com/ -o page.html
        gobble -u https://example.com/data.csv -s > data.csv
    """
    loader = ConfigLoader()
    setup_logging(level=log_level or loader.log_level(), log_file=log_file)

    try:
        if not url:
            raise UsageError("no target URL given")

        parsed_chunk = None
        if chunk:
            parsed_chunk = parse_size(chunk)
            if parsed_chunk is None:
                raise UsageError(f"invalid chunk size: {chunk}")

        config = loader.load({
            "url": url,
            "output_name": output,
            "to_stdout": to_stdout,
            "exclusive": exclusive or None,
            "chunk_size": parsed_chunk,
            "timeout": timeout,
            "quiet": quiet,
        })
        logger.debug(f"Configuration: {config.to_dict()}")

        reporter = ProgressReporter(stdout_console, enabled=config.show_progress)
        on_connect = None
        if config.show_progress:
            on_connect = lambda target, response: print_info(stdout_console, target, response)

        with FetchService() as service:
            service.fetch(config, on_connect=on_connect, reporter=reporter)

    except UsageError as e:
        stderr_console.print(f"[red]Error:[/red] {escape(str(e))}")
        typer.echo(ctx.get_help())
        raise typer.Exit(1)
    except TransportError as e:
        stderr_console.print(f"[red]Connection error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except GobbleError as e:
        stderr_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Fetch failed")
        stderr_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()

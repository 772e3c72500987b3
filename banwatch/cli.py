"""banwatch command line: check text locally or run the moderation service."""

import json
import logging
import sys

import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from banwatch import __version__
from banwatch.config import Settings

console = Console()
err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """banwatch: LLM-backed banned-content checks.

    Reads DEEPSEEK_API_KEY, DEEPSEEK_BASE_URL and DEEPSEEK_MODEL_ID from the
    environment or from a .env file in the working directory.
    """
    load_dotenv(find_dotenv(usecwd=True))
    settings = Settings.from_env()
    _configure_logging((log_level or settings.log_level).upper())
    ctx.obj = settings


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.option("--banned", "-b", multiple=True, help="Custom banned term (repeatable)")
@click.pass_obj
def check(settings: Settings, text: tuple, banned: tuple):
    """Check TEXT for banned content and print the verdict as JSON."""
    from banwatch.errors import ModerationError
    from banwatch.moderation.checker import check_for_banned

    joined = " ".join(text)
    if not joined.strip():
        raise click.BadParameter("text must not be empty", param_hint="TEXT")

    try:
        result = check_for_banned(joined, list(banned), settings=settings)
    except ModerationError as e:
        err_console.print(f"[red]Check failed:[/] {e}")
        sys.exit(1)

    console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))


# ── Serve ────────────────────────────────────────────────────────────


@main.command()
@click.option("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Port (default: $PORT or 8787)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None, reload: bool):
    """Run the standalone moderation HTTP service."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    console.print(f"\n[bold blue]banwatch[/] — listening on http://{host}:{port}\n")

    uvicorn.run(
        "web.backend.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

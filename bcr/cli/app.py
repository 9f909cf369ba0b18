from __future__ import annotations

from pathlib import Path

import typer

from bcr import __version__
from bcr.cli.context import build_context
from bcr.core.errors import ErrorCode
from bcr.core.request import resolve_request
from bcr.core.result import Err
from bcr.output.console import RichConsole
from bcr.output.errors import entry_error_exit_code, print_entry_error
from bcr.services.entry import create_entry

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.command()
def create_bcr_entry(
    args: list[str] | None = typer.Argument(
        None,
        metavar="PROJECT_PATH BCR_PATH OWNER_SLASH_REPO VERSION",
        help="Project checkout (with .bcr/ templates), registry checkout, "
        "owner/repo on GitHub, and the release tag (e.g. v1.2.3).",
        show_default=False,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="TOML config (default: <project>/.bcr/create-bcr-entry.toml if present)",
    ),
    timeout: float | None = typer.Option(None, "--timeout", help="Download timeout in seconds"),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Create a registry entry for a new release of a project.

    Assumes the project and registry repositories are checked out locally.
    Afterwards the registry changes should be committed and sent for review.
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    console = RichConsole()
    request = resolve_request(args or [])
    if isinstance(request, Err):
        print_entry_error(request.error, console)
        raise typer.Exit(code=entry_error_exit_code(request.error))

    ctx = build_context(
        request.value.project_path,
        config_path=config,
        timeout=timeout,
        console=console,
    )
    result = create_entry(request.value, config=ctx.config, http=ctx.http, console=ctx.console)
    if isinstance(result, Err):
        print_entry_error(result.error, ctx.console)
        raise typer.Exit(code=entry_error_exit_code(result.error))

    for path in result.value.written:
        ctx.console.success(str(path))


def main() -> None:
    app()

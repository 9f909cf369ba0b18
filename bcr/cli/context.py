from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from bcr.core.config import Config, resolve_config
from bcr.core.errors import EntryError
from bcr.core.result import Err
from bcr.output.console import ConsoleProtocol, RichConsole
from bcr.output.errors import entry_error_exit_code, print_entry_error
from bcr.tools.http import HttpClient, RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    http: HttpClient


def build_context(
    project_path: Path,
    *,
    config_path: Path | None = None,
    timeout: float | None = None,
    console: ConsoleProtocol | None = None,
) -> CLIContext:
    console = console or RichConsole()

    if timeout is not None and timeout <= 0:
        error = EntryError("usage", f"--timeout must be positive, got {timeout}")
        print_entry_error(error, console)
        raise typer.Exit(code=entry_error_exit_code(error))

    config_result = resolve_config(project_path, config_path)
    if isinstance(config_result, Err):
        print_entry_error(config_result.error, console)
        raise typer.Exit(code=entry_error_exit_code(config_result.error))

    config = config_result.value.with_timeout(timeout)
    return CLIContext(
        config=config,
        console=console,
        http=RealHttpClient(
            timeout=config.download.timeout,
            user_agent=config.download.user_agent,
        ),
    )

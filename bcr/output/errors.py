"""Error presentation utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bcr.core.errors import EntryError, ErrorCode
from bcr.output.console import Style

if TYPE_CHECKING:
    from bcr.output.console import ConsoleProtocol

__all__ = ["print_entry_error", "entry_error_exit_code"]


def print_entry_error(error: EntryError, console: ConsoleProtocol) -> None:
    """Print an entry error with its kind and optional hint."""
    match error:
        case EntryError(kind="usage", message=message, hint=hint):
            console.print(message, Style.ERROR)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case EntryError(kind=kind, message=message, hint=hint):
            console.error(f"[{kind}] {message}")
            if hint:
                console.print(f"hint: {hint}", Style.DIM)


def entry_error_exit_code(error: EntryError) -> int:
    """Every kind of failure aborts the release with the same status."""
    return int(ErrorCode.FAILURE)

"""Error payloads and process exit codes.

Every stage of entry generation reports failures as an ``EntryError`` value.
The ``kind`` tells which part of the pipeline gave up:

- usage: bad command-line input (argument count, owner/repo shape, version)
- parse: a template or registry file could not be understood
- filesystem: a file is missing, unreadable, or a version directory exists
- network: the release archive could not be downloaded
- config: the TOML configuration is unreadable or invalid
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

__all__ = ["EntryError", "ErrorKind", "ErrorCode"]

type ErrorKind = Literal["usage", "parse", "filesystem", "network", "config"]


@dataclass(frozen=True, slots=True)
class EntryError:
    """A fatal failure of one pipeline stage."""

    kind: ErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message

    def __str__(self) -> str:
        return f"{self.kind} error: {self.pretty()}"


class ErrorCode(IntEnum):
    """Exit codes of the ``create-bcr-entry`` command.

    Every failure kind exits with ``FAILURE``; release pipelines only care
    whether the entry was produced.
    """

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK

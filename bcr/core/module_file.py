"""Extraction of the module name from a ``MODULE.bazel`` template.

The template is Starlark. Only enough of it is tokenized to find the single
top-level ``module(...)`` call and read its ``name = "..."`` keyword; strings
and ``#`` comments are skipped so that text inside them never matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .errors import EntryError
from .result import Err, Ok, Result

__all__ = ["parse_module_name", "read_module_name"]

_SKIP_RE = re.compile(r"(?:\s+|#[^\n]*)+")
_WORD_RE = re.compile(r"\w+")
_NAME_RE = re.compile(r"^\w[\w.\-]*$")
_OPEN = "([{"
_CLOSE = ")]}"


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str  # "word" | "string" | "op"
    value: str
    line: int


class _ScanError(Exception):
    pass


def _read_string(text: str, start: int) -> tuple[str, int]:
    quote = text[start : start + 3] if text[start : start + 3] in ('"""', "'''") else text[start]
    pos = start + len(quote)
    chars: list[str] = []
    while pos < len(text):
        if text.startswith(quote, pos):
            return "".join(chars), pos + len(quote)
        ch = text[pos]
        if ch == "\\" and pos + 1 < len(text):
            chars.append(text[pos + 1])
            pos += 2
            continue
        if ch == "\n" and len(quote) == 1:
            break
        chars.append(ch)
        pos += 1
    line = text.count("\n", 0, start) + 1
    raise _ScanError(f"unterminated string literal on line {line}")


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        skip = _SKIP_RE.match(text, pos)
        if skip is not None:
            pos = skip.end()
            continue

        line = text.count("\n", 0, pos) + 1
        ch = text[pos]
        if ch in "\"'":
            value, pos = _read_string(text, pos)
            tokens.append(_Token("string", value, line))
            continue

        word = _WORD_RE.match(text, pos)
        if word is not None:
            tokens.append(_Token("word", word.group(), line))
            pos = word.end()
            continue

        tokens.append(_Token("op", ch, line))
        pos += 1
    return tokens


def _module_calls(tokens: list[_Token]) -> list[int]:
    """Indices of the ``(`` opening each top-level ``module(`` call."""
    starts: list[int] = []
    depth = 0
    for i, tok in enumerate(tokens):
        if tok.kind == "op" and tok.value in _OPEN:
            if (
                depth == 0
                and i > 0
                and tokens[i - 1].kind == "word"
                and tokens[i - 1].value == "module"
                and (i < 2 or tokens[i - 2].value != ".")
            ):
                starts.append(i)
            depth += 1
        elif tok.kind == "op" and tok.value in _CLOSE:
            depth = max(depth - 1, 0)
    return starts


def _keyword_args(tokens: list[_Token], open_index: int) -> dict[str, _Token]:
    """Collect ``key = <token>`` pairs at the call's own nesting level."""
    args: dict[str, _Token] = {}
    depth = 0
    i = open_index
    while i < len(tokens):
        tok = tokens[i]
        if tok.kind == "op" and tok.value in _OPEN:
            depth += 1
        elif tok.kind == "op" and tok.value in _CLOSE:
            depth -= 1
            if depth == 0:
                return args
        elif (
            depth == 1
            and tok.kind == "word"
            and i + 2 < len(tokens)
            and tokens[i + 1].kind == "op"
            and tokens[i + 1].value == "="
            and tokens[i - 1].kind == "op"
            and tokens[i - 1].value in ("(", ",")
        ):
            args.setdefault(tok.value, tokens[i + 2])
        i += 1
    raise _ScanError("module( call is never closed")


def parse_module_name(text: str) -> Result[str, EntryError]:
    """Return the ``name`` declared by the single ``module(...)`` call in text."""
    try:
        tokens = _tokenize(text)
        calls = _module_calls(tokens)
        if not calls:
            return Err(EntryError("parse", "could not parse module name from module file"))
        if len(calls) > 1:
            lines = ", ".join(str(tokens[i].line) for i in calls)
            return Err(EntryError("parse", f"multiple module() declarations (lines {lines})"))
        args = _keyword_args(tokens, calls[0])
    except _ScanError as e:
        return Err(EntryError("parse", f"could not parse module file: {e}"))

    name = args.get("name")
    if name is None or name.kind != "string":
        return Err(EntryError("parse", "could not parse module name from module file"))
    if not _NAME_RE.match(name.value):
        return Err(
            EntryError("parse", f"invalid module name on line {name.line}: {name.value!r}")
        )
    return Ok(name.value)


def read_module_name(path: Path) -> Result[str, EntryError]:
    """Read ``path`` and extract its module name."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(EntryError("filesystem", f"module template not found: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(EntryError("filesystem", f"cannot read module template: {e}", hint=str(path)))

    result = parse_module_name(text)
    if isinstance(result, Err):
        return Err(EntryError(result.error.kind, result.error.message, hint=str(path)))
    return result

"""Registry ``metadata.json`` handling.

The record lists every published version of a module under ``versions``.
All other keys (homepage, maintainers, repository, yanked_versions, ...)
pass through unchanged.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import EntryError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, as_str_list

__all__ = ["MetadataUpdate", "load_metadata", "merge_version", "parse_metadata", "render_metadata"]


@dataclass(frozen=True, slots=True)
class MetadataUpdate:
    """A merged record ready to be written to ``path``."""

    path: Path
    record: StrDict
    added: bool

    @property
    def versions(self) -> list[str]:
        return as_str_list(self.record.get("versions")) or []

    def render(self) -> str:
        return render_metadata(self.record)


def parse_metadata(text: str, *, source: Path) -> Result[StrDict, EntryError]:
    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(EntryError("parse", f"invalid JSON in metadata: {e}", hint=str(source)))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(EntryError("parse", "metadata root must be a JSON object", hint=str(source)))
    if as_str_list(data.get("versions")) is None:
        return Err(
            EntryError("parse", "metadata 'versions' must be a list of strings", hint=str(source))
        )
    return Ok(data)


def merge_version(record: StrDict, version: str) -> tuple[StrDict, bool]:
    """Return a copy of record with version added and versions sorted.

    Versions are sorted as plain strings. A version that is already listed is
    not added again; duplicates already present in the record are kept.
    """
    versions = list(as_str_list(record.get("versions")) or [])
    added = version not in versions
    if added:
        versions.append(version)
    versions.sort()

    merged = dict(record)
    merged["versions"] = versions
    return merged, added


def render_metadata(record: StrDict) -> str:
    return json.dumps(record, indent=4, ensure_ascii=False) + "\n"


def load_metadata(
    dest: Path, template: Path, version: str
) -> Result[MetadataUpdate, EntryError]:
    """Read the registry record, or the project template on first publish, and merge version."""
    source = dest if dest.exists() else template
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(EntryError("filesystem", f"metadata template not found: {source}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(EntryError("filesystem", f"cannot read metadata: {e}", hint=str(source)))

    parsed = parse_metadata(text, source=source)
    if isinstance(parsed, Err):
        return parsed

    merged, added = merge_version(parsed.value, version)
    return Ok(MetadataUpdate(path=dest, record=merged, added=added))

"""Typed configuration loading.

The configuration file is optional TOML:

    [download]
    url_template = "https://github.com/{owner_slash_repo}/archive/v{version}.tar.gz"
    timeout = 30.0
    user_agent = "create-bcr-entry/0.3.0"

    [templates]
    dir = ".bcr"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from bcr import __version__

from .errors import EntryError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "DownloadConfig",
    "TemplatesConfig",
    "load_config",
    "resolve_config",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_URL_TEMPLATE",
    "DEFAULT_TIMEOUT",
    "DEFAULT_TEMPLATES_DIR",
]

DEFAULT_CONFIG_NAME = "create-bcr-entry.toml"
DEFAULT_URL_TEMPLATE = "https://github.com/{owner_slash_repo}/archive/v{version}.tar.gz"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"create-bcr-entry/{__version__}"
DEFAULT_TEMPLATES_DIR = ".bcr"

_URL_FIELDS = ("{owner_slash_repo}", "{version}")


@dataclass(frozen=True, slots=True)
class DownloadConfig:
    """Where and how the release archive is fetched."""

    url_template: str = DEFAULT_URL_TEMPLATE
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def archive_url(self, owner_slash_repo: str, version: str) -> str:
        return self.url_template.format(owner_slash_repo=owner_slash_repo, version=version)


@dataclass(frozen=True, slots=True)
class TemplatesConfig:
    """Location of the entry templates, relative to the project root."""

    dir: str = DEFAULT_TEMPLATES_DIR


@dataclass(frozen=True, slots=True)
class Config:
    download: DownloadConfig = field(default_factory=DownloadConfig)
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML mapping."""
        download: StrDict = get_table(data, "download") or {}
        templates: StrDict = get_table(data, "templates") or {}
        timeout = get_float(download, "timeout")

        return cls(
            download=DownloadConfig(
                url_template=get_str(download, "url_template") or DEFAULT_URL_TEMPLATE,
                timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
                user_agent=get_str(download, "user_agent") or DEFAULT_USER_AGENT,
            ),
            templates=TemplatesConfig(
                dir=get_str(templates, "dir") or DEFAULT_TEMPLATES_DIR,
            ),
        )

    def with_timeout(self, timeout: float | None) -> Config:
        if timeout is None:
            return self
        return replace(self, download=replace(self.download, timeout=timeout))


def _parse_toml(path: Path) -> Result[StrDict, EntryError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(EntryError("config", f"config file not found: {path}"))
    except PermissionError:
        return Err(EntryError("config", f"permission denied reading: {path}"))
    except tomllib.TOMLDecodeError as e:
        return Err(EntryError("config", f"invalid TOML syntax: {e}", hint=str(path)))
    except (OSError, UnicodeDecodeError) as e:
        return Err(EntryError("config", f"error reading config: {e}", hint=str(path)))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(EntryError("config", "config root must be a TOML table", hint=str(path)))
    return Ok(data)


def _validate(config: Config, path: Path) -> Result[Config, EntryError]:
    template = config.download.url_template
    missing = [f for f in _URL_FIELDS if f not in template]
    if missing:
        return Err(
            EntryError(
                "config",
                f"download.url_template is missing {', '.join(missing)}",
                hint=str(path),
            )
        )
    try:
        template.format(owner_slash_repo="owner/repo", version="0.0.0")
    except (KeyError, IndexError, ValueError) as e:
        return Err(
            EntryError(
                "config",
                f"download.url_template cannot be formatted: {e!r}",
                hint=str(path),
            )
        )
    if config.download.timeout <= 0:
        return Err(EntryError("config", "download.timeout must be positive", hint=str(path)))
    return Ok(config)


def load_config(path: Path) -> Result[Config, EntryError]:
    """Load and validate configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return _validate(Config.from_dict(result.value), path)


def resolve_config(project_path: Path, explicit: Path | None = None) -> Result[Config, EntryError]:
    """Pick the configuration for a run.

    An explicit path must exist. Otherwise the project's templates directory
    is searched for ``create-bcr-entry.toml``; without one, defaults apply.
    """
    if explicit is not None:
        return load_config(explicit)

    candidate = project_path / DEFAULT_TEMPLATES_DIR / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return load_config(candidate)
    return Ok(Config())

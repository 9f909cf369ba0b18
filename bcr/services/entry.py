"""Registry entry generation.

A run is split in two phases. ``plan_entry`` reads every template, merges the
metadata, downloads the archive and stamps all files in memory. ``write_entry``
then creates the version directory and writes the plan out. Nothing on disk
is touched until the plan is complete, so a failed download or a missing
template leaves the registry checkout as it was.

Layout produced under the registry root:

    modules/<module>/metadata.json
    modules/<module>/<version>/MODULE.bazel
    modules/<module>/<version>/source.json
    modules/<module>/<version>/presubmit.yml
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from bcr.core.errors import EntryError
from bcr.core.metadata import MetadataUpdate, load_metadata
from bcr.core.module_file import read_module_name
from bcr.core.result import Err, Ok, Result
from bcr.core.templates import stamp_module_file, stamp_source_file
from bcr.platform.files import atomic_write_text, copy_verbatim
from bcr.tools.integrity import ArchiveDigest, fetch_archive_digest

if TYPE_CHECKING:
    from bcr.core.config import Config
    from bcr.core.request import EntryRequest
    from bcr.output.console import ConsoleProtocol
    from bcr.tools.http import HttpClient

__all__ = [
    "EntryPaths",
    "EntryPlan",
    "EntryResult",
    "entry_paths",
    "plan_entry",
    "write_entry",
    "create_entry",
]

MODULE_TEMPLATE = "MODULE.template.bazel"
METADATA_TEMPLATE = "metadata.template.json"
SOURCE_TEMPLATE = "source.template.json"
PRESUBMIT_FILE = "presubmit.yml"


@dataclass(frozen=True, slots=True)
class EntryPaths:
    templates_dir: Path
    module_dir: Path
    version_dir: Path

    @property
    def module_template(self) -> Path:
        return self.templates_dir / MODULE_TEMPLATE

    @property
    def metadata_template(self) -> Path:
        return self.templates_dir / METADATA_TEMPLATE

    @property
    def source_template(self) -> Path:
        return self.templates_dir / SOURCE_TEMPLATE

    @property
    def presubmit_template(self) -> Path:
        return self.templates_dir / PRESUBMIT_FILE

    @property
    def metadata(self) -> Path:
        return self.module_dir / "metadata.json"

    @property
    def module_file(self) -> Path:
        return self.version_dir / "MODULE.bazel"

    @property
    def source_file(self) -> Path:
        return self.version_dir / "source.json"

    @property
    def presubmit_file(self) -> Path:
        return self.version_dir / PRESUBMIT_FILE


@dataclass(frozen=True, slots=True)
class EntryPlan:
    """Everything a run will write, fully rendered."""

    module_name: str
    version: str
    paths: EntryPaths
    metadata: MetadataUpdate
    module_content: str
    source_content: str
    archive: ArchiveDigest


@dataclass(frozen=True, slots=True)
class EntryResult:
    module_name: str
    version: str
    version_dir: Path
    written: tuple[Path, ...]


def entry_paths(request: EntryRequest, module_name: str, config: Config) -> EntryPaths:
    module_dir = request.bcr_path / "modules" / module_name
    return EntryPaths(
        templates_dir=request.project_path / config.templates.dir,
        module_dir=module_dir,
        version_dir=module_dir / request.version,
    )


def _read_template(path: Path) -> Result[str, EntryError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(EntryError("filesystem", f"template not found: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(EntryError("filesystem", f"cannot read template: {e}", hint=str(path)))


def _version_dir_exists(paths: EntryPaths, version: str) -> EntryError:
    return EntryError(
        "filesystem",
        f"version directory already exists: {paths.version_dir}",
        hint=f"version {version} has already been published; entries are never overwritten",
    )


def plan_entry(
    request: EntryRequest,
    *,
    config: Config,
    http: HttpClient,
    console: ConsoleProtocol,
) -> Result[EntryPlan, EntryError]:
    """Resolve, download and stamp everything for one new version."""
    modules_dir = request.bcr_path / "modules"
    if not modules_dir.is_dir():
        return Err(
            EntryError(
                "filesystem",
                f"registry modules directory not found: {modules_dir}",
                hint="bcr_path must point at a registry checkout",
            )
        )

    templates_dir = request.project_path / config.templates.dir
    name_result = read_module_name(templates_dir / MODULE_TEMPLATE)
    if isinstance(name_result, Err):
        return name_result
    module_name = name_result.value
    console.info(f"module: {module_name} {request.version}")

    paths = entry_paths(request, module_name, config)
    if paths.version_dir.exists():
        return Err(_version_dir_exists(paths, request.version))

    module_template = _read_template(paths.module_template)
    if isinstance(module_template, Err):
        return module_template
    source_template = _read_template(paths.source_template)
    if isinstance(source_template, Err):
        return source_template
    if not paths.presubmit_template.is_file():
        return Err(EntryError("filesystem", f"template not found: {paths.presubmit_template}"))

    metadata = load_metadata(paths.metadata, paths.metadata_template, request.version)
    if isinstance(metadata, Err):
        return metadata
    if not metadata.value.added:
        console.warning(f"{request.version} is already listed in {paths.metadata}")

    url = config.download.archive_url(request.owner_slash_repo, request.version)
    console.info(f"downloading {url}")
    archive = fetch_archive_digest(http, url)
    if isinstance(archive, Err):
        return archive
    console.info(f"integrity: {archive.value.integrity} ({archive.value.size} bytes)")

    return Ok(
        EntryPlan(
            module_name=module_name,
            version=request.version,
            paths=paths,
            metadata=metadata.value,
            module_content=stamp_module_file(
                module_template.value,
                owner_slash_repo=request.owner_slash_repo,
                version=request.version,
            ),
            source_content=stamp_source_file(
                source_template.value,
                owner_slash_repo=request.owner_slash_repo,
                version=request.version,
                integrity=archive.value.digest,
            ),
            archive=archive.value,
        )
    )


def write_entry(plan: EntryPlan) -> Result[EntryResult, EntryError]:
    """Create the version directory and write the planned files.

    The version directory must not exist yet. metadata.json is written last,
    so a version is only listed once its directory is complete.
    """
    paths = plan.paths
    try:
        paths.module_dir.mkdir(exist_ok=True)
        paths.version_dir.mkdir()
    except FileExistsError:
        return Err(_version_dir_exists(paths, plan.version))
    except OSError as e:
        return Err(EntryError("filesystem", f"cannot create {paths.version_dir}: {e}"))

    try:
        atomic_write_text(paths.module_file, plan.module_content)
        atomic_write_text(paths.source_file, plan.source_content)
        copy_verbatim(paths.presubmit_template, paths.presubmit_file)
        atomic_write_text(paths.metadata, plan.metadata.render())
    except OSError as e:
        return Err(
            EntryError("filesystem", f"failed to write entry: {e}", hint=str(paths.version_dir))
        )

    return Ok(
        EntryResult(
            module_name=plan.module_name,
            version=plan.version,
            version_dir=paths.version_dir,
            written=(paths.metadata, paths.module_file, paths.source_file, paths.presubmit_file),
        )
    )


def create_entry(
    request: EntryRequest,
    *,
    config: Config,
    http: HttpClient,
    console: ConsoleProtocol,
) -> Result[EntryResult, EntryError]:
    """Plan and write the registry entry for request."""
    plan = plan_entry(request, config=config, http=http, console=console)
    if isinstance(plan, Err):
        return plan
    return write_entry(plan.value)

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from pathlib import Path

import pytest

from bcr.tools.http import MockHttpClient

MODULE_TEMPLATE = '''\
"Bazel dependencies for REPO_PLACEHOLDER"

module(
    name = "aspect_bazel_lib",
    # keep in sync with the release tag
    version = "VERSION_PLACEHOLDER",
    compatibility_level = 1,
)

bazel_dep(name = "platforms", version = "0.0.4")
'''

SOURCE_TEMPLATE = '''\
{
    "integrity": "SHA256_PLACEHOLDER",
    "strip_prefix": "REPO_PLACEHOLDER-VERSION_PLACEHOLDER",
    "url": "https://github.com/OWNER_SLASH_REPO_PLACEHOLDER/archive/refs/tags/vVERSION_PLACEHOLDER.tar.gz"
}
'''

METADATA_TEMPLATE = '''\
{
    "homepage": "https://github.com/aspect-build/bazel-lib",
    "maintainers": [],
    "versions": [],
    "yanked_versions": {}
}
'''

PRESUBMIT = b"""\
bcr_test_module:
  module_path: "e2e/smoke"
  matrix:
    platform: ["debian10", "macos", "ubuntu2004", "windows"]
"""

ARCHIVE = b"\x1f\x8b\x08\x00fake release tarball"
ARCHIVE_URL = "https://github.com/aspect-build/bazel-lib/archive/v1.2.3.tar.gz"


def digest_of(data: bytes) -> str:
    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


@dataclass(frozen=True)
class Checkouts:
    project: Path
    registry: Path

    @property
    def templates(self) -> Path:
        return self.project / ".bcr"

    @property
    def module_dir(self) -> Path:
        return self.registry / "modules" / "aspect_bazel_lib"


@pytest.fixture
def checkouts(tmp_path: Path) -> Checkouts:
    project = tmp_path / "bazel-lib"
    templates = project / ".bcr"
    templates.mkdir(parents=True)
    (templates / "MODULE.template.bazel").write_text(MODULE_TEMPLATE, encoding="utf-8")
    (templates / "source.template.json").write_text(SOURCE_TEMPLATE, encoding="utf-8")
    (templates / "metadata.template.json").write_text(METADATA_TEMPLATE, encoding="utf-8")
    (templates / "presubmit.yml").write_bytes(PRESUBMIT)

    registry = tmp_path / "bazel-central-registry"
    (registry / "modules").mkdir(parents=True)
    return Checkouts(project=project, registry=registry)


@pytest.fixture
def archive_url() -> str:
    return ARCHIVE_URL


@pytest.fixture
def archive_integrity() -> str:
    return f"sha256-{digest_of(ARCHIVE)}"


@pytest.fixture
def http() -> MockHttpClient:
    client = MockHttpClient()
    client.set_download(ARCHIVE_URL, ARCHIVE)
    return client

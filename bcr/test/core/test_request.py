"""Tests for bcr.core.request - argument resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from bcr.core.request import USAGE, EntryRequest, normalize_version, resolve_request
from bcr.core.result import Err, Ok


class TestNormalizeVersion:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("v1.2.3", "1.2.3"),
            ("v0.0.1-rc.1", "0.0.1-rc.1"),
            ("v10", "10"),
        ],
    )
    def test_strips_leading_v(self, tag: str, expected: str) -> None:
        assert normalize_version(tag) == expected

    def test_unprefixed_passes_through(self) -> None:
        assert normalize_version("1.2.3") == "1.2.3"

    def test_only_one_v_is_stripped(self) -> None:
        assert normalize_version("vv1.0.0") == "v1.0.0"

    def test_uppercase_v_is_not_a_prefix(self) -> None:
        assert normalize_version("V1.0.0") == "V1.0.0"


class TestResolveRequest:
    def test_resolves_four_arguments(self) -> None:
        result = resolve_request(["proj", "bcr", "aspect-build/bazel-lib", "v1.2.3"])

        assert result == Ok(
            EntryRequest(
                project_path=Path("proj"),
                bcr_path=Path("bcr"),
                owner_slash_repo="aspect-build/bazel-lib",
                version="1.2.3",
            )
        )

    @pytest.mark.parametrize("count", [0, 1, 3, 5])
    def test_wrong_argument_count_is_usage_error(self, count: int) -> None:
        result = resolve_request(["x"] * count)

        assert isinstance(result, Err)
        assert result.error.kind == "usage"
        assert result.error.message == USAGE

    @pytest.mark.parametrize("owner_repo", ["widget", "/widget", "acme/", "acme/widget/extra"])
    def test_rejects_malformed_owner_repo(self, owner_repo: str) -> None:
        result = resolve_request(["proj", "bcr", owner_repo, "v1.0.0"])

        assert isinstance(result, Err)
        assert result.error.kind == "usage"
        assert owner_repo in result.error.message

    @pytest.mark.parametrize("tag", ["v", "", "v../x", "v.."])
    def test_rejects_unusable_version(self, tag: str) -> None:
        result = resolve_request(["proj", "bcr", "acme/widget", tag])

        assert isinstance(result, Err)
        assert result.error.kind == "usage"

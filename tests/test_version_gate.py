# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Tests for the naive-ui version gate.
"""

import pytest

from iconfix.patching.version_gate import (
    UNKNOWN_VERSION,
    evaluate,
    is_at_least,
    resolve_version,
    should_skip,
)

from .conftest import write_manifest


class TestIsAtLeast:
    """Test component-wise version comparison."""

    @pytest.mark.parametrize(
        "version, threshold, expected",
        [
            ("2.40.4", "2.40.4", True),
            ("2.41.0", "2.40.4", True),
            ("2.40.3", "2.40.4", False),
            ("2.40", "2.40.0", True),
            ("2.40.0", "2.40", True),
            ("3.0.0", "2.40.4", True),
            ("2.9.9", "2.40.4", False),
            ("2.40.10", "2.40.4", True),
        ],
    )
    def test_comparison_table(self, version, threshold, expected):
        assert is_at_least(version, threshold) is expected

    def test_direction_is_version_at_least_threshold(self):
        """Swapping the arguments must flip the answer for unequal versions."""
        assert is_at_least("2.40.3", "2.40.4") is False
        assert is_at_least("2.40.4", "2.40.3") is True

    def test_missing_trailing_component_is_zero(self):
        assert is_at_least("2.40", "2.40.1") is False
        assert is_at_least("2.41", "2.40.9") is True

    def test_prerelease_component_counts_as_zero(self):
        """A pre-release of the fixed version is still patched."""
        assert is_at_least("2.40.4-beta.1", "2.40.4") is False
        assert is_at_least("2.41.0-beta.1", "2.40.4") is True


class TestResolveVersion:
    """Test reading the installed naive-ui version."""

    def test_reads_manifest_in_root(self, tmp_path):
        write_manifest(tmp_path, "2.38.1")
        assert resolve_version(str(tmp_path)) == "2.38.1"

    def test_walks_up_to_parent_node_modules(self, tmp_path):
        write_manifest(tmp_path, "2.39.0")
        nested = tmp_path / "packages" / "web"
        nested.mkdir(parents=True)
        assert resolve_version(str(nested)) == "2.39.0"

    def test_missing_package_is_unknown(self, tmp_path):
        assert resolve_version(str(tmp_path)) == UNKNOWN_VERSION

    def test_malformed_manifest_is_unknown(self, tmp_path):
        manifest = write_manifest(tmp_path, "2.40.0")
        manifest.write_text("{ not json")
        assert resolve_version(str(tmp_path)) == UNKNOWN_VERSION

    def test_non_string_version_is_unknown(self, tmp_path):
        manifest = write_manifest(tmp_path, "2.40.0")
        manifest.write_text('{"name": "naive-ui", "version": 2}')
        assert resolve_version(str(tmp_path)) == UNKNOWN_VERSION

    def test_manifest_that_is_not_an_object_is_unknown(self, tmp_path):
        manifest = write_manifest(tmp_path, "2.40.0")
        manifest.write_text('["2.40.0"]')
        assert resolve_version(str(tmp_path)) == UNKNOWN_VERSION


class TestSessionDecision:
    """Test the skip flag, including the fail-open default."""

    def test_fixed_version_skips(self):
        assert should_skip("2.41.0", "2.40.4") is True
        assert should_skip("2.40.4", "2.40.4") is True

    def test_old_version_patches(self):
        assert should_skip("2.40.3", "2.40.4") is False

    def test_unknown_version_fails_open(self):
        """Unresolvable versions are patched. Pinned pending product confirmation."""
        assert should_skip(UNKNOWN_VERSION, "2.40.4") is False

    def test_evaluate_builds_decision(self, tmp_path):
        write_manifest(tmp_path, "2.41.0")
        decision = evaluate(str(tmp_path), "2.40.4")
        assert decision.version == "2.41.0"
        assert decision.threshold == "2.40.4"
        assert decision.skip is True

    def test_evaluate_without_package(self, tmp_path):
        decision = evaluate(str(tmp_path), "2.40.4")
        assert decision.version == UNKNOWN_VERSION
        assert decision.skip is False

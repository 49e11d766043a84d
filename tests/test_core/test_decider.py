"""Unit tests for upstream_version.core.decider.

Covers diff classification, upstream version extraction, the next-version
decision and the file-reading shells around it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from upstream_version.models import Version
from upstream_version.config import UpstreamVersionConfig
from upstream_version.core.decider import (
    DiffClass,
    classify_difference,
    compile_version_pattern,
    compute_next_version,
    extract_upstream_version,
    resolve_next_version,
    resolve_upstream_version,
)
from upstream_version.exceptions import (
    ConfigError,
    MissingCaptureGroupError,
    MissingConfigurationError,
    PatternNotFoundError,
    UnparseableVersionError,
    UpstreamPrereleaseError,
)

PATTERN = r'VERSION\s*=\s*"(?<version>[^"]+)"'


def _config(**kwargs: object) -> UpstreamVersionConfig:
    options = {"version_file": Path("version.h"), "version_pattern": PATTERN}
    options.update(kwargs)
    return UpstreamVersionConfig(**options)  # type: ignore[arg-type]


@pytest.mark.unit
class TestClassifyDifference:
    """Tests for classify_difference."""

    @pytest.mark.parametrize(
        "latest,upstream,expected",
        [
            (Version(3, 4, 5), Version(3, 4, 5), DiffClass.NONE),
            (Version(2, 9, 9), Version(3, 4, 5), DiffClass.MAJOR),
            (Version(4, 0, 0, (1,)), Version(3, 4, 5), DiffClass.MAJOR),
            (Version(3, 3, 0), Version(3, 4, 5), DiffClass.MINOR),
            (Version(3, 4, 4, (2,)), Version(3, 4, 5), DiffClass.PATCH),
            (Version(3, 4, 5, (7,)), Version(3, 4, 5), DiffClass.PRERELEASE),
            (Version(3, 4, 5, ("beta",)), Version(3, 4, 5), DiffClass.PRERELEASE),
            (Version(3, 4, 5), Version(3, 4, 5, (1,)), DiffClass.PATCH),
            (Version(3, 4, 5, (1,)), Version(3, 4, 5, (1,)), DiffClass.NONE),
        ],
        ids=[
            "equal",
            "major",
            "major-downgrade",
            "minor",
            "patch",
            "prerelease",
            "prerelease-alpha",
            "equal-core-other",
            "equal-prerelease",
        ],
    )
    def test_classification(
        self, latest: Version, upstream: Version, expected: DiffClass
    ) -> None:
        """Test the coarsest differing level is reported."""
        assert classify_difference(latest, upstream) is expected

    def test_diff_class_is_string_enum(self) -> None:
        """Test DiffClass values compare equal to their names."""
        assert DiffClass("minor") is DiffClass.MINOR
        assert DiffClass.PRERELEASE == "prerelease"


@pytest.mark.unit
class TestExtractUpstreamVersion:
    """Tests for extract_upstream_version and compile_version_pattern."""

    def test_javascript_named_group(self) -> None:
        """Test (?<version>...) syntax is accepted."""
        assert extract_upstream_version('VERSION = "3.4.5"', PATTERN) == "3.4.5"

    def test_python_named_group(self) -> None:
        """Test (?P<version>...) syntax is accepted."""
        pattern = r'VERSION\s*=\s*"(?P<version>[^"]+)"'
        assert extract_upstream_version('VERSION = "1.0"', pattern) == "1.0"

    def test_lookbehind_is_not_translated(self) -> None:
        """Test lookbehind assertions survive the named group translation."""
        regex = compile_version_pattern(r"(?<=v)(?<version>\d+)(?<!x)")

        assert regex.groupindex == {"version": 1}

    def test_javascript_backreference(self) -> None:
        """Test \\k<name> backreferences are translated."""
        pattern = r"(?<q>['\"])(?<version>[\d.]+)\k<q>"

        assert extract_upstream_version("v = '2.1'", pattern) == "2.1"

    def test_multiline_anchors(self) -> None:
        """Test ^ and $ anchor at line boundaries."""
        contents = "NAME=foo\nVERSION=2.0.1\nOTHER=3\n"

        assert extract_upstream_version(contents, r"^VERSION=(?P<version>.+)$") == "2.0.1"

    def test_first_match_wins(self) -> None:
        """Test only the first match is used."""
        contents = 'VERSION = "1.0.0"\nVERSION = "2.0.0"\n'

        assert extract_upstream_version(contents, PATTERN) == "1.0.0"

    def test_no_match_raises_pattern_not_found(self) -> None:
        """Test a pattern without match raises PatternNotFoundError."""
        with pytest.raises(PatternNotFoundError) as exc_info:
            extract_upstream_version("nothing here", PATTERN, version_file="version.h")

        error = exc_info.value
        assert error.version_file == "version.h"
        assert error.pattern == PATTERN
        assert "version.h" in str(error)
        assert PATTERN in str(error)

    def test_pattern_without_group_raises(self) -> None:
        """Test a match without group 'version' raises MissingCaptureGroupError."""
        with pytest.raises(MissingCaptureGroupError) as exc_info:
            extract_upstream_version('VERSION = "3.4.5"', r'VERSION = "([^"]+)"')

        assert exc_info.value.pattern == r'VERSION = "([^"]+)"'

    def test_group_not_participating_raises(self) -> None:
        """Test an unmatched optional group counts as missing."""
        with pytest.raises(MissingCaptureGroupError):
            extract_upstream_version("VERSION x", r"VERSION(?:=(?P<version>\d+))?")

    def test_no_match_checked_before_group(self) -> None:
        """Test a non-matching pattern without group reports PatternNotFound."""
        with pytest.raises(PatternNotFoundError):
            extract_upstream_version("abc", r"VERSION")

    def test_invalid_regex_raises_config_error(self) -> None:
        """Test an invalid pattern raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            extract_upstream_version("abc", r"(?P<version>[")

        assert exc_info.value.option == "version_pattern"


@pytest.mark.unit
class TestComputeNextVersion:
    """Tests for compute_next_version."""

    def test_new_upstream_minor_seeds_default_revision(self) -> None:
        """Test a newer upstream version starts at the default revision."""
        result = compute_next_version(
            "3.3.0", _config(default_revision=7), 'VERSION = "3.4.5"'
        )

        assert result == "3.4.5-7"

    def test_prerelease_of_upstream_is_bumped(self) -> None:
        """Test an existing pre-release of the upstream version is incremented."""
        result = compute_next_version("3.4.5-7", _config(), 'VERSION = "3.4.5"')

        assert result == "3.4.5-8"

    def test_alphanumeric_prerelease_gets_counter(self) -> None:
        """Test a pre-release without numeric identifier gains a 0 counter."""
        result = compute_next_version("3.4.5-beta", _config(), 'VERSION = "3.4.5"')

        assert result == "3.4.5-beta.0"

    def test_equal_versions_reseed(self) -> None:
        """Test an identical final release re-seeds at the default revision."""
        result = compute_next_version("3.4.5", _config(), 'VERSION = "3.4.5"')

        assert result == "3.4.5-1"

    def test_older_upstream_reseeds(self) -> None:
        """Test an upstream version older than latest still re-seeds."""
        result = compute_next_version("4.0.0-3", _config(), 'VERSION = "3.4.5"')

        assert result == "3.4.5-1"

    def test_loose_versions_are_normalized(self) -> None:
        """Test both the latest and the upstream version are normalized."""
        result = compute_next_version("v3", _config(), 'VERSION = "release 3.4"')

        assert result == "3.4.0-1"

    @pytest.mark.parametrize("latest", ["3.4.5-7", "3.4.4", "9.9.9"])
    def test_prerelease_upstream_rejected(self, latest: str) -> None:
        """Test an upstream pre-release fails regardless of latest version."""
        with pytest.raises(UpstreamPrereleaseError) as exc_info:
            compute_next_version(latest, _config(), 'VERSION = "3.4.5-beta"')

        assert exc_info.value.version == Version(3, 4, 5, ("beta",))
        assert "3.4.5-beta" in str(exc_info.value)

    def test_unparseable_latest_raises(self) -> None:
        """Test an unparseable latest version raises UnparseableVersionError."""
        with pytest.raises(UnparseableVersionError):
            compute_next_version("garbage", _config(), 'VERSION = "3.4.5"')

    def test_unparseable_upstream_raises(self) -> None:
        """Test an unparseable upstream version raises UnparseableVersionError."""
        with pytest.raises(UnparseableVersionError):
            compute_next_version("1.0.0", _config(), 'VERSION = "trunk"')

    @pytest.mark.parametrize("upstream", ["1.2.3-01", "1.2.3-rc.01"])
    def test_malformed_upstream_prerelease_raises(self, upstream: str) -> None:
        """Test an upstream suffix that cannot be parsed is not treated as final."""
        with pytest.raises(UnparseableVersionError):
            compute_next_version("1.0.0", _config(), f'VERSION = "{upstream}"')

    def test_missing_pattern_raises(self) -> None:
        """Test an unset pattern raises MissingConfigurationError."""
        with pytest.raises(MissingConfigurationError) as exc_info:
            compute_next_version("1.0.0", _config(version_pattern=None), "")

        assert exc_info.value.option == "version_pattern"

    def test_idempotent(self) -> None:
        """Test identical inputs give identical output."""
        config = _config(default_revision=2)
        contents = 'VERSION = "3.4.5"'

        first = compute_next_version("3.4.5-7", config, contents)
        second = compute_next_version("3.4.5-7", config, contents)

        assert first == second == "3.4.5-8"

    def test_logs_each_step(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test informational logs are emitted for every decision step."""
        with caplog.at_level(logging.INFO, logger="upstream_version"):
            compute_next_version("3.3.0", _config(default_revision=7), 'VERSION = "3.4.5"')

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert messages == [
            "Normalized latest version 3.3.0 to 3.3.0",
            "Extracted upstream version from source file: 3.4.5",
            "Normalized upstream version 3.4.5 to 3.4.5",
            "Determined increment version (minor), bumping from 3.3.0 to 3.4.5-7",
        ]


@pytest.mark.unit
class TestResolve:
    """Tests for resolve_next_version and resolve_upstream_version."""

    def test_resolve_next_version_reads_file(self, tmp_path: Path) -> None:
        """Test the version file is read and fed to the decision."""
        version_file = tmp_path / "version.h"
        version_file.write_text('#pragma once\nVERSION = "3.4.5"\n', encoding="utf-8")

        result = resolve_next_version("3.4.5-1", _config(version_file=version_file))

        assert result == "3.4.5-2"

    def test_missing_file_propagates_os_error(self, tmp_path: Path) -> None:
        """Test read failures propagate as the original OSError."""
        config = _config(version_file=tmp_path / "missing.h")

        with pytest.raises(FileNotFoundError):
            resolve_next_version("1.0.0", config)

    def test_missing_version_file_raises(self) -> None:
        """Test an unset version file raises MissingConfigurationError."""
        with pytest.raises(MissingConfigurationError) as exc_info:
            resolve_next_version("1.0.0", _config(version_file=None))

        assert exc_info.value.option == "version_file"

    def test_resolve_upstream_version(self, tmp_path: Path) -> None:
        """Test the normalized upstream version is returned."""
        version_file = tmp_path / "version.h"
        version_file.write_text('VERSION = "v2.1"\n', encoding="utf-8")

        result = resolve_upstream_version(_config(version_file=version_file))

        assert result == Version(2, 1, 0)

    def test_resolve_upstream_version_allows_prerelease(self, tmp_path: Path) -> None:
        """Test extraction alone does not reject pre-releases."""
        version_file = tmp_path / "version.h"
        version_file.write_text('VERSION = "2.1.0-rc.1"\n', encoding="utf-8")

        result = resolve_upstream_version(_config(version_file=version_file))

        assert result.is_prerelease

    def test_resolve_next_version_validates_once(self, tmp_path: Path) -> None:
        """Test the configuration is checked a single time per resolution."""
        version_file = tmp_path / "version.h"
        version_file.write_text('VERSION = "3.4.5"\n', encoding="utf-8")
        config = _config(version_file=version_file)

        with patch.object(config, "validate", wraps=config.validate) as mock_validate:
            result = resolve_next_version("3.4.5-1", config)

        assert result == "3.4.5-2"
        mock_validate.assert_called_once_with()

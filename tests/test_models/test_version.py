from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
import semver

from upstream_version.models.version import Version, parse_identifiers


@pytest.mark.unit
class TestParseIdentifiers:
    """Tests for parse_identifiers helper."""

    def test_empty_string_gives_empty_tuple(self) -> None:
        """Test an empty pre-release yields no identifiers."""
        assert parse_identifiers("") == ()

    def test_numeric_identifiers_become_ints(self) -> None:
        """Test numeric identifiers are typed as int."""
        assert parse_identifiers("rc.1") == ("rc", 1)
        assert parse_identifiers("0.3.7") == (0, 3, 7)

    def test_alphanumeric_with_digits_stays_string(self) -> None:
        """Test identifiers mixing letters and digits remain strings."""
        assert parse_identifiers("beta1.x-y") == ("beta1", "x-y")


@pytest.mark.unit
class TestVersion:
    """Tests for the Version value type."""

    def test_str_final_release(self) -> None:
        """Test a final release renders as major.minor.patch."""
        assert str(Version(1, 2, 3)) == "1.2.3"

    def test_str_prerelease(self) -> None:
        """Test pre-release identifiers are joined with dots."""
        assert str(Version(1, 2, 3, ("rc", 1))) == "1.2.3-rc.1"

    def test_prerelease_is_stored_as_tuple(self) -> None:
        """Test a list of identifiers is converted to a tuple."""
        version = Version(1, 0, 0, ["alpha", 2])  # type: ignore[arg-type]
        assert version.prerelease == ("alpha", 2)

    def test_negative_component_rejected(self) -> None:
        """Test components must be non-negative."""
        with pytest.raises(ValueError, match="minor"):
            Version(1, -1, 0)

    def test_is_frozen(self) -> None:
        """Test Version instances are immutable."""
        version = Version(1, 2, 3)
        with pytest.raises(FrozenInstanceError):
            version.major = 2  # type: ignore[misc]

    def test_accessors(self) -> None:
        """Test core, is_prerelease and prerelease_string."""
        version = Version(3, 4, 5, (7,))

        assert version.core == (3, 4, 5)
        assert version.is_prerelease is True
        assert version.prerelease_string == "7"
        assert Version(3, 4, 5).is_prerelease is False

    def test_equality_includes_prerelease(self) -> None:
        """Test versions differing only in pre-release are not equal."""
        assert Version(1, 2, 3) == Version(1, 2, 3)
        assert Version(1, 2, 3) != Version(1, 2, 3, (1,))

    def test_prerelease_orders_before_final(self) -> None:
        """Test a pre-release sorts before the corresponding final release."""
        assert Version(1, 0, 0, ("rc", 1)) < Version(1, 0, 0)
        assert Version(1, 0, 0) > Version(1, 0, 0, (0,))

    def test_numeric_identifier_orders_before_alphanumeric(self) -> None:
        """Test numeric identifiers have lower precedence than alphanumeric."""
        assert Version(1, 0, 0, (1,)) < Version(1, 0, 0, ("alpha",))

    def test_sorting(self) -> None:
        """Test sorting follows semantic versioning precedence."""
        versions = [
            Version(2, 0, 0),
            Version(1, 0, 0),
            Version(1, 0, 0, ("alpha",)),
            Version(1, 0, 0, ("alpha", 1)),
            Version(1, 10, 0),
            Version(1, 2, 0),
        ]

        assert [str(v) for v in sorted(versions)] == [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0",
            "1.2.0",
            "1.10.0",
            "2.0.0",
        ]

    def test_compare(self) -> None:
        """Test compare returns -1, 0 or 1."""
        assert Version(1, 0, 0).compare(Version(1, 0, 1)) == -1
        assert Version(1, 0, 0).compare(Version(1, 0, 0)) == 0
        assert Version(1, 1, 0).compare(Version(1, 0, 9)) == 1

    def test_from_semver_discards_build(self) -> None:
        """Test conversion from semver drops build metadata."""
        parsed = semver.Version.parse("1.2.3-rc.1+build.5")

        assert Version.from_semver(parsed) == Version(1, 2, 3, ("rc", 1))

    def test_to_semver(self) -> None:
        """Test conversion to semver keeps all fields."""
        converted = Version(1, 2, 3, ("rc", 1)).to_semver()

        assert str(converted) == "1.2.3-rc.1"


@pytest.mark.unit
class TestVersionDerivation:
    """Tests for bump_prerelease, with_prerelease and with_revision."""

    @pytest.mark.parametrize(
        "prerelease,expected",
        [
            ((7,), "3.4.5-8"),
            ((0,), "3.4.5-1"),
            (("beta",), "3.4.5-beta.0"),
            (("beta1",), "3.4.5-beta1.0"),
            (("rc", 1), "3.4.5-rc.2"),
            (("rc", 1, "x"), "3.4.5-rc.2.x"),
            ((), "3.4.5-0"),
        ],
        ids=["numeric", "zero", "alpha", "alnum", "dotted", "inner", "final"],
    )
    def test_bump_prerelease(self, prerelease: tuple, expected: str) -> None:
        """Test the right-most numeric identifier is incremented."""
        assert str(Version(3, 4, 5, prerelease).bump_prerelease()) == expected

    def test_bump_prerelease_returns_new_instance(self) -> None:
        """Test bumping leaves the original untouched."""
        original = Version(3, 4, 5, (7,))
        original.bump_prerelease()

        assert original == Version(3, 4, 5, (7,))

    def test_with_revision(self) -> None:
        """Test with_revision replaces any pre-release."""
        assert str(Version(3, 4, 5).with_revision(7)) == "3.4.5-7"
        assert str(Version(3, 4, 5, ("rc",)).with_revision(1)) == "3.4.5-1"

    def test_with_prerelease(self) -> None:
        """Test with_prerelease keeps the numeric core."""
        assert Version(1, 2, 3).with_prerelease(["a", 1]) == Version(1, 2, 3, ("a", 1))

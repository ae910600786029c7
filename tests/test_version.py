"""
Tests for debmeta.versioning.version module.

Tests version parsing and comparison including:
- Epoch / upstream / revision splitting
- Malformed input and error kinds
- dpkg run-by-run ordering (tilde, letters, punctuation, digits)
- Rich comparisons on Version
"""

from __future__ import annotations

import pytest

from debmeta.exceptions import MalformedVersion, VersionErrorKind
from debmeta.versioning import (
    Version,
    compare_strings,
    compare_versions,
    parse_version,
)


class TestParseVersion:
    """Tests for parse_version()."""

    def test_full_version(self):
        """Test epoch, upstream and revision are split out."""
        v = parse_version("1:2.10-1")

        assert v.epoch == 1
        assert v.upstream_version == "2.10"
        assert v.revision == "1"
        assert not v.native

    def test_native_version(self):
        """Test a version without revision is native with epoch 0."""
        v = parse_version("2.10")

        assert v == Version(epoch=0, upstream_version="2.10")
        assert v.native

    def test_revision_split_on_last_hyphen(self):
        """Test upstream versions may contain hyphens."""
        v = parse_version("1.0-beta-2")

        assert v.upstream_version == "1.0-beta"
        assert v.revision == "2"

    def test_epoch_split_on_first_colon(self):
        """Test upstream versions may contain colons when an epoch is given."""
        v = parse_version("1:2:3-4")

        assert v.epoch == 1
        assert v.upstream_version == "2:3"
        assert v.revision == "4"

    def test_surrounding_whitespace_is_trimmed(self):
        """Test leading and trailing whitespace is ignored."""
        assert parse_version("  1.0-1\n") == parse_version("1.0-1")

    def test_classmethod_parse(self):
        """Test Version.parse is equivalent to parse_version."""
        assert Version.parse("3:1.2~rc1-0ubuntu1") == parse_version(
            "3:1.2~rc1-0ubuntu1"
        )

    @pytest.mark.parametrize(
        "text",
        ["1.0", "1:2.10-1", "0.1~rc1", "2.0+dfsg-1~bpo11+1", "0:2:3", "a1.0"],
    )
    def test_parse_of_rendering_is_identity(self, text):
        """Test parse(str(parse(s))) == parse(s)."""
        v = parse_version(text)
        assert parse_version(str(v)) == v

    def test_str_omits_zero_epoch(self):
        """Test epoch 0 is not rendered."""
        assert str(parse_version("0:1.0-1")) == "1.0-1"

    def test_str_keeps_zero_epoch_before_colon(self):
        """Test epoch 0 is kept when the upstream version contains a colon."""
        assert str(parse_version("0:2:3")) == "0:2:3"

    def test_permissive_by_default(self):
        """Test upstream versions may start with a letter by default."""
        assert parse_version("a1.0").upstream_version == "a1.0"

    def test_strict_requires_leading_digit(self):
        """Test strict mode rejects upstream versions not starting with a digit."""
        with pytest.raises(MalformedVersion) as exc_info:
            parse_version("a1.0", strict=True)

        assert exc_info.value.kind is VersionErrorKind.INVALID_CHARACTER

    @pytest.mark.parametrize(
        "text, kind",
        [
            ("", VersionErrorKind.EMPTY),
            ("   ", VersionErrorKind.EMPTY),
            ("1.0-", VersionErrorKind.EMPTY),
            ("-1", VersionErrorKind.EMPTY),
            ("1:", VersionErrorKind.EMPTY),
            ("1.0 beta", VersionErrorKind.EMBEDDED_WHITESPACE),
            ("1.0\t-1", VersionErrorKind.EMBEDDED_WHITESPACE),
            ("a:1.0", VersionErrorKind.BAD_EPOCH),
            (":1.0", VersionErrorKind.BAD_EPOCH),
            ("123456789:1.0", VersionErrorKind.BAD_EPOCH),
            ("1.0_1", VersionErrorKind.INVALID_CHARACTER),
            ("1.0-a_b", VersionErrorKind.INVALID_CHARACTER),
            ("1.0-1:2", VersionErrorKind.BAD_EPOCH),
            ("1." + "9" * 26, VersionErrorKind.OVERSIZED_DIGIT_RUN),
            ("1.0-" + "1" * 26, VersionErrorKind.OVERSIZED_DIGIT_RUN),
        ],
    )
    def test_malformed_versions(self, text, kind):
        """Test each malformed input reports the right kind."""
        with pytest.raises(MalformedVersion) as exc_info:
            parse_version(text)

        assert exc_info.value.kind is kind
        assert exc_info.value.value == text

    def test_malformed_version_is_value_error(self):
        """Test MalformedVersion can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_version("not a version")

    def test_longest_allowed_digit_run(self):
        """Test a 25-digit run is accepted."""
        assert parse_version("1." + "9" * 25).upstream_version == "1." + "9" * 25


class TestCompareVersions:
    """Tests for compare_versions() and compare_strings()."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("1:2.10-1", "1:2.9-2", 1),
            ("1.0~rc1", "1.0", -1),
            ("1.0~~", "1.0~", -1),
            ("2:0.1", "1:9.9", 1),
            ("1.0-1", "1.0-1~bpo1", 1),
            ("1.10", "1.9", 1),
            ("1.0a", "1.0", 1),
            ("1.0+1", "1.0a", 1),
            ("1.0.1", "1.0a", 1),
            ("a", "B", 1),
            ("1.0", "1.00", 0),
            ("1.0", "1.0-0", 0),
            ("0:1.0", "1.0", 0),
            ("1.001", "1.1", 0),
        ],
    )
    def test_pairs(self, a, b, expected):
        """Test known orderings."""
        assert compare_versions(a, b) == expected
        assert compare_versions(b, a) == -expected

    def test_epoch_dominates(self):
        """Test a higher epoch wins regardless of upstream and revision."""
        assert compare_versions("1:0.1-1", "0:99.99-99") == 1

    def test_ordered_list_is_strictly_increasing(self, ordered_versions):
        """Test every adjacent pair of the reference list is ordered."""
        for lower, higher in zip(ordered_versions, ordered_versions[1:]):
            assert compare_versions(lower, higher) == -1, (lower, higher)

    def test_comparison_is_antisymmetric(self, ordered_versions):
        """Test compare(a, b) == -compare(b, a) across the reference list."""
        for a in ordered_versions:
            for b in ordered_versions:
                assert compare_versions(a, b) == -compare_versions(b, a)

    def test_accepts_version_objects(self):
        """Test Version and str arguments can be mixed."""
        assert compare_versions(parse_version("1.0"), "1.1") == -1
        assert parse_version("1.1").compare("1.0") == 1

    def test_malformed_string_raises(self):
        """Test string arguments are parsed and validated."""
        with pytest.raises(MalformedVersion):
            compare_versions("1.0", "")

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("", "", 0),
            ("~", "", -1),
            ("", "a", -1),
            ("a", "+", -1),
            ("10", "9", 1),
            ("007", "7", 0),
            ("1a", "1", 1),
        ],
    )
    def test_compare_strings(self, a, b, expected):
        """Test the run algorithm on bare fields."""
        assert compare_strings(a, b) == expected


class TestVersionOrdering:
    """Tests for rich comparisons and sorting of Version objects."""

    def test_rich_comparisons(self):
        """Test <, <=, >, >= follow compare_versions."""
        low, high = parse_version("1.0~rc1"), parse_version("1.0")

        assert low < high
        assert low <= high
        assert high > low
        assert high >= low
        assert parse_version("1.0") <= parse_version("1.00")

    def test_equality_is_structural(self):
        """Test versions that compare equal may still be different values."""
        a, b = parse_version("1.0"), parse_version("1.00")

        assert compare_versions(a, b) == 0
        assert a != b

    def test_sorted_versions(self, ordered_versions):
        """Test sorted() on Version objects follows dpkg order."""
        shuffled = list(reversed(ordered_versions))

        result = sorted(parse_version(v) for v in shuffled)

        assert [str(v) for v in result] == ordered_versions

    def test_comparison_with_non_version_is_unsupported(self):
        """Test ordering against other types raises TypeError."""
        with pytest.raises(TypeError):
            parse_version("1.0") < "1.1"  # noqa: B015

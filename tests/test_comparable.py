"""
Tests for debmeta.versioning.keys module.

Tests the comparable string encoding including:
- Exact layout of a known version
- Plain string order agreeing with compare_versions
- Exact inversion, including leading zeros and equal-but-distinct spellings
- Rejection of strings that were not produced by the encoder
"""

from __future__ import annotations

import pytest

from debmeta.exceptions import MalformedVersion, VersionErrorKind
from debmeta.versioning import (
    Version,
    comparable_string,
    compare_versions,
    parse_version,
    version_from_comparable_string,
    version_key,
)


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _cmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


class TestComparableString:
    """Tests for comparable_string()."""

    def test_known_layout(self):
        """Test the encoding of a simple version byte for byte."""
        assert comparable_string(parse_version("1:2.10-1")) == "%b1#%b2}%c10#%b1#aaa"

    def test_method_matches_function(self):
        """Test Version.comparable_string() delegates to the encoder."""
        v = parse_version("1.0~rc1-2")
        assert v.comparable_string() == comparable_string(v)

    def test_output_is_ascii(self):
        """Test the encoding uses printable ASCII only."""
        encoded = comparable_string(parse_version("9:1.0~rc1+dfsg.2-0ubuntu1~22.04"))
        assert encoded.isascii()
        assert encoded.isprintable()

    def test_order_matches_compare(self, ordered_versions):
        """Test string order equals version order for every distinct pair."""
        encoded = {v: comparable_string(parse_version(v)) for v in ordered_versions}
        for a in ordered_versions:
            for b in ordered_versions:
                assert _cmp(encoded[a], encoded[b]) == _sign(compare_versions(a, b)), (
                    a,
                    b,
                )

    @pytest.mark.parametrize(
        "lower, higher",
        [
            ("1.0~", "1.0"),
            ("1.9", "1.10"),
            ("1.0", "1.0a"),
            ("1.0a", "1.0.0"),
            ("1.0", "1.0-1"),
            ("1.0-1", "1.0.0-1"),
            ("1.2.3", "1.2.3.0"),
            ("9:1", "10:0"),
            ("1." + "9" * 24, "1.1" + "0" * 24),
        ],
    )
    def test_known_pairs(self, lower, higher):
        """Test edge cases around run ends, field ends and digit lengths."""
        assert compare_versions(lower, higher) == -1
        assert version_key(lower) < version_key(higher)

    @pytest.mark.parametrize(
        "a, b",
        [("1.0", "1.00"), ("1.0", "1.0-0"), ("1.01", "1.1"), ("0:1.0", "1.0-00")],
    )
    def test_equal_versions_differ_only_in_trailer(self, a, b):
        """Test equal-but-distinct spellings share everything but the trailer."""
        va, vb = parse_version(a), parse_version(b)
        ea, eb = comparable_string(va), comparable_string(vb)

        assert compare_versions(va, vb) == 0
        assert ea != eb
        assert ea[: ea.rindex("#") + 1] == eb[: eb.rindex("#") + 1]

    def test_key_orders_equal_versions_consistently(self):
        """Test equal versions still get one fixed order, whatever the input order."""
        forward = sorted(["1.0", "1.00", "1.0-0"], key=version_key)
        backward = sorted(["1.0-0", "1.00", "1.0"], key=version_key)

        assert forward == backward
        assert len({version_key(v) for v in forward}) == 3

    def test_sorting_with_version_key(self, ordered_versions):
        """Test version_key sorts strings in dpkg order."""
        shuffled = ordered_versions[::2] + ordered_versions[1::2]
        assert sorted(shuffled, key=version_key) == ordered_versions

    def test_version_key_accepts_version(self):
        """Test version_key works on Version objects as well."""
        v = parse_version("1.0-1")
        assert version_key(v) == version_key("1.0-1")


class TestVersionFromComparableString:
    """Tests for version_from_comparable_string()."""

    @pytest.mark.parametrize(
        "text",
        [
            "1.0~rc1",
            "1:2.10-1",
            "2:0",
            "1.00",
            "1.0-0",
            "007:0.0.1-00",
            "0:2:3",
            "1.0-beta-2",
            "A.b+C~d",
            "1." + "0" * 25,
        ],
    )
    def test_round_trip(self, text):
        """Test decode(encode(v)) == v, including leading zeros."""
        v = parse_version(text)
        assert version_from_comparable_string(comparable_string(v)) == v

    def test_round_trip_reference_list(self, ordered_versions):
        """Test every reference version survives encoding."""
        for text in ordered_versions:
            v = parse_version(text)
            assert version_from_comparable_string(comparable_string(v)) == v

    def test_classmethod(self):
        """Test Version.from_comparable_string decodes."""
        assert Version.from_comparable_string("%b1#%b2}%c10#%b1#aaa") == Version(
            epoch=1, upstream_version="2.10", revision="1"
        )

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "garbage",
            "%b1#%b2#%a#a",  # trailer too short
            "%b1#%b2#%a#aaz",  # trailing data
            "%b0#%b2#%a#aa",  # leading zero in a digit run
            "%a#%a#%a#aa",  # empty upstream version
            "%b1#%b2#%a#a%",  # bad leading-zero count
            "x%b1#%b2#%a#aa",  # epoch with letters
        ],
    )
    def test_rejects_foreign_strings(self, text):
        """Test strings not produced by the encoder are rejected."""
        with pytest.raises(MalformedVersion) as exc_info:
            version_from_comparable_string(text)

        assert exc_info.value.kind is VersionErrorKind.INVALID_ENCODING

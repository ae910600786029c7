# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Debian package version parsing and comparison.

This module is format-agnostic: it does NOT read control files or archives.
It only parses version strings of the form::

    [epoch ":"] upstream_version ["-" revision]

and compares them with the ordering used by dpkg. Within upstream_version
and revision the strings are compared run by run:

- Non-digit runs are compared character by character. ``~`` sorts before
  everything, including the end of the run; letters sort in ASCII order;
  every other character sorts after all letters.
- Digit runs are compared numerically (leading zeros are ignored).

Example:
    Parse and compare:
        ```python
        from debmeta.versioning import compare_versions, parse_version

        v = parse_version("1:2.10-1")
        print(v.epoch, v.upstream_version, v.revision)  # 1 2.10 1
        compare_versions(v, "1:2.9-2")  # 1
        compare_versions("1.0~rc1", "1.0")  # -1
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from debmeta.exceptions import MalformedVersion, VersionErrorKind

__all__ = [
    "MAX_DIGIT_RUN",
    "MAX_EPOCH_DIGITS",
    "Version",
    "compare_strings",
    "compare_versions",
    "parse_version",
]

MAX_EPOCH_DIGITS = 8
MAX_DIGIT_RUN = 25

_EPOCH_RE = re.compile(r"^[0-9]+$")
_UPSTREAM_RE = re.compile(r"^[A-Za-z0-9.+\-:~]+$")
_REVISION_RE = re.compile(r"^[A-Za-z0-9.+~]+$")
_DIGIT_RUN_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Version:
    """A parsed Debian package version.

    Equality is structural: ``1.0`` and ``1.00`` are different values even
    though they compare equal. The ordering operators use compare_versions().

    Attributes:
        epoch: Non-negative ordering override (0 when omitted).
        upstream_version: Version assigned by the original authors.
        revision: Packaging revision; empty for native versions.

    """

    epoch: int
    upstream_version: str
    revision: str = ""

    @classmethod
    def parse(cls, text: str, *, strict: bool = False) -> Version:
        """Parse a version string. See parse_version()."""
        return parse_version(text, strict=strict)

    @classmethod
    def from_comparable_string(cls, text: str) -> Version:
        """Decode the output of comparable_string()."""
        from debmeta.versioning.keys import version_from_comparable_string

        return version_from_comparable_string(text)

    @property
    def native(self) -> bool:
        """True when the version carries no packaging revision."""
        return self.revision == ""

    def comparable_string(self) -> str:
        """Return a string whose plain ordering matches compare_versions()."""
        from debmeta.versioning.keys import comparable_string

        return comparable_string(self)

    def compare(self, other: Version | str) -> int:
        return compare_versions(self, other)

    def __str__(self) -> str:
        text = self.upstream_version
        # A colon in upstream_version needs an explicit epoch to re-parse
        if self.epoch or ":" in text:
            text = f"{self.epoch}:{text}"
        if self.revision:
            text = f"{text}-{self.revision}"
        return text

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) >= 0


# ----------------------------
# Parsing
# ----------------------------


def _check_digit_runs(field: str, text: str) -> None:
    for run in _DIGIT_RUN_RE.findall(field):
        if len(run) > MAX_DIGIT_RUN:
            raise MalformedVersion(
                f"digit run of {len(run)} digits exceeds {MAX_DIGIT_RUN} in {text!r}",
                kind=VersionErrorKind.OVERSIZED_DIGIT_RUN,
                value=text,
            )


def _parse_epoch(raw: str, text: str) -> int:
    if not _EPOCH_RE.match(raw) or len(raw) > MAX_EPOCH_DIGITS:
        raise MalformedVersion(
            f"epoch must be 1-{MAX_EPOCH_DIGITS} decimal digits in {text!r}",
            kind=VersionErrorKind.BAD_EPOCH,
            value=text,
        )
    return int(raw)


def parse_version(text: str, *, strict: bool = False) -> Version:
    """Parse a Debian version string.

    Surrounding whitespace is ignored. The epoch is split off at the first
    ``:`` and the revision at the last ``-``.

    Args:
        text: The version string, e.g. ``"1:2.10-1"``.
        strict: If True, additionally require the upstream version to start
            with a digit. Default is False (permissive, as found in foreign
            repositories).

    Returns:
        The parsed Version.

    Raises:
        MalformedVersion: With kind EMPTY, EMBEDDED_WHITESPACE, BAD_EPOCH,
            INVALID_CHARACTER or OVERSIZED_DIGIT_RUN.

    """
    stripped = text.strip()
    if not stripped:
        raise MalformedVersion(
            "version string is empty", kind=VersionErrorKind.EMPTY, value=text
        )
    if any(ch.isspace() for ch in stripped):
        raise MalformedVersion(
            f"version string contains whitespace: {text!r}",
            kind=VersionErrorKind.EMBEDDED_WHITESPACE,
            value=text,
        )

    epoch = 0
    rest = stripped
    if ":" in stripped:
        raw_epoch, rest = stripped.split(":", 1)
        epoch = _parse_epoch(raw_epoch, text)

    upstream, sep, revision = rest.rpartition("-")
    if not sep:
        upstream, revision = rest, ""
    elif not revision:
        raise MalformedVersion(
            f"revision is empty in {text!r}", kind=VersionErrorKind.EMPTY, value=text
        )

    if not upstream:
        raise MalformedVersion(
            f"upstream version is empty in {text!r}",
            kind=VersionErrorKind.EMPTY,
            value=text,
        )
    if not _UPSTREAM_RE.match(upstream):
        raise MalformedVersion(
            f"invalid character in upstream version {upstream!r}",
            kind=VersionErrorKind.INVALID_CHARACTER,
            value=text,
        )
    if revision and not _REVISION_RE.match(revision):
        raise MalformedVersion(
            f"invalid character in revision {revision!r}",
            kind=VersionErrorKind.INVALID_CHARACTER,
            value=text,
        )
    if strict and not upstream[0].isdigit():
        raise MalformedVersion(
            f"upstream version must start with a digit: {upstream!r}",
            kind=VersionErrorKind.INVALID_CHARACTER,
            value=text,
        )

    _check_digit_runs(upstream, text)
    _check_digit_runs(revision, text)

    return Version(epoch=epoch, upstream_version=upstream, revision=revision)


# ----------------------------
# Comparison
# ----------------------------


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _order(s: str, i: int) -> int:
    """Sort weight of s[i]; digits and the end of the string weigh 0."""
    if i >= len(s):
        return 0
    ch = s[i]
    if _is_digit(ch):
        return 0
    if ch == "~":
        return -1
    if ch.isascii() and ch.isalpha():
        return ord(ch)
    return ord(ch) + 256


def compare_strings(a: str, b: str) -> int:
    """Compare two upstream versions or revisions.

    Returns -1 if a < b, 0 if equal, 1 if a > b.
    """
    i, j = 0, 0
    len_a, len_b = len(a), len(b)

    while i < len_a or j < len_b:
        # Non-digit run, position by position
        while (i < len_a and not _is_digit(a[i])) or (
            j < len_b and not _is_digit(b[j])
        ):
            ac, bc = _order(a, i), _order(b, j)
            if ac != bc:
                return -1 if ac < bc else 1
            i += 1
            j += 1

        while i < len_a and a[i] == "0":
            i += 1
        while j < len_b and b[j] == "0":
            j += 1

        # Digit run; the longer run wins, else the first differing digit
        first_diff = 0
        while i < len_a and _is_digit(a[i]) and j < len_b and _is_digit(b[j]):
            if not first_diff:
                first_diff = ord(a[i]) - ord(b[j])
            i += 1
            j += 1
        if i < len_a and _is_digit(a[i]):
            return 1
        if j < len_b and _is_digit(b[j]):
            return -1
        if first_diff:
            return -1 if first_diff < 0 else 1

    return 0


def _coerce(value: Version | str) -> Version:
    if isinstance(value, Version):
        return value
    return parse_version(value)


def compare_versions(a: Version | str, b: Version | str) -> int:
    """Compare two versions with dpkg semantics.

    Strings are parsed with parse_version() first, so malformed strings
    raise MalformedVersion.

    Returns:
        -1 if a sorts before b, 0 if they are equal, 1 if a sorts after b.

    Example:
        ```python
        compare_versions("2:1.0", "1:9.9")  # 1
        compare_versions("1.0-1", "1.0-1~bpo1")  # 1
        ```

    """
    va, vb = _coerce(a), _coerce(b)
    if va.epoch != vb.epoch:
        return -1 if va.epoch < vb.epoch else 1
    result = compare_strings(va.upstream_version, vb.upstream_version)
    if result:
        return result
    return compare_strings(va.revision, vb.revision)

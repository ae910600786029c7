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

"""Order-preserving string keys for Debian versions.

comparable_string() turns a Version into a plain ASCII string whose ordinary
lexicographic ordering matches compare_versions(). This allows versions to
be sorted or indexed by stores that only know byte ordering (SQL text
columns, key-value stores, ``sorted()`` without a key function).

Encoding
--------
Each field (epoch, upstream_version, revision) is split into chunks of
(non-digit run, digit run). The first chunk always exists and may have an
empty non-digit run; later chunks always start with a non-digit character.
A chunk is written as:

    <non-digit characters> "%" <length byte> <significant digits>

- ``~`` is written as ``!`` (below every other byte used).
- Letters are written verbatim.
- ``+ - . :`` are written as ``{ | } ~`` (above all letters, same order).
- ``%`` ends the non-digit run; it sorts above ``!`` and ``#`` and below
  letters and every length byte.
- The length byte is ``chr(ord("a") + n)`` where n is the number of digits
  left after stripping leading zeros (0-25).

Every field is closed with ``#``, which sorts above ``!`` and below letters,
exactly like the end of a string in the run comparison. The epoch is a
single digit-only chunk.

After the last field a trailer holds, for every upstream and revision chunk,
the number of leading zeros that were stripped (same ``a``-based byte). It
only matters when two versions compare equal but are spelled differently
(``1.0`` and ``1.00``, ``1.0`` and ``1.0-0``) and makes the encoding exactly
invertible.

Byte order therefore refines compare_versions(): where the comparison is
non-zero the strings sort the same way, and versions that compare equal get
distinct strings that differ only in the trailer. Equal comparable strings
mean identical spelling, not just equal versions.

Example:
    ```python
    from debmeta.versioning import parse_version
    from debmeta.versioning.keys import comparable_string, version_key

    comparable_string(parse_version("1:2.10-1"))  # '%b1#%b2}%c10#%b1#aaa'
    sorted(["1.0", "1.0~rc1", "0.9"], key=version_key)
    # ['0.9', '1.0~rc1', '1.0']
    ```
"""

from __future__ import annotations

import re

from debmeta.exceptions import MalformedVersion, VersionErrorKind
from debmeta.versioning.version import MAX_DIGIT_RUN, Version, parse_version

__all__ = [
    "comparable_string",
    "version_from_comparable_string",
    "version_key",
]

_TILDE = "!"
_FIELD_END = "#"
_RUN_END = "%"
_LENGTH_BASE = ord("a")

_ENCODE_CHAR = {"~": _TILDE, "+": "{", "-": "|", ".": "}", ":": "~"}
_DECODE_CHAR = {v: k for k, v in _ENCODE_CHAR.items()}

_CHUNK_RE = re.compile(r"([^0-9]*)([0-9]*)")


def _chunks(field: str) -> list[tuple[str, str]]:
    """Split a field into (non-digit run, digit run) pairs, at least one."""
    pairs = [(t, d) for t, d in _CHUNK_RE.findall(field) if t or d]
    return pairs or [("", "")]


def _length_byte(n: int) -> str:
    return chr(_LENGTH_BASE + n)


def _encode_chunk(text: str, digits: str) -> str:
    significant = digits.lstrip("0")
    encoded = "".join(_ENCODE_CHAR.get(ch, ch) for ch in text)
    return f"{encoded}{_RUN_END}{_length_byte(len(significant))}{significant}"


def comparable_string(version: Version) -> str:
    """Encode a version so that plain string ordering follows dpkg ordering.

    Args:
        version: A Version produced by parse_version().

    Returns:
        ASCII string; see the module docstring for the layout.

    """
    upstream = _chunks(version.upstream_version)
    revision = _chunks(version.revision)

    parts = [_encode_chunk("", str(version.epoch)), _FIELD_END]
    for chunks in (upstream, revision):
        parts.extend(_encode_chunk(text, digits) for text, digits in chunks)
        parts.append(_FIELD_END)
    for _, digits in upstream + revision:
        parts.append(_length_byte(len(digits) - len(digits.lstrip("0"))))
    return "".join(parts)


def version_key(value: Version | str) -> str:
    """Sort key for versions or version strings.

    Example:
        ```python
        sorted(["1:0.1", "2.0", "1.0-1"], key=version_key)
        # ['1.0-1', '2.0', '1:0.1']
        ```
    """
    if not isinstance(value, Version):
        value = parse_version(value)
    return comparable_string(value)


# ----------------------------
# Decoding
# ----------------------------


class _Reader:
    """Cursor over an encoded string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, reason: str) -> MalformedVersion:
        return MalformedVersion(
            f"invalid comparable string {self.text!r} at offset {self.pos}: {reason}",
            kind=VersionErrorKind.INVALID_ENCODING,
            value=self.text,
        )

    def peek(self) -> str:
        if self.pos >= len(self.text):
            raise self.fail("unexpected end of input")
        return self.text[self.pos]

    def take(self) -> str:
        ch = self.peek()
        self.pos += 1
        return ch

    def expect(self, ch: str) -> None:
        if self.take() != ch:
            self.pos -= 1
            raise self.fail(f"expected {ch!r}")

    def count(self) -> int:
        n = ord(self.take()) - _LENGTH_BASE
        if not 0 <= n <= MAX_DIGIT_RUN:
            self.pos -= 1
            raise self.fail("bad length byte")
        return n

    def digits(self, n: int) -> str:
        out = self.text[self.pos : self.pos + n]
        if len(out) != n or not all("0" <= ch <= "9" for ch in out):
            raise self.fail("bad digit run")
        if out.startswith("0"):
            raise self.fail("digit run has a leading zero")
        self.pos += n
        return out

    def chunk(self, first: bool) -> tuple[str, str]:
        text = []
        while self.peek() != _RUN_END:
            ch = self.take()
            if ch in _DECODE_CHAR:
                text.append(_DECODE_CHAR[ch])
            elif ch.isascii() and ch.isalpha():
                text.append(ch)
            else:
                self.pos -= 1
                raise self.fail(f"unexpected byte {ch!r}")
        if not text and not first:
            raise self.fail("empty non-digit run")
        self.expect(_RUN_END)
        return "".join(text), self.digits(self.count())

    def field(self) -> list[tuple[str, str]]:
        chunks = [self.chunk(first=True)]
        while self.peek() != _FIELD_END:
            chunks.append(self.chunk(first=False))
        self.expect(_FIELD_END)
        return chunks


def version_from_comparable_string(text: str) -> Version:
    """Decode the output of comparable_string().

    Raises:
        MalformedVersion: With kind INVALID_ENCODING when text was not
            produced by comparable_string().

    """
    reader = _Reader(text)
    epoch_text, epoch_digits = reader.chunk(first=True)
    if epoch_text:
        raise reader.fail("epoch contains non-digits")
    reader.expect(_FIELD_END)
    upstream = reader.field()
    revision = reader.field()

    fields = []
    for chunks in (upstream, revision):
        pieces = []
        for chunk_text, significant in chunks:
            zeros = reader.count()
            pieces.append(chunk_text + "0" * zeros + significant)
        fields.append("".join(pieces))
    if reader.pos != len(text):
        raise reader.fail("trailing data")

    version = Version(
        epoch=int(epoch_digits or "0"),
        upstream_version=fields[0],
        revision=fields[1],
    )
    # The rendered text must parse back to the same value
    try:
        reparsed = parse_version(str(version))
    except MalformedVersion as err:
        raise reader.fail(f"decodes to an invalid version: {err}") from err
    if reparsed != version:
        raise reader.fail(f"decodes ambiguously to {str(version)!r}")
    return version

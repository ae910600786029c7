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

"""RFC 2822-style paragraphs as used by debian/control files.

A paragraph is a block of ``Field: value`` lines. Paragraphs are separated
by blank lines. A line starting with a space or tab continues the previous
field; continuation lines are joined with ``\\n`` and a lone `` .`` stands
for an empty line. Lines starting with ``#`` are comments.
format_paragraphs() writes paragraphs back in the same syntax.

Example:
    ```python
    from debmeta.control.paragraph import parse_paragraphs

    text = "Source: hello\\nBuild-Depends: debhelper-compat (= 13),\\n libfoo-dev\\n"
    (para,) = parse_paragraphs(text)
    para["build-depends"]  # 'debhelper-compat (= 13),\\nlibfoo-dev'
    para.order  # ['Source', 'Build-Depends']
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from debmeta.exceptions import MalformedParagraph

__all__ = ["Paragraph", "format_paragraph", "format_paragraphs", "parse_paragraphs"]


class Paragraph(Mapping[str, str]):
    """Read-only field mapping with case-insensitive lookup.

    Keys keep their original spelling in iteration and ``order``.
    """

    def __init__(self, fields: Iterable[tuple[str, str]] = ()) -> None:
        self._fields: dict[str, tuple[str, str]] = {}
        for key, value in fields:
            folded = key.lower()
            if folded in self._fields:
                raise MalformedParagraph(f"duplicate field {key!r}")
            self._fields[folded] = (key, value)

    @property
    def order(self) -> list[str]:
        return [key for key, _ in self._fields.values()]

    def __getitem__(self, key: str) -> str:
        return self._fields[key.lower()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.order)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Paragraph({dict(self.items())!r})"


def parse_paragraphs(text: str) -> list[Paragraph]:
    """Split text into paragraphs.

    Args:
        text: Full file contents.

    Returns:
        Paragraphs in file order; blank input yields an empty list.

    Raises:
        MalformedParagraph: For a line that is neither a field, a
            continuation, a comment nor blank, for a continuation line with
            no field before it, and for duplicate fields.

    """
    paragraphs: list[Paragraph] = []
    current: list[tuple[str, list[str]]] = []

    def flush() -> None:
        if current:
            paragraphs.append(
                Paragraph((key, "\n".join(lines).strip()) for key, lines in current)
            )
            current.clear()

    for lineno, raw in enumerate(text.splitlines(), start=1):
        if raw.startswith("#"):
            continue
        if not raw.strip():
            flush()
            continue

        if raw[0] in " \t":
            if not current:
                raise MalformedParagraph(
                    f"line {lineno}: continuation line without a field"
                )
            line = raw.strip()
            # " ." stands for an empty line inside a folded value
            current[-1][1].append("" if line == "." else line)
            continue

        key, sep, value = raw.partition(":")
        key = key.strip()
        if not sep or not key or any(ch.isspace() for ch in key):
            raise MalformedParagraph(f"line {lineno}: expected 'Field: value': {raw!r}")
        current.append((key, [value.strip()]))

    flush()
    return paragraphs


def format_paragraph(paragraph: Mapping[str, str]) -> str:
    """Render one paragraph, the inverse of parse_paragraphs().

    Multi-line values are folded with a leading space; empty lines inside a
    value are written as `` .``.

    Raises:
        ValueError: For keys that could not be parsed back (empty, containing
            whitespace or ``:``, or starting with ``#``).

    """
    lines = []
    for key, value in paragraph.items():
        bad_char = any(ch.isspace() or ch == ":" for ch in key)
        if not key or key.startswith("#") or bad_char:
            raise ValueError(f"cannot write field name {key!r}")
        first, *rest = value.strip().split("\n")
        lines.append(f"{key}: {first.strip()}".rstrip())
        for line in rest:
            lines.append(f" {line.strip() or '.'}")
    return "\n".join(lines) + "\n"


def format_paragraphs(paragraphs: Iterable[Mapping[str, str]]) -> str:
    """Render paragraphs separated by blank lines.

    Example:
        ```python
        text = format_paragraphs(parse_paragraphs(original))
        parse_paragraphs(text) == parse_paragraphs(original)  # True
        ```
    """
    return "\n".join(format_paragraph(p) for p in paragraphs)

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

"""Declarative field schemas for paragraph records.

A record type lists its fields as FieldSpec entries with field_schema();
decode_paragraph() then turns a Paragraph into keyword arguments for the
record. Missing optional fields are decoded as if their value were empty,
so every parser must accept ``""``.

Example:
    ```python
    from dataclasses import dataclass
    from debmeta.control.schema import FieldSpec, field_schema, parse_list

    @field_schema(
        FieldSpec("Package", required=True),
        FieldSpec("Uploaders", parse_list),
    )
    @dataclass(frozen=True)
    class Record:
        package: str
        uploaders: tuple[str, ...]
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from debmeta.control.paragraph import Paragraph
from debmeta.exceptions import DebMetaError, MalformedParagraph

__all__ = [
    "FieldSpec",
    "decode_paragraph",
    "encode_record",
    "field_schema",
    "format_bool",
    "format_lines",
    "format_list",
    "format_words",
    "parse_bool",
    "parse_lines",
    "parse_list",
    "parse_text",
]

T = TypeVar("T")


def parse_text(value: str) -> str:
    return value


def parse_list(value: str) -> tuple[str, ...]:
    """Comma-separated list, as in Uploaders."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_bool(value: str) -> bool:
    """``yes``/``no`` flags such as Essential; empty means no."""
    lowered = value.strip().lower()
    if lowered in ("", "no"):
        return False
    if lowered == "yes":
        return True
    raise ValueError(f"expected 'yes' or 'no', got {value!r}")


def parse_lines(value: str) -> tuple[str, ...]:
    """One entry per non-empty line, as in Files or Checksums-Sha256."""
    return tuple(line.strip() for line in value.splitlines() if line.strip())


def format_list(values: Iterable[Any]) -> str:
    return ", ".join(str(v) for v in values)


def format_words(values: Iterable[Any]) -> str:
    return " ".join(str(v) for v in values)


def format_lines(values: Iterable[Any]) -> str:
    return "\n".join(str(v) for v in values)


def format_bool(value: bool) -> str:
    return "yes" if value else "no"


_DEFAULT_FORMATTERS: dict[Callable[[str], Any], Callable[[Any], str]] = {
    parse_list: format_list,
    parse_lines: format_lines,
    parse_bool: format_bool,
}


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record.

    Attributes:
        key: Field name as written in the file (matched case-insensitively).
        parser: Converts the raw value; also called with "" when the field
            is missing and optional.
        required: If True, a missing field is an error.
        formatter: Renders a parsed value back to field text. Defaults to
            the counterpart of the list, line and yes/no parsers, else str.

    """

    key: str
    parser: Callable[[str], Any] = parse_text
    required: bool = False
    formatter: Callable[[Any], str] | None = None

    @property
    def attr(self) -> str:
        """Python attribute name, e.g. "Build-Depends" -> "build_depends"."""
        return self.key.lower().replace("-", "_")

    def format(self, value: Any) -> str:
        formatter = self.formatter or _DEFAULT_FORMATTERS.get(self.parser, str)
        return formatter(value)


def field_schema(*specs: FieldSpec) -> Callable[[type[T]], type[T]]:
    """Class decorator attaching ``specs`` as the record's ``schema``."""

    def decorate(cls: type[T]) -> type[T]:
        cls.schema = tuple(specs)  # type: ignore[attr-defined]
        return cls

    return decorate


def decode_paragraph(
    paragraph: Paragraph, schema: tuple[FieldSpec, ...]
) -> dict[str, Any]:
    """Parse every schema field of a paragraph.

    Returns:
        Mapping of attribute name to parsed value.

    Raises:
        MalformedParagraph: When a required field is missing or a value
            does not parse. The underlying error is chained.

    """
    decoded: dict[str, Any] = {}
    for spec in schema:
        raw = paragraph.get(spec.key)
        if raw is None and spec.required:
            raise MalformedParagraph(f"missing required field {spec.key!r}")
        try:
            decoded[spec.attr] = spec.parser(raw or "")
        except (DebMetaError, ValueError) as err:
            raise MalformedParagraph(f"field {spec.key!r}: {err}") from err
    return decoded


def encode_record(record: Any) -> Paragraph:
    """Render a record back into a Paragraph, in schema order.

    Empty optional values (``""``, ``()``, an empty Dependency, ``False``)
    are left out, so decoding the result gives back an equal record.

    Example:
        ```python
        from debmeta.control import encode_record, format_paragraph

        print(format_paragraph(encode_record(control.source)))
        ```
    """
    fields = []
    for spec in type(record).schema:
        value = getattr(record, spec.attr)
        if not value and not spec.required:
            continue
        fields.append((spec.key, spec.format(value)))
    return Paragraph(fields)

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

"""debian/control source and binary records.

A control file holds one source paragraph followed by any number of binary
paragraphs. Relationship fields are parsed into Dependency values and the
Architecture field into Arch tuples.

Example:
    ```python
    from pathlib import Path
    from debmeta.control import load_control

    control = load_control(Path("debian/control"))
    print(control.source.source)
    print([b.package for b in control.binaries])
    print(control.source.build_depends)
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from debmeta.control.paragraph import Paragraph, parse_paragraphs
from debmeta.control.schema import (
    FieldSpec,
    decode_paragraph,
    field_schema,
    format_words,
    parse_bool,
    parse_list,
)
from debmeta.dependency.arch import Arch, parse_architectures
from debmeta.dependency.relation import Dependency, parse_dependency
from debmeta.exceptions import MalformedParagraph
from debmeta.logging import get_global_logger

__all__ = [
    "BinaryParagraph",
    "Control",
    "SourceParagraph",
    "find_relationship",
    "load_control",
    "parse_arch_list",
    "parse_control",
]


def parse_arch_list(value: str) -> tuple[Arch, ...]:
    """Whitespace-separated architectures, as in the Architecture field."""
    return tuple(parse_architectures(value))


@field_schema(
    FieldSpec("Source", required=True),
    FieldSpec("Maintainer"),
    FieldSpec("Uploaders", parse_list),
    FieldSpec("Section"),
    FieldSpec("Priority"),
    FieldSpec("Standards-Version"),
    FieldSpec("Build-Depends", parse_dependency),
    FieldSpec("Build-Depends-Arch", parse_dependency),
    FieldSpec("Build-Depends-Indep", parse_dependency),
    FieldSpec("Build-Conflicts", parse_dependency),
    FieldSpec("Build-Conflicts-Indep", parse_dependency),
)
@dataclass(frozen=True)
class SourceParagraph:
    """The first paragraph of a control file."""

    schema: ClassVar[tuple[FieldSpec, ...]]

    source: str
    maintainer: str = ""
    uploaders: tuple[str, ...] = ()
    section: str = ""
    priority: str = ""
    standards_version: str = ""
    build_depends: Dependency = field(default_factory=Dependency)
    build_depends_arch: Dependency = field(default_factory=Dependency)
    build_depends_indep: Dependency = field(default_factory=Dependency)
    build_conflicts: Dependency = field(default_factory=Dependency)
    build_conflicts_indep: Dependency = field(default_factory=Dependency)
    paragraph: Paragraph = field(default_factory=Paragraph, compare=False, repr=False)

    @classmethod
    def from_paragraph(cls, paragraph: Paragraph) -> SourceParagraph:
        return cls(paragraph=paragraph, **decode_paragraph(paragraph, cls.schema))

    @property
    def maintainers(self) -> list[str]:
        """Uploaders followed by the Maintainer, skipping an empty one."""
        people = list(self.uploaders)
        if self.maintainer:
            people.append(self.maintainer)
        return people

    def relationship(self, key: str) -> Dependency:
        """Look up a relationship field by its control-file name."""
        return find_relationship(self, key)


@field_schema(
    FieldSpec("Package", required=True),
    FieldSpec("Architecture", parse_arch_list, formatter=format_words),
    FieldSpec("Section"),
    FieldSpec("Priority"),
    FieldSpec("Essential", parse_bool),
    FieldSpec("Description"),
    FieldSpec("Depends", parse_dependency),
    FieldSpec("Pre-Depends", parse_dependency),
    FieldSpec("Recommends", parse_dependency),
    FieldSpec("Suggests", parse_dependency),
    FieldSpec("Enhances", parse_dependency),
    FieldSpec("Breaks", parse_dependency),
    FieldSpec("Conflicts", parse_dependency),
    FieldSpec("Replaces", parse_dependency),
    FieldSpec("Provides", parse_dependency),
    FieldSpec("Built-Using", parse_dependency),
)
@dataclass(frozen=True)
class BinaryParagraph:
    """One binary package stanza."""

    schema: ClassVar[tuple[FieldSpec, ...]]

    package: str
    architecture: tuple[Arch, ...] = ()
    section: str = ""
    priority: str = ""
    essential: bool = False
    description: str = ""
    depends: Dependency = field(default_factory=Dependency)
    pre_depends: Dependency = field(default_factory=Dependency)
    recommends: Dependency = field(default_factory=Dependency)
    suggests: Dependency = field(default_factory=Dependency)
    enhances: Dependency = field(default_factory=Dependency)
    breaks: Dependency = field(default_factory=Dependency)
    conflicts: Dependency = field(default_factory=Dependency)
    replaces: Dependency = field(default_factory=Dependency)
    provides: Dependency = field(default_factory=Dependency)
    built_using: Dependency = field(default_factory=Dependency)
    paragraph: Paragraph = field(default_factory=Paragraph, compare=False, repr=False)

    @classmethod
    def from_paragraph(cls, paragraph: Paragraph) -> BinaryParagraph:
        return cls(paragraph=paragraph, **decode_paragraph(paragraph, cls.schema))

    def builds_on(self, arch: Arch) -> bool:
        """True when the Architecture field covers ``arch`` (or is ``all``)."""
        return any(a.is_all or a.matches(arch) for a in self.architecture)

    def relationship(self, key: str) -> Dependency:
        return find_relationship(self, key)


def find_relationship(record: Any, key: str) -> Dependency:
    """Look up a relationship field on any schema-backed record."""
    for spec in record.schema:
        if spec.key.lower() == key.lower() and spec.parser is parse_dependency:
            return getattr(record, spec.attr)
    raise KeyError(f"{key!r} is not a relationship field of {type(record).__name__}")


@dataclass(frozen=True)
class Control:
    """A parsed debian/control file."""

    source: SourceParagraph
    binaries: tuple[BinaryParagraph, ...] = ()

    @property
    def binary_names(self) -> list[str]:
        return [b.package for b in self.binaries]


def parse_control(text: str) -> Control:
    """Parse the contents of a debian/control file.

    Raises:
        MalformedParagraph: When the text has no paragraphs, a paragraph is
            syntactically broken, or a field fails to decode.

    """
    paragraphs = parse_paragraphs(text)
    if not paragraphs:
        raise MalformedParagraph("control file has no source paragraph")

    source = SourceParagraph.from_paragraph(paragraphs[0])
    binaries = tuple(BinaryParagraph.from_paragraph(p) for p in paragraphs[1:])
    get_global_logger().debug(
        "CONTROL",
        f"Source {source.source} with {len(binaries)} binary package(s)",
    )
    return Control(source=source, binaries=binaries)


def load_control(path: Path) -> Control:
    """Read and parse a debian/control file.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedParagraph: See parse_control().

    """
    get_global_logger().verbose("CONTROL", f"Reading: {path}")
    return parse_control(path.read_text(encoding="utf-8"))

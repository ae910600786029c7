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

"""Archive index records (Sources and Packages files).

Both files are plain sequences of paragraphs, one per source or binary
package. Only field decoding happens here; fetching and decompressing
indices is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from debmeta.control.paragraph import Paragraph, parse_paragraphs
from debmeta.control.records import find_relationship, parse_arch_list
from debmeta.control.schema import (
    FieldSpec,
    decode_paragraph,
    field_schema,
    format_words,
    parse_lines,
    parse_list,
)
from debmeta.dependency.arch import Arch, parse_arch
from debmeta.dependency.relation import Dependency, parse_dependency
from debmeta.logging import get_global_logger
from debmeta.versioning.version import Version, parse_version

__all__ = [
    "BinaryIndex",
    "SourceIndex",
    "load_binary_index",
    "load_source_index",
    "parse_binary_index",
    "parse_source_index",
]


@field_schema(
    FieldSpec("Package", required=True),
    FieldSpec("Binary", parse_list),
    FieldSpec("Version", parse_version, required=True),
    FieldSpec("Maintainer"),
    FieldSpec("Uploaders", parse_list),
    FieldSpec("Architecture", parse_arch_list, formatter=format_words),
    FieldSpec("Standards-Version"),
    FieldSpec("Format"),
    FieldSpec("Directory"),
    FieldSpec("Files", parse_lines),
    FieldSpec("Checksums-Sha256", parse_lines),
    FieldSpec("Vcs-Browser"),
    FieldSpec("Vcs-Git"),
    FieldSpec("Homepage"),
    FieldSpec("Priority"),
    FieldSpec("Section"),
    FieldSpec("Build-Depends", parse_dependency),
    FieldSpec("Build-Depends-Arch", parse_dependency),
    FieldSpec("Build-Depends-Indep", parse_dependency),
)
@dataclass(frozen=True)
class SourceIndex:
    """One stanza of a Sources index."""

    schema: ClassVar[tuple[FieldSpec, ...]]

    package: str
    version: Version
    binary: tuple[str, ...] = ()
    maintainer: str = ""
    uploaders: tuple[str, ...] = ()
    architecture: tuple[Arch, ...] = ()
    standards_version: str = ""
    format: str = ""
    directory: str = ""
    files: tuple[str, ...] = ()
    checksums_sha256: tuple[str, ...] = ()
    vcs_browser: str = ""
    vcs_git: str = ""
    homepage: str = ""
    priority: str = ""
    section: str = ""
    build_depends: Dependency = field(default_factory=Dependency)
    build_depends_arch: Dependency = field(default_factory=Dependency)
    build_depends_indep: Dependency = field(default_factory=Dependency)
    paragraph: Paragraph = field(default_factory=Paragraph, compare=False, repr=False)

    @classmethod
    def from_paragraph(cls, paragraph: Paragraph) -> SourceIndex:
        return cls(paragraph=paragraph, **decode_paragraph(paragraph, cls.schema))

    @property
    def maintainers(self) -> list[str]:
        people = list(self.uploaders)
        if self.maintainer:
            people.append(self.maintainer)
        return people

    def relationship(self, key: str) -> Dependency:
        return find_relationship(self, key)


@field_schema(
    FieldSpec("Package", required=True),
    FieldSpec("Source"),
    FieldSpec("Version", parse_version, required=True),
    FieldSpec("Installed-Size"),
    FieldSpec("Maintainer"),
    FieldSpec("Architecture", parse_arch, required=True),
    FieldSpec("Multi-Arch"),
    FieldSpec("Depends", parse_dependency),
    FieldSpec("Pre-Depends", parse_dependency),
    FieldSpec("Recommends", parse_dependency),
    FieldSpec("Suggests", parse_dependency),
    FieldSpec("Breaks", parse_dependency),
    FieldSpec("Conflicts", parse_dependency),
    FieldSpec("Provides", parse_dependency),
    FieldSpec("Replaces", parse_dependency),
    FieldSpec("Description"),
    FieldSpec("Homepage"),
    FieldSpec("Description-md5"),
    FieldSpec("Tag", parse_list),
    FieldSpec("Section"),
    FieldSpec("Priority"),
    FieldSpec("Filename"),
    FieldSpec("Size"),
    FieldSpec("MD5sum"),
    FieldSpec("SHA1"),
    FieldSpec("SHA256"),
)
@dataclass(frozen=True)
class BinaryIndex:
    """One stanza of a Packages index.

    Unlike a debian/control binary paragraph, Architecture names exactly one
    concrete architecture (or ``all``).
    """

    schema: ClassVar[tuple[FieldSpec, ...]]

    package: str
    version: Version
    architecture: Arch
    source: str = ""
    installed_size: str = ""
    maintainer: str = ""
    multi_arch: str = ""
    depends: Dependency = field(default_factory=Dependency)
    pre_depends: Dependency = field(default_factory=Dependency)
    recommends: Dependency = field(default_factory=Dependency)
    suggests: Dependency = field(default_factory=Dependency)
    breaks: Dependency = field(default_factory=Dependency)
    conflicts: Dependency = field(default_factory=Dependency)
    provides: Dependency = field(default_factory=Dependency)
    replaces: Dependency = field(default_factory=Dependency)
    description: str = ""
    homepage: str = ""
    description_md5: str = ""
    tag: tuple[str, ...] = ()
    section: str = ""
    priority: str = ""
    filename: str = ""
    size: str = ""
    md5sum: str = ""
    sha1: str = ""
    sha256: str = ""
    paragraph: Paragraph = field(default_factory=Paragraph, compare=False, repr=False)

    @classmethod
    def from_paragraph(cls, paragraph: Paragraph) -> BinaryIndex:
        return cls(paragraph=paragraph, **decode_paragraph(paragraph, cls.schema))

    @property
    def source_package(self) -> str:
        """Name of the source package, which defaults to the binary's own.

        The Source field may carry a version in parentheses when it differs
        from the binary version, e.g. ``glibc (2.36-9)``.
        """
        name = self.source.split("(", 1)[0].strip()
        return name or self.package

    def relationship(self, key: str) -> Dependency:
        return find_relationship(self, key)


def parse_source_index(text: str) -> list[SourceIndex]:
    """Parse the contents of a Sources index.

    Raises:
        MalformedParagraph: If a stanza is malformed or misses Package or
            Version.

    """
    entries = [SourceIndex.from_paragraph(p) for p in parse_paragraphs(text)]
    get_global_logger().debug("CONTROL", f"Parsed {len(entries)} Sources entries")
    return entries


def parse_binary_index(text: str) -> list[BinaryIndex]:
    """Parse the contents of a Packages index.

    Raises:
        MalformedParagraph: If a stanza is malformed or misses Package,
            Version or Architecture.

    """
    entries = [BinaryIndex.from_paragraph(p) for p in parse_paragraphs(text)]
    get_global_logger().debug("CONTROL", f"Parsed {len(entries)} Packages entries")
    return entries


def load_source_index(path: Path) -> list[SourceIndex]:
    return parse_source_index(path.read_text(encoding="utf-8"))


def load_binary_index(path: Path) -> list[BinaryIndex]:
    return parse_binary_index(path.read_text(encoding="utf-8"))

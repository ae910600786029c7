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

"""Debian source control (.dsc) files.

A .dsc file is a single paragraph describing one uploaded source package.
Files in the archive are usually clearsigned; parse_dsc() drops the
OpenPGP armor and reads the signed text without checking the signature.

Example:
    ```python
    from debmeta.control.dsc import parse_dsc

    dsc = parse_dsc(text)
    print(dsc.source, dsc.version, dsc.binary)
    print([str(a) for a in dsc.architecture])
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
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
from debmeta.dependency.arch import Arch
from debmeta.dependency.relation import Dependency, parse_dependency
from debmeta.exceptions import MalformedParagraph
from debmeta.logging import get_global_logger
from debmeta.versioning.version import Version, parse_version

__all__ = ["DSC", "parse_dsc", "strip_signature"]

_SIGNED_HEADER = "-----BEGIN PGP SIGNED MESSAGE-----"
_SIGNATURE_HEADER = "-----BEGIN PGP SIGNATURE-----"


@field_schema(
    FieldSpec("Format"),
    FieldSpec("Source", required=True),
    FieldSpec("Binary", parse_list),
    FieldSpec("Architecture", parse_arch_list, formatter=format_words),
    FieldSpec("Version", parse_version, required=True),
    FieldSpec("Origin"),
    FieldSpec("Maintainer"),
    FieldSpec("Uploaders", parse_list),
    FieldSpec("Homepage"),
    FieldSpec("Standards-Version"),
    FieldSpec("Vcs-Browser"),
    FieldSpec("Vcs-Git"),
    FieldSpec("Build-Depends", parse_dependency),
    FieldSpec("Build-Depends-Arch", parse_dependency),
    FieldSpec("Build-Depends-Indep", parse_dependency),
    FieldSpec("Package-List", parse_lines),
    FieldSpec("Checksums-Sha256", parse_lines),
    FieldSpec("Files", parse_lines),
)
@dataclass(frozen=True)
class DSC:
    """A parsed .dsc paragraph.

    Attributes:
        binary: Binary packages the source builds.
        architecture: Architectures (or wildcards) it builds for.
        files: Raw ``<md5> <size> <name>`` lines.

    """

    schema: ClassVar[tuple[FieldSpec, ...]]

    source: str
    version: Version
    format: str = ""
    binary: tuple[str, ...] = ()
    architecture: tuple[Arch, ...] = ()
    origin: str = ""
    maintainer: str = ""
    uploaders: tuple[str, ...] = ()
    homepage: str = ""
    standards_version: str = ""
    vcs_browser: str = ""
    vcs_git: str = ""
    build_depends: Dependency = field(default_factory=Dependency)
    build_depends_arch: Dependency = field(default_factory=Dependency)
    build_depends_indep: Dependency = field(default_factory=Dependency)
    package_list: tuple[str, ...] = ()
    checksums_sha256: tuple[str, ...] = ()
    files: tuple[str, ...] = ()
    paragraph: Paragraph = field(default_factory=Paragraph, compare=False, repr=False)

    @classmethod
    def from_paragraph(cls, paragraph: Paragraph) -> DSC:
        return cls(paragraph=paragraph, **decode_paragraph(paragraph, cls.schema))

    @property
    def maintainers(self) -> list[str]:
        """Uploaders followed by the Maintainer, skipping an empty one."""
        people = list(self.uploaders)
        if self.maintainer:
            people.append(self.maintainer)
        return people

    def relationship(self, key: str) -> Dependency:
        return find_relationship(self, key)


def strip_signature(text: str) -> str:
    """Return the signed text of a clearsigned message.

    Unsigned text is returned unchanged. Dash-escaped lines (``- -----``)
    are unescaped. The signature itself is NOT verified.

    Raises:
        MalformedParagraph: If the armor is incomplete.

    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != _SIGNED_HEADER:
        return text

    # Armor headers (e.g. "Hash: SHA512") end at the first blank line
    try:
        start = next(i for i, line in enumerate(lines) if not line.strip()) + 1
        end = lines.index(_SIGNATURE_HEADER, start)
    except (StopIteration, ValueError) as err:
        raise MalformedParagraph("incomplete OpenPGP armor") from err

    body = [line[2:] if line.startswith("- ") else line for line in lines[start:end]]
    return "\n".join(body) + "\n"


def parse_dsc(text: str) -> DSC:
    """Parse the contents of a .dsc file.

    Raises:
        MalformedParagraph: When the text holds no paragraph, more than one,
            or a field fails to decode.

    """
    paragraphs = parse_paragraphs(strip_signature(text))
    if len(paragraphs) != 1:
        raise MalformedParagraph(
            f"expected one paragraph in .dsc, found {len(paragraphs)}"
        )
    dsc = DSC.from_paragraph(paragraphs[0])
    get_global_logger().debug("CONTROL", f"Parsed {dsc.source}_{dsc.version}.dsc")
    return dsc

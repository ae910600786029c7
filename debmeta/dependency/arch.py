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

"""Debian architecture tuples and wildcard matching.

Every architecture name expands to an (abi, libc, os, cpu) tuple:

- ``amd64`` -> ``base-gnu-linux-amd64`` (via the alias table)
- ``armhf`` -> ``eabihf-gnu-linux-arm``
- ``linux-any`` -> ``base-gnu-linux-any``
- ``any-amd64`` -> ``any-any-any-amd64``
- ``any`` -> ``any-any-any-any``
- ``all`` -> ``all-all-all-all`` (architecture independent, never a wildcard)

Matching treats ``any`` components as wildcards. Two wildcards never match
each other; at least one side must be concrete.

Example:
    ```python
    from debmeta.dependency.arch import parse_arch

    amd64 = parse_arch("amd64")
    amd64.matches(parse_arch("linux-any"))  # True
    parse_arch("x32").matches(parse_arch("any-amd64"))  # True
    parse_arch("all").matches(parse_arch("any"))  # False
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from debmeta.dependency.tupletable import CPU_PLACEHOLDER, TUPLE_TABLE
from debmeta.exceptions import ArchitectureErrorKind, MalformedArchitecture

__all__ = [
    "ALL",
    "ANY",
    "Arch",
    "ArchSet",
    "parse_arch",
    "parse_architectures",
]

_PART_RE = re.compile(r"^[a-z0-9_]+$")
_DEFAULTS = ("base", "gnu", "linux")


@dataclass(frozen=True)
class Arch:
    """A fully expanded architecture tuple.

    Attributes:
        abi: ABI token (e.g. "base", "eabihf", "x32") or "any".
        libc: C library token (e.g. "gnu", "musl") or "any".
        os: Kernel token (e.g. "linux", "hurd") or "any".
        cpu: CPU token (e.g. "amd64", "arm") or "any".

    """

    abi: str
    libc: str
    os: str
    cpu: str

    @classmethod
    def parse(cls, text: str) -> Arch:
        return parse_arch(text)

    @property
    def is_all(self) -> bool:
        return self.cpu == "all"

    @property
    def is_wildcard(self) -> bool:
        """True when any component is ``any``; ``all`` is not a wildcard."""
        if self.is_all:
            return False
        return "any" in (self.abi, self.libc, self.os, self.cpu)

    @property
    def is_concrete(self) -> bool:
        """True for a real machine architecture (neither wildcard nor all)."""
        return not self.is_all and not self.is_wildcard

    def components(self) -> tuple[str, str, str, str]:
        return (self.abi, self.libc, self.os, self.cpu)

    def matches(self, other: Arch) -> bool:
        """Wildcard-aware equivalence.

        ``any`` on either side matches anything component-wise. ``all`` only
        matches ``all``. Two wildcards are never considered equal.
        """
        if self.is_wildcard and other.is_wildcard:
            return False
        if self.is_wildcard:
            return other.matches(self)

        return (
            (self.cpu == other.cpu or (not self.is_all and other.cpu == "any"))
            and (self.os == other.os or other.os == "any")
            and (self.libc == other.libc or other.libc == "any")
            and (self.abi == other.abi or other.abi == "any")
        )

    def __str__(self) -> str:
        """Shortest conventional name that expands back to this tuple."""
        if self.is_all:
            return "all"
        parts = list(self.components())
        for candidate in _short_name_candidates(self):
            if _expand(candidate) == parts:
                return candidate
        return "-".join(parts)


ALL = Arch(abi="all", libc="all", os="all", cpu="all")
ANY = Arch(abi="any", libc="any", os="any", cpu="any")


@dataclass(frozen=True)
class ArchSet:
    """Architecture restriction list of a dependency possibility.

    An empty set matches every architecture. Otherwise an architecture
    matches when it matches some member, inverted when ``negated`` is set
    (``[!amd64 !i386]``).

    Attributes:
        architectures: Members in declaration order.
        negated: True for a ``!``-prefixed list.

    """

    architectures: tuple[Arch, ...] = ()
    negated: bool = False

    def matches(self, arch: Arch) -> bool:
        if not self.architectures:
            return True
        for member in self.architectures:
            if member.matches(arch):
                return not self.negated
        return self.negated

    def __str__(self) -> str:
        if not self.architectures:
            return ""
        prefix = "!" if self.negated else ""
        return "[" + " ".join(f"{prefix}{arch}" for arch in self.architectures) + "]"


# ----------------------------
# Expansion
# ----------------------------


def _expand_any(parts: list[str]) -> list[str]:
    """Left-pad ``any-...`` names to four parts."""
    if parts and parts[0] == "any":
        return ["any"] * (4 - len(parts)) + parts
    return parts


def _match_tuple_table(parts: list[str]) -> list[str]:
    for long_name, short_name in TUPLE_TABLE:
        pattern = short_name.split("-")
        if len(pattern) != len(parts):
            continue
        cpu = ""
        for expected, actual in zip(pattern, parts):
            if expected == CPU_PLACEHOLDER:
                cpu = actual
            elif expected != actual:
                break
        else:
            return long_name.replace(CPU_PLACEHOLDER, cpu).split("-")
    return parts


def _expand(text: str) -> list[str]:
    parts = _match_tuple_table(_expand_any(text.split("-")))
    return list(_DEFAULTS[: 4 - len(parts)]) + parts


def _short_name_candidates(arch: Arch):
    full_name = "-".join(arch.components())
    for long_name, short_name in TUPLE_TABLE:
        if long_name.replace(CPU_PLACEHOLDER, arch.cpu) == full_name:
            yield short_name.replace(CPU_PLACEHOLDER, arch.cpu)
    if arch.abi == "any":
        parts = list(arch.components())
        while len(parts) > 1 and parts[1] == "any":
            parts.pop(0)
        yield "-".join(parts)
    if arch.abi == "base":
        if arch.libc == "gnu":
            yield f"{arch.os}-{arch.cpu}"
        yield f"{arch.libc}-{arch.os}-{arch.cpu}"


def parse_arch(text: str) -> Arch:
    """Parse an architecture name into its expanded tuple.

    Args:
        text: Short or long name, e.g. ``"amd64"``, ``"linux-any"``,
            ``"base-musl-linux-arm64"``, ``"any"`` or ``"all"``.

    Returns:
        The expanded Arch.

    Raises:
        MalformedArchitecture: EMPTY for blank input; UNKNOWN_ALIAS for names
            that cannot be expanded (more than four parts, empty or invalid
            parts, or ``all`` mixed with other components).

    """
    name = text.strip()
    if not name:
        raise MalformedArchitecture(
            "architecture name is empty",
            kind=ArchitectureErrorKind.EMPTY,
            value=text,
        )
    if name == "all":
        return ALL

    parts = name.split("-")
    if len(parts) > 4 or not all(_PART_RE.match(part) for part in parts):
        raise MalformedArchitecture(
            f"cannot expand architecture name {name!r}",
            kind=ArchitectureErrorKind.UNKNOWN_ALIAS,
            value=text,
        )
    if "all" in parts:
        raise MalformedArchitecture(
            f"'all' cannot be combined with other components: {name!r}",
            kind=ArchitectureErrorKind.UNKNOWN_ALIAS,
            value=text,
        )

    abi, libc, os_name, cpu = _expand(name)
    return Arch(abi=abi, libc=libc, os=os_name, cpu=cpu)


def parse_architectures(text: str) -> list[Arch]:
    """Parse a whitespace-separated list such as an Architecture field."""
    return [parse_arch(token) for token in text.split()]

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

"""Dependency relationship fields (Depends, Build-Depends, ...).

A relationship field is a conjunction of relations, each relation a
disjunction of possibilities::

    foo (>= 1.0), bar [amd64] | baz:any <!nocheck>, ${misc:Depends}

Grammar of one possibility::

    name[:archqual] ["(" op version ")"] ["[" arch ... "]"] ["<" profile ... ">"]...

- op is one of ``<<``, ``<=``, ``=``, ``>=``, ``>>`` and the deprecated
  ``<`` (same as ``<=``) and ``>`` (same as ``>=``).
- Architecture lists are either all plain or all ``!``-negated.
- Each ``<...>`` group is a conjunction of build-profile terms; several
  groups are alternatives.
- Names of the form ``${...}`` are substitution variables (substvars).

Example:
    ```python
    from debmeta.dependency import parse_arch, parse_dependency

    dep = parse_dependency("foo, bar [amd64] | baz")
    [p.name for p in dep.get_possibilities(parse_arch("armhf"))]
    # ['foo', 'baz']
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import re

from debmeta.dependency.arch import Arch, ArchSet, parse_arch
from debmeta.exceptions import (
    DependencyErrorKind,
    MalformedArchitecture,
    MalformedDependency,
    MalformedVersion,
)
from debmeta.versioning.version import Version, compare_versions, parse_version

__all__ = [
    "OPERATORS",
    "Dependency",
    "Possibility",
    "Relation",
    "Restriction",
    "VersionRelation",
    "parse_dependency",
]

# Relation operators and the comparison results that satisfy them
OPERATORS: dict[str, frozenset[int]] = {
    "<<": frozenset({-1}),
    "<=": frozenset({-1, 0}),
    "=": frozenset({0}),
    ">=": frozenset({0, 1}),
    ">>": frozenset({1}),
    "<": frozenset({-1, 0}),
    ">": frozenset({0, 1}),
}

_NAME_RE = re.compile(
    r"(?P<name>\$\{[^}]*\}|[A-Za-z0-9][A-Za-z0-9+._\-]*)"
    r"(?::(?P<qualifier>[A-Za-z0-9\-]+))?"
)
_OPERATOR_RE = re.compile(r"^\s*(?P<op>[<>=]*)\s*(?P<version>.*?)\s*$", re.DOTALL)
_PROFILE_RE = re.compile(r"^[a-z0-9][a-z0-9.+\-]*$")


@dataclass(frozen=True)
class VersionRelation:
    """A parenthesised version constraint such as ``(>= 1.0)``."""

    operator: str
    version: Version

    def satisfied_by(self, version: Version | str) -> bool:
        return compare_versions(version, self.version) in OPERATORS[self.operator]

    def __str__(self) -> str:
        return f"({self.operator} {self.version})"


@dataclass(frozen=True)
class Restriction:
    """One build-profile term, e.g. ``!nocheck``."""

    profile: str
    negated: bool = False

    def satisfied_by(self, profiles: frozenset[str]) -> bool:
        return (self.profile in profiles) != self.negated

    def __str__(self) -> str:
        return f"!{self.profile}" if self.negated else self.profile


@dataclass(frozen=True)
class Possibility:
    """One alternative of a relation.

    Attributes:
        name: Package name, or ``${...}`` for a substvar.
        version: Optional version constraint.
        architectures: Architecture restriction (empty matches all).
        arch_qualifier: Multi-arch qualifier after ``:`` (e.g. "any").
        restrictions: Build-profile formula; outer tuple is OR, inner AND.

    """

    name: str
    version: VersionRelation | None = None
    architectures: ArchSet = field(default_factory=ArchSet)
    arch_qualifier: str | None = None
    restrictions: tuple[tuple[Restriction, ...], ...] = ()

    @property
    def is_substvar(self) -> bool:
        return self.name.startswith("${") and self.name.endswith("}")

    @property
    def substvar(self) -> str | None:
        """Variable name without ``${}``, or None for real packages."""
        return self.name[2:-1] if self.is_substvar else None

    def matches_arch(self, arch: Arch) -> bool:
        return self.architectures.matches(arch)

    def matches_profiles(self, profiles: Iterable[str]) -> bool:
        """True when the build-profile formula holds for the active profiles."""
        if not self.restrictions:
            return True
        active = frozenset(profiles)
        return any(
            all(term.satisfied_by(active) for term in group)
            for group in self.restrictions
        )

    def __str__(self) -> str:
        text = self.name
        if self.arch_qualifier:
            text += f":{self.arch_qualifier}"
        if self.version is not None:
            text += f" {self.version}"
        if self.architectures.architectures:
            text += f" {self.architectures}"
        for group in self.restrictions:
            text += " <" + " ".join(str(term) for term in group) + ">"
        return text


@dataclass(frozen=True)
class Relation:
    """Alternatives separated by ``|``; any one satisfies the relation."""

    possibilities: tuple[Possibility, ...]

    def __str__(self) -> str:
        return " | ".join(str(p) for p in self.possibilities)


@dataclass(frozen=True)
class Dependency:
    """A full relationship field; every relation must hold."""

    relations: tuple[Relation, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Dependency:
        return parse_dependency(text)

    def __iter__(self) -> Iterator[Relation]:
        return iter(self.relations)

    def __len__(self) -> int:
        return len(self.relations)

    def __str__(self) -> str:
        return ", ".join(str(r) for r in self.relations)

    def get_possibilities(
        self, arch: Arch, profiles: Iterable[str] | None = None
    ) -> list[Possibility]:
        """Pick the first applicable possibility of every relation.

        A relation contributes at most one possibility: the first one (in
        declaration order) whose architecture list matches ``arch`` and, when
        ``profiles`` is given, whose build-profile formula holds. Relations
        without such a possibility contribute nothing.

        Args:
            arch: Concrete architecture to build or install for.
            profiles: Active build profiles, or None to ignore restrictions.

        Returns:
            Possibilities in relation order.

        """
        active = None if profiles is None else frozenset(profiles)
        selected: list[Possibility] = []
        for relation in self.relations:
            for possibility in relation.possibilities:
                if not possibility.matches_arch(arch):
                    continue
                if active is not None and not possibility.matches_profiles(active):
                    continue
                selected.append(possibility)
                break
        return selected

    def get_all_possibilities(self) -> list[Possibility]:
        """Every possibility in textual order, excluding substvars."""
        return [
            p
            for relation in self.relations
            for p in relation.possibilities
            if not p.is_substvar
        ]

    def get_substvars(self) -> list[Possibility]:
        """Only the ``${...}`` possibilities, in textual order."""
        return [
            p
            for relation in self.relations
            for p in relation.possibilities
            if p.is_substvar
        ]


# ----------------------------
# Parsing
# ----------------------------


def _error(message: str, kind: DependencyErrorKind, text: str) -> MalformedDependency:
    return MalformedDependency(f"{message} in {text!r}", kind=kind, value=text)


def _check_nesting(inner: str, text: str) -> None:
    if any(ch in inner for ch in "()[]<>"):
        raise _error(
            "nested or unbalanced delimiter",
            DependencyErrorKind.UNMATCHED_DELIMITER,
            text,
        )


def _parse_version_relation(inner: str, text: str) -> VersionRelation:
    if any(ch in inner for ch in "()[]"):
        raise _error(
            "nested or unbalanced delimiter",
            DependencyErrorKind.UNMATCHED_DELIMITER,
            text,
        )
    match = _OPERATOR_RE.match(inner)
    operator = match.group("op") if match else ""
    if operator not in OPERATORS:
        raise _error(
            f"bad relation operator {operator!r}",
            DependencyErrorKind.BAD_OPERATOR,
            text,
        )
    try:
        version = parse_version(match.group("version"))
    except MalformedVersion as err:
        raise _error(
            f"bad version ({err})", DependencyErrorKind.BAD_VERSION, text
        ) from err
    return VersionRelation(operator=operator, version=version)


def _parse_arch_set(inner: str, text: str) -> ArchSet:
    _check_nesting(inner, text)
    tokens = inner.split()
    if not tokens:
        raise _error(
            "empty architecture list", DependencyErrorKind.BAD_ARCHITECTURE, text
        )

    negated = tokens[0].startswith("!")
    arches = []
    for token in tokens:
        if token.startswith("!") != negated:
            raise _error(
                "architecture list mixes negated and plain entries",
                DependencyErrorKind.INCONSISTENT_NEGATION,
                text,
            )
        try:
            arches.append(parse_arch(token.lstrip("!") if negated else token))
        except MalformedArchitecture as err:
            raise _error(
                f"bad architecture {token!r}",
                DependencyErrorKind.BAD_ARCHITECTURE,
                text,
            ) from err
    return ArchSet(architectures=tuple(arches), negated=negated)


def _parse_restrictions(inner: str, text: str) -> tuple[Restriction, ...]:
    _check_nesting(inner, text)
    terms = []
    for token in inner.split():
        negated = token.startswith("!")
        profile = token[1:] if negated else token
        if not _PROFILE_RE.match(profile):
            raise _error(
                f"bad build profile {token!r}",
                DependencyErrorKind.UNEXPECTED_TEXT,
                text,
            )
        terms.append(Restriction(profile=profile, negated=negated))
    if not terms:
        raise _error(
            "empty build profile list", DependencyErrorKind.UNEXPECTED_TEXT, text
        )
    return tuple(terms)


def _find_close(s: str, start: int, closer: str, text: str) -> int:
    end = s.find(closer, start + 1)
    if end < 0:
        raise _error(
            f"missing {closer!r}", DependencyErrorKind.UNMATCHED_DELIMITER, text
        )
    return end


def _parse_possibility(raw: str, text: str) -> Possibility:
    s = raw.strip()
    if s.startswith("${") and "}" not in s:
        raise _error("missing '}'", DependencyErrorKind.UNMATCHED_DELIMITER, text)
    match = _NAME_RE.match(s)
    if not match:
        raise _error("missing package name", DependencyErrorKind.MISSING_NAME, text)

    version: VersionRelation | None = None
    arches: ArchSet | None = None
    restrictions: list[tuple[Restriction, ...]] = []

    pos = match.end()
    while pos < len(s):
        ch = s[pos]
        if ch.isspace():
            pos += 1
            continue

        if ch == "(":
            end = _find_close(s, pos, ")", text)
            if version is not None:
                raise _error(
                    "more than one version constraint",
                    DependencyErrorKind.DUPLICATE_VERSION_CONSTRAINT,
                    text,
                )
            if arches is not None or restrictions:
                raise _error(
                    "version constraint after architecture or profile list",
                    DependencyErrorKind.UNEXPECTED_TEXT,
                    text,
                )
            version = _parse_version_relation(s[pos + 1 : end], text)
        elif ch == "[":
            end = _find_close(s, pos, "]", text)
            if arches is not None or restrictions:
                raise _error(
                    "unexpected architecture list",
                    DependencyErrorKind.UNEXPECTED_TEXT,
                    text,
                )
            arches = _parse_arch_set(s[pos + 1 : end], text)
        elif ch == "<":
            end = _find_close(s, pos, ">", text)
            restrictions.append(_parse_restrictions(s[pos + 1 : end], text))
        elif ch in ")]>":
            raise _error(
                f"unmatched {ch!r}", DependencyErrorKind.UNMATCHED_DELIMITER, text
            )
        else:
            raise _error(
                f"unexpected text {s[pos:]!r}",
                DependencyErrorKind.UNEXPECTED_TEXT,
                text,
            )
        pos = end + 1

    return Possibility(
        name=match.group("name"),
        version=version,
        architectures=arches if arches is not None else ArchSet(),
        arch_qualifier=match.group("qualifier"),
        restrictions=tuple(restrictions),
    )


def parse_dependency(text: str) -> Dependency:
    """Parse a relationship field.

    Empty relations (e.g. from a trailing comma) are skipped; an empty
    string yields an empty Dependency.

    Args:
        text: Field value, possibly spanning several lines.

    Returns:
        The parsed Dependency.

    Raises:
        MalformedDependency: See DependencyErrorKind for the failure kinds.

    """
    relations = []
    for chunk in text.split(","):
        if not chunk.strip():
            continue
        possibilities = tuple(_parse_possibility(raw, text) for raw in chunk.split("|"))
        relations.append(Relation(possibilities=possibilities))
    return Dependency(relations=tuple(relations))

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

"""Exception hierarchy for debmeta.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- MalformedVersion: A version string could not be parsed
- MalformedArchitecture: An architecture name could not be expanded
- MalformedDependency: A relationship field could not be parsed
- MalformedParagraph: A control paragraph is syntactically broken
- CycleDetected: Build-order resolution found a dependency cycle
- ConfigError: Configuration-related errors (YAML parse, wrong types)

The Malformed* errors share the ParseError base, which also subclasses
ValueError. Each one carries a ``kind`` enum member naming the exact
failure and the offending ``value``.

All exceptions inherit from DebMetaError, allowing users to catch all
debmeta errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from debmeta.exceptions import MalformedVersion, VersionErrorKind
        from debmeta.versioning import parse_version

        try:
            parse_version("1:2.0 beta")
        except MalformedVersion as e:
            assert e.kind is VersionErrorKind.EMBEDDED_WHITESPACE
        ```

    Reporting a cycle:
        ```python
        from debmeta.dependency import sort_dependencies
        from debmeta.exceptions import CycleDetected

        try:
            order = sort_dependencies(mapping)
        except CycleDetected as e:
            print(f"Cannot order: {sorted(e.nodes)}")
        ```
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "DebMetaError",
    "ParseError",
    "VersionErrorKind",
    "ArchitectureErrorKind",
    "DependencyErrorKind",
    "MalformedVersion",
    "MalformedArchitecture",
    "MalformedDependency",
    "MalformedParagraph",
    "CycleDetected",
    "ConfigError",
]


class VersionErrorKind(Enum):
    """Reasons a version string is rejected."""

    EMPTY = "empty"
    EMBEDDED_WHITESPACE = "embedded-whitespace"
    BAD_EPOCH = "bad-epoch"
    INVALID_CHARACTER = "invalid-character"
    OVERSIZED_DIGIT_RUN = "oversized-digit-run"
    INVALID_ENCODING = "invalid-encoding"


class ArchitectureErrorKind(Enum):
    """Reasons an architecture name is rejected."""

    EMPTY = "empty"
    UNKNOWN_ALIAS = "unknown-alias"


class DependencyErrorKind(Enum):
    """Reasons a relationship field is rejected."""

    UNMATCHED_DELIMITER = "unmatched-delimiter"
    DUPLICATE_VERSION_CONSTRAINT = "duplicate-version-constraint"
    BAD_OPERATOR = "bad-operator"
    INCONSISTENT_NEGATION = "inconsistent-negation"
    BAD_ARCHITECTURE = "bad-architecture"
    BAD_VERSION = "bad-version"
    MISSING_NAME = "missing-name"
    UNEXPECTED_TEXT = "unexpected-text"


class DebMetaError(Exception):
    """Base exception for all debmeta errors.

    All debmeta-specific exceptions inherit from this class, allowing users
    to catch all debmeta errors with a single except clause if needed.
    """

    pass


class ParseError(DebMetaError, ValueError):
    """Base class for input validation failures.

    Attributes:
        kind: Enum member describing the failure.
        value: The input text that was rejected.

    """

    def __init__(self, message: str, *, kind: Enum, value: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.value = value


class MalformedVersion(ParseError):
    """Raised when a version string cannot be parsed or decoded.

    ``kind`` is a VersionErrorKind.
    """

    kind: VersionErrorKind


class MalformedArchitecture(ParseError):
    """Raised when an architecture name cannot be parsed.

    ``kind`` is an ArchitectureErrorKind.
    """

    kind: ArchitectureErrorKind


class MalformedDependency(ParseError):
    """Raised when a relationship field cannot be parsed.

    This exception is raised when there are problems with:

    - Unbalanced ``()``, ``[]`` or ``<>`` delimiters
    - More than one version constraint on a single possibility
    - Unknown relation operators
    - Architecture lists mixing negated and plain entries
    - Invalid versions or architecture names inside the expression

    ``kind`` is a DependencyErrorKind.
    """

    kind: DependencyErrorKind


class MalformedParagraph(DebMetaError, ValueError):
    """Raised for broken control paragraphs or missing required fields."""

    pass


class CycleDetected(DebMetaError):
    """Raised when the build-order graph contains a cycle.

    The whole residual set is reported, not a single edge, since the cycle
    may span more nodes than any one edge suggests.

    Attributes:
        nodes: Names that could not be emitted.

    """

    def __init__(self, nodes: frozenset[str]) -> None:
        self.nodes = frozenset(nodes)
        super().__init__(
            f"dependency cycle among: {', '.join(sorted(self.nodes))}"
        )


class ConfigError(DebMetaError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Missing explicit configuration files
    - Configuration values of the wrong type

    Example:
        Catching configuration errors:
            ```python
            from debmeta.exceptions import ConfigError

            try:
                config = load_effective_config(Path("invalid.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass

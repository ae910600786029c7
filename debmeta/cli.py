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

"""Command-line interface for debmeta.

Commands:

    version: Parse a version and show its fields and comparable string
    compare: Compare two versions
    arch: Expand an architecture name, optionally test it against another
    dependency: Parse a relationship field, optionally filter it
    control: Dump a debian/control file as JSON
    order: Compute the build order of several source packages

Example:
    ```bash
    $ debmeta compare 1:2.10-1 1:2.9-2
    1:2.10-1 > 1:2.9-2

    $ debmeta arch x32 --match any-amd64
    $ debmeta dependency "foo, bar [amd64] | baz" --arch armhf
    $ debmeta order */debian/control --verbose
    ```

Exit Codes:

- 0: Success
- 1: Error (malformed input, configuration error, dependency cycle)

Note:
    Each command has its own handler function (cmd_<command>). Verbose mode
    shows full tracebacks on errors. Debug mode implies verbose mode.
"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
import json
from pathlib import Path
import sys
from typing import Any

from debmeta.config import load_effective_config
from debmeta.control import load_control
from debmeta.core import build_order
from debmeta.dependency import Dependency, Possibility, parse_arch, parse_dependency
from debmeta.exceptions import CycleDetected, DebMetaError
from debmeta.logging import get_logger, set_global_logger
from debmeta.versioning import compare_versions, parse_version

_SYMBOLS = {-1: "<", 0: "=", 1: ">"}


def _setup(args: argparse.Namespace) -> dict[str, Any]:
    """Configure the global logger and load the effective configuration."""
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))
    return load_effective_config(Path(args.config) if args.config else None)


def _report_error(err: BaseException, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def _possibility_to_dict(p: Possibility) -> dict[str, Any]:
    return {
        "name": p.name,
        "arch_qualifier": p.arch_qualifier,
        "version": (
            {"operator": p.version.operator, "version": str(p.version.version)}
            if p.version
            else None
        ),
        "architectures": [str(a) for a in p.architectures.architectures],
        "negated": p.architectures.negated,
        "restrictions": [[str(term) for term in group] for group in p.restrictions],
        "substvar": p.is_substvar,
    }


def _dependency_to_list(dep: Dependency) -> list[list[dict[str, Any]]]:
    return [[_possibility_to_dict(p) for p in rel.possibilities] for rel in dep]


def cmd_version(args: argparse.Namespace) -> int:
    """Handler for 'debmeta version'.

    Prints the epoch, upstream version, revision and comparable string of a
    version. ``--strict`` (or ``strict_versions: true`` in the config)
    requires the upstream version to start with a digit.
    """
    try:
        config = _setup(args)
        v = parse_version(args.text, strict=args.strict or config["strict_versions"])
    except DebMetaError as err:
        return _report_error(err, args)

    print("=" * 70)
    print("VERSION")
    print("=" * 70)
    print(f"Version:         {v}")
    print(f"Epoch:           {v.epoch}")
    print(f"Upstream:        {v.upstream_version}")
    print(f"Revision:        {v.revision or '(native)'}")
    print(f"Comparable:      {v.comparable_string()}")
    print("=" * 70)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'debmeta compare'. Prints ``A <|=|> B``."""
    try:
        config = _setup(args)
        strict = config["strict_versions"]
        result = compare_versions(
            parse_version(args.a, strict=strict), parse_version(args.b, strict=strict)
        )
    except DebMetaError as err:
        return _report_error(err, args)

    print(f"{args.a} {_SYMBOLS[result]} {args.b}")
    return 0


def cmd_arch(args: argparse.Namespace) -> int:
    """Handler for 'debmeta arch'."""
    try:
        _setup(args)
        arch = parse_arch(args.text)
        other = parse_arch(args.match) if args.match else None
    except DebMetaError as err:
        return _report_error(err, args)

    print(f"Name:            {arch}")
    print(f"Tuple:           {'-'.join(arch.components())}")
    print(f"Wildcard:        {'yes' if arch.is_wildcard else 'no'}")
    if other is not None:
        print(f"Matches {other}: {'yes' if arch.matches(other) else 'no'}")
    return 0


def cmd_dependency(args: argparse.Namespace) -> int:
    """Handler for 'debmeta dependency'.

    Without ``--arch`` the parsed field is printed as JSON. With ``--arch``
    only the selected possibility of every relation is printed, one per
    line; ``--profile`` (repeatable) additionally applies build profiles.
    """
    try:
        _setup(args)
        dep = parse_dependency(args.text)
        arch = parse_arch(args.arch) if args.arch else None
    except DebMetaError as err:
        return _report_error(err, args)

    if arch is None:
        print(json.dumps(_dependency_to_list(dep), indent=2))
        return 0

    for possibility in dep.get_possibilities(arch, args.profile):
        print(possibility)
    return 0


def cmd_control(args: argparse.Namespace) -> int:
    """Handler for 'debmeta control'. Dumps the file as JSON."""
    try:
        _setup(args)
        control = load_control(Path(args.file))
    except (DebMetaError, OSError) as err:
        return _report_error(err, args)

    source = control.source
    data = {
        "source": {
            "source": source.source,
            "maintainers": source.maintainers,
            "section": source.section,
            "priority": source.priority,
            "standards_version": source.standards_version,
            "build_depends": _dependency_to_list(source.build_depends),
            "build_depends_arch": _dependency_to_list(source.build_depends_arch),
            "build_depends_indep": _dependency_to_list(source.build_depends_indep),
        },
        "binaries": [
            {
                "package": b.package,
                "architecture": [str(a) for a in b.architecture],
                "essential": b.essential,
                "depends": _dependency_to_list(b.depends),
                "pre_depends": _dependency_to_list(b.pre_depends),
                "substvars": [p.substvar for p in b.depends.get_substvars()],
            }
            for b in control.binaries
        ],
    }
    print(json.dumps(data, indent=2))
    return 0


def cmd_order(args: argparse.Namespace) -> int:
    """Handler for 'debmeta order'.

    Reads every control file, sorts the sources and prints the generations.
    A dependency cycle aborts the command; no partial order is printed.
    """
    try:
        config = _setup(args)
        if args.arch:
            config["host_arch"] = args.arch
        if args.profile is not None:
            config["build_profiles"] = args.profile
        result = build_order([Path(f) for f in args.files], config=config)
    except CycleDetected as err:
        print(f"Error: {err}")
        print("No build order exists; break the cycle and try again.")
        return 1
    except (DebMetaError, OSError) as err:
        return _report_error(err, args)

    print()
    print("=" * 70)
    print(f"BUILD ORDER ({result.host_arch})")
    print("=" * 70)
    for i, batch in enumerate(result.generations):
        print(f"Generation {i}:    {', '.join(batch)}")
    if result.external:
        print(f"External:        {', '.join(result.external)}")
    print("=" * 70)
    print()
    for name in result.order:
        print(name)
    return 0


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Explicit YAML config file, merged over .debmeta.yaml",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def _package_version() -> str:
    try:
        return version("debmeta")
    except PackageNotFoundError:
        from debmeta import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debmeta",
        description="debmeta - Debian version, architecture and dependency tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"debmeta {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'version' command
    parser_version = subparsers.add_parser(
        "version",
        help="Parse a version string",
        description="Show the fields and the comparable string of a version.",
    )
    parser_version.add_argument("text", help="Version string, e.g. 1:2.10-1")
    parser_version.add_argument(
        "--strict",
        action="store_true",
        help="Require the upstream version to start with a digit",
    )
    _add_common_flags(parser_version)
    parser_version.set_defaults(func=cmd_version)

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Compare two versions",
        description="Print whether A sorts before, equal to, or after B.",
    )
    parser_compare.add_argument("a", help="First version")
    parser_compare.add_argument("b", help="Second version")
    _add_common_flags(parser_compare)
    parser_compare.set_defaults(func=cmd_compare)

    # 'arch' command
    parser_arch = subparsers.add_parser(
        "arch",
        help="Expand an architecture name",
        description="Expand an architecture name to its abi-libc-os-cpu tuple.",
    )
    parser_arch.add_argument("text", help="Architecture, e.g. amd64 or linux-any")
    parser_arch.add_argument(
        "--match",
        default=None,
        help="Another architecture (or wildcard) to test against",
    )
    _add_common_flags(parser_arch)
    parser_arch.set_defaults(func=cmd_arch)

    # 'dependency' command
    parser_dep = subparsers.add_parser(
        "dependency",
        help="Parse a relationship field",
        description="Parse a Depends-style field and dump or filter it.",
    )
    parser_dep.add_argument("text", help='Field value, e.g. "foo, bar | baz"')
    parser_dep.add_argument(
        "--arch",
        default=None,
        help="Select possibilities for this architecture",
    )
    parser_dep.add_argument(
        "--profile",
        action="append",
        default=None,
        help="Active build profile (repeatable; only with --arch)",
    )
    _add_common_flags(parser_dep)
    parser_dep.set_defaults(func=cmd_dependency)

    # 'control' command
    parser_control = subparsers.add_parser(
        "control",
        help="Dump a debian/control file as JSON",
        description="Parse a debian/control file and print it as JSON.",
    )
    parser_control.add_argument("file", help="Path to debian/control")
    _add_common_flags(parser_control)
    parser_control.set_defaults(func=cmd_control)

    # 'order' command
    parser_order = subparsers.add_parser(
        "order",
        help="Compute the build order of source packages",
        description="Sort source packages so build dependencies come first.",
    )
    parser_order.add_argument("files", nargs="+", help="debian/control files")
    parser_order.add_argument(
        "--arch",
        default=None,
        help="Host architecture (default: host_arch from config)",
    )
    parser_order.add_argument(
        "--profile",
        action="append",
        default=None,
        help="Active build profile (repeatable; default: build_profiles from config)",
    )
    _add_common_flags(parser_order)
    parser_order.set_defaults(func=cmd_order)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the debmeta CLI.

    This function is registered as the 'debmeta' console script in
    pyproject.toml.
    """
    args = build_parser().parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()

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

"""Core orchestration for debmeta.

build_order() ties the pieces together: it reads debian/control files,
filters their build dependencies for the host architecture and active build
profiles, maps the binary package names built on the host back to their source,
and runs the generation-wise topological sort.

Design Principles:

- The library modules (versioning, dependency, control) stay pure; only
  this module and the CLI read files and configuration
- Functions return frozen dataclasses from debmeta.results
- Errors are raised as DebMetaError subclasses; the CLI formats them

Example:
    ```python
    from pathlib import Path
    from debmeta.core import build_order
    from debmeta.config import load_effective_config

    result = build_order(
        [Path("foo/debian/control"), Path("libfoo/debian/control")],
        config=load_effective_config(Path("ci/arm64.yaml")),
    )
    for i, batch in enumerate(result.generations):
        print(i, batch)
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from debmeta.config import load_effective_config
from debmeta.control import Control, load_control
from debmeta.dependency import Arch, parse_arch, sort_generations
from debmeta.exceptions import ConfigError, DebMetaError, MalformedArchitecture
from debmeta.logging import get_global_logger
from debmeta.results import BuildOrderResult


def _source_edges(
    control: Control,
    fields: list[str],
    host_arch: Arch,
    profiles: list[str],
) -> list[str]:
    """Names selected from the configured relationship fields."""
    names = []
    for key in fields:
        try:
            dependency = control.source.relationship(key)
        except KeyError as err:
            raise ConfigError(
                f"build_order.fields: {key!r} is not a source relationship field"
            ) from err
        for possibility in dependency.get_possibilities(host_arch, profiles):
            if not possibility.is_substvar:
                names.append(possibility.name)
    return names


def build_order(
    control_paths: Iterable[Path],
    *,
    config: dict[str, Any] | None = None,
) -> BuildOrderResult:
    """Compute the order in which source packages must be built.

    Args:
        control_paths: debian/control files, one per source package.
        config: Effective configuration as returned by load_effective_config().
            Loaded from the working directory when omitted.

    Returns:
        BuildOrderResult with the flat order, its generations and the
        build dependencies that none of the sources provide.

    Raises:
        ConfigError: If host_arch does not parse or a configured field is not
            a source relationship field.
        MalformedParagraph: If a control file is broken.
        CycleDetected: If the sources depend on each other in a cycle.
        DebMetaError: If two control files declare the same source.
        FileNotFoundError: If a control file does not exist.

    """
    logger = get_global_logger()

    logger.step(1, 3, "Loading configuration...")
    if config is None:
        config = load_effective_config()
    try:
        host_arch = parse_arch(config["host_arch"])
    except MalformedArchitecture as err:
        raise ConfigError(f"host_arch: {err}") from err
    profiles = list(config["build_profiles"])
    fields = list(config["build_order"]["fields"])
    include_binary_names = config["build_order"]["include_binary_names"]
    logger.verbose("CONFIG", f"Host architecture: {host_arch}")
    if profiles:
        logger.verbose("CONFIG", f"Build profiles: {', '.join(profiles)}")

    logger.step(2, 3, "Parsing control files...")
    controls: dict[str, Control] = {}
    origins: dict[str, Path] = {}
    for path in control_paths:
        control = load_control(path)
        name = control.source.source
        if name in controls:
            raise DebMetaError(
                f"source package {name!r} declared in both {origins[name]} and {path}"
            )
        controls[name] = control
        origins[name] = path

    # Binary package name -> source that builds it
    providers: dict[str, str] = {}
    if include_binary_names:
        for name, control in controls.items():
            for binary in control.binaries:
                if not binary.builds_on(host_arch):
                    logger.verbose(
                        "ORDER",
                        f"{binary.package} ({name}) is not built on {host_arch}",
                    )
                    continue
                if binary.package in providers and providers[binary.package] != name:
                    logger.verbose(
                        "ORDER",
                        f"{binary.package} is built by both "
                        f"{providers[binary.package]} and {name}; using "
                        f"{providers[binary.package]}",
                    )
                    continue
                providers[binary.package] = name

    mapping: dict[str, list[str]] = {}
    external: set[str] = set()
    for name, control in controls.items():
        targets = []
        for dep_name in _source_edges(control, fields, host_arch, profiles):
            target = dep_name if dep_name in controls else providers.get(dep_name)
            if target is None:
                external.add(dep_name)
            elif target == name:
                logger.verbose("ORDER", f"{name}: ignoring dependency on own {dep_name}")
            else:
                targets.append(target)
        logger.debug("ORDER", f"{name} -> {', '.join(targets) or '(none)'}")
        mapping[name] = targets

    logger.step(3, 3, "Sorting build order...")
    generations = sort_generations(mapping)

    return BuildOrderResult(
        order=tuple(name for batch in generations for name in batch),
        generations=tuple(tuple(batch) for batch in generations),
        external=tuple(sorted(external)),
        host_arch=str(host_arch),
    )

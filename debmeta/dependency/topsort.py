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

"""Topological ordering of source packages.

The input maps each name to the names it depends on. Only names that are
keys of the mapping are nodes; targets that are not keys are external and
ignored. The output lists dependencies before their dependents.

Example:
    ```python
    from debmeta.dependency.topsort import sort_dependencies

    sort_dependencies({"foo": ["bar"], "bar": ["baz", "quix"]})
    # ['bar', 'foo']
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from debmeta.dependency.relation import Possibility
from debmeta.exceptions import CycleDetected
from debmeta.logging import get_global_logger

__all__ = ["sort_dependencies", "sort_generations"]


def _target(dep: Possibility | str) -> str:
    return dep.name if isinstance(dep, Possibility) else dep


def sort_generations(
    mapping: Mapping[str, Iterable[Possibility | str]],
) -> list[list[str]]:
    """Group nodes into generations that can be built in parallel.

    Generation 0 holds the nodes with no in-graph dependencies; every later
    generation depends only on earlier ones. Names inside a generation are
    sorted, so the result is deterministic for a given mapping.

    Args:
        mapping: Name to its (already architecture-filtered) possibilities,
            or plain dependency names. Self-references count as cycles.

    Returns:
        List of generations, each a sorted list of names.

    Raises:
        CycleDetected: With the set of names that could not be ordered.

    """
    logger = get_global_logger()

    # Per-call working state; the caller's mapping is never modified
    pending: dict[str, set[str]] = {
        name: {_target(dep) for dep in deps if _target(dep) in mapping}
        for name, deps in mapping.items()
    }
    dependents: dict[str, set[str]] = {name: set() for name in pending}
    for name, deps in pending.items():
        for dep in deps:
            dependents[dep].add(name)

    generations: list[list[str]] = []
    ready = sorted(name for name, deps in pending.items() if not deps)
    while ready:
        generations.append(ready)
        logger.debug(
            "TOPSORT", f"Generation {len(generations) - 1}: {', '.join(ready)}"
        )
        released = set()
        for name in ready:
            del pending[name]
            for dependent in dependents[name]:
                pending[dependent].discard(name)
                if not pending[dependent]:
                    released.add(dependent)
        ready = sorted(released)

    if pending:
        logger.debug("TOPSORT", f"Unresolved: {', '.join(sorted(pending))}")
        raise CycleDetected(frozenset(pending))
    return generations


def sort_dependencies(mapping: Mapping[str, Iterable[Possibility | str]]) -> list[str]:
    """Flatten sort_generations() into a single build order."""
    return [name for generation in sort_generations(mapping) for name in generation]

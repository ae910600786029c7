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

"""Architectures, relationship fields and build ordering.

Modules:
    arch
        Arch tuples, alias expansion and wildcard matching.
    tupletable
        The alias table used by arch.
    relation
        Dependency/Relation/Possibility model and its parser.
    topsort
        Generation-wise topological sort of package mappings.

Example:
    ```python
    from debmeta.dependency import parse_arch, parse_dependency

    dep = parse_dependency("foo (>= 1.0), bar [amd64] | baz, ${misc:Depends}")
    [str(p) for p in dep.get_possibilities(parse_arch("armhf"))]
    # ['foo (>= 1.0)', 'baz', '${misc:Depends}']
    [p.substvar for p in dep.get_substvars()]  # ['misc:Depends']
    ```
"""

from .arch import ALL, ANY, Arch, ArchSet, parse_arch, parse_architectures
from .relation import (
    Dependency,
    Possibility,
    Relation,
    Restriction,
    VersionRelation,
    parse_dependency,
)
from .topsort import sort_dependencies, sort_generations

__all__ = [
    "ALL",
    "ANY",
    "Arch",
    "ArchSet",
    "Dependency",
    "Possibility",
    "Relation",
    "Restriction",
    "VersionRelation",
    "parse_arch",
    "parse_architectures",
    "parse_dependency",
    "sort_dependencies",
    "sort_generations",
]

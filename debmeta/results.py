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

"""Public API return types for debmeta.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    ```python
    from pathlib import Path
    from debmeta.core import build_order

    result = build_order([Path("libfoo/debian/control"), Path("foo/debian/control")])
    print(result.order)  # ('libfoo', 'foo')
    ```

Note:
    Only public API return types belong in this module. Domain types (like
    Version or Dependency) stay next to their parsing logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BuildOrderResult:
    """Result from ordering a set of source packages.

    Attributes:
        order: Source package names, dependencies first.
        generations: The same names grouped into batches; every batch only
            depends on earlier ones and can be built in parallel.
        external: Build dependencies not produced by any of the given
            sources (expected to come from the archive), sorted.
        host_arch: Architecture the dependencies were filtered for.
    """

    order: tuple[str, ...]
    generations: tuple[tuple[str, ...], ...]
    external: tuple[str, ...]
    host_arch: str

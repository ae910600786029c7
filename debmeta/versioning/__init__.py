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

"""Debian version parsing, comparison and sort keys.

This package implements the version ordering used by dpkg and an
order-preserving string encoding of it.

Modules:
    version
        Version dataclass, parse_version() and the run-by-run comparison.
    keys
        comparable_string() encoding, its inverse, and version_key().

Comparison Rules:

1. **Epoch** is compared numerically first (``2:0.1 > 1:9.9``).
2. **Upstream version** is compared run by run: non-digit runs
   character-wise (``~`` lowest, then end of run, letters, punctuation),
   digit runs numerically.
3. **Revision** is compared like the upstream version.

Example:
    Basic version comparison:
        ```python
        from debmeta.versioning import compare_versions, parse_version

        compare_versions("1:2.10-1", "1:2.9-2")  # Returns: 1
        compare_versions("1.0~rc1", "1.0")  # Returns: -1
        parse_version("1.0-1") < parse_version("1.0-2")  # True
        ```

    Sorting with string keys:
        ```python
        from debmeta.versioning import version_key

        sorted(["1.0", "1.0~rc1", "1:0.1"], key=version_key)
        # ['1.0~rc1', '1.0', '1:0.1']
        ```
"""

from .keys import comparable_string, version_from_comparable_string, version_key
from .version import (
    Version,
    compare_strings,
    compare_versions,
    parse_version,
)

__all__ = [
    "Version",
    "comparable_string",
    "compare_strings",
    "compare_versions",
    "parse_version",
    "version_from_comparable_string",
    "version_key",
]

"""
debmeta - Debian package metadata toolkit

A Python library and CLI for interpreting and ordering Debian-style package
metadata.

debmeta provides:
  - dpkg-compatible version parsing and comparison
  - An invertible, order-preserving string encoding of versions
  - Architecture tuples with alias expansion and wildcard matching
  - Relationship field (Depends, Build-Depends, ...) parsing and filtering
  - debian/control parsing with declarative field schemas
  - Build-order resolution with cycle detection

Quick Start
-----------
Compare two versions:

    $ debmeta compare 1:2.10-1 1:2.9-2

Order a set of source packages:

    $ debmeta order libfoo/debian/control foo/debian/control

For full CLI documentation:

    $ debmeta --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Build-order orchestration over control files.
config : package
    YAML configuration loading and merging.
versioning : package
    Version parsing, comparison and comparable strings.
dependency : package
    Architectures, relationship fields and topological sorting.
control : package
    debian/control paragraphs and records.

Public API
----------
    from debmeta.versioning import parse_version, compare_versions, version_key
    from debmeta.dependency import parse_arch, parse_dependency, sort_dependencies
    from debmeta.control import load_control
    from debmeta.core import build_order

For more details, see the individual module docstrings.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Debian version, architecture and dependency metadata toolkit"

# Re-export commonly used functions for convenience
from debmeta.config import load_effective_config
from debmeta.control import load_control, parse_control
from debmeta.core import build_order
from debmeta.dependency import (
    Arch,
    Dependency,
    parse_arch,
    parse_dependency,
    sort_dependencies,
)
from debmeta.versioning import Version, compare_versions, parse_version, version_key

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "Arch",
    "Dependency",
    "Version",
    "build_order",
    "compare_versions",
    "load_control",
    "load_effective_config",
    "parse_arch",
    "parse_control",
    "parse_dependency",
    "parse_version",
    "sort_dependencies",
    "version_key",
]

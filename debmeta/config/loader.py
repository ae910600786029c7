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

"""Configuration loading and merging for debmeta.

The effective configuration is built from three layers, each deep-merged on
top of the previous one:

1. **Built-in defaults** (DEFAULT_CONFIG)
2. **Project file**: the nearest ``.debmeta.yaml`` found walking upward
   from the start directory (optional)
3. **Explicit file**: passed with ``--config`` (optional, must exist)

Merge Behavior:
    - **Dicts**: Recursively merged (keys from overlay override base)
    - **Lists**: Completely replaced (NOT appended/extended)
    - **Scalars**: Overwritten (strings, numbers, booleans)

Recognized keys:

```yaml
host_arch: amd64            # architecture used to filter dependencies
strict_versions: false      # require upstream versions to start with a digit
build_profiles: []          # active build profiles, e.g. [nocheck]
build_order:
  fields:                   # relationship fields that define build edges
    - Build-Depends
    - Build-Depends-Arch
    - Build-Depends-Indep
  include_binary_names: true  # map binary package names to their source
```

Example:
    ```python
    from pathlib import Path
    from debmeta.config import load_effective_config

    cfg = load_effective_config(start_dir=Path("src/mypkg"))
    cfg["host_arch"]  # "amd64" unless overridden
    ```
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from debmeta.exceptions import ConfigError
from debmeta.logging import get_global_logger

__all__ = ["CONFIG_FILENAME", "DEFAULT_CONFIG", "load_effective_config"]

CONFIG_FILENAME = ".debmeta.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "host_arch": "amd64",
    "strict_versions": False,
    "build_profiles": [],
    "build_order": {
        "fields": ["Build-Depends", "Build-Depends-Arch", "Build-Depends-Indep"],
        "include_binary_names": True,
    },
}

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """Loads a YAML file that must contain a mapping.

    Raises:
        ConfigError: When the file does not exist, is not valid YAML, is
            empty, or its top level is not a mapping.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


def _print_yaml_content(data: dict[str, Any]) -> None:
    """Dump a layer at debug level, one line per YAML line."""
    logger = get_global_logger()
    yaml_str = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    for line in yaml_str.split("\n"):
        if line.strip():
            logger.debug("CONFIG", "  " + line)


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merges two dicts with "overlay wins" semantics.

    - dict + dict -> deep merge
    - list + list -> overlay REPLACES base (not concatenated)
    - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            # Replace lists and scalars entirely
            result[k] = v
    return result


# -------------------------------
# Discovery and validation
# -------------------------------


def _find_project_config(start_dir: Path) -> Path | None:
    """Walk upward from start_dir looking for a .debmeta.yaml file."""
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _validate(cfg: dict[str, Any]) -> None:
    """Type-check the keys debmeta reads; unknown keys are left alone."""
    if not isinstance(cfg.get("host_arch"), str) or not cfg["host_arch"].strip():
        raise ConfigError("host_arch must be a non-empty string")
    if not isinstance(cfg.get("strict_versions"), bool):
        raise ConfigError("strict_versions must be true or false")
    if not _is_str_list(cfg.get("build_profiles")):
        raise ConfigError("build_profiles must be a list of strings")

    build_order = cfg.get("build_order")
    if not isinstance(build_order, dict):
        raise ConfigError("build_order must be a mapping")
    if not _is_str_list(build_order.get("fields")):
        raise ConfigError("build_order.fields must be a list of strings")
    if not isinstance(build_order.get("include_binary_names"), bool):
        raise ConfigError("build_order.include_binary_names must be true or false")


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(
    config_path: Path | None = None,
    *,
    start_dir: Path | None = None,
) -> dict[str, Any]:
    """Loads and merges the effective configuration.

    Args:
        config_path: Explicit config file, merged last. Must exist if given.
        start_dir: Directory to start the ``.debmeta.yaml`` search from.
            Defaults to the current working directory.

    Returns:
        A new merged configuration dict; DEFAULT_CONFIG is never modified.

    Raises:
        ConfigError: On missing explicit files, YAML parse errors, empty
            files, non-mapping files, or wrongly typed values.

    Example:
        ```python
        cfg = load_effective_config(Path("ci/debmeta.yaml"))
        cfg["build_profiles"]  # ['nocheck']
        ```
    """
    logger = get_global_logger()

    merged = copy.deepcopy(DEFAULT_CONFIG)
    layers_merged = 1

    search_root = (start_dir or Path.cwd()).resolve()
    project_config = _find_project_config(search_root)
    if project_config is not None:
        logger.verbose("CONFIG", f"Loading: {project_config}")
        layer = _load_yaml_file(project_config)
        _print_yaml_content(layer)
        merged = _deep_merge_dicts(merged, layer)
        layers_merged += 1
    else:
        logger.debug("CONFIG", f"No {CONFIG_FILENAME} found above {search_root}")

    if config_path is not None:
        config_path = config_path.resolve()
        logger.verbose("CONFIG", f"Loading: {config_path}")
        layer = _load_yaml_file(config_path)
        _print_yaml_content(layer)
        merged = _deep_merge_dicts(merged, layer)
        layers_merged += 1

    logger.verbose("CONFIG", f"Deep merged {layers_merged} layer(s)")
    _validate(merged)
    return merged

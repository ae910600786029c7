"""
Pytest configuration and shared fixtures for debmeta tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import yaml

from debmeta.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def silent_global_logger() -> Iterator[None]:
    """Restore the silent global logger after every test."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Provide a temporary directory for test artifacts.

    The working directory is switched to it so that config discovery does
    not pick up a .debmeta.yaml from the checkout.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def create_control_file(tmp_test_dir: Path):
    """
    Factory fixture for minimal debian/control files.

    Usage:
        path = create_control_file(
            "foo",
            build_depends="debhelper-compat (= 13), libbar-dev",
            binaries={"foo": "any", "foo-doc": "all"},
        )
    """

    def _create(
        source: str,
        build_depends: str = "",
        binaries: dict[str, str] | None = None,
        extra: str = "",
    ) -> Path:
        lines = [f"Source: {source}", "Maintainer: Jane Doe <jane@example.org>"]
        if build_depends:
            lines.append(f"Build-Depends: {build_depends}")
        if extra:
            lines.append(extra)
        for package, arch in (binaries or {source: "any"}).items():
            lines += ["", f"Package: {package}", f"Architecture: {arch}"]

        path = tmp_test_dir / source / "debian" / "control"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _create


@pytest.fixture
def sample_control_text() -> str:
    """Provide a control file with one source and two binary paragraphs."""
    return """\
# Generated by hand
Source: hello
Maintainer: Jane Doe <jane@example.org>
Uploaders: John Roe <john@example.org>, Max Poe <max@example.org>
Section: devel
Priority: optional
Standards-Version: 4.6.2
Build-Depends: debhelper-compat (= 13),
 libfoo-dev (>= 1.2) [amd64 arm64],
 python3:any,
 dh-sequence-python3 <!nocheck>

Package: hello
Architecture: any
Depends: ${shlibs:Depends}, ${misc:Depends}, libfoo1 (>= 1.2)
Description: friendly greeter
 A longer description
 .
 spanning paragraphs.

Package: hello-doc
Architecture: all
Essential: no
Depends: ${misc:Depends}
Description: documentation for hello
"""


@pytest.fixture
def ordered_versions() -> list[str]:
    """Provide versions in strictly increasing dpkg order."""
    return [
        "0~",
        "0",
        "0.1~rc1",
        "0.1",
        "0.1-1",
        "0.1a",
        "0.1+b1",
        "0.1.1",
        "0.9",
        "0.10",
        "1.0~~",
        "1.0~",
        "1.0~rc1",
        "1.0",
        "1.0-0.1",
        "1.0-1~bpo1",
        "1.0-1",
        "1.0-1+b1",
        "1.0-2",
        "1.0a",
        "1.0+dfsg",
        "1.0.1",
        "1:0.1",
        "2:0",
    ]

"""
Tests for debmeta.dependency.topsort module.

Tests topological ordering including:
- Dependencies before dependents
- Generation grouping and determinism
- External (non-key) targets
- Cycle detection with the residual set
- Possibility values from parsed relationship fields
"""

from __future__ import annotations

import copy

import pytest

from debmeta.dependency import (
    parse_arch,
    parse_dependency,
    sort_dependencies,
    sort_generations,
)
from debmeta.exceptions import CycleDetected, DebMetaError


class TestSortDependencies:
    """Tests for sort_dependencies()."""

    def test_dependency_before_dependent(self):
        """Test bar is built before foo; baz and quix are external."""
        mapping = {"foo": ["bar"], "bar": ["baz", "quix"]}

        assert sort_dependencies(mapping) == ["bar", "foo"]

    def test_independent_nodes_are_sorted(self):
        """Test unrelated names come out alphabetically."""
        mapping = {"c": [], "a": [], "b": []}

        assert sort_dependencies(mapping) == ["a", "b", "c"]

    def test_diamond(self):
        """Test a diamond keeps every edge satisfied."""
        mapping = {
            "app": ["libleft", "libright"],
            "libleft": ["libbase"],
            "libright": ["libbase"],
            "libbase": [],
        }

        order = sort_dependencies(mapping)

        assert order == ["libbase", "libleft", "libright", "app"]
        for name, deps in mapping.items():
            for dep in deps:
                assert order.index(dep) < order.index(name)

    def test_empty_mapping(self):
        """Test nothing to sort gives an empty order."""
        assert sort_dependencies({}) == []

    def test_input_is_not_modified(self):
        """Test the caller's mapping is left untouched."""
        mapping = {"foo": ["bar"], "bar": []}
        before = copy.deepcopy(mapping)

        sort_dependencies(mapping)

        assert mapping == before

    def test_repeated_calls_agree(self):
        """Test no state leaks between calls."""
        mapping = {"foo": ["bar"], "bar": ["baz"], "baz": []}

        assert sort_dependencies(mapping) == sort_dependencies(mapping)


class TestSortGenerations:
    """Tests for sort_generations()."""

    def test_generations(self):
        """Test nodes are grouped by depth."""
        mapping = {
            "app": ["libfoo", "libbar"],
            "libfoo": ["libbase"],
            "libbar": [],
            "libbase": [],
        }

        assert sort_generations(mapping) == [
            ["libbar", "libbase"],
            ["libfoo"],
            ["app"],
        ]

    def test_node_waits_for_its_deepest_dependency(self):
        """Test a node lands after the last generation it depends on."""
        mapping = {"a": [], "b": ["a"], "c": ["a", "b"]}

        assert sort_generations(mapping) == [["a"], ["b"], ["c"]]

    def test_possibility_values(self):
        """Test parsed possibilities can be used directly as values."""
        amd64 = parse_arch("amd64")
        mapping = {
            "foo": parse_dependency("libbar-dev, debhelper").get_possibilities(amd64),
            "libbar-dev": parse_dependency("").get_possibilities(amd64),
        }

        assert sort_generations(mapping) == [["libbar-dev"], ["foo"]]


class TestCycles:
    """Tests for cycle detection."""

    def test_two_node_cycle(self):
        """Test foo <-> bar is reported with both names."""
        mapping = {"foo": ["bar"], "bar": ["baz", "quix", "foo"]}

        with pytest.raises(CycleDetected) as exc_info:
            sort_dependencies(mapping)

        assert exc_info.value.nodes == frozenset({"foo", "bar"})

    def test_self_dependency_is_a_cycle(self):
        """Test a node depending on itself cannot be ordered."""
        with pytest.raises(CycleDetected) as exc_info:
            sort_generations({"foo": ["foo"]})

        assert exc_info.value.nodes == frozenset({"foo"})

    def test_residual_includes_nodes_behind_the_cycle(self):
        """Test nodes that wait on a cycle are part of the residual set."""
        mapping = {"a": [], "b": ["a", "c"], "c": ["b"], "d": ["c"]}

        with pytest.raises(CycleDetected) as exc_info:
            sort_generations(mapping)

        assert exc_info.value.nodes == frozenset({"b", "c", "d"})

    def test_cycle_is_debmeta_error(self):
        """Test CycleDetected is part of the error hierarchy."""
        with pytest.raises(DebMetaError):
            sort_dependencies({"x": ["y"], "y": ["x"]})

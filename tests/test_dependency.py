"""
Tests for debmeta.dependency.relation module.

Tests relationship field handling including:
- Parsing of names, qualifiers, version constraints, arch lists, profiles
- Selection of possibilities per architecture and build profile
- Substitution variables
- Canonical rendering
- Error kinds for malformed fields
"""

from __future__ import annotations

import pytest

from debmeta.dependency import (
    Dependency,
    Possibility,
    VersionRelation,
    parse_arch,
    parse_dependency,
)
from debmeta.exceptions import DependencyErrorKind, MalformedDependency
from debmeta.versioning import parse_version


class TestParseDependency:
    """Tests for parse_dependency() structure."""

    def test_relations_and_alternatives(self):
        """Test commas separate relations and pipes separate alternatives."""
        dep = parse_dependency("foo, bar | baz")

        assert len(dep) == 2
        assert [p.name for p in dep.relations[0].possibilities] == ["foo"]
        assert [p.name for p in dep.relations[1].possibilities] == ["bar", "baz"]

    def test_version_constraint(self):
        """Test a parenthesised constraint is parsed."""
        (relation,) = parse_dependency("libc6 (>= 2.36-1)")
        possibility = relation.possibilities[0]

        assert possibility.version == VersionRelation(">=", parse_version("2.36-1"))

    def test_constraint_without_spaces(self):
        """Test whitespace inside and before the constraint is optional."""
        (relation,) = parse_dependency("foo(<<2.0)")

        assert relation.possibilities[0].version.operator == "<<"

    def test_arch_qualifier(self):
        """Test name:qualifier is split off."""
        (relation,) = parse_dependency("python3:any (>= 3.11)")
        possibility = relation.possibilities[0]

        assert possibility.name == "python3"
        assert possibility.arch_qualifier == "any"

    def test_architecture_list(self):
        """Test [arch ...] restrictions."""
        (relation,) = parse_dependency("libfoo-dev [amd64 arm64]")
        arches = relation.possibilities[0].architectures

        assert not arches.negated
        assert [str(a) for a in arches.architectures] == ["amd64", "arm64"]

    def test_negated_architecture_list(self):
        """Test [!arch ...] restrictions."""
        (relation,) = parse_dependency("libfoo-dev [!hurd-i386 !kfreebsd-any]")

        assert relation.possibilities[0].architectures.negated

    def test_build_profiles(self):
        """Test <...> groups are parsed into restriction formulas."""
        (relation,) = parse_dependency("foo <!nocheck> <stage1 cross>")
        groups = relation.possibilities[0].restrictions

        assert len(groups) == 2
        assert [(t.profile, t.negated) for t in groups[0]] == [("nocheck", True)]
        assert [t.profile for t in groups[1]] == ["stage1", "cross"]

    def test_everything_together(self):
        """Test all parts of a possibility at once."""
        dep = parse_dependency("foo:native (>= 1.0) [linux-any] <!nocheck>")
        possibility = dep.relations[0].possibilities[0]

        assert possibility.name == "foo"
        assert possibility.arch_qualifier == "native"
        assert str(possibility.version) == "(>= 1.0)"
        assert str(possibility.architectures) == "[linux-any]"
        assert str(possibility) == "foo:native (>= 1.0) [linux-any] <!nocheck>"

    def test_multiline_and_trailing_comma(self):
        """Test folded fields and a trailing comma."""
        dep = parse_dependency("debhelper-compat (= 13),\n libfoo-dev,\n")

        assert [p.name for p in dep.get_all_possibilities()] == [
            "debhelper-compat",
            "libfoo-dev",
        ]

    def test_empty_field(self):
        """Test an empty field parses to an empty Dependency."""
        assert parse_dependency("") == Dependency()
        assert parse_dependency("  ") == Dependency()

    def test_classmethod(self):
        """Test Dependency.parse is equivalent to parse_dependency."""
        assert Dependency.parse("a | b") == parse_dependency("a | b")

    @pytest.mark.parametrize(
        "text",
        [
            "foo",
            "foo, bar | baz",
            "foo (>= 1:2.0-1), bar:any",
            "foo [!amd64 !i386] | bar [linux-any]",
            "foo <!nocheck> <stage1 !cross>, ${misc:Depends}",
        ],
    )
    def test_rendering_round_trips(self, text):
        """Test str() renders canonical syntax that parses to the same value."""
        dep = parse_dependency(text)

        assert str(dep) == text
        assert parse_dependency(str(dep)) == dep


class TestMalformedDependency:
    """Tests for error kinds of parse_dependency()."""

    @pytest.mark.parametrize(
        "text, kind",
        [
            ("foo (>= 1.0", DependencyErrorKind.UNMATCHED_DELIMITER),
            ("foo [amd64", DependencyErrorKind.UNMATCHED_DELIMITER),
            ("foo <nocheck", DependencyErrorKind.UNMATCHED_DELIMITER),
            ("foo >= 1.0)", DependencyErrorKind.UNMATCHED_DELIMITER),
            ("foo (>= (1.0))", DependencyErrorKind.UNMATCHED_DELIMITER),
            ("${misc:Depends", DependencyErrorKind.UNMATCHED_DELIMITER),
            ("foo (>= 1.0) (<< 2.0)", DependencyErrorKind.DUPLICATE_VERSION_CONSTRAINT),
            ("foo (== 1.0)", DependencyErrorKind.BAD_OPERATOR),
            ("foo (1.0)", DependencyErrorKind.BAD_OPERATOR),
            ("foo [amd64 !i386]", DependencyErrorKind.INCONSISTENT_NEGATION),
            ("foo [!amd64 i386]", DependencyErrorKind.INCONSISTENT_NEGATION),
            ("foo [AMD64]", DependencyErrorKind.BAD_ARCHITECTURE),
            ("foo []", DependencyErrorKind.BAD_ARCHITECTURE),
            ("foo (>= 1.0 beta)", DependencyErrorKind.BAD_VERSION),
            ("foo (>= )", DependencyErrorKind.BAD_VERSION),
            ("foo, | bar", DependencyErrorKind.MISSING_NAME),
            ("(>= 1.0)", DependencyErrorKind.MISSING_NAME),
            ("foo bar", DependencyErrorKind.UNEXPECTED_TEXT),
            ("foo [amd64] (>= 1.0)", DependencyErrorKind.UNEXPECTED_TEXT),
            ("foo <>", DependencyErrorKind.UNEXPECTED_TEXT),
        ],
    )
    def test_error_kinds(self, text, kind):
        """Test each malformed field reports the right kind."""
        with pytest.raises(MalformedDependency) as exc_info:
            parse_dependency(text)

        assert exc_info.value.kind is kind
        assert exc_info.value.value == text

    def test_nested_errors_are_chained(self):
        """Test version errors keep the original exception as the cause."""
        with pytest.raises(MalformedDependency) as exc_info:
            parse_dependency("foo (>= 1.0 beta)")

        assert exc_info.value.__cause__ is not None


class TestGetPossibilities:
    """Tests for Dependency.get_possibilities()."""

    def test_plain_relations(self):
        """Test the first alternative wins when nothing is restricted."""
        dep = parse_dependency("foo, bar | baz")

        names = [p.name for p in dep.get_possibilities(parse_arch("amd64"))]

        assert names == ["foo", "bar"]

    def test_architecture_filtering(self):
        """Test alternatives restricted to other architectures are skipped."""
        dep = parse_dependency("foo, bar [amd64] | baz")

        armhf = [p.name for p in dep.get_possibilities(parse_arch("armhf"))]
        amd64 = [p.name for p in dep.get_possibilities(parse_arch("amd64"))]

        assert armhf == ["foo", "baz"]
        assert amd64 == ["foo", "bar"]

    def test_relation_without_match_contributes_nothing(self):
        """Test a relation with no applicable alternative is skipped."""
        dep = parse_dependency("foo [sparc], bar [!amd64], baz")

        names = [p.name for p in dep.get_possibilities(parse_arch("amd64"))]

        assert names == ["baz"]

    def test_wildcard_restriction(self):
        """Test wildcard entries in architecture lists."""
        dep = parse_dependency("libc6 [linux-any] | libc0.1 [kfreebsd-any]")

        linux = dep.get_possibilities(parse_arch("amd64"))
        kfreebsd = dep.get_possibilities(parse_arch("kfreebsd-amd64"))

        assert [p.name for p in linux] == ["libc6"]
        assert [p.name for p in kfreebsd] == ["libc0.1"]

    def test_profiles_ignored_by_default(self):
        """Test restriction formulas only apply when profiles are given."""
        dep = parse_dependency("check-tool <!nocheck>")

        assert len(dep.get_possibilities(parse_arch("amd64"))) == 1

    def test_profile_filtering(self):
        """Test <!nocheck> and <stage1> against active profiles."""
        dep = parse_dependency("check-tool <!nocheck>, bootstrap <stage1>")
        amd64 = parse_arch("amd64")

        default = [p.name for p in dep.get_possibilities(amd64, [])]
        nocheck = [p.name for p in dep.get_possibilities(amd64, ["nocheck"])]
        stage1 = [p.name for p in dep.get_possibilities(amd64, ["stage1"])]

        assert default == ["check-tool"]
        assert nocheck == []
        assert stage1 == ["check-tool", "bootstrap"]

    def test_profile_groups_are_alternatives(self):
        """Test several <...> groups are OR-ed and terms inside are AND-ed."""
        relation = parse_dependency("foo <stage1 cross> <stage2>").relations[0]
        foo = relation.possibilities[0]

        assert foo.matches_profiles(["stage1", "cross"])
        assert foo.matches_profiles(["stage2"])
        assert not foo.matches_profiles(["stage1"])


class TestSubstvars:
    """Tests for substitution variables."""

    def test_all_possibilities_exclude_substvars(self):
        """Test get_all_possibilities() skips ${...} entries."""
        dep = parse_dependency("${foo:Depends}, foo, bar | baz, ${bar:Depends}")

        assert [p.name for p in dep.get_all_possibilities()] == ["foo", "bar", "baz"]

    def test_get_substvars(self):
        """Test get_substvars() returns only ${...} entries in order."""
        dep = parse_dependency("${foo:Depends}, foo, bar | baz, ${bar:Depends}")
        substvars = dep.get_substvars()

        assert [p.name for p in substvars] == ["${foo:Depends}", "${bar:Depends}"]
        assert [p.substvar for p in substvars] == ["foo:Depends", "bar:Depends"]
        assert all(p.is_substvar for p in substvars)

    def test_package_is_not_substvar(self):
        """Test ordinary names report no substvar."""
        possibility = Possibility(name="foo")

        assert not possibility.is_substvar
        assert possibility.substvar is None


class TestVersionRelation:
    """Tests for VersionRelation.satisfied_by()."""

    @pytest.mark.parametrize(
        "operator, candidate, expected",
        [
            ("=", "1.0", True),
            ("=", "1.0-1", False),
            ("<<", "0.9", True),
            ("<<", "1.0", False),
            ("<=", "1.0", True),
            (">=", "1.0~rc1", False),
            (">=", "1.0", True),
            (">>", "1.0", False),
            (">>", "1.0.1", True),
            ("<", "1.0", True),
            (">", "1.0", True),
            ("<", "1.1", False),
        ],
    )
    def test_operators(self, operator, candidate, expected):
        """Test every operator, including the deprecated < and >."""
        relation = VersionRelation(operator, parse_version("1.0"))

        assert relation.satisfied_by(candidate) is expected

"""Tests for makeline.resolve: dependency ordering."""

from __future__ import annotations

import pytest

from makeline.errors import CycleDetectedError, UnknownTargetError
from makeline.registry import Registry
from makeline.resolve import Resolver


def _names(targets):
    return [t.name for t in targets]


@pytest.fixture
def registry():
    reg = Registry()
    reg.register("a")
    reg.register("b", depends=["a"])
    reg.register("c", depends=["a", "b"])
    return reg


class TestResolveOrder:
    def test_dependencies_first(self, registry):
        assert _names(Resolver(registry).resolve(["c"])) == ["a", "b", "c"]

    def test_single_leaf(self, registry):
        assert _names(Resolver(registry).resolve(["a"])) == ["a"]

    def test_empty_means_all_registered(self):
        reg = Registry()
        reg.register("a")
        reg.register("b", depends=["a"])
        assert _names(Resolver(reg).resolve([])) == ["a", "b"]

    def test_default_argument_means_all(self, registry):
        assert _names(Resolver(registry).resolve()) == ["a", "b", "c"]

    def test_all_follows_declaration_order(self):
        reg = Registry()
        reg.register("z", depends=["y"])
        reg.register("x")
        reg.register("y")
        assert _names(Resolver(reg).resolve()) == ["y", "z", "x"]

    def test_sibling_dependencies_in_declared_order(self):
        reg = Registry()
        reg.register("one")
        reg.register("two")
        reg.register("three")
        reg.register("top", depends=["three", "one", "two"])
        assert _names(Resolver(reg).resolve(["top"])) == ["three", "one", "two", "top"]

    def test_roots_in_requested_order(self):
        reg = Registry()
        reg.register("a")
        reg.register("b")
        assert _names(Resolver(reg).resolve(["b", "a"])) == ["b", "a"]

    def test_dependency_precedes_dependent(self):
        reg = Registry()
        reg.register("lib")
        reg.register("app", depends=["lib", "gen"])
        reg.register("gen", depends=["lib"])
        reg.register("docs", depends=["app"])
        order = _names(Resolver(reg).resolve())
        for name in order:
            for dep in reg[name].depends:
                assert order.index(dep) < order.index(name)


class TestDeduplication:
    def test_shared_dependency_once(self):
        reg = Registry()
        reg.register("base")
        reg.register("left", depends=["base"])
        reg.register("right", depends=["base"])
        order = _names(Resolver(reg).resolve(["left", "right"]))
        assert order == ["base", "left", "right"]

    def test_repeated_root_once(self, registry):
        assert _names(Resolver(registry).resolve(["a", "a", "b"])) == ["a", "b"]

    def test_root_already_pulled_in_by_earlier_root(self, registry):
        assert _names(Resolver(registry).resolve(["c", "a"])) == ["a", "b", "c"]

    def test_diamond(self):
        reg = Registry()
        reg.register("d")
        reg.register("b", depends=["d"])
        reg.register("c", depends=["d"])
        reg.register("a", depends=["b", "c"])
        assert _names(Resolver(reg).resolve(["a"])) == ["d", "b", "c", "a"]


class TestUnknownTargets:
    def test_unknown_root(self, registry):
        with pytest.raises(UnknownTargetError, match="X") as exc_info:
            Resolver(registry).resolve(["X"])
        assert exc_info.value.name == "X"

    def test_unknown_dependency(self):
        reg = Registry()
        reg.register("app", depends=["missing"])
        with pytest.raises(UnknownTargetError) as exc_info:
            Resolver(reg).resolve(["app"])
        assert exc_info.value.name == "missing"

    def test_unknown_after_valid_roots(self, registry):
        with pytest.raises(UnknownTargetError):
            Resolver(registry).resolve(["c", "nope"])

    def test_non_string_dependency(self):
        reg = Registry()
        reg.register("odd", depends=[None])
        with pytest.raises(UnknownTargetError):
            Resolver(reg).resolve(["odd"])

    def test_is_value_error(self, registry):
        with pytest.raises(ValueError):
            Resolver(registry).resolve(["X"])


class TestCycles:
    def test_self_dependency(self):
        reg = Registry()
        reg.register("a", depends=["a"])
        with pytest.raises(CycleDetectedError) as exc_info:
            Resolver(reg).resolve(["a"])
        assert exc_info.value.path == ["a", "a"]

    def test_two_node_cycle(self):
        reg = Registry()
        reg.register("a", depends=["b"])
        reg.register("b", depends=["a"])
        with pytest.raises(CycleDetectedError, match="a -> b -> a"):
            Resolver(reg).resolve(["a"])

    def test_cycle_path_excludes_lead_in(self):
        reg = Registry()
        reg.register("top", depends=["x"])
        reg.register("x", depends=["y"])
        reg.register("y", depends=["x"])
        with pytest.raises(CycleDetectedError) as exc_info:
            Resolver(reg).resolve(["top"])
        assert exc_info.value.path == ["x", "y", "x"]

    def test_shared_dependency_is_not_a_cycle(self):
        reg = Registry()
        reg.register("base")
        reg.register("mid", depends=["base"])
        reg.register("top", depends=["base", "mid"])
        assert _names(Resolver(reg).resolve(["top"])) == ["base", "mid", "top"]


class TestNameArguments:
    def test_bare_string_is_one_name(self, registry):
        assert _names(Resolver(registry).resolve("b")) == ["a", "b"]

    def test_bare_unknown_string_named_whole(self, registry):
        with pytest.raises(UnknownTargetError) as exc_info:
            Resolver(registry).resolve("build")
        assert exc_info.value.name == "build"

    def test_tuple_and_generator(self, registry):
        assert _names(Resolver(registry).resolve(("b",))) == ["a", "b"]
        assert _names(Resolver(registry).resolve(n for n in ["c"])) == ["a", "b", "c"]

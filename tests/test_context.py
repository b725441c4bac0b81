"""Tests for makeline.context."""

from __future__ import annotations

from pathlib import Path

from makeline.context import Context
from makeline.targets import Target


class TestContext:
    def test_create_with_target(self):
        t = Target(name="build")
        ctx = Context(t, Path("/tmp"))
        assert ctx.target is t
        assert ctx.cwd == Path("/tmp")

    def test_dry_run_defaults_false(self):
        ctx = Context(Target(name="build"), Path("."))
        assert ctx.dry_run is False

    def test_dry_run_explicit_true(self):
        ctx = Context(Target(name="build"), Path("."), dry_run=True)
        assert ctx.dry_run is True

    def test_repr(self):
        ctx = Context("build", Path("/work"))
        assert "/work" in repr(ctx)

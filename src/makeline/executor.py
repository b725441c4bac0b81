"""Executor: run a resolved plan one target at a time."""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .context import Context
from .errors import BuildResult
from .registry import Registry
from .resolve import Resolver
from .targets import Target

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def _accepts_context(action: Callable[..., Any]) -> bool:
    """True if the action takes a positional argument for the Context."""
    try:
        params = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(p.kind in _POSITIONAL for p in params)


class Executor:
    """Run targets strictly in order, stopping at the first failure."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    async def execute(self, plan: Iterable[Target]) -> BuildResult:
        """Run every target in the plan and report how far it got."""
        result = BuildResult()
        for target in plan:
            try:
                await self.build(target)
            except Exception as exc:
                logger.debug("Target '%s' failed: %s", target.name, exc)
                result.failed = target.name
                result.error = exc
                break
            result.completed.append(target.name)
        return result

    async def build(self, target: Target) -> None:
        """Run a single target's action inside its working directory."""
        path = target.options.target_path
        if self.dry_run:
            # earlier targets were skipped, so the path may not exist yet
            where = Path.cwd() / path if path else Path.cwd()
            logger.info("[DRY RUN] Would build %s in %s", target.name, where)
            return

        with contextlib.chdir(path) if path else contextlib.nullcontext():
            ctx = Context(target, Path.cwd(), dry_run=self.dry_run)
            logger.info("Building %s", target.name)
            if path:
                logger.debug("Entered '%s' for %s", ctx.cwd, target.name)

            action = target.action
            outcome = action(ctx) if _accepts_context(action) else action()
            if inspect.isawaitable(outcome):
                await outcome


async def evaluate(
    registry: Registry,
    names: Iterable[str] = (),
    *,
    dry_run: bool = False,
) -> BuildResult:
    """Resolve the named targets and run them.

    Resolution errors are raised before any action runs. The first action
    failure stops the chain and its exception is re-raised as is.
    """
    plan = Resolver(registry).resolve(names)
    result = await Executor(dry_run=dry_run).execute(plan)
    result.raise_for_error()
    return result


def run(
    registry: Registry,
    names: Iterable[str] = (),
    *,
    dry_run: bool = False,
) -> BuildResult:
    """Blocking form of `evaluate`."""
    return asyncio.run(evaluate(registry, names, dry_run=dry_run))

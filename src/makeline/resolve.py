"""Resolver: order the dependency closure of requested targets."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import CycleDetectedError, UnknownTargetError
from .registry import Registry
from .targets import Target

logger = logging.getLogger(__name__)


class Resolver:
    """Compute the execution order for a set of root targets."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def resolve(self, names: Iterable[str] = ()) -> list[Target]:
        """Return the targets to run, dependencies first, each exactly once.

        With no names, every registered target is a root, in declaration
        order. A target shared by several roots is placed where the first
        root reaches it. A bare string is taken as a single name.
        """
        roots = [names] if isinstance(names, str) else list(names)
        roots = roots or list(self._registry)
        logger.debug("Resolving %d root target(s): %s", len(roots), ", ".join(map(str, roots)))

        picked: set[str] = set()
        ordered: list[Target] = []
        for name in roots:
            self._visit(name, picked, [], ordered)

        logger.debug("Resolved order: %s", " -> ".join(t.name for t in ordered))
        return ordered

    def _visit(
        self,
        name: str,
        picked: set[str],
        resolving: list[str],
        ordered: list[Target],
    ) -> None:
        if not isinstance(name, str) or name not in self._registry:
            raise UnknownTargetError(name)
        if name in resolving:
            cycle = resolving[resolving.index(name) :] + [name]
            raise CycleDetectedError(cycle)
        if name in picked:
            return

        picked.add(name)
        resolving.append(name)

        target = self._registry[name]
        for dependency in target.depends:
            logger.debug("Target '%s' depends on '%s'", name, dependency)
            self._visit(dependency, picked, resolving, ordered)

        resolving.pop()
        ordered.append(target)

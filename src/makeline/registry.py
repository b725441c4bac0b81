"""Registry: the declared targets of a build, keyed by name."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from .targets import Target, TargetOptions, noop

logger = logging.getLogger(__name__)


def _as_depends(depends: Any) -> list[Any]:
    if depends is None:
        return []
    if isinstance(depends, str) or not isinstance(depends, Iterable):
        return [depends]
    return list(depends)


def _as_options(options: Any) -> TargetOptions:
    if isinstance(options, TargetOptions):
        return options
    if not isinstance(options, Mapping):
        if options is not None:
            logger.warning("Ignoring options of type %s", type(options).__name__)
        return TargetOptions()
    fields = {k: v for k, v in options.items() if isinstance(k, str)}
    if len(fields) != len(options):
        logger.warning("Ignoring option keys that are not strings")
    return TargetOptions.model_construct(**fields)


class Registry(Mapping[str, Target]):
    """Read-only mapping of declared targets, in declaration order.

    Targets are only added through `register` (or the `target` decorator).
    Registering a name that already exists replaces the earlier target
    outright; depends and options are never merged, and the name keeps
    its original position in the declaration order.
    """

    def __init__(self) -> None:
        self._targets: dict[str, Target] = {}

    def register(
        self,
        name: str,
        depends: Iterable[str] | str | None = None,
        options: TargetOptions | Mapping[str, Any] | None = None,
        action: Callable[..., Any] | None = None,
    ) -> Target:
        """Declare a target and return it.

        Inputs are stored as given; dependency names are checked when the
        target is resolved, not here.
        """
        target = Target.model_construct(
            name=name,
            depends=_as_depends(depends),
            options=_as_options(options),
            action=action if action is not None else noop,
        )
        if name in self._targets:
            logger.debug("Replacing target '%s'", name)
        else:
            logger.debug("Registering target '%s'", name)
        self._targets[name] = target
        return target

    def target(
        self,
        name: str | None = None,
        depends: Iterable[str] | str | None = None,
        **options: Any,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register the decorated function as a target action."""

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.register(name or fn.__name__, depends=depends, options=options, action=fn)
            return fn

        return decorator

    def interactive(self) -> list[Target]:
        """Return the targets offered for interactive selection."""
        return [t for t in self._targets.values() if t.options.interactive]

    def __getitem__(self, name: str) -> Target:
        return self._targets[name]

    def __contains__(self, name: object) -> bool:
        return name in self._targets

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._targets))

    def __len__(self) -> int:
        return len(self._targets)

    def __repr__(self) -> str:
        return f"Registry(targets={len(self._targets)})"

"""Expand ${target.*}, ${env.*} and ${cwd} references in command text."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Mapping

from .context import Context
from .targets import Target

logger = logging.getLogger(__name__)

# $${ is an escaped literal; other ${...} forms are left for the shell
_REF_PATTERN = re.compile(r"\$\$\{|\$\{\s*(target|env|cwd)(?:\.(\w+))?\s*\}")

_TARGET_FIELDS: dict[str, Callable[[Target], str]] = {
    "name": lambda t: t.name,
    "description": lambda t: t.options.description,
    "path": lambda t: str(t.options.target_path or ""),
    "depends": lambda t: " ".join(map(str, t.depends)),
}


class Interpolator:
    """Expand references for one target run.

    Supported references:

    - ``${target.name}``, ``${target.description}``, ``${target.path}`` and
      ``${target.depends}`` (space separated)
    - ``${env.NAME}``; an unset variable expands to an empty string
    - ``${cwd}``, the directory the target runs in

    Values are always substituted as text. ``$${`` yields a literal ``${``;
    any other ``${...}`` is left for the shell.
    """

    def __init__(
        self,
        ctx: Context[Target],
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._ctx = ctx
        self._environ = os.environ if environ is None else environ

    def lookup(self, namespace: str, key: str | None = None) -> str:
        if namespace == "cwd" and key is None:
            return str(self._ctx.cwd)
        if namespace == "env" and key is not None:
            if key not in self._environ:
                logger.warning("Environment variable '%s' is not set", key)
            return self._environ.get(key, "")
        if namespace == "target" and key in _TARGET_FIELDS:
            return _TARGET_FIELDS[key](self._ctx.target)

        ref = namespace if key is None else f"{namespace}.{key}"
        raise ValueError(f"unknown reference '${{{ref}}}' in target '{self._ctx.target.name}'")

    def expand(self, text: str) -> str:
        if "${" not in text:
            return text

        def _sub(m: re.Match) -> str:  # type: ignore[type-arg]
            if m.group(1) is None:
                return "${"
            return self.lookup(m.group(1), m.group(2))

        return _REF_PATTERN.sub(_sub, text)

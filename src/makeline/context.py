"""Runtime execution context handed to target actions."""

from __future__ import annotations

from pathlib import Path


class Context[T]:
    """Runtime state passed to each action as it runs."""

    def __init__(self, target: T, cwd: Path, *, dry_run: bool = False) -> None:
        self.target = target
        self.cwd = cwd
        self.dry_run = dry_run

    def __repr__(self) -> str:
        return f"Context(target={self.target!r}, cwd={str(self.cwd)!r}, dry_run={self.dry_run})"

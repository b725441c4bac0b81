"""Build errors and the structured outcome of an execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class UnknownTargetError(ValueError):
    """A root or dependency name is not in the registry."""

    def __init__(self, name: Any) -> None:
        self.name = name
        super().__init__(f"don't know how to build '{name}'")


class CycleDetectedError(ValueError):
    """Targets depend on each other in a loop."""

    def __init__(self, path: list[str]) -> None:
        self.path = path
        super().__init__(f"Circular dependency detected: {' -> '.join(path)}")


class CommandError(RuntimeError):
    """A shell command exited with a non-zero status."""

    def __init__(self, command: str | list[str], returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        shown = command if isinstance(command, str) else " ".join(command)
        super().__init__(f"command failed with exit status {returncode}: {shown}")


@dataclass
class BuildResult:
    """Outcome of running a plan; stops at the first failing target."""

    completed: list[str] = field(default_factory=list)
    failed: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Re-raise the failing action's exception, unchanged."""
        if self.error is not None:
            raise self.error

"""Target model: a named unit of work with dependencies and an action."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


def noop(*args: Any) -> None:
    """Default action; does nothing."""


class TargetOptions(BaseModel):
    """Execution options for a target."""

    model_config = {"extra": "allow"}

    target_path: Path | str | None = None
    interactive: bool = True
    description: str = ""


class Target(BaseModel):
    """A named unit of work."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    depends: list[str] = Field(default_factory=list)
    options: TargetOptions = Field(default_factory=TargetOptions)
    action: Callable[..., Any] = noop

    def __str__(self) -> str:
        return self.name

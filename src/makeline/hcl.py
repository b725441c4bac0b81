"""HCL loading engine: parse .hcl build definitions into a Registry.

A definition file declares targets as blocks::

    target "test" {
        description = "Run the test suite"
        depends     = ["build"]
        path        = "tests"
        command     = "pytest -q"
    }

Files are rendered as Jinja2 templates before they are parsed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import hcl2
import jinja2
from pydantic import BaseModel, Field

from .commands import Command
from .registry import Registry
from .targets import TargetOptions

logger = logging.getLogger(__name__)


class TargetBlock(BaseModel):
    """Attributes accepted in a ``target`` block."""

    model_config = {"extra": "ignore"}

    description: str = ""
    depends: list[str] = Field(default_factory=list)
    command: str | list[str] = ""
    path: str | None = None
    interactive: bool = True
    env: dict[str, str] = Field(default_factory=dict)
    shell: bool | None = None


# one environment for every definition file; undefined names are errors
_TEMPLATES = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def load(
    file: Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Render a definition file as a Jinja2 template, then parse it as HCL.

    ``context`` holds the template variables (the CLI passes ``-D`` values
    and ``env``). A template that uses an undefined variable is reported as
    ``ValueError`` naming the file. The return value is the raw parse tree,
    with ``target`` blocks under the ``"target"`` key.
    """
    try:
        rendered = _TEMPLATES.from_string(file.read_text()).render(context or {})
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc
    logger.debug("Rendered '%s' (%d bytes)", file, len(rendered))
    return hcl2.loads(rendered)


def load_targets(registry: Registry, data: dict[str, Any]) -> None:
    """Register every ``target`` block found in parsed HCL data."""
    for block in data.get("target", []):
        for name, attrs in block.items():
            attrs = {k: v for k, v in attrs.items() if not k.startswith("__")}
            decl = TargetBlock.model_validate(attrs)
            logger.debug("Found target '%s'", name)

            options = TargetOptions(
                target_path=decl.path,
                interactive=decl.interactive,
                description=decl.description,
            )
            action = Command(decl.command, env=decl.env, shell=decl.shell) if decl.command else None
            registry.register(name, depends=decl.depends, options=options, action=action)


def scan(
    path: str | Path,
    registry: Registry | None = None,
    *,
    recurse: bool = True,
    context: dict[str, Any] | None = None,
) -> Registry:
    """Load one .hcl file, or every .hcl file under a directory, into a Registry."""
    path = Path(path)
    registry = registry if registry is not None else Registry()

    if path.is_file():
        files = [path]
    elif path.is_dir():
        pattern = "**/*.hcl" if recurse else "*.hcl"
        files = sorted(path.glob(pattern))
    else:
        raise FileNotFoundError(f"{path} does not exist")

    for file in files:
        logger.debug("Loading '%s'", file)
        load_targets(registry, load(file, context=context))

    return registry

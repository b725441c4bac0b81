"""Command-line entry point: load a build definition and run targets."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import typer

from .executor import run
from .hcl import scan
from .makefile import load_makefile
from .registry import Registry

app = typer.Typer(add_completion=False, help="Run build targets in dependency order")
log = logging.getLogger("makeline")

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )


def parse_defines(defines: list[str]) -> dict[str, Any]:
    """Turn KEY=VALUE strings into a template context."""
    context: dict[str, Any] = {"env": dict(os.environ)}
    for item in defines:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got '{item}'")
        context[key.strip()] = value
    return context


def load_registry(file: Path, context: dict[str, Any]) -> Registry:
    """Load targets from a .hcl file or directory, or a Python makefile."""
    if not file.exists():
        raise FileNotFoundError(f"{file} does not exist")
    if file.is_dir() or file.suffix == ".hcl":
        return scan(file, context=context)
    return load_makefile(file)


def select_targets(registry: Registry) -> list[str]:
    """Ask which interactive targets to build; all default to yes."""
    return [
        t.name
        for t in registry.interactive()
        if typer.confirm(f"Build {t.name}?", default=True)
    ]


def list_targets(registry: Registry) -> None:
    for target in registry.values():
        line = f"{target.name}"
        if target.options.description:
            line += f"  - {target.options.description}"
        if target.depends:
            line += f"  [{', '.join(target.depends)}]"
        typer.echo(line)


@app.command()
def make(
    targets: list[str] = typer.Argument(None, help="Targets to build"),
    file: Path = typer.Option(Path("makefile.py"), "--file", "-f", help="Build definition file"),
    log_level: str = typer.Option(
        "info", "--log-level", "-l", envvar="MAKELINE_LOG_LEVEL", help="Log level"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be built"),
    list_only: bool = typer.Option(False, "--list", help="List targets and exit"),
    defines: list[str] = typer.Option([], "--define", "-D", help="Template variable KEY=VALUE"),
):
    """Build the given targets, or pick them interactively."""
    configure_logging(log_level)
    context = parse_defines(defines)

    try:
        registry = load_registry(file, context)
    except Exception as exc:  # noqa: BLE001
        log.error("make failed: %s", exc)
        raise typer.Exit(code=1) from exc

    if list_only:
        list_targets(registry)
        raise typer.Exit(code=0)

    names = list(targets or [])
    if not names:
        names = select_targets(registry)
        if not names:
            typer.echo("Nothing selected.")
            raise typer.Exit(code=0)

    try:
        run(registry, names, dry_run=dry_run)
    except Exception as exc:  # noqa: BLE001
        log.error("make failed: %s", exc)
        raise typer.Exit(code=1) from exc


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

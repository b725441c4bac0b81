"""Load a Python build definition (makefile.py) into a Registry."""

from __future__ import annotations

import asyncio
import importlib.util
import inspect
import logging
import sys
from pathlib import Path

from .registry import Registry

logger = logging.getLogger(__name__)


def load_makefile(path: str | Path, registry: Registry | None = None) -> Registry:
    """Import a makefile module and call its ``setup(registry)`` function.

    ``setup`` may be a coroutine function; it is awaited before returning.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"{path} does not exist")

    registry = registry if registry is not None else Registry()

    module_name = f"makeline_makefile_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ValueError(f"{path}: cannot be imported as a Python module")
    module = importlib.util.module_from_spec(spec)
    logger.debug("Loading makefile '%s' as %s", path, module_name)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise

    setup = getattr(module, "setup", None)
    if not callable(setup):
        raise ValueError(f"{path}: no setup(registry) function defined")

    if inspect.iscoroutinefunction(setup):
        asyncio.run(setup(registry))
    else:
        setup(registry)

    logger.debug("Makefile '%s' declared %d target(s)", path, len(registry))
    return registry

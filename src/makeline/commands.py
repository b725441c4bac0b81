"""Command: a target action that runs a shell command."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from collections.abc import Mapping

from .context import Context
from .errors import CommandError
from .interp import Interpolator
from .targets import Target

logger = logging.getLogger(__name__)


class Command:
    """Run a command in the target's working directory.

    By default a string goes through the shell and a list is executed
    directly. ``shell=True`` quotes and joins a list for the shell;
    ``shell=False`` splits a string with shell-like rules. ${...}
    references are expanded in each argument and in ``env`` values.
    """

    def __init__(
        self,
        cmd: str | list[str],
        *,
        env: Mapping[str, str] | None = None,
        shell: bool | None = None,
    ) -> None:
        self.cmd = cmd
        self.env = dict(env or {})
        self.shell = isinstance(cmd, str) if shell is None else shell

    def _expand(self, ctx: Context[Target]) -> tuple[str | list[str], dict[str, str]]:
        interp = Interpolator(ctx)
        args = shlex.split(self.cmd) if isinstance(self.cmd, str) and not self.shell else self.cmd

        if isinstance(args, str):
            cmd: str | list[str] = interp.expand(args)
        else:
            cmd = [interp.expand(str(arg)) for arg in args]
            if self.shell:
                cmd = shlex.join(cmd)

        env = {k: interp.expand(str(v)) for k, v in self.env.items()}
        return cmd, env

    async def __call__(self, ctx: Context[Target]) -> None:
        cmd, extra_env = self._expand(ctx)
        env = {**os.environ, **extra_env} if extra_env else None

        if isinstance(cmd, str):
            logger.info("$ %s", cmd)
            proc = await asyncio.create_subprocess_shell(cmd, cwd=ctx.cwd, env=env)
        else:
            logger.info("$ %s", " ".join(cmd))
            proc = await asyncio.create_subprocess_exec(*cmd, cwd=ctx.cwd, env=env)

        returncode = await proc.wait()
        if returncode:
            raise CommandError(cmd, returncode)
        logger.debug("Command finished for %s", ctx.target.name)

    def __repr__(self) -> str:
        shell = "" if self.shell == isinstance(self.cmd, str) else f", shell={self.shell}"
        return f"Command({self.cmd!r}{shell})"


"""Async subprocess adapter for the external ``swapenv`` executable."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

__all__ = ["CommandRunner", "RunResult", "SwapenvRunner", "DEFAULT_EXECUTABLE"]

LOGGER = logging.getLogger(__name__)
SWAPENV_LOG = logging.getLogger("swapdesk.swapenv")
DEFAULT_EXECUTABLE = "swapenv"


class CommandRunner(Protocol):
    """Callable surface shared by the real runner and test doubles."""

    async def run(self, args: Sequence[str], cwd: Path | str) -> str | None:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of a single ``swapenv`` invocation."""

    args: tuple[str, ...]
    returncode: int | None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    def output(self) -> str | None:
        """Collapse the result to trimmed stdout, or ``None`` on any failure."""

        if not self.ok:
            return None
        return self.stdout.strip()


class SwapenvRunner:
    """Runs ``swapenv`` subcommands and reports trimmed stdout.

    Every failure (spawn error, non-zero exit) is folded into ``None`` by
    :meth:`run`; callers treat ``None`` as "nothing to show" and never see an
    exception. No timeout is applied.
    """

    def __init__(self, executable: str = DEFAULT_EXECUTABLE) -> None:
        self._executable = executable or DEFAULT_EXECUTABLE

    @property
    def executable(self) -> str:
        return self._executable

    async def run(self, args: Sequence[str], cwd: Path | str) -> str | None:
        result = await self.execute(args, cwd)
        return result.output()

    async def execute(self, args: Sequence[str], cwd: Path | str) -> RunResult:
        argv = tuple(str(arg) for arg in args)
        LOGGER.debug("Running %s %s (cwd=%s)", self._executable, " ".join(argv), cwd)
        try:
            process = await asyncio.create_subprocess_exec(
                self._executable,
                *argv,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as exc:
            LOGGER.debug("Unable to launch %s: %s", self._executable, exc)
            return RunResult(args=argv, returncode=None, error=str(exc))

        result = RunResult(
            args=argv,
            returncode=process.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
        if not result.ok:
            LOGGER.debug("%s %s exited with %s", self._executable, " ".join(argv), result.returncode)
            for line in result.stderr.splitlines():
                if line.strip():
                    SWAPENV_LOG.info("%s: %s", argv[0] if argv else self._executable, line.rstrip())
        return result

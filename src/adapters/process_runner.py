"""Runner de comandos basado en subprocess.

Equivalente a `set -euxo pipefail`:
- cada comando se registra antes de ejecutarse (`+ hugo ...`),
- un código de salida distinto de cero aborta con `CommandFailedError`.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from pathlib import Path
from typing import Sequence

from core.domain.models import CommandResult
from core.errors import CommandFailedError, ToolNotExecutableError, ToolNotFoundError
from core.interfaces.runner import CommandRunner

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Lanza binarios externos en serie, sin shell intermedio."""

    def __init__(self, *, cwd: Path | None = None, dry_run: bool = False) -> None:
        self._cwd = cwd
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        check: bool = True,
        capture: bool = False,
    ) -> CommandResult:
        argv = [str(a) for a in args]
        workdir = cwd or self._cwd
        logger.info("+ %s", shlex.join(argv))

        if self._dry_run:
            return CommandResult(args=argv)

        started = time.monotonic()
        try:
            completed = subprocess.run(
                argv,
                cwd=str(workdir) if workdir is not None else None,
                capture_output=capture,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(argv[0]) from exc
        except PermissionError as exc:
            raise ToolNotExecutableError(argv[0]) from exc

        result = CommandResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration_seconds=time.monotonic() - started,
        )
        if check and not result.ok:
            raise CommandFailedError(result)
        if not result.ok:
            logger.debug("exit code %s (ignored): %s", result.returncode, argv[0])
        return result

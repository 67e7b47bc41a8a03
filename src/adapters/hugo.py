"""Wrapper del CLI de Hugo."""

from __future__ import annotations

from pathlib import Path

from core.config import PublishSettings
from core.domain.models import CommandResult
from core.interfaces.runner import CommandRunner


class HugoSite:
    """Construye el sitio estático del proyecto actual."""

    def __init__(self, runner: CommandRunner, settings: PublishSettings | None = None) -> None:
        self._runner = runner
        self._settings = settings or PublishSettings()

    def env(self) -> CommandResult:
        return self._runner.run([self._settings.hugo_bin, "env"])

    def config(self) -> CommandResult:
        return self._runner.run([self._settings.hugo_bin, "config"])

    def version(self) -> CommandResult:
        return self._runner.run([self._settings.hugo_bin, "version"], capture=True)

    def build_command(self, destination: Path) -> list[str]:
        args = [self._settings.hugo_bin]
        if self._settings.verbose:
            args.append("--verbose")
        args.extend(["--destination", str(destination)])
        return args

    def build(self, destination: Path) -> CommandResult:
        """Genera el sitio en `destination` (se crea si no existe)."""

        destination.mkdir(parents=True, exist_ok=True)
        return self._runner.run(self.build_command(destination))

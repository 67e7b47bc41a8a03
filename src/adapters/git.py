"""Wrapper de git para la rama de GitHub Pages.

Solo cubre las operaciones que usa el pipeline: checkout de la rama de
pages, add/commit/push y la identidad local del bot.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import PublishSettings
from core.domain.models import CommandResult
from core.interfaces.runner import CommandRunner

logger = logging.getLogger(__name__)


class GitRepository:
    """Repositorio git de trabajo (por defecto, el directorio actual)."""

    def __init__(
        self,
        runner: CommandRunner,
        settings: PublishSettings | None = None,
        *,
        path: Path | None = None,
    ) -> None:
        self._runner = runner
        self._settings = settings or PublishSettings()
        self._path = path

    def _git(self, *args: str, check: bool = True, capture: bool = False) -> CommandResult:
        return self._runner.run(
            [self._settings.git_bin, *args],
            cwd=self._path,
            check=check,
            capture=capture,
        )

    def submodule_deinit(self, path: str = ".") -> CommandResult:
        return self._git("submodule", "deinit", path)

    def has_local_branch(self, name: str) -> bool:
        result = self._git(
            "rev-parse", "--verify", "--quiet", f"refs/heads/{name}", check=False, capture=True
        )
        return result.ok

    def has_remote_branch(self, name: str, remote: str | None = None) -> bool:
        # --exit-code: 2 cuando no hay refs que coincidan.
        result = self._git(
            "ls-remote",
            "--exit-code",
            "--heads",
            remote or self._settings.remote,
            name,
            check=False,
            capture=True,
        )
        return result.ok

    def checkout(self, name: str, *, recurse_submodules: bool = False) -> CommandResult:
        if recurse_submodules:
            return self._git("checkout", "--recurse-submodules", name)
        return self._git("checkout", name)

    def fetch_branch(self, name: str, remote: str | None = None) -> str:
        """Trae `name` del remoto a `refs/remotes/<remote>/<name>`.

        El refspec es explícito: en un clon `--single-branch` (actions/checkout)
        un `git fetch <remote> <name>` solo actualiza FETCH_HEAD.
        """

        remote = remote or self._settings.remote
        tracking_ref = f"refs/remotes/{remote}/{name}"
        self._git("fetch", remote, f"+refs/heads/{name}:{tracking_ref}")
        return tracking_ref

    def checkout_remote(self, name: str, *, recurse_submodules: bool = False) -> CommandResult:
        """Crea la rama local `name` a partir de la del remoto y cambia a ella."""

        tracking_ref = self.fetch_branch(name)
        args = ["checkout"]
        if recurse_submodules:
            args.append("--recurse-submodules")
        # --no-track: el push usa remoto y rama explícitos.
        args.extend(["--no-track", "-b", name, tracking_ref])
        return self._git(*args)

    def ensure_branch(self, name: str, *, recurse_submodules: bool = False) -> bool:
        """Cambia a `name`; la crea huérfana si no existe en local ni en el remoto.

        Devuelve True si la rama se creó.
        """

        if self.has_local_branch(name):
            self.checkout(name, recurse_submodules=recurse_submodules)
            return False

        if self.has_remote_branch(name):
            self.checkout_remote(name, recurse_submodules=recurse_submodules)
            return False

        logger.warning("branch %s not found, creating it as an orphan branch", name)
        self._git("checkout", "--orphan", name)
        return True

    def add_all(self) -> CommandResult:
        return self._git("add", "--", ".")

    def configure_identity(self, name: str, email: str) -> CommandResult:
        self._git("config", "--local", "user.email", email)
        return self._git("config", "--local", "user.name", name)

    def commit(self, message: str, *, allow_empty: bool = True) -> CommandResult:
        args = ["commit"]
        if allow_empty:
            args.append("--allow-empty")
        args.extend(["--message", message])
        return self._git(*args)

    def push(self, remote: str, branch: str) -> CommandResult:
        return self._git("push", remote, branch)

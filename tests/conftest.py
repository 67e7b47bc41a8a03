from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from core.config import PublishSettings
from core.domain.models import CommandResult
from core.errors import CommandFailedError


class RecordingRunner:
    """CommandRunner fake: records argv and answers with canned exit codes."""

    def __init__(self, returncodes: Optional[Dict[tuple, int]] = None) -> None:
        self.calls: List[List[str]] = []
        self._returncodes = returncodes or {}
        self.on_run: Optional[Callable[[List[str]], None]] = None

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,  # noqa: ARG002
        check: bool = True,
        capture: bool = False,  # noqa: ARG002
    ) -> CommandResult:
        argv = [str(a) for a in args]
        self.calls.append(argv)
        if self.on_run:
            self.on_run(argv)
        code = 0
        for prefix, rc in self._returncodes.items():
            if tuple(argv[: len(prefix)]) == prefix:
                code = rc
        result = CommandResult(args=argv, returncode=code)
        if check and code != 0:
            raise CommandFailedError(result)
        return result

    def commands(self) -> List[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_runner() -> Callable[..., RecordingRunner]:
    return RecordingRunner


@pytest.fixture
def settings(tmp_path: Path) -> PublishSettings:
    return PublishSettings(
        _env_file=None,
        runner_temp=tmp_path / "runner",
        home=tmp_path / "home",
        github_sha="abc123",
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("RUNNER_TEMP", "GITHUB_SHA"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)

"""Deploy/publish orchestration.

This module holds the whole "build the Hugo site and push it to the pages
branch" procedure. It is deliberately linear: every step runs once, in
order, and the first failure aborts the run. The CLI only renders progress
through `PipelineHooks`; printing and exit codes stay out of this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Sequence

from adapters.git import GitRepository
from adapters.hugo import HugoSite
from adapters.rsync import mirror
from core.config import PublishSettings
from core.domain.mode import PublishMode
from core.domain.models import CommandResult, PublishReport, StepRecord
from core.interfaces.runner import CommandRunner

logger = logging.getLogger(__name__)


@dataclass
class PublishRequest:
    """Parameters that control a pipeline run."""

    mode: PublishMode
    commit_sha: str
    build_dir: Path
    push: bool = True
    dry_run: bool = False
    extra_excludes: Sequence[str] = ()
    workdir: Path = field(default_factory=lambda: Path("."))

    def excludes(self) -> list[str]:
        patterns = list(self.mode.preserved_paths())
        for pattern in self.extra_excludes:
            if pattern not in patterns:
                patterns.append(pattern)
        return patterns


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    step_start: Callable[[str], None] | None = None
    step_done: Callable[[StepRecord], None] | None = None


class _StepRecorder:
    def __init__(self, report: PublishReport, hooks: PipelineHooks) -> None:
        self._report = report
        self._hooks = hooks

    def run(self, name: str, action: Callable[[], object]) -> object:
        if self._hooks.step_start:
            self._hooks.step_start(name)
        try:
            value = action()
        except Exception as exc:
            self._record(StepRecord(name=name, command=_command_of(exc), ok=False, detail=str(exc)))
            raise
        command = value.args if isinstance(value, CommandResult) else []
        self._record(StepRecord(name=name, command=command, ok=True))
        return value

    def _record(self, step: StepRecord) -> None:
        self._report.steps.append(step)
        if self._hooks.step_done:
            self._hooks.step_done(step)


def _command_of(exc: Exception) -> list[str]:
    result = getattr(exc, "result", None)
    if isinstance(result, CommandResult):
        return list(result.args)
    return []


def run_publish(
    request: PublishRequest,
    *,
    settings: PublishSettings,
    runner: CommandRunner,
    hooks: PipelineHooks | None = None,
) -> PublishReport:
    """Build the site and push it to the pages branch.

    Steps:
    1) publish mode only: `hugo env` and `hugo config` (debugging output)
    2) `hugo --destination <build_dir>`
    3) deploy mode only: `git submodule deinit .`
    4) switch to the pages branch (created as orphan if missing)
    5) rsync the build into the working tree, preserving `.git` (and `CNAME`)
    6) add, set the bot identity, commit (empty commits allowed)
    7) push, unless disabled
    """

    mode = request.mode
    message = mode.commit_message(request.commit_sha)
    report = PublishReport(
        mode=mode,
        branch=settings.branch,
        remote=settings.remote,
        build_dir=request.build_dir,
        commit_message=message,
        dry_run=request.dry_run,
    )
    steps = _StepRecorder(report, hooks or PipelineHooks())

    hugo = HugoSite(runner, settings)
    git = GitRepository(runner, settings, path=request.workdir)

    logger.info("%s: building %s into %s", mode.value, request.workdir, request.build_dir)

    if mode.runs_diagnostics():
        steps.run("hugo env", hugo.env)
        steps.run("hugo config", hugo.config)

    steps.run("hugo build", lambda: hugo.build(request.build_dir))

    if mode.deinit_submodules():
        steps.run("submodule deinit", git.submodule_deinit)

    created = steps.run(
        "checkout",
        lambda: git.ensure_branch(
            settings.branch,
            recurse_submodules=mode.recurse_submodules_on_checkout(),
        ),
    )
    report.branch_created = bool(created)

    steps.run(
        "sync",
        lambda: mirror(
            runner,
            request.build_dir,
            request.workdir,
            excludes=request.excludes(),
            delete=True,
            verbose=settings.verbose,
            rsync_bin=settings.rsync_bin,
        ),
    )

    steps.run("add", git.add_all)
    steps.run("identity", lambda: git.configure_identity(settings.bot_name, settings.bot_email))
    steps.run("commit", lambda: git.commit(message, allow_empty=True))

    if request.push:
        steps.run("push", lambda: git.push(settings.remote, settings.branch))
        report.pushed = not request.dry_run
    else:
        logger.info("push skipped; commit left on local %s", settings.branch)

    report.finished_at = datetime.now(timezone.utc)
    return report

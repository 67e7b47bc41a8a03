"""CLI principal (Typer).

Comandos:
- `deploy` / `publish`: construye con Hugo y sube el resultado a la rama de pages.
- `download`: GET condicional de un fichero.
- `doctor`: diagnóstico del entorno.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.conditional_download import download_if_modified
from adapters.http_client import build_async_client
from adapters.json_exporter import export_report_json
from adapters.process_runner import SubprocessRunner
from cli import doctor
from cli.ui_components import (
    build_report_panel,
    build_steps_table,
    format_download,
    format_step,
    print_banner,
)
from core.config import PublishSettings
from core.domain.mode import PublishMode
from core.domain.models import DownloadResult
from core.errors import CommandFailedError, HugoPagesError
from core.interfaces.runner import CommandRunner
from core.services.publish_pipeline import PipelineHooks, PublishRequest, run_publish

app = typer.Typer(
    no_args_is_help=True,
    help="Build a Hugo site and push the generated HTML to a GitHub Pages branch.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(quiet: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False, markup=False)],
        force=True,
    )


def build_runner(*, dry_run: bool) -> CommandRunner:
    return SubprocessRunner(dry_run=dry_run)


def _fail(exc: HugoPagesError) -> typer.Exit:
    _err_console.print(f"[red]error:[/red] {exc}")
    if isinstance(exc, CommandFailedError):
        return typer.Exit(code=exc.returncode or 1)
    return typer.Exit(code=1)


def _run_mode(
    mode: PublishMode,
    *,
    build_dir: Path | None,
    sha: str | None,
    push: bool,
    dry_run: bool,
    excludes: list[str] | None,
    report_json: Path | None,
    quiet: bool,
) -> None:
    _configure_logging(quiet)
    if not quiet:
        print_banner(_console, f"{mode.value} -> GitHub Pages")

    settings = PublishSettings()
    try:
        request = PublishRequest(
            mode=mode,
            commit_sha=sha or settings.require_commit_sha(),
            build_dir=build_dir or settings.resolve_build_dir(mode),
            push=push,
            dry_run=dry_run,
            extra_excludes=tuple(excludes or ()),
        )
    except HugoPagesError as exc:
        raise _fail(exc) from exc

    hooks = PipelineHooks(step_done=lambda step: _console.print(format_step(step)))
    try:
        report = run_publish(
            request,
            settings=settings,
            runner=build_runner(dry_run=dry_run),
            hooks=hooks,
        )
    except HugoPagesError as exc:
        raise _fail(exc) from exc

    if not quiet:
        _console.print(build_steps_table(report))
        _console.print(build_report_panel(report))
    if report_json is not None:
        path = export_report_json(report=report, output_path=report_json)
        _console.print(f"[green]Report written to:[/green] {path}")


_BUILD_DIR = typer.Option(None, "--build-dir", help="Hugo output directory (default depends on the mode).")
_SHA = typer.Option(None, "--sha", help="Source commit for the message (default: $GITHUB_SHA).")
_PUSH = typer.Option(True, "--push/--no-push", help="Push the pages branch after committing.")
_DRY_RUN = typer.Option(False, "--dry-run", help="Print the commands without running them.")
_EXCLUDE = typer.Option(None, "--exclude", help="Extra paths to preserve in the pages branch.")
_REPORT = typer.Option(None, "--report-json", help="Write a JSON report of the run.")
_QUIET = typer.Option(False, "--quiet", "-q", help="Only print warnings and errors.")


@app.command()
def deploy(
    build_dir: Optional[Path] = _BUILD_DIR,
    sha: Optional[str] = _SHA,
    push: bool = _PUSH,
    dry_run: bool = _DRY_RUN,
    exclude: Optional[List[str]] = _EXCLUDE,
    report_json: Optional[Path] = _REPORT,
    quiet: bool = _QUIET,
) -> None:
    """Build into $RUNNER_TEMP/build, deinit submodules and push to gh-pages."""

    _run_mode(
        PublishMode.DEPLOY,
        build_dir=build_dir,
        sha=sha,
        push=push,
        dry_run=dry_run,
        excludes=exclude,
        report_json=report_json,
        quiet=quiet,
    )


@app.command()
def publish(
    build_dir: Optional[Path] = _BUILD_DIR,
    sha: Optional[str] = _SHA,
    push: bool = _PUSH,
    dry_run: bool = _DRY_RUN,
    exclude: Optional[List[str]] = _EXCLUDE,
    report_json: Optional[Path] = _REPORT,
    quiet: bool = _QUIET,
) -> None:
    """Print Hugo diagnostics, build into ~/site-build and push, keeping CNAME."""

    _run_mode(
        PublishMode.PUBLISH,
        build_dir=build_dir,
        sha=sha,
        push=push,
        dry_run=dry_run,
        excludes=exclude,
        report_json=report_json,
        quiet=quiet,
    )


async def _download(url: str, path: Path, settings: PublishSettings) -> DownloadResult:
    async with build_async_client(settings) as client:
        return await download_if_modified(url, path, client=client)


@app.command()
def download(
    url: str = typer.Argument(..., help="Resource to fetch."),
    path: Path = typer.Argument(..., help="Local file; its mtime drives If-Modified-Since."),
    quiet: bool = _QUIET,
) -> None:
    """Download URL to PATH only if the server copy changed."""

    _configure_logging(quiet)
    try:
        result = asyncio.run(_download(url, path, PublishSettings()))
    except httpx.HTTPError as exc:
        _err_console.print(f"[red]error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    _console.print(format_download(result))


def run() -> None:
    app()

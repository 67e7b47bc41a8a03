"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.hugo import HugoSite
from adapters.process_runner import SubprocessRunner
from core.config import PublishSettings, write_user_env_vars
from core.domain.mode import PublishMode
from core.errors import HugoPagesError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_tool(executable: str) -> tuple[bool, str]:
    found = shutil.which(executable)
    if found is None:
        return False, "not found on PATH"
    return True, found


def _check_hugo_version(settings: PublishSettings) -> tuple[bool, str]:
    try:
        result = HugoSite(SubprocessRunner(), settings).version()
    except HugoPagesError as exc:
        return False, str(exc)
    return True, result.stdout.strip() or "OK"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = PublishSettings()

    table = Table(title="hugo-pages Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Tools
    failures = 0
    for label, executable in (
        ("hugo", settings.hugo_bin),
        ("git", settings.git_bin),
        ("rsync", settings.rsync_bin),
    ):
        ok, detail = _check_tool(executable)
        failures += 0 if ok else 1
        table.add_row(label, "OK" if ok else "FAIL", detail)

    if shutil.which(settings.hugo_bin):
        ok, detail = _check_hugo_version(settings)
        table.add_row("hugo version", "OK" if ok else "FAIL", detail)

    # CI environment
    if settings.github_sha:
        table.add_row("GITHUB_SHA", "OK", settings.github_sha)
    else:
        table.add_row("GITHUB_SHA", "MISSING", "pass --sha when running outside CI")

    for mode in PublishMode:
        try:
            table.add_row(f"{mode.value} build dir", "OK", str(settings.resolve_build_dir(mode)))
        except HugoPagesError as exc:
            table.add_row(f"{mode.value} build dir", "MISSING", f"{exc} (or pass --build-dir)")

    table.add_row("Pages branch", "OK", f"{settings.remote}/{settings.branch}")

    _console.print(table)

    if failures:
        _console.print("\n[yellow]Note:[/yellow] install the missing tools or point HUGO_PAGES_*_BIN at them.")
        raise typer.Exit(code=1)


@app.command(name="init")
def init() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = PublishSettings()

    branch = typer.prompt("Pages branch", default=settings.branch, show_default=True).strip()
    remote = typer.prompt("Remote", default=settings.remote, show_default=True).strip()
    bot_name = typer.prompt("Commit author name", default=settings.bot_name, show_default=True).strip()
    bot_email = typer.prompt("Commit author email", default=settings.bot_email, show_default=True).strip()

    if not branch or not remote:
        raise typer.BadParameter("branch and remote are required")

    env_path = write_user_env_vars(
        {
            "HUGO_PAGES_BRANCH": branch,
            "HUGO_PAGES_REMOTE": remote,
            "HUGO_PAGES_BOT_NAME": bot_name,
            "HUGO_PAGES_BOT_EMAIL": bot_email,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

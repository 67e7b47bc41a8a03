from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli import main as cli_main

cli = CliRunner()


@pytest.fixture
def fake_runner(monkeypatch: pytest.MonkeyPatch, make_runner):
    holder = {}

    def build(*, dry_run: bool):
        holder["dry_run"] = dry_run
        holder["runner"] = holder.get("runner") or make_runner()
        return holder["runner"]

    monkeypatch.setattr(cli_main, "build_runner", build)
    return holder


def test_deploy_uses_ci_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, fake_runner) -> None:
    monkeypatch.setenv("RUNNER_TEMP", str(tmp_path / "rt"))
    monkeypatch.setenv("GITHUB_SHA", "cafe01")

    result = cli.invoke(cli_main.app, ["deploy", "--quiet"])

    assert result.exit_code == 0, result.output
    commands = fake_runner["runner"].commands()
    assert commands[0] == f"hugo --verbose --destination {tmp_path / 'rt' / 'build'}"
    assert commands[-2] == "git commit --allow-empty --message deploy commit cafe01"
    assert fake_runner["dry_run"] is False


def test_publish_with_options_and_report(tmp_path: Path, fake_runner) -> None:
    report = tmp_path / "report.json"

    result = cli.invoke(
        cli_main.app,
        [
            "publish",
            "--sha",
            "beef",
            "--build-dir",
            str(tmp_path / "out"),
            "--no-push",
            "--dry-run",
            "--report-json",
            str(report),
        ],
    )

    assert result.exit_code == 0, result.output
    assert fake_runner["dry_run"] is True
    assert not any(c.startswith("git push") for c in fake_runner["runner"].commands())
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["commit_message"] == "publish changes from commit beef"
    assert payload["pushed"] is False


def test_missing_sha_exits_with_error(tmp_path: Path, fake_runner) -> None:
    result = cli.invoke(cli_main.app, ["publish", "--build-dir", str(tmp_path), "--quiet"])

    assert result.exit_code == 1
    assert "runner" not in fake_runner


def test_failed_command_exit_code_is_forwarded(tmp_path: Path, fake_runner, make_runner) -> None:
    fake_runner["runner"] = make_runner({("git", "push"): 128})

    result = cli.invoke(
        cli_main.app,
        ["deploy", "--sha", "x", "--build-dir", str(tmp_path / "out"), "--quiet"],
    )

    assert result.exit_code == 128


def test_download_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    import httpx

    from adapters import http_client

    original = http_client.build_async_client

    def patched(settings=None, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(200, content=b"ok"))
        return original(settings, **kwargs)

    monkeypatch.setattr(cli_main, "build_async_client", patched)
    target = tmp_path / "file.txt"

    result = cli.invoke(cli_main.app, ["download", "https://example.com/file.txt", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_bytes() == b"ok"


def test_download_http_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    import httpx

    from adapters import http_client

    original = http_client.build_async_client

    def patched(settings=None, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(500))
        return original(settings, **kwargs)

    monkeypatch.setattr(cli_main, "build_async_client", patched)

    result = cli.invoke(cli_main.app, ["download", "https://example.com/x", str(tmp_path / "x")])

    assert result.exit_code == 1


def test_doctor_init_writes_user_env(tmp_path: Path) -> None:
    result = cli.invoke(cli_main.app, ["doctor", "init"], input="pages\nupstream\nbot\nbot@example.com\n")

    assert result.exit_code == 0, result.output
    env_file = tmp_path / "xdg" / "hugo-pages" / ".env"
    text = env_file.read_text(encoding="utf-8")
    assert "HUGO_PAGES_BRANCH=pages" in text
    assert "HUGO_PAGES_BOT_EMAIL=bot@example.com" in text

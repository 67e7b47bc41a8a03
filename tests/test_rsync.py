from __future__ import annotations

from pathlib import Path

from adapters.rsync import build_mirror_command, mirror


def test_source_always_gets_trailing_slash() -> None:
    args = build_mirror_command(Path("/tmp/build"), Path("."))
    assert args[-2:] == ["/tmp/build/", "."]


def test_flags_and_excludes_order() -> None:
    args = build_mirror_command(
        Path("/b"),
        Path("."),
        excludes=[".git", "CNAME"],
        rsync_bin="/usr/bin/rsync",
    )
    assert args == [
        "/usr/bin/rsync",
        "--verbose",
        "--archive",
        "--delete",
        "--exclude",
        ".git",
        "--exclude",
        "CNAME",
        "/b/",
        ".",
    ]


def test_without_delete_or_verbose() -> None:
    args = build_mirror_command(Path("/b"), Path("/site"), delete=False, verbose=False)
    assert args == ["rsync", "--archive", "/b/", "/site"]


def test_mirror_goes_through_runner(runner) -> None:
    mirror(runner, Path("/b"), Path("."), excludes=[".git"])
    assert runner.commands() == ["rsync --verbose --archive --delete --exclude .git /b/ ."]

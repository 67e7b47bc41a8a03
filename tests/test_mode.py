from __future__ import annotations

import pytest

from core.domain.mode import PublishMode


def test_deploy_preserves_only_git_dir() -> None:
    assert PublishMode.DEPLOY.preserved_paths() == (".git",)


def test_publish_preserves_cname() -> None:
    assert PublishMode.PUBLISH.preserved_paths() == (".git", "CNAME")


@pytest.mark.parametrize(
    "mode, expected",
    [
        (PublishMode.DEPLOY, "deploy commit deadbeef"),
        (PublishMode.PUBLISH, "publish changes from commit deadbeef"),
    ],
)
def test_commit_message(mode: PublishMode, expected: str) -> None:
    assert mode.commit_message("deadbeef") == expected


def test_mode_specific_steps() -> None:
    assert PublishMode.DEPLOY.deinit_submodules()
    assert not PublishMode.DEPLOY.runs_diagnostics()
    assert not PublishMode.DEPLOY.recurse_submodules_on_checkout()

    assert not PublishMode.PUBLISH.deinit_submodules()
    assert PublishMode.PUBLISH.runs_diagnostics()
    assert PublishMode.PUBLISH.recurse_submodules_on_checkout()

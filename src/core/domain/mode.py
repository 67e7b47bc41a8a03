"""Publishing modes.

The two workflows differ only in a handful of details (build directory,
submodule handling, preserved files, commit message). Keeping those
differences on the enum lets the pipeline stay a single linear procedure.
"""

from __future__ import annotations

from enum import Enum


class PublishMode(str, Enum):
    """Supported workflows for pushing a Hugo build to the pages branch."""

    DEPLOY = "deploy"
    PUBLISH = "publish"

    def preserved_paths(self) -> tuple[str, ...]:
        """Paths in the branch checkout that the mirror must never delete."""

        if self is PublishMode.PUBLISH:
            # CNAME is used by GitHub Pages for the custom domain.
            return (".git", "CNAME")
        return (".git",)

    def commit_message(self, sha: str) -> str:
        if self is PublishMode.PUBLISH:
            return f"publish changes from commit {sha}"
        return f"deploy commit {sha}"

    def runs_diagnostics(self) -> bool:
        """Whether `hugo env` and `hugo config` are printed before the build."""

        return self is PublishMode.PUBLISH

    def deinit_submodules(self) -> bool:
        return self is PublishMode.DEPLOY

    def recurse_submodules_on_checkout(self) -> bool:
        return self is PublishMode.PUBLISH

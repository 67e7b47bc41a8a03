from __future__ import annotations

import json
from pathlib import Path

from adapters.json_exporter import export_report_json
from core.domain.mode import PublishMode
from core.domain.models import PublishReport, StepRecord


def test_report_is_written_with_stable_keys(tmp_path: Path) -> None:
    report = PublishReport(
        mode=PublishMode.PUBLISH,
        branch="gh-pages",
        remote="origin",
        build_dir=tmp_path / "site",
        commit_message="publish changes from commit abc",
        steps=[StepRecord(name="hugo build", command=["hugo", "--destination", "x"])],
        pushed=True,
    )

    out = export_report_json(report=report, output_path=tmp_path / "reports" / "run.json")

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["mode"] == "publish"
    assert payload["pushed"] is True
    assert payload["steps"][0]["command"] == ["hugo", "--destination", "x"]
    assert list(payload) == sorted(payload)

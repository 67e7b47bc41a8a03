"""Exportación JSON del reporte de ejecución.

Por qué JSON:
- Se puede subir como artefacto del workflow de CI.
- Formato estable (claves ordenadas) para poder comparar ejecuciones.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import PublishReport


def export_report_json(*, report: PublishReport, output_path: Path) -> Path:
    """Exporta `PublishReport` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

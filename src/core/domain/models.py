"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación y serialización (JSON) sin acoplar el Core a subprocess/httpx.

Nota:
- Estos modelos describen *qué* pasó en una ejecución, no *cómo* se ejecuta.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from core.domain.mode import PublishMode


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CommandResult(BaseModel):
    """Resultado de invocar un binario externo."""

    args: list[str] = Field(
        ...,
        min_length=1,
        description="argv completo (ejecutable incluido).",
    )
    returncode: int = Field(default=0, description="Código de salida del proceso.")
    stdout: str = Field(default="", description="Salida estándar si se capturó.")
    stderr: str = Field(default="", description="Error estándar si se capturó.")
    duration_seconds: float = Field(default=0.0, ge=0.0)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class StepRecord(BaseModel):
    """Un paso del pipeline, tal como quedó registrado."""

    name: str = Field(..., min_length=1, max_length=64)
    command: list[str] = Field(default_factory=list)
    ok: bool = Field(default=True)
    detail: str | None = Field(default=None)


class PublishReport(BaseModel):
    """Resumen de una ejecución deploy/publish.

    Por qué existe:
    - Permite mostrar la ejecución en la CLI y exportarla a JSON
      (p.ej. como artefacto del workflow de CI).
    """

    mode: PublishMode
    branch: str = Field(..., min_length=1)
    remote: str = Field(..., min_length=1)
    build_dir: Path
    commit_message: str = Field(..., min_length=1)
    steps: list[StepRecord] = Field(default_factory=list)
    branch_created: bool = Field(
        default=False,
        description="True si la rama de pages no existía y se creó huérfana.",
    )
    pushed: bool = Field(default=False)
    dry_run: bool = Field(
        default=False,
        description="True si los comandos solo se registraron, sin ejecutarse.",
    )
    started_at: datetime = Field(default_factory=_utcnow)
    finished_at: datetime | None = Field(default=None)

    @property
    def ok(self) -> bool:
        return all(step.ok for step in self.steps)


class DownloadResult(BaseModel):
    """Resultado de un GET condicional."""

    url: str = Field(..., min_length=1)
    path: Path
    status_code: int = Field(..., ge=100, le=599)
    downloaded: bool = Field(
        default=False,
        description="False cuando el servidor respondió 304 Not Modified.",
    )
    last_modified: datetime | None = Field(default=None)
    bytes_written: int = Field(default=0, ge=0)

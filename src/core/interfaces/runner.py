"""Contrato de ejecución de comandos externos.

Por qué Protocol:
- El pipeline solo necesita "ejecuta este argv"; el runner real (subprocess)
  y los fakes de tests son intercambiables sin herencia.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import CommandResult


@runtime_checkable
class CommandRunner(Protocol):
    """Contrato mínimo para lanzar un binario externo.

    Reglas de diseño:
    - Síncrono: los pasos se ejecutan en serie, igual que un script de shell.
    - Con `check=True` un código distinto de cero lanza `CommandFailedError`.
    """

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        check: bool = True,
        capture: bool = False,
    ) -> CommandResult:
        """Ejecuta `args` y devuelve el resultado normalizado."""

        ...

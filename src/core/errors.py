"""Errores del Core.

La CLI traduce estas excepciones a códigos de salida; el resto de capas
solo las propaga.
"""

from __future__ import annotations

from core.domain.models import CommandResult


class HugoPagesError(Exception):
    """Base de todos los errores de la herramienta."""


class MissingEnvironmentError(HugoPagesError):
    """Variable de entorno obligatoria sin definir."""

    def __init__(self, name: str) -> None:
        super().__init__(f"required environment variable {name} is not set")
        self.name = name


class ToolNotFoundError(HugoPagesError):
    """Ejecutable externo no encontrado en PATH."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"executable not found: {executable}")
        self.executable = executable


class ToolNotExecutableError(HugoPagesError):
    """El ejecutable existe pero no tiene permiso de ejecución."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"executable is not runnable (permission denied): {executable}")
        self.executable = executable


class CommandFailedError(HugoPagesError):
    """Un comando externo terminó con código distinto de cero."""

    def __init__(self, result: CommandResult) -> None:
        super().__init__(
            f"command failed with exit code {result.returncode}: {' '.join(result.args)}"
        )
        self.result = result

    @property
    def returncode(self) -> int:
        return self.result.returncode

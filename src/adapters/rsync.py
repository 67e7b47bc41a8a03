"""Sincronización del build con la raíz del repositorio vía rsync."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.domain.models import CommandResult
from core.interfaces.runner import CommandRunner


def build_mirror_command(
    source: Path,
    destination: Path,
    *,
    excludes: Iterable[str] = (),
    delete: bool = True,
    verbose: bool = True,
    rsync_bin: str = "rsync",
) -> list[str]:
    """argv de rsync para reflejar el *contenido* de `source` en `destination`.

    La barra final en el origen es obligatoria: sin ella rsync copia el
    directorio en sí y no su contenido.
    """

    args = [rsync_bin]
    if verbose:
        args.append("--verbose")
    args.append("--archive")
    if delete:
        args.append("--delete")
    for pattern in excludes:
        args.extend(["--exclude", pattern])

    src = str(source)
    if not src.endswith("/"):
        src += "/"
    args.extend([src, str(destination)])
    return args


def mirror(
    runner: CommandRunner,
    source: Path,
    destination: Path,
    *,
    excludes: Iterable[str] = (),
    delete: bool = True,
    verbose: bool = True,
    rsync_bin: str = "rsync",
) -> CommandResult:
    """Sincroniza y elimina ficheros obsoletos, respetando `excludes`."""

    return runner.run(
        build_mirror_command(
            source,
            destination,
            excludes=excludes,
            delete=delete,
            verbose=verbose,
            rsync_bin=rsync_bin,
        )
    )

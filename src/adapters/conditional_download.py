"""GET condicional con `If-Modified-Since` / `Last-Modified`.

Reglas:
- Si el fichero local existe, su mtime viaja como `If-Modified-Since`.
- 304: el fichero no se toca.
- 2xx: se escribe el cuerpo y, si hay `Last-Modified`, se usa como mtime,
  así la siguiente petición pregunta por la fecha del servidor.
- Cualquier otro estado o error de red se propaga tal cual (sin reintentos).
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from pathlib import Path

import httpx

from core.domain.models import DownloadResult

logger = logging.getLogger(__name__)


def format_http_date(value: datetime) -> str:
    """Fecha HTTP (IMF-fixdate), siempre en GMT."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def parse_http_date(value: str | None) -> datetime | None:
    """Parsea una cabecera de fecha HTTP; None si falta o es inválida."""

    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _local_mtime(path: Path) -> datetime | None:
    if not path.is_file():
        return None
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


async def download_if_modified(url: str, path: Path, *, client: httpx.AsyncClient) -> DownloadResult:
    headers: dict[str, str] = {}
    mtime = _local_mtime(path)
    if mtime is not None:
        headers["If-Modified-Since"] = format_http_date(mtime)

    response = await client.get(url, headers=headers)
    last_modified = parse_http_date(response.headers.get("Last-Modified"))

    if response.status_code == httpx.codes.NOT_MODIFIED:
        logger.info("not modified: %s", url)
        return DownloadResult(
            url=url,
            path=path,
            status_code=response.status_code,
            downloaded=False,
            last_modified=last_modified or mtime,
        )

    response.raise_for_status()

    body = response.content
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as fh:
        fh.write(body)

    if last_modified is not None:
        stamp = last_modified.timestamp()
        os.utime(path, (stamp, stamp))

    logger.info("downloaded %s -> %s (%d bytes)", url, path, len(body))
    return DownloadResult(
        url=url,
        path=path,
        status_code=response.status_code,
        downloaded=True,
        last_modified=last_modified,
        bytes_written=len(body),
    )

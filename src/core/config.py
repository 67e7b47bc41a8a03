"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Las variables del runner de CI (`RUNNER_TEMP`, `HOME`, `GITHUB_SHA`) se
  leen tal cual, sin prefijo; el resto usa `HUGO_PAGES_`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.mode import PublishMode
from core.errors import MissingEnvironmentError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "hugo-pages"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "hugo-pages"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "hugo-pages"
    return Path.home() / ".config" / "hugo-pages"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# hugo-pages user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class PublishSettings(BaseSettings):
    """Configuración central de la herramienta.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) para CLI y adaptadores.
    - Un único contrato para los binarios externos (hugo, git, rsync).
    """

    model_config = SettingsConfigDict(
        env_prefix="HUGO_PAGES_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero, luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    hugo_bin: str = Field(default="hugo", min_length=1, description="Ejecutable de Hugo.")
    git_bin: str = Field(default="git", min_length=1, description="Ejecutable de git.")
    rsync_bin: str = Field(default="rsync", min_length=1, description="Ejecutable de rsync.")

    branch: str = Field(
        default="gh-pages",
        min_length=1,
        description="Rama servida por GitHub Pages.",
    )
    remote: str = Field(default="origin", min_length=1, description="Remoto para el push.")
    build_dir: Path | None = Field(
        default=None,
        description="Directorio de salida de Hugo; si falta se deriva del modo.",
    )
    verbose: bool = Field(
        default=True,
        description="Pasa `--verbose` a hugo y rsync.",
    )

    bot_name: str = Field(
        default="github-actions[bot]",
        min_length=1,
        description="Autor de los commits (git config --local user.name).",
    )
    bot_email: str = Field(
        default="41898282+github-actions[bot]@users.noreply.github.com",
        min_length=3,
        description="Email del autor (git config --local user.email).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="hugo-pages/0.1",
        min_length=1,
        description="User-Agent para descargas condicionales.",
    )

    # Variables del runner de CI, sin prefijo.
    runner_temp: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("RUNNER_TEMP", "runner_temp"),
    )
    home: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("HOME", "home"),
    )
    github_sha: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_SHA", "github_sha"),
    )

    def resolve_build_dir(self, mode: PublishMode) -> Path:
        """Directorio donde Hugo deja el sitio generado.

        Reglas:
        - `build_dir` explícito gana siempre.
        - deploy: `$RUNNER_TEMP/build` (en GitHub Actions no se puede usar /tmp).
        - publish: `$HOME/site-build`.
        """

        if self.build_dir is not None:
            return self.build_dir

        if mode is PublishMode.DEPLOY:
            if self.runner_temp is None:
                raise MissingEnvironmentError("RUNNER_TEMP")
            return self.runner_temp / "build"

        home = self.home if self.home is not None else Path.home()
        return home / "site-build"

    def require_commit_sha(self) -> str:
        if not self.github_sha:
            raise MissingEnvironmentError("GITHUB_SHA")
        return self.github_sha

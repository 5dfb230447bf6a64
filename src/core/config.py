"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/almacenamiento) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "country-roster"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "country-roster"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "country-roster"
    return Path.home() / ".config" / "country-roster"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def get_default_storage_path() -> Path:
    return get_user_config_dir() / "storage.json"


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

    lines = ["# country-roster user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="COUNTRY_ROSTER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request al proveedor de países (segundos).",
    )
    user_agent: str = Field(
        default="country-roster/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones HTTP.",
    )
    resolver_base_url: str = Field(
        default="https://restcountries.com/v3.1",
        min_length=8,
        description="Base URL de la API REST Countries.",
    )

    storage_path: Path = Field(
        default_factory=get_default_storage_path,
        description="Archivo JSON clave-valor donde se persiste el roster.",
    )
    storage_key: str = Field(
        default="selectedCountries",
        min_length=1,
        description="Clave del blob que contiene el roster serializado.",
    )
    on_corrupt_storage: Literal["reset", "fail"] = Field(
        default="reset",
        description="Qué hacer si el blob persistido está corrupto: vaciar o abortar.",
    )

    max_countries: int = Field(
        default=16,
        ge=1,
        description="Máximo de países en el roster.",
    )
    max_per_continent: int = Field(
        default=4,
        ge=1,
        description="Máximo de países por continente.",
    )

    default_language: Language = Field(
        default=Language.SPANISH,
        description="Idioma de los mensajes de estado (es/en).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )

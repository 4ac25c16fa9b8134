"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los flags de la CLI tienen prioridad; estos valores son los defaults.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import NamingPolicy


def get_user_config_dir() -> Path:
    """Dónde buscar el `.env` de pdfstamp del usuario (APPDATA, Application Support o XDG)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pdfstamp"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pdfstamp"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pdfstamp"
    return Path.home() / ".config" / "pdfstamp"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Defaults de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PDFSTAMP_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero, luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    target_dpi: float = Field(
        default=300.0,
        gt=0,
        description="DPI objetivo con el que se escala la imagen del stamp.",
    )
    output_suffix: str = Field(
        default="stamped",
        min_length=1,
        description="Sufijo insertado en el nombre de salida (política 'suffix').",
    )
    append_suffix: str = Field(
        default="out",
        min_length=1,
        description="Extensión añadida al nombre completo (política 'append').",
    )
    naming_policy: NamingPolicy = Field(
        default=NamingPolicy.SUFFIX,
        description="Esquema de nombres de salida: suffix | append.",
    )
    text_font: str = Field(
        default="Helvetica",
        min_length=1,
        description="Fuente estándar PDF para los stamps de texto.",
    )
    text_font_size: float = Field(
        default=12.0,
        gt=0,
        description="Tamaño (pt) de los stamps de texto.",
    )

"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (ldd/Docker) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.platform import Architecture


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "native-layer"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "native-layer"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "native-layer"
    return Path.home() / ".config" / "native-layer"


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


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# native-layer user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Los defaults reproducen el layer de poppler para arm64; cualquier campo se
    puede sobreescribir con `NATIVE_LAYER_<CAMPO>` o desde los flags de la CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="NATIVE_LAYER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    ldd_command: str = Field(
        default="ldd",
        min_length=1,
        description="Ejecutable que lista las dependencias dinámicas de un binario.",
    )
    docker_command: str = Field(
        default="docker",
        min_length=1,
        description="Ejecutable del toolchain de contenedores.",
    )

    platform: Architecture = Field(
        default_factory=Architecture.default,
        description="Plataforma destino del build (p.ej. 'linux/arm64').",
    )
    dockerfile: Path = Field(
        default=Path("poppler.Dockerfile"),
        description="Dockerfile que produce el zip del layer.",
    )
    build_context: Path = Field(
        default=Path("."),
        description="Contexto de build pasado a `docker buildx build`.",
    )
    image_tag: str = Field(
        default="poppler-lambda-layer-arm64",
        min_length=1,
        description="Tag de la imagen construida (la imagen no se borra).",
    )
    artifact_path: str = Field(
        default="/poppler-lambda-layer.zip",
        min_length=2,
        description="Ruta absoluta del artefacto dentro del contenedor.",
    )
    output_path: Path = Field(
        default=Path("poppler-lambda-layer.zip"),
        description="Ruta local donde se deja el artefacto extraído.",
    )

    @field_validator("artifact_path")
    @classmethod
    def _artifact_must_be_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("artifact_path must be an absolute path inside the container")
        return value

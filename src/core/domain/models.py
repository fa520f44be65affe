"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a subprocess o a Docker.
- Facilita exportar el resultado de un staging como manifest JSON.

Nota:
- Estos modelos describen *qué* se copió o construyó, no *cómo*.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from core.domain.platform import Architecture


class DependencyReport(BaseModel):
    """Dependencias dinámicas de un binario, tal como las reporta el lister.

    Por qué guardar `raw_output`:
    - El operador ve la salida cruda del lister; el modelo conserva la misma
      evidencia para `list-deps --json` y para depurar parsers.
    """

    binary: Path = Field(..., description="Binario inspeccionado.")
    raw_output: str = Field(
        default="",
        description="Salida textual del lister (stdout).",
    )
    paths: list[Path] = Field(
        default_factory=list,
        description="Rutas absolutas deduplicadas, en orden estable.",
    )
    unresolved: list[str] = Field(
        default_factory=list,
        description="Librerías marcadas como 'not found' por el loader.",
    )


class CopiedArtifact(BaseModel):
    """Un fichero colocado (o respetado) bajo `bin/` o `lib/`."""

    source: Path = Field(..., description="Ruta original.")
    destination: Path = Field(..., description="Ruta final dentro del destino.")
    kind: Literal["binary", "library"] = Field(
        ...,
        description="'binary' va a bin/, 'library' va a lib/.",
    )
    skipped: bool = Field(
        default=False,
        description="True si ya existía un fichero con ese nombre (no-clobber).",
    )
    reason: str | None = Field(
        default=None,
        description="Motivo del skip, si aplica.",
    )


class StagingResult(BaseModel):
    """Resultado de una invocación del Dependency Copier."""

    binary: Path
    destination: Path
    artifacts: list[CopiedArtifact] = Field(default_factory=list)
    missing: list[Path] = Field(
        default_factory=list,
        description="Rutas reportadas que no existen en disco (se ignoran).",
    )
    unresolved: list[str] = Field(default_factory=list)

    @property
    def copied(self) -> list[CopiedArtifact]:
        return [a for a in self.artifacts if not a.skipped]

    @property
    def skipped(self) -> list[CopiedArtifact]:
        return [a for a in self.artifacts if a.skipped]


class LayerBuildPlan(BaseModel):
    """Parámetros fijos de un build del layer."""

    platform: Architecture = Field(default_factory=Architecture.default)
    dockerfile: Path = Field(default=Path("poppler.Dockerfile"))
    context: Path = Field(default=Path("."))
    image_tag: str = Field(default="poppler-lambda-layer-arm64", min_length=1)
    artifact_path: str = Field(
        default="/poppler-lambda-layer.zip",
        pattern=r"^/",
        description="Ruta absoluta dentro del contenedor.",
    )
    output_path: Path = Field(default=Path("poppler-lambda-layer.zip"))


class LayerBuildResult(BaseModel):
    """Resultado de `build_layer`."""

    plan: LayerBuildPlan
    container_id: str = Field(..., min_length=1)
    output_path: Path
    size_bytes: int = Field(default=0, ge=0)
    container_removed: bool = Field(
        default=False,
        description="True solo si `docker rm` terminó bien.",
    )

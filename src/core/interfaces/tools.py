"""Contratos de las herramientas externas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que `ldd` o la CLI de Docker sean intercambiables y testeables sin
  acoplar el Core a subprocess.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class DependencyLister(Protocol):
    """Inspección del loader dinámico sobre un binario."""

    def list_dependencies(self, binary: Path) -> str:
        """Devuelve el reporte textual (formato `ldd`) de `binary`.

        Un binario estático devuelve un reporte sin rutas, no un error.
        """

        ...


@runtime_checkable
class ContainerRuntime(Protocol):
    """Las cuatro operaciones del toolchain de contenedores que usa el builder."""

    def build(self, *, platform: str, dockerfile: Path, tag: str, context: Path) -> None:
        ...

    def create(self, *, platform: str, image: str) -> str:
        """Crea (sin arrancar) un contenedor y devuelve su id."""

        ...

    def copy_out(self, *, container_id: str, source: str, destination: Path) -> None:
        ...

    def remove(self, container_id: str) -> None:
        ...

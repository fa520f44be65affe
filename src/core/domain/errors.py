"""Errores del dominio.

Cada error lleva su `exit_code`: la CLI es la única capa que los captura y
los convierte en un código de salida del proceso.
"""

from __future__ import annotations

from collections.abc import Sequence


class LayerError(Exception):
    """Base de todos los fallos de native-layer."""

    exit_code: int = 1


class InvocationError(LayerError):
    """Falta un argumento obligatorio (o viene vacío)."""

    exit_code = 2


class InputNotFoundError(LayerError):
    """El binario de entrada no existe o no es un fichero regular."""

    def __init__(self, path: object) -> None:
        super().__init__(f"binary not found: {path}")
        self.path = path


class FileSystemError(LayerError):
    """Fallo creando directorios o copiando ficheros."""


class ExternalToolError(LayerError):
    """Una herramienta externa (ldd, docker) no está instalada o terminó con error."""

    def __init__(
        self,
        command: Sequence[str],
        *,
        returncode: int,
        stderr: str = "",
        message: str | None = None,
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        self.exit_code = returncode if returncode > 0 else 1
        text = message or f"command failed with exit code {returncode}: {' '.join(self.command)}"
        detail = stderr.strip()
        if detail:
            text = f"{text}\n{detail}"
        super().__init__(text)

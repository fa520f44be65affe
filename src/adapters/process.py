"""Wrapper de subprocess.

Por qué un wrapper:
- Estandariza cómo se invocan las herramientas externas (ldd, docker).
- Traduce "no instalado" y "exit != 0" a `ExternalToolError` en un solo sitio:
  cada paso se comprueba justo después de ejecutarse, y el primero que falla
  corta el resto.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from core.domain.errors import ExternalToolError

COMMAND_NOT_FOUND = 127


def run_command(
    args: Sequence[str],
    *,
    capture: bool = False,
    check: bool = True,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Ejecuta `args` y espera a que termine.

    - `capture=False`: la herramienta escribe directamente en la terminal
      (logs de build). `stdout`/`stderr` del resultado quedan en `None`.
    - `capture=True`: stdout/stderr se devuelven como texto.
    - `check=False`: el llamador decide qué hacer con un exit != 0.
    """

    cmd = [str(a) for a in args]
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=capture,
            text=True,
        )
    except FileNotFoundError as exc:
        raise ExternalToolError(
            cmd,
            returncode=COMMAND_NOT_FOUND,
            message=f"{cmd[0]}: command not found",
        ) from exc

    if check and result.returncode != 0:
        raise ExternalToolError(cmd, returncode=result.returncode, stderr=result.stderr or "")
    return result

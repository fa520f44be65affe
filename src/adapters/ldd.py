"""Lister de dependencias dinámicas basado en `ldd`.

Linux no ofrece una API estable para introspección del loader sobre *otro*
binario, así que se parsea la salida textual línea a línea.

Formatos típicos de línea:
    linux-vdso.so.1 (0x00007ffd...)
    libz.so.1 => /lib/x86_64-linux-gnu/libz.so.1 (0x00007f...)
    /lib64/ld-linux-x86-64.so.2 (0x00007f...)
    libfoo.so.3 => not found
"""

from __future__ import annotations

import re
from pathlib import Path

from adapters.process import run_command
from core.config import AppSettings
from core.domain.errors import ExternalToolError

STATIC_MARKERS = ("not a dynamic executable", "statically linked")

_NOT_FOUND_RE = re.compile(r"^\s*(\S+)\s+=>\s+not found\s*$")


def extract_absolute_paths(report: str) -> list[Path]:
    """Tokens que empiezan por `/`, deduplicados y ordenados."""

    found: set[str] = set()
    for line in report.splitlines():
        for token in line.split():
            if token.startswith("/"):
                found.add(token)
    return [Path(p) for p in sorted(found)]


def extract_unresolved(report: str) -> list[str]:
    names: list[str] = []
    for line in report.splitlines():
        m = _NOT_FOUND_RE.match(line)
        if m and m.group(1) not in names:
            names.append(m.group(1))
    return names


def is_static_report(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in STATIC_MARKERS)


class LddDependencyLister:
    """Implementa `core.interfaces.tools.DependencyLister` con `ldd`."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def list_dependencies(self, binary: Path) -> str:
        cmd = [self._settings.ldd_command, str(binary)]
        result = run_command(cmd, capture=True, check=False)
        if result.returncode == 0:
            return result.stdout
        # glibc ldd sale con 1 para binarios estáticos: no hay nada que copiar.
        if is_static_report((result.stdout or "") + (result.stderr or "")):
            return ""
        raise ExternalToolError(cmd, returncode=result.returncode, stderr=result.stderr or "")

"""Adaptador para la CLI de Docker.

Responsabilidad:
- Traducir las cuatro operaciones de `ContainerRuntime` a invocaciones de
  `docker` (buildx build, create, cp, rm).
- Dejar que los logs de build salgan directamente por la terminal.
"""

from __future__ import annotations

from pathlib import Path

from adapters.process import run_command
from core.config import AppSettings
from core.domain.errors import ExternalToolError


class DockerCli:
    """Implementa `core.interfaces.tools.ContainerRuntime` con el binario `docker`."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def command(self) -> str:
        return self._settings.docker_command

    def build(self, *, platform: str, dockerfile: Path, tag: str, context: Path) -> None:
        run_command(
            [
                self.command,
                "buildx",
                "build",
                "--platform",
                platform,
                "-f",
                str(dockerfile),
                "-t",
                tag,
                str(context),
            ]
        )

    def create(self, *, platform: str, image: str) -> str:
        cmd = [self.command, "create", "--platform", platform, image]
        result = run_command(cmd, capture=True)
        container_id = (result.stdout or "").strip().splitlines()
        if not container_id:
            raise ExternalToolError(cmd, returncode=1, message="docker create did not print a container id")
        # Posibles avisos de pull van antes; el id es siempre la última línea.
        return container_id[-1].strip()

    def copy_out(self, *, container_id: str, source: str, destination: Path) -> None:
        run_command([self.command, "cp", f"{container_id}:{source}", str(destination)])

    def remove(self, container_id: str) -> None:
        run_command([self.command, "rm", container_id], capture=True)

    def buildx_available(self) -> tuple[bool, str]:
        """Usado por `doctor`: comprueba que el plugin buildx responde."""

        try:
            result = run_command([self.command, "buildx", "version"], capture=True)
        except ExternalToolError as exc:
            return False, str(exc).splitlines()[0]
        return True, (result.stdout or "").strip() or "OK"

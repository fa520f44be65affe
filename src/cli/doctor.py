"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from adapters.docker import DockerCli
from cli.ui_components import print_banner
from cli.settings import load_settings
from core.config import write_user_env_vars
from core.domain.platform import Architecture

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_tool(command: str) -> tuple[bool, str]:
    found = shutil.which(command)
    if found:
        return True, found
    return False, f"'{command}' not found on PATH"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings()

    table = Table(title="native-layer Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Tools
    ok_ldd, detail_ldd = _check_tool(settings.ldd_command)
    table.add_row("ldd", "OK" if ok_ldd else "FAIL", Text(detail_ldd))

    ok_docker, detail_docker = _check_tool(settings.docker_command)
    table.add_row("docker", "OK" if ok_docker else "FAIL", Text(detail_docker))

    if ok_docker:
        ok_buildx, detail_buildx = DockerCli(settings).buildx_available()
        table.add_row("docker buildx", "OK" if ok_buildx else "FAIL", Text(detail_buildx))
    else:
        table.add_row("docker buildx", "SKIPPED", "docker is not installed")

    # Config
    if settings.dockerfile.is_file():
        table.add_row("Dockerfile", "OK", Text(str(settings.dockerfile)))
    else:
        table.add_row("Dockerfile", "MISSING", Text(f"{settings.dockerfile} (needed by build-layer only)"))
    table.add_row("Platform", "OK", f"{settings.platform.value} - {settings.platform.label()}")
    table.add_row("Image tag", "OK", Text(settings.image_tag))
    table.add_row("Artifact", "OK", Text(f"{settings.artifact_path} -> {settings.output_path}"))

    _console.print(table)

    if not ok_ldd:
        _console.print(
            "\n[yellow]Note:[/yellow] `copy-deps` needs ldd; run it inside the Linux image you are packaging for."
        )


@app.command(name="configure")
def configure() -> None:
    """Interactive setup (stores defaults in the user config .env)."""

    print_banner(_console)
    defaults = load_settings()

    platform = typer.prompt(
        "Target platform",
        default=defaults.platform.value,
        show_default=True,
    ).strip()
    try:
        arch = Architecture(platform)
    except ValueError as exc:
        choices = ", ".join(a.value for a in Architecture)
        raise typer.BadParameter(f"platform must be one of: {choices}") from exc

    image_tag = typer.prompt(
        "Image tag",
        default=f"poppler-lambda-layer-{arch.short_name()}",
        show_default=True,
    ).strip()
    dockerfile = typer.prompt("Dockerfile", default=str(defaults.dockerfile), show_default=True).strip()

    if not image_tag or not dockerfile:
        raise typer.BadParameter("image tag and Dockerfile are required")

    env_path = write_user_env_vars(
        {
            "NATIVE_LAYER_PLATFORM": arch.value,
            "NATIVE_LAYER_IMAGE_TAG": image_tag,
            "NATIVE_LAYER_DOCKERFILE": dockerfile,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

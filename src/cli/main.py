"""CLI principal (Typer).

Por qué aquí solo hay presentación:
- Los servicios de `core.services` hacen el trabajo y no imprimen nada.
- Esta capa traduce `LayerError` a códigos de salida y pinta con Rich.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.docker import DockerCli
from adapters.json_exporter import export_model_json
from adapters.ldd import LddDependencyLister
from cli import doctor
from cli.settings import load_settings
from cli.ui_components import (
    build_dependencies_table,
    build_layer_panel,
    build_staging_panel,
    copy_notice,
)
from core.domain.errors import InputNotFoundError, InvocationError, LayerError
from core.domain.models import CopiedArtifact
from core.domain.platform import Architecture
from core.services.dependency_copier import StagingHooks, list_dependencies, stage_binary
from core.services.layer_builder import BuildHooks, build_layer, plan_from_settings

app = typer.Typer(
    no_args_is_help=True,
    help="Package native binaries and their shared libraries into Lambda layers.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _fail(exc: LayerError) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {escape(str(exc))}", emoji=False)
    return typer.Exit(code=exc.exit_code)


@app.command("copy-deps")
def copy_deps(
    binary: str = typer.Argument(..., help="Binary or shared object to stage."),
    dest: str = typer.Argument(..., help="Destination root (bin/ and lib/ are created inside)."),
    manifest: Path | None = typer.Option(
        None,
        "--manifest",
        help="Write a JSON manifest of what was copied.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also report kept and missing files."),
) -> None:
    """Copy BINARY to DEST/bin and its shared-library dependencies to DEST/lib."""

    settings = load_settings()

    def _on_copied(artifact: CopiedArtifact) -> None:
        _console.print(copy_notice(artifact), markup=False, emoji=False, highlight=False, soft_wrap=True)

    def _on_skipped(artifact: CopiedArtifact) -> None:
        if verbose:
            _console.print(f"[dim]kept existing {escape(str(artifact.destination))}[/dim]", emoji=False, soft_wrap=True)

    def _on_missing(path: Path) -> None:
        if verbose:
            _console.print(f"[yellow]not on disk, skipped:[/yellow] {escape(str(path))}", emoji=False, soft_wrap=True)

    hooks = StagingHooks(copied=_on_copied, skipped=_on_skipped, missing=_on_missing)
    try:
        result = stage_binary(binary, dest, lister=LddDependencyLister(settings), hooks=hooks)
        if manifest is not None:
            export_model_json(model=result, output_path=manifest)
    except LayerError as exc:
        raise _fail(exc) from exc
    except OSError as exc:
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}", emoji=False)
        raise typer.Exit(code=1) from exc

    if verbose:
        _console.print(build_staging_panel(result))


@app.command("list-deps")
def list_deps(
    binary: str = typer.Argument(..., help="Binary or shared object to inspect."),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
) -> None:
    """Show the shared libraries BINARY resolves to, without copying anything."""

    settings = load_settings()
    try:
        if binary == "":
            raise InvocationError("usage: list-deps BINARY (the argument is required)")
        if not Path(binary).is_file():
            raise InputNotFoundError(binary)
        report = list_dependencies(Path(binary), LddDependencyLister(settings))
    except LayerError as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
        return
    _console.print(build_dependencies_table(report))


@app.command("build-layer")
def build_layer_cmd(
    platform: Architecture | None = typer.Option(None, "--platform", help="Target platform."),
    dockerfile: Path | None = typer.Option(None, "--dockerfile", "-f", help="Dockerfile to build."),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Image tag."),
    context: Path | None = typer.Option(None, "--context", help="Build context directory."),
    artifact: str | None = typer.Option(None, "--artifact", help="Absolute path of the zip inside the container."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Local path for the extracted zip."),
) -> None:
    """Build the layer image, extract its zip and remove the container."""

    settings = load_settings()
    try:
        plan = plan_from_settings(
            settings,
            platform=platform,
            dockerfile=dockerfile,
            context=context,
            image_tag=tag,
            artifact_path=artifact,
            output_path=output,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    hooks = BuildHooks(step=lambda message: _console.print(f"[bold cyan]==>[/bold cyan] {escape(message)}", emoji=False))
    try:
        result = build_layer(plan, runtime=DockerCli(settings), hooks=hooks)
    except LayerError as exc:
        raise _fail(exc) from exc

    _console.print(build_layer_panel(result))


def run() -> None:
    app()

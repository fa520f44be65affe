"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import CopiedArtifact, DependencyReport, LayerBuildResult, StagingResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en comandos interactivos)."""

    title = Text("native-layer", style="bold cyan")
    subtitle = Text("Binarios nativos • Dependencias • Lambda layers", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def copy_notice(artifact: CopiedArtifact) -> str:
    """Línea estilo `cp -v`: `'origen' -> 'destino'`."""

    return f"'{artifact.source}' -> '{artifact.destination}'"


def build_dependencies_table(report: DependencyReport) -> Table:
    table = Table(title=Text(f"Dependencies of {report.binary}"))
    table.add_column("Library", style="cyan", no_wrap=True)
    table.add_column("Path", style="white")
    table.add_column("On disk", style="green")
    for path in report.paths:
        table.add_row(Text(path.name), Text(str(path)), "yes" if path.is_file() else "[red]no[/red]")
    for name in report.unresolved:
        table.add_row(Text(name), "[red]not found[/red]", "[red]no[/red]")
    return table


def build_staging_panel(result: StagingResult) -> Panel:
    """Resumen del Dependency Copier."""

    body = Text()
    body.append(f"Destination: {result.destination}\n")
    body.append(f"Copied: {len(result.copied)}\n", style="green")
    body.append(f"Kept (already present): {len(result.skipped)}\n")
    if result.missing:
        body.append(f"Missing on disk: {len(result.missing)}\n", style="yellow")
    if result.unresolved:
        body.append("Unresolved by the loader:\n", style="bold red")
        for name in result.unresolved:
            body.append(f"- {name}\n")
    return Panel(body, title=Text(str(result.binary.name), style="bold"), border_style="green")


def build_layer_panel(result: LayerBuildResult) -> Panel:
    size_mb = result.size_bytes / (1024 * 1024)
    body = Text()
    body.append(f"Image: {result.plan.image_tag} ({result.plan.platform.value})\n")
    body.append(f"Artifact: {result.output_path} ({size_mb:.2f} MB)\n", style="green")
    state = "removed" if result.container_removed else "left behind"
    body.append(f"Container {result.container_id[:12]} {state}", style="dim")
    return Panel(body, title=Text("Layer built", style="bold yellow"), border_style="yellow")

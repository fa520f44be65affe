"""Dependency Copier: binario + librerías dinámicas en un árbol `bin/` + `lib/`.

The service never prints. Progress is reported through `StagingHooks` so the
CLI decides how each copy is shown, and tests can record them.

Failure model: the first failing step raises a `LayerError`; files copied
before that step stay on disk.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from adapters.ldd import extract_absolute_paths, extract_unresolved
from core.domain.errors import FileSystemError, InputNotFoundError, InvocationError
from core.domain.models import CopiedArtifact, DependencyReport, StagingResult
from core.interfaces.tools import DependencyLister

BIN_DIR = "bin"
LIB_DIR = "lib"


@dataclass
class StagingHooks:
    """Optional callbacks for UI layers."""

    copied: Callable[[CopiedArtifact], None] | None = None
    skipped: Callable[[CopiedArtifact], None] | None = None
    missing: Callable[[Path], None] | None = None


def list_dependencies(binary: Path, lister: DependencyLister) -> DependencyReport:
    """Run the lister and keep every absolute path it mentions, deduplicated."""

    raw = lister.list_dependencies(binary)
    return DependencyReport(
        binary=binary,
        raw_output=raw,
        paths=extract_absolute_paths(raw),
        unresolved=extract_unresolved(raw),
    )


def _copy_file(source: Path, destination: Path) -> None:
    try:
        shutil.copy(source, destination)
    except OSError as exc:
        raise FileSystemError(f"cannot copy '{source}' to '{destination}': {exc}") from exc


def _ensure_layout(destination: Path) -> tuple[Path, Path]:
    bin_dir = destination / BIN_DIR
    lib_dir = destination / LIB_DIR
    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
        lib_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError(f"cannot create '{destination}': {exc}") from exc
    return bin_dir, lib_dir


def stage_binary(
    binary: Path | str | None,
    destination: Path | str | None,
    *,
    lister: DependencyLister,
    hooks: StagingHooks | None = None,
) -> StagingResult:
    """Copy `binary` to `<destination>/bin/` and its dependencies to `<destination>/lib/`.

    - The binary overwrites an existing file of the same name.
    - Libraries never overwrite: an existing `lib/<name>` is left untouched and
      the first path (in sorted order) with a given filename wins.
    - Reported paths that do not exist on disk are skipped.
    """

    if binary is None or str(binary) == "" or destination is None or str(destination) == "":
        raise InvocationError("usage: copy-deps BINARY DEST (both arguments are required)")

    hooks = hooks or StagingHooks()
    binary = Path(binary)
    destination = Path(destination)

    bin_dir, lib_dir = _ensure_layout(destination)

    if not binary.is_file():
        raise InputNotFoundError(binary)

    result = StagingResult(binary=binary, destination=destination)

    target = bin_dir / binary.name
    _copy_file(binary, target)
    artifact = CopiedArtifact(source=binary, destination=target, kind="binary")
    result.artifacts.append(artifact)
    if hooks.copied:
        hooks.copied(artifact)

    report = list_dependencies(binary, lister)
    result.unresolved = list(report.unresolved)

    for lib in report.paths:
        if not lib.is_file():
            result.missing.append(lib)
            if hooks.missing:
                hooks.missing(lib)
            continue

        target = lib_dir / lib.name
        if target.exists() or target.is_symlink():
            artifact = CopiedArtifact(
                source=lib,
                destination=target,
                kind="library",
                skipped=True,
                reason="already present",
            )
            result.artifacts.append(artifact)
            if hooks.skipped:
                hooks.skipped(artifact)
            continue

        _copy_file(lib, target)
        artifact = CopiedArtifact(source=lib, destination=target, kind="library")
        result.artifacts.append(artifact)
        if hooks.copied:
            hooks.copied(artifact)

    return result

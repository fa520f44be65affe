"""Carga de `AppSettings` desde la CLI.

Un `NATIVE_LAYER_*` mal formado es un error de uso, no un traceback.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError

from core.config import AppSettings


def load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid NATIVE_LAYER_* configuration:\n{exc}") from exc

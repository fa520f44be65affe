"""Exportación JSON del resultado de staging.

Por qué JSON:
- Deja constancia de qué se copió, qué se respetó (no-clobber) y qué faltaba,
  para pipelines de CI que empaquetan el layer después.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel


def export_model_json(*, model: BaseModel, output_path: Path) -> Path:
    """Exporta un modelo a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = model.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

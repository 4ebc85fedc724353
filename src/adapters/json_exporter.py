"""Exportación JSON de la configuración base.

Por qué JSON:
- Es la forma canónica que se enviaría a persistencia: listas serializadas
  con `", "`, colores `#rrggbb`, flag de "todas las edades" aparte.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.services.base_config import BaseConfig


def export_base_config_json(*, config: BaseConfig, output_path: Path) -> Path:
    """Exporta `BaseConfig.to_form()` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(config.to_form(), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

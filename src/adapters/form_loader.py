"""Carga de formularios enviados guardados como JSON.

Soporta un objeto plano `{"campo": "valor", ...}`, tal como lo produce el
formulario de configuración base (incluidos los campos `*_hidden`).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class FormFileError(ValueError):
    """El archivo no existe o no contiene un objeto JSON."""


def load_form(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FormFileError(f"Form file not found: {path}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise FormFileError(f"Invalid JSON in {path}: {exc.msg}") from exc

    if not isinstance(data, dict):
        raise FormFileError(f"Expected a JSON object in {path}")
    return data

"""Contratos de recursos eliminables.

Por qué Protocol:
- El diálogo de confirmación solo necesita un nombre visible; cualquier
  entidad (negocio, orden de planificación) lo cumple sin heredar de nada.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NamedResource(Protocol):
    """Contrato mínimo para derivar un token de confirmación."""

    @property
    def name(self) -> str:
        """Nombre visible del recurso, tal como lo ve el usuario."""

        ...

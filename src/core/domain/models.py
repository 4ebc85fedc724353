"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los estados del formulario son valores inmutables (`frozen=True`): cada
  operación del motor devuelve una instancia nueva en vez de mutar.
- La validación de tipos queda en un único sitio, sin acoplar el Core a la UI
  ni a la base de datos.

Nota:
- Estos modelos describen *qué* es el estado, no *cómo* se edita; las
  transiciones viven en `core.services.tag_fields`.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.language import Language


class TagKind(str, Enum):
    """Normalización aplicada a un candidato antes de insertarlo."""

    PLAIN = "plain"
    COLOR = "color"


_REJECTION_MESSAGES: dict[str, tuple[str, str]] = {
    "invalid_color": (
        "Enter a HEX color such as #FF0000.",
        "Ingresa un color HEX válido (por ejemplo #FF0000).",
    ),
    "invalid_range": (
        "Enter a minimum and maximum age (minimum <= maximum).",
        "Ingresa una edad mínima y máxima (la mínima no puede superar la máxima).",
    ),
    "empty_value": (
        "The value cannot be empty.",
        "El valor no puede estar vacío.",
    ),
    "no_valid_token": (
        "This name cannot be confirmed; deletion is disabled.",
        "Este nombre no admite confirmación; la eliminación está deshabilitada.",
    ),
    "token_mismatch": (
        "The confirmation text does not match.",
        "Confirmación incorrecta.",
    ),
}


class Rejection(str, Enum):
    """Motivo por el que una operación no cambió el estado.

    No son excepciones: el input malformado es el caso normal (el usuario
    escribe libremente) y el llamador simplemente vuelve a pedir el dato.
    """

    INVALID_COLOR = "invalid_color"
    INVALID_RANGE = "invalid_range"
    EMPTY_VALUE = "empty_value"
    NO_VALID_TOKEN = "no_valid_token"
    TOKEN_MISMATCH = "token_mismatch"

    def describe(self, language: Language = Language.SPANISH) -> str:
        english, spanish = _REJECTION_MESSAGES[self.value]
        return spanish if language is Language.SPANISH else english


class ChannelSelection(BaseModel):
    """Canales activos más el canal principal.

    Invariante: `primary` está vacío (selección vacía) o es miembro de
    `channels`.
    """

    model_config = ConfigDict(frozen=True)

    channels: tuple[str, ...] = Field(
        default=(),
        description="Canales activos en orden de activación.",
    )
    primary: str = Field(
        default="",
        description="Canal principal; siempre miembro de `channels` o vacío.",
    )

    @property
    def serialized(self) -> str:
        return ", ".join(self.channels)


class AgeAudience(BaseModel):
    """Público objetivo: "todas las edades" o una lista de rangos `min-max`.

    Con `all_ages=True` los rangos guardados quedan inertes: cualquier
    lectura debe pasar por `effective_ranges`.
    """

    model_config = ConfigDict(frozen=True)

    all_ages: bool = Field(
        default=False,
        description="Centinela 'todas las edades'; si es True, los rangos se ignoran.",
    )
    ranges: tuple[str, ...] = Field(
        default=(),
        description="Rangos `<min>-<max>` conservados aunque `all_ages` esté activo.",
    )

    @property
    def effective_ranges(self) -> tuple[str, ...]:
        return () if self.all_ages else self.ranges


class ColorEditSession(BaseModel):
    """Estado transitorio del editor de colores: inactivo o editando `anchor`."""

    model_config = ConfigDict(frozen=True)

    anchor: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.anchor is not None


class BusinessStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class Business(BaseModel):
    """Negocio (tenant) del dashboard.

    Solo se modela lo necesario para el borrado lógico con confirmación.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Identificador del negocio.")
    name: str = Field(..., description="Nombre visible; origen del token de confirmación.")
    status: BusinessStatus = Field(default=BusinessStatus.ACTIVE)

"""Token de confirmación para acciones destructivas.

Antes de eliminar un negocio, el usuario debe escribir exactamente
`eliminar_<slug del nombre>`. El slug es ASCII en minúsculas: sin tildes y con
cualquier otra cosa colapsada a `_`.

Un nombre cuyo slug queda vacío (p.ej. solo símbolos) no tiene token válido:
la acción debe deshabilitarse, nunca aceptarse con una confirmación vacía.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass

from core.interfaces.resources import NamedResource

logger = logging.getLogger(__name__)

CONFIRMATION_PREFIX = "eliminar_"

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slug(name: str) -> str:
    """`"Café & Co."` -> `"cafe_co"`."""

    lowered = unicodedata.normalize("NFD", name.lower())
    stripped = "".join(ch for ch in lowered if not unicodedata.combining(ch))
    return _NON_SLUG.sub("_", stripped).strip("_")


def expected_token(name: str, *, prefix: str = CONFIRMATION_PREFIX) -> str:
    """Token que el usuario debe escribir; vacío si el nombre no admite confirmación."""

    base = slug(name)
    if not base:
        return ""
    return f"{prefix}{base}"


def authorize(name: str, user_input: str, *, prefix: str = CONFIRMATION_PREFIX) -> bool:
    """Comparación exacta: sin recortar espacios ni ignorar mayúsculas."""

    expected = expected_token(name, prefix=prefix)
    return expected != "" and user_input == expected


@dataclass(frozen=True)
class ConfirmationPrompt:
    """Lo que necesita un diálogo de eliminación durante su vida útil."""

    name: str
    expected: str

    @property
    def enabled(self) -> bool:
        return bool(self.expected)

    def message(self) -> str:
        if not self.enabled:
            return "Para confirmar, escribe la cadena solicitada."
        return f'Para confirmar la eliminación de "{self.name}", escribe exactamente: {self.expected}'

    def check(self, user_input: str) -> bool:
        return self.enabled and user_input == self.expected


def build_prompt(name: str, *, prefix: str = CONFIRMATION_PREFIX) -> ConfirmationPrompt:
    prompt = ConfirmationPrompt(name=name, expected=expected_token(name, prefix=prefix))
    if not prompt.enabled:
        logger.debug("No valid confirmation token for %r", name)
    return prompt


def prompt_for(resource: NamedResource, *, prefix: str = CONFIRMATION_PREFIX) -> ConfirmationPrompt:
    return build_prompt(resource.name, prefix=prefix)

"""Contenedor de estado del formulario de configuración base.

Por qué existe:
- Sustituye el estado local de los dos formularios de marca por un único
  contenedor que pertenece a quien lo llama.
- Cada evento de UI es un método: ejecuta la operación pura del motor de
  etiquetas y reemplaza el `BaseConfig` inmutable por el nuevo.

Una instancia por formulario abierto; no es thread-safe ni necesita serlo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from core.domain.models import ChannelSelection, ColorEditSession, Rejection, TagKind
from core.services import tag_fields
from core.services.base_config import BaseConfig, load_base_config
from core.services.tag_fields import Outcome, TagList

logger = logging.getLogger(__name__)

PLAIN_TAG_FIELDS = ("brand_personality", "forbidden_words")
CHANNELS_FIELD = "active_channels"
COLORS_FIELD = "brand_colors"
AGES_FIELD = "target_audience_age_ranges"


@dataclass
class SessionHooks:
    """Callbacks opcionales para la capa de UI (toasts, errores en línea)."""

    rejected: Callable[[str, Rejection], None] | None = None


class BaseConfigFormSession:
    """Contenedor de estado con un único escritor para un formulario de marca abierto."""

    def __init__(self, config: BaseConfig | None = None, *, hooks: SessionHooks | None = None) -> None:
        self._config = config or BaseConfig()
        self._color_edit = ColorEditSession()
        self._hooks = hooks or SessionHooks()
        self.last_rejection: Rejection | None = None

    @classmethod
    def from_form(cls, form: Mapping[str, Any], *, hooks: SessionHooks | None = None) -> "BaseConfigFormSession":
        return cls(load_base_config(form), hooks=hooks)

    @property
    def config(self) -> BaseConfig:
        return self._config

    @property
    def color_edit(self) -> ColorEditSession:
        return self._color_edit

    def to_form(self) -> dict[str, Any]:
        return self._config.to_form()

    def _commit(self, field: str, outcome: Outcome[Any], **update: Any) -> None:
        self.last_rejection = outcome.rejection
        if outcome.accepted:
            self._config = self._config.model_copy(update=update)
            return
        logger.debug("Rejected %s update: %s", field, outcome.rejection.value)
        if self._hooks.rejected:
            self._hooks.rejected(field, outcome.rejection)

    # Listas de texto, canales y colores

    def add_tag(self, field: str, raw: str | None) -> Outcome[Any]:
        if field == CHANNELS_FIELD:
            return self._add_channel(raw)
        if field == COLORS_FIELD:
            outcome = tag_fields.add(self._config.brand_colors, raw, TagKind.COLOR)
        elif field in PLAIN_TAG_FIELDS:
            outcome = tag_fields.add(getattr(self._config, field), raw)
        else:
            raise ValueError(f"Unknown tag field: {field}")
        self._commit(field, outcome, **{field: outcome.value})
        return outcome

    def remove_tag(self, field: str, tag: str) -> TagList:
        if field == CHANNELS_FIELD:
            selection = tag_fields.remove_channel(self._config.channels, tag)
            self._commit(field, Outcome(selection), channels=selection)
            return selection.channels
        if field != COLORS_FIELD and field not in PLAIN_TAG_FIELDS:
            raise ValueError(f"Unknown tag field: {field}")
        tags = tag_fields.remove(getattr(self._config, field), tag)
        if field == COLORS_FIELD and self._color_edit.anchor == tag:
            self._color_edit = ColorEditSession()
        self._commit(field, Outcome(tags), **{field: tags})
        return tags

    def _add_channel(self, channel: str | None) -> Outcome[ChannelSelection]:
        outcome = tag_fields.add_channel(self._config.channels, channel)
        self._commit(CHANNELS_FIELD, outcome, channels=outcome.value)
        return outcome

    def toggle_channel(self, channel: str | None) -> Outcome[ChannelSelection]:
        outcome = tag_fields.toggle_channel(self._config.channels, channel)
        self._commit(CHANNELS_FIELD, outcome, channels=outcome.value)
        return outcome

    def choose_primary_channel(self, channel: str) -> ChannelSelection:
        selection = tag_fields.choose_primary(self._config.channels, channel)
        self._commit("main_channel", Outcome(selection), channels=selection)
        return selection

    # Público por edades

    def set_all_ages(self, enabled: bool) -> None:
        audience = tag_fields.set_all_ages(self._config.audience, enabled)
        self._commit("target_audience_all_ages", Outcome(audience), audience=audience)

    def add_age_range(self, minimum: object, maximum: object) -> Outcome[Any]:
        outcome = tag_fields.add_range(self._config.audience, minimum, maximum)
        self._commit(AGES_FIELD, outcome, audience=outcome.value)
        return outcome

    def remove_age_range(self, token: str) -> None:
        audience = tag_fields.remove_range(self._config.audience, token)
        self._commit(AGES_FIELD, Outcome(audience), audience=audience)

    def pick_age_range(self, token: str) -> tuple[int, int] | None:
        """Clic en un rango: lo quita y devuelve sus límites al editor."""

        audience, bounds = tag_fields.take_range(self._config.audience, token)
        self._commit(AGES_FIELD, Outcome(audience), audience=audience)
        return bounds

    # Editor de colores

    def begin_color_edit(self, color: str) -> ColorEditSession:
        self._color_edit = tag_fields.begin_color_edit(self._config.brand_colors, color)
        return self._color_edit

    def cancel_color_edit(self) -> None:
        self._color_edit = tag_fields.cancel_color_edit()

    def upsert_color(self, text_value: str | None, picker_value: str | None = None) -> Outcome[TagList]:
        """Confirma el editor de color; el texto escrito gana al valor del selector."""

        text_value = (text_value or "").strip()
        candidate = text_value or (picker_value or "").strip()
        if not candidate:
            outcome: Outcome[TagList] = Outcome(self._config.brand_colors, Rejection.EMPTY_VALUE)
            self._commit(COLORS_FIELD, outcome)
            return outcome
        outcome, self._color_edit = tag_fields.upsert_color(self._config.brand_colors, self._color_edit, candidate)
        self._commit(COLORS_FIELD, outcome, brand_colors=outcome.value)
        return outcome

"""Borde de persistencia de la configuración base de marca.

Por qué aquí:
- El formulario envía un mapping de strings (campos visibles, campos
  `*_hidden` con la lista ya serializada, checkboxes "on"). Este módulo es el
  único punto donde ese payload se valida y se convierte en `BaseConfig`.
- Las listas se leen con el motor de etiquetas, así los valores heredados
  (colores en mayúsculas o sin `#`, rangos malformados) salen canónicos.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic.config import ConfigDict

from core.domain.brand import (
    AverageTicket,
    BrandChoice,
    BrandLanguageLevel,
    BrandTone,
    CoverageArea,
    PurchaseFrequency,
    TargetGender,
    VisualStyle,
)
from core.domain.models import AgeAudience, ChannelSelection
from core.services.tag_fields import parse, parse_colors, parse_ranges, selection_from_fields, serialize

logger = logging.getLogger(__name__)

_TRUTHY = {"on", "true", "1", "yes"}

# Campos de lista cuyo valor serializado puede venir en `<campo>_hidden`.
HIDDEN_FIELDS = ("brand_personality", "forbidden_words", "active_channels", "brand_colors")

ENUM_FIELDS: dict[str, type[BrandChoice]] = {
    "coverage_area": CoverageArea,
    "brand_tone": BrandTone,
    "brand_language_level": BrandLanguageLevel,
    "target_gender": TargetGender,
    "average_ticket": AverageTicket,
    "purchase_frequency": PurchaseFrequency,
    "visual_style": VisualStyle,
}

TEXT_FIELDS = (
    "country",
    "city",
    "main_pain_point",
    "main_desire",
    "main_objection",
    "buying_motivation",
    "main_products",
)


class InvalidBaseConfig(ValueError):
    """El payload del formulario no pasa la validación del borde."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("Invalid base config data")
        self.errors = errors


class BaseConfig(BaseModel):
    """Configuración base de marca de un negocio, ya normalizada."""

    model_config = ConfigDict(frozen=True)

    years_in_market: int | None = Field(default=None, description="Años en el mercado.")
    country: str | None = None
    city: str | None = None
    coverage_area: CoverageArea | None = None

    brand_tone: BrandTone | None = None
    brand_personality: tuple[str, ...] = Field(default=(), description="Rasgos de personalidad de marca.")
    brand_language_level: BrandLanguageLevel | None = None
    allowed_emojis: bool = False
    forbidden_words: tuple[str, ...] = Field(default=(), description="Palabras que el contenido debe evitar.")

    audience: AgeAudience = Field(default_factory=AgeAudience)
    target_gender: TargetGender | None = None

    main_pain_point: str | None = None
    main_desire: str | None = None
    main_objection: str | None = None
    buying_motivation: str | None = None
    main_products: str | None = None
    average_ticket: AverageTicket | None = None
    purchase_frequency: PurchaseFrequency | None = None

    channels: ChannelSelection = Field(default_factory=ChannelSelection)
    visual_style: VisualStyle | None = None
    brand_colors: tuple[str, ...] = Field(default=(), description="Colores `#rrggbb` en orden.")

    @model_validator(mode="before")
    @classmethod
    def regroup_form_columns(cls, data: Any) -> Any:
        """Reagrupa las columnas del formulario en los campos del modelo."""

        if not isinstance(data, Mapping):
            return data
        data = dict(data)

        # La lista serializada viaja en `<campo>_hidden`; si está presente
        # manda, aunque venga vacía.
        for key in HIDDEN_FIELDS:
            hidden = f"{key}_hidden"
            if hidden in data:
                data[key] = data.pop(hidden)

        if "audience" not in data:
            all_ages = data.pop("target_audience_all_ages", None)
            # Variante antigua del formulario: un único `target_age_range`.
            legacy = data.pop("target_age_range", None)
            ranges = data.pop("target_audience_age_ranges", legacy)
            data["audience"] = {"target_audience_all_ages": all_ages, "target_audience_age_ranges": ranges}

        if "channels" not in data:
            data["channels"] = {
                "active_channels": data.pop("active_channels", None),
                "main_channel": data.pop("main_channel", None),
            }
        return data

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def coerce_blank_to_none(cls, value: Any) -> Any:
        return _text(value)

    @field_validator(*ENUM_FIELDS, mode="before")
    @classmethod
    def coerce_choice(cls, value: Any) -> Any:
        # Insensible a mayúsculas; el enum valida el valor resultante.
        if isinstance(value, BrandChoice):
            return value
        text = _text(value)
        return text.lower() if text is not None else None

    @field_validator("allowed_emojis", mode="before")
    @classmethod
    def coerce_checkbox(cls, value: Any) -> bool:
        return _flag(value)

    @field_validator("years_in_market", mode="before")
    @classmethod
    def coerce_integer(cls, value: Any) -> int | None:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        text = _text(value)
        if text is None or not text.isascii():
            return None
        try:
            return int(text)
        except ValueError:
            return None

    @field_validator("brand_personality", "forbidden_words", mode="before")
    @classmethod
    def coerce_plain_tags(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return parse(value)
        return value

    @field_validator("brand_colors", mode="before")
    @classmethod
    def coerce_colors(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return parse_colors(value)
        return value

    @field_validator("audience", mode="before")
    @classmethod
    def coerce_audience(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and "target_audience_age_ranges" in value:
            return AgeAudience(
                all_ages=_flag(value.get("target_audience_all_ages")),
                ranges=parse_ranges(_text(value.get("target_audience_age_ranges"))),
            )
        return value

    @field_validator("channels", mode="before")
    @classmethod
    def coerce_channels(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and "active_channels" in value:
            return selection_from_fields(_text(value.get("active_channels")), _text(value.get("main_channel")))
        return value

    def to_form(self) -> dict[str, Any]:
        """Forma canónica en el formato de columnas del formulario."""

        form: dict[str, Any] = {
            "years_in_market": self.years_in_market,
            "allowed_emojis": self.allowed_emojis,
            "brand_personality": serialize(self.brand_personality),
            "forbidden_words": serialize(self.forbidden_words),
            "target_audience_all_ages": self.audience.all_ages,
            "target_audience_age_ranges": serialize(self.audience.ranges),
            "active_channels": self.channels.serialized,
            "main_channel": self.channels.primary,
            "brand_colors": serialize(self.brand_colors),
        }
        for key in TEXT_FIELDS:
            form[key] = getattr(self, key)
        for key in ENUM_FIELDS:
            choice = getattr(self, key)
            form[key] = choice.value if choice is not None else None
        return form




def _text(raw: Any) -> str | None:
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def _flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in _TRUTHY


def load_base_config(form: Mapping[str, Any]) -> BaseConfig:
    """Valida y normaliza el payload enviado por el formulario.

    Lanza `InvalidBaseConfig` con un mensaje por campo si Pydantic rechaza
    algún valor (p. ej. un valor de catálogo desconocido); el resto de campos
    se normaliza sin fallar.
    """

    try:
        return BaseConfig.model_validate(form)
    except ValidationError as exc:
        errors = {".".join(str(part) for part in err["loc"]) or "form": err["msg"] for err in exc.errors()}
        logger.warning("Invalid base config data: %s", errors)
        raise InvalidBaseConfig(errors) from exc

"""Catálogos cerrados de la configuración de marca.

Por qué enums:
- El formulario envía strings libres; aquí se cierran en tipos que Pydantic
  valida en el borde de persistencia, en vez de comparaciones de strings
  dispersas.
"""

from __future__ import annotations

from enum import Enum


class BrandChoice(str, Enum):
    """Base común: valores en minúsculas tal como los envía el formulario."""


class CoverageArea(BrandChoice):
    LOCAL = "local"
    NACIONAL = "nacional"
    INTERNACIONAL = "internacional"


class BrandTone(BrandChoice):
    FORMAL = "formal"
    JUVENIL = "juvenil"
    PROFESIONAL = "profesional"
    PREMIUM = "premium"
    DIVERTIDO = "divertido"
    CERCANO = "cercano"
    MOTIVADOR = "motivador"
    SERIO = "serio"
    EMOCIONAL = "emocional"
    INFORMAL = "informal"


class BrandLanguageLevel(BrandChoice):
    SIMPLE = "simple"
    MEDIO = "medio"
    AVANZADO = "avanzado"


class TargetGender(BrandChoice):
    HOMBRE = "hombre"
    MUJER = "mujer"
    MIXTO = "mixto"


class AverageTicket(BrandChoice):
    BAJO = "bajo"
    MEDIO = "medio"
    ALTO = "alto"


class PurchaseFrequency(BrandChoice):
    OCASIONAL = "ocasional"
    RECURRENTE = "recurrente"


class VisualStyle(BrandChoice):
    MINIMALISTA = "minimalista"
    MODERNO = "moderno"
    ELEGANTE = "elegante"
    COLORIDO = "colorido"
    OSCURO = "oscuro"

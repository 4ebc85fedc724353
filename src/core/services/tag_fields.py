"""Motor de campos de etiquetas (listas delimitadas por comas).

Varias áreas del formulario de marca (personalidad, palabras prohibidas,
canales activos, colores, rangos de edad) guardan listas ordenadas dentro de
una sola columna de texto. Este módulo concentra las invariantes de ese
formato para que ningún formulario las reimplemente:

- sin elementos vacíos ni duplicados (gana la primera aparición);
- colores siempre `#rrggbb` en minúsculas;
- el canal principal es miembro de la selección o está vacío;
- "todas las edades" y los rangos explícitos son mutuamente excluyentes.

Todas las funciones son puras: reciben un estado y devuelven uno nuevo. Las
que pueden rechazar input devuelven un `Outcome` con el estado intacto y el
motivo del rechazo; nunca lanzan excepciones por input del usuario.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from core.domain.models import AgeAudience, ChannelSelection, ColorEditSession, Rejection, TagKind

logger = logging.getLogger(__name__)

DELIMITER = ","
SEPARATOR = ", "

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")
_SHORT_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{3}")
_AGE_RANGE = re.compile(r"([0-9]+)-([0-9]+)")

T = TypeVar("T")
TagList = tuple[str, ...]


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Resultado de una operación que puede rechazar input.

    En un rechazo, `value` es el estado de entrada sin cambios.
    """

    value: T
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def _dedupe(items: Iterable[str]) -> TagList:
    seen: set[str] = set()
    ordered: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        ordered.append(item)
    return tuple(ordered)


def parse(serialized: str | None) -> TagList:
    """Parte por comas, recorta, descarta vacíos y duplicados posteriores."""

    if not serialized:
        return ()
    return _dedupe(part.strip() for part in serialized.split(DELIMITER) if part.strip())


def serialize(tags: Iterable[str]) -> str:
    return SEPARATOR.join(tags)


def normalize_hex(value: str | None, *, allow_shorthand: bool = False) -> str | None:
    """Canonicaliza un color a `#rrggbb` o devuelve None si no es válido.

    `allow_shorthand` expande la forma heredada `#abc` -> `#aabbcc`; solo se
    usa al leer valores ya guardados.
    """

    if value is None:
        return None
    trimmed = value.strip()
    candidate = trimmed if trimmed.startswith("#") else f"#{trimmed}"
    if allow_shorthand and _SHORT_HEX_COLOR.fullmatch(candidate):
        candidate = "#" + "".join(ch * 2 for ch in candidate[1:])
    if not _HEX_COLOR.fullmatch(candidate):
        return None
    return candidate.lower()


def parse_colors(serialized: str | None) -> TagList:
    """Lee una lista de colores guardada, canonicalizando cada elemento.

    Los elementos que no son colores se descartan.
    """

    colors: list[str] = []
    for raw in parse(serialized):
        normalized = normalize_hex(raw, allow_shorthand=True)
        if normalized is None:
            logger.debug("Dropping invalid stored color %r", raw)
            continue
        colors.append(normalized)
    return _dedupe(colors)


def _candidates(raw: str | None, kind: TagKind) -> Outcome[TagList]:
    if kind is TagKind.COLOR:
        normalized = normalize_hex(raw)
        if normalized is None:
            return Outcome((), Rejection.INVALID_COLOR)
        return Outcome((normalized,))

    # Un texto pegado con comas equivale a varias etiquetas.
    parts = parse(raw)
    if not parts:
        return Outcome((), Rejection.EMPTY_VALUE)
    return Outcome(parts)


def add(tags: Iterable[str], raw: str | None, kind: TagKind | str = TagKind.PLAIN) -> Outcome[TagList]:
    """Agrega al final si no existe; repetir un valor existente no es un error."""

    current = tuple(tags)
    candidates = _candidates(raw, TagKind(kind))
    if not candidates.accepted:
        logger.debug("Rejected tag %r (%s)", raw, candidates.rejection.value)
        return Outcome(current, candidates.rejection)
    return Outcome(_dedupe(current + candidates.value))


def remove(tags: Iterable[str], value: str) -> TagList:
    target = value.strip()
    return tuple(tag for tag in tags if tag != target)


def replace(tags: Iterable[str], old: str, new: str | None) -> Outcome[TagList]:
    """Sustituye un color en su posición (commit de edición).

    Si `old` ya no está en la lista se comporta como `add(..., color)`. Si el
    nuevo valor coincide con otro existente, se conserva la posición anterior.
    """

    current = tuple(tags)
    anchor = normalize_hex(old) or old
    if anchor not in current:
        return add(current, new, TagKind.COLOR)

    normalized = normalize_hex(new)
    if normalized is None:
        logger.debug("Rejected color replacement %r -> %r", old, new)
        return Outcome(current, Rejection.INVALID_COLOR)
    return Outcome(_dedupe(normalized if tag == anchor else tag for tag in current))


# Canales


def _reconcile_primary(channels: TagList, primary: str) -> ChannelSelection:
    if not channels:
        return ChannelSelection()
    if primary not in channels:
        primary = channels[0]
    return ChannelSelection(channels=channels, primary=primary)


def selection_from_fields(active_channels: str | None, main_channel: str | None) -> ChannelSelection:
    """Reconstruye la selección desde las columnas `active_channels`/`main_channel`."""

    return _reconcile_primary(parse(active_channels), (main_channel or "").strip())


def add_channel(selection: ChannelSelection, channel: str | None) -> Outcome[ChannelSelection]:
    outcome = add(selection.channels, channel)
    if not outcome.accepted:
        return Outcome(selection, outcome.rejection)
    return Outcome(_reconcile_primary(outcome.value, selection.primary))


def remove_channel(selection: ChannelSelection, channel: str) -> ChannelSelection:
    return _reconcile_primary(remove(selection.channels, channel), selection.primary)


def toggle_channel(selection: ChannelSelection, channel: str | None) -> Outcome[ChannelSelection]:
    """Activa o desactiva un canal; único punto de entrada para la UI."""

    if channel is not None and channel.strip() in selection.channels:
        return Outcome(remove_channel(selection, channel))
    return add_channel(selection, channel)


def choose_primary(selection: ChannelSelection, channel: str) -> ChannelSelection:
    """Marca un canal activo como principal; ignora canales no activos."""

    target = channel.strip()
    if target not in selection.channels:
        return selection
    return ChannelSelection(channels=selection.channels, primary=target)


# Rangos de edad


def _coerce_age(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


def parse_range(token: str) -> tuple[int, int] | None:
    """`"18-24"` -> `(18, 24)`; None si el token no es un rango válido."""

    match = _AGE_RANGE.fullmatch(token.strip())
    if match is None:
        return None
    low, high = int(match.group(1)), int(match.group(2))
    if low > high:
        return None
    return low, high


def format_range(low: int, high: int) -> str:
    return f"{low}-{high}"


def parse_ranges(serialized: str | None) -> TagList:
    """Lee rangos guardados; descarta los malformados y normaliza `"018-24"`."""

    ranges: list[str] = []
    for token in parse(serialized):
        bounds = parse_range(token)
        if bounds is None:
            logger.debug("Dropping invalid stored age range %r", token)
            continue
        ranges.append(format_range(*bounds))
    return _dedupe(ranges)


def set_all_ages(audience: AgeAudience, enabled: bool) -> AgeAudience:
    """Activa/desactiva "todas las edades" sin tocar los rangos guardados."""

    return audience.model_copy(update={"all_ages": bool(enabled)})


def add_range(audience: AgeAudience, minimum: object, maximum: object) -> Outcome[AgeAudience]:
    """Agrega `min-max`.

    Con "todas las edades" activo, el modo personalizado arranca de cero: se
    desactiva el centinela y la lista queda solo con el rango nuevo.
    """

    low, high = _coerce_age(minimum), _coerce_age(maximum)
    if low is None or high is None or low > high:
        logger.debug("Rejected age range %r-%r", minimum, maximum)
        return Outcome(audience, Rejection.INVALID_RANGE)

    token = format_range(low, high)
    if audience.all_ages:
        return Outcome(AgeAudience(all_ages=False, ranges=(token,)))
    outcome = add(audience.ranges, token)
    return Outcome(audience.model_copy(update={"ranges": outcome.value}))


def remove_range(audience: AgeAudience, token: str) -> AgeAudience:
    return audience.model_copy(update={"ranges": remove(audience.ranges, token)})


def take_range(audience: AgeAudience, token: str) -> tuple[AgeAudience, tuple[int, int] | None]:
    """Quita un rango y devuelve sus límites para cargarlos de nuevo en el editor."""

    return remove_range(audience, token), parse_range(token)


# Edición de colores


def begin_color_edit(tags: Iterable[str], color: str) -> ColorEditSession:
    """Entra en modo edición si el color está en la lista; si no, queda inactivo."""

    anchor = normalize_hex(color, allow_shorthand=True)
    if anchor is None or anchor not in tuple(tags):
        return ColorEditSession()
    return ColorEditSession(anchor=anchor)


def cancel_color_edit() -> ColorEditSession:
    return ColorEditSession()


def upsert_color(
    tags: Iterable[str],
    session: ColorEditSession,
    candidate: str | None,
) -> tuple[Outcome[TagList], ColorEditSession]:
    """Confirma el valor del editor de colores.

    Editando: reemplaza el color ancla y vuelve a inactivo. Inactivo: agrega.
    Un candidato inválido deja lista y sesión como estaban.
    """

    current = tuple(tags)
    if normalize_hex(candidate) is None:
        logger.debug("Rejected color candidate %r", candidate)
        return Outcome(current, Rejection.INVALID_COLOR), session
    if session.anchor is not None:
        return replace(current, session.anchor, candidate), ColorEditSession()
    return add(current, candidate, TagKind.COLOR), session

"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ChannelSelection
from core.services.base_config import BaseConfig
from core.services.confirmation import ConfirmationPrompt


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("Content Planner", style="bold cyan")
    subtitle = Text("Marca • Canales • Planificación", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _tags_text(tags: Iterable[str], *, colors: bool = False) -> Text:
    text = Text()
    for index, tag in enumerate(tags):
        if index:
            text.append(", ")
        text.append(tag, style=f"bold {tag}" if colors else "cyan")
    return text


def build_channels_table(selection: ChannelSelection, options: Iterable[str]) -> Table:
    """Tabla de canales: catálogo configurado más canales activos fuera de él."""

    table = Table(title="Canales")
    table.add_column("Canal", style="cyan", no_wrap=True)
    table.add_column("Activo", style="green")
    table.add_column("Principal", style="yellow")

    listed = list(options)
    listed += [channel for channel in selection.channels if channel not in listed]
    for channel in listed:
        active = channel in selection.channels
        table.add_row(channel, "sí" if active else "", "★" if channel == selection.primary else "")
    return table


def build_config_table(config: BaseConfig) -> Table:
    """Tabla resumen de una `BaseConfig` normalizada."""

    table = Table(title="Configuración base")
    table.add_column("Campo", style="cyan", no_wrap=True)
    table.add_column("Valor", style="white")

    form = config.to_form()
    for key in sorted(form):
        value = form[key]
        if key == "brand_colors":
            table.add_row(key, _tags_text(config.brand_colors, colors=True))
        elif key == "target_audience_age_ranges" and config.audience.all_ages:
            table.add_row(key, Text("Todas las edades", style="green"))
        elif value is None or value == "":
            table.add_row(key, Text("—", style="dim"))
        else:
            table.add_row(key, str(value))
    return table


def build_confirmation_panel(prompt: ConfirmationPrompt) -> Panel:
    """Panel del diálogo de eliminación."""

    title = Text("Eliminar", style="bold red")
    body = Text(prompt.message())
    if prompt.enabled:
        body.append("\n\n")
        body.append(prompt.expected, style="bold")
    else:
        body.append("\n\nEliminación deshabilitada para este nombre.", style="yellow")
    return Panel(body, title=title, border_style="red")

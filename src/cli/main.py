"""CLI principal (Typer).

Por qué una CLI:
- Expone el motor de etiquetas y el token de confirmación para scripts,
  migraciones de datos y soporte, sin levantar el dashboard.
- Toda la lógica vive en `core.services`; aquí solo hay parsing de argumentos
  y presentación (Rich).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.form_loader import FormFileError, load_form
from adapters.json_exporter import export_base_config_json
from cli import doctor
from cli.ui_components import build_channels_table, build_config_table, build_confirmation_panel
from core.config import AppSettings
from core.domain.models import AgeAudience, Business, ChannelSelection, Rejection, TagKind
from core.services import tag_fields
from core.services.base_config import InvalidBaseConfig, load_base_config
from core.services.business import soft_delete
from core.services.confirmation import authorize, build_prompt

app = typer.Typer(no_args_is_help=True, help="Brand configuration tag fields and delete confirmations.")
tags_app = typer.Typer(no_args_is_help=True, help="Operate on serialized tag lists.")
channels_app = typer.Typer(no_args_is_help=True, help="Active channels and primary channel.")
ages_app = typer.Typer(no_args_is_help=True, help="Target audience age ranges.")

app.add_typer(tags_app, name="tags")
app.add_typer(channels_app, name="channels")
app.add_typer(ages_app, name="ages")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _fail(rejection: Rejection, settings: AppSettings) -> None:
    _err_console.print(f"[yellow]{rejection.describe(settings.default_language)}[/yellow]")
    raise typer.Exit(code=1)


def _emit(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, sort_keys=True))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    _configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def token(
    name: str = typer.Argument(..., help="Human readable name of the resource."),
    show: bool = typer.Option(False, "--show", help="Render the confirmation dialog."),
) -> None:
    """Print the confirmation token required to delete NAME."""

    settings = AppSettings()
    prompt = build_prompt(name, prefix=settings.confirmation_prefix)
    if show:
        _err_console.print(build_confirmation_panel(prompt))
    if not prompt.enabled:
        _fail(Rejection.NO_VALID_TOKEN, settings)
    typer.echo(prompt.expected)


@app.command()
def confirm(
    name: str = typer.Argument(..., help="Human readable name of the resource."),
    user_input: str = typer.Argument(..., help="Text typed by the user."),
) -> None:
    """Exit 0 when USER_INPUT authorizes deleting NAME, 1 otherwise."""

    settings = AppSettings()
    prompt = build_prompt(name, prefix=settings.confirmation_prefix)
    if not prompt.enabled:
        _fail(Rejection.NO_VALID_TOKEN, settings)
    if not authorize(name, user_input, prefix=settings.confirmation_prefix):
        _fail(Rejection.TOKEN_MISMATCH, settings)
    typer.echo("authorized")


@app.command(name="delete-business")
def delete_business(
    business_id: str = typer.Argument(..., help="Business identifier."),
    name: str = typer.Argument(..., help="Business name as shown in the dashboard."),
    confirmation: str | None = typer.Option(None, "--confirm", help="Confirmation text; prompted when omitted."),
) -> None:
    """Soft-delete a business after the confirmation token is typed."""

    settings = AppSettings()
    business = Business(id=business_id, name=name)
    prompt = build_prompt(name, prefix=settings.confirmation_prefix)
    if not prompt.enabled:
        _fail(Rejection.NO_VALID_TOKEN, settings)

    if confirmation is None:
        _err_console.print(build_confirmation_panel(prompt))
        confirmation = typer.prompt("Confirmación")

    outcome = soft_delete(business, confirmation, prefix=settings.confirmation_prefix)
    if not outcome.accepted:
        _fail(outcome.rejection, settings)
    _emit(outcome.value.model_dump(mode="json"))


@app.command()
def normalize(
    path: Path = typer.Argument(..., help="JSON file with the submitted form fields."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the canonical form as JSON."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """Validate a submitted brand configuration form and print its canonical form."""

    try:
        config = load_base_config(load_form(path))
    except FormFileError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    except InvalidBaseConfig as exc:
        for key, message in sorted(exc.errors.items()):
            _err_console.print(f"[red]{key}:[/red] {message}")
        raise typer.Exit(code=1)

    if as_json:
        _emit(config.to_form())
    else:
        _console.print(build_config_table(config))

    if output is not None:
        written = export_base_config_json(config=config, output_path=output)
        _err_console.print(f"[green]Saved:[/green] {written}")


# tags


@tags_app.command(name="parse")
def tags_parse(
    serialized: str = typer.Argument(..., help="Comma separated list."),
    color: bool = typer.Option(False, "--color", help="Canonicalize as colors."),
) -> None:
    """Print the canonical serialization of SERIALIZED."""

    tags = tag_fields.parse_colors(serialized) if color else tag_fields.parse(serialized)
    typer.echo(tag_fields.serialize(tags))


@tags_app.command(name="add")
def tags_add(
    serialized: str = typer.Argument(..., help="Current comma separated list."),
    value: str = typer.Argument(..., help="Value to append."),
    color: bool = typer.Option(False, "--color", help="Treat VALUE as a HEX color."),
) -> None:
    """Append VALUE unless it is already present."""

    kind = TagKind.COLOR if color else TagKind.PLAIN
    current = tag_fields.parse_colors(serialized) if color else tag_fields.parse(serialized)
    outcome = tag_fields.add(current, value, kind)
    if not outcome.accepted:
        _fail(outcome.rejection, AppSettings())
    typer.echo(tag_fields.serialize(outcome.value))


@tags_app.command(name="remove")
def tags_remove(
    serialized: str = typer.Argument(..., help="Current comma separated list."),
    value: str = typer.Argument(..., help="Value to remove."),
    color: bool = typer.Option(False, "--color", help="Treat VALUE as a HEX color."),
) -> None:
    """Remove VALUE; removing a missing value is a no-op."""

    if color:
        current = tag_fields.parse_colors(serialized)
        value = tag_fields.normalize_hex(value, allow_shorthand=True) or value
    else:
        current = tag_fields.parse(serialized)
    typer.echo(tag_fields.serialize(tag_fields.remove(current, value)))


@tags_app.command(name="replace")
def tags_replace(
    serialized: str = typer.Argument(..., help="Current comma separated colors."),
    old: str = typer.Argument(..., help="Color being edited."),
    new: str = typer.Argument(..., help="New color value."),
) -> None:
    """Replace color OLD with NEW in place, collapsing duplicates."""

    outcome = tag_fields.replace(tag_fields.parse_colors(serialized), old, new)
    if not outcome.accepted:
        _fail(outcome.rejection, AppSettings())
    typer.echo(tag_fields.serialize(outcome.value))


# channels


def _selection_payload(selection: ChannelSelection) -> dict[str, Any]:
    return {"active_channels": selection.serialized, "main_channel": selection.primary}


@channels_app.command(name="toggle")
def channels_toggle(
    serialized: str = typer.Argument(..., help="Current active channels."),
    channel: str = typer.Argument(..., help="Channel to activate or deactivate."),
    primary: str = typer.Option("", "--primary", help="Current main channel."),
) -> None:
    """Activate or deactivate CHANNEL keeping the main channel consistent."""

    settings = AppSettings()
    selection = tag_fields.selection_from_fields(serialized, primary)
    outcome = tag_fields.toggle_channel(selection, channel)
    if not outcome.accepted:
        _fail(outcome.rejection, settings)
    if channel.strip() not in settings.channel_options:
        _err_console.print(f"[yellow]'{channel.strip()}' is not one of the configured channel options.[/yellow]")
    _emit(_selection_payload(outcome.value))


@channels_app.command(name="show")
def channels_show(
    serialized: str = typer.Argument("", help="Current active channels."),
    primary: str = typer.Option("", "--primary", help="Current main channel."),
) -> None:
    """Render the channel catalogue with the active selection."""

    settings = AppSettings()
    selection = tag_fields.selection_from_fields(serialized, primary)
    _console.print(build_channels_table(selection, settings.channel_options))


# ages


def _audience_payload(audience: AgeAudience) -> dict[str, Any]:
    return {
        "target_audience_all_ages": audience.all_ages,
        "target_audience_age_ranges": tag_fields.serialize(audience.ranges),
    }


@ages_app.command(name="add")
def ages_add(
    serialized: str = typer.Argument(..., help="Current age ranges."),
    minimum: str = typer.Argument(..., help="Minimum age."),
    maximum: str = typer.Argument(..., help="Maximum age."),
    all_ages: bool = typer.Option(False, "--all-ages", help="'All ages' is currently enabled."),
) -> None:
    """Add a MINIMUM-MAXIMUM range; leaves 'all ages' mode when it was on."""

    audience = AgeAudience(all_ages=all_ages, ranges=tag_fields.parse_ranges(serialized))
    outcome = tag_fields.add_range(audience, minimum, maximum)
    if not outcome.accepted:
        _fail(outcome.rejection, AppSettings())
    _emit(_audience_payload(outcome.value))


@ages_app.command(name="remove")
def ages_remove(
    serialized: str = typer.Argument(..., help="Current age ranges."),
    token: str = typer.Argument(..., help="Range to remove, e.g. 18-24."),
) -> None:
    """Remove an age range."""

    audience = tag_fields.remove_range(AgeAudience(ranges=tag_fields.parse_ranges(serialized)), token)
    _emit(_audience_payload(audience))


def run() -> None:
    app()


if __name__ == "__main__":
    run()

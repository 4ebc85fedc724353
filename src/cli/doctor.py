"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import json

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from core.config import ENV_PREFIX, AppSettings, get_user_env_file, write_user_env_vars
from core.services.confirmation import authorize, expected_token
from core.services.tag_fields import add, parse, serialize

app = typer.Typer(no_args_is_help=True, help="Configuration checks and user settings.")

_console = Console()


def _check_engine() -> tuple[bool, str]:
    """Run the canonical examples through the engine."""

    colors = add((), "FF0000", "color").value
    tags = parse(serialize(parse(" a , b,a,, ")))
    token_ok = authorize("Café & Co.", "eliminar_cafe_co") and not authorize("Café & Co.", "Eliminar_cafe_co")
    ok = colors == ("#ff0000",) and tags == ("a", "b") and token_ok
    return ok, "OK" if ok else f"colors={colors} tags={tags} token={token_ok}"


@app.command()
def run() -> None:
    """Show the active settings and run a quick engine self-check."""

    settings = AppSettings()

    table = Table(title="Content Planner Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    user_env = get_user_env_file()
    table.add_row("User config", "OK" if user_env.exists() else "OPTIONAL", str(user_env))
    table.add_row("Confirmation prefix", "OK", settings.confirmation_prefix or "(empty)")
    table.add_row(
        "Sample token",
        "OK",
        expected_token("Mi Negocio", prefix=settings.confirmation_prefix),
    )
    table.add_row("Channel options", "OK" if settings.channel_options else "EMPTY", ", ".join(settings.channel_options))
    table.add_row("Language", "OK", settings.default_language.label())
    table.add_row("Log level", "OK", settings.log_level.upper())

    ok_engine, detail_engine = _check_engine()
    table.add_row("Tag engine", "OK" if ok_engine else "FAIL", detail_engine)

    _console.print(table)
    if not ok_engine:
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores values in the user config .env)."""

    current = AppSettings()

    prefix = typer.prompt(
        "Confirmation prefix",
        default=current.confirmation_prefix,
        show_default=True,
    ).strip()
    channels = typer.prompt(
        "Channel options (comma separated)",
        default=serialize(current.channel_options),
        show_default=True,
    )
    language = typer.prompt(
        "Language (en/es)",
        default=current.default_language.value,
        show_default=True,
    ).strip().lower()

    options = list(parse(channels))
    if not options:
        raise typer.BadParameter("at least one channel option is required")
    try:
        chosen = AppSettings(
            confirmation_prefix=prefix,
            channel_options=options,
            default_language=language,
        )
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise typer.BadParameter(f"invalid value for: {fields}") from exc

    env_path = write_user_env_vars(
        {
            f"{ENV_PREFIX}CONFIRMATION_PREFIX": chosen.confirmation_prefix,
            # pydantic-settings lee listas como JSON.
            f"{ENV_PREFIX}CHANNEL_OPTIONS": json.dumps(chosen.channel_options),
            f"{ENV_PREFIX}DEFAULT_LANGUAGE": chosen.default_language.value,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

"""Config command for viewing and managing variantforge configuration."""

import typer

from ..app import app, console
from ... import config as config_module
from ...config import get_config, parse_bool, reset_config


VALID_KEYS = {
    "synthesis.deref_enabled",
    "synthesis.entity_field_name",
    "synthesis.frozen_types",
    "output.header",
    "output.indent",
}

BOOL_FIELDS = {"deref_enabled", "frozen_types"}
INT_FIELDS = {"indent"}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. synthesis.deref_enabled)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify variantforge configuration.

    Examples:
        variantforge config show
        variantforge config set synthesis.deref_enabled false
        variantforge config set synthesis.entity_field_name target
        variantforge config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] variantforge config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]variantforge Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Synthesis[/bold cyan]")
    console.print(f"  deref_enabled     = {config.synthesis.deref_enabled}")
    console.print(f"  entity_field_name = {config.synthesis.entity_field_name}")
    console.print(f"  frozen_types      = {config.synthesis.frozen_types}")

    console.print()
    console.print("[bold cyan]Output[/bold cyan]")
    console.print(f"  header = {config.output.header}", markup=False)
    console.print(f"  indent = {config.output.indent}")

    console.print()
    if config_module.CONFIG_FILE.exists():
        console.print(f"Config file: {config_module.CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({config_module.CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and persist it."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print("Valid keys: " + ", ".join(sorted(VALID_KEYS)))
        raise typer.Exit(1)

    section_name, field_name = key.split(".", 1)
    parsed: object = value
    if field_name in BOOL_FIELDS:
        try:
            parsed = parse_bool(value)
        except ValueError:
            console.print(f"[red]Invalid boolean:[/red] {value}")
            raise typer.Exit(1)
    elif field_name in INT_FIELDS:
        try:
            parsed = int(value)
        except ValueError:
            console.print(f"[red]Invalid integer:[/red] {value}")
            raise typer.Exit(1)
    elif field_name == "entity_field_name" and not value.isidentifier():
        console.print(f"[red]Invalid field name:[/red] {value}")
        raise typer.Exit(1)

    config = get_config()
    setattr(getattr(config, section_name), field_name, parsed)
    config.save()
    reset_config()
    console.print(f"[green]✓[/green] Set {key} = {parsed}")


def _reset_config():
    """Delete the config file and fall back to defaults."""
    if config_module.CONFIG_FILE.exists():
        config_module.CONFIG_FILE.unlink()
        console.print(f"[green]✓[/green] Removed {config_module.CONFIG_FILE}")
    else:
        console.print("[dim]No config file to reset[/dim]")
    reset_config()

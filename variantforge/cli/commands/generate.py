"""Generate command: render variant types to Python source."""

import logging
from pathlib import Path

import typer

from ...core.errors import GenerationError
from ...core.models import CapabilityProfile
from ...synthesis import generate, render_module_name, render_namespace
from ..app import app, console, get_json_mode
from ..utils import Output, load_schemas_or_exit

logger = logging.getLogger(__name__)


@app.command("generate")
def generate_command(
    schema_file: Path = typer.Argument(..., help="Enum schema YAML file"),
    profile: CapabilityProfile = typer.Option(
        CapabilityProfile.EVENT,
        "--profile",
        "-p",
        help="Capability profile the types are generated for",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (one module per enum). Prints to stdout if omitted.",
    ),
):
    """Generate one module of variant types per enum.

    Enums are independent: a failing enum emits nothing and is reported,
    the others are still written. Exit code is 1 if any enum failed.

    Example:
        variantforge generate events.yaml -p entity_event -o generated/
    """
    out = Output(console=console, json_mode=get_json_mode())
    schemas = load_schemas_or_exit(schema_file, out)

    modules: dict[str, str] = {}
    for schema in schemas:
        try:
            namespace = generate(schema, profile)
        except GenerationError as e:
            for issue in e.issues:
                out.issue(issue)
            continue
        for warning in namespace.warnings:
            out.issue(warning)
        modules[render_module_name(namespace)] = render_namespace(namespace)

    if output is not None:
        output.mkdir(parents=True, exist_ok=True)
        for filename, source in modules.items():
            path = output / filename
            path.write_text(source)
            logger.info("Wrote %s", path)
            out.success(f"Wrote {path}")
    elif out.json_mode:
        out.set_data("modules", modules)
    else:
        for source in modules.values():
            typer.echo(source)

    out.set_data("generated", list(modules))
    raise typer.Exit(out.finish())

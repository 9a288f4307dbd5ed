"""Validate command: run every check on a schema file without emitting types."""

from pathlib import Path

import typer

from ...core.models import CapabilityProfile
from ...synthesis import validate_enum
from ..app import app, console, get_json_mode
from ..utils import Output, load_schemas_or_exit, summarize_result


@app.command("validate")
def validate_command(
    schema_file: Path = typer.Argument(..., help="Enum schema YAML file"),
    profile: CapabilityProfile = typer.Option(
        CapabilityProfile.EVENT,
        "--profile",
        "-p",
        help="Capability profile the types are generated for",
    ),
):
    """Validate enum schemas against a capability profile.

    Every variant of every enum is checked; all diagnostics are reported.

    Example:
        variantforge validate events.yaml --profile entity_event
    """
    out = Output(console=console, json_mode=get_json_mode())
    schemas = load_schemas_or_exit(schema_file, out)

    summaries = []
    for schema in schemas:
        result = validate_enum(schema, profile)
        for issue in result.issues:
            out.issue(issue)
        if result.valid:
            out.success(
                f"{schema.name}: {len(schema.variants)} variant(s) valid "
                f"for {profile.value}"
            )
        summaries.append(summarize_result(schema.name, result))

    out.set_data("profile", profile.value)
    out.set_data("enums", summaries)
    raise typer.Exit(out.finish())

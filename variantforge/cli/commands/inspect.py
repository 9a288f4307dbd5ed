"""Inspect command: show each variant's resolved capability configuration."""

from pathlib import Path

import typer

from ...core.models import CapabilityProfile
from ...synthesis import explain, plan_enum
from ..app import app, console, get_json_mode
from ..utils import Output, load_schemas_or_exit


def _show(value) -> str:
    return "-" if value is None else str(value)


@app.command("inspect")
def inspect_command(
    schema_file: Path = typer.Argument(..., help="Enum schema YAML file"),
    profile: CapabilityProfile = typer.Option(
        CapabilityProfile.EVENT,
        "--profile",
        "-p",
        help="Capability profile the types are generated for",
    ),
    trace: bool = typer.Option(
        False,
        "--trace",
        help="Show which level (variant/enum/default) each directive came from",
    ),
):
    """Show target, deref and propagation decisions for every variant.

    Example:
        variantforge inspect events.yaml -p entity_event --trace
    """
    out = Output(console=console, json_mode=get_json_mode())
    schemas = load_schemas_or_exit(schema_file, out)

    for schema in schemas:
        plan = plan_enum(schema, profile)
        planned = {p.variant.name: p.config for p in plan.variants}

        rows = []
        for variant in schema.variants:
            config = planned.get(variant.name)
            if config is None:
                rows.append([variant.name, variant.kind.value, "error", "", "", ""])
                continue
            rows.append(
                [
                    variant.name,
                    variant.kind.value,
                    _show(config.target_field),
                    _show(config.deref_field),
                    config.propagate.describe() if config.propagate else "-",
                    "yes" if config.auto_propagate else "no",
                ]
            )
        out.table(
            f"{schema.name} -> {schema.namespace_name}",
            ["Variant", "Kind", "Target", "Deref", "Propagate", "Auto"],
            rows,
            data_key=schema.namespace_name,
        )

        if trace:
            trace_rows = [
                [variant.name, r.key, _show(r.value), r.source]
                for variant in schema.variants
                for r in explain(schema.directives, variant.directives)
            ]
            out.table(
                f"{schema.name} directive sources",
                ["Variant", "Key", "Value", "Source"],
                trace_rows,
                data_key=f"{schema.namespace_name}_trace",
            )

        for issue in plan.result.issues:
            out.issue(issue)

    raise typer.Exit(out.finish())

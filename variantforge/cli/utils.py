"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for build tools

Example:
    from ..cli.utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Loaded schema", enum="GameEvent", variants=3)
        return out.finish()
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.errors import SchemaError
from ..core.models import EnumSchema, ValidationIssue, load_schemas


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Validation error (at least one enum failed)
        2 = Schema error (input could not be parsed)
        3 = File not found
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    SCHEMA_ERROR = 2
    FILE_NOT_FOUND = 3


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output with colors and formatting.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        # Ensure _data is a fresh dict for each instance
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(
        self,
        message: str,
        *,
        location: str | None = None,
        category: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Output a warning message."""
        if self.json_mode:
            warning_obj: dict[str, Any] = {"message": message}
            if location:
                warning_obj["location"] = location
            if category:
                warning_obj["category"] = category
            if suggestion:
                warning_obj["suggestion"] = suggestion
            self._data["warnings"].append(warning_obj)
        else:
            prefix = f"{location}: " if location else ""
            self.console.print(
                f"[yellow]⚠[/yellow] {escape(prefix + message)}", highlight=False
            )
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")

    def error(
        self,
        message: str,
        *,
        location: str | None = None,
        category: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if location:
                error_obj["location"] = location
            if category:
                error_obj["category"] = category
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            prefix = f"{location}: " if location else ""
            self.console.print(
                f"[red]✗[/red] {escape(prefix + message)}", highlight=False
            )
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")

    def issue(self, issue: ValidationIssue) -> None:
        """Output a validation issue at its own severity."""
        location = issue.location + (f" [{issue.key}]" if issue.key else "")
        if issue.is_error:
            self.error(
                issue.message,
                location=location,
                category=issue.category,
                suggestion=issue.suggestion,
            )
        else:
            self.warning(
                issue.message,
                location=location,
                category=issue.category,
                suggestion=issue.suggestion,
            )

    def text(self, message: str) -> None:
        """Output plain text (human mode only)."""
        if not self.json_mode:
            self.console.print(message)

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for col in columns:
                table.add_column(col)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        Returns the exit code that should be passed to sys.exit().
        """
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code


def load_schemas_or_exit(path: Path, out: Output) -> list[EnumSchema]:
    """Load every enum in a schema file, finishing with an error exit on failure."""
    if not path.exists():
        out.error(f"Schema file not found: {path}", exit_code=ExitCode.FILE_NOT_FOUND)
        raise typer.Exit(out.finish())
    try:
        return load_schemas(path)
    except SchemaError as e:
        out.error(str(e), exit_code=ExitCode.SCHEMA_ERROR)
        raise typer.Exit(out.finish())


def summarize_result(enum_name: str, result) -> dict[str, Any]:
    """Per-enum summary for JSON output (issues themselves go to errors/warnings)."""
    return {
        "enum": enum_name,
        "valid": result.valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
    }

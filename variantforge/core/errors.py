"""Exception types raised by the synthesis pipeline.

Diagnostics are collected as ValidationIssue records first; the typed
exceptions below are what callers catch. A failing enum raises a single
GenerationError carrying every diagnostic for that enum.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.validation import ValidationIssue


class VariantForgeError(Exception):
    """Base class for all variantforge errors."""

    code = "VARIANTFORGE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        enum_name: str | None = None,
        variant_name: str | None = None,
        key: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.enum_name = enum_name
        self.variant_name = variant_name
        self.key = key

    @property
    def location(self) -> str:
        if self.enum_name and self.variant_name:
            return f"{self.enum_name}::{self.variant_name}"
        return self.enum_name or self.variant_name or ""

    def __str__(self) -> str:
        location = self.location
        return f"{location}: {self.message}" if location else self.message


class SchemaError(VariantForgeError):
    """Raised when input cannot be parsed into an EnumSchema."""

    code = "SCHEMA_ERROR"


class StructuralError(VariantForgeError):
    """Variant shape does not satisfy the capability profile."""

    code = "STRUCTURAL"


class AmbiguityError(VariantForgeError):
    """More than one field qualifies for a single-valued role."""

    code = "AMBIGUOUS_FIELD"


class MissingFieldError(VariantForgeError):
    """A required role has no qualifying field."""

    code = "MISSING_FIELD"


class ConfigDependencyError(VariantForgeError):
    """A directive is set that requires another, unset directive."""

    code = "CONFIG_DEPENDENCY"


_KIND_TO_ERROR: dict[str, type[VariantForgeError]] = {
    "structural": StructuralError,
    "ambiguity": AmbiguityError,
    "missing_field": MissingFieldError,
    "config_dependency": ConfigDependencyError,
}


def error_from_issue(issue: ValidationIssue) -> VariantForgeError:
    """Build the typed exception matching an ERROR-level issue."""
    error_cls = _KIND_TO_ERROR.get(issue.kind.value, VariantForgeError)
    return error_cls(
        issue.message,
        enum_name=issue.enum_name,
        variant_name=issue.variant_name,
        key=issue.key,
    )


class GenerationError(VariantForgeError):
    """Raised once per enum when any variant fails validation.

    Nothing from the enum is emitted. ``errors`` holds one typed exception
    per ERROR issue, in variant declaration order.
    """

    code = "GENERATION_FAILED"

    def __init__(self, enum_name: str, issues: list[ValidationIssue]):
        self.issues = [i for i in issues if i.is_error]
        self.errors = [error_from_issue(i) for i in self.issues]
        lines = [f"{len(self.errors)} error(s) while generating '{enum_name}':"]
        lines.extend(f"  - {err}" for err in self.errors)
        super().__init__("\n".join(lines), enum_name=enum_name)

    def __str__(self) -> str:
        return self.message

"""Structural validation of variants against a capability profile.

Checks, per variant:
- Well-formed names, including reserved underscore names (all profiles)
- Target field resolution (entity events; ignored with a warning elsewhere)
- Deref field resolution and its `value` view (all profiles, unless deref
  synthesis is disabled)
- Propagation directive dependencies (all profiles)

Every check returns issues instead of raising, so one enum's variants are
all validated before the pipeline decides whether to emit anything.
"""

from __future__ import annotations

import logging

from ..core.models import (
    CapabilityProfile,
    DiagnosticKind,
    EffectiveConfig,
    EnumSchema,
    FieldTag,
    GenericParam,
    GenericParamKind,
    Severity,
    ValidationIssue,
    VariantKind,
    VariantSchema,
)
from ..utils import is_valid_identifier, to_snake_case
from .binder import DEREF_ATTR
from .selector import (
    convention_target,
    explicit_choices,
    resolve_designation,
    select_deref,
)

logger = logging.getLogger(__name__)


# Helper functions to create ValidationIssue with appropriate severity
def DiagnosticError(
    kind: DiagnosticKind,
    enum_name: str,
    variant_name: str | None,
    key: str | None,
    message: str,
    suggestion: str | None = None,
) -> ValidationIssue:
    """Create an ERROR-level issue."""
    return ValidationIssue(
        severity=Severity.ERROR,
        kind=kind,
        enum_name=enum_name,
        variant_name=variant_name,
        key=key,
        message=message,
        suggestion=suggestion,
    )


def DiagnosticWarning(
    enum_name: str,
    variant_name: str | None,
    key: str | None,
    message: str,
    suggestion: str | None = None,
) -> ValidationIssue:
    """Create a WARNING-level issue for a directive that has no effect."""
    return ValidationIssue(
        severity=Severity.WARNING,
        kind=DiagnosticKind.IGNORED_DIRECTIVE,
        enum_name=enum_name,
        variant_name=variant_name,
        key=key,
        message=message,
        suggestion=suggestion,
    )


def validate_enum_header(schema: EnumSchema) -> list[ValidationIssue]:
    """Enum-level checks that do not belong to any single variant."""
    issues: list[ValidationIssue] = []
    if not is_valid_identifier(schema.name) or not to_snake_case(schema.name):
        issues.append(
            DiagnosticError(
                DiagnosticKind.STRUCTURAL,
                schema.name,
                None,
                "name",
                f"Enum name '{schema.name}' cannot form a namespace name",
                suggestion="Use a CamelCase identifier",
            )
        )

    seen: set[str] = set()
    for param in schema.generic_params:
        if not _is_valid_param_name(param):
            issues.append(
                DiagnosticError(
                    DiagnosticKind.STRUCTURAL,
                    schema.name,
                    None,
                    "generics",
                    f"Generic parameter '{param.name}' is not a valid name",
                    suggestion="Declare the bare parameter; defaults are not supported",
                )
            )
        elif param.name in seen:
            issues.append(
                DiagnosticError(
                    DiagnosticKind.STRUCTURAL,
                    schema.name,
                    None,
                    "generics",
                    f"Duplicate generic parameter '{param.name}'",
                )
            )
        seen.add(param.name)
    return issues


def _is_valid_param_name(param: GenericParam) -> bool:
    if param.kind == GenericParamKind.LIFETIME:
        return param.name.startswith("'") and param.name[1:].isidentifier()
    return is_valid_identifier(param.name)


def _validate_well_formed(
    enum_name: str, variant: VariantSchema
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if not is_valid_identifier(variant.name) or variant.name.startswith("_"):
        issues.append(
            DiagnosticError(
                DiagnosticKind.STRUCTURAL,
                enum_name,
                variant.name,
                "name",
                f"Variant name '{variant.name}' is not a usable type name",
                suggestion="Leading underscores are reserved for generated module internals",
            )
        )

    seen: set[str] = set()
    for field in variant.fields:
        if field.name is None:
            continue
        if not is_valid_identifier(field.name) or (
            field.name.startswith("__") and field.name.endswith("__")
        ):
            issues.append(
                DiagnosticError(
                    DiagnosticKind.STRUCTURAL,
                    enum_name,
                    variant.name,
                    field.name,
                    f"Field name '{field.name}' is not a valid identifier",
                    suggestion="Rename the field; keywords and dunder names cannot be fields",
                )
            )
        elif field.name in seen:
            issues.append(
                DiagnosticError(
                    DiagnosticKind.STRUCTURAL,
                    enum_name,
                    variant.name,
                    field.name,
                    f"Duplicate field name '{field.name}'",
                )
            )
        seen.add(field.name)
    return issues


def _validate_target(
    enum_name: str,
    variant: VariantSchema,
    config: EffectiveConfig,
    profile: CapabilityProfile,
    entity_field_name: str,
) -> list[ValidationIssue]:
    tagged = any(f.has_tag(FieldTag.TARGET) for f in variant.fields)

    if not profile.requires_target:
        if tagged or config.target_designation is not None:
            return [
                DiagnosticWarning(
                    enum_name,
                    variant.name,
                    "target",
                    f"Target field ignored for {profile.value} profile",
                    suggestion="Only entity events carry a target",
                )
            ]
        return []

    if variant.kind != VariantKind.NAMED:
        return [
            DiagnosticError(
                DiagnosticKind.STRUCTURAL,
                enum_name,
                variant.name,
                "kind",
                f"Entity events require named fields, got a {variant.kind.value} variant",
                suggestion=f"Declare the variant as {variant.name} {{ {entity_field_name}: ... }}",
            )
        ]

    if (
        config.target_designation is not None
        and resolve_designation(variant.fields, config.target_designation) is None
    ):
        return [
            DiagnosticError(
                DiagnosticKind.MISSING_FIELD,
                enum_name,
                variant.name,
                "target_field",
                f"target_field '{config.target_designation}' names no field of this variant",
            )
        ]

    explicit = explicit_choices(variant.fields, FieldTag.TARGET, config.target_designation)
    if len(explicit) > 1:
        return [
            DiagnosticError(
                DiagnosticKind.AMBIGUITY,
                enum_name,
                variant.name,
                "target",
                "Ambiguous target field: "
                + ", ".join(ref.accessor for ref in explicit),
                suggestion="Mark exactly one field as target",
            )
        ]
    if not explicit and convention_target(variant.fields, entity_field_name) is None:
        return [
            DiagnosticError(
                DiagnosticKind.MISSING_FIELD,
                enum_name,
                variant.name,
                "target",
                "Missing target field",
                suggestion=f"Tag a field as target or name it '{entity_field_name}'",
            )
        ]
    return []


def _validate_deref(
    enum_name: str, variant: VariantSchema, config: EffectiveConfig
) -> list[ValidationIssue]:
    if (
        config.deref_designation is not None
        and resolve_designation(variant.fields, config.deref_designation) is None
    ):
        return [
            DiagnosticError(
                DiagnosticKind.MISSING_FIELD,
                enum_name,
                variant.name,
                "deref_field",
                f"deref_field '{config.deref_designation}' names no field of this variant",
            )
        ]

    explicit = explicit_choices(variant.fields, FieldTag.DEREF, config.deref_designation)
    if len(explicit) > 1:
        return [
            DiagnosticError(
                DiagnosticKind.AMBIGUITY,
                enum_name,
                variant.name,
                "deref",
                "Ambiguous deref field: "
                + ", ".join(ref.accessor for ref in explicit),
                suggestion="Mark at most one field as deref",
            )
        ]
    return []


def _validate_deref_view(
    enum_name: str, variant: VariantSchema, config: EffectiveConfig
) -> list[ValidationIssue]:
    selected = select_deref(variant.fields, config.deref_designation)
    if selected is None or selected.accessor == DEREF_ATTR:
        return []
    if any(f.name == DEREF_ATTR for f in variant.fields):
        return [
            DiagnosticWarning(
                enum_name,
                variant.name,
                "deref",
                f"Deref field '{selected.accessor}' is not exposed as '{DEREF_ATTR}': "
                "another field has that name",
                suggestion=f"Rename the '{DEREF_ATTR}' field or make it the deref field",
            )
        ]
    return []


def _validate_propagation(
    enum_name: str,
    variant: VariantSchema,
    config: EffectiveConfig,
    profile: CapabilityProfile,
) -> list[ValidationIssue]:
    if config.auto_propagate and config.propagate is None:
        return [
            DiagnosticError(
                DiagnosticKind.CONFIG_DEPENDENCY,
                enum_name,
                variant.name,
                "auto_propagate",
                "auto_propagate without propagate",
                suggestion="Set propagate at enum or variant level",
            )
        ]
    if config.propagate is not None and not profile.supports_propagation:
        return [
            DiagnosticWarning(
                enum_name,
                variant.name,
                "propagate",
                f"Propagation ignored for {profile.value} profile",
            )
        ]
    return []


def validate(
    variant: VariantSchema,
    config: EffectiveConfig,
    profile: CapabilityProfile,
    *,
    enum_name: str,
    deref_enabled: bool = True,
    entity_field_name: str = "entity",
) -> list[ValidationIssue]:
    """Validate one variant's merged configuration against a profile.

    Returns all issues found for the variant; an empty list means it passes.
    """
    issues = _validate_well_formed(enum_name, variant)
    issues += _validate_target(enum_name, variant, config, profile, entity_field_name)
    if deref_enabled:
        deref_issues = _validate_deref(enum_name, variant, config)
        issues += deref_issues or _validate_deref_view(enum_name, variant, config)
    elif config.deref_designation is not None or any(
        f.has_tag(FieldTag.DEREF) for f in variant.fields
    ):
        logger.debug(
            "%s::%s: deref synthesis disabled, deref choices not checked",
            enum_name,
            variant.name,
        )
    issues += _validate_propagation(enum_name, variant, config, profile)
    return issues

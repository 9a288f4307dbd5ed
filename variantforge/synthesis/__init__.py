"""Synthesis pipeline: resolver, validator, selector, synthesizer, binder."""

from .binder import attach, bind, binding_of
from .pipeline import (
    EnumPlan,
    GeneratedNamespace,
    VariantPlan,
    generate,
    plan_enum,
    validate_enum,
)
from .render import render_module_name, render_namespace
from .resolver import KeyResolution, explain, resolve, resolve_enum
from .selector import select_deref, select_target
from .synthesizer import synthesize_types, synthesize_variant
from .validator import validate, validate_enum_header

__all__ = [
    "EnumPlan",
    "GeneratedNamespace",
    "KeyResolution",
    "VariantPlan",
    "attach",
    "bind",
    "binding_of",
    "explain",
    "generate",
    "plan_enum",
    "render_module_name",
    "render_namespace",
    "resolve",
    "resolve_enum",
    "select_deref",
    "select_target",
    "synthesize_types",
    "synthesize_variant",
    "validate",
    "validate_enum",
    "validate_enum_header",
]

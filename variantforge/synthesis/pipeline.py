"""Synthesis pipeline: schema in, namespace of capability-bound types out.

Stages, per enum:
    resolve -> validate -> select fields -> synthesize types -> bind

Each enum is processed independently with no shared state. All variants are
validated before anything is built; if any variant has an ERROR issue the
whole enum fails with one GenerationError and no type is emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from types import ModuleType

from ..config import VariantForgeConfig, get_config
from ..core.errors import GenerationError
from ..core.models import (
    CapabilityBinding,
    CapabilityProfile,
    EffectiveConfig,
    EnumSchema,
    ValidationIssue,
    ValidationResult,
    VariantSchema,
)
from .binder import attach, bind
from .resolver import resolve
from .selector import select_deref, select_target
from .synthesizer import synthesize_types
from .validator import validate, validate_enum_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariantPlan:
    """A validated variant with its completed effective configuration."""

    variant: VariantSchema
    config: EffectiveConfig


@dataclass
class EnumPlan:
    """Everything decided about one enum before any type is built."""

    schema: EnumSchema
    profile: CapabilityProfile
    variants: list[VariantPlan] = field(default_factory=list)
    result: ValidationResult = field(default_factory=ValidationResult)

    @property
    def valid(self) -> bool:
        return self.result.valid


class GeneratedNamespace:
    """The output for one enum: its types and their capability bindings.

    Types are reachable as items (``ns["Victory"]``) or, as a shorthand, as
    attributes (``ns.Victory``); iteration yields them in declaration order.
    Attribute access falls back to the types only when the namespace has no
    attribute of that name, so a variant sharing a name with one (``name``,
    ``types``, ``schema``, ``bindings``, ``as_module``...) is only reachable
    by item access. Generic code should always use ``ns[...]``.
    """

    def __init__(
        self,
        schema: EnumSchema,
        profile: CapabilityProfile,
        types: dict[str, type],
        bindings: dict[str, CapabilityBinding],
        warnings: list[ValidationIssue] | None = None,
        frozen: bool = False,
    ):
        self.schema = schema
        self.profile = profile
        self.types = types
        self.bindings = bindings
        self.warnings = warnings or []
        self.frozen = frozen

    @property
    def name(self) -> str:
        return self.schema.namespace_name

    @property
    def enum_name(self) -> str:
        return self.schema.name

    def __getattr__(self, name: str) -> type:
        types = self.__dict__.get("types", {})
        if name in types:
            return types[name]
        raise AttributeError(f"namespace '{self.name}' has no type '{name}'")

    def __getitem__(self, name: str) -> type:
        return self.types[name]

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def __iter__(self) -> Iterator[type]:
        return iter(self.types.values())

    def __len__(self) -> int:
        return len(self.types)

    def __repr__(self) -> str:
        names = ", ".join(self.types)
        return f"<GeneratedNamespace {self.name} [{self.profile.value}]: {names}>"

    def as_module(self) -> ModuleType:
        """A fresh module object holding the types. Not added to sys.modules."""
        module = ModuleType(self.name, f"Variant types generated from {self.enum_name}.")
        for type_name, cls in self.types.items():
            setattr(module, type_name, cls)
        module.__all__ = list(self.types)
        return module


def _complete_config(
    variant: VariantSchema,
    config: EffectiveConfig,
    profile: CapabilityProfile,
    settings: VariantForgeConfig,
) -> EffectiveConfig:
    target = None
    if profile.requires_target:
        target = select_target(
            variant.fields,
            config.target_designation,
            entity_field_name=settings.synthesis.entity_field_name,
        )
    deref = None
    if settings.synthesis.deref_enabled:
        deref = select_deref(variant.fields, config.deref_designation)
    return config.with_fields(target, deref)


def plan_enum(
    schema: EnumSchema,
    profile: CapabilityProfile,
    *,
    config: VariantForgeConfig | None = None,
) -> EnumPlan:
    """Resolve, validate and select fields for every variant of an enum."""
    settings = config or get_config()
    plan = EnumPlan(schema=schema, profile=profile)
    plan.result.extend(validate_enum_header(schema))

    for variant in schema.variants:
        effective = resolve(schema.directives, variant.directives)
        issues = validate(
            variant,
            effective,
            profile,
            enum_name=schema.name,
            deref_enabled=settings.synthesis.deref_enabled,
            entity_field_name=settings.synthesis.entity_field_name,
        )
        plan.result.extend(issues)
        if any(issue.is_error for issue in issues):
            continue
        completed = _complete_config(variant, effective, profile, settings)
        plan.variants.append(VariantPlan(variant=variant, config=completed))
        logger.debug(
            "%s::%s resolved: target=%s deref=%s propagate=%s auto=%s",
            schema.name,
            variant.name,
            completed.target_field,
            completed.deref_field,
            completed.propagate.describe() if completed.propagate else None,
            completed.auto_propagate,
        )

    for warning in plan.result.warnings:
        logger.info("%s", warning)
    return plan


def validate_enum(
    schema: EnumSchema,
    profile: CapabilityProfile,
    *,
    config: VariantForgeConfig | None = None,
) -> ValidationResult:
    """Run every check for an enum without building anything."""
    return plan_enum(schema, profile, config=config).result


def generate(
    schema: EnumSchema,
    profile: CapabilityProfile,
    *,
    config: VariantForgeConfig | None = None,
) -> GeneratedNamespace:
    """Generate the namespace of variant types for one enum.

    Raises:
        GenerationError: If any variant fails validation. Carries every
            diagnostic for the enum; no type is emitted.
    """
    settings = config or get_config()
    plan = plan_enum(schema, profile, config=settings)
    if not plan.valid:
        logger.debug(
            "%s: %d error(s), nothing emitted", schema.name, len(plan.result.errors)
        )
        raise GenerationError(schema.name, plan.result.issues)

    frozen = settings.synthesis.frozen_types
    types = synthesize_types(schema, frozen=frozen)
    bindings: dict[str, CapabilityBinding] = {}
    for variant_plan in plan.variants:
        binding = bind(schema.name, variant_plan.variant, variant_plan.config, profile)
        attach(types[variant_plan.variant.name], binding)
        bindings[variant_plan.variant.name] = binding

    logger.debug(
        "Generated namespace '%s' with %d type(s)", schema.namespace_name, len(types)
    )
    return GeneratedNamespace(
        schema=schema,
        profile=profile,
        types=types,
        bindings=bindings,
        warnings=plan.result.warnings,
        frozen=frozen,
    )

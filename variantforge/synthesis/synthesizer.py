"""Type synthesis: one independent dataclass per variant.

Field layout is copied verbatim (names for named variants, positional
``_0``/``_1``... for tuple variants, nothing for unit variants). Field
types are opaque strings used as annotations and never evaluated.

The enum's generic parameters are attached to every type, whether or not
the variant uses them. Type parameters also become TypeVars shared by all
variants of the enum, so every type is ``Generic`` over the same list.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Generic, TypeVar

from ..core.models import EnumSchema, GenericParam, GenericParamKind, VariantSchema
from ..utils import positional_field_name


def build_type_vars(generic_params: Sequence[GenericParam]) -> tuple[TypeVar, ...]:
    """TypeVars for the type-kind parameters, in declaration order."""
    return tuple(
        TypeVar(param.name)
        for param in generic_params
        if param.kind == GenericParamKind.TYPE
    )


def field_layout(variant: VariantSchema) -> list[tuple[str, str]]:
    """(attribute name, type expression) pairs for a variant's fields."""
    return [
        (
            field.name if field.name is not None else positional_field_name(index),
            field.type_expr,
        )
        for index, field in enumerate(variant.fields)
    ]


def synthesize_variant(
    variant: VariantSchema,
    *,
    module_name: str,
    enum_name: str,
    generic_params: tuple[GenericParam, ...] = (),
    type_vars: tuple[TypeVar, ...] = (),
    frozen: bool = False,
) -> type:
    """Build the dataclass for one variant."""
    bases: tuple[type, ...] = (Generic[type_vars],) if type_vars else ()
    namespace = {
        "__doc__": f"{enum_name}::{variant.name} ({variant.kind.value} variant).",
        "__generic_params__": generic_params,
        "__variant_kind__": variant.kind,
        "__source_enum__": enum_name,
    }
    cls = dataclasses.make_dataclass(
        variant.name,
        field_layout(variant),
        bases=bases,
        namespace=namespace,
        frozen=frozen,
    )
    cls.__module__ = module_name
    return cls


def synthesize_types(schema: EnumSchema, *, frozen: bool = False) -> dict[str, type]:
    """Build every variant type of an enum, keyed by variant name."""
    module_name = schema.namespace_name
    type_vars = build_type_vars(schema.generic_params)
    return {
        variant.name: synthesize_variant(
            variant,
            module_name=module_name,
            enum_name=schema.name,
            generic_params=schema.generic_params,
            type_vars=type_vars,
            frozen=frozen,
        )
        for variant in schema.variants
    }

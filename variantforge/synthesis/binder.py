"""Capability binding: hand resolved configuration to the host layer.

A binding is a plain value object. It is attached to each synthesized type
as ``__capabilities__``; the host runtime's trait layer reads it from there.
Roles a profile does not use are never bound.

When a deref field is bound, the type also gets a ``value`` property that
reads and writes that field, so instances expose it transparently.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from ..core.models import (
    CapabilityBinding,
    CapabilityProfile,
    EffectiveConfig,
    VariantSchema,
)

CAPABILITIES_ATTR = "__capabilities__"
DEREF_ATTR = "value"


def bind(
    enum_name: str,
    variant: VariantSchema,
    config: EffectiveConfig,
    profile: CapabilityProfile,
) -> CapabilityBinding:
    """Build the binding for one variant from its completed EffectiveConfig."""
    propagate = config.propagate if profile.supports_propagation else None
    return CapabilityBinding(
        enum_name=enum_name,
        variant_name=variant.name,
        profile=profile,
        target_field=config.target_field if profile.requires_target else None,
        deref_field=config.deref_field,
        propagate=propagate,
        auto_propagate=config.auto_propagate if propagate is not None else False,
    )


def deref_view(binding: CapabilityBinding, field_names: Iterable[str]) -> str | None:
    """Accessor the ``value`` property forwards to, or None for no property.

    A deref field already named ``value`` needs no property; any other field
    named ``value`` leaves no room for one.
    """
    if binding.deref_field is None or DEREF_ATTR in set(field_names):
        return None
    return binding.deref_field.accessor


def deref_property(accessor: str) -> property:
    def _get(self):
        return getattr(self, accessor)

    def _set(self, value):
        setattr(self, accessor, value)

    return property(_get, _set, doc=f"Deref view of ``{accessor}``.")


def attach(cls: type, binding: CapabilityBinding) -> type:
    """Attach a binding (and the deref property, if any) to a synthesized type."""
    setattr(cls, CAPABILITIES_ATTR, binding)
    field_names = (
        [f.name for f in dataclasses.fields(cls)] if dataclasses.is_dataclass(cls) else []
    )
    accessor = deref_view(binding, field_names)
    if accessor is not None:
        setattr(cls, DEREF_ATTR, deref_property(accessor))
    return cls


def binding_of(obj: object) -> CapabilityBinding | None:
    """Read the binding from a synthesized type or one of its instances."""
    binding = getattr(obj, CAPABILITIES_ATTR, None)
    return binding if isinstance(binding, CapabilityBinding) else None

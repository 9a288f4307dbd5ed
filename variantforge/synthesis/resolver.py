"""Attribute resolution: merge enum-level and variant-level directives.

Precedence policy, applied key by key:
1. Variant-level value wins when given
2. Otherwise the enum-level value
3. Otherwise the key's default (disabled / no designation)

A key is always taken wholesale from one level; there are no partial merges.
Malformed combinations are not rejected here; the validator reports them
against the merged view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from ..core.models import (
    Directives,
    EffectiveConfig,
    EnumSchema,
    RelationshipSpec,
)


ResolutionSource = Literal["variant", "enum", "default"]

RESOLVED_KEYS = ("propagate", "auto_propagate", "target_field", "deref_field")


@dataclass(frozen=True)
class KeyResolution:
    """Where one key's effective value came from."""

    key: str
    value: Any
    source: ResolutionSource


def resolve_key(key: str, enum_level: Directives, variant_level: Directives) -> KeyResolution:
    """Resolve a single directive key across the two levels."""
    variant_value = getattr(variant_level, key)
    if variant_value is not None:
        return KeyResolution(key=key, value=variant_value, source="variant")
    enum_value = getattr(enum_level, key)
    if enum_value is not None:
        return KeyResolution(key=key, value=enum_value, source="enum")
    return KeyResolution(key=key, value=None, source="default")


def explain(enum_level: Directives, variant_level: Directives) -> list[KeyResolution]:
    """Per-key resolution trace, in a fixed key order."""
    return [resolve_key(key, enum_level, variant_level) for key in RESOLVED_KEYS]


def relationship_from_directive(value: bool | str | None) -> RelationshipSpec | None:
    """Map a raw ``propagate`` value to a relationship spec (None = disabled)."""
    if value is None or value is False:
        return None
    if value is True:
        return RelationshipSpec.default()
    return RelationshipSpec.custom(value.strip())


def resolve(enum_level: Directives, variant_level: Directives) -> EffectiveConfig:
    """Compute the effective configuration for one variant.

    Pure: the result depends only on the two directive sets.
    """
    resolved = {r.key: r.value for r in explain(enum_level, variant_level)}
    return EffectiveConfig(
        target_designation=resolved["target_field"],
        deref_designation=resolved["deref_field"],
        propagate=relationship_from_directive(resolved["propagate"]),
        auto_propagate=bool(resolved["auto_propagate"]),
    )


def resolve_enum(schema: EnumSchema) -> dict[str, EffectiveConfig]:
    """Resolve every variant of an enum, keyed by variant name in declaration order."""
    return {
        variant.name: resolve(schema.directives, variant.directives)
        for variant in schema.variants
    }

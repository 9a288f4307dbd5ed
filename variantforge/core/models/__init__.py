"""All Pydantic models for variantforge.

- schema.py: EnumSchema, VariantSchema, FieldSchema, Directives, YAML I/O
- capability.py: profiles, EffectiveConfig, FieldRef, CapabilityBinding
- validation.py: ValidationIssue / ValidationResult
"""

from .schema import (
    Directives,
    EnumSchema,
    FieldSchema,
    FieldTag,
    GenericParam,
    GenericParamKind,
    VariantKind,
    VariantSchema,
    load_schemas,
)
from .capability import (
    CapabilityBinding,
    CapabilityProfile,
    EffectiveConfig,
    FieldRef,
    RelationshipKind,
    RelationshipSpec,
)
from .validation import (
    DiagnosticKind,
    Severity,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Schema
    "Directives",
    "EnumSchema",
    "FieldSchema",
    "FieldTag",
    "GenericParam",
    "GenericParamKind",
    "VariantKind",
    "VariantSchema",
    "load_schemas",
    # Capability
    "CapabilityBinding",
    "CapabilityProfile",
    "EffectiveConfig",
    "FieldRef",
    "RelationshipKind",
    "RelationshipSpec",
    # Validation
    "DiagnosticKind",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]

"""variantforge: split tagged-union schemas into capability-bound types.

Each enum declaration is turned into a namespace holding one independent
dataclass per variant, plus the capability metadata (target field, deref
field, propagation) a host runtime needs to wire those types up.

Example:
    from variantforge import CapabilityProfile, EnumSchema, generate

    schema = EnumSchema.from_yaml("events.yaml")
    namespace = generate(schema, CapabilityProfile.ENTITY_EVENT)
    namespace.Damaged(entity=1, amount=30)
"""

__version__ = "0.3.0"

from .core.errors import (
    AmbiguityError,
    ConfigDependencyError,
    GenerationError,
    MissingFieldError,
    SchemaError,
    StructuralError,
    VariantForgeError,
)
from .core.models import (
    CapabilityBinding,
    CapabilityProfile,
    Directives,
    EffectiveConfig,
    EnumSchema,
    FieldRef,
    FieldSchema,
    GenericParam,
    RelationshipSpec,
    ValidationIssue,
    ValidationResult,
    VariantKind,
    VariantSchema,
    load_schemas,
)
from .synthesis import (
    GeneratedNamespace,
    generate,
    render_namespace,
    validate_enum,
)

__all__ = [
    "__version__",
    # Errors
    "VariantForgeError",
    "SchemaError",
    "StructuralError",
    "AmbiguityError",
    "MissingFieldError",
    "ConfigDependencyError",
    "GenerationError",
    # Models
    "EnumSchema",
    "VariantSchema",
    "FieldSchema",
    "GenericParam",
    "Directives",
    "VariantKind",
    "CapabilityProfile",
    "RelationshipSpec",
    "FieldRef",
    "EffectiveConfig",
    "CapabilityBinding",
    "ValidationIssue",
    "ValidationResult",
    "load_schemas",
    # Pipeline
    "GeneratedNamespace",
    "generate",
    "validate_enum",
    "render_namespace",
]

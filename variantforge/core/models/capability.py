"""Capability models: profiles, resolved configuration and bindings.

EffectiveConfig is what the resolver produces for one variant and the
field selector completes. CapabilityBinding is the value handed to the
host runtime's trait layer; it is attached to every synthesized type.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from ...utils import positional_field_name


class CapabilityProfile(str, Enum):
    """Requested category of synthesized type."""

    EVENT = "event"  # global observer event
    MESSAGE = "message"  # buffered message
    ENTITY_EVENT = "entity_event"  # entity-targeted observer event

    @property
    def requires_target(self) -> bool:
        return self is CapabilityProfile.ENTITY_EVENT

    @property
    def supports_propagation(self) -> bool:
        return self is CapabilityProfile.ENTITY_EVENT


class RelationshipKind(str, Enum):
    DEFAULT = "default"
    CUSTOM = "custom"


class RelationshipSpec(BaseModel):
    """Which hierarchy relation propagation traverses."""

    model_config = ConfigDict(frozen=True)

    kind: RelationshipKind = RelationshipKind.DEFAULT
    type_expr: str | None = None

    @model_validator(mode="after")
    def _check_type_expr(self) -> "RelationshipSpec":
        if self.kind == RelationshipKind.CUSTOM and not self.type_expr:
            raise ValueError("custom relationship requires a type_expr")
        if self.kind == RelationshipKind.DEFAULT and self.type_expr is not None:
            raise ValueError("default relationship takes no type_expr")
        return self

    @classmethod
    def default(cls) -> "RelationshipSpec":
        return cls(kind=RelationshipKind.DEFAULT)

    @classmethod
    def custom(cls, type_expr: str) -> "RelationshipSpec":
        return cls(kind=RelationshipKind.CUSTOM, type_expr=type_expr)

    def describe(self) -> str:
        return self.type_expr if self.type_expr else "default"


class FieldRef(BaseModel):
    """Reference to one field of a variant by declaration position."""

    model_config = ConfigDict(frozen=True)

    index: int
    name: str | None = None

    @property
    def accessor(self) -> str:
        """Attribute name of the field on the synthesized type."""
        return self.name if self.name is not None else positional_field_name(self.index)

    def __str__(self) -> str:
        return self.accessor


class EffectiveConfig(BaseModel):
    """Merged enum/variant configuration for one variant.

    ``auto_propagate`` is carried as given even without ``propagate`` so the
    validator can report the dependency violation on the merged view.
    """

    model_config = ConfigDict(frozen=True)

    target_designation: str | int | None = None
    deref_designation: str | int | None = None
    propagate: RelationshipSpec | None = None
    auto_propagate: bool = False
    target_field: FieldRef | None = None
    deref_field: FieldRef | None = None

    def with_fields(
        self, target_field: FieldRef | None, deref_field: FieldRef | None
    ) -> "EffectiveConfig":
        return self.model_copy(
            update={"target_field": target_field, "deref_field": deref_field}
        )


class CapabilityBinding(BaseModel):
    """Generation-time metadata attached to one synthesized type."""

    model_config = ConfigDict(frozen=True)

    enum_name: str
    variant_name: str
    profile: CapabilityProfile
    target_field: FieldRef | None = None
    deref_field: FieldRef | None = None
    propagate: RelationshipSpec | None = None
    auto_propagate: bool = False

    @property
    def propagates(self) -> bool:
        return self.propagate is not None

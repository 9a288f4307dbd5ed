"""Enum schema models and YAML I/O.

An EnumSchema is the already-parsed form of one tagged-union declaration:
its name, generic parameters, enum-level directives and ordered variants.
Schemas are immutable once validated.

YAML shape:

    name: CombatEvent
    generics: ["T: Clone", "'a"]
    directives: {propagate: true}
    variants:
      - name: Attack
        fields:
          - {name: attacker, type: Entity, tags: [target]}
          - {name: defender, type: Entity}
      - name: Victory
        fields: [String]          # tuple variant, shorthand
      - name: GameOver            # unit variant
"""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import SchemaError
from ...utils import to_snake_case


class VariantKind(str, Enum):
    UNIT = "unit"
    TUPLE = "tuple"
    NAMED = "named"


class FieldTag(str, Enum):
    TARGET = "target"
    DEREF = "deref"


class GenericParamKind(str, Enum):
    TYPE = "type"
    LIFETIME = "lifetime"
    CONST = "const"


class GenericParam(BaseModel):
    """One generic parameter of the enum, threaded onto every variant type.

    Accepts a shorthand string: "T", "T: Clone + Send", "'a", "const N: usize".
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: GenericParamKind = GenericParamKind.TYPE
    bounds: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _parse_shorthand(cls, data: Any) -> Any:
        if not isinstance(data, str):
            return data
        text = data.strip()
        kind = GenericParamKind.TYPE
        if text.startswith("const "):
            kind = GenericParamKind.CONST
            text = text[len("const ") :].strip()
        elif text.startswith("'"):
            kind = GenericParamKind.LIFETIME
        name, _, bound_text = text.partition(":")
        bounds = tuple(b.strip() for b in bound_text.split("+") if b.strip())
        return {"name": name.strip(), "kind": kind, "bounds": bounds}

    def render(self) -> str:
        """Source form of the parameter, bounds included."""
        if self.kind == GenericParamKind.CONST:
            return f"const {self.name}: {' + '.join(self.bounds)}"
        if self.bounds:
            return f"{self.name}: {' + '.join(self.bounds)}"
        return self.name


class Directives(BaseModel):
    """Raw configuration directives at enum or variant level.

    None means "not given at this level"; the resolver falls back to the
    enclosing level for that key.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    propagate: bool | str | None = Field(
        default=None,
        description="true = host-default relation, string = custom relation type, false = off",
    )
    auto_propagate: bool | None = None
    target_field: str | int | None = Field(
        default=None, description="Field name (or tuple index) used as the target"
    )
    deref_field: str | int | None = Field(
        default=None, description="Field name (or tuple index) used as the deref field"
    )

    @model_validator(mode="after")
    def _check_relation(self) -> "Directives":
        if isinstance(self.propagate, str) and not self.propagate.strip():
            raise ValueError("propagate relation type must not be empty")
        return self

    def given_keys(self) -> list[str]:
        """Keys explicitly set at this level, in declaration order."""
        return [
            name for name in type(self).model_fields if getattr(self, name) is not None
        ]

    def is_empty(self) -> bool:
        return not self.given_keys()


class FieldSchema(BaseModel):
    """One field of a variant. ``type_expr`` is opaque and never inspected."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    type_expr: str = Field(alias="type")
    tags: frozenset[FieldTag] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _parse_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"type": data}
        return data

    def has_tag(self, tag: FieldTag) -> bool:
        return tag in self.tags


class VariantSchema(BaseModel):
    """One alternative of the enum. ``kind`` is inferred when omitted."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: VariantKind
    fields: tuple[FieldSchema, ...] = ()
    directives: Directives = Field(default_factory=Directives)

    @model_validator(mode="before")
    @classmethod
    def _infer_kind(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data, "kind": VariantKind.UNIT}
        if not isinstance(data, dict) or data.get("kind") is not None:
            return data
        fields = data.get("fields") or []
        if not fields:
            kind = VariantKind.UNIT
        elif all(isinstance(f, dict) and f.get("name") for f in fields):
            kind = VariantKind.NAMED
        else:
            kind = VariantKind.TUPLE
        return {**data, "kind": kind}

    @model_validator(mode="after")
    def _check_layout(self) -> "VariantSchema":
        if self.kind == VariantKind.UNIT and self.fields:
            raise ValueError(f"unit variant '{self.name}' cannot have fields")
        if self.kind != VariantKind.UNIT and not self.fields:
            raise ValueError(f"{self.kind.value} variant '{self.name}' needs fields")
        named = [f.name is not None for f in self.fields]
        if self.kind == VariantKind.NAMED and not all(named):
            raise ValueError(f"named variant '{self.name}' has unnamed fields")
        if self.kind == VariantKind.TUPLE and any(named):
            raise ValueError(f"tuple variant '{self.name}' has named fields")
        return self

    @property
    def arity(self) -> int:
        return len(self.fields)


class EnumSchema(BaseModel):
    """A complete tagged-union declaration, ready for synthesis."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    generic_params: tuple[GenericParam, ...] = Field(default=(), alias="generics")
    directives: Directives = Field(default_factory=Directives)
    variants: tuple[VariantSchema, ...] = ()

    @model_validator(mode="after")
    def _check_unique_variants(self) -> "EnumSchema":
        seen: set[str] = set()
        for variant in self.variants:
            if variant.name in seen:
                raise ValueError(
                    f"duplicate variant '{variant.name}' in enum '{self.name}'"
                )
            seen.add(variant.name)
        return self

    @property
    def namespace_name(self) -> str:
        """Lower-snake-case namespace the variant types are placed in."""
        return to_snake_case(self.name)

    def get_variant(self, name: str) -> VariantSchema | None:
        for variant in self.variants:
            if variant.name == name:
                return variant
        return None

    @classmethod
    def from_dict(cls, data: Any) -> "EnumSchema":
        """Validate a plain mapping, raising SchemaError on bad input."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            name = data.get("name") if isinstance(data, dict) else None
            raise SchemaError(f"invalid enum schema: {e}", enum_name=name) from e

    @classmethod
    def from_yaml(cls, path: Path | str) -> "EnumSchema":
        """Load a single enum from a YAML file."""
        schemas = load_schemas(path)
        if len(schemas) != 1:
            raise SchemaError(
                f"{path}: expected exactly one enum, found {len(schemas)}"
            )
        return schemas[0]

    def to_yaml(self, path: Path | str) -> None:
        """Save schema to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json", by_alias=True, exclude_defaults=True)

        with open(path, "w") as f:
            yaml.dump(
                data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )


def load_schemas(path: Path | str) -> list[EnumSchema]:
    """Load every enum declared in a YAML file.

    The document is either one enum mapping or ``{"enums": [...]}``.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaError(f"{path}: invalid YAML: {e}") from e

    if isinstance(data, dict) and "enums" in data:
        entries = data["enums"] or []
    elif isinstance(data, dict):
        entries = [data]
    else:
        raise SchemaError(f"{path}: expected a mapping at the top level")

    return [EnumSchema.from_dict(entry) for entry in entries]

"""Field role selection: which field is the target, which is the deref field.

Selection is a two-stage lookup:
1. Explicit choices: fields carrying the role's tag, plus the field named by
   the role's designation directive (deduplicated, declaration order)
2. Fallback heuristic: the entity naming convention for targets, the single
   field of a one-field variant for deref

More than one explicit choice is a precondition violation reported by the
validator; the selectors themselves stay total and order-stable, returning
the first explicit choice in declaration order.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.models import FieldRef, FieldSchema, FieldTag
from ..utils import positional_field_name


def field_ref(index: int, field: FieldSchema) -> FieldRef:
    return FieldRef(index=index, name=field.name)


def resolve_designation(
    fields: Sequence[FieldSchema], designation: str | int | None
) -> FieldRef | None:
    """Find the field a designation directive points at.

    Integers (and ASCII digit strings) are positional indexes; other strings
    match a field name or a tuple field's positional accessor (``_0``, ``_1``...).
    """
    if designation is None:
        return None
    if isinstance(designation, str) and designation.isascii() and designation.isdigit():
        designation = int(designation)
    if isinstance(designation, int):
        if 0 <= designation < len(fields):
            return field_ref(designation, fields[designation])
        return None
    for index, field in enumerate(fields):
        if field.name == designation:
            return field_ref(index, field)
        if field.name is None and positional_field_name(index) == designation:
            return field_ref(index, field)
    return None


def explicit_choices(
    fields: Sequence[FieldSchema],
    tag: FieldTag,
    designation: str | int | None = None,
) -> list[FieldRef]:
    """All explicitly chosen fields for a role, in declaration order."""
    designated = resolve_designation(fields, designation)
    return [
        field_ref(index, field)
        for index, field in enumerate(fields)
        if field.has_tag(tag) or (designated is not None and designated.index == index)
    ]


def convention_target(
    fields: Sequence[FieldSchema], entity_field_name: str = "entity"
) -> FieldRef | None:
    """The field matching the entity naming convention, if any."""
    for index, field in enumerate(fields):
        if field.name == entity_field_name:
            return field_ref(index, field)
    return None


def select_target(
    fields: Sequence[FieldSchema],
    designation: str | int | None = None,
    *,
    entity_field_name: str = "entity",
) -> FieldRef | None:
    """Select the target field. Explicit choices take precedence over convention."""
    explicit = explicit_choices(fields, FieldTag.TARGET, designation)
    if explicit:
        return explicit[0]
    return convention_target(fields, entity_field_name)


def select_deref(
    fields: Sequence[FieldSchema],
    designation: str | int | None = None,
) -> FieldRef | None:
    """Select the deref field.

    A single-field variant derefs to its only field unless told otherwise;
    zero or several untagged fields mean no deref field.
    """
    explicit = explicit_choices(fields, FieldTag.DEREF, designation)
    if explicit:
        return explicit[0]
    if len(fields) == 1:
        return field_ref(0, fields[0])
    return None

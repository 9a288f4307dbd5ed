"""Tests for per-variant structural validation."""

import pytest

from variantforge.core.models import (
    CapabilityProfile,
    DiagnosticKind,
    Directives,
    EnumSchema,
    Severity,
    VariantSchema,
)
from variantforge.synthesis.resolver import resolve
from variantforge.synthesis.validator import validate, validate_enum_header


def _variant(data) -> VariantSchema:
    return VariantSchema.model_validate(data)


def _check(variant, profile, enum_directives=None, **kwargs):
    config = resolve(enum_directives or Directives(), variant.directives)
    return validate(variant, config, profile, enum_name="TestEnum", **kwargs)


def _kinds(issues):
    return [i.kind for i in issues if i.severity == Severity.ERROR]


class TestGlobalProfiles:
    @pytest.mark.parametrize(
        "profile", [CapabilityProfile.EVENT, CapabilityProfile.MESSAGE]
    )
    @pytest.mark.parametrize(
        "data",
        [
            {"name": "GameOver"},
            {"name": "Victory", "fields": ["String"]},
            {
                "name": "ScoreChanged",
                "fields": [{"name": "team", "type": "u32"}, {"name": "score", "type": "i32"}],
            },
        ],
    )
    def test_any_shape_passes(self, profile, data):
        assert _check(_variant(data), profile) == []

    def test_target_tag_is_ignored_with_warning(self):
        variant = _variant(
            {"name": "Hit", "fields": [{"name": "who", "type": "Entity", "tags": ["target"]}]}
        )
        issues = _check(variant, CapabilityProfile.EVENT)
        assert len(issues) == 1
        assert issues[0].severity == Severity.WARNING
        assert issues[0].kind == DiagnosticKind.IGNORED_DIRECTIVE
        assert issues[0].key == "target"


class TestEntityProfile:
    def test_convention_field_passes(self):
        variant = _variant(
            {"name": "Spawned", "fields": [{"name": "entity", "type": "Entity"}]}
        )
        assert _check(variant, CapabilityProfile.ENTITY_EVENT) == []

    def test_explicit_tag_without_convention_passes(self):
        variant = _variant(
            {
                "name": "Attack",
                "fields": [
                    {"name": "attacker", "type": "Entity", "tags": ["target"]},
                    {"name": "defender", "type": "Entity"},
                ],
            }
        )
        assert _check(variant, CapabilityProfile.ENTITY_EVENT) == []

    def test_tag_plus_convention_is_not_ambiguous(self):
        variant = _variant(
            {
                "name": "Attack",
                "fields": [
                    {"name": "entity", "type": "Entity"},
                    {"name": "attacker", "type": "Entity", "tags": ["target"]},
                ],
            }
        )
        assert _check(variant, CapabilityProfile.ENTITY_EVENT) == []

    def test_missing_target(self):
        variant = _variant(
            {"name": "Y", "fields": [{"name": "a", "type": "u8"}, {"name": "b", "type": "u8"}]}
        )
        issues = _check(variant, CapabilityProfile.ENTITY_EVENT)
        assert _kinds(issues) == [DiagnosticKind.MISSING_FIELD]
        assert issues[0].variant_name == "Y"
        assert issues[0].enum_name == "TestEnum"
        assert "Missing target field" in issues[0].message

    def test_two_target_tags_ambiguous(self):
        variant = _variant(
            {
                "name": "Swap",
                "fields": [
                    {"name": "a", "type": "Entity", "tags": ["target"]},
                    {"name": "b", "type": "Entity", "tags": ["target"]},
                ],
            }
        )
        issues = _check(variant, CapabilityProfile.ENTITY_EVENT)
        assert _kinds(issues) == [DiagnosticKind.AMBIGUITY]
        assert "a, b" in issues[0].message

    def test_designation_and_other_tag_ambiguous(self):
        variant = _variant(
            {
                "name": "Swap",
                "directives": {"target_field": "b"},
                "fields": [
                    {"name": "a", "type": "Entity", "tags": ["target"]},
                    {"name": "b", "type": "Entity"},
                ],
            }
        )
        assert _kinds(_check(variant, CapabilityProfile.ENTITY_EVENT)) == [
            DiagnosticKind.AMBIGUITY
        ]

    def test_unknown_designation_is_missing(self):
        variant = _variant(
            {"name": "Hit", "fields": [{"name": "entity", "type": "Entity"}]}
        )
        issues = _check(
            variant,
            CapabilityProfile.ENTITY_EVENT,
            enum_directives=Directives(target_field="source"),
        )
        assert _kinds(issues) == [DiagnosticKind.MISSING_FIELD]
        assert issues[0].key == "target_field"

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "Ping"},
            {"name": "Poke", "fields": [{"type": "Entity", "tags": ["target"]}]},
        ],
    )
    def test_unit_and_tuple_are_structural_errors(self, data):
        issues = _check(_variant(data), CapabilityProfile.ENTITY_EVENT)
        assert _kinds(issues) == [DiagnosticKind.STRUCTURAL]
        assert issues[0].key == "kind"

    def test_custom_convention_name(self):
        variant = _variant(
            {"name": "Hit", "fields": [{"name": "owner", "type": "Entity"}]}
        )
        assert (
            _check(variant, CapabilityProfile.ENTITY_EVENT, entity_field_name="owner")
            == []
        )


class TestDeref:
    def test_two_deref_tags_ambiguous(self):
        variant = _variant(
            {
                "name": "Pair",
                "fields": [
                    {"type": "String", "tags": ["deref"]},
                    {"type": "i32", "tags": ["deref"]},
                ],
            }
        )
        issues = _check(variant, CapabilityProfile.MESSAGE)
        assert _kinds(issues) == [DiagnosticKind.AMBIGUITY]
        assert issues[0].key == "deref"

    def test_three_untagged_fields_is_fine(self):
        variant = _variant({"name": "Triple", "fields": ["u8", "u8", "u8"]})
        assert _check(variant, CapabilityProfile.MESSAGE) == []

    def test_disabled_deref_skips_checks(self):
        variant = _variant(
            {
                "name": "Pair",
                "fields": [
                    {"type": "String", "tags": ["deref"]},
                    {"type": "i32", "tags": ["deref"]},
                ],
            }
        )
        assert _check(variant, CapabilityProfile.MESSAGE, deref_enabled=False) == []

    def test_unknown_deref_designation(self):
        variant = _variant({"name": "Single", "fields": ["String"]})
        issues = _check(
            variant, CapabilityProfile.EVENT, enum_directives=Directives(deref_field=2)
        )
        assert _kinds(issues) == [DiagnosticKind.MISSING_FIELD]
        assert issues[0].key == "deref_field"

    def test_superscript_digit_designation_is_missing(self):
        variant = _variant({"name": "Pair", "fields": ["String", "i32"]})
        issues = _check(
            variant,
            CapabilityProfile.MESSAGE,
            enum_directives=Directives(deref_field="\u00b2"),
        )
        assert _kinds(issues) == [DiagnosticKind.MISSING_FIELD]
        assert issues[0].key == "deref_field"


class TestPropagation:
    @pytest.mark.parametrize("profile", list(CapabilityProfile))
    def test_auto_propagate_alone_is_dependency_error(self, profile):
        variant = _variant(
            {
                "name": "Signal",
                "directives": {"auto_propagate": True},
                "fields": [{"name": "entity", "type": "Entity"}],
            }
        )
        issues = _check(variant, profile)
        assert _kinds(issues) == [DiagnosticKind.CONFIG_DEPENDENCY]
        assert issues[0].key == "auto_propagate"

    def test_inherited_propagate_satisfies_dependency(self):
        variant = _variant(
            {
                "name": "Signal",
                "directives": {"auto_propagate": True},
                "fields": [{"name": "entity", "type": "Entity"}],
            }
        )
        issues = _check(
            variant,
            CapabilityProfile.ENTITY_EVENT,
            enum_directives=Directives(propagate=True),
        )
        assert issues == []

    def test_variant_can_switch_inherited_propagate_off(self):
        variant = _variant(
            {
                "name": "Signal",
                "directives": {"propagate": False, "auto_propagate": True},
                "fields": [{"name": "entity", "type": "Entity"}],
            }
        )
        issues = _check(
            variant,
            CapabilityProfile.ENTITY_EVENT,
            enum_directives=Directives(propagate=True),
        )
        assert _kinds(issues) == [DiagnosticKind.CONFIG_DEPENDENCY]

    def test_propagate_on_global_event_warns(self):
        variant = _variant({"name": "Tick"})
        issues = _check(
            variant, CapabilityProfile.EVENT, enum_directives=Directives(propagate=True)
        )
        assert [i.severity for i in issues] == [Severity.WARNING]
        assert issues[0].key == "propagate"


class TestWellFormed:
    def test_keyword_field_name(self):
        variant = _variant({"name": "Bad", "fields": [{"name": "from", "type": "u8"}]})
        issues = _check(variant, CapabilityProfile.EVENT)
        assert _kinds(issues) == [DiagnosticKind.STRUCTURAL]
        assert issues[0].key == "from"

    def test_duplicate_field_name(self):
        variant = _variant(
            {"name": "Bad", "fields": [{"name": "a", "type": "u8"}, {"name": "a", "type": "u8"}]}
        )
        assert _kinds(_check(variant, CapabilityProfile.EVENT)) == [
            DiagnosticKind.STRUCTURAL
        ]

    def test_dunder_variant_name(self):
        variant = _variant({"name": "__init__"})
        assert _kinds(_check(variant, CapabilityProfile.EVENT)) == [
            DiagnosticKind.STRUCTURAL
        ]

    def test_all_rules_reported_together(self):
        variant = _variant(
            {
                "name": "Everything",
                "directives": {"auto_propagate": True},
                "fields": [
                    {"name": "a", "type": "u8", "tags": ["deref"]},
                    {"name": "b", "type": "u8", "tags": ["deref"]},
                ],
            }
        )
        kinds = _kinds(_check(variant, CapabilityProfile.ENTITY_EVENT))
        assert kinds == [
            DiagnosticKind.MISSING_FIELD,
            DiagnosticKind.AMBIGUITY,
            DiagnosticKind.CONFIG_DEPENDENCY,
        ]


def test_enum_header_rejects_bad_name():
    schema = EnumSchema.model_validate({"name": "not-valid"})
    issues = validate_enum_header(schema)
    assert len(issues) == 1
    assert issues[0].variant_name is None
    assert issues[0].location == "not-valid"


class TestReservedNames:
    @pytest.mark.parametrize("name", ["_Hidden", "_CAPABILITIES", "_typing"])
    def test_leading_underscore_variant(self, name):
        issues = _check(_variant({"name": name}), CapabilityProfile.EVENT)
        assert _kinds(issues) == [DiagnosticKind.STRUCTURAL]
        assert issues[0].key == "name"

    def test_dunder_field_name(self):
        variant = _variant(
            {"name": "Bad", "fields": [{"name": "__capabilities__", "type": "u8"}]}
        )
        assert _kinds(_check(variant, CapabilityProfile.EVENT)) == [
            DiagnosticKind.STRUCTURAL
        ]

    def test_value_field_next_to_deref_field_warns(self):
        variant = _variant(
            {
                "name": "Set",
                "fields": [
                    {"name": "value", "type": "f32"},
                    {"name": "unit", "type": "String", "tags": ["deref"]},
                ],
            }
        )
        issues = _check(variant, CapabilityProfile.EVENT)
        assert [i.severity for i in issues] == [Severity.WARNING]
        assert issues[0].key == "deref"

    def test_deref_field_named_value_is_fine(self):
        variant = _variant({"name": "Set", "fields": [{"name": "value", "type": "f32"}]})
        assert _check(variant, CapabilityProfile.EVENT) == []


class TestEnumHeader:
    @pytest.mark.parametrize("generic", ["T = u32", "1T", "class", "'", "'a b"])
    def test_invalid_generic_names(self, generic):
        schema = EnumSchema.model_validate(
            {"name": "Holder", "generics": [generic], "variants": ["Empty"]}
        )
        issues = validate_enum_header(schema)
        assert [i.kind for i in issues] == [DiagnosticKind.STRUCTURAL]
        assert issues[0].key == "generics"
        assert issues[0].variant_name is None

    def test_valid_generics(self):
        schema = EnumSchema.model_validate(
            {"name": "Holder", "generics": ["T: Clone", "'a", "const N: usize"]}
        )
        assert validate_enum_header(schema) == []

    def test_duplicate_generic_names(self):
        schema = EnumSchema.model_validate({"name": "Holder", "generics": ["T", "T: Copy"]})
        issues = validate_enum_header(schema)
        assert len(issues) == 1
        assert "Duplicate" in issues[0].message

"""Unit tests for the schema adapter (form_codegen.codegen.core.adapter).

Tests cover:
- map_editor_type collapsing and unknown types
- adapt ordering by section then position, layout skipping
- Numeric bounds becoming min/max rules
- Conditional and rule parsing errors, rule values that are missing or not numeric
- reverse_adapt restoring editor types and bounds
- Round trip adapt -> reverse_adapt -> adapt
- from_extracted_structure and load_form_structure shape detection
"""

from __future__ import annotations

import pytest

from form_codegen.codegen.core.adapter import (
    adapt,
    from_extracted_structure,
    is_editor_schema,
    load_form_structure,
    map_editor_type,
    reverse_adapt,
)
from form_codegen.codegen.core.generator import MappingError
from form_codegen.codegen.core.schema import (
    ConditionOperator,
    FieldType,
    FormStructure,
    RuleKind,
    Visibility,
)


# ---------------------------------------------------------------------------
# map_editor_type
# ---------------------------------------------------------------------------

class TestMapEditorType:
    @pytest.mark.parametrize(
        "editor_type, expected",
        [
            ("TEXT", FieldType.TEXT),
            ("RATING", FieldType.NUMBER),
            ("CHECKBOX_GROUP", FieldType.MULTI_SELECT),
            ("FILE_UPLOAD", FieldType.FILE),
            ("rich_text", FieldType.TEXTAREA),
        ],
    )
    def test_known(self, editor_type, expected):
        assert map_editor_type(editor_type) == expected

    def test_unknown_raises(self):
        with pytest.raises(MappingError, match="HOLOGRAM"):
            map_editor_type("HOLOGRAM")


# ---------------------------------------------------------------------------
# adapt
# ---------------------------------------------------------------------------

class TestAdapt:
    def test_order_follows_sections_then_position(self, editor_document):
        structure = adapt(editor_document)
        assert [f.id for f in structure.fields] == ["name", "email", "age", "plan"]

    def test_layout_fields_are_skipped(self, editor_document):
        structure = adapt(editor_document)
        assert structure.get_field("divider") is None

    def test_title_and_sections(self, editor_document):
        structure = adapt(editor_document)
        assert structure.title == "Customer Intake"
        assert [s.id for s in structure.sections] == ["s1", "s2"]
        assert structure.sections[0].field_ids == ("name", "email")

    def test_numeric_bounds_become_rules(self, editor_document):
        age = adapt(editor_document).get_field("age")
        assert age.type == FieldType.NUMBER
        assert age.min_value == 18
        assert age.max_value == 65
        assert [(r.kind, r.value) for r in age.validation_rules] == [
            (RuleKind.MIN, 18),
            (RuleKind.MAX, 65),
        ]

    def test_conditional_is_parsed(self, editor_document):
        rule = adapt(editor_document).get_field("plan").conditional
        assert rule.visibility == Visibility.SHOW
        assert rule.source_field_id == "email"
        assert rule.operator == ConditionOperator.CONTAINS
        assert rule.value == "@"

    def test_options_only_for_selection_types(self, editor_document):
        structure = adapt(editor_document)
        assert [o.value for o in structure.get_field("plan").options] == ["basic", "pro"]
        assert structure.get_field("name").options == ()

    def test_unknown_rule_kind_raises(self, editor_document):
        editor_document["fields"][1]["validations"] = [{"type": "palindrome"}]
        with pytest.raises(MappingError, match="palindrome"):
            adapt(editor_document)

    def test_unknown_operator_raises(self, editor_document):
        editor_document["fields"][4]["conditional"]["operator"] = "matches"
        with pytest.raises(MappingError, match="matches"):
            adapt(editor_document)

    def test_unknown_section_goes_last(self, editor_document):
        editor_document["fields"].append(
            {"id": "orphan", "type": "TEXT", "label": "Orphan", "position": {"sectionId": "gone"}}
        )
        assert adapt(editor_document).fields[-1].id == "orphan"

    def test_empty_document(self):
        structure = adapt({"sections": [], "fields": []})
        assert structure.fields == ()


# ---------------------------------------------------------------------------
# reverse_adapt
# ---------------------------------------------------------------------------

class TestReverseAdapt:
    def test_restores_source_type_and_bounds(self, editor_document):
        document = reverse_adapt(adapt(editor_document))
        age = next(f for f in document["fields"] if f["id"] == "age")
        assert age["type"] == "SLIDER"
        assert age["min"] == 18
        assert age["max"] == 65
        assert age["validations"] == []

    def test_round_trip_preserves_fields(self, editor_document):
        first = adapt(editor_document)
        second = adapt(reverse_adapt(first))
        assert [f.id for f in second.fields] == [f.id for f in first.fields]
        assert [f.type for f in second.fields] == [f.type for f in first.fields]
        assert [f.is_required for f in second.fields] == [f.is_required for f in first.fields]
        assert second.get_field("plan").conditional == first.get_field("plan").conditional
        assert second.get_field("age").validation_rules == first.get_field("age").validation_rules

    def test_structure_without_sections_gets_default_section(self, make_field):
        structure = FormStructure(fields=(make_field("a", "A"), make_field("b", "B", FieldType.FILE)))
        document = reverse_adapt(structure)
        assert [s["id"] for s in document["sections"]] == ["section-1"]
        assert [f["position"]["order"] for f in document["fields"]] == [0, 1]
        assert document["fields"][1]["type"] == "FILE_UPLOAD"


# ---------------------------------------------------------------------------
# Extracted structures
# ---------------------------------------------------------------------------

class TestExtractedStructure:
    def test_unwraps_form_structure(self, extracted_document):
        structure = from_extracted_structure(extracted_document)
        assert structure.title == "Scanned Form"
        assert [f.type for f in structure.fields] == [FieldType.TEXT, FieldType.DATE]

    def test_accepts_editor_type_names(self):
        structure = from_extracted_structure(
            {"fields": [{"id": "cv", "label": "CV", "type": "FILE_UPLOAD"}]}
        )
        assert structure.fields[0].type == FieldType.FILE

    def test_unknown_type_raises(self):
        with pytest.raises(MappingError):
            from_extracted_structure({"fields": [{"id": "x", "type": "HOLOGRAM"}]})


class TestRuleValues:
    @staticmethod
    def _with_rule(rule):
        return {"fields": [{"id": "name", "label": "Name", "type": "TEXT", "validationRules": [rule]}]}

    @pytest.mark.parametrize("kind", ["minLength", "maxLength", "min", "max", "pattern"])
    def test_missing_value_raises(self, kind):
        with pytest.raises(MappingError, match=f"'{kind}' on field 'name' has no value"):
            from_extracted_structure(self._with_rule({"type": kind}))

    def test_blank_value_raises(self):
        with pytest.raises(MappingError, match="has no value"):
            from_extracted_structure(self._with_rule({"type": "pattern", "value": "  "}))

    def test_numeric_text_is_converted(self):
        structure = from_extracted_structure(self._with_rule({"type": "minLength", "value": "3"}))
        assert structure.fields[0].validation_rules[0].value == 3

    def test_non_numeric_bound_raises(self):
        with pytest.raises(MappingError, match="needs a number"):
            from_extracted_structure(self._with_rule({"type": "maxLength", "value": "lots"}))

    def test_rules_without_values_are_kept(self):
        structure = from_extracted_structure(self._with_rule({"type": "email"}))
        assert structure.fields[0].validation_rules[0].value is None


class TestLoadFormStructure:
    def test_detects_editor_document(self, editor_document):
        assert is_editor_schema(editor_document)
        assert load_form_structure(editor_document).title == "Customer Intake"

    def test_detects_extracted_document(self, extracted_document):
        assert not is_editor_schema(extracted_document)
        assert load_form_structure(extracted_document).title == "Scanned Form"

    def test_rejects_non_object(self):
        with pytest.raises(MappingError, match="JSON object"):
            load_form_structure([1, 2, 3])

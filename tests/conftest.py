"""Shared pytest fixtures for the form-codegen test suite.

Provides reusable fixtures for:
- Field descriptor factories
- Sample form structures (minimal, applicants, conditional, every type)
- Sample editor documents
- Generation options presets
"""

from __future__ import annotations

from typing import Any, Dict

import pytest

from form_codegen.codegen.core.config import (
    BackendFramework,
    GenerationOptions,
    SqlDialect,
)
from form_codegen.codegen.core.schema import (
    ConditionalRule,
    ConditionOperator,
    FieldDescriptor,
    FieldOption,
    FieldType,
    FormStructure,
    RuleKind,
    ValidationRule,
    Visibility,
)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_field():
    """Factory for FieldDescriptor with sensible defaults."""

    def _make(
        field_id: str,
        label: str,
        field_type: FieldType = FieldType.TEXT,
        required: bool = False,
        **kwargs: Any,
    ) -> FieldDescriptor:
        return FieldDescriptor(id=field_id, label=label, type=field_type, required=required, **kwargs)

    return _make


# ---------------------------------------------------------------------------
# Form structures
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_structure() -> FormStructure:
    """One required text field labeled "Full Name"."""
    return FormStructure(
        fields=(FieldDescriptor(id="f1", label="Full Name", type=FieldType.TEXT, required=True),),
        title="Minimal",
    )


@pytest.fixture
def applicants_structure() -> FormStructure:
    """Required email plus optional age."""
    return FormStructure(
        fields=(
            FieldDescriptor(id="email", label="Email", type=FieldType.EMAIL, required=True),
            FieldDescriptor(id="age", label="Age", type=FieldType.NUMBER),
        ),
        title="Applicants",
    )


@pytest.fixture
def forward_reference_structure() -> FormStructure:
    """Field A depends on field B, which comes after it."""
    return FormStructure(
        fields=(
            FieldDescriptor(
                id="field-a",
                label="Field A",
                type=FieldType.TEXT,
                conditional=ConditionalRule(
                    Visibility.SHOW, "field-b", ConditionOperator.EQUALS, "yes"
                ),
            ),
            FieldDescriptor(id="field-b", label="Field B", type=FieldType.TEXT),
        )
    )


@pytest.fixture
def conditional_structure() -> FormStructure:
    """A checkbox that reveals a follow-up text field."""
    return FormStructure(
        fields=(
            FieldDescriptor(id="has-pet", label="Has Pet", type=FieldType.CHECKBOX),
            FieldDescriptor(
                id="pet-name",
                label="Pet Name",
                type=FieldType.TEXT,
                required=True,
                conditional=ConditionalRule(
                    Visibility.SHOW, "has-pet", ConditionOperator.EQUALS, True
                ),
            ),
        ),
        title="Pets",
    )


@pytest.fixture
def every_type_structure() -> FormStructure:
    """One field of every abstract type, alternating required flags."""
    options = (FieldOption("Red", "red"), FieldOption("Blue", "blue"))
    return FormStructure(
        fields=(
            FieldDescriptor(
                id="name",
                label="Name",
                type=FieldType.TEXT,
                required=True,
                validation_rules=(
                    ValidationRule(RuleKind.MIN_LENGTH, 2),
                    ValidationRule(RuleKind.MAX_LENGTH, 50),
                ),
            ),
            FieldDescriptor(id="email", label="Email", type=FieldType.EMAIL, required=True),
            FieldDescriptor(id="phone", label="Phone", type=FieldType.PHONE),
            FieldDescriptor(
                id="age",
                label="Age",
                type=FieldType.NUMBER,
                required=True,
                min_value=18,
                max_value=99,
                validation_rules=(
                    ValidationRule(RuleKind.MIN, 18, "Must be at least 18"),
                    ValidationRule(RuleKind.MAX, 99, "Must not exceed 99"),
                ),
            ),
            FieldDescriptor(id="start", label="Start Date", type=FieldType.DATE),
            FieldDescriptor(id="agree", label="Agree", type=FieldType.CHECKBOX, required=True),
            FieldDescriptor(id="color", label="Color", type=FieldType.RADIO, options=options),
            FieldDescriptor(id="shade", label="Shade", type=FieldType.SELECT, required=True, options=options),
            FieldDescriptor(id="tags", label="Tags", type=FieldType.MULTI_SELECT, options=options),
            FieldDescriptor(id="notes", label="Notes", type=FieldType.TEXTAREA),
            FieldDescriptor(id="resume", label="Resume", type=FieldType.FILE, required=True),
        ),
        title="Everything",
    )


# ---------------------------------------------------------------------------
# Editor documents
# ---------------------------------------------------------------------------

@pytest.fixture
def editor_document() -> Dict[str, Any]:
    """Editor form with two sections listed out of order."""
    return {
        "id": "form-1",
        "name": "Customer Intake",
        "description": "",
        "sections": [
            {"id": "s2", "title": "Details", "order": 1},
            {"id": "s1", "title": "Contact", "order": 0},
        ],
        "fields": [
            {
                "id": "age",
                "type": "SLIDER",
                "label": "Age",
                "required": False,
                "min": 18,
                "max": 65,
                "validations": [],
                "position": {"sectionId": "s2", "order": 0},
            },
            {
                "id": "email",
                "type": "EMAIL",
                "label": "Email Address",
                "required": True,
                "validations": [{"type": "maxLength", "value": 100}],
                "position": {"sectionId": "s1", "order": 1},
            },
            {
                "id": "name",
                "type": "TEXT",
                "label": "Full Name",
                "required": True,
                "placeholder": "Jane Doe",
                "validations": [],
                "position": {"sectionId": "s1", "order": 0},
            },
            {"id": "divider", "type": "DIVIDER", "label": "", "position": {"sectionId": "s1", "order": 2}},
            {
                "id": "plan",
                "type": "SELECT",
                "label": "Plan",
                "options": [{"label": "Basic", "value": "basic"}, {"label": "Pro", "value": "pro"}],
                "validations": [],
                "conditional": {"show": True, "when": "email", "operator": "contains", "value": "@"},
                "position": {"sectionId": "s2", "order": 1},
            },
        ],
    }


@pytest.fixture
def extracted_document() -> Dict[str, Any]:
    """Document-analysis result wrapping a form structure."""
    return {
        "formStructure": {
            "title": "Scanned Form",
            "fields": [
                {"id": "first", "label": "First Name", "type": "TEXT", "required": True},
                {"id": "dob", "label": "Date of Birth", "type": "DATE", "required": False},
            ],
        }
    }


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@pytest.fixture
def default_options() -> GenerationOptions:
    return GenerationOptions()


@pytest.fixture
def dotnet_options() -> GenerationOptions:
    return GenerationOptions(
        include_backend=True,
        backend_framework=BackendFramework.DOTNET,
        sql_dialect=SqlDialect.TSQL,
    )


@pytest.fixture
def express_options() -> GenerationOptions:
    return GenerationOptions(
        include_backend=True,
        backend_framework=BackendFramework.EXPRESS,
        sql_dialect=SqlDialect.GENERIC,
    )

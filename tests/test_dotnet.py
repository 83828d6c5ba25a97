"""Unit tests for the ASP.NET target (form_codegen.codegen.targets.dotnet).

Tests cover:
- Data annotations: Required first and once, merged Range, default StringLength
- Entity column attributes and property lines
- DotNetEmitter file set and rendered classes
"""

from __future__ import annotations

from form_codegen.codegen.core.naming import build_field_names
from form_codegen.codegen.core.schema import Category, FieldType, RuleKind, ValidationRule
from form_codegen.codegen.targets.dotnet import (
    DotNetEmitter,
    annotation_attributes,
    dto_member,
    entity_member,
)
from form_codegen.codegen.targets.dotnet.generator import cs_string, property_line


def _by_name(files, name):
    return next(f for f in files if f.file_name == name)


# ---------------------------------------------------------------------------
# Annotations
# ---------------------------------------------------------------------------

class TestAnnotationAttributes:
    def test_required_email(self, applicants_structure):
        assert annotation_attributes(applicants_structure.fields[0]) == [
            '[Required(ErrorMessage = "Email is required")]',
            '[EmailAddress(ErrorMessage = "Invalid email")]',
            "[StringLength(255)]",
        ]

    def test_bounds_merge_into_range(self, every_type_structure):
        assert annotation_attributes(every_type_structure.get_field("age")) == [
            '[Required(ErrorMessage = "Age is required")]',
            "[Range(18, 99)]",
        ]

    def test_one_sided_range(self, make_field):
        field = make_field("q", "Quantity", FieldType.NUMBER, validation_rules=(ValidationRule(RuleKind.MIN, 5),))
        assert annotation_attributes(field) == ["[Range(5, double.MaxValue)]"]

    def test_explicit_max_length_replaces_default(self, every_type_structure):
        attributes = annotation_attributes(every_type_structure.get_field("name"))
        assert attributes[0] == '[Required(ErrorMessage = "Name is required")]'
        assert '[MinLength(2, ErrorMessage = "Name must be at least 2 characters")]' in attributes
        assert '[StringLength(50, ErrorMessage = "Name must be at most 50 characters")]' in attributes
        assert "[StringLength(255)]" not in attributes

    def test_required_rule_and_flag_give_one_attribute(self, make_field):
        field = make_field(
            "n", "Name", required=True, validation_rules=(ValidationRule(RuleKind.REQUIRED),)
        )
        assert sum(a.startswith("[Required(") for a in annotation_attributes(field)) == 1

    def test_required_once_for_every_type(self, every_type_structure):
        for field in every_type_structure.fields:
            count = sum(a.startswith("[Required(") for a in annotation_attributes(field))
            assert count == (1 if field.is_required else 0)

    def test_cs_string_escapes_quotes(self):
        assert cs_string('Say "hi"') == '"Say \\"hi\\""'


class TestMembers:
    def test_property_lines(self, applicants_structure):
        names = build_field_names(applicants_structure.fields)
        email, age = applicants_structure.fields
        assert property_line(email, names[0]) == "public string Email { get; set; } = string.Empty;"
        assert property_line(age, names[1]) == "public int? Age { get; set; }"

    def test_entity_member_mirrors_column(self, make_field):
        field = make_field("n", "Notes", FieldType.TEXTAREA)
        assert entity_member(field, build_field_names([field])[0]) == (
            '[Column(TypeName = "nvarchar(max)")]\n'
            "public string? Notes { get; set; }"
        )

    def test_dto_member(self, applicants_structure):
        names = build_field_names(applicants_structure.fields)
        member = dto_member(applicants_structure.fields[0], names[0])
        assert member.split("\n")[-1] == "public string Email { get; set; } = string.Empty;"


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------

class TestDotNetEmitter:
    def test_file_set(self, applicants_structure, dotnet_options):
        files = DotNetEmitter().generate(applicants_structure, "applicants", dotnet_options)
        assert [f.archive_path for f in files] == [
            "backend/Controllers/ApplicantsController.cs",
            "backend/Models/Applicants.cs",
            "backend/DTOs/ApplicantsDtos.cs",
            "backend/Services/IApplicantsService.cs",
            "backend/ApplicantsApi.csproj",
        ]
        assert all(f.category == Category.BACKEND for f in files)

    def test_dtos(self, applicants_structure, dotnet_options):
        files = DotNetEmitter().generate(applicants_structure, "applicants", dotnet_options)
        dtos = _by_name(files, "ApplicantsDtos.cs").content
        assert "public class CreateApplicantsDto" in dtos
        assert "public class UpdateApplicantsDto" in dtos
        assert '    [Required(ErrorMessage = "Email is required")]' in dtos
        assert dtos.count('[Required(ErrorMessage = "Email is required")]') == 2

    def test_model_and_controller(self, applicants_structure, dotnet_options):
        files = DotNetEmitter().generate(applicants_structure, "applicants", dotnet_options)
        model = _by_name(files, "Applicants.cs").content
        assert '[Table("Applicants")]' in model
        assert "    public int? Age { get; set; }" in model
        controller = _by_name(files, "ApplicantsController.cs").content
        assert "[FromQuery] int pageSize = 10)" in controller
        assert "namespace ApplicantsApi.Controllers;" in controller

    def test_project_file(self, applicants_structure, dotnet_options):
        files = DotNetEmitter().generate(applicants_structure, "applicants", dotnet_options)
        project = _by_name(files, "ApplicantsApi.csproj")
        assert project.language == "xml"
        assert "<RootNamespace>ApplicantsApi</RootNamespace>" in project.content

    def test_fallback_entity(self, applicants_structure, dotnet_options):
        files = DotNetEmitter().generate(applicants_structure, "", dotnet_options)
        assert files[0].file_name == "FormSubmissionController.cs"

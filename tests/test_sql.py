"""Unit tests for the relational schema target (form_codegen.codegen.targets.sql).

Tests cover:
- table_name_for per dialect
- build_columns types, names and nullability
- Column/parameter/value list alignment for zero, one and many fields
- T-SQL script content for a two-field form
- Generic script content
- SqlSchemaEmitter file naming and emit_sql_schema dialect parsing
"""

from __future__ import annotations

import re

import pytest

from form_codegen.codegen.core.config import GenerationOptions, SqlDialect
from form_codegen.codegen.core.generator import MappingError
from form_codegen.codegen.core.schema import Category, FieldType, FormStructure
from form_codegen.codegen.targets.sql import (
    SqlSchemaEmitter,
    build_columns,
    column_definition,
    emit_sql_schema,
    procedure_parameter,
    table_name_for,
)


def _procedure_block(script: str, name: str) -> str:
    start = script.index(f"CREATE PROCEDURE [dbo].[{name}]")
    return script[start:script.index("GO", start)]


def _section(block: str, opener: str, closer: str) -> list:
    start = block.index(opener) + len(opener)
    body = block[start:block.index(closer, start)]
    return [line.strip().rstrip(",") for line in body.splitlines() if line.strip()]


# ---------------------------------------------------------------------------
# Names and columns
# ---------------------------------------------------------------------------

class TestTableName:
    def test_tsql_is_pascal(self):
        assert table_name_for("applicants", SqlDialect.TSQL) == "Applicants"
        assert table_name_for("customer intake", SqlDialect.TSQL) == "CustomerIntake"

    def test_generic_is_snake(self):
        assert table_name_for("Customer Intake", SqlDialect.GENERIC) == "customer_intake"

    def test_empty_falls_back(self):
        assert table_name_for("", SqlDialect.TSQL) == "FormData"
        assert table_name_for("", SqlDialect.GENERIC) == "form_data"
        assert table_name_for("!!!", SqlDialect.TSQL) == "FormData"

    def test_leading_digit_is_prefixed(self):
        assert table_name_for("2024 Survey", SqlDialect.TSQL) == "FormData2024Survey"
        assert table_name_for("2024 Survey", SqlDialect.GENERIC) == "form_data_2024_survey"


class TestBuildColumns:
    def test_tsql_columns(self, applicants_structure):
        columns = build_columns(applicants_structure, SqlDialect.TSQL)
        assert [(c.name, c.sql_type, c.nullable) for c in columns] == [
            ("Email", "NVARCHAR(255)", False),
            ("Age", "INT", True),
        ]

    def test_generic_columns(self, applicants_structure):
        columns = build_columns(applicants_structure, SqlDialect.GENERIC)
        assert [column_definition(c, SqlDialect.GENERIC) for c in columns] == [
            "email VARCHAR(255) NOT NULL",
            "age INTEGER NULL",
        ]

    def test_procedure_parameter_defaults_only_for_nullable(self, applicants_structure):
        columns = build_columns(applicants_structure, SqlDialect.TSQL)
        assert [procedure_parameter(c) for c in columns] == [
            "@Email NVARCHAR(255)",
            "@Age INT = NULL",
        ]

    def test_audit_name_collision_is_renamed(self, make_field):
        structure = FormStructure(fields=(make_field("c", "Created At", FieldType.DATE),))
        columns = build_columns(structure, SqlDialect.TSQL)
        assert columns[0].name != "CreatedAt"


# ---------------------------------------------------------------------------
# T-SQL script
# ---------------------------------------------------------------------------

class TestTsqlScript:
    def test_table_definition(self, applicants_structure):
        script = emit_sql_schema(applicants_structure, "applicants", SqlDialect.TSQL)
        assert "CREATE TABLE [dbo].[Applicants] (" in script
        assert "    [Email] NVARCHAR(255) NOT NULL,\n" in script
        assert "    [Age] INT NULL,\n" in script
        assert "[IsDeleted] BIT NOT NULL DEFAULT 0" in script

    def test_insert_parameters(self, applicants_structure):
        script = emit_sql_schema(applicants_structure, "applicants", "tsql")
        block = _procedure_block(script, "sp_InsertApplicants")
        assert _section(block, "]\n", "AS\n") == [
            "@Email NVARCHAR(255)",
            "@Age INT = NULL",
            "@CreatedBy NVARCHAR(255) = NULL",
        ]

    def test_procedures_present(self, applicants_structure):
        script = emit_sql_schema(applicants_structure, "applicants", SqlDialect.TSQL)
        for name in ("sp_Insert", "sp_Update", "sp_Get", "sp_GetAll", "sp_Delete"):
            assert f"[dbo].[{name}Applicants" in script
        assert "@PageSize INT = 10" in script

    @pytest.mark.parametrize("count", [0, 1, 5])
    def test_insert_lists_stay_aligned(self, make_field, count):
        fields = tuple(
            make_field(f"f{i}", f"Field {i}", FieldType.NUMBER if i % 2 else FieldType.TEXT, i % 2 == 0)
            for i in range(count)
        )
        script = emit_sql_schema(FormStructure(fields=fields), "survey", SqlDialect.TSQL)
        block = _procedure_block(script, "sp_InsertSurvey")

        params = _section(block, "]\n", "AS\n")
        columns = _section(block, "INSERT INTO [dbo].[Survey] (", ")")
        values = _section(block, "VALUES (", ")")

        assert len(params) == len(columns) == len(values) == count + 1
        param_names = [p.split()[0] for p in params]
        assert param_names == values
        assert [c.strip("[]") for c in columns] == [v.lstrip("@") for v in values]

    def test_update_assigns_every_field(self, applicants_structure):
        script = emit_sql_schema(applicants_structure, "applicants", SqlDialect.TSQL)
        block = _procedure_block(script, "sp_UpdateApplicants")
        assert "[Email] = @Email," in block
        assert "[Age] = @Age," in block
        assert "@Id INT," in block


# ---------------------------------------------------------------------------
# Generic script
# ---------------------------------------------------------------------------

class TestGenericScript:
    def test_table_definition(self, applicants_structure):
        script = emit_sql_schema(applicants_structure, "Applicants")
        assert "CREATE TABLE applicants (" in script
        assert "  id SERIAL PRIMARY KEY," in script
        assert "  email VARCHAR(255) NOT NULL," in script
        assert "  updated_by VARCHAR(255)\n);" in script

    def test_trigger(self, applicants_structure):
        script = emit_sql_schema(applicants_structure, "Applicants", SqlDialect.GENERIC)
        assert "CREATE TRIGGER trigger_applicants_updated_at" in script

    def test_no_trailing_whitespace(self, every_type_structure):
        script = emit_sql_schema(every_type_structure, "everything")
        assert not re.search(r"[ \t]+$", script, re.MULTILINE)
        assert script.endswith(";\n")

    def test_unknown_dialect_raises(self, applicants_structure):
        with pytest.raises(MappingError):
            emit_sql_schema(applicants_structure, "applicants", "oracle")


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------

class TestSqlSchemaEmitter:
    def test_generate_names_file_after_table(self, applicants_structure):
        options = GenerationOptions(include_backend=True, sql_dialect=SqlDialect.TSQL)
        files = SqlSchemaEmitter().generate(applicants_structure, "applicants", options)
        assert len(files) == 1
        assert files[0].archive_path == "sql/Applicants.sql"
        assert files[0].category == Category.SQL
        assert files[0].language == "sql"

    def test_generate_defaults_to_generic(self, applicants_structure):
        files = SqlSchemaEmitter().generate(applicants_structure, "Applicants", GenerationOptions())
        assert files[0].file_name == "applicants.sql"

    def test_page_size_config(self, applicants_structure):
        emitter = SqlSchemaEmitter({"page_size": 25})
        script = emitter.render_schema(applicants_structure, "applicants", SqlDialect.TSQL)
        assert "@PageSize INT = 25" in script

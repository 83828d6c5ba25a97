"""
Relational schema emitter.

The ordered column list is computed once per form and every statement
(CREATE TABLE, procedure parameters, INSERT column and value lists, UPDATE
assignments) is derived from it, so the lists cannot drift apart.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ....logging_config import get_logger
from ...core.config import GenerationOptions, SqlDialect, parse_enum, table_name_for
from ...core.generator import CodeEmitter
from ...core.naming import build_field_names
from ...core.schema import Category, FormStructure, GeneratedFile
from ...core.type_maps import sql_type, tsql_type
from .templates import get_sql_templates

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 10

GENERIC_AUDIT_COLUMNS = [
    "created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
    "updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
    "created_by VARCHAR(255)",
    "updated_by VARCHAR(255)",
]

TSQL_AUDIT_COLUMNS = [
    "[CreatedAt] DATETIME2 NOT NULL DEFAULT GETDATE()",
    "[UpdatedAt] DATETIME2 NOT NULL DEFAULT GETDATE()",
    "[CreatedBy] NVARCHAR(255) NULL",
    "[UpdatedBy] NVARCHAR(255) NULL",
    "[IsDeleted] BIT NOT NULL DEFAULT 0",
]


@dataclass(frozen=True)
class ColumnSpec:
    """One field's column in a given dialect."""

    field_id: str
    name: str
    sql_type: str
    nullable: bool


def build_columns(structure: FormStructure, dialect: SqlDialect) -> List[ColumnSpec]:
    """Ordered field columns; the single source for every statement."""
    columns = []
    for field, names in zip(structure.fields, build_field_names(structure.fields)):
        if dialect == SqlDialect.TSQL:
            columns.append(
                ColumnSpec(field.id, names.pascal, tsql_type(field.type), not field.is_required)
            )
        else:
            columns.append(
                ColumnSpec(field.id, names.snake, sql_type(field.type), not field.is_required)
            )
    return columns


def column_definition(column: ColumnSpec, dialect: SqlDialect) -> str:
    nullability = "NULL" if column.nullable else "NOT NULL"
    if dialect == SqlDialect.TSQL:
        return f"[{column.name}] {column.sql_type} {nullability}"
    return f"{column.name} {column.sql_type} {nullability}"


def procedure_parameter(column: ColumnSpec) -> str:
    default = " = NULL" if column.nullable else ""
    return f"@{column.name} {column.sql_type}{default}"


def update_assignment(column: ColumnSpec) -> str:
    return f"[{column.name}] = @{column.name}"


def render_generic(engine, table: str, columns: List[ColumnSpec]) -> str:
    column_lines = (
        ["id SERIAL PRIMARY KEY"]
        + [column_definition(column, SqlDialect.GENERIC) for column in columns]
        + GENERIC_AUDIT_COLUMNS
    )
    return engine.render_template(
        "generic_schema", {"table": table, "column_lines": column_lines}
    )


def render_tsql(engine, table: str, columns: List[ColumnSpec], page_size: int) -> str:
    parameters = [procedure_parameter(column) for column in columns]
    context = {
        "table": table,
        "page_size": page_size,
        "column_lines": ["[Id] INT IDENTITY(1,1) PRIMARY KEY"]
        + [column_definition(column, SqlDialect.TSQL) for column in columns]
        + TSQL_AUDIT_COLUMNS,
        "insert_params": parameters + ["@CreatedBy NVARCHAR(255) = NULL"],
        "insert_columns": [f"[{column.name}]" for column in columns] + ["[CreatedBy]"],
        "insert_values": [f"@{column.name}" for column in columns] + ["@CreatedBy"],
        "update_params": ["@Id INT"] + parameters + ["@UpdatedBy NVARCHAR(255) = NULL"],
        "update_assignments": [update_assignment(column) for column in columns]
        + ["[UpdatedBy] = @UpdatedBy", "[UpdatedAt] = GETDATE()"],
    }
    return engine.render_template("tsql_schema", context)


class SqlSchemaEmitter(CodeEmitter):
    """Emitter for CREATE TABLE scripts, triggers and stored procedures."""

    def __init__(self, config: Optional[Dict] = None):
        super().__init__(config)
        self.page_size = self.config.get("page_size", DEFAULT_PAGE_SIZE)

    @property
    def target_name(self) -> str:
        return "sql"

    @property
    def category(self) -> Category:
        return Category.SQL

    def get_templates(self) -> Dict[str, str]:
        return get_sql_templates()

    def render_schema(
        self, structure: FormStructure, table_name: str, dialect: SqlDialect
    ) -> str:
        """Render the whole script for one dialect."""
        table = table_name_for(table_name, dialect)
        columns = build_columns(structure, dialect)
        logger.debug("%s table %s with %d columns", dialect.value, table, len(columns))
        if dialect == SqlDialect.TSQL:
            return self.format_code(render_tsql(self.template_engine, table, columns, self.page_size))
        return self.format_code(render_generic(self.template_engine, table, columns))

    def generate(
        self, structure: FormStructure, project_name: str, options: GenerationOptions
    ) -> List[GeneratedFile]:
        dialect = options.sql_dialect or SqlDialect.GENERIC
        table = table_name_for(project_name, dialect)
        content = self.render_schema(structure, project_name, dialect)
        return [self.make_file(f"{table}.sql", content, "sql")]


def emit_sql_schema(
    structure: FormStructure,
    table_name: str,
    dialect: Union[SqlDialect, str] = SqlDialect.GENERIC,
) -> str:
    """
    Render the schema script for a form.

    Args:
        structure: Normalized form
        table_name: Raw table name, normalized per dialect
        dialect: ``generic`` or ``tsql``

    Returns:
        The SQL text

    Raises:
        MappingError: If the dialect is unknown
    """
    dialect = parse_enum(SqlDialect, dialect, "sql_dialect") or SqlDialect.GENERIC
    return SqlSchemaEmitter().render_schema(structure, table_name, dialect)

"""
SQL target.

Generates a generic (PostgreSQL) schema or a T-SQL schema with stored
procedures.
"""

from .generator import (
    ColumnSpec,
    SqlSchemaEmitter,
    build_columns,
    column_definition,
    emit_sql_schema,
    procedure_parameter,
    table_name_for,
)

__all__ = [
    "ColumnSpec",
    "SqlSchemaEmitter",
    "build_columns",
    "column_definition",
    "emit_sql_schema",
    "procedure_parameter",
    "table_name_for",
]

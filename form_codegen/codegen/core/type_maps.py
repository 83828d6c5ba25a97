"""
Field-type mapping tables.

One table per concern maps every abstract FieldType to a target-specific
token. Lookups are total: a type missing from a table resolves to that
table's documented default, so adding a FieldType never breaks an emitter.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from .schema import FieldType


@dataclass(frozen=True)
class FieldTypeTable:
    """A per-concern FieldType mapping with a default."""

    concern: str
    default: Any
    mapping: Dict[FieldType, Any] = field(default_factory=dict)

    def lookup(self, field_type: FieldType) -> Any:
        return self.mapping.get(field_type, self.default)


HTML_INPUT_TYPES = FieldTypeTable(
    "html input type",
    "text",
    {
        FieldType.EMAIL: "email",
        FieldType.PHONE: "tel",
        FieldType.NUMBER: "number",
        FieldType.DATE: "date",
        FieldType.CHECKBOX: "checkbox",
        FieldType.RADIO: "radio",
        FieldType.FILE: "file",
    },
)

TYPESCRIPT_TYPES = FieldTypeTable(
    "typescript type",
    "string",
    {
        FieldType.NUMBER: "number",
        FieldType.DATE: "Date | string",
        FieldType.CHECKBOX: "boolean",
        FieldType.MULTI_SELECT: "string[]",
        FieldType.FILE: "File | null",
    },
)

SQL_TYPES = FieldTypeTable(
    "generic sql type",
    "VARCHAR(255)",
    {
        FieldType.TEXTAREA: "TEXT",
        FieldType.NUMBER: "INTEGER",
        FieldType.DATE: "DATE",
        FieldType.CHECKBOX: "BOOLEAN DEFAULT FALSE",
        FieldType.MULTI_SELECT: "TEXT",
        FieldType.FILE: "VARCHAR(500)",
    },
)

TSQL_TYPES = FieldTypeTable(
    "t-sql type",
    "NVARCHAR(255)",
    {
        FieldType.TEXTAREA: "NVARCHAR(MAX)",
        FieldType.NUMBER: "INT",
        FieldType.DATE: "DATE",
        FieldType.CHECKBOX: "BIT",
        FieldType.MULTI_SELECT: "NVARCHAR(MAX)",
        FieldType.FILE: "NVARCHAR(500)",
    },
)

CSHARP_TYPES = FieldTypeTable(
    "c# type",
    "string",
    {
        FieldType.NUMBER: "int",
        FieldType.DATE: "DateTime",
        FieldType.CHECKBOX: "bool",
    },
)

TYPEORM_COLUMN_TYPES = FieldTypeTable(
    "typeorm column",
    "varchar",
    {
        FieldType.TEXTAREA: "text",
        FieldType.NUMBER: "int",
        FieldType.DATE: "date",
        FieldType.CHECKBOX: "boolean",
        FieldType.MULTI_SELECT: "simple-array",
    },
)

# Backend entities store uploads as a path/URL string
ENTITY_TS_TYPES = FieldTypeTable(
    "entity typescript type",
    "string",
    {
        FieldType.NUMBER: "number",
        FieldType.DATE: "Date",
        FieldType.CHECKBOX: "boolean",
        FieldType.MULTI_SELECT: "string[]",
    },
)

DEFAULT_VALUES = FieldTypeTable(
    "default value literal",
    "''",
    {
        FieldType.NUMBER: "0",
        FieldType.CHECKBOX: "false",
        FieldType.MULTI_SELECT: "[]",
        FieldType.FILE: "null",
    },
)


def html_input_type(field_type: FieldType) -> str:
    return HTML_INPUT_TYPES.lookup(field_type)


def typescript_type(field_type: FieldType) -> str:
    return TYPESCRIPT_TYPES.lookup(field_type)


def sql_type(field_type: FieldType) -> str:
    return SQL_TYPES.lookup(field_type)


def tsql_type(field_type: FieldType) -> str:
    return TSQL_TYPES.lookup(field_type)


def csharp_type(field_type: FieldType) -> str:
    return CSHARP_TYPES.lookup(field_type)


def typeorm_column_type(field_type: FieldType) -> str:
    return TYPEORM_COLUMN_TYPES.lookup(field_type)


def entity_ts_type(field_type: FieldType) -> str:
    return ENTITY_TS_TYPES.lookup(field_type)


def default_value_literal(field_type: FieldType, default: Any = None) -> str:
    """
    JavaScript literal for a field's initial value.

    Args:
        field_type: Abstract type of the field
        default: Explicit default from the descriptor, if any

    Returns:
        The explicit default rendered as a JS literal, or the type's default
    """
    if default is None:
        return DEFAULT_VALUES.lookup(field_type)
    return js_literal(default)


def js_literal(value: Any) -> str:
    """Render a Python value as a JavaScript literal."""
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return json.dumps(value)


def js_regex(pattern: str) -> str:
    """Render a regex source string as a JavaScript regex literal."""
    escaped = pattern.replace("\\/", "/").replace("/", "\\/")
    return f"/{escaped}/"

"""
ASP.NET backend emitter (declarative-annotation style).

Produces a controller, an EF entity, read/create/update DTOs carrying data
annotations, the service contract and the project file.
"""

import re
from typing import Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GenerationOptions, SqlDialect, table_name_for
from ...core.generator import CodeEmitter
from ...core.naming import FieldNames, build_field_names, type_identifier
from ...core.schema import (
    Category,
    FieldDescriptor,
    FieldType,
    FormStructure,
    GeneratedFile,
    RuleKind,
    rule_message,
)
from ...core.type_maps import csharp_type, tsql_type
from .templates import get_dotnet_templates

logger = get_logger(__name__)

BACKEND_DIR = "backend"
DEFAULT_PAGE_SIZE = 10

_VALUE_TYPES = frozenset({"int", "bool", "DateTime", "decimal", "double"})
_LENGTH = re.compile(r"NVARCHAR\((\d+)\)")


def cs_string(text: str) -> str:
    """C# regular string literal."""
    return '"' + str(text).replace("\\", "\\\\").replace('"', '\\"') + '"'


def cs_verbatim(text: str) -> str:
    """C# verbatim string literal, for regular expressions."""
    return '@"' + str(text).replace('"', '""') + '"'


def property_type(field: FieldDescriptor) -> str:
    """C# type with a nullable marker for optional fields."""
    base = csharp_type(field.type)
    return base if field.is_required else f"{base}?"


def property_line(field: FieldDescriptor, names: FieldNames) -> str:
    line = f"public {property_type(field)} {names.pascal} {{ get; set; }}"
    if field.is_required and csharp_type(field.type) == "string":
        line += " = string.Empty;"
    return line


def column_attributes(field: FieldDescriptor) -> List[str]:
    """Entity attributes mirroring the T-SQL column."""
    attributes = ["[Required]"] if field.is_required else []
    column = tsql_type(field.type)
    length = _LENGTH.fullmatch(column)
    if length:
        attributes.append(f"[MaxLength({length.group(1)})]")
    elif column == "NVARCHAR(MAX)":
        attributes.append('[Column(TypeName = "nvarchar(max)")]')
    elif column == "DATE":
        attributes.append('[Column(TypeName = "date")]')
    return attributes


def annotation_attributes(field: FieldDescriptor) -> List[str]:
    """
    Data annotations for the create/update DTOs.

    Required comes first and appears at most once; rules follow in
    ``effective_rules()`` order. Min/max bounds merge into one ``Range``.
    """
    attributes = []
    if field.is_required:
        attributes.append(f"[Required(ErrorMessage = {cs_string(field.required_message)})]")

    bounds: Dict[RuleKind, object] = {}
    has_max_length = False
    for rule in field.effective_rules():
        message = cs_string(rule_message(rule, field.label))
        if rule.kind == RuleKind.MIN_LENGTH:
            attributes.append(f"[MinLength({rule.value}, ErrorMessage = {message})]")
        elif rule.kind == RuleKind.MAX_LENGTH:
            has_max_length = True
            attributes.append(f"[StringLength({rule.value}, ErrorMessage = {message})]")
        elif rule.kind == RuleKind.PATTERN:
            attributes.append(
                f"[RegularExpression({cs_verbatim(str(rule.value))}, ErrorMessage = {message})]"
            )
        elif rule.kind == RuleKind.EMAIL:
            attributes.append(f"[EmailAddress(ErrorMessage = {message})]")
        elif rule.kind == RuleKind.PHONE:
            attributes.append(f"[Phone(ErrorMessage = {message})]")
        elif rule.kind in (RuleKind.MIN, RuleKind.MAX):
            bounds[rule.kind] = rule.value

    if bounds:
        low = bounds.get(RuleKind.MIN, "double.MinValue")
        high = bounds.get(RuleKind.MAX, "double.MaxValue")
        attributes.append(f"[Range({low}, {high})]")

    length = _LENGTH.fullmatch(tsql_type(field.type))
    if length and not has_max_length:
        attributes.append(f"[StringLength({length.group(1)})]")
    return attributes


def dto_member(field: FieldDescriptor, names: FieldNames) -> str:
    return "\n".join(annotation_attributes(field) + [property_line(field, names)])


def entity_member(field: FieldDescriptor, names: FieldNames) -> str:
    return "\n".join(column_attributes(field) + [property_line(field, names)])


class DotNetEmitter(CodeEmitter):
    """Emitter for an ASP.NET Core Web API."""

    def __init__(self, config: Optional[Dict] = None):
        super().__init__(config)
        self.page_size = self.config.get("page_size", DEFAULT_PAGE_SIZE)

    @property
    def target_name(self) -> str:
        return "dotnet"

    @property
    def category(self) -> Category:
        return Category.BACKEND

    def get_templates(self) -> Dict[str, str]:
        return get_dotnet_templates()

    def generate(
        self, structure: FormStructure, project_name: str, options: GenerationOptions
    ) -> List[GeneratedFile]:
        entity = type_identifier(project_name, "FormSubmission")
        fields = list(zip(structure.fields, build_field_names(structure.fields)))
        context = {
            "entity": entity,
            "namespace": f"{entity}Api",
            "page_size": self.page_size,
            "table": table_name_for(project_name, options.sql_dialect or SqlDialect.TSQL),
        }

        files = [
            self.make_file(
                f"{entity}Controller.cs",
                self.render_template("controller", context),
                "csharp",
                relative_path=f"{BACKEND_DIR}/Controllers",
            ),
            self.make_file(
                f"{entity}.cs",
                self.render_template(
                    "model", dict(context, members=[entity_member(f, n) for f, n in fields])
                ),
                "csharp",
                relative_path=f"{BACKEND_DIR}/Models",
            ),
            self.make_file(
                f"{entity}Dtos.cs",
                self.render_template(
                    "dtos",
                    dict(
                        context,
                        read_properties=[property_line(f, n) for f, n in fields],
                        write_members=[dto_member(f, n) for f, n in fields],
                    ),
                ),
                "csharp",
                relative_path=f"{BACKEND_DIR}/DTOs",
            ),
            self.make_file(
                f"I{entity}Service.cs",
                self.render_template("service", context),
                "csharp",
                relative_path=f"{BACKEND_DIR}/Services",
            ),
            self.make_file(
                f"{entity}Api.csproj",
                self.render_template("project", context),
                "xml",
                relative_path=BACKEND_DIR,
            ),
        ]
        logger.info("Generated %d ASP.NET files for %s", len(files), entity)
        return files

"""
Express backend emitter (route-handler style).

Produces routes, a controller, express-validator middleware and the TypeORM
entity and repository the controller depends on.
"""

import json
from typing import Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GenerationOptions, SqlDialect, table_name_for
from ...core.generator import CodeEmitter
from ...core.naming import (
    FieldNames,
    build_field_names,
    to_camel_case,
    to_kebab_case,
    type_identifier,
)
from ...core.schema import (
    Category,
    FieldDescriptor,
    FieldType,
    FormStructure,
    GeneratedFile,
    RuleKind,
    rule_message,
)
from ...core.type_maps import entity_ts_type, js_literal, js_regex, typeorm_column_type
from .templates import get_express_templates

logger = get_logger(__name__)

BACKEND_DIR = "backend"
SOURCE_DIR = "backend/src"
DEFAULT_PAGE_SIZE = 10

_TYPE_CHECKS = {
    FieldType.NUMBER: ("isNumeric", "must be a number"),
    FieldType.DATE: ("isISO8601", "must be a valid date"),
    FieldType.CHECKBOX: ("isBoolean", "must be true or false"),
    FieldType.MULTI_SELECT: ("isArray", "must be a list"),
}


def entity_name(resource_name: str) -> str:
    return type_identifier(resource_name, "FormSubmission")


def column_decorator(field: FieldDescriptor, names: FieldNames) -> str:
    """TypeORM ``@Column`` decorator mapped onto the generic SQL column."""
    column_type = typeorm_column_type(field.type)
    options = [f"name: '{names.snake}'", f"type: '{column_type}'"]
    if column_type == "varchar":
        options.append("length: 500" if field.type == FieldType.FILE else "length: 255")
    if field.type == FieldType.CHECKBOX:
        options.append("default: false")
    else:
        options.append(f"nullable: {'false' if field.is_required else 'true'}")
    return f"@Column({{ {', '.join(options)} }})"


def entity_member(field: FieldDescriptor, names: FieldNames) -> str:
    marker = "!" if field.is_required or field.type == FieldType.CHECKBOX else "?"
    return "\n".join(
        [column_decorator(field, names), f"{names.camel}{marker}: {entity_ts_type(field.type)};"]
    )


def validation_chain(field: FieldDescriptor, names: FieldNames) -> Optional[str]:
    """
    express-validator chain for one field.

    Args:
        field: Field to validate
        names: Generated identifiers of the field

    Returns:
        The chain, or None for uploads (they never arrive in the body)
    """
    if field.type == FieldType.FILE:
        return None

    lines = [f"body('{names.camel}')"]
    if field.is_required:
        lines.append(f"  .notEmpty().withMessage({js_literal(field.required_message)})")
    else:
        lines.append("  .optional({ values: 'falsy' })")

    type_check = _TYPE_CHECKS.get(field.type)
    if type_check:
        method, text = type_check
        lines.append(f"  .{method}().withMessage({js_literal(f'{field.label} {text}')})")

    for rule in field.effective_rules():
        message = js_literal(rule_message(rule, field.label))
        if rule.kind == RuleKind.MIN_LENGTH:
            call = f"isLength({{ min: {rule.value} }})"
        elif rule.kind == RuleKind.MAX_LENGTH:
            call = f"isLength({{ max: {rule.value} }})"
        elif rule.kind in (RuleKind.PATTERN, RuleKind.PHONE):
            call = f"matches({js_regex(str(rule.value))})"
        elif rule.kind == RuleKind.EMAIL:
            call = "isEmail()"
        elif rule.kind == RuleKind.MIN:
            call = f"isFloat({{ min: {rule.value} }})"
        elif rule.kind == RuleKind.MAX:
            call = f"isFloat({{ max: {rule.value} }})"
        else:
            continue
        lines.append(f"  .{call}.withMessage({message})")
    return "\n".join(lines)


_ACTIONS = [
    {"name": "getById", "call": "findById(id)", "returns_data": True, "message": None, "verb": "fetch"},
    {
        "name": "update",
        "call": "update(id, req.body)",
        "returns_data": True,
        "message": "updated successfully",
        "verb": "update",
    },
    {
        "name": "delete",
        "call": "delete(id)",
        "returns_data": False,
        "message": "deleted successfully",
        "verb": "delete",
    },
]


class ExpressEmitter(CodeEmitter):
    """Emitter for an Express + TypeORM REST API."""

    def __init__(self, config: Optional[Dict] = None):
        super().__init__(config)
        self.page_size = self.config.get("page_size", DEFAULT_PAGE_SIZE)

    @property
    def target_name(self) -> str:
        return "express"

    @property
    def category(self) -> Category:
        return Category.BACKEND

    def get_templates(self) -> Dict[str, str]:
        return get_express_templates()

    def generate(
        self, structure: FormStructure, project_name: str, options: GenerationOptions
    ) -> List[GeneratedFile]:
        entity = entity_name(project_name)
        module = to_camel_case(entity)
        fields = list(zip(structure.fields, build_field_names(structure.fields)))
        context = {
            "entity": entity,
            "module": module,
            "label": entity,
            "table": table_name_for(project_name, options.sql_dialect or SqlDialect.GENERIC),
            "base_path": f"/api/{to_kebab_case(entity)}",
            "page_size": self.page_size,
        }

        members = [entity_member(field, names) for field, names in fields]
        chains = [chain for chain in (validation_chain(f, n) for f, n in fields) if chain]

        files = [
            self.make_file(
                f"{module}.model.ts",
                self.render_template("model", dict(context, members=members)),
                "typescript",
                relative_path=f"{SOURCE_DIR}/models",
            ),
            self.make_file(
                f"{module}.repository.ts",
                self.render_template("repository", context),
                "typescript",
                relative_path=f"{SOURCE_DIR}/repositories",
            ),
            self.make_file(
                f"{module}.controller.ts",
                self.render_template("controller", dict(context, actions=_ACTIONS)),
                "typescript",
                relative_path=f"{SOURCE_DIR}/controllers",
            ),
            self.make_file(
                f"{module}.routes.ts",
                self.render_template("routes", context),
                "typescript",
                relative_path=f"{SOURCE_DIR}/routes",
            ),
            self.make_file(
                f"{module}.validation.ts",
                self.render_template("validation", dict(context, chains=chains)),
                "typescript",
                relative_path=f"{SOURCE_DIR}/validation",
            ),
            self.make_file(
                "data-source.ts",
                self.render_template("data_source", context),
                "typescript",
                relative_path=SOURCE_DIR,
            ),
            self.make_file(
                "index.ts", self.render_template("index", context), "typescript", relative_path=SOURCE_DIR
            ),
            self.make_file("package.json", self.render_manifest(entity), "json", relative_path=BACKEND_DIR),
            self.make_file("tsconfig.json", self.render_tsconfig(), "json", relative_path=BACKEND_DIR),
        ]
        logger.info("Generated %d Express files for %s", len(files), entity)
        return files

    def render_manifest(self, entity: str) -> str:
        manifest = {
            "name": f"{to_kebab_case(entity)}-api",
            "private": True,
            "version": "0.1.0",
            "main": "dist/index.js",
            "scripts": {
                "dev": "ts-node-dev --respawn src/index.ts",
                "build": "tsc",
                "start": "node dist/index.js",
            },
            "dependencies": {
                "express": "^4.18.2",
                "express-validator": "^7.0.1",
                "pg": "^8.11.3",
                "reflect-metadata": "^0.2.1",
                "typeorm": "^0.3.17",
            },
            "devDependencies": {
                "@types/express": "^4.17.21",
                "@types/node": "^20.10.0",
                "ts-node-dev": "^2.0.0",
                "typescript": "^5.3.0",
            },
        }
        return json.dumps(manifest, indent=2)

    def render_tsconfig(self) -> str:
        config = {
            "compilerOptions": {
                "target": "ES2020",
                "module": "commonjs",
                "outDir": "dist",
                "rootDir": "src",
                "strict": True,
                "esModuleInterop": True,
                "experimentalDecorators": True,
                "emitDecoratorMetadata": True,
                "skipLibCheck": True,
            },
            "include": ["src"],
        }
        return json.dumps(config, indent=2)

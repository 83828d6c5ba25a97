"""
React form component emitter.

Builds the form component, its manifest and (optionally) a component test.
Field blocks, interface lines, default values and conditional wrappers are
small unit functions; the binding strategy, validation strategy and styling
kit selected by the options supply everything library-specific.
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ....logging_config import get_logger
from ...core.config import FrontendTemplate, GenerationOptions, ValidationLibrary
from ...core.generator import CodeEmitter, MappingError
from ...core.naming import FieldNames, build_field_names, to_kebab_case, type_identifier
from ...core.schema import (
    Category,
    ConditionOperator,
    ConditionalRule,
    FieldDescriptor,
    FieldType,
    FormStructure,
    GeneratedFile,
    Visibility,
)
from ...core.type_maps import default_value_literal, html_input_type, js_literal, typescript_type
from .bindings import FormBinding, create_binding
from .jsx import js_string
from .styling import (
    CHECKBOX,
    FILE,
    INPUT,
    RADIO,
    SELECT,
    TEXTAREA,
    FieldView,
    StylingKit,
    create_styling_kit,
    indent_lines,
)
from .templates import get_react_templates
from .validation import ValidationStrategy, create_validation

logger = get_logger(__name__)

COMPONENT_DIR = "frontend/src/components"
TEST_DIR = "frontend/src/components/__tests__"
FRONTEND_DIR = "frontend"

_CONTROLS = {
    FieldType.TEXTAREA: (TEXTAREA, False),
    FieldType.SELECT: (SELECT, False),
    FieldType.MULTI_SELECT: (SELECT, True),
    FieldType.CHECKBOX: (CHECKBOX, False),
    FieldType.RADIO: (RADIO, False),
    FieldType.FILE: (FILE, False),
}


def component_name(project_name: str) -> str:
    """Component identifier for a project, always ending in ``Form``."""
    base = type_identifier(project_name, "Generated")
    return base if base.endswith("Form") else f"{base}Form"


def build_field_view(field: FieldDescriptor, names: FieldNames, binding: FormBinding) -> FieldView:
    """Resolve control kind and state-binding attributes for one field."""
    control, multiple = _CONTROLS.get(field.type, (INPUT, False))
    name = names.camel

    attrs: List[str] = []
    option_attrs = []
    if control == CHECKBOX:
        attrs = binding.checkbox_attrs(name)
    elif control == RADIO:
        option_attrs = [
            (option.label, option.value, binding.radio_attrs(name, option.value))
            for option in field.options
        ]
    elif control == FILE:
        attrs = binding.file_attrs(name)
    else:
        attrs = binding.control_attrs(name, field.type)

    surfaces = binding.surfaces_errors
    return FieldView(
        field=field,
        name=name,
        control=control,
        input_type=html_input_type(field.type),
        attrs=attrs,
        option_attrs=option_attrs,
        error_condition=binding.error_condition(name) if surfaces else None,
        error_message=binding.error_message(name) if surfaces else None,
        multiple=multiple,
    )


def _comparison_literal(value: Any, source: FieldDescriptor) -> str:
    if source.type == FieldType.CHECKBOX and str(value).lower() in ("true", "false"):
        return str(value).lower()
    return js_literal(value)


def _numeric_literal(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return f"Number({js_literal(value)})"


def condition_expression(
    rule: ConditionalRule, source: FieldDescriptor, source_name: str, binding: FormBinding
) -> str:
    """
    JavaScript expression that is truthy when the owning field is visible.

    Args:
        rule: Conditional rule of the owning field
        source: Field the rule reads
        source_name: Generated identifier of the source field
        binding: Binding that knows how to read current values

    Returns:
        Visibility expression; hide rules are negated
    """
    value = binding.value_expr(source_name)
    operator = rule.operator
    if operator == ConditionOperator.EQUALS:
        expression = f"{value} === {_comparison_literal(rule.value, source)}"
    elif operator == ConditionOperator.NOT_EQUALS:
        expression = f"{value} !== {_comparison_literal(rule.value, source)}"
    elif operator == ConditionOperator.CONTAINS:
        if source.type == FieldType.MULTI_SELECT:
            expression = f"({value} ?? []).includes({js_literal(rule.value)})"
        else:
            expression = f"String({value} ?? '').includes({js_literal(str(rule.value))})"
    elif operator == ConditionOperator.GREATER_THAN:
        expression = f"Number({value}) > {_numeric_literal(rule.value)}"
    elif operator == ConditionOperator.LESS_THAN:
        expression = f"Number({value}) < {_numeric_literal(rule.value)}"
    else:
        raise MappingError(f"Unsupported conditional operator: {operator}")

    if rule.visibility == Visibility.HIDE:
        return f"!({expression})"
    return expression


def wrap_conditional(block: str, expression: str) -> str:
    """Render ``block`` only while ``expression`` holds."""
    return "\n".join([f"{{{expression} && ("] + indent_lines(block.split("\n")) + [")}"])


def interface_line(field: FieldDescriptor, names: FieldNames) -> str:
    marker = "" if field.is_required else "?"
    return f"{names.camel}{marker}: {typescript_type(field.type)};"


def default_line(field: FieldDescriptor, names: FieldNames) -> str:
    return f"{names.camel}: {default_value_literal(field.type, field.default_value)},"


class ReactEmitter(CodeEmitter):
    """Emitter for React form components in TypeScript or JavaScript."""

    @property
    def target_name(self) -> str:
        return "react"

    @property
    def category(self) -> Category:
        return Category.FRONTEND

    def get_templates(self) -> Dict[str, str]:
        return get_react_templates()

    def _check_options(self, options: GenerationOptions):
        if options.template not in (
            FrontendTemplate.REACT_TYPESCRIPT,
            FrontendTemplate.REACT_JAVASCRIPT,
        ):
            raise MappingError(f"Unsupported frontend template: {options.template}")
        for option in ("form_library", "validation_library", "styling"):
            if getattr(options, option) is None:
                raise MappingError(f"Frontend option '{option}' is not set")
        if (
            options.validation_library == ValidationLibrary.CLASS_VALIDATOR
            and not options.is_typescript
        ):
            raise MappingError("class-validator requires a TypeScript template")

    def generate(
        self, structure: FormStructure, project_name: str, options: GenerationOptions
    ) -> List[GeneratedFile]:
        """
        Generate the component, manifest and optional test file.

        Raises:
            MappingError: If an option has no React rendering
        """
        self._check_options(options)
        for message in self.validate_structure(structure):
            logger.debug("react: %s", message)

        typescript = options.is_typescript
        name = component_name(project_name)
        extension = "tsx" if typescript else "jsx"
        fields = list(zip(structure.fields, build_field_names(structure.fields)))

        binding = create_binding(options.form_library)
        validation = create_validation(options.validation_library)
        kit = create_styling_kit(options.styling)

        files = [
            self.make_file(
                f"{name}.{extension}",
                self.render_component(structure, fields, name, options, binding, validation, kit),
                "typescript" if typescript else "javascript",
                relative_path=COMPONENT_DIR,
            ),
            self.make_file(
                "package.json",
                self.render_manifest(project_name, options, binding, validation, kit),
                "json",
                relative_path=FRONTEND_DIR,
            ),
            self.make_file(
                f"vite.config.{'ts' if typescript else 'js'}",
                self.render_template("vite_config", {"include_tests": options.include_tests}),
                "typescript" if typescript else "javascript",
                relative_path=FRONTEND_DIR,
            ),
        ]
        if typescript:
            files.append(
                self.make_file(
                    "tsconfig.json", self.render_tsconfig(), "json", relative_path=FRONTEND_DIR
                )
            )
        if options.include_tests:
            files.append(
                self.make_file(
                    f"{name}.test.{extension}",
                    self.render_test(structure, fields, name),
                    "typescript" if typescript else "javascript",
                    relative_path=TEST_DIR,
                    category=Category.TESTS,
                )
            )

        logger.info("Generated %d React files for %s", len(files), name)
        return files

    def render_field_blocks(
        self,
        structure: FormStructure,
        fields: Sequence[Tuple[FieldDescriptor, FieldNames]],
        binding: FormBinding,
        kit: StylingKit,
    ) -> List[str]:
        """One JSX block per field, wrapped when a conditional rule applies."""
        names = {field.id: field_names.camel for field, field_names in fields}
        blocks = []
        for field, field_names in fields:
            block = kit.render_field(build_field_view(field, field_names, binding))
            rule = field.conditional
            if rule is not None:
                source = structure.get_field(rule.source_field_id)
                if source is None:
                    raise MappingError(
                        f"Field '{field.id}' depends on unknown field '{rule.source_field_id}'"
                    )
                expression = condition_expression(rule, source, names[source.id], binding)
                block = wrap_conditional(block, expression)
            blocks.append(block)
        return blocks

    def render_setup(
        self,
        structure: FormStructure,
        binding: FormBinding,
        validation: ValidationStrategy,
        typescript: bool,
    ) -> str:
        context = {
            "typescript": typescript,
            "validation_option": validation.formik_option(),
            "resolver_option": validation.resolver_option(),
            "validity_check": validation.validity_check("values"),
            "watches": structure.has_conditionals,
        }
        return self.render_template(binding.template_name, context)

    def render_component(
        self,
        structure: FormStructure,
        fields: Sequence[Tuple[FieldDescriptor, FieldNames]],
        name: str,
        options: GenerationOptions,
        binding: FormBinding,
        validation: ValidationStrategy,
        kit: StylingKit,
    ) -> str:
        typescript = options.is_typescript
        validation_block = validation.definitions(fields, options.form_library, typescript)
        field_blocks = self.render_field_blocks(structure, fields, binding, kit)
        form_open = kit.form_open(binding.submit_handler)
        submit_button = kit.submit_button(binding.submitting_expr)
        form_close = kit.form_close()

        react_import = (
            "import React, { useState } from 'react';"
            if binding.template_name == "plain_state_setup"
            else "import React from 'react';"
        )
        imports = (
            [react_import]
            + binding.imports(typescript)
            + validation.imports(options.form_library, typescript)
            + kit.imports()
        )
        if validation.library == ValidationLibrary.CLASS_VALIDATOR:
            imports.insert(1, "import 'reflect-metadata';")

        context = {
            "imports": imports,
            "typescript": typescript,
            "interface_lines": [interface_line(f, n) for f, n in fields],
            "validation_block": validation_block,
            "default_lines": [default_line(f, n) for f, n in fields],
            "component_name": name,
            "setup": self.render_setup(structure, binding, validation, typescript),
            "form_open": form_open,
            "field_blocks": field_blocks,
            "submit_button": submit_button,
            "form_close": form_close,
        }
        return self.render_template("component", context)

    def render_manifest(
        self,
        project_name: str,
        options: GenerationOptions,
        binding: FormBinding,
        validation: ValidationStrategy,
        kit: StylingKit,
    ) -> str:
        """``package.json`` listing exactly the selected libraries."""
        dependencies = {"react": "^18.2.0", "react-dom": "^18.2.0"}
        dependencies.update(binding.dependencies())
        dependencies.update(validation.dependencies(options.form_library))
        dependencies.update(kit.dependencies())
        if validation.library == ValidationLibrary.CLASS_VALIDATOR:
            dependencies["reflect-metadata"] = "^0.2.1"

        dev_dependencies = {"vite": "^5.0.0", "@vitejs/plugin-react": "^4.2.0"}
        if options.is_typescript:
            dev_dependencies.update(
                {
                    "typescript": "^5.3.0",
                    "@types/react": "^18.2.0",
                    "@types/react-dom": "^18.2.0",
                }
            )
        dev_dependencies.update(kit.dev_dependencies())

        scripts = {"dev": "vite", "build": "vite build", "preview": "vite preview"}
        if options.include_tests:
            scripts["test"] = "vitest run"
            dev_dependencies.update(
                {
                    "vitest": "^1.0.0",
                    "@testing-library/react": "^14.1.0",
                    "@testing-library/user-event": "^14.5.0",
                    "jsdom": "^23.0.0",
                }
            )

        manifest = {
            "name": to_kebab_case(project_name) or "generated-form",
            "private": True,
            "version": "0.1.0",
            "type": "module",
            "scripts": scripts,
            "dependencies": dict(sorted(dependencies.items())),
            "devDependencies": dict(sorted(dev_dependencies.items())),
        }
        return json.dumps(manifest, indent=2)

    def render_tsconfig(self) -> str:
        config = {
            "compilerOptions": {
                "target": "ES2020",
                "lib": ["DOM", "DOM.Iterable", "ES2020"],
                "module": "ESNext",
                "moduleResolution": "bundler",
                "jsx": "react-jsx",
                "strict": True,
                "skipLibCheck": True,
                "esModuleInterop": True,
                "experimentalDecorators": True,
                "emitDecoratorMetadata": True,
                "noEmit": True,
            },
            "include": ["src"],
        }
        return json.dumps(config, indent=2)

    def render_test(
        self,
        structure: FormStructure,
        fields: Sequence[Tuple[FieldDescriptor, FieldNames]],
        name: str,
    ) -> str:
        labels = [
            js_string(field.label)
            for field, _ in fields
            if field.conditional is None and field.label.strip()
        ]
        return self.render_template("component_test", {"component_name": name, "labels": labels})


def emit_frontend(
    structure: FormStructure,
    options: Optional[GenerationOptions] = None,
    project_name: Optional[str] = None,
) -> List[GeneratedFile]:
    """
    Generate the frontend files for a form.

    Args:
        structure: Normalized form
        options: Resolved generation options (defaults when omitted)
        project_name: Names the component; falls back to the form title

    Returns:
        Component, manifest and config files, plus the test file when
        ``include_tests`` is set
    """
    options = options or GenerationOptions()
    name = project_name or structure.title or "Generated"
    return ReactEmitter().generate(structure, name, options)

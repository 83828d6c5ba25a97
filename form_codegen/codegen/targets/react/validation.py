"""
Validation strategies for generated React forms.

Yup and Zod emit declarative schemas with opposite defaults: Yup fields
are optional unless ``.required()`` is chained, Zod fields are required
unless ``.optional()`` is chained. The imperative strategy emits a plain
``validateFormData`` function and the class-validator strategy a decorated
DTO class. Every strategy gives each required field exactly one required
constraint.
"""

from typing import Dict, List, Sequence, Tuple

from ...core.config import FormLibrary, ValidationLibrary
from ...core.naming import FieldNames
from ...core.schema import (
    ARRAY_TYPES,
    FieldDescriptor,
    FieldType,
    RuleKind,
    STRING_TYPES,
    ValidationRule,
    rule_message,
)
from ...core.type_maps import js_regex, typescript_type
from .jsx import js_string

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

Fields = Sequence[Tuple[FieldDescriptor, FieldNames]]


def custom_rule_todo(field: FieldDescriptor) -> str:
    """Text of the reminder placed where a custom rule has no generated check."""
    label = " ".join(str(field.label).split()).replace("*/", "* /")
    return f"TODO: implement the {label} custom rule"


def _has_custom_rule(field: FieldDescriptor) -> bool:
    return any(rule.kind == RuleKind.CUSTOM for rule in field.effective_rules())


class ValidationStrategy:
    """Base strategy: schema block, per-field entries and library wiring."""

    library: ValidationLibrary

    def imports(self, form_library: FormLibrary, typescript: bool) -> List[str]:
        return []

    def entry(self, field: FieldDescriptor, names: FieldNames) -> str:
        """One field's validation unit."""
        raise NotImplementedError

    def definitions(self, fields: Fields, form_library: FormLibrary, typescript: bool) -> str:
        """Module-level validation code placed above the component."""
        raise NotImplementedError

    def formik_option(self) -> str:
        return "validate: validateFormData,"

    def resolver_option(self) -> str:
        return "resolver: validationResolver,"

    def validity_check(self, values: str) -> str:
        return f"Object.keys(validateFormData({values})).length === 0"

    def dependencies(self, form_library: FormLibrary) -> Dict[str, str]:
        return {}


# Yup


def _yup_base(field: FieldDescriptor) -> str:
    return {
        FieldType.NUMBER: "Yup.number()",
        FieldType.DATE: "Yup.date()",
        FieldType.CHECKBOX: "Yup.boolean()",
        FieldType.MULTI_SELECT: "Yup.array().of(Yup.string())",
        FieldType.FILE: "Yup.mixed()",
    }.get(field.type, "Yup.string()")


def _yup_constraint(rule: ValidationRule, field: FieldDescriptor) -> str:
    message = js_string(rule_message(rule, field.label))
    if rule.kind in (RuleKind.MIN_LENGTH, RuleKind.MIN):
        return f".min({rule.value}, {message})"
    if rule.kind in (RuleKind.MAX_LENGTH, RuleKind.MAX):
        return f".max({rule.value}, {message})"
    if rule.kind in (RuleKind.PATTERN, RuleKind.PHONE):
        return f".matches({js_regex(str(rule.value))}, {message})"
    if rule.kind == RuleKind.EMAIL:
        return f".email({message})"
    return f".test('custom', {message}, () => /* {custom_rule_todo(field)} */ true)"


class YupValidation(ValidationStrategy):
    library = ValidationLibrary.YUP

    def imports(self, form_library: FormLibrary, typescript: bool) -> List[str]:
        lines = ["import * as Yup from 'yup';"]
        if form_library == FormLibrary.REACT_HOOK_FORM:
            lines.append("import { yupResolver } from '@hookform/resolvers/yup';")
        return lines

    def entry(self, field: FieldDescriptor, names: FieldNames) -> str:
        chain = _yup_base(field)
        chain += "".join(_yup_constraint(rule, field) for rule in field.effective_rules())
        if field.is_required:
            chain += f".required({js_string(field.required_message)})"
        return f"{names.camel}: {chain}"

    def definitions(self, fields: Fields, form_library: FormLibrary, typescript: bool) -> str:
        entries = [f"  {self.entry(field, names)}," for field, names in fields]
        return "\n".join(["export const validationSchema = Yup.object({"] + entries + ["});"])

    def formik_option(self) -> str:
        return "validationSchema,"

    def resolver_option(self) -> str:
        return "resolver: yupResolver(validationSchema),"

    def validity_check(self, values: str) -> str:
        return f"validationSchema.isValidSync({values})"

    def dependencies(self, form_library: FormLibrary) -> Dict[str, str]:
        deps = {"yup": "^1.3.0"}
        if form_library == FormLibrary.REACT_HOOK_FORM:
            deps["@hookform/resolvers"] = "^3.3.0"
        return deps


# Zod


def _zod_base(field: FieldDescriptor, required_error: str = "") -> str:
    params = f"{{ required_error: {required_error} }}" if required_error else ""
    return {
        FieldType.NUMBER: f"z.coerce.number({params})",
        FieldType.DATE: f"z.coerce.date({params})",
        FieldType.CHECKBOX: f"z.boolean({params})",
        FieldType.MULTI_SELECT: "z.array(z.string())",
        FieldType.FILE: "z.any()",
    }.get(field.type, "z.string()")


def _zod_constraint(rule: ValidationRule, field: FieldDescriptor) -> str:
    message = js_string(rule_message(rule, field.label))
    if rule.kind in (RuleKind.MIN_LENGTH, RuleKind.MIN):
        return f".min({rule.value}, {message})"
    if rule.kind in (RuleKind.MAX_LENGTH, RuleKind.MAX):
        return f".max({rule.value}, {message})"
    if rule.kind in (RuleKind.PATTERN, RuleKind.PHONE):
        return f".regex({js_regex(str(rule.value))}, {message})"
    if rule.kind == RuleKind.EMAIL:
        return f".email({message})"
    return f".refine(() => /* {custom_rule_todo(field)} */ true, {message})"


class ZodValidation(ValidationStrategy):
    library = ValidationLibrary.ZOD

    def imports(self, form_library: FormLibrary, typescript: bool) -> List[str]:
        lines = ["import { z } from 'zod';"]
        if form_library == FormLibrary.REACT_HOOK_FORM:
            lines.append("import { zodResolver } from '@hookform/resolvers/zod';")
        elif form_library == FormLibrary.FORMIK:
            lines.append("import { toFormikValidationSchema } from 'zod-formik-adapter';")
        return lines

    def entry(self, field: FieldDescriptor, names: FieldNames) -> str:
        required = field.is_required
        message = js_string(field.required_message)
        length_required = field.type in STRING_TYPES or field.type in ARRAY_TYPES
        constructor_required = required and not length_required and field.type != FieldType.FILE

        chain = _zod_base(field, message if constructor_required else "")
        rules = field.effective_rules()
        chain += "".join(
            _zod_constraint(rule, field) for rule in rules if rule.kind != RuleKind.CUSTOM
        )
        if required and length_required:
            chain += f".min(1, {message})"
        if required and field.type == FieldType.FILE:
            chain += f".refine((value) => value != null, {message})"
        chain += "".join(
            _zod_constraint(rule, field) for rule in rules if rule.kind == RuleKind.CUSTOM
        )
        if not required:
            chain += ".optional()"
        return f"{names.camel}: {chain}"

    def definitions(self, fields: Fields, form_library: FormLibrary, typescript: bool) -> str:
        entries = [f"  {self.entry(field, names)}," for field, names in fields]
        return "\n".join(["export const validationSchema = z.object({"] + entries + ["});"])

    def formik_option(self) -> str:
        return "validationSchema: toFormikValidationSchema(validationSchema),"

    def resolver_option(self) -> str:
        return "resolver: zodResolver(validationSchema),"

    def validity_check(self, values: str) -> str:
        return f"validationSchema.safeParse({values}).success"

    def dependencies(self, form_library: FormLibrary) -> Dict[str, str]:
        deps = {"zod": "^3.22.0"}
        if form_library == FormLibrary.REACT_HOOK_FORM:
            deps["@hookform/resolvers"] = "^3.3.0"
        elif form_library == FormLibrary.FORMIK:
            deps["zod-formik-adapter"] = "^1.2.0"
        return deps


# Imperative


def _required_check(field: FieldDescriptor, value: str) -> str:
    if field.type in ARRAY_TYPES:
        return f"!{value} || {value}.length === 0"
    if field.type == FieldType.NUMBER:
        return f"{value} === undefined || {value} === null || Number.isNaN({value})"
    if field.type in STRING_TYPES:
        return f"!{value} || String({value}).trim() === ''"
    return f"!{value}"


def _rule_check(rule: ValidationRule, value: str) -> str:
    if rule.kind == RuleKind.MIN_LENGTH:
        return f"{value} && {value}.length < {rule.value}"
    if rule.kind == RuleKind.MAX_LENGTH:
        return f"{value} && {value}.length > {rule.value}"
    if rule.kind in (RuleKind.PATTERN, RuleKind.PHONE):
        return f"{value} && !{js_regex(str(rule.value))}.test({value})"
    if rule.kind == RuleKind.EMAIL:
        return f"{value} && !{js_regex(EMAIL_PATTERN)}.test({value})"
    if rule.kind == RuleKind.MIN:
        return f"{value} !== undefined && Number({value}) < {rule.value}"
    if rule.kind == RuleKind.MAX:
        return f"{value} !== undefined && Number({value}) > {rule.value}"
    return ""


def imperative_checks(field: FieldDescriptor, names: FieldNames) -> List[Tuple[str, str]]:
    """Ordered (condition, message) pairs for one field; required first."""
    value = f"values.{names.camel}"
    checks = []
    if field.is_required:
        checks.append((_required_check(field, value), field.required_message))
    for rule in field.effective_rules():
        condition = _rule_check(rule, value)
        if condition:
            checks.append((condition, rule_message(rule, field.label)))
    return checks


def _resolver_block(typescript: bool) -> str:
    signature = (
        "const validationResolver: Resolver<FormData> = async (values) => {"
        if typescript
        else "const validationResolver = async (values) => {"
    )
    return "\n".join(
        [
            signature,
            "  const errors = validateFormData(values);",
            "  if (Object.keys(errors).length === 0) {",
            "    return { values, errors: {} };",
            "  }",
            "  return {",
            "    values: {},",
            "    errors: Object.fromEntries(",
            "      Object.entries(errors).map(([name, message]) => [name, { type: 'validate', message }]),",
            "    ),",
            "  };",
            "};",
        ]
    )


class ImperativeValidation(ValidationStrategy):
    library = ValidationLibrary.IMPERATIVE

    def imports(self, form_library: FormLibrary, typescript: bool) -> List[str]:
        if form_library == FormLibrary.REACT_HOOK_FORM and typescript:
            return ["import type { Resolver } from 'react-hook-form';"]
        return []

    def entry(self, field: FieldDescriptor, names: FieldNames) -> str:
        lines = []
        for index, (condition, message) in enumerate(imperative_checks(field, names)):
            keyword = "if" if index == 0 else "} else if"
            lines.append(f"{keyword} ({condition}) {{")
            lines.append(f"  errors.{names.camel} = {js_string(message)};")
        if lines:
            lines.append("}")
        if _has_custom_rule(field):
            lines.append(f"// {custom_rule_todo(field)}")
        return "\n".join(lines)

    def definitions(self, fields: Fields, form_library: FormLibrary, typescript: bool) -> str:
        if typescript:
            head = [
                "export const validateFormData = (values: FormData): Record<string, string> => {",
                "  const errors: Record<string, string> = {};",
            ]
        else:
            head = [
                "export const validateFormData = (values) => {",
                "  const errors = {};",
            ]
        body = []
        for field, names in fields:
            block = self.entry(field, names)
            if block:
                body += [""] + ["  " + line for line in block.split("\n")]
        function = "\n".join(head + body + ["", "  return errors;", "};"])
        if form_library == FormLibrary.REACT_HOOK_FORM:
            return function + "\n\n" + _resolver_block(typescript)
        return function


# class-validator


def _decorators(field: FieldDescriptor) -> List[str]:
    decorators = []
    if field.is_required:
        decorators.append(f"@IsNotEmpty({{ message: {js_string(field.required_message)} }})")
    else:
        decorators.append("@IsOptional()")

    type_decorator = {
        FieldType.NUMBER: ["@Type(() => Number)", "@IsNumber()"],
        FieldType.DATE: ["@IsDateString()"],
        FieldType.CHECKBOX: ["@IsBoolean()"],
        FieldType.MULTI_SELECT: ["@IsArray()", "@IsString({ each: true })"],
        FieldType.FILE: [],
    }.get(field.type, ["@IsString()"])
    decorators.extend(type_decorator)

    for rule in field.effective_rules():
        message = f"{{ message: {js_string(rule_message(rule, field.label))} }}"
        if rule.kind == RuleKind.MIN_LENGTH:
            decorators.append(f"@MinLength({rule.value}, {message})")
        elif rule.kind == RuleKind.MAX_LENGTH:
            decorators.append(f"@MaxLength({rule.value}, {message})")
        elif rule.kind in (RuleKind.PATTERN, RuleKind.PHONE):
            decorators.append(f"@Matches({js_regex(str(rule.value))}, {message})")
        elif rule.kind == RuleKind.EMAIL:
            decorators.append(f"@IsEmail({{}}, {message})")
        elif rule.kind == RuleKind.MIN:
            decorators.append(f"@Min({rule.value}, {message})")
        elif rule.kind == RuleKind.MAX:
            decorators.append(f"@Max({rule.value}, {message})")
    return decorators


def _decorator_name(decorator: str) -> str:
    return decorator[1:].split("(", 1)[0]


class ClassValidatorValidation(ValidationStrategy):
    library = ValidationLibrary.CLASS_VALIDATOR

    def __init__(self):
        self._used: set = set()

    def imports(self, form_library: FormLibrary, typescript: bool) -> List[str]:
        validators = sorted(name for name in self._used if name != "Type")
        lines = [
            f"import {{ {', '.join(validators + ['validateSync'])} }} from 'class-validator';",
            "import { plainToInstance, Type } from 'class-transformer';"
            if "Type" in self._used
            else "import { plainToInstance } from 'class-transformer';",
        ]
        if form_library == FormLibrary.REACT_HOOK_FORM:
            lines.append(
                "import { classValidatorResolver } from '@hookform/resolvers/class-validator';"
            )
        return lines

    def entry(self, field: FieldDescriptor, names: FieldNames) -> str:
        decorators = _decorators(field)
        self._used.update(_decorator_name(d) for d in decorators)
        if _has_custom_rule(field):
            decorators.insert(0, f"// {custom_rule_todo(field)}")
        marker = "!" if field.is_required else "?"
        return "\n".join(decorators + [f"{names.camel}{marker}: {typescript_type(field.type)};"])

    def definitions(self, fields: Fields, form_library: FormLibrary, typescript: bool) -> str:
        members = []
        for field, names in fields:
            if members:
                members.append("")
            members += ["  " + line for line in self.entry(field, names).split("\n")]
        dto = "\n".join(["export class FormDataDto {"] + members + ["}"])
        validate = "\n".join(
            [
                "export const validateFormData = (values: FormData): Record<string, string> => {",
                "  const errors: Record<string, string> = {};",
                "  for (const error of validateSync(plainToInstance(FormDataDto, values))) {",
                "    errors[error.property] = Object.values(error.constraints ?? {})[0] ?? 'Invalid value';",
                "  }",
                "  return errors;",
                "};",
            ]
        )
        return dto + "\n\n" + validate

    def resolver_option(self) -> str:
        return "resolver: classValidatorResolver(FormDataDto),"

    def dependencies(self, form_library: FormLibrary) -> Dict[str, str]:
        deps = {"class-validator": "^0.14.0", "class-transformer": "^0.5.1"}
        if form_library == FormLibrary.REACT_HOOK_FORM:
            deps["@hookform/resolvers"] = "^3.3.0"
        return deps


_STRATEGIES = {
    ValidationLibrary.YUP: YupValidation,
    ValidationLibrary.ZOD: ZodValidation,
    ValidationLibrary.IMPERATIVE: ImperativeValidation,
    ValidationLibrary.CLASS_VALIDATOR: ClassValidatorValidation,
}


def create_validation(library: ValidationLibrary) -> ValidationStrategy:
    """Create the strategy for a validation library."""
    return _STRATEGIES[library]()

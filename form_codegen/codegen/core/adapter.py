"""
Schema adapter between editor documents and FormStructure.

The form editor stores a nested document (sections plus positioned fields)
with a rich set of editor field types. Generation works on the flat
``FormStructure`` with abstract field types. This module converts in both
directions and also reads the structure produced by document analysis.
"""

import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ...logging_config import get_logger
from .generator import MappingError
from .schema import (
    ConditionalRule,
    ConditionOperator,
    FieldDescriptor,
    FieldOption,
    FieldType,
    FormStructure,
    NUMERIC_TYPES,
    RuleKind,
    SectionInfo,
    SELECTION_TYPES,
    UPLOAD_TYPES,
    VALUE_RULES,
    ValidationRule,
    Visibility,
)

logger = get_logger(__name__)

# Editor field type -> abstract field type. Several editor types collapse
# onto one abstract type; generation treats them identically.
EDITOR_TYPE_MAP: Dict[str, FieldType] = {
    "TEXT": FieldType.TEXT,
    "EMAIL": FieldType.EMAIL,
    "PHONE": FieldType.PHONE,
    "NUMBER": FieldType.NUMBER,
    "DATE": FieldType.DATE,
    "TIME": FieldType.TEXT,
    "TEXTAREA": FieldType.TEXTAREA,
    "SELECT": FieldType.SELECT,
    "RADIO": FieldType.RADIO,
    "CHECKBOX": FieldType.CHECKBOX,
    "CHECKBOX_GROUP": FieldType.MULTI_SELECT,
    "MULTI_SELECT": FieldType.MULTI_SELECT,
    "FILE_UPLOAD": FieldType.FILE,
    "RICH_TEXT": FieldType.TEXTAREA,
    "SIGNATURE": FieldType.TEXT,
    "RATING": FieldType.NUMBER,
    "TAGS": FieldType.TEXT,
    "COLOR_PICKER": FieldType.TEXT,
    "SLIDER": FieldType.NUMBER,
    "DATE_RANGE": FieldType.TEXT,
    "AUTO_COMPLETE": FieldType.TEXT,
}

# Editor types that only affect layout and carry no data
LAYOUT_TYPES = frozenset({"SECTION", "COLUMNS", "DIVIDER"})

# Abstract field type -> editor type used when no source type is known
REVERSE_TYPE_MAP: Dict[FieldType, str] = {
    FieldType.TEXT: "TEXT",
    FieldType.EMAIL: "EMAIL",
    FieldType.PHONE: "PHONE",
    FieldType.NUMBER: "NUMBER",
    FieldType.DATE: "DATE",
    FieldType.CHECKBOX: "CHECKBOX",
    FieldType.RADIO: "RADIO",
    FieldType.SELECT: "SELECT",
    FieldType.MULTI_SELECT: "MULTI_SELECT",
    FieldType.TEXTAREA: "TEXTAREA",
    FieldType.FILE: "FILE_UPLOAD",
}

DEFAULT_SECTION_ID = "section-1"


def map_editor_type(editor_type: str) -> FieldType:
    """
    Map an editor field type to its abstract type.

    Raises:
        MappingError: If the editor type is unknown
    """
    try:
        return EDITOR_TYPE_MAP[str(editor_type).upper()]
    except KeyError:
        raise MappingError(f"Unsupported field type: {editor_type}") from None


def _parse_rule_kind(raw: Any, field_id: str) -> RuleKind:
    try:
        return RuleKind(raw)
    except ValueError:
        raise MappingError(
            f"Unsupported validation rule '{raw}' on field '{field_id}'"
        ) from None


def _parse_rule_value(kind: RuleKind, value: Any, field_id: str) -> Any:
    """Check the value of a length, bound or pattern rule; numbers may arrive as text."""
    if kind not in VALUE_RULES:
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MappingError(f"Validation rule '{kind.value}' on field '{field_id}' has no value")
    if kind == RuleKind.PATTERN:
        return str(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        number = float(str(value).strip())
        if not math.isfinite(number):
            raise ValueError(value)
    except ValueError:
        raise MappingError(
            f"Validation rule '{kind.value}' on field '{field_id}' needs a number, got {value!r}"
        ) from None
    return int(number) if number.is_integer() else number


def _parse_rules(raw_rules: Optional[Iterable[Dict[str, Any]]], field_id: str) -> List[ValidationRule]:
    rules = []
    for raw in raw_rules or []:
        kind = _parse_rule_kind(raw.get("type"), field_id)
        rules.append(
            ValidationRule(
                kind=kind,
                value=_parse_rule_value(kind, raw.get("value"), field_id),
                message=raw.get("message"),
            )
        )
    return rules


def _parse_conditional(raw: Optional[Dict[str, Any]], field_id: str) -> Optional[ConditionalRule]:
    if not raw or not raw.get("when"):
        return None
    try:
        operator = ConditionOperator(raw.get("operator", "equals"))
    except ValueError:
        raise MappingError(
            f"Unsupported conditional operator '{raw.get('operator')}' on field '{field_id}'"
        ) from None
    return ConditionalRule(
        visibility=Visibility.SHOW if raw.get("show", True) else Visibility.HIDE,
        source_field_id=str(raw["when"]),
        operator=operator,
        value=raw.get("value"),
    )


def _parse_options(raw_options: Optional[Iterable[Any]]) -> Tuple[FieldOption, ...]:
    options = []
    for raw in raw_options or []:
        if isinstance(raw, dict):
            value = str(raw.get("value", raw.get("label", "")))
            options.append(FieldOption(label=str(raw.get("label", value)), value=value))
        else:
            options.append(FieldOption(label=str(raw), value=str(raw)))
    return tuple(options)


def _bound_rules(min_value: Any, max_value: Any) -> List[ValidationRule]:
    rules = []
    if min_value is not None:
        rules.append(
            ValidationRule(RuleKind.MIN, min_value, f"Must be at least {min_value}")
        )
    if max_value is not None:
        rules.append(
            ValidationRule(RuleKind.MAX, max_value, f"Must not exceed {max_value}")
        )
    return rules


def adapt_field(raw: Dict[str, Any], order: int = 0) -> FieldDescriptor:
    """
    Convert one editor field into a FieldDescriptor.

    Only attributes meaningful for the abstract type are kept: options for
    selection types, bounds and step for numbers, file constraints for
    uploads. Numeric bounds also become ``min``/``max`` validation rules.

    Args:
        raw: Editor field document
        order: Position within its section

    Returns:
        Field descriptor

    Raises:
        MappingError: If the type, a rule kind or the conditional operator
            is unsupported
    """
    field_id = str(raw.get("id", ""))
    editor_type = str(raw.get("type", "")).upper()
    field_type = map_editor_type(editor_type)

    rules = _parse_rules(raw.get("validations"), field_id)
    attributes: Dict[str, Any] = {}

    if field_type in SELECTION_TYPES:
        attributes["options"] = _parse_options(raw.get("options"))
    if field_type in NUMERIC_TYPES:
        attributes["min_value"] = raw.get("min")
        attributes["max_value"] = raw.get("max")
        attributes["step"] = raw.get("step")
        rules.extend(_bound_rules(raw.get("min"), raw.get("max")))
    if field_type in UPLOAD_TYPES:
        attributes["accept"] = raw.get("accept")
        attributes["max_file_size"] = raw.get("maxFileSize")
        attributes["multiple"] = bool(raw.get("multiple", False))

    position = raw.get("position") or {}

    return FieldDescriptor(
        id=field_id,
        label=str(raw.get("label") or field_id),
        type=field_type,
        required=bool(raw.get("required", False)),
        order=order,
        section_id=position.get("sectionId"),
        default_value=raw.get("defaultValue"),
        placeholder=raw.get("placeholder"),
        help_text=raw.get("helpText"),
        validation_rules=tuple(rules),
        conditional=_parse_conditional(raw.get("conditional"), field_id),
        source_type=editor_type,
        **attributes,
    )


def adapt(form_schema: Dict[str, Any]) -> FormStructure:
    """
    Flatten an editor form document into a FormStructure.

    Fields are ordered by section order, then by their order within the
    section. Fields whose section is unknown come last, keeping their
    relative order. Layout-only editor types are skipped.

    Args:
        form_schema: Editor document with ``sections`` and ``fields``

    Returns:
        Generation-ready form structure

    Raises:
        MappingError: If any field uses an unsupported type, rule or operator
    """
    raw_sections = sorted(
        form_schema.get("sections") or [],
        key=lambda section: section.get("order", 0),
    )
    section_rank = {section.get("id"): rank for rank, section in enumerate(raw_sections)}
    unknown_rank = len(raw_sections)

    raw_fields = [
        raw
        for raw in form_schema.get("fields") or []
        if str(raw.get("type", "")).upper() not in LAYOUT_TYPES
    ]

    def sort_key(indexed: Tuple[int, Dict[str, Any]]):
        index, raw = indexed
        position = raw.get("position") or {}
        rank = section_rank.get(position.get("sectionId"), unknown_rank)
        return (rank, position.get("order", 0), index)

    ordered = [raw for _, raw in sorted(enumerate(raw_fields), key=sort_key)]
    fields = tuple(
        adapt_field(raw, (raw.get("position") or {}).get("order", index))
        for index, raw in enumerate(ordered)
    )

    sections = tuple(
        SectionInfo(
            id=str(section.get("id")),
            title=str(section.get("title", "")),
            order=section.get("order", rank),
            field_ids=tuple(f.id for f in fields if f.section_id == section.get("id")),
        )
        for rank, section in enumerate(raw_sections)
    )

    logger.debug(
        "Adapted form '%s': %d fields in %d sections",
        form_schema.get("name"),
        len(fields),
        len(sections),
    )
    return FormStructure(fields=fields, title=form_schema.get("name"), sections=sections)


def _reverse_rules(field: FieldDescriptor) -> List[Dict[str, Any]]:
    synthesized = {
        (RuleKind.MIN, field.min_value),
        (RuleKind.MAX, field.max_value),
    }
    rules = []
    for rule in field.validation_rules:
        if rule.kind in (RuleKind.MIN, RuleKind.MAX) and (rule.kind, rule.value) in synthesized:
            continue
        entry: Dict[str, Any] = {"type": rule.kind.value}
        if rule.value is not None:
            entry["value"] = rule.value
        if rule.message:
            entry["message"] = rule.message
        rules.append(entry)
    return rules


def _editor_type_for(field: FieldDescriptor) -> str:
    if field.source_type and EDITOR_TYPE_MAP.get(field.source_type) == field.type:
        return field.source_type
    return REVERSE_TYPE_MAP[field.type]


def _sections_preserve_order(structure: FormStructure) -> bool:
    """True when re-sectioning the fields keeps their flattened order."""
    if not structure.sections:
        return False
    ranks = {s.id: rank for rank, s in enumerate(structure.sections)}
    field_ranks = [ranks.get(f.section_id, 0) for f in structure.fields]
    return field_ranks == sorted(field_ranks)


def reverse_adapt(structure: FormStructure) -> Dict[str, Any]:
    """
    Convert a FormStructure back into an editor-compatible document.

    Editor types are restored from ``source_type`` when it still agrees with
    the abstract type; otherwise the primary editor type for the abstract
    type is used. Bounds synthesized by ``adapt`` are returned as ``min`` and
    ``max`` attributes instead of rules.

    Args:
        structure: Form structure, e.g. from document analysis

    Returns:
        Editor document with ``sections`` and positioned ``fields``
    """
    if _sections_preserve_order(structure):
        sections = [
            {"id": s.id, "title": s.title, "order": s.order, "collapsible": False,
             "collapsed": False, "columns": 1}
            for s in structure.sections
        ]
        known_sections = {s.id for s in structure.sections}
        fallback_section = structure.sections[0].id
    else:
        sections = [
            {"id": DEFAULT_SECTION_ID, "title": structure.title or "Section 1",
             "order": 0, "collapsible": False, "collapsed": False, "columns": 1}
        ]
        known_sections = {DEFAULT_SECTION_ID}
        fallback_section = DEFAULT_SECTION_ID

    counters: Dict[str, int] = {}
    fields = []
    for field in structure.fields:
        section_id = field.section_id if field.section_id in known_sections else fallback_section
        order = counters.get(section_id, 0)
        counters[section_id] = order + 1

        entry: Dict[str, Any] = {
            "id": field.id,
            "type": _editor_type_for(field),
            "label": field.label,
            "required": field.required,
            "disabled": False,
            "readonly": False,
            "width": "full",
            "validations": _reverse_rules(field),
            "position": {"sectionId": section_id, "order": order},
        }
        if field.placeholder is not None:
            entry["placeholder"] = field.placeholder
        if field.help_text is not None:
            entry["helpText"] = field.help_text
        if field.default_value is not None:
            entry["defaultValue"] = field.default_value
        if field.is_selection:
            entry["options"] = [{"label": o.label, "value": o.value} for o in field.options]
        if field.type in NUMERIC_TYPES:
            for key, value in (("min", field.min_value), ("max", field.max_value), ("step", field.step)):
                if value is not None:
                    entry[key] = value
        if field.type in UPLOAD_TYPES:
            entry["multiple"] = field.multiple
            if field.accept is not None:
                entry["accept"] = field.accept
            if field.max_file_size is not None:
                entry["maxFileSize"] = field.max_file_size
        if field.conditional:
            entry["conditional"] = {
                "show": field.conditional.visibility == Visibility.SHOW,
                "when": field.conditional.source_field_id,
                "operator": field.conditional.operator.value,
                "value": field.conditional.value,
            }
        fields.append(entry)

    return {
        "id": "",
        "name": structure.title or "Untitled Form",
        "description": "",
        "sections": sections,
        "fields": fields,
    }


def _extracted_type(raw: Any, field_id: str) -> FieldType:
    try:
        return FieldType(str(raw).upper())
    except ValueError:
        # Extracted structures may also use editor names such as FILE_UPLOAD
        if str(raw).upper() in EDITOR_TYPE_MAP:
            return EDITOR_TYPE_MAP[str(raw).upper()]
        raise MappingError(f"Unsupported field type '{raw}' on field '{field_id}'") from None


def from_extracted_structure(data: Dict[str, Any]) -> FormStructure:
    """
    Read a document-analysis result into a FormStructure.

    Accepts either the bare structure or the full analysis result that
    wraps it under ``formStructure``.

    Args:
        data: Extracted structure document

    Returns:
        Form structure with fields in document order

    Raises:
        MappingError: If a field type or rule kind is unsupported
    """
    if "formStructure" in data:
        data = data["formStructure"] or {}

    section_of: Dict[str, str] = {}
    for section in data.get("sections") or []:
        for field_id in section.get("fields") or []:
            section_of.setdefault(str(field_id), str(section.get("id")))

    fields = []
    for index, raw in enumerate(data.get("fields") or []):
        field_id = str(raw.get("id") or f"field-{index + 1}")
        field_type = _extracted_type(raw.get("type", "TEXT"), field_id)
        attributes: Dict[str, Any] = {}
        if field_type in SELECTION_TYPES:
            attributes["options"] = _parse_options(raw.get("options"))
        if field_type in NUMERIC_TYPES:
            attributes["min_value"] = raw.get("min")
            attributes["max_value"] = raw.get("max")
        fields.append(
            FieldDescriptor(
                id=field_id,
                label=str(raw.get("label") or field_id),
                type=field_type,
                required=bool(raw.get("required", False)),
                order=index,
                section_id=section_of.get(field_id),
                default_value=raw.get("defaultValue"),
                placeholder=raw.get("placeholder"),
                help_text=raw.get("helpText"),
                validation_rules=tuple(_parse_rules(raw.get("validationRules"), field_id)),
                conditional=_parse_conditional(raw.get("conditional"), field_id),
                **attributes,
            )
        )

    sections = tuple(
        SectionInfo(
            id=str(section.get("id")),
            title=str(section.get("title", "")),
            order=rank,
            field_ids=tuple(str(f) for f in section.get("fields") or []),
        )
        for rank, section in enumerate(data.get("sections") or [])
    )
    return FormStructure(fields=tuple(fields), title=data.get("title"), sections=sections)


def is_editor_schema(data: Dict[str, Any]) -> bool:
    """Whether a document looks like an editor form (positioned fields)."""
    if "formStructure" in data:
        return False
    fields = data.get("fields") or []
    return "sections" in data and (not fields or any("position" in f for f in fields))


def load_form_structure(data: Dict[str, Any]) -> FormStructure:
    """
    Build a FormStructure from either supported document shape.

    Args:
        data: Editor form document or document-analysis structure

    Returns:
        Form structure

    Raises:
        MappingError: If the document is not a JSON object or uses
            unsupported types
    """
    if not isinstance(data, dict):
        raise MappingError("Form document must be a JSON object")
    if is_editor_schema(data):
        return adapt(data)
    return from_extracted_structure(data)

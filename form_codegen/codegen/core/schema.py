"""
Core form representation for code generation.

Every emitter works from these immutable types. ``FormStructure`` is the
generation-time view of a form: an ordered, flat list of field descriptors
with abstract types, validation rules and optional conditional visibility.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple


class FieldType(Enum):
    """Abstract field types understood by every emitter."""

    TEXT = "TEXT"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    NUMBER = "NUMBER"
    DATE = "DATE"
    CHECKBOX = "CHECKBOX"
    RADIO = "RADIO"
    SELECT = "SELECT"
    MULTI_SELECT = "MULTI_SELECT"
    TEXTAREA = "TEXTAREA"
    FILE = "FILE"


SELECTION_TYPES = frozenset({FieldType.RADIO, FieldType.SELECT, FieldType.MULTI_SELECT})
NUMERIC_TYPES = frozenset({FieldType.NUMBER})
UPLOAD_TYPES = frozenset({FieldType.FILE})
STRING_TYPES = frozenset(
    {
        FieldType.TEXT,
        FieldType.EMAIL,
        FieldType.PHONE,
        FieldType.TEXTAREA,
        FieldType.RADIO,
        FieldType.SELECT,
    }
)
ARRAY_TYPES = frozenset({FieldType.MULTI_SELECT})

DEFAULT_PHONE_PATTERN = r"^[0-9]{10}$"


class RuleKind(Enum):
    """Validation rule kinds, valued with the editor's wire names."""

    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    EMAIL = "email"
    PHONE = "phone"
    MIN = "min"
    MAX = "max"
    CUSTOM = "custom"


LENGTH_RULES = frozenset({RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH})
BOUND_RULES = frozenset({RuleKind.MIN, RuleKind.MAX})
STRING_RULES = frozenset({RuleKind.PATTERN, RuleKind.EMAIL, RuleKind.PHONE})
VALUE_RULES = LENGTH_RULES | BOUND_RULES | {RuleKind.PATTERN}


class Visibility(Enum):
    SHOW = "show"
    HIDE = "hide"


class ConditionOperator(Enum):
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    CONTAINS = "contains"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"


class Category(Enum):
    """Generated file categories, declared in archive order."""

    FRONTEND = "frontend"
    BACKEND = "backend"
    SQL = "sql"
    TESTS = "tests"
    DOCS = "docs"


CATEGORY_ORDER: Tuple[Category, ...] = tuple(Category)


@dataclass(frozen=True)
class FieldOption:
    """A selectable option of a radio/select field."""

    label: str
    value: str


@dataclass(frozen=True)
class ValidationRule:
    """A single validation constraint attached to a field."""

    kind: RuleKind
    value: Any = None
    message: Optional[str] = None


@dataclass(frozen=True)
class ConditionalRule:
    """Show or hide the owning field depending on another field's value."""

    visibility: Visibility
    source_field_id: str
    operator: ConditionOperator
    value: Any = None


def rule_applies(kind: RuleKind, field_type: FieldType) -> bool:
    """
    Check whether a rule kind constrains values of a field type.

    Length rules apply to strings and arrays, bounds to numbers, and
    pattern/email/phone rules to strings. Required and custom rules apply
    to everything.
    """
    if kind in LENGTH_RULES:
        return field_type in STRING_TYPES or field_type in ARRAY_TYPES
    if kind in BOUND_RULES:
        return field_type in NUMERIC_TYPES
    if kind in STRING_RULES:
        return field_type in STRING_TYPES
    return True


def rule_message(rule: ValidationRule, label: str) -> str:
    """Message for a rule, falling back to a generic one per kind."""
    if rule.message:
        return rule.message
    defaults = {
        RuleKind.REQUIRED: f"{label} is required",
        RuleKind.MIN_LENGTH: f"{label} must be at least {rule.value} characters",
        RuleKind.MAX_LENGTH: f"{label} must be at most {rule.value} characters",
        RuleKind.PATTERN: f"{label} has an invalid format",
        RuleKind.EMAIL: "Invalid email",
        RuleKind.PHONE: "Invalid phone",
        RuleKind.MIN: f"Must be at least {rule.value}",
        RuleKind.MAX: f"Must not exceed {rule.value}",
        RuleKind.CUSTOM: f"{label} is invalid",
    }
    return defaults[rule.kind]


@dataclass(frozen=True)
class FieldDescriptor:
    """Represents a single form field in generation-ready form."""

    id: str
    label: str
    type: FieldType
    required: bool = False
    order: int = 0
    section_id: Optional[str] = None
    default_value: Any = None
    placeholder: Optional[str] = None
    help_text: Optional[str] = None

    # Selection types only
    options: Tuple[FieldOption, ...] = ()

    # Numeric types only
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: Optional[float] = None

    # Upload types only
    accept: Optional[str] = None
    max_file_size: Optional[int] = None
    multiple: bool = False

    validation_rules: Tuple[ValidationRule, ...] = ()
    conditional: Optional[ConditionalRule] = None

    # Editor type this descriptor was adapted from, if any
    source_type: Optional[str] = None

    @property
    def is_required(self) -> bool:
        """True when flagged required or carrying a ``required`` rule."""
        return self.required or any(
            rule.kind == RuleKind.REQUIRED for rule in self.validation_rules
        )

    @property
    def required_message(self) -> str:
        """Message used by the single required constraint of this field."""
        for rule in self.validation_rules:
            if rule.kind == RuleKind.REQUIRED and rule.message:
                return rule.message
        return f"{self.label} is required"

    def implied_rules(self) -> List[ValidationRule]:
        """Rules the abstract type carries on its own."""
        if self.type == FieldType.EMAIL:
            return [ValidationRule(RuleKind.EMAIL, message="Invalid email")]
        if self.type == FieldType.PHONE:
            return [
                ValidationRule(
                    RuleKind.PHONE, DEFAULT_PHONE_PATTERN, message="Invalid phone"
                )
            ]
        return []

    def effective_rules(self) -> List[ValidationRule]:
        """
        Resolve the rules emitters should thread, in order.

        Type-implied rules come first; explicit rules follow. Rules sharing a
        kind collapse into one: the last one wins and keeps the position of
        the kind's first occurrence. ``required`` rules are excluded since
        they fold into ``is_required``. Rules that do not apply to the
        field's type, and length, bound or pattern rules without a value,
        are dropped.

        Returns:
            De-duplicated rules applicable to this field
        """
        resolved: Dict[RuleKind, ValidationRule] = {}
        for rule in self.implied_rules() + list(self.validation_rules):
            if rule.kind == RuleKind.REQUIRED:
                continue
            if not rule_applies(rule.kind, self.type):
                continue
            if rule.kind in VALUE_RULES and rule.value is None:
                continue
            if rule.kind == RuleKind.PHONE and rule.value is None:
                rule = ValidationRule(
                    RuleKind.PHONE, DEFAULT_PHONE_PATTERN, rule.message or "Invalid phone"
                )
            resolved[rule.kind] = rule
        return list(resolved.values())

    @property
    def is_selection(self) -> bool:
        return self.type in SELECTION_TYPES

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the document-intelligence field shape."""
        data: Dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
        }
        if self.placeholder:
            data["placeholder"] = self.placeholder
        if self.help_text:
            data["helpText"] = self.help_text
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.options:
            data["options"] = [
                {"label": option.label, "value": option.value} for option in self.options
            ]
        if self.validation_rules:
            data["validationRules"] = [
                {
                    key: value
                    for key, value in (
                        ("type", rule.kind.value),
                        ("value", rule.value),
                        ("message", rule.message),
                    )
                    if value is not None
                }
                for rule in self.validation_rules
            ]
        if self.conditional:
            data["conditional"] = {
                "show": self.conditional.visibility == Visibility.SHOW,
                "when": self.conditional.source_field_id,
                "operator": self.conditional.operator.value,
                "value": self.conditional.value,
            }
        return data


@dataclass(frozen=True)
class SectionInfo:
    """Display metadata about one editor section."""

    id: str
    title: str
    order: int
    field_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FormStructure:
    """Ordered, flat, generation-ready view of a form."""

    fields: Tuple[FieldDescriptor, ...] = ()
    title: Optional[str] = None
    sections: Tuple[SectionInfo, ...] = ()

    def get_field(self, field_id: str) -> Optional[FieldDescriptor]:
        """Get field by id."""
        for candidate in self.fields:
            if candidate.id == field_id:
                return candidate
        return None

    def index_of(self, field_id: str) -> int:
        """Position of a field in flattened order, or -1."""
        for index, candidate in enumerate(self.fields):
            if candidate.id == field_id:
                return index
        return -1

    @property
    def has_conditionals(self) -> bool:
        return any(candidate.conditional for candidate in self.fields)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the document-intelligence structure shape."""
        data: Dict[str, Any] = {"fields": [f.to_dict() for f in self.fields]}
        if self.title:
            data["title"] = self.title
        return data


@dataclass(frozen=True)
class GeneratedFile:
    """One generated artifact. Immutable once produced."""

    file_name: str
    content: str
    language: str
    category: Category
    relative_path: Optional[str] = None

    @property
    def archive_path(self) -> str:
        """Path of this file inside the archive or output directory."""
        if self.relative_path is None:
            return f"{self.category.value}/{self.file_name}"
        if not self.relative_path:
            return self.file_name
        return f"{self.relative_path.rstrip('/')}/{self.file_name}"


@dataclass(frozen=True)
class GenerationWarning:
    """Non-fatal problem reported alongside generated output."""

    code: str
    message: str
    field_id: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class GeneratedCodeBundle:
    """All files produced for one project, grouped by category."""

    project_name: str
    files: Mapping[Category, Tuple[GeneratedFile, ...]]
    generated_at: datetime
    options: Any = None
    warnings: Tuple[GenerationWarning, ...] = ()

    @property
    def file_count(self) -> int:
        return sum(len(self.files.get(category, ())) for category in CATEGORY_ORDER)

    def iter_files(self) -> Iterator[GeneratedFile]:
        """Yield every file in category order, then insertion order."""
        for category in CATEGORY_ORDER:
            yield from self.files.get(category, ())

    def files_in(self, category: Category) -> Tuple[GeneratedFile, ...]:
        return tuple(self.files.get(category, ()))

    def summary(self) -> Dict[str, Any]:
        """Plain-data summary used by the CLI and README."""
        return {
            "project_name": self.project_name,
            "generated_at": self.generated_at.isoformat(),
            "file_count": self.file_count,
            "files": {
                category.value: [f.archive_path for f in self.files.get(category, ())]
                for category in CATEGORY_ORDER
            },
            "warnings": [warning.message for warning in self.warnings],
        }

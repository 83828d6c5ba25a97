"""
Naming utilities for safe code generation.

Provides the case conversions shared by every emitter and a sanitizer that
turns free-form field labels into legal, unique identifiers for one form.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ALNUM = re.compile(r"[A-Za-z0-9]+")


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name


def split_words(raw: str) -> List[str]:
    """
    Split a raw string into words.

    Anything outside ``[A-Za-z0-9]`` is a separator, and so are case
    boundaries (``fullName`` -> ``full``, ``Name``; ``HTTPServer`` ->
    ``HTTP``, ``Server``).

    Args:
        raw: Arbitrary input, possibly empty

    Returns:
        Non-empty word tokens in input order
    """
    if not raw:
        return []
    text = _ACRONYM_BOUNDARY.sub(r"\1 \2", raw)
    text = _CASE_BOUNDARY.sub(r"\1 \2", text)
    return [word for word in _NON_ALNUM.split(text) if word]


def to_snake_case(raw: str) -> str:
    """Convert to snake_case."""
    return "_".join(word.lower() for word in split_words(raw))


def to_kebab_case(raw: str) -> str:
    """Convert to kebab-case."""
    return "-".join(word.lower() for word in split_words(raw))


def _capitalize(word: str) -> str:
    return word[0].upper() + word[1:].lower()


def to_pascal_case(raw: str) -> str:
    """
    Convert to PascalCase.

    A purely alphanumeric input that does not start lowercase is already
    PascalCase and comes back unchanged: joined single-letter words (``AB``)
    cannot be told apart from an acronym.
    """
    if _ALNUM.fullmatch(raw) and not raw[0].islower():
        return raw
    return "".join(_capitalize(word) for word in split_words(raw))


def to_camel_case(raw: str) -> str:
    """Convert to camelCase; alphanumeric input not starting uppercase is kept."""
    if _ALNUM.fullmatch(raw) and not raw[0].isupper():
        return raw
    words = split_words(raw)
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


_CONVERTERS = {
    NamingCase.SNAKE_CASE: to_snake_case,
    NamingCase.CAMEL_CASE: to_camel_case,
    NamingCase.PASCAL_CASE: to_pascal_case,
    NamingCase.KEBAB_CASE: to_kebab_case,
}


def convert_case(raw: str, target_case: NamingCase) -> str:
    """Convert ``raw`` to ``target_case``."""
    return _CONVERTERS[target_case](raw)


def type_identifier(raw: str, fallback: str) -> str:
    """PascalCase type name for a project or resource; never starts with a digit."""
    name = to_pascal_case(raw)
    if not name:
        return fallback
    return fallback + name if name[0].isdigit() else name


class NameSanitizer:
    """Turns labels into legal identifiers that are unique within one scope."""

    def __init__(
        self,
        target_case: NamingCase,
        reserved_words: Optional[Set[str]] = None,
        fallback: str = "field",
    ):
        """
        Initialize name sanitizer.

        Args:
            target_case: Case style every produced name uses
            reserved_words: Words that may not be used verbatim (case-insensitive)
            fallback: Word used when a label has no usable characters or
                starts with a digit
        """
        self.target_case = target_case
        self.reserved_words = {word.lower() for word in (reserved_words or set())}
        self.fallback = fallback
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str) -> str:
        """
        Sanitize a name for use as an identifier.

        Args:
            name: Original label or name

        Returns:
            Identifier in the target case, not reserved and not used before
        """
        words = split_words(name)
        if not words or words[0][0].isdigit():
            words.insert(0, self.fallback)
        converted = convert_case(" ".join(words), self.target_case)

        if converted.lower() in self.reserved_words:
            converted = convert_case(" ".join(words + ["value"]), self.target_case)

        final_name = converted
        counter = 2
        while final_name.lower() in self._used_names:
            final_name = self._with_counter(converted, counter)
            counter += 1

        self._used_names.add(final_name.lower())
        return final_name

    def _with_counter(self, name: str, counter: int) -> str:
        if self.target_case in (NamingCase.SNAKE_CASE, NamingCase.KEBAB_CASE):
            separator = "_" if self.target_case == NamingCase.SNAKE_CASE else "-"
            return f"{name}{separator}{counter}"
        return f"{name}{counter}"

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name.lower())

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()


# Identifiers every generated table/entity already declares.
AUDIT_NAMES = ("id", "created at", "updated at", "created by", "updated by", "is deleted")

JAVASCRIPT_RESERVED_WORDS = {
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "yield", "let", "static",
    "implements", "interface", "package", "private", "protected", "public",
    "await", "arguments", "eval",
}

CSHARP_RESERVED_WORDS = {
    "abstract", "base", "bool", "byte", "char", "checked", "class", "const",
    "decimal", "default", "delegate", "double", "event", "explicit", "extern",
    "fixed", "float", "goto", "implicit", "int", "internal", "lock", "long",
    "namespace", "object", "operator", "out", "override", "params", "readonly",
    "ref", "sbyte", "sealed", "short", "sizeof", "stackalloc", "string",
    "struct", "uint", "ulong", "unchecked", "unsafe", "ushort", "using",
    "virtual", "volatile",
}

SQL_RESERVED_WORDS = {
    "all", "and", "as", "asc", "between", "by", "check", "column", "constraint",
    "create", "date", "default", "delete", "desc", "distinct", "drop", "from",
    "group", "having", "in", "index", "insert", "into", "is", "join", "key",
    "like", "limit", "not", "null", "offset", "on", "or", "order", "primary",
    "references", "select", "set", "table", "to", "union", "unique", "update",
    "user", "values", "where",
}


def create_camel_sanitizer() -> NameSanitizer:
    """Sanitizer for JavaScript/TypeScript property names."""
    sanitizer = NameSanitizer(NamingCase.CAMEL_CASE, JAVASCRIPT_RESERVED_WORDS)
    for name in AUDIT_NAMES:
        sanitizer.add_used_name(to_camel_case(name))
    return sanitizer


def create_pascal_sanitizer() -> NameSanitizer:
    """Sanitizer for C# properties and T-SQL columns."""
    sanitizer = NameSanitizer(
        NamingCase.PASCAL_CASE, CSHARP_RESERVED_WORDS, fallback="Field"
    )
    for name in AUDIT_NAMES:
        sanitizer.add_used_name(to_pascal_case(name))
    return sanitizer


def create_snake_sanitizer() -> NameSanitizer:
    """Sanitizer for generic SQL column names."""
    sanitizer = NameSanitizer(NamingCase.SNAKE_CASE, SQL_RESERVED_WORDS)
    for name in AUDIT_NAMES:
        sanitizer.add_used_name(to_snake_case(name))
    return sanitizer


@dataclass(frozen=True)
class FieldNames:
    """Identifiers of one field, consistent across every target."""

    field_id: str
    camel: str
    pascal: str
    snake: str
    kebab: str


def build_field_names(fields: Iterable) -> List[FieldNames]:
    """
    Compute identifiers for every field of a form.

    Args:
        fields: Field descriptors in flattened order (anything with ``id``
            and ``label`` attributes)

    Returns:
        One ``FieldNames`` per field, in the same order
    """
    camel = create_camel_sanitizer()
    pascal = create_pascal_sanitizer()
    snake = create_snake_sanitizer()

    names = []
    for field in fields:
        label = field.label or field.id
        snake_name = snake.sanitize_name(label)
        names.append(
            FieldNames(
                field_id=field.id,
                camel=camel.sanitize_name(label),
                pascal=pascal.sanitize_name(label),
                snake=snake_name,
                kebab=snake_name.replace("_", "-"),
            )
        )
    return names


def names_by_id(fields: Iterable) -> Dict[str, FieldNames]:
    """Same as ``build_field_names`` keyed by field id."""
    return {names.field_id: names for names in build_field_names(fields)}

"""
Core code generation components.

Provides the form representation, naming, type mapping, configuration and
template plumbing shared by all target emitters.
"""

from .adapter import adapt, from_extracted_structure, load_form_structure, reverse_adapt
from .conditions import validate_conditional_rules
from .config import ConfigError, ConfigManager, GenerationOptions, load_options
from .generator import CodeEmitter, GeneratorError, MappingError
from .naming import (
    FieldNames,
    NameSanitizer,
    NamingCase,
    build_field_names,
    convert_case,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)
from .schema import (
    Category,
    FieldDescriptor,
    FieldType,
    FormStructure,
    GeneratedCodeBundle,
    GeneratedFile,
    GenerationWarning,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Form representation
    "Category",
    "FieldDescriptor",
    "FieldType",
    "FormStructure",
    "GeneratedCodeBundle",
    "GeneratedFile",
    "GenerationWarning",
    # Editor adapter
    "from_extracted_structure",
    "adapt",
    "load_form_structure",
    "reverse_adapt",
    "validate_conditional_rules",
    # Base emitter interface
    "CodeEmitter",
    "GeneratorError",
    "MappingError",
    # Naming utilities
    "FieldNames",
    "NameSanitizer",
    "NamingCase",
    "build_field_names",
    "convert_case",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_snake_case",
    # Configuration system
    "ConfigError",
    "ConfigManager",
    "GenerationOptions",
    "load_options",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]

"""
Form code generation.

Turns a normalized form into a frontend component, SQL schema, backend API
and project documents, and packages the result.
"""

from .assembler import ProjectAssembler, assemble
from .core.adapter import adapt, load_form_structure, reverse_adapt
from .core.config import ConfigManager, GenerationOptions, load_options
from .core.generator import CodeEmitter, GeneratorError, MappingError
from .core.naming import (
    NamingCase,
    convert_case,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)
from .core.schema import (
    Category,
    FieldDescriptor,
    FieldType,
    FormStructure,
    GeneratedCodeBundle,
    GeneratedFile,
    GenerationWarning,
)
from .packager import PackagingError, package_bundle, suggest_archive_name, write_bundle
from .registry import (
    EmitterRegistry,
    RegistryError,
    emit_backend,
    get_emitter,
    get_registry,
    list_supported_targets,
    resolve_options,
)
from .targets.react import emit_frontend
from .targets.sql import emit_sql_schema

__all__ = [
    "Category",
    "CodeEmitter",
    "ConfigManager",
    "EmitterRegistry",
    "FieldDescriptor",
    "FieldType",
    "FormStructure",
    "GeneratedCodeBundle",
    "GeneratedFile",
    "GenerationOptions",
    "GenerationWarning",
    "GeneratorError",
    "MappingError",
    "NamingCase",
    "PackagingError",
    "ProjectAssembler",
    "RegistryError",
    "adapt",
    "assemble",
    "convert_case",
    "emit_backend",
    "emit_frontend",
    "emit_sql_schema",
    "get_emitter",
    "get_registry",
    "list_supported_targets",
    "load_form_structure",
    "load_options",
    "package_bundle",
    "resolve_options",
    "reverse_adapt",
    "suggest_archive_name",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_snake_case",
    "write_bundle",
]

"""
form-codegen: turn form designer documents into runnable projects.

Generates a React form component, a SQL schema, a backend API and project
documents from one form definition, and packages them as a ZIP archive.
"""

from typing import Any, Dict, Optional

from .codegen import (
    GeneratedCodeBundle,
    GenerationOptions,
    adapt,
    assemble,
    emit_backend,
    emit_frontend,
    emit_sql_schema,
    load_form_structure,
    package_bundle,
    reverse_adapt,
    suggest_archive_name,
    write_bundle,
)
from .logging_config import configure_logging, get_logger

__version__ = "0.1.0"

DEFAULT_PROJECT_NAME = "Generated Form"


def generate_project(
    data: Dict[str, Any],
    project_name: Optional[str] = None,
    options: Optional[GenerationOptions] = None,
    config: Optional[Dict[str, Any]] = None,
) -> GeneratedCodeBundle:
    """
    Generate a project bundle from a form document.

    Args:
        data: Editor form document or document-analysis structure
        project_name: Project name; defaults to the form title
        options: Generation options
        config: Emitter configuration (e.g. ``page_size``)

    Returns:
        Assembled bundle
    """
    structure = load_form_structure(data)
    name = project_name or structure.title or DEFAULT_PROJECT_NAME
    return assemble(structure, name, options, config)


__all__ = [
    "GeneratedCodeBundle",
    "GenerationOptions",
    "adapt",
    "assemble",
    "configure_logging",
    "emit_backend",
    "emit_frontend",
    "emit_sql_schema",
    "generate_project",
    "get_logger",
    "package_bundle",
    "reverse_adapt",
    "suggest_archive_name",
    "write_bundle",
    "__version__",
]

"""
Project assembly.

Runs every emitter the options select against one form and collects the
results, plus the project documents, into a single immutable bundle.
"""

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple

from ..logging_config import get_logger
from .core.conditions import validate_conditional_rules
from .core.config import BackendFramework, GenerationOptions
from .core.generator import GeneratorError
from .core.naming import build_field_names, names_by_id, to_kebab_case, type_identifier
from .core.schema import (
    CATEGORY_ORDER,
    Category,
    FieldDescriptor,
    FormStructure,
    GeneratedCodeBundle,
    GeneratedFile,
    GenerationWarning,
    RuleKind,
    Visibility,
)
from .core.templates import TemplateError, get_default_template_engine
from .core.type_maps import typescript_type
from .registry import emit_backend, get_emitter, resolve_options

logger = get_logger(__name__)

DOCS_DIR = "docs"

_BACKEND_INSTRUCTIONS = {
    BackendFramework.EXPRESS: "```bash\ncd backend\nnpm install\nnpm run dev\n```",
    BackendFramework.DOTNET: "```bash\ncd backend\ndotnet restore\ndotnet run\n```",
}


def _markdown_cell(text: Any) -> str:
    return str(text).replace("|", "\\|").replace("\n", " ")


def _describe_rules(field: FieldDescriptor) -> str:
    parts = []
    for rule in field.effective_rules():
        if rule.kind == RuleKind.CUSTOM:
            parts.append("custom (not enforced)")
        elif rule.value is None:
            parts.append(rule.kind.value)
        else:
            parts.append(f"{rule.kind.value}={rule.value}")
    return _markdown_cell(", ".join(parts))


def _features(options: GenerationOptions) -> List[str]:
    features = [
        f"Frontend: {options.template.value}",
        f"Form state: {options.form_library.value}",
        f"Validation: {options.validation_library.value}",
        f"Styling: {options.styling.value}",
    ]
    if options.include_backend:
        features.append(
            f"Backend: {options.backend_framework.value} with a {options.sql_dialect.value} schema"
        )
    if options.include_tests:
        features.append("Component tests")
    if options.include_documentation:
        features.append("Field and API reference documents")
    return features


class ProjectAssembler:
    """Builds a ``GeneratedCodeBundle`` from a form and generation options."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.engine = get_default_template_engine()

    def assemble(
        self,
        structure: FormStructure,
        project_name: str,
        options: Optional[GenerationOptions] = None,
    ) -> GeneratedCodeBundle:
        """
        Generate every file for one project.

        Args:
            structure: Normalized form
            project_name: Names the component, table and API resource
            options: Requested options; unsupported values fall back

        Returns:
            Bundle holding every category, empty ones included

        Raises:
            GeneratorError: If any emitter fails; no partial bundle is built
            TemplateError: If a document template fails to render
        """
        resolved, warnings = resolve_options(options or GenerationOptions())
        structure, condition_warnings = validate_conditional_rules(structure)
        warnings.extend(condition_warnings)

        logger.info(
            "Assembling %s (%d fields, backend=%s)",
            project_name,
            len(structure.fields),
            resolved.include_backend,
        )

        files: Dict[Category, List[GeneratedFile]] = {category: [] for category in CATEGORY_ORDER}
        try:
            self._collect(files, get_emitter("react", self.config).generate(structure, project_name, resolved))
            if resolved.include_backend:
                self._collect(
                    files, get_emitter("sql", self.config).generate(structure, project_name, resolved)
                )
                self._collect(files, emit_backend(structure, project_name, resolved, self.config))
            if resolved.include_documentation:
                self._collect(files, self.render_documentation(structure, project_name, resolved))
            self._collect(files, [self.render_readme(structure, project_name, resolved, files, warnings)])
        except (GeneratorError, TemplateError) as e:
            logger.error("Assembly of %s failed: %s", project_name, e)
            raise

        bundle = GeneratedCodeBundle(
            project_name=project_name,
            files=MappingProxyType({category: tuple(files[category]) for category in CATEGORY_ORDER}),
            generated_at=datetime.now(timezone.utc),
            options=resolved,
            warnings=tuple(warnings),
        )
        logger.info("Assembled %d files for %s", bundle.file_count, project_name)
        return bundle

    def _collect(self, files: Dict[Category, List[GeneratedFile]], generated: List[GeneratedFile]):
        for generated_file in generated:
            files[generated_file.category].append(generated_file)

    def render_readme(
        self,
        structure: FormStructure,
        project_name: str,
        options: GenerationOptions,
        files: Dict[Category, List[GeneratedFile]],
        warnings: List[GenerationWarning],
    ) -> GeneratedFile:
        """Project README summarizing options, features and file layout."""
        backend_instructions = ""
        if options.include_backend:
            sql_paths = [f.archive_path for f in files[Category.SQL]]
            backend_instructions = _BACKEND_INSTRUCTIONS[options.backend_framework]
            if sql_paths:
                backend_instructions = (
                    f"Run `{sql_paths[0]}` against your database before starting the API.\n\n"
                    + backend_instructions
                )

        context = {
            "project_name": project_name,
            "field_count": len(structure.fields),
            "options": [
                (name, "-" if value is None else str(value).lower() if isinstance(value, bool) else value)
                for name, value in options.to_dict().items()
            ],
            "features": _features(options),
            "files": [
                (category.value, [f.archive_path for f in files[category]])
                for category in CATEGORY_ORDER
                if files[category]
            ],
            "warnings": [warning.message for warning in warnings],
            "has_frontend": bool(files[Category.FRONTEND]),
            "backend_instructions": backend_instructions,
        }
        content = self.engine.render_template("readme", context)
        return GeneratedFile("README.md", content, "markdown", Category.DOCS, relative_path="")

    def render_documentation(
        self, structure: FormStructure, project_name: str, options: GenerationOptions
    ) -> List[GeneratedFile]:
        """Field reference, plus the API reference when a backend is generated."""
        documents = [
            GeneratedFile(
                "FORM_FIELDS.md",
                self.render_field_reference(structure, project_name),
                "markdown",
                Category.DOCS,
                relative_path=DOCS_DIR,
            )
        ]
        if options.include_backend:
            documents.append(
                GeneratedFile(
                    "API.md",
                    self.render_api_reference(structure, project_name, options),
                    "markdown",
                    Category.DOCS,
                    relative_path=DOCS_DIR,
                )
            )
        return documents

    def render_field_reference(self, structure: FormStructure, project_name: str) -> str:
        lookup = names_by_id(structure.fields)
        rows = []
        conditionals = []
        for position, (field, names) in enumerate(
            zip(structure.fields, build_field_names(structure.fields)), start=1
        ):
            rows.append(
                {
                    "position": position,
                    "label": _markdown_cell(field.label),
                    "identifier": names.camel,
                    "type": field.type.value,
                    "required": field.is_required,
                    "rules": _describe_rules(field),
                }
            )
            rule = field.conditional
            if rule is not None and rule.source_field_id in lookup:
                verb = "shown" if rule.visibility == Visibility.SHOW else "hidden"
                conditionals.append(
                    f"`{names.camel}` is {verb} when `{lookup[rule.source_field_id].camel}` "
                    f"{rule.operator.value} '{rule.value}'"
                )

        context = {
            "title": structure.title or project_name,
            "rows": rows,
            "conditionals": conditionals,
        }
        return self.engine.render_template("field_reference", context)

    def render_api_reference(
        self, structure: FormStructure, project_name: str, options: GenerationOptions
    ) -> str:
        resource = type_identifier(project_name, "FormSubmission")
        page_size = self.config.get("page_size", 10)
        if options.backend_framework == BackendFramework.EXPRESS:
            base_path = f"/api/{to_kebab_case(resource)}"
            list_query = f"?page=1&limit={page_size}"
        else:
            base_path = f"/api/{resource}"
            list_query = f"?pageNumber=1&pageSize={page_size}"

        rows = [
            {"name": names.camel, "type": typescript_type(field.type), "required": field.is_required}
            for field, names in zip(structure.fields, build_field_names(structure.fields))
        ]
        context = {
            "resource": resource,
            "resource_label": resource,
            "base_path": base_path,
            "list_query": list_query,
            "rows": rows,
        }
        return self.engine.render_template("api_reference", context)


def assemble(
    structure: FormStructure,
    project_name: str,
    options: Optional[GenerationOptions] = None,
    config: Optional[Dict[str, Any]] = None,
) -> GeneratedCodeBundle:
    """Assemble a project bundle with a fresh ``ProjectAssembler``."""
    return ProjectAssembler(config).assemble(structure, project_name, options)


def summarize_categories(bundle: GeneratedCodeBundle) -> List[Tuple[str, int]]:
    """(category, file count) pairs in archive order."""
    return [(category.value, len(bundle.files_in(category))) for category in CATEGORY_ORDER]

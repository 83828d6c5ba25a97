"""
Base emitter interface for all code generation targets.

Defines the contract every target emitter (React, SQL, Express, .NET)
implements, plus the error types shared by the generation pipeline.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .schema import Category, FormStructure, GeneratedFile
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class MappingError(GeneratorError):
    """A field type, rule, operator or option has no corresponding emitter rule."""

    pass


class CodeEmitter(ABC):
    """Abstract base class for all target emitters."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize emitter with optional configuration."""
        self.config = config or {}
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Register this emitter's in-memory templates."""
        self._template_engine = create_template_engine()
        for name, source in self.get_templates().items():
            self._template_engine.add_template(name, source)

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Return the name of the target (e.g., 'react', 'tsql')."""
        pass

    @property
    @abstractmethod
    def category(self) -> Category:
        """Return the default category of files this emitter produces."""
        pass

    def get_templates(self) -> Dict[str, str]:
        """
        Return the file skeleton templates this emitter renders.

        Returns:
            Mapping of template name to Jinja2 source
        """
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this emitter."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(
        self, structure: FormStructure, project_name: str, options: Any
    ) -> List[GeneratedFile]:
        """
        Generate every file this target contributes.

        Args:
            structure: Normalized form
            project_name: Human-readable project name
            options: Resolved GenerationOptions

        Returns:
            Generated files in emission order
        """
        pass

    def validate_structure(self, structure: FormStructure) -> List[str]:
        """
        Check a form for issues worth logging before generation.

        Args:
            structure: Form to inspect

        Returns:
            List of messages (empty if no issues)
        """
        messages = []
        if not structure.fields:
            messages.append("Form has no fields")

        seen = set()
        for field in structure.fields:
            if field.id in seen:
                messages.append(f"Duplicate field id '{field.id}'")
            seen.add(field.id)
            if field.is_selection and not field.options:
                messages.append(f"Selection field '{field.id}' has no options")

        return messages

    def format_code(self, code: str) -> str:
        """
        Normalize whitespace of generated code.

        Args:
            code: Raw generated code

        Returns:
            Code without trailing spaces, at most two consecutive blank
            lines, and exactly one trailing newline
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Registered template name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def make_file(
        self,
        file_name: str,
        content: str,
        language: str,
        relative_path: Optional[str] = None,
        category: Optional[Category] = None,
    ) -> GeneratedFile:
        """Build a GeneratedFile with formatted content."""
        logger.debug("%s emitted %s", self.target_name, file_name)
        return GeneratedFile(
            file_name=file_name,
            content=self.format_code(content),
            language=language,
            category=category or self.category,
            relative_path=relative_path,
        )

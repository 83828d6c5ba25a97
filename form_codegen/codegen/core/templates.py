"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from typing import Any, Dict

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError as JinjaError
from jinja2 import select_autoescape

from .naming import to_camel_case, to_kebab_case, to_pascal_case, to_snake_case


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self):
        """Initialize template engine with an empty in-memory loader."""
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        self._env = Environment(
            loader=DictLoader({}),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        # Add custom filters for code generation
        self._env.filters["snake_case"] = to_snake_case
        self._env.filters["kebab_case"] = to_kebab_case
        self._env.filters["camel_case"] = to_camel_case
        self._env.filters["pascal_case"] = to_pascal_case
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of a registered template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except JinjaError as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._env.loader.mapping[name] = content

    def template_exists(self, name: str) -> bool:
        """Check if a template is registered."""
        return name in self._env.loader.mapping

    # Template filters for code generation

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Indent all non-blank lines in a string."""
        indent = " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def create_template_engine() -> TemplateEngine:
    """Create a fresh template engine."""
    return TemplateEngine()


# Built-in templates for project-level documents
README_TEMPLATE = """# {{ project_name }}

Generated by form-codegen from a form with {{ field_count }} field{{ "" if field_count == 1 else "s" }}.

## Selected options

| Option | Value |
|---|---|
{% for name, value in options %}
| {{ name }} | {{ value }} |
{% endfor %}

## Features

{% for feature in features %}
- {{ feature }}
{% endfor %}

## Files

{% for category, paths in files %}
### {{ category }}

{% for path in paths %}
- `{{ path }}`
{% endfor %}

{% endfor %}
{% if warnings %}
## Warnings

{% for warning in warnings %}
- {{ warning }}
{% endfor %}
{% endif %}
## Getting started

{% if has_frontend %}
```bash
cd frontend
npm install
npm run dev
```
{% endif %}
{% if backend_instructions %}

{{ backend_instructions }}
{% endif %}
"""

FIELD_REFERENCE_TEMPLATE = """# {{ title }} field reference

| # | Field | Identifier | Type | Required | Rules |
|---|---|---|---|---|---|
{% for row in rows %}
| {{ row.position }} | {{ row.label }} | `{{ row.identifier }}` | {{ row.type }} | {{ "yes" if row.required else "no" }} | {{ row.rules or "-" }} |
{% endfor %}
{% if conditionals %}

## Conditional visibility

{% for line in conditionals %}
- {{ line }}
{% endfor %}
{% endif %}
"""

API_REFERENCE_TEMPLATE = """# {{ resource }} API

Base path: `{{ base_path }}`

Every response uses the envelope `{ success, data }` on success and
`{ success: false, message, error }` on failure.

| Method | Path | Description | Success |
|---|---|---|---|
| POST | `{{ base_path }}` | Create a {{ resource_label }} | 201 |
| GET | `{{ base_path }}{{ list_query }}` | List {{ resource_label }} records | 200 |
| GET | `{{ base_path }}/{id}` | Fetch one {{ resource_label }} | 200, 404 |
| PUT | `{{ base_path }}/{id}` | Update a {{ resource_label }} | 200, 404 |
| DELETE | `{{ base_path }}/{id}` | Delete a {{ resource_label }} | 200, 404 |

## Payload

| Property | Type | Required |
|---|---|---|
{% for row in rows %}
| `{{ row.name }}` | {{ row.type }} | {{ "yes" if row.required else "no" }} |
{% endfor %}
"""

# Default template engine instance
_default_engine = None


def get_default_template_engine() -> TemplateEngine:
    """Get the default template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = TemplateEngine()

        # Add built-in templates
        _default_engine.add_template("readme", README_TEMPLATE)
        _default_engine.add_template("field_reference", FIELD_REFERENCE_TEMPLATE)
        _default_engine.add_template("api_reference", API_REFERENCE_TEMPLATE)

    return _default_engine

"""
Configuration management for code generation.

Handles loading and merging generation options from presets, JSON files and
explicit overrides, with validation of the resulting option set.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from ...logging_config import get_logger
from .generator import MappingError
from .naming import to_snake_case, type_identifier

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class FrontendTemplate(Enum):
    REACT_TYPESCRIPT = "react-typescript"
    REACT_JAVASCRIPT = "react-javascript"
    REACT_NATIVE = "react-native"
    VUE = "vue"
    ANGULAR = "angular"


class FormLibrary(Enum):
    NONE = "none"
    FORMIK = "formik"
    REACT_HOOK_FORM = "react-hook-form"


class ValidationLibrary(Enum):
    YUP = "yup"
    ZOD = "zod"
    IMPERATIVE = "imperative"
    CLASS_VALIDATOR = "class-validator"


class Styling(Enum):
    BOOTSTRAP = "bootstrap"
    TAILWIND = "tailwind"
    MATERIAL = "material"
    CSS = "css"


class BackendFramework(Enum):
    EXPRESS = "express"
    DOTNET = "dotnet"
    NESTJS = "nestjs"
    FASTAPI = "fastapi"
    DJANGO = "django"
    SPRING_BOOT = "spring-boot"


class SqlDialect(Enum):
    GENERIC = "generic"
    TSQL = "tsql"


def table_name_for(raw: str, dialect: SqlDialect) -> str:
    """
    Table name for a resource, shared by the schema script and every backend.

    T-SQL tables are PascalCase, generic tables snake_case. Names that are
    empty or would start with a digit get a ``FormData`` / ``form_data``
    prefix.
    """
    if dialect == SqlDialect.TSQL:
        return type_identifier(raw, "FormData")
    name = to_snake_case(raw)
    if not name:
        return "form_data"
    return f"form_data_{name}" if name[0].isdigit() else name


@dataclass(frozen=True)
class GenerationOptions:
    """Everything that selects what gets generated."""

    template: Optional[FrontendTemplate] = FrontendTemplate.REACT_TYPESCRIPT
    form_library: Optional[FormLibrary] = FormLibrary.FORMIK
    validation_library: Optional[ValidationLibrary] = ValidationLibrary.YUP
    styling: Optional[Styling] = Styling.BOOTSTRAP
    include_backend: bool = False
    backend_framework: Optional[BackendFramework] = None
    sql_dialect: Optional[SqlDialect] = None
    include_tests: bool = False
    include_documentation: bool = False

    @property
    def is_typescript(self) -> bool:
        return self.template != FrontendTemplate.REACT_JAVASCRIPT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationOptions":
        """
        Build options from plain data.

        Keys may be snake_case or the editor's camelCase. Enum values may be
        given by value (``"react-hook-form"``) or by name
        (``"REACT_HOOK_FORM"``). Unknown keys are ignored.

        Raises:
            MappingError: If an enum option has an unsupported value
        """
        kwargs: Dict[str, Any] = {}
        for option in fields(cls):
            raw = _lookup(data, option.name)
            if raw is _MISSING:
                continue
            enum_type = _OPTION_ENUMS.get(option.name)
            if enum_type is None:
                kwargs[option.name] = bool(raw)
            else:
                kwargs[option.name] = parse_enum(enum_type, raw, option.name)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible data."""
        data = {}
        for option in fields(self):
            value = getattr(self, option.name)
            data[option.name] = value.value if isinstance(value, Enum) else value
        return data

    def merged(self, overrides: Dict[str, Any]) -> "GenerationOptions":
        """Return a copy with ``overrides`` applied."""
        parsed = GenerationOptions.from_dict(overrides)
        changes = {
            option.name: getattr(parsed, option.name)
            for option in fields(self)
            if _lookup(overrides, option.name) is not _MISSING
        }
        return replace(self, **changes)


_MISSING = object()

_OPTION_ENUMS: Dict[str, Type[Enum]] = {
    "template": FrontendTemplate,
    "form_library": FormLibrary,
    "validation_library": ValidationLibrary,
    "styling": Styling,
    "backend_framework": BackendFramework,
    "sql_dialect": SqlDialect,
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _lookup(data: Dict[str, Any], name: str) -> Any:
    for key in (name, _camel(name)):
        if key in data:
            return data[key]
    return _MISSING


def parse_enum(enum_type: Type[Enum], raw: Any, option: str = "option") -> Optional[Enum]:
    """
    Parse an enum option by value or by name.

    Raises:
        MappingError: If ``raw`` matches no member
    """
    if raw is None or isinstance(raw, enum_type):
        return raw
    text = str(raw).strip()
    for member in enum_type:
        if text.lower() == member.value or text.upper().replace("-", "_") == member.name:
            return member
    choices = ", ".join(member.value for member in enum_type)
    raise MappingError(f"Unsupported {option} '{raw}'. Choose one of: {choices}")


class ConfigManager:
    """Manages option presets, config files and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._presets: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load the built-in presets."""
        self._presets["default"] = {}

        self._presets["minimal"] = {
            "form_library": "none",
            "validation_library": "imperative",
            "styling": "css",
        }

        self._presets["full-stack-dotnet"] = {
            "include_backend": True,
            "backend_framework": "dotnet",
            "sql_dialect": "tsql",
            "include_tests": True,
            "include_documentation": True,
        }

        self._presets["full-stack-express"] = {
            "form_library": "react-hook-form",
            "validation_library": "zod",
            "styling": "tailwind",
            "include_backend": True,
            "backend_framework": "express",
            "sql_dialect": "generic",
            "include_tests": True,
            "include_documentation": True,
        }

    def get_options(
        self,
        preset: str = "default",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GenerationOptions:
        """
        Get complete generation options.

        Args:
            preset: Name of a built-in preset
            custom_config: Overrides applied last
            config_file: Path to JSON configuration file

        Returns:
            Merged options (preset < file < overrides)

        Raises:
            ConfigError: If the preset or file is invalid
            MappingError: If an option value is unsupported
        """
        if preset not in self._presets:
            raise ConfigError(
                f"Unknown preset '{preset}'. Available: {', '.join(self.list_presets())}"
            )
        merged = dict(self._presets[preset])

        if config_file:
            merged.update(self._load_config_file(config_file))

        if custom_config:
            merged.update(custom_config)

        return GenerationOptions.from_dict(merged)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded options from %s", path)
        return config

    def save_options(self, options: GenerationOptions, output_path: Union[str, Path]):
        """Save options to a JSON file."""
        path = Path(output_path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(options.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_presets(self) -> List[str]:
        """Get list of preset names."""
        return sorted(self._presets.keys())

    def validate_options(self, options: GenerationOptions) -> List[str]:
        """
        Report option combinations that will not be honoured as given.

        Returns:
            List of human-readable problems (empty if none)
        """
        problems = []

        if options.template not in (
            None,
            FrontendTemplate.REACT_TYPESCRIPT,
            FrontendTemplate.REACT_JAVASCRIPT,
        ):
            problems.append(f"Frontend template '{options.template.value}' is not implemented")

        if (
            options.validation_library == ValidationLibrary.CLASS_VALIDATOR
            and options.template == FrontendTemplate.REACT_JAVASCRIPT
        ):
            problems.append("class-validator requires a TypeScript template")

        if options.backend_framework and not options.include_backend:
            problems.append("backend_framework is set but include_backend is false")

        if options.backend_framework in (
            BackendFramework.NESTJS,
            BackendFramework.FASTAPI,
            BackendFramework.DJANGO,
            BackendFramework.SPRING_BOOT,
        ):
            problems.append(
                f"Backend framework '{options.backend_framework.value}' is not implemented"
            )

        if options.sql_dialect and not options.include_backend:
            problems.append("sql_dialect is set but include_backend is false")

        return problems


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_options(
    preset: str = "default",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GenerationOptions:
    """
    Convenience function to load generation options.

    Args:
        preset: Built-in preset name
        custom_config: Overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged options
    """
    return get_config_manager().get_options(preset, custom_config, config_file)

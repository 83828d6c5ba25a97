"""
Emitter registry and option fallbacks.

Provides registration and instantiation of target emitters, and the
deterministic table that maps unsupported option values onto the nearest
supported emitter path.
"""

import dataclasses
from typing import Any, Dict, List, Optional, Tuple, Type

from ..logging_config import get_logger
from .core.config import (
    BackendFramework,
    FormLibrary,
    FrontendTemplate,
    GenerationOptions,
    SqlDialect,
    Styling,
    ValidationLibrary,
)
from .core.generator import CodeEmitter
from .core.schema import FormStructure, GeneratedFile, GenerationWarning

logger = get_logger(__name__)

OPTION_FALLBACK = "option-fallback"


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class EmitterRegistry:
    """Registry for managing available target emitters."""

    def __init__(self):
        """Initialize empty registry."""
        self._emitters: Dict[str, Type[CodeEmitter]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        emitter_class: Type[CodeEmitter],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register an emitter for a target.

        Args:
            target: Primary target name (e.g., 'react', 'sql')
            emitter_class: Class implementing CodeEmitter
            aliases: Alternative names for this target
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If the class is invalid or an alias conflicts
        """
        if not issubclass(emitter_class, CodeEmitter):
            raise RegistryError("Emitter class must inherit from CodeEmitter")

        target_key = target.lower()

        if target_key in self._emitters and not replace:
            return

        self._emitters[target_key] = emitter_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == target_key:
                continue

            if not replace:
                if alias_key in self._emitters:
                    raise RegistryError(f"Alias '{alias}' conflicts with existing primary target")
                if alias_key in self._aliases and self._aliases[alias_key] != target_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = target_key

    def unregister(self, target: str):
        """Unregister an emitter and its aliases."""
        target_key = target.lower()
        self._emitters.pop(target_key, None)

        for alias in [a for a, t in self._aliases.items() if t == target_key]:
            del self._aliases[alias]

    def _resolve(self, target: str) -> str:
        target_key = target.lower()
        if target_key in self._emitters:
            return target_key
        if target_key in self._aliases:
            return self._aliases[target_key]
        raise RegistryError(
            f"No emitter registered for target: {target}. "
            f"Available: {', '.join(self.list_targets())}"
        )

    def get_emitter_class(self, target: str) -> Type[CodeEmitter]:
        """
        Get emitter class for a target name or alias.

        Raises:
            RegistryError: If the target is not registered
        """
        return self._emitters[self._resolve(target)]

    def create_emitter(self, target: str, config: Optional[Dict[str, Any]] = None) -> CodeEmitter:
        """
        Create an emitter instance.

        Args:
            target: Target name or alias
            config: Emitter configuration (e.g. ``page_size``)

        Raises:
            RegistryError: If the target is unknown or construction fails
        """
        emitter_class = self.get_emitter_class(target)
        try:
            return emitter_class(config)
        except Exception as e:
            raise RegistryError(f"Failed to create {target} emitter: {e}") from e

    def list_targets(self) -> List[str]:
        """Get list of registered primary target names."""
        return sorted(self._emitters.keys())

    def get_aliases_for_target(self, target: str) -> List[str]:
        target_key = target.lower()
        return sorted(alias for alias, t in self._aliases.items() if t == target_key)

    def list_all_names(self) -> Dict[str, List[str]]:
        """Map each primary target to all of its names."""
        return {
            target: [target] + self.get_aliases_for_target(target)
            for target in self.list_targets()
        }

    def is_supported(self, target: str) -> bool:
        target_key = target.lower()
        return target_key in self._emitters or target_key in self._aliases

    def get_target_info(self, target: str) -> Dict[str, Any]:
        """
        Get information about a registered target.

        Raises:
            RegistryError: If the target is not registered
        """
        target_key = self._resolve(target)
        emitter = self.create_emitter(target_key)
        return {
            "name": emitter.target_name,
            "class": type(emitter).__name__,
            "category": emitter.category.value,
            "aliases": self.get_aliases_for_target(target_key),
            "module": type(emitter).__module__,
        }


_global_registry: Optional[EmitterRegistry] = None


def get_registry() -> EmitterRegistry:
    """Get the global emitter registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = EmitterRegistry()
        _auto_register_emitters(_global_registry)
    return _global_registry


def _auto_register_emitters(registry: EmitterRegistry):
    """Register the built-in emitters with their aliases."""
    from .targets.dotnet import DotNetEmitter
    from .targets.express import ExpressEmitter
    from .targets.react import ReactEmitter
    from .targets.sql import SqlSchemaEmitter

    registry.register("react", ReactEmitter, aliases=["react-typescript", "react-javascript"])
    registry.register("sql", SqlSchemaEmitter, aliases=["generic", "tsql"])
    registry.register("express", ExpressEmitter, aliases=["node"])
    registry.register("dotnet", DotNetEmitter, aliases=["aspnet", "csharp"])


def list_supported_targets() -> List[str]:
    return get_registry().list_targets()


def get_emitter(target: str, config: Optional[Dict[str, Any]] = None) -> CodeEmitter:
    """Get an emitter instance from the global registry."""
    return get_registry().create_emitter(target, config)


# Option fallbacks

FRONTEND_FALLBACKS: Dict[Optional[FrontendTemplate], FrontendTemplate] = {
    None: FrontendTemplate.REACT_TYPESCRIPT,
    FrontendTemplate.REACT_NATIVE: FrontendTemplate.REACT_TYPESCRIPT,
    FrontendTemplate.VUE: FrontendTemplate.REACT_TYPESCRIPT,
    FrontendTemplate.ANGULAR: FrontendTemplate.REACT_TYPESCRIPT,
}

BACKEND_FALLBACKS: Dict[Optional[BackendFramework], BackendFramework] = {
    None: BackendFramework.DOTNET,
    BackendFramework.NESTJS: BackendFramework.EXPRESS,
    BackendFramework.FASTAPI: BackendFramework.EXPRESS,
    BackendFramework.DJANGO: BackendFramework.DOTNET,
    BackendFramework.SPRING_BOOT: BackendFramework.DOTNET,
}

DEFAULT_DIALECTS = {
    BackendFramework.EXPRESS: SqlDialect.GENERIC,
    BackendFramework.DOTNET: SqlDialect.TSQL,
}

_UNSET_DEFAULTS = {
    "form_library": FormLibrary.FORMIK,
    "validation_library": ValidationLibrary.YUP,
    "styling": Styling.BOOTSTRAP,
}


def _describe(value: Any) -> str:
    return "unset" if value is None else f"'{value.value}'"


def _fallback_warning(option: str, requested: Any, used: Any, reason: str = "") -> GenerationWarning:
    message = f"{option} {_describe(requested)} is not supported; using '{used.value}'"
    if reason:
        message += f" ({reason})"
    logger.info(message)
    return GenerationWarning(code=OPTION_FALLBACK, message=message)


def resolve_backend(framework: Optional[BackendFramework]) -> Tuple[BackendFramework, Optional[GenerationWarning]]:
    """Map a requested backend framework onto an implemented one."""
    if framework in BACKEND_FALLBACKS:
        used = BACKEND_FALLBACKS[framework]
        return used, _fallback_warning("backend_framework", framework, used)
    return framework, None


def resolve_options(options: GenerationOptions) -> Tuple[GenerationOptions, List[GenerationWarning]]:
    """
    Replace unsupported or unset options with their fallbacks.

    Args:
        options: Options as requested

    Returns:
        Tuple of (options every emitter can honour, one ``option-fallback``
        warning per substitution)
    """
    changes: Dict[str, Any] = {}
    warnings: List[GenerationWarning] = []

    if options.template in FRONTEND_FALLBACKS:
        used = FRONTEND_FALLBACKS[options.template]
        changes["template"] = used
        warnings.append(_fallback_warning("template", options.template, used))
    template = changes.get("template", options.template)

    for option, default in _UNSET_DEFAULTS.items():
        if getattr(options, option) is None:
            changes[option] = default
            warnings.append(_fallback_warning(option, None, default))

    validation = changes.get("validation_library", options.validation_library)
    if (
        validation == ValidationLibrary.CLASS_VALIDATOR
        and template == FrontendTemplate.REACT_JAVASCRIPT
    ):
        changes["validation_library"] = ValidationLibrary.IMPERATIVE
        warnings.append(
            _fallback_warning(
                "validation_library",
                validation,
                ValidationLibrary.IMPERATIVE,
                "decorators need TypeScript",
            )
        )

    if options.include_backend:
        framework, warning = resolve_backend(options.backend_framework)
        if warning:
            changes["backend_framework"] = framework
            warnings.append(warning)
        if options.sql_dialect is None:
            changes["sql_dialect"] = DEFAULT_DIALECTS[framework]

    return dataclasses.replace(options, **changes), warnings


def emit_backend(
    structure: FormStructure,
    resource_name: str,
    options: Optional[GenerationOptions] = None,
    config: Optional[Dict[str, Any]] = None,
) -> List[GeneratedFile]:
    """
    Generate the backend API files in exactly one style.

    Args:
        structure: Normalized form
        resource_name: Names the entity, controller and routes
        options: Generation options; ``backend_framework`` picks the style
        config: Emitter configuration (e.g. ``page_size``)

    Returns:
        Express files or ASP.NET files, never a mix
    """
    options = options or GenerationOptions()
    framework, _ = resolve_backend(options.backend_framework)
    return get_emitter(framework.value, config).generate(structure, resource_name, options)

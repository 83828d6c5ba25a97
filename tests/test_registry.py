"""Unit tests for the emitter registry (form_codegen.codegen.registry).

Tests cover:
- Built-in targets and aliases, case-insensitive lookup
- Registration rules (type check, alias conflicts, replace, unregister)
- Target info
- Option fallbacks and their warnings
- emit_backend producing exactly one backend style
"""

from __future__ import annotations

import pytest

from form_codegen.codegen.core.config import (
    BackendFramework,
    FrontendTemplate,
    GenerationOptions,
    SqlDialect,
    Styling,
    ValidationLibrary,
)
from form_codegen.codegen.registry import (
    OPTION_FALLBACK,
    EmitterRegistry,
    RegistryError,
    emit_backend,
    get_emitter,
    get_registry,
    list_supported_targets,
    resolve_backend,
    resolve_options,
)
from form_codegen.codegen.targets.dotnet import DotNetEmitter
from form_codegen.codegen.targets.express import ExpressEmitter
from form_codegen.codegen.targets.react import ReactEmitter
from form_codegen.codegen.targets.sql import SqlSchemaEmitter


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestBuiltInTargets:
    def test_targets(self):
        assert list_supported_targets() == ["dotnet", "express", "react", "sql"]

    @pytest.mark.parametrize(
        "name, emitter_class",
        [
            ("react", ReactEmitter),
            ("react-javascript", ReactEmitter),
            ("tsql", SqlSchemaEmitter),
            ("generic", SqlSchemaEmitter),
            ("NODE", ExpressEmitter),
            ("aspnet", DotNetEmitter),
            ("CSharp", DotNetEmitter),
        ],
    )
    def test_aliases(self, name, emitter_class):
        assert get_registry().get_emitter_class(name) is emitter_class

    def test_unknown_target(self):
        with pytest.raises(RegistryError, match="Available: dotnet, express, react, sql"):
            get_emitter("cobol")

    def test_config_reaches_emitter(self):
        assert get_emitter("sql", {"page_size": 50}).page_size == 50

    def test_target_info(self):
        info = get_registry().get_target_info("csharp")
        assert info["name"] == "dotnet"
        assert info["class"] == "DotNetEmitter"
        assert info["category"] == "backend"
        assert info["aliases"] == ["aspnet", "csharp"]

    def test_list_all_names(self):
        assert get_registry().list_all_names()["express"] == ["express", "node"]


class TestRegistration:
    def test_rejects_non_emitter(self):
        with pytest.raises(RegistryError, match="CodeEmitter"):
            EmitterRegistry().register("bad", dict)

    def test_alias_conflict_with_target(self):
        registry = EmitterRegistry()
        registry.register("sql", SqlSchemaEmitter)
        with pytest.raises(RegistryError, match="conflicts"):
            registry.register("express", ExpressEmitter, aliases=["sql"])

    def test_alias_conflict_with_alias(self):
        registry = EmitterRegistry()
        registry.register("express", ExpressEmitter, aliases=["api"])
        with pytest.raises(RegistryError, match="already points"):
            registry.register("dotnet", DotNetEmitter, aliases=["api"])

    def test_existing_target_is_kept_without_replace(self):
        registry = EmitterRegistry()
        registry.register("backend", ExpressEmitter)
        registry.register("backend", DotNetEmitter)
        assert registry.get_emitter_class("backend") is ExpressEmitter
        registry.register("backend", DotNetEmitter, replace=True)
        assert registry.get_emitter_class("backend") is DotNetEmitter

    def test_unregister_removes_aliases(self):
        registry = EmitterRegistry()
        registry.register("express", ExpressEmitter, aliases=["node"])
        registry.unregister("express")
        assert not registry.is_supported("express")
        assert not registry.is_supported("node")


# ---------------------------------------------------------------------------
# Option fallbacks
# ---------------------------------------------------------------------------

class TestResolveOptions:
    def test_defaults_need_no_fallback(self, default_options):
        resolved, warnings = resolve_options(default_options)
        assert resolved == default_options
        assert warnings == []

    def test_unsupported_template(self):
        resolved, warnings = resolve_options(GenerationOptions(template=FrontendTemplate.VUE))
        assert resolved.template == FrontendTemplate.REACT_TYPESCRIPT
        assert [w.code for w in warnings] == [OPTION_FALLBACK]
        assert warnings[0].message == "template 'vue' is not supported; using 'react-typescript'"

    def test_unset_styling(self):
        resolved, warnings = resolve_options(GenerationOptions(styling=None))
        assert resolved.styling == Styling.BOOTSTRAP
        assert len(warnings) == 1

    def test_class_validator_in_javascript(self):
        resolved, warnings = resolve_options(
            GenerationOptions(
                template=FrontendTemplate.REACT_JAVASCRIPT,
                validation_library=ValidationLibrary.CLASS_VALIDATOR,
            )
        )
        assert resolved.validation_library == ValidationLibrary.IMPERATIVE
        assert "decorators need TypeScript" in warnings[0].message

    def test_backend_defaults_to_dotnet_and_tsql(self):
        resolved, warnings = resolve_options(GenerationOptions(include_backend=True))
        assert resolved.backend_framework == BackendFramework.DOTNET
        assert resolved.sql_dialect == SqlDialect.TSQL
        assert len(warnings) == 1

    def test_unimplemented_backend_maps_to_express(self):
        resolved, warnings = resolve_options(
            GenerationOptions(include_backend=True, backend_framework=BackendFramework.NESTJS)
        )
        assert resolved.backend_framework == BackendFramework.EXPRESS
        assert resolved.sql_dialect == SqlDialect.GENERIC
        assert "nestjs" in warnings[0].message

    def test_explicit_dialect_is_kept(self):
        resolved, warnings = resolve_options(
            GenerationOptions(
                include_backend=True,
                backend_framework=BackendFramework.EXPRESS,
                sql_dialect=SqlDialect.TSQL,
            )
        )
        assert resolved.sql_dialect == SqlDialect.TSQL
        assert warnings == []

    def test_backend_ignored_when_not_included(self):
        resolved, warnings = resolve_options(GenerationOptions(backend_framework=None))
        assert resolved.backend_framework is None
        assert warnings == []

    def test_input_is_not_modified(self):
        options = GenerationOptions(template=FrontendTemplate.ANGULAR)
        resolve_options(options)
        assert options.template == FrontendTemplate.ANGULAR

    def test_resolve_backend(self):
        assert resolve_backend(BackendFramework.EXPRESS) == (BackendFramework.EXPRESS, None)
        framework, warning = resolve_backend(BackendFramework.DJANGO)
        assert framework == BackendFramework.DOTNET
        assert warning.code == OPTION_FALLBACK


# ---------------------------------------------------------------------------
# emit_backend
# ---------------------------------------------------------------------------

class TestEmitBackend:
    def test_express_only(self, applicants_structure, express_options):
        files = emit_backend(applicants_structure, "applicants", express_options)
        assert all(f.archive_path.startswith("backend/") for f in files)
        assert not any(f.file_name.endswith((".cs", ".csproj")) for f in files)

    def test_dotnet_only(self, applicants_structure, dotnet_options):
        files = emit_backend(applicants_structure, "applicants", dotnet_options)
        assert all(f.file_name.endswith((".cs", ".csproj")) for f in files)

    def test_fallback_framework(self, applicants_structure):
        options = GenerationOptions(include_backend=True, backend_framework=BackendFramework.FASTAPI)
        files = emit_backend(applicants_structure, "applicants", options)
        assert files[0].file_name == "applicants.model.ts"

    def test_config_page_size(self, applicants_structure, dotnet_options):
        files = emit_backend(applicants_structure, "applicants", dotnet_options, {"page_size": 30})
        assert "[FromQuery] int pageSize = 30)" in files[0].content

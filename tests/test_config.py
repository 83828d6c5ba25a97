"""Unit tests for configuration management (form_codegen.codegen.core.config).

Tests cover:
- GenerationOptions.from_dict with snake_case, camelCase, values and names
- to_dict / merged
- parse_enum errors
- ConfigManager presets, config files and override precedence
- validate_options problem reporting
- save_options round trip
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from form_codegen.codegen.core.config import (
    BackendFramework,
    ConfigError,
    ConfigManager,
    FormLibrary,
    FrontendTemplate,
    GenerationOptions,
    SqlDialect,
    Styling,
    ValidationLibrary,
    load_options,
    parse_enum,
)
from form_codegen.codegen.core.generator import MappingError


# ---------------------------------------------------------------------------
# GenerationOptions
# ---------------------------------------------------------------------------

class TestGenerationOptions:
    def test_defaults(self):
        options = GenerationOptions()
        assert options.template == FrontendTemplate.REACT_TYPESCRIPT
        assert options.form_library == FormLibrary.FORMIK
        assert options.validation_library == ValidationLibrary.YUP
        assert options.styling == Styling.BOOTSTRAP
        assert options.include_backend is False
        assert options.is_typescript

    def test_from_dict_accepts_camel_case_and_names(self):
        options = GenerationOptions.from_dict(
            {
                "formLibrary": "REACT_HOOK_FORM",
                "validation_library": "zod",
                "includeBackend": True,
                "backendFramework": "express",
                "unknown": 1,
            }
        )
        assert options.form_library == FormLibrary.REACT_HOOK_FORM
        assert options.validation_library == ValidationLibrary.ZOD
        assert options.include_backend is True
        assert options.backend_framework == BackendFramework.EXPRESS

    def test_from_dict_allows_unset(self):
        options = GenerationOptions.from_dict({"styling": None})
        assert options.styling is None

    def test_from_dict_rejects_unknown_value(self):
        with pytest.raises(MappingError, match="svelte"):
            GenerationOptions.from_dict({"template": "svelte"})

    def test_to_dict(self):
        data = GenerationOptions(sql_dialect=SqlDialect.TSQL).to_dict()
        assert data["template"] == "react-typescript"
        assert data["sql_dialect"] == "tsql"
        assert data["backend_framework"] is None

    def test_merged(self):
        options = GenerationOptions().merged({"styling": "tailwind", "includeTests": True})
        assert options.styling == Styling.TAILWIND
        assert options.include_tests is True
        assert options.form_library == FormLibrary.FORMIK

    def test_javascript_template(self):
        assert not GenerationOptions(template=FrontendTemplate.REACT_JAVASCRIPT).is_typescript


class TestParseEnum:
    def test_by_value_and_name(self):
        assert parse_enum(BackendFramework, "spring-boot") == BackendFramework.SPRING_BOOT
        assert parse_enum(BackendFramework, "SPRING_BOOT") == BackendFramework.SPRING_BOOT

    def test_member_and_none_pass_through(self):
        assert parse_enum(Styling, Styling.CSS) == Styling.CSS
        assert parse_enum(Styling, None) is None

    def test_error_lists_choices(self):
        with pytest.raises(MappingError, match="bootstrap"):
            parse_enum(Styling, "bulma", "styling")


# ---------------------------------------------------------------------------
# ConfigManager
# ---------------------------------------------------------------------------

class TestConfigManager:
    def test_presets(self):
        assert ConfigManager().list_presets() == [
            "default",
            "full-stack-dotnet",
            "full-stack-express",
            "minimal",
        ]

    def test_unknown_preset(self):
        with pytest.raises(ConfigError, match="Unknown preset"):
            ConfigManager().get_options("enterprise")

    def test_preset_values(self):
        options = ConfigManager().get_options("full-stack-express")
        assert options.include_backend
        assert options.backend_framework == BackendFramework.EXPRESS
        assert options.validation_library == ValidationLibrary.ZOD

    def test_precedence(self, tmp_path: Path):
        config_file = tmp_path / "options.json"
        config_file.write_text(json.dumps({"styling": "material", "includeTests": True}))
        options = ConfigManager().get_options(
            "minimal", custom_config={"styling": "tailwind"}, config_file=config_file
        )
        # preset < file < overrides
        assert options.form_library == FormLibrary.NONE
        assert options.include_tests is True
        assert options.styling == Styling.TAILWIND

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager().get_options(config_file=tmp_path / "nope.json")

    def test_non_json_suffix(self, tmp_path: Path):
        path = tmp_path / "options.yaml"
        path.write_text("styling: css")
        with pytest.raises(ConfigError, match="must be JSON"):
            ConfigManager().get_options(config_file=path)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "options.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            ConfigManager().get_options(config_file=path)

    def test_non_object(self, tmp_path: Path):
        path = tmp_path / "options.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            ConfigManager().get_options(config_file=path)

    def test_save_round_trip(self, tmp_path: Path):
        path = tmp_path / "saved.json"
        original = GenerationOptions(styling=Styling.CSS, include_documentation=True)
        manager = ConfigManager()
        manager.save_options(original, path)
        assert manager.get_options(config_file=path) == original

    def test_load_options(self):
        assert load_options("minimal").styling == Styling.CSS


class TestValidateOptions:
    def test_clean(self):
        assert ConfigManager().validate_options(GenerationOptions()) == []

    def test_reports_problems(self):
        options = GenerationOptions(
            template=FrontendTemplate.REACT_JAVASCRIPT,
            validation_library=ValidationLibrary.CLASS_VALIDATOR,
            backend_framework=BackendFramework.DJANGO,
        )
        problems = ConfigManager().validate_options(options)
        assert "class-validator requires a TypeScript template" in problems
        assert "backend_framework is set but include_backend is false" in problems
        assert any("django" in problem for problem in problems)

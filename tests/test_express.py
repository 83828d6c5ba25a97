"""Unit tests for the Express target (form_codegen.codegen.targets.express).

Tests cover:
- entity_name fallbacks
- express-validator chains per field kind
- TypeORM entity members
- ExpressEmitter file set and rendered wiring
"""

from __future__ import annotations

import json

from form_codegen.codegen.core.naming import build_field_names
from form_codegen.codegen.core.schema import Category, FieldType
from form_codegen.codegen.targets.express import (
    ExpressEmitter,
    entity_member,
    entity_name,
    validation_chain,
)


def _by_name(files, name):
    return next(f for f in files if f.file_name == name)


# ---------------------------------------------------------------------------
# Unit functions
# ---------------------------------------------------------------------------

class TestEntityName:
    def test_pascal(self):
        assert entity_name("applicants") == "Applicants"
        assert entity_name("customer intake") == "CustomerIntake"

    def test_fallback(self):
        assert entity_name("") == "FormSubmission"


class TestValidationChain:
    def test_required_email(self, applicants_structure):
        email = applicants_structure.fields[0]
        names = build_field_names(applicants_structure.fields)[0]
        assert validation_chain(email, names) == (
            "body('email')\n"
            "  .notEmpty().withMessage('Email is required')\n"
            "  .isEmail().withMessage('Invalid email')"
        )

    def test_optional_number(self, applicants_structure):
        age = applicants_structure.fields[1]
        names = build_field_names(applicants_structure.fields)[1]
        assert validation_chain(age, names) == (
            "body('age')\n"
            "  .optional({ values: 'falsy' })\n"
            "  .isNumeric().withMessage('Age must be a number')"
        )

    def test_length_rules(self, every_type_structure):
        field = every_type_structure.get_field("name")
        chain = validation_chain(field, build_field_names([field])[0])
        assert "  .isLength({ min: 2 }).withMessage('Name must be at least 2 characters')" in chain
        assert "  .isLength({ max: 50 })" in chain

    def test_uploads_are_skipped(self, make_field):
        field = make_field("cv", "Resume", FieldType.FILE, required=True)
        assert validation_chain(field, build_field_names([field])[0]) is None

    def test_required_appears_once(self, every_type_structure):
        fields = every_type_structure.fields
        for field, names in zip(fields, build_field_names(fields)):
            chain = validation_chain(field, names)
            if chain is None:
                continue
            assert chain.count(".notEmpty()") == (1 if field.is_required else 0)


class TestEntityMember:
    def test_required_string(self, applicants_structure):
        names = build_field_names(applicants_structure.fields)
        assert entity_member(applicants_structure.fields[0], names[0]) == (
            "@Column({ name: 'email', type: 'varchar', length: 255, nullable: false })\n"
            "email!: string;"
        )

    def test_optional_number(self, applicants_structure):
        names = build_field_names(applicants_structure.fields)
        assert entity_member(applicants_structure.fields[1], names[1]) == (
            "@Column({ name: 'age', type: 'int', nullable: true })\n"
            "age?: number;"
        )

    def test_checkbox_defaults_false(self, make_field):
        field = make_field("ok", "Agree", FieldType.CHECKBOX)
        member = entity_member(field, build_field_names([field])[0])
        assert "default: false" in member
        assert member.endswith("agree!: boolean;")


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------

class TestExpressEmitter:
    def test_file_set(self, applicants_structure, express_options):
        files = ExpressEmitter().generate(applicants_structure, "applicants", express_options)
        assert [f.archive_path for f in files] == [
            "backend/src/models/applicants.model.ts",
            "backend/src/repositories/applicants.repository.ts",
            "backend/src/controllers/applicants.controller.ts",
            "backend/src/routes/applicants.routes.ts",
            "backend/src/validation/applicants.validation.ts",
            "backend/src/data-source.ts",
            "backend/src/index.ts",
            "backend/package.json",
            "backend/tsconfig.json",
        ]
        assert all(f.category == Category.BACKEND for f in files)

    def test_model(self, applicants_structure, express_options):
        files = ExpressEmitter().generate(applicants_structure, "applicants", express_options)
        model = _by_name(files, "applicants.model.ts").content
        assert "@Entity('applicants')" in model
        assert "export class Applicants {" in model
        assert "  email!: string;" in model

    def test_routes_and_index(self, applicants_structure, express_options):
        files = ExpressEmitter().generate(applicants_structure, "applicants", express_options)
        routes = _by_name(files, "applicants.routes.ts").content
        assert "router.post('/', validateApplicants, controller.create);" in routes
        assert "router.delete('/:id', controller.delete);" in routes
        index = _by_name(files, "index.ts").content
        assert "app.use('/api/applicants', applicantsRoutes);" in index

    def test_validation_middleware_skips_uploads(self, every_type_structure, express_options):
        files = ExpressEmitter().generate(every_type_structure, "everything", express_options)
        middleware = _by_name(files, "everything.validation.ts").content
        assert "export const validateEverything = [" in middleware
        assert "  body('name')" in middleware
        assert "body('resume')" not in middleware

    def test_page_size_config(self, applicants_structure, express_options):
        files = ExpressEmitter({"page_size": 25}).generate(applicants_structure, "applicants", express_options)
        controller = _by_name(files, "applicants.controller.ts").content
        assert "parseInt(req.query.limit as string, 10) || 25;" in controller

    def test_manifest(self, applicants_structure, express_options):
        files = ExpressEmitter().generate(applicants_structure, "applicants", express_options)
        manifest = json.loads(_by_name(files, "package.json").content)
        assert manifest["name"] == "applicants-api"
        assert {"express", "express-validator", "typeorm"} <= set(manifest["dependencies"])

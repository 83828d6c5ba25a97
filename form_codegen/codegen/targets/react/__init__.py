"""
React target.

Generates form components with a selectable form-state library,
validation library and styling system.
"""

from .bindings import FormBinding, create_binding
from .generator import ReactEmitter, component_name, emit_frontend
from .styling import FieldView, StylingKit, create_styling_kit
from .validation import ValidationStrategy, create_validation

__all__ = [
    "ReactEmitter",
    "FormBinding",
    "FieldView",
    "StylingKit",
    "ValidationStrategy",
    "component_name",
    "create_binding",
    "create_styling_kit",
    "create_validation",
    "emit_frontend",
]

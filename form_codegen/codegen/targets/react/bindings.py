"""
Form-state binding strategies.

Each strategy owns one complete idiom for wiring controls to form state.
The component emitter never mixes fragments of two strategies.
"""

from typing import Dict, List, Optional

from ...core.config import FormLibrary
from ...core.schema import FieldType
from .jsx import js_string, jsx_attr


class FormBinding:
    """Base binding: how controls read, write and report state."""

    library: FormLibrary
    template_name: str
    surfaces_errors = True

    def imports(self, typescript: bool) -> List[str]:
        return []

    def control_attrs(self, name: str, field_type: FieldType) -> List[str]:
        """Attributes for text-like inputs, textareas and selects."""
        raise NotImplementedError

    def checkbox_attrs(self, name: str) -> List[str]:
        raise NotImplementedError

    def radio_attrs(self, name: str, value: str) -> List[str]:
        raise NotImplementedError

    def file_attrs(self, name: str) -> List[str]:
        raise NotImplementedError

    def value_expr(self, name: str) -> str:
        """Expression reading a field's current value."""
        raise NotImplementedError

    def error_condition(self, name: str) -> Optional[str]:
        return None

    def error_message(self, name: str) -> Optional[str]:
        return None

    @property
    def submit_handler(self) -> str:
        raise NotImplementedError

    @property
    def submitting_expr(self) -> str:
        raise NotImplementedError

    def dependencies(self) -> Dict[str, str]:
        return {}


class FormikBinding(FormBinding):
    """Controlled inputs backed by ``useFormik``."""

    library = FormLibrary.FORMIK
    template_name = "formik_setup"

    def imports(self, typescript: bool) -> List[str]:
        return ["import { useFormik } from 'formik';"]

    def control_attrs(self, name: str, field_type: FieldType) -> List[str]:
        return [
            f'name="{name}"',
            f"value={{formik.values.{name}}}",
            "onChange={formik.handleChange}",
            "onBlur={formik.handleBlur}",
        ]

    def checkbox_attrs(self, name: str) -> List[str]:
        return [
            f'name="{name}"',
            f"checked={{formik.values.{name}}}",
            "onChange={formik.handleChange}",
            "onBlur={formik.handleBlur}",
        ]

    def radio_attrs(self, name: str, value: str) -> List[str]:
        return [
            f'name="{name}"',
            f'value="{jsx_attr(value)}"',
            f"checked={{formik.values.{name} === {js_string(value)}}}",
            "onChange={formik.handleChange}",
        ]

    def file_attrs(self, name: str) -> List[str]:
        return [
            f'name="{name}"',
            f"onChange={{(event) => formik.setFieldValue('{name}', "
            "event.currentTarget.files?.[0] ?? null)}",
        ]

    def value_expr(self, name: str) -> str:
        return f"formik.values.{name}"

    def error_condition(self, name: str) -> Optional[str]:
        return f"formik.touched.{name} && formik.errors.{name}"

    def error_message(self, name: str) -> Optional[str]:
        return f"formik.errors.{name}"

    @property
    def submit_handler(self) -> str:
        return "formik.handleSubmit"

    @property
    def submitting_expr(self) -> str:
        return "formik.isSubmitting"

    def dependencies(self) -> Dict[str, str]:
        return {"formik": "^2.4.0"}


class HookFormBinding(FormBinding):
    """Uncontrolled inputs registered with ``useForm``."""

    library = FormLibrary.REACT_HOOK_FORM
    template_name = "hook_form_setup"

    def imports(self, typescript: bool) -> List[str]:
        return ["import { useForm } from 'react-hook-form';"]

    def control_attrs(self, name: str, field_type: FieldType) -> List[str]:
        if field_type == FieldType.NUMBER:
            return [f"{{...register('{name}', {{ valueAsNumber: true }})}}"]
        return [f"{{...register('{name}')}}"]

    def checkbox_attrs(self, name: str) -> List[str]:
        return [f"{{...register('{name}')}}"]

    def radio_attrs(self, name: str, value: str) -> List[str]:
        return [f"{{...register('{name}')}}", f'value="{jsx_attr(value)}"']

    def file_attrs(self, name: str) -> List[str]:
        return [f"{{...register('{name}')}}"]

    def value_expr(self, name: str) -> str:
        return f"watch('{name}')"

    def error_condition(self, name: str) -> Optional[str]:
        return f"errors.{name}"

    def error_message(self, name: str) -> Optional[str]:
        return f"errors.{name}?.message"

    @property
    def submit_handler(self) -> str:
        return "handleSubmit(onSubmit)"

    @property
    def submitting_expr(self) -> str:
        return "isSubmitting"

    def dependencies(self) -> Dict[str, str]:
        return {"react-hook-form": "^7.48.0"}


class PlainStateBinding(FormBinding):
    """Controlled inputs backed by ``useState``; no field-level errors."""

    library = FormLibrary.NONE
    template_name = "plain_state_setup"
    surfaces_errors = False

    def control_attrs(self, name: str, field_type: FieldType) -> List[str]:
        return [f'name="{name}"', f"value={{values.{name}}}", "onChange={handleChange}"]

    def checkbox_attrs(self, name: str) -> List[str]:
        return [f'name="{name}"', f"checked={{values.{name}}}", "onChange={handleChange}"]

    def radio_attrs(self, name: str, value: str) -> List[str]:
        return [
            f'name="{name}"',
            f'value="{jsx_attr(value)}"',
            f"checked={{values.{name} === {js_string(value)}}}",
            "onChange={handleChange}",
        ]

    def file_attrs(self, name: str) -> List[str]:
        return [f'name="{name}"', "onChange={handleChange}"]

    def value_expr(self, name: str) -> str:
        return f"values.{name}"

    @property
    def submit_handler(self) -> str:
        return "handleSubmit"

    @property
    def submitting_expr(self) -> str:
        return "isSubmitting"


_BINDINGS = {
    FormLibrary.FORMIK: FormikBinding,
    FormLibrary.REACT_HOOK_FORM: HookFormBinding,
    FormLibrary.NONE: PlainStateBinding,
}


def create_binding(library: FormLibrary) -> FormBinding:
    """Create the binding strategy for a form-state library."""
    return _BINDINGS[library]()

"""
Styling kits for generated form markup.

A kit turns one ``FieldView`` into a JSX block. Bootstrap and Material UI
render through their component libraries; Tailwind and plain CSS render
native elements with different class sets.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ...core.config import Styling
from ...core.schema import FieldDescriptor
from .jsx import attrs_line, jsx_attr, jsx_text

INPUT = "input"
TEXTAREA = "textarea"
SELECT = "select"
CHECKBOX = "checkbox"
RADIO = "radio"
FILE = "file"


@dataclass
class FieldView:
    """Everything a kit needs to render one field."""

    field: FieldDescriptor
    name: str
    control: str
    input_type: str
    attrs: List[str]
    option_attrs: List[Tuple[str, str, List[str]]] = field(default_factory=list)
    error_condition: Optional[str] = None
    error_message: Optional[str] = None
    multiple: bool = False

    @property
    def label(self) -> str:
        text = jsx_text(self.field.label)
        return f"{text} *" if self.field.is_required else text

    @property
    def placeholder_attr(self) -> str:
        if not self.field.placeholder:
            return ""
        return f'placeholder="{jsx_attr(self.field.placeholder)}"'

    @property
    def extra_input_attrs(self) -> List[str]:
        """Numeric and upload constraints carried by the descriptor."""
        attrs = []
        if self.field.min_value is not None:
            attrs.append(f"min={{{self.field.min_value}}}")
        if self.field.max_value is not None:
            attrs.append(f"max={{{self.field.max_value}}}")
        if self.field.step is not None:
            attrs.append(f"step={{{self.field.step}}}")
        if self.field.accept:
            attrs.append(f'accept="{jsx_attr(self.field.accept)}"')
        if self.control == FILE and self.field.multiple:
            attrs.append("multiple")
        return attrs


def indent_lines(lines: List[str], depth: int = 1) -> List[str]:
    pad = "  " * depth
    return [pad + line if line else line for line in lines]


class StylingKit:
    """Base kit; subclasses render each control kind."""

    styling: Styling

    def __init__(self):
        self.used_components: Set[str] = set()

    def render_field(self, view: FieldView) -> str:
        renderer = {
            INPUT: self.render_input,
            TEXTAREA: self.render_input,
            SELECT: self.render_select,
            CHECKBOX: self.render_checkbox,
            RADIO: self.render_radio,
            FILE: self.render_input,
        }[view.control]
        return "\n".join(renderer(view))

    def render_input(self, view: FieldView) -> List[str]:
        raise NotImplementedError

    def render_select(self, view: FieldView) -> List[str]:
        raise NotImplementedError

    def render_checkbox(self, view: FieldView) -> List[str]:
        raise NotImplementedError

    def render_radio(self, view: FieldView) -> List[str]:
        raise NotImplementedError

    def form_open(self, submit_handler: str) -> str:
        raise NotImplementedError

    def form_close(self) -> str:
        raise NotImplementedError

    def submit_button(self, submitting_expr: str) -> str:
        raise NotImplementedError

    def imports(self) -> List[str]:
        return []

    def dependencies(self) -> Dict[str, str]:
        return {}

    def dev_dependencies(self) -> Dict[str, str]:
        return {}


class BootstrapKit(StylingKit):
    """react-bootstrap ``Form`` components."""

    styling = Styling.BOOTSTRAP

    def _feedback(self, view: FieldView) -> List[str]:
        if not view.error_message:
            return []
        return [
            '<Form.Control.Feedback type="invalid">',
            f"  {{{view.error_message}}}",
            "</Form.Control.Feedback>",
        ]

    def _help(self, view: FieldView) -> List[str]:
        if not view.field.help_text:
            return []
        return [f"<Form.Text muted>{jsx_text(view.field.help_text)}</Form.Text>"]

    def _invalid(self, view: FieldView) -> str:
        if not view.error_condition:
            return ""
        return f"isInvalid={{!!({view.error_condition})}}"

    def _group(self, view: FieldView, body: List[str]) -> List[str]:
        return (
            [f'<Form.Group className="mb-3" controlId="{view.name}">']
            + indent_lines(body)
            + ["</Form.Group>"]
        )

    def render_input(self, view: FieldView) -> List[str]:
        if view.control == TEXTAREA:
            kind = ['as="textarea"', "rows={3}"]
        else:
            kind = [f'type="{view.input_type}"']
        attrs = attrs_line(
            kind + [view.placeholder_attr] + view.attrs + view.extra_input_attrs + [self._invalid(view)]
        )
        body = [f"<Form.Label>{view.label}</Form.Label>", f"<Form.Control {attrs} />"]
        return self._group(view, body + self._feedback(view) + self._help(view))

    def render_select(self, view: FieldView) -> List[str]:
        attrs = attrs_line(
            (["multiple"] if view.multiple else []) + view.attrs + [self._invalid(view)]
        )
        options = [] if view.multiple else ['  <option value="">Select...</option>']
        for option in view.field.options:
            options.append(
                f'  <option value="{jsx_attr(option.value)}">{jsx_text(option.label)}</option>'
            )
        body = (
            [f"<Form.Label>{view.label}</Form.Label>", f"<Form.Select {attrs}>"]
            + options
            + ["</Form.Select>"]
        )
        return self._group(view, body + self._feedback(view) + self._help(view))

    def render_checkbox(self, view: FieldView) -> List[str]:
        attrs = attrs_line(['type="checkbox"', f'label="{jsx_attr(view.label)}"'] + view.attrs + [self._invalid(view)])
        feedback = []
        if view.error_message:
            feedback = [f"feedback={{{view.error_message}}}", 'feedbackType="invalid"']
        body = [f"<Form.Check {attrs_line([attrs] + feedback)} />"]
        return self._group(view, body + self._help(view))

    def render_radio(self, view: FieldView) -> List[str]:
        body = [f"<Form.Label>{view.label}</Form.Label>"]
        for index, (label, _, attrs) in enumerate(view.option_attrs):
            body.append(
                "<Form.Check "
                + attrs_line(
                    [
                        'type="radio"',
                        f'id="{view.name}-{index}"',
                        f'label="{jsx_attr(label)}"',
                    ]
                    + attrs
                    + [self._invalid(view)]
                )
                + " />"
            )
        if view.error_message:
            body += [
                f"{{{view.error_condition} && (",
                f'  <div className="invalid-feedback d-block">{{{view.error_message}}}</div>',
                ")}",
            ]
        return ["<fieldset>"] + indent_lines(self._group(view, body + self._help(view))) + ["</fieldset>"]

    def form_open(self, submit_handler: str) -> str:
        return f"<Form noValidate onSubmit={{{submit_handler}}}>"

    def form_close(self) -> str:
        return "</Form>"

    def submit_button(self, submitting_expr: str) -> str:
        return (
            f'<Button variant="primary" type="submit" disabled={{{submitting_expr}}}>\n'
            f"  {{{submitting_expr} ? 'Submitting...' : 'Submit'}}\n"
            "</Button>"
        )

    def imports(self) -> List[str]:
        return [
            "import { Button, Form } from 'react-bootstrap';",
            "import 'bootstrap/dist/css/bootstrap.min.css';",
        ]

    def dependencies(self) -> Dict[str, str]:
        return {"react-bootstrap": "^2.9.0", "bootstrap": "^5.3.0"}


class MaterialKit(StylingKit):
    """Material UI components."""

    styling = Styling.MATERIAL

    def _use(self, *names: str):
        self.used_components.update(names)

    def _error_props(self, view: FieldView) -> List[str]:
        props = []
        if view.error_condition:
            props.append(f"error={{!!({view.error_condition})}}")
        if view.error_message and view.field.help_text:
            props.append(
                f"helperText={{({view.error_condition}) ? {view.error_message} : "
                f"'{jsx_attr(view.field.help_text)}'}}"
            )
        elif view.error_message:
            props.append(f"helperText={{({view.error_condition}) && {view.error_message}}}")
        elif view.field.help_text:
            props.append(f'helperText="{jsx_attr(view.field.help_text)}"')
        return props

    def _helper_text(self, view: FieldView) -> List[str]:
        lines = []
        if view.error_message:
            self._use("FormHelperText")
            lines.append(
                f"{{{view.error_condition} && <FormHelperText error>{{{view.error_message}}}</FormHelperText>}}"
            )
        if view.field.help_text:
            self._use("FormHelperText")
            lines.append(f"<FormHelperText>{jsx_text(view.field.help_text)}</FormHelperText>")
        return lines

    def _text_field(self, view: FieldView, kind: List[str], children: List[str]) -> List[str]:
        self._use("TextField")
        props = (
            [f'id="{view.name}"', f'label="{jsx_attr(view.label)}"']
            + kind
            + [view.placeholder_attr, "fullWidth", 'margin="normal"']
            + view.attrs
            + self._error_props(view)
        )
        if not children:
            return ["<TextField"] + indent_lines([p for p in props if p]) + ["/>"]
        return (
            ["<TextField"]
            + indent_lines([p for p in props if p])
            + [">"]
            + indent_lines(children)
            + ["</TextField>"]
        )

    def render_input(self, view: FieldView) -> List[str]:
        if view.control == FILE:
            self._use("Box", "Button", "FormLabel")
            attrs = attrs_line(['type="file"', "hidden"] + view.attrs + view.extra_input_attrs)
            return (
                ['<Box sx={{ my: 2 }}>', f"  <FormLabel>{view.label}</FormLabel>"]
                + indent_lines(
                    [
                        '<Button variant="outlined" component="label" sx={{ ml: 2 }}>',
                        "  Choose file",
                        f"  <input {attrs} />",
                        "</Button>",
                    ]
                    + self._helper_text(view)
                )
                + ["</Box>"]
            )
        if view.control == TEXTAREA:
            kind = ["multiline", "rows={4}"]
        else:
            kind = [f'type="{view.input_type}"']
            if view.input_type == "date":
                kind.append("InputLabelProps={{ shrink: true }}")
            bounds = [
                f"{key}: {value}"
                for key, value in (
                    ("min", view.field.min_value),
                    ("max", view.field.max_value),
                    ("step", view.field.step),
                )
                if value is not None
            ]
            if bounds:
                kind.append("inputProps={{ " + ", ".join(bounds) + " }}")
        return self._text_field(view, kind, [])

    def render_select(self, view: FieldView) -> List[str]:
        self._use("MenuItem")
        kind = ["select"]
        if view.multiple:
            kind.append("SelectProps={{ multiple: true }}")
        children = [] if view.multiple else ['<MenuItem value="">Select...</MenuItem>']
        for option in view.field.options:
            children.append(
                f'<MenuItem value="{jsx_attr(option.value)}">{jsx_text(option.label)}</MenuItem>'
            )
        return self._text_field(view, kind, children)

    def render_checkbox(self, view: FieldView) -> List[str]:
        self._use("Box", "Checkbox", "FormControlLabel")
        return (
            ["<Box>"]
            + indent_lines(
                [
                    "<FormControlLabel",
                    f"  control={{<Checkbox {attrs_line(view.attrs)} />}}",
                    f'  label="{jsx_attr(view.label)}"',
                    "/>",
                ]
                + self._helper_text(view)
            )
            + ["</Box>"]
        )

    def render_radio(self, view: FieldView) -> List[str]:
        self._use("FormControl", "FormControlLabel", "FormLabel", "Radio", "RadioGroup")
        options = []
        for label, value, attrs in view.option_attrs:
            options.append(
                f'<FormControlLabel value="{jsx_attr(value)}" '
                f'control={{<Radio {attrs_line(attrs)} />}} label="{jsx_attr(label)}" />'
            )
        invalid = f" error={{!!({view.error_condition})}}" if view.error_condition else ""
        return (
            [f'<FormControl margin="normal"{invalid}>', f"  <FormLabel>{view.label}</FormLabel>"]
            + indent_lines(["<RadioGroup row>"] + indent_lines(options) + ["</RadioGroup>"] + self._helper_text(view))
            + ["</FormControl>"]
        )

    def form_open(self, submit_handler: str) -> str:
        self._use("Box")
        return f'<Box component="form" noValidate onSubmit={{{submit_handler}}}>'

    def form_close(self) -> str:
        return "</Box>"

    def submit_button(self, submitting_expr: str) -> str:
        self._use("Button")
        return (
            f'<Button variant="contained" type="submit" disabled={{{submitting_expr}}} sx={{{{ mt: 2 }}}}>\n'
            f"  {{{submitting_expr} ? 'Submitting...' : 'Submit'}}\n"
            "</Button>"
        )

    def imports(self) -> List[str]:
        names = ", ".join(sorted(self.used_components))
        return [f"import {{ {names} }} from '@mui/material';"]

    def dependencies(self) -> Dict[str, str]:
        return {
            "@mui/material": "^5.15.0",
            "@emotion/react": "^11.11.0",
            "@emotion/styled": "^11.11.0",
        }


class HtmlKit(StylingKit):
    """Native elements with a configurable class set."""

    classes: Dict[str, str] = {}

    def _cls(self, role: str) -> str:
        return f'className="{self.classes[role]}"'

    def _error(self, view: FieldView) -> List[str]:
        if not view.error_message:
            return []
        return [
            f"{{{view.error_condition} && (",
            f"  <p {self._cls('error')}>{{{view.error_message}}}</p>",
            ")}",
        ]

    def _help(self, view: FieldView) -> List[str]:
        if not view.field.help_text:
            return []
        return [f"<small {self._cls('help')}>{jsx_text(view.field.help_text)}</small>"]

    def _wrap(self, view: FieldView, body: List[str]) -> List[str]:
        return [f"<div {self._cls('group')}>"] + indent_lines(body + self._error(view) + self._help(view)) + ["</div>"]

    def _label(self, view: FieldView) -> str:
        return f'<label htmlFor="{view.name}" {self._cls("label")}>{view.label}</label>'

    def render_input(self, view: FieldView) -> List[str]:
        if view.control == TEXTAREA:
            attrs = attrs_line(
                [f'id="{view.name}"', "rows={4}", self._cls("input"), view.placeholder_attr] + view.attrs
            )
            control = f"<textarea {attrs} />"
        else:
            attrs = attrs_line(
                [f'id="{view.name}"', f'type="{view.input_type}"', self._cls("input"), view.placeholder_attr]
                + view.attrs
                + view.extra_input_attrs
            )
            control = f"<input {attrs} />"
        return self._wrap(view, [self._label(view), control])

    def render_select(self, view: FieldView) -> List[str]:
        attrs = attrs_line(
            [f'id="{view.name}"', self._cls("input")] + (["multiple"] if view.multiple else []) + view.attrs
        )
        options = [] if view.multiple else ['  <option value="">Select...</option>']
        for option in view.field.options:
            options.append(
                f'  <option value="{jsx_attr(option.value)}">{jsx_text(option.label)}</option>'
            )
        return self._wrap(view, [self._label(view), f"<select {attrs}>"] + options + ["</select>"])

    def render_checkbox(self, view: FieldView) -> List[str]:
        attrs = attrs_line([f'id="{view.name}"', 'type="checkbox"', self._cls("check")] + view.attrs)
        return self._wrap(
            view,
            [
                f'<label htmlFor="{view.name}" {self._cls("checkLabel")}>',
                f"  <input {attrs} />",
                f"  <span>{view.label}</span>",
                "</label>",
            ],
        )

    def render_radio(self, view: FieldView) -> List[str]:
        body = [f"<legend {self._cls('label')}>{view.label}</legend>"]
        for index, (label, _, attrs) in enumerate(view.option_attrs):
            option_id = f"{view.name}-{index}"
            input_attrs = attrs_line([f'id="{option_id}"', 'type="radio"', self._cls("check")] + attrs)
            body += [
                f'<label htmlFor="{option_id}" {self._cls("checkLabel")}>',
                f"  <input {input_attrs} />",
                f"  <span>{jsx_text(label)}</span>",
                "</label>",
            ]
        return [f"<fieldset {self._cls('group')}>"] + indent_lines(body + self._error(view) + self._help(view)) + ["</fieldset>"]

    def form_open(self, submit_handler: str) -> str:
        return f"<form noValidate onSubmit={{{submit_handler}}} {self._cls('form')}>"

    def form_close(self) -> str:
        return "</form>"

    def submit_button(self, submitting_expr: str) -> str:
        return (
            f'<button type="submit" disabled={{{submitting_expr}}} {self._cls("button")}>\n'
            f"  {{{submitting_expr} ? 'Submitting...' : 'Submit'}}\n"
            "</button>"
        )


class TailwindKit(HtmlKit):
    styling = Styling.TAILWIND
    classes = {
        "form": "space-y-4",
        "group": "flex flex-col gap-1",
        "label": "text-sm font-medium text-gray-700",
        "input": "rounded-md border border-gray-300 px-3 py-2 focus:border-blue-500 focus:outline-none",
        "check": "h-4 w-4 rounded border-gray-300",
        "checkLabel": "inline-flex items-center gap-2 text-sm",
        "error": "text-sm text-red-600",
        "help": "text-xs text-gray-500",
        "button": "rounded-md bg-blue-600 px-4 py-2 text-white disabled:opacity-50",
    }

    def dev_dependencies(self) -> Dict[str, str]:
        return {"tailwindcss": "^3.4.0", "postcss": "^8.4.0", "autoprefixer": "^10.4.0"}


class CssKit(HtmlKit):
    styling = Styling.CSS
    classes = {
        "form": "form",
        "group": "form-group",
        "label": "form-label",
        "input": "form-input",
        "check": "form-check-input",
        "checkLabel": "form-check",
        "error": "form-error",
        "help": "form-help",
        "button": "form-submit",
    }


_KITS = {
    Styling.BOOTSTRAP: BootstrapKit,
    Styling.MATERIAL: MaterialKit,
    Styling.TAILWIND: TailwindKit,
    Styling.CSS: CssKit,
}


def create_styling_kit(styling: Styling) -> StylingKit:
    """Create a fresh kit; kits track which components were used."""
    return _KITS[styling]()

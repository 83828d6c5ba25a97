"""Escaping helpers for text placed into generated JSX."""

from ...core.type_maps import js_literal


def jsx_text(text: str) -> str:
    """Escape text used as JSX element content."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
    )


def jsx_attr(text: str) -> str:
    """Escape text used inside a double-quoted JSX attribute."""
    return str(text).replace("&", "&amp;").replace('"', "&quot;")


def js_string(text: str) -> str:
    """Single-quoted JavaScript string literal."""
    return js_literal(str(text))


def attrs_line(attrs) -> str:
    """Join JSX attributes, skipping empty ones."""
    return " ".join(attr for attr in attrs if attr)

"""HTML tag builder and escaping helpers.

Escaping is delegated to :mod:`markupsafe`, the same escaper Jinja2 uses for
the page layout, so markup written by widgets and by templates agrees.
"""

from __future__ import annotations

import io
from typing import Any, TextIO

from markupsafe import Markup, escape

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"}
)


def minimize_entities(text: str) -> Markup:
    return escape(text)


class HtmlTag:
    """A single HTML element with ordered attributes and optional content."""

    def __init__(self, tag_name: str, attributes: dict[str, Any] | None = None) -> None:
        self.tag_name = tag_name
        self._attributes: dict[str, Any] = {}
        self._content: str | None = None
        self._content_type = "text/plain"
        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)

    def set_attribute(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    def get_attribute(self, name: str) -> Any:
        return self._attributes.get(name)

    def remove_attribute(self, name: str) -> None:
        self._attributes.pop(name, None)

    def set_content(self, content: str, content_type: str = "text/plain") -> None:
        self._content = content
        self._content_type = content_type

    def _attribute_string(self) -> str:
        parts: list[str] = []
        for name, value in self._attributes.items():
            if value is None:
                continue
            parts.append(f' {name}="{escape(str(value))}"')
        return "".join(parts)

    def open(self, out: TextIO) -> None:
        out.write(f"<{self.tag_name}{self._attribute_string()}>")

    def close(self, out: TextIO) -> None:
        out.write(f"</{self.tag_name}>")

    def display(self, out: TextIO) -> None:
        if self.tag_name in VOID_ELEMENTS:
            out.write(f"<{self.tag_name}{self._attribute_string()} />")
            return

        self.open(out)
        if self._content is not None:
            # text/xml content is trusted markup
            if self._content_type == "text/xml":
                out.write(self._content)
            else:
                out.write(escape(self._content))
        self.close(out)

    def __str__(self) -> str:
        buf = io.StringIO()
        self.display(buf)
        return buf.getvalue()


def display_inline_javascript(javascript: str, out: TextIO) -> None:
    if javascript != "":
        out.write('<script type="text/javascript">')
        out.write("\n//<![CDATA[\n")
        out.write(javascript.rstrip())
        out.write("\n//]]>\n</script>")


def quote_javascript_string(value: str) -> str:
    """Quote a Python string as a single-quoted JavaScript literal."""

    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("</", "<\\/")
    )
    return f"'{escaped}'"

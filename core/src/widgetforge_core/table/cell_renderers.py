"""Per-row rendering units for table-view columns.

A cell renderer's properties are filled from each row's data object through
:class:`CellRendererMapping` entries before the renderer is rendered.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TextIO

from markupsafe import escape

from widgetforge_core.exceptions import WidgetForgeError, WidgetNotFoundError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.markup import HtmlTag
from widgetforge_core.message import Message
from widgetforge_core.ui_object import UIObject, UIParent

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def css_class_for_type(cls: type) -> str:
    return "widgetforge-" + _CAMEL_BOUNDARY.sub("-", cls.__name__).lower()


class CellRenderer(UIObject):
    def __init__(self, id: str | None = None) -> None:
        super().__init__()
        self.id = id
        self.sensitive = True
        self.messages: list[Message] = []

    def init(self) -> None:
        pass

    def process(self) -> None:
        pass

    def render(self, out: TextIO) -> None:
        raise NotImplementedError

    def get_messages(self) -> list[Message]:
        return list(self.messages)

    def has_message(self) -> bool:
        return bool(self.messages)

    def get_inheritance_css_class_names(self) -> list[str]:
        """CSS classes for each renderer class between CellRenderer and this one."""

        classes: list[str] = []
        for cls in reversed(type(self).__mro__):
            if isinstance(cls, type) and issubclass(cls, CellRenderer) and cls is not CellRenderer:
                classes.append(css_class_for_type(cls))
        return classes

    def get_base_css_class_names(self) -> list[str]:
        return []

    def get_data_specific_css_class_names(self) -> list[str]:
        return []

    def get_css_class_names(self) -> list[str]:
        return (
            self.get_inheritance_css_class_names()
            + self.get_base_css_class_names()
            + self.get_data_specific_css_class_names()
            + super().get_css_class_names()
        )


class TextCellRenderer(CellRenderer):
    def __init__(self, text: Any = "", content_type: str = "text/plain", *, id: str | None = None) -> None:
        super().__init__(id)
        self.text = text
        self.content_type = content_type

    def render(self, out: TextIO) -> None:
        if not self.visible:
            return

        content = "" if self.text is None else str(self.text)
        if not self.sensitive:
            span = HtmlTag("span", {"class": "widgetforge-insensitive"})
            span.set_content(content, self.content_type)
            span.display(out)
        elif self.content_type == "text/xml":
            out.write(content)
        else:
            out.write(escape(content))


class NullTextCellRenderer(TextCellRenderer):
    """Shows ``null_text`` when the mapped text is None."""

    def __init__(self, text: Any = None, *, null_text: str = "<none>", id: str | None = None) -> None:
        super().__init__(text, id=id)
        self.null_text = null_text

    def render(self, out: TextIO) -> None:
        if not self.visible:
            return

        if self.text is None:
            span = HtmlTag("span", {"class": "widgetforge-null-text-cell-renderer-null"})
            span.set_content(self.null_text)
            span.display(out)
        else:
            super().render(out)


class BooleanCellRenderer(CellRenderer):
    def __init__(
        self,
        value: bool = False,
        *,
        true_content: str = "✓",
        false_content: str = "",
        id: str | None = None,
    ) -> None:
        super().__init__(id)
        self.value = value
        self.true_content = true_content
        self.false_content = false_content

    def render(self, out: TextIO) -> None:
        if not self.visible:
            return

        out.write(escape(self.true_content if self.value else self.false_content))

    def get_data_specific_css_class_names(self) -> list[str]:
        state = "true" if self.value else "false"
        return [f"widgetforge-boolean-cell-renderer-{state}"]


@dataclass(frozen=True)
class CellRendererMapping:
    """Maps a field of a row's data object onto a renderer property."""

    property: str
    field: str


def _lookup_field(data: Any, field: str) -> Any:
    if isinstance(data, Mapping):
        if field not in data:
            raise WidgetForgeError(f"Row data has no field '{field}'.")
        return data[field]
    if not hasattr(data, field):
        raise WidgetForgeError(f"Row data has no field '{field}'.")
    return getattr(data, field)


class CellRendererSet:
    def __init__(self) -> None:
        self._renderers: list[CellRenderer] = []
        self._mappings: dict[int, list[CellRendererMapping]] = {}
        self._mappings_applied = False

    def add_renderer(self, renderer: CellRenderer) -> None:
        self._renderers.append(renderer)
        self._mappings.setdefault(id(renderer), [])

    def add_mapping_to_renderer(self, renderer: CellRenderer, mapping: CellRendererMapping) -> None:
        if id(renderer) not in self._mappings:
            raise WidgetNotFoundError("Cell renderer is not part of this set.", id=renderer.id)
        self._mappings[id(renderer)].append(mapping)

    def get_mappings_by_renderer(self, renderer: CellRenderer) -> list[CellRendererMapping]:
        return list(self._mappings.get(id(renderer), []))

    def apply_mappings_to_renderer(self, renderer: CellRenderer, data: Any) -> None:
        for mapping in self._mappings.get(id(renderer), []):
            setattr(renderer, mapping.property, _lookup_field(data, mapping.field))
        self._mappings_applied = True

    def mappings_applied(self) -> bool:
        return self._mappings_applied

    def get_first(self) -> CellRenderer | None:
        return self._renderers[0] if self._renderers else None

    def get_renderer_by_id(self, renderer_id: str) -> CellRenderer:
        for renderer in self._renderers:
            if renderer.id == renderer_id:
                return renderer
        raise WidgetNotFoundError(f"Cell renderer with id '{renderer_id}' not found.", id=renderer_id)

    def copy(self) -> CellRendererSet:
        clone = CellRendererSet()
        for renderer in self._renderers:
            clone.add_renderer(renderer)
            for mapping in self._mappings[id(renderer)]:
                clone.add_mapping_to_renderer(renderer, mapping)
        return clone

    def __iter__(self) -> Iterator[CellRenderer]:
        return iter(list(self._renderers))

    def __len__(self) -> int:
        return len(self._renderers)


class CellRendererContainer(UIObject, UIParent):
    """A UI object that owns an ordered set of cell renderers."""

    def __init__(self) -> None:
        super().__init__()
        self.renderers = CellRendererSet()

    def _iter_children(self) -> Iterator[UIObject]:
        return iter(self.renderers)

    def add_renderer(self, renderer: CellRenderer) -> None:
        self.renderers.add_renderer(renderer)
        renderer.parent = self

    def add_mapping_to_renderer(self, renderer: CellRenderer, mapping: CellRendererMapping) -> None:
        self.renderers.add_mapping_to_renderer(renderer, mapping)

    def get_renderers(self) -> list[CellRenderer]:
        return list(self.renderers)

    def get_renderer(self, renderer_id: str) -> CellRenderer:
        return self.renderers.get_renderer_by_id(renderer_id)

    def get_first_renderer(self) -> CellRenderer | None:
        return self.renderers.get_first()

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        for renderer in self.renderers:
            entry_set.add_entry_set(renderer.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        for renderer in self.renderers:
            entry_set.add_entry_set(renderer.get_available_html_head_entry_set())
        return entry_set

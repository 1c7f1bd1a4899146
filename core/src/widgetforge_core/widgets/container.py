from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, TextIO, cast

from widgetforge_core.exceptions import InvalidClassError, WidgetForgeError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.markup import HtmlTag
from widgetforge_core.message import Message
from widgetforge_core.ui_object import UIObject, UIParent, require_class
from widgetforge_core.widgets.widget import Widget

logger = logging.getLogger(__name__)


class Container(Widget, UIParent):
    """A widget holding an ordered list of child widgets.

    Lifecycle calls run the base widget behaviour first and then recurse over
    the children in order.
    """

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.children: list[Widget] = []

    def _iter_children(self) -> Iterator[UIObject]:
        return iter(list(self.children))

    def _adopt(self, widget: Widget) -> None:
        if widget.parent is not None:
            raise WidgetForgeError("Attempting to add a widget that already has a parent.")
        widget.parent = self

    def add(self, widget: Widget) -> None:
        self.pack_end(widget)

    def pack_end(self, widget: Widget) -> None:
        self._adopt(widget)
        self.children.append(widget)

    def pack_start(self, widget: Widget) -> None:
        self._adopt(widget)
        self.children.insert(0, widget)

    def insert_before(self, widget: Widget, before: Widget) -> None:
        index = self._index_of(before)
        self._adopt(widget)
        self.children.insert(index, widget)

    def add_child(self, child: Any) -> None:
        if not isinstance(child, Widget):
            raise InvalidClassError(
                f"Only widgets may be nested within {type(self).__name__} objects.",
                value=child,
            )
        self.add(child)

    def remove(self, widget: Widget) -> Widget:
        self.children.pop(self._index_of(widget))
        widget.parent = None
        return widget

    def replace(self, widget: Widget, replacement: Widget) -> Widget:
        index = self._index_of(widget)
        self._adopt(replacement)
        self.children[index] = replacement
        widget.parent = None
        return widget

    def _index_of(self, widget: Widget) -> int:
        for index, child in enumerate(self.children):
            if child is widget:
                return index
        raise WidgetForgeError(f"{widget!r} is not a child of {self!r}.")

    def get_children(self, kind: type | tuple[type, ...] | None = None) -> list[Widget]:
        if kind is None:
            return list(self.children)
        kind = require_class(kind)
        return [child for child in self.children if isinstance(child, kind)]

    def get_first(self) -> Widget | None:
        return self.children[0] if self.children else None

    def init(self) -> None:
        super().init()
        for child in self.children:
            child.init()

    def process(self) -> None:
        super().process()
        for child in self.children:
            child.process()

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        super().display(out)
        self.display_children(out)

    def display_children(self, out: TextIO) -> None:
        for child in self.children:
            child.display(out)

    def get_messages(self) -> list[Message]:
        messages = super().get_messages()
        for child in self.children:
            messages.extend(child.get_messages())
        return messages

    def has_message(self) -> bool:
        return super().has_message() or any(child.has_message() for child in self.children)

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        for child in self.children:
            entry_set.add_entry_set(child.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        for child in self.children:
            entry_set.add_entry_set(child.get_available_html_head_entry_set())
        return entry_set

    def get_focusable_html_id(self) -> str | None:
        for child in self.children:
            focusable = child.get_focusable_html_id()
            if focusable is not None:
                return focusable
        return None

    def copy(self, id_suffix: str = "") -> Container:
        clone = cast(Container, super().copy(id_suffix))
        clone.children = []
        for child in self.children:
            child_copy = child.copy(id_suffix)
            child_copy.parent = clone
            clone.children.append(child_copy)
        return clone

    def print_widget_tree(self, out: TextIO, level: int = 0) -> None:
        super().print_widget_tree(out, level)
        for child in self.children:
            child.print_widget_tree(out, level + 1)


class DisplayableContainer(Container):
    """A container that wraps its children in a ``<div>``."""

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        Widget.display(self, out)

        div = HtmlTag("div", {"id": self.id, "class": self.get_css_class_string()})
        for name, value in self.get_data_attributes().items():
            div.set_attribute(name, value)
        div.open(out)
        self.display_children(out)
        div.close(out)

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-displayable-container"] + super().get_css_class_names()

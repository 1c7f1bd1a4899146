from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from widgetforge_core.exceptions import InvalidClassError, WidgetForgeError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.ui_object import UIObject, UIParent
from widgetforge_core.widgets.widget import Widget

logger = logging.getLogger(__name__)


class InputCell(UIObject, UIParent):
    """A cell of a table-view input row.

    The cell holds one prototype widget. Each row of the input row gets its
    own copy of the prototype, with ``_<column id>_<row index>`` appended to
    the ids in the copied tree.
    """

    def __init__(self, widget: Widget | None = None) -> None:
        super().__init__()
        self._prototype: Widget | None = None
        self._widgets: dict[int, Widget] = {}
        if widget is not None:
            self.set_prototype_widget(widget)

    def set_prototype_widget(self, widget: Widget) -> None:
        self._prototype = widget

    def get_prototype_widget(self) -> Widget:
        if self._prototype is None:
            raise WidgetForgeError("Input cell does not have a prototype widget.")
        return self._prototype

    def add_child(self, child: Any) -> None:
        if not isinstance(child, Widget):
            raise InvalidClassError(
                "Only widgets may be nested within InputCell objects.", value=child
            )
        if self._prototype is not None:
            raise WidgetForgeError("Only one widget may be nested within an input cell.")
        self.set_prototype_widget(child)

    def _iter_children(self) -> Iterator[UIObject]:
        return iter(list(self._widgets.values()))

    def get_column_id(self) -> str:
        column_id = getattr(self.parent, "id", None)
        if column_id is None:
            raise WidgetForgeError("Input cell must belong to a column with an id.")
        return column_id

    def get_widget(self, index: int) -> Widget:
        """Get the copy of the prototype widget for the row at ``index``."""

        widget = self._widgets.get(index)
        if widget is None:
            widget = self.get_prototype_widget().copy(f"_{self.get_column_id()}_{index}")
            widget.parent = self
            self._widgets[index] = widget
            logger.debug("Created input cell widget %s", widget.id)
        return widget

    def get_widgets(self) -> dict[int, Widget]:
        return dict(self._widgets)

    def unset_widget(self, index: int) -> None:
        widget = self._widgets.pop(index, None)
        if widget is not None:
            widget.parent = None

    def init(self, index: int) -> None:
        self.get_widget(index).init()

    def process(self, index: int) -> None:
        self.get_widget(index).process()

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        if self._prototype is not None and self.is_visible():
            entry_set.add_entry_set(self._prototype.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        if self._prototype is not None:
            entry_set.add_entry_set(self._prototype.get_available_html_head_entry_set())
        return entry_set

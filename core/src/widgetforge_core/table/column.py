"""Table-view columns.

If a column has an id, a CSS class derived from it is added to the column's
cells, with underscores replaced by dashes: a column with id ``price_column``
gets the class ``price-column``. Automatically assigned ids add no class.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TextIO

from widgetforge_core.exceptions import InvalidClassError, WidgetForgeError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.markup import HtmlTag, minimize_entities
from widgetforge_core.message import Message
from widgetforge_core.table.cell_renderers import CellRenderer, CellRendererContainer
from widgetforge_core.table.input_cell import InputCell
from widgetforge_core.table.rows import TableViewInputRow
from widgetforge_core.ui_object import UIObject

if TYPE_CHECKING:
    from widgetforge_core.table.view import TableView


class TableViewColumn(CellRendererContainer):
    def __init__(self, id: str | None = None, title: str = "") -> None:
        super().__init__()
        self.id = id
        self.title = title
        self.abbreviated_title: str | None = None
        self._input_cell: InputCell | None = None
        self._has_auto_id = False

    @property
    def view(self) -> TableView | None:
        from widgetforge_core.table.view import TableView

        parent = self.parent
        return parent if isinstance(parent, TableView) else None

    @property
    def has_auto_id(self) -> bool:
        return self._has_auto_id

    def _iter_children(self) -> Iterator[UIObject]:
        children: list[UIObject] = list(self.renderers)
        if self._input_cell is not None:
            children.append(self._input_cell)
        return iter(children)

    def init(self) -> None:
        for renderer in self.renderers:
            renderer.init()

        if self.id is None:
            self.id = self.get_unique_id()
            self._has_auto_id = True

        if self._input_cell is not None:
            view = self.view
            input_row = view.get_first_row_by_class(TableViewInputRow) if view is not None else None
            if not isinstance(input_row, TableViewInputRow):
                raise WidgetForgeError("Table-view does not have an input row.")
            input_row.add_input_cell(self._input_cell, self.id)

    def process(self) -> None:
        for renderer in self.renderers:
            renderer.process()

    # header

    def has_header(self) -> bool:
        return self.visible and len(self.title) > 0

    def display_header_cell(self, out: TextIO) -> None:
        if not self.visible:
            return

        th_tag = HtmlTag("th", self.get_th_attributes())
        th_tag.set_attribute("scope", "col")
        th_tag.open(out)
        self.display_header(out)
        th_tag.close(out)

    def display_header(self, out: TextIO) -> None:
        if self.abbreviated_title is None:
            out.write(minimize_entities(self.title) if self.title else "&nbsp;")
        else:
            abbr_tag = HtmlTag("abbr", {"title": self.title})
            abbr_tag.set_content(self.abbreviated_title)
            abbr_tag.display(out)

    # cells

    def display(self, row: Any, out: TextIO) -> None:
        """Display this column's cell for one row of data."""

        if not self.visible:
            return

        self.setup_renderers(row)
        self.display_renderers(row, out)

    def setup_renderers(self, row: Any) -> None:
        if len(self.renderers) == 0:
            raise WidgetForgeError("No renderer has been provided for this column.")

        view = self.view
        sensitive = view.is_sensitive() if view is not None else True

        for renderer in self.renderers:
            self.renderers.apply_mappings_to_renderer(renderer, row)
            renderer.sensitive = renderer.sensitive and sensitive

    def display_renderers(self, row: Any, out: TextIO) -> None:
        td_tag = HtmlTag("td", self.get_td_attributes())
        td_tag.open(out)
        self.display_renderers_internal(row, out)
        td_tag.close(out)

    def display_renderers_internal(self, row: Any, out: TextIO) -> None:
        for i, renderer in enumerate(self.renderers):
            if i > 0:
                out.write(" ")
            renderer.render(out)

    def get_messages(self, row: Any) -> list[Message]:
        for renderer in self.renderers:
            self.renderers.apply_mappings_to_renderer(renderer, row)

        messages: list[Message] = []
        for renderer in self.renderers:
            messages.extend(renderer.get_messages())
        return messages

    def has_message(self, row: Any) -> bool:
        for renderer in self.renderers:
            self.renderers.apply_mappings_to_renderer(renderer, row)
        return any(renderer.has_message() for renderer in self.renderers)

    # children

    def add_child(self, child: Any) -> None:
        if isinstance(child, CellRenderer):
            self.add_renderer(child)
        elif isinstance(child, InputCell):
            if self._input_cell is not None:
                raise WidgetForgeError("Only one input cell may be added to a table-view column.")
            self.set_input_cell(child)
        else:
            raise InvalidClassError(
                "Only CellRenderer and InputCell objects may be nested within "
                "TableViewColumn objects.",
                value=child,
            )

    def set_input_cell(self, cell: InputCell) -> None:
        self._input_cell = cell
        cell.parent = self

    def get_input_cell(self) -> InputCell | None:
        return self._input_cell

    # attributes

    def get_tr_attributes(self, row: Any) -> dict[str, Any]:
        return {}

    def get_td_attributes(self) -> dict[str, Any]:
        return {"class": self.get_css_class_string()}

    def get_th_attributes(self) -> dict[str, Any]:
        return {"class": self.get_css_class_string()}

    def get_base_css_class_names(self) -> list[str]:
        return []

    def get_css_class_names(self) -> list[str]:
        classes: list[str] = []

        if self.id is not None and not self._has_auto_id:
            classes.append(self.id.replace("_", "-"))

        classes.extend(self.get_base_css_class_names())
        classes.extend(self.classes)

        first_renderer = self.renderers.get_first()
        if first_renderer is not None:
            classes.extend(first_renderer.get_inheritance_css_class_names())
            classes.extend(first_renderer.get_base_css_class_names())
            if self.renderers.mappings_applied():
                classes.extend(first_renderer.get_data_specific_css_class_names())
            classes.extend(first_renderer.classes)

        return classes

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        if self._input_cell is not None:
            entry_set.add_entry_set(self._input_cell.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        if self._input_cell is not None:
            entry_set.add_entry_set(self._input_cell.get_available_html_head_entry_set())
        return entry_set

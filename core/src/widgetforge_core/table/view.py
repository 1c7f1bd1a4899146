from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, TextIO

from widgetforge_core.exceptions import InvalidClassError, WidgetForgeError, WidgetNotFoundError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.markup import HtmlTag, display_inline_javascript
from widgetforge_core.message import Message
from widgetforge_core.table.column import TableViewColumn
from widgetforge_core.table.rows import TableViewRow
from widgetforge_core.table.store import TableStore
from widgetforge_core.ui_object import UIObject, UIParent, require_class
from widgetforge_core.widgets.widget import Widget

logger = logging.getLogger(__name__)


class TableView(Widget, UIParent):
    """A ``<table>`` showing one row per data object of its model.

    Columns render the data rows; extra rows such as
    :class:`~widgetforge_core.table.rows.TableViewInputRow` follow them.
    """

    def __init__(self, id: str | None = None, model: TableStore | None = None) -> None:
        super().__init__(id)
        self.model = model if model is not None else TableStore()
        self.columns: list[TableViewColumn] = []
        self.extra_rows: list[TableViewRow] = []

    def _iter_children(self) -> Iterator[UIObject]:
        children: list[UIObject] = [*self.columns, *self.extra_rows]
        return iter(children)

    def append_column(self, column: TableViewColumn) -> None:
        if column.parent is not None:
            raise WidgetForgeError("Attempting to add a column that already has a parent.")
        column.parent = self
        self.columns.append(column)

    def append_row(self, row: TableViewRow) -> None:
        if row.parent is not None:
            raise WidgetForgeError("Attempting to add a row that already has a parent.")
        row.parent = self
        self.extra_rows.append(row)

    def add_child(self, child: Any) -> None:
        if isinstance(child, TableViewColumn):
            self.append_column(child)
        elif isinstance(child, TableViewRow):
            self.append_row(child)
        else:
            raise InvalidClassError(
                "Only TableViewColumn and TableViewRow objects may be nested within "
                "TableView objects.",
                value=child,
            )

    def get_column(self, column_id: str) -> TableViewColumn:
        for column in self.columns:
            if column.id == column_id:
                return column
        raise WidgetNotFoundError(f"Column with an id of '{column_id}' not found.", id=column_id)

    def get_columns(self) -> list[TableViewColumn]:
        return list(self.columns)

    def get_visible_columns(self) -> list[TableViewColumn]:
        return [column for column in self.columns if column.visible]

    def get_first_row_by_class(self, kind: type | tuple[type, ...]) -> TableViewRow | None:
        kind = require_class(kind)
        for row in self.extra_rows:
            if isinstance(row, kind):
                return row
        return None

    def has_header(self) -> bool:
        return any(column.has_header() for column in self.columns)

    # lifecycle

    def init(self) -> None:
        super().init()
        for column in self.columns:
            column.init()
        for row in self.extra_rows:
            row.init()

    def process(self) -> None:
        super().process()
        for column in self.columns:
            column.process()
        for row in self.extra_rows:
            row.process()

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        super().display(out)

        table_tag = HtmlTag("table", {"id": self.id, "class": self.get_css_class_string()})
        for name, value in self.get_data_attributes().items():
            table_tag.set_attribute(name, value)
        table_tag.open(out)

        if self.has_header():
            self.display_header(out)

        tbody_tag = HtmlTag("tbody")
        tbody_tag.open(out)
        self.display_body(out)
        for row in self.extra_rows:
            row.display(out)
        tbody_tag.close(out)

        table_tag.close(out)

        javascript = self.get_inline_javascript()
        if javascript:
            display_inline_javascript(javascript, out)

    def display_header(self, out: TextIO) -> None:
        thead_tag = HtmlTag("thead")
        thead_tag.open(out)
        out.write("<tr>")
        for column in self.columns:
            column.display_header_cell(out)
        out.write("</tr>")
        thead_tag.close(out)

    def display_body(self, out: TextIO) -> None:
        for count, row in enumerate(self.model):
            tr_attributes: dict[str, Any] = {}
            for column in self.columns:
                tr_attributes.update(column.get_tr_attributes(row))

            classes = [tr_attributes.pop("class")] if tr_attributes.get("class") else []
            if count % 2 == 1:
                classes.append("odd")

            tr_tag = HtmlTag("tr", tr_attributes)
            tr_tag.set_attribute("class", " ".join(classes) if classes else None)
            tr_tag.open(out)
            for column in self.columns:
                column.display(row, out)
            tr_tag.close(out)

    def get_inline_javascript(self) -> str:
        return "".join(column.get_inline_javascript() for column in self.columns)

    # aggregation

    def get_messages(self) -> list[Message]:
        messages = super().get_messages()
        for row in self.model:
            for column in self.columns:
                messages.extend(column.get_messages(row))
        for extra_row in self.extra_rows:
            messages.extend(extra_row.get_messages())
        return messages

    def has_message(self) -> bool:
        return bool(self.get_messages())

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        for child in self._iter_children():
            entry_set.add_entry_set(child.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        for child in self._iter_children():
            entry_set.add_entry_set(child.get_available_html_head_entry_set())
        return entry_set

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-table-view"] + super().get_css_class_names()

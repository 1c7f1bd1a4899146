from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TextIO

from widgetforge_core.exceptions import WidgetNotFoundError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.markup import HtmlTag
from widgetforge_core.message import Message
from widgetforge_core.table.input_cell import InputCell
from widgetforge_core.ui_object import UIObject, UIParent
from widgetforge_core.widgets.form import Form
from widgetforge_core.widgets.widget import Widget

if TYPE_CHECKING:
    from widgetforge_core.table.view import TableView

logger = logging.getLogger(__name__)


class TableViewRow(UIObject):
    """An extra row displayed after the data rows of a table view."""

    def __init__(self, id: str | None = None) -> None:
        super().__init__()
        self.id = id

    @property
    def view(self) -> TableView | None:
        from widgetforge_core.table.view import TableView

        parent = self.parent
        return parent if isinstance(parent, TableView) else None

    def init(self) -> None:
        if self.id is None:
            self.id = self.get_unique_id()

    def process(self) -> None:
        pass

    def display(self, out: TextIO) -> None:
        raise NotImplementedError

    def get_messages(self) -> list[Message]:
        return []

    def has_message(self) -> bool:
        return bool(self.get_messages())


class TableViewInputRow(TableViewRow, UIParent):
    """Rows of input widgets, one widget per input cell and row.

    The indexes of the displayed rows travel in the hidden field
    ``<id>_rows`` so the same rows are processed on submit.
    """

    def __init__(self, id: str | None = None, number_of_rows: int = 1) -> None:
        super().__init__(id)
        self.number_of_rows = number_of_rows
        self._input_cells: dict[str, InputCell] = {}
        self._row_indexes: list[int] | None = None

    @property
    def rows_field(self) -> str:
        return f"{self.id}_rows"

    def add_input_cell(self, cell: InputCell, column_id: str) -> None:
        self._input_cells[column_id] = cell

    def get_input_cell(self, column_id: str) -> InputCell:
        cell = self._input_cells.get(column_id)
        if cell is None:
            raise WidgetNotFoundError(
                f"No input cell for column '{column_id}' in this input row.", id=column_id
            )
        return cell

    def _iter_children(self) -> Iterator[UIObject]:
        return iter(list(self._input_cells.values()))

    def get_row_indexes(self) -> list[int]:
        if self._row_indexes is None:
            self._row_indexes = self._get_submitted_row_indexes()
        if self._row_indexes is None:
            self._row_indexes = list(range(self.number_of_rows))
        return list(self._row_indexes)

    def _get_submitted_row_indexes(self) -> list[int] | None:
        form = self.get_first_ancestor(Form)
        if not isinstance(form, Form) or not form.is_submitted():
            return None

        raw = form.get_submitted_value(self.rows_field)
        if raw is None:
            return None
        return [int(part) for part in raw.split(",") if part.isdigit()]

    def get_widget(self, column_id: str, index: int) -> Widget:
        return self.get_input_cell(column_id).get_widget(index)

    def init(self) -> None:
        super().init()
        # indexes are read in process(), once form data is available
        for index in range(self.number_of_rows):
            for cell in self._input_cells.values():
                cell.init(index)

    def process(self) -> None:
        self._row_indexes = None
        for index in self.get_row_indexes():
            for cell in self._input_cells.values():
                cell.process(index)

    def get_row_values(self, column_id: str) -> dict[int, Any]:
        """Get the value of each row's widget in a column, keyed by row index."""

        cell = self.get_input_cell(column_id)
        return {
            index: getattr(cell.get_widget(index), "value", None)
            for index in self.get_row_indexes()
        }

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        view = self.view
        columns = view.get_visible_columns() if view is not None else []
        indexes = self.get_row_indexes()

        for index in indexes:
            tr_tag = HtmlTag("tr", {"class": "widgetforge-table-view-input-row"})
            tr_tag.open(out)
            for column in columns:
                td_tag = HtmlTag("td", column.get_td_attributes())
                td_tag.open(out)
                cell = self._input_cells.get(column.id) if column.id is not None else None
                if cell is None:
                    out.write("&nbsp;")
                else:
                    cell.get_widget(index).display(out)
                td_tag.close(out)
            tr_tag.close(out)

        form = self.get_first_ancestor(Form)
        if isinstance(form, Form):
            form.add_hidden_field(self.rows_field, ",".join(str(i) for i in indexes))

    def get_messages(self) -> list[Message]:
        messages: list[Message] = []
        for cell in self._input_cells.values():
            for widget in cell.get_widgets().values():
                messages.extend(widget.get_messages())
        return messages

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        for cell in self._input_cells.values():
            entry_set.add_entry_set(cell.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        for cell in self._input_cells.values():
            entry_set.add_entry_set(cell.get_available_html_head_entry_set())
        return entry_set

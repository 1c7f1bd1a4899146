from widgetforge_core.table.cell_renderers import (
    BooleanCellRenderer,
    CellRenderer,
    CellRendererContainer,
    CellRendererMapping,
    CellRendererSet,
    NullTextCellRenderer,
    TextCellRenderer,
)
from widgetforge_core.table.column import TableViewColumn
from widgetforge_core.table.input_cell import InputCell
from widgetforge_core.table.rows import TableViewInputRow, TableViewRow
from widgetforge_core.table.store import TableStore
from widgetforge_core.table.view import TableView

__all__ = [
    "BooleanCellRenderer",
    "CellRenderer",
    "CellRendererContainer",
    "CellRendererMapping",
    "CellRendererSet",
    "InputCell",
    "NullTextCellRenderer",
    "TableStore",
    "TableView",
    "TableViewColumn",
    "TableViewInputRow",
    "TableViewRow",
    "TextCellRenderer",
]

from PySide6.QtCore import QSortFilterProxyModel
from PySide6.QtWidgets import QAbstractItemView, QHeaderView, QTableView


class TableView(QTableView):
    """Read-only, single-row-select grid used by every list screen."""

    def __init__(self, parent=None, sortable: bool = True):
        super().__init__(parent)
        self.setSortingEnabled(sortable)
        self.setAlternatingRowColors(True)
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.verticalHeader().hide()
        header = self.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.Interactive)
        header.setStretchLastSection(True)

    def selected_source_row(self) -> int | None:
        """Row of the current selection in the underlying model (through any proxy)."""
        sel = self.selectionModel()
        if sel is None:
            return None
        picked = sel.selectedRows()
        if not picked:
            return None
        index = picked[0]
        model = self.model()
        while isinstance(model, QSortFilterProxyModel):
            index = model.mapToSource(index)
            model = model.sourceModel()
        return index.row()

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QBrush, QColor

ALERT_RED = "#b91c1c"
OK_GREEN = "#15803d"


class RowTableModel(QAbstractTableModel):
    """
    List-of-records table. Subclasses set HEADERS and implement cells();
    colour() and NUMERIC_COLUMNS are optional.
    """

    HEADERS: list[str] = []
    NUMERIC_COLUMNS: frozenset[int] = frozenset()

    def __init__(self, rows=None):
        super().__init__()
        self._rows = list(rows or [])

    def cells(self, row) -> list:
        raise NotImplementedError

    def colour(self, row, column: int) -> str | None:
        return None

    def rowCount(self, parent=QModelIndex()):
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return 0 if parent.isValid() else len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row, col = self._rows[index.row()], index.column()
        if role in (Qt.DisplayRole, Qt.EditRole):
            return self.cells(row)[col]
        if role == Qt.ForegroundRole:
            colour = self.colour(row, col)
            return QBrush(QColor(colour)) if colour else None
        if role == Qt.TextAlignmentRole and col in self.NUMERIC_COLUMNS:
            return int(Qt.AlignRight | Qt.AlignVCenter)
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role == Qt.DisplayRole and orientation == Qt.Horizontal:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int):
        return self._rows[row]

    def rows(self) -> list:
        return list(self._rows)

    def replace(self, rows) -> None:
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def sort_values(self, row) -> list:
        """Raw per-column values for ordering; defaults to the display cells."""
        return self.cells(row)

    def sort_key(self, row, column: int):
        value = self.sort_values(row)[column]
        if isinstance(value, (int, float)):
            return (0, value, "")
        return (1, 0, str(value or "").lower())

    def sort(self, column, order=Qt.AscendingOrder):
        if not 0 <= column < len(self.HEADERS):
            return
        self.layoutAboutToBeChanged.emit()
        self._rows.sort(key=lambda r: self.sort_key(r, column), reverse=order == Qt.DescendingOrder)
        self.layoutChanged.emit()

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLineEdit, QLabel, QComboBox

from ...widgets.table_view import TableView

GROUP_FILTERS = [
    ("all", "All"),
    ("male", "Male"),
    ("female", "Female"),
    ("kids", "Kids"),
    ("unisex", "Unisex"),
]


class ProductView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.btn_add = QPushButton("Add")
        self.btn_edit = QPushButton("Edit")
        self.btn_del = QPushButton("Delete")
        self.btn_refresh = QPushButton("Refresh")
        for b in (self.btn_add, self.btn_edit, self.btn_del, self.btn_refresh):
            bar.addWidget(b)
        bar.addStretch(1)
        self.group = QComboBox()
        for value, label in GROUP_FILTERS:
            self.group.addItem(label, value)
        bar.addWidget(QLabel("Group:"))
        bar.addWidget(self.group)
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search by name or code…")
        bar.addWidget(self.search, 2)
        root.addLayout(bar)

        self.table = TableView()
        root.addWidget(self.table, 1)

        self.lbl_count = QLabel()
        self.lbl_count.setStyleSheet("color: #6b7280;")
        root.addWidget(self.lbl_count)

    def set_busy(self, busy: bool):
        if busy:
            self.lbl_count.setText("Loading...")

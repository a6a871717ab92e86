from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QPushButton, QLabel

from ..utils.pagination import total_pages, clamp_page


class Pager(QWidget):
    """Prev / 'Page x of y' / Next strip; hidden when everything fits on one page."""

    page_changed = Signal(int)

    def __init__(self, page_size: int, parent=None):
        super().__init__(parent)
        self.page_size = page_size
        self.page = 1
        self.pages = 1
        self.count = 0

        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addStretch(1)
        self.btn_prev = QPushButton("Previous")
        self.lbl = QLabel()
        self.btn_next = QPushButton("Next")
        lay.addWidget(self.btn_prev)
        lay.addWidget(self.lbl)
        lay.addWidget(self.btn_next)
        lay.addStretch(1)

        self.btn_prev.clicked.connect(lambda: self.set_page(self.page - 1))
        self.btn_next.clicked.connect(lambda: self.set_page(self.page + 1))
        self._refresh()

    def set_count(self, count: int) -> None:
        self.count = count
        self.pages = total_pages(count, self.page_size, at_least_one=True)
        self.page = clamp_page(self.page, count, self.page_size)
        self._refresh()

    def reset(self) -> None:
        self.set_page(1, emit=False)

    def set_page(self, page: int, emit: bool = True) -> None:
        page = clamp_page(page, self.count, self.page_size)
        changed = page != self.page
        self.page = page
        self._refresh()
        if changed and emit:
            self.page_changed.emit(page)

    def _refresh(self) -> None:
        self.lbl.setText(f"Page {self.page} of {self.pages}")
        self.btn_prev.setEnabled(self.page > 1)
        self.btn_next.setEnabled(self.page < self.pages)
        self.setVisible(self.pages > 1)

from __future__ import annotations

from PySide6.QtWidgets import QDialog, QDialogButtonBox, QFormLayout, QLabel, QVBoxLayout


class FormDialog(QDialog):
    """
    Modal field form with an inline error line under the fields.

    Subclasses add rows to `self.form` and implement `collect()`, which
    returns the payload dict or calls `fail()`. OK only closes the dialog
    once `collect()` succeeds; the accepted payload is kept in `payload()`.
    """

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self._payload: dict | None = None

        self.form = QFormLayout()
        self.lbl_error = QLabel()
        self.lbl_error.setObjectName("formError")
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)

        outer = QVBoxLayout(self)
        outer.addLayout(self.form)
        outer.addWidget(self.lbl_error)
        outer.addWidget(self.buttons)

    def collect(self) -> dict | None:
        raise NotImplementedError

    def fail(self, widget, message: str) -> None:
        self.lbl_error.setText(message)
        widget.setFocus()
        return None

    def get_payload(self) -> dict | None:
        self.lbl_error.clear()
        return self.collect()

    def accept(self):
        payload = self.get_payload()
        if payload is not None:
            self._payload = payload
            super().accept()

    def payload(self) -> dict | None:
        return self._payload

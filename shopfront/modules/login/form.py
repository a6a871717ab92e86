from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QDialog, QFormLayout, QLineEdit, QDialogButtonBox, QLabel, QApplication


class LoginForm(QDialog):
    """
    Sign-in dialog. `attempt(username, password)` returns an error message,
    or None when sign-in succeeded; on error the dialog stays open.
    """

    def __init__(self, parent=None, attempt: Optional[Callable[[str, str], Optional[str]]] = None, username: str = ""):
        super().__init__(parent)
        self.setWindowTitle("Sign in")
        self._attempt = attempt
        lay = QFormLayout(self)
        self.username = QLineEdit(username)
        self.password = QLineEdit()
        self.password.setEchoMode(QLineEdit.Password)
        lay.addRow("Username", self.username)
        lay.addRow("Password", self.password)
        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        self.lbl_error.setWordWrap(True)
        self.lbl_error.hide()
        lay.addRow(self.lbl_error)
        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.button(QDialogButtonBox.Ok).setText("Sign in")
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        lay.addRow(self.buttons)
        if username:
            self.password.setFocus()

    def get_values(self) -> tuple[str, str]:
        return self.username.text().strip(), self.password.text()

    def show_error(self, msg: str) -> None:
        self.lbl_error.setText(msg)
        self.lbl_error.setVisible(bool(msg))

    def accept(self):
        username, password = self.get_values()
        if not username or not password:
            self.show_error("Please enter both username and password.")
            return
        if self._attempt is not None:
            QApplication.setOverrideCursor(Qt.WaitCursor)
            try:
                err = self._attempt(username, password)
            finally:
                QApplication.restoreOverrideCursor()
            if err:
                self.show_error(err)
                self.password.clear()
                self.password.setFocus()
                return
        super().accept()

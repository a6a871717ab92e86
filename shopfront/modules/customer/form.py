from __future__ import annotations

import re

from PySide6.QtWidgets import QLineEdit, QPlainTextEdit

from ...utils.validators import collapse_spaces, non_empty, tidy_lines
from ...widgets.form_dialog import FormDialog

_EMAIL_RX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CustomerForm(FormDialog):
    """
    Add/edit a customer. Only the name is required; an email, when
    given, has to look like one. Text fields are whitespace-normalized.
    """

    def __init__(self, parent=None, initial: dict | None = None):
        super().__init__("Edit Customer" if initial else "Add Customer", parent)
        values = initial or {}

        self.name = QLineEdit(values.get("name") or "")
        self.phone = QLineEdit(values.get("phone") or "")
        self.email = QLineEdit(values.get("email") or "")
        self.addr = QPlainTextEdit(values.get("address") or "")
        self.addr.setPlaceholderText("Address (optional)")
        self.addr.setFixedHeight(70)

        for label, widget in (("Name*", self.name), ("Phone", self.phone),
                              ("Email", self.email), ("Address", self.addr)):
            self.form.addRow(label, widget)

    def collect(self) -> dict | None:
        if not non_empty(self.name.text()):
            return self.fail(self.name, "Customer name is required")
        email = self.email.text().strip()
        if email and _EMAIL_RX.match(email) is None:
            return self.fail(self.email, "Enter a valid email address")
        return {
            "name": collapse_spaces(self.name.text()),
            "phone": collapse_spaces(self.phone.text()),
            "email": email,
            "address": tidy_lines(self.addr.toPlainText()),
        }

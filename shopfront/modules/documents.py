# shopfront/modules/documents.py
from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QFileDialog, QWidget

from ..api.repositories.documents_repo import DocumentsRepo
from ..utils.documents import extension_for, save_document, write_temp_document
from ..utils.tasks import TaskRunner
from ..utils.ui_helpers import notify_exception, notify_success

_log = logging.getLogger(__name__)


class DocumentActions(QObject):
    """
    Print / Download for invoices (sale and refund) and payment receipts.

    Print fetches the document with the bearer token, drops it in the temp
    folder and hands it to the desktop's default viewer. Download asks for a
    destination and saves the bytes there.
    """

    def __init__(self, repo: DocumentsRepo, runner: TaskRunner, parent: QWidget | None = None):
        super().__init__(parent)
        self.repo = repo
        self.runner = runner
        self._parent = parent
        # swapped in tests
        self.open_url: Callable[[QUrl], bool] = QDesktopServices.openUrl
        self.ask_save_path: Callable[[str], str] = self._ask_save_path

    # ---------------- public ----------------

    def print_invoice(self, invoice_id: int, label: str = "") -> None:
        self._print(lambda: self.repo.fetch_invoice(invoice_id, "print"), label or f"invoice_{invoice_id}")

    def download_invoice(self, invoice_id: int, label: str = "") -> None:
        self._download(lambda: self.repo.fetch_invoice(invoice_id, "download"), label or f"invoice_{invoice_id}")

    def print_receipt(self, receipt_no: str) -> None:
        self._print(lambda: self.repo.fetch_receipt(receipt_no, "print"), f"receipt_{receipt_no}")

    def download_receipt(self, receipt_no: str) -> None:
        self._download(lambda: self.repo.fetch_receipt(receipt_no, "download"), f"receipt_{receipt_no}")

    # ---------------- internals ----------------

    def _print(self, fetch, name: str) -> None:
        def _done(result):
            content, ctype = result
            path = write_temp_document(name, content, ctype)
            _log.info("Opening %s", path)
            self.open_url(QUrl.fromLocalFile(str(path)))

        self.runner.submit(fetch, on_success=_done, on_error=self._failed)

    def _download(self, fetch, name: str) -> None:
        def _done(result):
            content, ctype = result
            target = self.ask_save_path(f"{name}{extension_for(ctype)}")
            if not target:
                return
            save_document(target, content)
            notify_success(f"Saved {target}", self._parent)

        self.runner.submit(fetch, on_success=_done, on_error=self._failed)

    def _failed(self, exc: BaseException) -> None:
        notify_exception(exc, self._parent)

    def _ask_save_path(self, suggested: str) -> str:
        fn, _ = QFileDialog.getSaveFileName(self._parent, "Save Document", suggested)
        return fn

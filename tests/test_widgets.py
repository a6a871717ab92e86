# tests/test_widgets.py

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLineEdit

from shopfront.dev_launcher import is_source_change
from shopfront.modules.product.model import ProductFilterProxy, ProductsTableModel
from shopfront.utils.loggers import get_logger
from shopfront.utils.validators import collapse_spaces, tidy_lines, try_parse_float
from shopfront.widgets.form_dialog import FormDialog
from shopfront.widgets.table_view import TableView

from factories import make_product


def _products():
    return [
        make_product(pid=1, code="B", name="Belt", sell=1200, stock=2),
        make_product(pid=2, code="A", name="Apron", sell=300, stock=9),
        make_product(pid=3, code="C", name="Cap", sell=80, stock=0),
    ]


def test_row_model_sorts_money_numerically(qtbot):
    model = ProductsTableModel(_products())
    model.sort(7, Qt.AscendingOrder)
    assert [p.code for p in model.rows()] == ["C", "A", "B"]
    model.sort(1, Qt.DescendingOrder)
    assert [p.name for p in model.rows()] == ["Cap", "Belt", "Apron"]


def test_row_model_stock_colours(qtbot):
    model = ProductsTableModel(_products(), low_stock_threshold=3)
    stock = model.COL_STOCK
    assert model.data(model.index(0, stock), Qt.ForegroundRole).color().name() == "#b45309"
    assert model.data(model.index(1, stock), Qt.ForegroundRole) is None
    assert model.data(model.index(2, stock), Qt.ForegroundRole).color().name() == "#b91c1c"


def test_selected_source_row_maps_through_proxy(qtbot):
    model = ProductsTableModel(_products())
    proxy = ProductFilterProxy()
    proxy.setSourceModel(model)
    view = TableView()
    qtbot.addWidget(view)
    view.setModel(proxy)

    assert view.selected_source_row() is None
    proxy.set_search("cap")
    view.selectRow(0)
    assert model.at(view.selected_source_row()).code == "C"


class _NameDialog(FormDialog):
    def __init__(self):
        super().__init__("Name")
        self.name = QLineEdit()
        self.form.addRow("Name", self.name)

    def collect(self):
        if not self.name.text():
            return self.fail(self.name, "Name please")
        return {"name": self.name.text()}


def test_form_dialog_stays_open_until_valid(qtbot):
    dlg = _NameDialog()
    qtbot.addWidget(dlg)
    dlg.accept()
    assert dlg.payload() is None
    assert dlg.lbl_error.text() == "Name please"

    dlg.name.setText("Asha")
    dlg.accept()
    assert dlg.payload() == {"name": "Asha"}
    assert dlg.lbl_error.text() == ""


def test_text_normalizers():
    assert collapse_spaces("  a \t b  ") == "a b"
    assert collapse_spaces(None) == ""
    assert tidy_lines("\n\n  x  y \n\n z\n\n") == "x y\n\nz"


def test_try_parse_float_rejects_non_finite():
    assert try_parse_float("12.5") == (True, 12.5)
    assert try_parse_float("nan") == (False, None)
    assert try_parse_float("inf") == (False, None)
    assert try_parse_float(None) == (False, None)


def test_dev_reload_only_watches_sources():
    assert is_source_change("/app/shopfront/main.py")
    assert not is_source_change("/app/shopfront/__pycache__/main.cpython-312.pyc")
    assert not is_source_change("/app/shopfront/__pycache__/x.py")
    assert not is_source_change("/app/shopfront/resources/style.qss")


def test_logger_level_from_env(monkeypatch):
    monkeypatch.setenv("SHOPFRONT_LOG_LEVEL", "debug")
    logger = get_logger("shopfront.test_env_level")
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert get_logger("shopfront.test_env_level") is logger
        assert len(logger.handlers) == 1
    finally:
        logger.handlers.clear()

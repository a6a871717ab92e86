# tests/test_pagination.py

from shopfront.utils.pagination import clamp_page, page_slice, total_pages
from shopfront.widgets.pager import Pager


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(0, 10, at_least_one=True) == 1
    assert total_pages(21, 10) == 3


def test_page_slice():
    rows = list(range(25))
    assert page_slice(rows, 1, 10) == list(range(10))
    assert page_slice(rows, 3, 10) == [20, 21, 22, 23, 24]
    assert page_slice(rows, 4, 10) == []
    assert page_slice(rows, 0, 10) == []


def test_clamp_page():
    assert clamp_page(5, 25, 10) == 3
    assert clamp_page(0, 25, 10) == 1
    assert clamp_page(2, 0, 10) == 1


def test_pager_navigation(qtbot):
    pager = Pager(10)
    qtbot.addWidget(pager)
    seen = []
    pager.page_changed.connect(seen.append)

    pager.set_count(25)
    assert not pager.isHidden()
    assert pager.lbl.text() == "Page 1 of 3"
    assert not pager.btn_prev.isEnabled()

    pager.btn_next.click()
    pager.btn_next.click()
    pager.btn_next.click()
    assert seen == [2, 3]
    assert not pager.btn_next.isEnabled()

    pager.set_count(5)
    assert pager.page == 1
    assert pager.isHidden()

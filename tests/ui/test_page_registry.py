import pytest

from bookshop.ui.navigation.pages import PageRegistry, Pages, default_pages
from bookshop.ui.navigation.parameters import ProductParameter, UpsertProductParameter


def test_duplicate_page_keys_are_rejected():
    pages = PageRegistry()
    pages.add("Orders", object)
    with pytest.raises(ValueError):
        pages.add("Orders", object)


def test_default_table_lists_every_page():
    pages = default_pages()

    assert {entry.key for entry in pages} == {
        Pages.DASHBOARD, Pages.PRODUCTS, Pages.PRODUCT_DETAIL, Pages.UPSERT_PRODUCT,
        Pages.CATEGORIES, Pages.ORDERS, Pages.CREATE_ORDER, Pages.SETTINGS,
    }
    assert pages.get(Pages.PRODUCT_DETAIL).parameter_type is ProductParameter
    assert pages.get(Pages.UPSERT_PRODUCT).parameter_type is UpsertProductParameter
    menu = [e.key for e in pages.menu_entries()]
    assert Pages.PRODUCT_DETAIL not in menu
    assert Pages.CREATE_ORDER not in menu


def test_entries_accept_none_or_their_parameter_type():
    entry = default_pages().get(Pages.PRODUCT_DETAIL)
    assert entry.accepts(None)
    assert not entry.accepts(UpsertProductParameter())
    assert not default_pages().get(Pages.ORDERS).accepts(1)

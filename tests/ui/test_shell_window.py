import pytest
from PySide6.QtCore import Qt

from bookshop.ui.main_window import ShellWindow
from bookshop.ui.navigation.pages import Pages
from bookshop.ui.navigation.service import NavigationService
from bookshop.ui.viewmodels import ShellViewModel


@pytest.fixture
def shell(qtbot, app_registry):
    navigation = app_registry.resolve(NavigationService)
    view_model = ShellViewModel(app_registry)
    window = ShellWindow(view_model, 640, 480)
    qtbot.addWidget(window)
    navigation.frame = window
    return window, navigation


def menu_keys(window):
    return [window.menu.item(row).data(Qt.UserRole) for row in range(window.menu.count())]


def test_menu_lists_only_menu_pages(shell):
    window, _ = shell
    assert menu_keys(window) == [
        Pages.DASHBOARD, Pages.PRODUCTS, Pages.CATEGORIES, Pages.ORDERS, Pages.SETTINGS,
    ]
    assert window.minimumWidth() == 640


@pytest.mark.asyncio
async def test_display_swaps_the_hosted_page(shell):
    window, navigation = shell

    navigation.navigate_to(Pages.SETTINGS)
    first = window.frame.currentWidget()
    navigation.navigate_to(Pages.CATEGORIES)

    assert window.frame.currentWidget() is navigation.current_page
    assert window.frame.currentWidget() is not first
    assert window.frame.count() == 1


@pytest.mark.asyncio
async def test_back_button_follows_history(qtbot, shell):
    window, navigation = shell
    navigation.navigate_to(Pages.SETTINGS)
    assert not window.back_button.isEnabled()

    navigation.navigate_to(Pages.CATEGORIES)
    assert window.back_button.isEnabled()
    assert window.menu.currentItem().data(Qt.UserRole) == Pages.CATEGORIES

    qtbot.mouseClick(window.back_button, Qt.LeftButton)

    assert navigation.current_page_key == Pages.SETTINGS
    assert not window.back_button.isEnabled()


def test_failed_navigation_shows_status(shell):
    window, _ = shell

    assert window.view_model.navigate("Warehouse") is False

    assert window.view_model.status_message == "That page is not available."
    assert window.statusBar().currentMessage() == "That page is not available."

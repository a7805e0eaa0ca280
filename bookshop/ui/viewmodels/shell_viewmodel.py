from PySide6.QtCore import Signal, Slot
from loguru import logger

from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel
from ..navigation.pages import PageRegistry


class ShellViewModel(BaseViewModel):
    """
    ViewModel for the shell window.
    Mirrors navigation state (selected page, back button) and reports
    navigation failures as a status message.
    """
    selectedPageChanged = Signal(object)
    canGoBackChanged = Signal(object)
    statusMessageChanged = Signal(object)

    selected_page = BindableProperty(default=None, signal_name="selectedPageChanged")
    can_go_back = BindableProperty(default=False, signal_name="canGoBackChanged")
    status_message = BindableProperty(default="Ready", signal_name="statusMessageChanged")

    def __init__(self, locator):
        super().__init__(locator)
        self.navigation.navigated.connect(self._on_navigated)
        self.navigation.navigation_failed.connect(self._on_navigation_failed)

    @property
    def menu_items(self):
        """(key, title) pairs for the navigation menu."""
        return [(entry.key, entry.title) for entry in self.locator.resolve(PageRegistry).menu_entries()]

    @Slot(str)
    def navigate(self, page_key: str) -> bool:
        return self.navigation.navigate_to(page_key)

    @Slot()
    def go_back(self) -> bool:
        return self.navigation.go_back()

    def _on_navigated(self, record):
        self.selected_page = record.page_key
        self.can_go_back = self.navigation.can_go_back
        self.status_message = "Ready"

    def _on_navigation_failed(self, error):
        logger.debug(f"Shell reports navigation failure: {error}")
        self.status_message = "That page is not available."

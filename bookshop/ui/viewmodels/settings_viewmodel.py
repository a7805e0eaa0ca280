from PySide6.QtCore import Signal
from pydantic import ValidationError

from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel
from ..navigation.pages import PageRegistry


class SettingsViewModel(BaseViewModel):
    """
    Edits persisted settings. Repository changes apply on next start; the
    active data source is fixed for the lifetime of the process.
    """
    startPageChanged = Signal(object)
    repositoryModeChanged = Signal(object)

    start_page = BindableProperty(default="", signal_name="startPageChanged")
    repository_mode = BindableProperty(default="remote", signal_name="repositoryModeChanged")

    def on_navigated_to(self, parameter):
        data = self.locator.config.data
        self.start_page = data.general.start_page
        self.repository_mode = data.repository.mode

    @property
    def active_repository(self) -> str:
        return self.repository.description

    @property
    def page_choices(self):
        return [entry.key for entry in self.locator.resolve(PageRegistry).menu_entries()]

    def save(self) -> bool:
        if self.start_page not in self.page_choices:
            self.error_message = f"Unknown start page: {self.start_page}"
            return False
        try:
            self.locator.config.update("general", "start_page", self.start_page)
            self.locator.config.update("repository", "mode", self.repository_mode)
        except ValidationError as e:
            self.error_message = str(e)
            return False
        self.error_message = ""
        return True

"""
Activation handlers.

A handler decides whether it can deal with a launch context and, if
chosen, shows the first page.
"""
from abc import ABC, abstractmethod

from loguru import logger

from bookshop.core.errors import ActivationFailed
from bookshop.ui.navigation.service import NavigationService
from .context import LaunchContext, LaunchKind


class ActivationHandler(ABC):
    """Base class for activation strategies. Resolved fresh per activation."""

    def __init__(self, locator):
        self.locator = locator

    @property
    def navigation(self) -> NavigationService:
        return self.locator.resolve(NavigationService)

    @abstractmethod
    def can_handle(self, context: LaunchContext) -> bool:
        ...

    @abstractmethod
    async def activate(self, context: LaunchContext) -> None:
        ...

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class DefaultActivationHandler(ActivationHandler):
    """
    Fallback slot: shows the configured start page.

    On re-activation with a page already on screen it leaves navigation
    untouched; the window is only brought to the front.
    """

    def can_handle(self, context: LaunchContext) -> bool:
        return True

    async def activate(self, context: LaunchContext) -> None:
        if context.is_reactivation and self.navigation.current_page_key is not None:
            logger.debug("Re-activation without arguments, keeping current page")
            return

        start_page = self.locator.config.data.general.start_page
        if not self.navigation.navigate_to(start_page, clear_history=True):
            raise ActivationFailed(f"Start page {start_page!r} could not be shown")


class CommandLineActivationHandler(ActivationHandler):
    """
    Opens the page named by ``--page KEY`` on launch or re-activation.
    """

    def can_handle(self, context: LaunchContext) -> bool:
        if context.kind not in (LaunchKind.COMMAND_LINE, LaunchKind.REACTIVATION):
            return False
        return bool(context.option("page"))

    async def activate(self, context: LaunchContext) -> None:
        page = context.option("page")
        if not self.navigation.navigate_to(page, clear_history=True):
            raise ActivationFailed(f"Page {page!r} requested on the command line could not be shown")

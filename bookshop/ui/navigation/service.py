"""
Navigation Service - single navigation surface for pages.

Keeps the current page and a LIFO back-stack, resolves pages and their
view-models from the service registry and hands typed parameters to
view-models that want them.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from loguru import logger

from bookshop.core.base_system import BaseSystem
from bookshop.core.errors import BookShopError, InvalidNavigationParameter, UnknownPage
from bookshop.core.events import ObserverEvent
from .pages import PageEntry, PageRegistry


class NavigationAware:
    """
    Mixin for view-models that take part in navigation.

    ``on_navigated_to`` receives the navigation parameter before the page
    is shown, both on forward and on back navigation.
    """

    def on_navigated_to(self, parameter: Any) -> None:
        pass

    def on_navigated_from(self) -> None:
        pass


@dataclass(frozen=True)
class NavigationRecord:
    page_key: str
    parameter: Any = None


class NavigationService(BaseSystem):
    """
    Centralized navigation controller.

    The ``frame`` is whatever hosts pages on screen (the shell window); it
    only needs a ``display(page)`` method. Without a frame the service still
    tracks state, which is how it runs headless in tests.

    Usage:
        nav = registry.resolve(NavigationService)
        nav.navigate_to(Pages.PRODUCT_DETAIL, ProductParameter(product))
        nav.go_back()
    """

    depends_on = []

    def __init__(self, locator, config):
        super().__init__(locator, config)
        self._pages: Optional[PageRegistry] = None
        self._back_stack: List[NavigationRecord] = []
        self._current: Optional[NavigationRecord] = None
        self._current_page = None
        self._current_view_model = None
        self.frame = None

        # (record) after every successful navigation
        self.navigated = ObserverEvent("Navigated")
        # (error) for unknown pages and refused parameters
        self.navigation_failed = ObserverEvent("NavigationFailed")

    async def initialize(self):
        await super().initialize()
        logger.info(f"NavigationService initialized ({len(self.pages)} pages)")

    async def shutdown(self):
        self._leave_current()
        self._back_stack.clear()
        self._current = None
        self._current_page = None
        self._current_view_model = None
        self.frame = None
        self.navigated.clear()
        self.navigation_failed.clear()
        await super().shutdown()
        logger.info("NavigationService shutdown")

    # --- State ---

    @property
    def pages(self) -> PageRegistry:
        if self._pages is None:
            self._pages = self.locator.resolve(PageRegistry)
        return self._pages

    @property
    def can_go_back(self) -> bool:
        return bool(self._back_stack)

    @property
    def current_page_key(self) -> Optional[str]:
        return self._current.page_key if self._current else None

    @property
    def current_parameter(self) -> Any:
        return self._current.parameter if self._current else None

    @property
    def current_page(self):
        return self._current_page

    @property
    def current_view_model(self):
        return self._current_view_model

    @property
    def back_stack(self) -> Tuple[NavigationRecord, ...]:
        """Oldest first; the last element is what ``go_back`` returns to."""
        return tuple(self._back_stack)

    # --- Transitions ---

    def navigate_to(self, page_key: str, parameter: Any = None, clear_history: bool = False) -> bool:
        """
        Show ``page_key``, pushing the current page onto the back-stack.

        Returns:
            True if the page changed. False for unknown pages, refused
            parameters, or when the page is already shown with an equal
            parameter.
        """
        entry = self.pages.get(page_key)
        if entry is None:
            return self._fail(UnknownPage(page_key))
        if not entry.accepts(parameter):
            return self._fail(InvalidNavigationParameter(page_key, entry.parameter_type, parameter))

        if (not clear_history and self._current is not None
                and self._current.page_key == page_key
                and self._current.parameter == parameter):
            logger.debug(f"Already on {page_key}, navigation skipped")
            return False

        # Resolve before touching state so a failure leaves history intact
        page, view_model = self._materialize(entry)

        history = list(self._back_stack)
        if clear_history:
            history.clear()
        elif self._current is not None:
            history.append(self._current)

        self._transition(NavigationRecord(page_key, parameter), page, view_model, history)
        return True

    def go_back(self) -> bool:
        """
        Return to the most recent page on the back-stack.

        Returns:
            False when there is nothing to go back to.
        """
        if not self._back_stack:
            return False

        record = self._back_stack[-1]
        page, view_model = self._materialize(self.pages.get(record.page_key))

        self._transition(record, page, view_model, self._back_stack[:-1])
        return True

    # --- Internals ---

    def _materialize(self, entry: PageEntry):
        view_model = None
        if entry.view_model_type is not None:
            view_model = self.locator.resolve(entry.view_model_type)
        page = self.locator.resolve(entry.page_type)
        if view_model is not None and hasattr(page, "bind"):
            page.bind(view_model)
        return page, view_model

    def _transition(self, record: NavigationRecord, page, view_model, history: List[NavigationRecord]):
        """
        Leave the current page, install ``history`` and show ``record``.

        If the incoming view-model or the frame raises, the previous
        back-stack is put back so the current page is never also on it.
        """
        previous = self._back_stack
        self._leave_current()
        self._back_stack = history
        try:
            self._show(record, page, view_model)
        except Exception:
            self._back_stack = previous
            logger.error(f"Navigation to {record.page_key} failed; staying on {self.current_page_key}")
            raise

    def _leave_current(self):
        if isinstance(self._current_view_model, NavigationAware):
            self._current_view_model.on_navigated_from()

    def _show(self, record: NavigationRecord, page, view_model):
        if isinstance(view_model, NavigationAware):
            view_model.on_navigated_to(record.parameter)

        if self.frame is not None:
            self.frame.display(page)

        self._current = record
        self._current_page = page
        self._current_view_model = view_model

        logger.info(f"Navigated to {record.page_key} (back-stack depth {len(self._back_stack)})")
        self.navigated.emit(record)

    def _fail(self, error: BookShopError) -> bool:
        logger.warning(str(error))
        self.navigation_failed.emit(error)
        return False

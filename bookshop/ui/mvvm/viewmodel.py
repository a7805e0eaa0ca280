"""
MVVM ViewModel Infrastructure.

Page view-models get the service registry, take part in navigation and
run their repository I/O as tracked asyncio tasks that are cancelled when
the page is left.
"""
import asyncio
from typing import Any, Coroutine, Set

from PySide6.QtCore import Signal
from loguru import logger

from bookshop.data.repository import ShopRepository
from bookshop.ui.mvvm.bindable import BindableBase, BindableProperty
from bookshop.ui.navigation.service import NavigationAware, NavigationService


class BaseViewModel(BindableBase, NavigationAware):
    """
    Base class for page ViewModels.

    Example:
        class ProductsViewModel(BaseViewModel):
            productsChanged = Signal(object)
            products = BindableProperty(default=())

            def on_navigated_to(self, parameter):
                self.run_async(self.load())
    """
    busyChanged = Signal(object)
    errorChanged = Signal(object)

    is_busy = BindableProperty(default=False, signal_name="busyChanged")
    error_message = BindableProperty(default="", signal_name="errorChanged")

    def __init__(self, locator=None):
        super().__init__()
        self.locator = locator
        self._tasks: Set[asyncio.Task] = set()

    @property
    def navigation(self) -> NavigationService:
        return self.locator.resolve(NavigationService)

    @property
    def repository(self) -> ShopRepository:
        return self.locator.resolve(ShopRepository)

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def run_async(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedule ``coro`` on the running loop and track it until done."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def cancel_pending(self):
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    def on_navigated_from(self) -> None:
        self.cancel_pending()

    def _on_task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error(f"{self.__class__.__name__}: background task failed")
            self.error_message = str(error)

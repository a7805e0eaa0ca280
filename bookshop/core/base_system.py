from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Type

if TYPE_CHECKING:
    from .locator import ServiceRegistry
    from .config import ConfigManager


class BaseSystem(ABC):
    """
    Abstract Base Class for long-lived application services
    (navigation, activation, ...).

    Systems receive the registry and configuration explicitly and are
    started/stopped by ``ServiceRegistry.start_all`` / ``stop_all``.
    Dependencies on other systems are declared with ``depends_on``:

        class ActivationPipeline(BaseSystem):
            depends_on = [NavigationService]
    """
    depends_on: List[Type["BaseSystem"]] = []

    def __init__(self, locator: 'ServiceRegistry', config: 'ConfigManager'):
        self.locator = locator
        self.config = config
        self._is_ready = False

    @abstractmethod
    async def initialize(self):
        """
        Async initialization logic. Called once by the registry during startup.
        """
        self._is_ready = True

    @abstractmethod
    async def shutdown(self):
        """
        Cleanup logic. Pending work is abandoned, not awaited.
        """
        self._is_ready = False

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    async def __aenter__(self):
        """Async context manager entry: Initialize system."""
        if not self._is_ready:
            await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit: Shutdown system."""
        if self._is_ready:
            await self.shutdown()

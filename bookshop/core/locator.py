"""
Service registry.

Maps a service identity (normally a class) to a descriptor holding its
lifetime and factory. The descriptor table is filled during startup and
frozen afterwards; singleton instances are created lazily on first
resolution.

Registering an identity twice is rejected with ``DuplicateRegistration``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
import threading

from loguru import logger

from .base_system import BaseSystem
from .config import ConfigManager
from .errors import DuplicateRegistration, RegistryFrozen, UnregisteredService

T = TypeVar('T')

Factory = Callable[["ServiceRegistry"], Any]


class Lifetime(Enum):
    """How long a resolved instance lives."""
    SINGLETON = "singleton"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ServiceDescriptor:
    identity: Any
    lifetime: Lifetime
    factory: Factory


class ServiceRegistry:
    """
    Central registry for application services.

    Passed explicitly to every component that needs resolution; there is no
    global instance.

    Usage:
        registry = ServiceRegistry(config)
        registry.add_singleton(NavigationService)
        registry.add_transient(ProductsViewModel)
        registry.freeze()
        nav = registry.resolve(NavigationService)
    """

    def __init__(self, config: Optional[ConfigManager] = None):
        self.config = config
        self._descriptors: Dict[Any, ServiceDescriptor] = {}
        self._singletons: Dict[Any, Any] = {}
        self._started: List[BaseSystem] = []
        self._frozen = False
        # Re-entrant: singleton factories may resolve other singletons
        self._lock = threading.RLock()

    # --- Registration ---

    def register(self, identity: Any, lifetime: Lifetime, factory: Optional[Factory] = None) -> ServiceDescriptor:
        """
        Record a descriptor for ``identity``.

        Raises:
            DuplicateRegistration: identity already present
            RegistryFrozen: registry was frozen after startup
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozen(
                    f"Cannot register {_name(identity)}: registry is frozen after startup."
                )
            if identity in self._descriptors:
                raise DuplicateRegistration(identity)

            descriptor = ServiceDescriptor(identity, lifetime, factory or self._default_factory(identity))
            self._descriptors[identity] = descriptor
            logger.debug(f"Registered {lifetime.value} service: {_name(identity)}")
            return descriptor

    def add_singleton(self, identity: Any, factory: Optional[Factory] = None) -> ServiceDescriptor:
        return self.register(identity, Lifetime.SINGLETON, factory)

    def add_transient(self, identity: Any, factory: Optional[Factory] = None) -> ServiceDescriptor:
        return self.register(identity, Lifetime.TRANSIENT, factory)

    def register_instance(self, identity: Any, instance: Any) -> ServiceDescriptor:
        """Register an already constructed singleton."""
        with self._lock:
            descriptor = self.register(identity, Lifetime.SINGLETON, lambda _: instance)
            self._singletons[identity] = instance
            return descriptor

    def freeze(self):
        """Make the descriptor table immutable."""
        with self._lock:
            self._frozen = True
        logger.debug(f"Service registry frozen with {len(self._descriptors)} services")

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def is_registered(self, identity: Any) -> bool:
        return identity in self._descriptors

    def __contains__(self, identity: Any) -> bool:
        return self.is_registered(identity)

    def descriptor(self, identity: Any) -> ServiceDescriptor:
        try:
            return self._descriptors[identity]
        except KeyError:
            raise UnregisteredService(identity) from None

    # --- Resolution ---

    def resolve(self, identity: Type[T]) -> T:
        """
        Resolve an instance of ``identity``.

        Singletons are constructed at most once, even with concurrent callers.

        Raises:
            UnregisteredService: identity was never registered
        """
        descriptor = self.descriptor(identity)

        if descriptor.lifetime is Lifetime.TRANSIENT:
            return descriptor.factory(self)

        if identity in self._singletons:
            return self._singletons[identity]

        with self._lock:
            # Another thread may have finished construction while we waited
            if identity not in self._singletons:
                logger.debug(f"Creating singleton: {_name(identity)}")
                self._singletons[identity] = descriptor.factory(self)
            return self._singletons[identity]

    def _default_factory(self, identity: Any) -> Factory:
        if isinstance(identity, type) and issubclass(identity, BaseSystem):
            return lambda registry: identity(registry, registry.config)
        if callable(identity):
            return lambda registry: identity(registry)
        raise TypeError(f"No factory given for non-callable identity {identity!r}")

    # --- Lifecycle ---

    async def start_all(self):
        """
        Initialize all singleton systems in dependency order.

        Systems declare dependencies with the ``depends_on`` class attribute.
        A failing system aborts startup.
        """
        logger.info("Starting all systems...")

        for system in self._topological_sort():
            await system.initialize()
            self._started.append(system)
            logger.info(f"System {system.__class__.__name__} started.")

    async def stop_all(self):
        """
        Shutdown started systems in reverse order and drop cached singletons.
        """
        logger.info("Stopping all systems...")
        for system in reversed(self._started):
            try:
                await system.shutdown()
                logger.info(f"System {system.__class__.__name__} stopped.")
            except Exception as e:
                logger.error(f"Failed to stop system {system.__class__.__name__}: {e}")
        self._started.clear()
        with self._lock:
            self._singletons.clear()

    def _system_identities(self) -> List[type]:
        return [
            d.identity for d in self._descriptors.values()
            if d.lifetime is Lifetime.SINGLETON
            and isinstance(d.identity, type)
            and issubclass(d.identity, BaseSystem)
        ]

    def _topological_sort(self) -> List[BaseSystem]:
        """
        Sort singleton systems by dependencies (Kahn's algorithm).

        Returns:
            List of systems in safe start order
        """
        identities = self._system_identities()
        in_degree = {cls: 0 for cls in identities}
        graph = {cls: [] for cls in identities}

        for cls in identities:
            for dep_cls in getattr(cls, 'depends_on', []):
                if dep_cls in graph:
                    graph[dep_cls].append(cls)
                    in_degree[cls] += 1

        queue = [cls for cls, deg in in_degree.items() if deg == 0]
        ordered = []

        while queue:
            cls = queue.pop(0)
            ordered.append(cls)

            for dependent in graph[cls]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

        if len(ordered) != len(identities):
            logger.warning("Circular dependency detected, using registration order")
            ordered = identities

        return [self.resolve(cls) for cls in ordered]


def _name(identity: Any) -> str:
    return getattr(identity, "__name__", repr(identity))

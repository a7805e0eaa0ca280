"""
Activation pipeline.

Handlers are consulted in registration order and the first one whose
``can_handle`` returns True runs; earlier registrations take precedence.
When none matches, the default handler runs. Exactly one handler runs per
launch and a failing handler is not followed by a fallback.
"""
import asyncio
from enum import Enum
from typing import Optional, Sequence, Tuple, Type

from loguru import logger

from bookshop.core.base_system import BaseSystem
from bookshop.core.errors import ActivationFailed, AlreadyActivated
from bookshop.core.events import ObserverEvent
from bookshop.ui.navigation.service import NavigationService
from .context import LaunchContext
from .handlers import ActivationHandler, DefaultActivationHandler


class ActivationState(Enum):
    NOT_STARTED = "not_started"
    ACTIVATED = "activated"


class ActivationPipeline(BaseSystem):
    """
    Picks and runs the activation handler for a launch.

    Usage:
        pipeline = ActivationPipeline(
            registry, config,
            handlers=[CommandLineActivationHandler],
            default_handler=DefaultActivationHandler,
        )
        await pipeline.run(LaunchContext.from_argv(sys.argv))
    """

    depends_on = [NavigationService]

    def __init__(self, locator, config,
                 handlers: Sequence[Type[ActivationHandler]] = (),
                 default_handler: Type[ActivationHandler] = DefaultActivationHandler):
        super().__init__(locator, config)
        self._handler_types: Tuple[Type[ActivationHandler], ...] = tuple(handlers)
        self._default_handler = default_handler
        self._state = ActivationState.NOT_STARTED
        self._activated_event: Optional[asyncio.Event] = None

        # (context, handler) after each activation, successful or not
        self.activated = ObserverEvent("Activated")

    async def initialize(self):
        await super().initialize()
        names = ", ".join(h.__name__ for h in self._handler_types) or "none"
        logger.info(f"ActivationPipeline initialized (handlers: {names}; default: {self._default_handler.__name__})")

    async def shutdown(self):
        self.activated.clear()
        await super().shutdown()

    @property
    def state(self) -> ActivationState:
        return self._state

    @property
    def is_activated(self) -> bool:
        return self._state is ActivationState.ACTIVATED

    @property
    def handler_types(self) -> Tuple[Type[ActivationHandler], ...]:
        """Specific handlers in priority order (default excluded)."""
        return self._handler_types

    @property
    def default_handler_type(self) -> Type[ActivationHandler]:
        return self._default_handler

    async def wait_activated(self):
        """Wait until the first activation has completed."""
        if self.is_activated:
            return
        await self._event().wait()

    async def run(self, context: LaunchContext):
        """
        Dispatch ``context`` to exactly one handler.

        Raises:
            AlreadyActivated: second run without a re-activation context
            ActivationFailed: selecting or running the handler raised
        """
        if self.is_activated and not context.is_reactivation:
            logger.error(f"Activation requested twice for this process ({context.kind.value})")
            raise AlreadyActivated("The application has already been activated")

        handler = None
        try:
            handler = self._select(context)
            logger.info(f"Activating ({context.kind.value}) with {handler!r}")
            await handler.activate(context)
        except ActivationFailed:
            logger.error(f"Activation failed in {handler!r}")
            raise
        except Exception as e:
            name = handler.__class__.__name__ if handler is not None else "Handler selection"
            logger.exception(f"Activation failed in {name}: {e}")
            raise ActivationFailed(f"{name} failed: {e}") from e
        finally:
            self._mark_activated()
            self.activated.emit(context, handler)

    def _select(self, context: LaunchContext) -> ActivationHandler:
        for handler_type in self._handler_types:
            handler = self.locator.resolve(handler_type)
            if handler.can_handle(context):
                return handler
        return self.locator.resolve(self._default_handler)

    def _mark_activated(self):
        self._state = ActivationState.ACTIVATED
        self._event().set()

    def _event(self) -> asyncio.Event:
        if self._activated_event is None:
            self._activated_event = asyncio.Event()
        return self._activated_event

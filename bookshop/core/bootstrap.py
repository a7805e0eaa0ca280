"""
Bootstrap helpers for BookShop.

Builds the service registry, picks the repository, starts systems and
runs the activation pipeline inside the Qt/asyncio event loop.
"""
import asyncio
import sys
from typing import Callable, List, Optional, Sequence, Type

from PySide6.QtWidgets import QApplication
from qasync import QEventLoop
from loguru import logger

from .config import ConfigManager
from .errors import BookShopError, ConfigurationMissing
from .locator import ServiceRegistry
from .logging import setup_logging
from bookshop.activation.context import LaunchContext
from bookshop.activation.handlers import (
    ActivationHandler,
    CommandLineActivationHandler,
    DefaultActivationHandler,
)
from bookshop.activation.pipeline import ActivationPipeline
from bookshop.data.repository import ShopRepository
from bookshop.data.selector import RepositorySelector
from bookshop.ui.navigation.pages import PageRegistry, default_pages
from bookshop.ui.navigation.service import NavigationService

UNEXPECTED_ERROR_TEXT = (
    "Something went wrong. The problem has been logged and you can keep working."
)


class ApplicationBuilder:
    """
    Fluent builder for the BookShop service registry.

    Example:
        registry = await (ApplicationBuilder("BookShop", "config.json")
                          .with_logging()
                          .add_activation_handler(CommandLineActivationHandler)
                          .build())
    """

    def __init__(self, name: str = "BookShop", config_path: str = "config.json"):
        """
        Initialize application builder.

        Args:
            name: Application name
            config_path: Path to config.json file
        """
        self.name = name
        self.config_path = config_path
        self._handlers: List[Type[ActivationHandler]] = []
        self._default_handler: Type[ActivationHandler] = DefaultActivationHandler
        self._pages_factory: Callable[[], PageRegistry] = default_pages
        self._configure_callbacks: List[Callable[[ServiceRegistry], None]] = []
        self._logging_configured = False

    def with_logging(self, enable: bool = True):
        """
        Configure logging setup from the ``general`` settings.

        Returns:
            Self for chaining
        """
        self._logging_configured = enable
        return self

    def add_activation_handler(self, handler_cls: Type[ActivationHandler]):
        """
        Register an activation handler. Handlers are consulted in the order
        they are added; the first that can handle a launch wins.

        Returns:
            Self for chaining
        """
        self._handlers.append(handler_cls)
        return self

    def with_default_handler(self, handler_cls: Type[ActivationHandler]):
        """Replace the fallback handler that runs when nothing else matches."""
        self._default_handler = handler_cls
        return self

    def with_pages(self, factory: Callable[[], PageRegistry]):
        """Use another page table (mainly for tests)."""
        self._pages_factory = factory
        return self

    def configure_services(self, callback: Callable[[ServiceRegistry], None]):
        """Extra registrations, run before the registry is frozen."""
        self._configure_callbacks.append(callback)
        return self

    def build_registry(self, config: Optional[ConfigManager] = None) -> ServiceRegistry:
        """
        Populate, publish the repository into, and freeze a new registry.

        Raises:
            ConfigurationMissing: repository settings incomplete
        """
        config = config or ConfigManager(self.config_path)
        registry = ServiceRegistry(config)

        # Activation
        handlers = tuple(self._handlers)
        default_handler = self._default_handler
        registry.add_transient(default_handler)
        for handler_cls in handlers:
            registry.add_transient(handler_cls)
        registry.add_singleton(
            ActivationPipeline,
            lambda r: ActivationPipeline(r, r.config, handlers=handlers, default_handler=default_handler),
        )

        # Navigation
        pages = self._pages_factory()
        registry.register_instance(PageRegistry, pages)
        registry.add_singleton(NavigationService)

        # Views and ViewModels
        for entry in pages:
            if entry.view_model_type is not None and entry.view_model_type not in registry:
                registry.add_transient(entry.view_model_type)
            if entry.page_type not in registry:
                registry.add_transient(entry.page_type, lambda _, page_cls=entry.page_type: page_cls())

        for callback in self._configure_callbacks:
            callback(registry)

        # Data access
        try:
            RepositorySelector(registry).build_repository(config.data.repository)
        except ConfigurationMissing as e:
            if config.load_error is None:
                raise
            raise ConfigurationMissing(
                e.keys, reason=f"missing ({config.filepath} could not be read: {config.load_error})"
            ) from e

        registry.freeze()
        return registry

    async def build(self) -> ServiceRegistry:
        """
        Build the registry and start all systems.

        Returns:
            ServiceRegistry with all systems started
        """
        config = ConfigManager(self.config_path)
        if self._logging_configured:
            general = config.data.general
            setup_logging(general.debug_mode, general.log_dir)
            logger.info(f"Starting {self.name}")

        registry = self.build_registry(config)
        await registry.start_all()
        return registry


def default_builder(config_path: str = "config.json") -> ApplicationBuilder:
    from bookshop.ui.viewmodels.shell_viewmodel import ShellViewModel

    return (ApplicationBuilder("BookShop", config_path)
            .with_logging()
            .add_activation_handler(CommandLineActivationHandler)
            .configure_services(lambda registry: registry.add_singleton(ShellViewModel)))


def install_exception_hooks(loop: asyncio.AbstractEventLoop, parent_getter: Callable = lambda: None):
    """
    Route unhandled exceptions (UI thread and asyncio tasks) to the log and
    a user-facing dialog. The application keeps running.
    """
    from bookshop.ui.dialogs import show_error_dialog

    def excepthook(exc_type, exc, tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc, tb)
            return
        logger.opt(exception=(exc_type, exc, tb)).error("Unhandled exception")
        show_error_dialog("Unexpected error!", UNEXPECTED_ERROR_TEXT, parent_getter())

    def loop_exception_handler(_loop, context):
        exc = context.get("exception")
        if exc is None or isinstance(exc, asyncio.CancelledError):
            logger.warning(f"Event loop: {context.get('message')}")
            return
        excepthook(type(exc), exc, exc.__traceback__)

    sys.excepthook = excepthook
    loop.set_exception_handler(loop_exception_handler)


async def shutdown_registry(registry: ServiceRegistry):
    """Abandon pending tasks, close the repository and stop systems."""
    current = asyncio.current_task()
    for task in asyncio.all_tasks():
        if task is not current:
            task.cancel()

    if ShopRepository in registry:
        try:
            await registry.resolve(ShopRepository).close()
        except Exception as e:
            logger.error(f"Failed to close repository: {e}")
    await registry.stop_all()


def run_app(builder: Optional[ApplicationBuilder] = None, argv: Optional[Sequence[str]] = None) -> int:
    """
    Run BookShop until the main window closes.

    Handles:
    - Single-instance forwarding (a second launch re-activates the first)
    - Qt application and qasync event loop setup
    - Registry build and activation before the window is shown
    - Graceful shutdown

    Returns:
        Process exit code
    """
    from bookshop.activation.single_instance import InstanceChannel
    from bookshop.ui.dialogs import show_error_dialog
    from bookshop.ui.main_window import ShellWindow
    from bookshop.ui.viewmodels.shell_viewmodel import ShellViewModel

    argv = list(sys.argv if argv is None else argv)
    builder = builder or default_builder()

    app = QApplication.instance() or QApplication(argv)
    app.setApplicationName(builder.name)

    channel = InstanceChannel()
    if channel.forward(argv):
        return 0

    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)
    state = {}
    install_exception_hooks(loop, lambda: state.get("window"))

    def on_reactivation(args):
        window = state.get("window")
        if window is not None:
            window.showNormal()
            window.raise_()
            window.activateWindow()
        context = LaunchContext.from_argv(args, reactivation=True)
        loop.create_task(state["registry"].resolve(ActivationPipeline).run(context))

    async def async_main():
        registry = await builder.build()
        state["registry"] = registry

        general = registry.config.data.general
        window = ShellWindow(registry.resolve(ShellViewModel), general.min_width, general.min_height)
        state["window"] = window
        registry.resolve(NavigationService).frame = window

        # Activation completes before the window accepts input
        await registry.resolve(ActivationPipeline).run(LaunchContext.from_argv(argv))
        window.show()

        if channel.listen():
            channel.arguments_received.connect(on_reactivation)
        logger.info(f"{builder.name} started successfully")

    exit_code = 0
    with loop:
        try:
            loop.run_until_complete(async_main())
        except Exception as e:
            logger.opt(exception=e).error(f"Startup failed: {e}")
            message = str(e) if isinstance(e, BookShopError) else "An unexpected error occurred. See the log for details."
            show_error_dialog(f"{builder.name} could not start", message, wait=True)
            exit_code = 1
        else:
            try:
                loop.run_forever()
            except KeyboardInterrupt:
                logger.info("Application interrupted by user")
        finally:
            channel.close()
            if "registry" in state:
                loop.run_until_complete(shutdown_registry(state["registry"]))

    return exit_code

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from bookshop.core.config import ConfigManager
from bookshop.core.locator import ServiceRegistry
from bookshop.data.local import LocalShopRepository
from bookshop.data.repository import ShopRepository
from bookshop.ui.navigation.pages import PageRegistry
from bookshop.ui.navigation.parameters import ProductParameter
from bookshop.ui.navigation.service import NavigationAware, NavigationService


class StubPage:
    """Stands in for a page widget."""
    def __init__(self):
        self.view_model = None

    def bind(self, view_model):
        self.view_model = view_model


class StubViewModel(NavigationAware):
    """Records navigation callbacks."""
    def __init__(self, locator):
        self.locator = locator
        self.received = []
        self.left = 0

    def on_navigated_to(self, parameter):
        self.received.append(parameter)

    def on_navigated_from(self):
        self.left += 1


class RecordingFrame:
    def __init__(self):
        self.displayed = []

    def display(self, page):
        self.displayed.append(page)


STUB_PAGE_KEYS = ("Dashboard", "Products", "Categories", "Orders", "Settings")


def make_stub_pages() -> PageRegistry:
    pages = PageRegistry()
    for key in STUB_PAGE_KEYS:
        page_cls = type(f"{key}Page", (StubPage,), {})
        vm_cls = type(f"{key}ViewModel", (StubViewModel,), {})
        pages.add(key, page_cls, vm_cls)
    pages.add("ProductDetail", type("ProductDetailPage", (StubPage,), {}),
              type("ProductDetailViewModel", (StubViewModel,), {}),
              parameter_type=ProductParameter, show_in_menu=False)
    # A page without a view-model
    pages.add("About", type("AboutPage", (StubPage,), {}))
    return pages


def register_pages(registry: ServiceRegistry, pages: PageRegistry):
    registry.register_instance(PageRegistry, pages)
    for entry in pages:
        registry.add_transient(entry.page_type, lambda _, cls=entry.page_type: cls())
        if entry.view_model_type is not None:
            registry.add_transient(entry.view_model_type)


@pytest.fixture
def config(tmp_path):
    return ConfigManager(str(tmp_path / "config.json"))


@pytest.fixture
def registry(config):
    registry = ServiceRegistry(config)
    register_pages(registry, make_stub_pages())
    registry.add_singleton(NavigationService)
    return registry


@pytest.fixture
def navigation(registry):
    return registry.resolve(NavigationService)


@pytest.fixture
def local_repository(tmp_path):
    return LocalShopRepository(str(tmp_path / "store.json"))


@pytest.fixture
def app_registry(config, local_repository):
    """Registry wired with the real page table and a local repository."""
    from bookshop.ui.navigation.pages import default_pages

    registry = ServiceRegistry(config)
    pages = default_pages()
    registry.register_instance(PageRegistry, pages)
    for entry in pages:
        registry.add_transient(entry.view_model_type)
        registry.add_transient(entry.page_type, lambda _, cls=entry.page_type: cls())
    registry.add_singleton(NavigationService)
    registry.register_instance(ShopRepository, local_repository)
    return registry


@pytest.fixture
def frame(navigation):
    frame = RecordingFrame()
    navigation.frame = frame
    return frame


@pytest.fixture
def stub_pages():
    """Factory for the stub page table, for builders that take one."""
    return make_stub_pages

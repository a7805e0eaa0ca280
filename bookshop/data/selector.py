"""
Repository selection.

Runs once at startup: reads the repository settings, builds the matching
implementation and publishes it into the service registry as the
``ShopRepository`` singleton.
"""
from typing import Optional
from urllib.parse import urlparse

from loguru import logger

from bookshop.core.config import RepositorySettings
from bookshop.core.errors import AlreadyBuilt, ConfigurationMissing
from bookshop.core.locator import ServiceRegistry
from .local import LocalShopRepository
from .remote import RestShopRepository
from .repository import ShopRepository


class RepositorySelector:
    def __init__(self, registry: ServiceRegistry):
        self._registry = registry
        self._repository: Optional[ShopRepository] = None

    @property
    def repository(self) -> Optional[ShopRepository]:
        return self._repository

    def build_repository(self, settings: RepositorySettings) -> ShopRepository:
        """
        Build and publish the data-access implementation.

        Raises:
            ConfigurationMissing: remote mode without a valid base URL or key
            AlreadyBuilt: called more than once, or a repository is already registered
        """
        if self._repository is not None or ShopRepository in self._registry:
            raise AlreadyBuilt("Repository has already been built for this process.")

        if settings.mode == "local":
            repository = LocalShopRepository(settings.local_path)
        else:
            repository = self._build_remote(settings)

        self._registry.register_instance(ShopRepository, repository)
        self._repository = repository
        logger.info(f"Data access: {repository.description}")
        return repository

    def _build_remote(self, settings: RepositorySettings) -> RestShopRepository:
        missing = [
            key for key, value in (("base_url", settings.base_url), ("api_key", settings.api_key))
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationMissing(missing)

        parsed = urlparse(settings.base_url.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationMissing(["base_url"], reason="malformed")

        return RestShopRepository(settings.base_url.strip(), settings.api_key.strip(), timeout=settings.timeout)

"""
Core infrastructure: service registry, configuration, logging and errors.
"""
from bookshop.core.errors import (
    BookShopError,
    UnregisteredService,
    DuplicateRegistration,
    RegistryFrozen,
    ConfigurationMissing,
    AlreadyBuilt,
    ActivationFailed,
    AlreadyActivated,
    UnknownPage,
    InvalidNavigationParameter,
    RepositoryError,
)
from bookshop.core.locator import ServiceRegistry, ServiceDescriptor, Lifetime
from bookshop.core.base_system import BaseSystem
from bookshop.core.config import ConfigManager, AppConfig

__all__ = [
    # Errors
    "BookShopError",
    "UnregisteredService",
    "DuplicateRegistration",
    "RegistryFrozen",
    "ConfigurationMissing",
    "AlreadyBuilt",
    "ActivationFailed",
    "AlreadyActivated",
    "UnknownPage",
    "InvalidNavigationParameter",
    "RepositoryError",

    # Registry
    "ServiceRegistry",
    "ServiceDescriptor",
    "Lifetime",
    "BaseSystem",

    # Configuration
    "ConfigManager",
    "AppConfig",
]

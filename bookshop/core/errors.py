"""
BookShop exception hierarchy.

Registry and repository-selection errors are configuration errors and stop
startup. Navigation errors are recoverable and reported to the caller.
"""


class BookShopError(Exception):
    """Base class for all BookShop errors."""
    pass


# --- Service registry ---

class UnregisteredService(BookShopError, LookupError):
    """Raised when resolving an identity that was never registered."""

    def __init__(self, identity):
        self.identity = identity
        name = getattr(identity, "__name__", repr(identity))
        super().__init__(
            f"{name} needs to be registered in the service registry before it can be resolved."
        )


class DuplicateRegistration(BookShopError):
    """Raised when an identity is registered twice."""

    def __init__(self, identity):
        self.identity = identity
        name = getattr(identity, "__name__", repr(identity))
        super().__init__(f"{name} is already registered.")


class RegistryFrozen(BookShopError):
    """Raised when registering after the registry has been frozen."""
    pass


# --- Repository selection ---

class ConfigurationMissing(BookShopError):
    """Raised when required repository settings are absent or malformed."""

    def __init__(self, keys, reason: str = "missing"):
        self.keys = tuple(keys)
        super().__init__(f"Repository configuration {reason}: {', '.join(self.keys)}")


class AlreadyBuilt(BookShopError):
    """Raised when the repository is built a second time."""
    pass


# --- Activation ---

class ActivationFailed(BookShopError):
    """Raised when the selected activation handler fails."""
    pass


class AlreadyActivated(BookShopError):
    """Raised when the pipeline runs twice for a non re-activation launch."""
    pass


# --- Navigation ---

class UnknownPage(BookShopError, LookupError):
    """Navigation target is not in the page table."""

    def __init__(self, page_key: str):
        self.page_key = page_key
        super().__init__(f"Page not found: {page_key}. Did you forget to add it to the page table?")


class InvalidNavigationParameter(BookShopError, TypeError):
    """Navigation parameter does not match the type the page accepts."""

    def __init__(self, page_key: str, expected, received):
        self.page_key = page_key
        self.expected = expected
        self.received = received
        expected_name = getattr(expected, "__name__", "no parameter")
        super().__init__(
            f"Page {page_key} expects {expected_name}, got {type(received).__name__}"
        )


# --- Data access ---

class RepositoryError(BookShopError):
    """Raised when the data store cannot complete a request."""
    pass

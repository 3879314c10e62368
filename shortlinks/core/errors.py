class LinkRegistryError(Exception):
    """Base class for failures raised by the link registry."""


class ValidationError(LinkRegistryError):
    """Missing or unusable input (HTTP 400)."""


class NotFoundError(LinkRegistryError):
    """No record matches the given short code (HTTP 404)."""


class ConflictError(LinkRegistryError):
    """Short code collisions persisted past the retry budget."""


class StoreError(LinkRegistryError):
    """The underlying database failed or is unreachable (HTTP 500)."""

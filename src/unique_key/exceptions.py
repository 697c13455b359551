"""
Unique-key exceptions for consistent error handling across all stores.
"""


class UniqueKeyError(Exception):
    """Base class for every error raised by this package."""

    default_message = "Unique key error"

    def __init__(self, e=None, message=None):
        if message:
            super().__init__(message)
        elif e:
            super().__init__(str(e))
        else:
            super().__init__(self.default_message)
        self.error = e
        self.message = message


class ConfigurationError(UniqueKeyError):
    """Raised when a required construction parameter or config value is missing or invalid."""

    default_message = "Invalid configuration"


class InvalidArgument(UniqueKeyError, ValueError):
    """Raised when a key name or key id is missing or empty."""

    default_message = "Invalid argument"


class ConflictError(UniqueKeyError):
    """Raised by a store when a document already exists.

    The register turns this into a False return value; it never reaches callers of create().
    """

    default_message = "Document already exists"

    def __init__(self, e=None, message=None, index=None, key_name=None, key_id=None):
        self.index = index
        self.key_name = key_name
        self.key_id = key_id
        if not message and not e and key_name is not None:
            message = f"Unique key {key_name}/{key_id} already exists in {index}"
        super().__init__(e, message)

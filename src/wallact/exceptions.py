"""Exception hierarchy for the Wallact contract façade."""

from typing import Any


class WallactError(Exception):
    """Base exception for all Wallact errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(WallactError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidKeyError(ValidationError):
    """Raised when a private key cannot be turned into a signing account."""

    def __init__(self, message: str, entity: str | None = None, details: dict | None = None):
        # The offending key is never stored on the exception.
        super().__init__(message, field="private_key", details=details)
        self.entity = entity


class InvalidAddressError(ValidationError):
    """Raised when a contract or wallet address is malformed."""

    def __init__(self, message: str, address: Any | None = None, details: dict | None = None):
        super().__init__(message, field="address", value=address, details=details)


class ConversionError(ValidationError):
    """Raised when a numeric amount cannot be converted between units."""

    def __init__(self, message: str, amount: Any | None = None, details: dict | None = None):
        super().__init__(message, field="amount", value=amount, details=details)


class NoSignerAvailableError(WallactError):
    """Raised when a write or sign call has no resolvable signing entity."""

    def __init__(self, message: str, entity: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.entity = entity


class ContractCallError(WallactError):
    """Raised when a contract read, write or confirmation wait fails."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        entity: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.method = method
        self.entity = entity


class NetworkError(WallactError):
    """Raised when a provider query fails."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint

"""Error hierarchy for LIMBO.

Error layers:
- LimboError: Base class for all LIMBO errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: Storage and chat transport failures

Store and transport errors are normally converted into typed results by the
component that meets them. Anything that still reaches the HTTP layer is mapped
by the global exception handler in app.py.
"""

from enum import StrEnum


class LimboError(Exception):
    """Base class for all LIMBO errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(LimboError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Artist (or other resource) not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


# =============================================================================
# Infrastructure Errors (system-level failures)
# =============================================================================


class InfrastructureError(LimboError):
    """Base class for infrastructure/system errors."""


class StoreError(InfrastructureError):
    """Registry snapshot could not be read or written."""


class StoreWriteError(StoreError):
    """Snapshot write failed. In-memory state stays authoritative."""


class StoreCorruptError(StoreError):
    """Snapshot exists but is not well-formed. Fatal at startup."""


class TransportErrorKind(StrEnum):
    """Delivery failure signal reported by the chat transport adapter."""

    BLOCKED = "blocked"
    FORBIDDEN = "forbidden"
    OTHER = "other"


class TransportError(InfrastructureError):
    """Chat transport failed to deliver a message."""

    def __init__(self, message: str, kind: TransportErrorKind = TransportErrorKind.OTHER) -> None:
        super().__init__(message, code=f"transport_{kind.value}")
        self.kind = kind

    @property
    def permanent(self) -> bool:
        """True when the recipient can no longer be reached on this channel."""
        return self.kind in (TransportErrorKind.BLOCKED, TransportErrorKind.FORBIDDEN)


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""

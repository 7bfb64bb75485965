from enum import Enum
from typing import Optional


class ErrorCause(str, Enum):
    """Network-layer cause attached to a provider failure."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    CONNECTION_REFUSED = "connection_refused"
    HTTP = "http"
    STREAM = "stream"
    UNKNOWN = "unknown"


class ProviderError(Exception):
    """A failed call to a model provider.

    Carries an HTTP-status-equivalent and a cause so callers can classify the
    failure without parsing the message.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: ErrorCause = ErrorCause.UNKNOWN,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.cause = cause

    @property
    def status(self) -> Optional[int]:
        return self.status_code


class CircuitOpenError(ProviderError):
    """Raised locally, before any network call, when a provider's circuit is open."""

    def __init__(self, provider: str, retry_after: int):
        super().__init__(
            f"[CircuitBreaker] {provider} is unavailable. Circuit open. Try again in {retry_after}s",
            provider=provider,
            cause=ErrorCause.UNKNOWN,
        )
        self.retry_after = retry_after


class StreamInterruptedError(ProviderError):
    """The stream failed after output had already been delivered to the caller."""

    def __init__(self, message: str, provider: Optional[str] = None, chunks_delivered: int = 0):
        super().__init__(message, provider=provider, cause=ErrorCause.STREAM)
        self.chunks_delivered = chunks_delivered


class UnknownProviderError(KeyError):
    pass


class RegistryConfigError(ValueError):
    pass

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

from simulark.common.errors import ErrorCause, StreamInterruptedError, CircuitOpenError
from simulark.config.base.settings import RETRY_SETTINGS
from simulark.providers.circuit_breaker import CircuitBreaker

logger = logging.getLogger("Simulark")

T = TypeVar("T")

# Lowercase substrings for errors that expose no structured fields
RETRYABLE_MESSAGE_MARKERS = (
    "timeout",
    "network",
    "econnrefused",
    "etimedout",
    "429",
    "503",
    "502",
    "504",
)
RATE_LIMIT_MESSAGE_MARKERS = ("429", "rate limit", "速率限制")

TRANSIENT_CAUSES = (ErrorCause.TIMEOUT, ErrorCause.NETWORK, ErrorCause.CONNECTION_REFUSED)
STRUCTURED_CAUSES = (ErrorCause.HTTP, ErrorCause.STREAM)


class RetryPolicy(BaseModel):
    """Backoff parameters for one call site. Delays are in seconds."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=3, ge=1)
    base_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=10.0, ge=0)
    exponential_base: float = Field(default=2.0, ge=1)


DEFAULT_RETRY_POLICY = RetryPolicy(**RETRY_SETTINGS["default"])
PROVIDER_CALL_POLICY = RetryPolicy(**RETRY_SETTINGS["provider_call"])


def _status_code(error: BaseException) -> Optional[int]:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    status = getattr(error, "status_code", None)
    if status is None:
        status = getattr(error, "status", None)
    return status if isinstance(status, int) else None


def _has_structured_fields(error: BaseException) -> bool:
    return _status_code(error) is not None or getattr(error, "cause", None) in STRUCTURED_CAUSES


def is_retryable_error(error: BaseException) -> bool:
    """True for timeouts, network failures, refused connections, 429 and 5xx.

    Errors carrying a status or an HTTP/stream cause are classified from those
    fields alone. Message markers only apply to errors that expose neither.
    """
    if isinstance(error, StreamInterruptedError):
        return False

    if getattr(error, "cause", None) in TRANSIENT_CAUSES:
        return True
    if isinstance(error, (httpx.TimeoutException, httpx.NetworkError, asyncio.TimeoutError)):
        return True

    if _has_structured_fields(error):
        status = _status_code(error)
        return status is not None and (status == 429 or status >= 500)

    message = str(error).lower()
    return any(marker in message for marker in RETRYABLE_MESSAGE_MARKERS)


def is_rate_limit_error(error: BaseException) -> bool:
    if isinstance(error, StreamInterruptedError):
        return False
    if _has_structured_fields(error):
        return _status_code(error) == 429
    message = str(error).lower()
    return any(marker in message for marker in RATE_LIMIT_MESSAGE_MARKERS)


def calculate_delay(attempt: int, policy: RetryPolicy = DEFAULT_RETRY_POLICY) -> float:
    """Backoff before retrying after `attempt` (1-indexed) failed, capped at max_delay."""
    delay = policy.base_delay * policy.exponential_base ** (attempt - 1)
    return min(delay, policy.max_delay)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    operation_name: str = "operation",
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> T:
    """Runs `fn` until it succeeds or the policy is exhausted.

    Rate-limit and non-retryable errors are re-raised after the first attempt so
    the caller can fail over. Backoff uses asyncio.sleep, suspending only the
    current task.

    Args:
        fn: Zero-argument coroutine function performing one attempt.
        operation_name: Label used in log lines.
        policy: Retry parameters.

    Returns:
        Whatever `fn` returns on its first successful attempt.

    Raises:
        The last error raised by `fn`.
    """
    last_error: Optional[BaseException] = None

    for attempt in range(1, policy.max_retries + 1):
        try:
            result = await fn()
            if attempt > 1:
                logger.info(f"[Retry] {operation_name} succeeded on attempt {attempt}")
            return result
        except Exception as e:
            last_error = e

            if is_rate_limit_error(e):
                logger.warning(
                    f"[Retry] {operation_name} hit rate limit. Not retrying, caller should fall back."
                )
                raise

            if not is_retryable_error(e):
                logger.warning(f"[Retry] {operation_name} failed with non-retryable error: {e}")
                raise

            if attempt < policy.max_retries:
                delay = calculate_delay(attempt, policy)
                logger.warning(
                    f"[Retry] {operation_name} failed (attempt {attempt}/{policy.max_retries}): {e}. "
                    f"Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
            else:
                logger.error(
                    f"[Retry] {operation_name} failed after {policy.max_retries} attempts: {e}"
                )

    raise last_error


class ResilientCaller:
    """Circuit breaker + retry around every provider call."""

    def __init__(self, breaker: CircuitBreaker, policy: RetryPolicy = PROVIDER_CALL_POLICY):
        self.breaker = breaker
        self.policy = policy

    async def call_with_resilience(
        self,
        provider: str,
        fn: Callable[[], Awaitable[T]],
        operation_name: str = "AI call",
    ) -> T:
        if not self.breaker.can_execute(provider):
            raise CircuitOpenError(provider, self.breaker.retry_after(provider))

        try:
            result = await with_retry(fn, f"{operation_name} ({provider})", self.policy)
        except asyncio.CancelledError:
            # Abandoned by the caller: neither a success nor a failure
            logger.info(f"[Resilience] {operation_name} ({provider}) cancelled")
            raise
        except StreamInterruptedError:
            raise
        except Exception:
            self.breaker.record_failure(provider)
            raise

        self.breaker.record_success(provider)
        return result


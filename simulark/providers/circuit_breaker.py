import logging
import math
import threading
import time
from typing import Callable, Dict, Literal, Optional

from pydantic import BaseModel

from simulark.config.base.settings import CIRCUIT_BREAKER_SETTINGS

logger = logging.getLogger("Simulark")

CircuitStatus = Literal["closed", "open", "half-open"]


class CircuitState(BaseModel):
    """Breaker bookkeeping for one provider."""

    status: CircuitStatus = "closed"
    failures: int = 0
    last_failure_time: Optional[float] = None
    half_open_calls: int = 0


class CircuitBreaker:
    """Per-provider circuit breaker store.

    One instance is owned by the orchestrator (and exposed on app.state for the
    health endpoint); tests build their own isolated instances. State mutations
    for a provider are serialized by that provider's lock, so unrelated
    providers never wait on each other.
    """

    def __init__(
        self,
        failure_threshold: int = CIRCUIT_BREAKER_SETTINGS["failure_threshold"],
        reset_timeout: float = CIRCUIT_BREAKER_SETTINGS["reset_timeout"],
        half_open_max_calls: int = CIRCUIT_BREAKER_SETTINGS["half_open_max_calls"],
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initializes the breaker store.

        Args:
            failure_threshold: Consecutive failures that open the circuit.
            reset_timeout: Seconds an open circuit waits before probing.
            half_open_max_calls: Successful probes needed to close again.
            clock: Monotonic time source, injectable for tests.
        """
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self.half_open_max_calls = half_open_max_calls
        self._clock = clock
        self._states: Dict[str, CircuitState] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, provider: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(provider)
            if lock is None:
                lock = self._locks[provider] = threading.Lock()
                self._states[provider] = CircuitState()
            return lock

    def can_execute(self, provider: str) -> bool:
        with self._lock_for(provider):
            state = self._states[provider]

            if state.status == "closed":
                return True

            if state.status == "open":
                elapsed = self._clock() - (state.last_failure_time or 0.0)
                if elapsed >= self.reset_timeout:
                    state.status = "half-open"
                    state.half_open_calls = 0
                    logger.info(f"[CircuitBreaker] {provider} transitioning to half-open")
                    return True
                return False

            return state.half_open_calls < self.half_open_max_calls

    def record_success(self, provider: str) -> None:
        with self._lock_for(provider):
            state = self._states[provider]

            if state.status == "half-open":
                state.half_open_calls += 1
                if state.half_open_calls >= self.half_open_max_calls:
                    state.status = "closed"
                    state.failures = 0
                    state.half_open_calls = 0
                    logger.info(f"[CircuitBreaker] {provider} recovered, circuit closed")
            else:
                state.failures = 0

    def record_failure(self, provider: str) -> None:
        with self._lock_for(provider):
            state = self._states[provider]
            state.failures += 1
            state.last_failure_time = self._clock()

            if state.status == "half-open":
                state.status = "open"
                state.half_open_calls = 0
                logger.warning(f"[CircuitBreaker] {provider} failed in half-open, reopening circuit")
            elif state.status == "closed" and state.failures >= self.failure_threshold:
                state.status = "open"
                logger.warning(
                    f"[CircuitBreaker] {provider} opened after {state.failures} failures"
                )

    def get_status(self, provider: str) -> CircuitState:
        """Returns a snapshot; mutating it does not affect the breaker."""
        with self._lock_for(provider):
            return self._states[provider].model_copy()

    def retry_after(self, provider: str) -> int:
        """Whole seconds until an open circuit admits a probe (0 if not open)."""
        with self._lock_for(provider):
            state = self._states[provider]
            if state.status != "open":
                return 0
            elapsed = self._clock() - (state.last_failure_time or 0.0)
            return max(0, math.ceil(self.reset_timeout - elapsed))

    def reset(self, provider: str) -> None:
        with self._lock_for(provider):
            self._states[provider] = CircuitState()
        logger.info(f"[CircuitBreaker] {provider} manually reset")

    def snapshot(self) -> Dict[str, CircuitState]:
        with self._registry_lock:
            providers = list(self._states)
        return {p: self.get_status(p) for p in providers}

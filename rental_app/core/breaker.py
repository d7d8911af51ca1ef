import logging
import time
from typing import Any, Awaitable, Callable, Tuple, Type

from sqlalchemy.exc import SQLAlchemyError

from .exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


class CircuitBreaker:
    """Stops calling the database after repeated infrastructure failures.

    Only exceptions listed in ``tracked`` count as failures; domain errors
    raised by services pass through without touching the breaker state.
    """

    def __init__(
        self,
        failure_threshold: int = 3,
        base_recovery_time: int = 10,
        max_recovery_time: int = 60,
        tracked: Tuple[Type[BaseException], ...] = (SQLAlchemyError, OSError),
    ):
        self.failure_count = 0
        self.failure_threshold = failure_threshold
        self.base_recovery_time = base_recovery_time
        self.max_recovery_time = max_recovery_time
        self.last_failure_time = 0.0
        self.state = "CLOSED"
        self.tracked = tracked

    @property
    def current_recovery_time(self):
        return min(
            self.base_recovery_time
            * (2 ** max(0, self.failure_count - self.failure_threshold)),
            self.max_recovery_time,
        )

    def _open(self):
        self.state = "OPEN"
        self.last_failure_time = time.time()
        logger.warning("Circuit opened after %s failures.", self.failure_count)

    def _half_open(self):
        self.state = "HALF_OPEN"
        logger.info("Circuit half-open: testing...")

    def _close(self):
        if self.state != "CLOSED":
            logger.info("Circuit closed: stable again.")
        self.state = "CLOSED"
        self.failure_count = 0

    def reset(self):
        self.state = "CLOSED"
        self.failure_count = 0
        self.last_failure_time = 0.0

    async def call(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        now = time.time()

        if self.state == "OPEN":
            cooldown = self.current_recovery_time
            remaining = cooldown - (now - self.last_failure_time)
            if remaining > 0:
                raise ServiceUnavailableError(
                    f"Service temporarily unavailable, retry after {remaining:.1f}s"
                )
            self._half_open()

        try:
            result = await func(*args, **kwargs)
        except self.tracked as e:
            self.failure_count += 1
            logger.error("CircuitBreaker call failed (%s): %s", self.failure_count, e)
            if self.state == "HALF_OPEN" or self.failure_count >= self.failure_threshold:
                self._open()
            raise

        self._close()
        return result


breaker = CircuitBreaker(failure_threshold=3, base_recovery_time=10)

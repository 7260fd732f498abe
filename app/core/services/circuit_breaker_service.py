from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from app.core.config import settings

CLOSED = "closed"
OPEN = "open"
HALF_OPEN = "half_open"


class CircuitBreaker:

    def __init__(self, failure_threshold: int = settings.FAILURE_THRESHOLD, recovery_timeout: int = settings.RECOVERY_TIMEOUT):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.last_failure_time: Optional[datetime] = None
        self.trial_in_flight = False
        self.state = CLOSED

    def can_execute(self) -> bool:
        """Check if request can be executed. While half open only one trial call is let through."""
        if self.state == CLOSED:
            return True
        elif self.state == OPEN:
            if self.last_failure_time and \
                    datetime.now(timezone.utc) - self.last_failure_time >= timedelta(seconds=self.recovery_timeout):
                self.state = HALF_OPEN
                self.trial_in_flight = True
                return True
            return False
        else:  # half open
            if self.trial_in_flight:
                return False
            self.trial_in_flight = True
            return True

    def record_success(self):
        """Record successful execution."""
        self.failure_count = 0
        self.trial_in_flight = False
        self.state = CLOSED

    def record_failure(self):
        """Record failed execution. A failed trial call reopens the circuit at once."""
        self.failure_count += 1
        self.last_failure_time = datetime.now(timezone.utc)
        self.trial_in_flight = False

        if self.state == HALF_OPEN or self.failure_count >= self.failure_threshold:
            self.state = OPEN


@lru_cache
def get_circuit_breaker() -> CircuitBreaker:
    """Get a CircuitBreaker instance with configured settings."""
    return CircuitBreaker(
        settings.FAILURE_THRESHOLD,
        settings.RECOVERY_TIMEOUT
    )

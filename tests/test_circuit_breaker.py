"""
Tests for CircuitBreaker state transitions.
"""

from datetime import datetime, timedelta, timezone

from app.core.services import CircuitBreaker


class TestCircuitBreaker:

    def test_starts_closed(self):
        breaker = CircuitBreaker(failure_threshold=3, recovery_timeout=30)

        assert breaker.state == "closed"
        assert breaker.can_execute() is True

    def test_opens_at_threshold(self):
        breaker = CircuitBreaker(failure_threshold=3, recovery_timeout=30)

        breaker.record_failure()
        breaker.record_failure()
        assert breaker.can_execute() is True

        breaker.record_failure()
        assert breaker.state == "open"
        assert breaker.can_execute() is False

    def test_half_open_after_recovery_timeout(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=30)
        breaker.record_failure()

        breaker.last_failure_time = datetime.now(timezone.utc) - timedelta(seconds=31)

        assert breaker.can_execute() is True
        assert breaker.state == "half_open"

    def test_only_one_trial_call_while_half_open(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=30)
        breaker.record_failure()
        breaker.last_failure_time = datetime.now(timezone.utc) - timedelta(seconds=31)

        assert breaker.can_execute() is True
        assert breaker.can_execute() is False
        assert breaker.can_execute() is False
        assert breaker.state == "half_open"

    def test_new_trial_after_failed_trial_and_timeout(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=30)
        breaker.record_failure()
        breaker.last_failure_time = datetime.now(timezone.utc) - timedelta(seconds=31)
        assert breaker.can_execute() is True

        breaker.record_failure()
        assert breaker.can_execute() is False

        breaker.last_failure_time = datetime.now(timezone.utc) - timedelta(seconds=31)
        assert breaker.can_execute() is True

    def test_failed_trial_reopens(self):
        breaker = CircuitBreaker(failure_threshold=5, recovery_timeout=0)
        breaker.state = "half_open"

        breaker.record_failure()

        assert breaker.state == "open"

    def test_success_closes(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        breaker.record_failure()
        assert breaker.can_execute() is True

        breaker.record_success()

        assert breaker.state == "closed"
        assert breaker.failure_count == 0

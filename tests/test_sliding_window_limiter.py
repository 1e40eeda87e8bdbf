"""Tests for the per-client sliding-window rate limiter."""

import pytest

from train_board_proxy.adapters.web import SlidingWindowRateLimiter


class TestSlidingWindowRateLimiter:
    def test_admits_up_to_limit_then_rejects(self) -> None:
        """Given 20 requests at one instant, when the 21st arrives, then it is rejected."""
        limiter = SlidingWindowRateLimiter(max_requests=20, window_seconds=60)

        admitted = [limiter.admit("10.0.0.1", now=100.0) for _ in range(21)]

        assert admitted == [True] * 20 + [False]

    def test_rejected_request_is_not_counted(self) -> None:
        """Given a rejected request, when the window passes, then only admitted ones expire."""
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10)
        limiter.admit("a", now=0.0)

        assert limiter.admit("a", now=5.0) is False
        assert limiter.admit("a", now=10.5) is True

    def test_requests_resume_after_window(self) -> None:
        """Given a client at its limit, when the window has fully passed, then it is admitted again."""
        limiter = SlidingWindowRateLimiter(max_requests=20, window_seconds=60)
        for _ in range(20):
            limiter.admit("10.0.0.1", now=0.0)

        assert limiter.admit("10.0.0.1", now=59.0) is False
        assert limiter.admit("10.0.0.1", now=60.0) is True

    def test_window_slides_with_each_timestamp(self) -> None:
        """Given requests spread over time, when old ones expire, then slots free up one by one."""
        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=10)
        assert limiter.admit("c", now=0.0)
        assert limiter.admit("c", now=5.0)
        assert not limiter.admit("c", now=9.0)

        assert limiter.admit("c", now=10.1)
        assert not limiter.admit("c", now=14.0)
        assert limiter.admit("c", now=15.1)

    def test_clients_are_limited_independently(self) -> None:
        """Given one client at its limit, when another client asks, then it is admitted."""
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
        limiter.admit("a", now=0.0)

        assert limiter.admit("a", now=1.0) is False
        assert limiter.admit("b", now=1.0) is True

    def test_admitted_count_never_exceeds_limit_in_any_window(self) -> None:
        """Given a burst every second, when checking any window, then at most N were admitted."""
        limiter = SlidingWindowRateLimiter(max_requests=3, window_seconds=10)
        admitted_at = [float(t) for t in range(40) if limiter.admit("x", now=float(t))]

        for start in admitted_at:
            in_window = [t for t in admitted_at if start <= t < start + 10]
            assert len(in_window) <= 3

    def test_retry_after_counts_until_oldest_expires(self) -> None:
        """Given a client at its limit, when asking for retry-after, then the wait is rounded up."""
        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60)
        limiter.admit("a", now=10.0)
        limiter.admit("a", now=20.0)

        assert limiter.retry_after("a", now=30.5) == 40
        assert limiter.retry_after("unknown", now=30.5) == 1

    def test_retry_after_is_at_least_one_second(self) -> None:
        """Given an entry about to expire, when asking for retry-after, then 1 is returned."""
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
        limiter.admit("a", now=0.0)

        assert limiter.retry_after("a", now=59.99) == 1

    def test_tracked_clients_are_capped(self) -> None:
        """Given more clients than the cap, when admitting, then the least recent ones are evicted."""
        limiter = SlidingWindowRateLimiter(
            max_requests=5, window_seconds=60, max_tracked_clients=3
        )
        for index in range(5):
            limiter.admit(f"client-{index}", now=float(index))

        assert len(limiter) == 3

    def test_eviction_prefers_idle_clients(self) -> None:
        """Given idle and active clients over the cap, when evicting, then idle ones go first."""
        limiter = SlidingWindowRateLimiter(
            max_requests=1, window_seconds=10, max_tracked_clients=2
        )
        limiter.admit("idle", now=0.0)
        limiter.admit("active", now=15.0)

        limiter.admit("new", now=16.0)

        assert len(limiter) == 2
        assert limiter.admit("active", now=17.0) is False

    def test_sweep_drops_expired_clients(self) -> None:
        """Given clients with expired entries, when sweeping, then they are forgotten."""
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10)
        limiter.admit("a", now=0.0)
        limiter.admit("b", now=8.0)

        assert limiter.sweep(now=12.0) == 1
        assert len(limiter) == 1

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_requests": 0}, {"window_seconds": 0}, {"max_tracked_clients": 0}],
    )
    def test_rejects_invalid_settings(self, kwargs: dict[str, float]) -> None:
        """Given a non-positive setting, when constructing, then ValueError is raised."""
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(**kwargs)  # type: ignore[arg-type]

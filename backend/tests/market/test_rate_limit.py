"""Tests for RateLimiter."""

from tickfeed.market.rate_limit import RateLimiter


class TestRateLimiter:
    """Unit tests for the fixed-window rate limiter."""

    def test_admits_exactly_max_then_denies(self, clock):
        """Test that MAX sends are admitted within the window and the rest denied."""
        limiter = RateLimiter(max_per_second=50, clock=clock)
        admitted = sum(limiter.allow() for _ in range(80))
        assert admitted == 50
        assert limiter.count == 50

    def test_denies_until_reset(self, clock):
        limiter = RateLimiter(max_per_second=3, clock=clock)
        for _ in range(3):
            assert limiter.allow()
        clock.advance(1000)  # Exactly one window: not yet reset
        assert limiter.allow() is False

    def test_resets_after_window(self, clock):
        """Test that the window resets once more than 1000ms has passed."""
        limiter = RateLimiter(max_per_second=3, clock=clock)
        for _ in range(3):
            limiter.allow()
        clock.advance(1001)
        assert limiter.allow() is True
        assert limiter.window_start == clock.now
        assert limiter.count == 1

    def test_burst_across_boundary(self, clock):
        """A client can get up to 2x the limit across a window boundary."""
        limiter = RateLimiter(max_per_second=5, clock=clock)
        clock.advance(990)
        first = sum(limiter.allow() for _ in range(5))
        clock.advance(20)
        second = sum(limiter.allow() for _ in range(5))
        assert first + second == 10

    def test_explicit_now(self, clock):
        limiter = RateLimiter(max_per_second=1, clock=clock)
        assert limiter.allow(now=clock.now) is True
        assert limiter.allow(now=clock.now + 500) is False
        assert limiter.allow(now=clock.now + 1500) is True

    def test_window_starts_at_creation(self, clock):
        limiter = RateLimiter(clock=clock)
        assert limiter.window_start == clock.now
        assert limiter.count == 0

    def test_default_limit(self):
        assert RateLimiter().max_per_second == 50

import unittest

from rezdy_agent.rate_limit import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class TestRateLimiter(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.clock = FakeClock()
        self.limiter = RateLimiter(max_requests=2, window_seconds=10, clock=self.clock, sleep=self.clock.sleep)

    async def test_requests_within_limit_do_not_wait(self):
        await self.limiter.acquire()
        await self.limiter.acquire()
        self.assertEqual(self.clock.sleeps, [])
        self.assertEqual(self.limiter.count, 2)

    async def test_waits_for_rest_of_window_when_exhausted(self):
        await self.limiter.acquire()
        await self.limiter.acquire()
        self.clock.now = 4
        await self.limiter.acquire()

        self.assertEqual(self.clock.sleeps, [6])
        self.assertEqual(self.limiter.count, 1)
        self.assertEqual(self.limiter.last_reset, 10)

    async def test_window_resets_after_expiry(self):
        await self.limiter.acquire()
        await self.limiter.acquire()
        self.clock.now = 10.5
        await self.limiter.acquire()

        self.assertEqual(self.clock.sleeps, [])
        self.assertEqual(self.limiter.count, 1)
        self.assertEqual(self.limiter.last_reset, 10.5)

    async def test_limiters_do_not_share_state(self):
        other = RateLimiter(max_requests=2, window_seconds=10, clock=self.clock, sleep=self.clock.sleep)
        await self.limiter.acquire()
        await self.limiter.acquire()
        await other.acquire()
        self.assertEqual(other.count, 1)
        self.assertEqual(self.clock.sleeps, [])


if __name__ == "__main__":
    unittest.main()

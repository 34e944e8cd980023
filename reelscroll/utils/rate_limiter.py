"""
Rate Limiter Utility
Token bucket rate limiter shared by every client of a remote service
"""
import asyncio
import time
from typing import Dict


class RateLimiter:
    """Token bucket with one shared instance per service name"""

    _instances: Dict[str, "RateLimiter"] = {}

    def __init__(self, service_name: str, rate: int):
        if rate <= 0:
            raise ValueError(f"Rate for {service_name} must be positive, got {rate}")
        self.service_name = service_name
        self.rate = rate  # requests per second
        self.tokens = float(rate)
        self.last_update = time.monotonic()
        self.lock = asyncio.Lock()

    @classmethod
    def get_limiter(cls, service_name: str, rate: int) -> "RateLimiter":
        """Get or create the shared limiter for a service"""
        limiter = cls._instances.get(service_name)
        if limiter is None:
            limiter = cls._instances[service_name] = cls(service_name, rate)
        return limiter

    @classmethod
    def reset_all(cls):
        """Forget every shared limiter (used when settings change)"""
        cls._instances.clear()

    def _refill(self, now: float):
        elapsed = now - self.last_update
        self.tokens = min(self.rate, self.tokens + elapsed * self.rate)
        self.last_update = now

    async def acquire(self):
        """Acquire a token, waiting if necessary"""
        async with self.lock:
            self._refill(time.monotonic())

            if self.tokens < 1:
                await asyncio.sleep((1 - self.tokens) / self.rate)
                self._refill(time.monotonic())

            self.tokens = max(0.0, self.tokens - 1)

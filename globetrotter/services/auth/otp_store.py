"""Pending password-reset codes, keyed by lowercased email.

Both stores share the same two-call surface so the reset flow does not care
where codes live: ``put`` overwrites any pending code for the email and
``consume`` succeeds at most once per stored code.
"""
import secrets
import time
from typing import Dict, Optional, Protocol, Tuple, Callable

from globetrotter.core.cache import RedisCache


class OtpStore(Protocol):
    async def put(self, email: str, code: str, ttl: int) -> None: ...

    async def consume(self, email: str, code: str) -> bool: ...


class InMemoryOtpStore:
    """Process-local store. Expired entries are dropped when read, never swept."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._codes: Dict[str, Tuple[str, float]] = {}

    async def put(self, email: str, code: str, ttl: int) -> None:
        self._codes[email.lower()] = (code, self._clock() + ttl)

    async def consume(self, email: str, code: str) -> bool:
        key = email.lower()
        entry = self._codes.get(key)
        if entry is None:
            return False

        stored, expires_at = entry
        if self._clock() >= expires_at:
            del self._codes[key]
            return False

        if not secrets.compare_digest(stored, code):
            return False

        del self._codes[key]
        return True

    def pending(self, email: str) -> Optional[str]:
        entry = self._codes.get(email.lower())
        return entry[0] if entry else None


class RedisOtpStore:
    """Shared store backed by Redis key expiry."""

    def __init__(self, cache: RedisCache):
        self.cache = cache

    @staticmethod
    def _key(email: str) -> str:
        return RedisCache.build_key("reset_otp", email.lower())

    async def put(self, email: str, code: str, ttl: int) -> None:
        await self.cache.set(self._key(email), code, expire=ttl)

    async def consume(self, email: str, code: str) -> bool:
        return await self.cache.delete_if(
            self._key(email),
            lambda stored: secrets.compare_digest(str(stored), code),
        )

import json
from typing import Any, Callable
import redis.asyncio as redis
from redis.exceptions import WatchError


class RedisCache:
    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    async def set(self, key: str, value: Any, expire: int = 3600) -> None:
        """Set value in cache with expiration in seconds (default 1 hour)"""
        await self.redis.set(
            key,
            json.dumps(value, default=str),
            ex=expire
        )

    async def delete_if(self, key: str, predicate: Callable[[Any], bool]) -> bool:
        """Delete key only while its value still satisfies predicate (WATCH/MULTI)"""
        async with self.redis.pipeline(transaction=True) as pipe:
            await pipe.watch(key)
            data = await pipe.get(key)
            if not data or not predicate(json.loads(data)):
                return False
            pipe.multi()
            pipe.delete(key)
            try:
                await pipe.execute()
            except WatchError:
                return False
        return True

    @staticmethod
    def build_key(*args) -> str:
        """Build cache key from arguments"""
        return ":".join(str(arg) for arg in args)

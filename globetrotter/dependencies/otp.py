from globetrotter.core.cache import RedisCache
from globetrotter.core.config import settings
from globetrotter.core.redis_lifecycle import init_redis_client
from globetrotter.services.auth.otp_store import InMemoryOtpStore, OtpStore, RedisOtpStore

_memory_store = InMemoryOtpStore()


async def get_otp_store() -> OtpStore:
    """FastAPI dependency selecting the OTP backend from settings."""
    if settings.OTP_BACKEND == "memory":
        return _memory_store
    client = await init_redis_client()
    return RedisOtpStore(RedisCache(client))

import os
from aiocache import Cache

from curriculum_backend.settings import settings

# Get Redis configuration from environment
REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = int(os.environ.get('REDIS_PORT', '6379'))
REDIS_PASSWORD = os.environ.get('REDIS_PASSWORD', '')

def _build_cache() -> Cache:
    if settings.SEARCH_INDEX_BACKEND == "redis":
        return Cache(
            Cache.REDIS,
            endpoint=REDIS_HOST,
            port=REDIS_PORT,
            password=REDIS_PASSWORD if REDIS_PASSWORD else None,
            pool_max_size=10,
            db=0
        )
    return Cache(Cache.MEMORY)

_redis_cache = _build_cache()

async def get_redis_client() -> Cache:
    return _redis_cache

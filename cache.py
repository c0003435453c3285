import os
import logging
from redis import Redis
from config import config, cache_config, get_setting

logger = logging.getLogger(__name__)

cache: Redis = Redis(**cache_config)

def seed_cache() -> None:
    for key in sorted(set(config.keys()) | set(os.environ.keys())):
        value: str | None = get_setting(key)
        if key.startswith('CACHE_SET_') and value is not None and cache.get(key[10:].lower()) is None:
            logger.info("Seeding cache key %s", key[10:].lower())
            cache.set(key[10:].lower(), value)

def is_blocked(action: str) -> bool:
    return cache.get(f'block_{action}') == 'True'

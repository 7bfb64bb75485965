from slowapi import Limiter
from slowapi.util import get_remote_address

from simulark.config.default_config import CONFIG


def get_limiter(settings=None):
    settings = settings or CONFIG["rate_limit"]
    # 'limits' storage URI: memory:// by default, redis://host:port/0 for shared counters
    limiter = Limiter(
        key_func=get_remote_address,
        storage_uri=settings["storage_uri"],
        strategy="fixed-window",
    )
    limiter.enabled = settings["enabled"]
    return limiter


limiter = get_limiter()

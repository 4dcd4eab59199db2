import hashlib
from functools import wraps
from typing import Callable, Awaitable, Optional
from fastapi import Request, HTTPException
from redis.exceptions import RedisError
from app.core.config.settings import settings
from app.core.database.redis import redis_manager
from app.core.logger import logger_manager
from app.utils.client_info import client_info_utils


logger = logger_manager.get_logger(__name__)


def rate_limiter(limit: Optional[int] = None, seconds: Optional[int] = None):
    """
    Per-client request cap backed by a Redis counter.

    The decorated endpoint must take ``request: Request``. If Redis is
    unreachable the request is let through.
    """

    def decorator(func: Callable[..., Awaitable]):
        @wraps(func)
        async def wrapper(request: Request, *args, **kwargs):
            max_requests = limit or settings.rate_limit.RATE_LIMIT
            window = seconds or settings.rate_limit.PER_SECONDS

            ip = client_info_utils.get_client_ip(request)
            user_agent = client_info_utils.get_user_agent(request)
            fingerprint = hashlib.sha256(f"{ip}:{user_agent}".encode()).hexdigest()
            key = f"rate_limit:{request.url.path}:{fingerprint}"

            try:
                current_count = await redis_manager.incr_with_expiry(key, window)
            except (RedisError, OSError) as e:
                logger.warning(f"Rate limiter unavailable, allowing request: {e}")
                current_count = 0

            if current_count > max_requests:
                raise HTTPException(
                    status_code=429,
                    detail="Too many requests, please try again later",
                )

            return await func(request, *args, **kwargs)

        return wrapper

    return decorator

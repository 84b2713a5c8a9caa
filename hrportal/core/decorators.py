import asyncio
import functools
import logging
import time
from datetime import datetime

from fastapi import HTTPException, Request, status

from hrportal.core.config import settings

logger = logging.getLogger(__name__)


def _find_request(args, kwargs):
    for value in list(args) + list(kwargs.values()):
        if isinstance(value, Request):
            return value
    return None


def log_execution_time(func):
    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
            elapsed = time.time() - start_time
            logger.info(f"{func.__name__} took {elapsed:.4f}s")
            return result
        except Exception as e:
            elapsed = time.time() - start_time
            logger.error(f"{func.__name__} failed after {elapsed:.4f}s: {str(e)}")
            raise

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            elapsed = time.time() - start_time
            logger.info(f"{func.__name__} took {elapsed:.4f}s")
            return result
        except Exception as e:
            elapsed = time.time() - start_time
            logger.error(f"{func.__name__} failed after {elapsed:.4f}s: {str(e)}")
            raise

    return async_wrapper if asyncio.iscoroutinefunction(func) else sync_wrapper


def log_requests(func):
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        request = _find_request(args, kwargs)
        request_id = datetime.now().strftime("%Y%m%d%H%M%S%f")

        if request:
            client_ip = request.client.host if request.client else "unknown"
            logger.info(f"REQ {request_id}: {request.method} {request.url.path} from {client_ip}")
        else:
            logger.info(f"FUNC {request_id}: {func.__name__} called")

        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
            elapsed = time.time() - start_time

            logger.info(f"DONE {request_id}: completed in {elapsed:.4f}s")
            return result
        except Exception as e:
            elapsed = time.time() - start_time

            logger.error(f"FAIL {request_id}: error after {elapsed:.4f}s - {str(e)}")
            raise

    return wrapper


def rate_limit(calls=60, period=60):
    cache = {}
    global_cache = []

    def decorator(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            if not settings.RATE_LIMIT_ENABLED:
                return await func(*args, **kwargs)

            request = _find_request(args, kwargs)
            current_time = time.time()

            # Keep only timestamps within the rate limit period
            nonlocal global_cache
            global_cache = [ts for ts in global_cache if current_time - ts < period]

            # Individual IP-based rate limiting
            if request and request.client:
                client_ip = request.client.host

                if client_ip not in cache:
                    cache[client_ip] = []

                cache[client_ip] = [ts for ts in cache[client_ip] if current_time - ts < period]

                if len(cache[client_ip]) >= calls:
                    logger.warning(f"Client rate limit exceeded: {client_ip} ({len(cache[client_ip])} requests in {period}s)")
                    raise HTTPException(
                        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                        detail=f"Too many requests. Try again in {period} seconds."
                    )

                cache[client_ip].append(current_time)
            else:
                # Unknown client address falls back to a global limit
                global_limit = calls * 10

                if len(global_cache) >= global_limit:
                    logger.warning(f"Global rate limit exceeded: {len(global_cache)} requests in {period}s")
                    raise HTTPException(
                        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                        detail=f"Server busy. Try again in {period} seconds."
                    )

                global_cache.append(current_time)

            return await func(*args, **kwargs)

        return async_wrapper

    return decorator

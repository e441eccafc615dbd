"""
Rate Limiting Middleware

Protects upload and authentication endpoints from abuse using SlowAPI.
Limits are counted per API key when one is sent, per client IP otherwise.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, status
from fastapi.responses import JSONResponse
from scenevault.config import settings
from scenevault.utils.sanitize import get_safe_api_key_display
import logging

logger = logging.getLogger(__name__)


def get_api_key_from_request(request: Request) -> str:
    """
    Extract API key from the Authorization header

    Returns:
        API key or IP address as fallback
    """
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer ") and len(auth) > 7:
        return auth[7:]

    return get_remote_address(request)


def rate_limit_key(request: Request) -> str:
    """
    Generate rate limit key based on API key or IP

    Format: "api_key:{key}" or "ip:{address}"
    """
    api_key = get_api_key_from_request(request)

    if api_key and api_key != get_remote_address(request):
        return f"api_key:{api_key}"

    return f"ip:{api_key}"


# memory:// for a single process, redis://... to share counters between workers
limiter = Limiter(
    key_func=rate_limit_key,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED
)


def custom_rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors

    Returns:
        JSONResponse: 429 with a Retry-After header
    """
    retry_after = "60"
    if exc.headers and "Retry-After" in exc.headers:
        retry_after = exc.headers["Retry-After"]

    api_key = get_api_key_from_request(request)
    safe_key = get_safe_api_key_display(api_key) if api_key != get_remote_address(request) else api_key

    logger.warning(
        f"Rate limit exceeded for {safe_key} "
        f"on {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "retry_after": int(retry_after),
            "limit": str(exc.detail),
            "endpoint": request.url.path
        },
        headers={"Retry-After": retry_after}
    )


# Rate limit decorators for different endpoints

def upload_rate_limit():
    """
    Rate limit for upload target issuance

    Default: 60 requests per hour
    """
    return limiter.limit(settings.RATE_LIMIT_UPLOAD)


def auth_rate_limit():
    """
    Rate limit for authentication endpoints

    Default: 5 requests per minute (strict to prevent brute force)
    """
    return limiter.limit(settings.RATE_LIMIT_AUTH)


def setup_rate_limiting(app):
    """
    Setup rate limiting middleware

    Args:
        app: FastAPI application instance
    """
    app.state.limiter = limiter
    if settings.RATE_LIMIT_ENABLED:
        app.add_exception_handler(
            RateLimitExceeded,
            custom_rate_limit_exceeded_handler
        )
        logger.info(f"Rate limiting enabled ({settings.RATE_LIMIT_STORAGE_URI})")
    else:
        logger.warning("Rate limiting disabled")

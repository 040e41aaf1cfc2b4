# app/core/rate_limiter.py

from slowapi import Limiter
from slowapi.util import get_remote_address
from app.core.config import settings
from loguru import logger


# ----------------------------------------------------------------
# 1. APPLICANT IP (form submissions usually arrive through a proxy)
# ----------------------------------------------------------------
def get_real_ip(request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Leftmost entry is the applicant's browser
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def limiter_storage_uri(redis_url: str | None) -> str | None:
    """Managed Redis in prod wants TLS ('rediss://')."""
    if redis_url and redis_url.startswith("redis://") and settings.ENV == "prod":
        return redis_url.replace("redis://", "rediss://", 1)
    return redis_url or None


# ----------------------------------------------------------------
# 2. SUBMISSION LIMITER (shares Redis with the session store)
# ----------------------------------------------------------------
def build_limiter(redis_url: str | None) -> Limiter:
    options = {
        "key_func": get_real_ip,
        "key_prefix": settings.RATE_LIMIT_KEY_PREFIX,
        "strategy": settings.RATE_LIMIT_STRATEGY,
        "enabled": settings.RATE_LIMIT_ENABLED,
    }
    storage_uri = limiter_storage_uri(redis_url)

    if not storage_uri:
        logger.warning("⚠️ REDIS_URL not found. Submission rate limits are kept in memory.")
        return Limiter(**options)

    try:
        logger.info("⚡ Initializing submission rate limiter with Redis storage")
        return Limiter(
            storage_uri=storage_uri,
            storage_options={"socket_connect_timeout": 5, "retry_on_timeout": True},
            **options,
        )
    except Exception as e:
        logger.error(f"❌ Failed to configure Redis for rate limiting: {e}")
        # Applicants can still submit; limits fall back to memory
        return Limiter(**options)


limiter = build_limiter(settings.REDIS_URL)

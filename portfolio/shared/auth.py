"""
Admin API key check.

Every /portfolio/admin route depends on get_api_key. The key travels in the
X-API-Key header and is compared against INTERNAL_API_KEY. Without a key
configured the admin panel is open, which is only allowed outside production.
"""

import hmac
import logging
import os
from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from portfolio.shared.config import ENVIRONMENT

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

INTERNAL_API_KEY = os.getenv("INTERNAL_API_KEY")

admin_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


async def get_api_key(api_key: Optional[str] = Security(admin_key_header)) -> Optional[str]:
    """Reject admin requests without a matching X-API-Key header."""
    if not INTERNAL_API_KEY:
        if ENVIRONMENT == "production":
            raise RuntimeError("INTERNAL_API_KEY is required to serve the admin panel in production")
        logger.warning("INTERNAL_API_KEY not set, admin endpoints are unprotected")
        return None

    if api_key is None or not hmac.compare_digest(api_key, INTERNAL_API_KEY):
        logger.warning("Rejected admin request with missing or wrong API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin access requires a valid X-API-Key header",
        )

    return api_key

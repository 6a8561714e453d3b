"""
Authentication Module

Guards admin listings with a shared bearer secret. Sign-in flows live in the
auth service; this only checks the token the gateway forwards.
"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import ApiSettings, get_settings

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: ApiSettings = Depends(get_settings),
) -> Optional[HTTPAuthorizationCredentials]:
    """
    Verify the shared secret token.

    Returns:
        The credentials (None when auth is not required and none were sent)

    Raises:
        HTTPException: 401 if the token is missing or wrong,
            500 if auth is required but no secret is configured
    """
    if not settings.auth_required:
        return credentials

    if not settings.api_secret:
        logger.error("Authentication required but API_SECRET is not configured")
        raise HTTPException(status_code=500, detail="Server authentication not configured")

    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    if not secrets.compare_digest(credentials.credentials, settings.api_secret):
        logger.warning("Rejected request with invalid bearer token")
        raise HTTPException(status_code=401, detail="Invalid authentication token")

    return credentials

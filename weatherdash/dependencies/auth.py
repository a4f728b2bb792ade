"""
Authentication dependencies.

Every protected route depends on ``get_current_user``. A request without a
bearer token is rejected with 401; a request whose token fails verification
is rejected with 403. The response never says why a token was rejected.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from weatherdash.dependencies.services import get_token_service
from weatherdash.errors import AuthError, InvalidTokenError
from weatherdash.utils.logging_config import get_logger
from weatherdash.utils.security import TokenClaims, TokenService

logger = get_logger(__name__)

# auto_error=False so missing credentials go through our own error handler
security = HTTPBearer(auto_error=False)

MISSING_TOKEN_MESSAGE = "Access token required"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Get the identity of the authenticated caller.

    Args:
        credentials: HTTP Bearer token credentials, None if absent
        token_service: Token verifier

    Returns:
        TokenClaims of the caller

    Raises:
        AuthError: 401 if no token was sent, 403 if it does not verify
    """
    if credentials is None or not credentials.credentials:
        raise AuthError(MISSING_TOKEN_MESSAGE, status_code=401)

    try:
        return token_service.verify(credentials.credentials)
    except InvalidTokenError:
        logger.info("Rejected request with invalid or expired token")
        raise AuthError(INVALID_TOKEN_MESSAGE, status_code=403)

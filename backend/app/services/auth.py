"""
Bearer credential verification.

Tokens are issued by the external auth service; this module only checks the
signature and expiry and turns the token into an OwnerContext.
"""
import logging
from typing import Optional
import jwt
from fastapi import Request
from backend.app.models.schemas import OwnerContext
from backend.app.services.exceptions import AuthenticationError
from shared.config import settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "accessToken"


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header:
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Malformed Authorization header")
        return token.strip()
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


def verify_token(token: Optional[str]) -> OwnerContext:
    if not token:
        raise AuthenticationError("Missing bearer credential")
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Credential has expired") from e
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected bearer credential: {e}")
        raise AuthenticationError("Invalid bearer credential") from e
    identity = claims.get("_id") or claims.get("sub")
    if not identity:
        raise AuthenticationError("Credential carries no principal identity")
    return OwnerContext(identity=str(identity), token=token)


async def get_owner_context(request: Request) -> OwnerContext:
    """FastAPI dependency: resolve the calling principal or raise AuthenticationError."""
    return verify_token(_bearer_token(request))

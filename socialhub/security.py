"""
SocialHub Backend - Bearer Token Auth Guard
=============================================

What:  Resolves the acting user id from `Authorization: Bearer <jwt>`.
How:   HTTPBearer extracts the credential; PyJWT verifies signature and
       expiry; the `sub` claim is the user's UUID.
Who:   `get_current_user_id` is a dependency on every /api/posts route.
       `create_access_token` is used by whoever issues tokens (the account
       service, operators, the test suite).

Token payload:
    {"sub": "<user uuid>", "iat": <issued at>, "exp": <expiry>}
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from socialhub.config import settings
from socialhub.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported through our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Issues a signed token for `user_id`."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verifies a token and returns the user id it carries.

    Raises:
        AuthenticationError: bad signature, expired, or no usable `sub` claim
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(context={"reason": "expired"})
    except jwt.PyJWTError as e:
        raise AuthenticationError(context={"reason": type(e).__name__})

    try:
        return uuid.UUID(str(payload["sub"]))
    except (KeyError, ValueError):
        raise AuthenticationError(context={"reason": "bad_subject"})


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> uuid.UUID:
    """FastAPI dependency: the authenticated user's id, or a 401."""
    if credentials is None:
        raise AuthenticationError(message="No token, authorization denied")
    return decode_access_token(credentials.credentials)

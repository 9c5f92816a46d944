"""
Blog API — Request Dependencies (Settings and Auth Guard)
===========================================================

What:  FastAPI dependencies shared by the routers.
How:   `get_settings` reads the Settings bound to the running app.
       `require_identity` is the auth guard: it turns the bearer token into
       an `Identity` or rejects the request before the handler runs.

Auth Guard contract:
    no Authorization bearer token       → 401 "Access denied. No token provided."
    token fails signature/expiry/claims → 403 "Invalid token."
    otherwise                           → Identity(id, email), also on request.state
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blogapi.config import Settings
from blogapi.exceptions import UnauthenticatedError
from blogapi.schemas.auth import Identity
from blogapi.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must become our 401, not FastAPI's 403
_bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """
    Verify the bearer token and return the caller's identity.

    Stateless: validity depends only on the signature and the `exp` claim.

    Raises:
        UnauthenticatedError: header absent or empty token (→ 401)
        ForbiddenError: token present but invalid or expired (→ 403)
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    identity = decode_access_token(credentials.credentials, settings)
    request.state.identity = identity
    return identity

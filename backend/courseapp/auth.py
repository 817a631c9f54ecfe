"""Authentication helpers and FastAPI security dependencies.

This module decodes bearer tokens and exposes the dependencies used to
guard routes:

- `get_current_user` returns the `User` named by a valid token.
- `require_user` / `require_admin` additionally check the roles from
  `services.roles_for`.

Every failure (no token, bad or expired token, unknown user, missing
role) raises HTTPException(403), so anonymous and under-privileged
callers are indistinguishable to clients.
"""

import logging

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt
from sqlmodel import Session

from . import models, repositories
from .config import settings
from .database import get_session
from .services import Role, roles_for

bearer_scheme = HTTPBearer(auto_error=False)
logger = logging.getLogger("courseapp.auth")


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Returns the decoded payload on success or raises an HTTPException
    with status 403 on failure.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _forbidden('token expired')
    except jwt.InvalidTokenError:
        raise _forbidden('invalid token')


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
    db: Session = Depends(get_session),
) -> models.User:
    """FastAPI dependency that returns the authenticated user."""
    if credentials is None:
        raise _forbidden('not authenticated')
    payload = decode_token(credentials.credentials)
    user_id = payload.get('user_id')
    if not user_id:
        raise _forbidden('invalid token payload')
    user = repositories.UserRepository(db).find_by_id(user_id)
    if not user:
        raise _forbidden('user not found')
    return user


def require_roles(*allowed: Role):
    """Build a dependency admitting users that hold any of `allowed`."""

    def dependency(request: Request, user: models.User = Depends(get_current_user)) -> models.User:
        granted = roles_for(user)
        if not any(role in granted for role in allowed):
            logger.warning("access_denied user=%s path=%s", user.id, request.url.path)
            raise _forbidden('insufficient role')
        return user

    return dependency


require_user = require_roles(Role.USER, Role.ADMIN)
require_admin = require_roles(Role.ADMIN)

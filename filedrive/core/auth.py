"""Identity verification: FastAPI dependency resolving a bearer token to a user.

Public interface:
    ``require_auth``: returns AuthContext or raises 401.
    ``issue_token``: mint a bearer token for a user id.

Every drive route depends on ``require_auth``; the resolved ``user_id`` is
the owner scope applied to all folder and file queries.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import settings
from .token_factory import create_token, decode_token
from ..database import get_db
from ..exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Resolved identity available to every protected endpoint."""

    user_id: str
    email: str
    display_name: str


def issue_token(user_id: str) -> str:
    return create_token(
        subject=user_id,
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_hours=settings.jwt_expires_hours,
    )


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Require a valid bearer token and return the caller's AuthContext."""
    if credentials is None:
        raise UnauthorizedError("Missing Authorization header")

    payload = decode_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm
    )
    if payload is None:
        raise UnauthorizedError("Invalid or expired token")

    from ..models.user import User

    user = db.query(User).filter(User.user_id == payload.sub).first()
    if user is None:
        logger.warning("Token subject has no user", extra={"user_id": payload.sub})
        raise UnauthorizedError("User not found")

    return AuthContext(
        user_id=user.user_id,
        email=user.email,
        display_name=user.display_name,
    )

"""Authentication service: signup, credential checks, user lookup.

Password hashing uses bcrypt via passlib. Passwords are never stored or
logged in plaintext. Endpoints are thin wrappers around these functions.
"""

import logging
from typing import Optional

from passlib.hash import bcrypt
from sqlalchemy.orm import Session

from ..core.config import settings
from ..exceptions import ValidationError, UnauthorizedError
from ..models.user import User

logger = logging.getLogger(__name__)

# bcrypt ignores everything past 72 bytes; reject instead of truncating silently.
MAX_PASSWORD_BYTES = 72


def signup(db: Session, email: str, password: str, name: Optional[str] = None) -> User:
    """Create a new user account.

    The display name defaults to the local part of the email address.
    Raises ValidationError if the email is taken or inputs are invalid.
    """
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise ValidationError("Valid email address required", field="email")
    if len(password or "") < settings.min_password_length:
        raise ValidationError(
            f"Password must be at least {settings.min_password_length} characters", field="password"
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError("Password is too long", field="password")

    existing = db.query(User).filter(User.email == email).first()
    if existing is not None:
        raise ValidationError("Email already registered", field="email")

    display_name = (name or "").strip() or email.split("@", 1)[0]
    user = User(
        display_name=display_name,
        email=email,
        password_hash=bcrypt.hash(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User signed up", extra={"user_id": user.user_id})
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Validate credentials and return the user.

    Raises UnauthorizedError on unknown email or wrong password.
    """
    email = (email or "").strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if user is None or not user.password_hash:
        raise UnauthorizedError("Invalid email or password")

    if len((password or "").encode()) > MAX_PASSWORD_BYTES or not bcrypt.verify(password, user.password_hash):
        logger.info("Login failed", extra={"user_id": user.user_id})
        raise UnauthorizedError("Invalid email or password")

    return user


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.user_id == user_id).first()

"""User model.

Users sign up with email/password and receive bearer tokens. Every folder
and file row carries the owning user's id; there is no sharing model.
"""

from sqlalchemy import Column, String, DateTime, Text

from ._common import new_id, utcnow
from ..database import Base


class User(Base):
    """Drive account."""

    __tablename__ = "users"

    user_id = Column(String(32), primary_key=True, default=new_id)
    display_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

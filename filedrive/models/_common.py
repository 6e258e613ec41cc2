"""Column defaults shared by the drive tables."""

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    # Microsecond resolution keeps newest-first listings stable for
    # items created within the same second.
    return datetime.now(timezone.utc)

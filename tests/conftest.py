"""Shared test fixtures for the filedrive test suite.

Tests run against an in-memory SQLite database shared through a static
pool, so every session sees the same tables. Each test starts from empty
tables. The Cloudinary adapter is replaced with ``FakeObjectStore``
through FastAPI's dependency overrides; adapter tests patch the SDK
directly instead.
"""

import os

# Use an in-memory database and plain logs before any app imports.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FORMAT"] = "text"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["RATE_LIMIT_PER_MINUTE"] = "120"
os.environ["FOLDER_DELETE_CASCADE"] = "false"
os.environ["VERIFY_DOWNLOAD_URLS"] = "false"

from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from filedrive.core.auth import issue_token
from filedrive.database import Base, SessionLocal, engine, get_db
from filedrive.main import app
from filedrive.middleware.request_context import _rate_buckets
from filedrive.services import auth_service
from filedrive.services.object_store import ObjectStore, UploadedBlob, get_object_store
from filedrive.services.resource_kind import resolve_first_kind

Base.metadata.create_all(bind=engine)


class FakeObjectStore(ObjectStore):
    """In-memory ObjectStore with the same contract as the Cloudinary adapter.

    ``kinds`` maps locator -> the kind the store files it under; a locator
    missing from it misses every probe. ``probes`` records each probe as a
    ``(locator, candidate)`` pair.
    """

    def __init__(self):
        self.blobs: Dict[str, bytes] = {}
        self.kinds: Dict[str, str] = {}
        self.probes: List[Tuple[str, str]] = []
        self.removed: List[Tuple[str, str]] = []
        self.verified: List[str] = []
        self.upload_kind: Optional[str] = "image"
        self.fail_remove = False
        self._counter = 0

    def upload(self, data: bytes, owner_scope: str, filename: Optional[str] = None) -> UploadedBlob:
        self._counter += 1
        locator = f"drive_{owner_scope}/blob{self._counter}"
        self.blobs[locator] = data
        if self.upload_kind:
            self.kinds[locator] = self.upload_kind
        return UploadedBlob(
            locator=locator,
            secure_url=f"https://cdn.test/{self.upload_kind or 'raw'}/upload/{locator}",
            resource_kind=self.upload_kind,
            size_bytes=len(data),
            version=1700000000 + self._counter,
        )

    def resolve_resource_kind(self, locator: str, hinted_mime: Optional[str] = None) -> str:
        def probe(candidate: str) -> Optional[str]:
            self.probes.append((locator, candidate))
            return candidate if self.kinds.get(locator) == candidate else None

        return resolve_first_kind(probe)

    def url_for(self, locator: str, resource_kind: str, version: Optional[int] = None) -> str:
        url = f"https://cdn.test/{resource_kind}/upload/s--sig--/{locator}"
        if version:
            url += f"?v={version}"
        return url

    def remove(self, locator: str, resource_kind: str) -> bool:
        self.removed.append((locator, resource_kind))
        if self.fail_remove:
            return False
        self.blobs.pop(locator, None)
        self.kinds.pop(locator, None)
        return True

    def verify_reachable(self, url: str) -> None:
        self.verified.append(url)


@pytest.fixture(autouse=True)
def _clean_tables():
    """Empty every table before each test.

    Runs before the test (not after) so a failing test leaves its data
    behind for inspection.
    """
    session = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
    finally:
        session.close()
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture()
def client(db, store):
    """TestClient using the test session and the fake object store."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_object_store] = lambda: store
    _rate_buckets.clear()  # Reset rate limiter so tests don't hit 429
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def user(db):
    return auth_service.signup(db, "ada@example.com", "correct horse", name="Ada")


@pytest.fixture()
def other_user(db):
    return auth_service.signup(db, "bob@example.com", "battery staple", name="Bob")


@pytest.fixture()
def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {issue_token(user.user_id)}"}


@pytest.fixture()
def other_headers(other_user) -> dict:
    return {"Authorization": f"Bearer {issue_token(other_user.user_id)}"}

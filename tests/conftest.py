"""
Shared fixtures: in-memory database, test settings and fake collaborators.
"""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from emploirapide.api.app import app
from emploirapide.api.deps import get_file_storage, get_job_search_client
from emploirapide.api.limiter import limiter
from emploirapide.config import Settings, get_settings
from emploirapide.core.security import Identity, Role, create_access_token, get_password_hash
from emploirapide.db import Base, User, get_db
from emploirapide.db.base import register_sqlite_functions
from emploirapide.errors import UploadError
from emploirapide.tools.jsearch import JSearchClient
from emploirapide.tools.storage import FileStorage, StoredFile

PASSWORD = "motdepasse123"


class FakeStorage(FileStorage):
    """Records uploads in memory; can be told to fail."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_uploads = False

    def upload(self, content, folder, public_id, resource_type="image", extension="bin"):
        if self.fail_uploads:
            raise UploadError()
        key = f"{folder}/{public_id}.{extension}"
        self.files[key] = content
        return StoredFile(url=f"https://files.test/{key}", key=key)

    def delete(self, key, resource_type="image"):
        self.deleted.append(key)
        self.files.pop(key, None)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret",
        rapidapi_key="",
        cloudinary_cloud_name="",
        cloudinary_api_key="",
        cloudinary_api_secret="",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_sqlite_functions(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def jsearch_responses():
    """Queue of (status, payload) answers and the requests the mock received."""
    return {"answers": [], "requests": []}


@pytest.fixture
def jsearch_client(settings, jsearch_responses):
    def handler(request: httpx.Request) -> httpx.Response:
        jsearch_responses["requests"].append(request)
        status, payload = jsearch_responses["answers"].pop(0)
        return httpx.Response(status, json=payload)

    return JSearchClient(settings, transport=httpx.MockTransport(handler))


@pytest.fixture
def client(settings, session_factory, storage, jsearch_client):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_file_storage] = lambda: storage
    app.dependency_overrides[get_job_search_client] = lambda: jsearch_client
    limiter.enabled = False

    yield TestClient(app)

    app.dependency_overrides.clear()
    limiter.enabled = True


def create_user(db, role: Role, email: str, name: str = "Test", **fields) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash(PASSWORD),
        name=name,
        role=role.value,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User, settings: Settings) -> dict:
    token = create_access_token(Identity(id=user.id, role=Role(user.role)), settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def recruiter(db):
    return create_user(db, Role.RECRUITER, "rh@acme.ci", name="Awa Koné", company_name="Acme CI")


@pytest.fixture
def other_recruiter(db):
    return create_user(db, Role.RECRUITER, "rh@globex.ci", name="Yao Kouassi", company_name="Globex")


@pytest.fixture
def candidate(db):
    return create_user(db, Role.CANDIDATE, "jean@example.ci", name="Jean Bamba")


@pytest.fixture
def other_candidate(db):
    return create_user(db, Role.CANDIDATE, "marie@example.ci", name="Marie Diallo")


@pytest.fixture
def recruiter_headers(recruiter, settings):
    return auth_headers(recruiter, settings)


@pytest.fixture
def candidate_headers(candidate, settings):
    return auth_headers(candidate, settings)


JOB_FIELDS = {
    "title": "Développeur",
    "company": "Acme",
    "location": "Abidjan",
    "description": "Développement d'applications web",
    "contract_type": "CDI",
    "category": "informatique",
}


@pytest.fixture
def job_fields():
    return dict(JOB_FIELDS)


@pytest.fixture
def published_job(client, recruiter_headers, job_fields):
    response = client.post("/recruiter/jobs", json=job_fields, headers=recruiter_headers)
    assert response.status_code == 200
    return response.json()["job"]

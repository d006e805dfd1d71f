import os
import uuid

import pytest
from sqlalchemy import create_engine

# Select the in-memory database before models/api are imported
os.environ["APP_ENV"] = "test"

from api import create_app  # noqa: E402
from models import storage  # noqa: E402
from models.author import Author  # noqa: E402
from models.author_repository import AuthorRepository  # noqa: E402
from models.tables import metadata  # noqa: E402

SALT = "c29tZXNhbHRzb21lc2FsdA"
DIGEST = "ZGlnZXN0ZGlnZXN0ZGlnZXN0ZGlnZXN0ZGlnZXN0ZGk"

# Parsed, never verified: only the encoding matters to the record
ARGON2I_HASH = f"$argon2i$v=19$m=65536,t=16,p=1${SALT}${DIGEST}"
ARGON2ID_HASH = f"$argon2id$v=19$m=65536,t=4,p=1${SALT}${DIGEST}"
BCRYPT_HASH = "$2y$10$abcdefghijklmnopqrstuuABCDEFGHIJKLMNOPQRSTUVWXYZ01234"

ACTIVATION_TOKEN = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def author_fields():
    return {
        "author_id": uuid.uuid4(),
        "avatar_url": "https://example.com/avatars/ada.png",
        "activation_token": ACTIVATION_TOKEN,
        "email": "ada@example.com",
        "password_hash": ARGON2I_HASH,
        "username": "ada",
    }


@pytest.fixture
def make_author(author_fields):
    def _make(**overrides):
        fields = {**author_fields, "author_id": uuid.uuid4(), **overrides}
        return Author(**fields)

    return _make


@pytest.fixture
def connection():
    engine = create_engine("sqlite://")
    metadata.create_all(engine)
    with engine.connect() as conn:
        yield conn
    engine.dispose()


@pytest.fixture
def repo(connection):
    return AuthorRepository(connection)


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    storage.close()
    storage.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """POST a new author and return the response JSON data."""

    def _register(**overrides):
        payload = {
            "authorAvatarUrl": "https://example.com/avatars/grace.png",
            "authorEmail": "grace@example.com",
            "authorUsername": "grace",
            "password": "correct horse battery",
        }
        payload.update(overrides)
        r = client.post("/api/v1/authors", json=payload)
        assert r.status_code == 201, r.get_json()
        return r.get_json()["data"]

    return _register

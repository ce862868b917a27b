import os

# must be in place before accounthub reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_CATEGORIES"] = "false"
os.environ.pop("SMTP_HOST", None)

import pytest
from fastapi.testclient import TestClient

from accounthub.main import app
from accounthub.shared.config import settings
from accounthub.shared.db import Base, SessionLocal, engine, init_db
from accounthub.shared.auth import get_hasher, get_notifier, get_token_service
from accounthub.auth.service import AuthService
from accounthub.categories.service import seed_default_categories


class RecordingNotifier:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to, subject, body):
        if self.fail:
            raise ConnectionError("smtp down")
        self.sent.append({"to": to, "subject": subject, "body": body})


@pytest.fixture(autouse=True)
def _schema():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def tokens():
    return get_token_service()


@pytest.fixture
def hasher():
    return get_hasher()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def svc(db, tokens, hasher, notifier):
    return AuthService(db, tokens, hasher, settings, notifier=notifier)


@pytest.fixture
def categories(db):
    seed_default_categories(db)
    from accounthub.categories.service import list_categories
    return list_categories(db)


@pytest.fixture
def client(notifier):
    app.dependency_overrides[get_notifier] = lambda: notifier
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()


def signup_payload(**overrides) -> dict:
    body = {
        "role": "USER",
        "fullName": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "secret1",
        "phoneNumber": "+441234567",
        "dateOfBirth": "1990-12-10",
        "location": {"streetAddress": "1 Main St", "latitude": 51.5, "longitude": -0.12},
        "accountType": "FREEMIUM",
    }
    body.update(overrides)
    return body


@pytest.fixture
def make_signup():
    return signup_payload

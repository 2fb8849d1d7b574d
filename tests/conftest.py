# tests/conftest.py
import os

#przed importem bazaar: settings czytane sa przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["SESSION_COOKIE_SECURE"] = "0"
os.environ["BCRYPT_ROUNDS"] = "4"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bazaar.api import create_app
from bazaar.api.deps import get_session_service
from bazaar.data.database import Base, get_db
from bazaar.data.models import ProductModel
from bazaar.services.session_service import SessionService


class FakeRedis:
    """Tyle Redisa ile potrzebuje SessionService."""

    def __init__(self):
        self.data = {}

    def set(self, name, value, ex=None):
        self.data[name] = value
        return True

    def get(self, name):
        return self.data.get(name)

    def delete(self, *names):
        return sum(1 for n in names if self.data.pop(n, None) is not None)


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id):
        self.sent.append((user_id, order_id))


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def make_product(db):
    def _make(id, price="10.00", stock=10, name=None, type="general"):
        product = ProductModel(
            id=id,
            name=name or f"Product {id}",
            description=f"Description {id}",
            price=Decimal(price),
            type=type,
            stock=stock,
            version=1,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def sessions(fake_redis):
    return SessionService(client=fake_redis)


@pytest.fixture()
def client(session_factory, sessions):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_service] = lambda: sessions
    return TestClient(app)


@pytest.fixture()
def logged_in(client):
    """Klient z zalogowanym uzytkownikiem (ciasteczko sesji w kliencie)."""
    resp = client.post("/signup", json={"username": "alice", "email": "alice@example.com", "password": "secret123"})
    assert resp.status_code == 201
    resp = client.post("/login", json={"email": "alice@example.com", "password": "secret123"})
    assert resp.status_code == 200
    return client

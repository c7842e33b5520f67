"""
Shared fixtures: a throwaway SQLite database, users and sessions
"""
import os
import tempfile
from pathlib import Path

_db_dir = tempfile.mkdtemp(prefix="talenttrack-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_db_dir) / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-characters"

import pytest
from fastapi.testclient import TestClient

import app.models  # noqa: F401
from app.auth.service import create_user
from app.auth.session import SessionContext, SessionProvider
from app.core.database import Base, SessionLocal, engine
from app.core.exceptions import StoreError
from app.pages.controller import RecordingNavigator
from app.store.client import StoreClient, StoreResult

PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user():
    """Create a user with a profile and one role; returns the user id"""

    def factory(email: str, role: str = "recruiter", full_name: str = "Test User") -> str:
        with SessionLocal() as db:
            return create_user(db, email=email, password=PASSWORD, full_name=full_name, role=role).id

    return factory


@pytest.fixture
def sign_in(make_user):
    """Create a user and return an initialised SessionContext signed in as them"""

    async def factory(email: str = "recruiter@acme.io", role: str = "recruiter") -> SessionContext:
        make_user(email, role=role)
        provider = SessionProvider(SessionLocal)
        await provider.sign_in_with_password(email, PASSWORD)
        context = SessionContext(provider)
        await context.init()
        return context

    return factory


@pytest.fixture
def anonymous_context():
    return SessionContext(SessionProvider(SessionLocal))


@pytest.fixture
def store_for():
    def factory(context: SessionContext) -> StoreClient:
        return StoreClient(SessionLocal, lambda: context.user_id)

    return factory


@pytest.fixture
def navigator():
    return RecordingNavigator()


class FakeTable:
    def __init__(self, store: "FakeStore", name: str):
        self.store = store
        self.name = name

    async def _respond(self, operation: str, *args):
        self.store.calls.append((operation, self.name) + args)
        gate = self.store.gates.get(self.name)
        if gate is not None:
            await gate.wait()
        failure = self.store.failures.get(self.name)
        if failure is not None:
            raise failure
        return self.store.results.get(self.name, StoreResult())

    async def select(self, columns="*", order_by=None, ascending=True, count_only=False):
        return await self._respond("select")

    async def count(self):
        result = await self._respond("count")
        return result.count or 0

    async def insert(self, record):
        await self._respond("insert", record)
        return StoreResult(rows=[dict(record, id="fake-id")], count=1)

    async def update(self, values, **match):
        return await self._respond("update", values)


class FakeStore:
    """Records every request; results, failures and gates are set per table"""

    def __init__(self):
        self.calls = []
        self.results = {}
        self.failures = {}
        self.gates = {}

    def table(self, name: str) -> FakeTable:
        return FakeTable(self, name)

    def fail(self, table: str, message: str = "connection refused"):
        self.failures[table] = StoreError(message)


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def client():
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def password():
    return PASSWORD

"""Shared fixtures: an in-memory store, a fake auth provider and a session."""

import pytest

from tests.fakes import (
    FakeAuthProvider,
    FakeDocumentStore,
    FakeObjectStorage,
    InMemorySessionPersistence,
    TickingClock,
)
from travel_admin.application.repositories import CLIENTS, USERS, build_repository
from travel_admin.application.services import SessionContext
from travel_admin.domain.entities import Actor
from travel_admin.domain.messages import MessageCatalog


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(clock: TickingClock) -> FakeDocumentStore:
    return FakeDocumentStore(clock)


@pytest.fixture
def messages() -> MessageCatalog:
    return MessageCatalog("en")


@pytest.fixture
def auth() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def persistence() -> InMemorySessionPersistence:
    return InMemorySessionPersistence()


@pytest.fixture
def object_storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
def session(auth, persistence, store, object_storage, messages) -> SessionContext:
    return SessionContext(
        auth,
        persistence,
        document_store=store,
        object_storage=object_storage,
        messages=messages,
    )


@pytest.fixture
def sign_in_as(session: SessionContext):
    """Put an actor with ``role`` into the session without going through login."""

    def _sign_in(role: str | None = "admin", uid: str = "uid-admin", email: str = "admin@agency.ma") -> Actor:
        actor = Actor(uid=uid, email=email, display_name="Admin", role=role)
        session.user = actor
        return actor

    return _sign_in


@pytest.fixture
def clients(store, session, messages, clock):
    return build_repository(store, CLIENTS, session=session, messages=messages, page_size=10, clock=clock)


@pytest.fixture
def users(store, session, messages, clock, auth):
    return build_repository(
        store, USERS, auth_provider=auth, session=session, messages=messages, page_size=10, clock=clock
    )

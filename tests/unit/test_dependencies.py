"""Unit tests for the composition root."""

import pytest

from tests.fakes import FakeAuthProvider, FakeDocumentStore, FakeObjectStorage, InMemorySessionPersistence
from travel_admin.application.repositories import (
    ENTITY_CONFIGS,
    EntityRepository,
    SoftDeleteRepository,
    UserRepository,
)
from travel_admin.config import Settings
from travel_admin.infrastructure.dependencies import build_container


@pytest.fixture
def auth() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def container(auth):
    return build_container(
        Settings(locale="en", default_page_size=1, _env_file=None),
        store=FakeDocumentStore(),
        auth_provider=auth,
        persistence=InMemorySessionPersistence(),
        object_storage=FakeObjectStorage(),
    )


def test_one_repository_per_collection(container):
    assert set(container.repositories) == set(ENTITY_CONFIGS)
    assert isinstance(container.users, UserRepository)
    assert isinstance(container.repository("clients"), SoftDeleteRepository)
    assert type(container.repository("hotels")) is EntityRepository
    assert container.engine is None


@pytest.mark.asyncio
async def test_repositories_share_the_session_and_settings(container, auth):
    await container.start()
    auth.register("sara@agency.ma", "secret123", display_name="Sara")
    await container.session.login("sara@agency.ma", "secret123")
    packages = container.repository("packages")

    await packages.create({"package_name": "Umrah"})
    await packages.create({"package_name": "Istanbul"})
    page = await packages.fetch_many(reset_pagination=True)

    assert len(page.data) == 1
    assert page.data[0].get("created_by")["email"] == "sara@agency.ma"
    assert container.session.loading is False

"""Composition root: wires infrastructure adapters to the application layer."""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncEngine

from travel_admin.application.interfaces.auth_provider import AuthProvider
from travel_admin.application.interfaces.document_store import DocumentStore
from travel_admin.application.interfaces.object_storage import ObjectStorage
from travel_admin.application.interfaces.session_persistence import SessionPersistence
from travel_admin.application.repositories import (
    ENTITY_CONFIGS,
    USERS,
    EntityRepository,
    UserRepository,
    build_repository,
)
from travel_admin.application.services import ProfileService, SessionContext
from travel_admin.config import Settings, get_settings
from travel_admin.domain.messages import MessageCatalog
from travel_admin.infrastructure.auth import FileSessionPersistence, FirebaseAuthClient
from travel_admin.infrastructure.database import (
    SQLAlchemyDocumentStore,
    create_engine_and_factory,
    init_database,
)
from travel_admin.infrastructure.logging.log_config import setup_logging
from travel_admin.infrastructure.storage.local_file_storage import LocalObjectStorage


@dataclass
class AppContainer:
    """Everything a screen needs: the session and one repository per collection."""

    settings: Settings
    store: DocumentStore
    session: SessionContext
    repositories: dict[str, EntityRepository]
    profiles: ProfileService
    engine: AsyncEngine | None = field(default=None, repr=False)

    def repository(self, collection: str) -> EntityRepository:
        return self.repositories[collection]

    @property
    def users(self) -> UserRepository:
        return self.repositories[USERS.collection]  # type: ignore[return-value]

    async def start(self) -> None:
        """Create tables (when backed by our own database) and restore the session."""
        if self.engine is not None:
            await init_database(self.engine)
        await self.session.initialize()

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


def build_container(
    settings: Settings | None = None,
    *,
    store: DocumentStore | None = None,
    auth_provider: AuthProvider | None = None,
    persistence: SessionPersistence | None = None,
    object_storage: ObjectStorage | None = None,
) -> AppContainer:
    """Build the application graph; any adapter may be replaced (tests pass fakes)."""
    settings = settings or get_settings()
    setup_logging(settings)
    messages = MessageCatalog(settings.locale)

    engine = None
    if store is None:
        engine, session_factory = create_engine_and_factory(settings)
        store = SQLAlchemyDocumentStore(session_factory)

    auth_provider = auth_provider or FirebaseAuthClient(
        api_key=settings.auth_api_key,
        base_url=settings.auth_base_url,
        token_url=settings.auth_token_url,
        timeout=settings.auth_timeout,
    )
    persistence = persistence or FileSessionPersistence(settings.session_file)
    object_storage = object_storage or LocalObjectStorage(
        settings.storage_dir, base_url=settings.storage_base_url or None
    )

    session = SessionContext(
        auth_provider,
        persistence,
        document_store=store,
        object_storage=object_storage,
        users_collection=USERS.collection,
        messages=messages,
    )

    repositories = {
        name: build_repository(
            store,
            config,
            auth_provider=auth_provider,
            session=session,
            messages=messages,
            page_size=settings.default_page_size,
        )
        for name, config in ENTITY_CONFIGS.items()
    }
    profiles = ProfileService(repositories[USERS.collection], object_storage, messages)

    return AppContainer(
        settings=settings,
        store=store,
        session=session,
        repositories=repositories,
        profiles=profiles,
        engine=engine,
    )

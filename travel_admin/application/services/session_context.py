"""Session context — holder of the currently authenticated actor.

Repositories read it (``creator_stub()``, ``actor_role``) but never change
it. ``initialize()`` runs once at start to restore a remembered session;
observers registered with ``subscribe()`` are called on every change of
actor.
"""

import logging
from collections.abc import Callable

from travel_admin.application.interfaces.auth_provider import AuthProvider
from travel_admin.application.interfaces.document_store import (
    DocumentStore,
    FieldFilter,
    StoreQuery,
)
from travel_admin.application.interfaces.object_storage import ObjectStorage
from travel_admin.application.interfaces.session_persistence import (
    PersistenceMode,
    SessionPersistence,
)
from travel_admin.application.schemas.result import OperationResult
from travel_admin.domain.entities import Actor, ActorStub
from travel_admin.domain.exceptions import AuthProviderError
from travel_admin.domain.messages import MessageCatalog
from travel_admin.infrastructure.logging.colored_logger import OperationLogger, OperationStage

logger = logging.getLogger("travel_admin.session")
slog = OperationLogger("travel_admin.session")

SessionObserver = Callable[[Actor | None], None]

_WRONG_PASSWORD_CODES = frozenset({"INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS"})
_THROTTLED_CODES = frozenset({"TOO_MANY_ATTEMPTS_TRY_LATER"})


def profile_image_key(uid: str) -> str:
    return f"profileImages/{uid}"


class SessionContext:
    """Process-wide holder of the signed-in actor."""

    def __init__(
        self,
        auth_provider: AuthProvider,
        persistence: SessionPersistence,
        *,
        document_store: DocumentStore | None = None,
        object_storage: ObjectStorage | None = None,
        users_collection: str = "users",
        messages: MessageCatalog | None = None,
    ):
        self._auth = auth_provider
        self._persistence = persistence
        self._store = document_store
        self._storage = object_storage
        self._users_collection = users_collection
        self._messages = messages or MessageCatalog()
        self._observers: list[SessionObserver] = []
        self.user: Actor | None = None
        self.loading = True
        self.error: str | None = None

    # ── Read side used by repositories ──────────────────────────────

    def creator_stub(self) -> ActorStub | None:
        """Snapshot of the actor for ``created_by``; None when signed out."""
        return self.user.to_stub() if self.user is not None else None

    @property
    def actor_role(self) -> str | None:
        return self.user.role if self.user is not None else None

    # ── Observers ───────────────────────────────────────────────────

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Register ``observer``; returns a callable that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _set_user(self, actor: Actor | None) -> None:
        changed = actor is not self.user
        self.user = actor
        if changed:
            for observer in list(self._observers):
                observer(actor)

    # ── Lifecycle ───────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Restore a remembered session, if any. Call once at start."""
        actor: Actor | None = None
        try:
            remembered = self._persistence.load()
            if remembered is not None and remembered.refresh_token:
                with slog.timed_step(OperationStage.AUTH, "Restoring session", uid=remembered.uid):
                    actor = await self._auth.refresh(remembered.refresh_token)
                actor.role = await self._resolve_role(actor)
                self._persistence.save(actor)
        except Exception as exc:
            logger.warning("Could not restore session: %s", exc)
            self._persistence.clear()
            actor = None
        finally:
            self._set_user(actor)
            self.loading = False

    async def login(self, identifier: str, secret: str, persist: bool = False) -> bool:
        """Sign in. ``persist`` selects durable storage before authenticating.

        On failure the current actor is left as it was and ``error`` is set.
        """
        mode = PersistenceMode.DURABLE if persist else PersistenceMode.EPHEMERAL
        self._persistence.set_mode(mode)
        try:
            with slog.timed_step(OperationStage.AUTH, "Signing in", mode=mode.value):
                actor = await self._auth.sign_in(identifier, secret)
        except AuthProviderError as exc:
            self.error = self._messages.get(self._auth_error_key(exc, "login_failed"))
            return False
        except Exception:
            logger.exception("Sign-in failed unexpectedly")
            self.error = self._messages.get("login_failed")
            return False

        actor.role = await self._resolve_role(actor)
        try:
            self._persistence.save(actor)
        except OSError as exc:
            slog.step_error(OperationStage.AUTH, "Could not persist session", error=exc)
            self.error = self._messages.get("session_save_failed")
            return False
        self.error = None
        self._set_user(actor)
        return True

    async def logout(self) -> bool:
        """Sign out. The actor is cleared even when the provider call fails."""
        actor = self.user
        try:
            if actor is not None:
                await self._auth.sign_out(actor)
            self.error = None
            return True
        except Exception as exc:
            slog.step_error(OperationStage.AUTH, "Sign-out failed", error=exc)
            self.error = self._messages.get("logout_failed")
            return False
        finally:
            self._persistence.clear()
            self._set_user(None)

    async def reset_password(self, identifier: str) -> bool:
        try:
            await self._auth.send_password_reset(identifier)
            return True
        except Exception as exc:
            slog.step_error(OperationStage.AUTH, "Password reset failed", error=exc)
            return False

    async def delete_account(self, secret: str) -> OperationResult:
        """Delete the signed-in account after re-checking its password.

        The user's document and profile image are removed on a best-effort
        basis before the account itself; the session then ends.
        """
        actor = self.user
        if actor is None or not actor.email:
            return OperationResult.fail(self._messages.get("no_session"))

        try:
            verified = await self._auth.reauthenticate(actor.email, secret)
        except AuthProviderError as exc:
            return OperationResult.fail(self._messages.get(self._auth_error_key(exc, "reauth_failed")))
        except Exception as exc:
            slog.step_error(OperationStage.AUTH, "Re-authentication failed", error=exc)
            return OperationResult.fail(self._messages.get("reauth_failed"))

        try:
            await self._delete_user_documents(actor.uid)
            await self._delete_profile_image(actor.uid)
            with slog.timed_step(OperationStage.AUTH, "Deleting account", uid=actor.uid):
                await self._auth.delete_account(verified)
        except Exception:
            logger.exception("Account deletion failed")
            return OperationResult.fail(self._messages.get("delete_account_failed"))

        await self.logout()
        return OperationResult.ok()

    # ── Helpers ─────────────────────────────────────────────────────

    async def _resolve_role(self, actor: Actor) -> str | None:
        """Look up the actor's role in the users collection."""
        if self._store is None:
            return actor.role
        try:
            page = await self._store.query(
                StoreQuery(
                    collection=self._users_collection,
                    filters=[FieldFilter("uid", actor.uid)],
                    limit=1,
                )
            )
        except Exception as exc:
            logger.warning("Could not resolve role for %s: %s", actor.uid, exc)
            return actor.role
        if page.empty:
            return actor.role
        return page.records[0].get("userRole", actor.role)

    async def _delete_user_documents(self, uid: str) -> None:
        if self._store is None:
            return
        try:
            page = await self._store.query(
                StoreQuery(collection=self._users_collection, filters=[FieldFilter("uid", uid)])
            )
            for record in page.records:
                await self._store.delete(self._users_collection, record.id)
        except Exception as exc:
            logger.error("Error deleting user document for %s: %s", uid, exc)

    async def _delete_profile_image(self, uid: str) -> None:
        if self._storage is None:
            return
        try:
            await self._storage.delete(profile_image_key(uid))
        except Exception as exc:
            logger.info("No profile image removed for %s: %s", uid, exc)

    @staticmethod
    def _auth_error_key(exc: AuthProviderError, default: str) -> str:
        if exc.code in _THROTTLED_CODES:
            return "too_many_requests"
        if default == "reauth_failed" and exc.code in _WRONG_PASSWORD_CODES:
            return "wrong_password"
        return default

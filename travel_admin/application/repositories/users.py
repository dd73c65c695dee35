"""Users repository — soft delete plus role-based access rules and account provisioning."""

from typing import Any

from pydantic import BaseModel

from travel_admin.application.interfaces.auth_provider import AuthProvider
from travel_admin.application.interfaces.document_store import DocumentStore, FieldFilter
from travel_admin.application.repositories.config import EntityConfig
from travel_admin.application.repositories.soft_delete import SoftDeleteRepository
from travel_admin.application.schemas.result import OperationResult
from travel_admin.domain.entities import (
    UserRole,
    can_create_user,
    can_delete_user,
    can_update_user,
)
from travel_admin.infrastructure.logging.colored_logger import OperationStage


class UserRepository(SoftDeleteRepository):
    """Back-office users.

    Creating, modifying and deleting users is checked against the role of
    the signed-in actor. When an ``AuthProvider`` is configured and the
    payload carries a ``password``, an authentication account is created
    first and its ``uid`` stored on the document.
    """

    def __init__(
        self,
        store: DocumentStore,
        config: EntityConfig,
        *,
        auth_provider: AuthProvider | None = None,
        **kwargs: Any,
    ):
        super().__init__(store, config, **kwargs)
        self._auth = auth_provider

    def _actor_role(self) -> str | None:
        return self._session.actor_role if self._session is not None else None

    async def create(self, payload: dict[str, Any] | BaseModel) -> OperationResult:
        fields = self._as_fields(payload)
        password = fields.pop("password", None)
        target_role = fields.get("userRole", UserRole.USER.value)
        if not can_create_user(self._actor_role(), target_role):
            return self._deny("permission_create")

        if password and self._auth is not None:
            self._begin()
            try:
                account = await self._auth.sign_up(fields["userEmail"], password)
                display_name = f"{fields.get('first_name', '')} {fields.get('last_name', '')}".strip()
                if display_name:
                    await self._auth.update_profile(account, display_name)
            except Exception as exc:
                return self._fail(OperationStage.CREATE, "create_failed", exc)
            fields["uid"] = account.uid

        return await super().create(fields)

    async def update(self, document_id: str, payload: dict[str, Any] | BaseModel) -> OperationResult:
        fields = self._as_fields(payload, partial=True)
        self._begin()
        try:
            existing = await self._store.get(self.collection, document_id)
        except Exception as exc:
            return self._fail(OperationStage.UPDATE, "update_failed", exc)
        if existing is None:
            return self._not_found(document_id)

        role = self._actor_role()
        existing_role = existing.get("userRole")
        if not can_update_user(role, existing_role, fields.get("userRole")):
            return self._deny("permission_update")
        if fields.get("is_deleted") is True and not can_delete_user(role, existing_role):
            return self._deny("permission_delete")

        return await super().update(document_id, fields)

    async def soft_delete(self, document_id: str) -> OperationResult:
        self._begin()
        try:
            existing = await self._store.get(self.collection, document_id)
        except Exception as exc:
            return self._fail(OperationStage.DELETE, "delete_failed", exc)
        if existing is None:
            return self._not_found(document_id)

        if not can_delete_user(self._actor_role(), existing.get("userRole")):
            return self._deny("permission_delete")

        return await super().soft_delete(document_id)

    async def fetch_by_role(
        self,
        role: UserRole | str,
        page_size: int | None = None,
        reset_pagination: bool = False,
        *,
        cursor: str | None = None,
    ) -> OperationResult:
        """Active users holding ``role``, newest first."""
        value = role.value if isinstance(role, UserRole) else role
        return await self._fetch_page(
            cache="active",
            page_size=page_size,
            reset_pagination=reset_pagination,
            cursor=cursor,
            filters=[FieldFilter("userRole", value)],
            keep=self._visible,
            error_key="fetch_many_failed",
        )

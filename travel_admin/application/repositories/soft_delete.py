"""Entity repository with a second cache for soft-deleted records.

A record the repository knows about lives in exactly one of
``active_list`` (``is_deleted`` false) and ``deleted_list`` (``is_deleted``
true). Every write path below preserves that: whenever records land in one
cache their identities are evicted from the other.
"""

from typing import Any

from travel_admin.application.interfaces.document_store import DocumentStore
from travel_admin.application.repositories.base import EntityRepository
from travel_admin.application.repositories.config import EntityConfig
from travel_admin.application.repositories.timestamps import sort_key
from travel_admin.application.schemas.result import OperationResult, SearchPartition
from travel_admin.domain.entities import Record, SERVER_TIMESTAMP
from travel_admin.domain.exceptions import EntityNotFoundError
from travel_admin.infrastructure.logging.colored_logger import OperationStage


class SoftDeleteRepository(EntityRepository):
    """Repository for entities that are marked deleted instead of removed."""

    _CACHES = {
        "active": ("active_list", "page_cursor"),
        "deleted": ("deleted_list", "deleted_page_cursor"),
    }
    _OTHER = {"active": "deleted", "deleted": "active"}

    def __init__(self, store: DocumentStore, config: EntityConfig, **kwargs: Any):
        if not config.soft_delete:
            raise ValueError(f"Collection '{config.collection}' is not soft-delete capable")
        super().__init__(store, config, **kwargs)

    def reset(self) -> None:
        super().reset()
        self.deleted_list: list[Record] = []
        self.deleted_page_cursor: str | None = None

    # ── Create / read ───────────────────────────────────────────────

    def _prepare_new(self, fields: dict[str, Any]) -> dict[str, Any]:
        document = super()._prepare_new(fields)
        document["is_deleted"] = False
        document["date_deleted"] = None
        return document

    def _visible(self, record: Record) -> bool:
        return not record.is_deleted

    async def fetch_deleted(
        self,
        page_size: int | None = None,
        reset_pagination: bool = False,
        *,
        cursor: str | None = None,
    ) -> OperationResult:
        """Fetch the next page of soft-deleted records.

        Pages are read in creation order like ``fetch_many`` with their own
        cursor; the cache is kept ordered by deletion time, newest first.
        """
        return await self._fetch_page(
            cache="deleted",
            page_size=page_size,
            reset_pagination=reset_pagination,
            cursor=cursor,
            keep=lambda r: r.is_deleted,
            order_key=self._deletion_key,
            error_key="fetch_deleted_failed",
        )

    def _deletion_key(self, record: Record):
        return sort_key(record.get("date_deleted") or record.get(self.config.updated_field))

    # ── Search ──────────────────────────────────────────────────────

    async def search(self, term: str, include_deleted: bool = False) -> OperationResult:
        """Scan and filter in process.

        With ``include_deleted`` the matches are partitioned and **both**
        caches are replaced by the partition. Without it, deleted records
        are dropped and only ``active_list`` is replaced.
        """
        active_token = self._claim("active")
        deleted_token = self._claim("deleted") if include_deleted else None
        self._begin()
        try:
            matches = await self._scan(term)
            active = [r for r in matches if not r.is_deleted]

            if not include_deleted:
                if self._is_latest("active", active_token):
                    self.active_list = active
                    self._after_cache_write("active", active)
                return OperationResult.ok(active)

            deleted = [r for r in matches if r.is_deleted]
            if self._is_latest("active", active_token):
                self.active_list = active
            if self._is_latest("deleted", deleted_token):
                self.deleted_list = deleted
            return OperationResult.ok(SearchPartition(active=active, deleted=deleted))
        except Exception as exc:
            return self._fail(OperationStage.SEARCH, "search_failed", exc)
        finally:
            self.is_loading = False

    # ── Update ──────────────────────────────────────────────────────

    def _update_payloads(self, fields: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        remote, local = super()._update_payloads(fields)
        if fields.get("is_deleted") is True and "date_deleted" not in fields:
            remote["date_deleted"] = SERVER_TIMESTAMP
            local["date_deleted"] = self._clock()
        elif fields.get("is_deleted") is False:
            remote["date_deleted"] = None
            local["date_deleted"] = None
        return remote, local

    def _apply_update(self, document_id: str, local: dict[str, Any]) -> Record:
        flag = local.get("is_deleted")
        if flag is True:
            self._move(document_id, "deleted", local)
        elif flag is False:
            self._move(document_id, "active", local)
        else:
            self.active_list = [r.merged(local) if r.id == document_id else r for r in self.active_list]
            self.deleted_list = [r.merged(local) if r.id == document_id else r for r in self.deleted_list]

        return self._merge_current(document_id, local) or self._find_cached(document_id) or Record(document_id, dict(local))

    def _move(self, document_id: str, target: str, local: dict[str, Any]) -> None:
        """Upsert into ``target`` and remove from the other cache."""
        target_attr = self._CACHES[target][0]
        source_attr = self._CACHES[self._OTHER[target]][0]
        source: list[Record] = getattr(self, source_attr)
        destination: list[Record] = getattr(self, target_attr)

        if any(r.id == document_id for r in destination):
            destination = [r.merged(local) if r.id == document_id else r for r in destination]
        else:
            previous = next((r for r in source if r.id == document_id), None)
            moved = previous.merged(local) if previous is not None else Record(document_id, dict(local))
            destination = [moved, *destination]

        setattr(self, target_attr, destination)
        setattr(self, source_attr, [r for r in source if r.id != document_id])

    def _find_cached(self, document_id: str) -> Record | None:
        return next(
            (r for r in (*self.active_list, *self.deleted_list) if r.id == document_id),
            None,
        )

    # ── Soft delete / restore ───────────────────────────────────────

    async def soft_delete(self, document_id: str) -> OperationResult:
        """Mark the document deleted and move its cached copy to ``deleted_list``.

        The cached copy gets a local-clock ``date_deleted`` until the next
        fetch brings the server value. A record absent from ``active_list``
        is not inserted into ``deleted_list``.
        """
        self._begin()
        try:
            with self._log.timed_step(OperationStage.DELETE, "Soft-deleting document", id=document_id):
                await self._store.update(
                    self.collection,
                    document_id,
                    {
                        "is_deleted": True,
                        "date_deleted": SERVER_TIMESTAMP,
                        self.config.updated_field: SERVER_TIMESTAMP,
                    },
                )

            now = self._clock()
            local = {"is_deleted": True, "date_deleted": now, self.config.updated_field: now}
            previous = next((r for r in self.active_list if r.id == document_id), None)
            self.active_list = [r for r in self.active_list if r.id != document_id]
            if previous is not None:
                remaining = [r for r in self.deleted_list if r.id != document_id]
                self.deleted_list = [previous.merged(local), *remaining]
            self._merge_current(document_id, local)
            return OperationResult.ok()
        except EntityNotFoundError:
            return self._not_found(document_id)
        except Exception as exc:
            return self._fail(OperationStage.DELETE, "delete_failed", exc)
        finally:
            self.is_loading = False

    async def restore(self, document_id: str) -> OperationResult:
        """Clear the deleted mark and move the cached copy back to ``active_list``.

        Succeeds without touching the caches when the id is not in
        ``deleted_list``.
        """
        self._begin()
        try:
            with self._log.timed_step(OperationStage.RESTORE, "Restoring document", id=document_id):
                await self._store.update(
                    self.collection,
                    document_id,
                    {
                        "is_deleted": False,
                        "date_deleted": None,
                        self.config.updated_field: SERVER_TIMESTAMP,
                    },
                )

            previous = next((r for r in self.deleted_list if r.id == document_id), None)
            if previous is None:
                self._log.detail("Restored record not cached", id=document_id)
                return OperationResult.ok()

            local = {"is_deleted": False, "date_deleted": None, self.config.updated_field: self._clock()}
            self.deleted_list = [r for r in self.deleted_list if r.id != document_id]
            remaining = [r for r in self.active_list if r.id != document_id]
            self.active_list = [previous.merged(local), *remaining]
            self._merge_current(document_id, local)
            return OperationResult.ok()
        except EntityNotFoundError:
            return self._not_found(document_id)
        except Exception as exc:
            return self._fail(OperationStage.RESTORE, "restore_failed", exc)
        finally:
            self.is_loading = False

    # ── Cache bookkeeping ───────────────────────────────────────────

    def _purge(self, document_id: str) -> None:
        super()._purge(document_id)
        self.deleted_list = [r for r in self.deleted_list if r.id != document_id]

    def _after_cache_write(self, cache: str, records: list[Record]) -> None:
        ids = {r.id for r in records}
        if not ids:
            return
        other_attr = self._CACHES[self._OTHER[cache]][0]
        setattr(self, other_attr, [r for r in getattr(self, other_attr) if r.id not in ids])


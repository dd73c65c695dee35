"""Generic entity repository — cached CRUD, pagination and search over a document store.

One instance per entity type. The repository owns the in-memory caches the
screens render from (``active_list``, ``current``) and the pagination cursor.
Every public operation is a coroutine that suspends only at the store
boundary; cache writes happen after the store call returns, so a failed
call leaves the caches exactly as they were.

Overlapping list fetches are sequenced: each cache-replacing operation takes
a request token and a response whose token is no longer the newest for that
cache is handed back to its caller without touching the cache.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from itertools import count
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from travel_admin.application.interfaces.document_store import (
    DocumentStore,
    FieldFilter,
    StoreQuery,
)
from travel_admin.application.repositories.config import EntityConfig
from travel_admin.application.repositories.timestamps import sort_key, to_datetime
from travel_admin.application.schemas.result import OperationResult
from travel_admin.domain.entities import Record, SERVER_TIMESTAMP
from travel_admin.domain.exceptions import EntityNotFoundError
from travel_admin.domain.messages import MessageCatalog
from travel_admin.infrastructure.logging.colored_logger import OperationLogger, OperationStage

if TYPE_CHECKING:
    from travel_admin.application.services.session_context import SessionContext

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityRepository:
    """Cached data access for one collection (no soft delete)."""

    # cache name → (list attribute, cursor attribute)
    _CACHES: dict[str, tuple[str, str]] = {
        "active": ("active_list", "page_cursor"),
    }

    def __init__(
        self,
        store: DocumentStore,
        config: EntityConfig,
        *,
        session: "SessionContext | None" = None,
        messages: MessageCatalog | None = None,
        page_size: int = 10,
        clock: Clock = _utcnow,
    ):
        self._store = store
        self.config = config
        self._session = session
        self._messages = messages or MessageCatalog()
        self._page_size = page_size
        self._clock = clock
        self._log = OperationLogger(f"travel_admin.repositories.{config.collection}")
        self._request_ids = count(1)
        self._latest: dict[str, int] = {}
        self.reset()

    # ── State ───────────────────────────────────────────────────────

    def reset(self) -> None:
        """Restore the initial, empty cache state."""
        self.active_list: list[Record] = []
        self.current: Record | None = None
        self.page_cursor: str | None = None
        self.is_loading = False
        self.last_error: str | None = None

    @property
    def collection(self) -> str:
        return self.config.collection

    # ── Create ──────────────────────────────────────────────────────

    async def create(self, payload: dict[str, Any] | BaseModel) -> OperationResult:
        """Write a new document and prepend it to ``active_list``.

        Stamps ``created_by`` from the session snapshot taken now and both
        audit timestamps with the server clock. The stored document is read
        back so the returned timestamps are the store's own.
        """
        fields = self._as_fields(payload)
        self._begin()
        try:
            document = self._prepare_new(fields)
            with self._log.timed_step(OperationStage.CREATE, f"Creating {self.collection} document"):
                document_id = await self._store.add(self.collection, document)

            try:
                stored = await self._store.get(self.collection, document_id)
            except Exception as exc:
                # The add succeeded; fall back to local timestamps
                self._log.warning("Read-back failed, using local clock", id=document_id, error=exc)
                stored = None

            if stored is not None:
                record = self._normalize(stored)
            else:
                record = self._normalize(Record(document_id, self._with_local_clock(document)))

            self.active_list = [record, *(r for r in self.active_list if r.id != record.id)]
            self._after_cache_write("active", [record])
            return OperationResult.ok(record)
        except Exception as exc:
            return self._fail(OperationStage.CREATE, "create_failed", exc)
        finally:
            self.is_loading = False

    def _prepare_new(self, fields: dict[str, Any]) -> dict[str, Any]:
        document = {**self.config.defaults, **fields}
        document.pop("id", None)
        document["created_by"] = self._creator()
        document[self.config.created_field] = SERVER_TIMESTAMP
        document[self.config.updated_field] = SERVER_TIMESTAMP
        return document

    def _creator(self) -> dict[str, Any] | None:
        if self._session is None:
            return None
        stub = self._session.creator_stub()
        return stub.to_dict() if stub is not None else None

    # ── Read ────────────────────────────────────────────────────────

    async def fetch_one(self, document_id: str) -> OperationResult:
        """Load a single document into ``current``."""
        self._begin()
        self.current = None
        try:
            with self._log.timed_step(OperationStage.FETCH, "Fetching document", id=document_id):
                stored = await self._store.get(self.collection, document_id)

            if stored is None:
                return self._not_found(document_id)

            self.current = self._normalize(stored)
            return OperationResult.ok(self.current)
        except Exception as exc:
            return self._fail(OperationStage.FETCH, "fetch_one_failed", exc)
        finally:
            self.is_loading = False

    async def fetch_many(
        self,
        page_size: int | None = None,
        reset_pagination: bool = False,
        *,
        cursor: str | None = None,
    ) -> OperationResult:
        """Fetch the next page ordered by creation time, newest first.

        ``cursor`` overrides the instance cursor for callers that thread
        their own position.
        """
        return await self._fetch_page(
            cache="active",
            page_size=page_size,
            reset_pagination=reset_pagination,
            cursor=cursor,
            keep=self._visible,
            error_key="fetch_many_failed",
        )

    async def fetch_by_creator(
        self,
        uid: str,
        page_size: int | None = None,
        reset_pagination: bool = False,
        *,
        cursor: str | None = None,
    ) -> OperationResult:
        """Like ``fetch_many`` but only documents created by ``uid``."""
        return await self._fetch_page(
            cache="active",
            page_size=page_size,
            reset_pagination=reset_pagination,
            cursor=cursor,
            filters=[FieldFilter("created_by.uid", uid)],
            keep=self._visible,
            error_key="fetch_many_failed",
        )

    async def _fetch_page(
        self,
        *,
        cache: str,
        page_size: int | None,
        reset_pagination: bool,
        cursor: str | None,
        keep: Callable[[Record], bool],
        error_key: str,
        filters: Iterable[FieldFilter] = (),
        order_key: Callable[[Record], Any] | None = None,
    ) -> OperationResult:
        list_attr, cursor_attr = self._CACHES[cache]
        threaded = cursor is not None
        token = None if threaded else self._claim(cache)
        self._begin()
        if reset_pagination and not threaded:
            setattr(self, list_attr, [])
            setattr(self, cursor_attr, None)

        start_after = cursor if cursor is not None else getattr(self, cursor_attr)
        query = StoreQuery(
            collection=self.collection,
            filters=list(filters),
            order_by=self.config.created_field,
            descending=True,
            start_after=start_after,
            limit=page_size or self._page_size,
        )
        try:
            with self._log.timed_step(
                OperationStage.FETCH, f"Fetching {cache} page",
                limit=query.limit, reset=reset_pagination,
            ):
                page = await self._store.query(query)

            records = [r for r in (self._normalize(doc) for doc in page.records) if keep(r)]

            if threaded:
                # Caller-owned cursor: leave the shared cache and cursor alone
                return OperationResult.ok(records, cursor=page.cursor if not page.empty else cursor)

            if not self._is_latest(cache, token):
                self._log.detail("Discarding stale page", cache=cache, token=token)
                return OperationResult.ok(records, cursor=page.cursor)

            if page.empty:
                return OperationResult.ok([], cursor=getattr(self, cursor_attr))

            existing: list[Record] = [] if reset_pagination else getattr(self, list_attr)
            known = {r.id for r in existing}
            merged = [*existing, *(r for r in records if r.id not in known)]
            if order_key is not None:
                merged.sort(key=order_key, reverse=True)
            setattr(self, list_attr, merged)
            setattr(self, cursor_attr, page.cursor)
            self._after_cache_write(cache, records)
            self._log.detail("Cursor advanced", cache=cache, received=len(page.records), kept=len(records))
            return OperationResult.ok(records, cursor=page.cursor)
        except Exception as exc:
            return self._fail(OperationStage.FETCH, error_key, exc)
        finally:
            self.is_loading = False

    # ── Search ──────────────────────────────────────────────────────

    async def search(self, term: str, include_deleted: bool = False) -> OperationResult:
        """Full-collection scan filtered in process; replaces ``active_list``.

        ``include_deleted`` only matters for soft-delete capable entities.
        """
        token = self._claim("active")
        self._begin()
        try:
            matches = await self._scan(term)
            if self._is_latest("active", token):
                self.active_list = matches
            return OperationResult.ok(matches)
        except Exception as exc:
            return self._fail(OperationStage.SEARCH, "search_failed", exc)
        finally:
            self.is_loading = False

    async def _scan(self, term: str) -> list[Record]:
        with self._log.timed_step(OperationStage.SEARCH, "Scanning collection", term=term):
            page = await self._store.query(StoreQuery(collection=self.collection))
        matches = [self._normalize(doc) for doc in page.records if self._matches(doc, term)]
        matches.sort(key=lambda r: sort_key(r.get(self.config.created_field)), reverse=True)
        return matches

    def _matches(self, record: Record, term: str) -> bool:
        lowered = term.lower()
        for name in self.config.search_fields:
            value = record.get(name)
            if value is not None and lowered in str(value).lower():
                return True
        for name in self.config.exact_search_fields:
            value = record.get(name)
            if value is not None and term in str(value):
                return True
        return False

    # ── Update ──────────────────────────────────────────────────────

    async def update(self, document_id: str, payload: dict[str, Any] | BaseModel) -> OperationResult:
        """Merge ``payload`` into the stored document and the cached copies."""
        fields = self._strip_protected(self._as_fields(payload, partial=True))
        self._begin()
        try:
            remote, local = self._update_payloads(fields)
            with self._log.timed_step(OperationStage.UPDATE, "Updating document", id=document_id):
                await self._store.update(self.collection, document_id, remote)

            record = self._apply_update(document_id, local)
            return OperationResult.ok(record)
        except EntityNotFoundError:
            return self._not_found(document_id)
        except Exception as exc:
            return self._fail(OperationStage.UPDATE, "update_failed", exc)
        finally:
            self.is_loading = False

    def _strip_protected(self, fields: dict[str, Any]) -> dict[str, Any]:
        dropped = [name for name in self.config.protected_fields if name in fields]
        if dropped:
            self._log.warning("Ignoring immutable fields in update", fields=",".join(dropped))
        return {k: v for k, v in fields.items() if k not in self.config.protected_fields}

    def _update_payloads(self, fields: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        """Return (fields sent to the store, fields merged into the caches)."""
        remote = {**fields, self.config.updated_field: SERVER_TIMESTAMP}
        local = {**fields, self.config.updated_field: self._clock()}
        return remote, local

    def _apply_update(self, document_id: str, local: dict[str, Any]) -> Record:
        self.active_list = [r.merged(local) if r.id == document_id else r for r in self.active_list]
        return self._merge_current(document_id, local) or self._find_cached(document_id) or Record(document_id, dict(local))

    def _merge_current(self, document_id: str, local: dict[str, Any]) -> Record | None:
        if self.current is not None and self.current.id == document_id:
            self.current = self.current.merged(local)
            return self.current
        return None

    def _find_cached(self, document_id: str) -> Record | None:
        return next((r for r in self.active_list if r.id == document_id), None)

    # ── Delete ──────────────────────────────────────────────────────

    async def hard_delete(self, document_id: str) -> OperationResult:
        """Permanently remove the document and purge it from every cache."""
        self._begin()
        try:
            with self._log.timed_step(OperationStage.DELETE, "Deleting document", id=document_id):
                removed = await self._store.delete(self.collection, document_id)
            if not removed:
                self._log.warning("Document already absent from store", id=document_id)

            self._purge(document_id)
            return OperationResult.ok()
        except Exception as exc:
            return self._fail(OperationStage.DELETE, "delete_failed", exc)
        finally:
            self.is_loading = False

    def _purge(self, document_id: str) -> None:
        self.active_list = [r for r in self.active_list if r.id != document_id]
        if self.current is not None and self.current.id == document_id:
            self.current = None

    # ── Hooks for soft-delete capable subclasses ────────────────────

    def _visible(self, record: Record) -> bool:
        return True

    def _after_cache_write(self, cache: str, records: list[Record]) -> None:
        """Called after ``records`` were written into ``cache``."""

    # ── Helpers ─────────────────────────────────────────────────────

    def _begin(self) -> None:
        self.is_loading = True
        self.last_error = None

    def _claim(self, cache: str) -> int:
        token = next(self._request_ids)
        self._latest[cache] = token
        return token

    def _is_latest(self, cache: str, token: int) -> bool:
        return self._latest.get(cache) == token

    def _normalize(self, record: Record) -> Record:
        """Copy ``record`` with every known timestamp field as a datetime."""
        data = dict(record.data)
        for name in self.config.timestamp_fields:
            if name in data:
                data[name] = to_datetime(data[name])
        return Record(record.id, data)

    def _with_local_clock(self, document: dict[str, Any]) -> dict[str, Any]:
        now = self._clock()
        return {k: (now if v is SERVER_TIMESTAMP else v) for k, v in document.items()}

    @staticmethod
    def _as_fields(payload: dict[str, Any] | BaseModel, partial: bool = False) -> dict[str, Any]:
        """Plain field map from a dict or DTO; updates keep only explicitly set fields."""
        if isinstance(payload, BaseModel):
            if partial:
                return payload.model_dump(mode="json", exclude_unset=True)
            return payload.model_dump(mode="json", exclude_none=True)
        return dict(payload)

    def _message(self, key: str) -> str:
        return self._messages.get(key, self.collection)

    def _not_found(self, document_id: str) -> OperationResult:
        message = self._message("not_found")
        self._log.warning("Document not found", id=document_id)
        self.last_error = message
        self.is_loading = False
        return OperationResult.fail(message)

    def _deny(self, key: str) -> OperationResult:
        message = self._messages.get(key)
        self._log.warning("Permission denied", reason=key)
        self.last_error = message
        self.is_loading = False
        return OperationResult.fail(message)

    def _fail(self, stage: tuple[str, str, str], key: str, exc: BaseException) -> OperationResult:
        message = self._message(key)
        self._log.step_error(stage, f"{self.collection}: {key}", error=exc)
        self.last_error = message
        self.is_loading = False
        return OperationResult.fail(message)

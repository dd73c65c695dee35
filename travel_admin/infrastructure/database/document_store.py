"""DocumentStore implementation backed by a single SQLAlchemy JSON table.

Documents of every collection live in ``documents``; equality filters and
ordering are pushed down as JSON path expressions. Paging is keyset based:
the cursor carries the last document's ordering value and id, and the next
page starts strictly after that pair (ordering value first, id as tiebreak).
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from travel_admin.application.interfaces.document_store import (
    DocumentStore,
    FieldFilter,
    QueryPage,
    StoreQuery,
)
from travel_admin.domain.entities import Record, SERVER_TIMESTAMP
from travel_admin.domain.exceptions import DocumentStoreError, EntityNotFoundError
from travel_admin.infrastructure.database.cursor import decode_cursor, encode_cursor
from travel_admin.infrastructure.database.models import DocumentModel

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _json_path(path: str) -> str | tuple[str, ...]:
    parts = tuple(path.split("."))
    return parts[0] if len(parts) == 1 else parts


def _typed(element: Any, value: Any):
    """Cast a JSON element to the SQL type matching ``value``."""
    if isinstance(value, bool):
        return element.as_boolean()
    if isinstance(value, int):
        return element.as_integer()
    if isinstance(value, float):
        return element.as_float()
    return element.as_string()


class SQLAlchemyDocumentStore(DocumentStore):
    """Implements the DocumentStore port using SQLAlchemy async sessions."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._session_factory = session_factory
        self._clock = clock

    # ── Serialisation ───────────────────────────────────────────────

    def _serialise(self, value: Any, now: str) -> Any:
        """Substitute the server clock and make ``value`` JSON-storable."""
        if value is SERVER_TIMESTAMP:
            return now
        if isinstance(value, datetime):
            return _iso(value)
        if isinstance(value, dict):
            return {k: self._serialise(v, now) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialise(v, now) for v in value]
        return value

    @staticmethod
    def _to_record(model: DocumentModel) -> Record:
        return Record(id=model.id, data=dict(model.data or {}))

    # ── Writes ──────────────────────────────────────────────────────

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        now = self._clock()
        document = DocumentModel(
            id=str(uuid.uuid4()),
            collection=collection,
            data=self._serialise(data, _iso(now)),
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._session_factory() as session:
                session.add(document)
                await session.commit()
        except SQLAlchemyError as exc:
            raise DocumentStoreError("add", collection, str(exc)) from exc

        logger.debug("Added %s/%s", collection, document.id)
        return document.id

    async def update(self, collection: str, document_id: str, fields: dict[str, Any]) -> None:
        now = self._clock()
        try:
            async with self._session_factory() as session:
                model = await session.get(DocumentModel, document_id)
                if model is None or model.collection != collection:
                    raise EntityNotFoundError(collection, document_id)
                # Reassign so the JSON column is flagged dirty.
                model.data = {**(model.data or {}), **self._serialise(fields, _iso(now))}
                model.updated_at = now
                await session.commit()
        except SQLAlchemyError as exc:
            raise DocumentStoreError("update", collection, str(exc)) from exc

    async def delete(self, collection: str, document_id: str) -> bool:
        try:
            async with self._session_factory() as session:
                model = await session.get(DocumentModel, document_id)
                if model is None or model.collection != collection:
                    return False
                await session.delete(model)
                await session.commit()
        except SQLAlchemyError as exc:
            raise DocumentStoreError("delete", collection, str(exc)) from exc

        logger.debug("Deleted %s/%s", collection, document_id)
        return True

    # ── Reads ───────────────────────────────────────────────────────

    async def get(self, collection: str, document_id: str) -> Record | None:
        try:
            async with self._session_factory() as session:
                model = await session.get(DocumentModel, document_id)
        except SQLAlchemyError as exc:
            raise DocumentStoreError("get", collection, str(exc)) from exc

        if model is None or model.collection != collection:
            return None
        return self._to_record(model)

    async def query(self, query: StoreQuery) -> QueryPage:
        stmt = select(DocumentModel).where(DocumentModel.collection == query.collection)
        for condition in query.filters:
            stmt = stmt.where(self._filter_clause(condition))

        if query.order_by is not None:
            order_col = DocumentModel.data[query.order_by].as_string()
        else:
            order_col = None

        if query.start_after is not None:
            try:
                cursor_id, cursor_value = decode_cursor(query.start_after)
            except ValueError as exc:
                raise DocumentStoreError("query", query.collection, str(exc)) from exc
            stmt = stmt.where(self._after_clause(order_col, cursor_id, cursor_value, query.descending))

        stmt = stmt.order_by(*self._ordering(order_col, query.descending))
        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                models = list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise DocumentStoreError("query", query.collection, str(exc)) from exc

        records = [self._to_record(m) for m in models]
        cursor = None
        if records:
            last = records[-1]
            value = last.get(query.order_by) if query.order_by is not None else None
            cursor = encode_cursor(last.id, value)
        return QueryPage(records=records, cursor=cursor)

    # ── Query building ──────────────────────────────────────────────

    @staticmethod
    def _filter_clause(condition: FieldFilter):
        element = DocumentModel.data[_json_path(condition.path)]
        if condition.value is None:
            return element.as_string().is_(None)
        return _typed(element, condition.value) == condition.value

    @staticmethod
    def _ordering(order_col, descending: bool) -> list:
        id_col = DocumentModel.id
        if order_col is None:
            return [id_col.desc() if descending else id_col.asc()]
        if descending:
            return [order_col.desc().nulls_last(), id_col.desc()]
        return [order_col.asc().nulls_last(), id_col.asc()]

    @staticmethod
    def _after_clause(order_col, cursor_id: str, cursor_value: Any, descending: bool):
        """Rows strictly after (cursor_value, cursor_id) in the query's ordering.

        Documents lacking the ordering field sort last in both directions.
        """
        id_col = DocumentModel.id
        past_id = id_col < cursor_id if descending else id_col > cursor_id
        if order_col is None:
            return past_id
        if cursor_value is None:
            return and_(order_col.is_(None), past_id)
        past_value = order_col < cursor_value if descending else order_col > cursor_value
        return or_(
            past_value,
            and_(order_col == cursor_value, past_id),
            order_col.is_(None),
        )

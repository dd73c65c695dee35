"""Unit tests for soft delete, restore and the two-cache invariant (clients)."""

from datetime import datetime, timezone

import pytest

from travel_admin.application.repositories import AGENCIES, CLIENTS, SoftDeleteRepository, build_repository
from travel_admin.application.schemas import ClientCreate, SearchPartition


def _ids(records) -> list[str]:
    return [r.id for r in records]


def _assert_exclusive(repo: SoftDeleteRepository) -> None:
    active = set(_ids(repo.active_list))
    deleted = set(_ids(repo.deleted_list))
    assert not active & deleted
    assert all(not r.is_deleted for r in repo.active_list)
    assert all(r.is_deleted for r in repo.deleted_list)


async def _client(repo: SoftDeleteRepository, name: str, tel: str = "0600000000") -> str:
    result = await repo.create({"clients_name": name, "clients_tel": tel})
    assert result.success
    return result.data.id


def test_requires_soft_delete_config(store):
    with pytest.raises(ValueError):
        SoftDeleteRepository(store, AGENCIES)


@pytest.mark.asyncio
async def test_ahmed_lifecycle(clients):
    created = await clients.create(ClientCreate(clients_name="Ahmed", clients_tel="0600000000"))
    assert created.success
    client_id = created.data.id
    assert created.data.get("clients_status") == "active"
    assert created.data.get("is_deleted") is False
    assert created.data.get("date_deleted") is None

    assert (await clients.soft_delete(client_id)).success
    active = await clients.fetch_many(reset_pagination=True)
    deleted = await clients.fetch_deleted(reset_pagination=True)
    assert client_id not in _ids(active.data)
    assert client_id in _ids(deleted.data)
    assert deleted.data[0].get("date_deleted") is not None
    _assert_exclusive(clients)

    assert (await clients.restore(client_id)).success
    active = await clients.fetch_many(reset_pagination=True)
    deleted = await clients.fetch_deleted(reset_pagination=True)
    assert client_id in _ids(active.data)
    assert client_id not in _ids(deleted.data)
    assert active.data[0].get("is_deleted") is False
    assert active.data[0].get("date_deleted") is None
    _assert_exclusive(clients)


@pytest.mark.asyncio
async def test_soft_delete_moves_cached_record_optimistically(clients, store):
    client_id = await _client(clients, "Ahmed")
    await clients.fetch_one(client_id)

    await clients.soft_delete(client_id)

    assert _ids(clients.active_list) == []
    assert _ids(clients.deleted_list) == [client_id]
    moved = clients.deleted_list[0]
    assert moved.get("clients_name") == "Ahmed"
    assert moved.get("date_deleted") is not None
    assert clients.current.is_deleted
    assert store.raw("clients", client_id)["is_deleted"] is True
    assert store.raw("clients", client_id)["date_deleted"] is not None


@pytest.mark.asyncio
async def test_soft_delete_of_uncached_record_only_writes_remote(clients, store):
    client_id = await _client(clients, "Ahmed")
    clients.reset()

    result = await clients.soft_delete(client_id)

    assert result.success
    assert clients.deleted_list == []
    assert store.raw("clients", client_id)["is_deleted"] is True


@pytest.mark.asyncio
async def test_soft_delete_missing_document(clients):
    result = await clients.soft_delete("missing")

    assert not result.success
    assert result.error == "The client was not found"


@pytest.mark.asyncio
async def test_soft_delete_failure_keeps_caches(clients, store):
    client_id = await _client(clients, "Ahmed")
    store.fail_on.add("update")

    result = await clients.soft_delete(client_id)

    assert not result.success
    assert _ids(clients.active_list) == [client_id]
    assert clients.deleted_list == []
    assert clients.is_loading is False


@pytest.mark.asyncio
async def test_restore_is_idempotent(clients):
    client_id = await _client(clients, "Ahmed")
    await clients.soft_delete(client_id)

    first = await clients.restore(client_id)
    second = await clients.restore(client_id)

    assert first.success and second.success
    assert _ids(clients.active_list) == [client_id]
    assert clients.deleted_list == []
    assert clients.active_list[0].get("date_deleted") is None


@pytest.mark.asyncio
async def test_update_is_deleted_matches_soft_delete(clients, store):
    via_soft_delete = await _client(clients, "Ahmed")
    via_update = await _client(clients, "Karim")

    await clients.soft_delete(via_soft_delete)
    result = await clients.update(via_update, {"is_deleted": True})

    assert result.success
    assert set(_ids(clients.deleted_list)) == {via_soft_delete, via_update}
    assert clients.active_list == []
    for client_id in (via_soft_delete, via_update):
        raw = store.raw("clients", client_id)
        assert raw["is_deleted"] is True
        assert raw["date_deleted"] is not None
    _assert_exclusive(clients)


@pytest.mark.asyncio
async def test_update_is_deleted_false_moves_back_and_clears_date(clients, store):
    client_id = await _client(clients, "Ahmed")
    await clients.soft_delete(client_id)

    await clients.update(client_id, {"is_deleted": False})

    assert _ids(clients.active_list) == [client_id]
    assert clients.deleted_list == []
    assert store.raw("clients", client_id)["date_deleted"] is None


@pytest.mark.asyncio
async def test_update_without_flag_edits_deleted_record_in_place(clients):
    client_id = await _client(clients, "Ahmed")
    await clients.soft_delete(client_id)

    await clients.update(client_id, {"clients_city": "Tanger"})

    assert clients.active_list == []
    assert clients.deleted_list[0].get("clients_city") == "Tanger"


@pytest.mark.asyncio
async def test_fetch_many_skips_deleted_records(clients):
    kept = await _client(clients, "Ahmed")
    gone = await _client(clients, "Karim")
    await clients.soft_delete(gone)

    result = await clients.fetch_many(reset_pagination=True)

    assert _ids(result.data) == [kept]
    assert _ids(clients.active_list) == [kept]
    _assert_exclusive(clients)


@pytest.mark.asyncio
async def test_fetch_deleted_orders_by_deletion_time(clients):
    older = await _client(clients, "Ahmed")
    newer = await _client(clients, "Karim")
    await clients.soft_delete(newer)
    await clients.soft_delete(older)

    result = await clients.fetch_deleted(reset_pagination=True)

    assert _ids(result.data) == [newer, older]  # page order: created desc
    assert _ids(clients.deleted_list) == [older, newer]  # cache order: deleted desc


@pytest.mark.asyncio
async def test_deleted_cache_falls_back_to_updated_time(store, clients):
    def at(day: int) -> datetime:
        return datetime(2024, 3, day, tzinfo=timezone.utc)

    rows = {
        "clients-a": {"date_deleted": None, "date_updated": at(10)},
        "clients-b": {"date_deleted": at(5), "date_updated": at(5)},
        "clients-c": {"date_deleted": None, "date_updated": at(2)},
        "clients-d": {"date_deleted": at(20), "date_updated": at(1)},
    }
    for n, (client_id, stamps) in enumerate(rows.items(), start=1):
        store.seed(
            "clients",
            client_id,
            {"clients_name": client_id, "is_deleted": True, "date_created": at(n), **stamps},
        )

    result = await clients.fetch_deleted(reset_pagination=True)

    assert result.success
    assert _ids(clients.deleted_list) == ["clients-d", "clients-a", "clients-b", "clients-c"]


@pytest.mark.asyncio
async def test_fetch_deleted_evicts_stale_active_copy(store, clients, session, messages, clock):
    client_id = await _client(clients, "Ahmed")
    other_screen = build_repository(store, CLIENTS, session=session, messages=messages, clock=clock)
    await other_screen.soft_delete(client_id)

    await clients.fetch_deleted(reset_pagination=True)

    assert _ids(clients.deleted_list) == [client_id]
    assert clients.active_list == []


@pytest.mark.asyncio
async def test_deleted_pagination_has_its_own_cursor(store, session, messages, clock):
    repo = build_repository(store, CLIENTS, session=session, messages=messages, page_size=2, clock=clock)
    ids = [await _client(repo, f"Client {i}") for i in range(4)]
    for client_id in ids:
        await repo.soft_delete(client_id)

    await repo.fetch_many(reset_pagination=True)
    active_cursor = repo.page_cursor
    first = await repo.fetch_deleted(reset_pagination=True)
    second = await repo.fetch_deleted()

    assert repo.page_cursor == active_cursor
    assert not set(_ids(first.data)) & set(_ids(second.data))
    assert set(_ids(repo.deleted_list)) == set(ids)


@pytest.mark.asyncio
async def test_search_with_deleted_replaces_both_caches(clients):
    ahmed = await _client(clients, "Ahmed Alaoui")
    ahmed_deleted = await _client(clients, "ahmed benali")
    karim = await _client(clients, "Karim")
    await clients.soft_delete(ahmed_deleted)
    assert karim in _ids(clients.active_list)

    result = await clients.search("AHMED", include_deleted=True)

    assert result.success
    assert isinstance(result.data, SearchPartition)
    assert _ids(result.data.active) == [ahmed]
    assert _ids(result.data.deleted) == [ahmed_deleted]
    assert _ids(clients.active_list) == [ahmed]
    assert _ids(clients.deleted_list) == [ahmed_deleted]


@pytest.mark.asyncio
async def test_search_without_deleted_leaves_deleted_cache(clients):
    ahmed = await _client(clients, "Ahmed")
    gone = await _client(clients, "Ahmed Two")
    await clients.soft_delete(gone)

    result = await clients.search("ahmed")

    assert _ids(result.data) == [ahmed]
    assert _ids(clients.active_list) == [ahmed]
    assert _ids(clients.deleted_list) == [gone]


@pytest.mark.asyncio
async def test_search_matches_phone_exactly(clients):
    await _client(clients, "Ahmed", tel="0611223344")
    await _client(clients, "Karim", tel="0699887766")

    result = await clients.search("112233")

    assert [r.get("clients_name") for r in result.data] == ["Ahmed"]


@pytest.mark.asyncio
async def test_hard_delete_purges_deleted_cache(clients, store):
    client_id = await _client(clients, "Ahmed")
    await clients.soft_delete(client_id)

    await clients.hard_delete(client_id)

    assert clients.deleted_list == []
    assert store.raw("clients", client_id) is None

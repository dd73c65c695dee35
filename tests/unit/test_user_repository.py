"""Unit tests for UserRepository role rules and account provisioning."""

import pytest

from travel_admin.application.schemas import UserCreate
from travel_admin.domain.entities import (
    UserRole,
    can_create_user,
    can_delete_user,
    can_update_user,
)
from travel_admin.domain.exceptions import AuthProviderError


async def _seed_user(store, role: str, uid: str = "uid-x") -> str:
    document_id = f"users-{role}"
    store.seed(
        "users",
        document_id,
        {"first_name": role.title(), "userRole": role, "uid": uid, "is_deleted": False, "date_deleted": None},
    )
    return document_id


# ── Role rules ──


@pytest.mark.parametrize(
    "actor, target, allowed",
    [
        ("admin", "admin", True),
        ("manager", "admin", False),
        ("manager", "manager", True),
        ("agent", "manager", False),
        ("agent", "user", True),
        (None, "agent", True),
    ],
)
def test_can_create_user(actor, target, allowed):
    assert can_create_user(actor, target) is allowed


def test_only_admins_touch_admins():
    assert can_update_user("admin", "admin", None)
    assert not can_update_user("manager", "admin", None)
    assert not can_update_user("manager", "agent", "admin")
    assert can_update_user("manager", "manager", "agent")
    assert not can_update_user("agent", "manager", None)


def test_only_admins_delete_managers():
    assert can_delete_user("admin", "manager")
    assert not can_delete_user("manager", "manager")
    assert can_delete_user("manager", "agent")


# ── Create ──


@pytest.mark.asyncio
async def test_create_applies_user_defaults(users, sign_in_as):
    sign_in_as("admin")

    result = await users.create({"first_name": "Sara", "last_name": "Idrissi", "userEmail": "sara@agency.ma"})

    assert result.success
    assert result.data.get("userRole") == "user"
    assert result.data.get("accountStatus") == "active"
    assert result.data.get("is_deleted") is False


@pytest.mark.asyncio
async def test_manager_cannot_create_admin(users, sign_in_as, store):
    sign_in_as("manager")

    result = await users.create(
        UserCreate(first_name="A", last_name="B", userEmail="a@agency.ma", userRole=UserRole.ADMIN)
    )

    assert not result.success
    assert result.error == "You are not allowed to create a user with this role."
    assert ("add", "users") not in store.calls
    assert users.is_loading is False


@pytest.mark.asyncio
async def test_create_with_password_provisions_account(users, auth, sign_in_as, store):
    sign_in_as("admin")

    result = await users.create(
        UserCreate(
            first_name="Sara",
            last_name="Idrissi",
            userEmail="sara@agency.ma",
            userRole=UserRole.AGENT,
            password="secret123",
        )
    )

    assert result.success
    assert "sara@agency.ma" in auth.accounts
    account = auth.accounts["sara@agency.ma"][1]
    assert account.display_name == "Sara Idrissi"
    raw = store.raw("users", result.data.id)
    assert raw["uid"] == account.uid
    assert "password" not in raw


@pytest.mark.asyncio
async def test_create_fails_when_account_cannot_be_provisioned(users, auth, sign_in_as, store):
    sign_in_as("admin")
    auth.errors["sign_up"] = AuthProviderError("EMAIL_EXISTS", "EMAIL_EXISTS", 400)

    result = await users.create(
        {"first_name": "Sara", "last_name": "I", "userEmail": "sara@agency.ma", "password": "secret123"}
    )

    assert not result.success
    assert ("add", "users") not in store.calls
    assert users.active_list == []


# ── Update / delete ──


@pytest.mark.asyncio
async def test_manager_cannot_promote_to_admin(users, store, sign_in_as):
    agent_id = await _seed_user(store, "agent")
    sign_in_as("manager")

    result = await users.update(agent_id, {"userRole": "admin"})

    assert not result.success
    assert store.raw("users", agent_id)["userRole"] == "agent"


@pytest.mark.asyncio
async def test_admin_can_update_manager(users, store, sign_in_as):
    manager_id = await _seed_user(store, "manager")
    sign_in_as("admin")

    result = await users.update(manager_id, {"accountStatus": "suspended"})

    assert result.success
    assert store.raw("users", manager_id)["accountStatus"] == "suspended"


@pytest.mark.asyncio
async def test_update_unknown_user_is_not_found(users, sign_in_as):
    sign_in_as("admin")

    result = await users.update("missing", {"first_name": "x"})

    assert not result.success
    assert result.error == "The user was not found"


@pytest.mark.asyncio
async def test_manager_cannot_soft_delete_manager(users, store, sign_in_as):
    manager_id = await _seed_user(store, "manager")
    sign_in_as("manager")

    denied = await users.soft_delete(manager_id)
    denied_via_update = await users.update(manager_id, {"is_deleted": True})

    assert not denied.success
    assert not denied_via_update.success
    assert store.raw("users", manager_id)["is_deleted"] is False


@pytest.mark.asyncio
async def test_manager_can_soft_delete_agent(users, store, sign_in_as):
    agent_id = await _seed_user(store, "agent")
    sign_in_as("manager")
    await users.fetch_many(reset_pagination=True)

    result = await users.soft_delete(agent_id)

    assert result.success
    assert [r.id for r in users.deleted_list] == [agent_id]
    assert users.active_list == []


# ── Queries ──


@pytest.mark.asyncio
async def test_fetch_by_role(users, sign_in_as):
    sign_in_as("admin")
    agent = await users.create({"first_name": "A", "last_name": "A", "userEmail": "a@x.ma", "userRole": "agent"})
    await users.create({"first_name": "M", "last_name": "M", "userEmail": "m@x.ma", "userRole": "manager"})

    result = await users.fetch_by_role(UserRole.AGENT, reset_pagination=True)

    assert [r.id for r in result.data] == [agent.data.id]

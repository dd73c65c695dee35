from .actor import Actor, ActorStub
from .client import ClientSex, ClientStatus
from .record import Record, SERVER_TIMESTAMP, ServerTimestamp
from .user import AccountStatus, UserRole, can_create_user, can_delete_user, can_update_user

__all__ = [
    "Actor",
    "ActorStub",
    "ClientSex",
    "ClientStatus",
    "Record",
    "SERVER_TIMESTAMP",
    "ServerTimestamp",
    "AccountStatus",
    "UserRole",
    "can_create_user",
    "can_delete_user",
    "can_update_user",
]

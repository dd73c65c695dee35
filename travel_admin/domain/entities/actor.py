"""Domain entities for the authenticated actor and its audit stub."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ActorStub:
    """Identity stub stamped into ``created_by`` at creation time."""

    uid: str
    email: str
    display_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "email": self.email,
            "displayName": self.display_name,
        }


@dataclass
class Actor:
    """The signed-in principal as returned by the authentication provider."""

    uid: str
    email: str
    display_name: str | None = None
    id_token: str | None = None
    refresh_token: str | None = None
    role: str | None = None

    def to_stub(self) -> ActorStub:
        return ActorStub(
            uid=self.uid,
            email=self.email,
            display_name=self.display_name or self.email,
        )

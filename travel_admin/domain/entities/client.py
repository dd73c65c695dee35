"""Domain vocabulary for agency clients."""

from enum import Enum


class ClientStatus(str, Enum):
    """Relationship status of a client with the agency."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class ClientSex(str, Enum):
    MALE = "male"
    FEMALE = "female"

from .base import EntityRepository
from .config import EntityConfig
from .registry import (
    AGENCIES,
    CLIENTS,
    ENTITY_CONFIGS,
    FLIGHTS,
    HOTELS,
    PACKAGES,
    SERVICES,
    USERS,
    build_repository,
)
from .soft_delete import SoftDeleteRepository
from .timestamps import to_datetime
from .users import UserRepository

__all__ = [
    "EntityRepository",
    "EntityConfig",
    "SoftDeleteRepository",
    "UserRepository",
    "build_repository",
    "to_datetime",
    "ENTITY_CONFIGS",
    "CLIENTS",
    "USERS",
    "AGENCIES",
    "HOTELS",
    "FLIGHTS",
    "PACKAGES",
    "SERVICES",
]

"""Entity configurations and repository construction for the seven collections."""

from typing import Any

from travel_admin.application.interfaces.auth_provider import AuthProvider
from travel_admin.application.interfaces.document_store import DocumentStore
from travel_admin.application.repositories.base import EntityRepository
from travel_admin.application.repositories.config import EntityConfig
from travel_admin.application.repositories.soft_delete import SoftDeleteRepository
from travel_admin.application.repositories.users import UserRepository
from travel_admin.domain.entities import AccountStatus, ClientStatus, UserRole

CLIENTS = EntityConfig(
    collection="clients",
    search_fields=(
        "clients_name",
        "clients_email",
        "clients_adresse",
        "clients_passport",
        "clients_cin",
        "clients_city",
        "clients_country",
    ),
    exact_search_fields=("clients_tel",),
    soft_delete=True,
    defaults={"clients_status": ClientStatus.ACTIVE.value},
)

USERS = EntityConfig(
    collection="users",
    search_fields=("first_name", "last_name", "username", "userEmail", "userRole"),
    exact_search_fields=("userTel",),
    soft_delete=True,
    defaults={
        "userRole": UserRole.USER.value,
        "accountStatus": AccountStatus.ACTIVE.value,
        "email_status": "verified",
    },
)

# The catalogue collections were written with camelCase audit timestamps.
AGENCIES = EntityConfig(
    collection="agencies",
    search_fields=("agency_name", "agency_email", "agency_adresse", "agency_responsible"),
    exact_search_fields=("agency_tel",),
    created_field="createdAt",
    updated_field="updatedAt",
)

HOTELS = EntityConfig(
    collection="hotels",
    search_fields=("hotel_name", "hotel_email", "hotel_contact", "hotel_city", "hotel_country"),
    exact_search_fields=("hotel_tel",),
    created_field="createdAt",
    updated_field="updatedAt",
)

FLIGHTS = EntityConfig(
    collection="flights",
    search_fields=("vols_name", "vols_company"),
    created_field="createdAt",
    updated_field="updatedAt",
)

PACKAGES = EntityConfig(
    collection="packages",
    search_fields=("package_name", "package_description"),
    created_field="createdAt",
    updated_field="updatedAt",
)

SERVICES = EntityConfig(
    collection="services",
    search_fields=("service_name", "service_description"),
    created_field="createdAt",
    updated_field="updatedAt",
)

ENTITY_CONFIGS: dict[str, EntityConfig] = {
    config.collection: config
    for config in (CLIENTS, USERS, AGENCIES, HOTELS, FLIGHTS, PACKAGES, SERVICES)
}


def build_repository(
    store: DocumentStore,
    config: EntityConfig,
    *,
    auth_provider: AuthProvider | None = None,
    **kwargs: Any,
) -> EntityRepository:
    """Instantiate the repository class matching ``config``."""
    if config.collection == USERS.collection:
        return UserRepository(store, config, auth_provider=auth_provider, **kwargs)
    if config.soft_delete:
        return SoftDeleteRepository(store, config, **kwargs)
    return EntityRepository(store, config, **kwargs)

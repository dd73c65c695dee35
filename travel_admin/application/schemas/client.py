"""Pydantic DTOs (Data Transfer Objects) for the client screens."""

from datetime import date

from pydantic import BaseModel, Field

from travel_admin.domain.entities import ClientSex, ClientStatus


class ClientCreate(BaseModel):
    """Schema for creating a new client."""

    clients_name: str = Field(..., min_length=3, examples=["Ahmed"])
    clients_tel: str = Field(..., min_length=8, examples=["0600000000"])
    clients_email: str | None = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    clients_adresse: str | None = None
    clients_city: str | None = None
    clients_country: str | None = None
    clients_passport: str | None = None
    clients_cin: str | None = None
    clients_sex: ClientSex | None = None
    clients_dob: date | None = None
    clients_status: ClientStatus = ClientStatus.ACTIVE


class ClientUpdate(BaseModel):
    """Schema for updating an existing client — all fields optional."""

    clients_name: str | None = Field(None, min_length=3)
    clients_tel: str | None = Field(None, min_length=8)
    clients_email: str | None = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    clients_adresse: str | None = None
    clients_city: str | None = None
    clients_country: str | None = None
    clients_passport: str | None = None
    clients_cin: str | None = None
    clients_sex: ClientSex | None = None
    clients_dob: date | None = None
    clients_status: ClientStatus | None = None

"""Pydantic DTOs for the catalogue entities: agencies, hotels, flights, packages, services."""

from datetime import date

from pydantic import BaseModel, Field


# ── Agencies ─────────────────────────────────────────────────────────


class AgencyCreate(BaseModel):
    agency_name: str = Field(..., min_length=2)
    agency_email: str | None = None
    agency_tel: str | None = None
    agency_adresse: str | None = None
    agency_responsible: str | None = None
    agency_status: str = "active"


# ── Hotels ───────────────────────────────────────────────────────────


class HotelCreate(BaseModel):
    hotel_name: str = Field(..., min_length=2)
    hotel_email: str | None = None
    hotel_tel: str | None = None
    hotel_contact: str | None = None
    hotel_city: str | None = None
    hotel_country: str | None = None
    hotel_logo: str | None = None
    hotel_map: str | None = None


# ── Flights ──────────────────────────────────────────────────────────


class FlightCreate(BaseModel):
    """Flight offer. Field names keep the ``vols_`` prefix used by the stored documents."""

    vols_name: str = Field(..., min_length=2)
    vols_company: str | None = None
    vols_logo: str | None = None
    vols_price_alone: float | None = Field(None, ge=0)
    vols_price_package: float | None = Field(None, ge=0)
    vols_seats_package: int | None = Field(None, ge=0)
    vols_staus: str = "active"


# ── Packages ─────────────────────────────────────────────────────────


class PackageCreate(BaseModel):
    package_name: str = Field(..., min_length=2)
    package_description: str | None = None
    package_photo: str | None = None
    package_price: float | None = Field(None, ge=0)
    package_discount: float | None = Field(None, ge=0)
    package_discount_type: str | None = None  # "percentage" | "fixed"
    package_availability: int | None = Field(None, ge=0)
    package_end: date | None = None
    package_status: str = "active"


# ── Services ─────────────────────────────────────────────────────────


class ServiceCreate(BaseModel):
    service_name: str = Field(..., min_length=2)
    service_description: str | None = None
    service_photo: str | None = None
    service_price_alone: float | None = Field(None, ge=0)
    service_price_package: float | None = Field(None, ge=0)
    service_status: str = "active"

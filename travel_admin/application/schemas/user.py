"""Pydantic DTOs for back-office users."""

from pydantic import BaseModel, Field

from travel_admin.domain.entities import AccountStatus, UserRole


class UserCreate(BaseModel):
    """Schema for creating a user.

    When ``password`` is given an authentication account is provisioned
    first; the password itself is never written to the users collection.
    """

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    userEmail: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    username: str = ""
    userTel: str = ""
    userRole: UserRole = UserRole.USER
    accountStatus: AccountStatus = AccountStatus.ACTIVE
    avatar: str = ""
    city_agency: str = ""
    idNumber: str = ""
    password: str | None = Field(None, min_length=6)


class UserUpdate(BaseModel):
    """Schema for updating a user — all fields optional."""

    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    userEmail: str | None = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    userTel: str | None = None
    userRole: UserRole | None = None
    accountStatus: AccountStatus | None = None
    avatar: str | None = None
    city_agency: str | None = None
    idNumber: str | None = None

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from personapi.db.models import UserRole


class PersonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    gender: str
    username: str | None = None
    email: str | None = None
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    country: str | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class UserOut(BaseModel):
    id: int
    username: str
    role: UserRole
    permissions: list[str]
    is_active: bool


class BootstrapRequest(BaseModel):
    username: str = Field(min_length=1, max_length=128)
    password: str = Field(min_length=8, max_length=1024)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=128)
    password: str = Field(min_length=1, max_length=1024)

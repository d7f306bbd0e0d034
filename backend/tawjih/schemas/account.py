"""Pydantic schemas for user accounts, admins, bookmarks and saved jobs."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from tawjih.schemas.content import JobRead
from tawjih.services.content_types import ContentKind


class RegisterIn(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=100)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class PreferencesIn(BaseModel):
    theme: Literal["light", "dark"] | None = None
    notifications: bool | None = None
    emailUpdates: bool | None = None
    savedJobs: list[str] | None = None
    favoriteRegions: list[str] | None = None
    favoriteSectors: list[str] | None = None


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    email: EmailStr | None = None
    preferences: PreferencesIn | None = None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    preferences: dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime


class AdminLoginIn(BaseModel):
    username: str = Field(min_length=1, description="Username or email")
    password: str = Field(min_length=1)


class AdminRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class AdminSetupIn(BaseModel):
    action: str
    force: bool = False


class BookmarkCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_type: ContentKind = Field(alias="targetType")
    target_id: UUID = Field(alias="targetId")


class BookmarkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    target_type: str
    target_id: UUID
    created_at: datetime


class SavedJobCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: UUID = Field(alias="jobId")


class SavedJobRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    job_id: UUID
    created_at: datetime
    job: JobRead | None = None


class UploadRead(BaseModel):
    url: str
    name: str
    size: int
    type: str

"""Pydantic schemas package."""

from tawjih.schemas.common import CamelModel, Pagination
from tawjih.schemas.content import (
    AdminContentCreate,
    ContentRead,
    ContentSummary,
    ContentUpdate,
    ExamCreate,
    ExamRead,
    GuidanceCreate,
    GuidanceRead,
    JobCreate,
    JobRead,
)
from tawjih.schemas.search import SearchHighlights, SearchPageOut, SearchResultOut
from tawjih.schemas.account import (
    AdminLoginIn,
    AdminRead,
    AdminSetupIn,
    BookmarkCreate,
    BookmarkRead,
    LoginIn,
    PreferencesIn,
    RegisterIn,
    SavedJobCreate,
    SavedJobRead,
    UploadRead,
    UserRead,
    UserUpdate,
)

__all__ = [
    # Common
    "CamelModel",
    "Pagination",
    # Content
    "AdminContentCreate",
    "ContentRead",
    "ContentSummary",
    "ContentUpdate",
    "ExamCreate",
    "ExamRead",
    "GuidanceCreate",
    "GuidanceRead",
    "JobCreate",
    "JobRead",
    # Search
    "SearchHighlights",
    "SearchPageOut",
    "SearchResultOut",
    # Accounts
    "AdminLoginIn",
    "AdminRead",
    "AdminSetupIn",
    "BookmarkCreate",
    "BookmarkRead",
    "LoginIn",
    "PreferencesIn",
    "RegisterIn",
    "SavedJobCreate",
    "SavedJobRead",
    "UploadRead",
    "UserRead",
    "UserUpdate",
]

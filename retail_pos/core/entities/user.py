"""User directory entity."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Roles known to the POS."""

    ADMIN = "admin"
    STAFF = "staff"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(BaseModel):
    """A staff member or administrator. Credentials live upstream."""

    id: int | None = None
    username: str
    full_name: str
    role: UserRole = UserRole.STAFF
    status: UserStatus = UserStatus.ACTIVE
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

"""
Dependency injection container for FastAPI.

Provides stores, use cases and the caller identity to route handlers.
"""

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends, Header

from retail_pos.application.use_cases import (
    CreateInvoiceUseCase,
    GenerateReportUseCase,
    GetDashboardUseCase,
)
from retail_pos.config import Settings, get_settings
from retail_pos.core.entities.user import UserRole
from retail_pos.core.exceptions import (
    AuthenticationRequiredError,
    PermissionDeniedError,
)
from retail_pos.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteExpenseStore,
    SQLiteInvoiceStore,
    get_catalog_store,
    get_expense_store,
    get_invoice_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Caller identity


@dataclass(frozen=True)
class StaffIdentity:
    """Caller identity asserted by the upstream authenticating proxy."""

    id: int
    name: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def get_current_staff(
    x_staff_id: str | None = Header(default=None),
    x_staff_name: str | None = Header(default=None),
    x_staff_role: str | None = Header(default=None),
) -> StaffIdentity:
    """Read the caller identity headers. The service trusts the proxy."""
    if not x_staff_id or not x_staff_role:
        raise AuthenticationRequiredError()

    try:
        staff_id = int(x_staff_id)
    except ValueError:
        raise AuthenticationRequiredError("X-Staff-Id must be an integer") from None

    try:
        role = UserRole(x_staff_role.lower())
    except ValueError:
        raise AuthenticationRequiredError(f"unknown role '{x_staff_role}'") from None

    return StaffIdentity(
        id=staff_id,
        name=x_staff_name or f"Staff #{staff_id}",
        role=role,
    )


def require_admin(staff: StaffIdentity = Depends(get_current_staff)) -> StaffIdentity:
    """Allow only admins through."""
    if not staff.is_admin:
        raise PermissionDeniedError(staff.role.value, UserRole.ADMIN.value)
    return staff


# Store dependencies
async def get_cat_store() -> SQLiteCatalogStore:
    """Get catalog store."""
    return await get_catalog_store()


async def get_inv_store() -> SQLiteInvoiceStore:
    """Get invoice store."""
    return await get_invoice_store()


async def get_exp_store() -> SQLiteExpenseStore:
    """Get expense store."""
    return await get_expense_store()


# Use case dependencies
def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase()


def get_generate_report_use_case() -> GenerateReportUseCase:
    """Get report use case."""
    return GenerateReportUseCase()


_dashboard_use_case: GetDashboardUseCase | None = None


def get_dashboard_use_case() -> GetDashboardUseCase:
    """Get the shared dashboard use case (it owns the dashboard cache)."""
    global _dashboard_use_case
    if _dashboard_use_case is None:
        _dashboard_use_case = GetDashboardUseCase()
    return _dashboard_use_case


def reset_dashboard_use_case() -> None:
    """Drop the shared dashboard use case and its cache."""
    global _dashboard_use_case
    if _dashboard_use_case is not None:
        _dashboard_use_case.close()
    _dashboard_use_case = None

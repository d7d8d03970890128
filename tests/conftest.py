"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest

from retail_pos.config import reset_settings
from retail_pos.core.services.change_feed import reset_change_feed


@pytest.fixture(autouse=True)
def fresh_globals() -> Generator[None, None, None]:
    """Start every test with fresh settings and a fresh change feed."""
    reset_settings()
    reset_change_feed()
    yield
    reset_settings()
    reset_change_feed()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Identity headers of an admin, as set by the upstream proxy."""
    return {"X-Staff-Id": "1", "X-Staff-Name": "Administrator", "X-Staff-Role": "admin"}


@pytest.fixture
def staff_headers() -> dict[str, str]:
    """Identity headers of a regular staff member."""
    return {"X-Staff-Id": "2", "X-Staff-Name": "Staff Member", "X-Staff-Role": "staff"}

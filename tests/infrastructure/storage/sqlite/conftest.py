"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from retail_pos.core.entities import Expense, Product, User, UserRole
from retail_pos.infrastructure.storage.sqlite import connection as conn_module
from retail_pos.infrastructure.storage.sqlite import reset_stores
from retail_pos.infrastructure.storage.sqlite.connection import close_pool
from retail_pos.infrastructure.storage.sqlite.migrations import migrate
from retail_pos.infrastructure.storage.sqlite.user_store import SQLiteUserStore


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Temporary database with the full migrated schema."""
    await migrate(temp_db_path)
    yield temp_db_path


@pytest.fixture
async def pos_db(initialized_db: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated database wired in as the global pool."""
    conn_module._pool = None
    reset_stores()
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield initialized_db
        finally:
            await close_pool()
            reset_stores()


@pytest.fixture
async def admin_user(pos_db: Path) -> User:
    """An admin stored in the users table."""
    return await SQLiteUserStore().create_user(
        User(username="admin", full_name="Administrator", role=UserRole.ADMIN)
    )


@pytest.fixture
async def staff_user(pos_db: Path) -> User:
    """A staff member stored in the users table."""
    return await SQLiteUserStore().create_user(
        User(username="staff", full_name="Staff Member", role=UserRole.STAFF)
    )


@pytest.fixture
def sample_product() -> Product:
    """Create a sample product."""
    return Product(
        name="Chicken Shawarma",
        category="Shawarma",
        sale_price=100.0,
        stock_quantity=5,
    )


@pytest.fixture
def sample_expense() -> Expense:
    """Create a sample expense."""
    return Expense(
        title="Gas cylinder",
        amount=45.0,
        date=date(2026, 5, 1),
        notes="Kitchen",
    )

"""SQLite implementation of the user directory."""

from datetime import UTC, datetime

import aiosqlite

from retail_pos.config import get_logger
from retail_pos.core.entities.user import User, UserRole, UserStatus
from retail_pos.core.exceptions import DuplicateUsernameError
from retail_pos.core.interfaces.user_store import IUserStore
from retail_pos.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from retail_pos.infrastructure.storage.sqlite.rows import parse_timestamp

logger = get_logger(__name__)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user storage."""

    async def create_user(self, user: User) -> User:
        user.created_at = datetime.now(UTC)
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO users (username, full_name, role, status, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        user.username,
                        user.full_name,
                        user.role.value,
                        user.status.value,
                        user.created_at.isoformat(),
                    ),
                )
                user.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise DuplicateUsernameError(user.username) from e

        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    async def get_user(self, user_id: int) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_by_username(self, username: str) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE username = ?", (username,)
            )
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def list_users(self) -> list[User]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            full_name=row["full_name"],
            role=UserRole(row["role"]),
            status=UserStatus(row["status"]),
            created_at=parse_timestamp(row["created_at"]),
        )

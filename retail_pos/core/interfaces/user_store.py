"""Abstract interface for the user directory."""

from abc import ABC, abstractmethod

from retail_pos.core.entities.user import User


class IUserStore(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        pass

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None:
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        pass

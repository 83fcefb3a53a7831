from abc import abstractmethod, ABC
import userbase.domain.models.users as domain
import typing as t
import uuid

class IUserRepository(ABC):
    """Abstract base for UserRepository. Specific implementations must inherit this base class.
    Soft-deleted users are invisible to every read unless `include_deleted` is asked for explicitly."""

    @abstractmethod
    async def get_by_id(self, user_id: uuid.UUID, include_deleted: bool = False) -> domain.User | None: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> domain.User | None: ...

    @abstractmethod
    async def list(self, limit: int = 100, offset: int = 0, filters: dict[str, t.Any] | None = None, filter_mode: t.Literal["and","or"] = "and", include_deleted: bool = False) -> list[domain.User]: ...

    @abstractmethod
    async def create(self, user: domain.User) -> domain.User: ...

    @abstractmethod
    async def update(self, user: domain.User) -> domain.User: ...

    @abstractmethod
    async def delete(self, user: domain.User) -> None:
        '''Soft delete: marks the user as deleted, the row stays in storage'''

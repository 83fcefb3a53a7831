import userbase.domain.repositories as repo
import userbase.domain.models as domain
import userbase.domain.exceptions as domexc
import userbase.infrastructure.models as db

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel.sql.expression import SelectOfScalar
import sqlalchemy.exc as sqlexc
import sqlmodel as sqlm
import typing as t
import uuid
import logging

logger = logging.getLogger('userbase.storage')


class SQLAUserRepository(repo.IUserRepository):
    """Repository implementation for User model via SQLAlchemy AsyncSession.

    This class handles CRUD operations for users and converts database-specific
    integrity errors into domain-level exceptions. Deletion is soft: rows get a
    `deleted_at` timestamp and drop out of every default read.
    """

    FILTERABLE_FIELDS = ('name', 'email', 'role', 'status')

    def __init__(self, session: AsyncSession):
        """Initialize the repository with an asynchronous SQLAlchemy session.

        Args:
            session (AsyncSession): An active SQLAlchemy async session.
        """
        self.session = session

    def _handle_integrity_error(self, error: sqlexc.IntegrityError) -> t.NoReturn:
        """Convert SQLAlchemy IntegrityError into a domain exception.

        Unique violations on email are reported as `UserAlreadyExists`. MySQL,
        PostgreSQL and SQLite all mention the offending column or index name
        in the driver message, so matching on it is enough.

        Raises:
            UserAlreadyExists: If the error is caused by a duplicate email or id.
            UserIntegrityError: Any other integrity violation.
        """
        msg = str(error.orig).lower()
        if 'email' in msg:
            raise domexc.UserAlreadyExists("Another user with this email already exists", orig=error.orig) from error
        if 'users.id' in msg or 'primary' in msg or 'users_pkey' in msg:
            raise domexc.UserAlreadyExists("Another user with this id already exists", orig=error.orig) from error
        raise domexc.UserIntegrityError("Action causes integrity constraint violation for User model. Cancelled", orig=error.orig) from error

    def _apply_filters(self, select_query: SelectOfScalar[db.User], filters: dict[str, t.Any], filter_mode: t.Literal["and","or"] = "and"):
        f = sqlm.and_ if filter_mode == "and" else sqlm.or_
        where_filters = [
            getattr(db.User, key) == value
            for key, value in filters.items()
            if key in self.FILTERABLE_FIELDS and value is not None
        ]
        return select_query.where(f(*where_filters)) if where_filters else select_query

    @staticmethod
    def _live(select_query: SelectOfScalar[db.User]) -> SelectOfScalar[db.User]:
        return select_query.where(db.User.deleted_at.is_(None))

    @staticmethod
    def _to_domain(user: db.User) -> domain.User:
        return domain.User.model_validate(user, from_attributes=True)

    async def _get_by_id(self, user_id: uuid.UUID, include_deleted: bool = False) -> db.User | None:
        """Gets user by ID. For internal use, does not convert to domain level model."""
        q = sqlm.select(db.User).where(db.User.id == user_id)
        if not include_deleted:
            q = self._live(q)
        return (await self.session.scalars(q)).one_or_none()

    async def get_by_id(self, user_id: uuid.UUID, include_deleted: bool = False) -> domain.User | None:
        """Retrieve a user by their unique ID.

        Args:
            user_id (UUID): The ID of the user to retrieve.
            include_deleted (bool): Also look at soft-deleted users.

        Returns:
            User | None: The user object if found, else None.
        """
        user = await self._get_by_id(user_id, include_deleted)
        return self._to_domain(user) if user is not None else None

    async def get_by_email(self, email: str) -> domain.User | None:
        user = (await self.session.scalars(
            self._live(sqlm.select(db.User).where(db.User.email == email))
        )).one_or_none()
        return self._to_domain(user) if user is not None else None

    async def list(self, limit: int = 100, offset: int = 0, filters: dict[str, t.Any] | None = None, filter_mode: t.Literal["and","or"] = "and", include_deleted: bool = False) -> list[domain.User]:
        """Retrieve a page of users, oldest first.

        Returns:
            list[User]: List of matching users.
        """
        q = sqlm.select(db.User)
        if not include_deleted:
            q = self._live(q)
        if filters:
            q = self._apply_filters(q, filters, filter_mode)
        q = q.order_by(db.User.created_at, db.User.id).limit(limit).offset(offset)
        users_db = (await self.session.scalars(q)).all()
        return [self._to_domain(u) for u in users_db]

    async def create(self, user: domain.User) -> domain.User:
        """Creates a given user in the database

        Args:
            user: validated user with defaults applied and password hashed

        Returns:
            User: a created user.
        """
        user_db = db.User(**user.model_dump())
        try:
            self.session.add(user_db)
            await self.session.flush()
        except sqlexc.IntegrityError as e:
            await self.session.rollback()
            self._handle_integrity_error(e)
        logger.info(f'[USERS] Created user id={user_db.id}')
        return self._to_domain(user_db)

    async def update(self, user: domain.User) -> domain.User:
        user_to_update = await self._get_by_id(user.id)
        if not user_to_update:
            raise domexc.UserDoesNotExist("User not found.")

        #id and created_at are immutable
        for key, value in user.model_dump(exclude={'id', 'created_at', 'deleted_at'}).items():
            setattr(user_to_update, key, value)
        try:
            await self.session.flush()
        except sqlexc.IntegrityError as e:
            await self.session.rollback()
            self._handle_integrity_error(e)
        await self.session.refresh(user_to_update)
        logger.info(f'[USERS] Updated user id={user_to_update.id}')
        return self._to_domain(user_to_update)

    async def delete(self, user: domain.User) -> None:
        """Soft-delete a user.

        Args:
            user: User to delete

        Raises:
            UserDoesNotExist: user is missing or already deleted.
        """
        user_to_delete = await self._get_by_id(user.id)
        if not user_to_delete:
            raise domexc.UserDoesNotExist("User not found.")
        user_to_delete.deleted_at = user.deleted_at or domain.utcnow()
        await self.session.flush()
        logger.info(f'[USERS] Soft-deleted user id={user_to_delete.id}')

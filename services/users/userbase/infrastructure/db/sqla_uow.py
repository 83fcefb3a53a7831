import logging
from sqlalchemy.ext.asyncio import AsyncSession
import userbase.infrastructure.interfaces as iabc

logger = logging.getLogger('userbase.storage')

class SQLAlchemyUnitOfWork(iabc.IUnitOfWork[AsyncSession]):
    def __init__(self, session: AsyncSession):
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def commit(self) -> None:
        await self._session.commit()
        logger.debug('[UoW] Committed')

    async def rollback(self) -> None:
        await self._session.rollback()
        logger.debug('[UoW] Rolled back')

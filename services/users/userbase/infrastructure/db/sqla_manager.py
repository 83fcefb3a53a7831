import userbase.infrastructure.exceptions as exc
import userbase.infrastructure.interfaces as mgrs
import userbase.infrastructure.models #registers tables on SQLModel.metadata

import typing as t
import sqlmodel as sqlm

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession, async_sessionmaker, create_async_engine

import asyncio
import contextlib
import logging

logger = logging.getLogger('userbase.storage')


class SQLAlchemySessionManager(mgrs.StorageManagerInterface[AsyncConnection, AsyncSession]):
    """Spawns async sessions and connections to a database using SQLAlchemy and
    ensures they're closed/rolled back properly. Works with any async dialect
    (aiomysql, asyncpg, aiosqlite).
    """

    def __init__(self, host: str, engine_kwargs: dict[str, t.Any] | None = None):
        self._engine = create_async_engine(host, **(engine_kwargs or {}))
        self._sessionmaker = async_sessionmaker(autocommit=False, expire_on_commit=False, bind=self._engine)

    def _ensure_initialized(self):
        if self._engine is None or self._sessionmaker is None:
            raise exc.StorageNotInitialzied("[DB Manager] SQLAlchemySessionManager is not initialized!")

    async def close(self) -> None:
        self._ensure_initialized()
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    @contextlib.asynccontextmanager
    async def connect(self) -> t.AsyncIterator[AsyncConnection]:
        self._ensure_initialized()
        async with self._engine.begin() as connection:
            try:
                yield connection
            except Exception:
                await connection.rollback()
                raise

    @contextlib.asynccontextmanager
    async def session(self, **kwargs) -> t.AsyncIterator[AsyncSession]:
        self._ensure_initialized()
        session = self._sessionmaker(**kwargs)
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def wait_for_startup(self, attempts: int = 5, interval_sec: int = 5) -> None:
        """Sends SELECT 1 to a DB and waits till response with retries"""
        self._ensure_initialized()
        retries = 0
        while retries < attempts:
            try:
                async with self._engine.connect() as conn:
                    await conn.execute(sqlm.text("SELECT 1"))
                logger.info("[WAIT FOR DB] SELECT 1 Executed -> Database is up and running!")
                return
            except Exception as e:
                logger.debug(e)
                retries += 1
                logger.info(f"[WAIT FOR DB] Database is not ready yet, retrying ({retries}/{attempts})...")
                if retries < attempts:
                    await asyncio.sleep(interval_sec)
        logger.error(f"[WAIT FOR DB] Database is not available after all {attempts} retries.")
        raise exc.StorageBootError(f"Database failed to boot within {attempts*interval_sec}sec!")

    async def initialize_data_structures(self) -> None:
        self._ensure_initialized()
        logger.info('[INIT DB] Creating missing tables...')
        async with self._engine.begin() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.create_all)

    async def flush_data(self) -> None:
        self._ensure_initialized()
        logger.info('[DB] Flush_all called -> Dropping all tables.')
        async with self._engine.begin() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.drop_all)

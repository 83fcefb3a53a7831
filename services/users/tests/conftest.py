import os

#Must be set before userbase.common.config gets imported
os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest, typing as t, httpx
import pytest_asyncio as pytestaio
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession
import userbase.infrastructure.dependencies as ideps
import userbase.main as main

import logging
logger = logging.getLogger('userbase')

TEST_DB_URL = "sqlite+aiosqlite://"


@pytestaio.fixture(scope='function')
async def database_manager() -> t.AsyncGenerator[ideps.DatabaseManagerType, None]:
    #One shared in-memory connection, so every session sees the same tables
    mgr = ideps.DatabaseManagerType(TEST_DB_URL, {"poolclass": StaticPool})
    await mgr.initialize_data_structures()
    yield mgr
    await mgr.close()

@pytestaio.fixture(scope="function")
async def db_session(database_manager: ideps.DatabaseManagerType) -> t.AsyncGenerator[AsyncSession, None]:
    async with database_manager.session() as session:
        yield session

@pytestaio.fixture(scope="function")
async def uow(db_session: AsyncSession) -> t.AsyncIterator[ideps.UnitOfWork]:
    yield ideps.UnitOfWork(db_session)


@pytestaio.fixture(scope='function')
async def async_client(uow: ideps.UnitOfWork):

    async def override_get_uow():
        yield uow
        await uow.commit()

    main.app.dependency_overrides[ideps.get_uow] = override_get_uow

    transport = httpx.ASGITransport(app=main.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://app:8080") as client:
        yield client

    del main.app.dependency_overrides[ideps.get_uow]

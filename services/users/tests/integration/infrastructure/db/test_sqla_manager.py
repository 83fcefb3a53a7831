import pytest
import sqlalchemy as sa
from sqlalchemy.pool import StaticPool
import userbase.infrastructure.db.sqla_manager as sqlamgr
import userbase.infrastructure.exceptions as iexc

@pytest.fixture(scope='function')
def mgr():
    return sqlamgr.SQLAlchemySessionManager("sqlite+aiosqlite://", {"poolclass": StaticPool})

@pytest.mark.asyncio
async def test_sqla_connect_and_close(mgr: sqlamgr.SQLAlchemySessionManager):
    async with mgr.connect() as conn:
        result = await conn.execute(sa.text("SELECT 1"))
        assert result.scalar_one() == 1

    with pytest.raises(RuntimeError):
        async with mgr.connect() as conn:
            raise RuntimeError()
    await mgr.close()


#to avoid copypaste with pytest raises blocks...
@pytest.mark.parametrize(
    "call",
    [
        lambda mgr: mgr.close(),
        lambda mgr: mgr.connect(),
        lambda mgr: mgr.session(),
        lambda mgr: mgr.wait_for_startup(),
        lambda mgr: mgr.initialize_data_structures(),
        lambda mgr: mgr.flush_data(),
    ]
)
@pytest.mark.asyncio
async def test_sqla_raises_when_closed(mgr: sqlamgr.SQLAlchemySessionManager, call):
    await mgr.close()
    with pytest.raises(iexc.StorageNotInitialzied):
        res = call(mgr)
        if hasattr(res, "__aenter__"):  #if async context manager
            async with res:
                pass
        else:
            await res


@pytest.mark.asyncio
async def test_sqla_sessions(mgr: sqlamgr.SQLAlchemySessionManager):
    async with mgr.session() as sess:
        result = await sess.execute(sa.text("SELECT 1"))
        assert result.scalar_one() == 1

    with pytest.raises(RuntimeError):
        async with mgr.session():
            raise RuntimeError()
    await mgr.close()


@pytest.mark.asyncio
async def test_sqla_create_and_drop_tables(mgr: sqlamgr.SQLAlchemySessionManager):
    await mgr.initialize_data_structures()
    async with mgr.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: sa.inspect(sync_conn).get_table_names())
    assert 'users' in tables

    await mgr.flush_data()
    async with mgr.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: sa.inspect(sync_conn).get_table_names())
    assert 'users' not in tables
    await mgr.close()


@pytest.mark.asyncio
async def test_sqla_startup(mgr: sqlamgr.SQLAlchemySessionManager):
    await mgr.wait_for_startup(1, 0)
    await mgr.close()

    with pytest.raises(iexc.StorageBootError):
        unreachable = sqlamgr.SQLAlchemySessionManager('sqlite+aiosqlite:////nonexistent-dir/for/sure/db.sqlite')
        await unreachable.wait_for_startup(2, 0)

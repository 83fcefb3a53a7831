from fastapi import Depends
import typing as t

import userbase.infrastructure.db as db
from userbase.infrastructure.db.sqla_manager import SQLAlchemySessionManager
import userbase.infrastructure.repositories as repos
import userbase.infrastructure.security as security
import userbase.infrastructure.adapters as adap
from userbase.common.config import Config

from sqlalchemy.ext.asyncio import AsyncSession


#Password hashing choices
_PasswordHasherType = security.BCryptHasher
PasswordHasherType = lambda: adap.AsyncHasher(_PasswordHasherType())


#####################################
#             Databases             #
#####################################

DatabaseManagerType = SQLAlchemySessionManager
DatabaseSessionType = AsyncSession
DatabaseManager = DatabaseManagerType(Config.DB_URL, Config.DB_KWARGS)

UnitOfWork = db.SQLAlchemyUnitOfWork

async def get_db_session():
    async with DatabaseManager.session() as session:
        yield session

DatabaseDependency = t.Annotated[DatabaseSessionType, Depends(get_db_session)]

async def get_uow(session: DatabaseDependency) -> t.AsyncIterable[UnitOfWork]:
    uow = UnitOfWork(session)
    yield uow
    await uow.commit() #Rollback is executed by SessionManager. Session is already wrapped in try/except with rollback on except, close on finally.
UoWDependency = t.Annotated[UnitOfWork, Depends(get_uow)]


#####################################
#            Repositories           #
#####################################

UserRepository = repos.SQLAUserRepository

async def get_user_repo(uow: UoWDependency):
    return UserRepository(uow.session)

UserRepoDependency = t.Annotated[UserRepository, Depends(get_user_repo)]

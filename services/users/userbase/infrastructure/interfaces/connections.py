from abc import ABC, abstractmethod
import typing as t

ConnectionType = t.TypeVar("ConnectionType")
SessionType = t.TypeVar("SessionType")


class StorageManagerInterface(t.Generic[ConnectionType, SessionType], ABC):
    '''Owns the lifetime of a storage backend: boot wait, schema setup, sessions, shutdown'''

    @abstractmethod
    def connect(self) -> t.AsyncContextManager[ConnectionType]:
        '''Raw connection inside a transaction -> async with mgr.connect() as conn'''

    @abstractmethod
    def session(self, **kwargs) -> t.AsyncContextManager[SessionType]:
        '''ORM session, rolled back on error and closed on exit -> async with mgr.session() as session'''

    @abstractmethod
    async def close(self) -> None: ...

    @abstractmethod
    async def wait_for_startup(self, attempts: int = 5, interval_sec: int = 5) -> None:
        '''Pings the backend until it answers, raises StorageBootError when out of attempts'''

    @abstractmethod
    async def initialize_data_structures(self) -> None:
        '''Creates tables that do not exist yet'''

    @abstractmethod
    async def flush_data(self) -> None:
        '''Drops all tables'''

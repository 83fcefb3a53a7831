import abc, typing as t

SessionType = t.TypeVar("SessionType")

class IUnitOfWork(t.Generic[SessionType], abc.ABC):
    '''One request = one unit of work. Repositories share its session and only flush;
    the owner of the unit of work decides whether to commit or roll back'''

    @property
    @abc.abstractmethod
    def session(self) -> SessionType: ...

    @abc.abstractmethod
    async def commit(self) -> None: ...

    @abc.abstractmethod
    async def rollback(self) -> None: ...

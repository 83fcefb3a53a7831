from .connections import StorageManagerInterface
from .uow import IUnitOfWork

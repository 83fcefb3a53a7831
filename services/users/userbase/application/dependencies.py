from fastapi import Depends
import typing as t

import userbase.infrastructure.dependencies as ideps
import userbase.application.services as services

async def get_user_service(user_repo: ideps.UserRepoDependency):
    return services.UserService(user_repo, ideps.PasswordHasherType())

UserServiceDependency = t.Annotated[services.UserService, Depends(get_user_service)]

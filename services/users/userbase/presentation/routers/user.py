#Fastapi
from fastapi import APIRouter, Query, Path, Response, status
#Project files
import userbase.application.dependencies as deps
import userbase.presentation.schemas as schemas
import userbase.domain.models as dmod
#Typing
import typing as t
import uuid


########################################
#                Setup                 #
########################################

router = APIRouter(
    prefix="/users",
    tags = ["users"],
    responses={
        404: {"description": "Requested resource is not found", "model": schemas.ErrorEnvelope},
        422: {"description": "Validation failed", "model": schemas.ErrorEnvelope},
    }
    )

import logging
logger = logging.getLogger('userbase')


########################################
#             USER CRUD                #
########################################


@router.get('/{user_id}')
async def get_user(
        user_service: deps.UserServiceDependency,
        user_id: t.Annotated[uuid.UUID, Path(description='Specifies user to return')],
    ) -> schemas.Envelope[schemas.UserDTO]:
    '''Returns a user specified by user_id'''
    return schemas.Envelope(data=await user_service.get_user(user_id))

@router.get('')
async def get_users(
        user_service: deps.UserServiceDependency,
        limit: t.Annotated[int, Query(ge=1, le=100)] = 100,
        offset: t.Annotated[int, Query(ge=0)] = 0,
        filter_mode: t.Annotated[t.Literal["and","or"], Query()] = "and",
        name: str | None = Query(None),
        email: str | None = Query(None),
        role: dmod.Role | None = Query(None),
        status: dmod.Status | None = Query(None)
    ) -> schemas.Envelope[list[schemas.UserDTO]]:
    filters = schemas.UserFilterSchema(name=name, email=email, role=role, status=status)
    return schemas.Envelope(data=await user_service.list(limit, offset, filters, filter_mode))

@router.post("", responses= {
        201: {"description":"Created successfully"},
        409: {"description":"User with this email already exists", "model": schemas.ErrorEnvelope},
    },status_code=status.HTTP_201_CREATED,
)
async def create_user(
        user_service: deps.UserServiceDependency,
        new_user_data: schemas.UserCreationModel,
    ) -> schemas.Envelope[schemas.UserDTO]:
    return schemas.Envelope(data=await user_service.create(new_user_data))


@router.put("/{user_id}", description="Update a user. Omitted fields are left as they are; an empty password keeps the current one.", responses= {
    200: {"description":"User updated"},
    409: {"description":"Account with this email exists", "model": schemas.ErrorEnvelope},
    })
async def update_user(
    user_service: deps.UserServiceDependency,
    new_user_data: schemas.UserUpdateModel,
    user_id: t.Annotated[uuid.UUID, Path(description='id of a user to edit')],
    ) -> schemas.Envelope[schemas.UserDTO]:
    return schemas.Envelope(data=await user_service.update(user_id, new_user_data))


@router.delete('/{user_id}', responses= {
    204: {"description":"User deleted successfully"},
}, status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_service: deps.UserServiceDependency,
    user_id: t.Annotated[uuid.UUID, Path(description='id of a user to delete')],
    ) -> Response:
    '''Soft delete: the user disappears from reads but stays in storage'''
    await user_service.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

import typing as t
import pydantic as p
import uuid
from datetime import datetime
from userbase.domain.models import Role, Status

class UserDTO(p.BaseModel):
    '''Public view of a user. Never carries the password'''
    model_config = p.ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: Role
    status: Status
    created_at: datetime
    updated_at: datetime


class UserFilterSchema(p.BaseModel):
    name: str|None = p.Field(default=None)
    email: str|None = p.Field(default=None)
    role: Role|None = p.Field(default=None)
    status: Status|None = p.Field(default=None)


class UserCreationModel(p.BaseModel):
    '''Field rules are checked by the domain so every broken rule gets reported at once.
    Empty role/status fall back to "user"/"active".'''
    model_config = p.ConfigDict(extra="forbid")

    name: str = p.Field(default="", description='Display name, 2-50 characters')
    email: str = p.Field(default="", description='A unique email address')
    password: str = p.Field(default="", description='User password, 8-72 characters')
    role: str = p.Field(default="", description='admin | user')
    status: str = p.Field(default="", description='active | inactive | banned')

    @p.field_validator('name', 'email', 'password', 'role', 'status', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class UserUpdateModel(p.BaseModel):
    '''Omitted fields keep their stored values. An empty password leaves the password unchanged'''
    model_config = p.ConfigDict(extra="forbid")

    name: str|None = p.Field(default=None, description="New name")
    email: str|None = p.Field(default=None, description="New email")
    password: str|None = p.Field(default=None, description="New password")
    role: str|None = p.Field(default=None, description='admin | user')
    status: str|None = p.Field(default=None, description='active | inactive | banned')

import sqlmodel as sqlm
import sqlalchemy as sa
import uuid
from datetime import datetime
import userbase.domain.models as dmod

class User(sqlm.SQLModel, table=True):
    '''Storage mapping for domain User. `password` only ever holds a bcrypt hash'''
    __tablename__ = 'users'
    id: uuid.UUID = sqlm.Field(default_factory=uuid.uuid4, primary_key=True, description='UUID4 user identifier')
    name: str = sqlm.Field(sa_type=sa.String(50), nullable=False, description='Display name')
    email: str = sqlm.Field(sa_type=sa.String(255), unique=True, index=True, nullable=False, description='A unique email address')
    password: str = sqlm.Field(sa_type=sa.String(255), nullable=False, description='A hashed password')
    role: str = sqlm.Field(default=dmod.Role.USER.value, sa_type=sa.String(20), nullable=False, description='Role identifier')
    status: str = sqlm.Field(default=dmod.Status.ACTIVE.value, sa_type=sa.String(20), nullable=False, description='Account status')
    created_at: datetime = sqlm.Field(sa_type=sa.DateTime(timezone=True), nullable=False)
    updated_at: datetime = sqlm.Field(sa_type=sa.DateTime(timezone=True), nullable=False)
    deleted_at: datetime | None = sqlm.Field(default=None, sa_type=sa.DateTime(timezone=True), index=True, description='Set when soft-deleted')

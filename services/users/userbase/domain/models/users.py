import typing as t
import pydantic as p
import uuid
from enum import Enum
from datetime import datetime, timezone
from userbase.domain.services import IPasswordHasherAsync
from userbase.domain.models.rules import (
    Rule, ValidationErrors, required, length, max_bytes, email_address, one_of, when, validate_fields
)
import userbase.domain.exceptions as domexc

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72
MAX_PASSWORD_BYTES = 72 #bcrypt refuses longer input



class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"

class Status(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BANNED = "banned"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(p.BaseModel):
    """User record as seen by the domain.

    Fields hold raw input until the record passes `validate_for_create` /
    `validate_for_update`, so role and status are plain strings here.
    `password` holds plaintext only between input and `hash_password`.
    """
    id: uuid.UUID = p.Field(default_factory=uuid.uuid4)
    name: str = ""
    email: str = ""
    password: str = p.Field(default="", repr=False)
    role: str = ""
    status: str = ""
    created_at: datetime|None = None
    updated_at: datetime|None = None
    deleted_at: datetime|None = None

    @p.field_validator('role', 'status', mode='before')
    @classmethod
    def enum_to_value(cls, v):
        return v.value if isinstance(v, Enum) else v

    @p.field_validator('created_at', 'updated_at', 'deleted_at')
    @classmethod
    def ensure_utc(cls, v: datetime|None):
        #Some backends (sqlite) hand back naive datetimes
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def validate_for_create(self) -> ValidationErrors:
        return validate_for_create(self)

    def validate_for_update(self) -> ValidationErrors:
        return validate_for_update(self)

    def apply_defaults(self, now: datetime|None = None) -> "User":
        return apply_defaults(self, now)

    def touch(self, now: datetime|None = None) -> "User":
        return touch_on_update(self, now)

    async def hash_password(self, hasher: IPasswordHasherAsync) -> None:
        '''Replaces the plaintext password with its hash'''
        if not self.password:
            raise domexc.EmptyPasswordError()
        self.password = await hasher.hash(self.password)

    def soft_delete(self, now: datetime|None = None) -> None:
        self.deleted_at = now or utcnow()


_NAME_RULES: list[Rule] = [
    required("name is required"),
    length(MIN_NAME_LENGTH, MAX_NAME_LENGTH, f"name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters"),
]
_EMAIL_RULES: list[Rule] = [
    required("email is required"),
    email_address("invalid email format"),
]
_PASSWORD_LENGTH_RULE = length(
    MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH,
    f"password must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters"
)
_PASSWORD_BYTES_RULE = max_bytes(MAX_PASSWORD_BYTES, f"password must not exceed {MAX_PASSWORD_BYTES} bytes")
_ROLE_RULES: list[Rule] = [
    required("role is required"),
    one_of([r.value for r in Role], "invalid role"),
]
_STATUS_RULES: list[Rule] = [
    required("status is required"),
    one_of([s.value for s in Status], "invalid status"),
]

CREATE_RULES: dict[str, list[Rule]] = {
    'name': _NAME_RULES,
    'email': _EMAIL_RULES,
    'password': [required("password is required"), _PASSWORD_LENGTH_RULE, _PASSWORD_BYTES_RULE],
    'role': _ROLE_RULES,
    'status': _STATUS_RULES,
}

#Same as create, except that an empty password means "leave it unchanged"
UPDATE_RULES: dict[str, list[Rule]] = {
    **CREATE_RULES,
    'password': [when(lambda v: bool(v), _PASSWORD_LENGTH_RULE, _PASSWORD_BYTES_RULE)],
}


def validate_for_create(user: User) -> ValidationErrors:
    '''Returns field -> messages for every broken rule. Empty dict means the user is valid'''
    return validate_fields(user, CREATE_RULES)

def validate_for_update(user: User) -> ValidationErrors:
    return validate_fields(user, UPDATE_RULES)


def apply_defaults(user: User, now: datetime|None = None) -> User:
    '''Creation time only. Fills role/status if empty and stamps both timestamps'''
    if not user.role:
        user.role = Role.USER.value
    if not user.status:
        user.status = Status.ACTIVE.value
    now = now or utcnow()
    user.created_at = now
    user.updated_at = now
    return user

def touch_on_update(user: User, now: datetime|None = None) -> User:
    now = now or utcnow()
    floor = max(d for d in (user.created_at, user.updated_at, now) if d is not None)
    user.updated_at = floor
    return user

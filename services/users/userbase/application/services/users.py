import userbase.domain.repositories as repos
import userbase.presentation.schemas as schemas
import userbase.domain.models as domain
import userbase.domain.services as services
import userbase.domain.exceptions as domexc

import typing as t
import uuid
import logging

logger = logging.getLogger('userbase')

class UserService:

    def __init__(self, user_repo: repos.IUserRepository, password_hasher: services.IPasswordHasherAsync) -> None:
        self.user_repo = user_repo
        self.hasher = password_hasher

    @staticmethod
    def _raise_if_invalid(errors: domain.ValidationErrors) -> None:
        if errors:
            logger.debug(f'[USERS] Validation failed: {errors}')
            raise domexc.UserValidationError(errors)

    async def _get_live_user(self, user_id: uuid.UUID) -> domain.User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise domexc.UserDoesNotExist("User with the provided ID does not exist")
        return user

    async def create(self, user_data: schemas.UserCreationModel) -> schemas.UserDTO:
        '''Defaults, validation, hashing, persisting. Plaintext never reaches the repository'''
        user = domain.User(**user_data.model_dump())
        #Empty role/status are defaults, not violations
        user.apply_defaults()
        self._raise_if_invalid(user.validate_for_create())
        await user.hash_password(self.hasher)

        saved_user = await self.user_repo.create(user)
        return schemas.UserDTO.model_validate(saved_user, from_attributes=True)

    async def update(self, user_id: uuid.UUID, edited_user: schemas.UserUpdateModel) -> schemas.UserDTO:
        stored = await self._get_live_user(user_id)

        changes = edited_user.model_dump(exclude_none=True)
        new_password = changes.pop('password', '')
        candidate = stored.model_copy(update={**changes, 'password': new_password})
        self._raise_if_invalid(candidate.validate_for_update())

        if new_password:
            await candidate.hash_password(self.hasher)
        else:
            candidate.password = stored.password
        candidate.touch()

        updated = await self.user_repo.update(candidate)
        return schemas.UserDTO.model_validate(updated, from_attributes=True)

    async def list(self, limit: int = 100, offset: int = 0, filters: schemas.UserFilterSchema | None = None, filter_mode: t.Literal["and","or"] = "and") -> list[schemas.UserDTO]:
        filters_dict = filters.model_dump(exclude_none=True, mode='json') if filters else None
        users = await self.user_repo.list(limit, offset, filters_dict, filter_mode)
        return [schemas.UserDTO.model_validate(user, from_attributes=True) for user in users]

    async def get_user(self, user_id: uuid.UUID) -> schemas.UserDTO:
        user = await self._get_live_user(user_id)
        return schemas.UserDTO.model_validate(user, from_attributes=True)

    async def delete(self, user_id: uuid.UUID) -> None:
        user = await self._get_live_user(user_id)
        user.soft_delete()
        await self.user_repo.delete(user)

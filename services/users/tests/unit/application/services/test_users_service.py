import pytest, uuid
from pytest_mock import MockerFixture
import userbase.application.services as svc
import userbase.domain.models as dmod
import userbase.domain.exceptions as domexc
import userbase.presentation.schemas as schemas
from tests.mocks import FakeHasher, AsyncHasherAdapter
from tests.helpers.users import make_user


@pytest.fixture
def hasher() -> AsyncHasherAdapter:
    return AsyncHasherAdapter(FakeHasher())

@pytest.fixture
def stored_user() -> dmod.User:
    return make_user(name='Stored', email='stored@example.com', password='oldpassword')

@pytest.fixture
def user_repo(mocker: MockerFixture):
    repo = mocker.AsyncMock()
    #repositories hand back what they were given
    repo.create.side_effect = lambda user: user
    repo.update.side_effect = lambda user: user
    return repo


@pytest.mark.asyncio
async def test_create_applies_defaults_and_hashes(user_repo, hasher):
    service = svc.UserService(user_repo, hasher)
    data = schemas.UserCreationModel(name="Al", email="a@b.com", password="longenough")

    result = await service.create(data)

    persisted: dmod.User = user_repo.create.call_args.args[0]
    assert persisted.password == FakeHasher().hash("longenough")
    assert persisted.role == dmod.Role.USER
    assert persisted.status == dmod.Status.ACTIVE
    assert persisted.created_at == persisted.updated_at
    assert result == schemas.UserDTO.model_validate(persisted)
    assert 'password' not in result.model_dump()


@pytest.mark.asyncio
async def test_create_reports_every_violation_and_persists_nothing(user_repo, hasher, mocker: MockerFixture):
    hash_spy = mocker.spy(hasher, 'hash')
    service = svc.UserService(user_repo, hasher)
    data = schemas.UserCreationModel(name="A", email="bad", password="short", role="root", status="gone")

    with pytest.raises(domexc.UserValidationError) as e:
        await service.create(data)

    assert set(e.value.errors) == {"name", "email", "password", "role", "status"}
    hash_spy.assert_not_called()
    user_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_propagates_duplicate_email(user_repo, hasher):
    user_repo.create.side_effect = domexc.UserAlreadyExists("dup")
    service = svc.UserService(user_repo, hasher)
    with pytest.raises(domexc.UserAlreadyExists):
        await service.create(schemas.UserCreationModel(name="Al", email="a@b.com", password="longenough"))


@pytest.mark.asyncio
async def test_create_propagates_hashing_failure(user_repo, mocker: MockerFixture):
    broken = mocker.AsyncMock()
    broken.hash.side_effect = domexc.PasswordHashingError("boom")
    service = svc.UserService(user_repo, broken)
    with pytest.raises(domexc.PasswordHashingError):
        await service.create(schemas.UserCreationModel(name="Al", email="a@b.com", password="longenough"))
    user_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_update_without_password_keeps_hash(user_repo, hasher, stored_user, mocker: MockerFixture):
    user_repo.get_by_id.return_value = stored_user
    hash_spy = mocker.spy(hasher, 'hash')
    service = svc.UserService(user_repo, hasher)

    result = await service.update(stored_user.id, schemas.UserUpdateModel(name="Renamed", password=""))

    updated: dmod.User = user_repo.update.call_args.args[0]
    assert updated.password == stored_user.password
    assert updated.name == "Renamed"
    assert updated.email == stored_user.email
    assert updated.created_at == stored_user.created_at
    assert updated.updated_at >= stored_user.updated_at
    assert result.name == "Renamed"
    hash_spy.assert_not_called()
    user_repo.get_by_id.assert_called_once_with(stored_user.id)


@pytest.mark.asyncio
async def test_update_with_password_rehashes(user_repo, hasher, stored_user):
    user_repo.get_by_id.return_value = stored_user
    service = svc.UserService(user_repo, hasher)

    await service.update(stored_user.id, schemas.UserUpdateModel(password="brandnewpass"))

    updated: dmod.User = user_repo.update.call_args.args[0]
    assert updated.password == FakeHasher().hash("brandnewpass")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "changes, field",
    [
        (dict(password="short"), "password"),
        (dict(role=""), "role"),
        (dict(status="deactivated"), "status"),
        (dict(email="not-an-email"), "email"),
        (dict(name=""), "name"),
    ]
)
async def test_update_validation(user_repo, hasher, stored_user, changes, field):
    user_repo.get_by_id.return_value = stored_user
    service = svc.UserService(user_repo, hasher)
    with pytest.raises(domexc.UserValidationError) as e:
        await service.update(stored_user.id, schemas.UserUpdateModel(**changes))
    assert list(e.value.errors) == [field]
    user_repo.update.assert_not_called()


@pytest.mark.asyncio
async def test_update_missing_user(user_repo, hasher):
    user_repo.get_by_id.return_value = None
    service = svc.UserService(user_repo, hasher)
    with pytest.raises(domexc.UserDoesNotExist):
        await service.update(uuid.uuid4(), schemas.UserUpdateModel(name="Whoever"))


@pytest.mark.asyncio
async def test_get_user(user_repo, hasher, stored_user):
    user_repo.get_by_id.return_value = stored_user
    service = svc.UserService(user_repo, hasher)
    user = await service.get_user(stored_user.id)
    assert user == schemas.UserDTO.model_validate(stored_user)

    user_repo.get_by_id.return_value = None
    with pytest.raises(domexc.UserDoesNotExist):
        await service.get_user(uuid.uuid4())


@pytest.mark.asyncio
async def test_list_passes_filters_as_plain_values(user_repo, hasher, stored_user):
    user_repo.list.return_value = [stored_user]
    service = svc.UserService(user_repo, hasher)
    filters = schemas.UserFilterSchema(role=dmod.Role.ADMIN)

    users = await service.list(10, 5, filters, 'or')

    assert users == [schemas.UserDTO.model_validate(stored_user)]
    user_repo.list.assert_called_once_with(10, 5, {'role': 'admin'}, 'or')


@pytest.mark.asyncio
async def test_delete_is_soft(user_repo, hasher, stored_user):
    user_repo.get_by_id.return_value = stored_user
    service = svc.UserService(user_repo, hasher)

    await service.delete(stored_user.id)

    deleted: dmod.User = user_repo.delete.call_args.args[0]
    assert deleted.id == stored_user.id
    assert deleted.deleted_at is not None


@pytest.mark.asyncio
async def test_delete_missing_user(user_repo, hasher):
    user_repo.get_by_id.return_value = None
    service = svc.UserService(user_repo, hasher)
    with pytest.raises(domexc.UserDoesNotExist):
        await service.delete(uuid.uuid4())
    user_repo.delete.assert_not_called()

from userbase.common.exceptions import AppBaseException

class DomainLayerException(AppBaseException):
    '''Base for domain layer'''


### Model related
class ModelIntegrityError:
    '''Mixin for integrity violation exceptons. Use as adapter for repositories' integrity exceptions'''
    def __init__(self, *args, orig: Exception|None = None):
        super().__init__(*args)
        self.orig = orig


####### Users

class BaseUserException(DomainLayerException):
    '''Base for user Exceptions'''

class UserValidationError(BaseUserException):
    '''Raised when a candidate user record breaks one or more field rules.
    `errors` maps field name to the list of messages for that field.'''
    def __init__(self, errors: dict[str, list[str]], message: str = "User validation failed"):
        super().__init__(message)
        self.errors = errors

class EmptyPasswordError(UserValidationError):
    '''Hashing was attempted on an empty password, i.e. hashing ran before validation'''
    def __init__(self, message: str = "password cannot be empty"):
        super().__init__({"password": [message]}, message)

class UserDoesNotExist(BaseUserException):
    '''Raised when user does not exist'''

class UserIntegrityError(ModelIntegrityError, BaseUserException):
    '''Raised when user model integrity gets violated'''

class UserAlreadyExists(UserIntegrityError):
    '''Raised when user with such ID/email already exists'''


####### Passwords

class PasswordHashingError(DomainLayerException):
    '''The underlying hashing library failed. Not a user input problem'''

class MalformedPasswordHashError(PasswordHashingError):
    '''Stored password hash could not be parsed'''

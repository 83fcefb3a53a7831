from userbase.common.exceptions import AppBaseException

class CustomStorageException(AppBaseException):
    """Base for exceptions raised manually in storage services"""

### Startup
class StorageBootError(CustomStorageException):
    '''Storage service failed to boot within given time'''

class StorageNotInitialzied(CustomStorageException):
    '''Storage service has been booted successfully, yet seems not to be initialized entirely'''

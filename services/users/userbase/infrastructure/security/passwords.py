from userbase.domain.services import IPasswordHasher
from userbase.common.config import Config
import userbase.domain.exceptions as domexc
import bcrypt


class BCryptHasher(IPasswordHasher):
    def __init__(self, rounds: int | None = None):
        self.rounds = rounds if rounds is not None else Config.BCRYPT_ROUNDS

    def hash(self, password: str) -> str:
        if not password:
            raise domexc.EmptyPasswordError()
        try:
            return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()
        except ValueError as e:
            #bad work factor, or password longer than 72 bytes on bcrypt>=5
            raise domexc.PasswordHashingError(f"bcrypt failed to hash the password: {e}") from e

    def verify(self, password_hash: str, password: str) -> bool:
        '''Constant-time check. False on mismatch, MalformedPasswordHashError if the stored hash is unparseable'''
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError as e:
            raise domexc.MalformedPasswordHashError("Stored password hash is malformed") from e


_default_hasher: BCryptHasher | None = None

def _get_default_hasher() -> BCryptHasher:
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = BCryptHasher()
    return _default_hasher

def hash_password(plaintext: str) -> str:
    return _get_default_hasher().hash(plaintext)

def verify_password(password_hash: str, plaintext: str) -> bool:
    return _get_default_hasher().verify(password_hash, plaintext)

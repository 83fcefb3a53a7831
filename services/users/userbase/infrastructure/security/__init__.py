from .passwords import BCryptHasher, hash_password, verify_password

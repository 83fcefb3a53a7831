from .passwords import IPasswordHasher, IPasswordHasherAsync

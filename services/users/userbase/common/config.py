import os


class Config():
    #Basic app settings
    APP_NAME = os.getenv("APP_NAME", "userbase")
    GIT_COMMIT = os.getenv("GIT_COMMIT", "[commit hash unknown]")
    MODE = os.getenv("MODE", "Local build")
    SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
    SERVER_PORT = int(os.getenv("SERVER_PORT", "8080"))
    SERVER_WORKERS = int(os.getenv("SERVER_WORKERS", "0")) #0 means one per core

    #Logging
    JSON_LOGS = int(os.getenv("JSON_LOGS", "0"))

    #Security settings
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10")) #bcrypt work factor, 2^rounds iterations

    #Database. Any async SQLAlchemy URL works, e.g.
    #mysql+aiomysql://user:pass@db:3306/users
    DB_URL = os.getenv("DB_URL", "sqlite+aiosqlite:///./userbase.db")

    #DB Common
    DB_WAIT_INTERVAL_SECONDS = int(os.getenv("DB_WAIT_INTERVAL_SECONDS", "10"))
    DB_WAIT_MAX_RETRIES = int(os.getenv("DB_WAIT_MAX_RETRIES", "10"))
    DB_KWARGS = {
        'echo': False,
    }

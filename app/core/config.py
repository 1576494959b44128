"""
config.py

Application-wide configuration.

Loads the values of the .env file through a Pydantic BaseSettings class and
exposes them to the rest of the application as a single immutable object.

Main settings:
- database connection
- token signing secret and lifetime
- upload directory, size limit and public base URL for images
- CORS origins and log level

Related files:
- app.main               : CORS, static uploads, logging setup
- app.core.security      : token secret / expiry, bcrypt rounds
- app.db.session         : DATABASE_URL
- app.services.uploads   : UPLOAD_DIR / MAX_UPLOAD_SIZE / PUBLIC_BASE_URL

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

# Values are read from .env; keys that are not declared here are ignored
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    BCRYPT_ROUNDS: int = 12

    # Member accounts expire after this many years without activity
    ACCOUNT_VALIDITY_YEARS: int = 5

    # Uploaded images (news, hero, carousel, profiles, presentation)
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024
    # empty -> image paths stay relative ("/uploads/...")
    PUBLIC_BASE_URL: str = ""

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    LOG_LEVEL: str = "INFO"

# Imported everywhere; created once at startup
settings = Settings()

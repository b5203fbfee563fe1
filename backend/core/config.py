from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Validation
    VALIDATION_ERROR_MESSAGE: str = "Invalid Data Provided"
    VALIDATION_DATETIME_FORMAT: str = "%Y-%m-%d %H:%M"
    VALIDATION_DEFAULT_PATTERN: str = ""  # Empty keeps unknown rules as pass-through
    VALIDATION_DEFAULT_MESSAGE: str = "Invalid field value."
    VALIDATION_CHECK_MISSING_FIELDS: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

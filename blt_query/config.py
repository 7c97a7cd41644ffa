from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Upper bound applied by the query builder; None leaves limit untouched.
    QUERY_MAX_LIMIT: Optional[int] = None
    # Used when a resource URI does not carry a usable limit.
    QUERY_DEFAULT_LIMIT: Optional[int] = None

    LOG_LEVEL: str = "INFO"


settings = Settings()

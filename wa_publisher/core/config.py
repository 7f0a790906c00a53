from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 8080

    # Empty token is allowed; verification then only matches an empty token
    WEBHOOK_VERIFY_TOKEN: str = ""

    # JetStream stream that owns the topic subject
    PROJECT_ID: str = Field(
        min_length=1,
        validation_alias=AliasChoices("PROJECT_ID", "GOOGLE_CLOUD_PROJECT"),
    )
    TOPIC_ID: str = Field(min_length=1)

    NATS_URL: str = "nats://localhost:4222"
    PUBLISH_TIMEOUT: float = Field(default=5.0, gt=0)

    SENTRY_DSN: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore

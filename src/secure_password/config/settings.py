"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BcryptRounds = Annotated[int, Field(ge=4, le=31)]


class Settings(BaseSettings):
    """Environment-driven plugin settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    perform_on_save: bool = Field(
        default=False,
        validation_alias="SECURE_PASSWORD_PERFORM_ON_SAVE",
    )
    bcrypt_rounds: BcryptRounds = Field(
        default=12,
        validation_alias="SECURE_PASSWORD_BCRYPT_ROUNDS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache plugin settings."""

    return Settings()
